"""Tests for YAML + env config loading."""
import pytest
from pydantic import ValidationError

from classic_api import config_loader
from classic_api.config import ApiSettings, load_settings


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(config_loader, "CONFIG_DIR", tmp_path)
    config_loader.reset_config()
    yield tmp_path
    config_loader.reset_config()


def test_defaults_when_no_file(config_dir):
    settings = load_settings("missing")
    assert settings.product_version == "1.0"
    assert settings.api_jsonp_enabled is False
    assert settings.api_json_response_exception_included is False
    assert settings.paging_search_page_size == 20
    assert settings.paging_search_page_max_size == 100
    assert settings.api_access_tokens == frozenset()


def test_yaml_and_env_overrides(config_dir, monkeypatch):
    (config_dir / "test.yaml").write_text(
        "product_version: '15.0'\napi_jsonp_enabled: true\npaging_search_page_size: 10\nunknown_key: 1\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("PAGING_SEARCH_PAGE_MAX_SIZE", "50")
    monkeypatch.setenv("PAGING_SEARCH_PAGE_START", "abc")
    monkeypatch.setenv("API_JSON_RESPONSE_EXCEPTION_INCLUDED", "yes")
    monkeypatch.setenv("API_ACCESS_TOKENS", "t1, t2,")
    settings = load_settings("test")
    assert settings.product_version == "15.0"
    assert settings.api_jsonp_enabled is True
    assert settings.paging_search_page_size == 10
    assert settings.paging_search_page_max_size == 50
    assert settings.paging_search_page_start == 0
    assert settings.api_json_response_exception_included is True
    assert settings.api_access_tokens == frozenset({"t1", "t2"})


def test_broken_yaml_falls_back_to_defaults(config_dir):
    (config_dir / "bad.yaml").write_text("product_version: [unclosed\n", encoding="utf-8")
    assert load_settings("bad").product_version == "1.0"


def test_settings_are_frozen():
    settings = ApiSettings()
    with pytest.raises(ValidationError):
        settings.api_jsonp_enabled = True
