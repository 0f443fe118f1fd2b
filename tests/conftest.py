import sys
from pathlib import Path
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

import pytest

from classic_api.config import ApiSettings
from classic_api.envelope import JsonResponseEncoder


@pytest.fixture
def settings():
    return ApiSettings(
        product_version="1.0",
        paging_search_page_start=0,
        paging_search_page_size=20,
        paging_search_page_max_size=100,
    )


@pytest.fixture
def encoder(settings):
    return JsonResponseEncoder(settings)


@pytest.fixture
def jsonp_encoder(settings):
    return JsonResponseEncoder(settings.model_copy(update={"api_jsonp_enabled": True}))
