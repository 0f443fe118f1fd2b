"""HTTP endpoints of the classic API."""
