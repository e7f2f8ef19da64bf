# frontend/test_config.py
# Unit tests for the backend URL resolution used when CATALOG_SOURCE=api

import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from frontend.config import LOCAL_BACKEND_URL, get_api_base_url


def test_local_falls_back_to_uvicorn_default(monkeypatch):
    monkeypatch.delenv("BACKEND_URL", raising=False)
    assert get_api_base_url("local") == LOCAL_BACKEND_URL


def test_backend_url_trailing_slash_removed(monkeypatch):
    monkeypatch.setenv("BACKEND_URL", "https://api.case.example/")
    assert get_api_base_url("production") == "https://api.case.example"


def test_missing_url_outside_local(monkeypatch):
    monkeypatch.delenv("BACKEND_URL", raising=False)
    with pytest.raises(RuntimeError):
        get_api_base_url("staging")


@pytest.mark.parametrize("url", ["http://api.case.example", "https://localhost:8000", "https://127.0.0.1"])
def test_insecure_url_rejected_outside_local(monkeypatch, url):
    monkeypatch.setenv("BACKEND_URL", url)
    with pytest.raises(RuntimeError):
        get_api_base_url("production")


def test_local_accepts_plain_http(monkeypatch):
    monkeypatch.setenv("BACKEND_URL", "http://127.0.0.1:9000")
    assert get_api_base_url("local") == "http://127.0.0.1:9000"
