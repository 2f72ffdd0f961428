"""
Pytest configuration and shared fixtures

The discovery services are MagicMock chains: service.sites().get(...).execute()
"""
import json
import os
from unittest.mock import MagicMock, Mock

import pytest
from googleapiclient.errors import HttpError


def make_http_error(status: int, message: str) -> HttpError:
    """HttpError the way googleapiclient raises it for a JSON error body"""
    resp = Mock(status=status, reason="Error")
    content = json.dumps({"error": {"code": status, "message": message}}).encode()
    return HttpError(resp, content)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep GOOGLE_SEARCH_CONSOLE_* from the shell out of Settings()"""
    for name in list(os.environ):
        if name.upper().startswith("GOOGLE_SEARCH_CONSOLE_"):
            monkeypatch.delenv(name)


@pytest.fixture
def http_error():
    return make_http_error


@pytest.fixture
def webmasters():
    """Webmasters v3 service mock"""
    return MagicMock()


@pytest.fixture
def search_console():
    """Search Console v1 service mock"""
    return MagicMock()


@pytest.fixture
def inspection_response():
    """Sample urlInspection.index.inspect response"""
    return {
        "inspectionResult": {
            "inspectionResultLink": "https://search.google.com/search-console/inspect?resource_id=x",
            "indexStatusResult": {
                "verdict": "PASS",
                "coverageState": "Submitted and indexed",
                "robotsTxtState": "ALLOWED",
                "indexingState": "INDEXING_ALLOWED",
                "lastCrawlTime": "2026-10-01T08:12:44Z",
                "pageFetchState": "SUCCESSFUL",
                "googleCanonical": "https://example.com/a",
                "userCanonical": "https://example.com/a",
                "sitemap": ["https://example.com/sitemap.xml"],
                "referringUrls": ["https://example.com/"],
                "crawledAs": "MOBILE",
            },
        }
    }
