"""
Tests for the Sites facade
"""
import typing

import pytest

from gsc.errors import InvalidArgumentError, SearchConsoleError
from gsc.sitemaps import Sitemaps
from gsc.sites import Sites

SITE = "https://example.com/"

SITE_ENTRIES = {
    "siteEntry": [
        {"siteUrl": "https://example.com/", "permissionLevel": "siteOwner"},
        {"siteUrl": "sc-domain:example.org", "permissionLevel": "siteFullUser"},
    ]
}


@pytest.fixture
def sites(webmasters):
    webmasters.sites.return_value.list.return_value.execute.return_value = SITE_ENTRIES
    return Sites(webmasters, SITE)


class TestList:
    def test_list(self, sites):
        assert sites.list() == [
            {"site_url": "https://example.com/", "permission_level": "siteOwner"},
            {"site_url": "sc-domain:example.org", "permission_level": "siteFullUser"},
        ]

    def test_list_needs_no_site_url(self, webmasters):
        webmasters.sites.return_value.list.return_value.execute.return_value = {}
        assert Sites(webmasters).list() == []

    def test_list_failure_is_wrapped(self, sites, webmasters, http_error):
        webmasters.sites.return_value.list.return_value.execute.side_effect = http_error(401, "Invalid Credentials")
        with pytest.raises(SearchConsoleError) as exc:
            sites.list()
        assert exc.value.code == 401


class TestGet:
    def test_get_default_site(self, sites, webmasters):
        webmasters.sites.return_value.get.return_value.execute.return_value = SITE_ENTRIES["siteEntry"][0]

        assert sites.get() == {"site_url": SITE, "permission_level": "siteOwner"}
        webmasters.sites.return_value.get.assert_called_once_with(siteUrl=SITE)

    def test_get_explicit_site(self, sites, webmasters):
        sites.get("sc-domain:example.org")
        webmasters.sites.return_value.get.assert_called_once_with(siteUrl="sc-domain:example.org")

    def test_get_without_site_url(self, webmasters):
        with pytest.raises(InvalidArgumentError):
            Sites(webmasters).get()
        assert webmasters.method_calls == []


class TestIsVerified:
    def test_verified(self, sites, webmasters):
        webmasters.sites.return_value.get.return_value.execute.return_value = SITE_ENTRIES["siteEntry"][0]
        assert sites.is_verified() is True

    def test_api_error_is_false(self, sites, webmasters, http_error):
        webmasters.sites.return_value.get.return_value.execute.side_effect = http_error(403, "Forbidden")
        assert sites.is_verified() is False

    def test_missing_site_url_is_false(self, webmasters):
        assert Sites(webmasters).is_verified() is False


class TestDetails:
    def test_get_all_with_details(self, sites, webmasters):
        webmasters.sites.return_value.get.return_value.execute.side_effect = SITE_ENTRIES["siteEntry"]

        result = sites.get_all_with_details()

        assert [s["site_url"] for s in result] == ["https://example.com/", "sc-domain:example.org"]
        assert webmasters.sites.return_value.get.return_value.execute.call_count == 2


class TestDeprecatedTypeFilters:
    @pytest.mark.parametrize("call", [
        lambda s: s.get_by_type("DOMAIN"),
        lambda s: s.get_domain_properties(),
        lambda s: s.get_site_properties(),
    ])
    def test_returns_all_sites_with_warning(self, sites, call):
        with pytest.warns(DeprecationWarning, match="no longer reports a site type"):
            result = call(sites)
        assert len(result) == 2


@pytest.mark.parametrize("method", [
    Sites.get_all_with_details,
    Sites.get_site_properties,
    Sitemaps.list,
])
def test_return_annotations_resolve_to_builtin_list(method):
    """Methods named list must not shadow the builtin in sibling annotations"""
    assert typing.get_type_hints(method)["return"] == list[dict]
