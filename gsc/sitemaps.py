"""Sitemaps: list, get, submit and delete sitemaps of a site."""

from __future__ import annotations

import logging

from gsc.config import Settings
from gsc.errors import SearchConsoleError, execute
from gsc.site_url import resolve_site_url

logger = logging.getLogger(__name__)

SITEMAP_TYPE = "WEB"


def _as_int(value):
    # int64 fields arrive as JSON strings
    if value is None:
        return None
    return int(value)


def format_sitemap(sitemap: dict) -> dict:
    contents = [
        {
            "type": c.get("type"),
            "submitted": _as_int(c.get("submitted")),
            "indexed": _as_int(c.get("indexed")),
        }
        for c in sitemap.get("contents", []) or []
    ]
    return {
        "path": sitemap.get("path"),
        "last_submitted": sitemap.get("lastSubmitted"),
        "last_downloaded": sitemap.get("lastDownloaded"),
        "is_pending": sitemap.get("isPending"),
        "is_sitemaps_index": sitemap.get("isSitemapsIndex"),
        "type": sitemap.get("type"),
        "errors": _as_int(sitemap.get("errors")),
        "warnings": _as_int(sitemap.get("warnings")),
        "contents": contents,
    }


class Sitemaps:
    def __init__(self, webmasters, site_url: str | None = None, settings: Settings | None = None):
        self.webmasters = webmasters
        self.default_site_url = site_url
        self.settings = settings or Settings()

    def _execute(self, request):
        return execute(request, self.settings.retry_attempts)

    def list(self, site_url: str | None = None) -> list[dict]:
        site_url = resolve_site_url(site_url, self.default_site_url)
        response = self._execute(self.webmasters.sitemaps().list(siteUrl=site_url))
        return [format_sitemap(s) for s in (response or {}).get("sitemap", [])]

    def get(self, feedpath: str, site_url: str | None = None) -> dict:
        site_url = resolve_site_url(site_url, self.default_site_url)
        response = self._execute(self.webmasters.sitemaps().get(siteUrl=site_url, feedpath=feedpath))
        return format_sitemap(response or {})

    def submit(self, feedpath: str, site_url: str | None = None) -> dict:
        """Submit a sitemap. The submitted record is always of type WEB."""
        site_url = resolve_site_url(site_url, self.default_site_url)
        self._execute(self.webmasters.sitemaps().submit(siteUrl=site_url, feedpath=feedpath))
        logger.info("Submitted sitemap %s for %s", feedpath, site_url)
        return format_sitemap({"path": feedpath, "type": SITEMAP_TYPE})

    def delete(self, feedpath: str, site_url: str | None = None) -> None:
        site_url = resolve_site_url(site_url, self.default_site_url)
        self._execute(self.webmasters.sitemaps().delete(siteUrl=site_url, feedpath=feedpath))
        logger.info("Deleted sitemap %s from %s", feedpath, site_url)

    def get_status(self, feedpath: str, site_url: str | None = None) -> dict | None:
        """Submission status and error counts of one sitemap, None if not found."""
        try:
            sitemap = self.get(feedpath, site_url=site_url)
        except SearchConsoleError as e:
            if e.code == 404:
                return None
            raise
        return {
            "path": sitemap["path"],
            "last_submitted": sitemap["last_submitted"],
            "last_downloaded": sitemap["last_downloaded"],
            "is_pending": sitemap["is_pending"],
            "is_sitemaps_index": sitemap["is_sitemaps_index"],
            "type": sitemap["type"],
            "errors": sitemap["errors"] or 0,
            "warnings": sitemap["warnings"] or 0,
            "contents": sitemap["contents"] or [],
        }

    def get_all_with_status(self, site_url: str | None = None) -> dict[str, dict | None]:
        """Status of every sitemap of the site, keyed by path.

        One list call plus one get per sitemap, issued sequentially.
        """
        site_url = resolve_site_url(site_url, self.default_site_url)
        return {
            sitemap["path"]: self.get_status(sitemap["path"], site_url=site_url)
            for sitemap in self.list(site_url)
        }
