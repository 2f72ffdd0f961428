"""Sites: the verified properties visible to the credential."""

from __future__ import annotations

import logging
import warnings

from gsc.config import Settings
from gsc.errors import execute
from gsc.site_url import resolve_site_url

logger = logging.getLogger(__name__)

TYPE_DEPRECATION = (
    "Search Console no longer reports a site type; {name}() returns all sites unfiltered."
)


def format_site(site: dict) -> dict:
    return {
        "site_url": site.get("siteUrl"),
        "permission_level": site.get("permissionLevel"),
    }


class Sites:
    def __init__(self, webmasters, site_url: str | None = None, settings: Settings | None = None):
        self.webmasters = webmasters
        self.default_site_url = site_url
        self.settings = settings or Settings()

    def list(self) -> list[dict]:
        """List all sites with their permission level."""
        response = execute(self.webmasters.sites().list(), self.settings.retry_attempts)
        return [format_site(s) for s in (response or {}).get("siteEntry", [])]

    def get(self, site_url: str | None = None) -> dict:
        site_url = resolve_site_url(site_url, self.default_site_url)
        response = execute(self.webmasters.sites().get(siteUrl=site_url), self.settings.retry_attempts)
        return format_site(response or {})

    def is_verified(self, site_url: str | None = None) -> bool:
        """True if the site can be fetched. Any failure, a missing site URL included, is False."""
        try:
            self.get(site_url)
        except Exception as e:
            logger.debug("is_verified(%s) failed: %s", site_url, e)
            return False
        return True

    def get_all_with_details(self) -> list[dict]:
        """One list call plus one get per site."""
        return [self.get(site["site_url"]) for site in self.list()]

    def get_by_type(self, site_type: str) -> list[dict]:
        warnings.warn(TYPE_DEPRECATION.format(name="get_by_type"), DeprecationWarning, stacklevel=2)
        return self.list()

    def get_domain_properties(self) -> list[dict]:
        warnings.warn(TYPE_DEPRECATION.format(name="get_domain_properties"), DeprecationWarning, stacklevel=2)
        return self.list()

    def get_site_properties(self) -> list[dict]:
        warnings.warn(TYPE_DEPRECATION.format(name="get_site_properties"), DeprecationWarning, stacklevel=2)
        return self.list()
