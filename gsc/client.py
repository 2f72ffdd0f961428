"""SearchConsole: builds the Google services and hands out the API facades."""

import logging

from gsc.analytics import Analytics
from gsc.config import Settings
from gsc.credentials import Credentials
from gsc.sitemaps import Sitemaps
from gsc.sites import Sites
from gsc.url_inspection import UrlInspection

logger = logging.getLogger(__name__)


def _build_service(credentials: Credentials, settings: Settings, api: str, version: str):
    import google_auth_httplib2
    import httplib2
    from googleapiclient.discovery import build
    from googleapiclient.http import set_user_agent

    http = httplib2.Http(timeout=settings.timeout)
    google_creds = credentials.to_google()
    if google_creds is not None:
        http = google_auth_httplib2.AuthorizedHttp(google_creds, http=http)
    set_user_agent(http, settings.application_name)
    logger.debug("Building %s %s service", api, version)
    return build(api, version, http=http, cache_discovery=False)


class SearchConsole:
    """Search Console client bound to one set of credentials.

    The Webmasters v3 service backs sites, sitemaps and search analytics; the
    Search Console v1 service backs URL inspection. Both are built on first use
    over one google-auth credentials object, so a new access token reaches every
    facade already handed out.
    """

    def __init__(self, credentials: Credentials | None = None, site_url: str | None = None,
                 settings: Settings | None = None):
        self.credentials = credentials or Credentials()
        self.settings = settings or Settings()
        self._site_url = site_url
        self._webmasters = None
        self._search_console = None
        self._unauthenticated = False

    def _build(self, api: str, version: str):
        if self.credentials.to_google() is None:
            self._unauthenticated = True
        return _build_service(self.credentials, self.settings, api, version)

    @property
    def access_token(self) -> str | None:
        return self.credentials.access_token

    def set_access_token(self, access_token: str, expiry=None) -> "SearchConsole":
        self.credentials.set_access_token(access_token, expiry)
        if self._unauthenticated:
            # built before any credential existed; nothing to update in place
            self._webmasters = None
            self._search_console = None
            self._unauthenticated = False
        return self

    def is_access_token_valid(self) -> bool:
        return self.credentials.is_valid()

    @property
    def site_url(self) -> str | None:
        return self._site_url

    def set_site_url(self, site_url: str) -> "SearchConsole":
        self._site_url = site_url
        return self

    @property
    def webmasters(self):
        if self._webmasters is None:
            self._webmasters = self._build("webmasters", "v3")
        return self._webmasters

    @property
    def search_console(self):
        if self._search_console is None:
            self._search_console = self._build("searchconsole", "v1")
        return self._search_console

    def analytics(self) -> Analytics:
        return Analytics(self.webmasters, self._site_url, self.settings)

    def sitemaps(self) -> Sitemaps:
        return Sitemaps(self.webmasters, self._site_url, self.settings)

    def sites(self) -> Sites:
        return Sites(self.webmasters, self._site_url, self.settings)

    def url_inspection(self) -> UrlInspection:
        return UrlInspection(self.search_console, self._site_url, self.settings)
