"""Credential holder: OAuth access token or service account key file."""

import datetime
from dataclasses import dataclass, field

from gsc.config import WEBMASTERS_SCOPE


def _naive_utc(expiry: datetime.datetime | None) -> datetime.datetime | None:
    # google-auth compares expiry against naive UTC
    if expiry is not None and expiry.tzinfo is not None:
        expiry = expiry.astimezone(datetime.timezone.utc).replace(tzinfo=None)
    return expiry


@dataclass
class Credentials:
    access_token: str | None = None
    service_account_file: str | None = None
    expiry: datetime.datetime | None = None
    scopes: tuple[str, ...] = (WEBMASTERS_SCOPE,)
    _google: object = field(default=None, init=False, repr=False, compare=False)

    def set_access_token(self, access_token: str, expiry: datetime.datetime | None = None) -> None:
        """Replace the token. Transports already holding to_google() send the new one."""
        self.access_token = access_token
        self.expiry = expiry
        if self._google is not None and not self.service_account_file:
            self._google.token = access_token
            self._google.expiry = _naive_utc(expiry)

    def _oauth(self):
        from google.oauth2.credentials import Credentials as OAuthCredentials

        return OAuthCredentials(token=self.access_token, expiry=_naive_utc(self.expiry), scopes=list(self.scopes))

    def to_google(self):
        """Return the shared google-auth credentials for the transport, or None if unset."""
        if self._google is not None:
            return self._google
        if self.service_account_file:
            from google.oauth2 import service_account

            self._google = service_account.Credentials.from_service_account_file(
                self.service_account_file, scopes=list(self.scopes)
            )
        elif self.access_token:
            self._google = self._oauth()
        return self._google

    def is_valid(self) -> bool:
        """False without a token, or when google-auth reports it expired."""
        if not self.access_token:
            return False
        return not self._oauth().expired
