"""Site URL resolution shared by every per-site operation."""

from gsc.errors import InvalidArgumentError


def resolve_site_url(site_url: str | None, default: str | None) -> str:
    """Return the explicit site URL, else the default. Neither is normalized."""
    url = site_url or default
    if not url:
        raise InvalidArgumentError(
            "Site URL is required. Set a default site URL with set_site_url() "
            "or pass site_url explicitly."
        )
    return url
