"""Error types and request execution for the Search Console services."""

import logging

from googleapiclient.errors import HttpError

logger = logging.getLogger(__name__)


class InvalidArgumentError(ValueError):
    """Raised when an operation is called without a required argument."""


class SearchConsoleError(Exception):
    """Raised when the Search Console API (or its transport) fails."""

    def __init__(self, message: str, code: int = 0):
        self.message = message
        self.code = code
        super().__init__(message)


def execute(request, num_retries: int = 0):
    """Run a prepared googleapiclient request, wrapping any failure."""
    try:
        return request.execute(num_retries=num_retries)
    except HttpError as e:
        message = getattr(e, "reason", None) or str(e)
        logger.debug("Search Console API error %s: %s", e.resp.status, message)
        raise SearchConsoleError(message, int(e.resp.status or 0)) from e
    except Exception as e:
        code = getattr(e, "code", 0)
        raise SearchConsoleError(str(e), code if isinstance(code, int) else 0) from e
