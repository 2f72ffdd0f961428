"""Search Analytics: clicks, impressions, CTR and position by dimension."""

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta

from gsc.cache import CACHE_DIR, cache_key, load_cached, save_cached
from gsc.config import Settings
from gsc.errors import execute
from gsc.site_url import resolve_site_url

logger = logging.getLogger(__name__)


@dataclass
class QueryOptions:
    start_date: str | None = None
    end_date: str | None = None
    dimensions: list[str] | None = None
    filters: list[dict] | None = None
    row_limit: int | None = None
    start_row: int | None = None
    search_type: str | None = None
    data_state: str | None = None
    aggregation_type: str | None = None

    @classmethod
    def coerce(cls, options) -> "QueryOptions":
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        return cls(**options)


def format_rows_response(response: dict) -> dict:
    """Flatten a searchanalytics.query response."""
    rows = []
    for row in response.get("rows", []) or []:
        rows.append({
            "keys": row.get("keys", []),
            "clicks": row.get("clicks"),
            "impressions": row.get("impressions"),
            "ctr": row.get("ctr"),
            "position": row.get("position"),
        })
    return {
        "rows": rows,
        "response_aggregation_type": response.get("responseAggregationType"),
    }


class Analytics:
    def __init__(self, webmasters, site_url: str | None = None,
                 settings: Settings | None = None, cache_dir=CACHE_DIR):
        self.webmasters = webmasters
        self.default_site_url = site_url
        self.settings = settings or Settings()
        self.cache_dir = cache_dir

    def build_body(self, options: QueryOptions) -> dict:
        body = {}
        if options.start_date:
            body["startDate"] = options.start_date
        if options.end_date:
            body["endDate"] = options.end_date
        dimensions = options.dimensions if options.dimensions is not None else self.settings.default_dimensions
        if dimensions:
            body["dimensions"] = list(dimensions)
        if options.filters:
            body["dimensionFilterGroups"] = options.filters
        body["rowLimit"] = options.row_limit if options.row_limit is not None else self.settings.default_row_limit
        if options.start_row is not None:
            body["startRow"] = options.start_row
        if options.search_type:
            body["type"] = options.search_type
        if options.data_state:
            body["dataState"] = options.data_state
        if options.aggregation_type:
            body["aggregationType"] = options.aggregation_type
        return body

    def query(self, options: QueryOptions | dict | None = None, site_url: str | None = None) -> dict:
        """Run a search analytics query.

        Returns {"rows": [{keys, clicks, impressions, ctr, position}],
        "response_aggregation_type": ...}. Raises InvalidArgumentError without a
        site URL and SearchConsoleError when the API call fails.
        """
        site_url = resolve_site_url(site_url, self.default_site_url)
        body = self.build_body(QueryOptions.coerce(options))

        key = None
        if self.settings.cache_enabled:
            key = cache_key(self.settings.cache_prefix, "searchanalytics", site_url, body)
            cached = load_cached(key, self.settings.cache_ttl, self.cache_dir)
            if cached is not None:
                logger.debug("searchanalytics cache hit for %s", site_url)
                return cached

        logger.debug("searchanalytics.query %s %s", site_url, body)
        request = self.webmasters.searchanalytics().query(siteUrl=site_url, body=body)
        result = format_rows_response(execute(request, self.settings.retry_attempts))

        if key:
            save_cached(key, result, self.cache_dir)
        return result

    def default_date_range(self) -> tuple[str, str]:
        """Last `default_days` days, ending yesterday."""
        end = date.today() - timedelta(days=1)
        start = end - timedelta(days=self.settings.default_days - 1)
        return start.isoformat(), end.isoformat()

    def get_data(self, start_date: str = "", end_date: str = "", dimensions: list[str] | None = None,
                 row_limit: int | None = None, site_url: str | None = None) -> dict:
        default_start, default_end = self.default_date_range()
        return self.query(QueryOptions(
            start_date=start_date or default_start,
            end_date=end_date or default_end,
            dimensions=dimensions if dimensions is not None else [],
            row_limit=row_limit,
        ), site_url=site_url)

    def get_query_data(self, start_date="", end_date="", row_limit=None, site_url=None) -> dict:
        return self.get_data(start_date, end_date, ["query"], row_limit, site_url)

    def get_page_data(self, start_date="", end_date="", row_limit=None, site_url=None) -> dict:
        return self.get_data(start_date, end_date, ["page"], row_limit, site_url)

    def get_country_data(self, start_date="", end_date="", row_limit=None, site_url=None) -> dict:
        return self.get_data(start_date, end_date, ["country"], row_limit, site_url)

    def get_device_data(self, start_date="", end_date="", row_limit=None, site_url=None) -> dict:
        return self.get_data(start_date, end_date, ["device"], row_limit, site_url)

    def get_query_page_data(self, start_date="", end_date="", row_limit=None, site_url=None) -> dict:
        return self.get_data(start_date, end_date, ["query", "page"], row_limit, site_url)
