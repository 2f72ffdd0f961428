"""URL Inspection: index status, mobile usability and rich results of a URL."""

import logging

from gsc.config import Settings
from gsc.errors import execute
from gsc.site_url import resolve_site_url

logger = logging.getLogger(__name__)


def failure(url: str, error: Exception) -> dict:
    """Failure record returned by the batch and derived helpers instead of raising."""
    return {"url": url, "error": str(error), "success": False}


def failed(record) -> bool:
    return isinstance(record, dict) and record.get("success") is False


def _format_mobile_issues(issues) -> list[dict]:
    return [
        {
            "issue_type": issue.get("issueType"),
            "severity": issue.get("severity"),
            "message": issue.get("message"),
        }
        for issue in issues or []
    ]


def _format_rich_items(items) -> list[dict]:
    return [
        {
            "name": item.get("name"),
            "issues": [
                {
                    "severity": issue.get("severity"),
                    "issue_message": issue.get("issueMessage"),
                }
                for issue in item.get("issues", []) or []
            ],
        }
        for item in items or []
    ]


def format_inspection(inspection_url: str, response: dict) -> dict:
    """Flatten an urlInspection.index.inspect response.

    The mobile usability and rich results blocks are only present when the
    API returns them.
    """
    inspection = (response or {}).get("inspectionResult", {}) or {}
    index_status = inspection.get("indexStatusResult", {}) or {}

    result = {
        "inspection_url": inspection_url,
        "inspection_result_link": inspection.get("inspectionResultLink"),
        "indexing_state": index_status.get("indexingState"),
        "coverage_state": index_status.get("coverageState"),
        "verdict": index_status.get("verdict"),
        "last_crawl_time": index_status.get("lastCrawlTime"),
        "page_fetch_state": index_status.get("pageFetchState"),
        "robots_txt_state": index_status.get("robotsTxtState"),
        "crawled_as": index_status.get("crawledAs"),
        "google_canonical": index_status.get("googleCanonical"),
        "user_canonical": index_status.get("userCanonical"),
        "sitemap": index_status.get("sitemap", []),
        "referring_urls": index_status.get("referringUrls", []),
    }

    mobile = inspection.get("mobileUsabilityResult")
    if mobile:
        result["mobile_usability_result"] = {
            "verdict": mobile.get("verdict"),
            "issues": _format_mobile_issues(mobile.get("issues")),
        }

    rich = inspection.get("richResultsResult")
    if rich:
        detected = [
            {
                "rich_result_type": group.get("richResultType"),
                "items": _format_rich_items(group.get("items")),
            }
            for group in rich.get("detectedItems", []) or []
        ]
        result["rich_results_result"] = {
            "verdict": rich.get("verdict"),
            "detected_items": detected,
            "items": [item for group in detected for item in group["items"]],
        }

    return result


class UrlInspection:
    def __init__(self, search_console, site_url: str | None = None, settings: Settings | None = None):
        self.search_console = search_console
        self.default_site_url = site_url
        self.settings = settings or Settings()

    def inspect(self, inspection_url: str, site_url: str | None = None,
                language_code: str | None = None) -> dict:
        site_url = resolve_site_url(site_url, self.default_site_url)
        body = {
            "inspectionUrl": inspection_url,
            "siteUrl": site_url,
            "languageCode": language_code or self.settings.default_language_code,
        }
        logger.debug("urlInspection.index.inspect %s", body)
        request = self.search_console.urlInspection().index().inspect(body=body)
        return format_inspection(inspection_url, execute(request, self.settings.retry_attempts))

    def inspect_multiple(self, inspection_urls, site_url: str | None = None,
                         language_code: str | None = None) -> list[dict]:
        """Inspect each URL in turn. A failing URL yields a failure record."""
        results = []
        for url in inspection_urls:
            try:
                results.append(self.inspect(url, site_url=site_url, language_code=language_code))
            except Exception as e:
                logger.warning("Inspection of %s failed: %s", url, e)
                results.append(failure(url, e))
        return results

    def get_result(self, inspection_url: str, site_url: str | None = None) -> dict:
        return self.inspect(inspection_url, site_url=site_url)

    def is_indexed(self, inspection_url: str, site_url: str | None = None) -> bool:
        try:
            result = self.inspect(inspection_url, site_url=site_url)
        except Exception as e:
            logger.debug("is_indexed(%s) failed: %s", inspection_url, e)
            return False
        return result["indexing_state"] == "INDEXING_ALLOWED"

    def get_indexing_issues(self, inspection_url: str, site_url: str | None = None) -> dict:
        try:
            result = self.inspect(inspection_url, site_url=site_url)
        except Exception as e:
            return failure(inspection_url, e)
        return {
            "url": inspection_url,
            "indexing_state": result["indexing_state"],
            "coverage_state": result["coverage_state"],
            "verdict": result["verdict"],
            "last_crawl_time": result["last_crawl_time"],
            "page_fetch_state": result["page_fetch_state"],
            "robots_txt_state": result["robots_txt_state"],
            "sitemap": result["sitemap"],
            "referring_urls": result["referring_urls"],
            "crawled_as": result["crawled_as"],
        }

    def get_mobile_usability_issues(self, inspection_url: str, site_url: str | None = None) -> dict:
        try:
            result = self.inspect(inspection_url, site_url=site_url)
        except Exception as e:
            return failure(inspection_url, e)
        return result.get("mobile_usability_result", {})

    def get_rich_results(self, inspection_url: str, site_url: str | None = None) -> dict:
        try:
            result = self.inspect(inspection_url, site_url=site_url)
        except Exception as e:
            return failure(inspection_url, e)
        return result.get("rich_results_result", {})
