#!/usr/bin/env python3
"""GSC CLI — Google Search Console from the terminal."""

import logging
import sys
import yaml
import click
from pathlib import Path
from datetime import date, timedelta
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich import box

CONFIG_PATH = Path(__file__).parent / "config.yaml"
console = Console()


def _trunc(text: str, width: int = 45) -> str:
    """Truncate text with ellipsis if too long."""
    text = text or ""
    if len(text) <= width:
        return text
    return text[:width - 1] + "…"


def load_config(path: Path, required: bool = True) -> dict:
    if not path.exists():
        if required:
            console.print(f"[red]ERROR:[/] {path} not found.")
            console.print("Copy config.example.yaml to config.yaml and fill in credentials.")
            sys.exit(1)
        return {}
    with open(path) as f:
        return yaml.safe_load(f) or {}


def _setup_logging(debug: bool):
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _client(ctx):
    return ctx.obj["client"]


def _fail(e):
    console.print(f"[red]ERROR:[/] {e}")
    sys.exit(1)


def _state(value: str | None) -> str:
    """Color an upstream enum: green for PASS/allowed, red for failures."""
    if not value:
        return "[dim]-[/]"
    v = value.upper()
    if v in ("PASS", "INDEXING_ALLOWED", "SUCCESSFUL", "ALLOWED", "MOBILE_FRIENDLY"):
        return f"[green]{value}[/]"
    if v in ("FAIL", "PARTIAL") or "DISALLOWED" in v or "ERROR" in v:
        return f"[red]{value}[/]"
    return value


# ─── CLI ─────────────────────────────────────────────────────────────────


@click.group()
@click.option("--config", "config_path", type=click.Path(path_type=Path), default=CONFIG_PATH,
              envvar="GSC_CONFIG", help="Path to config.yaml")
@click.option("--site", default=None, help="Site URL (overrides site_url from config)")
@click.option("--debug", is_flag=True, help="Verbose API logging")
@click.pass_context
def cli(ctx, config_path, site, debug):
    """GSC CLI — Google Search Console from the terminal."""
    from pydantic import ValidationError

    from gsc.client import SearchConsole
    from gsc.config import Settings
    from gsc.credentials import Credentials

    cfg = load_config(config_path)
    try:
        settings = Settings.from_dict(cfg.get("settings"))
    except ValidationError as e:
        console.print(f"[red]ERROR:[/] invalid settings in {config_path} or GOOGLE_SEARCH_CONSOLE_* environment")
        console.print(str(e), markup=False)
        sys.exit(1)
    _setup_logging(debug or settings.debug)

    google = cfg.get("google", {}) or {}
    credentials = Credentials(
        access_token=google.get("access_token"),
        service_account_file=google.get("service_account_file"),
        scopes=tuple(settings.scopes),
    )
    ctx.obj = {
        "client": SearchConsole(credentials, site or cfg.get("site_url"), settings),
        "settings": settings,
    }


@cli.command()
@click.pass_context
def token(ctx):
    """Show whether an access token is configured and still valid."""
    gsc = _client(ctx)
    if gsc.credentials.service_account_file:
        console.print(f"  [green]+[/] service account {gsc.credentials.service_account_file}")
        return
    if not gsc.access_token:
        console.print("  [red]x[/] no access token configured")
        sys.exit(1)
    if gsc.is_access_token_valid():
        console.print(f"  [green]+[/] access token {_trunc(gsc.access_token, 12)} is valid")
    else:
        console.print(f"  [red]x[/] access token {_trunc(gsc.access_token, 12)} has expired")
        sys.exit(1)


# ─── Sites ───────────────────────────────────────────────────────────────


@cli.command()
@click.option("--details", is_flag=True, help="Fetch each site individually")
@click.pass_context
def sites(ctx, details):
    """List verified sites."""
    api = _client(ctx).sites()
    try:
        entries = api.get_all_with_details() if details else api.list()
    except Exception as e:
        _fail(e)

    table = Table(title=f"Search Console — {len(entries)} sites", box=box.ROUNDED)
    table.add_column("Site", style="bold")
    table.add_column("Permission")
    for s in sorted(entries, key=lambda x: x["site_url"] or ""):
        table.add_row(s["site_url"], s["permission_level"] or "-")
    console.print(table)


@cli.command()
@click.argument("site_url", required=False)
@click.pass_context
def site(ctx, site_url):
    """Show one site (default: configured site)."""
    try:
        s = _client(ctx).sites().get(site_url)
    except Exception as e:
        _fail(e)
    console.print(f"  [bold]{s['site_url']}[/]  {s['permission_level']}")


@cli.command()
@click.argument("site_url", required=False)
@click.pass_context
def verified(ctx, site_url):
    """Check that a site is verified for this account."""
    target = site_url or _client(ctx).site_url or "(no site)"
    if _client(ctx).sites().is_verified(site_url):
        console.print(f"  [green]+[/] {target} verified")
    else:
        console.print(f"  [red]x[/] {target} not verified")
        sys.exit(1)


# ─── Analytics ───────────────────────────────────────────────────────────

SHORTCUTS = {
    "query": "get_query_data",
    "page": "get_page_data",
    "country": "get_country_data",
    "device": "get_device_data",
    "query-page": "get_query_page_data",
}


@cli.command()
@click.option("--days", default=None, type=int, help="Analytics period in days (ends yesterday)")
@click.option("--start", default=None, help="Start date YYYY-MM-DD")
@click.option("--end", default=None, help="End date YYYY-MM-DD")
@click.option("--dimension", "-d", "dimensions", multiple=True,
              help="Dimension (query, page, country, device, searchAppearance, date)")
@click.option("--by", type=click.Choice(list(SHORTCUTS)), default=None, help="Fixed-dimension shortcut")
@click.option("--limit", default=None, type=int, help="Row limit")
@click.option("--start-row", default=None, type=int, help="First row (pagination)")
@click.option("--top", default=25, help="Rows to display")
@click.pass_context
def analytics(ctx, days, start, end, dimensions, by, limit, start_row, top):
    """Search analytics — clicks, impressions, CTR, position."""
    from gsc.analytics import QueryOptions

    if by and (dimensions or start_row is not None):
        raise click.UsageError("--by fixes the dimensions and paging; drop --dimension/--start-row.")

    api = _client(ctx).analytics()
    if days:
        end = end or (date.today() - timedelta(days=1)).isoformat()
        start = start or (date.today() - timedelta(days=days)).isoformat()
    if not (start and end):
        start, end = api.default_date_range()

    try:
        if by:
            data = getattr(api, SHORTCUTS[by])(start, end, row_limit=limit)
            dimensions = ("query", "page") if by == "query-page" else (by,)
        else:
            data = api.query(QueryOptions(
                start_date=start, end_date=end,
                dimensions=list(dimensions) or None,
                row_limit=limit, start_row=start_row,
            ))
    except Exception as e:
        _fail(e)

    rows = data["rows"]
    total_clicks = sum(r["clicks"] or 0 for r in rows)
    total_impressions = sum(r["impressions"] or 0 for r in rows)

    table = Table(title=f"{start} — {end}: {total_clicks:,} clicks, {total_impressions:,} impressions",
                  box=box.SIMPLE)
    for dim in dimensions or ("keys",):
        table.add_column(dim.capitalize())
    table.add_column("Clicks", justify="right", style="green")
    table.add_column("Impressions", justify="right")
    table.add_column("CTR", justify="right")
    table.add_column("Position", justify="right", style="yellow")

    for r in sorted(rows, key=lambda x: x["clicks"] or 0, reverse=True)[:top]:
        keys = r["keys"] or [""]
        cells = [_trunc(k, 50) for k in keys] if dimensions else [" / ".join(keys)]
        ctr = (r["ctr"] or 0) * 100
        table.add_row(
            *cells,
            f"{r['clicks'] or 0:,}", f"{r['impressions'] or 0:,}",
            f"{ctr:.1f}%", f"{r['position'] or 0:.1f}",
        )
    console.print(table)
    if data["response_aggregation_type"]:
        console.print(f"  [dim]aggregation: {data['response_aggregation_type']}[/]")


# ─── Sitemaps ────────────────────────────────────────────────────────────


@cli.group()
def sitemaps():
    """Sitemaps — list, submit, delete."""


@sitemaps.command("list")
@click.pass_context
def sitemaps_list(ctx):
    """List sitemaps with errors and warnings."""
    try:
        entries = _client(ctx).sitemaps().list()
    except Exception as e:
        _fail(e)

    if not entries:
        console.print("  [yellow]Sitemap:[/] not submitted")
        return

    table = Table(title="Sitemaps", box=box.ROUNDED)
    table.add_column("Path", style="bold")
    table.add_column("Type")
    table.add_column("Submitted")
    table.add_column("Downloaded")
    table.add_column("Errors", justify="right")
    table.add_column("Warnings", justify="right")
    for sm in entries:
        errors = sm["errors"] or 0
        warnings = sm["warnings"] or 0
        table.add_row(
            _trunc(sm["path"], 60), sm["type"] or "-",
            sm["last_submitted"] or "-", sm["last_downloaded"] or "-",
            f"[red]{errors}[/]" if errors else "0",
            f"[yellow]{warnings}[/]" if warnings else "0",
        )
    console.print(table)


@sitemaps.command("get")
@click.argument("feedpath")
@click.pass_context
def sitemaps_get(ctx, feedpath):
    """Show one sitemap and its contents."""
    try:
        sm = _client(ctx).sitemaps().get(feedpath)
    except Exception as e:
        _fail(e)

    console.print(f"\n[bold]{sm['path']}[/] ({sm['type']})")
    console.print(f"  submitted  {sm['last_submitted']}")
    console.print(f"  downloaded {sm['last_downloaded']}")
    console.print(f"  pending={sm['is_pending']}  index={sm['is_sitemaps_index']}"
                  f"  errors={sm['errors']}  warnings={sm['warnings']}")
    for c in sm["contents"]:
        console.print(f"    {c['type']:10s} submitted={c['submitted']}  indexed={c['indexed']}")


@sitemaps.command("submit")
@click.argument("feedpath")
@click.pass_context
def sitemaps_submit(ctx, feedpath):
    """Submit a sitemap."""
    try:
        _client(ctx).sitemaps().submit(feedpath)
        console.print(f"  [green]+[/] {feedpath}")
    except Exception as e:
        console.print(f"  [red]x[/] {feedpath} {e}")
        sys.exit(1)


@sitemaps.command("delete")
@click.argument("feedpath")
@click.pass_context
def sitemaps_delete(ctx, feedpath):
    """Delete a sitemap."""
    try:
        _client(ctx).sitemaps().delete(feedpath)
        console.print(f"  [green]-[/] {feedpath}")
    except Exception as e:
        console.print(f"  [red]x[/] {feedpath} {e}")
        sys.exit(1)


@sitemaps.command("status")
@click.argument("feedpath", required=False)
@click.pass_context
def sitemaps_status(ctx, feedpath):
    """Status of one sitemap, or of all sitemaps of the site."""
    api = _client(ctx).sitemaps()
    try:
        statuses = {feedpath: api.get_status(feedpath)} if feedpath else api.get_all_with_status()
    except Exception as e:
        _fail(e)

    for path, st in statuses.items():
        if st is None:
            console.print(f"  [red]x[/] {path} not found")
            continue
        color = "red" if st["errors"] else ("yellow" if st["warnings"] or st["is_pending"] else "green")
        console.print(f"  [{color}]{path}[/] errors={st['errors']} warnings={st['warnings']}"
                      f"{' pending' if st['is_pending'] else ''}")


# ─── URL Inspection ──────────────────────────────────────────────────────


def _print_inspection(result: dict):
    table = Table(title=f"URL Inspection — {result['inspection_url']}", box=box.ROUNDED)
    table.add_column("Property", style="bold")
    table.add_column("Value")
    table.add_row("Verdict", _state(result["verdict"]))
    table.add_row("Coverage", result["coverage_state"] or "?")
    table.add_row("Indexing", _state(result["indexing_state"]))
    table.add_row("Robots", _state(result["robots_txt_state"]))
    table.add_row("Page fetch", _state(result["page_fetch_state"]))
    table.add_row("Last crawl", result["last_crawl_time"] or "?")
    table.add_row("Crawled as", result["crawled_as"] or "?")
    if result.get("google_canonical"):
        table.add_row("Canonical", result["google_canonical"])
    if "mobile_usability_result" in result:
        table.add_row("Mobile", _state(result["mobile_usability_result"]["verdict"]))
    if "rich_results_result" in result:
        table.add_row("Rich results", _state(result["rich_results_result"]["verdict"]))
    console.print(table)


@cli.command()
@click.argument("url")
@click.option("--lang", default=None, help="Language code for messages (default en-US)")
@click.pass_context
def inspect(ctx, url, lang):
    """Check indexing status of a URL."""
    try:
        result = _client(ctx).url_inspection().inspect(url, language_code=lang)
    except Exception as e:
        _fail(e)
    _print_inspection(result)


@cli.command("inspect-many")
@click.argument("urls", nargs=-1, required=True)
@click.option("--lang", default=None, help="Language code for messages (default en-US)")
@click.pass_context
def inspect_many(ctx, urls, lang):
    """Inspect several URLs; failures are reported per URL."""
    from gsc.url_inspection import failed

    try:
        results = _client(ctx).url_inspection().inspect_multiple(urls, language_code=lang)
    except Exception as e:
        _fail(e)

    table = Table(title=f"URL Inspection — {len(urls)} URLs", box=box.ROUNDED)
    table.add_column("URL", style="bold")
    table.add_column("Verdict")
    table.add_column("Coverage")
    for r in results:
        if failed(r):
            table.add_row(_trunc(r["url"], 60), "[red]error[/]", r["error"])
        else:
            table.add_row(_trunc(r["inspection_url"], 60), _state(r["verdict"]), r["coverage_state"] or "?")
    console.print(table)


@cli.command()
@click.argument("url")
@click.pass_context
def indexed(ctx, url):
    """Exit 0 if the URL may be indexed."""
    if _client(ctx).url_inspection().is_indexed(url):
        console.print(f"  [green]+[/] {url} indexing allowed")
    else:
        console.print(f"  [red]x[/] {url} not indexable (or inspection failed)")
        sys.exit(1)


@cli.command()
@click.argument("url")
@click.pass_context
def issues(ctx, url):
    """Indexing issues of a URL."""
    from gsc.url_inspection import failed

    r = _client(ctx).url_inspection().get_indexing_issues(url)
    if failed(r):
        _fail(r["error"])
    for key in ("verdict", "coverage_state", "indexing_state", "robots_txt_state",
                "page_fetch_state", "last_crawl_time", "crawled_as"):
        console.print(f"  {key:18s} {_state(r[key])}")
    for sm in r["sitemap"]:
        console.print(f"  {'sitemap':18s} {sm}")
    for ref in r["referring_urls"]:
        console.print(f"  {'referred from':18s} {ref}")


@cli.command()
@click.argument("url")
@click.pass_context
def mobile(ctx, url):
    """Mobile usability issues of a URL."""
    from gsc.url_inspection import failed

    r = _client(ctx).url_inspection().get_mobile_usability_issues(url)
    if failed(r):
        _fail(r["error"])
    if not r:
        console.print("  [dim]no mobile usability result[/]")
        return
    console.print(f"  verdict {_state(r['verdict'])}")
    for issue in r["issues"]:
        console.print(f"    [yellow]{issue['severity']}[/] {issue['issue_type']}: {issue['message']}")


@cli.command("rich-results")
@click.argument("url")
@click.pass_context
def rich_results(ctx, url):
    """Rich results detected on a URL."""
    from gsc.url_inspection import failed

    r = _client(ctx).url_inspection().get_rich_results(url)
    if failed(r):
        _fail(r["error"])
    if not r:
        console.print("  [dim]no rich results[/]")
        return
    console.print(f"  verdict {_state(r['verdict'])}")
    for group in r["detected_items"]:
        console.print(f"  [bold]{group['rich_result_type']}[/]")
        for item in group["items"]:
            console.print(f"    {item['name']}")
            for issue in item["issues"]:
                console.print(f"      [yellow]{issue['severity']}[/] {issue['issue_message']}")


def main():
    cli()


if __name__ == "__main__":
    main()
