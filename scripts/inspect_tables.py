#!/usr/bin/env python3
"""
Show how an article's tables are classified.

Lists every data table with its caption, nearest heading, the locator
strategies that accepted it and the airlines read from it. Useful when an
airport comes back with missing or unexpected destinations.

Examples:
python scripts/inspect_tables.py --html saved/LHR.html
python scripts/inspect_tables.py --airport LHR
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from destcompare.destination_index import scan_table  # noqa: E402
from destcompare.document import ArticleDocument  # noqa: E402
from destcompare.row_classifier import alphabetical_reset, never_reset  # noqa: E402
from destcompare.settings import Settings  # noqa: E402
from destcompare.table_locator import explain_tables  # noqa: E402
from destcompare.wikipedia import resolve_article_url  # noqa: E402


def parse_args():
    parser = argparse.ArgumentParser(description="Explain destination table classification for one article.")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--html", help="Path to a saved article HTML file.")
    source.add_argument("--airport", help="Airport code to look up and fetch.")
    parser.add_argument("--no-alphabetical-reset", action="store_true", help="Disable the alphabetical-reset stop.")
    return parser.parse_args()


def load_html(args) -> str:
    if args.html:
        return Path(args.html).read_text(encoding="utf-8")
    settings = Settings.from_env()
    url = resolve_article_url(args.airport, timeout=settings.timeout, user_agent=settings.user_agent)
    print(f"Article: {url}")
    return settings.page_fetcher().fetch_html(url)


def main() -> None:
    args = parse_args()
    document = ArticleDocument.from_html(load_html(args))
    boundary = never_reset if args.no_alphabetical_reset else alphabetical_reset
    accepted = {id(match.table.node): match.strategies for match in explain_tables(document)}

    tables = document.tables()
    print(f"{len(tables)} data tables, {len(accepted)} accepted")
    for position, table in enumerate(tables):
        heading = table.preceding_heading()
        strategies = accepted.get(id(table.node))
        print(f"\n[{position}] caption={table.caption!r} heading={heading.text if heading else None!r}")
        if not strategies:
            print("    rejected")
            continue
        print(f"    accepted by: {', '.join(strategies)}")
        for airline, destinations in scan_table(table, boundary):
            print(f"    {airline}: {len(destinations)} destinations")


if __name__ == "__main__":
    main()
