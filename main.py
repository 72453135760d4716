import argparse
import logging
from dataclasses import replace
from pathlib import Path

from pydantic import ValidationError

from backend.app import app as flask_app
from destcompare.comparison_service import (
    ComparisonError,
    ComparisonRequest,
    compare_airports,
    compare_documents,
    validation_message,
)
from destcompare.logging_setup import setup_logging
from destcompare.report import comparison_frame, render_html, render_page, write_csv
from destcompare.settings import Settings

# Expose Flask app for serverless platforms expecting `app`.
app = flask_app


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Compare the passenger destinations of two airports using Wikipedia."
    )
    parser.add_argument("airport_a", help="Code of the first airport (e.g. LHR).")
    parser.add_argument("airport_b", help="Code of the second airport (e.g. CDG).")
    parser.add_argument(
        "--html-a",
        type=str,
        help="Read the first airport's article from a local HTML file instead of fetching it."
    )
    parser.add_argument(
        "--html-b",
        type=str,
        help="Read the second airport's article from a local HTML file instead of fetching it."
    )
    parser.add_argument("--csv", type=str, help="Optional path to save the comparison table as CSV.")
    parser.add_argument("--html-out", type=str, help="Optional path to save the comparison as an HTML page.")
    parser.add_argument(
        "--no-alphabetical-reset",
        action="store_true",
        help="Read every row of a destinations table instead of stopping when airline order resets."
    )
    parser.add_argument("--verbose", action="store_true", help="Log table and row decisions.")
    return parser.parse_args(argv)


def run_comparison(args, settings):
    request_model = ComparisonRequest(airport_a=args.airport_a, airport_b=args.airport_b)
    if args.html_a or args.html_b:
        if not (args.html_a and args.html_b):
            raise SystemExit("Provide both --html-a and --html-b to compare local files.")
        html_a = Path(args.html_a).read_text(encoding="utf-8")
        html_b = Path(args.html_b).read_text(encoding="utf-8")
        return compare_documents(html_a, html_b, request_model.airport_a, request_model.airport_b, settings)
    return compare_airports(request_model, settings)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING, log_format="text")

    settings = Settings.from_env()
    if args.no_alphabetical_reset:
        settings = replace(settings, alphabetical_reset=False)

    try:
        result = run_comparison(args, settings)
    except ValidationError as exc:
        raise SystemExit(validation_message(exc))
    except ComparisonError as exc:
        raise SystemExit(f"Error: {exc}")

    for code, url in result["sources"].items():
        print(f"{code}: {url}")
    frame = comparison_frame(result)
    print(frame.to_string(index=False))

    if args.csv:
        path = write_csv(result, args.csv)
        print(f"Saved comparison table to {path}")
    if args.html_out:
        output = Path(args.html_out)
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(render_page(render_html(result)), encoding="utf-8")
        print(f"Saved comparison page to {output}")


if __name__ == "__main__":
    main()
