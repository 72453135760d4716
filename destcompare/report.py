"""Tabular and HTML renderings of a comparison result."""

from __future__ import annotations

from html import escape
from pathlib import Path
from typing import Any, Dict, Iterable, List

import pandas as pd

EMPTY_CELL = "None"
SOURCE_NOTE = (
    "Data is sourced from Wikipedia passenger destination tables. "
    "Results depend on the completeness of Wikipedia data."
)


def column_names(code_a: str, code_b: str) -> List[str]:
    return ["Airline", "Common Destinations", f"Only at {code_a}", f"Only at {code_b}"]


def _join(values: Iterable[str]) -> str:
    values = list(values)
    return ", ".join(values) if values else EMPTY_CELL


def comparison_frame(result: Dict[str, Any]) -> pd.DataFrame:
    """One row per airline with each destination list joined into a single cell."""
    columns = column_names(result["airport_a"], result["airport_b"])
    records = [
        [row["airline"], _join(row["common"]), _join(row["only_a"]), _join(row["only_b"])]
        for row in result["rows"]
    ]
    return pd.DataFrame(records, columns=columns)


def write_csv(result: Dict[str, Any], path) -> Path:
    output = Path(path)
    output.parent.mkdir(parents=True, exist_ok=True)
    comparison_frame(result).to_csv(output, index=False)
    return output


def _cell(values: List[str]) -> str:
    if not values:
        return '<span class="empty-cell">None</span>'
    return escape(", ".join(values))


def render_html(result: Dict[str, Any]) -> str:
    code_a = escape(result["airport_a"])
    code_b = escape(result["airport_b"])
    body = "".join(
        "<tr>"
        f"<td><strong>{escape(row['airline'])}</strong></td>"
        f"<td>{_cell(row['common'])}</td>"
        f"<td>{_cell(row['only_a'])}</td>"
        f"<td>{_cell(row['only_b'])}</td>"
        "</tr>"
        for row in result["rows"]
    )
    return (
        f"<h3>Destination Comparison: {code_a} vs {code_b}</h3>"
        "<table><thead><tr>"
        "<th>Airline</th><th>Common Destinations</th>"
        f"<th>Only at {code_a}</th><th>Only at {code_b}</th>"
        f"</tr></thead><tbody>{body}</tbody></table>"
        f'<div class="warning"><strong>Note:</strong> {SOURCE_NOTE}</div>'
    )


def render_error(message: str) -> str:
    return f'<div class="error">Error: {escape(message)}</div>'


def render_page(fragment: str, title: str = "Airport destination comparison") -> str:
    return (
        "<!doctype html><html><head><meta charset=\"utf-8\">"
        f"<title>{escape(title)}</title></head><body>{fragment}</body></html>"
    )
