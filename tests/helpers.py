from typing import Iterable, List, Optional, Sequence, Tuple

Row = Tuple[str, str]


def wikitable(rows: Iterable[Row], caption: Optional[str] = None, header: Sequence[str] = ("Airlines", "Destinations")) -> str:
    """A MediaWiki-style data table; destination cells are raw HTML."""
    parts = ['<table class="wikitable sortable">']
    if caption is not None:
        parts.append(f"<caption>{caption}</caption>")
    parts.append("<tbody><tr>" + "".join(f"<th>{name}</th>" for name in header) + "</tr>")
    for airline, destinations in rows:
        parts.append(f'<tr><td><a href="/wiki/{airline}">{airline}</a></td><td>{destinations}</td><td></td></tr>')
    parts.append("</tbody></table>")
    return "\n".join(parts)


def heading(level: int, text: str) -> str:
    """Current MediaWiki markup: the hN element sits inside a div.mw-heading wrapper."""
    return (
        f'<div class="mw-heading mw-heading{level}"><h{level} id="{text.replace(" ", "_")}">{text}</h{level}>'
        '<span class="mw-editsection">[<a href="#">edit</a>]</span></div>'
    )


def legacy_heading(level: int, text: str) -> str:
    return f'<h{level}><span class="mw-headline">{text}</span></h{level}>'


def article(*blocks: str) -> str:
    body = "\n".join(blocks)
    return f'<!DOCTYPE html><html><head><title>Airport</title></head><body><div class="mw-parser-output">{body}</div></body></html>'


PASSENGER_ROWS_A = [
    ("Aegean Airlines", 'Athens<sup class="reference">[12]</sup>, <a>Thessaloniki</a>'),
    ("British Airways", "London–Heathrow, <a>Paris–Orly</a> (seasonal)"),
    ("easyJet", "Berlin<br>\nGeneva<br>\nMilan–Malpensa"),
]

PASSENGER_ROWS_B = [
    ("Aegean Airlines", "Athens, Larnaca"),
    ("British Airways", "London–Heathrow"),
    ("Lufthansa", "Frankfurt, Munich"),
]

CARGO_ROWS = [
    ("Cargolux", "Luxembourg, Hong Kong"),
    ("DHL Aviation", "Leipzig/Halle"),
]


def airport_blocks(passenger_rows=PASSENGER_ROWS_A, cargo_rows=CARGO_ROWS) -> List[str]:
    """Body blocks laid out like a current Wikipedia airport page."""
    return [
        heading(2, "History"),
        "<p>Opened in 1950.</p>",
        heading(2, "Airlines and destinations"),
        heading(3, "Passenger"),
        "<p>The following airlines operate regular scheduled flights:</p>",
        wikitable(passenger_rows),
        heading(3, "Cargo"),
        wikitable(cargo_rows),
        heading(2, "Statistics"),
        wikitable([("Passengers", "12,345,678")], header=("Year", "Passengers")),
    ]


def airport_article(passenger_rows=PASSENGER_ROWS_A, cargo_rows=CARGO_ROWS) -> str:
    return article(*airport_blocks(passenger_rows, cargo_rows))
