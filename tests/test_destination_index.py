import pytest

from destcompare.destination_index import (
    AGGREGATE_KEY,
    AirlineDestinationIndex,
    build_destination_index,
    scan_table,
)
from destcompare.document import ArticleDocument
from destcompare.row_classifier import never_reset
from tests.helpers import airport_article, article, heading, wikitable

RESET_ROWS = [
    ("Aegean", "Athens"),
    ("British", "London–Heathrow"),
    ("Zeta", "Zagreb"),
    ("Apple", "Leipzig"),
    ("Beta", "Brussels"),
]


def test_builds_per_airline_sets_and_aggregate():
    index = build_destination_index(airport_article())

    assert index.airlines == ["Aegean Airlines", "British Airways", "easyJet"]
    assert index["Aegean Airlines"] == {"Athens", "Thessaloniki"}
    assert index["British Airways"] == {"London-Heathrow", "Paris-Orly"}
    assert index["easyJet"] == {"Berlin", "Geneva", "Milan-Malpensa"}
    assert index[AGGREGATE_KEY] == frozenset().union(*(index[a] for a in index.airlines))


def test_cargo_and_statistics_tables_are_ignored():
    index = build_destination_index(airport_article())

    assert "Cargolux" not in index
    assert "Passengers" not in index
    assert "Luxembourg" not in index.all_destinations


def test_no_passenger_tables_gives_empty_index():
    html = article(heading(2, "Airlines and destinations"), wikitable([("Aegean", "Athens")], caption="Cargo"))

    assert len(build_destination_index(html)) == 0


@pytest.mark.parametrize("html", [None, "", "<table", "<html><body><p>Stub article</p></body></html>"])
def test_malformed_input_never_raises(html):
    assert len(build_destination_index(html)) == 0


def test_alphabetical_reset_stops_the_table():
    document = ArticleDocument.from_html(article(wikitable(RESET_ROWS, caption="Passenger")))

    contributions = scan_table(document.tables()[0])

    assert [airline for airline, _ in contributions] == ["Aegean", "British", "Zeta"]


def test_alphabetical_reset_can_be_disabled():
    html = article(wikitable(RESET_ROWS, caption="Passenger"))

    index = build_destination_index(html, boundary=never_reset)

    assert set(index.airlines) == {"Aegean", "British", "Zeta", "Apple", "Beta"}


def test_rows_without_destinations_are_skipped_but_keep_ordering():
    html = article(
        wikitable(
            [("Aegean", "Athens"), ("Charter Co", "Seasonal; charter (2024)"), ("Delta", "Atlanta")],
            caption="Passenger",
        )
    )

    index = build_destination_index(html)

    assert index.airlines == ["Aegean", "Delta"]


def test_airline_spread_over_tables_is_merged():
    html = article(
        wikitable([("Aegean", "Athens")], caption="Passenger (scheduled)"),
        wikitable([("Aegean", "Heraklion")], caption="Passenger (charter)"),
    )

    index = build_destination_index(html)

    assert index["Aegean"] == {"Athens", "Heraklion"}


def test_index_is_read_only():
    index = build_destination_index(airport_article())

    with pytest.raises(TypeError):
        index["New Air"] = frozenset({"Oslo"})
    assert isinstance(index["easyJet"], frozenset)


def test_from_airlines_derives_the_aggregate():
    index = AirlineDestinationIndex.from_airlines({"A": {"Paris"}, "B": {"Rome"}, AGGREGATE_KEY: {"Ignored"}})

    assert index.all_destinations == {"Paris", "Rome"}
    assert len(AirlineDestinationIndex.from_airlines({})) == 0
