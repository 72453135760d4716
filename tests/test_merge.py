from destcompare.destination_index import AGGREGATE_KEY, AirlineDestinationIndex, build_destination_index
from destcompare.merge import AGGREGATE_LABEL, merge_indices
from tests.helpers import PASSENGER_ROWS_B, airport_article


def test_single_airline_diff():
    rows = merge_indices({"A": frozenset({"Paris", "Rome"})}, {"A": frozenset({"Rome", "Berlin"})})

    assert [row.to_dict() for row in rows] == [
        {"airline": "A", "common": ["Rome"], "only_a": ["Paris"], "only_b": ["Berlin"]}
    ]


def test_rows_partition_the_union_of_both_sets():
    index_a = build_destination_index(airport_article())
    index_b = build_destination_index(airport_article(PASSENGER_ROWS_B))

    for row in merge_indices(index_a, index_b):
        key = AGGREGATE_KEY if row.is_aggregate else row.airline
        common, only_a, only_b = set(row.common), set(row.only_a), set(row.only_b)
        assert not common & only_a and not common & only_b and not only_a & only_b
        assert common | only_a | only_b == index_a.get(key, frozenset()) | index_b.get(key, frozenset())


def test_aggregate_first_then_case_insensitive_order():
    index_a = AirlineDestinationIndex.from_airlines({"easyJet": {"Geneva"}, "Aegean": {"Athens"}})
    index_b = AirlineDestinationIndex.from_airlines({"British Airways": {"London"}})

    rows = merge_indices(index_a, index_b)

    assert [row.airline for row in rows] == [AGGREGATE_LABEL, "Aegean", "British Airways", "easyJet"]
    assert rows[0].only_a == ("Athens", "Geneva")
    assert rows[0].only_b == ("London",)


def test_full_articles_compare_per_airline():
    rows = merge_indices(
        build_destination_index(airport_article()),
        build_destination_index(airport_article(PASSENGER_ROWS_B)),
    )
    by_airline = {row.airline: row for row in rows}

    assert [row.airline for row in rows] == [
        "All Airlines",
        "Aegean Airlines",
        "British Airways",
        "easyJet",
        "Lufthansa",
    ]
    assert by_airline["Aegean Airlines"].common == ("Athens",)
    assert by_airline["British Airways"].only_b == ()
    assert by_airline["Lufthansa"].only_b == ("Frankfurt", "Munich")
    assert by_airline["All Airlines"].common == ("Athens", "London-Heathrow")


def test_all_empty_rows_are_suppressed():
    rows = merge_indices({"Ghost Air": frozenset()}, {"Ghost Air": frozenset(), "Real Air": frozenset({"Oslo"})})

    assert [row.airline for row in rows] == ["Real Air"]


def test_inputs_are_left_untouched():
    index_a = {"A": frozenset({"Paris"})}
    index_b = {"B": frozenset({"Rome"})}

    merge_indices(index_a, index_b, aggregate_label="Everyone")

    assert index_a == {"A": frozenset({"Paris"})}
    assert index_b == {"B": frozenset({"Rome"})}


def test_custom_aggregate_label():
    rows = merge_indices({AGGREGATE_KEY: frozenset({"Paris"})}, {})

    assert rows[0].airline == AGGREGATE_LABEL
    assert merge_indices({AGGREGATE_KEY: frozenset({"Paris"})}, {}, aggregate_label="Everyone")[0].airline == "Everyone"
