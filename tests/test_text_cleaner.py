import pytest

from destcompare.text_cleaner import STOP_WORDS, clean_destinations, normalize_cell_text


def test_mixed_cell_yields_clean_names():
    result = clean_destinations("Paris[12], London (seasonal), 1234, Rome–Fiumicino")

    assert set(result) == {"Paris", "London", "Rome-Fiumicino"}


def test_em_dash_is_normalized_to_hyphen():
    assert clean_destinations("Tokyo—Haneda") == ("Tokyo-Haneda",)


def test_splits_on_every_separator():
    result = clean_destinations("Paris\nLondon · Rome • Milan; Oslo, Bergen")

    assert result == ("Paris", "London", "Rome", "Milan", "Oslo", "Bergen")


def test_stop_words_are_dropped_case_insensitively():
    result = clean_destinations("Paris, and, CHARTER, via, Terminated, Seasonal, Cargo")

    assert result == ("Paris",)
    assert not {name.lower() for name in result} & STOP_WORDS


@pytest.mark.parametrize("noise", ["267", "21A", "21a", "Flight 1234", "AB", "42"])
def test_numeric_and_short_noise_is_dropped(noise):
    assert clean_destinations(noise) == ()


def test_length_bound_is_half_open():
    assert clean_destinations("X" * 49) == ("X" * 49,)
    assert clean_destinations("X" * 50) == ()
    assert clean_destinations("Oslo, Rio") == ("Oslo", "Rio")


def test_duplicates_keep_first_appearance():
    assert clean_destinations("Paris, Rome, Paris") == ("Paris", "Rome")


def test_runs_of_whitespace_collapse():
    assert clean_destinations("New   York,   Los  Angeles ") == ("New York", "Los Angeles")


def test_parenthetical_notes_are_removed_entirely():
    assert clean_destinations("London (begins 1 June 2025), Dublin (ends 3 March)") == ("London", "Dublin")


def test_empty_input_contributes_nothing():
    assert clean_destinations("") == ()
    assert clean_destinations(None) == ()
    assert normalize_cell_text("") == ""


def test_cleaning_is_idempotent():
    first = clean_destinations("Athens[3], Larnaca (seasonal); Milan–Malpensa\nZürich")

    assert clean_destinations(", ".join(first)) == first
