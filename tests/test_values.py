import math
from datetime import date, datetime

from services.values import (
    clean_text, id_list, optional_number, parse_date, parse_id, parse_number,
    selected_id, to_bool,
)


def test_parse_number_blank_is_zero_and_garbage_is_nan():
    assert parse_number("") == 0.0
    assert parse_number(None) == 0.0
    assert parse_number(" 12.5 ") == 12.5
    assert parse_number(7) == 7.0
    assert math.isnan(parse_number("abc"))


def test_selected_id_only_accepts_positive_numbers():
    assert selected_id("12") == 12
    assert selected_id(3.0) == 3
    for value in ("", "0", 0, "-4", "abc", None):
        assert selected_id(value) is None


def test_id_list_splits_dedupes_and_drops_invalid():
    assert id_list("4,1,,abc,4") == [4, 1]
    assert id_list(["2", "0", "7"]) == [2, 7]
    assert id_list(None) == []


def test_optional_number_treats_zero_and_garbage_as_missing():
    """Blank, zero and unparsable inputs are all stored as NULL."""
    assert optional_number("") is None
    assert optional_number("0") is None
    assert optional_number("x1") is None
    assert optional_number("19.99") == 19.99


def test_clean_text():
    assert clean_text("  drill  ") == "drill"
    assert clean_text("   ") is None
    assert clean_text(None) is None


def test_to_bool_understands_checkbox_values():
    for truthy in ("on", "1", "true", "Yes", True, 1):
        assert to_bool(truthy) is True
    for falsy in ("", "off", "0", None, False, 0):
        assert to_bool(falsy) is False


def test_parse_date():
    assert parse_date("2024-03-05") == date(2024, 3, 5)
    assert parse_date("2024-03-05T08:00:00") == date(2024, 3, 5)
    assert parse_date(datetime(2024, 3, 5, 12, 0)) == date(2024, 3, 5)
    assert parse_date("05/03/2024") is None
    assert parse_date("") is None


def test_non_finite_numbers_read_as_unparsable():
    for value in ("Infinity", "-inf", "1e400", "nan", float("inf"), 10**400):
        assert math.isnan(parse_number(value))


def test_ids_outside_the_integer_column_are_not_selected():
    for value in ("Infinity", "1e400", "1e30", 2**63):
        assert selected_id(value) is None
    assert math.isnan(parse_id("1e30"))
    assert parse_id("42") == 42.0
    assert id_list(["1e30", "5"]) == [5]
