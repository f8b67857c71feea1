"""Cell normalisation tests."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest
from tabular_export.row_materialization import (
    InjectionGuard,
    escape_quotes,
    format_timestamp,
    normalize_cell,
    parse_timestamp,
)


@pytest.mark.parametrize("value", ["=1+2", "+1", "-1", "@SUM(A1)"])
def test_risky_leading_characters_are_neutralised(value: str) -> None:
    assert normalize_cell(value) == "'" + value


def test_safe_strings_pass_through() -> None:
    assert normalize_cell("a=b") == "a=b"
    assert normalize_cell("") == ""


def test_guard_prefixes_once_for_repeated_risky_characters() -> None:
    guard = InjectionGuard(risky_characters=("=", "+"))

    assert guard.protect("==x") == "'==x"
    assert guard.protect("+=x") == "'+=x"


def test_neutralizer_cannot_start_with_risky_character() -> None:
    with pytest.raises(ValueError):
        InjectionGuard(risky_characters=("=", "'"), neutralizer="'")


def test_timestamps_are_truncated_to_seconds_without_zone() -> None:
    aware = datetime(2016, 7, 4, 15, 56, 31, 999999, tzinfo=timezone(timedelta(hours=2)))

    assert format_timestamp(aware) == "2016-07-04T13:56:31"
    assert normalize_cell(datetime(2016, 7, 4, 13, 56, 31, 500)) == "2016-07-04T13:56:31"
    assert normalize_cell(date(2016, 7, 4)) == "2016-07-04T00:00:00"


def test_none_becomes_empty_string_and_numbers_pass() -> None:
    assert normalize_cell(None) == ""
    assert normalize_cell(2.5) == 2.5
    assert normalize_cell(True) is True


def test_sequences_are_stringified_as_json() -> None:
    assert normalize_cell(["-a", 1]) == '["-a",1]'


def test_escape_quotes_only_touches_strings() -> None:
    assert escape_quotes('I said: "Hello"') == 'I said: ""Hello""'
    assert escape_quotes(5) == 5


def test_date_typed_strings_are_parsed_when_possible() -> None:
    assert normalize_cell("2016-07-04T13:56:31.999Z", date_typed=True) == "2016-07-04T13:56:31"
    assert normalize_cell("2016-07-04", date_typed=True) == "2016-07-04T00:00:00"
    assert normalize_cell("-later-", date_typed=True) == "'-later-"
    assert parse_timestamp("yesterday") is None
