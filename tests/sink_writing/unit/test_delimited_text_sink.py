"""Delimited-text sink tests."""

from __future__ import annotations

from tabular_export.sink_writing import render_delimited_text, stream_delimited_text


def test_renders_header_and_rows_without_trailing_newline() -> None:
    text = render_delimited_text(
        ("first_name", "last_name", "age"), [["firstName", "lastName", 25]]
    )

    assert text == "first_name,last_name,age\nfirstName,lastName,25"


def test_uses_configured_separator_and_quotes_when_needed() -> None:
    text = render_delimited_text(
        ("name", "quote"), [["a+b", 'say "hi"'], [None, ""]], separator="+"
    )

    assert text == 'name+quote\n"a+b"+"say ""hi"""\n+'


def test_header_is_emitted_before_rows_are_pulled() -> None:
    pulled: list[int] = []

    def rows():
        for index in range(2):
            pulled.append(index)
            yield [index]

    stream = stream_delimited_text(("n",), rows())

    assert next(stream) == "n"
    assert pulled == []
    assert next(stream) == "\n0"
    assert pulled == [0]


def test_booleans_are_written_in_json_spelling() -> None:
    text = render_delimited_text(("note", "active", "archived"), [["x", True, False]])

    assert text == "note,active,archived\nx,true,false"


def test_single_blank_cell_is_an_empty_line() -> None:
    text = render_delimited_text(("note",), [[""], [None], ["x"]])

    assert text == "note\n\n\nx"
