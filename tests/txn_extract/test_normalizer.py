from __future__ import annotations

from txn_cli.txn_extract.normalizer import normalize_line_endings, normalize_text


def test_normalize_line_endings_handles_crlf_and_cr() -> None:
    assert normalize_line_endings("a\r\nb\rc\n") == "a\nb\nc\n"
    assert normalize_line_endings(None) == ""


def test_normalize_text_trims_and_drops_blank_lines() -> None:
    normalized = normalize_text("  first line  \r\n\r\n\t second\t\n   \n")

    assert normalized.text == "first line  \n\n\t second"
    assert normalized.lines == ("first line", "second")
    assert normalized.is_single_line is False


def test_normalize_text_on_whitespace_only_input() -> None:
    normalized = normalize_text(" \n\t\r\n ")

    assert normalized.text == ""
    assert normalized.lines == ()


def test_single_line_detection() -> None:
    assert normalize_text("Date: 11 Dec 2025 Amount: 1.00").is_single_line is True
    assert normalize_text("\n\nonly one\n\n").is_single_line is True
    assert normalize_text("one\ntwo").is_single_line is False
