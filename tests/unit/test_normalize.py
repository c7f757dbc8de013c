from assessment.extraction import estimate_tokens, normalize_text
from assessment.extraction.normalize import estimate_pages


def test_normalize_collapses_whitespace_and_keeps_paragraphs() -> None:
    raw = "Title\t\t line\r\n\r\n\r\n\r\nBody  text\fNext\x00 page  "

    assert normalize_text(raw) == "Title line\n\nBody text\nNext page"


def test_normalize_collapses_three_or_more_newlines_to_two() -> None:
    assert normalize_text("a\n\n\n\n\nb\n\nc") == "a\n\nb\n\nc"


def test_normalize_empty_input() -> None:
    assert normalize_text("") == ""
    assert normalize_text(" \n\t ") == ""


def test_estimates_round_up() -> None:
    assert estimate_tokens("") == 0
    assert estimate_tokens("abcde") == 2
    assert estimate_pages("x" * 3500) == 1
    assert estimate_pages("x" * 3501) == 2
