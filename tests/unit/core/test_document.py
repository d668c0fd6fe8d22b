"""Unit tests for core/document.py"""

import pytest

from diffview.core.document import Document, split_lines


@pytest.mark.parametrize("text,expected", [
    ("", []),
    ("a", ["a"]),
    ("a\n", ["a"]),
    ("a\nb", ["a", "b"]),
    ("a\nb\n", ["a", "b"]),
    ("a\r\nb\r\n", ["a", "b"]),
    ("\n", [""]),
    ("a\n\n", ["a", ""]),
])
def test_document_lines(text, expected):
    """Lines drop terminators and '\\r'; a final newline adds no empty line."""
    doc = Document.from_str(text)
    assert doc.lines() == expected
    assert doc.line_count() == len(expected)


def test_document_line_checked_access():
    """line() returns None instead of raising for out-of-range indices."""
    doc = Document.from_str("a\nb\n")
    assert doc.line(1) == "b"
    assert doc.line(2) is None
    assert doc.line(-1) is None


def test_document_keeps_original_text():
    doc = Document.from_str("x\r\ny")
    assert doc.text == "x\r\ny"
    assert str(doc) == "x\r\ny"
    assert not doc.is_empty()
    assert Document().is_empty()


@pytest.mark.parametrize("text,expected", [
    ("", [""]),
    ("a\nb", ["a", "b"]),
    ("a\n", ["a", ""]),
    ("a\r\nb", ["a\r", "b"]),
])
def test_split_lines_mirrors_str_split(text, expected):
    """split_lines splits on '\\n' only and keeps '\\r'."""
    assert split_lines(text) == expected
