"""Line-oriented view over a text document"""

from typing import Optional


def split_lines(text: str) -> list[str]:
    """Split on '\\n' only; terminators dropped, '\\r' kept. Empty text gives ['']."""
    return text.split("\n")


def _strip_cr(line: str) -> str:
    return line[:-1] if line.endswith("\r") else line


class Document:
    """Immutable text with checked line access.

    A trailing newline does not start an extra empty line, so "a\\nb\\n" and
    "a\\nb" both have two lines. A trailing '\\r' is stripped from every line.
    """

    __slots__ = ("_text", "_lines")

    def __init__(self, text: str = ""):
        self._text = text
        raw = text.split("\n")
        if raw and raw[-1] == "":
            raw.pop()
        self._lines = tuple(_strip_cr(line) for line in raw)

    @classmethod
    def from_str(cls, text: str) -> "Document":
        return cls(text)

    @property
    def text(self) -> str:
        return self._text

    def is_empty(self) -> bool:
        return not self._text

    def line_count(self) -> int:
        return len(self._lines)

    def line(self, index: int) -> Optional[str]:
        """Return line `index`, or None when out of range (negative included)."""
        if 0 <= index < len(self._lines):
            return self._lines[index]
        return None

    def lines(self) -> list[str]:
        return list(self._lines)

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"Document(lines={len(self._lines)})"
