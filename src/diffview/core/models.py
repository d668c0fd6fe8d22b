"""Data model for line diffs and merge-conflict regions"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator


class DiffSegmentKind(str, Enum):
    unchanged = "unchanged"
    added = "added"
    removed = "removed"


class DiffRowKind(str, Enum):
    unchanged = "unchanged"
    added = "added"
    removed = "removed"
    modified = "modified"


class DiffOptions(BaseModel):
    """Knobs for a single diff_documents call."""
    context_lines: int = Field(default=3, ge=0, description="Unchanged lines kept around each change")
    ignore_whitespace: bool = Field(default=False, description="Strip all whitespace from matching keys")


class DiffSegment(BaseModel):
    """A contiguous run of characters within one line sharing a change kind."""
    kind: DiffSegmentKind
    text: str


class SideLine(BaseModel):
    """One side of a row: the original line plus its segment partition."""
    line_index: int                 # 0-based index into that side's lines
    text: str                       # full original text, whitespace included
    segments: list[DiffSegment]


class DiffRow(BaseModel):
    """An aligned pair of at most one old line and one new line."""
    old: Optional[SideLine] = None
    new: Optional[SideLine] = None

    @model_validator(mode="after")
    def _require_a_side(self) -> "DiffRow":
        if self.old is None and self.new is None:
            raise ValueError("DiffRow needs an old or a new line")
        return self

    @property
    def kind(self) -> DiffRowKind:
        if self.old is not None and self.new is not None:
            if _single_unchanged(self.old) and _single_unchanged(self.new):
                return DiffRowKind.unchanged
            return DiffRowKind.modified
        if self.old is not None:
            return DiffRowKind.removed
        return DiffRowKind.added


def _single_unchanged(line: SideLine) -> bool:
    return len(line.segments) == 1 and line.segments[0].kind == DiffSegmentKind.unchanged


class DiffHunk(BaseModel):
    """A context-bounded group of rows, analogous to a unified-diff @@ block."""
    old_start: int
    old_len: int
    new_start: int
    new_len: int
    rows: list[DiffRow]

    def header(self) -> str:
        """Display header with 1-based starts, e.g. '@@ -1,4 +1,5 @@'."""
        return f"@@ -{self.old_start + 1},{self.old_len} +{self.new_start + 1},{self.new_len} @@"


class DiffModel(BaseModel):
    hunks: list[DiffHunk] = []


class TextRange(BaseModel):
    """Half-open [start, end) offset range into the text a region was parsed from.

    Offsets are Python `str` indices (code points), not byte offsets.
    """
    start: int
    end: int

    def __len__(self) -> int:
        return max(0, self.end - self.start)

    def as_slice(self) -> slice:
        return slice(self.start, self.end)

    def extract(self, text: str) -> str:
        return text[self.start:self.end]


class ConflictRegion(BaseModel):
    """One <<<<<<< / (|||||||)? / ======= / >>>>>>> marker group.

    `range` covers the markers themselves (through the closing marker's newline);
    `ours`, `base` and `theirs` cover only the content between markers.
    """
    ours_branch_name: str = "HEAD"
    theirs_branch_name: str = "Origin"
    range: TextRange
    ours: TextRange
    theirs: TextRange
    base: Optional[TextRange] = None
