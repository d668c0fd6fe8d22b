"""Flatten a DiffModel (or conflict regions) into renderable rows"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from diffview.core.document import Document
from diffview.core.models import ConflictRegion, DiffModel, DiffRowKind, DiffSegment
from diffview.core.patch import RowRef


class ViewMode(str, Enum):
    split = "split"
    inline = "inline"


@dataclass
class FoldRow:
    """Collapsed run of unchanged lines between (or after) hunks."""
    old_start: int
    new_start: int
    len: int


@dataclass
class HunkHeaderRow:
    text: str


@dataclass
class CodeRow:
    ref:          Optional[RowRef]
    kind:         DiffRowKind
    old_line:     Optional[int]        # 1-based
    new_line:     Optional[int]        # 1-based
    old_segments: list[DiffSegment] = field(default_factory=list)
    new_segments: list[DiffSegment] = field(default_factory=list)


DisplayRow = Union[FoldRow, HunkHeaderRow, CodeRow]


def build_display_rows(
    model: DiffModel,
    old_lines: list[str],
    new_lines: list[str],
    view_mode: ViewMode = ViewMode.split,
    ) -> list[DisplayRow]:
    """Rows for a full-file view: folds around hunks, headers, then code rows.

    In inline mode a modified row becomes a removed row followed by an added row.
    """
    rows: list[DisplayRow] = []
    old_pos = new_pos = 0

    for hunk_index, hunk in enumerate(model.hunks):
        gap = min(max(0, hunk.old_start - old_pos), max(0, hunk.new_start - new_pos))
        if gap > 0:
            rows.append(FoldRow(old_start=old_pos, new_start=new_pos, len=gap))
        rows.append(HunkHeaderRow(text=hunk.header()))

        for row_index, row in enumerate(hunk.rows):
            ref = RowRef(hunk_index, row_index)
            kind = row.kind
            old_line = row.old.line_index + 1 if row.old is not None else None
            new_line = row.new.line_index + 1 if row.new is not None else None
            old_segments = list(row.old.segments) if row.old is not None else []
            new_segments = list(row.new.segments) if row.new is not None else []

            if view_mode == ViewMode.inline and kind == DiffRowKind.modified:
                rows.append(CodeRow(ref, DiffRowKind.removed, old_line, None, old_segments, []))
                rows.append(CodeRow(ref, DiffRowKind.added, None, new_line, [], new_segments))
            else:
                rows.append(CodeRow(ref, kind, old_line, new_line, old_segments, new_segments))

        old_pos = hunk.old_start + hunk.old_len
        new_pos = hunk.new_start + hunk.new_len

    tail = min(max(0, len(old_lines) - old_pos), max(0, len(new_lines) - new_pos))
    if tail > 0:
        rows.append(FoldRow(old_start=old_pos, new_start=new_pos, len=tail))
    return rows


@dataclass
class ConflictHeaderRow:
    conflict_index:     int
    ours_branch_name:   str
    theirs_branch_name: str
    has_base:           bool


@dataclass
class ConflictCodeRow:
    """One index-aligned line across the ours/base/theirs panes; None where a pane ran out."""
    kind:   DiffRowKind
    ours:   Optional[str]
    base:   Optional[str]
    theirs: Optional[str]


ConflictRow = Union[ConflictHeaderRow, ConflictCodeRow]


def build_conflict_rows(text: str, conflicts: list[ConflictRegion]) -> list[ConflictRow]:
    """Header plus aligned pane rows per region; every region gets at least one code row."""
    rows: list[ConflictRow] = []
    for conflict_index, region in enumerate(conflicts):
        rows.append(ConflictHeaderRow(
            conflict_index=conflict_index,
            ours_branch_name=region.ours_branch_name,
            theirs_branch_name=region.theirs_branch_name,
            has_base=region.base is not None,
        ))

        ours = Document.from_str(region.ours.extract(text))
        base = Document.from_str(region.base.extract(text) if region.base is not None else "")
        theirs = Document.from_str(region.theirs.extract(text))
        height = max(ours.line_count(), base.line_count(), theirs.line_count(), 1)

        for i in range(height):
            ours_line, theirs_line = ours.line(i), theirs.line(i)
            rows.append(ConflictCodeRow(
                kind=_pane_kind(ours_line, theirs_line),
                ours=ours_line,
                base=base.line(i),
                theirs=theirs_line,
            ))
    return rows


def _pane_kind(ours: Optional[str], theirs: Optional[str]) -> DiffRowKind:
    if ours is None and theirs is None:
        return DiffRowKind.unchanged
    if ours is None:
        return DiffRowKind.added
    if theirs is None:
        return DiffRowKind.removed
    return DiffRowKind.unchanged if ours == theirs else DiffRowKind.modified
