"""Plain-text and ANSI rendering of display rows for the terminal"""

from typing import Optional

import typer

from diffview.core.display import (
    CodeRow,
    ConflictCodeRow,
    ConflictHeaderRow,
    ConflictRow,
    DisplayRow,
    FoldRow,
    HunkHeaderRow,
    ViewMode,
)
from diffview.core.models import DiffRowKind, DiffSegment, DiffSegmentKind


ROW_MARKERS = {
    DiffRowKind.unchanged: " ",
    DiffRowKind.added:     "+",
    DiffRowKind.removed:   "-",
    DiffRowKind.modified:  "~",
}

SEGMENT_COLORS = {
    DiffSegmentKind.added:   typer.colors.GREEN,
    DiffSegmentKind.removed: typer.colors.RED,
}


def render_segments(segments: list[DiffSegment], color: bool = False) -> str:
    """Inline markup for a line: [-removed-] and {+added+}, or ANSI colors."""
    out = []
    for seg in segments:
        if seg.kind == DiffSegmentKind.unchanged:
            out.append(seg.text)
        elif color:
            out.append(typer.style(seg.text, fg=SEGMENT_COLORS[seg.kind], bold=True))
        elif seg.kind == DiffSegmentKind.added:
            out.append(f"{{+{seg.text}+}}")
        else:
            out.append(f"[-{seg.text}-]")
    return "".join(out)


def _num(n: Optional[int]) -> str:
    return str(n) if n is not None else ""


def render_display_rows(rows: list[DisplayRow], view_mode: ViewMode = ViewMode.split, color: bool = False) -> list[str]:
    lines = []
    for row in rows:
        if isinstance(row, FoldRow):
            lines.append(f"  ... {row.len} unchanged line(s) ...")
        elif isinstance(row, HunkHeaderRow):
            lines.append(typer.style(row.text, fg=typer.colors.CYAN) if color else row.text)
        elif isinstance(row, CodeRow):
            lines.append(_render_code_row(row, view_mode, color))
    return lines


def _render_code_row(row: CodeRow, view_mode: ViewMode, color: bool) -> str:
    marker = ROW_MARKERS[row.kind]
    left = render_segments(row.old_segments, color)
    right = render_segments(row.new_segments, color)
    if view_mode == ViewMode.inline:
        body = left if row.kind == DiffRowKind.removed else right
        return f"{marker} {_num(row.old_line):>4} {_num(row.new_line):>4} | {body}"
    return f"{marker} {_num(row.old_line):>4} | {_num(row.new_line):>4} | {left} || {right}"


def render_conflict_rows(rows: list[ConflictRow]) -> list[str]:
    lines = []
    for row in rows:
        if isinstance(row, ConflictHeaderRow):
            base = " (with base)" if row.has_base else ""
            lines.append(f"#{row.conflict_index} {row.ours_branch_name} <-> {row.theirs_branch_name}{base}")
        elif isinstance(row, ConflictCodeRow):
            panes = [row.ours, row.base, row.theirs]
            lines.append(f"{ROW_MARKERS[row.kind]} " + " | ".join(p if p is not None else "" for p in panes))
    return lines
