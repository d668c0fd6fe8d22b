"""Unified patch emission from diff hunks, whole or row-selected"""

from enum import Enum
from typing import NamedTuple, Optional

from diffview.core.models import DiffHunk, DiffModel, DiffRow, DiffRowKind
from diffview.core.utils.diff import hunk_header


class RowRef(NamedTuple):
    """Address of one row within a DiffModel."""
    hunk_index: int
    row_index: int


class PatchUnselectedContext(str, Enum):
    """Which side an unselected change is kept from when building a partial patch."""
    old = "old"
    new = "new"


def file_header(path: str) -> str:
    return f"--- a/{path}\n+++ b/{path}\n"


def unified_patch_for_hunk(path: str, hunk: DiffHunk) -> str:
    """A standalone single-hunk patch, file header included."""
    return file_header(path) + _hunk_section(hunk)


def unified_patch(path: str, model: DiffModel) -> str:
    """All hunks of model under one file header. Empty string if there are no hunks."""
    if not model.hunks:
        return ""
    return file_header(path) + "".join(_hunk_section(h) for h in model.hunks)


def unified_patch_for_selection(
    path: str,
    model: DiffModel,
    selection: set[RowRef],
    unselected_context: PatchUnselectedContext = PatchUnselectedContext.old,
    ) -> Optional[str]:
    """Patch containing only the selected rows' changes.

    Unselected changes are either dropped or turned into context, depending
    on which side the patch will be applied to. Returns None when the
    selection produces no change.
    """
    if not selection:
        return None

    sections = []
    for hunk_index, hunk in enumerate(model.hunks):
        if not any(RowRef(hunk_index, i) in selection for i in range(len(hunk.rows))):
            continue
        section = _selected_section(hunk, hunk_index, selection, PatchUnselectedContext(unselected_context))
        if section is not None:
            sections.append(section)

    if not sections:
        return None
    return file_header(path) + "".join(sections)


def _text(row: DiffRow, prefer_new: bool = False) -> str:
    first, second = (row.new, row.old) if prefer_new else (row.old, row.new)
    line = first or second
    return line.text if line is not None else ""


def _hunk_section(hunk: DiffHunk) -> str:
    lines = [hunk_header(hunk.old_start, hunk.old_len, hunk.new_start, hunk.new_len)]
    for row in hunk.rows:
        kind = row.kind
        if kind == DiffRowKind.unchanged:
            lines.append(f" {_text(row)}")
        elif kind == DiffRowKind.removed:
            lines.append(f"-{row.old.text}")
        elif kind == DiffRowKind.added:
            lines.append(f"+{row.new.text}")
        else:
            lines.append(f"-{row.old.text}")
            lines.append(f"+{row.new.text}")
    return "".join(f"{line}\n" for line in lines)


def _selected_section(
    hunk: DiffHunk,
    hunk_index: int,
    selection: set[RowRef],
    unselected_context: PatchUnselectedContext,
    ) -> Optional[str]:
    has_change = False
    old_len = new_len = 0
    lines: list[str] = []

    for row_index, row in enumerate(hunk.rows):
        selected = RowRef(hunk_index, row_index) in selection
        kind = row.kind

        if kind == DiffRowKind.unchanged:
            lines.append(f" {_text(row)}")
            old_len += 1
            new_len += 1
        elif selected:
            has_change = True
            if row.old is not None:
                lines.append(f"-{row.old.text}")
                old_len += 1
            if row.new is not None:
                lines.append(f"+{row.new.text}")
                new_len += 1
        elif kind == DiffRowKind.modified:
            lines.append(f" {_text(row, prefer_new=unselected_context == PatchUnselectedContext.new)}")
            old_len += 1
            new_len += 1
        elif (kind == DiffRowKind.added) == (unselected_context == PatchUnselectedContext.new):
            lines.append(f" {_text(row)}")
            old_len += 1
            new_len += 1

    if not has_change:
        return None
    header = hunk_header(hunk.old_start, old_len, hunk.new_start, new_len)
    return "".join(f"{line}\n" for line in [header, *lines])
