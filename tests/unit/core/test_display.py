"""Unit tests for core/display.py"""

from diffview.core.conflict import parse_conflicts
from diffview.core.diff import diff_texts
from diffview.core.display import (
    CodeRow,
    ConflictCodeRow,
    ConflictHeaderRow,
    FoldRow,
    HunkHeaderRow,
    ViewMode,
    build_conflict_rows,
    build_display_rows,
)
from diffview.core.document import Document
from diffview.core.models import DiffModel, DiffRowKind
from diffview.core.patch import RowRef


def _rows(old: str, new: str, view_mode: ViewMode = ViewMode.split):
    model = diff_texts(old, new)
    return build_display_rows(model, Document(old).lines(), Document(new).lines(), view_mode)


def test_folds_surround_a_middle_hunk(numbered):
    """Unchanged runs before and after the hunk collapse into fold rows."""
    rows = _rows(numbered(24), numbered(24, {10: "changed"}))
    assert rows[0] == FoldRow(old_start=0, new_start=0, len=7)
    assert rows[1] == HunkHeaderRow(text="@@ -8,7 +8,7 @@")
    code = [r for r in rows if isinstance(r, CodeRow)]
    assert len(code) == 7
    assert code[3].kind == DiffRowKind.modified
    assert (code[3].old_line, code[3].new_line) == (11, 11)
    assert code[3].ref == RowRef(0, 3)
    assert rows[-1] == FoldRow(old_start=14, new_start=14, len=10)


def test_no_leading_fold_when_hunk_starts_at_top():
    rows = _rows("a\nb\n", "A\nb\n")
    assert isinstance(rows[0], HunkHeaderRow)
    assert not any(isinstance(r, FoldRow) for r in rows)


def test_inline_mode_splits_modified_rows():
    """A modified row becomes removed (old side only) followed by added (new side only)."""
    rows = [r for r in _rows("a\nb\nc\n", "a\nB\nc\n", ViewMode.inline) if isinstance(r, CodeRow)]
    assert [r.kind for r in rows] == [
        DiffRowKind.unchanged, DiffRowKind.removed, DiffRowKind.added, DiffRowKind.unchanged,
    ]
    removed, added = rows[1], rows[2]
    assert (removed.old_line, removed.new_line, removed.new_segments) == (2, None, [])
    assert (added.old_line, added.new_line, added.old_segments) == (None, 2, [])
    assert removed.ref == added.ref == RowRef(0, 1)


def test_empty_model_is_one_fold():
    rows = build_display_rows(DiffModel(), ["a", "b"], ["a", "b"])
    assert rows == [FoldRow(old_start=0, new_start=0, len=2)]


def test_conflict_rows(conflict_text):
    rows = build_conflict_rows(conflict_text, parse_conflicts(conflict_text))
    assert rows == [
        ConflictHeaderRow(conflict_index=0, ours_branch_name="HEAD", theirs_branch_name="branch", has_base=False),
        ConflictCodeRow(kind=DiffRowKind.modified, ours="ours", base=None, theirs="theirs"),
    ]


def test_conflict_rows_align_uneven_panes():
    text = "<<<<<<< a\nx\ny\n||||||| b\nx\n=======\nx\n>>>>>>> c\n"
    rows = build_conflict_rows(text, parse_conflicts(text))
    assert rows[0].has_base
    assert [(r.kind, r.ours, r.base, r.theirs) for r in rows[1:]] == [
        (DiffRowKind.unchanged, "x", "x", "x"),
        (DiffRowKind.removed, "y", None, None),
    ]


def test_empty_conflict_still_gets_a_row():
    text = "<<<<<<< a\n=======\n>>>>>>> b\n"
    rows = build_conflict_rows(text, parse_conflicts(text))
    assert rows[1] == ConflictCodeRow(kind=DiffRowKind.unchanged, ours=None, base=None, theirs=None)
