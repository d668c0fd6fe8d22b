"""Line-level diff grouped into hunks, with intraline segments for replaced lines"""

import logging
from difflib import SequenceMatcher
from typing import Optional, Sequence

from diffview.core.document import Document
from diffview.core.models import (
    DiffHunk,
    DiffModel,
    DiffOptions,
    DiffRow,
    DiffSegment,
    DiffSegmentKind,
    SideLine,
)


logger = logging.getLogger(__name__)

Opcode = tuple[str, int, int, int, int]


def diff_documents(old: Document, new: Document, options: Optional[DiffOptions] = None) -> DiffModel:
    """Diff two documents into hunks of aligned rows.

    Whitespace-insensitive matching only decides which lines pair up; every
    SideLine still carries the original text. Identical inputs give no hunks.
    """
    options = options or DiffOptions()
    old_lines, new_lines = old.lines(), new.lines()
    matcher = _matcher(
        _matching_keys(old_lines, options.ignore_whitespace),
        _matching_keys(new_lines, options.ignore_whitespace),
    )

    hunks: list[DiffHunk] = []
    for group in matcher.get_grouped_opcodes(options.context_lines):
        rows: list[DiffRow] = []
        for op in group:
            rows.extend(_rows_for_op(op, old_lines, new_lines, options.ignore_whitespace))
        if not rows:
            continue

        old_start, old_len = _side_range(rows, "old")
        new_start, new_len = _side_range(rows, "new")
        hunks.append(DiffHunk(
            old_start=old_start,
            old_len=old_len,
            new_start=new_start,
            new_len=new_len,
            rows=rows,
        ))

    logger.debug(
        "diffed %d -> %d lines into %d hunk(s) (context=%d, ignore_whitespace=%s)",
        len(old_lines), len(new_lines), len(hunks), options.context_lines, options.ignore_whitespace,
    )
    return DiffModel(hunks=hunks)


def diff_texts(old_text: str, new_text: str, options: Optional[DiffOptions] = None) -> DiffModel:
    """Convenience wrapper: diff_documents over two raw strings."""
    return diff_documents(Document.from_str(old_text), Document.from_str(new_text), options)


def normalize_line(line: str) -> str:
    """Matching key for whitespace-insensitive diffs: the line with all whitespace removed."""
    return "".join(ch for ch in line if not ch.isspace())


def intraline_segments(old_text: str, new_text: str) -> tuple[list[DiffSegment], list[DiffSegment]]:
    """Character-level segments for a paired old/new line.

    Each side's segments concatenate back to its text. A side with no
    surviving characters falls back to one whole-line removed/added segment.
    """
    old_segments: list[DiffSegment] = []
    new_segments: list[DiffSegment] = []

    for tag, i1, i2, j1, j2 in _matcher(old_text, new_text).get_opcodes():
        if tag == "equal":
            _push_segment(old_segments, DiffSegmentKind.unchanged, old_text[i1:i2])
            _push_segment(new_segments, DiffSegmentKind.unchanged, new_text[j1:j2])
        else:
            _push_segment(old_segments, DiffSegmentKind.removed, old_text[i1:i2])
            _push_segment(new_segments, DiffSegmentKind.added, new_text[j1:j2])

    if not old_segments:
        old_segments.append(DiffSegment(kind=DiffSegmentKind.removed, text=old_text))
    if not new_segments:
        new_segments.append(DiffSegment(kind=DiffSegmentKind.added, text=new_text))
    return old_segments, new_segments


def _matcher(a: Sequence, b: Sequence) -> SequenceMatcher:
    # autojunk would treat frequent lines (blank lines, braces) as noise on long inputs
    return SequenceMatcher(None, a, b, autojunk=False)


def _matching_keys(lines: list[str], ignore_whitespace: bool) -> list[str]:
    if ignore_whitespace:
        return [normalize_line(line) for line in lines]
    return lines


def _get(lines: list[str], index: int) -> Optional[str]:
    return lines[index] if 0 <= index < len(lines) else None


def _side_line(index: int, text: str, kind: DiffSegmentKind) -> SideLine:
    return SideLine(line_index=index, text=text, segments=[DiffSegment(kind=kind, text=text)])


def _push_segment(segments: list[DiffSegment], kind: DiffSegmentKind, text: str) -> None:
    if not text:
        return
    if segments and segments[-1].kind == kind:
        segments[-1].text += text
        return
    segments.append(DiffSegment(kind=kind, text=text))


def _rows_for_op(
    op: Opcode,
    old_lines: list[str],
    new_lines: list[str],
    ignore_whitespace: bool,
    old_offset: int = 0,
    new_offset: int = 0,
    nested: bool = False,
    ) -> list[DiffRow]:
    """Rows for one opcode; offsets shift block-relative opcodes back to document indices.

    A top-level replace gets a secondary block diff; a nested one is paired by index.
    """
    tag, i1, i2, j1, j2 = op
    old_range = range(old_offset + i1, old_offset + i2)
    new_range = range(new_offset + j1, new_offset + j2)
    rows: list[DiffRow] = []

    if tag == "equal":
        for old_index, new_index in zip(old_range, new_range):
            old_text, new_text = _get(old_lines, old_index), _get(new_lines, new_index)
            if old_text is None or new_text is None:
                continue
            rows.append(DiffRow(
                old=_side_line(old_index, old_text, DiffSegmentKind.unchanged),
                new=_side_line(new_index, new_text, DiffSegmentKind.unchanged),
            ))
    elif tag == "delete":
        for old_index in old_range:
            old_text = _get(old_lines, old_index)
            if old_text is not None:
                rows.append(DiffRow(old=_side_line(old_index, old_text, DiffSegmentKind.removed)))
    elif tag == "insert":
        for new_index in new_range:
            new_text = _get(new_lines, new_index)
            if new_text is not None:
                rows.append(DiffRow(new=_side_line(new_index, new_text, DiffSegmentKind.added)))
    elif nested:
        rows = _rows_for_replace_by_index(
            old_range.start, len(old_range), new_range.start, len(new_range), old_lines, new_lines,
        )
    else:
        rows = _rows_for_replace(old_range, new_range, old_lines, new_lines, ignore_whitespace)
    return rows


def _rows_for_replace(
    old_range: range,
    new_range: range,
    old_lines: list[str],
    new_lines: list[str],
    ignore_whitespace: bool,
    ) -> list[DiffRow]:
    """Re-diff a replaced block pair to recover any one-to-one line structure."""
    old_block = old_lines[old_range.start:old_range.stop]
    new_block = new_lines[new_range.start:new_range.stop]
    pairing = (old_range.start, len(old_range), new_range.start, len(new_range), old_lines, new_lines)
    if not old_block or not new_block:
        return _rows_for_replace_by_index(*pairing)

    ops = _matcher(
        _matching_keys(old_block, ignore_whitespace),
        _matching_keys(new_block, ignore_whitespace),
    ).get_opcodes()

    if len(ops) == 1:
        tag, i1, i2, j1, j2 = ops[0]
        if (
            tag == "replace"
            and i2 - i1 == len(old_block)
            and j2 - j1 == len(new_block)
            and len(old_block) > 1
            and len(new_block) > 1
        ):
            logger.debug(
                "reflow at old %d (+%d) / new %d (+%d); pairing by index",
                old_range.start, len(old_block), new_range.start, len(new_block),
            )
            return _rows_for_replace_by_index(*pairing)

    rows: list[DiffRow] = []
    for op in ops:
        rows.extend(_rows_for_op(
            op, old_lines, new_lines, ignore_whitespace,
            old_offset=old_range.start, new_offset=new_range.start, nested=True,
        ))
    return rows


def _rows_for_replace_by_index(
    old_start: int,
    old_len: int,
    new_start: int,
    new_len: int,
    old_lines: list[str],
    new_lines: list[str],
    ) -> list[DiffRow]:
    """Pair old_start+i with new_start+i; the longer block's tail becomes removed/added rows."""
    rows: list[DiffRow] = []
    for offset in range(max(old_len, new_len)):
        old_index, new_index = old_start + offset, new_start + offset
        old_text = _get(old_lines, old_index) if offset < old_len else None
        new_text = _get(new_lines, new_index) if offset < new_len else None

        if old_text is not None and new_text is not None:
            old_segments, new_segments = intraline_segments(old_text, new_text)
            rows.append(DiffRow(
                old=SideLine(line_index=old_index, text=old_text, segments=old_segments),
                new=SideLine(line_index=new_index, text=new_text, segments=new_segments),
            ))
        elif old_text is not None:
            rows.append(DiffRow(old=_side_line(old_index, old_text, DiffSegmentKind.removed)))
        elif new_text is not None:
            rows.append(DiffRow(new=_side_line(new_index, new_text, DiffSegmentKind.added)))
    return rows


def _side_range(rows: list[DiffRow], side: str) -> tuple[int, int]:
    """(start, len) spanned by the side's line indices; (0, 0) when the side is absent."""
    indices = [line.line_index for line in (getattr(row, side) for row in rows) if line is not None]
    if not indices:
        return 0, 0
    low, high = min(indices), max(indices)
    return low, high - low + 1
