"""Git conflict-marker parsing: <<<<<<< ours / ||||||| base / ======= / >>>>>>> theirs"""

import logging
from dataclasses import dataclass
from typing import Optional

from diffview.core.models import ConflictRegion, TextRange


logger = logging.getLogger(__name__)

OURS_MARKER = "<<<<<<< "
BASE_MARKER = "||||||| "
SEPARATOR_MARKER = "======="
THEIRS_MARKER = ">>>>>>> "

DEFAULT_OURS_NAME = "HEAD"
DEFAULT_THEIRS_NAME = "Origin"


@dataclass
class _Scan:
    """Offsets collected for the conflict currently being read; None until its marker is seen."""
    conflict_start: Optional[int] = None
    ours_start:     Optional[int] = None
    ours_end:       Optional[int] = None
    ours_name:      Optional[str] = None
    base_start:     Optional[int] = None
    base_end:       Optional[int] = None
    theirs_start:   Optional[int] = None

    @property
    def inside(self) -> bool:
        return self.conflict_start is not None and self.ours_start is not None

    @property
    def closable(self) -> bool:
        return self.inside and self.ours_end is not None and self.theirs_start is not None


def parse_conflicts(text: str) -> list[ConflictRegion]:
    """Return every complete conflict region in text, in document order.

    Offsets index into `text` itself. A second <<<<<<< before the closing
    >>>>>>> restarts the scan, so nested blocks resolve to the innermost one.
    An unlabelled inner marker keeps the ours label already captured.
    Unterminated conflicts are dropped.
    """
    conflicts: list[ConflictRegion] = []
    scan = _Scan()
    length = len(text)
    line_start = 0

    while True:
        newline = text.find("\n", line_start)
        line_end = length if newline == -1 else newline
        next_start = line_end + 1 if newline != -1 else length

        line = text[line_start:line_end]
        if line.endswith("\r"):
            line = line[:-1]

        if line.startswith(OURS_MARKER):
            # offsets restart; an empty label keeps the outer one
            scan = _Scan(
                conflict_start=line_start,
                ours_start=next_start,
                ours_name=line[len(OURS_MARKER):].strip() or scan.ours_name,
            )
        elif line.startswith(BASE_MARKER) and scan.inside:
            if scan.ours_end is None:
                scan.ours_end = line_start
            scan.base_start = next_start
        elif line.startswith(SEPARATOR_MARKER) and scan.inside:
            if scan.ours_end is None:
                scan.ours_end = line_start
            elif scan.base_start is not None:
                scan.base_end = line_start
            scan.theirs_start = next_start
        elif line.startswith(THEIRS_MARKER) and scan.closable:
            theirs_name = line[len(THEIRS_MARKER):].strip()
            conflicts.append(_close(scan, line_start, min(next_start, length), theirs_name))
            scan = _Scan()

        if next_start >= length:
            break
        line_start = next_start

    logger.debug("found %d conflict region(s) in %d chars", len(conflicts), length)
    return conflicts


def _close(scan: _Scan, theirs_end: int, conflict_end: int, theirs_name: str) -> ConflictRegion:
    base = None
    if scan.base_start is not None and scan.base_end is not None:
        base = TextRange(start=scan.base_start, end=scan.base_end)
    return ConflictRegion(
        ours_branch_name=scan.ours_name or DEFAULT_OURS_NAME,
        theirs_branch_name=theirs_name or DEFAULT_THEIRS_NAME,
        range=TextRange(start=scan.conflict_start, end=conflict_end),
        ours=TextRange(start=scan.ours_start, end=scan.ours_end),
        theirs=TextRange(start=scan.theirs_start, end=theirs_end),
        base=base,
    )
