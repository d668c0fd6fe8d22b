"""Pure helpers over a computed DiffModel: change counts and hunk headers"""

from diffview.core.models import DiffModel, DiffRowKind


def diff_summary(model: DiffModel) -> dict[str, int]:
    """Return row counts per kind plus the hunk count. Useful for compact change stats."""
    counts = {kind.value: 0 for kind in DiffRowKind}
    for hunk in model.hunks:
        for row in hunk.rows:
            counts[row.kind.value] += 1
    counts["hunks"] = len(model.hunks)
    return counts


def hunk_header(old_start: int, old_len: int, new_start: int, new_len: int) -> str:
    """Unified-diff @@ header from 0-based starts.

    Starts become 1-based except for an empty side, which keeps the raw
    start (e.g. '@@ -0,0 +1,2 @@' for a pure insertion at the top).
    """
    def _start(start: int, length: int) -> int:
        return start if length == 0 else start + 1

    return f"@@ -{_start(old_start, old_len)},{old_len} +{_start(new_start, new_len)},{new_len} @@"
