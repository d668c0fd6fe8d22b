"""Unit tests for core/resolve.py"""

import pytest

from diffview.core.conflict import parse_conflicts
from diffview.core.models import TextRange
from diffview.core.resolve import (
    ConflictResolution,
    ConflictResolutionError,
    resolution_text,
    resolve_all,
    resolve_conflict,
    resolve_index,
)


@pytest.mark.parametrize("resolution,expected", [
    (ConflictResolution.ours,   "before\nours\nafter\n"),
    (ConflictResolution.theirs, "before\ntheirs\nafter\n"),
    (ConflictResolution.both,   "before\nours\ntheirs\nafter\n"),
    (ConflictResolution.base,   "before\nafter\n"),
])
def test_resolve_conflict_without_base(conflict_text, resolution, expected):
    """Each choice splices its content over the whole marker block; a missing base resolves to ''."""
    region = parse_conflicts(conflict_text)[0]
    assert resolve_conflict(conflict_text, region, resolution) == expected


def test_resolve_conflict_takes_base(base_conflict_text):
    region = parse_conflicts(base_conflict_text)[0]
    assert resolve_conflict(base_conflict_text, region, ConflictResolution.base) == "before\nbase line\nafter\n"


def test_resolution_accepts_plain_strings(conflict_text):
    region = parse_conflicts(conflict_text)[0]
    assert resolution_text(conflict_text, region, "theirs") == "theirs\n"


def test_resolve_index_picks_one_conflict():
    text = "<<<<<<< HEAD\na\n=======\nb\n>>>>>>> x\n<<<<<<< HEAD\nc\n=======\nd\n>>>>>>> y\n"
    resolved = resolve_index(text, 1, ConflictResolution.theirs)
    assert resolved == "<<<<<<< HEAD\na\n=======\nb\n>>>>>>> x\nd\n"


def test_resolve_index_out_of_range(conflict_text):
    with pytest.raises(ConflictResolutionError, match="out of range"):
        resolve_index(conflict_text, 3, ConflictResolution.ours)


def test_resolution_error_is_value_error(conflict_text):
    region = parse_conflicts(conflict_text)[0]
    with pytest.raises(ValueError):
        resolve_conflict("short", region, ConflictResolution.ours)


def test_resolve_all_handles_every_conflict():
    text = "<<<<<<< HEAD\na\n=======\nb\n>>>>>>> x\nmid\n<<<<<<< HEAD\nc\n=======\nd\n>>>>>>> y\n"
    assert resolve_all(text, ConflictResolution.ours) == "a\nmid\nc\n"


def test_resolve_all_unwraps_nested_conflicts(nested_conflict_text):
    """The inner block resolves first, which exposes the outer block for the next pass."""
    resolved = resolve_all(nested_conflict_text, ConflictResolution.ours)
    assert resolved == "before\nouter ours\ninner ours\nafter\n"
    assert parse_conflicts(resolved) == []


def test_resolve_all_without_conflicts_is_identity():
    assert resolve_all("plain\n", ConflictResolution.both) == "plain\n"


def test_region_range_checked_against_text(conflict_text):
    region = parse_conflicts(conflict_text)[0]
    region.theirs = TextRange(start=10, end=5)
    with pytest.raises(ConflictResolutionError, match="does not fit"):
        resolution_text(conflict_text, region, ConflictResolution.theirs)
