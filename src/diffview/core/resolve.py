"""Conflict resolution: replace a conflict region with one of its sides"""

import logging
from enum import Enum

from diffview.core.conflict import parse_conflicts
from diffview.core.models import ConflictRegion


logger = logging.getLogger(__name__)


class ConflictResolution(str, Enum):
    ours = "ours"
    theirs = "theirs"
    base = "base"
    both = "both"


class ConflictResolutionError(ValueError):
    """Raised when a region cannot be applied to the given text."""


def resolution_text(text: str, region: ConflictRegion, resolution: ConflictResolution) -> str:
    """Replacement content for region. 'base' without a base section resolves to ''."""
    _check_region(text, region)
    resolution = ConflictResolution(resolution)
    if resolution == ConflictResolution.ours:
        return region.ours.extract(text)
    if resolution == ConflictResolution.theirs:
        return region.theirs.extract(text)
    if resolution == ConflictResolution.base:
        return region.base.extract(text) if region.base is not None else ""
    return region.ours.extract(text) + region.theirs.extract(text)


def resolve_conflict(text: str, region: ConflictRegion, resolution: ConflictResolution) -> str:
    """Return text with region.range (markers included) replaced by the chosen side."""
    replacement = resolution_text(text, region, resolution)
    return text[:region.range.start] + replacement + text[region.range.end:]


def resolve_index(text: str, index: int, resolution: ConflictResolution) -> str:
    """Resolve the index-th conflict parsed from text."""
    conflicts = parse_conflicts(text)
    if not 0 <= index < len(conflicts):
        raise ConflictResolutionError(
            f"Conflict index {index} out of range ({len(conflicts)} conflict(s) found)"
        )
    return resolve_conflict(text, conflicts[index], resolution)


def resolve_all(text: str, resolution: ConflictResolution) -> str:
    """Resolve every conflict with the same choice, re-parsing after each splice."""
    resolved = 0
    conflicts = parse_conflicts(text)
    while conflicts:
        text = resolve_conflict(text, conflicts[0], resolution)
        resolved += 1
        conflicts = parse_conflicts(text)
    logger.debug("resolved %d conflict(s) with %s", resolved, ConflictResolution(resolution).value)
    return text


def _check_region(text: str, region: ConflictRegion) -> None:
    ranges = [region.range, region.ours, region.theirs]
    if region.base is not None:
        ranges.append(region.base)
    for r in ranges:
        if not 0 <= r.start <= r.end <= len(text):
            raise ConflictResolutionError(
                f"Range {r.start}..{r.end} does not fit text of length {len(text)}"
            )
