"""Vinyl Update - explicit variants for the two kinds of vinyl update.

Invariants:
    - FieldsOnly never touches existing tracks
    - FieldsWithTracks replaces the whole track set (delete all, then insert), never merges
    - An empty tracks list is FieldsWithTracks: it clears the tracks

Design Decisions:
    - Sum type over a presence check buried in the repository: the destructive
      branch is a visible case that routes and tests can match on
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class FieldsOnly:
    """Update scalar vinyl fields, keep tracks."""
    fields: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class FieldsWithTracks:
    """Update scalar vinyl fields and replace all tracks."""
    fields: dict[str, Any] = field(default_factory=dict)
    tracks: list[dict[str, Any]] = field(default_factory=list)


VinylUpdate = FieldsOnly | FieldsWithTracks


def plan_update(
    fields: dict[str, Any], tracks: list[dict[str, Any]] | None,
) -> VinylUpdate:
    """Pick the update variant. tracks=None means the caller did not send tracks."""
    if tracks is None:
        return FieldsOnly(fields=dict(fields))
    return FieldsWithTracks(fields=dict(fields), tracks=list(tracks))


def replaces_tracks(update: VinylUpdate) -> bool:
    match update:
        case FieldsWithTracks():
            return True
        case FieldsOnly():
            return False
