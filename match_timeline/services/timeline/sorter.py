"""Display ordering for real events and period markers.

The timeline renders most-recent-first. All precedence rules are folded into
one rank tuple per item, consumed by a single stable sort:

1. Full Time markers pin to the top.
2. Period-score panels from the second half on sit directly below them, so
   they precede shootout entries (minute > 110).
3. Match clock descending, where the Half Time marker sits between minute 46
   and every minute-45 item regardless of stoppage time.
4. Stoppage minutes descending.
5. Markers before ordinary events.
6. Red cards before yellow cards (a second yellow renders under its red).
7. Identity fields, so equal-minute events never depend on input order.
"""

from __future__ import annotations

from typing import Iterable

from .types import (
    FIRST_HALF_END_MINUTE,
    FULL_TIME,
    EventType,
    MarkerKind,
    MarkerSubtype,
    MatchEvent,
    PeriodMarker,
    TimelineItem,
)

_BAND_FULL_TIME = 0
_BAND_PERIOD_SCORE = 1
_BAND_DEFAULT = 2

_SEVERITY_RED = 0
_SEVERITY_YELLOW = 1
_SEVERITY_NONE = 2

_SUBTYPE_ORDER = {subtype: index for index, subtype in enumerate(MarkerSubtype)}
_KIND_ORDER = {kind: index for index, kind in enumerate(MarkerKind)}

RankTuple = tuple[int, int, int, int, int, int, tuple]


def is_half_time_marker(item: TimelineItem) -> bool:
    return isinstance(item, PeriodMarker) and item.subtype is MarkerSubtype.HALF_TIME and (
        item.kind is not MarkerKind.PERIOD_SCORE
    )


def is_full_time_marker(item: TimelineItem) -> bool:
    return isinstance(item, PeriodMarker) and item.detail == FULL_TIME


def card_severity(item: TimelineItem) -> int:
    """0 for red (including second yellow), 1 for yellow, 2 for anything else."""
    if not isinstance(item, MatchEvent) or item.type is not EventType.CARD:
        return _SEVERITY_NONE
    detail = item.detail.lower()
    if "red" in detail or "second yellow" in detail:
        return _SEVERITY_RED
    if "yellow" in detail:
        return _SEVERITY_YELLOW
    return _SEVERITY_NONE


def _band(item: TimelineItem) -> int:
    if is_full_time_marker(item):
        return _BAND_FULL_TIME
    if (
        isinstance(item, PeriodMarker)
        and item.kind is MarkerKind.PERIOD_SCORE
        and item.elapsed_minutes > FIRST_HALF_END_MINUTE
    ):
        return _BAND_PERIOD_SCORE
    return _BAND_DEFAULT


def _identity(item: TimelineItem) -> tuple:
    if isinstance(item, PeriodMarker):
        return (_SUBTYPE_ORDER[item.subtype], _KIND_ORDER[item.kind], item.detail)
    assist = item.assist_player
    return (
        item.type.value,
        item.detail,
        item.team.side,
        item.team.name,
        item.team.id if item.team.id is not None else -1,
        item.player.name,
        item.player.id if item.player.id is not None else -1,
        assist.name if assist else "",
        assist.id if assist and assist.id is not None else -1,
        item.comments or "",
        item.raw_type,
    )


def timeline_rank(item: TimelineItem) -> RankTuple:
    """Sort key placing ``item`` in most-recent-first display order."""
    return (
        _band(item),
        -item.elapsed_minutes,
        0 if is_half_time_marker(item) else 1,
        -item.extra_minutes,
        0 if item.is_marker else 1,
        card_severity(item),
        _identity(item),
    )


def sort_timeline(items: Iterable[TimelineItem]) -> list[TimelineItem]:
    """Return a new list of ``items`` in display order."""
    return sorted(items, key=timeline_rank)
