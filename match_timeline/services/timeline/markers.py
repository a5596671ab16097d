"""Synthetic period markers.

Every rule below looks at the whole event list (is there anything in the
second half, what is the latest event, ...), so markers are rebuilt from
scratch on each call. Emission order does not matter; ``sorter`` decides
where each marker lands.
"""

from __future__ import annotations

import logging
from typing import Sequence

from .score import compute_score_at
from .types import (
    EXTRA_TIME_END_MINUTE,
    FIRST_HALF_BEGINS,
    FIRST_HALF_END_MINUTE,
    FULL_TIME,
    FULL_TIME_MIN_MINUTE,
    HALF_TIME,
    KICKOFF_MINUTE,
    PENALTY_MARKER,
    PENALTY_SHOOTOUT_BEGINS,
    REGULATION_END_MINUTE,
    SECOND_HALF_BEGINS,
    SECOND_HALF_START_MINUTE,
    MarkerKind,
    MarkerSubtype,
    MatchEvent,
    PeriodMarker,
    ScoreSnapshot,
)

logger = logging.getLogger(__name__)


def _in_first_half(event: MatchEvent) -> bool:
    return KICKOFF_MINUTE <= event.elapsed_minutes <= FIRST_HALF_END_MINUTE


def _in_second_half(event: MatchEvent) -> bool:
    return event.elapsed_minutes > FIRST_HALF_END_MINUTE


def _latest_event(events: Sequence[MatchEvent]) -> MatchEvent | None:
    if not events:
        return None
    return max(events, key=lambda event: (event.total_minutes, event.elapsed_minutes))


def _is_shootout_event(event: MatchEvent) -> bool:
    if event.total_minutes <= EXTRA_TIME_END_MINUTE:
        return False
    text = f"{event.raw_type} {event.type.value} {event.detail}".lower()
    return PENALTY_MARKER in text


def half_time_anchor(events: Sequence[MatchEvent]) -> int:
    """Minute the first half ended: 45 or the last first-half stoppage minute."""
    first_half = [event.total_minutes for event in events if _in_first_half(event)]
    return max([FIRST_HALF_END_MINUTE, *first_half])


def kick_off_marker(events: Sequence[MatchEvent]) -> PeriodMarker | None:
    if not any(_in_first_half(event) for event in events):
        return None
    return PeriodMarker(
        elapsed_minutes=KICKOFF_MINUTE,
        extra_minutes=0,
        subtype=MarkerSubtype.KICK_OFF,
        kind=MarkerKind.PERIOD_START,
        detail=FIRST_HALF_BEGINS,
        score_snapshot=compute_score_at(events, 0),
    )


def half_time_markers(events: Sequence[MatchEvent]) -> list[PeriodMarker]:
    """Half Time plus Second Half begins, sharing one snapshot."""
    if not (
        any(_in_first_half(event) for event in events)
        and any(_in_second_half(event) for event in events)
    ):
        return []

    anchor = half_time_anchor(events)
    snapshot = compute_score_at(events, anchor)
    return [
        PeriodMarker(
            elapsed_minutes=FIRST_HALF_END_MINUTE,
            extra_minutes=anchor - FIRST_HALF_END_MINUTE,
            subtype=MarkerSubtype.HALF_TIME,
            kind=MarkerKind.PERIOD_END,
            detail=HALF_TIME,
            score_snapshot=snapshot,
        ),
        PeriodMarker(
            elapsed_minutes=SECOND_HALF_START_MINUTE,
            extra_minutes=0,
            subtype=MarkerSubtype.SECOND_HALF_BEGIN,
            kind=MarkerKind.PERIOD_START,
            detail=SECOND_HALF_BEGINS,
            score_snapshot=snapshot,
        ),
    ]


def full_time_markers(events: Sequence[MatchEvent]) -> list[PeriodMarker]:
    """Full Time markers anchored at the latest event.

    Two independent rules apply: the period-end marker once the match has run
    past minute 70 into the second half, and a score panel whenever stoppage
    time after minute 90 was recorded. Both can fire for the same match.
    """
    latest = _latest_event(events)
    if latest is None:
        return []

    snapshot = compute_score_at(events, latest.total_minutes)
    markers: list[PeriodMarker] = []

    if latest.total_minutes > FULL_TIME_MIN_MINUTE and any(
        _in_second_half(event) for event in events
    ):
        markers.append(
            PeriodMarker(
                elapsed_minutes=latest.elapsed_minutes,
                extra_minutes=latest.extra_minutes,
                subtype=MarkerSubtype.FULL_TIME,
                kind=MarkerKind.PERIOD_END,
                detail=FULL_TIME,
                score_snapshot=snapshot,
            )
        )

    if any(
        event.elapsed_minutes > REGULATION_END_MINUTE and event.extra_minutes > 0
        for event in events
    ):
        markers.append(
            PeriodMarker(
                elapsed_minutes=latest.elapsed_minutes,
                extra_minutes=latest.extra_minutes,
                subtype=MarkerSubtype.FULL_TIME,
                kind=MarkerKind.PERIOD_SCORE,
                detail=FULL_TIME,
                score_snapshot=snapshot,
            )
        )

    return markers


def shootout_markers(events: Sequence[MatchEvent]) -> list[PeriodMarker]:
    """Penalty Shootout begins, plus its Second Half begins score panel."""
    if not any(_is_shootout_event(event) for event in events):
        return []

    regular = [event for event in events if event.total_minutes <= EXTRA_TIME_END_MINUTE]
    last_regular = _latest_event(regular)
    last_elapsed = last_regular.elapsed_minutes if last_regular else 0
    anchor = max(last_elapsed, EXTRA_TIME_END_MINUTE) - 1

    return [
        PeriodMarker(
            elapsed_minutes=anchor,
            extra_minutes=0,
            subtype=MarkerSubtype.PENALTY_SHOOTOUT_BEGIN,
            kind=MarkerKind.PERIOD_START,
            detail=PENALTY_SHOOTOUT_BEGINS,
            score_snapshot=compute_score_at(events, EXTRA_TIME_END_MINUTE),
        ),
        PeriodMarker(
            elapsed_minutes=anchor - 1,
            extra_minutes=0,
            subtype=MarkerSubtype.SECOND_HALF_BEGIN,
            kind=MarkerKind.PERIOD_SCORE,
            detail=SECOND_HALF_BEGINS,
            score_snapshot=compute_score_at(events, FIRST_HALF_END_MINUTE),
        ),
    ]


def synthesize_period_markers(
    events: Sequence[MatchEvent],
    *,
    log: logging.Logger | None = None,
) -> list[PeriodMarker]:
    """Build every marker warranted by ``events``.

    Rules are independent of each other, so any combination can be emitted.
    """
    log = log or logger
    markers: list[PeriodMarker] = []

    kick_off = kick_off_marker(events)
    if kick_off is not None:
        markers.append(kick_off)
    markers.extend(half_time_markers(events))
    markers.extend(full_time_markers(events))
    markers.extend(shootout_markers(events))

    for marker in markers:
        log.debug(
            "timeline_marker_synthesized",
            extra={
                "subtype": marker.subtype.value,
                "kind": marker.kind.value,
                "minute": marker.elapsed_minutes,
                "extra_minutes": marker.extra_minutes,
                "score": marker.score_snapshot.to_dict(),
            },
        )
    return markers


def marker_snapshot(
    markers: Sequence[PeriodMarker],
    subtype: MarkerSubtype,
) -> ScoreSnapshot | None:
    """Snapshot of the first non-score marker with ``subtype``, if any."""
    for marker in markers:
        if marker.subtype is subtype and marker.kind is not MarkerKind.PERIOD_SCORE:
            return marker.score_snapshot
    return None
