"""Match summary block rendered above the commentary."""

from __future__ import annotations

from collections import Counter
from typing import Any, Sequence

from .descriptions import minute_label, score_label
from .markers import marker_snapshot
from .score import compute_score_at, credited_side, goal_score_progression
from .sorter import card_severity
from .types import (
    AWAY,
    HOME,
    EventType,
    MarkerSubtype,
    MatchEvent,
    PeriodMarker,
    TimelineItem,
)

_SEVERITY_LABELS = {0: "red", 1: "yellow"}


def _final_score(events: Sequence[MatchEvent]) -> dict[str, Any]:
    latest = max((event.total_minutes for event in events), default=0)
    snapshot = compute_score_at(events, latest)
    return {**snapshot.to_dict(), "label": score_label(snapshot)}


def _discipline(events: Sequence[MatchEvent]) -> dict[str, dict[str, int]]:
    tally = {HOME: {"yellow": 0, "red": 0}, AWAY: {"yellow": 0, "red": 0}}
    for event in events:
        colour = _SEVERITY_LABELS.get(card_severity(event))
        if colour is not None:
            tally[event.team.side][colour] += 1
    return tally


def build_match_summary(
    events: Sequence[MatchEvent],
    timeline: Sequence[TimelineItem],
    *,
    home_team: str | None = None,
    away_team: str | None = None,
) -> dict[str, Any]:
    """Summarize the match from normalized events and the sorted timeline."""
    markers = [item for item in timeline if isinstance(item, PeriodMarker)]
    half_time = marker_snapshot(markers, MarkerSubtype.HALF_TIME)

    goals = [
        {
            "minute": minute_label(goal),
            "side": credited_side(goal),
            "team": goal.team.name,
            "player": goal.player.name,
            "assist": goal.assist_player.name if goal.assist_player else None,
            "detail": goal.detail,
            "own_goal": goal.is_own_goal,
            "score": score_label(snapshot),
        }
        for goal, snapshot in goal_score_progression(events)
    ]

    substitutions = Counter(
        event.team.side for event in events if event.type is EventType.SUBSTITUTION
    )
    event_counts = Counter(event.type.value for event in events)

    return {
        "home_team": home_team,
        "away_team": away_team,
        "final_score": _final_score(events),
        "half_time_score": (
            {**half_time.to_dict(), "label": score_label(half_time)} if half_time else None
        ),
        "goals": goals,
        "discipline": _discipline(events),
        "substitutions": {HOME: substitutions[HOME], AWAY: substitutions[AWAY]},
        "event_counts": {event_type.value: event_counts[event_type.value] for event_type in EventType},
        "marker_count": len(markers),
    }
