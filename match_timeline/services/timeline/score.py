"""Score reconstruction from goal events.

The score is never stored. Every query scans the full event list, which is
fine at real match volumes (a few hundred events at most).
"""

from __future__ import annotations

from typing import Sequence

from .types import AWAY, HOME, EventType, MatchEvent, ScoreSnapshot


def credited_side(event: MatchEvent) -> str:
    """Side that receives the goal; own goals count for the opponent."""
    if event.is_own_goal:
        return AWAY if event.team.side == HOME else HOME
    return event.team.side


def compute_score_at(events: Sequence[MatchEvent], time: int) -> ScoreSnapshot:
    """Score once every goal with ``elapsed + extra <= time`` has counted."""
    home = away = 0
    for event in events:
        if event.type is not EventType.GOAL or event.total_minutes > time:
            continue
        if credited_side(event) == HOME:
            home += 1
        else:
            away += 1
    return ScoreSnapshot(home=home, away=away)


def goal_score_progression(
    events: Sequence[MatchEvent],
) -> list[tuple[MatchEvent, ScoreSnapshot]]:
    """Goals in match-clock order, each paired with the score at its minute.

    Goals sharing a minute all report the tally after that minute, the same
    number the commentary shows next to each of them.
    """
    goals = [event for event in events if event.type is EventType.GOAL]
    goals.sort(key=lambda event: (event.total_minutes, event.elapsed_minutes))
    return [(goal, compute_score_at(events, goal.total_minutes)) for goal in goals]
