"""Display labels for commentary rows."""

from __future__ import annotations

from .types import (
    SECOND_HALF_BEGINS,
    EventType,
    MarkerKind,
    MarkerSubtype,
    MatchEvent,
    PeriodMarker,
    ScoreSnapshot,
    TimelineItem,
)


def score_label(snapshot: ScoreSnapshot) -> str:
    """``"1 - 0"`` style score string."""
    return f"{snapshot.home} - {snapshot.away}"


def minute_label(item: TimelineItem) -> str:
    """Clock label: ``"45'"`` or ``"90+3'"``."""
    if item.extra_minutes:
        return f"{item.elapsed_minutes}+{item.extra_minutes}'"
    return f"{item.elapsed_minutes}'"


def describe_event(event: MatchEvent) -> str:
    """Short commentary line for a real event."""
    detail = event.detail
    if event.type is EventType.GOAL:
        if event.is_own_goal:
            return "Own Goal"
        if not detail or detail.lower() == "normal goal":
            return "Goal"
        return f"Goal - {detail}"
    if event.type is EventType.CARD:
        return detail or "Card"
    if event.type is EventType.SUBSTITUTION:
        return "Substitution"
    if event.type is EventType.VAR_REVIEW:
        return f"VAR - {detail}" if detail else "VAR"
    # Unknown provider types still render with whatever text came in.
    parts = [part for part in (event.raw_type, detail) if part]
    return " - ".join(parts) if parts else "Match event"


def marker_label(
    marker: PeriodMarker,
    home_team: str | None = None,
    away_team: str | None = None,
) -> str:
    """Marker text; the second-half kickoff line also carries the score."""
    if marker.subtype is MarkerSubtype.SECOND_HALF_BEGIN and marker.kind is MarkerKind.PERIOD_START:
        snapshot = marker.score_snapshot
        return (
            f"{SECOND_HALF_BEGINS} {home_team or 'Home'} {snapshot.home}, "
            f"{away_team or 'Away'} {snapshot.away}"
        )
    return marker.detail


def item_label(
    item: TimelineItem,
    home_team: str | None = None,
    away_team: str | None = None,
) -> str:
    if isinstance(item, PeriodMarker):
        return marker_label(item, home_team, away_team)
    return describe_event(item)
