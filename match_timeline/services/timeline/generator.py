"""
Match timeline orchestrator.

Entry point for turning one batch of provider events into the ordered
commentary timeline. Each call:
1. Normalizes raw events (defaults, side resolution, type classification)
2. Synthesizes period markers with score snapshots
3. Sorts events and markers into display order
4. Builds the summary block and validation report

Every call recomputes from the complete event list. Callers polling a live
match re-invoke with the latest full list instead of patching a previous
result.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from ...utils.datetime_utils import now_utc
from .descriptions import item_label, minute_label, score_label
from .markers import synthesize_period_markers
from .normalizer import HomeTeamPredicate, normalize_events
from .score import compute_score_at, credited_side
from .sorter import sort_timeline
from .summary import build_match_summary
from .types import (
    DEFAULT_TIMELINE_VERSION,
    EventType,
    MatchEvent,
    PeriodMarker,
    TimelineArtifactPayload,
    TimelineItem,
)
from .validation import validate_and_log

logger = logging.getLogger(__name__)


# =============================================================================
# TIMELINE ASSEMBLY
# =============================================================================


def build_match_timeline(
    raw_events: Iterable[Mapping[str, Any]] | None,
    *,
    is_home_team: HomeTeamPredicate | None = None,
    home_team: str | None = None,
    log: logging.Logger | None = None,
) -> list[TimelineItem]:
    """Normalize, add period markers, and sort into display order."""
    _, timeline = _assemble(raw_events, is_home_team=is_home_team, home_team=home_team, log=log)
    return timeline


def _assemble(
    raw_events: Iterable[Mapping[str, Any]] | None,
    *,
    is_home_team: HomeTeamPredicate | None,
    home_team: str | None,
    log: logging.Logger | None,
) -> tuple[list[MatchEvent], list[TimelineItem]]:
    events = normalize_events(raw_events, is_home_team=is_home_team, home_team=home_team, log=log)
    markers = synthesize_period_markers(events, log=log)
    return events, sort_timeline([*events, *markers])


def timeline_item_to_dict(
    item: TimelineItem,
    events: list[MatchEvent],
    home_team: str | None = None,
    away_team: str | None = None,
) -> dict[str, Any]:
    """Serialize one item for the renderer.

    ``events`` is the normalized list the timeline was built from; goals use it
    to report the score at their own minute.
    """
    payload: dict[str, Any] = {
        "elapsed": item.elapsed_minutes,
        "extra": item.extra_minutes,
        "minute": minute_label(item),
        "is_marker": item.is_marker,
        "label": item_label(item, home_team, away_team),
    }
    if isinstance(item, PeriodMarker):
        payload.update(
            {
                "item_type": item.kind.value,
                "subtype": item.subtype.value,
                "detail": item.detail,
                "score": item.score_snapshot.to_dict(),
                "score_label": score_label(item.score_snapshot),
            }
        )
        return payload

    payload.update(
        {
            "item_type": item.type.value,
            "raw_type": item.raw_type,
            "detail": item.detail,
            "team": {"id": item.team.id, "name": item.team.name, "side": item.team.side},
            "player": {"id": item.player.id, "name": item.player.name},
            "assist": (
                {"id": item.assist_player.id, "name": item.assist_player.name}
                if item.assist_player
                else None
            ),
            "comments": item.comments,
        }
    )
    if item.type is EventType.GOAL:
        snapshot = compute_score_at(events, item.total_minutes)
        payload["credited_side"] = credited_side(item)
        payload["score"] = snapshot.to_dict()
        payload["score_label"] = score_label(snapshot)
    return payload


# =============================================================================
# ARTIFACT GENERATION
# =============================================================================


def generate_timeline_artifact(
    raw_events: Iterable[Mapping[str, Any]] | None,
    *,
    fixture_id: int | None = None,
    is_home_team: HomeTeamPredicate | None = None,
    home_team: str | None = None,
    away_team: str | None = None,
    timeline_version: str = DEFAULT_TIMELINE_VERSION,
    log: logging.Logger | None = None,
) -> TimelineArtifactPayload:
    """Build the full renderer payload for one batch of events."""
    log = log or logger
    log.info(
        "timeline_generation_started",
        extra={"fixture_id": fixture_id, "timeline_version": timeline_version},
    )

    events, timeline = _assemble(raw_events, is_home_team=is_home_team, home_team=home_team, log=log)

    summary = build_match_summary(events, timeline, home_team=home_team, away_team=away_team)
    report = validate_and_log(timeline, len(events), fixture_id=fixture_id, log=log)

    log.info(
        "timeline_generation_completed",
        extra={
            "fixture_id": fixture_id,
            "event_count": len(events),
            "marker_count": len(timeline) - len(events),
            "verdict": report.verdict,
        },
    )
    return TimelineArtifactPayload(
        fixture_id=fixture_id,
        timeline_version=timeline_version,
        generated_at=now_utc(),
        timeline=[timeline_item_to_dict(item, events, home_team, away_team) for item in timeline],
        summary=summary,
        validation=report.to_dict(),
    )
