"""
Match timeline package.

Turns an unordered batch of match events into the ordered commentary
timeline: running score, synthetic period markers, and display order.

Public API:
- build_match_timeline: Ordered events and markers for one batch
- generate_timeline_artifact: Renderer payload (timeline, summary, validation)
- compute_score_at: Score at a point in match time
- TimelineGenerationError: Error type for unusable input

Modules:
- generator.py: Main orchestrator
- normalizer.py: Raw provider events -> MatchEvent
- score.py: Score reconstruction
- markers.py: Period marker synthesis
- sorter.py: Display ordering
- descriptions.py, summary.py: Display text and summary block
- validation.py: Timeline checks
"""

from .generator import (
    build_match_timeline,
    generate_timeline_artifact,
    timeline_item_to_dict,
)
from .markers import synthesize_period_markers
from .normalizer import classify_event_type, normalize_event, normalize_events
from .score import compute_score_at, credited_side, goal_score_progression
from .sorter import sort_timeline, timeline_rank
from .types import (
    DEFAULT_TIMELINE_VERSION,
    EventType,
    MarkerKind,
    MarkerSubtype,
    MatchEvent,
    PeriodMarker,
    PlayerRef,
    ScoreSnapshot,
    TeamRef,
    TimelineArtifactPayload,
    TimelineGenerationError,
    TimelineItem,
)
from .validation import ValidationReport, validate_and_log, validate_timeline

__all__ = [
    # Main API
    "build_match_timeline",
    "generate_timeline_artifact",
    "timeline_item_to_dict",
    "TimelineArtifactPayload",
    "TimelineGenerationError",
    "DEFAULT_TIMELINE_VERSION",
    # Pipeline stages
    "normalize_events",
    "normalize_event",
    "classify_event_type",
    "compute_score_at",
    "credited_side",
    "goal_score_progression",
    "synthesize_period_markers",
    "sort_timeline",
    "timeline_rank",
    # Validation
    "ValidationReport",
    "validate_timeline",
    "validate_and_log",
    # Types
    "EventType",
    "MarkerKind",
    "MarkerSubtype",
    "MatchEvent",
    "PeriodMarker",
    "PlayerRef",
    "ScoreSnapshot",
    "TeamRef",
    "TimelineItem",
]
