"""Timeline item types, match-clock constants, and exceptions."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Union


# =============================================================================
# CONSTANTS
# =============================================================================

# -----------------------------------------------------------------------------
# Match clock (minutes)
# -----------------------------------------------------------------------------
KICKOFF_MINUTE = 1
FIRST_HALF_END_MINUTE = 45
SECOND_HALF_START_MINUTE = 46
FULL_TIME_MIN_MINUTE = 70  # latest event must pass this before Full Time is shown
REGULATION_END_MINUTE = 90
EXTRA_TIME_END_MINUTE = 120

DEFAULT_TIMELINE_VERSION = "v1"

OWN_GOAL_MARKER = "own goal"
PENALTY_MARKER = "penalty"

HOME = "home"
AWAY = "away"


class EventType(str, Enum):
    GOAL = "Goal"
    CARD = "Card"
    SUBSTITUTION = "Substitution"
    VAR_REVIEW = "VarReview"
    OTHER = "Other"


class MarkerSubtype(str, Enum):
    KICK_OFF = "KickOff"
    HALF_TIME = "HalfTime"
    SECOND_HALF_BEGIN = "SecondHalfBegin"
    FULL_TIME = "FullTime"
    PENALTY_SHOOTOUT_BEGIN = "PenaltyShootoutBegin"


class MarkerKind(str, Enum):
    PERIOD_START = "period_start"
    PERIOD_END = "period_end"
    PERIOD_SCORE = "period_score"


# Display labels (marker ``detail``)
FIRST_HALF_BEGINS = "First Half begins"
HALF_TIME = "Half Time"
SECOND_HALF_BEGINS = "Second Half begins"
FULL_TIME = "Full Time"
PENALTY_SHOOTOUT_BEGINS = "Penalty Shootout begins"


# =============================================================================
# DATA CLASSES
# =============================================================================


@dataclass(frozen=True)
class ScoreSnapshot:
    """Goal tally at a point in match time."""

    home: int = 0
    away: int = 0

    def to_dict(self) -> dict[str, int]:
        return {"home": self.home, "away": self.away}


@dataclass(frozen=True)
class TeamRef:
    id: int | None
    name: str
    side: str


@dataclass(frozen=True)
class PlayerRef:
    id: int | None
    name: str


@dataclass(frozen=True)
class MatchEvent:
    """A real event reported by the data provider, after normalization."""

    elapsed_minutes: int
    extra_minutes: int
    team: TeamRef
    type: EventType
    detail: str
    player: PlayerRef
    assist_player: PlayerRef | None = None
    comments: str | None = None
    raw_type: str = ""

    is_marker = False

    @property
    def total_minutes(self) -> int:
        return self.elapsed_minutes + self.extra_minutes

    @property
    def is_own_goal(self) -> bool:
        return self.type is EventType.GOAL and OWN_GOAL_MARKER in self.detail.lower()


@dataclass(frozen=True)
class PeriodMarker:
    """A synthetic phase boundary with the score at that boundary."""

    elapsed_minutes: int
    extra_minutes: int
    subtype: MarkerSubtype
    kind: MarkerKind
    detail: str
    score_snapshot: ScoreSnapshot

    is_marker = True

    @property
    def total_minutes(self) -> int:
        return self.elapsed_minutes + self.extra_minutes


TimelineItem = Union[MatchEvent, PeriodMarker]


@dataclass
class TimelineArtifactPayload:
    """Payload handed to the renderer for one invocation."""

    fixture_id: int | None
    timeline_version: str
    generated_at: datetime
    timeline: list[dict[str, Any]]
    summary: dict[str, Any]
    validation: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {
            "fixture_id": self.fixture_id,
            "timeline_version": self.timeline_version,
            "generated_at": self.generated_at.isoformat(),
            "timeline": self.timeline,
            "summary": self.summary,
            "validation": self.validation,
        }


class TimelineGenerationError(Exception):
    """Raised when a timeline cannot be produced from the supplied input."""

    def __init__(self, message: str, status_code: int = 500) -> None:
        super().__init__(message)
        self.status_code = status_code
