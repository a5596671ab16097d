"""Raw provider events → normalized ``MatchEvent`` records.

Accepts the API-Football event shape (``time.elapsed``/``time.extra``,
``assist``) as well as flat camelCase or snake_case keys. Missing optional
fields are defaulted so later stages never see ``None`` where a value is
required. The caller's list and mappings are never mutated.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from ...config import settings
from .types import AWAY, HOME, EventType, MatchEvent, PlayerRef, TeamRef

logger = logging.getLogger(__name__)

HomeTeamPredicate = Callable[[Mapping[str, Any]], bool]

_TYPE_ALIASES: dict[str, EventType] = {
    "goal": EventType.GOAL,
    "card": EventType.CARD,
    "subst": EventType.SUBSTITUTION,
    "substitution": EventType.SUBSTITUTION,
    "var": EventType.VAR_REVIEW,
    "var review": EventType.VAR_REVIEW,
    "varreview": EventType.VAR_REVIEW,
}


def _lenient_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(number):
        return None
    return int(number)


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


class RawParticipant(BaseModel):
    """Player or assist as delivered by the provider."""

    model_config = ConfigDict(extra="ignore")

    id: int | None = None
    name: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> int | None:
        return _lenient_int(value)

    @field_validator("name", mode="before")
    @classmethod
    def _coerce_name(cls, value: Any) -> str | None:
        return _optional_text(value)


class RawTeam(RawParticipant):
    side: str | None = None

    @field_validator("side", mode="before")
    @classmethod
    def _coerce_side(cls, value: Any) -> str | None:
        text = _optional_text(value)
        if text is None:
            return None
        text = text.lower()
        return text if text in (HOME, AWAY) else None


class RawEvent(BaseModel):
    """Lenient view over one raw event."""

    model_config = ConfigDict(extra="ignore")

    elapsed: int | None = Field(
        default=None,
        validation_alias=AliasChoices("elapsedMinutes", "elapsed_minutes", "elapsed"),
    )
    extra: int | None = Field(
        default=None,
        validation_alias=AliasChoices("extraMinutes", "extra_minutes", "extra"),
    )
    team: RawTeam | None = None
    player: RawParticipant | None = None
    assist: RawParticipant | None = Field(
        default=None,
        validation_alias=AliasChoices("assistPlayer", "assist_player", "assist"),
    )
    type: str | None = None
    detail: str | None = None
    comments: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _lift_time_block(cls, data: Any) -> Any:
        # API-Football nests the clock under "time"; copy rather than mutate.
        if isinstance(data, Mapping) and isinstance(data.get("time"), Mapping):
            clock = data["time"]
            data = dict(data)
            data.setdefault("elapsed", clock.get("elapsed"))
            data.setdefault("extra", clock.get("extra"))
        return data

    @field_validator("elapsed", "extra", mode="before")
    @classmethod
    def _coerce_minutes(cls, value: Any) -> int | None:
        return _lenient_int(value)

    @property
    def clock_defaulted(self) -> bool:
        """True when the elapsed minute was unusable or a minute was negative."""
        return self.elapsed is None or self.elapsed < 0 or (self.extra or 0) < 0

    @field_validator("team", "player", "assist", mode="before")
    @classmethod
    def _drop_non_mappings(cls, value: Any) -> Any:
        return value if isinstance(value, Mapping) else None

    @field_validator("type", "detail", "comments", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str | None:
        return _optional_text(value)


def classify_event_type(raw_type: str | None) -> EventType:
    """Map a provider type string onto ``EventType``; unknown values are Other."""
    if not raw_type:
        return EventType.OTHER
    return _TYPE_ALIASES.get(raw_type.strip().lower(), EventType.OTHER)


def _resolve_side(
    raw: Mapping[str, Any],
    parsed: RawEvent,
    is_home_team: HomeTeamPredicate | None,
    home_team: str | None,
) -> str:
    if parsed.team is not None and parsed.team.side:
        return parsed.team.side
    if is_home_team is not None:
        return HOME if is_home_team(raw) else AWAY
    team_name = parsed.team.name if parsed.team else None
    if home_team and team_name and team_name.casefold() == home_team.strip().casefold():
        return HOME
    return AWAY


def normalize_event(
    raw: Mapping[str, Any],
    *,
    is_home_team: HomeTeamPredicate | None = None,
    home_team: str | None = None,
    unknown_player: str | None = None,
    unknown_team: str | None = None,
) -> MatchEvent:
    """Normalize one raw event. Raises ``ValidationError`` only for non-mappings."""
    return _build_event(
        raw,
        RawEvent.model_validate(raw),
        is_home_team=is_home_team,
        home_team=home_team,
        unknown_player=unknown_player,
        unknown_team=unknown_team,
    )


def _build_event(
    raw: Mapping[str, Any],
    parsed: RawEvent,
    *,
    is_home_team: HomeTeamPredicate | None,
    home_team: str | None,
    unknown_player: str | None = None,
    unknown_team: str | None = None,
) -> MatchEvent:
    unknown_player = unknown_player or settings.unknown_player_label
    unknown_team = unknown_team or settings.unknown_team_label

    team = parsed.team or RawTeam()
    player = parsed.player or RawParticipant()
    assist = None
    if parsed.assist is not None and (parsed.assist.name or parsed.assist.id is not None):
        assist = PlayerRef(id=parsed.assist.id, name=parsed.assist.name or unknown_player)

    return MatchEvent(
        elapsed_minutes=max(0, parsed.elapsed or 0),
        extra_minutes=max(0, parsed.extra or 0),
        team=TeamRef(
            id=team.id,
            name=team.name or unknown_team,
            side=_resolve_side(raw, parsed, is_home_team, home_team),
        ),
        type=classify_event_type(parsed.type),
        detail=parsed.detail or "",
        player=PlayerRef(id=player.id, name=player.name or unknown_player),
        assist_player=assist,
        comments=parsed.comments,
        raw_type=parsed.type or "",
    )


def normalize_events(
    raw_events: Iterable[Mapping[str, Any]] | None,
    *,
    is_home_team: HomeTeamPredicate | None = None,
    home_team: str | None = None,
    log: logging.Logger | None = None,
) -> list[MatchEvent]:
    """Normalize a batch of raw events into a new list.

    Items that are not mappings cannot be interpreted and are skipped with a
    warning; every mapping yields exactly one ``MatchEvent``.
    """
    log = log or logger
    events: list[MatchEvent] = []
    for index, raw in enumerate(raw_events or ()):
        if not isinstance(raw, Mapping):
            log.warning(
                "timeline_event_skipped",
                extra={"index": index, "reason": f"expected mapping, got {type(raw).__name__}"},
            )
            continue
        try:
            parsed = RawEvent.model_validate(raw)
        except ValidationError as exc:
            log.warning(
                "timeline_event_skipped",
                extra={"index": index, "reason": str(exc)},
            )
            continue
        if parsed.clock_defaulted:
            log.debug(
                "timeline_event_minutes_defaulted",
                extra={"index": index, "elapsed": parsed.elapsed, "extra_minutes": parsed.extra},
            )
        event = _build_event(raw, parsed, is_home_team=is_home_team, home_team=home_team)
        if event.type is EventType.OTHER and event.raw_type:
            log.debug(
                "timeline_event_unclassified",
                extra={"index": index, "raw_type": event.raw_type},
            )
        events.append(event)

    log.debug("timeline_events_normalized", extra={"count": len(events)})
    return events
