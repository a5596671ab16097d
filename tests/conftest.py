"""pytest configuration and fixtures."""

import os

# Set environment before any package import so Settings picks it up.
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from typing import Any  # noqa: E402

import pytest  # noqa: E402

from match_timeline.services.timeline.normalizer import normalize_event  # noqa: E402

HOME_TEAM = {"id": 33, "name": "Manchester United"}
AWAY_TEAM = {"id": 40, "name": "Liverpool"}


def raw_event(
    minute: int,
    type: str = "Goal",
    detail: str = "Normal Goal",
    side: str = "home",
    extra: int | None = None,
    player: str = "Player",
    player_id: int | None = None,
    **fields: Any,
) -> dict[str, Any]:
    """Raw event in the flat camelCase shape, with an explicit team side."""
    team = HOME_TEAM if side == "home" else AWAY_TEAM
    event: dict[str, Any] = {
        "elapsedMinutes": minute,
        "team": {**team, "side": side},
        "player": {"id": player_id, "name": player},
        "type": type,
        "detail": detail,
    }
    if extra is not None:
        event["extraMinutes"] = extra
    event.update(fields)
    return event


def match_event(minute: int, **kwargs: Any):
    """Normalized ``MatchEvent`` built through ``raw_event``."""
    return normalize_event(raw_event(minute, **kwargs))


@pytest.fixture
def full_match_events() -> list[dict[str, Any]]:
    """A 2-1 match with cards, a substitution and stoppage time at the end."""
    return [
        raw_event(90, type="Card", detail="Yellow Card", side="away", extra=2, player="Van Dijk"),
        raw_event(12, player="Rashford", assist={"id": 7, "name": "Fernandes"}),
        raw_event(38, type="Card", detail="Yellow Card", side="home", player="Casemiro"),
        raw_event(45, type="Goal", detail="Penalty", side="away", extra=2, player="Salah"),
        raw_event(60, type="subst", detail="Substitution 1", side="home", player="Garnacho"),
        raw_event(77, type="Goal", detail="Own Goal", side="away", player="Konate"),
        raw_event(84, type="Var", detail="Goal cancelled", side="home", player="Hojlund"),
    ]
