"""Command-line entry point: build a timeline artifact from a JSON event file."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from .config import settings
from .logging_config import configure_logging
from .services.timeline import TimelineGenerationError, generate_timeline_artifact

logger = logging.getLogger(__name__)


def load_events(path: Path) -> list[Any]:
    """Read events from a JSON file.

    Accepts a bare list, or an API-Football style object with the list under
    ``response`` or ``events``.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise TimelineGenerationError(f"Cannot read {path}: {exc}", status_code=404) from exc
    except UnicodeDecodeError as exc:
        raise TimelineGenerationError(f"{path} is not UTF-8 text: {exc}", status_code=400) from exc
    except json.JSONDecodeError as exc:
        raise TimelineGenerationError(f"{path} is not valid JSON: {exc}", status_code=400) from exc

    if isinstance(data, dict):
        data = data.get("response", data.get("events"))
    if not isinstance(data, list):
        raise TimelineGenerationError(f"{path} does not contain an event list", status_code=400)
    return data


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Build the ordered match commentary timeline from provider events."
    )
    parser.add_argument("path", type=Path, help="JSON file with the match events.")
    parser.add_argument("--fixture-id", type=int, default=None, help="Fixture identifier.")
    parser.add_argument("--home-team", default=None, help="Home team name, used to place events.")
    parser.add_argument("--away-team", default=None, help="Away team name, used in labels.")
    parser.add_argument("--indent", type=int, default=2, help="JSON indent for the output.")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    configure_logging(
        service=f"{settings.service_name}-cli",
        environment=settings.environment,
        log_level=settings.log_level,
    )
    args = _parse_args(argv)

    logger.info(
        "timeline_cli_started",
        extra={"path": str(args.path), "fixture_id": args.fixture_id},
    )
    try:
        raw_events = load_events(args.path)
    except TimelineGenerationError as exc:
        logger.error(
            "timeline_cli_failed",
            extra={
                "path": str(args.path),
                "fixture_id": args.fixture_id,
                "status_code": exc.status_code,
                "error": str(exc),
            },
        )
        raise SystemExit(1) from exc

    artifact = generate_timeline_artifact(
        raw_events,
        fixture_id=args.fixture_id,
        home_team=args.home_team,
        away_team=args.away_team,
    )
    json.dump(artifact.to_dict(), sys.stdout, indent=args.indent, ensure_ascii=False)
    sys.stdout.write("\n")

    logger.info(
        "timeline_cli_completed",
        extra={"fixture_id": args.fixture_id, "items": len(artifact.timeline)},
    )


if __name__ == "__main__":
    main()
