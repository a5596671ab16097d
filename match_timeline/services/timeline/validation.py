"""Timeline validation rules.

Checks run over the ordered timeline after every build. The report is logged
and attached to the artifact; a failing timeline is still returned to the
caller, since the renderer is better served by a flagged timeline than none.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Sequence

from .descriptions import minute_label, score_label
from .sorter import is_full_time_marker, is_half_time_marker, timeline_rank
from .types import MarkerKind, PeriodMarker, TimelineItem

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Result of a single validation check."""

    name: str
    passed: bool
    message: str | None = None
    details: list[str] = field(default_factory=list)


@dataclass
class ValidationReport:
    """Complete validation report for a timeline."""

    fixture_id: int | None
    critical_checks: list[ValidationResult] = field(default_factory=list)
    warning_checks: list[ValidationResult] = field(default_factory=list)

    @property
    def critical_failed(self) -> int:
        return sum(1 for c in self.critical_checks if not c.passed)

    @property
    def warnings_count(self) -> int:
        return sum(1 for c in self.warning_checks if not c.passed)

    @property
    def verdict(self) -> str:
        if self.critical_failed > 0:
            return "FAIL"
        if self.warnings_count > 0:
            return "PASS_WITH_WARNINGS"
        return "PASS"

    @property
    def is_valid(self) -> bool:
        return self.critical_failed == 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "fixture_id": self.fixture_id,
            "verdict": self.verdict,
            "critical": {
                "failed": self.critical_failed,
                "checks": [
                    {
                        "name": c.name,
                        "status": "pass" if c.passed else "fail",
                        "message": c.message,
                        "details": c.details[:5],
                    }
                    for c in self.critical_checks
                ],
            },
            "warnings": {
                "count": self.warnings_count,
                "checks": [
                    {
                        "name": c.name,
                        "status": "warn",
                        "message": c.message,
                        "details": c.details[:5],
                    }
                    for c in self.warning_checks
                    if not c.passed
                ],
            },
        }


def _markers(timeline: Sequence[TimelineItem]) -> list[PeriodMarker]:
    return [item for item in timeline if isinstance(item, PeriodMarker)]


# =============================================================================
# CRITICAL CHECKS
# =============================================================================


def check_events_present(timeline: Sequence[TimelineItem], event_count: int) -> ValidationResult:
    """C1: every supplied event must survive into the timeline."""
    real = sum(1 for item in timeline if not item.is_marker)
    if real != event_count:
        return ValidationResult(
            name="C1_events_present",
            passed=False,
            message=f"Timeline has {real} events, expected {event_count}",
        )
    return ValidationResult(
        name="C1_events_present",
        passed=True,
        message=f"Timeline has {len(timeline)} items ({real} events)",
    )


def check_marker_uniqueness(timeline: Sequence[TimelineItem]) -> ValidationResult:
    """C2: at most one marker per (kind, subtype)."""
    counts = Counter((m.kind.value, m.subtype.value) for m in _markers(timeline))
    duplicates = [f"{kind}/{subtype} x{n}" for (kind, subtype), n in counts.items() if n > 1]
    if duplicates:
        return ValidationResult(
            name="C2_marker_uniqueness",
            passed=False,
            message=f"{len(duplicates)} duplicated marker(s)",
            details=duplicates,
        )
    return ValidationResult(name="C2_marker_uniqueness", passed=True)


def check_boundary_scores(timeline: Sequence[TimelineItem]) -> ValidationResult:
    """C3: period start/end snapshots never decrease in match order."""
    boundaries = [
        m for m in reversed(_markers(timeline)) if m.kind is not MarkerKind.PERIOD_SCORE
    ]
    violations: list[str] = []
    for earlier, later in zip(boundaries, boundaries[1:]):
        before, after = earlier.score_snapshot, later.score_snapshot
        if after.home < before.home or after.away < before.away:
            violations.append(
                f"{later.detail} ({score_label(after)}) after "
                f"{earlier.detail} ({score_label(before)})"
            )
    if violations:
        return ValidationResult(
            name="C3_boundary_scores",
            passed=False,
            message=f"Score decreased {len(violations)} times",
            details=violations,
        )
    return ValidationResult(name="C3_boundary_scores", passed=True)


def check_display_order(timeline: Sequence[TimelineItem]) -> ValidationResult:
    """C4: items are in rank order."""
    violations = [
        f"Item {index + 1} ({minute_label(b)}) ranks before item {index} ({minute_label(a)})"
        for index, (a, b) in enumerate(zip(timeline, timeline[1:]))
        if timeline_rank(b) < timeline_rank(a)
    ]
    if violations:
        return ValidationResult(
            name="C4_display_order",
            passed=False,
            message=f"Order violated {len(violations)} times",
            details=violations,
        )
    return ValidationResult(name="C4_display_order", passed=True)


# =============================================================================
# WARNING CHECKS
# =============================================================================


def check_full_time_above_half_time(timeline: Sequence[TimelineItem]) -> ValidationResult:
    """W1: Full Time renders above Half Time."""
    full_time = [i for i, item in enumerate(timeline) if is_full_time_marker(item)]
    half_time = [i for i, item in enumerate(timeline) if is_half_time_marker(item)]
    if full_time and half_time and max(full_time) > min(half_time):
        return ValidationResult(
            name="W1_full_time_above_half_time",
            passed=False,
            message="Full Time marker renders below Half Time",
        )
    return ValidationResult(name="W1_full_time_above_half_time", passed=True)


def check_duplicate_full_time(timeline: Sequence[TimelineItem]) -> ValidationResult:
    """W2: both Full Time rules fired for this match."""
    full_time = [item for item in timeline if is_full_time_marker(item)]
    if len(full_time) > 1:
        return ValidationResult(
            name="W2_duplicate_full_time",
            passed=False,
            message=f"{len(full_time)} Full Time markers in timeline",
            details=[f"{m.kind.value} at {minute_label(m)}" for m in full_time],
        )
    return ValidationResult(name="W2_duplicate_full_time", passed=True)


def validate_timeline(
    timeline: Sequence[TimelineItem],
    event_count: int,
    fixture_id: int | None = None,
) -> ValidationReport:
    report = ValidationReport(fixture_id=fixture_id)
    report.critical_checks = [
        check_events_present(timeline, event_count),
        check_marker_uniqueness(timeline),
        check_boundary_scores(timeline),
        check_display_order(timeline),
    ]
    report.warning_checks = [
        check_full_time_above_half_time(timeline),
        check_duplicate_full_time(timeline),
    ]
    return report


def validate_and_log(
    timeline: Sequence[TimelineItem],
    event_count: int,
    fixture_id: int | None = None,
    log: logging.Logger | None = None,
) -> ValidationReport:
    """Validate the timeline and log the verdict. Never raises."""
    log = log or logger
    report = validate_timeline(timeline, event_count, fixture_id)

    if report.verdict == "FAIL":
        log.error("timeline_validation_failed", extra={"report": report.to_dict()})
    elif report.verdict == "PASS_WITH_WARNINGS":
        log.warning("timeline_validation_warnings", extra={"report": report.to_dict()})
    else:
        log.info(
            "timeline_validation_passed",
            extra={"fixture_id": fixture_id, "verdict": report.verdict},
        )
    return report
