"""Tests for period marker synthesis."""

import logging

from conftest import match_event

from match_timeline.services.timeline.markers import (
    half_time_anchor,
    marker_snapshot,
    synthesize_period_markers,
)
from match_timeline.services.timeline.score import compute_score_at
from match_timeline.services.timeline.types import (
    MarkerKind,
    MarkerSubtype,
    ScoreSnapshot,
)


def _by_subtype(markers, subtype, kind=None):
    return [
        m for m in markers
        if m.subtype is subtype and (kind is None or m.kind is kind)
    ]


class TestKickOffAndHalfTime:
    """First-half gating rules."""

    def test_first_half_only(self):
        """One event at minute 20: kick-off but no half-time markers."""
        markers = synthesize_period_markers([match_event(20)])
        subtypes = [m.subtype for m in markers]
        assert subtypes == [MarkerSubtype.KICK_OFF]
        assert markers[0].elapsed_minutes == 1
        assert markers[0].score_snapshot == ScoreSnapshot(0, 0)

    def test_second_half_only(self):
        """Nothing at or before minute 45: no kick-off or half-time."""
        markers = synthesize_period_markers([match_event(60), match_event(65)])
        assert not _by_subtype(markers, MarkerSubtype.KICK_OFF)
        assert not _by_subtype(markers, MarkerSubtype.HALF_TIME)
        assert not _by_subtype(markers, MarkerSubtype.SECOND_HALF_BEGIN)

    def test_minute_zero_does_not_open_first_half(self):
        markers = synthesize_period_markers([match_event(0), match_event(50)])
        assert not _by_subtype(markers, MarkerSubtype.KICK_OFF)

    def test_both_halves_share_snapshot(self):
        events = [
            match_event(10, side="home"),
            match_event(44, side="away"),
            match_event(55, side="home"),
        ]
        markers = synthesize_period_markers(events)
        (half_time,) = _by_subtype(markers, MarkerSubtype.HALF_TIME)
        (second_half,) = _by_subtype(markers, MarkerSubtype.SECOND_HALF_BEGIN)
        assert half_time.score_snapshot == second_half.score_snapshot == ScoreSnapshot(1, 1)
        assert half_time.kind is MarkerKind.PERIOD_END
        assert second_half.kind is MarkerKind.PERIOD_START
        assert second_half.elapsed_minutes == 46

    def test_half_time_anchor_follows_stoppage_time(self):
        events = [match_event(45, extra=4), match_event(30), match_event(70)]
        assert half_time_anchor(events) == 49
        (half_time,) = _by_subtype(synthesize_period_markers(events), MarkerSubtype.HALF_TIME)
        assert (half_time.elapsed_minutes, half_time.extra_minutes) == (45, 4)
        assert half_time.score_snapshot == compute_score_at(events, 49)

    def test_half_time_anchor_floor_is_45(self):
        assert half_time_anchor([match_event(12), match_event(80)]) == 45


class TestFullTime:
    """Full Time rules."""

    def test_example_full_match(self):
        """Events at 10, 50 and 95+3 produce every regular boundary."""
        events = [
            match_event(10, side="home"),
            match_event(50, side="away"),
            match_event(95, extra=3, side="home"),
        ]
        markers = synthesize_period_markers(events)
        assert _by_subtype(markers, MarkerSubtype.KICK_OFF)
        assert _by_subtype(markers, MarkerSubtype.HALF_TIME)
        assert _by_subtype(markers, MarkerSubtype.SECOND_HALF_BEGIN, MarkerKind.PERIOD_START)
        (full_time,) = _by_subtype(markers, MarkerSubtype.FULL_TIME, MarkerKind.PERIOD_END)
        assert (full_time.elapsed_minutes, full_time.extra_minutes) == (95, 3)
        assert full_time.score_snapshot == compute_score_at(events, 98)

    def test_no_full_time_before_minute_70(self):
        markers = synthesize_period_markers([match_event(20), match_event(65)])
        assert not _by_subtype(markers, MarkerSubtype.FULL_TIME)

    def test_no_full_time_without_second_half(self):
        """Stoppage minutes alone do not make a second half."""
        markers = synthesize_period_markers([match_event(45, extra=30)])
        assert not _by_subtype(markers, MarkerSubtype.FULL_TIME, MarkerKind.PERIOD_END)

    def test_stoppage_after_90_adds_score_panel(self):
        """Both Full Time rules can fire; neither is dropped."""
        events = [match_event(30), match_event(90, extra=4, type="Card", detail="Yellow Card")]
        markers = synthesize_period_markers(events)
        full_time = _by_subtype(markers, MarkerSubtype.FULL_TIME)
        assert [m.kind for m in full_time] == [MarkerKind.PERIOD_END]

        events.append(match_event(92, extra=3))
        markers = synthesize_period_markers(events)
        full_time = _by_subtype(markers, MarkerSubtype.FULL_TIME)
        assert {m.kind for m in full_time} == {MarkerKind.PERIOD_END, MarkerKind.PERIOD_SCORE}
        assert all((m.elapsed_minutes, m.extra_minutes) == (92, 3) for m in full_time)
        assert full_time[0].score_snapshot == full_time[1].score_snapshot


class TestShootout:
    """Penalty shootout markers."""

    def _shootout_events(self):
        return [
            match_event(20, side="home"),
            match_event(88, side="away"),
            match_event(120, extra=2, side="home", detail="Penalty"),
            match_event(120, extra=3, side="away", detail="Missed Penalty", type="Other"),
        ]

    def test_shootout_begin_and_companion(self):
        events = self._shootout_events()
        markers = synthesize_period_markers(events)
        (begin,) = _by_subtype(markers, MarkerSubtype.PENALTY_SHOOTOUT_BEGIN)
        (companion,) = _by_subtype(markers, MarkerSubtype.SECOND_HALF_BEGIN, MarkerKind.PERIOD_SCORE)
        assert begin.elapsed_minutes == 119
        assert companion.elapsed_minutes == 118
        assert begin.score_snapshot == compute_score_at(events, 120)
        assert companion.score_snapshot == compute_score_at(events, 45)

    def test_no_shootout_without_penalty_mention(self):
        events = [match_event(20), match_event(120, extra=2, type="Card", detail="Yellow Card")]
        markers = synthesize_period_markers(events)
        assert not _by_subtype(markers, MarkerSubtype.PENALTY_SHOOTOUT_BEGIN)

    def test_penalty_within_regulation_is_not_shootout(self):
        events = [match_event(20), match_event(118, detail="Penalty")]
        markers = synthesize_period_markers(events)
        assert not _by_subtype(markers, MarkerSubtype.PENALTY_SHOOTOUT_BEGIN)


class TestSynthesisInvariants:
    def test_at_most_one_marker_per_kind_and_subtype(self):
        events = [
            match_event(3),
            match_event(45, extra=2),
            match_event(67),
            match_event(92, extra=1),
            match_event(120, extra=5, detail="Penalty"),
        ]
        markers = synthesize_period_markers(events)
        keys = [(m.kind, m.subtype) for m in markers]
        assert len(keys) == len(set(keys))

    def test_no_events_no_markers(self):
        assert synthesize_period_markers([]) == []

    def test_markers_logged(self, caplog):
        caplog.set_level(logging.DEBUG)
        synthesize_period_markers([match_event(10), match_event(80)])
        logged = [r.subtype for r in caplog.records if r.message == "timeline_marker_synthesized"]
        assert "KickOff" in logged
        assert "FullTime" in logged

    def test_marker_snapshot_ignores_score_panels(self):
        events = [match_event(10), match_event(50, side="away")]
        markers = synthesize_period_markers(events)
        assert marker_snapshot(markers, MarkerSubtype.HALF_TIME) == ScoreSnapshot(1, 0)
        assert marker_snapshot(markers, MarkerSubtype.PENALTY_SHOOTOUT_BEGIN) is None
