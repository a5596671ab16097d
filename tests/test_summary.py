"""Tests for the match summary block."""

from conftest import raw_event

from match_timeline.services.timeline.markers import synthesize_period_markers
from match_timeline.services.timeline.normalizer import normalize_events
from match_timeline.services.timeline.sorter import sort_timeline
from match_timeline.services.timeline.summary import build_match_summary


def _summary(raw, **kwargs):
    events = normalize_events(raw)
    timeline = sort_timeline([*events, *synthesize_period_markers(events)])
    return build_match_summary(events, timeline, **kwargs)


class TestBuildMatchSummary:
    def test_scores(self, full_match_events):
        summary = _summary(full_match_events, home_team="Manchester United", away_team="Liverpool")
        assert summary["home_team"] == "Manchester United"
        assert summary["final_score"] == {"home": 2, "away": 1, "label": "2 - 1"}
        assert summary["half_time_score"] == {"home": 1, "away": 1, "label": "1 - 1"}

    def test_goals_listed_in_match_order(self, full_match_events):
        goals = _summary(full_match_events)["goals"]
        assert [g["minute"] for g in goals] == ["12'", "45+2'", "77'"]
        assert [g["score"] for g in goals] == ["1 - 0", "1 - 1", "2 - 1"]
        assert goals[0]["assist"] == "Fernandes"
        assert goals[2]["own_goal"] is True
        assert goals[2]["side"] == "home"

    def test_discipline_and_substitutions(self, full_match_events):
        summary = _summary(full_match_events)
        assert summary["discipline"] == {
            "home": {"yellow": 1, "red": 0},
            "away": {"yellow": 1, "red": 0},
        }
        assert summary["substitutions"] == {"home": 1, "away": 0}
        assert summary["event_counts"]["Goal"] == 3
        assert summary["event_counts"]["VarReview"] == 1
        assert summary["event_counts"]["Other"] == 0
        assert summary["marker_count"] == 4

    def test_no_half_time_score_without_second_half(self):
        summary = _summary([raw_event(20)])
        assert summary["half_time_score"] is None
        assert summary["final_score"]["label"] == "1 - 0"

    def test_empty_match(self):
        summary = _summary([])
        assert summary["final_score"]["label"] == "0 - 0"
        assert summary["goals"] == []
        assert summary["marker_count"] == 0
