"""
Unit tests for the derived metrics engine.
"""

import pytest

from caliber.core import (
    METRIC_RULES, build_dashboard, chart_series, compute_deltas, compute_goal_progress,
    current_stats, history_rows
)
from caliber.core.metrics import round_half_up
from caliber.models import Goals, Trend
from caliber.storage import SEED_ENTRIES

from conftest import make_entry


def _delta(deltas, metric):
    return next(d for d in deltas if d.metric == metric)


class TestDeltas:
    """Tests for compute_deltas."""

    def test_requires_two_entries(self):
        assert compute_deltas([]) is None
        assert compute_deltas([SEED_ENTRIES[0]]) is None

    def test_one_delta_per_metric(self):
        deltas = compute_deltas(list(SEED_ENTRIES))
        assert [d.metric for d in deltas] == [rule.field for rule in METRIC_RULES]

    def test_visceral_fat_drop_is_favorable(self):
        delta = _delta(compute_deltas(list(SEED_ENTRIES)), "visceral_fat")
        assert delta.trend == Trend.FAVORABLE
        assert delta.magnitude == 1
        assert delta.change == -1
        assert delta.display == "▼ 1"

    def test_score_rise_is_favorable(self):
        delta = _delta(compute_deltas(list(SEED_ENTRIES)), "inbody_score")
        assert delta.trend == Trend.FAVORABLE
        assert delta.magnitude == 1
        assert delta.arrow == "▲"

    def test_seed_deltas(self):
        deltas = compute_deltas(list(SEED_ENTRIES))
        weight = _delta(deltas, "weight")
        assert weight.change == pytest.approx(-0.9)
        assert weight.display == "▼ 0.9"
        muscle = _delta(deltas, "muscle_mass")
        assert muscle.change == pytest.approx(0.2)
        assert muscle.trend == Trend.FAVORABLE
        assert _delta(deltas, "bmi").change == pytest.approx(-0.3)

    def test_equal_values_are_neutral(self):
        entries = [make_entry("2026-01-01"), make_entry("2026-02-01")]
        for delta in compute_deltas(entries):
            assert delta.trend == Trend.NEUTRAL
            assert delta.display == "―"
            assert delta.magnitude == 0

    def test_unfavorable_changes(self):
        entries = [
            make_entry("2026-01-01", weight=72.0, muscle_mass=32.0, inbody_score=71),
            make_entry("2026-02-01", weight=72.4, muscle_mass=31.6, inbody_score=70),
        ]
        deltas = compute_deltas(entries)
        assert _delta(deltas, "weight").trend == Trend.UNFAVORABLE
        assert _delta(deltas, "muscle_mass").trend == Trend.UNFAVORABLE
        assert _delta(deltas, "inbody_score").trend == Trend.UNFAVORABLE

    def test_uses_last_two_entries(self):
        entries = [
            make_entry("2026-01-01", visceral_fat=12),
            make_entry("2026-02-01", visceral_fat=9),
            make_entry("2026-03-01", visceral_fat=10),
        ]
        delta = _delta(compute_deltas(entries), "visceral_fat")
        assert delta.previous == 9
        assert delta.trend == Trend.UNFAVORABLE


class TestGoalProgress:
    """Tests for compute_goal_progress."""

    def test_no_entries(self):
        assert compute_goal_progress([], Goals()) is None

    def test_seed_progress(self):
        progress = compute_goal_progress(list(SEED_ENTRIES), Goals())
        assert progress.fat.direction == "lost"
        assert progress.fat.amount == pytest.approx(1.4)
        assert progress.fat.remaining == pytest.approx(4.9)
        assert progress.fat.display == "1.4 kg lost (4.9 kg to go)"
        assert progress.muscle.direction == "gained"
        assert progress.muscle.amount == pytest.approx(0.2)
        assert progress.muscle.remaining == pytest.approx(4.1)
        assert progress.muscle.display == "0.2 kg gained (4.1 kg to go)"

    def test_single_entry_is_zero_progress(self):
        progress = compute_goal_progress([SEED_ENTRIES[0]], Goals())
        assert progress.fat.amount == 0
        assert progress.fat.remaining == pytest.approx(6.3)
        assert progress.muscle.remaining == pytest.approx(4.3)

    def test_fat_gained_and_muscle_lost(self):
        entries = [
            make_entry("2026-01-01", body_fat_mass=17.0, muscle_mass=31.5),
            make_entry("2026-02-01", body_fat_mass=17.5, muscle_mass=31.2),
        ]
        progress = compute_goal_progress(entries, Goals())
        assert progress.fat.direction == "gained"
        assert progress.fat.remaining is None
        assert progress.fat.display == "0.5 kg gained"
        assert progress.muscle.direction == "lost"
        assert progress.muscle.remaining is None
        assert progress.muscle.display == "0.3 kg lost"

    def test_custom_goals(self):
        goals = Goals(fat_loss=-2.0, muscle_gain=1.0)
        progress = compute_goal_progress(list(SEED_ENTRIES), goals)
        assert progress.fat.remaining == pytest.approx(0.6)
        assert progress.muscle.remaining == pytest.approx(0.8)

    def test_goals_are_immutable(self):
        goals = Goals()
        with pytest.raises(Exception):
            goals.fat_loss = 0


class TestPresentation:
    """Tests for current stats, history rows and chart series."""

    def test_current_stats_empty(self):
        stats = current_stats([])
        assert stats.weight is None
        assert stats.last_updated == "No data yet - add your first entry!"

    def test_current_stats(self):
        stats = current_stats(list(SEED_ENTRIES))
        assert stats.weight == 73.3
        assert stats.inbody_score == 69
        assert stats.last_updated == "Last updated: December 30, 2025"
        assert stats.compared_to == "from Nov"

    def test_current_stats_single_entry_has_no_comparison(self):
        assert current_stats([SEED_ENTRIES[0]]).compared_to is None

    def test_history_rows_most_recent_first(self):
        rows = history_rows(list(SEED_ENTRIES))
        assert [r.date_label for r in rows] == ["Dec 30, 2025", "Nov 16, 2025"]
        assert rows[0].weight == "73.3 kg"
        assert rows[0].body_fat_percent == "23.1%"
        assert rows[1].inbody_score == "68/100"

    def test_chart_series(self):
        entries = list(SEED_ENTRIES) + [make_entry("2026-01-31", waist_hip_ratio=None)]
        series = {(s.chart, s.name): s for s in chart_series(entries, Goals())}
        weight = series[("weight", "Weight")]
        assert [p.label for p in weight.points] == ["Nov 2025", "Dec 2025", "Jan 2026"]
        assert [p.value for p in weight.points] == [74.2, 73.3, 73.0]
        assert {p.value for p in series[("weight", "Target")].points} == {71.3}
        assert [p.value for p in series[("health", "WHR")].points] == [0.97, 0.91, None]
        assert set(series) == {
            ("weight", "Weight"), ("weight", "Target"), ("body_fat", "Body Fat %"),
            ("composition", "Fat Mass"), ("composition", "Muscle"),
            ("health", "Visceral Fat"), ("health", "WHR"),
        }

    def test_chart_series_empty(self):
        assert all(s.points == [] for s in chart_series([], Goals()))

    def test_dashboard(self):
        dashboard = build_dashboard([SEED_ENTRIES[0]], Goals())
        assert dashboard.deltas is None
        assert dashboard.progress is not None
        assert len(dashboard.history) == 1

    def test_round_half_up(self):
        assert round_half_up(0.25, 1) == 0.3
        assert round_half_up(-0.25, 1) == -0.3
        assert round_half_up(2.5, 0) == 3
        assert round_half_up(1.3999999999999986, 1) == 1.4
