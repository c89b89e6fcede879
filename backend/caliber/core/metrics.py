"""
Derived Metrics Engine - current state, latest-vs-previous deltas, goal
progress and chart series, computed from the date-ordered entry history.

All functions are pure: they take the ordered entries (and goals where
needed) and return response models.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional, Sequence

from ..models.measurement import Goals, MeasurementEntry
from ..models.metrics import (
    ChartPoint, ChartSeries, CurrentStats, Dashboard, FatProgress, GoalProgress,
    HistoryRow, MetricDelta, MuscleProgress, Trend
)


@dataclass(frozen=True)
class MetricRule:
    field: str
    label: str
    lower_is_better: bool
    decimals: int


METRIC_RULES = (
    MetricRule("weight", "Weight", lower_is_better=True, decimals=1),
    MetricRule("body_fat_percent", "Body Fat %", lower_is_better=True, decimals=1),
    MetricRule("muscle_mass", "Muscle Mass", lower_is_better=False, decimals=1),
    MetricRule("visceral_fat", "Visceral Fat", lower_is_better=True, decimals=0),
    MetricRule("bmi", "BMI", lower_is_better=True, decimals=1),
    MetricRule("inbody_score", "InBody Score", lower_is_better=False, decimals=0),
)

ARROW_UP = "▲"
ARROW_DOWN = "▼"
NO_CHANGE = "―"


def round_half_up(value: float, decimals: int) -> float:
    """Round like a display would (0.25 -> 0.3), not banker's rounding."""
    quantum = Decimal(1).scaleb(-decimals)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def _fmt(value: float, decimals: int) -> str:
    return f"{round_half_up(value, decimals):.{decimals}f}"


def compute_deltas(entries: Sequence[MeasurementEntry]) -> Optional[List[MetricDelta]]:
    """
    Compare the latest entry with the one before it.

    Args:
        entries: History in ascending date order

    Returns:
        One MetricDelta per tracked metric, or None with fewer than two entries
    """
    if len(entries) < 2:
        return None

    previous, latest = entries[-2], entries[-1]
    deltas = []
    for rule in METRIC_RULES:
        before = getattr(previous, rule.field)
        after = getattr(latest, rule.field)
        change = after - before

        if change == 0:
            trend = Trend.NEUTRAL
            arrow = NO_CHANGE
        else:
            improved = change < 0 if rule.lower_is_better else change > 0
            trend = Trend.FAVORABLE if improved else Trend.UNFAVORABLE
            arrow = ARROW_UP if change > 0 else ARROW_DOWN

        deltas.append(MetricDelta(
            metric=rule.field,
            label=rule.label,
            latest=after,
            previous=before,
            change=round_half_up(change, rule.decimals),
            magnitude=round_half_up(abs(change), rule.decimals),
            decimals=rule.decimals,
            lower_is_better=rule.lower_is_better,
            trend=trend,
            arrow=arrow,
            display=NO_CHANGE if change == 0 else f"{arrow} {_fmt(abs(change), rule.decimals)}",
        ))
    return deltas


def compute_goal_progress(
    entries: Sequence[MeasurementEntry],
    goals: Goals
) -> Optional[GoalProgress]:
    """
    Fat-loss and muscle-gain progress from the first entry to the latest.

    Args:
        entries: History in ascending date order
        goals: Goal configuration

    Returns:
        GoalProgress, or None when there are no entries
    """
    if not entries:
        return None

    first, latest = entries[0], entries[-1]

    fat_lost = first.body_fat_mass - latest.body_fat_mass
    if fat_lost >= 0:
        remaining = abs(goals.fat_loss + fat_lost)
        fat = FatProgress(
            direction="lost",
            amount=round_half_up(fat_lost, 1),
            remaining=round_half_up(remaining, 1),
            display=f"{_fmt(fat_lost, 1)} kg lost ({_fmt(remaining, 1)} kg to go)",
        )
    else:
        fat = FatProgress(
            direction="gained",
            amount=round_half_up(-fat_lost, 1),
            display=f"{_fmt(-fat_lost, 1)} kg gained",
        )

    muscle_gained = latest.muscle_mass - first.muscle_mass
    if muscle_gained >= 0:
        remaining = goals.muscle_gain - muscle_gained
        muscle = MuscleProgress(
            direction="gained",
            amount=round_half_up(muscle_gained, 1),
            remaining=round_half_up(remaining, 1),
            display=f"{_fmt(muscle_gained, 1)} kg gained ({_fmt(remaining, 1)} kg to go)",
        )
    else:
        muscle = MuscleProgress(
            direction="lost",
            amount=round_half_up(-muscle_gained, 1),
            display=f"{_fmt(-muscle_gained, 1)} kg lost",
        )

    return GoalProgress(fat=fat, muscle=muscle)


def current_stats(entries: Sequence[MeasurementEntry]) -> CurrentStats:
    """Latest reading for the summary cards."""
    if not entries:
        return CurrentStats(last_updated="No data yet - add your first entry!")

    latest = entries[-1]
    d = latest.date
    compared_to = f"from {entries[-2].date:%b}" if len(entries) >= 2 else None
    return CurrentStats(
        date=d,
        weight=round_half_up(latest.weight, 1),
        body_fat_percent=round_half_up(latest.body_fat_percent, 1),
        muscle_mass=round_half_up(latest.muscle_mass, 1),
        visceral_fat=latest.visceral_fat,
        bmi=round_half_up(latest.bmi, 1),
        inbody_score=latest.inbody_score,
        last_updated=f"Last updated: {d:%B} {d.day}, {d.year}",
        compared_to=compared_to,
    )


def history_rows(entries: Sequence[MeasurementEntry]) -> List[HistoryRow]:
    """History table rows, most recent first."""
    return [
        HistoryRow(
            date=e.date,
            date_label=f"{e.date:%b} {e.date.day}, {e.date.year}",
            weight=f"{_fmt(e.weight, 1)} kg",
            body_fat_percent=f"{_fmt(e.body_fat_percent, 1)}%",
            muscle_mass=f"{_fmt(e.muscle_mass, 1)} kg",
            visceral_fat=str(e.visceral_fat),
            inbody_score=f"{e.inbody_score}/100",
        )
        for e in reversed(entries)
    ]


def chart_label(entry: MeasurementEntry) -> str:
    return f"{entry.date:%b %Y}"


def chart_series(entries: Sequence[MeasurementEntry], goals: Goals) -> List[ChartSeries]:
    """
    Time-ordered (label, value) series for each chart.

    Args:
        entries: History in ascending date order
        goals: Goal configuration (for the target-weight line)

    Returns:
        List[ChartSeries]: weight, body_fat, composition and health series
    """
    labels = [chart_label(e) for e in entries]

    def series(chart: str, name: str, values: List[Optional[float]]) -> ChartSeries:
        return ChartSeries(
            chart=chart,
            name=name,
            points=[ChartPoint(label=label, value=value) for label, value in zip(labels, values)],
        )

    return [
        series("weight", "Weight", [e.weight for e in entries]),
        series("weight", "Target", [goals.target_weight for _ in entries]),
        series("body_fat", "Body Fat %", [e.body_fat_percent for e in entries]),
        series("composition", "Fat Mass", [e.body_fat_mass for e in entries]),
        series("composition", "Muscle", [e.muscle_mass for e in entries]),
        series("health", "Visceral Fat", [e.visceral_fat for e in entries]),
        series("health", "WHR", [e.waist_hip_ratio for e in entries]),
    ]


def build_dashboard(entries: Sequence[MeasurementEntry], goals: Goals) -> Dashboard:
    """Everything the summary view shows, in one response."""
    return Dashboard(
        current=current_stats(entries),
        deltas=compute_deltas(entries),
        progress=compute_goal_progress(entries, goals),
        history=history_rows(entries),
    )
