"""Core module - derived metrics and logging configuration."""

from .metrics import (
    METRIC_RULES, compute_deltas, compute_goal_progress, current_stats,
    history_rows, chart_series, build_dashboard
)

__all__ = [
    'METRIC_RULES', 'compute_deltas', 'compute_goal_progress', 'current_stats',
    'history_rows', 'chart_series', 'build_dashboard',
]
