"""Models module."""

from .measurement import MeasurementEntry, ExtractedFields, Goals, MEASUREMENT_FIELDS
from .extraction import (
    ExtractionStatus, AttemptResult, ExtractionOutcome, OCRStatusEvent, MANUAL_ENTRY_MESSAGE
)
from .metrics import (
    Trend, MetricDelta, FatProgress, MuscleProgress, GoalProgress,
    CurrentStats, HistoryRow, ChartPoint, ChartSeries, Dashboard
)

__all__ = [
    'MeasurementEntry', 'ExtractedFields', 'Goals', 'MEASUREMENT_FIELDS',
    'ExtractionStatus', 'AttemptResult', 'ExtractionOutcome', 'OCRStatusEvent', 'MANUAL_ENTRY_MESSAGE',
    'Trend', 'MetricDelta', 'FatProgress', 'MuscleProgress', 'GoalProgress',
    'CurrentStats', 'HistoryRow', 'ChartPoint', 'ChartSeries', 'Dashboard',
]
