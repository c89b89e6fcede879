"""
Derived Metrics Models - deltas, goal progress, current stats and chart series.
"""

import datetime as dt
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class Trend(str, Enum):
    """Whether a change moved a metric toward its goal direction."""
    FAVORABLE = "favorable"
    UNFAVORABLE = "unfavorable"
    NEUTRAL = "neutral"


class MetricDelta(_CamelModel):
    """Latest-minus-previous change for one metric."""
    metric: str
    label: str
    latest: float
    previous: float
    change: float  # rounded to the metric's decimals
    magnitude: float
    decimals: int
    lower_is_better: bool
    trend: Trend
    arrow: str  # "▲", "▼" or "―"
    display: str  # e.g. "▼ 1" or "―"


class FatProgress(_CamelModel):
    """Fat mass change since the first entry."""
    direction: str  # "lost" or "gained"
    amount: float
    remaining: Optional[float] = None  # only while fat is being lost
    display: str


class MuscleProgress(_CamelModel):
    """Muscle mass change since the first entry."""
    direction: str  # "gained" or "lost"
    amount: float
    remaining: Optional[float] = None  # only while muscle is being gained
    display: str


class GoalProgress(_CamelModel):
    fat: FatProgress
    muscle: MuscleProgress


class CurrentStats(_CamelModel):
    """Latest reading, formatted for the summary cards."""
    date: Optional[dt.date] = None
    weight: Optional[float] = None
    body_fat_percent: Optional[float] = None
    muscle_mass: Optional[float] = None
    visceral_fat: Optional[int] = None
    bmi: Optional[float] = None
    inbody_score: Optional[int] = None
    last_updated: str
    compared_to: Optional[str] = None  # "from Nov"


class HistoryRow(_CamelModel):
    """One row of the history table (most recent first)."""
    date: dt.date
    date_label: str
    weight: str
    body_fat_percent: str
    muscle_mass: str
    visceral_fat: str
    inbody_score: str


class ChartPoint(_CamelModel):
    label: str
    value: Optional[float] = None


class ChartSeries(_CamelModel):
    """A time-ordered (label, value) series for the charting collaborator."""
    chart: str
    name: str
    points: List[ChartPoint]


class Dashboard(_CamelModel):
    current: CurrentStats
    deltas: Optional[List[MetricDelta]] = None  # omitted with fewer than two entries
    progress: Optional[GoalProgress] = None  # omitted when there are no entries
    history: List[HistoryRow]
