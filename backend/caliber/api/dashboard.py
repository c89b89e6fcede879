"""
Dashboard API endpoints - derived metrics and chart series.
"""

from fastapi import APIRouter, Depends
from typing import List

from ..config import settings
from ..core import build_dashboard, chart_series
from ..models import ChartSeries, Dashboard
from ..storage import EntryStore, get_entry_store

router = APIRouter(tags=["dashboard"])


@router.get("/dashboard", response_model=Dashboard)
async def get_dashboard(store: EntryStore = Depends(get_entry_store)):
    """Current stats, latest-vs-previous deltas, goal progress and history."""
    entries = await store.all()
    return build_dashboard(entries, settings.goals())


@router.get("/charts", response_model=List[ChartSeries])
async def get_charts(store: EntryStore = Depends(get_entry_store)):
    """Chronological series for the weight, body fat, composition and health charts."""
    entries = await store.all()
    return chart_series(entries, settings.goals())
