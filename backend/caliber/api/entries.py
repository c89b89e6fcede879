"""
Entries API endpoints - list, upsert and delete measurement entries.
"""

import datetime as dt
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from typing import List

from ..models import MeasurementEntry
from ..storage import EntryStore, StorageError, get_entry_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/entries", tags=["entries"])


@router.get("", response_model=List[MeasurementEntry])
async def list_entries(store: EntryStore = Depends(get_entry_store)):
    """
    Get all entries, oldest first.

    Returns:
        List[MeasurementEntry]: Ordered history
    """
    return await store.all()


@router.post("", response_model=List[MeasurementEntry])
async def save_entry(
    entry: MeasurementEntry,
    store: EntryStore = Depends(get_entry_store)
):
    """
    Save a confirmed entry. An existing entry for the same date is replaced.

    Args:
        entry: Fully filled measurement record

    Returns:
        List[MeasurementEntry]: Updated ordered history
    """
    try:
        return await store.upsert(entry)
    except StorageError as e:
        logger.error(f"Failed to save entry for {entry.date.isoformat()}: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.delete("/{entry_date}", response_model=List[MeasurementEntry])
async def delete_entry(
    entry_date: dt.date,
    store: EntryStore = Depends(get_entry_store)
):
    """
    Delete the entry for a date. Unknown dates leave the history unchanged.

    Args:
        entry_date: Date in YYYY-MM-DD format

    Returns:
        List[MeasurementEntry]: Remaining ordered history
    """
    try:
        return await store.delete(entry_date)
    except StorageError as e:
        logger.error(f"Failed to delete entry for {entry_date.isoformat()}: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
