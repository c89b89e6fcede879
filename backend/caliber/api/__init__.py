"""API module."""

from .entries import router as entries_router
from .ocr import router as ocr_router
from .dashboard import router as dashboard_router

__all__ = ['entries_router', 'ocr_router', 'dashboard_router']
