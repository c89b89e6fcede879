"""OCR module - recognition engines and the orientation-search orchestrator."""

from .base import OCREngine, OCRProgress, OCRResult, OCRError, OCREngineUnavailableError
from .tesseract_engine import TesseractEngine
from .factory import create_ocr_engine
from .orchestrator import OCROrchestrator, get_ocr_orchestrator

__all__ = [
    'OCREngine',
    'OCRProgress',
    'OCRResult',
    'OCRError',
    'OCREngineUnavailableError',
    'TesseractEngine',
    'create_ocr_engine',
    'OCROrchestrator',
    'get_ocr_orchestrator',
]
