"""
Tesseract OCR Engine - local recognition through pytesseract.
"""

import asyncio
import io
import logging
from typing import Optional

import pytesseract
from PIL import Image, UnidentifiedImageError

from .base import OCREngine, OCRResult, OCRError, OCREngineUnavailableError, ProgressCallback

logger = logging.getLogger(__name__)


class TesseractEngine(OCREngine):
    """
    OCR engine backed by the tesseract binary.

    pytesseract blocks while the subprocess runs, so recognition is moved
    off the event loop. Tesseract reports no intermediate progress; the
    engine emits a start (0.0) and a completion (1.0) event.
    """

    def __init__(self, language: str = "eng", tesseract_cmd: Optional[str] = None,
                 timeout: float = 0):
        """
        Initialize tesseract engine.

        Args:
            language: Default recognition language
            tesseract_cmd: Optional path to the tesseract binary
            timeout: Seconds before a recognition call is killed, 0 for no limit
        """
        super().__init__(language)
        self.timeout = timeout
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd

    async def recognize(
        self,
        image: bytes,
        language: Optional[str] = None,
        on_progress: Optional[ProgressCallback] = None
    ) -> OCRResult:
        lang = language or self.language
        self._report(on_progress, "recognizing text", 0.0)
        text = await asyncio.to_thread(self._recognize_sync, image, lang)
        self._report(on_progress, "recognizing text", 1.0)
        return OCRResult(text=text, language=lang)

    def _recognize_sync(self, image: bytes, language: str) -> str:
        try:
            with Image.open(io.BytesIO(image)) as img:
                return pytesseract.image_to_string(img, lang=language, timeout=self.timeout)
        except pytesseract.TesseractNotFoundError as e:
            raise OCREngineUnavailableError(f"Tesseract is not installed or not on PATH: {e}") from e
        except UnidentifiedImageError as e:
            raise OCRError(f"Unreadable image: {e}") from e
        except (pytesseract.TesseractError, RuntimeError, OSError) as e:
            # pytesseract raises RuntimeError on timeout
            raise OCRError(f"Tesseract recognition failed: {e}") from e
