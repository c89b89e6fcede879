"""
OCR Engine Base - Abstract base for optical character recognition backends.
The engine is a black box: image bytes in, recognized text out.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Optional


@dataclass
class OCRProgress:
    """Incremental progress reported during recognition."""
    status: str  # e.g. "recognizing text"
    progress: float  # 0..1


@dataclass
class OCRResult:
    """Text recognized from one image."""
    text: str
    language: str = "eng"


ProgressCallback = Callable[[OCRProgress], None]


class OCRError(Exception):
    """Recognition failed for a single image."""


class OCREngineUnavailableError(OCRError):
    """The engine cannot run at all (missing binary, unreachable service)."""


class OCREngine(ABC):
    """
    Abstract base class for OCR engines.
    All engines must implement recognize.
    """

    def __init__(self, language: str = "eng"):
        self.language = language

    @abstractmethod
    async def recognize(
        self,
        image: bytes,
        language: Optional[str] = None,
        on_progress: Optional[ProgressCallback] = None
    ) -> OCRResult:
        """
        Recognize text in an image.

        Args:
            image: Encoded image bytes
            language: Language identifier, defaults to the engine's language
            on_progress: Optional callback receiving OCRProgress events

        Returns:
            OCRResult with the recognized text

        Raises:
            OCRError: If recognition fails
            OCREngineUnavailableError: If the engine cannot be used
        """
        pass

    @staticmethod
    def _report(on_progress: Optional[ProgressCallback], status: str, progress: float) -> None:
        if on_progress is not None:
            on_progress(OCRProgress(status=status, progress=progress))
