"""
OCR Engine Factory - creates the configured OCR engine.
"""

from typing import Optional
from .base import OCREngine
from .tesseract_engine import TesseractEngine


def create_ocr_engine(
    provider: str = "tesseract",
    language: str = "eng",
    tesseract_cmd: Optional[str] = None,
    timeout: float = 0,
) -> OCREngine:
    """
    Create an OCR engine based on provider name.

    Args:
        provider: "tesseract"
        language: Default recognition language
        tesseract_cmd: Optional path to the tesseract binary
        timeout: Per-call recognition timeout in seconds, 0 for no limit

    Returns:
        OCREngine instance

    Raises:
        ValueError: If provider is not supported
    """
    provider = provider.lower()

    if provider == "tesseract":
        return TesseractEngine(language=language, tesseract_cmd=tesseract_cmd, timeout=timeout)
    else:
        raise ValueError(f"Unsupported OCR provider: {provider}. Supported: tesseract")
