"""
OCR Orchestrator - orientation search over an uploaded scan photo.

For each candidate angle the image is rotated, recognized, run through the
field extractor and scored. The best-scoring extraction wins (earliest angle
on ties) and the search stops early once enough fields were found.
"""

import logging
import uuid
from typing import Callable, Optional, Sequence

from .base import OCREngine, OCRProgress, OCREngineUnavailableError
from .factory import create_ocr_engine
from ..config import settings
from ..core.logging_config import LoggerAdapter
from ..extraction import extract_fields, score_extraction
from ..models.extraction import (
    AttemptResult, ExtractionOutcome, ExtractionStatus, OCRStatusEvent, MANUAL_ENTRY_MESSAGE
)
from ..models.measurement import ExtractedFields
from ..services.image_rotation import ImageRotationService, get_image_rotation_service

logger = logging.getLogger(__name__)

DEFAULT_ANGLES = (0, 90, 180, 270)
DEFAULT_EARLY_STOP_SCORE = 6

StatusCallback = Callable[[OCRStatusEvent], None]


class OCROrchestrator:
    """
    Drives rotation, recognition and extraction across candidate orientations.
    Each call to extract() is self-contained and never raises.
    """

    def __init__(
        self,
        engine: OCREngine,
        rotator: Optional[ImageRotationService] = None,
        language: str = "eng",
        angles: Sequence[int] = DEFAULT_ANGLES,
        early_stop_score: int = DEFAULT_EARLY_STOP_SCORE,
    ):
        """
        Initialize orchestrator.

        Args:
            engine: OCR engine used for recognition
            rotator: Rotation service; defaults to the global instance
            language: Language identifier passed to the engine
            angles: Orientations to try, in order
            early_stop_score: Stop once an attempt finds at least this many fields
        """
        self.engine = engine
        self.rotator = rotator or get_image_rotation_service()
        self.language = language
        self.angles = tuple(angles)
        self.early_stop_score = early_stop_score

    async def extract(
        self,
        image: bytes,
        on_status: Optional[StatusCallback] = None
    ) -> ExtractionOutcome:
        """
        Find the most complete extraction across orientations.

        Args:
            image: Uploaded image bytes
            on_status: Optional callback for status-display events

        Returns:
            ExtractionOutcome: success with the best fields, or a failure
            outcome telling the caller to fall back to manual entry
        """
        log = LoggerAdapter(logger, {"ocr_run": uuid.uuid4().hex[:8]})
        log.info(f"Starting orientation search over {len(image)} bytes, angles={list(self.angles)}")

        best_score = 0
        best_angle: Optional[int] = None
        best_text: Optional[str] = None
        best_fields: Optional[ExtractedFields] = None
        attempts = []

        for angle in self.angles:
            try:
                self._notify(on_status, OCRStatusEvent(
                    angle=angle, message=f"Trying orientation {angle}°..."
                ))
                rotated = await self.rotator.rotate(image, angle)
                result = await self.engine.recognize(
                    rotated,
                    language=self.language,
                    on_progress=self._progress_relay(on_status, angle),
                )
                fields = extract_fields(result.text)
                score = score_extraction(fields)
            except OCREngineUnavailableError as e:
                log.error(f"OCR engine unavailable, aborting orientation search: {e}", exc_info=True)
                attempts.append(AttemptResult(angle=angle, error=str(e)))
                break
            except Exception as e:
                log.warning(
                    f"Rotation {angle}° failed: {e}",
                    exc_info=True,
                    extra={"extra_fields": {"angle": angle, "error": str(e)}}
                )
                attempts.append(AttemptResult(angle=angle, error=str(e)))
                continue

            attempts.append(AttemptResult(angle=angle, score=score))
            log.info(
                f"Rotation {angle}°: score {score}",
                extra={"extra_fields": {"angle": angle, "score": score}}
            )

            if score > best_score:
                best_score = score
                best_angle = angle
                best_text = result.text
                best_fields = fields

            if score >= self.early_stop_score:
                break

        if best_fields is not None and best_score > 0:
            extracted = best_fields.present_fields()
            log.info(f"Best orientation {best_angle}° with {best_score} fields: {extracted}")
            return ExtractionOutcome(
                status=ExtractionStatus.SUCCESS,
                fields=best_fields,
                extracted=extracted,
                score=best_score,
                angle=best_angle,
                text=best_text,
                attempts=attempts,
                message=(
                    f"Extracted {len(extracted)} values from image. "
                    "Please review and fill in any missing fields."
                ),
            )

        # no_data once any angle was recognized without error, even if others failed
        status = (
            ExtractionStatus.NO_DATA
            if any(a.error is None for a in attempts)
            else ExtractionStatus.ERROR
        )
        log.warning(f"No extraction possible ({status.value}) after {len(attempts)} attempts")
        return ExtractionOutcome(status=status, attempts=attempts, message=MANUAL_ENTRY_MESSAGE)

    @staticmethod
    def _notify(on_status: Optional[StatusCallback], event: OCRStatusEvent) -> None:
        if on_status is not None:
            on_status(event)

    def _progress_relay(
        self,
        on_status: Optional[StatusCallback],
        angle: int
    ) -> Optional[Callable[[OCRProgress], None]]:
        if on_status is None:
            return None

        def relay(progress: OCRProgress) -> None:
            if progress.status == "recognizing text":
                on_status(OCRStatusEvent(
                    angle=angle,
                    progress=progress.progress,
                    message=f"Scanning ({angle}°): {round(progress.progress * 100)}%",
                ))

        return relay


# Global orchestrator instance
_ocr_orchestrator: Optional[OCROrchestrator] = None


def get_ocr_orchestrator() -> OCROrchestrator:
    """
    Get the global OCR orchestrator, built from settings on first use.

    Returns:
        OCROrchestrator: Global orchestrator
    """
    global _ocr_orchestrator
    if _ocr_orchestrator is None:
        engine = create_ocr_engine(
            provider=settings.ocr_provider,
            language=settings.ocr_language,
            tesseract_cmd=settings.tesseract_cmd,
            timeout=settings.ocr_timeout_seconds,
        )
        _ocr_orchestrator = OCROrchestrator(
            engine,
            language=settings.ocr_language,
            angles=settings.ocr_angles,
            early_stop_score=settings.ocr_early_stop_score,
        )
    return _ocr_orchestrator
