"""
OCR API endpoints - extract measurements from a photographed InBody report.
"""

import logging
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from ..config import settings
from ..models import ExtractionOutcome
from ..ocr import OCROrchestrator, get_ocr_orchestrator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ocr", tags=["ocr"])

ALLOWED_IMAGE_TYPES = {"image/jpeg", "image/png", "image/jpg", "image/webp", "image/gif", "image/bmp", "image/tiff"}


@router.post("/extract", response_model=ExtractionOutcome, response_model_exclude_none=True)
async def extract_from_image(
    image: UploadFile = File(...),
    orchestrator: OCROrchestrator = Depends(get_ocr_orchestrator)
):
    """
    Run the orientation search over an uploaded scan photo.

    A failed extraction is not an HTTP error: the outcome's status tells the
    form to fall back to manual entry.

    Args:
        image: Photo of the scan report

    Returns:
        ExtractionOutcome: Best extraction, or a manual-entry prompt
    """
    if image.content_type not in ALLOWED_IMAGE_TYPES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unsupported image type: {image.content_type}"
        )

    image_data = await image.read()
    if not image_data:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Empty image upload")
    if len(image_data) > settings.max_upload_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"Image exceeds {settings.max_upload_bytes} bytes"
        )

    def log_status(event):
        logger.debug(event.message)

    outcome = await orchestrator.extract(image_data, on_status=log_status)
    logger.info(
        f"OCR extraction for {image.filename}: status={outcome.status.value}, "
        f"fields={outcome.extracted}"
    )
    return outcome
