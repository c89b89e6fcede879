"""
Image Rotation Service - re-orients photographed scan reports for OCR.
"""

import asyncio
import io
import logging
from typing import Optional

from PIL import Image, UnidentifiedImageError

from ..config import settings

logger = logging.getLogger(__name__)

# Clockwise rotations expressed as lossless transposes (no resampling, no cropping).
_TRANSPOSE = {
    90: Image.Transpose.ROTATE_270,
    180: Image.Transpose.ROTATE_180,
    270: Image.Transpose.ROTATE_90,
}

SUPPORTED_ANGLES = (0, 90, 180, 270)


class ImageRotationError(Exception):
    """Raised when an image cannot be decoded or re-encoded."""


class ImageRotationService:
    """
    Rotates images clockwise about their center by multiples of 90 degrees.
    The canvas is resized to fit, so 90/270 swap width and height.
    """

    def __init__(self, jpeg_quality: Optional[int] = None):
        """
        Initialize rotation service.

        Args:
            jpeg_quality: Re-encode quality. If not provided, uses settings.rotation_jpeg_quality
        """
        if jpeg_quality is None:
            jpeg_quality = settings.rotation_jpeg_quality
        self.jpeg_quality = jpeg_quality

    async def rotate(self, image: bytes, degrees: int) -> bytes:
        """
        Rotate an encoded image.

        Args:
            image: Encoded image bytes (JPEG, PNG, ...)
            degrees: One of 0, 90, 180, 270

        Returns:
            bytes: JPEG-encoded rotated image; the input itself for 0 degrees

        Raises:
            ValueError: If the angle is not supported
            ImageRotationError: If the image cannot be decoded or encoded
        """
        if degrees not in SUPPORTED_ANGLES:
            raise ValueError(f"Unsupported rotation angle: {degrees}")

        if degrees == 0:
            return image

        return await asyncio.to_thread(self._rotate_sync, image, degrees)

    def _rotate_sync(self, image: bytes, degrees: int) -> bytes:
        try:
            with Image.open(io.BytesIO(image)) as img:
                rotated = img.transpose(_TRANSPOSE[degrees])
                if rotated.mode not in ("RGB", "L"):
                    rotated = rotated.convert("RGB")

                buffer = io.BytesIO()
                rotated.save(buffer, format="JPEG", quality=self.jpeg_quality)
        except (UnidentifiedImageError, OSError) as e:
            raise ImageRotationError(f"Could not rotate image by {degrees}°: {e}") from e

        logger.debug(f"Rotated image by {degrees}° ({len(image)} -> {buffer.tell()} bytes)")
        return buffer.getvalue()


# Global rotation service instance
_rotation_service: Optional[ImageRotationService] = None


def get_image_rotation_service() -> ImageRotationService:
    """
    Get the global image rotation service instance.

    Returns:
        ImageRotationService: Global rotation service
    """
    global _rotation_service
    if _rotation_service is None:
        _rotation_service = ImageRotationService()
    return _rotation_service
