"""Services module - image processing used by the OCR pipeline."""

from .image_rotation import (
    ImageRotationService, ImageRotationError, SUPPORTED_ANGLES, get_image_rotation_service
)

__all__ = ['ImageRotationService', 'ImageRotationError', 'SUPPORTED_ANGLES', 'get_image_rotation_service']
