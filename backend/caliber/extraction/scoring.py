"""Orientation scoring: how complete is an extraction?"""

from ..models.measurement import ExtractedFields, MEASUREMENT_FIELDS


def score_extraction(fields: ExtractedFields) -> int:
    """Count how many of the nine measurement fields are present."""
    return sum(1 for name in MEASUREMENT_FIELDS if getattr(fields, name) is not None)
