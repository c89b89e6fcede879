"""Extraction module - turns OCR text into measurement fields."""

from .field_extractor import FIELD_RULES, FieldRule, extract_fields, normalize_text
from .scoring import score_extraction

__all__ = ['FIELD_RULES', 'FieldRule', 'extract_fields', 'normalize_text', 'score_extraction']
