"""
Field Extractor - pulls InBody measurements out of raw OCR text.

Each field owns an ordered list of patterns. Patterns are tried in priority
order and the first one whose captured value passes the field's plausibility
gate wins; the rest are skipped. Fields with no acceptable match are left
out of the result. The gates exist to reject OCR noise, not to validate
manual input.
"""

import datetime as dt
import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple

from ..core.logging_config import truncate_for_log
from ..models.measurement import ExtractedFields

logger = logging.getLogger(__name__)

_FLAGS = re.IGNORECASE


def _float(match: re.Match) -> float:
    return float(match.group(1))


def _int(match: re.Match) -> int:
    return int(match.group(1))


def _day_month_year(match: re.Match) -> dt.date:
    # Raises ValueError for impossible dates such as 31.02.2025
    return dt.date(int(match.group(3)), int(match.group(2)), int(match.group(1)))


def _between(low: float, high: float) -> Callable[[Any], bool]:
    """Exclusive range gate."""
    return lambda value: low < value < high


def _within(low: float, high: float) -> Callable[[Any], bool]:
    """Inclusive range gate."""
    return lambda value: low <= value <= high


def _always(value: Any) -> bool:
    return True


@dataclass(frozen=True)
class FieldRule:
    """Ordered patterns plus the parser and plausibility gate for one field."""
    field: str
    patterns: Tuple[re.Pattern, ...]
    parse: Callable[[re.Match], Any] = _float
    accept: Callable[[Any], bool] = _always

    def extract(self, text: str) -> Optional[Any]:
        for pattern in self.patterns:
            match = pattern.search(text)
            if match is None:
                continue
            try:
                value = self.parse(match)
            except ValueError:
                continue
            if self.accept(value):
                return value
        return None


def _compile(*patterns: str, flags: int = _FLAGS) -> Tuple[re.Pattern, ...]:
    return tuple(re.compile(p, flags) for p in patterns)


FIELD_RULES: Tuple[FieldRule, ...] = (
    # InBody 270 prints the test date as "16.11.2025 08:16"
    FieldRule(
        field="date",
        patterns=_compile(
            r"(?:Test\s*Date|Date)?\s*[/:]?\s*(\d{1,2})[.\-/](\d{1,2})[.\-/](\d{4})",
            r"(\d{2})\.(\d{2})\.(\d{4})\s*\d{2}:\d{2}",
        ),
        parse=_day_month_year,
    ),
    FieldRule(
        field="inbody_score",
        patterns=_compile(
            r"InBody\s*Score\s*(\d{2})",
            r"Score\s*(\d{2})\s*[/\s]*100",
            r"(\d{2})\s*[/\s]*100\s*(?:pts|points)",
        ),
        parse=_int,
    ),
    FieldRule(
        field="weight",
        patterns=(
            re.compile(r"Weight\s*(?:\(kg\))?\s*(\d{2,3}\.?\d*)", _FLAGS),
            re.compile(r"(?:^|\s)(\d{2,3}\.\d)\s*kg\s*(?:Weight|$)", _FLAGS | re.MULTILINE),
            re.compile(r"Body\s*Weight\s*(\d{2,3}\.?\d*)", _FLAGS),
        ),
        accept=_between(30, 200),
    ),
    FieldRule(
        field="muscle_mass",
        patterns=_compile(
            r"SMM\s*(?:\(kg\))?\s*(\d{2,3}\.?\d*)",
            r"Skeletal\s*Muscle\s*Mass\s*(?:\(kg\))?\s*(\d{2,3}\.?\d*)",
            r"SMM\s*[\s\S]{0,20}?(\d{2}\.\d)\s*kg",
        ),
        accept=_between(15, 60),
    ),
    FieldRule(
        field="body_fat_percent",
        patterns=_compile(
            r"PBF\s*(?:\(%\))?\s*(\d{1,2}\.?\d*)",
            r"Percent\s*Body\s*Fat\s*(\d{1,2}\.?\d*)",
            r"Body\s*Fat\s*(?:%|Percent)\s*(\d{1,2}\.?\d*)",
            r"(\d{1,2}\.\d)\s*%?\s*PBF",
        ),
        accept=_between(3, 55),
    ),
    FieldRule(
        field="body_fat_mass",
        patterns=_compile(
            r"Body\s*Fat\s*Mass\s*(?:\(kg\))?\s*(\d{1,2}\.?\d*)",
            r"Fat\s*Mass\s*(\d{1,2}\.?\d*)\s*kg",
            r"BFM\s*(\d{1,2}\.?\d*)",
        ),
        accept=_between(2, 50),
    ),
    FieldRule(
        field="bmi",
        patterns=_compile(
            r"BMI\s*(?:\(kg/m2\))?\s*(\d{1,2}\.?\d*)",
            r"(\d{1,2}\.\d)\s*(?:kg/m|BMI)",
        ),
        accept=_between(12, 45),
    ),
    FieldRule(
        field="visceral_fat",
        patterns=_compile(
            r"Visceral\s*Fat\s*(?:Level)?\s*(\d{1,2})",
            r"VFL\s*(\d{1,2})",
        ),
        parse=_int,
        accept=_within(1, 20),
    ),
    FieldRule(
        field="waist_hip_ratio",
        patterns=_compile(
            r"Waist[-\s]?Hip\s*Ratio\s*(\d+\.?\d*)",
            r"WHR\s*(\d+\.?\d*)",
            r"(\d\.\d{2})\s*(?:Waist|WHR)",
        ),
        accept=_between(0.5, 1.5),
    ),
)


def normalize_text(text: str) -> str:
    """Collapse runs of whitespace. Used for log output only."""
    return re.sub(r"\s+", " ", text).strip()


def extract_fields(text: str) -> ExtractedFields:
    """
    Extract every recognizable measurement from OCR text.

    Args:
        text: Raw recognized text; matching runs against it unmodified

    Returns:
        ExtractedFields with only the fields that were found and plausible
    """
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(f"Normalized OCR text: {truncate_for_log(normalize_text(text))}")

    values = {}
    for rule in FIELD_RULES:
        value = rule.extract(text)
        if value is not None:
            values[rule.field] = value

    fields = ExtractedFields(**values)
    logger.debug(f"Extracted fields: {fields.model_dump(exclude_none=True)}")
    return fields
