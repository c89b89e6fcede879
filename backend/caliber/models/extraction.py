"""
Extraction Models - the outcome of one orientation search over an uploaded image.
"""

from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .measurement import ExtractedFields


MANUAL_ENTRY_MESSAGE = "Could not extract data from image. Please enter values manually."


class ExtractionStatus(str, Enum):
    SUCCESS = "success"
    NO_DATA = "no_data"  # OCR ran but nothing recognizable was found
    ERROR = "error"  # no orientation could be recognized at all


class AttemptResult(BaseModel):
    """Score of a single orientation attempt."""
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    angle: int
    score: int = 0
    error: Optional[str] = None


class ExtractionOutcome(BaseModel):
    """Best-effort extraction result handed back to the entry form."""
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    status: ExtractionStatus
    fields: Optional[ExtractedFields] = None
    extracted: List[str] = []
    score: int = 0
    angle: Optional[int] = None
    text: Optional[str] = None
    attempts: List[AttemptResult] = []
    message: str

    @property
    def succeeded(self) -> bool:
        return self.status is ExtractionStatus.SUCCESS


class OCRStatusEvent(BaseModel):
    """Progress notice for a status display while an extraction is running."""
    model_config = ConfigDict(frozen=True)

    angle: int
    progress: Optional[float] = None  # 0..1 for the active recognition call
    message: str
