"""
Measurement Models - body-composition scan records, OCR pre-fill data and goals.
"""

import datetime as dt
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# The nine fields an InBody report can populate, in display order.
MEASUREMENT_FIELDS = (
    "date",
    "weight",
    "body_fat_percent",
    "body_fat_mass",
    "muscle_mass",
    "visceral_fat",
    "bmi",
    "inbody_score",
    "waist_hip_ratio",
)


class MeasurementEntry(BaseModel):
    """
    One InBody scan's results. The date is the natural key.

    Entries are immutable; editing a date replaces the whole record.
    """
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True,
                              allow_inf_nan=False)

    date: dt.date
    weight: float = Field(gt=0)  # kg
    body_fat_percent: float = Field(gt=0, lt=100)
    body_fat_mass: float = Field(gt=0)  # kg
    muscle_mass: float = Field(gt=0)  # skeletal muscle mass, kg
    visceral_fat: int  # level
    bmi: float = Field(gt=0)
    inbody_score: int  # conventionally 0-100
    waist_hip_ratio: Optional[float] = None

    def to_storage(self) -> dict:
        """Serialize with camelCase keys and ISO dates."""
        return self.model_dump(mode="json", by_alias=True)


class ExtractedFields(BaseModel):
    """Partial measurement pulled out of OCR text, used to pre-fill the entry form."""
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True,
                              allow_inf_nan=False)

    date: Optional[dt.date] = None
    weight: Optional[float] = None
    body_fat_percent: Optional[float] = None
    body_fat_mass: Optional[float] = None
    muscle_mass: Optional[float] = None
    visceral_fat: Optional[int] = None
    bmi: Optional[float] = None
    inbody_score: Optional[int] = None
    waist_hip_ratio: Optional[float] = None

    def present_fields(self) -> List[str]:
        """Names of the fields that were populated, in display order."""
        return [name for name in MEASUREMENT_FIELDS if getattr(self, name) is not None]


class Goals(BaseModel):
    """Fixed fat-loss / muscle-gain targets and their starting baseline."""
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    target_weight: float = 71.3
    start_weight: float = 73.3
    fat_loss: float = -6.3  # negative: kg of fat to lose
    muscle_gain: float = 4.3
    start_fat_mass: float = 17.0
    start_muscle: float = 31.5
