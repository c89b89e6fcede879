"""
Shared test fixtures and configuration.
"""

import datetime as dt
import os
import tempfile

import pytest

# Set test environment variables before importing app modules
os.environ.setdefault("LOCAL_STORAGE_PATH", tempfile.mkdtemp(prefix="caliber_test_data_"))
os.environ.setdefault("LOG_FILE_ENABLED", "false")
os.environ.setdefault("LOG_API_REQUESTS", "false")

from caliber.models import MeasurementEntry  # noqa: E402
from caliber.storage import EntryStore, LocalStorage  # noqa: E402


# A scan report as OCR typically returns it, one recognizable field per line.
REPORT_LINES = [
    "16.11.2025 08:16",
    "Weight 74.2",
    "PBF 24.8",
    "Body Fat Mass 18.4",
    "SMM 31.3",
    "Visceral Fat Level 8",
    "BMI 22.9",
    "InBody Score 68",
    "WHR 0.97",
]


def report_text(fields: int) -> str:
    """OCR text containing exactly the first `fields` recognizable fields."""
    if fields == 0:
        return "InBody\nBody Composition Analysis\n"
    return "\n".join(REPORT_LINES[:fields])


def make_entry(date: str, **overrides) -> MeasurementEntry:
    values = {
        "date": dt.date.fromisoformat(date),
        "weight": 73.0,
        "body_fat_percent": 23.0,
        "body_fat_mass": 17.0,
        "muscle_mass": 31.5,
        "visceral_fat": 7,
        "bmi": 22.5,
        "inbody_score": 70,
        "waist_hip_ratio": 0.9,
    }
    values.update(overrides)
    return MeasurementEntry(**values)



@pytest.fixture
def storage(tmp_path):
    return LocalStorage(str(tmp_path / "data"))


@pytest.fixture
def store(storage):
    return EntryStore(storage, key="entries.json")
