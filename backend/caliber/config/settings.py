"""
Configuration Settings.
"""

from pydantic_settings import BaseSettings
from typing import Optional

from ..models.measurement import Goals


class Settings(BaseSettings):
    """Application settings."""

    # App info
    app_name: str = "Caliber"
    app_version: str = "1.0.0"
    debug: bool = False

    # Storage
    local_storage_path: str = "./data"
    entries_storage_key: str = "caliber_entries.json"

    # OCR
    ocr_provider: str = "tesseract"
    ocr_language: str = "eng"
    tesseract_cmd: Optional[str] = None  # uses PATH lookup if not set
    ocr_timeout_seconds: float = 30  # per recognition call, 0 disables
    ocr_early_stop_score: int = 6  # of 9 fields
    ocr_angles: list[int] = [0, 90, 180, 270]
    rotation_jpeg_quality: int = 95
    max_upload_bytes: int = 15 * 1024 * 1024

    # Goals (fixed for the lifetime of the process)
    goal_target_weight: float = 71.3
    goal_start_weight: float = 73.3
    goal_fat_loss: float = -6.3
    goal_muscle_gain: float = 4.3
    goal_start_fat_mass: float = 17.0
    goal_start_muscle: float = 31.5

    # CORS
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:8080",
        "http://127.0.0.1:3000",
    ]

    # Logging configuration
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file_path: str = "./logs/caliber.log"
    log_file_enabled: bool = True
    log_console_enabled: bool = True
    log_json_format: bool = True  # JSON format for files, human-readable for console
    log_file_max_bytes: int = 10 * 1024 * 1024
    log_file_backup_count: int = 5
    log_api_requests: bool = True

    class Config:
        env_file = ".env"
        case_sensitive = False

    def goals(self) -> Goals:
        """Build the immutable goal configuration."""
        return Goals(
            target_weight=self.goal_target_weight,
            start_weight=self.goal_start_weight,
            fat_loss=self.goal_fat_loss,
            muscle_gain=self.goal_muscle_gain,
            start_fat_mass=self.goal_start_fat_mass,
            start_muscle=self.goal_start_muscle,
        )


settings = Settings()
