"""
Rollcall settings domain model.

Controls where the roster is persisted and where exports are written.
Loaded from config/rollcall.json by the config repository; every field
has a default so the tool works without a config file.
"""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RollcallSettings(BaseModel):
    """
    Domain model for application settings.
    """

    model_config = ConfigDict(extra="ignore")

    db_path: Path = Field(
        default=Path("output/rollcall.db"),
        description="SQLite file holding the persisted roster",
    )
    output_dir: Path = Field(
        default=Path("output"),
        description="Directory that receives exported rosters",
    )
    export_filename: str = Field(
        default="updated_attendance.xlsx",
        description="File name of the exported roster",
    )
    sheet_title: str = Field(
        default="Attendance",
        description="Worksheet title used for exports",
        min_length=1,
        max_length=31,
    )
    roster_key: str = Field(
        default="attendees",
        description="Store key under which the roster is saved",
        min_length=1,
    )
    log_file: Optional[Path] = Field(
        default=None,
        description="Optional log file (always written at DEBUG level)",
    )

    @field_validator("export_filename")
    @classmethod
    def validate_export_filename(cls, v: str) -> str:
        """Exports are always xlsx workbooks."""
        v = v.strip()
        if not v.lower().endswith(".xlsx"):
            raise ValueError("export_filename must end with .xlsx")
        return v

    @field_validator("sheet_title")
    @classmethod
    def validate_sheet_title(cls, v: str) -> str:
        """Excel forbids these characters in sheet titles."""
        bad = set(v) & set("[]:*?/\\")
        if bad:
            raise ValueError(f"sheet_title contains invalid characters: {''.join(sorted(bad))}")
        return v

    @property
    def export_path(self) -> Path:
        return self.output_dir / self.export_filename
