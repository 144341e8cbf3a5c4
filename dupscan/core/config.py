from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, PositiveInt, field_validator, model_validator

from dupscan.report.types import OutputFormat
from dupscan.scan.hasher import DEFAULT_CHUNK_BYTES
from dupscan.scan.types import GroupKeyMode

SUPPORTED_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class ScanSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    root: Path = Field(default=Path("."))
    output_format: OutputFormat = OutputFormat.CONSOLE
    group_key: GroupKeyMode = GroupKeyMode.NAME_SIZE

    name_only: bool = False
    hash_only_dup_names: bool = False
    list_empty: bool = True

    min_size: NonNegativeInt = 0
    hash_read_chunk_bytes: PositiveInt = DEFAULT_CHUNK_BYTES
    log_level: str = "WARNING"

    @field_validator("root", mode="before")
    @classmethod
    def _normalize_root(cls, value: str | Path) -> Path:
        raw = str(value)
        if not raw.strip():
            raise ValueError("root cannot be blank")
        return Path(raw)

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        normalized = str(value).strip().upper()
        if normalized not in SUPPORTED_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(SUPPORTED_LOG_LEVELS)}")
        return normalized

    @model_validator(mode="after")
    def _validate_mode_combination(self) -> "ScanSettings":
        if self.name_only and self.hash_only_dup_names:
            raise ValueError("hash_only_dup_names cannot be combined with name_only")
        return self
