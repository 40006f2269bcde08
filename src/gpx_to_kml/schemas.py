"""Pydantic schemas for runtime validation of conversion inputs."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LineStyleConfig(BaseModel):
    """Validated KML line style."""

    model_config = ConfigDict(extra="forbid")

    color: str = Field(default="ff0000ff", pattern=r"^[0-9a-fA-F]{8}$")
    width: float = Field(default=4.0, gt=0.0)


class BatchConversionConfig(BaseModel):
    """Validated input for a directory conversion run."""

    model_config = ConfigDict(extra="forbid")

    input_dir: Path
    output_dir: Path
    max_workers: int = Field(ge=1)
    backlog_factor: int = Field(default=2, ge=1)
    line_style: LineStyleConfig = Field(default_factory=LineStyleConfig)

    @field_validator("input_dir", "output_dir")
    @classmethod
    def _validate_directory(cls, value: Path) -> Path:
        if not value.is_dir():
            raise ValueError(f'Not a directory: "{value}"')
        return value

    @property
    def capacity(self) -> int:
        """Maximum number of conversions allowed in flight."""
        return self.max_workers * self.backlog_factor
