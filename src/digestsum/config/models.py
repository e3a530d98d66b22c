"""Pydantic models describing digestsum configuration."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from digestsum.render.formatter import Style


class OutputConfig(BaseModel):
    """Defaults for compute-mode output."""

    model_config = ConfigDict(extra="forbid")

    style: Style = Style.SFV
    pretty: bool = False

    @field_validator("style", mode="before")
    @classmethod
    def _normalize_style(cls, value: object) -> object:
        """Accept style names in any case."""

        if isinstance(value, str):
            return value.strip().lower()
        return value


class RuntimeConfig(BaseModel):
    """Execution-time settings."""

    model_config = ConfigDict(extra="forbid")

    threads: int = Field(default=0, ge=0)
    log_level: Optional[str] = None


class DigestsumConfig(BaseModel):
    """Root configuration object."""

    model_config = ConfigDict(extra="forbid")

    output: OutputConfig = Field(default_factory=OutputConfig)
    runtime: RuntimeConfig = Field(default_factory=RuntimeConfig)


__all__ = ["DigestsumConfig", "OutputConfig", "RuntimeConfig"]
