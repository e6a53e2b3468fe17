"""Configuration models and loader for the dwell zoom toolkit."""
from __future__ import annotations

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, model_validator

from .dwell import DWELL_MOVE_THRESHOLD, MAX_DWELL_DURATION_MS, MIN_DWELL_DURATION_MS


class PathsConfig(BaseModel):
    telemetry: Path = Field(Path("telemetry.csv"), description="Captured cursor telemetry (.csv or .json).")
    video: Optional[Path] = Field(None, description="Recording used to derive the timeline length.")
    output_dir: Path = Field(Path("out"), description="Base directory for derived outputs.")


class TelemetryConfig(BaseModel):
    total_ms: Optional[float] = Field(None, ge=0.0, description="Timeline length used to clamp sample times.")


class DwellConfig(BaseModel):
    min_duration_ms: float = Field(MIN_DWELL_DURATION_MS, ge=0.0, description="Shortest run accepted as a dwell.")
    max_duration_ms: float = Field(MAX_DWELL_DURATION_MS, ge=0.0, description="Longest run accepted as a dwell.")
    move_threshold: float = Field(DWELL_MOVE_THRESHOLD, gt=0.0, description="Step distance that ends a run.")

    @model_validator(mode="after")
    def validate_bounds(self) -> "DwellConfig":
        if self.max_duration_ms < self.min_duration_ms:
            raise ValueError("max_duration_ms must be >= min_duration_ms")
        return self


class RankConfig(BaseModel):
    k: Optional[int] = Field(None, ge=0, description="Keep only the k strongest candidates.")
    min_strength: float = Field(0.0, ge=0.0, description="Drop candidates weaker than this (ms).")


class AppConfig(BaseModel):
    paths: PathsConfig = Field(default_factory=PathsConfig)
    telemetry: TelemetryConfig = Field(default_factory=TelemetryConfig)
    dwell: DwellConfig = Field(default_factory=DwellConfig)
    rank: RankConfig = Field(default_factory=RankConfig)

    @property
    def output_dir(self) -> Path:
        return self.paths.output_dir


def load_config(path: Path | str) -> AppConfig:
    """Load configuration from YAML, falling back to defaults when missing."""

    cfg_path = Path(path)
    if not cfg_path.exists():
        return AppConfig()
    data = yaml.safe_load(cfg_path.read_text()) or {}
    return AppConfig.model_validate(data)
