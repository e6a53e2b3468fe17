"""Shared fixtures for the dwell zoom test suite."""
from __future__ import annotations

import pytest
from pathlib import Path

from dwell_zoom.config import AppConfig
from dwell_zoom.telemetry import CursorTelemetryPoint


@pytest.fixture
def default_config() -> AppConfig:
    """Return a default AppConfig with no file."""
    return AppConfig()


@pytest.fixture
def two_dwells() -> list[CursorTelemetryPoint]:
    """Dwell at (0.1, 0.1) for 500ms, jump, dwell at (0.9, 0.9) for 500ms."""
    first = [CursorTelemetryPoint(time_ms=t, cx=0.1, cy=0.1) for t in (0, 250, 500)]
    second = [CursorTelemetryPoint(time_ms=t, cx=0.9, cy=0.9) for t in (600, 850, 1100)]
    return first + second


@pytest.fixture
def telemetry_csv(tmp_path: Path) -> Path:
    """Write a small raw capture with one 800ms dwell and some noise."""
    path = tmp_path / "telemetry.csv"
    path.write_text(
        "time_ms,cx,cy\n"
        "800,0.5,0.5\n"
        "0,0.5,0.5\n"
        "200,0.5,0.5\n"
        "400,0.5,0.5\n"
        "600,0.5,0.5\n"
        "700,nan,0.5\n"
        "900,bad,0.2\n"
    )
    return path


@pytest.fixture
def sample_yaml(tmp_path: Path) -> Path:
    """Write a minimal config.yaml and return its path."""
    cfg = tmp_path / "config.yaml"
    cfg.write_text(
        "paths:\n"
        "  telemetry: capture.json\n"
        "  output_dir: results\n"
        "telemetry:\n"
        "  total_ms: 5000\n"
        "dwell:\n"
        "  min_duration_ms: 300\n"
        "rank:\n"
        "  k: 3\n"
    )
    return cfg
