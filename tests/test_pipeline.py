from __future__ import annotations

import json
from pathlib import Path

import pytest

from dwell_zoom.cli import main
from dwell_zoom.dwell import read_candidates
from examples.generate_sample import TOTAL_MS, main as generate_sample


def test_end_to_end(tmp_path: Path) -> None:
    telemetry_path = tmp_path / "capture.csv"
    generate_sample(telemetry_path)
    output_dir = tmp_path / "out"
    config_path = tmp_path / "config.yaml"
    config = {
        "paths": {"telemetry": str(telemetry_path), "output_dir": str(output_dir)},
        "telemetry": {"total_ms": TOTAL_MS},
    }
    config_path.write_text(json.dumps(config))

    main(["--config", str(config_path), "normalize"])
    assert (output_dir / "telemetry_normalized.csv").exists()

    main(["--config", str(config_path), "detect"])
    candidates = read_candidates(output_dir / "dwell_candidates.csv")
    assert [c.center_time_ms for c in candidates] == [1300, 3600]
    assert [c.strength for c in candidates] == [600.0, 1200.0]
    assert candidates[0].focus.cx == pytest.approx(0.25, abs=0.005)
    assert candidates[1].focus.cy == pytest.approx(0.6, abs=0.005)

    report = json.loads((output_dir / "report.json").read_text())
    assert report["normalize"]["dropped"] == 2
    assert report["detect"]["detected"] == 2
