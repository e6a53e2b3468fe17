"""Generate a small synthetic cursor telemetry capture for testing."""
from __future__ import annotations

import math
from pathlib import Path
from typing import List, Tuple

import numpy as np

from dwell_zoom.telemetry import CursorTelemetryPoint, write_telemetry

# (start_ms, end_ms, cx, cy); the last two are too short and too long to count
DWELLS: List[Tuple[float, float, float, float]] = [
    (1000, 1600, 0.25, 0.3),
    (3000, 4200, 0.7, 0.6),
    (5500, 5700, 0.4, 0.8),
    (7000, 10500, 0.8, 0.2),
]
TOTAL_MS = 11000.0


def build_samples(seed: int = 7, step_ms: float = 50.0, jitter: float = 0.004) -> List[CursorTelemetryPoint]:
    rng = np.random.default_rng(seed)
    samples: List[CursorTelemetryPoint] = []
    for idx, (start, end, cx, cy) in enumerate(DWELLS):
        for t in np.arange(start, end + 1, step_ms):
            dx, dy = rng.uniform(-jitter, jitter, size=2)
            samples.append(CursorTelemetryPoint(time_ms=float(t), cx=cx + float(dx), cy=cy + float(dy)))
        if idx + 1 < len(DWELLS):
            n_start, _, n_cx, n_cy = DWELLS[idx + 1]
            for frac in (0.2, 0.4, 0.6, 0.8):
                samples.append(
                    CursorTelemetryPoint(
                        time_ms=end + (n_start - end) * frac,
                        cx=cx + (n_cx - cx) * frac,
                        cy=cy + (n_cy - cy) * frac,
                    )
                )
    samples.append(CursorTelemetryPoint(time_ms=2000.0, cx=math.nan, cy=0.5))
    samples.append(CursorTelemetryPoint(time_ms=math.inf, cx=0.5, cy=0.5))
    order = rng.permutation(len(samples))
    return [samples[i] for i in order]


def main(output: Path = Path("sample_telemetry.csv")) -> None:
    write_telemetry(output, build_samples())
    print(f"Wrote {output}")


if __name__ == "__main__":
    main()
