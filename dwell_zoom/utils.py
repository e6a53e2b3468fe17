"""Utility helpers shared by the pipeline stages."""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from statistics import mean
from typing import Any, Dict, List, Mapping, Sequence


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def summary_stats(candidates: Sequence[Any]) -> dict:
    """Count and strength statistics for anything with a ``strength``."""
    if not candidates:
        return {"count": 0, "mean_strength": 0.0, "max_strength": 0.0}
    strengths = [float(c.strength) for c in candidates]
    return {
        "count": len(candidates),
        "mean_strength": round(mean(strengths), 3),
        "max_strength": round(max(strengths), 3),
    }


def candidate_rows(candidates: Sequence[Any]) -> List[Dict[str, Any]]:
    """Flatten dwell candidates into report rows."""
    return [
        {
            "center_time_ms": c.center_time_ms,
            "cx": round(c.focus.cx, 4),
            "cy": round(c.focus.cy, 4),
            "strength": round(float(c.strength), 1),
        }
        for c in candidates
    ]


@dataclass
class PipelineReport:
    """Sectioned run summary kept as ``report.json`` with a Markdown twin."""

    path: Path
    data: dict

    def update(self, section: str, payload: dict) -> None:
        self.data[section] = payload
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self.data, indent=2))
        write_report_md(self.path.with_suffix(".md"), self.data)


def load_report(base_dir: Path) -> PipelineReport:
    json_path = base_dir / "report.json"
    data = json.loads(json_path.read_text()) if json_path.exists() else {}
    return PipelineReport(path=json_path, data=data)


def _table(rows: Sequence[Mapping[str, Any]]) -> List[str]:
    if not rows:
        return ["_none_"]
    columns = list(rows[0])
    lines = ["| " + " | ".join(columns) + " |", "|" + " --- |" * len(columns)]
    for row in rows:
        lines.append("| " + " | ".join(str(row.get(col, "")) for col in columns) + " |")
    return lines


def write_report_md(path: Path, data: dict) -> None:
    """Render scalar entries as bullets and row lists (e.g. candidates) as tables."""
    lines = ["# Dwell Zoom Report", ""]
    if not data:
        lines.append("No pipeline runs recorded yet.")
    for section, payload in data.items():
        lines.append(f"## {section.title()}")
        tables = {k: v for k, v in payload.items() if isinstance(v, list)}
        for key, value in payload.items():
            if key not in tables:
                lines.append(f"- **{key.replace('_', ' ').title()}**: {value}")
        for key, rows in tables.items():
            lines.extend(["", f"### {key.replace('_', ' ').title()}", ""])
            lines.extend(_table(rows))
        lines.append("")
    path.write_text("\n".join(lines))
