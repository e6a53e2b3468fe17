"""Tests for dwell_zoom.utils."""
from __future__ import annotations

import json

from dwell_zoom.dwell import ZoomDwellCandidate
from dwell_zoom.telemetry import ZoomFocus
from dwell_zoom.utils import candidate_rows, load_report, summary_stats, write_report_md


# --- summary_stats --------------------------------------------------------

class TestSummaryStats:
    def test_empty(self):
        assert summary_stats([]) == {"count": 0, "mean_strength": 0.0, "max_strength": 0.0}

    def test_values(self):
        cands = [
            ZoomDwellCandidate(100, ZoomFocus(0.1, 0.1), 500.0),
            ZoomDwellCandidate(900, ZoomFocus(0.9, 0.9), 1000.0),
        ]
        stats = summary_stats(cands)
        assert stats == {"count": 2, "mean_strength": 750.0, "max_strength": 1000.0}


# --- report ---------------------------------------------------------------

class TestReport:
    def test_load_missing(self, tmp_path):
        report = load_report(tmp_path)
        assert report.data == {}
        assert report.path == tmp_path / "report.json"

    def test_update_writes_json_and_md(self, tmp_path):
        report = load_report(tmp_path)
        report.update("detect", {"count": 2, "mean_strength": 650.0})
        assert json.loads((tmp_path / "report.json").read_text()) == {
            "detect": {"count": 2, "mean_strength": 650.0}
        }
        md = (tmp_path / "report.md").read_text()
        assert "## Detect" in md
        assert "- **Mean Strength**: 650.0" in md

    def test_reload_keeps_sections(self, tmp_path):
        load_report(tmp_path).update("normalize", {"count": 5})
        report = load_report(tmp_path)
        report.update("detect", {"count": 1})
        assert set(json.loads(report.path.read_text())) == {"normalize", "detect"}

    def test_md_empty(self, tmp_path):
        path = tmp_path / "r.md"
        write_report_md(path, {})
        assert "No pipeline runs recorded yet." in path.read_text()

    def test_candidate_table(self, tmp_path):
        rows = candidate_rows([ZoomDwellCandidate(400, ZoomFocus(0.123456, 0.5), 800.0)])
        assert rows == [{"center_time_ms": 400, "cx": 0.1235, "cy": 0.5, "strength": 800.0}]
        load_report(tmp_path).update("detect", {"count": 1, "candidates": rows})
        lines = (tmp_path / "report.md").read_text().splitlines()
        assert "### Candidates" in lines
        assert "| center_time_ms | cx | cy | strength |" in lines
        assert "| 400 | 0.1235 | 0.5 | 800.0 |" in lines
        assert not any(line.startswith("- **Candidates**") for line in lines)

    def test_empty_candidate_table(self, tmp_path):
        load_report(tmp_path).update("detect", {"count": 0, "candidates": candidate_rows([])})
        assert "_none_" in (tmp_path / "report.md").read_text()
