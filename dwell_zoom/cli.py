"""Console entry point for the dwell zoom toolkit."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, List

from loguru import logger

from .config import AppConfig, DwellConfig, RankConfig, load_config
from .dwell import detect_zoom_dwell_candidates, write_candidates
from .io import video_duration_ms
from .rank import select_top_candidates
from .telemetry import (
    CursorTelemetryPoint,
    normalize_cursor_telemetry,
    read_telemetry,
    resolve_total_ms,
    write_telemetry,
)
from .utils import candidate_rows, load_report, summary_stats


def _configure_logging(verbose: bool) -> None:
    logger.remove()
    level = "DEBUG" if verbose else "INFO"
    logger.add(sys.stderr, level=level)


def _load_config(path: Path) -> AppConfig:
    if not path.exists():
        logger.info("Using default configuration; no {} found", path)
    return load_config(path)


def _overrides(**values: Any) -> Dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}


def _resolve_telemetry_path(config: AppConfig, override: str | None) -> Path:
    return Path(override) if override else Path(config.paths.telemetry)


def _load_normalized(config: AppConfig, args: argparse.Namespace) -> tuple[List[CursorTelemetryPoint], float, int]:
    telemetry_path = _resolve_telemetry_path(config, args.telemetry)
    config.paths.telemetry = telemetry_path
    raw = read_telemetry(telemetry_path)
    explicit = args.total_ms
    video = args.video or config.paths.video
    if explicit is None and video:
        explicit = video_duration_ms(Path(video))
    total_ms = resolve_total_ms(raw, explicit=explicit, configured=config.telemetry.total_ms)
    samples = normalize_cursor_telemetry(raw, total_ms)
    logger.info("Normalized {} of {} samples from {} (total {:.0f}ms)", len(samples), len(raw), telemetry_path, total_ms)
    return samples, total_ms, len(raw)


def cmd_normalize(config: AppConfig, args: argparse.Namespace) -> None:
    samples, total_ms, raw_count = _load_normalized(config, args)
    out_csv = Path(args.out or (config.output_dir / "telemetry_normalized.csv"))
    write_telemetry(out_csv, samples)
    report = load_report(config.output_dir)
    report.update(
        "normalize",
        {
            "raw_count": raw_count,
            "count": len(samples),
            "dropped": raw_count - len(samples),
            "total_ms": round(total_ms, 3),
            "output": out_csv.as_posix(),
        },
    )


def cmd_detect(config: AppConfig, args: argparse.Namespace) -> None:
    dwell_overrides = _overrides(
        min_duration_ms=args.min_duration,
        max_duration_ms=args.max_duration,
        move_threshold=args.move_threshold,
    )
    if dwell_overrides:
        config.dwell = DwellConfig.model_validate(config.dwell.model_dump() | dwell_overrides)
    rank_overrides = _overrides(k=args.k, min_strength=args.min_strength)
    if rank_overrides:
        config.rank = RankConfig.model_validate(config.rank.model_dump() | rank_overrides)
    samples, total_ms, _ = _load_normalized(config, args)
    candidates = detect_zoom_dwell_candidates(
        samples,
        min_duration_ms=config.dwell.min_duration_ms,
        max_duration_ms=config.dwell.max_duration_ms,
        move_threshold=config.dwell.move_threshold,
    )
    selected = select_top_candidates(candidates, k=config.rank.k, min_strength=config.rank.min_strength)
    out_path = Path(args.out or (config.output_dir / "dwell_candidates.csv"))
    write_candidates(out_path, selected)
    stats = summary_stats(selected)
    logger.info("Detected {} dwell candidates, kept {}", len(candidates), stats["count"])
    report = load_report(config.output_dir)
    report.update(
        "detect",
        {
            **stats,
            "detected": len(candidates),
            "total_ms": round(total_ms, 3),
            "output": out_path.as_posix(),
            "candidates": candidate_rows(selected),
        },
    )


def _add_input_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--telemetry", help="Telemetry capture (.csv or .json)")
    parser.add_argument("--total-ms", dest="total_ms", type=float, help="Timeline length in milliseconds")
    parser.add_argument("--video", help="Recording to probe for the timeline length")
    parser.add_argument("--out")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="dwellzoom", description="Suggest zoom moments from cursor dwell")
    parser.add_argument("--config", default="config.yaml", help="Path to YAML configuration file")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    norm_p = sub.add_parser("normalize", help="Clean, sort and clamp telemetry")
    _add_input_args(norm_p)
    norm_p.set_defaults(func=cmd_normalize)

    detect_p = sub.add_parser("detect", help="Detect dwell zoom candidates")
    _add_input_args(detect_p)
    detect_p.add_argument("--k", type=int)
    detect_p.add_argument("--min-strength", dest="min_strength", type=float)
    detect_p.add_argument("--min-duration", dest="min_duration", type=float)
    detect_p.add_argument("--max-duration", dest="max_duration", type=float)
    detect_p.add_argument("--move-threshold", dest="move_threshold", type=float)
    detect_p.set_defaults(func=cmd_detect)

    return parser


def main(argv: List[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    config_path = Path(args.config)
    config = _load_config(config_path)
    config.paths.output_dir.mkdir(parents=True, exist_ok=True)
    if not hasattr(args, "func"):
        parser.print_help()
        return
    args.func(config, args)


if __name__ == "__main__":
    main()
