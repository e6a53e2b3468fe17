"""Strength filtering and Top-K selection of dwell candidates."""
from __future__ import annotations

from typing import List, Optional, Sequence

from loguru import logger

from .dwell import ZoomDwellCandidate


def select_top_candidates(
    candidates: Sequence[ZoomDwellCandidate],
    k: Optional[int] = None,
    min_strength: float = 0.0,
) -> List[ZoomDwellCandidate]:
    """Keep candidates at or above *min_strength*, then the *k* strongest.

    The result is returned in ascending time order. Equal strengths favour
    the earlier candidate.
    """
    kept = [c for c in candidates if c.strength >= min_strength]
    if k is not None:
        if k <= 0:
            return []
        kept.sort(key=lambda c: (-c.strength, c.center_time_ms))
        kept = kept[:k]
    kept.sort(key=lambda c: c.center_time_ms)
    if len(kept) != len(candidates):
        logger.debug("Kept {} of {} dwell candidates", len(kept), len(candidates))
    return kept
