"""
Interval utilities.

Overlap arithmetic on 1-based inclusive intervals and run-length encoding
of per-residue numeric profiles into disjoint threshold-crossing regions.
The run-length encoder serves two callers: the coverage collapser (integer
motif counts) and the disorder predictor wrapper (per-residue
probabilities).
"""

from __future__ import annotations

from typing import Iterable, Sequence, Union

import numpy as np

from .models import Region


def coverage(a: int, b: int, x: int, y: int) -> int:
    """
    Number of residues shared by the inclusive intervals [a, b] and [x, y].

    Either interval may be given with its endpoints in reverse order.

    Returns:
        Overlap length, 0 when the intervals are disjoint
    """
    lo1, hi1 = min(a, b), max(a, b)
    lo2, hi2 = min(x, y), max(x, y)
    return max(0, min(hi1, hi2) - max(lo1, lo2) + 1)


def any_overlap(start: int, end: int, regions: Iterable[Region]) -> bool:
    """True if [start, end] shares at least one residue with any region."""
    return any(coverage(start, end, r.start, r.end) > 0 for r in regions)


def run_length_encode(
    values: Union[Sequence[float], np.ndarray],
    threshold: float = 1,
    invert: bool = False,
) -> list[Region]:
    """
    Collapse a per-residue profile into maximal runs at or above a threshold.

    Position ``i`` of ``values`` describes residue ``i + 1``.

    Args:
        values: Non-negative per-residue values (counts or probabilities)
        threshold: A residue qualifies when its value is >= threshold
        invert: First map values to a 0/1 mask (value >= 1 -> 0, otherwise
            1) and detect runs on that mask against the same threshold

    Returns:
        Ordered, disjoint 1-based inclusive regions
    """
    arr = np.asarray(values, dtype=float)
    if arr.size == 0:
        return []

    if invert:
        arr = np.where(arr >= 1, 0.0, 1.0)

    qualifying = (arr >= threshold).astype(np.int8)

    # Pad with zeros so runs touching either end still produce an edge
    edges = np.diff(np.concatenate(([0], qualifying, [0])))
    starts = np.flatnonzero(edges == 1)
    ends = np.flatnonzero(edges == -1)

    return [
        Region(start=int(s) + 1, end=int(e))
        for s, e in zip(starts, ends)
    ]
