"""
Coverage collapsing.

Occurrences from every motif class are stacked into one per-residue
coverage profile, which is then run-length encoded into disjoint regions:
either the motif-dense stretches or, inverted, the motif-free background.
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Union

import numpy as np

from ..core.intervals import run_length_encode
from ..core.models import Occurrence, Region

logger = logging.getLogger(__name__)


def coverage_profile(
    sequence_length: int,
    occurrences: Iterable[Occurrence],
) -> np.ndarray:
    """
    Count, for every residue, how many occurrences cover it.

    Returns:
        Integer array of length ``sequence_length``; index i is residue i + 1
    """
    profile = np.zeros(sequence_length, dtype=np.int64)
    for occ in occurrences:
        profile[occ.start - 1:occ.end] += 1
    return profile


def collapse(
    sequence_length: int,
    occurrences: Union[Iterable[Occurrence], Mapping[str, Iterable[Occurrence]]],
    num_elms: int = 1,
    invert: bool = False,
) -> list[Region]:
    """
    Collapse overlapping occurrences into disjoint regions.

    Args:
        sequence_length: Length of the annotated sequence
        occurrences: Occurrences as a flat iterable, or per-motif lists keyed
            by motif identifier
        num_elms: Minimum number of stacked occurrences for a residue to count
        invert: Return motif-free regions instead of motif-dense ones

    Returns:
        Ordered, disjoint 1-based inclusive regions
    """
    if isinstance(occurrences, Mapping):
        occurrences = [occ for occs in occurrences.values() for occ in occs]

    if invert and num_elms > 1:
        logger.warning(
            f"Inverted coverage is a 0/1 mask; num_elms={num_elms} selects no region"
        )

    profile = coverage_profile(sequence_length, occurrences)
    return run_length_encode(profile, threshold=num_elms, invert=invert)
