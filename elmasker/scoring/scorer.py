"""
Information-theoretic scoring of motif occurrences.

Each matched subsequence is scored under an independent-residue model:
its probability is the product of background residue frequencies and its
entropy is the probability-weighted self-information of those residues.
Common residues in a common arrangement give high probability; repetitive,
low-complexity matches give a low entropy rate.
"""

from __future__ import annotations

import logging
import math
from typing import NamedTuple

from .frequencies import SKIP_RESIDUES, residue_probability

logger = logging.getLogger(__name__)


class MotifScore(NamedTuple):
    """Score of a residue subsequence."""
    probability: float
    entropy: float
    entropy_rate: float


def score(subsequence: str) -> MotifScore:
    """
    Score a residue subsequence.

    Skipped codes (U, O) contribute to neither the probability product nor
    the entropy sum, but the entropy rate is still divided by the full
    length of ``subsequence``.

    Args:
        subsequence: Residue string, any case

    Returns:
        MotifScore(probability, entropy in bits, entropy rate in bits/residue).
        An empty string scores (0.0, 0.0, 0.0).
    """
    if not subsequence:
        logger.warning("Cannot score an empty subsequence")
        return MotifScore(0.0, 0.0, 0.0)

    probability = 1.0
    entropy = 0.0
    for residue in subsequence.upper():
        if residue in SKIP_RESIDUES:
            continue
        p = residue_probability(residue)
        probability *= p
        entropy += p * math.log2(1.0 / p)

    return MotifScore(probability, entropy, entropy / len(subsequence))
