"""
Background residue frequencies.

Single-letter amino acid codes mapped to the probability of observing the
residue by chance, taken from the UniProtKB/Swiss-Prot composition
statistics. Ambiguity codes are resolved to the summed probability of the
residues they stand for; X carries no information and scores 1.0.
"""

from __future__ import annotations

import logging

import numpy as np

logger = logging.getLogger(__name__)


AMINO_PROBS: dict[str, float] = {
    "A": 0.0825, "R": 0.0553, "N": 0.0406, "D": 0.0546, "C": 0.0138,
    "Q": 0.0393, "E": 0.0672, "G": 0.0707, "H": 0.0227, "I": 0.0591,
    "L": 0.0965, "K": 0.0580, "M": 0.0241, "F": 0.0386, "P": 0.0474,
    "S": 0.0664, "T": 0.0535, "W": 0.0110, "Y": 0.0292, "V": 0.0686,
}

AMINO_PROBS["B"] = AMINO_PROBS["D"] + AMINO_PROBS["N"]
AMINO_PROBS["Z"] = AMINO_PROBS["E"] + AMINO_PROBS["Q"]
AMINO_PROBS["J"] = AMINO_PROBS["I"] + AMINO_PROBS["L"]
AMINO_PROBS["X"] = 1.0

# Selenocysteine and pyrrolysine are left out of both probability and entropy
SKIP_RESIDUES = frozenset("UO")

# Effectively zero: an unknown code sinks the probability of the whole match
UNKNOWN_RESIDUE_PROBABILITY = float(np.finfo(float).tiny)


def residue_probability(residue: str) -> float:
    """
    Background probability of a single residue code (case-insensitive).

    Unknown codes are logged and given UNKNOWN_RESIDUE_PROBABILITY.
    """
    prob = AMINO_PROBS.get(residue.upper())
    if prob is None:
        logger.warning(
            f"Unknown residue {residue!r}, using fallback probability "
            f"{UNKNOWN_RESIDUE_PROBABILITY:g}"
        )
        return UNKNOWN_RESIDUE_PROBABILITY
    return prob
