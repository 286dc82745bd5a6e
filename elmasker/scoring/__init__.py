"""
Scoring of motif occurrences against residue background frequencies.
"""

from .frequencies import (
    AMINO_PROBS,
    SKIP_RESIDUES,
    UNKNOWN_RESIDUE_PROBABILITY,
    residue_probability,
)
from .scorer import MotifScore, score

__all__ = [
    "AMINO_PROBS",
    "SKIP_RESIDUES",
    "UNKNOWN_RESIDUE_PROBABILITY",
    "residue_probability",
    "MotifScore",
    "score",
]
