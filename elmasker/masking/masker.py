"""
Sequence masking from disjoint regions.

Hard masking overwrites residues with a mask character. Soft masking
lowercases them, so the only trace of masking is the residue case.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable

from ..core.models import Region

DEFAULT_MASK_CHAR = "x"


class MaskMode(str, Enum):
    """
    What the masker hides.

    - BACKGROUND: residues outside any motif (coverage collapsed inverted)
    - MOTIFS: residues covered by motifs
    """
    BACKGROUND = "background"
    MOTIFS = "motifs"

    @property
    def invert(self) -> bool:
        return self is MaskMode.BACKGROUND


def mask(
    sequence: str,
    regions: Iterable[Region],
    hard: bool = False,
    mask_char: str = DEFAULT_MASK_CHAR,
) -> str:
    """
    Mask the given regions of a sequence.

    Args:
        sequence: Residue string; left unchanged outside the regions
        regions: Disjoint 1-based inclusive regions to mask
        hard: Replace residues with ``mask_char`` instead of lowercasing
        mask_char: Single replacement character for hard masking

    Returns:
        New string of the same length as ``sequence``
    """
    if hard and len(mask_char) != 1:
        raise ValueError(f"mask_char must be a single character, got {mask_char!r}")

    residues = list(sequence)
    for region in regions:
        lo = region.start - 1
        hi = min(region.end, len(residues))
        if hard:
            residues[lo:hi] = mask_char * (hi - lo)
        else:
            residues[lo:hi] = "".join(residues[lo:hi]).lower()
    return "".join(residues)
