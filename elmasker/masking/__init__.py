"""
Coverage collapsing and sequence masking.
"""

from .collapse import collapse, coverage_profile
from .masker import DEFAULT_MASK_CHAR, MaskMode, mask

__all__ = [
    "collapse",
    "coverage_profile",
    "mask",
    "MaskMode",
    "DEFAULT_MASK_CHAR",
]
