"""
Motif matcher.

Scans a sequence with one motif class pattern and turns each match into a
scored Occurrence, discarding candidates that fail any enabled filter.
Filters are applied in a fixed order and a candidate is dropped on the
first failure:

1. Logic: the matched text equals a curated instance with the target label
2. Probability: the match is too likely to occur by composition alone
3. Complexity: the match has too low an entropy rate
4. MoRF: the match does not touch any predicted binding region
5. Disorder: the match does not touch any predicted disordered region
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional, Sequence

from ..core.intervals import any_overlap
from ..core.models import LogicLabel, MotifClass, Occurrence, Region
from ..scoring.scorer import score
from .library import MotifPatternError

logger = logging.getLogger(__name__)


@dataclass
class FilterConfig:
    """
    Per-run filter settings.

    A filter is off when its flag is False or its threshold is None.

    Attributes:
        logic_filter: Reject matches equal to curated instances
        logic_label: Instance label that triggers rejection
        max_probability: Reject matches more probable than this
        min_entropy_rate: Reject matches with a lower entropy rate (bits/residue)
        morf_filter: Require overlap with a predicted binding region
        disorder_filter: Require overlap with a predicted disordered region
    """
    logic_filter: bool = False
    logic_label: LogicLabel = LogicLabel.FALSE_POSITIVE
    max_probability: Optional[float] = None
    min_entropy_rate: Optional[float] = None
    morf_filter: bool = False
    disorder_filter: bool = False

    @property
    def needs_predictor(self) -> bool:
        """Whether any enabled filter depends on the disorder predictor."""
        return self.morf_filter or self.disorder_filter


def assign(
    motif: MotifClass,
    sequence: str,
    config: Optional[FilterConfig] = None,
    morf_regions: Optional[Sequence[Region]] = None,
    disorder_regions: Optional[Sequence[Region]] = None,
) -> Optional[list[Occurrence]]:
    """
    Find the occurrences of one motif class in a sequence.

    Matching is case-insensitive on the residues and non-overlapping within
    this motif; zero-length matches are ignored.

    Args:
        motif: Motif class to scan for
        sequence: Residue string
        config: Filter settings (all filters off when None)
        morf_regions: Predicted binding regions, required by the MoRF filter
        disorder_regions: Predicted disordered regions, required by the
            disorder filter

    Returns:
        Occurrences in scan order, or None when none survive

    Raises:
        MotifPatternError: If the motif pattern does not compile
        ValueError: If a region filter is enabled without its regions
    """
    config = config or FilterConfig()

    if config.morf_filter and morf_regions is None:
        raise ValueError("MoRF filter enabled but no binding regions supplied")
    if config.disorder_filter and disorder_regions is None:
        raise ValueError("Disorder filter enabled but no disorder regions supplied")

    try:
        pattern = motif.compiled
    except re.error as e:
        raise MotifPatternError(f"{motif.identifier}: invalid pattern {motif.pattern!r}: {e}") from e

    rejected_texts = (
        motif.instance_sequences(config.logic_label) if config.logic_filter else set()
    )

    occurrences = []
    for match in pattern.finditer(sequence.upper()):
        text = match.group()
        if not text:
            continue
        start, end = match.start() + 1, match.end()

        if text in rejected_texts:
            logger.debug(f"{motif.identifier} {start}-{end}: matches {config.logic_label.value} instance")
            continue

        probability, entropy, entropy_rate = score(text)

        if config.max_probability is not None and probability > config.max_probability:
            continue
        if config.min_entropy_rate is not None and entropy_rate < config.min_entropy_rate:
            continue
        if config.morf_filter and not any_overlap(start, end, morf_regions):
            continue
        if config.disorder_filter and not any_overlap(start, end, disorder_regions):
            continue

        occurrences.append(Occurrence(
            motif_id=motif.identifier,
            start=start,
            end=end,
            text=text,
            probability=probability,
            entropy=entropy,
            entropy_rate=entropy_rate,
        ))

    return occurrences or None
