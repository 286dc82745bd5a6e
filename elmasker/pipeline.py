"""
Per-sequence annotation pipeline.

Every input sequence goes through the same fixed steps:

    predict (optional) -> match and filter per motif -> collapse -> mask

Nothing is shared between sequences except the read-only motif library, so
sequences can be processed concurrently with identical results. With
``max_workers > 0`` a thread pool maps over the input, preserving order.

Usage
-----
    >>> library = load_library(classes_path="elms_index.tsv")
    >>> pipeline = MotifPipeline(library, PipelineConfig(hard_mask=True))
    >>> for annotation in pipeline.run(parse_fasta("proteins.fasta")):
    ...     print(annotation.record.id, annotation.masked_sequence)
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional

from .core.models import SequenceAnnotation, SequenceRecord
from .masking.collapse import collapse
from .masking.masker import DEFAULT_MASK_CHAR, MaskMode, mask
from .motifs.library import MotifLibrary
from .motifs.matcher import FilterConfig, assign
from .predictors.base import DisorderPredictor, PredictorUnavailableError

logger = logging.getLogger(__name__)


@dataclass
class PipelineConfig:
    """
    Configuration for a pipeline run.

    Attributes:
        filters: Occurrence filter settings
        num_elms: Minimum stacked occurrences for a residue to be motif-covered
        mask_mode: Mask the motif-free background or the motifs themselves
        hard_mask: Replace residues instead of lowercasing them
        mask_char: Replacement character for hard masking
        disorder_threshold: Disorder probability for a disordered residue
        max_workers: Worker threads across sequences (0 = sequential)
    """
    filters: FilterConfig = field(default_factory=FilterConfig)
    num_elms: int = 1
    mask_mode: MaskMode = MaskMode.BACKGROUND
    hard_mask: bool = False
    mask_char: str = DEFAULT_MASK_CHAR
    disorder_threshold: float = 0.5
    max_workers: int = 0


class MotifPipeline:
    """
    Annotates and masks sequences with motifs from a library.

    Attributes:
        library: Motif classes to scan for
        config: Run configuration
        predictor: Disorder predictor, required by the MoRF/disorder filters
    """

    def __init__(
        self,
        library: MotifLibrary,
        config: Optional[PipelineConfig] = None,
        predictor: Optional[DisorderPredictor] = None,
    ):
        """
        Raises:
            PredictorUnavailableError: If a region filter is enabled and the
                predictor is missing or cannot be run
        """
        self.library = library
        self.config = config or PipelineConfig()
        self.predictor = predictor

        filters = self.config.filters
        if filters.logic_filter and not any(
            motif.instance_sequences(filters.logic_label) for motif in library
        ):
            logger.warning(
                f"Logic filter enabled but no {filters.logic_label.value} instance has "
                f"residues; supply instance protein sequences or nothing is rejected"
            )

        if filters.needs_predictor:
            if predictor is None:
                raise PredictorUnavailableError(
                    "MoRF/disorder filtering requested but no predictor configured"
                )
            predictor.ensure_available()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(n_motifs={len(self.library)})"

    def annotate(self, record: SequenceRecord) -> SequenceAnnotation:
        """
        Run the full pipeline on one sequence.

        Raises:
            PredictorError: If the predictor fails on this sequence
        """
        filters = self.config.filters
        morf_regions = None
        disorder_regions = None
        if filters.needs_predictor:
            prediction = self.predictor.predict(record.sequence, record.id)
            morf_regions = prediction.binding_regions
            disorder_regions = prediction.disorder_regions(self.config.disorder_threshold)

        occurrences = {}
        for motif in self.library:
            found = assign(
                motif,
                record.sequence,
                filters,
                morf_regions=morf_regions,
                disorder_regions=disorder_regions,
            )
            if found:
                occurrences[motif.identifier] = found

        regions = collapse(
            record.length,
            occurrences,
            num_elms=self.config.num_elms,
            invert=self.config.mask_mode.invert,
        )
        masked = mask(
            record.sequence,
            regions,
            hard=self.config.hard_mask,
            mask_char=self.config.mask_char,
        )

        logger.info(
            f"{record.id}: {sum(len(o) for o in occurrences.values())} occurrences "
            f"of {len(occurrences)} motifs, {len(regions)} masked regions"
        )
        return SequenceAnnotation(
            record=record,
            occurrences=occurrences,
            regions=regions,
            masked_sequence=masked,
        )

    def run(self, records: Iterable[SequenceRecord]) -> Iterator[SequenceAnnotation]:
        """
        Annotate sequences, yielding results in input order.

        Sequential runs read one record at a time; threaded runs submit the
        whole input.
        """
        if self.config.max_workers <= 0:
            for record in records:
                yield self.annotate(record)
            return

        with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
            yield from executor.map(self.annotate, records)
