"""
elmasker: short linear motif annotation and masking for protein sequences.

This package annotates protein sequences with occurrences of short linear
motifs from the Eukaryotic Linear Motif (ELM) resource, scores every
occurrence for statistical plausibility, filters occurrences by curation
logic, composition, complexity and predicted structural context, and
collapses the survivors into disjoint regions that can be reported or used
to mask the input.

Short linear motifs are 3-10 residue functional sites (docking, degradation,
modification and targeting signals) that sit mostly in intrinsically
disordered regions. Their regular expressions are short and permissive, so
most matches in any proteome are chance hits; the scoring and filters exist
to prune those.

Key components:
    - core: Data models, FASTA handling, interval utilities
    - scoring: Background residue frequencies and occurrence scoring
    - motifs: Motif library loading/retrieval and the motif matcher
    - masking: Coverage collapsing and sequence masking
    - predictors: Disorder/binding-region predictor wrappers (IUPred2A)
    - pipeline: Per-sequence annotation pipeline
    - export: Assignment, feature and library reports
    - cli: Command-line interface

Basic usage:
    >>> from elmasker import annotate_sequence, load_library
    >>> library = load_library(classes_path="elms_index.tsv")
    >>> annotation = annotate_sequence("MSTAVLPRQKRLSPDEE", library)
    >>> for occ in annotation.all_occurrences():
    ...     print(f"{occ.motif_id} {occ.start}-{occ.end} {occ.text}")
    >>> print(annotation.masked_sequence)
"""

__version__ = "0.1.0"

from typing import Optional

from .core.models import (
    InstanceRecord,
    LogicLabel,
    MotifClass,
    Occurrence,
    Region,
    SequenceAnnotation,
    SequenceRecord,
)
from .core.sequence import parse_fasta, to_fasta
from .masking import MaskMode, collapse, mask
from .motifs import FilterConfig, LibrarySource, MotifLibrary, assign, load_library
from .pipeline import MotifPipeline, PipelineConfig
from .scoring import score


def annotate_sequence(
    sequence: str,
    library: MotifLibrary,
    config: Optional[PipelineConfig] = None,
    sequence_id: str = "query",
) -> SequenceAnnotation:
    """
    Annotate a single sequence with motif occurrences.

    This is the main high-level interface. For batches, use MotifPipeline
    directly so the library and predictor checks are set up once.

    Args:
        sequence: Residue string
        library: Motif classes to scan for
        config: Pipeline configuration (defaults: no filters, soft
            background masking)
        sequence_id: Identifier used in logs and reports
    """
    pipeline = MotifPipeline(library, config)
    return pipeline.annotate(SequenceRecord(id=sequence_id, sequence=sequence))


def mask_sequence(
    sequence: str,
    library: MotifLibrary,
    config: Optional[PipelineConfig] = None,
) -> str:
    """
    Mask a single sequence and return the masked string.

    Example:
        >>> mask_sequence("MSTAVLPRQ", library)  # library with pattern AVL
        'mstAVLprq'
    """
    return annotate_sequence(sequence, library, config).masked_sequence


__all__ = [
    # Version
    "__version__",
    # Main functions
    "annotate_sequence",
    "mask_sequence",
    # Models
    "InstanceRecord",
    "LogicLabel",
    "MotifClass",
    "Occurrence",
    "Region",
    "SequenceAnnotation",
    "SequenceRecord",
    # Sequence utilities
    "parse_fasta",
    "to_fasta",
    # Engine
    "score",
    "assign",
    "collapse",
    "mask",
    "FilterConfig",
    "MaskMode",
    # Library
    "MotifLibrary",
    "LibrarySource",
    "load_library",
    # Pipeline
    "MotifPipeline",
    "PipelineConfig",
]
