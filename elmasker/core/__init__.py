"""
Core data structures and utilities for elmasker.

Modules:
    models: Pydantic-based data models for motifs, sequences and results
    sequence: FASTA parsing/writing and alphabet validation
    intervals: Interval overlap and run-length encoding of residue profiles
"""

from .intervals import any_overlap, coverage, run_length_encode
from .models import (
    InstanceRecord,
    LogicLabel,
    MotifClass,
    Occurrence,
    Region,
    SequenceAnnotation,
    SequenceRecord,
)
from .sequence import (
    EXTENDED_AA,
    STANDARD_AA,
    SequenceError,
    SequenceValidator,
    parse_fasta,
    read_sequence_map,
    to_fasta,
    write_fasta,
)

__all__ = [
    # Models
    "InstanceRecord",
    "LogicLabel",
    "MotifClass",
    "Occurrence",
    "Region",
    "SequenceAnnotation",
    "SequenceRecord",
    # Intervals
    "coverage",
    "any_overlap",
    "run_length_encode",
    # Sequence utilities
    "SequenceError",
    "SequenceValidator",
    "parse_fasta",
    "read_sequence_map",
    "to_fasta",
    "write_fasta",
    "STANDARD_AA",
    "EXTENDED_AA",
]
