"""
Core data models for elmasker.

This module defines the fundamental data structures used throughout the
pipeline: motif classes and their curated instances, input sequences,
scored motif occurrences and the disjoint regions derived from them.
All models use Pydantic for validation and serialization.

Coordinates are 1-based and inclusive everywhere, matching the convention of
the ELM resource and of GFF output.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator


class LogicLabel(str, Enum):
    """
    Curation label attached to a motif instance.

    ELM annotates every instance with the logic under which it was
    curated. False positives are sequences that match the class regex but
    were shown not to be functional sites.
    """
    FALSE_POSITIVE = "FalsePositive"
    TRUE_NEGATIVE = "TrueNegative"
    TRUE_POSITIVE = "TruePositive"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, value: str) -> LogicLabel:
        """
        Parse a label in any of the spellings found in ELM downloads.

        Accepts ``"false positive"``, ``"FALSE_POSITIVE"``,
        ``"FalsePositive"`` and so on.

        Raises:
            ValueError: If the value names no known label
        """
        key = re.sub(r"[\s_\-]", "", value).lower()
        for label in cls:
            if label.value.lower() == key:
                return label
        raise ValueError(f"Unknown instance logic: {value!r}")


class Region(BaseModel):
    """
    Contiguous 1-based inclusive interval within a sequence.

    Used both for disjoint coverage output and for externally supplied
    disorder or binding-region predictions.
    """
    model_config = ConfigDict(frozen=True)

    start: int = Field(..., ge=1, description="1-based start position (inclusive)")
    end: int = Field(..., ge=1, description="1-based end position (inclusive)")

    @field_validator("end")
    @classmethod
    def end_not_before_start(cls, v: int, info) -> int:
        if "start" in info.data and v < info.data["start"]:
            raise ValueError("end must not be smaller than start")
        return v

    @property
    def length(self) -> int:
        """Length of the region in residues."""
        return self.end - self.start + 1

    def overlaps(self, other: Region) -> bool:
        """Check if this region shares at least one residue with another."""
        return self.start <= other.end and other.start <= self.end


class InstanceRecord(BaseModel):
    """A curated, experimentally characterised occurrence of a motif class."""
    model_config = ConfigDict(frozen=True)

    accession: str
    motif_id: str = Field(..., description="Identifier of the owning motif class")
    protein_id: str = Field(..., description="Primary accession of the source protein")
    start: int = Field(..., ge=1)
    end: int = Field(..., ge=1)
    logic: LogicLabel = LogicLabel.UNKNOWN
    sequence: str = Field("", description="Residues observed at start..end")

    @field_validator("end")
    @classmethod
    def end_not_before_start(cls, v: int, info) -> int:
        if "start" in info.data and v < info.data["start"]:
            raise ValueError("end must not be smaller than start")
        return v


class MotifClass(BaseModel):
    """
    A motif class from the reference library.

    The category code is derived from the identifier (the segment before the
    first underscore, e.g. ``LIG`` for ``LIG_SH2_STAT5``) and is therefore
    never stored separately.
    """
    accession: str
    identifier: str = Field(..., min_length=1)
    description: str = ""
    pattern: str = Field(..., min_length=1, description="Regular expression over residues")
    probability: float = Field(..., ge=0, description="Expected chance occurrence")
    instances: list[InstanceRecord] = Field(default_factory=list)

    _compiled: Optional[re.Pattern] = PrivateAttr(default=None)

    @field_validator("pattern")
    @classmethod
    def pattern_compiles(cls, v: str) -> str:
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"Invalid motif pattern {v!r}: {e}") from e
        return v

    @property
    def category(self) -> str:
        """Category code, e.g. ``LIG``, ``MOD`` or ``DEG``."""
        return self.identifier.split("_", 1)[0]

    @property
    def compiled(self) -> re.Pattern:
        """Compiled pattern, built on first use."""
        if self._compiled is None:
            self._compiled = re.compile(self.pattern)
        return self._compiled

    def instance_sequences(self, label: LogicLabel) -> set[str]:
        """Residue strings of all instances curated with ``label``."""
        return {
            inst.sequence for inst in self.instances
            if inst.logic == label and inst.sequence
        }


class SequenceRecord(BaseModel):
    """
    An input sequence to annotate.

    Case is preserved so that pre-existing soft masking survives a round
    trip through the masker untouched.
    """
    id: str = Field(..., min_length=1)
    description: str = ""
    sequence: str

    @field_validator("sequence")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        return "".join(v.split())

    @property
    def length(self) -> int:
        return len(self.sequence)


class Occurrence(BaseModel):
    """One scored match of a motif class within a sequence."""
    model_config = ConfigDict(frozen=True)

    motif_id: str
    start: int = Field(..., ge=1)
    end: int = Field(..., ge=1)
    text: str = Field(..., min_length=1, description="Matched substring")
    probability: float
    entropy: float
    entropy_rate: float

    @field_validator("end")
    @classmethod
    def end_not_before_start(cls, v: int, info) -> int:
        if "start" in info.data and v < info.data["start"]:
            raise ValueError("end must not be smaller than start")
        return v

    @property
    def length(self) -> int:
        return self.end - self.start + 1


class SequenceAnnotation(BaseModel):
    """
    Complete per-sequence pipeline result.

    ``occurrences`` holds only motifs with at least one surviving
    occurrence, keyed by motif identifier in library order.
    """
    record: SequenceRecord
    occurrences: dict[str, list[Occurrence]] = Field(default_factory=dict)
    regions: list[Region] = Field(default_factory=list)
    masked_sequence: Optional[str] = None

    @property
    def n_occurrences(self) -> int:
        return sum(len(occs) for occs in self.occurrences.values())

    def all_occurrences(self) -> list[Occurrence]:
        """Flatten occurrences, ordered by motif then scan position."""
        return [occ for occs in self.occurrences.values() for occ in occs]
