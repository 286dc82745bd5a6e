"""
Sequence handling utilities for elmasker.

Reading and writing of FASTA files through Biopython, and validation of
residue alphabets. Motif regexes are written against the IUPAC amino acid
alphabet, so sequences with stray characters produce silently wrong
annotations; validation catches that before any scanning happens.
"""

from __future__ import annotations

from io import StringIO
from pathlib import Path
from typing import IO, Iterable, Iterator, Optional, Union

from Bio import SeqIO
from Bio.Seq import Seq
from Bio.SeqRecord import SeqRecord

from .models import SequenceRecord


# Standard amino acid alphabet
STANDARD_AA = set("ACDEFGHIKLMNPQRSTVWY")

# Ambiguity codes (B, Z, J), placeholder (X) and the skipped U/O codes
AMBIGUOUS_AA = set("BZJXUO")

EXTENDED_AA = STANDARD_AA | AMBIGUOUS_AA


class SequenceError(Exception):
    """Exception raised for sequence-related errors."""
    pass


class SequenceValidator:
    """
    Validates sequences before motif assignment.

    Validation is case-insensitive: lowercase residues are soft-masked
    residues, not errors.
    """

    def __init__(
        self,
        allow_ambiguous: bool = True,
        allow_gaps: bool = False,
        min_length: int = 1,
    ):
        """
        Initialize validator with specific constraints.

        Args:
            allow_ambiguous: Allow ambiguity and skip codes (B, Z, J, X, U, O)
            allow_gaps: Allow gap and stop characters (-, *)
            min_length: Minimum sequence length
        """
        self.allow_ambiguous = allow_ambiguous
        self.allow_gaps = allow_gaps
        self.min_length = min_length

        self.allowed_chars = set(STANDARD_AA)
        if allow_ambiguous:
            self.allowed_chars |= AMBIGUOUS_AA
        if allow_gaps:
            self.allowed_chars |= set("-*")

    def validate(self, sequence: str) -> tuple[bool, list[str]]:
        """
        Validate a sequence and return status with error messages.

        Args:
            sequence: Sequence to validate

        Returns:
            Tuple of (is_valid, list_of_error_messages)
        """
        errors = []
        seq = "".join(sequence.split()).upper()

        if len(seq) < self.min_length:
            errors.append(f"Sequence too short: {len(seq)} < {self.min_length}")

        invalid_chars = set(seq) - self.allowed_chars
        if invalid_chars:
            errors.append(f"Invalid characters: {sorted(invalid_chars)}")

        return len(errors) == 0, errors


def parse_fasta(
    source: Union[str, Path, IO[str]],
    validate: bool = True,
    validator: Optional[SequenceValidator] = None,
) -> Iterator[SequenceRecord]:
    """
    Parse sequences from FASTA format, one record at a time.

    Args:
        source: File path, FASTA string, or open text handle
        validate: Whether to validate sequences
        validator: Custom validator (uses default if None)

    Yields:
        SequenceRecord objects in file order

    Raises:
        SequenceError: If validation fails and validate=True
    """
    if validator is None:
        validator = SequenceValidator()

    close_handle = False
    if isinstance(source, str) and (source.startswith(">") or "\n>" in source):
        handle = StringIO(source)
    elif isinstance(source, (str, Path)):
        handle = open(source, "r")
        close_handle = True
    else:
        handle = source

    try:
        for record in SeqIO.parse(handle, "fasta"):
            seq_str = str(record.seq)
            # Terminal stop symbol from translated sequences
            if seq_str.endswith("*"):
                seq_str = seq_str[:-1]

            if validate:
                is_valid, errors = validator.validate(seq_str)
                if not is_valid:
                    raise SequenceError(
                        f"Sequence '{record.id}' failed validation: {'; '.join(errors)}"
                    )

            description = record.description
            if description.startswith(record.id):
                description = description[len(record.id):].strip()

            yield SequenceRecord(
                id=record.id,
                description=description,
                sequence=seq_str,
            )
    finally:
        if close_handle:
            handle.close()


def read_sequence_map(source: Union[str, Path, IO[str]]) -> dict[str, str]:
    """
    Read a FASTA source into an identifier -> sequence mapping.

    UniProt-style identifiers (``sp|P04637|P53_HUMAN``) are also keyed by
    their accession, which is how ELM instance tables refer to proteins.
    """
    sequences = {}
    for record in parse_fasta(source, validate=False):
        sequences[record.id] = record.sequence
        parts = record.id.split("|")
        if len(parts) >= 2 and parts[1]:
            sequences.setdefault(parts[1], record.sequence)
    return sequences


def write_fasta(
    records: Iterable[SequenceRecord],
    handle: IO[str],
) -> int:
    """
    Write records to an open handle in FASTA format.

    Returns:
        Number of records written
    """
    seq_records = (
        SeqRecord(Seq(r.sequence), id=r.id, description=r.description)
        for r in records
    )
    return SeqIO.write(seq_records, handle, "fasta")


def to_fasta(records: Iterable[SequenceRecord], line_length: int = 60) -> str:
    """
    Convert SequenceRecord objects to a FASTA-formatted string.

    Args:
        records: Records to format
        line_length: Characters per sequence line
    """
    lines = []
    for record in records:
        header = record.id
        if record.description:
            header = f"{header} {record.description}"
        lines.append(f">{header}")

        seq = record.sequence
        for i in range(0, len(seq), line_length):
            lines.append(seq[i:i + line_length])

    return "\n".join(lines)
