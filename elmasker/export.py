"""
Report writers.

Three text formats are produced:
- Tabular assignment report: one tab-separated line per occurrence
- Feature report: GFF-style lines, one per occurrence
- Library dump: one line per motif class, then one per instance

Writers take open text handles so callers decide between files, stdout and
in-memory buffers. Masked sequences are written as FASTA.
"""

from __future__ import annotations

import logging
from typing import IO, Iterable

from .core.models import SequenceAnnotation
from .core.sequence import write_fasta
from .motifs.library import MotifLibrary

logger = logging.getLogger(__name__)


ASSIGNMENT_COLUMNS = [
    "sequence_id", "motif_id", "start", "end",
    "matched_text", "probability", "entropy", "entropy_rate",
]
ASSIGNMENT_HEADER = "\t".join(ASSIGNMENT_COLUMNS)

GFF_VERSION_HEADER = "##gff-version 3"
GFF_SOURCE = "ELM"
GFF_FEATURE_TYPE = "sequence_motif"

CLASS_DUMP_COLUMNS = ["accession", "category", "name", "description", "pattern", "probability"]
INSTANCE_DUMP_COLUMNS = [
    "accession", "motif_name", "protein_id", "start", "end", "sequence", "logic_label",
]


def _join(values: Iterable[object]) -> str:
    return "\t".join(str(v) for v in values)


def write_assignment_report(
    annotations: Iterable[SequenceAnnotation],
    handle: IO[str],
) -> int:
    """
    Write the tabular assignment report.

    Returns:
        Number of occurrence lines written
    """
    handle.write(ASSIGNMENT_HEADER + "\n")
    n_lines = 0
    for annotation in annotations:
        for occ in annotation.all_occurrences():
            handle.write(_join([
                annotation.record.id,
                occ.motif_id,
                occ.start,
                occ.end,
                occ.text,
                occ.probability,
                occ.entropy,
                occ.entropy_rate,
            ]) + "\n")
            n_lines += 1

    logger.info(f"Wrote {n_lines} occurrences to assignment report")
    return n_lines


def write_feature_report(
    annotations: Iterable[SequenceAnnotation],
    library: MotifLibrary,
    handle: IO[str],
) -> int:
    """
    Write occurrences as GFF-style feature lines.

    Column six carries the matched text; score and strand are placeholders.
    Feature ids increase from 1 across the whole report.

    Returns:
        Number of feature lines written
    """
    handle.write(GFF_VERSION_HEADER + "\n")
    feature_id = 0
    for annotation in annotations:
        for occ in annotation.all_occurrences():
            feature_id += 1
            motif = library.get(occ.motif_id)
            accession = motif.accession if motif is not None else ""
            attributes = f"ID={feature_id};Name={occ.motif_id};Accession={accession}"
            handle.write(_join([
                annotation.record.id,
                GFF_SOURCE,
                GFF_FEATURE_TYPE,
                occ.start,
                occ.end,
                occ.text,
                ".",
                ".",
                attributes,
            ]) + "\n")

    logger.info(f"Wrote {feature_id} features to feature report")
    return feature_id


def write_library_dump(library: MotifLibrary, handle: IO[str]) -> int:
    """
    Dump motif classes and their instances.

    Class lines come first, then instance lines, each block with its own
    header line.

    Returns:
        Number of class and instance lines written
    """
    n_lines = 0

    handle.write(_join(CLASS_DUMP_COLUMNS) + "\n")
    for motif in library:
        handle.write(_join([
            motif.accession,
            motif.category,
            motif.identifier,
            motif.description,
            motif.pattern,
            motif.probability,
        ]) + "\n")
        n_lines += 1

    handle.write(_join(INSTANCE_DUMP_COLUMNS) + "\n")
    for inst in library.instances():
        handle.write(_join([
            inst.accession,
            inst.motif_id,
            inst.protein_id,
            inst.start,
            inst.end,
            inst.sequence,
            inst.logic.value,
        ]) + "\n")
        n_lines += 1

    return n_lines


def write_masked_fasta(
    annotations: Iterable[SequenceAnnotation],
    handle: IO[str],
) -> int:
    """Write the masked sequence of each annotation as FASTA."""
    records = (
        a.record.model_copy(update={"sequence": a.masked_sequence})
        for a in annotations
        if a.masked_sequence is not None
    )
    return write_fasta(records, handle)
