"""
Motif library.

The library is an explicitly constructed value mapping motif identifiers to
MotifClass objects. It is loaded once per run from the two ELM tab-separated
downloads (class definitions and instance definitions) and is never mutated
afterwards: the filtering methods return new libraries.

ELM downloads start with ``#`` comment lines carrying the download version,
for example::

    #ELM_Classes_Download_Version: 1.4
    #ELM_Classes_Download_Date: 2024-05-30 10:12:45.0
    "Accession"  "ELMIdentifier"  "FunctionalSiteName"  "Description"  "Regex" ...

Individual malformed rows are skipped with a warning; an empty class table
is fatal.
"""

from __future__ import annotations

import csv
import logging
import re
from io import StringIO
from typing import Iterable, Iterator, Mapping, Optional

from pydantic import ValidationError

from ..core.models import InstanceRecord, LogicLabel, MotifClass

logger = logging.getLogger(__name__)


class LibraryError(Exception):
    """Base exception for motif library errors."""
    pass


class LibraryUnavailableError(LibraryError):
    """Raised when the library cannot be retrieved or read."""
    pass


class MotifPatternError(LibraryError):
    """Raised when a motif pattern is not a valid regular expression."""
    pass


_VERSION_RE = re.compile(r"^#\s*ELM_\w*?Download_Version\s*:\s*(\S+)")


def _read_table(text: str) -> tuple[list[dict[str, str]], Optional[str]]:
    """Split an ELM download into data rows and its version comment."""
    version = None
    data_lines = []
    for line in text.splitlines():
        if line.startswith("#"):
            match = _VERSION_RE.match(line)
            if match:
                version = match.group(1)
            continue
        if line.strip():
            data_lines.append(line)

    reader = csv.DictReader(StringIO("\n".join(data_lines)), delimiter="\t")
    return list(reader), version


class MotifLibrary:
    """
    Read-only collection of motif classes keyed by identifier.

    Usage:
        >>> library = MotifLibrary.from_tsv(classes_text, instances_text)
        >>> ligands = library.filter_categories(include=["LIG"])
        >>> for motif in ligands:
        ...     print(motif.identifier, motif.pattern)
    """

    def __init__(
        self,
        motifs: Iterable[MotifClass] = (),
        classes_version: Optional[str] = None,
        instances_version: Optional[str] = None,
    ):
        self._motifs: dict[str, MotifClass] = {m.identifier: m for m in motifs}
        self.classes_version = classes_version
        self.instances_version = instances_version

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(n_motifs={len(self)}, "
            f"classes_version={self.classes_version!r})"
        )

    def __len__(self) -> int:
        return len(self._motifs)

    def __iter__(self) -> Iterator[MotifClass]:
        return iter(self._motifs.values())

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._motifs

    def __getitem__(self, identifier: str) -> MotifClass:
        return self._motifs[identifier]

    def get(self, identifier: str) -> Optional[MotifClass]:
        return self._motifs.get(identifier)

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    @classmethod
    def from_tsv(
        cls,
        classes_text: str,
        instances_text: Optional[str] = None,
        protein_sequences: Optional[Mapping[str, str]] = None,
    ) -> MotifLibrary:
        """
        Build a library from ELM class and instance downloads.

        Args:
            classes_text: Contents of the class table (elms_index.tsv)
            instances_text: Contents of the instance table (instances.tsv)
            protein_sequences: Primary accession -> protein sequence, used to
                fill instance residues when the table has no Sequence column

        Raises:
            LibraryError: If no valid motif class could be read
        """
        motifs = {}
        rows, classes_version = _read_table(classes_text)
        for line_no, row in enumerate(rows, start=1):
            motif = cls._parse_class(row, line_no)
            if motif is not None:
                motifs[motif.identifier] = motif

        if not motifs:
            raise LibraryError("Motif class table contains no valid records")

        instances_version = None
        if instances_text is not None:
            rows, instances_version = _read_table(instances_text)
            n_added = 0
            for line_no, row in enumerate(rows, start=1):
                instance = cls._parse_instance(row, line_no, protein_sequences)
                if instance is None:
                    continue
                owner = motifs.get(instance.motif_id)
                if owner is None:
                    logger.warning(
                        f"Instance row {line_no}: unknown motif class "
                        f"{instance.motif_id!r}, skipped"
                    )
                    continue
                owner.instances.append(instance)
                n_added += 1
            logger.info(f"Loaded {n_added} motif instances")

        logger.info(
            f"Loaded {len(motifs)} motif classes (version {classes_version or 'unknown'})"
        )
        return cls(motifs.values(), classes_version, instances_version)

    @staticmethod
    def _parse_class(row: dict[str, str], line_no: int) -> Optional[MotifClass]:
        try:
            motif = MotifClass(
                accession=row["Accession"].strip(),
                identifier=row["ELMIdentifier"].strip(),
                description=(row.get("Description") or row.get("FunctionalSiteName") or "").strip(),
                pattern=row["Regex"].strip(),
                probability=float(row["Probability"]),
            )
        except (AttributeError, KeyError, TypeError, ValueError, ValidationError) as e:
            logger.warning(f"Class row {line_no}: malformed record skipped ({e})")
            return None
        return motif

    @staticmethod
    def _parse_instance(
        row: dict[str, str],
        line_no: int,
        protein_sequences: Optional[Mapping[str, str]],
    ) -> Optional[InstanceRecord]:
        try:
            start = int(row["Start"])
            end = int(row["End"])
            protein_id = row["Primary_Acc"].strip()

            sequence = (row.get("Sequence") or "").strip().upper()
            if not sequence and protein_sequences and protein_id in protein_sequences:
                sequence = protein_sequences[protein_id][start - 1:end].upper()

            return InstanceRecord(
                accession=row["Accession"].strip(),
                motif_id=row["ELMIdentifier"].strip(),
                protein_id=protein_id,
                start=start,
                end=end,
                logic=LogicLabel.parse(row.get("InstanceLogic") or "unknown"),
                sequence=sequence,
            )
        except (AttributeError, KeyError, TypeError, ValueError, ValidationError) as e:
            logger.warning(f"Instance row {line_no}: malformed record skipped ({e})")
            return None

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def categories(self) -> dict[str, int]:
        """Category code -> number of motif classes."""
        counts: dict[str, int] = {}
        for motif in self:
            counts[motif.category] = counts.get(motif.category, 0) + 1
        return dict(sorted(counts.items()))

    def instances(self) -> Iterator[InstanceRecord]:
        """Iterate over the instances of every class, in library order."""
        for motif in self:
            yield from motif.instances

    def _derive(self, motifs: Iterable[MotifClass]) -> MotifLibrary:
        return MotifLibrary(motifs, self.classes_version, self.instances_version)

    def filter_categories(
        self,
        include: Optional[Iterable[str]] = None,
        exclude: Optional[Iterable[str]] = None,
    ) -> MotifLibrary:
        """
        Restrict the library by category code.

        Args:
            include: Keep only these categories (all when None)
            exclude: Drop these categories
        """
        keep = {c.upper() for c in include} if include else None
        drop = {c.upper() for c in exclude} if exclude else set()
        return self._derive(
            m for m in self
            if (keep is None or m.category in keep) and m.category not in drop
        )

    def filter_probability(self, max_probability: float) -> MotifLibrary:
        """Drop classes whose annotated chance probability exceeds the ceiling."""
        return self._derive(m for m in self if m.probability <= max_probability)
