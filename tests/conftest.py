"""
Shared fixtures: a small ELM-style library in memory and on disk.
"""

import pytest

from elmasker.core.models import InstanceRecord, LogicLabel, MotifClass
from elmasker.motifs.library import MotifLibrary

from .sample_data import CLASSES_TSV, INSTANCE_PROTEINS_FASTA, INSTANCES_TSV, PROTEIN_SEQUENCES


@pytest.fixture
def classes_tsv():
    return CLASSES_TSV


@pytest.fixture
def instances_tsv():
    return INSTANCES_TSV


@pytest.fixture
def library():
    """Library parsed from the sample downloads, instance residues filled in."""
    return MotifLibrary.from_tsv(CLASSES_TSV, INSTANCES_TSV, PROTEIN_SEQUENCES)


@pytest.fixture
def library_files(tmp_path):
    """Sample downloads written to disk, as (classes_path, instances_path)."""
    classes_path = tmp_path / "elms_index.tsv"
    instances_path = tmp_path / "instances.tsv"
    classes_path.write_text(CLASSES_TSV)
    instances_path.write_text(INSTANCES_TSV)
    return classes_path, instances_path


@pytest.fixture
def instance_proteins_file(tmp_path):
    """UniProt-style FASTA of the proteins the sample instances come from."""
    path = tmp_path / "elm_instances.fasta"
    path.write_text(INSTANCE_PROTEINS_FASTA)
    return path


@pytest.fixture
def avl_motif():
    """Single motif class with one false-positive instance 'AVL'."""
    return MotifClass(
        accession="ELME000001",
        identifier="LIG_TEST_AVL",
        description="Ligand motif matching AVL",
        pattern="AVL",
        probability=0.0005,
        instances=[
            InstanceRecord(
                accession="ELMI000001",
                motif_id="LIG_TEST_AVL",
                protein_id="P00001",
                start=4,
                end=6,
                logic=LogicLabel.FALSE_POSITIVE,
                sequence="AVL",
            ),
        ],
    )
