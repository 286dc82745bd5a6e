"""
Command-line interface for elmasker.

Usage patterns:
    elmasker assign sequences.fasta -o motifs.tsv
    elmasker mask sequences.fasta -o masked.fasta
    elmasker list-categories
"""

from .main import cli, main

__all__ = ["cli", "main"]
