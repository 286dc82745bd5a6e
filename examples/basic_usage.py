#!/usr/bin/env python3
"""
elmasker Example: Annotating and Masking Short Linear Motifs

This script walks through scoring, motif assignment, filtering and masking
on a small hand-built motif library, so it runs without downloading ELM.
Pass a local ELM class table to run the same steps on the real library.

Run with: python examples/basic_usage.py [elms_index.tsv]
"""

import sys

from elmasker import (
    FilterConfig,
    InstanceRecord,
    LibrarySource,
    LogicLabel,
    MaskMode,
    MotifClass,
    MotifLibrary,
    PipelineConfig,
    annotate_sequence,
    load_library,
    score,
)


# Human p53 N-terminal transactivation region (residues 1-60)
P53_NTERM = "MEEPQSDPSVEPPLSQETFSDLWKLLPENNVLSPLPSQAMDDLMLSPDDIEQWFTEDPGP"


def print_header(title: str):
    """Print a formatted section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def demo_library() -> MotifLibrary:
    """
    A three-class library resembling real ELM entries.

    - LIG_MDM2: the MDM2-binding helix F..W..[LIV] of p53
    - MOD_CDK: proline-directed phosphorylation [ST]P
    - DEG_TEST: a permissive acidic stretch, with one curated false positive
    """
    return MotifLibrary([
        MotifClass(
            accession="ELME000001",
            identifier="LIG_MDM2",
            description="MDM2-binding helix",
            pattern="F[^P]{3}W[^P]{2}[LIV]",
            probability=0.0001,
        ),
        MotifClass(
            accession="ELME000002",
            identifier="MOD_CDK",
            description="Proline-directed phosphosite",
            pattern="[ST]P",
            probability=0.02,
        ),
        MotifClass(
            accession="ELME000003",
            identifier="DEG_TEST",
            description="Acidic stretch",
            pattern="[DE]{2}",
            probability=0.01,
            instances=[
                InstanceRecord(
                    accession="ELMI000001",
                    motif_id="DEG_TEST",
                    protein_id="P04637",
                    start=2,
                    end=3,
                    logic=LogicLabel.FALSE_POSITIVE,
                    sequence="EE",
                ),
            ],
        ),
    ])


def scoring_demo():
    """
    Independent-residue probability and entropy of motif occurrences.

    Low-complexity text (a poly-Q run) has a low entropy rate; the MDM2
    helix spreads its probability mass over diverse residues.
    """
    print_header("Occurrence Scoring")

    for text in ["FSDLWKLL", "QQQQQQQQ", "SP"]:
        result = score(text)
        print(f"  {text:<10} P={result.probability:.3e}  "
              f"H={result.entropy:.3f}  H/len={result.entropy_rate:.3f}")


def annotation_demo(library: MotifLibrary):
    """Raw and filtered motif assignment on p53."""
    print_header("Motif Assignment: p53 N-terminus")

    annotation = annotate_sequence(P53_NTERM, library, sequence_id="P04637")
    print(f"  {annotation.n_occurrences} occurrences without filters")
    for occ in annotation.all_occurrences():
        print(f"    {occ.motif_id:<10} {occ.start:>3}-{occ.end:<3} {occ.text}")

    config = PipelineConfig(filters=FilterConfig(logic_filter=True, max_probability=0.01))
    filtered = annotate_sequence(P53_NTERM, library, config, sequence_id="P04637")
    print(f"\n  {filtered.n_occurrences} occurrences after the logic and probability filters")
    for occ in filtered.all_occurrences():
        print(f"    {occ.motif_id:<10} {occ.start:>3}-{occ.end:<3} {occ.text}")


def masking_demo(library: MotifLibrary):
    """Soft and hard masking of background and motif regions."""
    print_header("Masking")

    for mode in MaskMode:
        for hard in (False, True):
            config = PipelineConfig(mask_mode=mode, hard_mask=hard)
            masked = annotate_sequence(P53_NTERM, library, config).masked_sequence
            label = f"{mode.value}, {'hard' if hard else 'soft'}"
            print(f"  {label:<18} {masked}")


def main():
    if len(sys.argv) > 1:
        library = load_library(LibrarySource(instances_url=None), classes_path=sys.argv[1])
    else:
        library = demo_library()
    print(f"Library: {len(library)} motif classes in {sorted(library.categories())}")

    scoring_demo()
    annotation_demo(library)
    masking_demo(library)


if __name__ == "__main__":
    main()
