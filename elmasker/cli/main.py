"""
elmasker Command Line Interface.

Annotates FASTA files with ELM motif occurrences, masks them, and inspects
the motif library. Built with Click; status output goes to stderr through
rich so reports can be piped from stdout.

Usage:
    elmasker assign proteins.fasta -o motifs.tsv
    elmasker assign proteins.fasta --format gff --logic --instance-sequences elm_instances.fasta
    elmasker assign proteins.fasta --disorder --disorder-threshold 0.4 --iupred iupred2a.py
    elmasker mask proteins.fasta -o masked.fasta --mode motifs --hard
    elmasker dump-library -o elm_library.tsv
    elmasker list-categories
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .. import __version__

# Status messages go to stderr, reports may go to stdout
console = Console(stderr=True)


def setup_logging(verbose: bool, quiet: bool):
    """Route library logging through rich."""
    level = logging.WARNING
    if verbose:
        level = logging.INFO
    if quiet:
        level = logging.ERROR
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@contextmanager
def open_output(output: Optional[str]) -> Iterator:
    """Open the output file, or yield stdout when no path is given."""
    if output is None:
        yield sys.stdout
        return
    path = Path(output)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as handle:
        yield handle


def library_options(func):
    """Options selecting and restricting the motif library."""
    options = [
        click.option("--classes", type=click.Path(exists=True),
                     help="Local ELM class table (default: download)"),
        click.option("--instances", type=click.Path(exists=True),
                     help="Local ELM instance table (default: download)"),
        click.option("--instance-sequences", type=click.Path(exists=True), default=None,
                     help="FASTA of the instance source proteins; fills instance "
                          "residues for --logic"),
        click.option("--no-cache", is_flag=True, help="Do not use the download cache"),
        click.option("--category", "-c", multiple=True,
                     help="Only use motif classes of this category (repeatable)"),
        click.option("--exclude-category", "-C", multiple=True,
                     help="Skip motif classes of this category (repeatable)"),
        click.option("--max-class-probability", type=float, default=None,
                     help="Skip classes whose annotated probability exceeds this"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def filter_options(func):
    """Options controlling the per-occurrence filters and predictor."""
    options = [
        click.option("--logic/--no-logic", default=False,
                     help="Drop matches identical to curated instances (default: off)"),
        click.option("--logic-label",
                     type=click.Choice(["FalsePositive", "TrueNegative", "TruePositive", "Unknown"]),
                     default="FalsePositive", help="Instance label used by --logic"),
        click.option("--max-probability", type=float, default=None,
                     help="Drop matches more probable than this"),
        click.option("--min-entropy-rate", type=float, default=None,
                     help="Drop matches with a lower entropy rate (bits/residue)"),
        click.option("--morf", is_flag=True,
                     help="Keep only matches overlapping predicted binding regions"),
        click.option("--disorder", is_flag=True,
                     help="Keep only matches overlapping predicted disordered regions"),
        click.option("--disorder-threshold", type=float, default=0.5, show_default=True,
                     help="IUPred2 score at which a residue is disordered"),
        click.option("--binding-threshold", type=float, default=0.5, show_default=True,
                     help="ANCHOR2 score at which a residue is binding"),
        click.option("--iupred", type=click.Path(), default=None,
                     help="Path to iupred2a.py (default: $IUPRED_HOME or PATH)"),
        click.option("--timeout", type=float, default=600.0, show_default=True,
                     help="Predictor timeout per sequence in seconds"),
        click.option("--workers", "-w", type=int, default=0,
                     help="Worker threads across sequences (0 = sequential)"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def build_library(opts: dict):
    """Load and restrict the motif library according to CLI options."""
    from ..core.sequence import read_sequence_map
    from ..motifs.fetch import LibrarySource, load_library

    protein_sequences = None
    if opts["instance_sequences"]:
        protein_sequences = read_sequence_map(opts["instance_sequences"])

    source = LibrarySource(use_cache=not opts["no_cache"])
    library = load_library(
        source,
        classes_path=opts["classes"],
        instances_path=opts["instances"],
        protein_sequences=protein_sequences,
    )
    if opts["category"] or opts["exclude_category"]:
        library = library.filter_categories(
            include=opts["category"] or None,
            exclude=opts["exclude_category"] or None,
        )
    if opts["max_class_probability"] is not None:
        library = library.filter_probability(opts["max_class_probability"])
    return library


def build_pipeline(library, opts: dict, **pipeline_kwargs):
    """Build the pipeline, constructing the predictor only when needed."""
    from ..core.models import LogicLabel
    from ..motifs.matcher import FilterConfig
    from ..pipeline import MotifPipeline, PipelineConfig
    from ..predictors.base import PredictorConfig
    from ..predictors.iupred import IUPredPredictor

    filters = FilterConfig(
        logic_filter=opts["logic"],
        logic_label=LogicLabel(opts["logic_label"]),
        max_probability=opts["max_probability"],
        min_entropy_rate=opts["min_entropy_rate"],
        morf_filter=opts["morf"],
        disorder_filter=opts["disorder"],
    )

    predictor = None
    if filters.needs_predictor:
        predictor = IUPredPredictor(PredictorConfig(
            executable=Path(opts["iupred"]) if opts["iupred"] else None,
            timeout_seconds=opts["timeout"],
            binding_threshold=opts["binding_threshold"],
        ))

    config = PipelineConfig(
        filters=filters,
        disorder_threshold=opts["disorder_threshold"],
        max_workers=opts["workers"],
        **pipeline_kwargs,
    )
    return MotifPipeline(library, config, predictor)


@contextmanager
def fatal_errors():
    """Turn library, predictor and sequence errors into exit status 1."""
    from ..core.sequence import SequenceError
    from ..motifs.library import LibraryError
    from ..predictors.base import PredictorError

    try:
        yield
    except (LibraryError, PredictorError, SequenceError, OSError) as e:
        console.print(f"[red]✗ {e.__class__.__name__}:[/red] {e}")
        sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="elmasker")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.pass_context
def cli(ctx, verbose: bool, quiet: bool):
    """
    elmasker: annotate and mask protein sequences with ELM short linear motifs.

    \b
    • Regex search of every ELM class in each input sequence
    • Probability and entropy scoring of each occurrence
    • Curation, composition, complexity and disorder/MoRF filters
    • Soft or hard masking of motif or background regions

    Run 'elmasker COMMAND --help' for command-specific help.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    setup_logging(verbose, quiet)


@cli.command("assign")
@click.argument("input_file", type=click.Path(exists=True))
@click.option("--output", "-o", type=click.Path(), default=None,
              help="Output file (default: stdout)")
@click.option("--format", "-f", "fmt", type=click.Choice(["tsv", "gff"]), default="tsv",
              help="Report format")
@library_options
@filter_options
@click.pass_context
def assign_cmd(ctx, input_file: str, output: Optional[str], fmt: str, **opts):
    """
    Report motif occurrences found in INPUT_FILE (FASTA).

    \b
    Examples:
        elmasker assign proteins.fasta -o motifs.tsv
        elmasker assign proteins.fasta -f gff -c LIG -c DOC --logic
    """
    from ..core.sequence import parse_fasta
    from ..export import write_assignment_report, write_feature_report

    with fatal_errors():
        library = build_library(opts)
        if not ctx.obj.get("quiet"):
            console.print(f"[green]✓[/green] Loaded {len(library)} motif classes")

        pipeline = build_pipeline(library, opts)
        annotations = pipeline.run(parse_fasta(input_file))

        with open_output(output) as handle:
            if fmt == "gff":
                n_written = write_feature_report(annotations, library, handle)
            else:
                n_written = write_assignment_report(annotations, handle)

    if not ctx.obj.get("quiet"):
        console.print(f"[green]✓[/green] Reported {n_written} motif occurrences")


@cli.command("mask")
@click.argument("input_file", type=click.Path(exists=True))
@click.option("--output", "-o", type=click.Path(), default=None,
              help="Output FASTA file (default: stdout)")
@click.option("--mode", type=click.Choice(["background", "motifs"]), default="background",
              show_default=True, help="Mask motif-free background or the motifs")
@click.option("--hard", is_flag=True, help="Replace residues instead of lowercasing")
@click.option("--mask-char", default="x", show_default=True,
              help="Replacement character for --hard")
@click.option("--num-elms", "-n", type=int, default=1, show_default=True,
              help="Occurrences that must stack on a residue for it to be motif-covered")
@library_options
@filter_options
@click.pass_context
def mask_cmd(
    ctx,
    input_file: str,
    output: Optional[str],
    mode: str,
    hard: bool,
    mask_char: str,
    num_elms: int,
    **opts,
):
    """
    Mask INPUT_FILE (FASTA) using motif coverage.

    \b
    Examples:
        elmasker mask proteins.fasta -o masked.fasta
        elmasker mask proteins.fasta --mode motifs --hard --mask-char X
    """
    from ..core.sequence import parse_fasta
    from ..export import write_masked_fasta
    from ..masking.masker import MaskMode

    if len(mask_char) != 1:
        raise click.BadParameter("must be a single character", param_hint="--mask-char")

    with fatal_errors():
        library = build_library(opts)
        pipeline = build_pipeline(
            library,
            opts,
            num_elms=num_elms,
            mask_mode=MaskMode(mode),
            hard_mask=hard,
            mask_char=mask_char,
        )
        annotations = pipeline.run(parse_fasta(input_file))

        with open_output(output) as handle:
            n_written = write_masked_fasta(annotations, handle)

    if not ctx.obj.get("quiet"):
        console.print(f"[green]✓[/green] Masked {n_written} sequence(s)")


@cli.command("dump-library")
@click.option("--output", "-o", type=click.Path(), default=None,
              help="Output file (default: stdout)")
@library_options
def dump_library_cmd(output: Optional[str], **opts):
    """
    Write motif classes and instances as tab-separated lines.
    """
    from ..export import write_library_dump

    with fatal_errors():
        library = build_library(opts)
        with open_output(output) as handle:
            write_library_dump(library, handle)


@cli.command("list-categories")
@library_options
def list_categories_cmd(**opts):
    """
    List motif categories with class counts.
    """
    with fatal_errors():
        library = build_library(opts)

    table = Table(
        title=f"ELM categories (version {library.classes_version or 'unknown'})",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Category", style="bold")
    table.add_column("Classes", justify="right")

    for category, count in library.categories().items():
        table.add_row(category, str(count))

    console.print(table)


def main():
    """Main entry point for CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
