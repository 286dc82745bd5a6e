"""
IUPred2A launcher.

IUPred2A predicts intrinsic disorder from pairwise energy estimates and,
with ANCHOR2, disordered binding regions: stretches that cannot form
favourable intrachain contacts but can gain energy by binding a globular
partner.

Reference:
Mészáros B, Erdős G, Dosztányi Z (2018) Nucleic Acids Research 46:W329-W337
DOI: 10.1093/nar/gky384

Requirements:
- IUPred2A standalone (iupred2a.py and its data directory), distributed by
  the authors under an academic license

Output parsed from ``iupred2a.py -a <fasta> long``::

    # POS   RES   IUPRED2   ANCHOR2
    1       M     0.4864    0.2142
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Optional

from ..core.intervals import run_length_encode
from .base import (
    DisorderPrediction,
    DisorderPredictor,
    PredictorConfig,
    PredictorError,
    PredictorTimeoutError,
)

logger = logging.getLogger(__name__)


def find_iupred_executable() -> Optional[Path]:
    """Look for iupred2a.py in $IUPRED_HOME, on PATH and in common locations."""
    env_home = os.environ.get("IUPRED_HOME")
    candidates = []
    if env_home:
        candidates.append(Path(env_home) / "iupred2a.py")

    on_path = shutil.which("iupred2a.py")
    if on_path:
        candidates.append(Path(on_path))

    candidates.extend([
        Path.home() / "iupred2a" / "iupred2a.py",
        Path("/opt/iupred2a/iupred2a.py"),
        Path("/usr/local/iupred2a/iupred2a.py"),
    ])

    for path in candidates:
        if path.is_file():
            return path
    return None


def parse_iupred_output(text: str, binding_threshold: float = 0.5) -> DisorderPrediction:
    """
    Parse IUPred2A tabular output.

    Args:
        text: Standard output of iupred2a.py run with ANCHOR2 enabled
        binding_threshold: ANCHOR2 score at which a residue is binding

    Raises:
        PredictorError: If a data row cannot be parsed or ANCHOR2 is missing
    """
    disorder_scores = []
    anchor_scores = []

    for line_no, line in enumerate(text.splitlines(), start=1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        parts = line.split()
        if len(parts) < 4:
            raise PredictorError(
                f"IUPred2A output line {line_no} has no ANCHOR2 column: {line!r}"
            )
        try:
            disorder_scores.append(float(parts[2]))
            anchor_scores.append(float(parts[3]))
        except ValueError as e:
            raise PredictorError(f"IUPred2A output line {line_no}: {e}") from e

    return DisorderPrediction(
        binding_regions=run_length_encode(anchor_scores, threshold=binding_threshold),
        disorder_scores=disorder_scores,
    )


class IUPredPredictor(DisorderPredictor):
    """
    Launcher for the IUPred2A/ANCHOR2 standalone tool.

    Usage:
        predictor = IUPredPredictor(PredictorConfig(executable=Path("iupred2a.py")))
        predictor.ensure_available()
        prediction = predictor.predict("MSTAVLPRQ...", "P12345")
        disorder = prediction.disorder_regions(threshold=0.5)
    """

    name = "IUPred2A"

    def __init__(self, config: Optional[PredictorConfig] = None):
        super().__init__(config)
        if self.config.executable is None:
            self.config.executable = find_iupred_executable()

    def is_available(self) -> bool:
        executable = self.config.executable
        return executable is not None and Path(executable).is_file()

    def _command(self, fasta_path: Path) -> list[str]:
        cmd = [str(self.config.executable), "-a", str(fasta_path), self.config.prediction_type]
        if self.config.interpreter:
            cmd.insert(0, self.config.interpreter)
        return cmd

    def _predict_impl(self, sequence: str, sequence_id: str) -> DisorderPrediction:
        with tempfile.TemporaryDirectory(prefix="iupred_") as tmpdir:
            fasta_path = Path(tmpdir) / "query.fasta"
            fasta_path.write_text(f">{sequence_id}\n{sequence}\n")

            try:
                result = subprocess.run(
                    self._command(fasta_path),
                    capture_output=True,
                    text=True,
                    timeout=self.config.timeout_seconds,
                )
            except subprocess.TimeoutExpired as e:
                raise PredictorTimeoutError(
                    f"{self.name} timed out after {self.config.timeout_seconds}s "
                    f"on {sequence_id!r}"
                ) from e
            except OSError as e:
                raise PredictorError(f"{self.name} could not be started: {e}") from e

        if result.returncode != 0:
            raise PredictorError(
                f"{self.name} failed with code {result.returncode} on "
                f"{sequence_id!r}: {result.stderr.strip()}"
            )

        return parse_iupred_output(result.stdout, self.config.binding_threshold)
