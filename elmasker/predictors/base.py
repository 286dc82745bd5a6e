"""
Abstract interface for disorder and binding-region predictors.

Two of the motif filters need structural context that sequence alone does
not give: whether a match lies in an intrinsically disordered segment, and
whether it lies in a predicted molecular recognition feature (MoRF), a
short disordered stretch that folds on binding. This module defines what
the pipeline expects from a tool that supplies that context.

Predictor failures are never degraded gracefully: a missing predictor, a
timeout or a crash would silently under-filter, so all of them raise.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ..core.intervals import run_length_encode
from ..core.models import Region

logger = logging.getLogger(__name__)


@dataclass
class PredictorConfig:
    """
    Configuration for an external predictor.

    Attributes:
        executable: Path to the predictor script or binary
        interpreter: Interpreter used to run a script (None for binaries)
        timeout_seconds: Maximum runtime per sequence
        prediction_type: Tool-specific mode, e.g. IUPred's ``long``
        binding_threshold: ANCHOR2 score at which a residue is binding
    """
    executable: Optional[Path] = None
    interpreter: Optional[str] = "python3"
    timeout_seconds: float = 600.0
    prediction_type: str = "long"
    binding_threshold: float = 0.5


class PredictorError(Exception):
    """Base exception for predictor errors."""
    pass


class PredictorTimeoutError(PredictorError):
    """Raised when prediction exceeds timeout."""
    pass


class PredictorUnavailableError(PredictorError):
    """Raised when a predictor is not installed or cannot be run."""
    pass


@dataclass
class DisorderPrediction:
    """
    Output of a disorder predictor for one sequence.

    Attributes:
        binding_regions: Predicted binding (MoRF) regions
        disorder_scores: Per-residue disorder probability, index i is residue i + 1
    """
    binding_regions: list[Region] = field(default_factory=list)
    disorder_scores: list[float] = field(default_factory=list)

    def disorder_regions(self, threshold: float = 0.5) -> list[Region]:
        """Maximal runs of residues with disorder probability >= threshold."""
        return run_length_encode(self.disorder_scores, threshold=threshold)


class DisorderPredictor(ABC):
    """
    Abstract base class for disorder/binding-region predictors.

    Subclasses set ``name`` and implement ``is_available()`` and
    ``_predict_impl()``. ``predict()`` wraps the implementation with input
    checks and logging.
    """

    name: str = "DisorderPredictor"

    def __init__(self, config: Optional[PredictorConfig] = None):
        self.config = config or PredictorConfig()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"

    @abstractmethod
    def is_available(self) -> bool:
        """Whether the predictor can be run in this environment."""
        pass

    def ensure_available(self):
        """
        Fail fast if the predictor cannot be run.

        Raises:
            PredictorUnavailableError: If is_available() is False
        """
        if not self.is_available():
            raise PredictorUnavailableError(
                f"{self.name} is not available (executable: {self.config.executable})"
            )

    @abstractmethod
    def _predict_impl(self, sequence: str, sequence_id: str) -> DisorderPrediction:
        pass

    def predict(self, sequence: str, sequence_id: str = "query") -> DisorderPrediction:
        """
        Predict binding regions and per-residue disorder for a sequence.

        Raises:
            PredictorError: On failure; PredictorTimeoutError on timeout
        """
        if not sequence:
            raise PredictorError(f"{self.name}: empty sequence {sequence_id!r}")

        prediction = self._predict_impl(sequence.upper(), sequence_id)

        if len(prediction.disorder_scores) != len(sequence):
            raise PredictorError(
                f"{self.name}: {len(prediction.disorder_scores)} scores for "
                f"{len(sequence)} residues in {sequence_id!r}"
            )

        logger.debug(
            f"{self.name}: {sequence_id} has {len(prediction.binding_regions)} binding regions"
        )
        return prediction
