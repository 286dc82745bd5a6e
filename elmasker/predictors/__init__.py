"""
Disorder and binding-region predictors used by the MoRF and disorder filters.

Available predictors:
    IUPredPredictor: IUPred2A disorder with ANCHOR2 binding regions
"""

from .base import (
    DisorderPrediction,
    DisorderPredictor,
    PredictorConfig,
    PredictorError,
    PredictorTimeoutError,
    PredictorUnavailableError,
)
from .iupred import IUPredPredictor, find_iupred_executable, parse_iupred_output

__all__ = [
    "DisorderPrediction",
    "DisorderPredictor",
    "PredictorConfig",
    "PredictorError",
    "PredictorTimeoutError",
    "PredictorUnavailableError",
    "IUPredPredictor",
    "find_iupred_executable",
    "parse_iupred_output",
]
