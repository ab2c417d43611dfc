"""rocresample — ordering and bootstrap resampling for ROC statistics.

Exposes two numeric samples (controls and cases) as one logical
sequence, computes its stable sort order under a direction policy, and
draws stratified or non-stratified bootstrap replicates that keep the
original group sizes.  AUC, confidence intervals and comparison tests
are left to the caller; this package supplies the primitives they
iterate over.

Public API:
    .. autosummary::
        Predictor
        PredictorLike
        PredictorComparator
        ResampledPredictor
        ResampleStrategy
        resample
        draw_indices
        stratified_indices
        non_stratified_indices
        get_resampled_vector
        generate_bootstrap_indices
        iter_resampled
        spawn_generators
        BootstrapIndices
        get_backend
        set_backend
        PredictorIndexError
        EmptyDomainError
        ResampleIndexError
"""

from ._config import get_backend, set_backend
from ._results import BootstrapIndices
from .bootstrap import generate_bootstrap_indices, iter_resampled, spawn_generators
from .comparator import PredictorComparator
from .exceptions import EmptyDomainError, PredictorIndexError, ResampleIndexError
from .predictor import Predictor, PredictorLike
from .resampling import (
    ResampledPredictor,
    ResampleStrategy,
    draw_indices,
    get_resampled_vector,
    non_stratified_indices,
    resample,
    stratified_indices,
)

__all__ = [
    "BootstrapIndices",
    "EmptyDomainError",
    "Predictor",
    "PredictorComparator",
    "PredictorIndexError",
    "PredictorLike",
    "ResampleIndexError",
    "ResampleStrategy",
    "ResampledPredictor",
    "draw_indices",
    "generate_bootstrap_indices",
    "get_backend",
    "get_resampled_vector",
    "iter_resampled",
    "non_stratified_indices",
    "resample",
    "set_backend",
    "spawn_generators",
    "stratified_indices",
]

__version__ = "0.1.0"
