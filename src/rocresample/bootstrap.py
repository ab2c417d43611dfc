"""Batched bootstrap replicate generation.

Bootstrap confidence intervals and comparison tests recompute a
statistic on hundreds or thousands of replicates.  Drawing them one at
a time through :func:`~rocresample.resampling.resample` costs one
Python call per replicate; :func:`generate_bootstrap_indices` draws
all ``n_boot`` replicates in a single vectorised
``Generator.integers`` call per group and returns the index matrices::

    controls_idx  (n_boot, n_controls)
    cases_idx     (n_boot, n_cases)

Each row obeys the same rules as a single draw of the chosen strategy.

Parallel use
------------
A ``numpy.random.Generator`` must not be shared between threads.
:func:`spawn_generators` derives independent child generators from one
seed so that each worker gets its own stream and the whole run stays
reproducible.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING

import numpy as np

from ._results import BootstrapIndices
from .resampling import (
    _STRATEGY_REGISTRY,
    ResampledPredictor,
    ResampleStrategy,
    _warn_if_degenerate,
    resolve_strategy,
)

if TYPE_CHECKING:
    from ._typing import RandomState
    from .predictor import PredictorLike

logger = logging.getLogger(__name__)


def generate_bootstrap_indices(
    predictor: PredictorLike,
    n_boot: int,
    strategy: ResampleStrategy | str = ResampleStrategy.STRATIFIED,
    random_state: RandomState = None,
) -> BootstrapIndices:
    """Draw resampling indices for *n_boot* replicates at once.

    Args:
        predictor: The source predictor.
        n_boot: Number of replicates (at least 1).
        strategy: ``"stratified"`` (default) or ``"non_stratified"``.
        random_state: Seed, ``SeedSequence`` or ``Generator``.

    Returns:
        A :class:`~rocresample._results.BootstrapIndices` holding both
        index matrices and a reference to *predictor*.

    Raises:
        ValueError: If *n_boot* < 1 or *strategy* is not recognised.
    """
    if n_boot < 1:
        raise ValueError(f"n_boot must be at least 1, got {n_boot}.")
    strategy = resolve_strategy(strategy)
    _warn_if_degenerate(predictor)

    rng = np.random.default_rng(random_state)
    controls_idx, cases_idx = _STRATEGY_REGISTRY[strategy](
        predictor.n_controls, predictor.n_cases, rng, n_boot=n_boot
    )
    logger.debug(
        "Drew %d %s replicates (%d controls, %d cases each)",
        n_boot,
        strategy.value,
        predictor.n_controls,
        predictor.n_cases,
    )

    return BootstrapIndices(
        strategy=strategy,
        n_boot=n_boot,
        n_controls=predictor.n_controls,
        n_cases=predictor.n_cases,
        controls_idx=controls_idx,
        cases_idx=cases_idx,
        random_state=random_state if isinstance(random_state, int) else None,
        source=predictor,
    )


def iter_resampled(
    predictor: PredictorLike,
    n_boot: int,
    strategy: ResampleStrategy | str = ResampleStrategy.STRATIFIED,
    random_state: RandomState = None,
) -> Iterator[ResampledPredictor]:
    """Iterate over *n_boot* resampled predictors.

    Same draws as :func:`generate_bootstrap_indices` with identical
    arguments.
    """
    return iter(generate_bootstrap_indices(predictor, n_boot, strategy, random_state))


def spawn_generators(random_state: RandomState, n: int) -> list[np.random.Generator]:
    """Return *n* independent generators derived from *random_state*.

    Args:
        random_state: Seed, ``SeedSequence`` or ``Generator``.  A
            ``Generator`` is spawned from directly.
        n: Number of child generators.

    Returns:
        List of *n* ``numpy.random.Generator`` instances with
        non-overlapping streams.
    """
    if isinstance(random_state, np.random.Generator):
        return random_state.spawn(n)
    if isinstance(random_state, np.random.SeedSequence):
        seq = random_state
    else:
        seq = np.random.SeedSequence(random_state)
    return [np.random.default_rng(child) for child in seq.spawn(n)]
