"""Bootstrap resampling of predictors.

Two strategies produce the resampling indices; both draw uniformly
**with replacement** and both keep the group sizes of the source
predictor.

1. **Stratified** — controls and cases are resampled independently,
   each within its own group::

       controls_idx ~ U{0, …, n_controls-1}^n_controls
       cases_idx    ~ U{0, …, n_cases-1}^n_cases

   Every replicate has exactly the original class balance.  This is
   the usual choice for ROC bootstrap confidence intervals.

2. **Non-stratified** — ``n_total`` logical indices are drawn from the
   pooled sequence (controls followed by cases).  The first
   ``n_controls`` draws fill the control slots, the remaining
   ``n_cases`` draws fill the case slots.  A slot may therefore receive
   a value from the other group: group *sizes* are fixed, group
   *membership* is random.

Index representation
--------------------
A :class:`ResampledPredictor` resolves logical index ``i`` as::

    i <  n_controls:  source[controls_idx[i]]
    i >= n_controls:  source[n_controls + cases_idx[i - n_controls]]

For stratified draws ``controls_idx`` lies in ``[0, n_controls)`` and
``cases_idx`` in ``[0, n_cases)``, i.e. they are per-group indices.
Non-stratified draws are stored with the same rule, so control slots
hold pooled logical indices in ``[0, n_total)`` and case slots hold
offsets from the case block in ``[-n_controls, n_cases)``.

Strategies are plain functions registered in
:data:`_STRATEGY_REGISTRY` and selected by :class:`ResampleStrategy`.
Randomness always comes from a caller-supplied ``random_state``
(anything :func:`numpy.random.default_rng` accepts), so fixed seeds
reproduce every draw exactly.
"""

from __future__ import annotations

import logging
import warnings
from collections.abc import Callable
from enum import Enum
from typing import TYPE_CHECKING, Any

import numpy as np

from .exceptions import EmptyDomainError, ResampleIndexError
from .predictor import _PredictorMixin, _read_only

if TYPE_CHECKING:
    from ._typing import RandomState
    from .predictor import PredictorLike

logger = logging.getLogger(__name__)


class ResampleStrategy(str, Enum):
    """Index-generation policy for bootstrap resampling."""

    STRATIFIED = "stratified"
    NON_STRATIFIED = "non_stratified"


# ------------------------------------------------------------------ #
# Index generation
# ------------------------------------------------------------------ #


def draw_indices(
    domain: int,
    size: int | tuple[int, ...],
    rng: np.random.Generator,
    *,
    group: str = "domain",
) -> np.ndarray:
    """Draw indices uniformly with replacement from ``[0, domain)``.

    Args:
        domain: Number of distinct indices available.
        size: Output shape.
        rng: Random generator.
        group: Label used in the error message.

    Returns:
        ``intp`` array of shape *size*.  Drawing zero values yields an
        empty array even when *domain* is zero.

    Raises:
        EmptyDomainError: If at least one value is requested from an
            empty domain.
    """
    n_draws = int(np.prod(size))
    if n_draws == 0:
        return np.empty(size, dtype=np.intp)
    if domain <= 0:
        raise EmptyDomainError(n_draws, group)
    return rng.integers(0, domain, size=size, dtype=np.int64).astype(np.intp, copy=False)


def _shape(n: int, n_boot: int | None) -> int | tuple[int, int]:
    return n if n_boot is None else (n_boot, n)


def stratified_indices(
    n_controls: int,
    n_cases: int,
    rng: np.random.Generator,
    n_boot: int | None = None,
) -> tuple[np.ndarray, np.ndarray]:
    """Resample controls and cases independently within each group.

    Args:
        n_controls: Size of the control group.
        n_cases: Size of the case group.
        rng: Random generator.  Controls are drawn first, then cases.
        n_boot: If given, draw that many replicates at once and return
            2-D arrays with one replicate per row.

    Returns:
        ``(controls_idx, cases_idx)`` with shapes ``(n_controls,)`` and
        ``(n_cases,)`` (or ``(n_boot, ·)``).
    """
    controls_idx = draw_indices(
        n_controls, _shape(n_controls, n_boot), rng, group="control group"
    )
    cases_idx = draw_indices(n_cases, _shape(n_cases, n_boot), rng, group="case group")
    return controls_idx, cases_idx


def non_stratified_indices(
    n_controls: int,
    n_cases: int,
    rng: np.random.Generator,
    n_boot: int | None = None,
) -> tuple[np.ndarray, np.ndarray]:
    """Resample from the pooled sequence, then split into the original sizes.

    The first ``n_controls`` pooled draws become control slots, the
    rest become case slots (see the module docstring for how the
    indices are stored).

    Args:
        n_controls: Size of the control group.
        n_cases: Size of the case group.
        rng: Random generator.
        n_boot: If given, draw that many replicates at once.

    Returns:
        ``(controls_idx, cases_idx)`` with the same shapes as
        :func:`stratified_indices`.
    """
    n_total = n_controls + n_cases
    pooled = draw_indices(n_total, _shape(n_total, n_boot), rng, group="pooled sample")
    controls_idx = pooled[..., :n_controls]
    cases_idx = pooled[..., n_controls:] - n_controls

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Non-stratified draw: %d case values in control slots, "
            "%d control values in case slots",
            int(np.count_nonzero(controls_idx >= n_controls)),
            int(np.count_nonzero(cases_idx < 0)),
        )
    return controls_idx, cases_idx


IndexStrategy = Callable[..., tuple[np.ndarray, np.ndarray]]

_STRATEGY_REGISTRY: dict[ResampleStrategy, IndexStrategy] = {
    ResampleStrategy.STRATIFIED: stratified_indices,
    ResampleStrategy.NON_STRATIFIED: non_stratified_indices,
}


def resolve_strategy(strategy: ResampleStrategy | str) -> ResampleStrategy:
    """Return the :class:`ResampleStrategy` for *strategy*.

    Args:
        strategy: An enum member or its string value
            (``"stratified"``, ``"non_stratified"``).

    Raises:
        ValueError: If *strategy* is not recognised.
    """
    try:
        return ResampleStrategy(strategy)
    except ValueError:
        valid = ", ".join(s.value for s in ResampleStrategy)
        raise ValueError(
            f"Invalid strategy {strategy!r}. Choose from: {valid}."
        ) from None


def get_resampled_vector(values: np.ndarray, idx: np.ndarray) -> np.ndarray:
    """Gather ``values[idx]`` into a new array."""
    return np.take(values, idx)


def _warn_if_degenerate(predictor: PredictorLike) -> None:
    for group, size in (("controls", predictor.n_controls), ("cases", predictor.n_cases)):
        if size == 0:
            warnings.warn(
                f"Resampling a predictor with no {group}; every replicate "
                f"will also have no {group}.",
                UserWarning,
                stacklevel=3,
            )


# ------------------------------------------------------------------ #
# ResampledPredictor
# ------------------------------------------------------------------ #


class ResampledPredictor(_PredictorMixin):
    """A predictor whose values are drawn from a source predictor.

    Same indexed-access and ordering contract as
    :class:`~rocresample.predictor.Predictor`; group sizes always equal
    those of *source*.

    Args:
        source: The predictor being resampled.  Held by reference and
            never modified.
        controls_idx: One index per control slot.
        cases_idx: One index per case slot.
        validate: Check that the index arrays have the right lengths
            and hold per-group indices (``[0, n_controls)`` and
            ``[0, n_cases)``).  With ``strategy=NON_STRATIFIED`` the
            cross-group ranges ``[0, n_total)`` and
            ``[-n_controls, n_cases)`` are accepted instead.  Off by
            default; malformed indices are then the caller's
            responsibility.
        strategy: The strategy that produced the indices, if any.

    Raises:
        ResampleIndexError: If *validate* is set and the indices do not
            fit *source*.

    Use :meth:`stratified`, :meth:`non_stratified` or :func:`resample`
    to draw the indices instead of supplying them.
    """

    def __init__(
        self,
        source: PredictorLike,
        controls_idx: Any,
        cases_idx: Any,
        *,
        validate: bool = False,
        strategy: ResampleStrategy | None = None,
    ):
        controls_idx = np.asarray(controls_idx, dtype=np.intp)
        cases_idx = np.asarray(cases_idx, dtype=np.intp)
        if validate:
            _validate_indices(source, controls_idx, cases_idx, strategy)

        self._source = source
        self._n_controls = source.n_controls
        self._n_cases = source.n_cases
        self._controls_idx = _read_only(controls_idx)
        self._cases_idx = _read_only(cases_idx)
        self.strategy = strategy

        # Gather through the pooled values so that non-stratified
        # cross-group slots resolve the same way as __getitem__.
        pooled = source.values
        self._controls = _read_only(get_resampled_vector(pooled, controls_idx))
        self._cases = _read_only(
            get_resampled_vector(pooled, cases_idx + self._n_controls)
        )

    @classmethod
    def stratified(
        cls, source: PredictorLike, random_state: RandomState = None
    ) -> ResampledPredictor:
        """Resample controls and cases independently within each group."""
        return resample(source, ResampleStrategy.STRATIFIED, random_state)

    @classmethod
    def non_stratified(
        cls, source: PredictorLike, random_state: RandomState = None
    ) -> ResampledPredictor:
        """Resample from the pooled sequence, keeping group sizes."""
        return resample(source, ResampleStrategy.NON_STRATIFIED, random_state)

    @property
    def source(self) -> PredictorLike:
        return self._source

    @property
    def n_controls(self) -> int:
        return self._n_controls

    @property
    def n_cases(self) -> int:
        return self._n_cases

    @property
    def controls(self) -> np.ndarray:
        """Resampled control values (materialised at construction)."""
        return self._controls

    @property
    def cases(self) -> np.ndarray:
        """Resampled case values (materialised at construction)."""
        return self._cases

    @property
    def controls_idx(self) -> np.ndarray:
        return self._controls_idx

    @property
    def cases_idx(self) -> np.ndarray:
        return self._cases_idx

    @property
    def pooled_idx(self) -> np.ndarray:
        """Source logical index behind every slot, in logical order."""
        return np.concatenate([self._controls_idx, self._cases_idx + self._n_controls])

    def __getitem__(self, index: int) -> Any:
        # Unchecked, and resolved through the source predictor.
        if index < self._n_controls:
            return self._source[self._controls_idx[index]]
        return self._source[self._n_controls + self._cases_idx[index - self._n_controls]]

    def __repr__(self) -> str:
        strategy = self.strategy.value if self.strategy is not None else None
        return (
            f"{type(self).__name__}(n_controls={self._n_controls}, "
            f"n_cases={self._n_cases}, strategy={strategy!r})"
        )


def _index_bounds(
    name: str, n_controls: int, n_cases: int, strategy: ResampleStrategy | None
) -> tuple[int, int]:
    # Non-stratified slots may point into either group of the source.
    if strategy is ResampleStrategy.NON_STRATIFIED:
        if name == "controls_idx":
            return 0, n_controls + n_cases
        return -n_controls, n_cases
    if name == "controls_idx":
        return 0, n_controls
    return 0, n_cases


def _validate_indices(
    source: PredictorLike,
    controls_idx: np.ndarray,
    cases_idx: np.ndarray,
    strategy: ResampleStrategy | None = None,
) -> None:
    for name, idx, size in (
        ("controls_idx", controls_idx, source.n_controls),
        ("cases_idx", cases_idx, source.n_cases),
    ):
        if idx.ndim != 1 or idx.shape[0] != size:
            raise ResampleIndexError(
                f"'{name}' must be one-dimensional with {size} entries, "
                f"got shape {idx.shape}."
            )
        low, high = _index_bounds(name, source.n_controls, source.n_cases, strategy)
        if size and (idx.min() < low or idx.max() >= high):
            raise ResampleIndexError(
                f"'{name}' values must lie in [{low}, {high}), got "
                f"[{idx.min()}, {idx.max()}]."
            )


def resample(
    predictor: PredictorLike,
    strategy: ResampleStrategy | str = ResampleStrategy.STRATIFIED,
    random_state: RandomState = None,
) -> ResampledPredictor:
    """Draw one bootstrap replicate of *predictor*.

    Args:
        predictor: The source predictor.
        strategy: ``"stratified"`` (default) or ``"non_stratified"``.
        random_state: Seed, ``SeedSequence`` or ``Generator``.  A
            ``Generator`` is advanced in place.

    Returns:
        A fully formed :class:`ResampledPredictor`.

    Raises:
        ValueError: If *strategy* is not recognised.
    """
    strategy = resolve_strategy(strategy)
    _warn_if_degenerate(predictor)
    rng = np.random.default_rng(random_state)
    controls_idx, cases_idx = _STRATEGY_REGISTRY[strategy](
        predictor.n_controls, predictor.n_cases, rng
    )
    logger.debug(
        "Drew %s replicate: %d controls, %d cases",
        strategy.value,
        predictor.n_controls,
        predictor.n_cases,
    )
    return ResampledPredictor(predictor, controls_idx, cases_idx, strategy=strategy)
