"""Predictor: controls and cases as one logical sequence.

A predictor holds two numeric samples — *controls* (negative /
reference class) and *cases* (positive class) — and exposes them as a
single sequence indexed by a **logical index**::

    logical index:  0 .. n_controls-1  |  n_controls .. n_total-1
    value:          controls[i]        |  cases[i - n_controls]

Controls always come first.  The ordering of that sequence
(:meth:`get_order`) is what ROC curve and AUC code downstream walks
through to place thresholds.

Two implementations satisfy :class:`PredictorLike`:

* :class:`Predictor` — backed directly by the two arrays.
* :class:`~rocresample.resampling.ResampledPredictor` — backed by
  resampling indices into a source predictor.

Shared behaviour (membership queries, checked access, ordering) lives
in :class:`_PredictorMixin` and is written only against
``n_controls`` / ``n_total`` / ``__getitem__`` / ``values``.

Checked versus unchecked access
-------------------------------
``predictor[i]`` does **not** check bounds; ordering and gathering only
ever generate in-range indices and pay nothing for a check.  Callers
holding untrusted indices either test :meth:`~_PredictorMixin.is_valid`
first or use :meth:`~_PredictorMixin.at`, which raises
:class:`~rocresample.exceptions.PredictorIndexError`.

``is_valid(i)`` only tests ``i < n_total``; it does not reject
negative indices.  This asymmetry is long-standing behaviour and is
kept.
"""

from __future__ import annotations

from functools import cached_property
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import numpy as np
import pandas as pd

from ._backends import resolve_backend
from ._compat import _as_float_vector
from .comparator import PredictorComparator, validate_direction
from .exceptions import PredictorIndexError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from ._typing import VectorLike


def _read_only(arr: np.ndarray) -> np.ndarray:
    """Read-only view of *arr*; the caller's array stays writeable."""
    view = arr.view()
    view.flags.writeable = False
    return view


# ------------------------------------------------------------------ #
# Protocol
# ------------------------------------------------------------------ #


@runtime_checkable
class PredictorLike(Protocol):
    """Indexed-access and ordering contract shared by all predictors."""

    @property
    def n_controls(self) -> int: ...

    @property
    def n_cases(self) -> int: ...

    @property
    def n_total(self) -> int: ...

    @property
    def controls(self) -> np.ndarray: ...

    @property
    def cases(self) -> np.ndarray: ...

    @property
    def values(self) -> np.ndarray:
        """All values in logical order (controls then cases)."""
        ...

    def __getitem__(self, index: int) -> float: ...

    def get_order(self, direction: str = ">", *, backend: str | None = None) -> np.ndarray: ...


# ------------------------------------------------------------------ #
# Shared behaviour
# ------------------------------------------------------------------ #


class _PredictorMixin:
    """Behaviour derived from ``n_controls``, ``n_cases`` and ``__getitem__``.

    Subclasses provide ``n_controls``, ``n_cases``, ``controls``,
    ``cases`` and ``__getitem__``.
    """

    @property
    def n_total(self) -> int:
        return self.n_controls + self.n_cases

    def __len__(self) -> int:
        return self.n_total

    @cached_property
    def values(self) -> np.ndarray:
        """All values in logical order, as one read-only array."""
        return _read_only(np.concatenate([self.controls, self.cases]))

    def __iter__(self) -> Iterator[float]:
        return iter(self.values)

    def is_control(self, index: int) -> bool:
        return index < self.n_controls

    def is_case(self, index: int) -> bool:
        return index >= self.n_controls

    def is_valid(self, index: int) -> bool:
        """Whether a value exists at *index* (upper bound only)."""
        return index < self.n_total

    def at(self, index: int) -> float:
        """Checked access to the value at logical *index*.

        Raises:
            PredictorIndexError: If *index* is not in ``[0, n_total)``.
        """
        if index < 0 or not self.is_valid(index):
            raise PredictorIndexError(index, self.n_total)
        return self[index]

    def comparator(self, direction: str = ">") -> PredictorComparator:
        """A :class:`PredictorComparator` reading through this predictor."""
        return PredictorComparator(self, direction)

    def get_order(self, direction: str = ">", *, backend: str | None = None) -> np.ndarray:
        """Stable sort order of the logical indices.

        Args:
            direction: ``">"`` (default) sorts values ascending, ``"<"``
                descending.  See :mod:`rocresample.comparator` for why
                the tokens read backwards.
            backend: ``"numpy"``, ``"jax"``, ``"python"``, or
                ``None``/``"auto"`` for the configured default
                (:func:`~rocresample.get_backend`).  The first call
                that resolves to ``"jax"`` imports JAX and turns on the
                process-wide ``jax_enable_x64`` flag; pin
                ``set_backend("numpy")`` to leave a host application's
                JAX configuration untouched.

        Returns:
            ``intp`` array, a permutation of ``range(n_total)``.  Tied
            values keep their original relative order.

        Raises:
            ValueError: If *direction* or *backend* is not recognised.
            ImportError: If *backend* is ``"jax"`` and JAX is missing.
        """
        direction = validate_direction(direction)
        return resolve_backend(backend).order(self, direction)  # type: ignore[arg-type]

    def to_frame(self) -> pd.DataFrame:
        """Values and group labels, one row per logical index."""
        group = pd.Categorical(
            ["control"] * self.n_controls + ["case"] * self.n_cases,
            categories=["control", "case"],
        )
        return pd.DataFrame({"value": self.values, "group": group})


# ------------------------------------------------------------------ #
# Predictor
# ------------------------------------------------------------------ #


class Predictor(_PredictorMixin):
    """Controls and cases viewed as one logical sequence.

    Args:
        controls: Values of the control (negative) group.
        cases: Values of the case (positive) group.

    Both inputs are converted to 1-D ``float64`` arrays (without a
    copy when they already are) and exposed as read-only views.
    Either group may be empty.

    Example::

        >>> p = Predictor([3.0, 1.0, 2.0], [5.0, 4.0])
        >>> p.get_order(">").tolist()
        [1, 2, 0, 4, 3]
    """

    def __init__(self, controls: VectorLike, cases: VectorLike):
        self._controls = _read_only(_as_float_vector(controls, name="controls"))
        self._cases = _read_only(_as_float_vector(cases, name="cases"))
        self._n_controls = int(self._controls.shape[0])
        self._n_cases = int(self._cases.shape[0])

    @property
    def n_controls(self) -> int:
        return self._n_controls

    @property
    def n_cases(self) -> int:
        return self._n_cases

    @property
    def controls(self) -> np.ndarray:
        return self._controls

    @property
    def cases(self) -> np.ndarray:
        return self._cases

    def __getitem__(self, index: int) -> Any:
        # Unchecked: out-of-range indices are the caller's responsibility.
        if index < self._n_controls:
            return self._controls[index]
        return self._cases[index - self._n_controls]

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(n_controls={self._n_controls}, "
            f"n_cases={self._n_cases})"
        )
