"""Ordering comparator over logical predictor indices.

A :class:`PredictorComparator` is a strict weak ordering on integer
indices ``i, j`` into anything that supports ``obj[i] -> float``
(a :class:`~rocresample.predictor.Predictor`, a
:class:`~rocresample.resampling.ResampledPredictor`, or even a plain
NumPy array).  It never inspects group membership.

Direction tokens
----------------
Two tokens are recognised, following the ROC ``direction`` argument
they are passed through from:

* ``">"`` (default) — ``less(i, j)`` is ``x[i] < x[j]``, i.e.
  **ascending** order.
* ``"<"`` — ``less(i, j)`` is ``x[j] < x[i]``, i.e. **descending**
  order.

The token reads backwards relative to the resulting sort order.  That
is a naming quirk inherited by callers that already depend on it, so it
is kept as is.

Ties
----
Equal values are never reported as ``less`` in either direction, so a
stable sort keeps tied indices in their original relative order.
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import Any, Literal, Protocol

Direction = Literal[">", "<"]

_VALID_DIRECTIONS = (">", "<")


class SupportsIndexedValues(Protocol):
    """Anything that maps an integer index to a float."""

    def __getitem__(self, index: int, /) -> Any: ...


def validate_direction(direction: str) -> Direction:
    """Return *direction* if it is a recognised token.

    Raises:
        ValueError: If *direction* is neither ``">"`` nor ``"<"``.
    """
    if direction not in _VALID_DIRECTIONS:
        raise ValueError(
            f"Invalid direction {direction!r}. Choose from: "
            f"{', '.join(repr(d) for d in _VALID_DIRECTIONS)}."
        )
    return direction  # type: ignore[return-value]


class PredictorComparator:
    """Binary ``less`` predicate over logical indices.

    Args:
        predictor: Object read through ``predictor[i]``.
        direction: ``">"`` for ascending, ``"<"`` for descending.

    Example::

        cmp = PredictorComparator(predictor, ">")
        cmp(0, 1)  # True iff predictor[0] < predictor[1]
    """

    __slots__ = ("_predictor", "_direction", "_less")

    def __init__(self, predictor: SupportsIndexedValues, direction: str = ">"):
        self._predictor = predictor
        self._direction = validate_direction(direction)
        self._less: Callable[[int, int], bool] = (
            self._ascending if self._direction == ">" else self._descending
        )

    @property
    def direction(self) -> Direction:
        return self._direction

    def _ascending(self, i: int, j: int) -> bool:
        return bool(self._predictor[i] < self._predictor[j])

    def _descending(self, i: int, j: int) -> bool:
        return bool(self._predictor[j] < self._predictor[i])

    def __call__(self, i: int, j: int) -> bool:
        return self._less(i, j)

    def compare(self, i: int, j: int) -> int:
        """Three-way comparison: ``-1`` if *i* sorts first, ``1`` if *j* does, else ``0``."""
        if self._less(i, j):
            return -1
        if self._less(j, i):
            return 1
        return 0

    def sort_key(self) -> Callable[[int], Any]:
        """Key function for :func:`sorted` built from :meth:`compare`."""
        return functools.cmp_to_key(self.compare)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(direction={self._direction!r})"
