"""NumPy ordering backend (always available).

Stable descending order
~~~~~~~~~~~~~~~~~~~~~~~
``np.argsort(kind="stable")`` gives the ascending (``">"``) order
directly.  The descending (``"<"``) order does not negate the values.
Instead the reversed array is sorted stably and the result is mapped
back::

    order = (n - 1) - argsort(values[::-1], stable)[::-1]

Reversing twice puts tied values back in their original relative
order, matching a stable sort under the descending comparator.

NaN is placed last for ``">"`` and first for ``"<"``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from ..comparator import Direction
    from ..predictor import PredictorLike


def stable_order(values: np.ndarray, direction: Direction) -> np.ndarray:
    """Stable argsort of *values* under *direction* (see module docstring)."""
    if direction == ">":
        return np.argsort(values, kind="stable").astype(np.intp, copy=False)
    n = values.shape[0]
    reversed_order = np.argsort(values[::-1], kind="stable")[::-1]
    return (n - 1 - reversed_order).astype(np.intp, copy=False)


@dataclass(frozen=True)
class NumpyBackend:
    """NumPy ordering backend.

    Frozen dataclass with no instance state, safe to cache in the
    module-level ``_BACKEND_CACHE`` singleton.
    """

    @property
    def name(self) -> str:
        return "numpy"

    @property
    def is_available(self) -> bool:  # noqa: PLR6301
        return True

    def order(self, predictor: PredictorLike, direction: Direction) -> np.ndarray:
        return stable_order(predictor.values, direction)
