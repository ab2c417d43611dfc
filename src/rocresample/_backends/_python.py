"""Pure-Python ordering backend.

Sorts ``range(n_total)`` with :func:`sorted` (stable, Timsort) keyed on
:class:`~rocresample.comparator.PredictorComparator`.  Every value is
read through ``predictor[i]``, so this backend exercises the logical
indexing contract literally.  It is the reference the vectorised
backends are tested against; it is slow for large inputs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from ..comparator import PredictorComparator

if TYPE_CHECKING:
    from ..comparator import Direction
    from ..predictor import PredictorLike


@dataclass(frozen=True)
class PythonBackend:
    """Comparator-driven ordering backend."""

    @property
    def name(self) -> str:
        return "python"

    @property
    def is_available(self) -> bool:  # noqa: PLR6301
        return True

    def order(self, predictor: PredictorLike, direction: Direction) -> np.ndarray:
        key = PredictorComparator(predictor, direction).sort_key()
        return np.fromiter(
            sorted(range(predictor.n_total), key=key),
            dtype=np.intp,
            count=predictor.n_total,
        )
