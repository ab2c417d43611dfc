"""Typed result object for batched bootstrap draws.

:class:`BootstrapIndices` is a frozen dataclass that provides:

* **Attribute access** — ``result.controls_idx``, ``result.strategy``.
* **Dict-like access** — ``result["n_boot"]``, ``result.get("key")``,
  ``"key" in result`` for consumers that prefer bracket syntax.
* **Serialisation** — ``.to_dict()`` returns a plain ``dict[str, Any]``
  with all NumPy types converted to native Python.
* **Replicates** — ``result.replicate(b)`` or iteration yields one
  :class:`~rocresample.resampling.ResampledPredictor` per row.

It is frozen because a batch is a snapshot of completed draws.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field, fields
from typing import TYPE_CHECKING, Any, ClassVar

import numpy as np

from .resampling import ResampledPredictor, ResampleStrategy

if TYPE_CHECKING:
    from .predictor import PredictorLike

# ------------------------------------------------------------------ #
# Serialisation helper
# ------------------------------------------------------------------ #


def _numpy_to_python(obj: Any) -> Any:
    """Recursively convert NumPy scalars/arrays to Python-native types.

    Handles nested dicts, lists, np.ndarray, np.integer, and
    np.floating so that :meth:`to_dict` returns a fully
    JSON-serialisable structure.
    """
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    if isinstance(obj, (np.integer, np.bool_)):
        return int(obj)
    if isinstance(obj, np.floating):
        return float(obj)
    if isinstance(obj, dict):
        return {k: _numpy_to_python(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        converted = [_numpy_to_python(item) for item in obj]
        return type(obj)(converted)
    return obj


# ------------------------------------------------------------------ #
# Dict-compatibility mixin
# ------------------------------------------------------------------ #


class _DictAccessMixin:
    """Dict-like access convenience for result dataclasses.

    Supports three access patterns:

    1. ``result["key"]``     — raises ``KeyError`` on miss
    2. ``result.get(key, d)`` — returns *d* on miss (default ``None``)
    3. ``"key" in result``   — membership test

    Subclasses may override ``_SERIALIZERS`` to register conversion
    functions for non-primitive fields.
    """

    _SERIALIZERS: ClassVar[dict[str, Any]] = {
        "strategy": lambda s: s.value,
    }

    # Fields to exclude from to_dict() serialisation.
    _EXCLUDE_FROM_DICT: ClassVar[frozenset[str]] = frozenset({"source"})

    def __getitem__(self, key: str) -> Any:
        """Attribute lookup via bracket syntax."""
        try:
            return getattr(self, key)
        except AttributeError:
            raise KeyError(key) from None

    def get(self, key: str, default: Any = None) -> Any:
        """Attribute lookup with a fallback default."""
        return getattr(self, key, default)

    def __contains__(self, key: object) -> bool:
        """Membership test: ``"key" in result``."""
        if not isinstance(key, str):
            return False
        return hasattr(self, key)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary.

        Applies per-field serializers from ``_SERIALIZERS``, then runs
        :func:`_numpy_to_python` on every value.
        """
        result: dict[str, Any] = {}
        for f in fields(self):  # type: ignore[arg-type]
            if f.name in self._EXCLUDE_FROM_DICT:
                continue
            val = getattr(self, f.name)
            serializer = self._SERIALIZERS.get(f.name)
            if serializer is not None and val is not None:
                val = serializer(val)
            result[f.name] = _numpy_to_python(val)
        return result


# ------------------------------------------------------------------ #
# BootstrapIndices
# ------------------------------------------------------------------ #


@dataclass(frozen=True, eq=False)
class BootstrapIndices(_DictAccessMixin):
    """Resampling indices for ``n_boot`` bootstrap replicates.

    Row ``b`` of ``controls_idx`` / ``cases_idx`` follows the same
    index representation as a single
    :class:`~rocresample.resampling.ResampledPredictor`.
    """

    strategy: ResampleStrategy
    n_boot: int
    n_controls: int
    n_cases: int
    controls_idx: np.ndarray
    """Shape ``(n_boot, n_controls)``."""
    cases_idx: np.ndarray
    """Shape ``(n_boot, n_cases)``."""
    random_state: int | None = None
    """Integer seed, when one was supplied."""
    source: PredictorLike | None = field(default=None, repr=False, compare=False)
    """The resampled predictor; not serialised."""

    def replicate(self, b: int) -> ResampledPredictor:
        """The ``b``-th replicate as a :class:`ResampledPredictor`.

        Raises:
            ValueError: If the batch was built without a source.
            IndexError: If *b* is not in ``[0, n_boot)``.
        """
        if self.source is None:
            raise ValueError("BootstrapIndices has no source predictor.")
        if not 0 <= b < self.n_boot:
            raise IndexError(f"Replicate {b} out of range for n_boot={self.n_boot}.")
        return ResampledPredictor(
            self.source,
            self.controls_idx[b],
            self.cases_idx[b],
            strategy=self.strategy,
        )

    def __len__(self) -> int:
        return self.n_boot

    def __iter__(self) -> Iterator[ResampledPredictor]:
        for b in range(self.n_boot):
            yield self.replicate(b)
