"""Input compatibility layer for numeric vectors.

Every public entry point that takes controls or cases funnels them
through :func:`_as_float_vector`, so internal code only ever sees 1-D
``float64`` NumPy arrays.  Accepted inputs:

* ``numpy.ndarray`` — returned as-is when already 1-D ``float64``
  (no copy), otherwise cast.
* ``pandas.Series`` / ``pandas.Index`` — values extracted.
* ``polars.Series`` — converted via ``.to_numpy()``.
* Any other sequence of numbers (lists, tuples, ranges).

Polars is **not** a required dependency.  If it is not installed,
Polars objects are simply never recognised.
"""

from __future__ import annotations

from typing import Any

import numpy as np
import pandas as pd

# Runtime detection — avoids a hard dependency on Polars.
try:
    import polars as pl

    _HAS_POLARS = True
except ImportError:
    _HAS_POLARS = False


def _as_float_vector(obj: Any, *, name: str = "input") -> np.ndarray:
    """Convert *obj* to a 1-D ``float64`` array.

    Args:
        obj: A numeric vector (see module docstring for accepted types).
        name: Label used in error messages (e.g. ``"controls"``).

    Returns:
        A 1-D ``numpy.ndarray`` of dtype ``float64``.  Shares memory
        with *obj* when no conversion is needed.

    Raises:
        TypeError: If *obj* is not numeric (strings, objects,
            ``None``, scalars).
        ValueError: If *obj* is not one-dimensional.
    """
    if isinstance(obj, (pd.Series, pd.Index)):
        obj = obj.to_numpy()
    elif _HAS_POLARS and isinstance(obj, pl.Series):
        obj = obj.to_numpy()

    if obj is None or isinstance(obj, (str, bytes)) or np.isscalar(obj):
        raise TypeError(
            f"'{name}' must be a one-dimensional numeric vector, "
            f"got {type(obj).__name__}."
        )

    arr = np.asarray(obj)
    if arr.dtype.kind not in "biuf":
        raise TypeError(
            f"'{name}' must contain numeric values, got dtype {arr.dtype}."
        )
    if arr.ndim != 1:
        raise ValueError(
            f"'{name}' must be one-dimensional, got shape {arr.shape}."
        )
    return arr.astype(np.float64, copy=False)
