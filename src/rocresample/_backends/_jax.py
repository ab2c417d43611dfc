"""JAX ordering backend.

Uses the same reverse/argsort/reverse construction as the NumPy backend
(see :mod:`._numpy`) with ``jax.numpy.argsort(stable=True)``, so both
backends agree on ties.

Float64
~~~~~~~
JAX defaults to float32.  Predictor values are doubles, and truncating
them can merge distinct values into ties and change the order, so
``jax_enable_x64`` is switched on before any array is created and
inputs are cast explicitly with ``dtype=jnp.float64``.  The flag is
process-wide: importing this module, which happens the first time
``"jax"`` is resolved, changes JAX precision for the rest of the
application too.

Graceful degradation
~~~~~~~~~~~~~~~~~~~~
If JAX is not installed, :class:`JaxBackend` can still be instantiated
but ``is_available`` returns ``False`` and
:func:`~rocresample._backends.resolve_backend` raises ``ImportError``
when this backend is explicitly requested.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from ..comparator import Direction
    from ..predictor import PredictorLike

try:
    import jax

    # Enable 64-bit floating point before any array creation.
    jax.config.update("jax_enable_x64", True)

    import jax.numpy as jnp

    _CAN_IMPORT_JAX = True
except ImportError:
    _CAN_IMPORT_JAX = False


@dataclass(frozen=True)
class JaxBackend:
    """JAX ordering backend.

    All inputs and outputs are NumPy arrays; callers never see JAX
    types.
    """

    @property
    def name(self) -> str:
        return "jax"

    @property
    def is_available(self) -> bool:  # noqa: PLR6301
        return _CAN_IMPORT_JAX

    def order(self, predictor: PredictorLike, direction: Direction) -> np.ndarray:
        values = jnp.asarray(predictor.values, dtype=jnp.float64)
        if direction == ">":
            idx = jnp.argsort(values, stable=True)
        else:
            n = values.shape[0]
            idx = n - 1 - jnp.argsort(values[::-1], stable=True)[::-1]
        return np.asarray(idx).astype(np.intp, copy=False)
