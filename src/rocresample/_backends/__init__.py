"""Backend abstraction layer for predictor ordering.

Each backend implements the :class:`OrderingBackend` interface: given a
predictor and a direction token, return the stable sort order of its
logical indices.  :meth:`~rocresample.predictor.Predictor.get_order`
dispatches through :func:`resolve_backend` rather than branching on the
backend name at the call site.

Resolution follows the policy set by :mod:`.._config`:

1. Programmatic override via :func:`~rocresample.set_backend`.
2. ``ROCRESAMPLE_BACKEND`` environment variable.
3. Auto-detection: ``"jax"`` if importable, else ``"numpy"``.

When ``"jax"`` is explicitly requested but JAX is not installed, an
:class:`ImportError` is raised; explicit requests are never silently
degraded.  Only ``"auto"`` falls back from JAX to NumPy.

Equivalence contract
~~~~~~~~~~~~~~~~~~~~
Every backend must return exactly the order produced by a stable sort
of ``range(n_total)`` under
:class:`~rocresample.comparator.PredictorComparator`.  The ``python``
backend *is* that sort; the vectorised backends reproduce it, ties
included.

Adding a new backend (e.g. CuPy) requires:

1. A new module ``_backends/_cupy.py`` with a class implementing
   :class:`OrderingBackend`.
2. A branch in :func:`resolve_backend` mapping ``"cupy"`` to the new
   class.
3. Adding ``"cupy"`` to ``_KERNELS`` in :mod:`.._config`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol, runtime_checkable

import numpy as np

from .._config import get_backend

if TYPE_CHECKING:
    from ..comparator import Direction
    from ..predictor import PredictorLike

logger = logging.getLogger(__name__)

# ------------------------------------------------------------------ #
# OrderingBackend
# ------------------------------------------------------------------ #


@runtime_checkable
class OrderingBackend(Protocol):
    """Interface that every ordering backend must implement.

    Attributes:
        name: Short identifier (e.g. ``"numpy"``, ``"jax"``).
    """

    @property
    def name(self) -> str: ...

    @property
    def is_available(self) -> bool:
        """Whether the backend's dependencies are importable."""
        ...

    def order(self, predictor: PredictorLike, direction: Direction) -> np.ndarray:
        """Stable sort order of *predictor*'s logical indices.

        Args:
            predictor: Any object satisfying ``PredictorLike``.
            direction: Already-validated direction token.

        Returns:
            ``intp`` array, a permutation of ``range(n_total)``.
        """
        ...


# ------------------------------------------------------------------ #
# Backend resolution
# ------------------------------------------------------------------ #

# Singleton cache — instantiated once per backend name.
_BACKEND_CACHE: dict[str, OrderingBackend] = {}


def resolve_backend(name: str | None = None) -> OrderingBackend:
    """Return an :class:`OrderingBackend` instance for *name*.

    When *name* is ``None`` (the default) or ``"auto"``, the policy
    from :func:`~rocresample._config.get_backend` is used.

    Args:
        name: ``"numpy"``, ``"jax"``, ``"python"``, ``"auto"`` or
            ``None`` for the policy default.

    Returns:
        A backend instance.

    Raises:
        ImportError: If ``"jax"`` is explicitly requested but JAX
            is not installed.
        ValueError: If *name* is not a recognised backend.
    """
    if name is None or name.strip().lower() == "auto":
        name = get_backend()
    name = name.strip().lower()

    if name in _BACKEND_CACHE:
        return _BACKEND_CACHE[name]

    if name == "numpy":
        from ._numpy import NumpyBackend

        backend: OrderingBackend = NumpyBackend()

    elif name == "jax":
        from ._jax import JaxBackend

        jax_backend = JaxBackend()
        if not jax_backend.is_available:
            msg = (
                "Backend 'jax' was explicitly requested but JAX is "
                "not installed.  Install JAX (`pip install jax`) or "
                "use set_backend('numpy')."
            )
            raise ImportError(msg)
        backend = jax_backend

    elif name == "python":
        from ._python import PythonBackend

        backend = PythonBackend()

    else:
        msg = f"Unknown backend {name!r}.  Choose 'numpy', 'jax' or 'python'."
        raise ValueError(msg)

    logger.debug("Resolved ordering backend %r", name)
    _BACKEND_CACHE[name] = backend
    return backend


__all__ = [
    "OrderingBackend",
    "resolve_backend",
]
