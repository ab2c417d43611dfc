"""Which kernel sorts predictor values.

:meth:`~rocresample.Predictor.get_order` and the ordering of every
resampled replicate go through one of three interchangeable kernels.
They return the identical stable permutation, ties included, so the
choice only affects speed and which libraries get imported:

``"numpy"``
    ``argsort(kind="stable")``; always available.
``"jax"``
    ``jax.numpy.argsort(stable=True)`` in float64.  Selecting it turns
    on ``jax_enable_x64`` for the whole process.
``"python"``
    ``sorted`` driven by :class:`~rocresample.comparator.PredictorComparator`.
    Slow, but it is the definition the other two are tested against.

The active kernel is the first of:

1. a name passed to :func:`set_backend` (``"auto"`` clears it),
2. the ``ROCRESAMPLE_BACKEND`` environment variable,
3. ``"jax"`` when JAX is importable, otherwise ``"numpy"``.

A per-call ``backend=`` argument to ``get_order`` bypasses all three.
Keeping a JAX-using host application on its own precision settings::

    import rocresample
    rocresample.set_backend("numpy")
"""

from __future__ import annotations

import os

_KERNELS = ("jax", "numpy", "python")

# None or "auto" means no override.
_backend_override: str | None = None


def _jax_is_available() -> bool:
    try:
        import jax  # noqa: F401
    except ImportError:
        return False
    return True


def get_backend() -> str:
    """Name of the kernel ``get_order`` uses when none is passed."""
    if _backend_override in _KERNELS:
        return _backend_override

    env = os.environ.get("ROCRESAMPLE_BACKEND", "").strip().lower()
    if env in _KERNELS:
        return env

    return "jax" if _jax_is_available() else "numpy"


def set_backend(name: str) -> None:
    """Pin the ordering kernel for this process.

    Args:
        name: ``"jax"``, ``"numpy"``, ``"python"``, or ``"auto"`` to go
            back to the environment variable and auto-detection.
            Case-insensitive.

    Raises:
        ValueError: If *name* is none of the above.
    """
    global _backend_override
    normalised = name.strip().lower()
    if normalised not in _KERNELS and normalised != "auto":
        raise ValueError(
            f"Unknown backend '{name}'. Choose from: {[*_KERNELS, 'auto']}"
        )
    _backend_override = normalised
