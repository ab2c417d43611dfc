"""Exception types raised by rocresample.

Each exception refines a builtin so that callers can catch either the
specific type or the builtin it derives from.
"""

from __future__ import annotations


class PredictorIndexError(IndexError):
    """Raised by checked access when a logical index is out of range."""

    def __init__(self, index: int, n_total: int):
        super().__init__(
            f"Logical index {index} is out of range for a predictor "
            f"with {n_total} values."
        )
        self.index = index
        self.n_total = n_total


class EmptyDomainError(ValueError):
    """Raised when values are drawn from an empty index domain."""

    def __init__(self, n_draws: int, group: str = "domain"):
        super().__init__(
            f"Cannot draw {n_draws} indices from an empty {group}."
        )
        self.n_draws = n_draws
        self.group = group


class ResampleIndexError(ValueError):
    """Raised when explicit resampling indices do not fit the source predictor."""
