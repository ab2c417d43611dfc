"""Shared type aliases for the rocresample package."""

from collections.abc import Sequence

import numpy as np
import pandas as pd

# Numeric vector inputs accepted by the public API.
VectorLike = np.ndarray | pd.Series | pd.Index | Sequence[float]

# Anything numpy.random.default_rng() accepts.
RandomState = int | np.random.SeedSequence | np.random.Generator | None
