from __future__ import annotations

import warnings
from typing import Any

import numpy as np

from .coercion import as_square_array
from .errors import InversionError
from .runtime import runtime
from .warnings import CacheMatrixPrecisionWarning


def invert(matrix: Any, *, stacklevel: int = 2) -> np.ndarray:
    """Return the inverse of a square matrix as a new float ndarray.

    Raises:
        InversionError: if the input is not numeric, not 2-D, not square,
            empty, contains NaN/inf, or is singular.

    Ill-conditioned (but invertible) input still yields an inverse and emits
    CacheMatrixPrecisionWarning. ``stacklevel`` is forwarded to ``warnings.warn``.
    """
    a = as_square_array(matrix)

    try:
        inv = np.linalg.inv(a)
    except np.linalg.LinAlgError as exc:
        raise InversionError(
            "Matrix is singular (non-invertible).", reason="singular", shape=a.shape
        ) from exc

    if not np.all(np.isfinite(inv)):
        raise InversionError(
            "Matrix is numerically singular (inverse is not finite).",
            reason="singular",
            shape=a.shape,
        )

    threshold = runtime.condition_warn_threshold()
    cond = float(np.linalg.cond(a))
    if cond > threshold:
        warnings.warn(
            f"Matrix is ill-conditioned (condition number {cond:.3g} exceeds {threshold:.3g}); "
            "the cached inverse may be inaccurate.",
            CacheMatrixPrecisionWarning,
            stacklevel=stacklevel,
        )

    return inv
