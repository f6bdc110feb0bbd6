from __future__ import annotations

from typing import Any

import numpy as np

from .errors import InversionError


def as_square_array(candidate: Any) -> np.ndarray:
    """Convert ``candidate`` to a finite, non-empty, square 2-D float array.

    Raises InversionError when no inverse could exist for the input.
    """
    try:
        array = np.asarray(candidate)
    except (TypeError, ValueError) as exc:
        raise InversionError(
            "Matrix data must be numeric and rectangular.", reason="not_numeric"
        ) from exc

    # Only bool/int/uint/float; complex, strings and objects are rejected before any cast.
    if array.dtype.kind not in "biuf":
        raise InversionError(
            f"Matrix data must be real numbers, got dtype {array.dtype}.",
            reason="not_numeric",
            shape=array.shape,
        )
    array = array.astype(float)

    if array.ndim != 2:
        raise InversionError(
            "Matrix input must be a 2D structure.", reason="not_2d", shape=array.shape
        )
    if array.shape[0] != array.shape[1]:
        raise InversionError(
            "Matrix input must be square (rows == columns).",
            reason="not_square",
            shape=array.shape,
        )
    if array.size == 0:
        raise InversionError("Matrix input must not be empty.", reason="empty", shape=array.shape)
    if not np.all(np.isfinite(array)):
        raise InversionError(
            "Matrix contains missing or non-finite entries.",
            reason="non_finite",
            shape=array.shape,
        )
    return array
