from __future__ import annotations

import logging
from typing import Any, Callable

from .cached_matrix import UNSET, CachedMatrix, _shape_of
from . import inversion as _inversion

logger = logging.getLogger(__name__)


def cache_solve(
    cm: CachedMatrix,
    *,
    invert: Callable[[Any], Any] | None = None,
    stacklevel: int = 2,
) -> Any:
    """Return the inverse of the matrix held by ``cm``.

    A cached inverse is returned as-is (logging ``getting cached data``).
    Otherwise ``invert`` (default: :func:`cachematrix.invert`) is applied to
    the held value and the result is stored on ``cm`` before returning.

    Errors raised by ``invert`` propagate unchanged and leave the cache
    unset, so the next call retries.

    ``stacklevel`` has the ``warnings.warn`` meaning relative to this call;
    precision warnings from the default ``invert`` point at the caller.
    """
    with cm.lock:
        inv = cm.get_cached_inverse()
        if inv is not UNSET:
            logger.info("getting cached data")
            return inv

        value = cm.get_value()
        logger.debug("computing inverse for matrix of shape %s", _shape_of(value))
        if invert is None:
            inv = _inversion.invert(value, stacklevel=stacklevel + 1)
        else:
            inv = invert(value)
        cm.set_inverse(inv)
        return inv
