from __future__ import annotations

import threading
from typing import Any, Callable

import numpy as np


class _UnsetType:
    """Marker for "no cached inverse"; compare with ``is UNSET``."""

    _instance: "_UnsetType | None" = None

    def __new__(cls) -> "_UnsetType":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"

    def __reduce__(self) -> str:
        return "UNSET"


UNSET = _UnsetType()


def empty_placeholder() -> np.ndarray:
    """1x1 matrix holding a missing value. It has no inverse."""
    return np.full((1, 1), np.nan)


def _shape_of(obj: Any) -> tuple[int, ...] | None:
    shape = getattr(obj, "shape", None)
    if isinstance(shape, tuple):
        return shape
    try:
        return np.shape(obj)
    except ValueError:
        return None


class CachedMatrix:
    """Holds one matrix and, once computed, its inverse.

    Writing a new value through ``set_value`` clears the cached inverse in
    the same step. The inverse is filled in by ``cache_solve`` (or directly
    through ``set_inverse``, which trusts its caller).

    All state changes happen under ``lock``, a re-entrant lock shared with
    ``cache_solve`` so the check-compute-store sequence cannot interleave
    with a write.
    """

    def __init__(self, initial: Any = None):
        self._value: Any = empty_placeholder() if initial is None else initial
        self._inverse: Any = UNSET
        self._version = 0
        self.lock = threading.RLock()

    @property
    def value(self) -> Any:
        return self.get_value()

    @property
    def version(self) -> int:
        """Number of ``set_value`` calls so far."""
        with self.lock:
            return self._version

    def set_value(self, m: Any) -> None:
        with self.lock:
            self._value = m
            self._inverse = UNSET
            self._version += 1

    def get_value(self) -> Any:
        with self.lock:
            return self._value

    def set_inverse(self, inv: Any) -> None:
        # No check that inv matches the held value.
        with self.lock:
            self._inverse = inv

    def get_cached_inverse(self) -> Any:
        with self.lock:
            return self._inverse

    def has_cached_inverse(self) -> bool:
        with self.lock:
            return self._inverse is not UNSET

    def inverse(self, invert: Callable[[Any], Any] | None = None) -> Any:
        """Cached inverse of the held matrix, computing it on first use."""
        from .solve import cache_solve

        return cache_solve(self, invert=invert, stacklevel=3)

    def __repr__(self) -> str:
        with self.lock:
            shape = _shape_of(self._value)
            cached = self._inverse is not UNSET
        return f"CachedMatrix(shape={shape}, cached_inverse={cached})"

    def __str__(self) -> str:
        return self.__repr__()
