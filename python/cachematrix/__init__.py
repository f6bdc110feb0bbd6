"""Matrix holder that caches its inverse and drops it on every write."""
from __future__ import annotations

from importlib.metadata import PackageNotFoundError as _PackageNotFoundError
from importlib.metadata import version as _dist_version

try:
    __version__ = _dist_version("cachematrix")
except _PackageNotFoundError:
    __version__ = "unknown"

from ._internal.cached_matrix import UNSET, CachedMatrix, empty_placeholder
from ._internal.errors import CacheMatrixError, InversionError
from ._internal.inversion import invert
from ._internal.log import configure_logging
from ._internal.log import install_null_handler as _install_null_handler
from ._internal.runtime import runtime
from ._internal.solve import cache_solve
from ._internal.warnings import CacheMatrixPrecisionWarning, CacheMatrixWarning

_install_null_handler()

__all__ = [
    "CacheMatrixError",
    "CacheMatrixPrecisionWarning",
    "CacheMatrixWarning",
    "CachedMatrix",
    "InversionError",
    "UNSET",
    "cache_solve",
    "configure_logging",
    "empty_placeholder",
    "invert",
    "runtime",
]
