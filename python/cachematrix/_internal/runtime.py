from __future__ import annotations

import logging
import os
from typing import Mapping


_DEFAULT_LOG_LEVEL = logging.WARNING
_DEFAULT_COND_WARN = 1e12


class Runtime:
    """Process-wide settings read lazily from the environment.

    Values are parsed on first use and cached; ``reset`` drops the cache so
    the next read sees the current environment again.
    """

    def __init__(
        self,
        *,
        environ: Mapping[str, str] | None = None,
        log_level_var: str = "CACHEMATRIX_LOG_LEVEL",
        cond_warn_var: str = "CACHEMATRIX_COND_WARN",
    ) -> None:
        self._environ = environ
        self._log_level_var = log_level_var
        self._cond_warn_var = cond_warn_var
        self._log_level_cache: int | None = None
        self._cond_warn_cache: float | None = None

    def _env(self) -> Mapping[str, str]:
        return os.environ if self._environ is None else self._environ

    def log_level(self) -> int:
        if self._log_level_cache is not None:
            return self._log_level_cache

        raw = self._env().get(self._log_level_var)
        if raw:
            self._log_level_cache = parse_log_level(raw)
        else:
            self._log_level_cache = _DEFAULT_LOG_LEVEL
        return self._log_level_cache

    def condition_warn_threshold(self) -> float:
        if self._cond_warn_cache is not None:
            return self._cond_warn_cache

        raw = self._env().get(self._cond_warn_var)
        if raw:
            try:
                value = float(raw)
            except ValueError:
                raise ValueError(
                    f"{self._cond_warn_var} must be a positive number, got {raw!r}"
                ) from None
            if not value > 0:
                raise ValueError(f"{self._cond_warn_var} must be a positive number, got {raw!r}")
            self._cond_warn_cache = value
        else:
            self._cond_warn_cache = _DEFAULT_COND_WARN
        return self._cond_warn_cache

    def reset(self) -> None:
        self._log_level_cache = None
        self._cond_warn_cache = None


def parse_log_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    name = level.strip().upper()
    value = logging.getLevelName(name)
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return value


runtime = Runtime()
