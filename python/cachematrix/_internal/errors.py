from __future__ import annotations

from typing import Any


class CacheMatrixError(Exception):
    """Base exception for all cachematrix errors.

    ``context`` holds extra details (shape, reason, ...) and is appended to
    the rendered message.
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class InversionError(CacheMatrixError, ValueError):
    """Raised when a matrix has no well-defined inverse.

    ``reason`` is one of ``not_numeric``, ``not_2d``, ``not_square``,
    ``empty``, ``non_finite`` or ``singular``.
    """

    def __init__(
        self,
        message: str,
        *,
        reason: str,
        shape: tuple[int, ...] | None = None,
    ):
        context: dict[str, Any] = {"reason": reason}
        if shape is not None:
            context["shape"] = shape
        super().__init__(message, context)
        self.reason = reason
        self.shape = shape
