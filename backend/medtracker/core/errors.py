"""Domain error types shared by the service layer."""

from __future__ import annotations

from collections.abc import Iterable


class ValidationError(ValueError):
    """A required field is missing or malformed; never retried."""

    @classmethod
    def missing_fields(cls, fields: Iterable[str]) -> "ValidationError":
        return cls(f"Missing required fields: {', '.join(fields)}")


__all__ = ["ValidationError"]
