# stepsearch/errors.py
from __future__ import annotations


class StepSearchError(Exception):
    """Base class for every error raised by stepsearch."""


class ConfigurationError(StepSearchError, ValueError):
    """Raised at construction time for malformed boards, trees or settings."""


def describe_validation_error(error) -> str:
    """Flatten a pydantic ValidationError into one line: ``field: message; ...``."""
    parts = []
    for err in error.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "value"
        parts.append(f"{loc}: {err.get('msg', 'invalid')}")
    return "; ".join(parts)
