"""Domain models and helpers for mboxlens."""

from . import helpers, models, state

__all__ = ["helpers", "models", "state"]
