"""Language definitions and highlighting themes."""

__all__ = ["language", "theme"]