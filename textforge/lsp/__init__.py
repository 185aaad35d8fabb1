"""Language server configurations keyed by language id."""

__all__ = ["config"]