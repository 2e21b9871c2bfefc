"""Core-level exceptions."""


class DegenerateInputError(ValueError):
    """Raised when a core routine receives input its contract rules out."""
