"""Service-layer exceptions."""


class SaveLoadError(Exception):
    """Raised when profile save or load operations fail."""


class GameOverError(Exception):
    """Raised when a round is requested after the last round was played."""
