"""Arms Race: a turn-based weapon battle simulator."""

__version__ = "0.1.0"
