"""Exceptions raised by the traffic pathfinding engine."""


class ConfigurationError(ValueError):
    """Raised for programmer errors such as an unknown algorithm identifier."""
