"""Exceptions raised by the model layer."""


class ConfigurationError(ValueError):
    """A profile or behaviour parameter is outside its valid range."""


class GridStateError(RuntimeError):
    """An operation was requested on a grid that is not in a usable state."""
