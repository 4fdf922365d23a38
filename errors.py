# errors.py
"""Exceptions raised by the particle engine and its pygame adapters."""


class ConfigurationError(ValueError):
    """Raised when engine configuration values are inconsistent or out of range."""


class SurfaceError(RuntimeError):
    """Raised when a drawing surface cannot be acquired."""
