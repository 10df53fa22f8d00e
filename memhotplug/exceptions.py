"""Errors raised around the checker (loading, parsing, settings)."""


class MemHotplugError(Exception):
    """Base exception for all memhotplug errors."""


class QuantityError(MemHotplugError, ValueError):
    """Raised when a memory quantity string cannot be parsed."""


class SpecLoadError(MemHotplugError):
    """Raised when a machine spec document cannot be read or mapped."""


class ConfigError(MemHotplugError):
    """Raised when settings are invalid."""
