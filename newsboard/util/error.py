"""Errors raised by the wiring layer, outside any domain operation."""


class UtilError(Exception):
    """Base error for configuration and wiring failures."""


class DependencyInjectionError(UtilError):
    """No provider implementation matches the requested component."""


class ConfigurationError(UtilError):
    """Settings that the process cannot start with."""
