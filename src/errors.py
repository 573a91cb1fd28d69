"""Exception types raised inside devkit."""


class DevkitError(Exception):
    """Base class for devkit errors surfaced to the CLI."""


class ConfigError(DevkitError):
    """Raised when a configuration file cannot be read or parsed."""
