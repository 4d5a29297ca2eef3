"""
Error types raised by the Ollama Mini Tools commands.

Every error here is fatal: the CLI entry point logs the message together
with its remediation hints and exits with status 1.
"""


class FatalError(Exception):
    """An unrecoverable error with optional remediation hints."""

    def __init__(self, message, hints=None):
        super().__init__(message)
        self.message = message
        self.hints = list(hints or [])


class ArgumentError(FatalError):
    """Unknown flag, unknown command or wrong number of arguments."""


class ConfigurationError(FatalError):
    """A required configuration value is missing."""


class PreconditionError(FatalError):
    """A file the command depends on does not exist or is unusable."""


class DelegationError(FatalError):
    """An external tool could not be run or fetched."""
