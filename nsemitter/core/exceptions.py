"""Custom exceptions for nsemitter."""


class EmitterError(Exception):
    """Base exception for all emitter errors."""


class InvalidArgument(EmitterError, ValueError):
    """Raised when ``on``/``once``/``emit`` receive an unusable argument."""

    def __init__(self, message: str, argument: str | None = None) -> None:
        super().__init__(message)
        self.argument = argument


class NoEventLoopError(EmitterError, RuntimeError):
    """Raised when asynchronous emission is requested outside a running event loop."""


class ConfigurationError(EmitterError):
    """Raised when configuration is invalid."""
