"""Core module for nsemitter - emitter, configuration and errors."""

from nsemitter.core.config import EmitterConfig, get_config, set_config
from nsemitter.core.events import Emitter, EmitterLike, EventName
from nsemitter.core.exceptions import (
    ConfigurationError,
    EmitterError,
    InvalidArgument,
    NoEventLoopError,
)

__all__ = [
    "ConfigurationError",
    "Emitter",
    "EmitterConfig",
    "EmitterError",
    "EmitterLike",
    "EventName",
    "InvalidArgument",
    "NoEventLoopError",
    "get_config",
    "set_config",
]
