"""
nsemitter - in-process publish/subscribe with dotted namespaces.

Main Features:
- Named-event listeners, invoked in registration order
- Namespaces: "foo.ns" groups listeners; off("foo") or off(".ns") removes in bulk
- Once-only listeners
- Synchronous dispatch, or deferred dispatch on the running asyncio loop
- Emitter.extend() turns any class or object into an emitter

Quick Start:
    >>> from nsemitter import Emitter
    >>> emitter = Emitter()
    >>> emitter.on("saved.audit", lambda sender, args: print(args))
    >>> emitter.emit("saved", {"id": 1})
    {'id': 1}
"""

__version__ = "0.1.0"

from nsemitter.core.config import EmitterConfig, get_config, set_config
from nsemitter.core.events import (
    EmitOptions,
    Emitter,
    EmitterLike,
    EventName,
    EventNameKind,
    ListenerOptions,
)
from nsemitter.core.exceptions import (
    ConfigurationError,
    EmitterError,
    InvalidArgument,
    NoEventLoopError,
)

__all__ = [
    "ConfigurationError",
    "EmitOptions",
    "Emitter",
    "EmitterConfig",
    "EmitterError",
    "EmitterLike",
    "EventName",
    "EventNameKind",
    "InvalidArgument",
    "ListenerOptions",
    "NoEventLoopError",
    "__version__",
    "get_config",
    "set_config",
]
