"""
Event System - named-event emitter with dotted namespaces.

Core Components:
- Emitter: listener registry and dispatcher
- EventName: parsed "foo" / "foo.ns" / ".ns" names and the matching rule
- ListenerOptions / EmitOptions: options for on() and emit()
- EmitterLike: protocol for anything that behaves as an emitter

Quick Start:
    from nsemitter.core.events import Emitter

    def on_saved(sender, args):
        print(f"saved {args['id']}")

    emitter = Emitter()
    emitter.on("saved", on_saved)
    emitter.emit("saved", {"id": 1})
"""

from .emitter import Emitter, EmitterLike, Listener, Registry
from .names import NAMESPACE_SEPARATOR, EventName, EventNameKind
from .options import EmitOptions, ListenerOptions

__all__ = [
    "NAMESPACE_SEPARATOR",
    "EmitOptions",
    "Emitter",
    "EmitterLike",
    "EventName",
    "EventNameKind",
    "Listener",
    "ListenerOptions",
    "Registry",
]
