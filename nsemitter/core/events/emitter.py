"""
Emitter - named-event listener registry and dispatcher.

Responsibilities:
- Register/unregister listeners per event name
- Namespace-aware removal and fan-out ("foo", "foo.ns", ".ns")
- Once-only listeners
- Synchronous dispatch, or deferred dispatch on the running asyncio loop

Listeners are called as ``listener(sender, args)`` where ``sender`` is the
emitter and ``args`` is whatever the caller passed to ``emit()``.

Usage:
    emitter = Emitter()
    emitter.on("saved", on_saved)
    emitter.on("saved.audit", audit, {"once": True})
    emitter.emit("saved", {"id": 1})    # on_saved and audit
    emitter.off(".audit")               # every listener in the audit namespace
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Mapping
import logging
import types
from typing import Any, Protocol, TypeVar, runtime_checkable

from nsemitter.core.config import EmitterConfig, get_config
from nsemitter.core.exceptions import InvalidArgument, NoEventLoopError
from nsemitter.toolkit.float_controller import FloatController

from .names import EventName, EventNameKind
from .options import EmitOptions, ListenerOptions

logger = logging.getLogger(__name__)

Listener = Callable[..., Any]
Registry = dict[str, list[Listener]]
T = TypeVar("T")

# Instances made emitters through extend() get their registry under the same name.
_REGISTRY_ATTR = "_emitter_listeners"
_CONFIG_ATTR = "_emitter_config"

_CAPABILITIES = ("listeners", "on", "once", "off", "emit", "listener_count")


@runtime_checkable
class EmitterLike(Protocol):
    """
    Anything that behaves as an emitter.

    Satisfied by Emitter, its subclasses, types passed to Emitter.extend(),
    or any class delegating these methods to an Emitter it owns.
    """

    def listeners(self, event_name: str | None = None) -> Registry | list[Listener]: ...

    def on(self, event_name: Any, listener: Any = None, options: Any = None) -> Any: ...

    def off(self, event_name: str | None = None, listener: Listener | None = None) -> Any: ...

    def emit(self, event_name: str, args: Any = None, options: Any = None) -> Any: ...


def _registry(emitter: Any) -> Registry:
    return vars(emitter).setdefault(_REGISTRY_ATTR, {})


def _config(emitter: Any) -> EmitterConfig:
    state = vars(emitter)
    config = state.get(_CONFIG_ATTR)
    if config is None:
        config = state[_CONFIG_ATTR] = get_config()
    return config


def _track_float(emitter: Any, stage: str, **extra: Any) -> None:
    FloatController.get_instance(config=_config(emitter)).float(f"emitter.{stage}", **extra)


def _is_entry_for(entry: Listener, listener: Listener) -> bool:
    return entry is listener or getattr(entry, "listener", None) is listener


def _matching(emitter: Any, name: EventName) -> list[tuple[str, list[Listener]]]:
    """Registry entries addressed by name; a namespaced name gets its key created."""
    registry = _registry(emitter)
    if name.kind is EventNameKind.NAMESPACED:
        return [(name.key, registry.setdefault(name.key, []))]
    return [(key, registry[key]) for key in name.select(registry)]


def _check_listener(listener: Any) -> Listener:
    if listener is None:
        raise InvalidArgument("listener is required", argument="listener")
    if not callable(listener):
        raise InvalidArgument(
            f"listener must be callable, got {type(listener).__name__}", argument="listener"
        )
    return listener


def _add_listener(emitter: Any, key: str, listener: Listener, once: bool) -> None:
    entries = _registry(emitter).setdefault(key, [])
    if not once:
        entries.append(listener)
        return

    fired = False

    def invoke_once(*args: Any, **kwargs: Any) -> Any:
        nonlocal fired
        # several async emits may have scheduled this wrapper already
        if fired:
            return None
        fired = True
        emitter.off(key, invoke_once)
        _track_float(emitter, "once.expired", key=key)
        return listener(*args, **kwargs)

    # off(key, listener) also finds the wrapper through this
    invoke_once.listener = listener  # type: ignore[attr-defined]
    entries.append(invoke_once)


def _running_loop() -> asyncio.AbstractEventLoop:
    try:
        return asyncio.get_running_loop()
    except RuntimeError as e:
        raise NoEventLoopError("asynchronous emit requires a running event loop") from e


class Emitter:
    """
    Publish/subscribe registry for named events.

    Keys of the registry are created lazily and stay present (possibly
    empty) for the lifetime of the emitter. Every mutating method returns
    the emitter so calls can be chained.

    No locking is done: use an emitter from one thread, or serialize access.
    """

    def __init__(self, config: EmitterConfig | None = None) -> None:
        """
        Args:
            config: Settings for this emitter (defaults to the global EmitterConfig)

        Raises:
            ConfigurationError: If the global config cannot be built from the environment
        """
        setattr(self, _REGISTRY_ATTR, {})
        setattr(self, _CONFIG_ATTR, config or get_config())

    @staticmethod
    def extend(target: T) -> T:
        """
        Make target an emitter by copying the emitter methods onto it.

        A class gets them as ordinary methods, so each of its instances
        becomes an emitter with its own registry. Any other object gets
        them bound to itself.

        The target (and, for a class, its instances) must accept new
        attributes: the registry and settings are stored per object.
        Objects without a ``__dict__`` (dicts, ints, slotted instances)
        are rejected before anything is changed.

        Extended objects read the global EmitterConfig on first use.

        Args:
            target: Class or object to extend (mutated in place)

        Returns:
            target

        Raises:
            InvalidArgument: If target cannot hold attributes
        """
        if not hasattr(target, "__dict__"):
            raise InvalidArgument(
                f"cannot extend {type(target).__name__}: target must accept attributes",
                argument="target",
            )

        for attr in _CAPABILITIES:
            func = getattr(Emitter, attr)
            if isinstance(target, type):
                setattr(target, attr, func)
            else:
                setattr(target, attr, types.MethodType(func, target))

        logger.debug(f"Extended {target!r} with emitter methods")
        return target

    def listeners(self, event_name: str | None = None) -> Registry | list[Listener]:
        """
        Get the listeners registered for an event.

        With no argument, returns the whole registry (live, not a copy).
        With an event name, returns that key's list, creating it empty if needed.
        """
        registry = _registry(self)
        if event_name:
            return registry.setdefault(event_name, [])
        return registry

    def on(
        self,
        event_name: str | Mapping[str, Listener] | None,
        listener: Listener | Mapping[str, Any] | ListenerOptions | None = None,
        options: Mapping[str, Any] | ListenerOptions | None = None,
    ) -> Any:
        """
        Add a listener for an event.

        Either ``on(name, listener, options)`` or ``on({name: listener, ...}, options)``.

        Args:
            event_name: Event name ("foo" or "foo.ns"), or a mapping of names to listeners
            listener: Callable invoked as listener(sender, args)
            options: {"once": True} removes the listener after its first call

        Returns:
            The emitter

        Raises:
            InvalidArgument: If the name is missing or a bare namespace,
                or the listener is missing
        """
        if isinstance(event_name, Mapping):
            opts = ListenerOptions.coerce(listener if options is None else options)
            pairs = [
                (EventName.parse(name).require_addressable(), _check_listener(fn))
                for name, fn in event_name.items()
            ]
        else:
            opts = ListenerOptions.coerce(options)
            pairs = [
                (EventName.parse(event_name).require_addressable(), _check_listener(listener))
            ]

        for name, fn in pairs:
            _add_listener(self, name.key, fn, opts.once)
            logger.debug(
                f"Added listener {getattr(fn, '__name__', fn)!r} for '{name}' (once={opts.once})"
            )

        return self

    def once(
        self,
        event_name: str | Mapping[str, Listener] | None,
        listener: Listener | None = None,
    ) -> Any:
        """Add a listener that is removed after its first invocation."""
        if isinstance(event_name, Mapping):
            return self.on(event_name, ListenerOptions(once=True))
        return self.on(event_name, listener, ListenerOptions(once=True))

    def off(self, event_name: str | None = None, listener: Listener | None = None) -> Any:
        """
        Remove listeners.

        - off()               removes every listener of every event
        - off(name)           removes listeners of every event matching name
                              ("foo" includes "foo.*", ".ns" includes "*.ns*")
        - off(name, listener) removes that listener from exactly that event,
                              including one registered with once

        Never raises for unknown events or listeners.

        Returns:
            The emitter
        """
        if event_name is None:
            for entries in _registry(self).values():
                entries.clear()
            logger.debug("Removed all listeners")
        elif not isinstance(event_name, str) or not event_name:
            logger.debug(f"Nothing to remove for {event_name!r}")
        elif listener is None:
            for key, entries in _matching(self, EventName.parse(event_name)):
                entries.clear()
                logger.debug(f"Removed all listeners for '{key}'")
        else:
            entries = _registry(self).setdefault(event_name, [])
            for index, entry in enumerate(entries):
                if _is_entry_for(entry, listener):
                    del entries[index]
                    logger.debug(f"Removed listener for '{event_name}'")
                    break

        return self

    def emit(
        self,
        event_name: str | None,
        args: Any = None,
        options: Mapping[str, Any] | EmitOptions | None = None,
    ) -> Any:
        """
        Emit an event.

        Every listener of every matching event is called as
        ``listener(sender, args)``. Emitting "foo" also reaches "foo.*".

        The listeners to call are fixed before the first one runs, so
        listeners may add or remove listeners (or emit again) safely.

        Args:
            event_name: Event name ("foo" or "foo.ns")
            args: Payload passed through to listeners as-is
            options: {"async": True} defers each call with loop.call_soon()

        Returns:
            The emitter

        Raises:
            InvalidArgument: If the name is missing or a bare namespace
            NoEventLoopError: If async dispatch is requested without a running loop
            Exception: Whatever a listener raises, in synchronous mode
        """
        name = EventName.parse(event_name).require_addressable()
        opts = EmitOptions.coerce(options)
        loop = _running_loop() if opts.async_ else None

        batches = [(key, list(entries)) for key, entries in _matching(self, name)]
        total = sum(len(entries) for _, entries in batches)

        if _config(self).log_dispatch:
            if total:
                logger.debug(
                    f"Emitting '{name}' to {total} listener(s) across {len(batches)} event(s)"
                    f"{' (async)' if loop else ''}"
                )
            else:
                logger.debug(f"No listeners matched '{name}'")

        _track_float(self, "emit", event=name.key, listeners=total, deferred=loop is not None)

        for key, entries in batches:
            for entry in entries:
                if loop is not None:
                    loop.call_soon(entry, self, args)
                    _track_float(self, "listener.scheduled", key=key)
                else:
                    _track_float(self, "listener.invoked", key=key)
                    entry(self, args)

        return self

    def listener_count(self, event_name: str | None = None) -> int:
        """
        Count listeners without touching the registry.

        With no argument, counts every listener. With a name (bare
        namespaces allowed), counts the listeners that name addresses.
        """
        registry = _registry(self)
        if not event_name:
            return sum(len(entries) for entries in registry.values())
        name = EventName.parse(event_name)
        return sum(len(registry[key]) for key in name.select(registry))

    def __repr__(self) -> str:
        registry = _registry(self)
        return f"{type(self).__name__}(events={len(registry)}, listeners={self.listener_count()})"


__all__ = [
    "Emitter",
    "EmitterLike",
    "Listener",
    "Registry",
]
