"""Tests for Emitter.extend() and the EmitterLike protocol."""

from types import SimpleNamespace

import pytest

from nsemitter.core.events import Emitter, EmitterLike
from nsemitter.core.exceptions import InvalidArgument


class Thing:
    def __init__(self):
        self.name = None

    def set_name(self, name):
        self.name = name
        self.emit("named", {"name": name})


def test_extend_adds_methods_to_class():
    Emitter.extend(Thing)
    for attr in ("listeners", "on", "once", "off", "emit", "listener_count"):
        assert callable(getattr(Thing, attr))


def test_extend_returns_target():
    assert Emitter.extend(Thing) is Thing


def test_extended_class_instances_behave_as_emitters(recorder):
    Emitter.extend(Thing)
    thing = Thing()
    rec = recorder()

    thing.on("named", rec)
    thing.set_name("banana")

    sender, args = rec.calls[0]
    assert sender is thing
    assert args == {"name": "banana"}
    assert isinstance(thing, EmitterLike)


def test_extended_instances_have_separate_registries(recorder):
    Emitter.extend(Thing)
    first, second = Thing(), Thing()
    rec = recorder()
    first.on("named", rec)
    second.set_name("apple")
    assert rec.count == 0
    assert second.listeners("named") == []


def test_extended_class_supports_namespaces_and_once(recorder):
    Emitter.extend(Thing)
    thing = Thing()
    rec = recorder()
    thing.on("named.ui", rec, {"once": True})
    thing.set_name("a")
    thing.set_name("b")
    assert rec.count == 1
    thing.on("named.ui", rec).off(".ui")
    assert thing.listener_count() == 0


def test_extend_plain_object(recorder):
    target = SimpleNamespace()
    Emitter.extend(target)
    rec = recorder()

    assert target.on("foo", rec) is target
    target.emit("foo", 1)

    assert rec.calls == [(target, 1)]
    assert target.listeners("foo") == [rec]


def test_emitter_satisfies_protocol():
    assert isinstance(Emitter(), EmitterLike)
    assert not isinstance(object(), EmitterLike)


def test_subclass_is_an_emitter(recorder):
    class Store(Emitter):
        def save(self, item):
            self.emit("saved", item)

    store = Store()
    rec = recorder()
    store.on("saved", rec).save("x")
    assert rec.calls == [(store, "x")]


def test_delegating_wrapper_satisfies_protocol():
    class Delegating:
        def __init__(self):
            self._events = Emitter()

        def listeners(self, event_name=None):
            return self._events.listeners(event_name)

        def on(self, event_name, listener=None, options=None):
            self._events.on(event_name, listener, options)
            return self

        def off(self, event_name=None, listener=None):
            self._events.off(event_name, listener)
            return self

        def emit(self, event_name, args=None, options=None):
            self._events.emit(event_name, args, options)
            return self

    assert isinstance(Delegating(), EmitterLike)


@pytest.mark.parametrize("target", [{}, 42, "text"])
def test_extend_rejects_targets_without_attributes(target):
    with pytest.raises(InvalidArgument, match="must accept attributes"):
        Emitter.extend(target)


def test_rejected_target_is_left_untouched():
    target = {}
    with pytest.raises(InvalidArgument):
        Emitter.extend(target)
    assert target == {}
