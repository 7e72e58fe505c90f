"""Shared fixtures for nsemitter tests."""

import os

import pytest

from nsemitter.core.config import ENV_PREFIX, set_config
from nsemitter.core.events import Emitter
from nsemitter.toolkit.float_controller import FloatController


@pytest.fixture(autouse=True)
def _isolated_globals(monkeypatch):
    """Each test starts with fresh config and float controller singletons."""
    for key in list(os.environ):
        if key.startswith(ENV_PREFIX):
            monkeypatch.delenv(key)
    set_config(None)
    FloatController.reset_instance()
    yield
    set_config(None)
    FloatController.reset_instance()


@pytest.fixture
def emitter():
    return Emitter()


class Recorder:
    """Listener that records every (sender, args) call it receives."""

    def __init__(self, name: str = "recorder", log: list | None = None):
        self.name = name
        self.calls: list[tuple] = []
        self.log = log

    def __call__(self, sender, args):
        self.calls.append((sender, args))
        if self.log is not None:
            self.log.append(self.name)

    @property
    def count(self) -> int:
        return len(self.calls)


@pytest.fixture
def recorder():
    return Recorder
