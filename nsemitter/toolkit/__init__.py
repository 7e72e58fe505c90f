"""Toolkit - helpers around the emitter (dispatch markers)."""

from .float_controller import (
    FloatContext,
    FloatController,
    FloatEvent,
    float_event,
    get_float_controller,
)

__all__ = [
    "FloatContext",
    "FloatController",
    "FloatEvent",
    "float_event",
    "get_float_controller",
]
