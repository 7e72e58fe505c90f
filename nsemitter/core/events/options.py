"""Pydantic models for on()/emit() options."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from nsemitter.core.exceptions import InvalidArgument

OptionsT = TypeVar("OptionsT", bound="_Options")


class _Options(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    @classmethod
    def coerce(cls: type[OptionsT], value: OptionsT | Mapping[str, Any] | None) -> OptionsT:
        """Accept a model instance, a plain mapping, or None."""
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        if not isinstance(value, Mapping):
            raise InvalidArgument(
                f"options must be a mapping or {cls.__name__}, got {type(value).__name__}",
                argument="options",
            )
        try:
            return cls.model_validate(dict(value))
        except ValidationError as e:
            raise InvalidArgument(f"invalid options: {e}", argument="options") from e


class ListenerOptions(_Options):
    """Options recognized by Emitter.on()."""

    once: bool = Field(False, description="Remove the listener after its first invocation")


class EmitOptions(_Options):
    """Options recognized by Emitter.emit()."""

    async_: bool = Field(
        False,
        alias="async",
        description="Defer each listener call to a later turn of the event loop",
    )


__all__ = [
    "EmitOptions",
    "ListenerOptions",
]
