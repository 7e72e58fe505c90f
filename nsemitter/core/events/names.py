"""
Event names and namespace matching.

An event name is one of three shapes:

- plain:           "foo"
- namespaced:      "foo.ns"   (everything after the first dot is the namespace)
- namespace only:  ".ns"      (legal for removal/matching, never for on/emit)

Matching rule used by Emitter.off() and Emitter.emit():

    ".ns"     -> every key containing ".ns"  (substring, so ".ns" also hits "foo.nsx")
    "foo.ns"  -> exactly "foo.ns"
    "foo"     -> "foo" and every "foo.<anything>"
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum

from nsemitter.core.exceptions import InvalidArgument

NAMESPACE_SEPARATOR = "."


class EventNameKind(str, Enum):
    """Shape of a parsed event name."""

    PLAIN = "plain"
    NAMESPACED = "namespaced"
    NAMESPACE_ONLY = "namespace_only"


@dataclass(frozen=True)
class EventName:
    """Parsed event name. Build with EventName.parse()."""

    kind: EventNameKind
    name: str
    namespace: str | None = None

    @classmethod
    def parse(cls, text: str | None) -> EventName:
        """
        Parse a raw event name string.

        Raises:
            InvalidArgument: If text is None or empty
        """
        if not text:
            raise InvalidArgument("eventName is required", argument="event_name")
        if not isinstance(text, str):
            raise InvalidArgument(
                f"eventName must be a string, got {type(text).__name__}",
                argument="event_name",
            )

        index = text.find(NAMESPACE_SEPARATOR)
        if index == 0:
            return cls(EventNameKind.NAMESPACE_ONLY, "", text[1:])
        if index > 0:
            return cls(EventNameKind.NAMESPACED, text[:index], text[index + 1 :])
        return cls(EventNameKind.PLAIN, text)

    @property
    def is_namespace_only(self) -> bool:
        return self.kind is EventNameKind.NAMESPACE_ONLY

    @property
    def key(self) -> str:
        """Registry key this name stands for."""
        if self.kind is EventNameKind.PLAIN:
            return self.name
        return f"{self.name}{NAMESPACE_SEPARATOR}{self.namespace}"

    def matches(self, key: str) -> bool:
        """Whether a registry key is addressed by this name."""
        if self.kind is EventNameKind.NAMESPACE_ONLY:
            return self.key in key
        if self.kind is EventNameKind.NAMESPACED:
            return key == self.key
        return key == self.name or key.startswith(self.name + NAMESPACE_SEPARATOR)

    def select(self, keys: Iterable[str]) -> Iterator[str]:
        """Yield the keys matched by this name, in iteration order."""
        return (key for key in keys if self.matches(key))

    def require_addressable(self) -> EventName:
        """
        Reject bare namespaces where a concrete event is needed.

        Raises:
            InvalidArgument: If this is a namespace-only name
        """
        if self.is_namespace_only:
            raise InvalidArgument(
                "eventName cannot be a bare namespace: prefix with an event name instead",
                argument="event_name",
            )
        return self

    def __str__(self) -> str:
        return self.key


__all__ = [
    "NAMESPACE_SEPARATOR",
    "EventName",
    "EventNameKind",
]
