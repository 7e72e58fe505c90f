"""Tests for EventName parsing and the namespace matching rule."""

import pytest

from nsemitter.core.events import EventName, EventNameKind
from nsemitter.core.exceptions import InvalidArgument


class TestParse:
    def test_plain(self):
        name = EventName.parse("foo")
        assert name.kind is EventNameKind.PLAIN
        assert name.name == "foo"
        assert name.namespace is None
        assert name.key == "foo"

    def test_namespaced(self):
        name = EventName.parse("foo.ns")
        assert name.kind is EventNameKind.NAMESPACED
        assert (name.name, name.namespace) == ("foo", "ns")
        assert name.key == "foo.ns"

    def test_namespaced_with_nested_namespace_keeps_full_key(self):
        name = EventName.parse("foo.a.b")
        assert name.namespace == "a.b"
        assert str(name) == "foo.a.b"

    def test_namespace_only(self):
        name = EventName.parse(".ns")
        assert name.kind is EventNameKind.NAMESPACE_ONLY
        assert name.is_namespace_only
        assert name.key == ".ns"

    @pytest.mark.parametrize("raw", [None, ""])
    def test_missing_name_is_rejected(self, raw):
        with pytest.raises(InvalidArgument, match="eventName is required"):
            EventName.parse(raw)

    def test_non_string_is_rejected(self):
        with pytest.raises(InvalidArgument):
            EventName.parse(42)

    def test_require_addressable_rejects_bare_namespace(self):
        with pytest.raises(InvalidArgument, match="bare namespace"):
            EventName.parse(".ns").require_addressable()

    def test_require_addressable_returns_self(self):
        name = EventName.parse("foo.ns")
        assert name.require_addressable() is name


class TestMatching:
    KEYS = ["foo", "foo.ns", "foo.other", "foobar", "bar.ns", "bar", "foo.nsx"]

    def test_plain_matches_itself_and_namespaced_children(self):
        selected = list(EventName.parse("foo").select(self.KEYS))
        assert selected == ["foo", "foo.ns", "foo.other", "foo.nsx"]

    def test_namespaced_matches_only_exact_key(self):
        assert list(EventName.parse("foo.ns").select(self.KEYS)) == ["foo.ns"]

    def test_namespace_only_matches_across_base_names(self):
        selected = list(EventName.parse(".ns").select(self.KEYS))
        assert selected == ["foo.ns", "bar.ns", "foo.nsx"]

    def test_namespace_only_uses_substring_containment(self):
        assert EventName.parse(".namespace").matches("foo.namespacer")
