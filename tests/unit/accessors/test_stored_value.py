"""Unit tests for storable-type accessors."""

from __future__ import annotations

from datetime import datetime

import pytest

from accessors.stored_value import OptionalStoredValue, StoredValue
from core.errors import KeyNotBoundError, UnsupportedTypeError
from store.default_store import get_default_store
from store.memory_store import MemoryStore


def test_absent_key_reads_default() -> None:
    """A key with no entry should read as the declared default."""
    flag = StoredValue("some_flag", False, store=MemoryStore())

    assert flag.read() is False


@pytest.mark.parametrize(
    ("default", "written"),
    [
        (False, True),
        (0, 42),
        (0.0, 1.5),
        ("", "hello"),
        (b"", b"\x00\x01"),
        (datetime(2020, 1, 1), datetime(2024, 2, 3, 4, 5, 6)),
        ([], ["a", "b"]),
        ({}, {"a": 1}),
    ],
)
def test_write_then_read_round_trips(default, written) -> None:
    """Written values should read back unchanged."""
    accessor = StoredValue("key", default, store=MemoryStore())

    accessor.value = written

    assert accessor.value == written


def test_mismatched_stored_value_reads_default() -> None:
    """An entry of the wrong type should fall back to the default."""
    store = MemoryStore({"count": "seven"})
    count = StoredValue("count", 1, store=store)

    assert count.read() == 1


def test_initial_value_is_written_at_construction() -> None:
    """An initial value should reach the store immediately."""
    store = MemoryStore()
    flag = StoredValue("flag_with_initial_value", False, initial=True, store=store)

    assert store.get("flag_with_initial_value") is True
    store.remove("flag_with_initial_value")
    assert flag.read() is False


def test_write_rejects_value_of_other_type() -> None:
    """Writing a value outside the declared type should raise."""
    count = StoredValue("count", 0, store=MemoryStore())

    with pytest.raises(UnsupportedTypeError):
        count.write("ten")


def test_unsupported_declared_type_fails_at_construction() -> None:
    """Non-storable types should be rejected before first use."""
    with pytest.raises(UnsupportedTypeError):
        StoredValue("ids", {1, 2}, store=MemoryStore())


def test_deferred_key_read_raises() -> None:
    """Reading through a deferred key is a programming error."""
    flag = StoredValue(None, False, store=MemoryStore())

    with pytest.raises(KeyNotBoundError):
        flag.read()


def test_deferred_key_write_raises() -> None:
    """Writing through a deferred key is a programming error."""
    flag = StoredValue("", False, store=MemoryStore())

    with pytest.raises(KeyNotBoundError):
        flag.write(True)


def test_bind_key_writes_pending_initial_value() -> None:
    """A deferred accessor should write its initial value once bound."""
    store = MemoryStore()
    flag = StoredValue(None, False, initial=True, store=store)

    flag.bind_key("flag.user-7")

    assert store.get("flag.user-7") is True and flag.read() is True


def test_read_only_write_is_ignored() -> None:
    """Read-only accessors should drop property writes silently."""
    store = MemoryStore({"title": "stored"})
    title = StoredValue("title", "default", store=store, read_only=True)

    title.value = "changed"

    assert title.value == "stored"


def test_accessor_without_store_uses_default_store() -> None:
    """Accessors should fall back to the process-wide store."""
    flag = StoredValue("flag", False)
    flag.write(True)

    assert get_default_store().get("flag") is True


def test_optional_without_default_reads_none() -> None:
    """An optional accessor with no default reads None when absent."""
    flag = OptionalStoredValue("fixed_optional_flag", bool, store=MemoryStore())

    assert flag.read() is None
    flag.write(True)
    assert flag.read() is True


def test_optional_writing_none_removes_key() -> None:
    """Writing None should delete the entry rather than store a null."""
    store = MemoryStore()
    flag = OptionalStoredValue("optional_flag", bool, store=store)
    flag.write(False)

    flag.write(None)

    assert not store.contains("optional_flag")


def test_optional_none_collapses_to_default() -> None:
    """After writing None an optional accessor reads its default."""
    flag = OptionalStoredValue("optional_flag_default_true", bool, default=True, store=MemoryStore())
    flag.value = False
    assert flag.value is False

    flag.value = None

    assert flag.value is True


def test_optional_initial_none_clears_entry() -> None:
    """An explicit initial value of None should remove any stored entry."""
    store = MemoryStore({"nickname": "old"})
    nickname = OptionalStoredValue("nickname", str, initial=None, store=store)

    assert nickname.read() is None and nickname.has_initial


def test_optional_deferred_key_read_raises() -> None:
    """Optional accessors fail the same way as non-optional ones when unbound."""
    nickname = OptionalStoredValue(None, str, store=MemoryStore())

    with pytest.raises(KeyNotBoundError):
        nickname.read()


class _NullHoldingStore(MemoryStore):
    """Store that keeps explicit null entries instead of deleting them."""

    def __init__(self) -> None:
        super().__init__()
        self._null_keys: set[str] = set()

    def hold_null(self, key: str) -> None:
        self.remove(key)
        self._null_keys.add(key)

    def contains(self, key: str) -> bool:
        return key in self._null_keys or super().contains(key)


def test_mutating_default_read_does_not_change_default() -> None:
    """Mutating a fallback result should leave later reads untouched."""
    tags = StoredValue("tags", ["a"], store=MemoryStore())

    tags.read().append("leak")

    assert tags.read() == ["a"] and tags.default == ["a"]


def test_mutating_optional_default_read_does_not_change_default() -> None:
    """Optional accessors should hand out copies of container defaults too."""
    limits = OptionalStoredValue("limits", dict[str, int], default={"max": 1}, store=MemoryStore())

    limits.read()["max"] = 99

    assert limits.read() == {"max": 1}


def test_present_null_entry_reads_default() -> None:
    """A key that exists but holds null should read like an absent key."""
    store = _NullHoldingStore()
    flag = StoredValue("some_flag", False, store=store)
    nickname = OptionalStoredValue("nickname", str, default="guest", store=store)
    store.hold_null("some_flag")
    store.hold_null("nickname")

    assert store.contains("some_flag") and store.contains("nickname")
    assert flag.read() is False and nickname.read() == "guest"
