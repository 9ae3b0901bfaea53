"""Unit tests for declarative stored properties."""

from __future__ import annotations

from enum import Enum

import pytest

from accessors.stored_property import (
    OptionalRawStoredProperty,
    OptionalStoredProperty,
    PreferenceGroup,
    RawStoredProperty,
    StoredProperty,
    accessor_of,
    optional_property,
    optional_raw_property,
    raw_property,
    stored_property,
    stored_property_names,
)
from accessors.raw_stored_value import RawStoredValue
from core.errors import UnsupportedTypeError
from store.memory_store import MemoryStore


class Language(Enum):
    ENGLISH = "en"
    FINNISH = "fi"
    SWEDISH = "sv"


class UserSettings(PreferenceGroup):
    some_flag = StoredProperty("some_flag", False)
    flag_with_initial_value = StoredProperty("flag_with_initial_value", False, initial=True)
    optional_flag_default_true = OptionalStoredProperty("optional_flag_default_true", bool, default=True)
    better_optional_flag = OptionalStoredProperty("fixed_optional_flag", bool)
    language = RawStoredProperty("lang", Language.ENGLISH, initial=Language.FINNISH)
    fallback_language = OptionalRawStoredProperty("fallback_lang", Language)


class ProfileSettings(PreferenceGroup):
    nickname = OptionalStoredProperty(None, str, initial="guest")

    def __init__(self, profile_id: str, store: MemoryStore) -> None:
        super().__init__(store)
        self.profile_id = profile_id
        self.accessor("nickname").bind_key(f"nickname.{profile_id}")


def test_group_writes_initial_values_at_construction() -> None:
    """Constructing a group should store every declared initial value."""
    store = MemoryStore()
    settings = UserSettings(store)

    assert store.snapshot() == {"flag_with_initial_value": True, "lang": "fi"}
    assert settings.some_flag is False and settings.language is Language.FINNISH


def test_attribute_assignment_writes_store() -> None:
    """Assigning an attribute should write the store entry."""
    store = MemoryStore()
    settings = UserSettings(store)

    settings.language = Language.SWEDISH
    settings.better_optional_flag = True

    assert store.get("lang") == "sv" and store.get("fixed_optional_flag") is True


def test_optional_property_collapses_none_to_default() -> None:
    """Assigning None to an optional property should read back its default."""
    settings = UserSettings(MemoryStore())
    settings.optional_flag_default_true = False
    assert settings.optional_flag_default_true is False

    settings.optional_flag_default_true = None

    assert settings.optional_flag_default_true is True


def test_del_removes_entry() -> None:
    """Deleting the attribute should remove the store entry."""
    store = MemoryStore()
    settings = UserSettings(store)

    del settings.language

    assert settings.language is Language.ENGLISH and not store.contains("lang")


def test_reset_and_remove_stored_values() -> None:
    """Group-wide reset restores initial values; remove clears everything."""
    store = MemoryStore()
    settings = UserSettings(store)
    settings.some_flag = True
    settings.language = Language.SWEDISH
    settings.fallback_language = Language.ENGLISH

    settings.reset_stored_values()
    assert store.snapshot() == {"flag_with_initial_value": True, "lang": "fi"}

    settings.remove_stored_values()
    assert store.keys() == []


def test_instances_own_separate_accessors() -> None:
    """Two owners should never share one accessor."""
    first = UserSettings(MemoryStore())
    second = UserSettings(MemoryStore())

    assert first.accessor("language") is not second.accessor("language")
    assert isinstance(first.accessor("language"), RawStoredValue)


def test_deferred_key_bound_from_instance_state() -> None:
    """Keys built in __init__ should be bound once and receive the initial value."""
    store = MemoryStore()
    profile = ProfileSettings("u42", store)

    assert store.get("nickname.u42") == "guest" and profile.nickname == "guest"


def test_class_access_returns_descriptor() -> None:
    """Looking the attribute up on the class should return the descriptor."""
    assert isinstance(UserSettings.language, RawStoredProperty)


def test_descriptor_names_follow_declaration_order() -> None:
    """Stored property names should be listed in declaration order."""
    assert stored_property_names(UserSettings)[:2] == ["some_flag", "flag_with_initial_value"]


def test_accessor_of_unknown_name_raises() -> None:
    """Only declared stored properties have accessors."""
    with pytest.raises(AttributeError):
        accessor_of(UserSettings(MemoryStore()), "missing")


def test_unsupported_declaration_fails_at_class_definition() -> None:
    """Declaring an unsupported type should fail when the class is defined."""
    with pytest.raises(UnsupportedTypeError):

        class BrokenSettings(PreferenceGroup):
            language = StoredProperty("lang", Language.ENGLISH)


def test_plain_object_uses_descriptor_store() -> None:
    """Descriptors work on plain classes with an explicit store."""
    store = MemoryStore()

    class Window:
        width = StoredProperty("window.width", 800, store=store)

    window = Window()
    window.width = 1024

    assert store.get("window.width") == 1024 and window.width == 1024


def test_factory_functions_declare_properties() -> None:
    """Factory helpers should build the matching descriptor classes."""
    store = MemoryStore()

    class AppSettings(PreferenceGroup):
        volume = stored_property("volume", 5, initial=7)
        nickname = optional_property("nickname", str, default="guest")
        language = raw_property("lang", Language.ENGLISH)
        fallback_language = optional_raw_property("fallback_lang", Language)

    settings = AppSettings(store)
    settings.language = Language.SWEDISH

    assert isinstance(AppSettings.volume, StoredProperty)
    assert isinstance(AppSettings.nickname, OptionalStoredProperty)
    assert isinstance(AppSettings.fallback_language, OptionalRawStoredProperty)
    assert settings.volume == 7 and settings.nickname == "guest"
    assert settings.fallback_language is None and store.get("lang") == "sv"
