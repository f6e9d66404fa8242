"""
Tests for the store: path resolution, permission checks and auto-created
nested stores.
"""

import logging

import pytest

from permstore import (
    Factory,
    InvalidPath,
    MissingField,
    Permission,
    ReadAccessDenied,
    Store,
    StoreError,
    WriteAccessDenied,
    restrict,
)


class UserStore(Store):
    name = restrict("r", default="John")
    secret = restrict("none", default="hunter2")
    token = restrict("w")
    profile = restrict("none", default_factory=Store)
    account = restrict("none")


@pytest.fixture
def store():
    return Store()


@pytest.fixture
def user():
    return UserStore()


# =============================================================================
# SINGLE SEGMENT
# =============================================================================

class TestSingleSegment:

    def test_write_then_read(self, store):
        assert store.write("x", 5) == 5
        assert store.read("x") == 5

    def test_value_returned_verbatim(self, store):
        value = {"nested": [1, 2]}
        store.write("x", value)
        assert store.read("x") is value

    def test_overwrite(self, store):
        store.write("x", 1)
        store.write("x", 2)
        assert store.read("x") == 2

    def test_read_missing_field(self, store):
        with pytest.raises(MissingField) as e:
            store.read("nope")
        assert e.value.key == "nope"
        assert isinstance(e.value, KeyError)

    def test_get_default(self, store):
        assert store.get("nope") is None
        assert store.get("nope", 7) == 7
        store.write("x", 1)
        assert store.get("x", 7) == 1

    def test_declared_default(self, user):
        assert user.read("name") == "John"

    def test_read_only_field(self, user):
        with pytest.raises(WriteAccessDenied) as e:
            user.write("name", "Jane")
        assert e.value.key == "name"
        assert user.read("name") == "John"

    def test_write_only_field(self, user):
        assert user.write("token", "abc") == "abc"
        with pytest.raises(ReadAccessDenied):
            user.read("token")

    def test_none_field_read_denied_value_unchanged(self, user):
        with pytest.raises(ReadAccessDenied):
            user.read("secret")
        with pytest.raises(WriteAccessDenied):
            user.write("secret", "other")
        assert user._fields["secret"] == "hunter2"

    def test_denials_are_store_and_permission_errors(self, user):
        with pytest.raises(StoreError):
            user.read("secret")
        with pytest.raises(PermissionError):
            user.write("secret", 1)

    def test_default_policy_read_only(self):
        store = Store("r")
        with pytest.raises(WriteAccessDenied):
            store.write("x", 1)

    def test_default_policy_write_only(self):
        store = Store("w")
        store.write("x", 1)
        with pytest.raises(ReadAccessDenied):
            store.read("x")

    def test_policy_mutation(self, store):
        store.write("x", 1)
        store.default_policy = Permission.NONE
        with pytest.raises(ReadAccessDenied):
            store.read("x")
        store.default_policy = "rw"
        assert store.read("x") == 1

    def test_base_policy_of_subclass(self):
        class ReadOnlyStore(Store):
            base_policy = "r"

        assert ReadOnlyStore().default_policy is Permission.R
        assert ReadOnlyStore("rw").default_policy is Permission.RW


# =============================================================================
# NESTED PATHS
# =============================================================================

class TestNestedPaths:

    def test_auto_created_stores(self, store):
        store.write("a:b:c", 5)
        assert store.read("a:b:c") == 5
        assert isinstance(store.read("a"), Store)
        assert isinstance(store.read("a:b"), Store)

    def test_write_returns_store_at_head(self, store):
        ret = store.write("a:b:c", 5)
        assert ret is store.read("a")

    def test_write_into_existing_store_keeps_siblings(self, store):
        store.write("a:x", 1)
        store.write("a:y", 2)
        assert store.read("a:x") == 1
        assert store.read("a:y") == 2
        assert sorted(store.read("a").keys()) == ["x", "y"]

    def test_descend_into_scalar(self, store):
        store.write("a", 1)
        with pytest.raises(InvalidPath) as e:
            store.write("a:b", 2)
        assert e.value.path == "a:b"
        assert store.read("a") == 1
        with pytest.raises(InvalidPath):
            store.read("a:b")

    def test_store_cannot_contain_itself(self, store):
        with pytest.raises(InvalidPath):
            store.write("me", store)
        with pytest.raises(InvalidPath):
            store.write("a:me", store)
        assert len(store) == 0

    def test_read_through_missing_field(self, store):
        with pytest.raises(InvalidPath):
            store.read("nope:x")

    @pytest.mark.parametrize("path", ["", "a:", "a::b", ":b"])
    def test_malformed_path_creates_nothing(self, store, path):
        with pytest.raises(InvalidPath):
            store.write(path, 1)
        assert len(store) == 0

    def test_child_is_plain_store(self, user):
        user.write("extra:secret", 1)
        child = user.read("extra")
        assert type(child) is Store
        assert child.default_policy is Permission.RW
        # `secret` is restricted on UserStore only.
        assert user.read("extra:secret") == 1

    def test_child_shares_registry(self, user):
        user.write("extra:x", 1)
        assert user.read("extra").gate.registry is user.gate.registry

    def test_creating_child_checked_at_this_level(self, user):
        with pytest.raises(WriteAccessDenied) as e:
            user.write("account:id", 1)
        assert e.value.key == "account"
        assert "account" not in user

    def test_creating_child_under_read_only_policy(self):
        store = Store("r")
        with pytest.raises(WriteAccessDenied):
            store.write("a:b", 1)
        assert len(store) == 0

    def test_existing_child_bypasses_outer_check(self, user):
        # `profile` is "none" on UserStore, but the store already exists.
        assert user.write("profile:email", "a@b.c") is user._fields["profile"]
        assert user.read("profile:email") == "a@b.c"
        with pytest.raises(ReadAccessDenied):
            user.read("profile")

    def test_child_enforces_own_policy(self, store):
        store.write("a:x", 1)
        store.read("a").default_policy = "r"
        with pytest.raises(WriteAccessDenied):
            store.write("a:y", 2)
        assert store.read("a:x") == 1

    def test_nested_restricted_type(self):
        class Settings(Store):
            locked = restrict("r", default=True)

        class Root(Store):
            settings = restrict("r", default_factory=Settings)

        root = Root()
        assert root.read("settings:locked") is True
        with pytest.raises(WriteAccessDenied):
            root.write("settings:locked", False)
        root.write("settings:theme", "dark")
        assert root.read("settings:theme") == "dark"


# =============================================================================
# FACTORIES
# =============================================================================

class TestFactory:

    def test_read_through_factory(self, store):
        child = Store()
        child.write("x", 1)
        store.write("lazy", Factory(lambda: child))
        assert store.read("lazy:x") == 1

    def test_factory_read_verbatim(self, store):
        factory = Factory(Store)
        store.write("lazy", factory)
        assert store.read("lazy") is factory

    def test_factory_called_on_every_descent(self, store):
        calls = []

        def produce():
            calls.append(1)
            child = Store()
            child.write("x", len(calls))
            return child

        store.write("lazy", Factory(produce))
        assert store.read("lazy:x") == 1
        assert store.read("lazy:x") == 2

    def test_write_replaces_factory_with_store(self, store):
        factory = Factory(Store)
        store.write("lazy", factory)
        child = store.write("lazy:x", 1)
        assert isinstance(child, Store)
        assert store.read("lazy") is child
        assert store.read("lazy:x") == 1

    def test_write_replacing_factory_is_checked(self):
        class Guarded(Store):
            lazy = restrict("none", default=Factory(Store))

        guarded = Guarded()
        with pytest.raises(WriteAccessDenied) as e:
            guarded.write("lazy:x", 1)
        assert e.value.key == "lazy"
        assert isinstance(guarded._fields["lazy"], Factory)

    def test_factory_not_producing_store(self, store):
        store.write("lazy", Factory(lambda: 42))
        with pytest.raises(InvalidPath):
            store.read("lazy:x")


# =============================================================================
# BULK WRITES
# =============================================================================

class TestWriteEntries:

    def test_all_written(self, store):
        store.write_entries({"x": 1, "y": 2})
        assert store.read("x") == 1
        assert store.read("y") == 2

    def test_nested_paths(self, store):
        store.write_entries({"a:b": 1, "a:c": 2})
        assert store.read("a:b") == 1
        assert store.read("a:c") == 2

    def test_fail_fast_without_rollback(self, user):
        with pytest.raises(WriteAccessDenied):
            user.write_entries({"x": 1, "name": "Jane", "z": 3})
        assert user.read("x") == 1
        assert user.read("name") == "John"
        assert "z" not in user

    def test_order_preserved(self, store):
        # `x` becomes a scalar first, so descending into it fails.
        with pytest.raises(InvalidPath):
            store.write_entries({"x": 1, "x:y": 2})
        assert store.read("x") == 1

    def test_entries_not_implemented(self, store, user):
        with pytest.raises(NotImplementedError):
            store.entries()
        with pytest.raises(NotImplementedError):
            user.entries()


# =============================================================================
# PROTOCOL SUGAR
# =============================================================================

class TestSugar:

    def test_item_access(self, store):
        store["a:b"] = 1
        assert store["a:b"] == 1
        with pytest.raises(KeyError):
            store["nope"]

    def test_contains(self, store, user):
        store.write("a:b:c", 1)
        assert "a" in store
        assert "a:b:c" in store
        assert "a:x" not in store
        assert "a:b:c:d" not in store
        assert "a::b" not in store
        # existence only.
        assert "secret" in user

    def test_len_and_keys(self, store):
        store.write("x", 1)
        store.write("a:b", 2)
        assert len(store) == 2
        assert set(store.keys()) == {"x", "a"}

    def test_repr(self, store):
        store.write("x", 1)
        assert repr(store) == "Store { .cnt = 1, .policy = rw }"


# =============================================================================
# LOGGING
# =============================================================================

class TestLogging:

    def test_auto_creation_logged(self, store, caplog):
        caplog.set_level(logging.DEBUG)
        store.write("a:b", 1)
        assert 'Created store "a"' in caplog.text

    def test_denial_logged(self, user, caplog):
        caplog.set_level(logging.DEBUG)
        with pytest.raises(ReadAccessDenied):
            user.read("secret")
        assert 'Read of "secret" denied' in caplog.text
