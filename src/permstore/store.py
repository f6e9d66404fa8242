# -*- encoding: utf-8 -*-
# @File   : store.py
# @Time   : 2024/11/03 00:12:56
# @Author : permstore developers

"""Hierarchical key-value store with per-field read/write permissions.

Fields are addressed by colon-delimited paths which descend into
nested stores, e.g. `store.read('profile:email')`.

Which fields are restricted is declared on the store *type*:

```python
class UserStore(Store):
    name = restrict('r', default='John')
    secret = restrict('none')
```

Anything not declared falls back to the instance's `default_policy`.

Note: stores are not thread-safe. Serialize all calls on a tree yourself,
a write that creates nested stores is not atomic.
"""

import logging
from collections.abc import KeysView, Mapping
from typing import Any, Callable

from .abstract import AbstractStore
from .consts import DEFAULT_POLICY, Permission
from .errors import InvalidPath, MissingField, ReadAccessDenied, WriteAccessDenied
from .gate import AccessGate
from .path import split_path
from .registry import REGISTRY, PermissionRegistry, Restriction


class Factory:
    """A lazily produced nested store.

    Stored as a field value, it gets called on every descent through
    that field, e.g. `store.write('user', Factory(UserStore))`.
    """
    def __init__(self, producer: Callable[[], AbstractStore]) -> None:
        self.producer = producer

    def __call__(self) -> AbstractStore:
        return self.producer()

    def __repr__(self) -> str:
        return 'Factory(%s)' % getattr(
            self.producer, '__qualname__', repr(self.producer))


class Store(AbstractStore):
    # annotations declared by `restrict()` in subclass bodies go here.
    registry: PermissionRegistry = REGISTRY
    # policy of new instances, unless given to `__init__`.
    base_policy: Permission | str = DEFAULT_POLICY

    _restricted_defaults: dict[str, Restriction] = {}

    def __init_subclass__(cls, **kwargs) -> None:
        super().__init_subclass__(**kwargs)
        defaults: dict[str, Restriction] = {}
        for name, attr in list(vars(cls).items()):
            if not isinstance(attr, Restriction):
                continue
            cls.registry.register(cls, name, attr.permission)
            if attr.has_default:
                defaults[name] = attr
            # fields live in the instance mapping, never as attributes.
            delattr(cls, name)
        cls._restricted_defaults = defaults

    def __init__(
        self, default_policy: Permission | str | None = None, *,
        registry: PermissionRegistry | None = None
    ) -> None:
        self.__policy = Permission(
            self.base_policy if default_policy is None else default_policy)
        self._gate = AccessGate(type(self).registry if registry is None else registry)
        self._fields: dict[str, Any] = {}
        # base classes first, so subclasses override their defaults.
        for klass in reversed(type(self).__mro__):
            for name, restriction in vars(klass).get(
                    '_restricted_defaults', {}).items():
                self._fields[name] = restriction.make_default()

    @property
    def default_policy(self) -> Permission:
        return self.__policy

    @default_policy.setter
    def default_policy(self, value: Permission | str) -> None:
        self.__policy = Permission(value)

    @property
    def gate(self) -> AccessGate:
        return self._gate

    def allowed_to_read(self, key: str) -> bool:
        return self._gate.allowed_to_read(self, key)

    def allowed_to_write(self, key: str) -> bool:
        return self._gate.allowed_to_write(self, key)

    def spawn(self) -> 'Store':
        """Create the store a write puts at a not yet existing segment.

        It is a plain `Store` with the built-in policy, so none of
        this store's annotations apply to it.
        """
        return Store(registry=self._gate.registry)

    def read(self, path: str) -> Any:
        """Get the value at `path`.

        Only the last segment is checked against permissions;
        the stores on the way are just descended into.

        Raises:
            ReadAccessDenied: the last segment isn't readable.
            InvalidPath: some segment on the way isn't a store.
            MissingField: the last segment was never written.
        """
        head, tail = split_path(path)
        if tail is not None:
            return self.__descend(head, path).read(tail)

        if not self.allowed_to_read(head):
            logging.debug(f'Read of "{head}" denied on {self!r}.')
            raise ReadAccessDenied(head)
        try:
            return self._fields[head]
        except KeyError:
            raise MissingField(head) from None

    def __descend(self, head: str, path: str) -> AbstractStore:
        child = self._fields.get(head)
        if isinstance(child, Factory):
            child = child()
        if not isinstance(child, AbstractStore):
            raise InvalidPath(path, f'"{head}" is not a store')
        return child

    def write(self, path: str, value: Any) -> Any:
        """Set the value at `path`, creating missing stores on the way.

        Returns `value` for a single segment, otherwise the store
        at the first segment.

        A field holding a `Factory` is not a store yet: it is checked
        and replaced by a new store like a missing one.
        Stores form a single-parent tree, so a store can't be written
        into itself; don't mount one store under two keys either.

        Raises:
            WriteAccessDenied: the last segment, or the first missing one,
                isn't writable.
            InvalidPath: `path` is malformed, descends into a value
                that isn't a store, or `value` is this store.
        """
        head, tail = split_path(path)
        if value is self:
            raise InvalidPath(path, 'a store cannot contain itself')
        if tail is None:
            if not self.allowed_to_write(head):
                logging.debug(f'Write of "{head}" denied on {self!r}.')
                raise WriteAccessDenied(head)
            self._fields[head] = value
            return value

        child = self._fields.get(head)
        if isinstance(child, AbstractStore):
            # an existing store checks its own rights.
            child.write(tail, value)
            return child
        if head in self._fields and not isinstance(child, Factory):
            raise InvalidPath(path, f'"{head}" is not a store')

        # nothing to delegate to yet, so check at this level.
        if not self.allowed_to_write(head):
            logging.debug(f'Creating store "{head}" denied on {self!r}.')
            raise WriteAccessDenied(head)
        child = self._fields[head] = self.spawn()
        logging.debug(f'Created store "{head}" on {self!r}.')
        child.write(tail, value)
        return child

    def write_entries(self, entries: Mapping[str, Any]) -> None:
        """Write each `path: value` pair in order.

        Not atomic: stops at the first failure,
        keeping whatever was written before it.
        """
        for path, value in entries.items():
            self.write(path, value)

    def entries(self) -> dict[str, Any]:
        raise NotImplementedError('Flattening a store is not implemented.')

    def get(self, path: str, default: Any = None) -> Any:
        """Like `read()`, but `default` for a field never written."""
        try:
            return self.read(path)
        except MissingField:
            return default

    def keys(self) -> KeysView[str]:
        """Field names of this level, regardless of permissions."""
        return self._fields.keys()

    def __getitem__(self, path: str) -> Any:
        return self.read(path)

    def __setitem__(self, path: str, value: Any) -> None:
        self.write(path, value)

    def __contains__(self, path: object) -> bool:
        # existence only, permissions aren't consulted.
        try:
            head, tail = split_path(path)  # type: ignore[arg-type]
        except InvalidPath:
            return False
        if tail is None:
            return head in self._fields
        try:
            child = self.__descend(head, path)  # type: ignore[arg-type]
        except InvalidPath:
            return False
        return isinstance(child, Store) and tail in child

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return '%s { .cnt = %d, .policy = %s }' % (
            type(self).__name__, len(self._fields), self.__policy.value)
