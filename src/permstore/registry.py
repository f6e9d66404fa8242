# -*- encoding: utf-8 -*-
# @File   : registry.py
# @Time   : 2024/11/02 22:31:04
# @Author : permstore developers

"""Per-type record of which fields carry an explicit permission.

Annotations belong to the *declared shape* of a store type, not to
an instance, so the table is keyed by type and shared by all instances.
The first annotation of a (type, key) pair wins.
"""

from dataclasses import MISSING, dataclass
from typing import Any, Callable
from warnings import warn

from .consts import Permission


@dataclass(frozen=True)
class RestrictedProperty:
    key: str
    readable: bool
    writable: bool

    @classmethod
    def from_permission(
        cls, key: str, permission: Permission | str
    ) -> 'RestrictedProperty':
        permission = Permission(permission)
        return cls(key, permission.readable, permission.writable)


class PermissionRegistry:
    def __init__(self) -> None:
        # ordered per type, in registration order.
        self.__table: dict[type, list[RestrictedProperty]] = {}

    def register(
        self, owner_type: type, key: str,
        permission: Permission | str = Permission.NONE
    ) -> None:
        """Annotate `key` on `owner_type`, unless already annotated there."""
        entry = RestrictedProperty.from_permission(key, permission)
        entries = self.__table.setdefault(owner_type, [])
        for i in entries:
            if i.key != key:
                continue
            if i != entry:
                warn(
                    f'"{key}" on {owner_type.__qualname__} is already '
                    f'restricted as {i}, ignoring "{Permission(permission).value}".')
            return
        entries.append(entry)

    def lookup(self, instance: object, key: str) -> RestrictedProperty | None:
        """Find the annotation of `key` for the type of `instance`.

        Subtypes see the annotations of their bases; the nearest one wins.
        """
        for klass in type(instance).__mro__:
            for i in self.__table.get(klass, ()):
                if i.key == key:
                    return i
        return None

    def restrictions(self, owner_type: type) -> tuple[RestrictedProperty, ...]:
        """Annotations registered directly on `owner_type`."""
        return tuple(self.__table.get(owner_type, ()))

    def clear(self, owner_type: type | None = None) -> None:
        if owner_type is None:
            self.__table.clear()
        else:
            self.__table.pop(owner_type, None)

    def __repr__(self) -> str:
        return 'PermissionRegistry { .types = %d }' % len(self.__table)


# shared by every store that doesn't bring its own.
REGISTRY = PermissionRegistry()


class Restriction:
    """Class-body declaration of a restricted field, see `restrict()`."""
    def __init__(
        self, permission: Permission | str,
        default: Any = MISSING,
        default_factory: Callable[[], Any] = MISSING
    ) -> None:
        if default is not MISSING and default_factory is not MISSING:
            raise ValueError('cannot specify both default and default_factory')
        self.permission = Permission(permission)
        self.default = default
        self.default_factory = default_factory

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING or self.default_factory is not MISSING

    def make_default(self) -> Any:
        if self.default_factory is not MISSING:
            return self.default_factory()
        return self.default

    def __repr__(self) -> str:
        return f'restrict({self.permission.value!r})'


def restrict(
    permission: Permission | str = Permission.NONE, *,
    default: Any = MISSING,
    default_factory: Callable[[], Any] = MISSING
) -> Any:
    """Declare a restricted field inside a `Store` subclass body.

    ```python
    class UserStore(Store):
        name = restrict('r', default='John')
        secret = restrict('none')
        profile = restrict('rw', default_factory=ProfileStore)
    ```

    Without a permission the field is neither readable nor writable.
    Use `default_factory` for anything mutable (stores especially),
    since `default` is shared by all instances.
    """
    return Restriction(permission, default, default_factory)
