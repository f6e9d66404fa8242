# -*- encoding: utf-8 -*-
# @File   : gate.py
# @Time   : 2024/11/02 23:10:45
# @Author : permstore developers

from typing import TYPE_CHECKING

from .consts import Permission
from .registry import PermissionRegistry

if TYPE_CHECKING:
    from .store import Store


class AccessGate:
    """Decides whether a field may be read or written.

    An annotation in the registry is final; without one,
    the store's current default policy decides.
    """
    def __init__(self, registry: PermissionRegistry) -> None:
        self.registry = registry

    def allowed_to_read(self, store: 'Store', key: str) -> bool:
        restricted = self.registry.lookup(store, key)
        if restricted is None:
            # fallback to default policy
            return store.default_policy in (Permission.R, Permission.RW)
        return restricted.readable

    def allowed_to_write(self, store: 'Store', key: str) -> bool:
        restricted = self.registry.lookup(store, key)
        if restricted is None:
            return store.default_policy in (Permission.W, Permission.RW)
        return restricted.writable
