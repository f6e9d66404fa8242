# -*- encoding: utf-8 -*-
# @File   : errors.py
# @Time   : 2024/11/02 21:52:37
# @Author : permstore developers


class StoreError(Exception):
    """Base of everything a store raises on its own."""
    pass


class ReadAccessDenied(StoreError, PermissionError):
    def __init__(self, key: str) -> None:
        super().__init__(f'Read Access Denied: "{key}"')
        self.key = key


class WriteAccessDenied(StoreError, PermissionError):
    def __init__(self, key: str) -> None:
        super().__init__(f'Write Access Denied: "{key}"')
        self.key = key


class InvalidPath(StoreError, ValueError):
    """Malformed path, or a path descending into something
    that is neither a store nor a factory of one."""
    def __init__(self, path: str, reason: str = '') -> None:
        msg = f'Invalid path "{path}"'
        super().__init__(f'{msg}: {reason}' if reason else msg)
        self.path = path


class MissingField(StoreError, KeyError):
    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f'No such field "{self.key}"'
