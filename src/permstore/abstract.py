# -*- encoding: utf-8 -*-
# @File   : abstract.py
# @Time   : 2024/11/02 22:05:18
# @Author : permstore developers

from abc import ABCMeta, abstractmethod
from collections.abc import Mapping
from typing import Any, Generic, TypeVar

from .consts import Permission


class AbstractStore(metaclass=ABCMeta):
    """What a permission-guarded store offers to its callers."""

    @property
    @abstractmethod
    def default_policy(self) -> Permission:
        raise NotImplementedError

    @abstractmethod
    def allowed_to_read(self, key: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def allowed_to_write(self, key: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def read(self, path: str) -> Any:
        raise NotImplementedError

    @abstractmethod
    def write(self, path: str, value: Any) -> Any:
        raise NotImplementedError

    @abstractmethod
    def write_entries(self, entries: Mapping[str, Any]) -> None:
        raise NotImplementedError

    @abstractmethod
    def entries(self) -> dict[str, Any]:
        raise NotImplementedError


T = TypeVar('T')


class SourceHandler(Generic[T], metaclass=ABCMeta):
    def __init__(self, filename: str) -> None:
        self._fn = filename

    @abstractmethod
    def read(self) -> T:
        raise NotImplementedError

    def __str__(self) -> str:
        return self._fn
