# -*- encoding: utf-8 -*-
# @File   : consts.py
# @Time   : 2024/11/02 21:40:12
# @Author : permstore developers

from enum import Enum


class Permission(str, Enum):
    R = 'r'
    W = 'w'
    RW = 'rw'
    NONE = 'none'

    @property
    def readable(self) -> bool:
        return self in (Permission.R, Permission.RW)

    @property
    def writable(self) -> bool:
        return self in (Permission.W, Permission.RW)


# every store falls back to this when a field has no annotation.
DEFAULT_POLICY = Permission.RW

PATH_SEPARATOR = ':'
