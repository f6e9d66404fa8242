# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/11/02 21:33:08
# @Author : permstore developers

import logging

from .consts import Permission
from .errors import (
    InvalidPath,
    MissingField,
    ReadAccessDenied,
    StoreError,
    WriteAccessDenied
)
from .gate import AccessGate
from .path import join_path, split_path
from .registry import REGISTRY, PermissionRegistry, RestrictedProperty, restrict
from .store import Factory, Store

__all__ = [
    'Store', 'Factory', 'restrict', 'Permission',
    'PermissionRegistry', 'RestrictedProperty', 'REGISTRY', 'AccessGate',
    'split_path', 'join_path',
    'StoreError', 'ReadAccessDenied', 'WriteAccessDenied',
    'InvalidPath', 'MissingField'
]

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')
