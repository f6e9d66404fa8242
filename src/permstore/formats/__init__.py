# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/11/05 22:40:19
# @Author : permstore developers

from .ini import IniSource
from .source import InvalidSource, StoreSource, flatten
from .tree import JsonSource, YamlSource

__all__ = [
    'StoreSource', 'InvalidSource', 'flatten',
    'JsonSource', 'YamlSource', 'IniSource'
]
