# -*- encoding: utf-8 -*-
# @File   : tree.py
# @Time   : 2024/11/05 21:30:02
# @Author : permstore developers

"""JSON and YAML documents, whose nesting maps onto nested stores."""

import json
from io import TextIOBase
from typing import Any

import yaml

from .source import StoreSource


class JsonSource(StoreSource):
    @staticmethod
    def readstream(buf: TextIOBase) -> Any:
        return json.load(buf)


class YamlSource(StoreSource):
    @staticmethod
    def readstream(buf: TextIOBase) -> Any:
        # an empty document loads as None.
        doc = yaml.safe_load(buf)
        return {} if doc is None else doc
