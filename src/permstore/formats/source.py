# -*- encoding: utf-8 -*-
# @File   : source.py
# @Time   : 2024/11/05 20:47:31
# @Author : permstore developers

import logging
from abc import abstractmethod
from collections.abc import Mapping
from io import StringIO, TextIOBase
from typing import Any, TypeVar

import chardet

from ..abstract import AbstractStore, SourceHandler
from ..path import join_path

S = TypeVar('S', bound=AbstractStore)


class InvalidSource(Exception):
    """To record documents that can't become store entries."""
    pass


def flatten(
    mapping: Mapping[Any, Any], parent: str | None = None
) -> dict[str, Any]:
    """Turn nested mappings into `{'a:b:c': value}` pairs.

    Non-empty mappings are descended into; everything else,
    empty mappings included, is a leaf value.
    """
    ret: dict[str, Any] = {}
    for k, v in mapping.items():
        path = str(k) if parent is None else join_path(parent, str(k))
        if isinstance(v, Mapping) and v:
            ret.update(flatten(v, path))
        else:
            ret[path] = v
    return ret


class StoreSource(SourceHandler[dict[str, Any]]):
    """A read-only document feeding `path: value` entries into stores."""

    def __init__(
        self, filename: str, encoding: str | None = None, *,
        prefix: str | None = None
    ) -> None:
        super().__init__(filename)
        self._codec = encoding
        # mount point of the document within the target store.
        self._prefix = prefix

    @staticmethod
    @abstractmethod
    def readstream(buf: TextIOBase) -> Mapping[str, Any]:
        """Parse decoded text into a (possibly nested) mapping."""
        raise NotImplementedError

    @staticmethod
    def _decode_file(filename: str) -> StringIO:
        with open(filename, 'rb') as fp:
            raw = fp.read()

        codec = chardet.detect(raw)
        if codec is None or codec['encoding'] is None \
                or codec['confidence'] < 0.8:
            codec = {'encoding': 'utf-8'}

        # fallbacks
        try:
            buf = raw.decode(codec['encoding'])
        except UnicodeDecodeError:
            buf = raw.decode('gbk')
        return StringIO(buf)

    def read(self) -> dict[str, Any]:
        """Read the document as flat `path: value` entries."""
        try:
            # when encoding is None, `open()` would fallback to system default.
            with open(self._fn, 'r', encoding=self._codec) as fp:
                doc = self.readstream(fp)
        except UnicodeDecodeError:
            doc = self.readstream(self._decode_file(self._fn))
        if not isinstance(doc, Mapping):
            raise InvalidSource(
                f'{self._fn}: top level is {type(doc).__name__}, not a mapping.')
        return flatten(doc, self._prefix)

    def load_into(self, store: S) -> S:
        """Write every entry into `store`, in document order.

        Stops at the first denied or invalid entry,
        whatever was written before stays.
        """
        entries = self.read()
        store.write_entries(entries)
        logging.info(f'Applied {len(entries)} entries from {self}.')
        return store

    def __str__(self) -> str:
        return f'{type(self).__name__}: {super().__str__()}'
