# -*- encoding: utf-8 -*-
# @File   : path.py
# @Time   : 2024/11/02 23:24:19
# @Author : permstore developers

"""Colon-delimited addressing, like `profile:email`."""

from .consts import PATH_SEPARATOR
from .errors import InvalidPath


def split_path(path: str) -> tuple[str, str | None]:
    """Split on the first separator only.

    Returns `(head, tail)` where `tail` is `None` for a single segment.
    Every segment must be non-empty, checked up front so that
    a malformed path never gets half way through a write.
    """
    if not isinstance(path, str):
        raise InvalidPath(repr(path), 'path must be a string')
    if not path:
        raise InvalidPath(path, 'empty path')
    if '' in path.split(PATH_SEPARATOR):
        raise InvalidPath(path, 'empty segment')
    head, sep, tail = path.partition(PATH_SEPARATOR)
    return head, (tail if sep else None)


def join_path(*segments: str) -> str:
    return PATH_SEPARATOR.join(segments)
