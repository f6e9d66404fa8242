# -*- encoding: utf-8 -*-
# @File   : ini.py
# @Time   : 2024/11/05 22:16:48
# @Author : permstore developers

"""Flat INI documents.

```ini
key = val       ; goes to `key`
[profile]
email = a@b.c   ; goes to `profile:email`
```

Every value stays a string. No inheritance, no `[#include]`.
"""

from io import TextIOBase
from warnings import warn

from .source import StoreSource


class IniSource(StoreSource):
    @staticmethod
    def readstream(buf: TextIOBase) -> dict[str, str | dict[str, str]]:
        header: dict[str, str] = {}
        sections: dict[str, dict[str, str]] = {}
        this_sect = header
        line_count = 0
        while i := buf.readline():
            line_count += 1
            i = i.split(';')[0].strip()
            if not i or i.startswith('#'):
                continue
            if i[0] == '[':
                decl = i.strip('[]').strip()
                if not decl or not i.endswith(']'):
                    warn(f'Line {line_count} is not a valid section, skipped:\n\t{i}')
                    continue
                this_sect = sections.setdefault(decl, {})
            elif '=' in i:
                key, val = i.split('=', 1)
                this_sect[key.strip()] = val.strip()
            else:
                warn(f'Line {line_count} is not a key-value pair, skipped:\n\t{i}')
        ret: dict[str, str | dict[str, str]] = dict(header)
        for decl, pairs in sections.items():
            if decl in ret:
                warn(f'"{decl}" is both a key and a section, '
                     f'the key "{decl} = {ret[decl]}" got overrode.')
            ret[decl] = pairs
        return ret
