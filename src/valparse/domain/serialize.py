"""Compact diagnostic rendering of arbitrary values.

Used only to embed the offending input in error messages:
- Identifier-like keys are unquoted: ``{name:"x"}``.
- Long strings keep their head and tail: ``"abcdefgh…stuvwxyz"``.
- Bytes render as text, with undecodable bytes escaped.

The output is JSON-like but not guaranteed to be valid JSON.
"""

from __future__ import annotations

import json
import math
import re
from collections.abc import Iterable, Mapping, Set
from dataclasses import dataclass, field
from typing import Any

from pydantic_core import to_jsonable_python

MAX_STRING_LENGTH = 16
KEEP_CHARS = 8
ELLIPSIS = "…"
CIRCULAR = "[Circular]"

_IDENTIFIER_KEY = re.compile(r"^\w+$", re.ASCII)


def truncate(text: str, *, max_length: int = MAX_STRING_LENGTH, keep: int = KEEP_CHARS) -> str:
    """Shorten *text* to its first and last *keep* characters.

    Examples:
        >>> truncate("abcdefghijklmnopqrstuvwxyz")
        'abcdefgh…stuvwxyz'
        >>> truncate("short")
        'short'
        >>> truncate("abcdef", max_length=4, keep=0)
        '…'
    """
    if len(text) <= max_length:
        return text
    return f"{text[:keep]}{ELLIPSIS}{text[len(text) - keep:]}"


def serialize(value: Any, *, max_length: int = MAX_STRING_LENGTH, keep: int = KEEP_CHARS) -> str:
    """Render *value* compactly for an error message.

    Never raises for odd input: containers that contain themselves render
    the back-reference as ``[Circular]``, undecodable bytes are escaped,
    and objects pydantic cannot serialize fall back to ``repr()``.
    """
    return _Renderer(max_length, keep).render(value)


@dataclass
class _Renderer:
    max_length: int
    keep: int
    # ids of the containers on the current path
    active: set[int] = field(default_factory=set)

    def render(self, value: Any) -> str:
        if value is None or isinstance(value, bool):
            return json.dumps(value)
        if isinstance(value, str):
            return self.text(value)
        if isinstance(value, (bytes, bytearray)):
            return self.text(bytes(value).decode("utf-8", errors="backslashreplace"))
        if isinstance(value, float) and not math.isfinite(value):
            return "null"
        if isinstance(value, (int, float)):
            return json.dumps(value)
        if isinstance(value, (Mapping, list, tuple, Set)):
            return self.container(value)
        # Models, dataclasses, dates, enums; str() for anything else.
        try:
            plain = to_jsonable_python(value, serialize_unknown=True, bytes_mode="hex")
        except ValueError:
            return self.text(repr(value))
        return self.render(plain)

    def text(self, value: str) -> str:
        shortened = truncate(value, max_length=self.max_length, keep=self.keep)
        return json.dumps(shortened, ensure_ascii=False)

    def container(self, value: Mapping[Any, Any] | Iterable[Any]) -> str:
        marker = id(value)
        if marker in self.active:
            return CIRCULAR
        self.active.add(marker)
        try:
            if isinstance(value, Mapping):
                items = (f"{_render_key(k)}:{self.render(v)}" for k, v in value.items())
                return "{" + ",".join(items) + "}"
            return "[" + ",".join(self.render(item) for item in value) + "]"
        finally:
            self.active.discard(marker)


def _render_key(key: Any) -> str:
    if isinstance(key, str):
        text = key
    elif key is None or isinstance(key, (bool, int, float)):
        text = json.dumps(key)
    else:
        text = str(key)
    if _IDENTIFIER_KEY.match(text):
        return text
    return json.dumps(text, ensure_ascii=False)
