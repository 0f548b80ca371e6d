"""
Read contract for already-parsed changelog documents.

The changelog core only ever reads named fields and child blocks from a
tree; how the tree was produced is up to the host. ``DictConfigTree`` wraps
plain dict/list data as produced by ``json.load``.
"""

from collections.abc import Mapping, Sequence
from typing import Any, Protocol

_TRUE_VALUES = ("true", "yes", "1", "on")
_FALSE_VALUES = ("false", "no", "0", "off")


class ConfigTree(Protocol):
    """A block of named string fields and tagged child blocks."""

    def get_field(self, name: str) -> str | None: ...

    def get_values(self, name: str) -> list[str]: ...

    def get_bool(self, name: str) -> bool | None: ...

    def get_child_blocks(self, tag: str) -> Sequence["ConfigTree"]: ...


class DictConfigTree:
    """
    ConfigTree over a mapping.

    Scalars are fields, lists of scalars are repeated fields, and mappings
    (or lists of mappings) are child blocks under their key.
    """

    def __init__(self, data: Mapping[str, Any] | None = None):
        self._data: Mapping[str, Any] = data if data is not None else {}

    @property
    def data(self) -> Mapping[str, Any]:
        return self._data

    def get_field(self, name: str) -> str | None:
        values = self.get_values(name)
        return values[0] if values else None

    def get_values(self, name: str) -> list[str]:
        value = self._data.get(name)
        if value is None or isinstance(value, Mapping):
            return []
        if isinstance(value, list):
            return [_to_text(v) for v in value if not isinstance(v, (Mapping, list))]
        return [_to_text(value)]

    def get_bool(self, name: str) -> bool | None:
        value = self._data.get(name)
        if isinstance(value, bool):
            return value
        text = self.get_field(name)
        if text is None:
            return None
        lowered = text.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        return None

    def get_child_blocks(self, tag: str) -> list["DictConfigTree"]:
        value = self._data.get(tag)
        if isinstance(value, Mapping):
            return [DictConfigTree(value)]
        if isinstance(value, list):
            return [DictConfigTree(v) for v in value if isinstance(v, Mapping)]
        return []


def _to_text(value: Any) -> str:
    if isinstance(value, bool):
        return "True" if value else "False"
    return str(value)
