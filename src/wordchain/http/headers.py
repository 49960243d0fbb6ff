"""Request headers as a read-only, case-insensitive mapping.

The service reads a handful of single-valued headers (``authorization``,
``cookie``, ``content-length``, ``content-type``). Names are folded to
lowercase once, when the request is built; a repeated header keeps its
first value.
"""

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType


class Headers(Mapping[str, str]):
    """Lowercased header names mapped to their first value."""

    __slots__ = ("_values",)

    def __init__(self, raw: Iterable[tuple[bytes, bytes]] = ()) -> None:
        values: dict[str, str] = {}
        for name, value in raw:
            values.setdefault(name.decode("latin-1").lower(), value.decode("latin-1"))
        self._values = MappingProxyType(values)

    def __getitem__(self, key: str) -> str:
        return self._values[key.lower()]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Headers({dict(self._values)!r})"
