"""
Case-insensitive, ordered, immutable header mapping.
"""
from typing import Dict, Iterable, Iterator, Mapping, Tuple, Union

HeadersLike = Union["HeaderMap", Mapping[str, str], Iterable[Tuple[str, str]], None]


class HeaderMap(Mapping[str, str]):
    """Immutable header mapping.

    Lookups ignore case. Setting a name that already exists replaces the value
    in place (first-seen position is kept, the newest spelling of the name is
    used), so a header never appears twice.
    """

    __slots__ = ("_items",)

    def __init__(self, headers: HeadersLike = None):
        items: Dict[str, Tuple[str, str]] = {}
        if headers is not None:
            pairs = headers.items() if isinstance(headers, Mapping) else headers
            for name, value in pairs:
                items[name.lower()] = (name, str(value))
        self._items = items

    def __getitem__(self, name: str) -> str:
        return self._items[name.lower()][1]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._items

    def __iter__(self) -> Iterator[str]:
        return (name for name, _ in self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, HeaderMap):
            return {k: v for k, (_, v) in self._items.items()} == {
                k: v for k, (_, v) in other._items.items()
            }
        if isinstance(other, Mapping):
            return self == HeaderMap(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(tuple(sorted((k, v) for k, (_, v) in self._items.items())))

    def __repr__(self) -> str:
        return f"HeaderMap({self.to_dict()!r})"

    def set(self, name: str, value: str) -> "HeaderMap":
        """Return a copy with ``name`` set to ``value``."""
        result = HeaderMap()
        result._items = dict(self._items)
        result._items[name.lower()] = (name, str(value))
        return result

    def remove(self, name: str) -> "HeaderMap":
        """Return a copy without ``name`` (no-op if absent)."""
        result = HeaderMap()
        result._items = {k: v for k, v in self._items.items() if k != name.lower()}
        return result

    def to_dict(self) -> Dict[str, str]:
        return {name: value for name, value in self._items.values()}


def merge_headers(base: HeadersLike, override: HeadersLike) -> HeaderMap:
    """Merge ``override`` on top of ``base``; ``override`` wins on conflict."""
    result = base if isinstance(base, HeaderMap) else HeaderMap(base)
    if override is None:
        return result
    pairs = override.items() if isinstance(override, Mapping) else override
    for name, value in pairs:
        result = result.set(name, value)
    return result
