"""Query string and form-encoded parameters."""

from collections.abc import Iterator, Mapping
from urllib.parse import parse_qs, urlencode

from simplevc.extraction import convert_value


def _as_lists(source: Mapping[str, object]) -> dict[str, list[str]]:
    lists: dict[str, list[str]] = {}
    for key, value in source.items():
        values = value if isinstance(value, (list, tuple)) else [value]
        lists[str(key)] = [str(v) for v in values]
    return lists


class QueryParams(Mapping[str, str]):
    """Read-only, multi-valued parameters.

    Indexing returns the first value of a key; ``get_list`` returns all of
    them. Built from a raw ``a=1&b=2`` string (bytes are read as latin-1,
    as ASGI delivers them) or from a mapping whose values may be lists.
    """

    __slots__ = ("_data",)

    def __init__(self, source: bytes | str | Mapping[str, object] = b"") -> None:
        if isinstance(source, Mapping):
            self._data = _as_lists(source)
        else:
            text = source.decode("latin-1") if isinstance(source, bytes) else source
            self._data = parse_qs(text, keep_blank_values=True)

    def __getitem__(self, key: str) -> str:
        return self._data[key][0]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"QueryParams({self.encode()!r})"

    def get_list(self, key: str) -> list[str]:
        return list(self._data.get(key, ()))

    def get_int(self, key: str, default: int | None = None) -> int | None:
        """First value of *key* as an int; *default* when missing or not numeric."""
        value = self.get(key)
        converted = convert_value(value, int) if value is not None else None
        return converted if isinstance(converted, int) else default

    def get_bool(self, key: str, default: bool | None = None) -> bool | None:
        """First value of *key* as a bool (``true``/``1``/``yes``/``on`` are true)."""
        value = self.get(key)
        return default if value is None else convert_value(value, bool)

    def encode(self) -> str:
        """Serialize back to a query string."""
        return urlencode([(k, v) for k, values in self._data.items() for v in values])
