"""
Ordered, multi-valued header collection backed by httpx.Headers.
"""
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

import httpx

HeaderPairs = Sequence[Tuple[Union[str, bytes], Any]]
HeaderSource = Union["HeaderSet", httpx.Headers, Mapping[str, Any], HeaderPairs]


def _to_bytes(value: Any) -> bytes:
    """Coerce a header name or value to bytes without validating it."""
    if isinstance(value, bytes):
        return value
    if not isinstance(value, str):
        value = str(value)
    try:
        return value.encode("ascii")
    except UnicodeEncodeError:
        # httpx.Headers would reject this; keep the raw UTF-8 bytes instead
        return value.encode("utf-8")


def _to_text(value: bytes) -> str:
    try:
        return value.decode("utf-8")
    except UnicodeDecodeError:
        return value.decode("latin-1")


def _iter_pairs(headers: Optional[HeaderSource]) -> List[Tuple[Any, Any]]:
    """Flatten any supported header source into (name, value) pairs."""
    if headers is None:
        return []
    if isinstance(headers, HeaderSet):
        headers = headers.raw
    if isinstance(headers, httpx.Headers):
        return list(headers.raw)
    if isinstance(headers, Mapping):
        pairs: List[Tuple[Any, Any]] = []
        for name, value in headers.items():
            if isinstance(value, (list, tuple)):
                pairs.extend((name, item) for item in value)
            else:
                pairs.append((name, value))
        return pairs
    return list(headers)


def append_headers(headers: httpx.Headers, items: Iterable[Tuple[Union[str, bytes], Any]]) -> int:
    """
    Append (name, value) pairs keeping every value already present.

    Each value lands right after the last value already stored under the
    same name, or at the end for a new name. httpx.Headers has no public
    append, so the object is emptied and refilled in place once for the
    whole batch; views over it observe the change. Returns the number of
    values appended.
    """
    pairs = list(headers.raw)
    appended = 0
    non_ascii = False
    for name, value in items:
        raw_name = _to_bytes(name)
        raw_value = _to_bytes(value)
        lower_name = raw_name.lower()

        position = len(pairs)
        for index, (key, _) in enumerate(pairs):
            if key.lower() == lower_name:
                position = index + 1
        pairs.insert(position, (raw_name, raw_value))
        appended += 1
        non_ascii = non_ascii or not (raw_name + raw_value).isascii()

    if not appended:
        return 0

    for key in list(headers.keys()):
        del headers[key]
    headers.update(httpx.Headers(pairs))
    if non_ascii:
        # httpx caches the detected encoding; it may no longer be ascii
        headers.encoding = "utf-8"
    return appended


def append_header(headers: httpx.Headers, name: Union[str, bytes], value: Any) -> None:
    """Append a single value under ``name``. See ``append_headers``."""
    append_headers(headers, [(name, value)])


def group_raw_headers(headers: httpx.Headers) -> List[Tuple[bytes, List[bytes]]]:
    """Group raw header pairs by name, in order of first appearance."""
    groups: Dict[bytes, Tuple[bytes, List[bytes]]] = {}
    for key, value in headers.raw:
        lower_key = key.lower()
        if lower_key not in groups:
            groups[lower_key] = (key, [])
        groups[lower_key][1].append(value)
    return list(groups.values())


class HeaderSet:
    """
    Ordered multimap of header name to values.

    Names are case-insensitive. A HeaderSet either owns its own
    httpx.Headers or, when built with ``HeaderSet.wrap``, is a live view
    over somebody else's (e.g. an httpx client's default headers).

    Example:
        defaults = HeaderSet({"Accept": ["application/json"]})
        defaults.add("X-Trace", "on")
        defaults.get_list("accept")  # ["application/json"]
    """

    def __init__(self, headers: Optional[HeaderSource] = None):
        self._headers = httpx.Headers()
        for name, value in _iter_pairs(headers):
            self.add(name, value)

    @classmethod
    def wrap(cls, headers: httpx.Headers) -> "HeaderSet":
        """Create a view that reads and writes ``headers`` directly."""
        view = cls.__new__(cls)
        view._headers = headers
        return view

    @property
    def raw(self) -> httpx.Headers:
        """The underlying httpx.Headers object."""
        return self._headers

    def add(self, name: Union[str, bytes], value: Any) -> None:
        """Append a value without validation; existing values are kept."""
        append_header(self._headers, name, value)

    def set(self, name: Union[str, bytes], value: Any) -> None:
        """Replace all values stored under ``name`` with a single value."""
        self.remove(name)
        self.add(name, value)

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Return the comma-joined values for ``name``."""
        return self._headers.get(name, default)

    def get_list(self, name: str) -> List[str]:
        return self._headers.get_list(name)

    def remove(self, name: Union[str, bytes]) -> None:
        lower_name = _to_bytes(name).lower()
        if any(key.lower() == lower_name for key, _ in self._headers.raw):
            del self._headers[_to_text(lower_name)]

    def update(self, other: HeaderSource) -> None:
        """Merge another header source, replacing values of matching names."""
        pairs = _iter_pairs(other)
        for name in {_to_bytes(name).lower() for name, _ in pairs}:
            self.remove(name)
        for name, value in pairs:
            self.add(name, value)

    def groups(self) -> List[Tuple[str, List[str]]]:
        """Return (name, values) groups in first-insertion order."""
        return [
            (_to_text(name), [_to_text(value) for value in values])
            for name, values in group_raw_headers(self._headers)
        ]

    def copy(self) -> "HeaderSet":
        return HeaderSet(self)

    def to_dict(self) -> Dict[str, str]:
        """Return a plain dict, multiple values joined with ', '."""
        return {name: ", ".join(values) for name, values in self.groups()}

    def __contains__(self, name: object) -> bool:
        return name in self._headers

    def __iter__(self) -> Iterator[str]:
        return (name for name, _ in self.groups())

    def __len__(self) -> int:
        return len(self._headers)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, HeaderSet):
            return self._headers.raw == other.raw.raw
        return NotImplemented

    def __repr__(self) -> str:
        return f"HeaderSet({self.groups()!r})"
