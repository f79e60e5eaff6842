"""Header and directive extraction.

HeaderSet is an ordered, case-insensitive multimap built once per response.
DirectiveList models structured values such as Strict-Transport-Security or
Content-Security-Policy:

    max-age=31536000; includeSubDomains; preload
    default-src 'self'; script-src 'self' 'unsafe-inline'

Lookups never raise: a missing header or directive is ``None``.
"""

from typing import Dict, Iterable, Iterator, List, Optional, Tuple


class HeaderSet:
    def __init__(self, items: Iterable[Tuple[str, str]] = ()):
        self._items: List[Tuple[str, str]] = [
            (str(k).strip(), str(v)) for k, v in items]

    @classmethod
    def from_httpx(cls, headers) -> "HeaderSet":
        """Build from an ``httpx.Headers``, keeping repeated headers."""
        return cls(headers.multi_items())

    def get(self, name: str) -> Optional[str]:
        values = self.get_all(name)
        return values[0] if values else None

    def get_all(self, name: str) -> List[str]:
        wanted = name.lower()
        return [v.strip() for k, v in self._items if k.lower() == wanted]

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not None

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return iter(self._items)

    def __len__(self):
        return len(self._items)

    def __repr__(self):
        return f"HeaderSet({self._items!r})"


def _split_directive(directive: str) -> Tuple[str, str]:
    # "max-age=100", "max-age = 100" and "default-src 'self'" all split into key / value
    for i, ch in enumerate(directive):
        if ch == '=' or ch.isspace():
            rest = directive[i:].strip()
            if rest.startswith('='):
                rest = rest[1:].strip()
            return directive[:i], rest
    return directive, ""


class DirectiveList:
    """Semicolon separated directives, keyed by lowercase name; first wins."""

    def __init__(self, raw: str):
        self.raw = raw
        self._directives: Dict[str, str] = {}
        for part in raw.split(';'):
            part = part.strip()
            if not part:
                continue
            key, value = _split_directive(part)
            self._directives.setdefault(key.lower(), value)

    def get(self, name: str) -> Optional[str]:
        return self._directives.get(name.lower())

    def __contains__(self, name: str) -> bool:
        return name.lower() in self._directives


def get_header(name: str, headers: Optional[HeaderSet]) -> Optional[str]:
    """First value of *name* (case-insensitive), trimmed; None when absent or empty."""
    if headers is None:
        return None
    return headers.get(name) or None


def get_field(name: str, directives: Optional[str]) -> Optional[str]:
    """
    Value of the first directive whose key starts with *name*
    (case-insensitive). Bare flags yield "" and a miss yields None.

    >>> get_field("max-age", "max-age=31536000; includeSubDomains")
    '31536000'
    >>> get_field("preload", "max-age=100") is None
    True
    """
    if not directives:
        return None
    wanted = name.lower()
    for part in directives.split(';'):
        part = part.strip()
        key, value = _split_directive(part)
        if key.lower().startswith(wanted):
            return value
    return None
