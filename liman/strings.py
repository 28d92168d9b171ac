"""Wildcard matching and case-insensitive string hashing."""

from __future__ import annotations

_BASE = 65521
_NMAX = 5552


def wildcard_match(pattern: str, string: str) -> bool:
    """Match ``string`` against a pattern with ``*`` and ``?``.

    ``?`` matches any single character except a dot.
    """
    p = s = 0
    plen, slen = len(pattern), len(string)
    while True:
        star = False
        if p < plen and pattern[p] == "*":
            star = True
            while p < plen and pattern[p] == "*":
                p += 1
        while True:
            i = 0
            mismatch = False
            while p + i < plen and pattern[p + i] != "*":
                pc = pattern[p + i]
                sc = string[s + i] if s + i < slen else None
                if sc != pc:
                    if sc is None:
                        return False
                    if not (pc == "?" and sc != "."):
                        if not star:
                            return False
                        s += 1
                        mismatch = True
                        break
                i += 1
            if mismatch:
                continue
            if p + i < plen:
                s += i
                p += i
                break
            if s + i >= slen:
                return True
            if not star:
                return False
            s += 1


def _lower(byte: int) -> int:
    return byte + 32 if 65 <= byte <= 90 else byte


def hash_name(ident: str | bytes | None) -> int:
    """Hash text into a 32-bit identifier, ignoring ASCII case.

    The checksum follows adler32 but starts from zero; ``None`` hashes to 0.
    """
    if ident is None:
        return 0
    data = ident.encode("utf-8") if isinstance(ident, str) else bytes(ident)
    s1 = s2 = 0
    for start in range(0, len(data), _NMAX):
        for byte in data[start:start + _NMAX]:
            s1 += _lower(byte)
            s2 += s1
        s1 %= _BASE
        s2 %= _BASE
    return (s2 << 16) | s1


class HashedString:
    """A string paired with its case-insensitive hash; compared by hash."""

    __slots__ = ("text", "_hash")

    def __init__(self, ident: str) -> None:
        self.text = ident
        self._hash = hash_name(ident)

    @property
    def hash_value(self) -> int:
        return self._hash

    def __lt__(self, other: HashedString) -> bool:
        if not isinstance(other, HashedString):
            return NotImplemented
        return self._hash < other._hash

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HashedString):
            return NotImplemented
        return self._hash == other._hash

    def __hash__(self) -> int:
        return self._hash

    def __repr__(self) -> str:
        return f"HashedString({self.text!r})"