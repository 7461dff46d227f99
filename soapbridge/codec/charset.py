"""Charset conversion between the caller's native encoding and UTF-8 wire text.

Native strings are ``bytes`` in the configured charset (``str`` is accepted
on the way in and taken as already-decoded text). Wire strings are ``str``.
When the native charset is UTF-8 both directions are the identity.
"""

from __future__ import annotations

import codecs
import unicodedata
from functools import lru_cache

from soapbridge.utils.exceptions import ConfigurationError

WIRE_CHARSET = "utf-8"
DEFAULT_NATIVE_CHARSET = "iso-8859-1"
TRANSLIT_ERRORS = "soapbridge-translit"

# Characters NFKD leaves alone but that have an obvious ASCII spelling.
_FALLBACKS: dict[str, str] = {
    "‘": "'",
    "’": "'",
    "‚": ",",
    "“": '"',
    "”": '"',
    "„": '"',
    "–": "-",
    "—": "-",
    "•": "o",
    "€": "EUR",
    "Ł": "L",
    "ł": "l",
    "Ø": "O",
    "ø": "o",
    "Œ": "OE",
    "œ": "oe",
    "ß": "ss",
    "Æ": "AE",
    "æ": "ae",
}


def normalize_charset(name: str) -> str:
    """Return the codec registry name for a charset; raise ConfigurationError if unknown."""
    try:
        return codecs.lookup(str(name).strip()).name
    except LookupError as exc:
        raise ConfigurationError(f"unknown charset: {name!r}", field="charset") from exc


def _encodable(text: str, encoding: str) -> bool:
    try:
        text.encode(encoding)
    except UnicodeEncodeError:
        return False
    return True


def _approximate(ch: str, encoding: str) -> str:
    fallback = _FALLBACKS.get(ch)
    if fallback is not None and _encodable(fallback, encoding):
        return fallback
    decomposed = unicodedata.normalize("NFKD", ch)
    kept = "".join(c for c in decomposed if not unicodedata.combining(c) and _encodable(c, encoding))
    return kept or "?"


def _transliterate(exc: UnicodeError) -> tuple[str, int]:
    if not isinstance(exc, UnicodeEncodeError):
        raise exc
    chunk = exc.object[exc.start : exc.end]
    return "".join(_approximate(ch, exc.encoding) for ch in chunk), exc.end


codecs.register_error(TRANSLIT_ERRORS, _transliterate)


class CharsetCodec:
    """String conversion for one native charset, fixed at construction."""

    __slots__ = ("charset", "identity")

    def __init__(self, charset: str = DEFAULT_NATIVE_CHARSET):
        self.charset = normalize_charset(charset)
        self.identity = self.charset == WIRE_CHARSET

    def to_wire(self, text: str | bytes) -> str | bytes:
        """Convert a native string into wire text."""
        if self.identity:
            return text
        if isinstance(text, bytes):
            return text.decode(self.charset, errors="replace")
        return text

    def from_wire(self, text: str | bytes) -> str | bytes:
        """Convert wire text into a native string, transliterating what the charset lacks."""
        if self.identity:
            return text
        if isinstance(text, bytes):
            text = text.decode(WIRE_CHARSET, errors="replace")
        return text.encode(self.charset, errors=TRANSLIT_ERRORS)

    def __repr__(self) -> str:
        return f"CharsetCodec({self.charset!r})"


@lru_cache(maxsize=32)
def get_codec(charset: str) -> CharsetCodec:
    return CharsetCodec(charset)


def to_wire(text: str | bytes, native_charset: str) -> str | bytes:
    return get_codec(native_charset).to_wire(text)


def from_wire(text: str | bytes, native_charset: str) -> str | bytes:
    return get_codec(native_charset).from_wire(text)
