"""Text helpers for iCalendar property values."""

import logging
import re
from typing import AnyStr

from charset_normalizer import from_bytes


logger = logging.getLogger(__name__)

FOLD_WIDTH = 60

# Candidate encodings for bytes that are not UTF-8
FALLBACK_ENCODINGS = ['cp1252', 'latin_1', 'iso8859_15']

_SPECIAL_CHARS = re.compile(r'([,;])')
_SPECIAL_BYTES = re.compile(rb'([,;])')

def escape_text(value: AnyStr) -> AnyStr:
    """Precede every comma and semicolon with a backslash.
    
    Backslashes and newlines are left untouched; existing consumers of the
    generated files depend on this narrower escaping.
    """
    if isinstance(value, bytes):
        return _SPECIAL_BYTES.sub(rb'\\\1', value)
    return _SPECIAL_CHARS.sub(r'\\\1', value)

def fold_line(value: AnyStr, width: int = FOLD_WIDTH) -> AnyStr:
    """Split value into chunks of `width` joined by CRLF plus a space.
    
    Values no longer than `width` are returned unchanged.
    """
    if len(value) <= width:
        return value
    separator = b"\r\n " if isinstance(value, bytes) else "\r\n "
    return separator.join(value[i:i + width] for i in range(0, len(value), width))

def to_utf8(value: str | bytes) -> str | bytes:
    """Return value as text, decoding bytes from their detected encoding.
    
    Bytes that are not UTF-8 are decoded as the best matching Western
    single-byte encoding. Bytes no candidate can decode are returned
    unchanged.
    """
    if isinstance(value, str):
        return value
    
    try:
        return value.decode('utf-8')
    except UnicodeDecodeError:
        pass
    
    best = from_bytes(value, cp_isolation=FALLBACK_ENCODINGS).best()
    if best is None:
        logger.debug(f"Could not detect encoding of {len(value)} bytes, passing through")
        return value
    
    logger.debug(f"Decoded {len(value)} bytes as {best.encoding}")
    return str(best)
