"""Scalar formatting (encode) and scalar coercion (decode)."""

import string
from decimal import Decimal
from typing import List, Optional, Sequence

from .constants import (
    BACKSLASH,
    CLOSE_BRACE,
    CLOSE_BRACKET,
    COLON,
    COMMA,
    DOUBLE_QUOTE,
    ESCAPED_QUOTE,
    FALSE_LITERAL,
    NULL_LITERAL,
    OPEN_BRACE,
    OPEN_BRACKET,
    QUOTE_TRIGGERS,
    TRUE_LITERAL,
)
from .types import JsonPrimitive

KEY_CHARS = frozenset(string.ascii_letters + string.digits + "_")
DIGITS = frozenset(string.digits)


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------


def needs_quotes(value: str, delimiter: str = COMMA) -> bool:
    """Check whether a string must be quoted to survive a decode."""
    if not value:
        return True
    if delimiter in value:
        return True
    return any(ch in QUOTE_TRIGGERS for ch in value)


def escape_string(value: str) -> str:
    return value.replace(DOUBLE_QUOTE, ESCAPED_QUOTE)


def format_number(value: float) -> str:
    """Render a number as plain decimal text, never in exponent form."""
    if isinstance(value, int):
        return str(value)
    formatted = repr(value)
    if "e" in formatted or "E" in formatted:
        formatted = format(Decimal(formatted), "f")
        if "." not in formatted:
            formatted += ".0"
    return formatted


def encode_primitive(value: JsonPrimitive, delimiter: str = COMMA) -> str:
    """Encode a scalar value.

    Args:
        value: Scalar to encode
        delimiter: Active row delimiter, quoted when it appears in a string

    Returns:
        TOON text for the scalar
    """
    if value is None:
        return NULL_LITERAL
    if isinstance(value, bool):
        return TRUE_LITERAL if value else FALSE_LITERAL
    if isinstance(value, (int, float)):
        return format_number(value)
    if isinstance(value, str):
        if needs_quotes(value, delimiter):
            return f"{DOUBLE_QUOTE}{escape_string(value)}{DOUBLE_QUOTE}"
        return value
    return str(value)


def encode_key(key: str) -> str:
    return str(key)


def join_encoded_values(values: Sequence[str], delimiter: str) -> str:
    return delimiter.join(values)


def format_header(key: Optional[str], length: int, fields: Optional[Sequence[str]] = None) -> str:
    """Format an array header such as ``[3]:`` or ``users[2]{id,name}:``.

    Args:
        key: Optional key prefix (flat form); None for the nested form
        length: Number of rows or items
        fields: Table field names, None for a primitive list

    Returns:
        Header text including the trailing colon
    """
    header = f"{encode_key(key)}" if key else ""
    header += f"{OPEN_BRACKET}{length}{CLOSE_BRACKET}"
    if fields is not None:
        header += f"{OPEN_BRACE}{COMMA.join(fields)}{CLOSE_BRACE}"
    return header + COLON


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


def is_key(text: str) -> bool:
    """Check that ``text`` is a non-empty run of ``[A-Za-z0-9_]``."""
    return bool(text) and all(ch in KEY_CHARS for ch in text)


def _is_digits(text: str) -> bool:
    return bool(text) and all(ch in DIGITS for ch in text)


def is_integer_literal(text: str) -> bool:
    """Match ``-?[0-9]+``."""
    return _is_digits(text[1:] if text.startswith("-") else text)


def is_float_literal(text: str) -> bool:
    """Match ``-?[0-9]+.[0-9]+``."""
    if text.startswith("-"):
        text = text[1:]
    whole, dot, frac = text.partition(".")
    return bool(dot) and _is_digits(whole) and _is_digits(frac)


def is_quoted(text: str) -> bool:
    return len(text) >= 2 and text.startswith(DOUBLE_QUOTE) and text.endswith(DOUBLE_QUOTE)


def unquote(text: str) -> str:
    """Strip surrounding double quotes and unescape ``\\"``; other text is returned as-is."""
    if is_quoted(text):
        return text[1:-1].replace(ESCAPED_QUOTE, DOUBLE_QUOTE)
    return text


def parse_scalar(text: str) -> JsonPrimitive:
    """Coerce a bare token into null, bool, int, float or string."""
    if text == NULL_LITERAL:
        return None
    if text == TRUE_LITERAL:
        return True
    if text == FALSE_LITERAL:
        return False
    if is_quoted(text):
        return unquote(text)
    if is_integer_literal(text):
        return int(text)
    if is_float_literal(text):
        return float(text)
    return text


def split_row(row: str, delimiter: str = COMMA) -> List[str]:
    """Split a table row into trimmed fields.

    Delimiters inside a double-quoted span are literal and ``\\"`` does not
    close the span. Quotes are kept in the returned fields so callers can
    still tell a quoted ``"42"`` from a bare ``42``.
    """
    row = row.strip()
    if not row:
        return []

    fields: List[str] = []
    current: List[str] = []
    in_quotes = False
    i = 0
    while i < len(row):
        ch = row[i]
        if in_quotes and ch == BACKSLASH and row.startswith(DOUBLE_QUOTE, i + 1):
            current.append(ESCAPED_QUOTE)
            i += 2
            continue
        if ch == DOUBLE_QUOTE:
            in_quotes = not in_quotes
            current.append(ch)
        elif ch == delimiter and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(ch)
        i += 1
    fields.append("".join(current).strip())
    return fields
