"""Core TOON decoding functionality.

The document is scanned once, line by line, with an explicit stack of
frames standing in for the open ``key:`` blocks. A frame records the
indentation column that opened it, the object being filled, the parent
object and the key the frame's value is stored under. Array bodies are
read by count straight after their header, so their indentation is never
checked against the stack.
"""

import logging
from dataclasses import dataclass
from typing import IO, List, Optional, Tuple

from .constants import (
    CLOSE_BRACE,
    CLOSE_BRACKET,
    COLON,
    COMMA,
    COMMENT_MARKER,
    CRLF,
    DEFAULT_DELIMITER,
    DELIMITERS,
    NEWLINE,
    OPEN_BRACE,
    OPEN_BRACKET,
    SPACE,
)
from .primitives import is_key, parse_scalar, split_row, unquote
from .types import DecodeOptions, JsonArray, JsonObject, ResolvedDecodeOptions

logger = logging.getLogger(__name__)


class ToonDecodeError(ValueError):
    """Raised when TOON text cannot be decoded.

    Attributes:
        msg: The unformatted error message
        lineno: 1-based line number of the offending line, if known
        line: The offending line's content, if known
    """

    def __init__(self, msg: str, lineno: Optional[int] = None, line: Optional[str] = None) -> None:
        errmsg = msg if lineno is None else f"{msg} (line {lineno})"
        super().__init__(errmsg)
        self.msg = msg
        self.lineno = lineno
        self.line = line


@dataclass
class _Frame:
    indent: int
    obj: JsonObject
    parent: Optional[JsonObject]
    key: Optional[str]


# (key, count, fields) - key is "" for the nested form, fields is None for a primitive list
ArrayHeader = Tuple[str, int, Optional[List[str]]]


def resolve_decode_options(options: Optional[DecodeOptions]) -> ResolvedDecodeOptions:
    """Resolve decoding options with defaults."""
    if options is None:
        return ResolvedDecodeOptions()

    delimiter = options.get("delimiter", DEFAULT_DELIMITER) or DEFAULT_DELIMITER
    if delimiter in DELIMITERS:
        delimiter = DELIMITERS[delimiter]
    return ResolvedDecodeOptions(delimiter=delimiter, strict=bool(options.get("strict", False)))


def decode(input: str, options: Optional[DecodeOptions] = None) -> JsonObject:
    """Decode TOON text into a Python value.

    Args:
        input: TOON-formatted string
        options: Optional decoding options

    Returns:
        The root object; empty input yields an empty dict

    Raises:
        ToonDecodeError: If an array header appears without an enclosing
            key, or (strict mode only) a body is short or a line is not
            recognized
    """
    resolved = resolve_decode_options(options)
    lines = input.replace(CRLF, NEWLINE).split(NEWLINE)
    # Trailing newlines do not produce lines an array body could consume
    while lines and not lines[-1]:
        lines.pop()
    return parse_lines(lines, resolved)


def load(fp: IO[str], options: Optional[DecodeOptions] = None) -> JsonObject:
    """Read a TOON document from a text file object and decode it."""
    return decode(fp.read(), options)


def leading_spaces(line: str) -> int:
    """Count leading spaces; tabs do not count as indentation."""
    return len(line) - len(line.lstrip(SPACE))


def parse_array_header(content: str) -> Optional[ArrayHeader]:
    """Parse ``key[n]:``, ``key[n]{f1,f2}:`` or their key-less nested forms.

    Args:
        content: Stripped line content

    Returns:
        (key, count, fields) or None if the line is not an array header
    """
    if not content.endswith(COLON):
        return None
    body = content[:-1]

    open_idx = body.find(OPEN_BRACKET)
    if open_idx < 0:
        return None
    key = body[:open_idx]
    if key and not is_key(key):
        return None

    close_idx = body.find(CLOSE_BRACKET, open_idx)
    if close_idx < 0:
        return None
    count_text = body[open_idx + 1 : close_idx]
    if not count_text.isascii() or not count_text.isdigit():
        return None

    rest = body[close_idx + 1 :]
    if not rest:
        return key, int(count_text), None
    if rest.startswith(OPEN_BRACE) and rest.endswith(CLOSE_BRACE):
        inner = rest[1:-1]
        if CLOSE_BRACE in inner:
            return None
        fields = [field.strip() for field in inner.split(COMMA)] if inner else []
        return key, int(count_text), fields
    return None


def parse_nested_object_key(content: str) -> Optional[str]:
    """Return ``key`` for a ``key:`` line, else None."""
    if content.endswith(COLON) and is_key(content[:-1]):
        return content[:-1]
    return None


def parse_key_value(content: str) -> Optional[Tuple[str, str]]:
    """Split ``key: value`` / ``key:value`` into key and value text."""
    key, colon, value = content.partition(COLON)
    if not colon or not is_key(key):
        return None
    return key, value.lstrip()


def _read_body(lines: List[str], start: int, count: int, header: str, lineno: int, strict: bool) -> List[str]:
    body = [line.strip() for line in lines[start : start + count]]
    if len(body) < count:
        if strict:
            raise ToonDecodeError(
                f"Array header '{header}' declares {count} lines but only {len(body)} follow",
                lineno,
                header,
            )
        logger.debug(f"Array header '{header}' on line {lineno} declares {count} lines, found {len(body)}")
    return body


def _build_rows(body: List[str], fields: List[str], delimiter: str, coerce: bool) -> JsonArray:
    rows = []
    for row in body:
        values = split_row(row, delimiter)
        if coerce:
            converted = [parse_scalar(v) for v in values]
        else:
            converted = [unquote(v) for v in values]
        rows.append({field: converted[idx] if idx < len(converted) else None for idx, field in enumerate(fields)})
    return rows


def parse_lines(lines: List[str], options: ResolvedDecodeOptions) -> JsonObject:
    """Decode a document already split into physical lines."""
    root: JsonObject = {}
    stack = [_Frame(indent=-1, obj=root, parent=None, key=None)]

    i = 0
    while i < len(lines):
        raw = lines[i].rstrip()
        lineno = i + 1
        i += 1

        content = raw.strip()
        if not content or content.startswith(COMMENT_MARKER):
            continue

        indent = leading_spaces(raw)
        while indent <= stack[-1].indent:
            stack.pop()

        current = stack[-1].obj
        header = parse_array_header(content)

        # Flat forms: users[2]{id,name}:  /  colors[3]:
        if header is not None and header[0]:
            key, count, fields = header
            body = _read_body(lines, i, count, content, lineno, options.strict)
            i += count
            if fields is not None:
                # Flat rows stay untyped strings
                current[key] = _build_rows(body, fields, options.delimiter, coerce=False)
            else:
                current[key] = [parse_scalar(line) for line in body]
            continue

        # Nested object: key:
        nested_key = parse_nested_object_key(content)
        if nested_key is not None:
            child: JsonObject = {}
            current[nested_key] = child
            stack.append(_Frame(indent=indent, obj=child, parent=current, key=nested_key))
            continue

        # Nested forms replace the placeholder of the innermost open key:
        if header is not None:
            frame = stack[-1]
            if frame.key is None or frame.parent is None:
                raise ToonDecodeError(
                    f"Malformed TOON: array header '{content}' must be under a key (e.g., 'colors:')",
                    lineno,
                    content,
                )
            _, count, fields = header
            body = _read_body(lines, i, count, content, lineno, options.strict)
            i += count
            if fields is not None:
                frame.parent[frame.key] = _build_rows(body, fields, options.delimiter, coerce=True)
            else:
                frame.parent[frame.key] = [parse_scalar(line) for line in body]
            stack.pop()
            continue

        pair = parse_key_value(content)
        if pair is not None:
            key, value = pair
            current[key] = parse_scalar(value)
            continue

        if options.strict:
            raise ToonDecodeError(f"Unrecognized line '{content}'", lineno, content)
        logger.debug(f"Ignoring unrecognized line {lineno}: {content!r}")

    return root
