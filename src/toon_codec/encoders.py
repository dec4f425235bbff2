"""Encoders for different value types."""

import logging
from typing import List, Optional

from .normalize import (
    is_json_array,
    is_json_object,
    is_json_primitive,
    rows_share_header,
    table_header,
)
from .primitives import encode_key, encode_primitive, format_header, join_encoded_values
from .types import Depth, JsonArray, JsonObject, JsonValue, ResolvedEncodeOptions
from .writer import LineWriter

logger = logging.getLogger(__name__)


def _path_to_key(path_parts: List[str]) -> str:
    return ".".join(path_parts)


def _maybe_write_comment(options: ResolvedEncodeOptions, writer: LineWriter, depth: Depth, path_parts: List[str]) -> None:
    key = _path_to_key(path_parts)
    if not key:
        return
    comment = options.comments.get(key)
    if comment:
        for line in str(comment).splitlines():
            writer.push(depth, f"{options.commentPrefix} {line}")


def encode_value(
    value: JsonValue, options: ResolvedEncodeOptions, writer: LineWriter, depth: Depth = 0, path_parts: Optional[List[str]] = None
) -> None:
    """Encode a value to TOON format.

    Args:
        value: Normalized value
        options: Resolved encoding options
        writer: Line writer for output
        depth: Current indentation depth
        path_parts: Dotted path of the value, used to look up comments
    """
    if path_parts is None:
        path_parts = []

    if is_json_primitive(value):
        writer.push(depth, encode_primitive(value, options.delimiter))
    elif is_json_array(value):
        encode_array(value, options, writer, depth, path_parts)
    elif is_json_object(value):
        encode_object(value, options, writer, depth, path_parts)


def encode_object(
    obj: JsonObject,
    options: ResolvedEncodeOptions,
    writer: LineWriter,
    depth: Depth,
    path_parts: List[str],
) -> None:
    """Encode an object's entries, in insertion order, at ``depth``."""
    for obj_key, obj_value in obj.items():
        encode_key_value_pair(obj_key, obj_value, options, writer, depth, path_parts)


def encode_key_value_pair(
    key: str, value: JsonValue, options: ResolvedEncodeOptions, writer: LineWriter, depth: Depth, path_parts: List[str]
) -> None:
    """Encode a key-value pair.

    Scalars go on the key's line (``key:value``); containers open a
    ``key:`` line and continue one level deeper.

    Args:
        key: Key name
        value: Value to encode
        options: Resolved encoding options
        writer: Line writer for output
        depth: Current indentation depth
        path_parts: Dotted path of the enclosing object
    """
    child_path = [*path_parts, str(key)]
    _maybe_write_comment(options, writer, depth, child_path)

    if is_json_primitive(value):
        writer.push(depth, f"{encode_key(key)}:{encode_primitive(value, options.delimiter)}")
        return

    writer.push(depth, f"{encode_key(key)}:")
    if is_json_array(value):
        encode_array(value, options, writer, depth + 1, child_path)
    elif is_json_object(value):
        encode_object(value, options, writer, depth + 1, child_path)


def encode_array(
    arr: JsonArray,
    options: ResolvedEncodeOptions,
    writer: LineWriter,
    depth: Depth,
    path_parts: List[str],
) -> None:
    """Encode an array as a tabular block or a list block.

    Args:
        arr: List array
        options: Resolved encoding options
        writer: Line writer for output
        depth: Depth of the ``[n]`` header line
        path_parts: Dotted path of the array
    """
    if options.compactArrays and rows_share_header(arr):
        encode_array_of_objects_as_tabular(arr, table_header(arr), options, writer, depth)
    else:
        encode_list_items(arr, options, writer, depth, path_parts)


def encode_array_of_objects_as_tabular(
    arr: List[JsonObject],
    fields: List[str],
    options: ResolvedEncodeOptions,
    writer: LineWriter,
    depth: Depth,
) -> None:
    """Encode array of uniform objects in tabular format.

    Args:
        arr: Array of uniform objects
        fields: Field names for header
        options: Resolved encoding options
        writer: Line writer for output
        depth: Current indentation depth
    """
    logger.debug(f"Encoding {len(arr)} rows as table with fields {fields}")
    writer.push(depth, format_header(None, len(arr), fields))

    for obj in arr:
        row_values = [encode_primitive(obj[field], options.delimiter) for field in fields]
        writer.push(depth + 1, join_encoded_values(row_values, options.delimiter))


def encode_list_items(
    arr: JsonArray,
    options: ResolvedEncodeOptions,
    writer: LineWriter,
    depth: Depth,
    path_parts: List[str],
) -> None:
    """Encode an array as a ``[n]:`` block, one element per line.

    Args:
        arr: Array of any values
        options: Resolved encoding options
        writer: Line writer for output
        depth: Current indentation depth
        path_parts: Dotted path of the array
    """
    writer.push(depth, format_header(None, len(arr)))

    for item in arr:
        if is_json_primitive(item):
            writer.push(depth + 1, encode_primitive(item, options.delimiter))
        else:
            encode_value(item, options, writer, depth + 1, path_parts)
