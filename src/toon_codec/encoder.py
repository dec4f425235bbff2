"""Core TOON encoding functionality."""

import logging
from typing import IO, Any, Dict, List, Optional

from .constants import DEFAULT_COMMENT_PREFIX, DEFAULT_DELIMITER, DEFAULT_INDENT, DELIMITERS
from .encoders import encode_value
from .normalize import normalize_value
from .types import EncodeOptions, ResolvedEncodeOptions
from .writer import LineWriter

logger = logging.getLogger(__name__)


def _field_description(field: Any) -> Optional[str]:
    desc = getattr(field, "description", None)
    if desc is None:
        extra = getattr(field, "json_schema_extra", None)
        if isinstance(extra, dict):
            desc = extra.get("description")
    return desc


def _extract_model_field_description_map(value: Any, base_path: List[str] | None = None) -> Dict[str, str]:
    """Extract dotted-path comments from Pydantic BaseModel descriptions.

    Nested models, dicts and lists are walked; list items share the path
    of their list.
    """
    result: Dict[str, str] = {}
    if base_path is None:
        base_path = []

    fields = getattr(type(value), "model_fields", None)
    if isinstance(fields, dict):
        for name, field in fields.items():
            path = [*base_path, name]
            desc = _field_description(field)
            if desc:
                result[".".join(path)] = str(desc)
            result.update(_extract_model_field_description_map(getattr(value, name, None), path))
        return result

    if isinstance(value, dict):
        for k, v in value.items():
            result.update(_extract_model_field_description_map(v, [*base_path, str(k)]))
        return result

    if isinstance(value, (list, tuple)):
        for item in value:
            result.update(_extract_model_field_description_map(item, base_path))
        return result

    return result


def encode(value: Any, options: Optional[EncodeOptions] = None) -> str:
    """Encode a value into TOON format.

    Args:
        value: The value to encode (dicts, lists, scalars, or anything
            ``normalize_value`` understands)
        options: Optional encoding options

    Returns:
        TOON-formatted string, each line terminated by a newline
    """
    # Merge model-derived comments before normalization so we don't lose metadata
    incoming_options = options or {}
    auto_comments: Dict[str, str] = {}
    if incoming_options.get("modelComments", True):
        auto_comments = _extract_model_field_description_map(value)

    # User-provided comments win over model descriptions
    provided_comments = incoming_options.get("comments", {}) or {}
    merged_comments = {**auto_comments, **provided_comments}

    normalized = normalize_value(value)
    merged_options: EncodeOptions = {**incoming_options, "comments": merged_comments}
    resolved_options = resolve_options(merged_options)
    logger.debug(
        f"Encoding {type(normalized).__name__} (indent={resolved_options.indent}, "
        f"delimiter={resolved_options.delimiter!r}, compactArrays={resolved_options.compactArrays})"
    )
    writer = LineWriter(resolved_options.indent)
    encode_value(normalized, resolved_options, writer, 0)
    return writer.to_string()


def pretty_encode(value: Any, options: Optional[EncodeOptions] = None) -> str:
    """Encode with ``pretty`` enabled.

    ``pretty`` is reserved for cosmetic spacing, so the output currently
    matches :func:`encode`.
    """
    return encode(value, {**(options or {}), "pretty": True})


def dump(value: Any, fp: IO[str], options: Optional[EncodeOptions] = None) -> None:
    """Encode ``value`` and write the TOON text to a text file object."""
    fp.write(encode(value, options))


def resolve_options(options: Optional[EncodeOptions]) -> ResolvedEncodeOptions:
    """Resolve encoding options with defaults.

    Args:
        options: Optional user-provided options

    Returns:
        Resolved options with defaults applied
    """
    if options is None:
        return ResolvedEncodeOptions()

    indent = options.get("indent", DEFAULT_INDENT)
    if not isinstance(indent, int) or isinstance(indent, bool) or indent <= 0:
        indent = DEFAULT_INDENT
    delimiter = options.get("delimiter", DEFAULT_DELIMITER) or DEFAULT_DELIMITER
    comments = options.get("comments", {})
    comment_prefix = options.get("commentPrefix", DEFAULT_COMMENT_PREFIX)

    # Resolve delimiter if it's a key
    if delimiter in DELIMITERS:
        delimiter = DELIMITERS[delimiter]

    return ResolvedEncodeOptions(
        indent=indent,
        delimiter=delimiter,
        compact_arrays=bool(options.get("compactArrays", True)),
        pretty=bool(options.get("pretty", False)),
        comments=comments,
        comment_prefix=comment_prefix,
    )
