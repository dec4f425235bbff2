"""Type definitions for toon_codec."""

from typing import Any, Dict, List, Literal, TypedDict, Union

from .constants import DEFAULT_COMMENT_PREFIX, DEFAULT_DELIMITER, DEFAULT_INDENT

# Value model: the Python types TOON content decodes into / encodes from.
# A table is a JsonArray whose rows are JsonObjects sharing one header.
JsonPrimitive = Union[str, int, float, bool, None]
JsonObject = Dict[str, Any]
JsonArray = List[Any]
JsonValue = Union[JsonPrimitive, JsonArray, JsonObject]

# Delimiter type
Delimiter = str
DelimiterKey = Literal["comma", "tab", "pipe"]


class EncodeOptions(TypedDict, total=False):
    """Options for TOON encoding.

    Attributes:
        indent: Number of spaces per indentation level (default: 2)
        delimiter: Delimiter character for table rows (default: comma)
        compactArrays: Render uniform arrays of objects as tables (default: True)
        pretty: Reserved for cosmetic spacing; output is currently identical
        comments: Optional mapping from dotted paths to comment text
        commentPrefix: Prefix for comment lines (default: '#')
        modelComments: Auto-extract comments from Pydantic BaseModel (default: True)
    """

    indent: int
    delimiter: Union[Delimiter, DelimiterKey]
    compactArrays: bool
    pretty: bool
    comments: Dict[str, str]
    commentPrefix: str
    modelComments: bool


class DecodeOptions(TypedDict, total=False):
    """Options for TOON decoding.

    Attributes:
        delimiter: Delimiter character for table rows (default: comma)
        strict: Reject short array bodies and unrecognized lines (default: False)
    """

    delimiter: Union[Delimiter, DelimiterKey]
    strict: bool


class ResolvedEncodeOptions:
    """Resolved encoding options with defaults applied."""

    def __init__(
        self,
        indent: int = DEFAULT_INDENT,
        delimiter: str = DEFAULT_DELIMITER,
        compact_arrays: bool = True,
        pretty: bool = False,
        comments: Dict[str, str] | None = None,
        comment_prefix: str = DEFAULT_COMMENT_PREFIX,
    ) -> None:
        self.indent = indent
        self.delimiter = delimiter
        self.compactArrays = compact_arrays
        self.pretty = pretty
        self.comments: Dict[str, str] = comments or {}
        self.commentPrefix = comment_prefix


class ResolvedDecodeOptions:
    """Resolved decoding options with defaults applied."""

    def __init__(self, delimiter: str = DEFAULT_DELIMITER, strict: bool = False) -> None:
        self.delimiter = delimiter
        self.strict = strict


# Depth type for tracking indentation level
Depth = int
