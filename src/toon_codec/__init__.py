"""
toon_codec - Token-Oriented Object Notation for Python

Encode Python data into compact, indentation-based TOON text and decode
TOON text back into dicts, lists and scalars.
"""

from .decoder import ToonDecodeError, decode, load
from .encoder import dump, encode, pretty_encode
from .normalize import Serializable, is_scalar, normalize_value, rows_share_header
from .types import DecodeOptions, Delimiter, DelimiterKey, EncodeOptions

__version__ = "0.2.0"
__all__ = [
    "encode",
    "pretty_encode",
    "dump",
    "decode",
    "load",
    "ToonDecodeError",
    "Serializable",
    "normalize_value",
    "is_scalar",
    "rows_share_header",
    "Delimiter",
    "DelimiterKey",
    "EncodeOptions",
    "DecodeOptions",
]
