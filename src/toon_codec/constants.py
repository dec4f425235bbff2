"""Literals, structural characters and defaults shared by encoder and decoder."""

# Structural characters
COLON = ":"
COMMA = ","
PIPE = "|"
TAB = "\t"
SPACE = " "
NEWLINE = "\n"
CRLF = "\r\n"
OPEN_BRACKET = "["
CLOSE_BRACKET = "]"
OPEN_BRACE = "{"
CLOSE_BRACE = "}"
COMMENT_MARKER = "#"

# Escapes
BACKSLASH = "\\"
DOUBLE_QUOTE = '"'
ESCAPED_QUOTE = BACKSLASH + DOUBLE_QUOTE

# Literals
NULL_LITERAL = "null"
TRUE_LITERAL = "true"
FALSE_LITERAL = "false"

# Characters that force a string scalar to be quoted on encode
QUOTE_TRIGGERS = frozenset(",:\n{}[]")

# Delimiters
DELIMITERS = {
    "comma": COMMA,
    "tab": TAB,
    "pipe": PIPE,
}
DEFAULT_DELIMITER = COMMA

DEFAULT_INDENT = 2
DEFAULT_COMMENT_PREFIX = COMMENT_MARKER
