"""
Shared error taxonomy for every format engine.

All engines raise exactly one exception type, ParseError, so that callers
write one handler instead of one per format. A failed structured parse is
a degrade-to-plain-text event for the caller, never a crash.
"""

from enum import Enum
from typing import Optional


class Format(Enum):
    """
    Format tag handed to the core together with a text/byte buffer.

    Also identifies the engine that raised a ParseError.
    """

    JSON = "json"
    YAML = "yaml"
    TOML = "toml"
    INI = "ini"
    XML = "xml"
    CSV = "csv"
    PLIST = "plist"


class ErrorKind(Enum):
    """
    Closed set of failure kinds shared by all engines.

    EMPTY_CONTENT:
        Input has no content for a format that requires a root.
    INVALID_SECTION:
        Malformed section or table header (e.g. empty name).
    INVALID_KEY_VALUE:
        A key/value line with an empty key.
    INVALID_FORMAT:
        A line matching none of the grammar's line shapes.
    PARSING_FAILED:
        Tokenizer-level failure reported by an underlying parser.
    CONVERSION_FAILED:
        A tree cannot be represented in the requested output format.
    """

    EMPTY_CONTENT = "emptyContent"
    INVALID_SECTION = "invalidSection"
    INVALID_KEY_VALUE = "invalidKeyValue"
    INVALID_FORMAT = "invalidFormat"
    PARSING_FAILED = "parsingFailed"
    CONVERSION_FAILED = "conversionFailed"


class ParseError(Exception):
    """
    Raised by an engine's parse (or serialize) entry point.

    Properties:
        engine: Format of the engine that failed (None when no engine
                was selected)
        kind: ErrorKind
        message: Human-readable detail
        line: 1-based line number, when the engine tracks lines
    """

    def __init__(
        self,
        engine: Optional[Format],
        kind: ErrorKind,
        message: str,
        line: Optional[int] = None,
    ):
        self.engine = engine
        self.kind = kind
        self.message = message
        self.line = line
        super().__init__(str(self))

    def __str__(self) -> str:
        name = self.engine.name if self.engine is not None else "UNKNOWN"
        text = f"{name} {self.kind.value}: {self.message}"
        if self.line is not None:
            text += f" (line {self.line})"
        return text


class CSVQuotingWarning(UserWarning):
    """Issued when a CSV line has unbalanced quotes and is split best-effort."""
    pass
