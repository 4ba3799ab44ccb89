"""
ParseLab Core Package

Format-normalization and path-addressing core of a document viewer.

ARCHITECTURAL GUARANTEE:
------------------------
Every input grammar (CSV, INI, TOML, XML, JSON, YAML, plist) converges on
ONE value tree (see parselab.values).

Consumers of that tree:
    - Path algebra (parselab.paths)
    - Search (parselab.search)
    - Pretty printing and save-back (parselab.serialization)

never need to know which engine produced it.

This package contains ZERO knowledge of:
    - Rendering or syntax highlighting
    - View state, toolbars, editing UI
    - Recent files or any other persisted application state
"""

from .errors import ErrorKind, Format, ParseError
from .formats import convert_to_pretty_json, detect_format, parse_document
from .paths import Index, Key, Path, parse_path, path_to_string
from .search import MatchKind, SearchMatch, search
from .values import VArray, VBool, VNull, VNumber, VObject, VString, Value

__version__ = "0.1.0"

__all__ = [
    "ErrorKind",
    "Format",
    "ParseError",
    "convert_to_pretty_json",
    "detect_format",
    "parse_document",
    "Index",
    "Key",
    "Path",
    "parse_path",
    "path_to_string",
    "MatchKind",
    "SearchMatch",
    "search",
    "VArray",
    "VBool",
    "VNull",
    "VNumber",
    "VObject",
    "VString",
    "Value",
]
