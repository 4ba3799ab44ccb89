"""Backends for formats delegated to external deserializers (YAML, plist)."""

from .plist_backend import is_plist, parse_plist
from .yaml_backend import is_yaml, parse_yaml

__all__ = ["is_plist", "parse_plist", "is_yaml", "parse_yaml"]
