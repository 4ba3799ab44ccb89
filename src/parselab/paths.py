"""
Path Algebra

Addresses a node in a Value tree independent of the source format.

A Path is an ordered sequence of steps, implicitly rooted at "$":
    Key("name")  → object member    rendered ".name"
    Index(2)     → array element    rendered "[2]"

    Path((Key("a"), Key("b"), Index(2), Key("c")))  ⇄  "$.a.b[2].c"

Keys containing '.', '[', ']' or '\\' are backslash-escaped in the
string form, so parse_path(path_to_string(p)) == p for every path a
traversal can produce. Parsing is forgiving: malformed input is
normalized, not rejected.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple, Union

from .values import VArray, VObject, Value

ROOT = "$"
_SPECIAL = ".[]\\"
_DIGITS_RE = re.compile(r"^[0-9]+$")


@dataclass(frozen=True)
class Key:
    """Step into an object member."""
    name: str

    def __str__(self) -> str:
        return "." + escape_key(self.name)


@dataclass(frozen=True)
class Index:
    """Step into an array element."""
    position: int

    def __str__(self) -> str:
        return f"[{self.position}]"


Step = Union[Key, Index]


@dataclass(frozen=True)
class Path:
    """
    Location of a node in a Value tree.

    The empty step tuple is the root path and denotes the whole tree;
    a Path is never "nothing".
    """

    steps: Tuple[Step, ...] = ()

    @classmethod
    def root(cls) -> "Path":
        return cls()

    @property
    def is_root(self) -> bool:
        return not self.steps

    @property
    def parent(self) -> Optional["Path"]:
        if self.is_root:
            return None
        return Path(self.steps[:-1])

    @property
    def last(self) -> Optional[Step]:
        return self.steps[-1] if self.steps else None

    def child(self, step: Step) -> "Path":
        return Path(self.steps + (step,))

    def key(self, name: str) -> "Path":
        return self.child(Key(name))

    def index(self, position: int) -> "Path":
        return self.child(Index(position))

    def components(self) -> Tuple[str, ...]:
        """Breadcrumb labels: "$", then each key name or "[n]"."""
        return (ROOT,) + tuple(s.name if isinstance(s, Key) else str(s) for s in self.steps)

    def __len__(self) -> int:
        return len(self.steps)

    def __str__(self) -> str:
        return path_to_string(self)


def escape_key(name: str) -> str:
    return "".join("\\" + ch if ch in _SPECIAL else ch for ch in name)


def path_to_string(path: Path) -> str:
    """Render "$" followed by each step in order."""
    return ROOT + "".join(str(step) for step in path.steps)


def parse_path(text: str) -> Path:
    """
    Parse a path string into a Path.

    '.' starts a key (ended by an unescaped '.' or '['); '[' starts an
    index ended by ']'. Empty keys and non-numeric bracket contents are
    dropped silently; stray characters outside a token are skipped.
    """
    steps = []
    i = 1 if text.startswith(ROOT) else 0
    length = len(text)

    while i < length:
        char = text[i]
        if char == ".":
            i += 1
            name = []
            while i < length and text[i] not in ".[":
                if text[i] == "\\" and i + 1 < length:
                    i += 1
                name.append(text[i])
                i += 1
            if name:
                steps.append(Key("".join(name)))
        elif char == "[":
            i += 1
            start = i
            while i < length and text[i] != "]":
                i += 1
            content = text[start:i].strip()
            if _DIGITS_RE.match(content):
                steps.append(Index(int(content)))
            if i < length:
                i += 1
        else:
            i += 1

    return Path(tuple(steps))


def iter_paths(root: Value, base: Optional[Path] = None) -> Iterator[Tuple[Path, Value]]:
    """
    Depth-first pre-order walk yielding (path, node), root first.

    Object members come in insertion order, array elements in index order.
    """
    path = base if base is not None else Path.root()
    yield path, root
    if isinstance(root, VObject):
        for key, child in root.members.items():
            yield from iter_paths(child, path.key(key))
    elif isinstance(root, VArray):
        for position, child in enumerate(root.items):
            yield from iter_paths(child, path.index(position))


def _step_into(node: Value, step: Step) -> Optional[Value]:
    if isinstance(step, Key) and isinstance(node, VObject):
        return node.get(step.name)
    if isinstance(step, Index) and isinstance(node, VArray):
        if 0 <= step.position < len(node.items):
            return node.items[step.position]
    return None


def get_value_at(root: Value, path: Union[Path, str]) -> Optional[Value]:
    """Resolve a path against a tree; None if any step does not exist."""
    if isinstance(path, str):
        path = parse_path(path)
    node: Optional[Value] = root
    for step in path.steps:
        node = _step_into(node, step)
        if node is None:
            return None
    return node


def _replace(node: Value, steps: Tuple[Step, ...], new_value: Optional[Value]) -> Value:
    step, rest = steps[0], steps[1:]
    child = _step_into(node, step)
    if child is None and (rest or new_value is None):
        raise KeyError(f"No node at step {step}")
    if isinstance(step, Key) and not isinstance(node, VObject):
        raise KeyError(f"Cannot use key step {step} on {node.type_name}")
    if isinstance(step, Index) and child is None:
        raise KeyError(f"Index {step} out of range")

    replacement = _replace(child, rest, new_value) if rest else new_value

    if isinstance(node, VObject):
        members = dict(node.members)
        if replacement is None:
            del members[step.name]
        else:
            members[step.name] = replacement
        return VObject(members)

    items = list(node.items)
    if replacement is None:
        del items[step.position]
    else:
        items[step.position] = replacement
    return VArray(items)


def set_value_at(root: Value, path: Union[Path, str], value: Value) -> Value:
    """
    Return a new tree with the node at `path` replaced by `value`.

    The last step may name a new object key; every other step must exist.
    The input tree is not modified.

    Raises:
        KeyError: If the path does not resolve
    """
    if isinstance(path, str):
        path = parse_path(path)
    if path.is_root:
        return value
    return _replace(root, path.steps, value)


def delete_value_at(root: Value, path: Union[Path, str]) -> Value:
    """
    Return a new tree without the node at `path`.

    Raises:
        KeyError: If the path does not resolve or is the root
    """
    if isinstance(path, str):
        path = parse_path(path)
    if path.is_root:
        raise KeyError("Cannot delete the root")
    return _replace(root, path.steps, None)


__all__ = [
    "Key",
    "Index",
    "Step",
    "Path",
    "escape_key",
    "path_to_string",
    "parse_path",
    "iter_paths",
    "get_value_at",
    "set_value_at",
    "delete_value_at",
]
