"""
structdiff.render — Line-oriented patch view of a Diff tree.

    render(diff({"a": 1, "b": 2}, {"a": 1, "b": 3}))

yields

    (KEEP,   '{')
    (KEEP,   '  "a": 1,')
    (REMOVE, '  "b": 2')
    (ADD,    '  "b": 3')
    (KEEP,   '}')

and line_diff() prints the same lines with a one-character marker:

     {
       "a": 1,
    -  "b": 2
    +  "b": 3
     }

Leaf values (everything below an Equal/Add/Remove/Unequal node) are
turned into text by an injectable `stringify(value, indent)` callable;
see structdiff.formats for the ones shipped with the package.
"""

import json
import logging
import sys
from enum import Enum, auto
from typing import Any, Callable, Iterable, Iterator, Optional, TextIO

from .core import (
    UNSET, Add, ArrayDiff, Diff, Equal, ObjectDiff, Remove, Unequal, diff,
)
from .exceptions import InvalidConfigurationError
from .formats import json_stringify

logger = logging.getLogger(__name__)

Stringify = Callable[[Any, int], Iterable[str]]
Line = tuple["LineAction", str]

DEFAULT_INDENT = 2


class LineAction(Enum):
    """What a rendered line does in the patch view."""
    ADD = auto()
    REMOVE = auto()
    KEEP = auto()


MARKERS: dict[LineAction, str] = {
    LineAction.KEEP: " ",
    LineAction.ADD: "+",
    LineAction.REMOVE: "-",
}


# ═══════════════════════════════════════════════════════════════════
#  RENDER
# ═══════════════════════════════════════════════════════════════════

def render(
    tree: Diff,
    indent: int = DEFAULT_INDENT,
    stringify: Optional[Stringify] = None,
) -> Iterator[Line]:
    """
    Render a Diff tree as (LineAction, text) pairs in depth-first order.

    Arguments:
        tree:      The Diff to render
        indent:    Spaces per nesting level, at least 1
        stringify: Leaf renderer, defaults to json_stringify

    The indent is validated here, before any line is produced; the
    lines themselves are generated lazily.
    """
    _check_indent(indent)
    if stringify is None:
        stringify = json_stringify
    return _render(tree, indent, UNSET, "", stringify)


def _check_indent(indent: Any) -> None:
    if type(indent) is not int or indent < 1:
        raise InvalidConfigurationError(f"Indent must be an integer >= 1, got {indent!r}")


def _render(
    tree: Diff, indent: int, key: Any, suffix: str, stringify: Stringify
) -> Iterator[Line]:
    prefix = _key_prefix(key)

    if isinstance(tree, Equal):
        yield from _leaf(tree.value, LineAction.KEEP, prefix, suffix, indent, stringify)
    elif isinstance(tree, Add):
        yield from _leaf(tree.value, LineAction.ADD, prefix, suffix, indent, stringify)
    elif isinstance(tree, Remove):
        yield from _leaf(tree.value, LineAction.REMOVE, prefix, suffix, indent, stringify)
    elif isinstance(tree, Unequal):
        yield from _leaf(tree.left, LineAction.REMOVE, prefix, suffix, indent, stringify)
        yield from _leaf(tree.right, LineAction.ADD, prefix, suffix, indent, stringify)
    elif isinstance(tree, ObjectDiff):
        yield LineAction.KEEP, prefix + "{"
        yield from _as_list(
            tree.attributes, indent,
            lambda attr, sep: _render(attr.diff, indent, attr.key, sep, stringify),
        )
        yield LineAction.KEEP, "}" + suffix
    elif isinstance(tree, ArrayDiff):
        yield LineAction.KEEP, prefix + "["
        yield from _as_list(
            tree.elements, indent,
            lambda element, sep: _render(element, indent, UNSET, sep, stringify),
        )
        yield LineAction.KEEP, "]" + suffix
    else:
        raise TypeError(f"Unknown Diff type: {type(tree)}")


def _key_prefix(key: Any) -> str:
    """
    `"name": ` for string keys, `[repr]: ` for any other key, and
    nothing for array elements (UNSET).
    """
    if key is UNSET:
        return ""
    if isinstance(key, str):
        return json.dumps(key, ensure_ascii=False) + ": "
    return f"[{key!r}]: "


def _leaf(
    value: Any,
    action: LineAction,
    prefix: str,
    suffix: str,
    indent: int,
    stringify: Stringify,
) -> Iterator[Line]:
    """One stringified value: prefix on the first line, suffix on the last."""
    lines = list(stringify(value, indent))
    last = len(lines) - 1
    for i, line in enumerate(lines):
        if i == 0:
            line = prefix + line
        if i == last:
            line = line + suffix
        yield action, line


def _as_list(
    items: tuple, indent: int, fn: Callable[[Any, str], Iterable[Line]]
) -> Iterator[Line]:
    """Render each item one level deeper, comma after all but the last."""
    pad = " " * indent
    last = len(items) - 1
    for i, item in enumerate(items):
        for action, line in fn(item, "," if i < last else ""):
            yield action, pad + line


# ═══════════════════════════════════════════════════════════════════
#  OUTPUT
# ═══════════════════════════════════════════════════════════════════

def marker_for(action: LineAction) -> str:
    """The one-character display marker for a line action."""
    return MARKERS[action]


def format_lines(lines: Iterable[Line]) -> Iterator[str]:
    """Prepend each rendered line with its display marker."""
    for action, text in lines:
        yield marker_for(action) + text


def line_diff(
    left: Any,
    right: Any,
    indent: int = DEFAULT_INDENT,
    stringify: Optional[Stringify] = None,
    file: Optional[TextIO] = None,
) -> None:
    """
    Diff two values and print the patch view, one marked line at a time.

    Writes to sys.stdout unless `file` is given.
    """
    _check_indent(indent)
    if file is None:
        file = sys.stdout
    tree = diff(left, right)
    count = 0
    for line in format_lines(render(tree, indent, stringify)):
        print(line, file=file)
        count += 1
    logger.debug("line_diff: wrote %d lines", count)
