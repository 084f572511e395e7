"""
structdiff.formats — Text and plain-Python views of values and diffs.

Stringify capabilities (for structdiff.render):
    • json_stringify   → JSON literal, the default
    • python_stringify → pprint literal, for values JSON cannot express

Diff tree conversion:
    • diff_to_python   → nested dicts/lists, e.g. for json.dumps
"""

import json
import pprint
from collections.abc import Mapping
from typing import Any

from .core import Add, ArrayDiff, Diff, Equal, ObjectDiff, Remove, Unequal


# ═══════════════════════════════════════════════════════════════════
#  STRINGIFY CAPABILITIES
# ═══════════════════════════════════════════════════════════════════

def json_stringify(value: Any, indent: int) -> list[str]:
    """
    Render a value as an indented JSON literal, one string per line.

    Non-dict mappings are written as JSON objects.  Values JSON has no
    faithful encoding for (sets, arbitrary objects, non-string mapping
    keys, circular references) send the whole value to python_stringify,
    so a set never reads the same as a string and key 1 never reads
    the same as key "1".
    """
    if _has_non_string_key(value, set()):
        return python_stringify(value, indent)
    try:
        text = json.dumps(value, indent=indent, ensure_ascii=False, default=_mapping_default)
    except (TypeError, ValueError):
        return python_stringify(value, indent)
    return text.split("\n")


def _mapping_default(value: Any) -> dict:
    if isinstance(value, Mapping):
        return dict(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _has_non_string_key(value: Any, visited: set[int]) -> bool:
    """True if any mapping inside `value` has a key that is not a str."""
    if isinstance(value, Mapping):
        if id(value) in visited:
            return False
        visited.add(id(value))
        if any(not isinstance(key, str) for key in value):
            return True
        return any(_has_non_string_key(item, visited) for item in value.values())
    if isinstance(value, (list, tuple)):
        if id(value) in visited:
            return False
        visited.add(id(value))
        return any(_has_non_string_key(item, visited) for item in value)
    return False


def python_stringify(value: Any, indent: int) -> list[str]:
    """Render a value as a pretty-printed Python literal, one string per line."""
    return pprint.pformat(value, indent=indent).split("\n")


# ═══════════════════════════════════════════════════════════════════
#  DIFF TREE ↔ PLAIN PYTHON
# ═══════════════════════════════════════════════════════════════════

def diff_to_python(tree: Diff) -> dict[str, Any]:
    """
    Convert a Diff tree to plain dicts and lists.

    Mapping:
        Equal       → {"type": "equal", "value": ...}
        Unequal     → {"type": "unequal", "left": ..., "right": ...}
        Add         → {"type": "add", "value": ...}
        Remove      → {"type": "remove", "value": ...}
        ObjectDiff  → {"type": "object", "attributes": [{"key": ..., "diff": ...}]}
        ArrayDiff   → {"type": "array", "elements": [...]}

    Leaf values are carried over as-is, not copied.
    """
    if isinstance(tree, Equal):
        return {"type": "equal", "value": tree.value}
    if isinstance(tree, Unequal):
        return {"type": "unequal", "left": tree.left, "right": tree.right}
    if isinstance(tree, Add):
        return {"type": "add", "value": tree.value}
    if isinstance(tree, Remove):
        return {"type": "remove", "value": tree.value}
    if isinstance(tree, ObjectDiff):
        return {
            "type": "object",
            "attributes": [
                {"key": attr.key, "diff": diff_to_python(attr.diff)}
                for attr in tree.attributes
            ],
        }
    if isinstance(tree, ArrayDiff):
        return {
            "type": "array",
            "elements": [diff_to_python(element) for element in tree.elements],
        }
    raise TypeError(f"Unknown Diff type: {type(tree)}")
