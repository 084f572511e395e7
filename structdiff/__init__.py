"""
structdiff
==========

Structural diffs of nested values, rendered as a line-oriented patch view.

    diff({"a": 1, "b": 2}, {"a": 1, "b": 3})
        → ObjectDiff((Attribute("a", Equal(1)), Attribute("b", Unequal(2, 3))))

    line_diff({"a": 1, "b": 2}, {"a": 1, "b": 3})
         {
           "a": 1,
        -  "b": 2
        +  "b": 3
         }

Mappings are compared key by key (keys sorted), sequences index by
index, strings and other primitives as a whole.  Cyclic inputs raise
CircularStructureError instead of recursing forever.
"""

from structdiff.core import (
    # Sentinel
    UNSET,
    # Diff tree
    Diff,
    Equal,
    Unequal,
    Add,
    Remove,
    Attribute,
    ObjectDiff,
    ArrayDiff,
    # Comparison
    diff,
)
from structdiff.exceptions import (
    StructDiffError,
    CircularStructureError,
    InvalidComparisonError,
    InvalidConfigurationError,
)
from structdiff.formats import json_stringify, python_stringify, diff_to_python
from structdiff.render import (
    DEFAULT_INDENT, MARKERS, LineAction,
    render, marker_for, format_lines, line_diff,
)

__version__ = "0.1.0"
__all__ = [
    "UNSET",
    "Diff", "Equal", "Unequal", "Add", "Remove", "Attribute", "ObjectDiff", "ArrayDiff",
    "diff",
    "StructDiffError", "CircularStructureError",
    "InvalidComparisonError", "InvalidConfigurationError",
    "json_stringify", "python_stringify", "diff_to_python",
    "DEFAULT_INDENT", "MARKERS", "LineAction",
    "render", "marker_for", "format_lines", "line_diff",
]
