"""
structdiff.core — Structural Diff Trees
=======================================

§1  THE MODEL
─────────────

A value is any Python object.  At comparison time each side is
classified as one of:

    UNSET              → absent (key or index missing on that side)
    str                → string, compared as a whole
    list / tuple       → ordered sequence
    Mapping            → keyed mapping
    None               → null
    anything else      → primitive, compared by ==

The result of a comparison is a Diff tree:

    Equal(value)                 both sides identical
    Unequal(left, right)         both present, different, not decomposable
    Add(value)                   only on the right
    Remove(value)                only on the left
    ObjectDiff(attributes)       two mappings, one Attribute per key
    ArrayDiff(elements)          two sequences, one Diff per index


§2  THE ALGORITHM
─────────────────

diff(l, r) walks both values in lock-step:

    1. Absence        l is UNSET → Add(r);  r is UNSET → Remove(l)
    2. Fast equality  l is r, or equal non-containers → Equal(l)
    3. Strings        str vs str → Equal or Unequal, never per character
    4. Kind mismatch  sequence vs non-sequence, mapping vs non-mapping,
                      None vs mapping → Unequal
    5. Sequences      index by index over max(len(l), len(r))
    6. Mappings       key by key over the sorted union of keys
    7. Otherwise      Unequal

Sequence comparison is POSITIONAL.  There is no LCS alignment:
[1, 2, 3] against [2, 3] reports three changed positions, not one
deletion.

COLLAPSING LAW:
A container comparison whose children are all Equal returns
Equal(l) instead of an ObjectDiff/ArrayDiff.  So an ObjectDiff or
ArrayDiff always holds at least one visible change, and Equal means
the same thing at every depth.


§3  CYCLES
──────────

Lock-step recursion over two cyclic graphs never bottoms out.  Each
top-level diff() owns a _RecursionGuard that records which
(left container, right container) identity pairs are currently being
compared.  Reaching a pair that is already in flight raises
CircularStructureError.  Pairs are released on every exit path, so
the same objects may appear again in a sibling subtree.
"""

import logging
from collections.abc import Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator, Optional, Union

from .exceptions import CircularStructureError, InvalidComparisonError

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════
#  ABSENCE SENTINEL
# ═══════════════════════════════════════════════════════════════════

class _Unset:
    """Marks a key or index that is missing on one side."""
    __slots__ = ()

    _instance: Optional["_Unset"] = None

    def __new__(cls) -> "_Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __reduce__(self) -> str:
        return "UNSET"


UNSET = _Unset()


# ═══════════════════════════════════════════════════════════════════
#  DIFF TREE
# ═══════════════════════════════════════════════════════════════════

class Diff:
    """Base class for diff nodes.  Not instantiated directly."""
    __slots__ = ()

    @property
    def is_equal(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class Equal(Diff):
    """Both sides are identical."""
    value: Any

    @property
    def is_equal(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Unequal(Diff):
    """
    Both sides are present but differ and cannot be decomposed further:
    differing primitives or strings, or values of different kinds.
    """
    left: Any
    right: Any


@dataclass(frozen=True, slots=True)
class Add(Diff):
    """Present only on the right side."""
    value: Any


@dataclass(frozen=True, slots=True)
class Remove(Diff):
    """Present only on the left side."""
    value: Any


@dataclass(frozen=True, slots=True)
class Attribute:
    """One key of an ObjectDiff together with the diff of its values."""
    key: Any
    diff: Diff


@dataclass(frozen=True, slots=True)
class ObjectDiff(Diff):
    """
    Two mappings with at least one differing key.

    `attributes` covers the union of both sides' keys in sorted order.
    """
    attributes: tuple[Attribute, ...]

    def __len__(self) -> int:
        return len(self.attributes)


@dataclass(frozen=True, slots=True)
class ArrayDiff(Diff):
    """
    Two sequences with at least one differing position.

    `elements` has one entry per index up to the longer side's length.
    """
    elements: tuple[Diff, ...]

    def __len__(self) -> int:
        return len(self.elements)


# ═══════════════════════════════════════════════════════════════════
#  RECURSION GUARD
# ═══════════════════════════════════════════════════════════════════

class _RecursionGuard:
    """
    Tracks the container pairs currently being compared.

    Maps id(left) → {id(right), ...}.  Both objects are referenced from
    the call stack for as long as their pair is registered, so their
    ids cannot be reused while in flight.
    """
    __slots__ = ("_in_flight",)

    def __init__(self) -> None:
        self._in_flight: dict[int, set[int]] = {}

    @contextmanager
    def track(self, left: Any, right: Any) -> Iterator[None]:
        left_id, right_id = id(left), id(right)
        partners = self._in_flight.setdefault(left_id, set())
        if right_id in partners:
            logger.debug(
                "circular structure: %s/%s pair re-entered",
                type(left).__name__, type(right).__name__,
            )
            raise CircularStructureError("Circular structure encountered")
        partners.add(right_id)
        try:
            yield
        finally:
            partners.discard(right_id)
            if not partners:
                del self._in_flight[left_id]

    def __len__(self) -> int:
        return sum(len(partners) for partners in self._in_flight.values())


# ═══════════════════════════════════════════════════════════════════
#  CLASSIFICATION
# ═══════════════════════════════════════════════════════════════════

def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _is_mapping(value: Any) -> bool:
    return isinstance(value, Mapping)


def _same_value(left: Any, right: Any) -> bool:
    """Identity for containers, == for everything else."""
    if left is right:
        return True
    if _is_sequence(left) or _is_sequence(right):
        return False
    if _is_mapping(left) or _is_mapping(right):
        return False
    # bool is a subclass of int; True must not equal 1.
    if (type(left) is bool) != (type(right) is bool):
        return False
    return bool(left == right)


def _key_order(key: Any) -> tuple[int, str, str]:
    """String keys first in code point order, then other keys by type name and repr."""
    if isinstance(key, str):
        return (0, "", key)
    return (1, type(key).__name__, repr(key))


# ═══════════════════════════════════════════════════════════════════
#  DIFF
# ═══════════════════════════════════════════════════════════════════

def diff(left: Any, right: Any) -> Diff:
    """
    Compare two values and return their Diff tree.

    Either side (but not both) may be UNSET, which yields Add or Remove.

    Raises:
        CircularStructureError: both values contain a cycle that the
            lock-step walk would follow forever.
        InvalidComparisonError: both sides are UNSET.
    """
    result = _diff(left, right, _RecursionGuard())
    logger.debug("diff: %s", type(result).__name__)
    return result


def _diff(left: Any, right: Any, guard: _RecursionGuard) -> Diff:
    if left is UNSET:
        if right is UNSET:
            raise InvalidComparisonError("Cannot compare two unset values")
        return Add(right)
    if right is UNSET:
        return Remove(left)

    if _same_value(left, right):
        return Equal(left)

    if isinstance(left, str) and isinstance(right, str):
        return _string_diff(left, right)

    if _is_sequence(left) or _is_sequence(right):
        if _is_sequence(left) and _is_sequence(right):
            return _array_diff(left, right, guard)
        return Unequal(left, right)

    if _is_mapping(left) or _is_mapping(right):
        if _is_mapping(left) and _is_mapping(right):
            return _object_diff(left, right, guard)
        return Unequal(left, right)

    return Unequal(left, right)


def _string_diff(left: str, right: str) -> Union[Equal, Unequal]:
    if left == right:
        return Equal(left)
    return Unequal(left, right)


def _array_diff(
    left: Union[list, tuple], right: Union[list, tuple], guard: _RecursionGuard
) -> Union[ArrayDiff, Equal]:
    """Positional comparison; the shorter side is UNSET past its end."""
    with guard.track(left, right):
        elements = tuple(
            _diff(
                left[i] if i < len(left) else UNSET,
                right[i] if i < len(right) else UNSET,
                guard,
            )
            for i in range(max(len(left), len(right)))
        )

    if all(element.is_equal for element in elements):
        return Equal(left)
    return ArrayDiff(elements)


def _object_diff(
    left: Mapping, right: Mapping, guard: _RecursionGuard
) -> Union[ObjectDiff, Equal]:
    """Key-by-key comparison over the sorted union of both key sets."""
    with guard.track(left, right):
        keys = sorted(set(left.keys()) | set(right.keys()), key=_key_order)
        attributes = tuple(
            Attribute(
                key,
                _diff(
                    left[key] if key in left else UNSET,
                    right[key] if key in right else UNSET,
                    guard,
                ),
            )
            for key in keys
        )

    if all(attr.diff.is_equal for attr in attributes):
        return Equal(left)
    return ObjectDiff(attributes)
