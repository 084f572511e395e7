"""Errors raised by structdiff."""


class StructDiffError(Exception):
    """Base class for structdiff errors."""


class CircularStructureError(StructDiffError):
    """The same pair of containers was reached again while still being compared."""


class InvalidComparisonError(StructDiffError):
    """Both sides of a comparison were UNSET."""


class InvalidConfigurationError(StructDiffError, ValueError):
    """Invalid render configuration (e.g. indent below 1)."""
