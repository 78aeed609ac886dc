"""Splice a string many times using offsets into the original string."""

from .edit import Edit
from .errors import InvalidRangeError, OutOfRangeError, OverlapError, SpliceError
from .ranges import check_bounds, resolve_range
from .splicer import Splicer

__all__ = [
    "Edit",
    "Splicer",
    "SpliceError",
    "OutOfRangeError",
    "InvalidRangeError",
    "OverlapError",
    "check_bounds",
    "resolve_range",
]

__version__ = "0.1.0"
