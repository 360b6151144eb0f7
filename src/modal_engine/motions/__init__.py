"""Pure motion functions over a string and an integer offset."""

from .models import FindKind, Motion, MotionKind, TextRange, motion_from_key
from .resolve import resolve_position, resolve_range

__all__ = [
    "FindKind",
    "Motion",
    "MotionKind",
    "TextRange",
    "motion_from_key",
    "resolve_position",
    "resolve_range",
]
