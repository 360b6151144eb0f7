"""Text objects (iw, a", i(, ap, ...) resolved to ranges around a position."""

from .models import BracketPair, TextObject, TextObjectKind, text_object_from_key
from .resolve import resolve_text_object

__all__ = [
    "BracketPair",
    "TextObject",
    "TextObjectKind",
    "resolve_text_object",
    "text_object_from_key",
]
