"""
cmdtree utilities (internal helpers, carefully exposed)

Overview
- UnsetType / Unset
  • Singleton sentinel for “value not provided”, distinct from None.
- coalesce(value, default=None)
  • Materialize Unset into a concrete default; None and other falsey values survive.
- ordinal(number)
  • Human-friendly 1-based position label used in diagnostics (“second token”).
- basename(path)
  • Invocation basename used for legacy alias detection.

Names not in __all__ are internal and may change without notice.
"""
import functools
import os.path
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset".
    - Non-subclassable and a singleton per process.
    """

    def __or__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Return object unless it is Unset, in which case return default.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None
    """
    return object if object is not Unset else default


@functools.cache
def ordinal(number, /):
    """
    Return an ordinal label for a 1-based position.

    - 1..10 are rendered as words ("first"…"tenth").
    - Other numbers use numeric ordinals with English suffixes.
    """
    words = ("first", "second", "third", "fourth", "fifth", "sixth", "seventh", "eighth", "ninth", "tenth")
    if 1 <= number <= len(words):
        return words[number - 1]
    if 10 < number % 100 < 20:
        return f"{number}th"
    return f'{number}%s' % {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


def basename(path, /):
    """
    Return the last path component of an invocation name ("/usr/bin/btrfsck" -> "btrfsck").
    """
    if not isinstance(path, str):
        raise TypeError("basename() argument must be a string")
    return os.path.basename(path) or path


Unset = UnsetType()


__all__ = (
    "coalesce",
    "ordinal",
    "basename",
    "UnsetType",
    "Unset",
)
