"""
Output modes, capability masks and the dispatch context.

Scope
- OutputMode: the enumerated rendering modes a tool understands. TEXT is the default
  and is always available; every other member is an extended mode.
- Formats: capability bitmask declared by leaf commands; bit ``1 << mode`` marks
  support for ``OutputMode(mode)``.
- DispatchContext: the explicit per-invocation state threaded from the global option
  parser through the dispatcher down to leaf handlers.
- supports(): output format negotiation between the dispatcher and a resolved command.
"""
import functools
import operator
from enum import IntEnum, IntFlag


class OutputMode(IntEnum):
    """
    rendering modes selectable with ``--format``.

    member names are matched case-insensitively against the user input; the
    lowercased member name is the user-facing spelling.
    """
    TEXT = 0
    JSON = 1

    @property
    def label(self):
        return self.name.lower()

    @property
    def flag(self):
        return Formats(1 << self.value)

    @classmethod
    def lookup(cls, name, /):
        """
        return the mode spelled ``name`` (case-insensitive) or None when no mode matches.
        """
        if not isinstance(name, str):
            raise TypeError("lookup() argument must be a string")
        for mode in cls:
            if mode.label == name.lower():
                return mode
        return None


class Formats(IntFlag):
    TEXT = 1 << OutputMode.TEXT
    JSON = 1 << OutputMode.JSON


# every mode at once (the mask of command groups)
ANY_FORMAT = functools.reduce(operator.or_, Formats)


class DispatchContext:
    """
    mutable state for a single dispatch.

    lifecycle
    - created once by the entry point with the default (text) mode.
    - output_mode is written by the global option parser only, once per ``--format``
      occurrence (last one wins), and never reset afterwards.
    - read by the output format negotiator and by leaf handlers.
    """
    __slots__ = ("output_mode",)

    def __init__(self, output_mode=OutputMode.TEXT):
        if not isinstance(output_mode, OutputMode):
            raise TypeError("dispatch context 'output_mode' must be an output mode")
        self.output_mode = output_mode

    def __repr__(self):
        return f"{type(self).__name__}(output_mode={self.output_mode.label!r})"


def supports(command, context, /):
    """
    tell whether ``command`` can render the mode requested in ``context``.

    the default mode needs no capability; groups only route, so they accept every mode.
    """
    if context.output_mode == OutputMode.TEXT:
        return True
    if command.next is not None:
        return True
    return bool(command.formats & context.output_mode.flag)


__all__ = (
    "OutputMode",
    "Formats",
    "ANY_FORMAT",
    "DispatchContext",
    "supports",
)
