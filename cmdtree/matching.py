"""
Token matcher: resolve one argument against an ordered list of named entries.

Rules (declaration order, first exact match wins)
- a token equal to an entry name resolves to that entry immediately, regardless of
  abbreviation candidates seen before it.
- a token that is a prefix of an entry name makes that entry an abbreviation
  candidate; a second candidate marks the token as ambiguous.
- after the scan: ambiguous wins over a single candidate, a single candidate resolves,
  nothing at all is a miss. the empty token never matches.

Entries are any objects exposing ``name``: commands of a CommandGroup, or the global
option table of cmdtree.options.
"""
from enum import Enum
from typing import NamedTuple

from .faults import UnknownTokenError, AmbiguousTokenError
from .utils import Unset


class Verdict(Enum):
    RESOLVED = "resolved"
    NOT_FOUND = "not found"
    AMBIGUOUS = "ambiguous"


class Resolution(NamedTuple):
    """
    transient outcome of a lookup.

    - verdict: one of Verdict.
    - command: the resolved entry (None unless verdict is RESOLVED).
    - candidates: every entry the token abbreviates, in declaration order.
    """
    verdict: Verdict
    command: object = None
    candidates: tuple = ()

    def __bool__(self):
        return self.verdict is Verdict.RESOLVED


def candidates(token, entries, /):
    """return the entries whose name starts with ``token``, in declaration order"""
    if not token:
        return ()
    return tuple(entry for entry in entries if entry.name.startswith(token))


def parse_one_token(token, entries, /):
    """
    resolve ``token`` against ``entries`` (see module rules) and return a Resolution.
    """
    if not isinstance(token, str):
        raise TypeError("parse_one_token() first argument must be a string")
    if not token:
        return Resolution(Verdict.NOT_FOUND)

    abbreviation = ambiguous = None
    for entry in entries:
        if entry.name == token:
            return Resolution(Verdict.RESOLVED, entry, candidates(token, entries))
        if entry.name.startswith(token):
            if abbreviation is not None:
                # keep scanning: an exact match later still wins
                ambiguous = abbreviation
            abbreviation = entry

    if ambiguous is not None:
        return Resolution(Verdict.AMBIGUOUS, None, candidates(token, entries))
    if abbreviation is not None:
        return Resolution(Verdict.RESOLVED, abbreviation, (abbreviation,))
    return Resolution(Verdict.NOT_FOUND)


def parse_command_token(token, group, /, *, index=Unset):
    """
    resolve ``token`` in a CommandGroup or raise the matching fault.

    raises
    - UnknownTokenError: nothing matches; the fault carries the group for its usage epilogue.
    - AmbiguousTokenError: several commands start with the token; the fault lists them.
    """
    resolution = parse_one_token(token, group)
    if resolution.verdict is Verdict.NOT_FOUND:
        raise UnknownTokenError(token=token, group=group, index=index)
    if resolution.verdict is Verdict.AMBIGUOUS:
        raise AmbiguousTokenError(token=token, group=group, index=index, candidates=resolution.candidates)
    return resolution.command


__all__ = (
    "Verdict",
    "Resolution",
    "candidates",
    "parse_one_token",
    "parse_command_token",
)
