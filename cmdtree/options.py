"""
Global option parser.

Parses the leading global options of an argument vector (program name excluded):

    [--help] [--version] [--full] [--format <format>] <command> ...

- only long options are recognized; unique prefixes are accepted (``--vers``).
- ``--format`` takes a value, spaced (``--format json``) or inline (``--format=json``).
- parsing stops at the first non-option token (a lone ``-`` is a non-option); what
  follows belongs to the subcommand even when it looks like an option.
- ``--`` is consumed and ends the global options.
- anything else that looks like an option is an UnrecognizedGlobalOptionError (129).

The parser is stateless: every call starts from the first element of argv.
"""
import re
from typing import NamedTuple

from .faults import UnrecognizedGlobalOptionError, InvalidFormatError
from .formats import OutputMode
from .matching import Verdict, parse_one_token


class GlobalOption(NamedTuple):
    name: str
    argument: bool
    descr: str


GLOBAL_OPTIONS = (
    GlobalOption("help", False, "show help and exit"),
    GlobalOption("version", False, "show version and exit"),
    GlobalOption("format", True, "select the output format"),
    GlobalOption("full", False, "with --help, show help on every command"),
)


def _resolve(token, index):
    match = re.fullmatch(r"--(?P<input>[^=]+)(=(?P<value>.*))?", token, re.DOTALL)
    if not match:
        raise UnrecognizedGlobalOptionError(token=token, index=index)
    resolution = parse_one_token(match["input"], GLOBAL_OPTIONS)
    if resolution.verdict is not Verdict.RESOLVED:
        raise UnrecognizedGlobalOptionError(token=token, index=index)
    option = resolution.command
    if match["value"] is not None and not option.argument:
        raise UnrecognizedGlobalOptionError(
            token=token,
            index=index,
            hint="'--%s' does not take a value" % option.name,
        )
    return option, match["value"]


def _consume(argv):
    """
    yield ``(option, value, shift)`` for each leading global option.

    ``shift`` counts the argv positions consumed so far; a ``--`` terminator yields
    ``(None, None, shift)`` and ends the walk.
    """
    index = 0
    while index < len(argv):
        token = argv[index]
        if token == "--":
            yield None, None, index + 1
            return
        if token == "-" or not token.startswith("-"):
            return
        option, value = _resolve(token, index + 1)
        index += 1
        if option.argument and value is None:
            if index >= len(argv):
                raise UnrecognizedGlobalOptionError(
                    token=token,
                    index=index,
                    hint="'--%s' requires a value" % option.name,
                )
            value = argv[index]
            index += 1
        yield option, value, index


def handle_output_format(context, value, /):
    """
    select the output mode named ``value`` (case-insensitive).

    an unknown name resets the context to text and raises InvalidFormatError.
    """
    if (mode := OutputMode.lookup(value)) is None:
        context.output_mode = OutputMode.TEXT
        raise InvalidFormatError(value=value)
    context.output_mode = mode


def parse_globals(context, argv, /):
    """
    parse the global options at the head of ``argv`` and return how many positions they use.

    ``--format`` updates ``context.output_mode`` as it is met, so the last one wins.
    ``--help``, ``--version`` and ``--full`` are only consumed here; the dispatcher acts on them.
    """
    shift = 0
    for option, value, shift in _consume(argv):
        if option is not None and option.name == "format":
            handle_output_format(context, value)
    return shift


__all__ = (
    "GlobalOption",
    "GLOBAL_OPTIONS",
    "handle_output_format",
    "parse_globals",
)
