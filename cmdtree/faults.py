"""
cmdtree faults (dispatch errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every dispatch error.
- DispatchError: base type carrying a message, an exit status and options; it knows
  how to render itself (rich) and what to print after itself (its epilogue: group
  usage, format list, command usage).
- trigger(): the single place where a fault becomes output plus an exit status.

Flow
- resolution and parsing code raise DispatchError subclasses; nothing below the entry
  point prints diagnostics or exits.
- the entry point catches the fault and calls trigger(fault, **options), which renders
  it on standard error and returns the status to exit with.

Host hooks (read from __main__ when present)
- __styles__: palette overrides, __codes__: fault code relabelling, __prog__: program name.
"""
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, ordinal

console = Console(stderr=True)
stdout = Console()


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - routing (1110x): UNKNOWN_TOKEN, AMBIGUOUS_TOKEN, MISSING_COMMAND
    - global options (1111x): UNRECOGNIZED_GLOBAL_OPTION
    - output formats (1112x): INVALID_FORMAT_NAME, UNSUPPORTED_FORMAT
    """
    # --- routing ---
    UNKNOWN_TOKEN               = 11101
    AMBIGUOUS_TOKEN             = 11102
    MISSING_COMMAND             = 11103

    # --- global options ---
    UNRECOGNIZED_GLOBAL_OPTION  = 11111

    # --- output formats ---
    INVALID_FORMAT_NAME         = 11121
    UNSUPPORTED_FORMAT          = 11122

    def normalize(self):
        """
        return a host-normalized string for this code (see __codes__ in __main__).
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class DispatchError(Exception):
    """
    base of every dispatch fault.

    class attributes
    - code: FaultCode of the fault.
    - title: short lowercase title shown in the header.
    - status: process exit status the entry point returns for this fault.
    - usage_on_stdout: print the epilogue on standard output instead of standard error.

    options (read-only mapping)
    - hint: one actionable sentence.
    - index: 1-based argv position of the offending token, when known.
    - prog, colorful, fancy, painter: merged in by trigger() at the entry point.
    - anything a subclass epilogue needs (group, command, root, candidates, ...).
    """
    code = Unset
    title = "dispatch error"
    status = 1
    usage_on_stdout = False

    def __init__(self, message, /, **options):
        if not isinstance(message, str):
            raise TypeError(f"{type(self).__name__} message must be a string")
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})

    def __epilogue__(self, painter):
        """renderables printed after the fault itself (none by default)"""
        return []

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", False)

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), styles[style] if colorful else "")

        prog = text(getattr(main, "__prog__", self.options.get("prog", "cmdtree")), "prog-name")

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(self.code.normalize(), "code"),
            " | ",
            text(self.title.title(), "error-title"),
            " ]"
        )
        message = text(self.message, "error-message")
        renders = [message]
        if hint := self.options.get("hint"):
            renders.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))

        if self.options.get("fancy", False):
            return Panel(Group(*renders), title=header, title_align="left")
        return Group(header, *renders)


def _position(options):
    index = options.get("index", Unset)
    if index is Unset or index < 1:
        return ""
    return " at %s position" % ordinal(index)


class UnknownTokenError(DispatchError):
    code = FaultCode.UNKNOWN_TOKEN
    title = "unknown token"

    def __init__(self, message=Unset, /, **options):
        group = options["group"]
        if message is Unset:
            message = "unknown token %r%s" % (options["token"], _position(options))
        options.setdefault("hint", "valid tokens are %s; run '%s --help' for details" % (
            ", ".join(repr(command.name) for command in group if not command.hidden) or "(none)",
            group.route,
        ))
        super().__init__(message, **options)

    def __epilogue__(self, painter):
        return [Text(""), painter.usage_command_group(self.options["group"])]


class AmbiguousTokenError(DispatchError):
    code = FaultCode.AMBIGUOUS_TOKEN
    title = "ambiguous token"

    def __init__(self, message=Unset, /, **options):
        if message is Unset:
            message = "ambiguous token %r%s" % (options["token"], _position(options))
        options.setdefault("hint", "did you mean one of these? %s" % ", ".join(
            command.name for command in options["candidates"]
        ))
        super().__init__(message, **options)


class MissingCommandError(DispatchError):
    code = FaultCode.MISSING_COMMAND
    title = "missing command"

    def __init__(self, message=Unset, /, **options):
        group = options["group"]
        if message is Unset:
            message = "no command given for %r" % group.route
        options.setdefault("hint", "run '%s --help' to see available commands" % group.route)
        super().__init__(message, **options)

    def __epilogue__(self, painter):
        if self.options.get("short", False):
            return [Text(""), painter.usage_command_group_short(self.options["group"])]
        return [Text(""), painter.usage_command_group(self.options["group"])]


class UnrecognizedGlobalOptionError(DispatchError):
    code = FaultCode.UNRECOGNIZED_GLOBAL_OPTION
    title = "unknown global option"
    status = 129

    def __init__(self, message=Unset, /, **options):
        if message is Unset:
            message = "unknown global option %r%s" % (options["token"], _position(options))
        options.setdefault("hint", "global options are --help, --version, --full and --format <format>")
        super().__init__(message, **options)


class InvalidFormatError(DispatchError):
    code = FaultCode.INVALID_FORMAT_NAME
    title = "invalid output format"

    def __init__(self, message=Unset, /, **options):
        if message is Unset:
            message = "invalid output format %r" % options["value"]
        super().__init__(message, **options)

    def __epilogue__(self, painter):
        renders = [Text("")]
        if (root := self.options.get("root")) is not None:
            renders.append(painter.usage_command_group(root, brief=True))
        renders.append(painter.output_formats())
        return renders


class UnsupportedFormatError(DispatchError):
    code = FaultCode.UNSUPPORTED_FORMAT
    title = "unsupported output format"
    usage_on_stdout = True

    def __init__(self, message=Unset, /, **options):
        command = options["command"]
        if message is Unset:
            message = "%s output is unsupported for %r" % (options["mode"].label, command.route)
        options.setdefault("hint", "drop '--format %s' or pick a command that supports it" % options["mode"].label)
        super().__init__(message, **options)

    def __epilogue__(self, painter):
        return [Text(""), painter.usage_command(self.options["command"], full=True)]


def trigger(fault, /, **options):
    """
    surface a fault and return the exit status it maps to.

    contract
    - fault must be a DispatchError.
    - options are merged into the fault (prog, colorful, fancy, painter, root, ...).
    - the fault is printed on standard error, its epilogue too unless usage_on_stdout.
    """
    if not isinstance(fault, DispatchError):
        raise TypeError("trigger() argument must be a dispatch error")
    fault = fault.__replace__(**options)
    console.print(fault)
    if (painter := fault.options.get("painter")) is not None:
        for renderable in fault.__epilogue__(painter):
            (stdout if fault.usage_on_stdout else console).print(renderable)
    return fault.status


__all__ = (
    "FaultCode",
    "DispatchError",
    "UnknownTokenError",
    "AmbiguousTokenError",
    "MissingCommandError",
    "UnrecognizedGlobalOptionError",
    "InvalidFormatError",
    "UnsupportedFormatError",
    "trigger",
)
