"""
cmdtree dispatcher: route an argument vector through a command tree.

What this module provides
- Tool: binds a root CommandGroup to its runtime settings (version, legacy aliases,
  setup/teardown hooks, look) and runs invocations:
  • run(argv, prog=...) -> int: the whole pipeline, faults translated to exit statuses.
  • main(argv, prog=...): run() followed by sys.exit().
  • dispatch(group, context, args): recursive resolution and execution.
  • handle_special_globals(context, shift, argv): --help / --version interception.

Pipeline
    argv → parse_globals (strip leading global options, set the output mode)
         → handle_special_globals (--help [--full], --version)
         → dispatch(root): resolve args[0], intercept "--help" or an unsupported format,
           recurse into groups, run the leaf with what follows its token.

Exit statuses
- 0 help/version; 1 usage errors (unknown/ambiguous/missing token, bad or unsupported
  format); 129 unknown global option; otherwise whatever the leaf handler returns.

Quick start
    root = CommandGroup(name="btrfs", info="Use --help as an argument for information on a specific group or command.")

    @root.group("subvolume").next.command
    def list(args, context):
        '''List subvolumes.'''
        return 0

    if __name__ == "__main__":
        Tool(root, version="v6.1", aliases={"btrfsck": "check"}).main()
"""
import sys
from types import MappingProxyType

from rich.console import Console
from rich.text import Text

from .faults import DispatchError, MissingCommandError, UnsupportedFormatError, trigger
from .formats import DispatchContext, supports
from .matching import parse_command_token
from .options import parse_globals
from .renderers import Painter
from .tree import CommandGroup
from .utils import Unset, coalesce, basename


def _builtin(command):
    return isinstance(getattr(getattr(command, "handler", None), "__self__", None), Tool)


class Tool:
    """
    runnable CLI over a root command group.

    parameters
    - root: CommandGroup, the top-level group (its name is the program name in messages).
    - version: str | Unset, printed by the built-in ``version`` command.
    - aliases: Mapping[str, str] | Unset, invocation basenames that stand for a fixed
      first token; global options are not parsed for them ({"btrfsck": "check"}).
    - setup / teardown: callables run exactly once per run(), around all dispatch.
    - colorful / fancy: look of help and diagnostics.

    built-ins
    - ``help [--full]`` and ``version`` leaves are appended to the root group unless the
      group already defines commands with those names. they stay bound to this tool, so
      a root group serves a single Tool; binding it again raises ValueError.
    """

    def __init__(
            self,
            root,
            /,
            *,
            version=Unset,
            aliases=Unset,
            setup=Unset,
            teardown=Unset,
            colorful=Unset,
            fancy=Unset,
    ):
        if not isinstance(root, CommandGroup):
            raise TypeError("tool 'root' must be a command group")
        if root.owner is not None:
            raise ValueError("tool 'root' must be a top-level command group")
        if any(name in root and _builtin(root[name]) for name in ("help", "version")):
            raise ValueError(f"command group {root.route!r} is already bound to a tool")
        if not isinstance(version, str | Unset):
            raise TypeError("tool 'version' must be a string")
        for name, hook in (("setup", setup), ("teardown", teardown)):
            if hook is not Unset and not callable(hook):
                raise TypeError(f"tool {name!r} must be callable")
        aliases = dict(coalesce(aliases, {}))
        if not all(isinstance(key, str) and isinstance(value, str) for key, value in aliases.items()):
            raise TypeError("tool 'aliases' must map strings to strings")

        self._root = root
        self._version = coalesce(version, "0.0.0")
        self._aliases = MappingProxyType(aliases)
        self._setup = coalesce(setup, lambda: None)
        self._teardown = coalesce(teardown, lambda: None)
        self._painter = Painter(colorful=colorful, fancy=fancy)
        self._stdout = Console()

        if "help" not in root:
            root.command(
                self._helper,
                name="help",
                descr="Display help information",
                usage="%s help [--full]" % root.name,
                details=("--full     display detailed help on every command",),
            )
        if "version" not in root:
            root.command(
                self._versioner,
                name="version",
                descr="Display %s version" % root.name,
                usage="%s version" % root.name,
            )

    root = property(lambda self: self._root)
    name = property(lambda self: self._root.name)
    version = property(lambda self: self._version)
    aliases = property(lambda self: self._aliases)
    painter = property(lambda self: self._painter)

    def _helper(self, args, context):
        self._stdout.print(self._painter.help_command_group(self._root, args))
        return 0

    def _versioner(self, args, context):
        self._stdout.print(Text(" ").join((
            self._painter.text(self.name, "program-name"),
            self._painter.text(self._version, "usage-section"),
        )))
        return 0

    def handle_special_globals(self, context, shift, argv, /):
        """
        act on --help / --version among the first ``shift`` elements of argv.

        returns 0 when one of them was handled, None when dispatch should go on.
        only the literal spellings count: an abbreviation such as ``--he`` is consumed
        by the parser but does not trigger help. --help wins over --version; --help
        --full prints the whole tree, and the format list always follows the help output.
        """
        tokens = frozenset(argv[:shift])
        if "--help" in tokens:
            if "--full" in tokens:
                self._stdout.print(self._painter.usage_command_group(self._root, full=True))
            else:
                self._root["help"]([], context)
            self._stdout.print(self._painter.output_formats())
            return 0
        if "--version" in tokens:
            self._root["version"]([], context)
            return 0
        return None

    def _intercept(self, command, context, args):
        if len(args) < 2:
            return None
        if command.next is None and not supports(command, context):
            raise UnsupportedFormatError(command=command, mode=context.output_mode)
        if args[1] != "--help":
            return None
        if command.next is not None:
            self._stdout.print(self._painter.help_command_group(command.next, args[1:]))
        else:
            self._stdout.print(self._painter.usage_command(command, full=True))
        return 0

    def dispatch(self, group, context, args, /, *, index=1):
        """
        resolve ``args[0]`` in ``group`` and route the rest of ``args``.

        - groups recurse with the arguments shifted by one.
        - leaves run with the arguments following their token; the status is returned as is.
        - ``index`` is the 1-based argv position of ``args[0]`` (diagnostics only).
        """
        if not args:
            raise MissingCommandError(group=group)
        command = parse_command_token(args[0], group, index=index)
        if (status := self._intercept(command, context, args)) is not None:
            return status
        if command.next is not None:
            return self.dispatch(command.next, context, args[1:], index=index + 1)
        return command(args[1:], context)

    def _run(self, context, argv, prog):
        if (alias := self._aliases.get(basename(prog))) is not None:
            return self.dispatch(self._root, context, [alias, *argv], index=0)

        shift = parse_globals(context, argv)
        if (status := self.handle_special_globals(context, shift, argv)) is not None:
            return status
        if not (args := argv[shift:]):
            raise MissingCommandError(group=self._root, short=True)
        return self.dispatch(self._root, context, args, index=shift + 1)

    def run(self, argv=Unset, /, *, prog=Unset):
        """
        run one invocation and return its exit status.

        - argv: arguments without the program name (default: sys.argv[1:]).
        - prog: invocation name used for alias detection (default: sys.argv[0]).

        dispatch faults are rendered on standard error and mapped to their status;
        any other exception raised by a handler propagates after teardown.
        """
        argv = list(coalesce(argv, sys.argv[1:]))
        if not all(isinstance(token, str) for token in argv):
            raise TypeError("run() argument must be an iterable of strings")
        prog = coalesce(prog, sys.argv[0] if sys.argv else self.name)

        context = DispatchContext()
        self._setup()
        try:
            return self._run(context, argv, prog)
        except DispatchError as fault:
            return trigger(
                fault,
                prog=self.name,
                root=self._root,
                painter=self._painter,
                colorful=self._painter.colorful,
                fancy=self._painter.fancy,
            )
        finally:
            self._teardown()

    def main(self, argv=Unset, /, *, prog=Unset):
        sys.exit(self.run(argv, prog=prog))


__all__ = (
    "Tool",
)
