"""
cmdtree command tree: groups, leaves and the nesting between them.

What this module provides
- CommandGroup: an ordered, owned collection of commands routed at one level of the
  CLI hierarchy, plus the usage lines and info text shown by the help renderer.
- Command: the common identity of every entry (name, descr, usage, details, formats).
  It is abstract; concrete entries are one of two tagged variants:
  • Leaf: an executable command with a handler ``handler(args, context) -> int``.
  • Group: an internal node that owns a nested CommandGroup (exposed as ``next``).

Composition
    root = CommandGroup("btrfs [--help] [--version] <group> [<group>...] <command> [<args>]",
                        info="Use --help as an argument for information on a specific group or command.",
                        name="btrfs")

    subvolume = root.group("subvolume", descr="manage subvolumes")

    @subvolume.command(formats=Formats.TEXT | Formats.JSON)
    def list(args, context):
        '''List subvolumes and snapshots in the filesystem.'''
        return 0

Ownership
- a group owns its commands in declaration order; a Group command owns its nested group.
- a command is attached to exactly one group; names are unique inside a group.
"""
import inspect
import re
import sys
from collections.abc import Iterable

from .formats import Formats, ANY_FORMAT
from .utils import Unset, coalesce, basename


def _firstline(text, /):
    if not text:
        return None
    return text.strip().splitlines()[0].strip() or None


def _lines(lines, /, *, label):
    if isinstance(lines, str):
        return (lines,) if lines else ()
    if not isinstance(lines, Iterable):
        raise TypeError(f"{label} must be a string or an iterable of strings")
    lines = tuple(lines)
    if not all(isinstance(line, str) for line in lines):
        raise TypeError(f"{label} must be a string or an iterable of strings")
    return lines


def _validate_name(name, /):
    if not isinstance(name, str):
        raise TypeError("command 'name' must be a string")
    if not re.fullmatch(r"[^\s-]\S*", name):
        raise ValueError(f"command 'name' must be a non-empty token not starting with '-', got {name!r}")
    return name


class CommandGroup:
    """
    ordered collection of named commands routed at one level.

    parameters
    - usage: str | Iterable[str]
      usage lines printed under "usage:" by the help renderer. when empty, the renderer
      synthesizes one from the route ("btrfs subvolume <command> [<args>]").
    - info: str | Unset
      closing paragraph of the group help.
    - name: str | Unset (keyword-only)
      program name for a root group; defaults to the invocation basename. nested groups
      always take the name of the Group command that owns them.
    """

    def __init__(self, usage=(), info=Unset, /, *, name=Unset):
        if not isinstance(info, str | Unset):
            raise TypeError("command group 'info' must be a string")
        if name is not Unset:
            _validate_name(name)
        self._usage = _lines(usage, label="command group 'usage'")
        self._info = coalesce(info)
        self._name = coalesce(name)
        self._owner = None
        self._commands = []

    @property
    def usage(self):
        return self._usage

    @property
    def info(self):
        return self._info

    @property
    def owner(self):
        """the Group command this group is nested under (None for a root group)"""
        return self._owner

    @property
    def name(self):
        if self._owner is not None:
            return self._owner.name
        return self._name or basename(sys.argv[0] if sys.argv and sys.argv[0] else "cmdtree")

    @property
    def path(self):
        """names from the root program name down to this group"""
        if self._owner is None:
            return (self.name,)
        return self._owner.path

    @property
    def route(self):
        return " ".join(self.path)

    @property
    def commands(self):
        return tuple(self._commands)

    def attach(self, command, /):
        """
        append ``command`` to this group (declaration order is preserved).

        raises
        - TypeError: when command is not a Command.
        - ValueError: when the command already belongs to a group, or the name is taken.
        """
        if not isinstance(command, Command):
            raise TypeError("attach() argument must be a command")
        if command.parent is not None:
            raise ValueError(f"command {command.name!r} is already attached to {command.parent.route!r}")
        if command.name in self:
            typeof = "subcommand" if self._owner is not None else "command"
            raise ValueError(f"{typeof} name {command.name!r} is already in use in {self.route!r}")
        command._parent = self
        self._commands.append(command)
        return command

    def command(self, source=Unset, /, **options):
        """
        create a Leaf under this group, directly or as a decorator.

        - direct: ``group.command(handler, name="list")``
        - decorator: ``@group.command`` or ``@group.command(name="list", formats=...)``
        """
        def wrapper(handler, /):
            if not callable(handler):
                raise TypeError("@command() must be applied to a callable")
            return self.attach(Leaf(handler, **options))

        return wrapper(source) if source is not Unset else wrapper

    def group(self, name, /, usage=(), info=Unset, **options):
        """create a Group named ``name`` owning a fresh nested group, and attach it here"""
        return self.attach(Group(name, CommandGroup(usage, info), **options))

    def __getitem__(self, name, /):
        for command in self._commands:
            if command.name == name:
                return command
        raise KeyError(name)

    def __contains__(self, name, /):
        return any(command.name == name for command in self._commands)

    def __iter__(self):
        return iter(tuple(self._commands))

    def __len__(self):
        return len(self._commands)

    def __repr__(self):
        return f"{type(self).__name__}({self.route!r}, commands={[command.name for command in self._commands]!r})"


class Command:
    """
    common identity of a routed entry. use Leaf or Group, never Command directly.

    read-only attributes
    - name: unique token inside the parent group.
    - descr: one-line description (table rows, short help).
    - usage: synopsis line, or None to let the renderer synthesize it.
    - details: extra lines shown by full help (option lists, notes).
    - formats: Formats mask of supported output modes.
    - hidden: excluded from help listings, still routable.
    - parent: the CommandGroup this command is attached to (None while detached).
    - next: the nested CommandGroup for groups, None for leaves.
    """

    def __init__(self, name, /, *, descr=Unset, usage=Unset, details=(), formats=Formats.TEXT, hidden=False):
        if type(self) is Command:
            raise TypeError("type 'Command' cannot be instantiated directly; use Leaf or Group")
        if not isinstance(descr, str | Unset):
            raise TypeError("command 'descr' must be a string")
        if not isinstance(usage, str | Unset):
            raise TypeError("command 'usage' must be a string")
        if not isinstance(formats, Formats):
            raise TypeError("command 'formats' must be a formats mask")
        if not isinstance(hidden, bool):
            raise TypeError("command 'hidden' must be a boolean")
        self._name = _validate_name(name)
        self._descr = coalesce(descr)
        self._usage = coalesce(usage)
        self._details = _lines(details, label="command 'details'")
        self._formats = formats
        self._hidden = hidden
        self._parent = None

    name = property(lambda self: self._name)
    descr = property(lambda self: self._descr)
    usage = property(lambda self: self._usage)
    details = property(lambda self: self._details)
    formats = property(lambda self: self._formats)
    hidden = property(lambda self: self._hidden)
    parent = property(lambda self: self._parent)

    @property
    def next(self):
        return None

    @property
    def path(self):
        """names from the root program name down to this command"""
        if self._parent is None:
            return (self._name,)
        return (*self._parent.path, self._name)

    @property
    def route(self):
        return " ".join(self.path)

    def __repr__(self):
        return f"{type(self).__name__}({self.route!r})"


class Leaf(Command):
    """
    executable command.

    the handler receives the arguments following the command token and the dispatch
    context, and returns an integer exit status (None counts as success).
    """

    def __init__(self, handler, /, name=Unset, **options):
        if not callable(handler):
            raise TypeError("leaf 'handler' must be callable")
        name = coalesce(name, getattr(handler, "__name__", Unset))
        if name is Unset:
            raise TypeError("leaf 'name' is required when the handler has no __name__")
        options.setdefault("descr", _firstline(inspect.getdoc(handler)) or Unset)
        super().__init__(name, **options)
        self._handler = handler

    @property
    def handler(self):
        return self._handler

    def __call__(self, args, context, /):
        status = self._handler(list(args), context)
        if status is None:
            return 0
        if not isinstance(status, int):
            raise TypeError(f"handler of {self.route!r} must return an integer status, not {type(status).__name__!r}")
        return status


class Group(Command):
    """
    internal node owning a nested CommandGroup.

    groups only route, so their formats mask always advertises every mode.
    """

    def __init__(self, name, next, /, **options):
        if not isinstance(next, CommandGroup):
            raise TypeError("group 'next' must be a command group")
        if next.owner is not None or next._name is not None:
            raise ValueError("group 'next' must be a fresh, unnamed command group")
        options.setdefault("descr", _firstline(next.info) or Unset)
        options["formats"] = ANY_FORMAT
        super().__init__(name, **options)
        self._next = next
        next._owner = self

    @property
    def next(self):
        return self._next


__all__ = (
    "CommandGroup",
    "Command",
    "Leaf",
    "Group",
)
