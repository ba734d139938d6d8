"""
Help renderers (rich).

The dispatcher never formats help itself; it asks a Painter for renderables and
prints them. A Painter holds the runtime look (colorful, fancy) and the palette.

Palette keys
- usage-label, program-name, usage-section, description-section, detail, info-section
- children-title, children-table, children, children-description
- format-label, format-name, format-note
- panel-title

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- When colorful is False, styling is suppressed.
"""
from collections import defaultdict

from rich.box import ROUNDED
from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .formats import OutputMode
from .utils import Unset, coalesce


class Painter:
    """
    build help renderables for command groups and commands.

    parameters
    - colorful: bool | Unset, apply the palette (default False).
    - fancy: bool | Unset, wrap group help in a panel (default False).
    """

    def __init__(self, *, colorful=Unset, fancy=Unset):
        self.colorful = bool(coalesce(colorful, False))
        self.fancy = bool(coalesce(fancy, False))

    @property
    def styles(self):
        return defaultdict(str, {
            # === Head sections ===
            "usage-label": "bold #00E6FF",  # CYAN → signature info color
            "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
            "usage-section": "bold #36C5F0",  # SKY-BLUE → softer than cyan
            "description-section": "italic #A3A3A3",  # Neutral gray
            "detail": "#D1D5DB",
            "info-section": "#737373",  # Dim footer gray

            # === Children table ===
            "children-title": "bold #FFFFFF",
            "children-table": "#4B5563",  # Slate border
            "children": "bold #36C5F0",  # Sky-blue subcommands
            "children-description": "#9CA3AF",

            # === Formats ===
            "format-label": "bold #FFFFFF",
            "format-name": "bold #FFD600",  # AMBER like metavars
            "format-note": "italic #9CA3AF",

            # === Fancy panel ===
            "panel-title": "bold #FF4D94",
        } | getattr(__import__('__main__'), "__styles__", {}))

    def text(self, fragment, style=""):
        if not fragment:
            return Text("")
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), self.styles[style] if self.colorful else "")

    def _synopsis(self, command):
        if command.usage:
            return command.usage
        if command.next is not None:
            return "%s <command> [<args>]" % command.route
        return "%s [<args>]" % command.route

    def _usage(self, lines):
        usage = Text()
        for index, line in enumerate(lines):
            if index == 0:
                usage.append(self.text("usage", "usage-label")).append(": ")
            else:
                usage.append("\n").append(" " * len("usage: "))
            usage.append(self.text(line, "usage-section"))
        return usage

    def usage_command(self, command, /, *, full=False):
        """
        usage of a single command: synopsis, description and, when full, the detail lines.
        """
        renders = [self._usage([self._synopsis(command)])]
        if command.descr:
            renders.append(Text.assemble("\n", "    ", self.text(command.descr, "description-section")))
        if full and command.details:
            details = Text("\n")
            for line in command.details:
                details.append("\n")
                if line:
                    details.append("    ").append(self.text(line, "detail"))
            renders.append(details)
        return Group(*renders)

    def _table(self, group):
        title = "subcommands" if group.owner is not None else "commands"
        table = Table(
            "name", "help",
            title=self.text(title, "children-title"),
            box=ROUNDED,
            style=self.styles["children-table"] if self.colorful else "",
            header_style=self.styles["children-title"] if self.colorful else "",
        )
        for command in group:
            if command.hidden:
                continue
            name = command.name if command.next is None else "%s ..." % command.name
            if command.descr:
                help = self.text(command.descr, "children-description")
            else:
                help = self.text("run '%s --help' for details" % command.route, "children-description")
            table.add_row(self.text(name, "children"), help)
        return table

    def _expanded(self, group):
        renders = []
        for command in group:
            if command.hidden:
                continue
            if command.next is not None:
                renders.extend(self._expanded(command.next))
            else:
                renders.append(Text(""))
                renders.append(self.usage_command(command, full=True))
        return renders

    def usage_command_group(self, group, /, *, full=False, brief=False):
        """
        usage of a command group.

        - default: usage lines, the commands table and the group info.
        - full: every leaf below the group with its complete usage, recursively.
        - brief: usage lines only (shown before the format list on format errors).
        """
        renders = [self._usage(group.usage or ["%s <command> [<args>]" % group.route])]
        if not brief:
            if full:
                renders.extend(self._expanded(group))
            else:
                renders.append(Text(""))
                renders.append(self._table(group))
            if group.info:
                renders.append(Text(""))
                renders.append(self.text(group.info, "info-section"))

        renderable = Group(*renders)
        if self.fancy and not brief:
            renderable = Panel(
                renderable,
                title=Text.assemble("[", " ", f"{group.route} HELP".upper(), " ", "]",
                                    style=self.styles["panel-title"] if self.colorful else ""),
                title_align="left",
            )
        return renderable

    def usage_command_group_short(self, group, /):
        """
        compact overview: usage, then command groups and commands listed separately,
        then a pointer to the complete help.
        """
        renders = [self._usage(group.usage or ["%s <command> [<args>]" % group.route])]
        visible = [command for command in group if not command.hidden]
        for label, members in (
            ("Command groups", [command for command in visible if command.next is not None]),
            ("Commands", [command for command in visible if command.next is None]),
        ):
            if not members:
                continue
            section = Text("\n")
            section.append(self.text(label, "children-title")).append(":")
            width = max(len(command.name) for command in members)
            for command in members:
                section.append("\n  ").append(self.text(command.name.ljust(width), "children"))
                if command.descr:
                    section.append("  ").append(self.text(command.descr, "children-description"))
            renders.append(section)
        renders.append(Text.assemble(
            "\n",
            "For an overview of a given command use '%s command --help'\n" % group.route,
            "or '%s [command...] --help --full' to print all available options." % group.route,
        ))
        return Group(*renders)

    def output_formats(self):
        """list of the names accepted by --format"""
        formats = Text()
        formats.append(self.text("Options for --format are", "format-label")).append(":")
        for index, mode in enumerate(OutputMode):
            formats.append(", " if index else " ").append(self.text('"%s"' % mode.label, "format-name"))
        if len(OutputMode) > 1:
            formats.append("\n").append(self.text(
                "Extended output formats may not be available for all commands.", "format-note"
            ))
        return formats

    def help_command_group(self, group, args=(), /):
        """
        help for a group as requested on the command line; ``--full`` in args expands it.
        """
        return self.usage_command_group(group, full="--full" in args)


__all__ = (
    "Painter",
)
