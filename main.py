from rich.pretty import pprint

from cmdtree import *

root = CommandGroup(
    "btrfs [--help] [--version] [--format <format>] <group> [<group>...] <command> [<args>]",
    "Use --help as an argument for information on a specific group or command.",
    name="btrfs",
)


def echo(args, context):
    pprint({"args": args, "format": context.output_mode.label})


subvolume = root.group("subvolume", descr="manage subvolumes: create, delete, list, etc")
subvolume.next.command(echo, name="create", descr="Create a subvolume", usage="btrfs subvolume create <dest>")
subvolume.next.command(echo, name="delete", descr="Delete subvolume(s)", usage="btrfs subvolume delete <subvolume>")
subvolume.next.command(
    echo,
    name="list",
    descr="List subvolumes and snapshots in the filesystem",
    usage="btrfs subvolume list [options] <path>",
    details=("-p           print parent ID", "-a           print all the subvolumes"),
    formats=Formats.TEXT | Formats.JSON,
)

filesystem = root.group("filesystem", descr="overall filesystem tasks and information")
filesystem.next.command(echo, name="df", descr="Show space usage information", formats=Formats.TEXT | Formats.JSON)
filesystem.next.command(echo, name="show", descr="Show the structure of a filesystem")

internal = root.group("inspect-internal", descr="query various internal information")
tree = internal.next.group("tree", descr="walk on-disk trees")
tree.next.command(echo, name="stats", descr="Print statistics about trees")

root.command(echo, name="check", descr="Check structural integrity of a filesystem (unmounted)")
root.command(echo, name="qgroup", descr="manage quota groups")
root.command(echo, name="quota", descr="manage filesystem quota settings")


if __name__ == '__main__':
    Tool(root, version="v6.1", aliases={"btrfsck": "check"}).main()
