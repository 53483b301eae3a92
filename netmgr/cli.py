"""Command-line parsing for the network management tool."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from enum import Enum

VERSION = "1.0.0"


class CommandType(Enum):
    """Top-level command areas."""

    INTERFACE = "interface"
    ROUTE = "route"
    FIREWALL = "firewall"
    FORWARD = "forward"
    DNS = "dns"
    BANDWIDTH = "bandwidth"
    TUNNEL = "tunnel"
    DIAGNOSTIC = "diagnostic"


class SubCommandType(Enum):
    """Actions within a command area."""

    SHOW = "show"
    SET = "set"
    ADD = "add"
    REMOVE = "remove"
    DELETE = "delete"
    FLUSH = "flush"
    SAVE = "save"
    RESTORE = "restore"


class UsageError(Exception):
    """The command line or a command's arguments were not usable."""

    def __init__(self, message: str, *, show_help: bool = False) -> None:
        super().__init__(message)
        self.message = message
        self.show_help = show_help


@dataclass
class GlobalOptions:
    """Parsed command line."""

    command: CommandType
    subcommand: SubCommandType = SubCommandType.SHOW
    args: list[str] = field(default_factory=list)
    verbose: bool = False
    dry_run: bool = False
    force: bool = False


_COMMANDS = {
    "interface": CommandType.INTERFACE,
    "int": CommandType.INTERFACE,
    "route": CommandType.ROUTE,
    "rt": CommandType.ROUTE,
    "firewall": CommandType.FIREWALL,
    "fw": CommandType.FIREWALL,
    "forward": CommandType.FORWARD,
    "fwd": CommandType.FORWARD,
    "dns": CommandType.DNS,
    "bandwidth": CommandType.BANDWIDTH,
    "bw": CommandType.BANDWIDTH,
    "tunnel": CommandType.TUNNEL,
    "tun": CommandType.TUNNEL,
    "diagnostic": CommandType.DIAGNOSTIC,
    "diag": CommandType.DIAGNOSTIC,
}

_FLAGS = {
    "-v": "verbose",
    "--verbose": "verbose",
    "-n": "dry_run",
    "--dry-run": "dry_run",
    "-f": "force",
    "--force": "force",
}

_HELP = """\
netmgr - Cross-platform network management tool

USAGE:
    netmgr [OPTIONS] <COMMAND> [SUBCOMMAND] [ARGS...]

OPTIONS:
    -v, --verbose    Enable verbose output
    -n, --dry-run    Show what would be done without executing
    -f, --force      Force operations without confirmation
    -h, --help       Print help information
        --version    Print version information

COMMANDS:
    interface, int   Network interface management
    route, rt        Routing table management
    firewall, fw     Firewall rules management
    forward, fwd     Port forwarding management
    dns              DNS configuration
    bandwidth, bw    Traffic shaping and QoS
    tunnel, tun      Tunnel interfaces
    diagnostic, diag Network diagnostics
"""


def help_text() -> str:
    """Return the usage text."""
    return _HELP


def version_text() -> str:
    """Return the version line."""
    return f"netmgr {VERSION}"


def print_help() -> None:
    """Print the usage text to standard output."""
    sys.stdout.write(help_text())


def print_version() -> None:
    """Print the version line to standard output."""
    sys.stdout.write(version_text() + "\n")
    sys.stdout.flush()


def parse(argv=None) -> GlobalOptions:
    """Parse command-line arguments (without the program name).

    ``--help`` and ``--version`` print their text and raise SystemExit(0).
    A missing or unknown command raises UsageError.
    """
    if argv is None:
        argv = sys.argv[1:]
    words = list(argv)

    flags = {"verbose": False, "dry_run": False, "force": False}
    while words and words[0] in (*_FLAGS, "-h", "--help", "--version"):
        word = words.pop(0)
        if word in ("-h", "--help"):
            print_help()
            raise SystemExit(0)
        if word == "--version":
            print_version()
            raise SystemExit(0)
        flags[_FLAGS[word]] = True

    if not words:
        raise UsageError("missing command", show_help=True)

    name, *rest = words
    try:
        command = _COMMANDS[name]
    except KeyError:
        raise UsageError(f"Unknown command: {name}") from None

    subcommand = SubCommandType.SHOW
    args: list[str] = []
    if rest:
        first, *remaining = rest
        try:
            subcommand = SubCommandType(first)
        except ValueError:
            args.append(first)
        args.extend(remaining)

    return GlobalOptions(command=command, subcommand=subcommand, args=args, **flags)