"""Program entry point: parse the command line and run the chosen command."""

from __future__ import annotations

import sys

from netmgr import bandwidth, diagnostic, dns, firewall, forward, interface, route, tunnel
from netmgr.cli import CommandType, GlobalOptions, UsageError, parse, print_help
from netmgr.common import (
    Platform,
    check_dependencies,
    current_platform,
    init_logging,
    is_root,
)

_HANDLERS = {
    CommandType.INTERFACE: interface.handle_command,
    CommandType.ROUTE: route.handle_command,
    CommandType.FIREWALL: firewall.handle_command,
    CommandType.FORWARD: forward.handle_command,
    CommandType.DNS: dns.handle_command,
    CommandType.BANDWIDTH: bandwidth.handle_command,
    CommandType.TUNNEL: tunnel.handle_command,
    CommandType.DIAGNOSTIC: diagnostic.handle_command,
}


def dispatch(options: GlobalOptions, platform: Platform | None = None) -> int:
    """Run the command named in *options* and return its exit status."""
    if platform is None:
        platform = current_platform()
    handler = _HANDLERS.get(options.command)
    if handler is None:
        raise UsageError("Unknown command")
    return handler(options, platform)


def main(argv=None) -> int:
    """Run the tool and return the process exit status."""
    try:
        options = parse(argv)
    except UsageError as error:
        if error.show_help:
            print_help()
        else:
            print(error.message, file=sys.stderr)
        return 1

    try:
        init_logging(options.verbose)
        platform = current_platform()

        if platform is not Platform.WINDOWS and not options.dry_run and not is_root():
            print("This tool requires administrator privileges", file=sys.stderr)
            return 1

        if not check_dependencies(platform):
            print("Dependency check failed", file=sys.stderr)
            return 1

        return dispatch(options, platform)
    except UsageError as error:
        print(error.message, file=sys.stderr)
        return 1
    except Exception as error:  # noqa: BLE001 - report any failure as the exit status
        print(f"Error: {error}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())