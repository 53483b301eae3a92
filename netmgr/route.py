"""Routing table inspection and changes."""

from __future__ import annotations

from netmgr.cli import GlobalOptions, SubCommandType, UsageError
from netmgr.common import Platform, current_platform, execute_command, log_info

_SHOW_COMMANDS = {
    Platform.LINUX: ("ip", ["route", "show"]),
    Platform.MACOS: ("netstat", ["-nr", "-f", "inet"]),
    Platform.WINDOWS: ("route", ["print", "-4"]),
}


def handle_command(options: GlobalOptions, platform: Platform | None = None) -> int:
    """Run a route subcommand and return its exit status."""
    if platform is None:
        platform = current_platform()
    handlers = {
        SubCommandType.SHOW: show_routes,
        SubCommandType.ADD: add_route,
        SubCommandType.DELETE: delete_route,
    }
    handler = handlers.get(options.subcommand)
    if handler is None:
        raise UsageError("Unknown route subcommand")
    return handler(options, platform)


def show_routes(options: GlobalOptions, platform: Platform | None = None) -> int:
    """Print the routing table."""
    if platform is None:
        platform = current_platform()
    log_info("Routing table:")
    print()
    command = _SHOW_COMMANDS.get(platform)
    if command is None:
        return 0
    return execute_command(*command, dry_run=options.dry_run)


def _parse_route_options(words: list[str]) -> tuple[str, str]:
    gateway = device = ""
    tokens = iter(words)
    for word in tokens:
        if word in ("--via", "--dev"):
            value = next(tokens, None)
            if value is None:
                break
            if word == "--via":
                gateway = value
            else:
                device = value
    return gateway, device


def add_route(options: GlobalOptions, platform: Platform | None = None) -> int:
    """Add a route, optionally through a gateway or device."""
    if platform is None:
        platform = current_platform()
    if not options.args:
        raise UsageError(
            "Usage: netmgr route add <destination> [--via gateway] [--dev interface]"
        )
    destination, *rest = options.args
    gateway, device = _parse_route_options(rest)

    log_info(f"Adding route: {destination}")

    if platform is Platform.LINUX:
        args = ["route", "add", destination]
        if gateway:
            args += ["via", gateway]
        if device:
            args += ["dev", device]
        return execute_command("ip", args, dry_run=options.dry_run)
    if platform is Platform.MACOS:
        args = ["add", "-net", destination]
        if gateway:
            args.append(gateway)
        return execute_command("route", args, dry_run=options.dry_run)
    if platform is Platform.WINDOWS:
        args = ["add", destination]
        if gateway:
            args += ["mask", "255.255.255.0", gateway]
        return execute_command("route", args, dry_run=options.dry_run)
    return 0


def delete_route(options: GlobalOptions, platform: Platform | None = None) -> int:
    """Delete the route to a destination."""
    if platform is None:
        platform = current_platform()
    if not options.args:
        raise UsageError("Usage: netmgr route delete <destination>")
    destination = options.args[0]
    log_info(f"Deleting route: {destination}")
    command = {
        Platform.LINUX: ("ip", ["route", "del", destination]),
        Platform.MACOS: ("route", ["delete", destination]),
        Platform.WINDOWS: ("route", ["delete", destination]),
    }.get(platform)
    if command is None:
        return 0
    return execute_command(*command, dry_run=options.dry_run)