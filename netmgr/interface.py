"""Network interface inspection and configuration."""

from __future__ import annotations

from netmgr.cli import GlobalOptions, SubCommandType, UsageError
from netmgr.common import (
    CYAN,
    RESET,
    Platform,
    current_platform,
    execute_command,
    execute_command_output,
    log_info,
)

_COLUMNS = (
    ("INTERFACE", "---------", 15),
    ("STATE", "-----", 10),
    ("IP ADDRESS", "----------", 15),
    ("MAC ADDRESS", "-----------", 20),
    ("MTU", "---", 10),
)

_LIST_COMMANDS = {
    Platform.LINUX: ("ip", ["link", "show"]),
    Platform.MACOS: ("ifconfig", []),
    Platform.WINDOWS: ("netsh", ["interface", "show", "interface"]),
}


def handle_command(options: GlobalOptions, platform: Platform | None = None) -> int:
    """Run an interface subcommand and return its exit status."""
    if platform is None:
        platform = current_platform()
    if options.subcommand is SubCommandType.SHOW:
        if options.args:
            return show_interface(options.args[0], options, platform)
        return show_interfaces(options, platform)
    if options.subcommand is SubCommandType.SET:
        return set_interface(options, platform)
    raise UsageError("Unknown interface subcommand")


def show_interfaces(options: GlobalOptions, platform: Platform | None = None) -> int:
    """List all network interfaces."""
    if platform is None:
        platform = current_platform()
    log_info("All network interfaces:")
    print()
    print("".join(title.ljust(width) for title, _, width in _COLUMNS))
    print("".join(rule.ljust(width) for _, rule, width in _COLUMNS))
    listing = _LIST_COMMANDS.get(platform)
    if listing is not None:
        print(execute_command_output(*listing))
    return 0


def show_interface(name: str, options: GlobalOptions, platform: Platform | None = None) -> int:
    """Show details of a single interface."""
    if platform is None:
        platform = current_platform()
    log_info(f"Interface details for: {name}")
    print()
    print(f"{CYAN}=== Interface Information ==={RESET}")
    print(f"Name: {name}")
    details = {
        Platform.LINUX: ("ip", ["addr", "show", name]),
        Platform.MACOS: ("ifconfig", [name]),
        Platform.WINDOWS: ("netsh", ["interface", "ip", "show", "addresses", name]),
    }.get(platform)
    if details is not None:
        execute_command(*details, dry_run=options.dry_run)
    return 0


def _set_command(platform: Platform, interface: str, prop: str, values: list[str]):
    if prop == "up":
        return {
            Platform.LINUX: ("ip", ["link", "set", interface, "up"]),
            Platform.MACOS: ("ifconfig", [interface, "up"]),
            Platform.WINDOWS: ("netsh", ["interface", "set", "interface", interface, "enable"]),
        }.get(platform)
    if prop == "down":
        return {
            Platform.LINUX: ("ip", ["link", "set", interface, "down"]),
            Platform.MACOS: ("ifconfig", [interface, "down"]),
            Platform.WINDOWS: ("netsh", ["interface", "set", "interface", interface, "disable"]),
        }.get(platform)
    if prop == "ip" and values:
        ip = values[0]
        prefix = values[1] if len(values) > 1 else "24"
        return {
            Platform.LINUX: ("ip", ["addr", "add", f"{ip}/{prefix}", "dev", interface]),
            Platform.MACOS: ("ifconfig", [interface, "inet", f"{ip}/{prefix}"]),
            Platform.WINDOWS: (
                "netsh",
                ["interface", "ip", "set", "address", interface, "static", ip, prefix],
            ),
        }.get(platform)
    return None


def set_interface(options: GlobalOptions, platform: Platform | None = None) -> int:
    """Bring an interface up or down, or assign it an address."""
    if platform is None:
        platform = current_platform()
    if len(options.args) < 2:
        raise UsageError("Usage: netmgr interface set <interface> <property> [value...]")
    interface, prop, *values = options.args
    command = _set_command(platform, interface, prop, values)
    if command is None:
        raise UsageError(f"Unknown property or insufficient arguments: {prop}")
    return execute_command(*command, dry_run=options.dry_run)