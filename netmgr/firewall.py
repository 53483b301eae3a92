"""Firewall rule inspection and management."""

from __future__ import annotations

from netmgr.cli import GlobalOptions, SubCommandType, UsageError
from netmgr.common import Platform, current_platform, execute_command, log_info

_SHOW_COMMANDS = {
    Platform.LINUX: ("iptables", ["-L", "-n", "-v", "--line-numbers"]),
    Platform.MACOS: ("pfctl", ["-s", "rules"]),
    Platform.WINDOWS: ("netsh", ["advfirewall", "firewall", "show", "rule", "name=all"]),
}

_FLUSH_COMMANDS = {
    Platform.LINUX: ("iptables", ["-F"]),
    Platform.MACOS: ("pfctl", ["-F", "rules"]),
    Platform.WINDOWS: ("netsh", ["advfirewall", "reset"]),
}


def handle_command(options: GlobalOptions, platform: Platform | None = None) -> int:
    """Run a firewall subcommand and return its exit status."""
    if platform is None:
        platform = current_platform()
    handlers = {
        SubCommandType.SHOW: show_rules,
        SubCommandType.ADD: add_rule,
        SubCommandType.FLUSH: flush_rules,
    }
    handler = handlers.get(options.subcommand)
    if handler is None:
        raise UsageError("Unknown firewall subcommand")
    return handler(options, platform)


def show_rules(options: GlobalOptions, platform: Platform | None = None) -> int:
    """Print the active firewall rules."""
    if platform is None:
        platform = current_platform()
    log_info("Firewall rules:")
    print()
    command = _SHOW_COMMANDS.get(platform)
    if command is None:
        return 0
    return execute_command(*command, dry_run=options.dry_run)


def _add_command(platform: Platform, action: str, port: str, protocol: str):
    allow = action == "allow"
    if platform is Platform.LINUX:
        target = "ACCEPT" if allow else "DROP"
        return (
            "iptables",
            ["-A", "INPUT", "-p", protocol, "--dport", port, "-j", target],
        )
    if platform is Platform.MACOS:
        rule_action = "pass" if allow else "block"
        rule = f"{rule_action} in proto {protocol} from any to any port {port}"
        return ("sh", ["-c", f"echo '{rule}' | pfctl -a com.netmgr/rules -f -"])
    if platform is Platform.WINDOWS:
        win_action = "allow" if allow else "block"
        rule_name = f"NetMgr-{action}-{protocol}-{port}"
        return (
            "netsh",
            [
                "advfirewall",
                "firewall",
                "add",
                "rule",
                f"name={rule_name}",
                f"protocol={protocol}",
                f"localport={port}",
                "dir=in",
                f"action={win_action}",
            ],
        )
    return None


def add_rule(options: GlobalOptions, platform: Platform | None = None) -> int:
    """Add an inbound rule allowing or blocking a port."""
    if platform is None:
        platform = current_platform()
    if len(options.args) < 3:
        raise UsageError("Usage: netmgr firewall add <action> <port> <protocol>")
    action, port, protocol = options.args[:3]
    log_info(f"Adding firewall rule: {action} {port}/{protocol}")
    command = _add_command(platform, action, port, protocol)
    if command is None:
        return 0
    return execute_command(*command, dry_run=options.dry_run)


def flush_rules(options: GlobalOptions, platform: Platform | None = None) -> int:
    """Remove all firewall rules."""
    if platform is None:
        platform = current_platform()
    log_info("Flushing firewall rules")
    command = _FLUSH_COMMANDS.get(platform)
    if command is None:
        return 0
    return execute_command(*command, dry_run=options.dry_run)