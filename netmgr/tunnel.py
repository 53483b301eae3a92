"""Tunnel interface creation and removal."""

from __future__ import annotations

from netmgr.cli import GlobalOptions, UsageError
from netmgr.common import Platform, current_platform, execute_command, log_info


def handle_command(options: GlobalOptions, platform: Platform | None = None) -> int:
    """Dispatch on the first argument: ``create`` or ``delete``."""
    if platform is None:
        platform = current_platform()
    action = options.args[0] if options.args else None
    if action == "create":
        return create_tunnel(options, platform)
    if action == "delete":
        return delete_tunnel(options, platform)
    raise UsageError("Usage: netmgr tunnel <create|delete> ...")


def create_tunnel(options: GlobalOptions, platform: Platform | None = None) -> int:
    """Create a tunnel: arguments are ``create <name> <type> <local_ip> <remote_ip>``."""
    if platform is None:
        platform = current_platform()
    if len(options.args) < 5:
        raise UsageError("Usage: netmgr tunnel create <name> <type> <local_ip> <remote_ip>")
    name, kind, local_ip, remote_ip = options.args[1:5]

    log_info(f"Creating {kind} tunnel: {name}")

    if platform is Platform.LINUX:
        result = execute_command(
            "ip",
            ["tunnel", "add", name, "mode", kind, "remote", remote_ip, "local", local_ip],
            dry_run=options.dry_run,
        )
        if result != 0:
            return result
        return execute_command("ip", ["link", "set", name, "up"], dry_run=options.dry_run)
    if platform is Platform.MACOS:
        raise UsageError("Tunnel creation not implemented for macOS")
    if platform is Platform.WINDOWS:
        if kind != "gre":
            raise UsageError(f"Tunnel type {kind} not supported on Windows")
        return execute_command(
            "netsh",
            [
                "interface", "ipv4", "add", "interface", name, "type=tunnel",
                f"source={local_ip}", f"destination={remote_ip}",
            ],
            dry_run=options.dry_run,
        )
    return 0


def delete_tunnel(options: GlobalOptions, platform: Platform | None = None) -> int:
    """Delete a tunnel: arguments are ``delete <name>``."""
    if platform is None:
        platform = current_platform()
    if len(options.args) < 2:
        raise UsageError("Usage: netmgr tunnel delete <name>")
    name = options.args[1]
    log_info(f"Deleting tunnel: {name}")

    if platform is Platform.LINUX:
        execute_command("ip", ["link", "set", name, "down"], dry_run=options.dry_run)
        return execute_command("ip", ["tunnel", "del", name], dry_run=options.dry_run)
    if platform is Platform.MACOS:
        raise UsageError("Tunnel deletion not implemented for macOS")
    if platform is Platform.WINDOWS:
        return execute_command(
            "netsh", ["interface", "ipv4", "delete", "interface", name], dry_run=options.dry_run
        )
    return 0