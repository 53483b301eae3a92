"""Port forwarding management."""

from __future__ import annotations

from netmgr.cli import GlobalOptions, SubCommandType, UsageError
from netmgr.common import Platform, current_platform, execute_command, log_info

_SHOW_COMMANDS = {
    Platform.LINUX: ("iptables", ["-t", "nat", "-L", "PREROUTING", "-n", "--line-numbers"]),
    Platform.MACOS: ("pfctl", ["-s", "nat"]),
    Platform.WINDOWS: ("netsh", ["interface", "portproxy", "show", "all"]),
}


def handle_command(options: GlobalOptions, platform: Platform | None = None) -> int:
    """Run a forward subcommand and return its exit status."""
    if platform is None:
        platform = current_platform()
    handlers = {
        SubCommandType.SHOW: show_forwards,
        SubCommandType.ADD: add_forward,
        SubCommandType.REMOVE: remove_forward,
    }
    handler = handlers.get(options.subcommand)
    if handler is None:
        raise UsageError("Unknown forward subcommand")
    return handler(options, platform)


def show_forwards(options: GlobalOptions, platform: Platform | None = None) -> int:
    """Print the active port forwards."""
    if platform is None:
        platform = current_platform()
    log_info("Active port forwards:")
    print()
    command = _SHOW_COMMANDS.get(platform)
    if command is None:
        return 0
    return execute_command(*command, dry_run=options.dry_run)


def add_forward(options: GlobalOptions, platform: Platform | None = None) -> int:
    """Forward a local port to a destination address and port."""
    if platform is None:
        platform = current_platform()
    if len(options.args) < 4:
        raise UsageError(
            "Usage: netmgr forward add <name> <src_port> <dest_ip> <dest_port> [protocol]"
        )
    name, src_port, dest_ip, dest_port = options.args[:4]
    protocol = options.args[4] if len(options.args) > 4 else "tcp"

    log_info(f"Adding port forward: {name} ({src_port} -> {dest_ip}:{dest_port})")
    dry_run = options.dry_run

    if platform is Platform.LINUX:
        execute_command("sysctl", ["-w", "net.ipv4.ip_forward=1"], dry_run=dry_run)
        execute_command(
            "iptables",
            [
                "-t", "nat", "-A", "PREROUTING", "-p", protocol,
                "--dport", src_port, "-j", "DNAT",
                f"--to-destination={dest_ip}:{dest_port}",
            ],
            dry_run=dry_run,
        )
        return execute_command(
            "iptables",
            ["-A", "FORWARD", "-p", protocol, "-d", dest_ip, "--dport", dest_port, "-j", "ACCEPT"],
            dry_run=dry_run,
        )
    if platform is Platform.MACOS:
        rule = (
            f"rdr pass on lo0 proto {protocol} from any to any port {src_port}"
            f" -> {dest_ip} port {dest_port}"
        )
        return execute_command(
            "sh", ["-c", f"echo '{rule}' | pfctl -a com.netmgr/{name} -f -"], dry_run=dry_run
        )
    if platform is Platform.WINDOWS:
        return execute_command(
            "netsh",
            [
                "interface", "portproxy", "add", "v4tov4",
                f"listenport={src_port}", "listenaddress=0.0.0.0",
                f"connectport={dest_port}", f"connectaddress={dest_ip}",
            ],
            dry_run=dry_run,
        )
    return 0


def remove_forward(options: GlobalOptions, platform: Platform | None = None) -> int:
    """Remove a named port forward where the platform supports it."""
    if platform is None:
        platform = current_platform()
    if not options.args:
        raise UsageError("Usage: netmgr forward remove <name>")
    name = options.args[0]
    log_info(f"Removing port forward: {name}")

    if platform is Platform.LINUX:
        raise UsageError("Rule removal requires manual iptables management on Linux")
    if platform is Platform.MACOS:
        return execute_command(
            "pfctl", ["-a", f"com.netmgr/{name}", "-F", "all"], dry_run=options.dry_run
        )
    if platform is Platform.WINDOWS:
        raise UsageError("Forward removal requires specifying port details on Windows")
    return 0