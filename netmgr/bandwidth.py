"""Traffic shaping and bandwidth limits."""

from __future__ import annotations

from netmgr.cli import GlobalOptions, SubCommandType, UsageError
from netmgr.common import Platform, current_platform, execute_command, log_info


def handle_command(options: GlobalOptions, platform: Platform | None = None) -> int:
    """Run a bandwidth subcommand and return its exit status."""
    if platform is None:
        platform = current_platform()
    if options.subcommand is SubCommandType.SHOW:
        return show_bandwidth(options, platform)
    if options.args and options.args[0] == "limit":
        return limit_bandwidth(options, platform)
    raise UsageError("Unknown bandwidth subcommand")


def show_bandwidth(options: GlobalOptions, platform: Platform | None = None) -> int:
    """Show traffic shaping configuration for one or all interfaces."""
    if platform is None:
        platform = current_platform()
    interface = options.args[0] if options.args else ""
    if interface:
        log_info(f"Bandwidth configuration for {interface}:")
    else:
        log_info("All interface bandwidth configurations:")
    print()

    if platform is Platform.LINUX:
        args = ["qdisc", "show"]
        if interface:
            args += ["dev", interface]
        return execute_command("tc", args, dry_run=options.dry_run)
    if platform is Platform.MACOS:
        return execute_command("ipfw", ["pipe", "show"], dry_run=options.dry_run)
    if platform is Platform.WINDOWS:
        return execute_command(
            "powershell", ["-Command", "Get-NetQosPolicy"], dry_run=options.dry_run
        )
    return 0


def limit_bandwidth(options: GlobalOptions, platform: Platform | None = None) -> int:
    """Limit the rate of an interface: arguments are ``limit <interface> <rate>``."""
    if platform is None:
        platform = current_platform()
    if len(options.args) < 3:
        raise UsageError("Usage: netmgr bandwidth limit <interface> <rate>")
    interface, rate = options.args[1], options.args[2]

    log_info(f"Setting bandwidth limit on {interface}: {rate}")

    if platform is Platform.LINUX:
        # Removing an existing qdisc is only reported, never run.
        execute_command("tc", ["qdisc", "del", "dev", interface, "root"], dry_run=True)
        return execute_command(
            "tc",
            [
                "qdisc", "add", "dev", interface, "root", "handle", "1:",
                "tbf", "rate", rate, "burst", "32kbit", "latency", "400ms",
            ],
            dry_run=options.dry_run,
        )
    if platform is Platform.MACOS:
        return execute_command(
            "ipfw", ["pipe", "1", "config", "bw", rate], dry_run=options.dry_run
        )
    if platform is Platform.WINDOWS:
        policy_name = f"NetMgr-{interface}"
        script = (
            f"New-NetQosPolicy -Name '{policy_name}' -NetworkProfile {interface}"
            f" -ThrottleRateActionBitsPerSecond {rate}"
        )
        return execute_command("powershell", ["-Command", script], dry_run=options.dry_run)
    return 0