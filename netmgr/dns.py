"""DNS resolver configuration."""

from __future__ import annotations

from pathlib import Path

from netmgr.cli import GlobalOptions, SubCommandType, UsageError
from netmgr.common import Platform, current_platform, execute_command, log_info

RESOLV_CONF = "/etc/resolv.conf"


def handle_command(options: GlobalOptions, platform: Platform | None = None) -> int:
    """Run a DNS subcommand and return its exit status."""
    if platform is None:
        platform = current_platform()
    handlers = {
        SubCommandType.SHOW: show_dns,
        SubCommandType.SET: set_dns,
    }
    handler = handlers.get(options.subcommand)
    if handler is None:
        raise UsageError("Unknown DNS subcommand")
    return handler(options, platform)


def show_dns(options: GlobalOptions, platform: Platform | None = None) -> int:
    """Print the current DNS configuration."""
    if platform is None:
        platform = current_platform()
    log_info("DNS configuration:")
    print()

    if platform is Platform.LINUX:
        try:
            with open(RESOLV_CONF, encoding="utf-8", errors="replace") as resolv:
                for line in resolv:
                    print(line.removesuffix("\n"))
        except OSError:
            pass
        return 0
    if platform is Platform.MACOS:
        return execute_command("scutil", ["--dns"], dry_run=options.dry_run)
    if platform is Platform.WINDOWS:
        return execute_command("nslookup", [], dry_run=options.dry_run)
    return 0


def set_dns(options: GlobalOptions, platform: Platform | None = None) -> int:
    """Set the primary and optional secondary DNS server."""
    if platform is None:
        platform = current_platform()
    if not options.args:
        raise UsageError("Usage: netmgr dns set <primary_dns> [secondary_dns]")
    primary = options.args[0]
    secondary = options.args[1] if len(options.args) > 1 else ""
    servers = [primary, secondary] if secondary else [primary]

    log_info(f"Setting DNS servers: {' '.join(servers)}")

    if platform is Platform.LINUX:
        if options.dry_run:
            log_info(f"Would write to {RESOLV_CONF}")
            return 0
        content = "# Generated by netmgr\n" + "".join(
            f"nameserver {server}\n" for server in servers
        )
        try:
            Path(RESOLV_CONF).write_text(content, encoding="utf-8")
        except OSError:
            return 1
        return 0
    if platform is Platform.MACOS:
        return execute_command(
            "networksetup", ["-setdnsservers", "Wi-Fi", *servers], dry_run=options.dry_run
        )
    if platform is Platform.WINDOWS:
        return execute_command(
            "netsh",
            ["interface", "ip", "set", "dns", "name=Local Area Connection", "static", primary],
            dry_run=options.dry_run,
        )
    return 0