"""Network diagnostics: connectivity, port reachability and traffic rates."""

from __future__ import annotations

import shlex
import socket

from netmgr.cli import GlobalOptions, UsageError
from netmgr.common import (
    CYAN,
    RESET,
    Platform,
    current_platform,
    execute_command,
    log_info,
    run_shell,
)

DEFAULT_TARGET = "8.8.8.8"
DEFAULT_PING_COUNT = "3"
DEFAULT_PORTS = "22,80,443"
DEFAULT_INTERFACE = "eth0"
DEFAULT_DURATION = "10"

# Seconds to wait for a TCP connection before calling a port closed.
PORT_TIMEOUT = 3.0


def handle_command(options: GlobalOptions, platform: Platform | None = None) -> int:
    """Dispatch on the first argument: ``connectivity``, ``ports`` or ``bandwidth``."""
    if platform is None:
        platform = current_platform()
    handlers = {
        "connectivity": test_connectivity,
        "ports": test_ports,
        "bandwidth": monitor_bandwidth,
    }
    handler = handlers.get(options.args[0]) if options.args else None
    if handler is None:
        raise UsageError("Usage: netmgr diagnostic <connectivity|ports|bandwidth> ...")
    return handler(options, platform)


def _arg(options: GlobalOptions, index: int, default: str) -> str:
    return options.args[index] if len(options.args) > index else default


def test_connectivity(options: GlobalOptions, platform: Platform | None = None) -> int:
    """Ping a target and trace the route to it: ``connectivity [target] [count]``."""
    if platform is None:
        platform = current_platform()
    target = _arg(options, 1, DEFAULT_TARGET)
    count = _arg(options, 2, DEFAULT_PING_COUNT)
    dry_run = options.dry_run

    log_info(f"Testing connectivity to {target}")
    print()
    print(f"{CYAN}=== Ping Test ==={RESET}", flush=True)

    count_flag = "-n" if platform is Platform.WINDOWS else "-c"
    execute_command("ping", [count_flag, count, target], dry_run=dry_run)

    print()
    print(f"{CYAN}=== Traceroute ==={RESET}", flush=True)

    if platform is Platform.WINDOWS:
        execute_command("tracert", [target], dry_run=dry_run)
    elif platform is Platform.MACOS:
        execute_command("traceroute", [target], dry_run=dry_run)
    elif execute_command("traceroute", [target], dry_run=dry_run) != 0:
        execute_command("tracepath", [target], dry_run=dry_run)
    return 0


def _port_is_open(target: str, port_text: str, timeout: float = PORT_TIMEOUT) -> bool:
    try:
        port = int(port_text)
    except ValueError:
        return False
    if not 0 < port < 65536:
        return False
    try:
        with socket.create_connection((target, port), timeout=timeout):
            return True
    except OSError:
        return False


def test_ports(options: GlobalOptions, platform: Platform | None = None) -> int:
    """Report which TCP ports accept connections: ``ports <target> [p1,p2,...]``."""
    if platform is None:
        platform = current_platform()
    if len(options.args) < 2:
        raise UsageError("Usage: netmgr diagnostic ports <target> [ports]")
    target = options.args[1]
    ports = _arg(options, 2, DEFAULT_PORTS)

    log_info(f"Testing ports on {target}: {ports}")
    print()

    for port in (part.strip() for part in ports.split(",")):
        if not port:
            continue
        state = "open" if _port_is_open(target, port) else "closed"
        print(f"Port {port} is {state}", flush=True)
    return 0


def monitor_bandwidth(options: GlobalOptions, platform: Platform | None = None) -> int:
    """Sample traffic on an interface: ``bandwidth [interface] [seconds]``."""
    if platform is None:
        platform = current_platform()
    interface = _arg(options, 1, DEFAULT_INTERFACE)
    duration = _arg(options, 2, DEFAULT_DURATION)

    log_info(f"Monitoring bandwidth on {interface} for {duration}s")
    print()

    if platform is Platform.LINUX:
        return run_shell(
            f"sar -n DEV {shlex.quote(duration)} 1 | grep {shlex.quote(interface)}"
        )
    if platform is Platform.MACOS:
        return execute_command("netstat", ["-I", interface, "-b", "-w", duration, "2"])
    if platform is Platform.WINDOWS:
        script = (
            f"$adapter = Get-NetAdapter | Where-Object {{$_.Name -eq '{interface}'}}"
            " | Select-Object -First 1; "
            "$startStats = $adapter | Get-NetAdapterStatistics; "
            f"Start-Sleep -Seconds {duration}; "
            "$endStats = $adapter | Get-NetAdapterStatistics; "
            "Write-Host ('RX: ' + [math]::Round(($endStats.ReceivedBytes - "
            f"$startStats.ReceivedBytes) / {duration} / 1KB, 2) + ' KB/s'); "
            "Write-Host ('TX: ' + [math]::Round(($endStats.SentBytes - "
            f"$startStats.SentBytes) / {duration} / 1KB, 2) + ' KB/s')"
        )
        return execute_command("powershell", ["-Command", script])
    return 0