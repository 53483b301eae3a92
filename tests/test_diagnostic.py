import socket
import subprocess

import pytest

from netmgr import diagnostic
from netmgr.cli import CommandType, GlobalOptions, UsageError
from netmgr.common import Platform


def _options(*args, dry_run=False):
    return GlobalOptions(command=CommandType.DIAGNOSTIC, args=list(args), dry_run=dry_run)


@pytest.fixture
def recorder(monkeypatch):
    """Record subprocess.run calls; return codes come from the ``codes`` dict."""
    calls = []
    codes = {}

    def fake_run(cmd, *args, **kwargs):
        calls.append((cmd, kwargs))
        key = cmd if isinstance(cmd, str) else cmd[0]
        return subprocess.CompletedProcess(cmd, codes.get(key, 0))

    monkeypatch.setattr(subprocess, "run", fake_run)
    return calls, codes


def test_handle_command_without_args_is_usage_error():
    with pytest.raises(UsageError) as info:
        diagnostic.handle_command(_options(), Platform.LINUX)
    assert "connectivity|ports|bandwidth" in info.value.message


def test_handle_command_unknown_action_is_usage_error():
    with pytest.raises(UsageError):
        diagnostic.handle_command(_options("speed"), Platform.LINUX)


def test_connectivity_defaults_dry_run_linux(capsys):
    result = diagnostic.handle_command(_options("connectivity", dry_run=True), Platform.LINUX)
    out = capsys.readouterr().out
    assert result == 0
    assert "Testing connectivity to 8.8.8.8" in out
    assert "=== Ping Test ===" in out
    assert "Would execute: ping -c 3 8.8.8.8" in out
    assert "Would execute: traceroute 8.8.8.8" in out
    assert "tracepath" not in out


def test_connectivity_windows_uses_count_flag_and_tracert(capsys):
    result = diagnostic.test_connectivity(
        _options("connectivity", "example.com", "5", dry_run=True), Platform.WINDOWS
    )
    out = capsys.readouterr().out
    assert result == 0
    assert "Would execute: ping -n 5 example.com" in out
    assert "Would execute: tracert example.com" in out


def test_connectivity_linux_falls_back_to_tracepath(recorder):
    calls, codes = recorder
    codes["traceroute"] = 1
    result = diagnostic.test_connectivity(_options("connectivity", "10.0.0.1"), Platform.LINUX)
    commands = [cmd for cmd, _ in calls]
    assert result == 0
    assert commands == [
        ["ping", "-c", "3", "10.0.0.1"],
        ["traceroute", "10.0.0.1"],
        ["tracepath", "10.0.0.1"],
    ]


def test_connectivity_macos_has_no_fallback(recorder):
    calls, codes = recorder
    codes["traceroute"] = 1
    result = diagnostic.test_connectivity(_options("connectivity", "10.0.0.1"), Platform.MACOS)
    assert result == 0
    commands = [cmd for cmd, _ in calls]
    assert commands[-1] == ["traceroute", "10.0.0.1"]
    assert ["tracepath", "10.0.0.1"] not in commands


def test_ports_requires_target():
    with pytest.raises(UsageError) as info:
        diagnostic.test_ports(_options("ports"), Platform.LINUX)
    assert "ports <target>" in info.value.message


def test_ports_reports_open_and_closed(capsys):
    with socket.socket() as listener:
        listener.bind(("127.0.0.1", 0))
        listener.listen()
        open_port = listener.getsockname()[1]
        with socket.socket() as spare:
            spare.bind(("127.0.0.1", 0))
            closed_port = spare.getsockname()[1]
        result = diagnostic.handle_command(
            _options("ports", "127.0.0.1", f"{open_port},{closed_port}"), Platform.LINUX
        )
    out = capsys.readouterr().out
    assert result == 0
    assert f"Port {open_port} is open" in out
    assert f"Port {closed_port} is closed" in out
    assert out.index(f"Port {open_port}") < out.index(f"Port {closed_port}")


def test_ports_invalid_port_is_closed(capsys):
    diagnostic.test_ports(_options("ports", "127.0.0.1", "http,70000"), Platform.LINUX)
    out = capsys.readouterr().out
    assert "Port http is closed" in out
    assert "Port 70000 is closed" in out


def test_ports_default_list_is_logged(monkeypatch, capsys):
    def refuse(*args, **kwargs):
        raise ConnectionRefusedError

    monkeypatch.setattr(socket, "create_connection", refuse)
    diagnostic.test_ports(_options("ports", "127.0.0.1"), Platform.LINUX)
    out = capsys.readouterr().out
    assert "Testing ports on 127.0.0.1: 22,80,443" in out
    for port in ("22", "80", "443"):
        assert f"Port {port} is closed" in out


def test_monitor_bandwidth_linux_defaults(recorder, capsys):
    calls, _ = recorder
    result = diagnostic.monitor_bandwidth(_options("bandwidth"), Platform.LINUX)
    out = capsys.readouterr().out
    assert result == 0
    assert "Monitoring bandwidth on eth0 for 10s" in out
    cmd, kwargs = calls[0]
    assert cmd == "sar -n DEV 10 1 | grep eth0"
    assert kwargs.get("shell") is True


def test_monitor_bandwidth_macos(recorder):
    calls, _ = recorder
    result = diagnostic.monitor_bandwidth(_options("bandwidth", "en0", "5"), Platform.MACOS)
    assert result == 0
    assert calls[0][0] == ["netstat", "-I", "en0", "-b", "-w", "5", "2"]


def test_monitor_bandwidth_returns_exit_status(recorder):
    calls, codes = recorder
    codes["netstat"] = 2
    assert diagnostic.monitor_bandwidth(_options("bandwidth", "en0"), Platform.MACOS) == 2


def test_monitor_bandwidth_windows_script_names_interface(recorder):
    calls, _ = recorder
    result = diagnostic.monitor_bandwidth(_options("bandwidth", "Ethernet", "4"), Platform.WINDOWS)
    assert result == 0
    cmd = calls[0][0]
    assert cmd[:2] == ["powershell", "-Command"]
    assert "$_.Name -eq 'Ethernet'" in cmd[2]
    assert "Start-Sleep -Seconds 4;" in cmd[2]


def test_monitor_bandwidth_unknown_platform_runs_nothing(recorder):
    calls, _ = recorder
    assert diagnostic.monitor_bandwidth(_options("bandwidth"), Platform.OTHER) == 0
    assert calls == []