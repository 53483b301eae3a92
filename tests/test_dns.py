import subprocess
from unittest.mock import patch

import pytest

from netmgr import dns
from netmgr.cli import CommandType, GlobalOptions, SubCommandType, UsageError
from netmgr.common import Platform


def make_options(sub, *args, dry_run=False):
    return GlobalOptions(command=CommandType.DNS, subcommand=sub, args=list(args), dry_run=dry_run)


def completed(code=0):
    return subprocess.CompletedProcess(args=[], returncode=code)


def test_show_dns_linux_prints_file(tmp_path, monkeypatch, capsys):
    conf = tmp_path / "resolv.conf"
    conf.write_text("nameserver 10.1.1.1\nsearch example.com\n")
    monkeypatch.setattr(dns, "RESOLV_CONF", str(conf))
    result = dns.show_dns(make_options(SubCommandType.SHOW), Platform.LINUX)
    out = capsys.readouterr().out
    assert result == 0
    assert "DNS configuration:" in out
    assert "nameserver 10.1.1.1\nsearch example.com\n" in out


def test_show_dns_linux_missing_file(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(dns, "RESOLV_CONF", str(tmp_path / "absent"))
    assert dns.show_dns(make_options(SubCommandType.SHOW), Platform.LINUX) == 0
    assert "nameserver" not in capsys.readouterr().out


def test_set_dns_linux_writes_file(tmp_path, monkeypatch):
    conf = tmp_path / "resolv.conf"
    monkeypatch.setattr(dns, "RESOLV_CONF", str(conf))
    result = dns.handle_command(make_options(SubCommandType.SET, "10.1.1.1", "10.2.2.2"), Platform.LINUX)
    assert result == 0
    assert conf.read_text().splitlines() == [
        "# Generated by netmgr",
        "nameserver 10.1.1.1",
        "nameserver 10.2.2.2",
    ]


def test_set_dns_linux_primary_only(tmp_path, monkeypatch):
    conf = tmp_path / "resolv.conf"
    monkeypatch.setattr(dns, "RESOLV_CONF", str(conf))
    result = dns.set_dns(make_options(SubCommandType.SET, "10.1.1.1"), Platform.LINUX)
    assert result == 0
    lines = conf.read_text().splitlines()
    assert [line for line in lines if line.startswith("nameserver")] == ["nameserver 10.1.1.1"]


def test_set_dns_linux_dry_run_writes_nothing(tmp_path, monkeypatch, capsys):
    conf = tmp_path / "resolv.conf"
    monkeypatch.setattr(dns, "RESOLV_CONF", str(conf))
    result = dns.set_dns(make_options(SubCommandType.SET, "10.1.1.1", dry_run=True), Platform.LINUX)
    assert result == 0
    assert not conf.exists()
    assert f"Would write to {conf}" in capsys.readouterr().out


def test_set_dns_linux_unwritable_returns_failure(tmp_path, monkeypatch):
    monkeypatch.setattr(dns, "RESOLV_CONF", str(tmp_path / "missing" / "resolv.conf"))
    assert dns.set_dns(make_options(SubCommandType.SET, "10.1.1.1"), Platform.LINUX) == 1


def test_set_dns_macos():
    with patch("subprocess.run", return_value=completed()) as run:
        result = dns.set_dns(make_options(SubCommandType.SET, "10.1.1.1", "10.2.2.2"), Platform.MACOS)
    assert result == 0
    assert run.call_args.args[0] == ["networksetup", "-setdnsservers", "Wi-Fi", "10.1.1.1", "10.2.2.2"]


def test_set_dns_windows_uses_primary():
    with patch("subprocess.run", return_value=completed()) as run:
        result = dns.set_dns(make_options(SubCommandType.SET, "10.1.1.1", "10.2.2.2"), Platform.WINDOWS)
    assert result == 0
    argv = run.call_args.args[0]
    assert argv[0] == "netsh"
    assert argv[-1] == "10.1.1.1"
    assert "10.2.2.2" not in argv


def test_show_dns_macos_dry_run(capsys):
    result = dns.show_dns(make_options(SubCommandType.SHOW, dry_run=True), Platform.MACOS)
    assert result == 0
    assert "Would execute: scutil --dns" in capsys.readouterr().out


def test_set_dns_needs_server():
    with pytest.raises(UsageError):
        dns.set_dns(make_options(SubCommandType.SET), Platform.LINUX)


def test_unknown_subcommand():
    with pytest.raises(UsageError, match="Unknown DNS subcommand"):
        dns.handle_command(make_options(SubCommandType.FLUSH), Platform.LINUX)