"""Shared helpers: platform detection, logging and running external tools."""

from __future__ import annotations

import os
import shutil
import subprocess
import sys
from dataclasses import dataclass
from enum import Enum

RESET = "\033[0m"
RED = "\033[31m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
BLUE = "\033[34m"
MAGENTA = "\033[35m"
CYAN = "\033[36m"
WHITE = "\033[37m"

# Exit status a POSIX shell reports for a command it cannot find.
COMMAND_NOT_FOUND = 127


class Platform(Enum):
    """Operating system family the network tools are chosen for."""

    LINUX = "linux"
    MACOS = "macos"
    WINDOWS = "windows"
    OTHER = "other"


_REQUIRED_TOOLS = {
    Platform.LINUX: ("ip", "iptables", "sysctl"),
    Platform.MACOS: ("ifconfig", "route", "pfctl"),
    Platform.WINDOWS: ("netsh", "route"),
}


@dataclass
class _LogSettings:
    verbose: bool = False


_settings = _LogSettings()


def current_platform() -> Platform:
    """Return the platform this process runs on."""
    if sys.platform.startswith("linux"):
        return Platform.LINUX
    if sys.platform == "darwin":
        return Platform.MACOS
    if sys.platform in ("win32", "cygwin"):
        return Platform.WINDOWS
    return Platform.OTHER


def init_logging(verbose: bool) -> None:
    """Enable or disable debug messages."""
    _settings.verbose = bool(verbose)


def is_root() -> bool:
    """Return True when running with administrator privileges."""
    if hasattr(os, "geteuid"):
        return os.geteuid() == 0
    try:
        probe = subprocess.run(["net", "session"], capture_output=True, check=False)
    except OSError:
        return False
    return probe.returncode == 0


def check_dependencies(platform: Platform | None = None) -> bool:
    """Check that the external tools needed on *platform* are installed."""
    if platform is None:
        platform = current_platform()
    for tool in _REQUIRED_TOOLS.get(platform, ()):
        if shutil.which(tool) is None:
            log_error(f"Required tool not found: {tool}")
            return False
    return True


def _describe(command: str, args) -> str:
    return " ".join([command, *args])


def execute_command(command: str, args=(), dry_run: bool = False) -> int:
    """Run *command* with *args* and return its exit status.

    In dry-run mode the command is only reported and 0 is returned.
    """
    args = list(args)
    full_cmd = _describe(command, args)
    if dry_run:
        log_info(f"Would execute: {full_cmd}")
        return 0
    log_debug(f"Executing: {full_cmd}")
    sys.stdout.flush()
    try:
        return subprocess.run([command, *args], check=False).returncode
    except FileNotFoundError:
        log_error(f"Command not found: {command}")
        return COMMAND_NOT_FOUND


def execute_command_output(command: str, args=()) -> str:
    """Run *command* and return what it wrote to standard output, or ''."""
    try:
        completed = subprocess.run(
            [command, *args], capture_output=True, text=True, check=False
        )
    except OSError:
        return ""
    return completed.stdout


def run_shell(command: str) -> int:
    """Run a shell pipeline and return its exit status."""
    log_debug(f"Executing: {command}")
    sys.stdout.flush()
    return subprocess.run(command, shell=True, check=False).returncode


def log_info(message: str) -> None:
    """Print an informational message."""
    print(f"{GREEN}[INFO] {RESET}{message}", flush=True)


def log_error(message: str) -> None:
    """Print an error message to standard error."""
    print(f"{RED}[ERROR] {RESET}{message}", file=sys.stderr, flush=True)


def log_debug(message: str) -> None:
    """Print a debug message when verbose logging is on."""
    if _settings.verbose:
        print(f"{CYAN}[DEBUG] {RESET}{message}", flush=True)