"""Command-line network management over the platform's own tools: interfaces, routes, firewall, port forwards, DNS, bandwidth, tunnels and diagnostics."""

__version__ = "1.0.0"