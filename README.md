# netmgr

A command-line tool for everyday network administration on Linux, macOS and
Windows. It puts one consistent interface in front of the platform's own
tools (`ip`, `iptables`, `tc`, `sysctl`, `traceroute`/`tracepath`, `sar` on
Linux; `ifconfig`, `route`, `netstat`, `pfctl`, `scutil`, `networksetup`,
`ipfw` on macOS; `netsh`, `route`, `nslookup`, PowerShell on Windows).

## Installation

```
pip install .
```

This installs the `netmgr` command. The same entry point can be run as
`python -m netmgr.app`.

## Usage

```
netmgr [OPTIONS] <COMMAND> [SUBCOMMAND] [ARGS...]
```

Options (they must come before the command):

| Option            | Meaning                                              |
|-------------------|------------------------------------------------------|
| `-v`, `--verbose` | Print `[DEBUG] Executing: ...` before each command   |
| `-n`, `--dry-run` | Print `Would execute: ...` instead of running         |
| `-f`, `--force`   | Accepted; no command currently asks for confirmation |
| `-h`, `--help`    | Print help information                               |
| `--version`       | Print version information                            |

Before any command runs:

- on Linux and macOS, netmgr must run as root unless `--dry-run` is given;
- the platform's required tools must be on `PATH` (`ip`, `iptables`,
  `sysctl` on Linux; `ifconfig`, `route`, `pfctl` on macOS; `netsh`, `route`
  on Windows). This check is made in dry-run mode too.

Subcommand words are `show`, `set`, `add`, `remove`, `delete`, `flush`,
`save` and `restore`. When the word after the command is not one of them,
the subcommand is `show` and that word becomes its first argument. When
nothing follows the command, the subcommand is `show`.

Commands (short aliases in brackets):

- `interface` (`int`)
  - `show`: print a column header and the platform's interface listing
  - `show <name>`: show one interface
  - `set <interface> up|down`
  - `set <interface> ip <address> [prefix]` (prefix defaults to 24)
- `route` (`rt`): `show`, `add <destination> [--via gateway] [--dev interface]`,
  `delete <destination>`
- `firewall` (`fw`): `show`, `add <action> <port> <protocol>`, `flush`.
  An action of `allow` accepts the traffic; any other action drops it.
- `forward` (`fwd`): `show`, `add <name> <src_port> <dest_ip> <dest_port> [protocol]`
  (protocol defaults to `tcp`; on Linux this also turns on IP forwarding),
  `remove <name>` (macOS only)
- `dns`: `show`, `set <primary> [secondary]`. On Linux `set` rewrites
  `/etc/resolv.conf`; on macOS it sets the servers of the `Wi-Fi` service.
- `bandwidth` (`bw`): `show [interface]`, and `limit <interface> <rate>`
  given after any subcommand word other than `show`, e.g. `bw set limit ...`.
  On Linux an existing root qdisc is not removed first: that step is only
  reported.
- `tunnel` (`tun`): `create <name> <type> <local_ip> <remote_ip>` and
  `delete <name>`. Since `delete` is itself a subcommand word, put a
  subcommand word before it: `netmgr tun show delete gre1`.
- `diagnostic` (`diag`)
  - `connectivity [target] [count]`: ping (default `8.8.8.8`, 3 times), then
    trace the route; on Linux `tracepath` is tried when `traceroute` fails
  - `ports <target> [ports]`: try a TCP connection (3 s timeout) to each
    comma-separated port (default `22,80,443`) and print whether it is open
  - `bandwidth [interface] [seconds]`: sample traffic (default `eth0`, 10 s)

Errors in the command line or in a command's arguments are printed to
standard error and give exit status 1. Otherwise the exit status is that of
the last platform tool run.

## Examples

```
netmgr int
netmgr -n interface set eth0 ip 192.0.2.10 24
netmgr route add 10.0.0.0/8 --via 192.0.2.1 --dev eth0
netmgr -n fw add allow 22 tcp
netmgr fwd add web 8080 192.0.2.20 80
netmgr dns set 192.0.2.53 192.0.2.54
netmgr bw set limit eth0 1mbit
netmgr tun create gre1 gre 192.0.2.1 198.51.100.1
netmgr diag connectivity 192.0.2.1 5
netmgr diag ports 192.0.2.1 22,443
```

With `--dry-run` every command is printed as `Would execute: ...` instead of
being run, which is a safe way to see what netmgr is about to do.

## Library use

Every command area is a module (`netmgr.interface`, `netmgr.route`,
`netmgr.firewall`, `netmgr.forward`, `netmgr.dns`, `netmgr.bandwidth`,
`netmgr.tunnel`, `netmgr.diagnostic`) with a `handle_command(options, platform)`
function. `netmgr.cli.parse(argv)` builds the `GlobalOptions`,
`netmgr.app.dispatch(options, platform)` picks the handler, and
`netmgr.common.Platform` selects which platform's tools are used. Invalid
arguments raise `netmgr.cli.UsageError`.

## Limitations

- The interface listing is printed as the platform tool gives it; it is not
  parsed into the columns of the header.
- `save` and `restore` are recognised but no command acts on them.
- Removing a port forward is not supported on Linux or Windows, and tunnels
  cannot be created or deleted on macOS.
- Rules and forwards are not tracked by netmgr; it keeps no state of its own.
- On platforms other than Linux, macOS and Windows, commands do nothing.

## Testing

```
pip install .[test]
pytest
```