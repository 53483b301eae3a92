[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "netmgr"
version = "1.0.0"
description = "Cross-platform network management tool"
requires-python = ">=3.10"
dependencies = []
keywords = ["network", "firewall", "routing", "dns", "iptables", "tunnel", "bandwidth"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Operating System :: MacOS",
    "Operating System :: Microsoft :: Windows",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
    "Topic :: System :: Systems Administration",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
netmgr = "netmgr.app:main"

[tool.hatch.build.targets.wheel]
packages = ["netmgr"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
