[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "packetlens"
version = "0.1.0"
description = "Protocol decoders that turn raw network frames into readable one-line summaries"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "packet",
    "decoder",
    "network",
    "ethernet",
    "arp",
    "icmp",
    "tcp",
    "dhcp",
    "checksum",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking :: Monitoring",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["packetlens"]

[tool.pytest.ini_options]
addopts = "-ra"
