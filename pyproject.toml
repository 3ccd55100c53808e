[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fortiprobe"
version = "0.1.0"
description = "Probes that turn FortiGate monitor API responses into Prometheus-style metric samples"
requires-python = ">=3.10"
dependencies = []
keywords = ["fortigate", "prometheus", "metrics", "monitoring", "firewall"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking :: Monitoring",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["fortiprobe"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
