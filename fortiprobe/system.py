"""Probes for system status, time, sensors, web UI state and resource usage."""

from __future__ import annotations

from .metric import Metric, MetricDesc, ProbeError, fetch

VERSION_INFO = MetricDesc(
    "fortigate_version_info",
    "System version and build information",
    ("serial", "version", "build"),
)

TIME_SECONDS = MetricDesc("fortigate_time_seconds", "System epoch time in seconds")

SENSOR_TEMPERATURE = MetricDesc(
    "fortigate_sensor_temperature_celsius",
    "Sensor temperature in degree celsius",
    ("name",),
)
SENSOR_FAN = MetricDesc(
    "fortigate_sensor_fan_rpm", "Sensor fan rotation speed in RPM", ("name",)
)
SENSOR_VOLTAGE = MetricDesc(
    "fortigate_sensor_voltage_volts", "Sensor voltage in volts", ("name",)
)
_SENSORS = {
    "temperature": SENSOR_TEMPERATURE,
    "fan": SENSOR_FAN,
    "voltage": SENSOR_VOLTAGE,
}

LAST_REBOOT = MetricDesc(
    "fortigate_last_reboot_seconds", "Last system reboot epoch time in seconds"
)
LAST_SNAPSHOT = MetricDesc(
    "fortigate_last_snapshot_seconds", "Last snapshot epoch time in seconds"
)

CPU_USAGE = MetricDesc(
    "fortigate_cpu_usage_ratio",
    "Current resource usage ratio of system CPU, per core",
    ("processor",),
)
MEMORY_USAGE = MetricDesc(
    "fortigate_memory_usage_ratio", "Current resource usage ratio of system memory"
)
CURRENT_SESSIONS = MetricDesc(
    "fortigate_current_sessions",
    "Current amount of sessions, per IP version",
    ("protocol",),
)

VDOM_CPU_USAGE = MetricDesc(
    "fortigate_vdom_cpu_usage_ratio",
    "Current resource usage ratio of CPU, per VDOM",
    ("vdom",),
)
VDOM_MEMORY_USAGE = MetricDesc(
    "fortigate_vdom_memory_usage_ratio",
    "Current resource usage ratio of memory, per VDOM",
    ("vdom",),
)
VDOM_CURRENT_SESSIONS = MetricDesc(
    "fortigate_vdom_current_sessions",
    "Current amount of sessions, per VDOM and IP version",
    ("vdom", "protocol"),
)


def _num(obj, key) -> float:
    value = (obj or {}).get(key)
    return float(value) if value not in (None, "") else 0.0


def _current(results, key, index=0) -> float:
    entries = (results or {}).get(key) or []
    try:
        return _num(entries[index], "current")
    except IndexError:
        raise ProbeError(f"resource usage response lacks '{key}' data") from None


def probe_system_status(client, meta) -> list[Metric]:
    """Report serial number, firmware version and build."""
    status = fetch(client, "api/v2/monitor/system/status", "") or {}
    build = int(status.get("build") or 0)
    return [
        VERSION_INFO.gauge(
            1.0, status.get("serial", ""), status.get("version", ""), str(build)
        )
    ]


def probe_system_time(client, meta) -> list[Metric]:
    """Report the device clock as epoch seconds."""
    data = fetch(client, "api/v2/monitor/system/time", "vdom=root") or {}
    return [TIME_SECONDS.gauge(_num(data.get("results"), "time"))]


def probe_system_sensor_info(client, meta) -> list[Metric]:
    """Report temperature, fan and voltage sensors; other sensor kinds are skipped."""
    data = fetch(client, "api/v2/monitor/system/sensor-info", "vdom=root") or {}
    metrics = []
    for sensor in data.get("results") or []:
        desc = _SENSORS.get(sensor.get("type"))
        if desc is not None:
            metrics.append(desc.gauge(_num(sensor, "value"), sensor.get("name", "")))
    return metrics


def probe_web_ui_state(client, meta) -> list[Metric]:
    """Report last reboot and last snapshot times in epoch seconds."""
    data = fetch(client, "api/v2/monitor/web-ui/state", "") or {}
    results = data.get("results")
    return [
        LAST_REBOOT.gauge(_num(results, "utc_last_reboot") / 1000),
        LAST_SNAPSHOT.gauge(_num(results, "snapshot_utc_time") / 1000),
    ]


def probe_system_resource_usage(client, meta) -> list[Metric]:
    """Report global per-core CPU, memory and session usage."""
    data = fetch(
        client, "api/v2/monitor/system/resource/usage", "interval=1-min&scope=global"
    ) or {}
    results = data.get("results") or {}
    cpus = results.get("cpu") or []
    if not cpus:
        raise ProbeError("resource usage response lacks 'cpu' data")
    # The first CPU entry is the average over all cores.
    metrics = [
        CPU_USAGE.gauge(_num(cpu, "current") / 100.0, str(index))
        for index, cpu in enumerate(cpus[1:])
    ]
    metrics.append(MEMORY_USAGE.gauge(_current(results, "mem") / 100.0))
    metrics.append(CURRENT_SESSIONS.gauge(_current(results, "session"), "ipv4"))
    metrics.append(CURRENT_SESSIONS.gauge(_current(results, "session6"), "ipv6"))
    return metrics


def probe_system_vdom_resources(client, meta) -> list[Metric]:
    """Report CPU, memory and session usage for every VDOM."""
    data = fetch(
        client, "api/v2/monitor/system/resource/usage", "interval=1-min&vdom=*"
    ) or []
    metrics = []
    for entry in data:
        vdom = entry.get("vdom", "")
        results = entry.get("results") or {}
        metrics.append(VDOM_CPU_USAGE.gauge(_current(results, "cpu") / 100.0, vdom))
        metrics.append(VDOM_MEMORY_USAGE.gauge(_current(results, "mem") / 100.0, vdom))
        metrics.append(
            VDOM_CURRENT_SESSIONS.gauge(_current(results, "session"), vdom, "ipv4")
        )
        metrics.append(
            VDOM_CURRENT_SESSIONS.gauge(_current(results, "session6"), vdom, "ipv6")
        )
    return metrics