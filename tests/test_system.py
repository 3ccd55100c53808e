import copy

import pytest

from fortiprobe.metric import MetricType, ProbeError
from fortiprobe.system import (
    probe_system_resource_usage,
    probe_system_sensor_info,
    probe_system_status,
    probe_system_time,
    probe_system_vdom_resources,
    probe_web_ui_state,
)


class FakeClient:
    def __init__(self, responses):
        self.responses = responses
        self.calls = []

    def get(self, path, query):
        self.calls.append((path, query))
        try:
            return copy.deepcopy(self.responses[path])
        except KeyError:
            raise ProbeError(f"no data for {path}") from None


def samples(metrics):
    return {
        (m.desc.name, tuple(sorted(m.label_dict().items()))): m.value for m in metrics
    }


def test_system_status():
    client = FakeClient(
        {
            "api/v2/monitor/system/status": {
                "status": "success",
                "serial": "FGVM000000000000",
                "version": "v6.2.4",
                "build": 1112,
            }
        }
    )
    metrics = probe_system_status(client, None)
    assert samples(metrics) == {
        (
            "fortigate_version_info",
            (("build", "1112"), ("serial", "FGVM000000000000"), ("version", "v6.2.4")),
        ): 1.0
    }
    assert metrics[0].desc.help == "System version and build information"
    assert metrics[0].type is MetricType.GAUGE
    assert client.calls == [("api/v2/monitor/system/status", "")]


def test_system_status_error():
    with pytest.raises(ProbeError):
        probe_system_status(FakeClient({}), None)


def test_system_time():
    client = FakeClient(
        {"api/v2/monitor/system/time": {"results": {"time": 1630313596}}}
    )
    metrics = probe_system_time(client, None)
    assert samples(metrics) == {("fortigate_time_seconds", ()): 1.630313596e09}
    assert client.calls == [("api/v2/monitor/system/time", "vdom=root")]


def test_system_time_error():
    with pytest.raises(ProbeError):
        probe_system_time(FakeClient({}), None)


FANS = {
    "FAN1": 2900, "FAN2": 2400, "FAN3": 3000, "FAN4": 2500, "FAN5": 2900,
    "FAN6": 2600, "PS1 Fan 1": 4096, "PS2 Fan 1": 4224,
}
TEMPERATURES = {
    "CPU 0 Core 0": 40, "CPU 0 Core 1": 42, "CPU 0 Core 2": 42, "CPU 0 Core 3": 41,
    "CPU 0 Core 4": 43, "CPU 0 Core 5": 41, "CPU 0 Core 6": 44, "CPU 0 Core 7": 43,
    "CPU 1 Core 0": 41, "CPU 1 Core 1": 42, "CPU 1 Core 2": 42, "CPU 1 Core 3": 41,
    "CPU 1 Core 4": 43, "CPU 1 Core 5": 41, "CPU 1 Core 6": 44, "CPU 1 Core 7": 43,
    "DTS CPU0": 47, "DTS CPU1": 49, "PS1 Temp": 25, "PS2 Temp": 25,
    "TD1": 31, "TD2": 38, "TD3": 27, "TD4": 30,
    "TS1": 31, "TS2": 31, "TS3": 32, "TS4": 32, "TS5": 31,
}
VOLTAGES = {
    "+12V": 12.077, "+3.3VSB": 3.264, "+3.3VSB_SMC": 3.264, "3VDD": 3.264,
    "CPU0 PVCCIN": 1.792, "CPU1 PVCCIN": 1.792, "MAC_1.025V": 1.027,
    "MAC_AVS 1V": 0.99, "P1V05_PCH": 1.008, "P3V3_AUX": 3.3126, "PS1 VIN": 224,
    "PS1 VOUT_12V": 12.032, "PS2 VIN": 226, "PS2 VOUT_12V": 12.032,
    "PVCCIO": 1.04, "PVDDQ AB": 1.2, "PVDDQ EF": 1.2, "PVTT AB": 0.592,
    "PVTT CD": 0.592, "PVTT GH": 0.592, "VCC1.15V": 1.1581, "VCC2.5V": 2.5169,
    "VCC3V3": 3.3126, "VCC5V": 4.999,
}
SENSOR_KINDS = {
    "fan": ("fortigate_sensor_fan_rpm", FANS),
    "temperature": ("fortigate_sensor_temperature_celsius", TEMPERATURES),
    "voltage": ("fortigate_sensor_voltage_volts", VOLTAGES),
}


def _sensor_response(extra=()):
    results = [
        {"name": name, "type": kind, "value": value}
        for kind, (_, values) in SENSOR_KINDS.items()
        for name, value in values.items()
    ]
    results.extend(extra)
    return {"api/v2/monitor/system/sensor-info": {"results": results}}


def test_system_sensor_info():
    client = FakeClient(_sensor_response())
    metrics = probe_system_sensor_info(client, None)
    expected = {
        (metric_name, (("name", name),)): float(value)
        for metric_name, values in SENSOR_KINDS.values()
        for name, value in values.items()
    }
    assert samples(metrics) == expected
    assert len(metrics) == 61
    assert client.calls == [("api/v2/monitor/system/sensor-info", "vdom=root")]


def test_system_sensor_info_ignores_other_types():
    client = FakeClient(
        _sensor_response([{"name": "PSU", "type": "power", "value": 1}])
    )
    names = {m.label_dict()["name"] for m in probe_system_sensor_info(client, None)}
    assert "PSU" not in names
    assert "FAN1" in names


def test_system_sensor_info_error():
    with pytest.raises(ProbeError):
        probe_system_sensor_info(FakeClient({}), None)


def test_web_ui_state():
    client = FakeClient(
        {
            "api/v2/monitor/web-ui/state": {
                "results": {
                    "snapshot_utc_time": 1659857566000,
                    "utc_last_reboot": 1657116965000,
                }
            }
        }
    )
    metrics = probe_web_ui_state(client, None)
    assert samples(metrics) == {
        ("fortigate_last_reboot_seconds", ()): 1.657116965e09,
        ("fortigate_last_snapshot_seconds", ()): 1.659857566e09,
    }
    assert client.calls == [("api/v2/monitor/web-ui/state", "")]


def test_web_ui_state_error():
    with pytest.raises(ProbeError):
        probe_web_ui_state(FakeClient({}), None)


def test_system_resource_usage():
    client = FakeClient(
        {
            "api/v2/monitor/system/resource/usage": {
                "vdom": "root",
                "results": {
                    "cpu": [{"current": 32}, {"current": 32}],
                    "mem": [{"current": "76"}],
                    "session": [{"current": 5}],
                    "session6": [{"current": 1}],
                },
            }
        }
    )
    metrics = probe_system_resource_usage(client, None)
    assert samples(metrics) == {
        ("fortigate_cpu_usage_ratio", (("processor", "0"),)): 0.32,
        ("fortigate_memory_usage_ratio", ()): 0.76,
        ("fortigate_current_sessions", (("protocol", "ipv4"),)): 5.0,
        ("fortigate_current_sessions", (("protocol", "ipv6"),)): 1.0,
    }
    assert client.calls == [
        ("api/v2/monitor/system/resource/usage", "interval=1-min&scope=global")
    ]


def test_system_resource_usage_skips_average_cpu():
    client = FakeClient(
        {
            "api/v2/monitor/system/resource/usage": {
                "results": {
                    "cpu": [{"current": 50}, {"current": 40}, {"current": 60}],
                    "mem": [{"current": "10"}],
                    "session": [{"current": 0}],
                    "session6": [{"current": 0}],
                }
            }
        }
    )
    cpu = [
        (m.label_dict()["processor"], m.value)
        for m in probe_system_resource_usage(client, None)
        if m.desc.name == "fortigate_cpu_usage_ratio"
    ]
    assert cpu == [("0", 0.4), ("1", 0.6)]


def test_system_resource_usage_missing_data():
    client = FakeClient(
        {"api/v2/monitor/system/resource/usage": {"results": {"cpu": []}}}
    )
    with pytest.raises(ProbeError):
        probe_system_resource_usage(client, None)


def test_system_vdom_resources():
    client = FakeClient(
        {
            "api/v2/monitor/system/resource/usage": [
                {
                    "vdom": "root",
                    "results": {
                        "cpu": [{"current": 1}],
                        "mem": [{"current": "78"}],
                        "session": [{"current": 18}],
                        "session6": [{"current": 7}],
                    },
                },
                {
                    "vdom": "FG-traffic",
                    "results": {
                        "cpu": [{"current": 0}],
                        "mem": [{"current": "0"}],
                        "session": [{"current": 0}],
                        "session6": [{"current": 7}],
                    },
                },
            ]
        }
    )
    metrics = probe_system_vdom_resources(client, None)
    assert samples(metrics) == {
        ("fortigate_vdom_cpu_usage_ratio", (("vdom", "FG-traffic"),)): 0.0,
        ("fortigate_vdom_cpu_usage_ratio", (("vdom", "root"),)): 0.01,
        ("fortigate_vdom_memory_usage_ratio", (("vdom", "FG-traffic"),)): 0.0,
        ("fortigate_vdom_memory_usage_ratio", (("vdom", "root"),)): 0.78,
        ("fortigate_vdom_current_sessions", (("protocol", "ipv4"), ("vdom", "FG-traffic"))): 0.0,
        ("fortigate_vdom_current_sessions", (("protocol", "ipv4"), ("vdom", "root"))): 18.0,
        ("fortigate_vdom_current_sessions", (("protocol", "ipv6"), ("vdom", "FG-traffic"))): 7.0,
        ("fortigate_vdom_current_sessions", (("protocol", "ipv6"), ("vdom", "root"))): 7.0,
    }
    assert client.calls == [
        ("api/v2/monitor/system/resource/usage", "interval=1-min&vdom=*")
    ]


def test_system_vdom_resources_error():
    with pytest.raises(ProbeError):
        probe_system_vdom_resources(FakeClient({}), None)