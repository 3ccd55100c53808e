# fortiprobe

`fortiprobe` reads the monitor API of a FortiGate firewall and turns the
answers into metric samples named and labelled the Prometheus way
(`fortigate_cpu_usage_ratio`, `fortigate_link_status`, and so on).

Each probe is a function `probe_*(client, meta)` that asks one API endpoint
and returns a list of `Metric` objects. The `meta` argument is accepted for
a uniform signature and is not used by any probe.

## Installation

```
pip install fortiprobe
```

The package uses only the standard library.

## Clients

A client is any object with a `get(path, query)` method that returns the
decoded JSON body. `fortiprobe.metric.FortiClient` is such a client, built
on `urllib`:

```python
from fortiprobe.metric import FortiClient

client = FortiClient("https://192.0.2.1", token="token", timeout=10.0)
```

It requests `<base_url>/<path>?<query>`, sends the token as
`Authorization: Bearer <token>` when one is given, and accepts an optional
`ssl_context`. HTTP errors, connection failures and bodies that are not JSON
are raised as `ProbeError`.

Probes call the client through `fortiprobe.metric.fetch`, which passes
`ProbeError` through and turns `OSError` and `ValueError` from any other
client into `ProbeError`. A probe that cannot get its data therefore raises
`ProbeError`; the resource-usage probes also raise it when the response lacks
the CPU, memory or session figures they need.

## Probes

| Module | Function | Endpoint |
|---|---|---|
| `fortiprobe.system` | `probe_system_status` | `api/v2/monitor/system/status` |
| `fortiprobe.system` | `probe_system_time` | `api/v2/monitor/system/time` |
| `fortiprobe.system` | `probe_system_sensor_info` | `api/v2/monitor/system/sensor-info` |
| `fortiprobe.system` | `probe_web_ui_state` | `api/v2/monitor/web-ui/state` |
| `fortiprobe.system` | `probe_system_resource_usage` | `api/v2/monitor/system/resource/usage` |
| `fortiprobe.system` | `probe_system_vdom_resources` | `api/v2/monitor/system/resource/usage` |
| `fortiprobe.link_monitor` | `probe_system_link_monitor` | `api/v2/monitor/system/link-monitor` |
| `fortiprobe.virtual_wan` | `probe_virtual_wan_health_check` | `api/v2/monitor/virtual-wan/health-check` |
| `fortiprobe.vpn` | `probe_vpn_ipsec` | `api/v2/monitor/vpn/ipsec` |
| `fortiprobe.vpn` | `probe_vpn_ssl` | `api/v2/monitor/vpn/ssl` |
| `fortiprobe.vpn` | `probe_vpn_ssl_stats` | `api/v2/monitor/vpn/ssl/stats` |
| `fortiprobe.wifi` | `probe_wifi_ap_status` | `api/v2/monitor/wifi/ap_status` |
| `fortiprobe.wifi` | `probe_wifi_clients` | `api/v2/monitor/wifi/client` |
| `fortiprobe.wifi_managed_ap` | `probe_wifi_managed_ap` | `api/v2/monitor/wifi/managed_ap` |
| `fortiprobe.user_fsso` | `probe_user_fsso` | `api/v2/monitor/user/fsso` |

Some details worth knowing:

- `probe_system_resource_usage` skips the first CPU entry, which is the
  average over all cores, and numbers the remaining cores from `0`.
- `probe_system_sensor_info` reports only temperature, fan and voltage
  sensors.
- `probe_system_link_monitor` always reports `fortigate_link_status` for the
  states `up`, `down`, `error` and `unknown`; latency, loss, traffic and
  bandwidth figures follow only for links that are up or down.
- `probe_virtual_wan_health_check` reports the states `up`, `down`, `error`,
  `disable` and `unknown`, and the figures only for members that are up.
- `probe_vpn_ipsec` skips dial-up tunnels.
- `probe_vpn_ssl(client, meta, max_vpn_users=0)` always reports connections
  per VDOM. When `max_vpn_users` is non-zero it also reports connections per
  user, unless a VDOM has more connections than that limit, in which case an
  error is logged and the per-user samples for that VDOM are left out.
- `probe_wifi_clients` and `probe_wifi_managed_ap` request at most the first
  1000 entries.

## Example

```python
from fortiprobe.system import probe_system_status

class StaticClient:
    def get(self, path, query):
        return {"serial": "FGVM000000000000", "version": "v7.0.0", "build": 1}

for metric in probe_system_status(StaticClient(), None):
    print(metric.desc.name, metric.label_dict(), metric.value)
```

This prints:

```
fortigate_version_info {'serial': 'FGVM000000000000', 'version': 'v7.0.0', 'build': '1'} 1.0
```

## Building your own metrics

`MetricDesc(name, help, labels)` holds a metric's name, help text and label
names. Its `gauge(value, *label_values)` and `counter(value, *label_values)`
methods create `Metric` samples; the value is stored as a float and the label
values as strings, and a wrong number of label values raises `ValueError`.
`Metric.type` is a `MetricType` (`GAUGE` or `COUNTER`), and
`Metric.label_dict()` maps label names to values.

## What this package does not do

It has no command and no HTTP server: nothing here serves a `/metrics`
endpoint, renders samples in the Prometheus text format, reads a list of
targets from a configuration file or schedules probes. It only fetches data
and returns `Metric` objects; exposing them is left to the caller.