"""Probe for access points managed by the wireless controller."""

from __future__ import annotations

from dataclasses import dataclass

from .metric import Metric, MetricDesc, fetch

_PREFIX = "fortigate_wifi_managed_ap_"
_QUERY = "vdom=*&start=0&count=1000"


def _desc(suffix: str, help_text: str, *labels: str) -> MetricDesc:
    return MetricDesc(_PREFIX + suffix, help_text, labels)


@dataclass(frozen=True)
class _Field:
    """One numeric field of an API object, reported as a gauge."""

    desc: MetricDesc
    key: str
    divisor: float = 1.0

    def read(self, obj: dict, labels: tuple) -> Metric:
        return self.desc.gauge(_num(obj, self.key) / self.divisor, *labels)


_AP_INFO = _desc(
    "info",
    "Infos about a managed access point",
    "vdom", "ap_name", "ap_profile", "os_version", "serial",
)
_AP_JOIN_TIME = _desc(
    "join_time_seconds",
    "Unix time when the managed access point has joined the mesh",
    "vdom", "ap_name",
)
_AP_GAUGES = tuple(
    _Field(_desc(suffix, help_text, "vdom", "ap_name"), key, divisor)
    for suffix, help_text, key, divisor in (
        ("cpu_usage_ratio", "CPU usage of the access point", "cpu_usage", 100),
        ("memory_free_bytes", "Free memory of the managed access point", "mem_free", 1),
        ("memory_bytes_total", "Total memory of the managed access point", "mem_total", 1),
    )
)

_RADIO_INFO = _desc(
    "radio_info",
    "Informations about radios on managed access points",
    "vdom", "ap_name", "radio_id", "operating_channel",
)
_RADIO_GAUGES = tuple(
    _Field(_desc("radio_" + suffix, help_text, "vdom", "ap_name", "radio_id"), key, divisor)
    for suffix, key, divisor, help_text in (
        ("client_count", "client_count", 1,
         "Number of clients that are connected using this radio"),
        ("operating_tx_power_ratio", "oper_txpower", 100,
         "Power usage on the operating channel in percent"),
        ("operating_channel_utilization_ratio", "channel_utilization_percent", 100,
         "Utilization on the operating channel of the radio"),
        ("bandwidth_rx_bps", "bandwidth_rx", 1, "Bandwidth of this radio for receiving"),
        ("bandwidth_tx_bps", "bandwidth_tx", 1, "Bandwidth of this radio for transmitting"),
        ("rx_bytes_total", "bytes_rx", 1, "Total number of received bytes"),
        ("tx_bytes_total", "bytes_tx", 1, "Total number of transferred bytes"),
        ("interfering_aps", "interfering_aps", 1, "Number of interfering access points"),
        ("tx_power_ratio", "txpower", 100, "Set Wifi power for the radio in percent"),
        ("tx_retries_ratio", "tx_retries_percent", 100,
         "Percentage of retried connection to all connection attempts"),
        ("tx_discard_ratio", "tx_discard_percentage", 100, "Percentage of discarded packets"),
    )
)

# Wired interface counters: each kind is reported for both directions.
_WIRED_KINDS = (
    ("bytes", "bytes", "bytes"),
    ("packets", "packets", "packets"),
    ("errors", "errors", "errors"),
    ("dropped_packets", "dropped", "dropped packets"),
)
_DIRECTIONS = (("rx", "received"), ("tx", "transferred"))
_WIRED_GAUGES = tuple(
    _Field(
        _desc(
            f"interface_{direction}_{suffix}_total",
            f"total number of {noun} {verb} on this interface",
            "vdom", "ap_name", "interface",
        ),
        f"{key}_{direction}",
    )
    for suffix, key, noun in _WIRED_KINDS
    for direction, verb in _DIRECTIONS
)


def _num(obj: dict, key: str) -> float:
    value = obj.get(key)
    return 0.0 if value in (None, "") else float(value)


def _int_label(obj: dict, key: str) -> str:
    return str(int(obj.get(key) or 0))


def _ap_metrics(ap: dict) -> list[Metric]:
    vdom = ap.get("vdom", "")
    name = ap.get("name", "")
    labels = (vdom, name)
    metrics = [
        _AP_INFO.counter(
            1, vdom, name,
            ap.get("ap_profile", ""), ap.get("os_version", ""), ap.get("serial", ""),
        ),
        _AP_JOIN_TIME.counter(_num(ap, "join_time_raw"), *labels),
    ]
    metrics.extend(field.read(ap, labels) for field in _AP_GAUGES)

    for radio in ap.get("radio") or []:
        radio = radio or {}
        radio_id = _int_label(radio, "radio_id")
        metrics.append(
            _RADIO_INFO.counter(1, vdom, name, radio_id, _int_label(radio, "oper_chan"))
        )
        metrics.extend(field.read(radio, (vdom, name, radio_id)) for field in _RADIO_GAUGES)

    for wired in ap.get("wired") or []:
        wired = wired or {}
        wired_labels = (vdom, name, wired.get("interface", ""))
        metrics.extend(field.read(wired, wired_labels) for field in _WIRED_GAUGES)
    return metrics


def probe_wifi_managed_ap(client, meta) -> list[Metric]:
    """Report managed access points with their radios and wired interfaces.

    At most the first 1000 access points are requested.
    """
    responses = fetch(client, "api/v2/monitor/wifi/managed_ap", _QUERY) or []
    return [
        metric
        for response in responses
        for ap in response.get("results") or []
        for metric in _ap_metrics(ap)
    ]