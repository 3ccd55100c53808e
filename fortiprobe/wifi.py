"""Probes for wireless controller status and connected wireless clients."""

from __future__ import annotations

from .metric import Metric, MetricDesc, fetch

ACCESS_POINTS = MetricDesc(
    "fortigate_wifi_access_points",
    "Number of connected access points by status",
    ("vdom", "status"),
)
FABRIC_CLIENTS = MetricDesc(
    "fortigate_wifi_fabric_clients", "Number of connected clients", ("vdom",)
)
FABRIC_MAX_CLIENTS = MetricDesc(
    "fortigate_wifi_fabric_max_allowed_clients",
    "Maximum number of clients which are allowed to connect",
    ("vdom",),
)

_CLIENT_LABELS = ("vdom", "mac")

CLIENT_INFO = MetricDesc(
    "fortigate_wifi_client_info",
    "Number of connected access points by status",
    ("vdom", "mac", "hostname", "wtp_name"),
)
CLIENT_DATA_RATE = MetricDesc(
    "fortigate_wifi_client_data_rate_bps",
    "Data rate of the client connection",
    _CLIENT_LABELS,
)
CLIENT_BANDWIDTH_RX = MetricDesc(
    "fortigate_wifi_client_bandwidth_rx_bps",
    "Bandwidth for receiving traffic",
    _CLIENT_LABELS,
)
CLIENT_BANDWIDTH_TX = MetricDesc(
    "fortigate_wifi_client_bandwidth_tx_bps",
    "Bandwidth for transmitting traffic",
    _CLIENT_LABELS,
)
CLIENT_SIGNAL_STRENGTH = MetricDesc(
    "fortigate_wifi_client_signal_strength_dBm",
    "Signal strength of the connected client",
    _CLIENT_LABELS,
)
CLIENT_SIGNAL_NOISE = MetricDesc(
    "fortigate_wifi_client_signal_noise_dBm",
    "Signal noise on the frequency of the client",
    _CLIENT_LABELS,
)
CLIENT_TX_DISCARD = MetricDesc(
    "fortigate_wifi_client_tx_discard_ratio",
    "Percentage of discarded packets",
    _CLIENT_LABELS,
)
CLIENT_TX_RETRIES = MetricDesc(
    "fortigate_wifi_client_tx_retries_ratio",
    "Percentage of retried connection to all connection attempts",
    _CLIENT_LABELS,
)


def _num(obj, key) -> float:
    value = (obj or {}).get(key)
    return float(value) if value not in (None, "") else 0.0


def probe_wifi_ap_status(client, meta) -> list[Metric]:
    """Report access point counts by state and client counts per VDOM."""
    responses = fetch(client, "api/v2/monitor/wifi/ap_status", "vdom=*") or []
    metrics = []
    for response in responses:
        vdom = response.get("vdom", "")
        results = response.get("results") or {}
        metrics += [
            ACCESS_POINTS.gauge(_num(results, "wtp_active"), vdom, "active"),
            ACCESS_POINTS.gauge(_num(results, "wtp_down"), vdom, "down"),
            ACCESS_POINTS.gauge(_num(results, "wtp_rebooted"), vdom, "rebooting"),
            FABRIC_CLIENTS.gauge(_num(results, "client_count"), vdom),
            FABRIC_MAX_CLIENTS.gauge(_num(results, "client_count_max"), vdom),
        ]
    return metrics


def probe_wifi_clients(client, meta) -> list[Metric]:
    """Report connection figures of wireless clients (at most the first 1000)."""
    responses = (
        fetch(client, "api/v2/monitor/wifi/client", "vdom=*&start=0&count=1000") or []
    )
    metrics = []
    for response in responses:
        vdom = response.get("vdom", "")
        for entry in response.get("results") or []:
            mac = entry.get("mac", "")
            labels = (vdom, mac)
            metrics += [
                CLIENT_INFO.counter(
                    1, vdom, mac, entry.get("hostname", ""), entry.get("wtp_name", "")
                ),
                CLIENT_DATA_RATE.gauge(_num(entry, "data_rate_bps"), *labels),
                CLIENT_BANDWIDTH_RX.gauge(_num(entry, "bandwidth_rx"), *labels),
                CLIENT_BANDWIDTH_TX.gauge(_num(entry, "bandwidth_tx"), *labels),
                CLIENT_SIGNAL_STRENGTH.gauge(_num(entry, "signal"), *labels),
                CLIENT_SIGNAL_NOISE.gauge(_num(entry, "noise"), *labels),
                CLIENT_TX_DISCARD.gauge(
                    _num(entry, "tx_discard_percentage") / 100, *labels
                ),
                CLIENT_TX_RETRIES.gauge(
                    _num(entry, "tx_retry_percentage") / 100, *labels
                ),
            ]
    return metrics