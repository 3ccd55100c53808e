"""Probe for link-monitor health of WAN links."""

from __future__ import annotations

from .metric import Metric, MetricDesc, fetch

_LINK_LABELS = ("vdom", "monitor", "link")

LINK_STATUS = MetricDesc(
    "fortigate_link_status",
    "Signals the status of the link. 1 means that this state is present in "
    "every other case the value is 0",
    (*_LINK_LABELS, "state"),
)
LINK_LATENCY = MetricDesc(
    "fortigate_link_latency_seconds",
    "Average latency of this link based on the last 30 probes in seconds",
    _LINK_LABELS,
)
LINK_JITTER = MetricDesc(
    "fortigate_link_latency_jitter_seconds",
    "Average of the latency jitter  on this link based on the last 30 probes in seconds",
    _LINK_LABELS,
)
LINK_PACKET_LOSS = MetricDesc(
    "fortigate_link_packet_loss_ratio",
    "Percentage of packets lost relative to  all sent based on the last 30 probes",
    _LINK_LABELS,
)
LINK_PACKET_SENT = MetricDesc(
    "fortigate_link_packet_sent_total",
    "Number of packets sent on this link",
    _LINK_LABELS,
)
LINK_PACKET_RECEIVED = MetricDesc(
    "fortigate_link_packet_received_total",
    "Number of packets received on this link",
    _LINK_LABELS,
)
LINK_SESSIONS = MetricDesc(
    "fortigate_link_active_sessions",
    "Number of sessions active on this link",
    _LINK_LABELS,
)
LINK_BANDWIDTH_TX = MetricDesc(
    "fortigate_link_bandwidth_tx_byte_per_second",
    "Bandwidth available on this link for sending",
    _LINK_LABELS,
)
LINK_BANDWIDTH_RX = MetricDesc(
    "fortigate_link_bandwidth_rx_byte_per_second",
    "Bandwidth available on this link for sending",
    _LINK_LABELS,
)
LINK_STATUS_CHANGED = MetricDesc(
    "fortigate_link_status_change_time_seconds",
    "Unix timestamp describing the time when the last status change has occurred",
    _LINK_LABELS,
)

_STATES = ("up", "down", "error", "unknown")


def _num(obj, key) -> float:
    value = obj.get(key)
    return float(value) if value not in (None, "") else 0.0


def probe_system_link_monitor(client, meta) -> list[Metric]:
    """Report state and, for up or down links, quality figures of every monitored link."""
    responses = fetch(client, "api/v2/monitor/system/link-monitor", "vdom=*") or []
    metrics = []
    for response in responses:
        vdom = response.get("vdom", "")
        for monitor, links in (response.get("results") or {}).items():
            for link_name, link in (links or {}).items():
                link = link or {}
                status = link.get("status")
                state = status if status in _STATES[:3] else "unknown"
                labels = (vdom, monitor, link_name)
                metrics.extend(
                    LINK_STATUS.gauge(1.0 if s == state else 0.0, *labels, s)
                    for s in _STATES
                )
                if state in ("error", "unknown"):
                    continue
                metrics += [
                    LINK_LATENCY.gauge(_num(link, "latency") / 1000, *labels),
                    LINK_JITTER.gauge(_num(link, "jitter") / 1000, *labels),
                    LINK_PACKET_LOSS.gauge(_num(link, "packet_loss") / 100, *labels),
                    LINK_PACKET_SENT.counter(_num(link, "packet_sent"), *labels),
                    LINK_PACKET_RECEIVED.counter(_num(link, "packet_received"), *labels),
                    LINK_SESSIONS.gauge(_num(link, "session"), *labels),
                    LINK_BANDWIDTH_TX.gauge(_num(link, "tx_bandwidth") / 8, *labels),
                    LINK_BANDWIDTH_RX.gauge(_num(link, "rx_bandwidth") / 8, *labels),
                    LINK_STATUS_CHANGED.gauge(_num(link, "state_changed"), *labels),
                ]
    return metrics