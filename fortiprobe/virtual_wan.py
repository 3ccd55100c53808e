"""Probe for SD-WAN (virtual WAN) health-check results."""

from __future__ import annotations

from .metric import Metric, MetricDesc, fetch

_MEMBER_LABELS = ("vdom", "sla", "interface")

WAN_STATUS = MetricDesc(
    "fortigate_virtual_wan_status",
    "Status of the Interface. If the SD-WAN interface is disabled, disable will be "
    "returned. If the interface does not participate in the health check, error "
    "will be returned.",
    (*_MEMBER_LABELS, "state"),
)
WAN_LATENCY = MetricDesc(
    "fortigate_virtual_wan_latency_seconds",
    "Measured latency for this Health check",
    _MEMBER_LABELS,
)
WAN_JITTER = MetricDesc(
    "fortigate_virtual_wan_latency_jitter_seconds",
    "Measured latency jitter for this Health check",
    _MEMBER_LABELS,
)
WAN_PACKET_LOSS = MetricDesc(
    "fortigate_virtual_wan_packet_loss_ratio",
    "Measured packet loss in percentage for this Health check",
    _MEMBER_LABELS,
)
WAN_PACKET_SENT = MetricDesc(
    "fortigate_virtual_wan_packet_sent_total",
    "Number of packets sent for this Health check",
    _MEMBER_LABELS,
)
WAN_PACKET_RECEIVED = MetricDesc(
    "fortigate_virtual_wan_packet_received_total",
    "Number of packets received for this Health check",
    _MEMBER_LABELS,
)
WAN_SESSIONS = MetricDesc(
    "fortigate_virtual_wan_active_sessions",
    "Active Session count for the health check interface",
    _MEMBER_LABELS,
)
WAN_BANDWIDTH_TX = MetricDesc(
    "fortigate_virtual_wan_bandwidth_tx_byte_per_second",
    "Upload bandwidth of the health check interface",
    _MEMBER_LABELS,
)
WAN_BANDWIDTH_RX = MetricDesc(
    "fortigate_virtual_wan_bandwidth_rx_byte_per_second",
    "Download bandwidth of the health check interface",
    _MEMBER_LABELS,
)
WAN_STATUS_CHANGED = MetricDesc(
    "fortigate_virtual_wan_status_change_time_seconds",
    "Unix timestamp describing the time when the last status change has occurred",
    _MEMBER_LABELS,
)

_KNOWN_STATES = ("up", "down", "error", "disable")
_STATES = (*_KNOWN_STATES, "unknown")


def _num(obj, key) -> float:
    value = obj.get(key)
    return float(value) if value not in (None, "") else 0.0


def probe_virtual_wan_health_check(client, meta) -> list[Metric]:
    """Report state of every SD-WAN member and, for members that are up, its figures."""
    responses = fetch(client, "api/v2/monitor/virtual-wan/health-check", "vdom=*") or []
    metrics = []
    for response in responses:
        vdom = response.get("vdom", "")
        for sla, members in (response.get("results") or {}).items():
            for name, member in (members or {}).items():
                member = member or {}
                status = member.get("status")
                state = status if status in _KNOWN_STATES else "unknown"
                labels = (vdom, sla, name)
                metrics.extend(
                    WAN_STATUS.gauge(1.0 if s == state else 0.0, *labels, s)
                    for s in _STATES
                )
                if state != "up":
                    continue
                metrics += [
                    WAN_LATENCY.gauge(_num(member, "latency") / 1000, *labels),
                    WAN_JITTER.gauge(_num(member, "jitter") / 1000, *labels),
                    WAN_PACKET_LOSS.gauge(_num(member, "packet_loss") / 100, *labels),
                    WAN_PACKET_SENT.gauge(_num(member, "packet_sent"), *labels),
                    WAN_PACKET_RECEIVED.gauge(_num(member, "packet_received"), *labels),
                    WAN_SESSIONS.gauge(_num(member, "session"), *labels),
                    WAN_BANDWIDTH_TX.gauge(_num(member, "tx_bandwidth") / 8, *labels),
                    WAN_BANDWIDTH_RX.gauge(_num(member, "rx_bandwidth") / 8, *labels),
                    WAN_STATUS_CHANGED.gauge(_num(member, "state_changed"), *labels),
                ]
    return metrics