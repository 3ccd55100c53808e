"""Probes for IPsec tunnels and SSL VPN sessions."""

from __future__ import annotations

import logging
from collections import Counter

from .metric import Metric, MetricDesc, fetch

log = logging.getLogger(__name__)

_TUNNEL_LABELS = ("vdom", "name", "p2serial", "parent")

IPSEC_UP = MetricDesc("fortigate_ipsec_tunnel_up", "Status of IPsec tunnel", _TUNNEL_LABELS)
IPSEC_TRANSMITTED = MetricDesc(
    "fortigate_ipsec_tunnel_transmit_bytes_total",
    "Total number of bytes transmitted over the IPsec tunnel",
    _TUNNEL_LABELS,
)
IPSEC_RECEIVED = MetricDesc(
    "fortigate_ipsec_tunnel_receive_bytes_total",
    "Total number of bytes received over the IPsec tunnel",
    _TUNNEL_LABELS,
)

VPN_CONNECTIONS = MetricDesc(
    "fortigate_vpn_connections", "Number of VPN connections", ("vdom",)
)
VPN_USERS = MetricDesc(
    "fortigate_vpn_users", "Number of VPN users connections", ("vdom", "user")
)

SSL_USERS = MetricDesc("fortigate_vpn_ssl_users", "Number of current SSL VPN users", ("vdom",))
SSL_TUNNELS = MetricDesc(
    "fortigate_vpn_ssl_tunnels", "Number of current SSL VPN tunnels", ("vdom",)
)
SSL_CONNECTIONS = MetricDesc(
    "fortigate_vpn_ssl_connections", "Number of current SSL VPN connections", ("vdom",)
)


def _num(obj, key) -> float:
    value = (obj or {}).get(key)
    return float(value) if value not in (None, "") else 0.0


def probe_vpn_ipsec(client, meta) -> list[Metric]:
    """Report state and traffic of every phase-2 selector; dial-up tunnels are skipped."""
    responses = fetch(client, "api/v2/monitor/vpn/ipsec", "vdom=*") or []
    metrics = []
    for response in responses:
        vdom = response.get("vdom", "")
        for tunnel in response.get("results") or []:
            if tunnel.get("type") == "dialup":
                continue
            parent = tunnel.get("name", "")
            for proxy in tunnel.get("proxyid") or []:
                labels = (
                    vdom,
                    proxy.get("p2name", ""),
                    str(int(proxy.get("p2serial") or 0)),
                    parent,
                )
                up = 1.0 if proxy.get("status") == "up" else 0.0
                metrics += [
                    IPSEC_UP.gauge(up, *labels),
                    IPSEC_TRANSMITTED.counter(_num(proxy, "outgoing_bytes"), *labels),
                    IPSEC_RECEIVED.counter(_num(proxy, "incoming_bytes"), *labels),
                ]
    return metrics


def probe_vpn_ssl(client, meta, max_vpn_users=0) -> list[Metric]:
    """Report SSL VPN connections per VDOM and, if enabled, connections per user.

    Per-user samples are produced only when ``max_vpn_users`` is non-zero and the
    number of connections in a VDOM does not exceed it.
    """
    responses = fetch(client, "api/v2/monitor/vpn/ssl", "vdom=*") or []
    metrics = []
    for response in responses:
        vdom = response.get("vdom", "")
        sessions = response.get("results") or []
        count = len(sessions)
        metrics.append(VPN_CONNECTIONS.gauge(count, vdom))
        if not max_vpn_users:
            continue
        if count > max_vpn_users:
            log.error(
                "Received more VPN Users than maximum (%d > %d) allowed, "
                "ignoring metric ...",
                count,
                max_vpn_users,
            )
            continue
        per_user = Counter(session.get("user_name", "") for session in sessions)
        metrics.extend(VPN_USERS.gauge(n, vdom, user) for user, n in per_user.items())
    return metrics


def probe_vpn_ssl_stats(client, meta) -> list[Metric]:
    """Report current SSL VPN users, tunnels and connections per VDOM."""
    responses = fetch(client, "api/v2/monitor/vpn/ssl/stats", "vdom=*") or []
    metrics = []
    for response in responses:
        vdom = response.get("vdom", "")
        current = (response.get("results") or {}).get("current") or {}
        metrics += [
            SSL_USERS.gauge(int(current.get("users") or 0), vdom),
            SSL_TUNNELS.gauge(int(current.get("tunnels") or 0), vdom),
            SSL_CONNECTIONS.gauge(int(current.get("connections") or 0), vdom),
        ]
    return metrics