"""Probe for FSSO (single sign-on) connectors."""

from __future__ import annotations

from .metric import Metric, MetricDesc, fetch

FSSO_INFO = MetricDesc(
    "fortigate_user_fsso_info",
    "Info on Fsso defined connectors",
    ("vdom", "name", "id", "type", "status"),
)


def probe_user_fsso(client, meta) -> list[Metric]:
    """Report every FSSO connector; named ones by name, the others by id."""
    responses = fetch(client, "api/v2/monitor/user/fsso", "vdom=*") or []
    metrics = []
    for response in responses:
        vdom = response.get("vdom", "")
        for connector in response.get("results") or []:
            kind = connector.get("type", "")
            status = connector.get("status", "")
            if kind == "fsso":
                name, ident = connector.get("name", ""), ""
            else:
                name, ident = "", str(int(connector.get("id") or 0))
            metrics.append(FSSO_INFO.gauge(1, vdom, name, ident, kind, status))
    return metrics