"""Probes that turn FortiGate monitor API responses into metric samples."""

__version__ = "0.1.0"

__all__ = [
    "metric",
    "system",
    "link_monitor",
    "virtual_wan",
    "vpn",
    "wifi",
    "user_fsso",
    "wifi_managed_ap",
]