"""Metric descriptors, constant metric samples and the API client used by probes."""

from __future__ import annotations

import json
import ssl
import urllib.error
import urllib.request
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class MetricType(Enum):
    """Kind of a Prometheus sample."""

    GAUGE = "gauge"
    COUNTER = "counter"


class ProbeError(Exception):
    """Raised when a probe cannot collect its data from the device."""


@dataclass(frozen=True)
class MetricDesc:
    """Name, help text and label names shared by a family of samples."""

    name: str
    help: str
    labels: tuple[str, ...] = ()

    def _make(self, kind: MetricType, value: float, label_values: tuple) -> Metric:
        if len(label_values) != len(self.labels):
            raise ValueError(
                f"{self.name}: expected {len(self.labels)} label values, "
                f"got {len(label_values)}"
            )
        return Metric(
            desc=self,
            type=kind,
            value=float(value),
            label_values=tuple(str(v) for v in label_values),
        )

    def gauge(self, value, *args) -> Metric:
        """Build a gauge sample with the given label values."""
        return self._make(MetricType.GAUGE, value, args)

    def counter(self, value, *args) -> Metric:
        """Build a counter sample with the given label values."""
        return self._make(MetricType.COUNTER, value, args)


@dataclass(frozen=True)
class Metric:
    """A single constant sample."""

    desc: MetricDesc
    type: MetricType
    value: float
    label_values: tuple[str, ...] = ()

    def label_dict(self) -> dict[str, str]:
        """Map label names to their values."""
        return dict(zip(self.desc.labels, self.label_values))


@dataclass
class FortiClient:
    """Minimal JSON client for the device REST API."""

    base_url: str
    token: str | None = None
    timeout: float = 10.0
    ssl_context: ssl.SSLContext | None = field(default=None, repr=False)

    def get(self, path, query="") -> Any:
        """GET ``path`` with the raw ``query`` string and return the decoded JSON."""
        url = f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"
        if query:
            url = f"{url}?{query}"
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        request = urllib.request.Request(url, headers=headers)
        try:
            with urllib.request.urlopen(
                request, timeout=self.timeout, context=self.ssl_context
            ) as response:
                body = response.read()
        except urllib.error.HTTPError as exc:
            raise ProbeError(f"{url}: HTTP status {exc.code}") from exc
        except (urllib.error.URLError, OSError) as exc:
            raise ProbeError(f"{url}: {exc}") from exc
        try:
            return json.loads(body)
        except ValueError as exc:
            raise ProbeError(f"{url}: invalid JSON response: {exc}") from exc


def fetch(client, path, query=""):
    """Ask ``client`` for ``path``, turning transport failures into ProbeError."""
    try:
        return client.get(path, query)
    except ProbeError:
        raise
    except (OSError, ValueError) as exc:
        raise ProbeError(f"{path}: {exc}") from exc