"""Metric names and mapping of fetched metric values onto Host records."""

from __future__ import annotations

import logging
import math
from typing import Any

from .constants import (
    CPU_METRICS,
    DEFAULT_INTERFACE,
    INTERFACE_METRIC_TEMPLATES,
    LOADAVG_METRICS,
    MEMORY_METRICS,
)
from .models import Host

logger = logging.getLogger("mkrtop")


def metric_fields(interface: str = DEFAULT_INTERFACE) -> dict[str, tuple[str, str]]:
    """Return the ordered metric name -> (group, field) table for an interface."""
    fields: dict[str, tuple[str, str]] = {}
    fields.update(LOADAVG_METRICS)
    fields.update(CPU_METRICS)
    fields.update(MEMORY_METRICS)
    for template, target in INTERFACE_METRIC_TEMPLATES.items():
        fields[template.format(interface=interface)] = target
    return fields


def metric_names(interface: str = DEFAULT_INTERFACE) -> list[str]:
    """Return the ordered list of metric names to fetch."""
    return list(metric_fields(interface))


def metric_value(host_metrics: dict[str, Any], name: str) -> float | None:
    """Extract the finite numeric "value" of one metric, or None if missing or malformed."""
    entry = host_metrics.get(name)
    if not isinstance(entry, dict):
        return None
    value = entry.get("value")
    # bool is an int subclass but never a metric value
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        result = float(value)
    except OverflowError:
        return None
    # json.loads accepts Infinity and NaN
    if not math.isfinite(result):
        return None
    return result


def apply_metrics(
    hosts: list[Host],
    response: Any,
    *,
    interface: str = DEFAULT_INTERFACE,
) -> None:
    """Copy metric values from a `mkr fetch` response into each host's fields.

    Hosts missing from the response, or whose entry is not an object, are
    left untouched. A missing or non-numeric metric leaves its field at the
    default. Never raises on malformed data.

    Args:
        hosts: Hosts to update in place
        response: Decoded JSON, host id -> metric name -> {"value": number}
        interface: Network interface the interface metrics refer to
    """
    if not isinstance(response, dict):
        logger.warning(
            "Ignoring metrics response: expected a JSON object, got %s",
            type(response).__name__,
        )
        return

    fields = metric_fields(interface)
    for host in hosts:
        host_metrics = response.get(host.id)
        if not isinstance(host_metrics, dict):
            logger.debug("No metrics for host %s", host.id)
            continue
        for name, (group, attr) in fields.items():
            value = metric_value(host_metrics, name)
            if value is None:
                logger.debug("Metric %s missing or not numeric for host %s", name, host.id)
                continue
            setattr(getattr(host, group), attr, value)
