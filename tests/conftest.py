"""Shared pytest fixtures for mkrtop tests."""

from __future__ import annotations

import json
import logging
from typing import Any
from unittest.mock import MagicMock

import pytest
from mkrtop.cli_types import TopArgs
from mkrtop.metrics import metric_names


@pytest.fixture
def top_args() -> TopArgs:
    """Create Args object for the top command (single cycle)."""
    return TopArgs(
        service="my-service",
        role="web",
        interval=5,
        mkr="mkr",
        interface="eth0",
        timeout=None,
        once=True,
    )


@pytest.fixture
def sample_hosts_payload() -> list[dict[str, Any]]:
    """Decoded `mkr hosts` output with one retired host."""
    return [
        {"id": "h1", "name": "web1", "isRetired": False},
        {"id": "h2", "name": "web2", "isRetired": False},
        {"id": "h3", "name": "web3", "isRetired": True},
    ]


def _full_host_metrics(**overrides: float) -> dict[str, dict[str, float]]:
    """Build one host's `mkr fetch` entry with every metric present.

    Keyword overrides use the metric name with dots replaced by underscores.
    """
    base = {
        "loadavg5": 0.5,
        "cpu.user.percentage": 10.0,
        "cpu.nice.percentage": 0.25,
        "cpu.system.percentage": 2.0,
        "cpu.irq.percentage": 0.1,
        "cpu.softirq.percentage": 0.2,
        "cpu.iowait.percentage": 0.3,
        "cpu.steal.percentage": 0.4,
        "cpu.guest.percentage": 0.0,
        "cpu.idle.percentage": 86.75,
        "memory.used": 512 * 1024**2,
        "memory.buffers": 128 * 1024**2,
        "memory.cached": 1024**3,
        "memory.total": 4 * 1024**3,
        "memory.free": 2.25 * 1024**3,
        "interface.eth0.rxBytes.delta": 12 * 1024,
        "interface.eth0.txBytes.delta": 3584,
    }
    for key, value in overrides.items():
        base[key.replace("_", ".")] = value
    return {name: {"time": 1760000000, "value": value} for name, value in base.items()}


@pytest.fixture
def sample_metrics_payload() -> dict[str, Any]:
    """Decoded `mkr fetch` output covering h1 only."""
    return {"h1": _full_host_metrics()}


@pytest.fixture
def default_metric_names() -> list[str]:
    """Metric names requested for eth0."""
    return metric_names("eth0")


@pytest.fixture
def fake_mkr(mocker, sample_hosts_payload, sample_metrics_payload):
    """Patch subprocess.run so `mkr hosts` and `mkr fetch` return canned JSON.

    Tests may replace entries in the returned dict before invoking mkrtop:
    "hosts" and "fetch" hold the payloads, "rc" the exit code.
    """
    state: dict[str, Any] = {
        "hosts": sample_hosts_payload,
        "fetch": sample_metrics_payload,
        "rc": 0,
    }

    def fake_run(cmd, **kwargs):
        payload = state[cmd[1]]
        out = payload if isinstance(payload, str) else json.dumps(payload)
        return MagicMock(returncode=state["rc"], stdout=out.encode(), stderr=b"")

    state["run"] = mocker.patch("mkrtop.mkr.subprocess.run", side_effect=fake_run)
    return state


@pytest.fixture
def host_metrics():
    """Factory for one host's `mkr fetch` entry with every metric present."""
    return _full_host_metrics


@pytest.fixture(autouse=True)
def reset_mkrtop_logger():
    """Drop handlers added by setup_logging so they don't outlive a test's stderr."""
    logger = logging.getLogger("mkrtop")
    original_handlers = list(logger.handlers)
    original_level = logger.level
    yield
    for handler in list(logger.handlers):
        if handler not in original_handlers:
            logger.removeHandler(handler)
    logger.setLevel(original_level)
