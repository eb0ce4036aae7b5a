"""Host and metric group records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .exceptions import MkrTopError


@dataclass
class LoadAverage:
    """Five-minute load average."""

    avg5: float = 0.0


@dataclass
class CPU:
    """CPU time breakdown in percent."""

    user: float = 0.0
    nice: float = 0.0
    system: float = 0.0
    irq: float = 0.0
    softirq: float = 0.0
    iowait: float = 0.0
    steal: float = 0.0
    guest: float = 0.0
    idle: float = 0.0


@dataclass
class Memory:
    """Memory breakdown in bytes."""

    used: float = 0.0
    buffers: float = 0.0
    cached: float = 0.0
    total: float = 0.0
    free: float = 0.0


@dataclass
class Interface:
    """Network interface throughput in bytes per interval."""

    rx_bytes: float = 0.0
    tx_bytes: float = 0.0


@dataclass
class Host:
    """A host from the inventory plus the metrics fetched for it this cycle.

    Attributes:
        id: Inventory identifier, used as the key in metric responses
        name: Display name
        is_retired: Retired hosts are listed but never queried for metrics
        load_average: Load average group
        cpu: CPU group
        memory: Memory group
        interface: Network interface group
    """

    id: str
    name: str = ""
    is_retired: bool = False
    load_average: LoadAverage = field(default_factory=LoadAverage)
    cpu: CPU = field(default_factory=CPU)
    memory: Memory = field(default_factory=Memory)
    interface: Interface = field(default_factory=Interface)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Host:
        """Build a Host from one element of `mkr hosts` JSON output.

        Raises:
            MkrTopError: If isRetired is present but not a JSON boolean
        """
        is_retired = data.get("isRetired")
        if is_retired is None:
            is_retired = False
        elif not isinstance(is_retired, bool):
            raise MkrTopError(
                f"Unexpected hosts output: isRetired must be a boolean, got {is_retired!r}"
            )
        return cls(
            id=str(data.get("id") or ""),
            name=str(data.get("name") or ""),
            is_retired=is_retired,
        )


def hosts_from_json(payload: Any) -> list[Host]:
    """Convert decoded `mkr hosts` output into Host records.

    Raises:
        MkrTopError: If payload is not a list of objects
    """
    if not isinstance(payload, list):
        raise MkrTopError(
            f"Unexpected hosts output: expected a JSON array, got {type(payload).__name__}"
        )
    hosts = []
    for item in payload:
        if not isinstance(item, dict):
            raise MkrTopError(
                f"Unexpected hosts output: expected JSON objects, got {type(item).__name__}"
            )
        hosts.append(Host.from_dict(item))
    return hosts
