"""mkrtop constants."""

from __future__ import annotations

# External client
DEFAULT_MKR_COMMAND = "mkr"

# Polling
DEFAULT_INTERVAL_S = 5
DEFAULT_INTERFACE = "eth0"

# Rendering
TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
MEMORY_UNITS = ("B", "K", "M", "G", "T", "P", "E", "Z", "Y")
TRAFFIC_UNITS = ("B/s", "K/s", "M/s", "G/s", "T/s", "P/s", "E/s", "Z/s", "Y/s")
UNIT_STEP = 1024.0

# Metric name -> (host attribute, field) it is copied into.
# Interface metrics are keyed by a template filled in with the interface name.
LOADAVG_METRICS = {
    "loadavg5": ("load_average", "avg5"),
}
CPU_METRICS = {
    "cpu.user.percentage": ("cpu", "user"),
    "cpu.nice.percentage": ("cpu", "nice"),
    "cpu.system.percentage": ("cpu", "system"),
    "cpu.irq.percentage": ("cpu", "irq"),
    "cpu.softirq.percentage": ("cpu", "softirq"),
    "cpu.iowait.percentage": ("cpu", "iowait"),
    "cpu.steal.percentage": ("cpu", "steal"),
    "cpu.guest.percentage": ("cpu", "guest"),
    "cpu.idle.percentage": ("cpu", "idle"),
}
MEMORY_METRICS = {
    "memory.used": ("memory", "used"),
    "memory.buffers": ("memory", "buffers"),
    "memory.cached": ("memory", "cached"),
    "memory.total": ("memory", "total"),
    "memory.free": ("memory", "free"),
}
INTERFACE_METRIC_TEMPLATES = {
    "interface.{interface}.rxBytes.delta": ("interface", "rx_bytes"),
    "interface.{interface}.txBytes.delta": ("interface", "tx_bytes"),
}
