"""Value snapshots produced by the sampling pipelines.

Each model carries a ``to_payload`` method that renders the JSON shape the
display layer consumes. Field names on the wire are kept stable even where
the Python attribute names are more descriptive.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class GpuVendor(str, Enum):
    NVIDIA = "NVIDIA"
    UNKNOWN = "Unknown"


@dataclass(frozen=True)
class GpuIdentity:
    raw_model: str
    normalized_name: str
    vendor: GpuVendor = GpuVendor.UNKNOWN
    # List mode cannot report capacity, so this stays 0.
    vram_bytes: int = 0

    def to_payload(self) -> dict[str, Any]:
        return {
            "model": self.raw_model,
            "name": self.normalized_name,
            "vendor": self.vendor.value,
            "vram": self.vram_bytes,
        }


@dataclass(frozen=True)
class StaticSnapshot:
    cpu_model: str
    cpu_cores: int
    mem_total_bytes: int
    gpus: tuple[GpuIdentity, ...] = field(default_factory=tuple)

    def to_payload(self) -> dict[str, Any]:
        return {
            "cpuModel": self.cpu_model,
            "cpuCores": self.cpu_cores,
            "memTotal": self.mem_total_bytes,
            "gpus": [gpu.to_payload() for gpu in self.gpus],
        }


@dataclass(frozen=True)
class GpuReading:
    """Live reading for one GPU.

    ``model`` is the name exactly as the vendor tool reports it. It is not
    normalized and is not joined to any :class:`GpuIdentity`, so it may not
    match a static ``normalized_name`` for the same device.
    """

    model: str
    utilization_percent: float
    temperature_celsius: float
    memory_used_bytes: int

    def to_payload(self) -> dict[str, Any]:
        return {
            "model": self.model,
            "utilization": self.utilization_percent,
            "temperature": self.temperature_celsius,
            "memoryUsed": self.memory_used_bytes,
        }


@dataclass(frozen=True)
class DiskReading:
    mount_point: str
    used_percent: float
    used_bytes: int
    total_bytes: int

    def to_payload(self) -> dict[str, Any]:
        return {
            "fs": self.mount_point,
            "use_percent": self.used_percent,
            "used": self.used_bytes,
            "size": self.total_bytes,
        }


@dataclass(frozen=True)
class DynamicSample:
    cpu_load_percent: float
    # 0.0 means no CPU sensor was found
    cpu_temp_celsius: float
    mem_used_bytes: int
    gpus: tuple[GpuReading, ...] = field(default_factory=tuple)
    disks: tuple[DiskReading, ...] = field(default_factory=tuple)

    def to_payload(self) -> dict[str, Any]:
        return {
            "cpuLoad": self.cpu_load_percent,
            "cpuTemp": self.cpu_temp_celsius,
            "memUsed": self.mem_used_bytes,
            "gpus": [gpu.to_payload() for gpu in self.gpus],
            "disks": [disk.to_payload() for disk in self.disks],
        }
