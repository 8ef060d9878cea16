"""Desktop hardware resource monitor."""

from resource_monitor.commands import CommandRouter, UnknownCommandError
from resource_monitor.config import AppConfig, default_config, load_config
from resource_monitor.models import (
    DiskReading,
    DynamicSample,
    GpuIdentity,
    GpuReading,
    GpuVendor,
    StaticSnapshot,
)
from resource_monitor.normalize import clean_cpu_name, clean_gpu_name
from resource_monitor.sampler import TelemetrySampler
from resource_monitor.schema import validate_payload

__all__ = [
    "AppConfig",
    "CommandRouter",
    "DiskReading",
    "DynamicSample",
    "GpuIdentity",
    "GpuReading",
    "GpuVendor",
    "StaticSnapshot",
    "TelemetrySampler",
    "UnknownCommandError",
    "clean_cpu_name",
    "clean_gpu_name",
    "default_config",
    "load_config",
    "validate_payload",
]
