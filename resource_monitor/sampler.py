from __future__ import annotations

from typing import Callable, TypeVar
import logging

from resource_monitor.config import AppConfig, default_config
from resource_monitor.gpu import NvidiaSmiProbe
from resource_monitor.host import (
    DynamicHostInfo,
    HostMetricsProvider,
    StaticHostInfo,
    Volume,
    cpu_temperature,
)
from resource_monitor.models import (
    DiskReading,
    DynamicSample,
    GpuIdentity,
    GpuReading,
    GpuVendor,
    StaticSnapshot,
)
from resource_monitor.normalize import clean_cpu_name, clean_gpu_name
from resource_monitor.outcome import Outcome

GIB = 1024 * 1024 * 1024
# Volumes at or below this size are virtual or system partitions.
MIN_DISK_BYTES = GIB

T = TypeVar("T")


def disk_readings(volumes: list[Volume]) -> list[DiskReading]:
    disks: list[DiskReading] = []
    for volume in volumes:
        if volume.total_bytes <= MIN_DISK_BYTES:
            continue
        used = max(0, volume.total_bytes - volume.available_bytes)
        disks.append(
            DiskReading(
                mount_point=volume.mount_point,
                used_percent=used / volume.total_bytes * 100.0,
                used_bytes=used,
                total_bytes=volume.total_bytes,
            )
        )
    return disks


class TelemetrySampler:
    """Runs the static and dynamic sampling pipelines.

    Both pipelines always return a complete record. Each data source is read
    into an :class:`Outcome`; failures are logged and replaced with zero or
    empty values only when the record is assembled. Provider and probe
    handles are built fresh for every call.
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        host_factory: Callable[[], HostMetricsProvider] | None = None,
        probe_factory: Callable[[], NvidiaSmiProbe] | None = None,
    ) -> None:
        self.config = config or default_config()
        self._host_factory = host_factory or self._default_host
        self._probe_factory = probe_factory or self._default_probe
        self.logger = logging.getLogger(self.__class__.__name__)

    def _default_host(self) -> HostMetricsProvider:
        return HostMetricsProvider(self.config.host.cpu_sample_interval_s)

    def _default_probe(self) -> NvidiaSmiProbe:
        return NvidiaSmiProbe(self.config.probe.nvidia_smi_path, self.config.probe.timeout_s)

    def get_static_data(self) -> StaticSnapshot:
        self.logger.debug("Collecting static snapshot.")
        host = self._read("host", lambda: self._host_factory().static_host_info())
        models = self._read("gpu list", lambda: self._probe_factory().list_models())

        info = host.unwrap_or(StaticHostInfo("", 1, 0))
        gpus = tuple(
            GpuIdentity(
                raw_model=model,
                normalized_name=clean_gpu_name(model),
                vendor=GpuVendor.NVIDIA,
            )
            for model in models.unwrap_or([])
        )
        return StaticSnapshot(
            cpu_model=clean_cpu_name(info.cpu_brand),
            cpu_cores=max(1, info.physical_core_count),
            mem_total_bytes=info.total_memory_bytes,
            gpus=gpus,
        )

    def get_dynamic_data(self) -> DynamicSample:
        self.logger.debug("Collecting dynamic sample.")
        host = self._read("host", lambda: self._host_factory().dynamic_host_info())
        readings = self._read("gpu query", lambda: self._probe_factory().query_readings())

        info = host.unwrap_or(DynamicHostInfo(0.0, 0))
        gpus: list[GpuReading] = readings.unwrap_or([])
        return DynamicSample(
            cpu_load_percent=min(100.0, max(0.0, info.global_cpu_usage_percent)),
            cpu_temp_celsius=max(0.0, cpu_temperature(info.thermal_sensors)),
            mem_used_bytes=info.used_memory_bytes,
            gpus=tuple(gpus),
            disks=tuple(disk_readings(info.volumes)),
        )

    def _read(self, source: str, reader: Callable[[], Outcome[T] | T]) -> Outcome[T]:
        """Call ``reader`` and fold any failure into an unavailable outcome."""
        try:
            result = reader()
        except Exception as exc:
            # A crashed source must not take down the poll tick.
            self.logger.warning("Source %s failed: %s", source, exc)
            self.logger.debug("Source %s traceback.", source, exc_info=True)
            return Outcome.unavailable(source, str(exc))
        outcome = result if isinstance(result, Outcome) else Outcome.ok(result)
        if not outcome.is_ok:
            self.logger.debug("Source unavailable: %s", outcome.error)
        return outcome
