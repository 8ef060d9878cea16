from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
import logging
import platform
import subprocess
from typing import Callable, TypeVar

import psutil

from resource_monitor.logging_utils import TRACE_LEVEL

CPU_SENSOR_KEYWORDS = ("cpu", "package", "core")
ARCHITECTURE_NAMES = {"x86_64", "i386", "i686", "amd64", "arm64", "aarch64"}

T = TypeVar("T")


@dataclass(frozen=True)
class StaticHostInfo:
    cpu_brand: str
    physical_core_count: int
    total_memory_bytes: int


@dataclass(frozen=True)
class ThermalSensor:
    label: str
    celsius: float


@dataclass(frozen=True)
class Volume:
    mount_point: str
    total_bytes: int
    available_bytes: int


@dataclass(frozen=True)
class DynamicHostInfo:
    global_cpu_usage_percent: float
    used_memory_bytes: int
    thermal_sensors: list[ThermalSensor] = field(default_factory=list)
    volumes: list[Volume] = field(default_factory=list)


def cpu_temperature(sensors: list[ThermalSensor]) -> float:
    """Hottest CPU-adjacent sensor, or 0.0 when no label looks like a CPU."""
    hottest = 0.0
    for sensor in sensors:
        label = sensor.label.lower()
        if any(keyword in label for keyword in CPU_SENSOR_KEYWORDS):
            if sensor.celsius > hottest:
                hottest = sensor.celsius
    return hottest


class HostMetricsProvider:
    """Reads CPU, memory, thermal and volume state through psutil.

    Every read goes back to psutil, nothing is cached between calls. A
    category psutil cannot report on this platform comes back empty rather
    than as zeros.
    """

    def __init__(self, cpu_sample_interval_s: float = 0.1) -> None:
        self.cpu_sample_interval_s = cpu_sample_interval_s
        self.logger = logging.getLogger(self.__class__.__name__)

    def static_host_info(self) -> StaticHostInfo:
        return StaticHostInfo(
            cpu_brand=self._cpu_brand(),
            physical_core_count=psutil.cpu_count(logical=False) or 1,
            total_memory_bytes=int(psutil.virtual_memory().total),
        )

    def dynamic_host_info(self) -> DynamicHostInfo:
        # Each category fails on its own; one broken reading leaves the rest.
        return DynamicHostInfo(
            global_cpu_usage_percent=self._category("CPU load", self._cpu_load, 0.0),
            used_memory_bytes=self._category("memory", self._used_memory, 0),
            thermal_sensors=self._category("thermal sensors", self._thermal_sensors, []),
            volumes=self._category("volumes", self._volumes, []),
        )

    def _category(self, name: str, reader: Callable[[], T], default: T) -> T:
        try:
            return reader()
        except Exception:
            self.logger.debug("Failed to collect %s.", name, exc_info=True)
            return default

    def _cpu_load(self) -> float:
        # The first non-blocking cpu_percent call returns a meaningless 0.0,
        # so sample over a short interval to get a current value.
        return float(psutil.cpu_percent(interval=self.cpu_sample_interval_s or None))

    def _used_memory(self) -> int:
        vm = psutil.virtual_memory()
        return max(0, int(vm.total) - int(vm.available))

    def _thermal_sensors(self) -> list[ThermalSensor]:
        if not hasattr(psutil, "sensors_temperatures"):
            self.logger.debug("Thermal sensors not supported on this platform.")
            return []
        try:
            temps = psutil.sensors_temperatures(fahrenheit=False)
        except (OSError, RuntimeError) as exc:
            self.logger.debug("Failed to read thermal sensors: %s", exc)
            return []
        sensors: list[ThermalSensor] = []
        for chip, entries in (temps or {}).items():
            for entry in entries:
                if entry.current is None:
                    continue
                # Unlabelled readings are identified by their chip name
                sensors.append(
                    ThermalSensor(label=entry.label or chip, celsius=float(entry.current))
                )
        if not sensors:
            self.logger.debug("No thermal sensors found.")
        return sensors

    def _volumes(self) -> list[Volume]:
        volumes: list[Volume] = []
        try:
            partitions = psutil.disk_partitions(all=False)
        except OSError as exc:
            self.logger.debug("Failed to list partitions: %s", exc)
            return []
        for part in partitions:
            try:
                usage = psutil.disk_usage(part.mountpoint)
            except OSError:
                self.logger.debug("Skipping volume at %s (unreadable).", part.mountpoint)
                continue
            volumes.append(
                Volume(
                    mount_point=part.mountpoint,
                    total_bytes=int(usage.total),
                    available_bytes=int(usage.free),
                )
            )
        return volumes

    def _cpu_brand(self) -> str:
        system = platform.system().lower()
        brand: str | None = None
        if system == "windows":
            brand = self._cpu_brand_windows()
        elif system == "darwin":
            brand = self._cpu_brand_darwin()
        elif system == "linux":
            brand = self._cpu_brand_linux()
        if brand:
            return brand

        processor = platform.processor().strip()
        if processor and processor.lower() not in ARCHITECTURE_NAMES:
            return processor
        self.logger.debug("CPU brand string unavailable.")
        return ""

    def _cpu_brand_windows(self) -> str | None:
        try:
            import winreg  # type: ignore

            with winreg.OpenKey(
                winreg.HKEY_LOCAL_MACHINE,
                r"HARDWARE\DESCRIPTION\System\CentralProcessor\0",
            ) as key:
                value, _ = winreg.QueryValueEx(key, "ProcessorNameString")
        except (ImportError, OSError):
            self.logger.debug("ProcessorNameString not readable from registry.")
            return None
        return value.strip() if isinstance(value, str) else None

    def _cpu_brand_darwin(self) -> str | None:
        try:
            result = subprocess.run(
                ["sysctl", "-n", "machdep.cpu.brand_string"],
                check=False,
                text=True,
                capture_output=True,
            )
        except OSError:
            self.logger.debug("Command not found: sysctl")
            return None
        if result.returncode != 0:
            return None
        return result.stdout.strip() or None

    def _cpu_brand_linux(self) -> str | None:
        try:
            cpuinfo = Path("/proc/cpuinfo").read_text(encoding="utf-8", errors="ignore")
        except OSError:
            return None
        for line in cpuinfo.splitlines():
            if line.lower().startswith("model name"):
                _, _, model = line.partition(":")
                self.logger.log(TRACE_LEVEL, "cpuinfo model name: %s", model.strip())
                return model.strip() or None
        return None
