from __future__ import annotations

import logging
import math

from resource_monitor.logging_utils import TRACE_LEVEL
from resource_monitor.models import GpuReading
from resource_monitor.outcome import Outcome
from resource_monitor.process import run_command

MIB = 1024 * 1024

QUERY_FIELDS = "name,utilization.gpu,temperature.gpu,memory.used"
QUERY_ARGS = [f"--query-gpu={QUERY_FIELDS}", "--format=csv,noheader,nounits"]
LIST_ARGS = ["-L"]

logger = logging.getLogger(__name__)


def _parse_float(value: str) -> float:
    try:
        parsed = float(value.strip())
    except ValueError:
        return 0.0
    return parsed if math.isfinite(parsed) else 0.0


def _parse_mib(value: str) -> int:
    try:
        parsed = int(value.strip())
    except ValueError:
        return 0
    return max(0, parsed)


def parse_list_output(output: str) -> list[str]:
    """Extract raw model names from ``nvidia-smi -L`` output.

    Lines look like ``GPU 0: NVIDIA GeForce RTX 3080 (UUID: GPU-...)``.
    Anything without both the ``": "`` and ``" (UUID"`` markers is skipped.
    """
    models: list[str] = []
    for line in output.splitlines():
        start = line.find(": ")
        end = line.find(" (UUID")
        # The model must sit between the markers and be non-empty
        if start < 0 or end <= start + 2:
            if line.strip():
                logger.log(TRACE_LEVEL, "Skipping unrecognised GPU list line: %s", line)
            continue
        models.append(line[start + 2:end])
    return models


def parse_query_output(output: str) -> list[GpuReading]:
    """Parse CSV rows of name, utilization, temperature and memory used (MiB).

    Rows with fewer than four fields are skipped and extra fields ignored. A
    field that fails to parse reads as zero without affecting the others.
    """
    readings: list[GpuReading] = []
    for line in output.splitlines():
        parts = line.split(",")
        if len(parts) < 4:
            if line.strip():
                logger.log(TRACE_LEVEL, "Skipping short GPU query line: %s", line)
            continue
        readings.append(
            GpuReading(
                model=parts[0].strip(),
                utilization_percent=_parse_float(parts[1]),
                temperature_celsius=_parse_float(parts[2]),
                memory_used_bytes=_parse_mib(parts[3]) * MIB,
            )
        )
    return readings


class NvidiaSmiProbe:
    """Queries NVIDIA GPUs through the ``nvidia-smi`` command-line tool."""

    def __init__(self, executable: str = "nvidia-smi", timeout_s: float | None = None) -> None:
        self.executable = executable
        self.timeout_s = timeout_s
        self.logger = logging.getLogger(self.__class__.__name__)

    def list_models(self) -> Outcome[list[str]]:
        output = run_command([self.executable, *LIST_ARGS], timeout=self.timeout_s)
        if not output.is_ok:
            return Outcome(error=output.error)
        models = parse_list_output(output.unwrap_or(""))
        self.logger.debug("nvidia-smi listed %s GPU(s).", len(models))
        return Outcome.ok(models)

    def query_readings(self) -> Outcome[list[GpuReading]]:
        output = run_command([self.executable, *QUERY_ARGS], timeout=self.timeout_s)
        if not output.is_ok:
            return Outcome(error=output.error)
        return Outcome.ok(parse_query_output(output.unwrap_or("")))
