from __future__ import annotations

from resource_monitor.models import DynamicSample, StaticSnapshot

BYTE_UNITS = ("B", "KB", "MB", "GB", "TB", "PB")


def format_bytes(size: int, decimals: int = 1) -> str:
    """Format bytes with binary multiples, dropping trailing zeros (1536 -> 1.5 KB)."""
    if size <= 0:
        return "0 B"
    decimals = max(0, decimals)
    value = float(size)
    index = 0
    while value >= 1024 and index < len(BYTE_UNITS) - 1:
        value /= 1024
        index += 1
    text = f"{value:.{decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return f"{text} {BYTE_UNITS[index]}"


def summarize(snapshot: StaticSnapshot | None, sample: DynamicSample) -> str:
    """One-line human readable view of a dynamic sample."""
    parts = [f"CPU {sample.cpu_load_percent:.0f}%"]
    if sample.cpu_temp_celsius > 0:
        parts[0] += f" {sample.cpu_temp_celsius:.0f}°C"
    mem = f"RAM {format_bytes(sample.mem_used_bytes)}"
    if snapshot is not None and snapshot.mem_total_bytes:
        mem += f" / {format_bytes(snapshot.mem_total_bytes)}"
    parts.append(mem)
    for gpu in sample.gpus:
        temp = f" {gpu.temperature_celsius:.0f}°C" if gpu.temperature_celsius > 0 else ""
        parts.append(f"{gpu.model} {gpu.utilization_percent:.0f}%{temp}")
    for disk in sample.disks:
        parts.append(f"{disk.mount_point} {disk.used_percent:.0f}%")
    return " | ".join(parts)
