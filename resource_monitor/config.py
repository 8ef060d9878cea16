from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import configparser

DEFAULT_TASK_NAME = "WindowsResourceMonitorAutoStart"


@dataclass(frozen=True)
class ProbeConfig:
    nvidia_smi_path: str
    # None waits for the tool indefinitely
    timeout_s: float | None


@dataclass(frozen=True)
class HostConfig:
    cpu_sample_interval_s: float


@dataclass(frozen=True)
class StartupConfig:
    schtasks_path: str
    task_name: str


@dataclass(frozen=True)
class PollConfig:
    interval_s: float


@dataclass(frozen=True)
class AppConfig:
    probe: ProbeConfig
    host: HostConfig
    startup: StartupConfig
    poll: PollConfig


def _get_optional_float(value: str | None) -> float | None:
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    parsed = float(value)
    return parsed if parsed > 0 else None


def _build_config(parser: configparser.ConfigParser) -> AppConfig:
    # parser.get/getfloat with fallback tolerates missing sections
    probe = ProbeConfig(
        nvidia_smi_path=parser.get("probe", "nvidia_smi_path", fallback="nvidia-smi"),
        timeout_s=_get_optional_float(parser.get("probe", "timeout_s", fallback=None)),
    )
    host = HostConfig(
        cpu_sample_interval_s=max(
            0.0, parser.getfloat("host", "cpu_sample_interval_s", fallback=0.1)
        ),
    )
    startup = StartupConfig(
        schtasks_path=parser.get("startup", "schtasks_path", fallback="schtasks"),
        task_name=parser.get("startup", "task_name", fallback=DEFAULT_TASK_NAME),
    )
    poll = PollConfig(
        interval_s=parser.getfloat("poll", "interval_s", fallback=2.0),
    )
    return AppConfig(probe=probe, host=host, startup=startup, poll=poll)


def default_config() -> AppConfig:
    return _build_config(configparser.ConfigParser())


def load_config(path: str | Path) -> AppConfig:
    parser = configparser.ConfigParser(inline_comment_prefixes=(";", "#"))
    read_files = parser.read(path)
    if not read_files:
        raise FileNotFoundError(f"Config file not found: {path}")
    return _build_config(parser)
