from __future__ import annotations

import logging
import platform
import sys

from resource_monitor.config import StartupConfig
from resource_monitor.process import run_command


def launch_command() -> str:
    """Command line the logon task should run to start this program."""
    if getattr(sys, "frozen", False):
        return f'"{sys.executable}"'
    return f'"{sys.executable}" -m resource_monitor'


class AutostartManager:
    """Registers the program as a Windows logon task through ``schtasks``.

    On any other platform both operations are inert: toggling reports the
    requested state back and the current setting reads as disabled.
    """

    def __init__(self, config: StartupConfig) -> None:
        self.config = config
        self.logger = logging.getLogger(self.__class__.__name__)

    def _supported(self) -> bool:
        return platform.system().lower() == "windows"

    def toggle(self, enable: bool) -> bool:
        """Create or delete the logon task.

        The return value is always ``enable``. It echoes the request and does
        not confirm that ``schtasks`` succeeded; use :meth:`is_enabled` for
        that.
        """
        if not self._supported():
            self.logger.debug("Autostart not supported on %s.", platform.system())
            return enable

        if enable:
            command = [
                self.config.schtasks_path,
                "/Create",
                "/TN", self.config.task_name,
                "/TR", launch_command(),
                "/SC", "ONLOGON",
                "/RL", "HIGHEST",
                "/F",
            ]
        else:
            command = [
                self.config.schtasks_path,
                "/Delete",
                "/TN", self.config.task_name,
                "/F",
            ]
        result = run_command(command)
        if result.is_ok:
            self.logger.info(
                "Autostart task %s %s.",
                self.config.task_name,
                "registered" if enable else "removed",
            )
        else:
            self.logger.warning("Autostart change failed: %s", result.error)
        return enable

    def is_enabled(self) -> bool:
        if not self._supported():
            return False
        result = run_command(
            [self.config.schtasks_path, "/Query", "/TN", self.config.task_name]
        )
        return result.is_ok
