from __future__ import annotations

from typing import Any, Callable
import logging

from resource_monitor.config import AppConfig, default_config
from resource_monitor.sampler import TelemetrySampler
from resource_monitor.startup import AutostartManager


class UnknownCommandError(KeyError):
    """Raised when the display layer invokes a command that does not exist."""


class CommandRouter:
    """Command surface handed to the display layer.

    Commands are invoked by name and return JSON-ready values. Sampling
    commands never raise; the only error on this surface is an unknown
    command name.
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        sampler: TelemetrySampler | None = None,
        autostart: AutostartManager | None = None,
    ) -> None:
        self.config = config or default_config()
        self.sampler = sampler or TelemetrySampler(self.config)
        self.autostart = autostart or AutostartManager(self.config.startup)
        self.logger = logging.getLogger(self.__class__.__name__)
        self._handlers: dict[str, Callable[..., Any]] = {
            "get_static_data": self.get_static_data,
            "get_dynamic_data": self.get_dynamic_data,
            "toggle_startup": self.toggle_startup,
            "get_startup_setting": self.get_startup_setting,
        }

    @property
    def commands(self) -> list[str]:
        return sorted(self._handlers)

    def get_static_data(self) -> dict[str, Any]:
        return self.sampler.get_static_data().to_payload()

    def get_dynamic_data(self) -> dict[str, Any]:
        return self.sampler.get_dynamic_data().to_payload()

    def toggle_startup(self, enable: bool) -> bool:
        return self.autostart.toggle(bool(enable))

    def get_startup_setting(self) -> bool:
        return self.autostart.is_enabled()

    def invoke(self, name: str, **kwargs: Any) -> Any:
        handler = self._handlers.get(name)
        if handler is None:
            raise UnknownCommandError(name)
        self.logger.debug("Invoking %s %s", name, kwargs or "")
        return handler(**kwargs)
