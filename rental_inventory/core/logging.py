"""Logging setup and the logger handed to every service."""
from __future__ import annotations

import logging
from typing import Any, Mapping

from .config import Settings

LOG_FORMAT = "[%(asctime)s] %(levelname)s - %(name)s - %(message)s"


def configure_logging(settings: Settings) -> None:
    """Install a single stream handler on the root logger."""

    logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT, force=True)


class ServiceLogger:
    """Event-oriented wrapper around a standard library logger.

    Services receive an instance at construction instead of reaching for a
    module-level logger, so tests can pass a mock and assert on events.
    """

    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    @property
    def name(self) -> str:
        return self._logger.name

    def info(self, event: str, message: str, context: Mapping[str, Any] | None = None) -> None:
        self._log(logging.INFO, event, message, context)

    def warn(self, event: str, message: str, context: Mapping[str, Any] | None = None) -> None:
        self._log(logging.WARNING, event, message, context)

    def error(
        self,
        event: str,
        message: str,
        context: Mapping[str, Any] | None = None,
        *,
        exc_info: bool = False,
    ) -> None:
        self._log(logging.ERROR, event, message, context, exc_info=exc_info)

    def _log(
        self,
        level: int,
        event: str,
        message: str,
        context: Mapping[str, Any] | None,
        *,
        exc_info: bool = False,
    ) -> None:
        extra = {"event": event, "context": dict(context or {})}
        if context:
            rendered = ", ".join(f"{key}={value}" for key, value in context.items())
            self._logger.log(level, f"[{event}] {message} ({rendered})", extra=extra, exc_info=exc_info)
        else:
            self._logger.log(level, f"[{event}] {message}", extra=extra, exc_info=exc_info)


def get_service_logger(name: str) -> ServiceLogger:
    """Return a ServiceLogger bound to ``logging.getLogger(name)``."""

    return ServiceLogger(logging.getLogger(name))
