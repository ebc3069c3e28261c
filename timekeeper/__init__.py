#!filepath: timekeeper/__init__.py

from .utils.logger import Logging, logs, init_logging
from .config.app_config import AppConfig
from .observability.clock import build_clock
from .observability.records import OperationResult, TimerRecord
from .observability.registry import TimerRegistry
from .observability.instrumentation import Instrumentation
from .utils.errors import (
    TimerError,
    TimerAlreadyExistsError,
    TimerNotFoundError,
    TimerStillRunningError,
    TimerRemovalFailedError,
    RegistryEmptyError,
    RegistryUndefinedError,
    TimerInputError,
)

__version__ = "0.1.0"


def registry_from_config(cfg: AppConfig | None = None) -> TimerRegistry:
    """按配置选择时钟，返回一个全新的 registry。"""
    cfg = cfg or AppConfig()
    return TimerRegistry(clock=build_clock(cfg.timer.clock))


__all__ = [
    "logs", "Logging", "init_logging",
    "AppConfig",
    "TimerRegistry", "TimerRecord", "OperationResult",
    "Instrumentation",
    "registry_from_config",
    "TimerError",
    "TimerAlreadyExistsError",
    "TimerNotFoundError",
    "TimerStillRunningError",
    "TimerRemovalFailedError",
    "RegistryEmptyError",
    "RegistryUndefinedError",
    "TimerInputError",
]
