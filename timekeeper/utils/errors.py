#!filepath: timekeeper/utils/errors.py
from __future__ import annotations

from typing import Optional


class TimerError(RuntimeError):
    """
    Base class of every registry failure.

    `code` is the stable identifier callers switch on; `name` is the timer the
    failure belongs to (None for whole-call failures).
    """

    code: str = "TimerError"

    def __init__(self, message: str, name: Optional[str] = None):
        super().__init__(message)
        self.name = name


class TimerAlreadyExistsError(TimerError):
    code = "AlreadyExists"

    def __init__(self, name: str):
        super().__init__(
            f"Timer '{name}' already exists. Use force to restart it.", name
        )


class TimerNotFoundError(TimerError):
    code = "NotFound"

    def __init__(self, name: str):
        super().__init__(f"Timer '{name}' does not exist.", name)


class TimerStillRunningError(TimerError):
    code = "StillRunning"

    def __init__(self, name: str):
        super().__init__(
            f"Timer '{name}' is still running. Stop it first or use force.", name
        )


class TimerRemovalFailedError(TimerError):
    code = "RemovalFailed"

    def __init__(self, name: str):
        super().__init__(
            f"Timer '{name}' could not be removed: it changed concurrently.", name
        )


class RegistryEmptyError(TimerError):
    """No timer has ever been started in this registry (get / stop)."""

    code = "RegistryEmpty"

    def __init__(self):
        super().__init__("No timers have been started yet.")


class RegistryUndefinedError(TimerError):
    """No timer has ever been started in this registry (remove)."""

    code = "RegistryUndefined"

    def __init__(self):
        super().__init__("Timer registry is not defined: nothing to remove.")


class TimerInputError(ValueError):
    """
    Raised for invalid caller input (empty name list, non-string names).
    Should NOT print traceback.
    """
