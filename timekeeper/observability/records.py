#!filepath: timekeeper/observability/records.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, TypeVar

from timekeeper.utils.errors import TimerError

T = TypeVar("T")


@dataclass(frozen=True)
class Timer:
    """
    Registry entry (immutable).

    Every state change builds a new Timer; the registry swaps entries
    atomically, so a reader never sees a half-updated timer.
    """

    name: str
    start_instant: float
    running: bool = True
    # frozen elapsed, only meaningful when running is False
    stopped_elapsed: float = 0.0

    def elapsed(self, now: float) -> float:
        if self.running:
            return max(0.0, now - self.start_instant)
        return self.stopped_elapsed


@dataclass(frozen=True)
class TimerRecord:
    """Snapshot returned by get / stop."""

    name: str
    elapsed_time: str
    is_running: bool
    elapsed: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "Name": self.name,
            "ElapsedTime": self.elapsed_time,
            "IsRunning": self.is_running,
        }


@dataclass
class OperationResult(Generic[T]):
    """
    一次调用的逐名结果：
    - items  : 成功项（TimerRecord 或确认字符串），按调用顺序
    - errors : 逐名失败（TimerError 实例），按调用顺序
    部分成功是正常情况。
    """

    items: List[T] = field(default_factory=list)
    errors: List[TimerError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def raise_for_errors(self) -> None:
        if self.errors:
            raise self.errors[0]
