#!filepath: timekeeper/observability/registry.py
from __future__ import annotations

import threading
from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Union

from timekeeper import logs
from timekeeper.observability.clock import Clock, PerfCounterClock
from timekeeper.observability.formatting import format_elapsed
from timekeeper.observability.records import OperationResult, Timer, TimerRecord
from timekeeper.utils.errors import (
    RegistryEmptyError,
    RegistryUndefinedError,
    TimerAlreadyExistsError,
    TimerError,
    TimerInputError,
    TimerNotFoundError,
    TimerRemovalFailedError,
    TimerStillRunningError,
)

Names = Union[str, Iterable[str], None]


class TimerRegistry:
    """
    命名计时器注册表（线程安全）

    - start(names, force)   → 新建 / 强制重建
    - get(names)            → 快照（names 为空 = 全部）
    - stop(names)           → 冻结 elapsed
    - reset(names)          → 清零并重新开始
    - remove(names, force)  → 删除

    设计约束：
    1. 条目不可变（Timer 为 frozen dataclass），所有修改都是整条替换
    2. 只有三个原子原语碰字典：insert-if-absent / compare-and-set /
       compare-and-remove，锁只覆盖一次字典访问
    3. 逐名失败进入 OperationResult.errors，不打断同一调用里的其他名字
    4. RegistryEmpty / RegistryUndefined 在处理任何名字之前整体抛出
    """

    def __init__(self, clock: Optional[Clock] = None):
        self.clock: Clock = clock or PerfCounterClock()
        self._timers: Dict[str, Timer] = {}
        self._lock = threading.Lock()
        self._initialized = False

    # ---------------------------------------------------------
    # 只读视图
    # ---------------------------------------------------------
    @property
    def initialized(self) -> bool:
        """True once any start has been issued; never goes back to False."""
        return self._initialized

    def names(self) -> List[str]:
        with self._lock:
            return sorted(self._timers)

    def __len__(self) -> int:
        with self._lock:
            return len(self._timers)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._timers

    # ---------------------------------------------------------
    # 原子原语（唯一持锁的地方）
    # ---------------------------------------------------------
    def _lookup(self, name: str) -> Optional[Timer]:
        with self._lock:
            return self._timers.get(name)

    def _insert_if_absent(self, timer: Timer) -> Optional[Timer]:
        """Insert `timer` unless its name is taken; return the existing entry."""
        with self._lock:
            self._initialized = True
            existing = self._timers.get(timer.name)
            if existing is None:
                self._timers[timer.name] = timer
            return existing

    def _compare_and_set(self, expected: Timer, new: Timer) -> bool:
        with self._lock:
            if self._timers.get(expected.name) is not expected:
                return False
            self._timers[expected.name] = new
            return True

    def _compare_and_remove(self, expected: Timer) -> bool:
        with self._lock:
            if self._timers.get(expected.name) is not expected:
                return False
            del self._timers[expected.name]
            return True

    # ---------------------------------------------------------
    # 内部工具
    # ---------------------------------------------------------
    @staticmethod
    def _normalize(names: Names, *, required: bool) -> List[str]:
        if names is None:
            items: List[str] = []
        elif isinstance(names, str):
            items = [names]
        else:
            items = list(names)

        for name in items:
            if not isinstance(name, str) or not name:
                raise TimerInputError(f"Timer name must be a non-empty string, got {name!r}")

        if required and not items:
            raise TimerInputError("At least one timer name is required")
        return items

    def _record(self, timer: Timer, now: float) -> TimerRecord:
        elapsed = timer.elapsed(now)
        return TimerRecord(
            name=timer.name,
            elapsed_time=format_elapsed(elapsed),
            is_running=timer.running,
            elapsed=elapsed,
        )

    @staticmethod
    def _fail(result: OperationResult, op: str, err: TimerError) -> None:
        logs.warning(f"[Timer] {op} {err.name!r} failed: {err.code}")
        result.errors.append(err)

    # ---------------------------------------------------------
    # Start
    # ---------------------------------------------------------
    def start(self, names: Names, force: bool = False) -> OperationResult[str]:
        """
        Start one timer per name.

        Without ``force`` an existing name fails with AlreadyExists and keeps
        its state. With ``force`` the old entry is replaced by a fresh timer,
        so elapsed goes back to zero. ``items`` holds the started names.
        """
        result: OperationResult[str] = OperationResult()

        for name in self._normalize(names, required=True):
            fresh = Timer(name=name, start_instant=self.clock.now())

            while True:
                existing = self._insert_if_absent(fresh)
                if existing is None:
                    break
                if not force:
                    break
                if self._compare_and_set(existing, fresh):
                    existing = None
                    break
                # 被并发修改/删除，重试

            if existing is not None:
                self._fail(result, "start", TimerAlreadyExistsError(name))
                continue

            logs.debug(f"[Timer] started {name!r} force={force}")
            result.items.append(name)

        return result

    # ---------------------------------------------------------
    # Get
    # ---------------------------------------------------------
    def get(self, names: Names = None) -> OperationResult[TimerRecord]:
        """Snapshot the named timers, or every timer when no name is given."""
        if not self._initialized:
            raise RegistryEmptyError()

        result: OperationResult[TimerRecord] = OperationResult()
        wanted = self._normalize(names, required=False)

        if not wanted:
            with self._lock:
                timers = sorted(self._timers.values(), key=lambda t: t.name)
            now = self.clock.now()
            result.items.extend(self._record(t, now) for t in timers)
            return result

        for name in wanted:
            timer = self._lookup(name)
            if timer is None:
                self._fail(result, "get", TimerNotFoundError(name))
                continue
            result.items.append(self._record(timer, self.clock.now()))

        return result

    # ---------------------------------------------------------
    # Stop
    # ---------------------------------------------------------
    def stop(self, names: Names) -> OperationResult[TimerRecord]:
        """
        Freeze elapsed and mark stopped.

        Stopping an already stopped timer reports the stored elapsed again
        and never advances it.
        """
        if not self._initialized:
            raise RegistryEmptyError()

        result: OperationResult[TimerRecord] = OperationResult()

        for name in self._normalize(names, required=True):
            while True:
                timer = self._lookup(name)
                if timer is None:
                    break
                now = self.clock.now()
                if not timer.running:
                    break
                stopped = replace(timer, running=False, stopped_elapsed=timer.elapsed(now))
                if self._compare_and_set(timer, stopped):
                    timer = stopped
                    break

            if timer is None:
                self._fail(result, "stop", TimerNotFoundError(name))
                continue

            record = self._record(timer, now)
            logs.debug(f"[Timer] stopped {name!r} at {record.elapsed_time}")
            result.items.append(record)

        return result

    # ---------------------------------------------------------
    # Reset
    # ---------------------------------------------------------
    def reset(self, names: Names) -> OperationResult[str]:
        """Clear elapsed and restart; items are confirmation messages."""
        result: OperationResult[str] = OperationResult()

        for name in self._normalize(names, required=True):
            while True:
                timer = self._lookup(name)
                if timer is None:
                    break
                fresh = Timer(name=name, start_instant=self.clock.now())
                if self._compare_and_set(timer, fresh):
                    break

            if timer is None:
                self._fail(result, "reset", TimerNotFoundError(name))
                continue

            logs.debug(f"[Timer] reset {name!r}")
            result.items.append(f"Timer '{name}' has been reset.")

        return result

    # ---------------------------------------------------------
    # Remove
    # ---------------------------------------------------------
    def remove(self, names: Names, force: bool = False) -> OperationResult[str]:
        """
        Delete timers. A running timer needs ``force``.

        If the entry is replaced or removed between the running check and the
        removal, the call reports RemovalFailed instead of retrying, so two
        concurrent removes never both succeed.
        """
        if not self._initialized:
            raise RegistryUndefinedError()

        result: OperationResult[str] = OperationResult()

        for name in self._normalize(names, required=True):
            timer = self._lookup(name)
            if timer is None:
                self._fail(result, "remove", TimerNotFoundError(name))
                continue

            if timer.running and not force:
                self._fail(result, "remove", TimerStillRunningError(name))
                continue

            if not self._compare_and_remove(timer):
                self._fail(result, "remove", TimerRemovalFailedError(name))
                continue

            logs.debug(f"[Timer] removed {name!r} force={force}")
            result.items.append(f"Timer '{name}' has been removed.")

        return result
