#!filepath: timekeeper/observability/clock.py
import time
from typing import Callable, Protocol


class Clock(Protocol):
    """
    单调时钟接口：
    - now()            → 当前时刻（秒）
    - elapsed(start)   → now() - start
    """

    def now(self) -> float: ...

    def elapsed(self, start: float) -> float: ...


class _FunctionClock:
    def __init__(self, func: Callable[[], float]):
        self._func = func

    def now(self) -> float:
        return self._func()

    def elapsed(self, start: float) -> float:
        return self._func() - start


class PerfCounterClock(_FunctionClock):
    """高精度计时（time.perf_counter），默认时钟。"""

    def __init__(self):
        super().__init__(time.perf_counter)


class MonotonicClock(_FunctionClock):
    def __init__(self):
        super().__init__(time.monotonic)


CLOCKS = {
    "perf_counter": PerfCounterClock,
    "monotonic": MonotonicClock,
}


def build_clock(kind: str = "perf_counter") -> Clock:
    try:
        return CLOCKS[kind]()
    except KeyError:
        raise ValueError(
            f"Unknown clock '{kind}', expected one of {sorted(CLOCKS)}"
        ) from None
