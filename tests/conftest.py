# tests/conftest.py
from __future__ import annotations

import pytest
from loguru import logger

from timekeeper.observability.registry import TimerRegistry


@pytest.fixture(autouse=True)
def disable_file_logger():
    logger.remove()
    logger.enable("timekeeper")  # import 时默认关闭，测试里要捕获输出
    logger.add(lambda msg: None)  # or sys.stderr
    yield


class FakeClock:
    """
    可手动推进的时钟：测试里 elapsed 完全确定。
    """

    def __init__(self, start: float = 1000.0):
        self.t = start

    def now(self) -> float:
        return self.t

    def elapsed(self, start: float) -> float:
        return self.t - start

    def advance(self, seconds: float) -> None:
        self.t += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def registry(clock) -> TimerRegistry:
    """每个 test 一个独立 registry"""
    return TimerRegistry(clock=clock)
