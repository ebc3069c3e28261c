#!filepath: timekeeper/config/timer_config.py
from typing import Literal

from pydantic import BaseModel


class TimerConfig(BaseModel):
    # perf_counter: 高精度；monotonic: 系统单调时钟
    clock: Literal["perf_counter", "monotonic"] = "perf_counter"
