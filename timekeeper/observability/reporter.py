#!filepath: timekeeper/observability/reporter.py
from typing import Iterable

from timekeeper import logs
from timekeeper.observability.records import TimerRecord


class TimerReporter:
    """
    计时器报告：
    - name → elapsed / state
    """

    def __init__(self, records: Iterable[TimerRecord], title: str):
        self.records = list(records)
        self.title = title

    def print(self):
        logs.info(f"[Timers] ===== Timer report: {self.title} =====")

        if not self.records:
            logs.info("[Timers] (no timers)")

        for rec in self.records:
            state = "running" if rec.is_running else "stopped"
            logs.info(f"[Timers] {rec.name:<30} {rec.elapsed_time:>12} {state}")

        logs.info("[Timers] ===========================================")
