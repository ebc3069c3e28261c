#!filepath: timekeeper/observability/instrumentation.py
from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field

from timekeeper.observability.registry import TimerRegistry
from timekeeper.observability.reporter import TimerReporter


@dataclass
class Instrumentation:
    """
    Registry 之上的 with-语法入口。

    - timer(name) 进入时强制启动同名计时器，退出时停止（异常也会停止）
    - 停止后的计时器留在 registry 里，可以 get / report
    - enabled=False 时不产生任何副作用
    """

    registry: TimerRegistry = field(default_factory=TimerRegistry)
    enabled: bool = True

    def timer(self, name: str):
        inst = self

        @contextmanager
        def _ctx():
            if not inst.enabled:
                yield
                return

            inst.registry.start(name, force=True).raise_for_errors()
            try:
                yield
            finally:
                inst.registry.stop(name).raise_for_errors()

        return _ctx()

    def generate_report(self, title: str = "session") -> None:
        if not self.registry.initialized:
            TimerReporter([], title).print()
            return
        TimerReporter(self.registry.get().items, title).print()
