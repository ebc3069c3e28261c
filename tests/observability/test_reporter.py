#!filepath: tests/observability/test_reporter.py

from loguru import logger

from timekeeper.observability.records import TimerRecord
from timekeeper.observability.reporter import TimerReporter


def test_reporter_log_output():
    records = [
        TimerRecord("FTP", "00:00:01.23", False, 1.23),
        TimerRecord("Convert", "00:00:02.34", True, 2.34),
    ]
    reporter = TimerReporter(records, "2025-11-03")

    captured = []

    # 临时添加一个 sink 捕获 Loguru 输出
    sink_id = logger.add(lambda msg: captured.append(str(msg)))

    reporter.print()

    logger.remove(sink_id)  # 恢复

    output = "\n".join(captured)

    assert "Timer report: 2025-11-03" in output
    assert "FTP" in output
    assert "00:00:01.23" in output
    assert "Convert" in output
    assert "running" in output
