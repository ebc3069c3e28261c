#!filepath: tests/base_test/test_logger.py
import subprocess
import sys

import pytest
from loguru import logger

from timekeeper import Logging, logs, init_logging
from timekeeper.config import LogConfig


def test_catch_logs_and_reraises():
    captured = []
    sink_id = logger.add(lambda msg: captured.append(str(msg)))

    @logs.catch(msg="boom")
    def func():
        raise ValueError("fail")

    with pytest.raises(ValueError):
        func()

    logger.remove(sink_id)
    assert "[ERROR] func: boom" in "\n".join(captured)


def test_catch_logs_time():
    captured = []
    sink_id = logger.add(lambda msg: captured.append(str(msg)))

    @logs.catch()
    def func(x):
        return x * 2

    assert func(3) == 6

    logger.remove(sink_id)
    assert "[TIME] func took" in "\n".join(captured)


def test_init_logging_file_sink(tmp_path):
    cfg = LogConfig(dir=str(tmp_path / "logs"), level="INFO", to_file=True)

    same = init_logging(cfg)

    assert same is logs
    assert logs.level == "INFO"
    assert (tmp_path / "logs").is_dir()

    # 恢复默认，避免后续 test 写文件
    init_logging(LogConfig())
    logger.complete()


def test_logging_without_configure_keeps_host_handlers():
    seen = []
    sink_id = logger.add(lambda msg: seen.append(str(msg)))

    Logging(configure=False)
    logger.info("host message")

    logger.remove(sink_id)
    assert any("host message" in m for m in seen)


def test_configure_removes_only_own_handlers():
    seen = []
    sink_id = logger.add(lambda msg: seen.append(str(msg)))

    own = Logging(log_level="ERROR")
    own._configure()  # 第二次配置只替换自己的 handler
    logger.info("still here")

    for handler_id in own._handler_ids:
        logger.remove(handler_id)
    logger.remove(sink_id)
    assert any("still here" in m for m in seen)


def test_import_leaves_host_logger_alone():
    """宿主程序先装 handler 再 import timekeeper：handler 仍在，timekeeper 默认静默"""
    code = "\n".join([
        "from loguru import logger",
        "seen = []",
        "logger.add(lambda m: seen.append(str(m)), level='DEBUG')",
        "import timekeeper",
        "timekeeper.TimerRegistry().start('A')",
        "logger.info('host message')",
        "print(len(seen), 'host message' in seen[-1])",
    ])
    out = subprocess.run(
        [sys.executable, "-c", code], capture_output=True, text=True, check=True
    )

    assert out.stdout.split() == ["1", "True"]
