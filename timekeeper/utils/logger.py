#!filepath: timekeeper/utils/logger.py
import os
import sys
import json
from functools import wraps
from time import perf_counter
from loguru import logger
from typing import Callable, Optional


class Logging:
    """
    计时器日志模块（loguru 封装）
    ---------------------------------------
    - 作为库被 import 时不碰宿主程序的 loguru handler
    - init_logging 之后：stderr（默认 WARNING 以上）
    - 可选按日期切割的文件日志
    - 包含函数级日志装饰器
    ---------------------------------------
    """

    def __init__(
        self,
        log_dir: Optional[str] = None,
        rotation: str = "1 day",
        retention: str = "30 days",
        log_level: str = "WARNING",
        configure: bool = True,
    ):
        self.log_dir = log_dir
        self.rotation = rotation
        self.retention = retention
        self.level = log_level
        self._handler_ids: list[int] = []

        if configure:
            self._configure()

    def _configure(self) -> None:
        """
        添加 stderr + （可选）文件 sink；只移除自己上次添加的 handler
        """

        for handler_id in self._handler_ids:
            logger.remove(handler_id)
        self._handler_ids = []

        self._handler_ids.append(logger.add(
            sink=sys.stderr,
            level=self.level,
            format="{time:HH:mm:ss.SSS} | {level} | {message}",
        ))

        if self.log_dir is not None:
            os.makedirs(self.log_dir, exist_ok=True)
            self._handler_ids.append(logger.add(
                sink=f"{self.log_dir}/{{time:YYYY-MM-DD}}.log",
                rotation=self.rotation,
                retention=self.retention,
                level=self.level,
                format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}",
                enqueue=True,  # 多线程安全
                backtrace=True,
                diagnose=True,
            ))
            logger.info("-----------Logger initialized: {}-----------", self.log_dir)

    # ----------- 日志方法 -----------
    def debug(self, msg: str, *args, **kwargs):
        logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs):
        logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs):
        logger.error(msg, *args, **kwargs)

    def exception(self, msg: str, *args, **kwargs):
        logger.exception(msg, *args, **kwargs)

    # ---------- 日志装饰器 ----------
    def catch(
        self,
        msg: str = "Exception occurred",
        log_inputs: bool = False,
        log_outputs: bool = False,
        log_time: bool = True,
    ) -> Callable:

        def decorator(func: Callable):
            @wraps(func)
            def wrapper(*args, **kwargs):

                if log_inputs:
                    logger.debug(
                        f"[CALL] {func.__name__} args={args}, "
                        f"kwargs={json.dumps(kwargs, ensure_ascii=False, default=str)}"
                    )

                start = perf_counter()

                try:
                    result = func(*args, **kwargs)
                except Exception:
                    logger.exception(f"[ERROR] {func.__name__}: {msg}")
                    raise

                if log_outputs:
                    logger.debug(f"[RETURN] {func.__name__} result={result}")

                if log_time:
                    cost = perf_counter() - start
                    logger.debug(f"[TIME] {func.__name__} took {cost:.4f}s")

                return result

            return wrapper

        return decorator


def init_logging(cfg) -> Logging:
    """
    按 LogConfig 原地重新配置全局 logs（CLI 启动时调用一次）。
    已经 `from timekeeper import logs` 的模块拿到的是同一个对象。

    这是应用入口的行为：清空全部 loguru handler，并启用 timekeeper 的日志。
    """
    logger.remove()
    logger.enable("timekeeper")
    logs._handler_ids = []
    logs.log_dir = cfg.dir if cfg.to_file else None
    logs.rotation = cfg.rotation
    logs.retention = cfg.retention
    logs.level = cfg.level
    logs._configure()
    return logs


# 默认全局 logs：import 时不配置 sink，timekeeper 日志默认关闭（loguru 库约定），
# 宿主程序用 logger.enable("timekeeper") 或 init_logging 打开
logs = Logging(configure=False)
logger.disable("timekeeper")
