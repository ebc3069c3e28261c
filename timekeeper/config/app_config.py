#!filepath: timekeeper/config/app_config.py
import os

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .log_config import LogConfig
from .timer_config import TimerConfig


def default_config_path() -> str:
    """
    包内默认配置：timekeeper/config/base.yml（不依赖当前工作目录）
    """
    return os.path.join(os.path.dirname(os.path.abspath(__file__)), "base.yml")


class AppConfig(BaseModel):
    log: LogConfig = Field(default_factory=LogConfig)
    timer: TimerConfig = Field(default_factory=TimerConfig)

    @classmethod
    def load(cls, path: str | None = None) -> "AppConfig":
        """
        加载 YAML 配置 + .env
        - 默认使用包内 base.yml
        - 环境变量覆盖：TIMEKEEPER_LOG_LEVEL / TIMEKEEPER_CLOCK
        """
        # 1) 先加载当前目录的 .env（不存在则忽略）
        load_dotenv()

        # 2) 决定配置文件路径
        if path is None:
            path = default_config_path()

        if not os.path.exists(path):
            raise FileNotFoundError(f"Config file not found: {path}")

        # 3) 读取 YAML
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        # 4) env 覆盖
        level = os.getenv("TIMEKEEPER_LOG_LEVEL")
        if level:
            raw.setdefault("log", {})["level"] = level.upper()

        clock = os.getenv("TIMEKEEPER_CLOCK")
        if clock:
            raw.setdefault("timer", {})["clock"] = clock

        return cls(**raw)
