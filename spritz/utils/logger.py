#!filepath: spritz/utils/logger.py
from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from spritz.config.log_config import LogConfig


class Logging:
    """
    Thin wrapper around loguru
    ---------------------------------------
    - sinks are only touched by configure()
    - optional daily-rotated file sink
    - enqueue=True, safe for worker threads
    ---------------------------------------
    """

    def __init__(
        self,
        log_dir: str | None = None,
        rotation: str = "1 day",
        retention: str = "30 days",
        log_level: str = "INFO",
    ):
        self.log_dir = log_dir
        self.rotation = rotation
        self.retention = retention
        self.level = log_level
        self.configured = False

    def configure(self) -> None:
        """
        替换 loguru 的全部 handler（只在显式调用时执行）
        """
        logger.remove()

        logger.add(
            sink=sys.stderr,
            level=self.level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}",
        )

        if self.log_dir:
            os.makedirs(self.log_dir, exist_ok=True)
            logger.add(
                sink=f"{self.log_dir}/{{time:YYYY-MM-DD}}.log",
                rotation=self.rotation,
                retention=self.retention,
                level=self.level,
                format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}",
                enqueue=True,
                backtrace=True,
                diagnose=False,
            )

        self.configured = True
        logger.debug("[Logging] configured level={} dir={}", self.level, self.log_dir)

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


def init_logging(config: "LogConfig") -> Logging:
    """
    Apply a LogConfig to the global ``logs`` instance and return it.
    """
    logs.log_dir = config.dir
    logs.rotation = config.rotation
    logs.retention = config.retention
    logs.level = config.level
    logs.configure()
    return logs


# 默认全局 logs（可被 init_logging 重新配置）
logs = Logging()
