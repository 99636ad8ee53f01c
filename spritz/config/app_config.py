#!filepath: spritz/config/app_config.py
import os

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .log_config import LogConfig
from .consumer_config import ConsumerConfig


def default_config_path() -> str:
    """
    Packaged defaults: spritz/config/base.yml
    """
    return os.path.join(os.path.dirname(os.path.abspath(__file__)), "base.yml")


# env var -> (section, key)
_ENV_OVERRIDES = {
    "SPRITZ_LOG_LEVEL": ("log", "level"),
    "SPRITZ_LOG_DIR": ("log", "dir"),
    "SPRITZ_MAX_WORKERS": ("consumer", "max_workers"),
    "SPRITZ_BATCH_LABEL": ("consumer", "batch_label"),
}


class AppConfig(BaseModel):
    log: LogConfig = Field(default_factory=LogConfig)
    consumer: ConsumerConfig = Field(default_factory=ConsumerConfig)

    @classmethod
    def load(cls, path: str | None = None, env_file: str | None = None) -> "AppConfig":
        """
        加载 YAML 配置 + .env
        - 默认使用包内 spritz/config/base.yml
        - SPRITZ_* 环境变量覆盖 YAML
        """
        # 1) .env (cwd by default, never overrides the real environment)
        load_dotenv(env_file if env_file is not None else os.path.join(os.getcwd(), ".env"))

        # 2) 决定配置文件路径
        if path is None:
            path = default_config_path()

        if not os.path.exists(path):
            raise FileNotFoundError(f"Config file not found: {path}")

        # 3) 读取 YAML
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
        raw = {k: v for k, v in raw.items() if v is not None}

        # 4) 环境变量覆盖
        for env_name, (section, key) in _ENV_OVERRIDES.items():
            value = os.getenv(env_name)
            if value is None or value == "":
                continue
            if not isinstance(raw.get(section), dict):
                raw[section] = {}
            raw[section][key] = value

        return cls(**raw)
