from .app_config import AppConfig
from .consumer_config import ConsumerConfig
from .log_config import LogConfig

__all__ = ["AppConfig", "ConsumerConfig", "LogConfig"]
