#!filepath: spritz/__init__.py

from .utils.logger import Logging, logs, init_logging
from .utils.errors import (
    SpritzError,
    DuplicateBatchError,
    UnknownBatchError,
    NoCurrentBatchError,
    BatchFinalizedError,
    ConcurrentFinalizeError,
    FactorySealedError,
)
from .collectors import (
    Collector,
    CollectorFactory,
    CollectorSpec,
    CountCollector,
    DistinctCollector,
    LastCollector,
    SumCollector,
)
from .batch import Batch, BatchState
from .consumer import EventConsumer
from .config import AppConfig, ConsumerConfig, LogConfig

__version__ = "0.3.0"

__all__ = [
    "logs", "Logging", "init_logging",
    "SpritzError",
    "DuplicateBatchError",
    "UnknownBatchError",
    "NoCurrentBatchError",
    "BatchFinalizedError",
    "ConcurrentFinalizeError",
    "FactorySealedError",
    "Collector",
    "CollectorFactory",
    "CollectorSpec",
    "CountCollector",
    "DistinctCollector",
    "LastCollector",
    "SumCollector",
    "Batch",
    "BatchState",
    "EventConsumer",
    "AppConfig",
    "ConsumerConfig",
    "LogConfig",
]
