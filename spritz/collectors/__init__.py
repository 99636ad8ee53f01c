from spritz.collectors.base import Collector, CollectorBuilder
from spritz.collectors.builtin import (
    CountCollector,
    DistinctCollector,
    LastCollector,
    SumCollector,
)
from spritz.collectors.factory import CollectorFactory, CollectorSpec

__all__ = [
    "Collector",
    "CollectorBuilder",
    "CollectorFactory",
    "CollectorSpec",
    "CountCollector",
    "DistinctCollector",
    "LastCollector",
    "SumCollector",
]
