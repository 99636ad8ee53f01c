# tests/conftest.py
from __future__ import annotations

import threading
from typing import Any, List

import pytest
from loguru import logger

from spritz import Collector, CollectorFactory, CountCollector, EventConsumer, LastCollector


@pytest.fixture(autouse=True)
def disable_file_logger():
    logger.remove()
    logger.add(lambda msg: None)
    yield


class RecordingCollector(Collector[Any]):
    """
    测试用 collector：记录所有调用，结果为事件列表（以 | 连接）
    """

    def __init__(self, tag: str = ""):
        self.tag = tag
        self.events: List[Any] = []
        self.process_calls = 0
        self.thread_name: str | None = None

    def add_event(self, event: Any) -> None:
        self.events.append(event)

    def process(self) -> None:
        self.process_calls += 1
        self.thread_name = threading.current_thread().name

    def get_result(self) -> str:
        if not self.process_calls:
            return "<pending>"
        return "|".join(str(e) for e in self.events)


class FailingCollector(Collector[Any]):
    """process() 抛异常，用于 finalize 失败路径"""

    def __init__(self, message: str = "boom"):
        self.message = message

    def add_event(self, event: Any) -> None:
        pass

    def process(self) -> None:
        raise RuntimeError(self.message)

    def get_result(self) -> str:
        return ""


@pytest.fixture
def recording_collector_cls():
    return RecordingCollector


@pytest.fixture
def failing_collector_cls():
    return FailingCollector


@pytest.fixture
def count_last_factory() -> CollectorFactory:
    """
    count → number of add_event calls
    last  → str of the most recent event
    """
    return (
        CollectorFactory()
        .register("count", CountCollector)
        .register("last", LastCollector)
    )


@pytest.fixture
def make_consumer(count_last_factory):
    def _make(**kwargs) -> EventConsumer:
        return EventConsumer(count_last_factory, **kwargs)

    return _make
