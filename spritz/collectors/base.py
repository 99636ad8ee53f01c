#!filepath: spritz/collectors/base.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Generic, TypeVar

E = TypeVar("E")


class Collector(ABC, Generic[E]):
    """
    Collector 抽象基类：从事件中累积特征（feature extraction）。

    Lifecycle (driven by the owning Batch, never by the collector itself):

        add_event(e) * N  →  process()  →  get_result() * M

    - add_event 只修改实例自身状态
    - process 恰好调用一次，在最后一个 add_event 之后
    - get_result 在 process 之后可重复调用，返回值稳定
    """

    @abstractmethod
    def add_event(self, event: E) -> None:
        """
        Adds an event to the collector.
        """
        raise NotImplementedError

    @abstractmethod
    def process(self) -> None:
        """
        Finalize step executed after all events have been added. Usually used to
        compute derived values, e.g. normalization factors.
        """
        raise NotImplementedError

    @abstractmethod
    def get_result(self) -> str:
        """
        Result of the collector as a string. Before process() the value is
        implementation defined.
        """
        raise NotImplementedError


# zero-arg callable producing a fresh collector
CollectorBuilder = Callable[[], Collector[E]]
