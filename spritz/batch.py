#!filepath: spritz/batch.py
from __future__ import annotations

from enum import Enum
from typing import Generic, Iterable, List, Optional, Tuple

from spritz.collectors.base import Collector, E
from spritz.collectors.factory import CollectorFactory
from spritz.utils.errors import BatchFinalizedError


class BatchState(str, Enum):
    COLLECTING = "collecting"
    FINALIZED = "finalized"
    FAILED = "failed"


class Batch(Generic[E]):
    """
    A batch holds one fresh collector per registered spec and groups the
    collection of events.

        COLLECTING --process()--> FINALIZED
                   +--raise----> FAILED

    Events are only accepted while COLLECTING; results are only meaningful
    once FINALIZED. FAILED is terminal: part of the collectors may already
    have been processed, so the batch can neither collect nor process again.
    """

    def __init__(self, factory: CollectorFactory[E], batch_id: str):
        self._id = batch_id
        self._names: Tuple[str, ...] = tuple(factory.names())
        self._collectors: Tuple[Collector[E], ...] = tuple(factory.instantiate())
        self._state = BatchState.COLLECTING

    @property
    def id(self) -> str:
        return self._id

    @property
    def collectors(self) -> Tuple[Collector[E], ...]:
        return self._collectors

    @property
    def state(self) -> BatchState:
        return self._state

    @property
    def finalized(self) -> bool:
        return self._state is BatchState.FINALIZED

    @property
    def closed(self) -> bool:
        return self._state is not BatchState.COLLECTING

    # --------------------------------------------------
    # Collecting
    # --------------------------------------------------
    def add_event(self, event: E) -> None:
        """
        Adds an event to every collector, in registration order.
        """
        if self.closed:
            raise BatchFinalizedError(self._id, "add events", self._state.value)
        for collector in self._collectors:
            collector.add_event(event)

    def add_events(self, events: Iterable[E]) -> None:
        for event in events:
            self.add_event(event)

    # --------------------------------------------------
    # Finalize
    # --------------------------------------------------
    def process(self) -> None:
        if self.closed:
            raise BatchFinalizedError(self._id, "process again", self._state.value)
        try:
            for collector in self._collectors:
                collector.process()
        except BaseException:
            self._state = BatchState.FAILED
            raise
        self._state = BatchState.FINALIZED

    def run(self) -> None:
        self.process()

    # --------------------------------------------------
    # Results
    # --------------------------------------------------
    def get_result(self) -> List[str]:
        """
        ``[id, result_1, ..., result_N]`` in registration order.
        """
        return [self._id] + [c.get_result() for c in self._collectors]

    def get_result_by_name(self, name: str) -> Optional[str]:
        """
        Result of the collector registered under ``name`` (first one when the
        name is repeated). None if no collector has that name.
        """
        try:
            index = self._names.index(name)
        except ValueError:
            return None
        return self._collectors[index].get_result()

    def __len__(self) -> int:
        return len(self._collectors)

    def __str__(self) -> str:
        return ",".join(self.get_result())

    def __repr__(self) -> str:
        return f"Batch(id={self._id!r}, state={self._state.value}, collectors={len(self)})"
