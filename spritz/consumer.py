#!filepath: spritz/consumer.py
from __future__ import annotations

from typing import Dict, Generic, Iterable, List, Optional

import pandas as pd
import pyarrow as pa

from spritz.batch import Batch
from spritz.collectors.base import E
from spritz.collectors.factory import CollectorFactory
from spritz.config.consumer_config import ConsumerConfig
from spritz.observability.instrumentation import Instrumentation, NoOpInstrumentation
from spritz.parallel.executor import ParallelExecutor
from spritz.utils.errors import (
    DuplicateBatchError,
    NoCurrentBatchError,
    UnknownBatchError,
)
from spritz.utils.logger import logs


class EventConsumer(Generic[E]):
    """
    EventConsumer：事件 → batch 路由 + finalize 调度 + 报告输出

    ======================================
    Addressing
    ======================================

    - explicit id  : add_event(e, batch_id, strict)
        strict=True  → unknown id raises UnknownBatchError
        strict=False → unknown id creates the batch
    - current batch: add_event(e)
        routes to the most recently created batch; NoCurrentBatchError
        when no batch has been created yet (no implicit first batch)

    ======================================
    Finalize
    ======================================

    - process()              : sequential, insertion order
    - process_concurrently() : one worker per batch, join-all, then report
    - 两种模式下结果矩阵的行顺序都等于 batch 的插入顺序

    The batch registry must not be mutated while process_concurrently()
    is running.
    """

    def __init__(
        self,
        factory: CollectorFactory[E],
        config: ConsumerConfig | None = None,
        *,
        inst: Instrumentation | None = None,
    ):
        self._factory = factory
        self.config = config if config is not None else ConsumerConfig()
        self._batch_label = self.config.batch_label

        if inst is None and self.config.instrument:
            inst = Instrumentation(enabled=True)
        self.inst: Instrumentation | NoOpInstrumentation = (
            inst if inst is not None else NoOpInstrumentation()
        )

        # dict 保持插入顺序
        self._batches: Dict[str, Batch[E]] = {}
        self._current_id: Optional[str] = None

    # --------------------------------------------------
    # Registry
    # --------------------------------------------------
    @property
    def factory(self) -> CollectorFactory[E]:
        return self._factory

    @property
    def batch_label(self) -> str:
        return self._batch_label

    @batch_label.setter
    def batch_label(self, label: str) -> None:
        self._batch_label = label

    def set_batch_label(self, label: str) -> None:
        """Label of the batch id column in the report header."""
        self._batch_label = label

    @property
    def current_batch_id(self) -> Optional[str]:
        return self._current_id

    @property
    def current_batch(self) -> Optional[Batch[E]]:
        if self._current_id is None:
            return None
        return self._batches[self._current_id]

    def batch_ids(self) -> List[str]:
        return list(self._batches)

    def batches(self) -> List[Batch[E]]:
        return list(self._batches.values())

    def get_batch(self, batch_id: str) -> Batch[E]:
        try:
            return self._batches[batch_id]
        except KeyError:
            raise UnknownBatchError(batch_id) from None

    def __len__(self) -> int:
        return len(self._batches)

    def __contains__(self, batch_id: object) -> bool:
        return batch_id in self._batches

    # --------------------------------------------------
    # Batch creation
    # --------------------------------------------------
    def new_batch(self, batch_id: str | None = None) -> Batch[E]:
        """
        Adds a new batch and makes it the current batch.

        Without an id the batch is named ``Batch-<n>``, n = number of existing
        batches + 1.
        """
        if batch_id is None:
            batch_id = f"Batch-{len(self._batches) + 1}"
        if batch_id in self._batches:
            raise DuplicateBatchError(batch_id)

        batch = Batch(self._factory, batch_id)
        self._insert(batch)
        return batch

    def _insert(self, batch: Batch[E]) -> None:
        self._factory.seal()
        self._batches[batch.id] = batch
        self._current_id = batch.id
        logs.debug(f"[EventConsumer] new batch id={batch.id} collectors={len(batch)}")

    # --------------------------------------------------
    # Routing
    # --------------------------------------------------
    def add_event(self, event: E, batch_id: str | None = None, strict: bool | None = None) -> None:
        """
        Routes one event to a single batch.

        Parameters
        ----------
        event
            Forwarded untouched to every collector of the batch.
        batch_id
            Target batch. None → current batch (always strict).
        strict
            Only used with an explicit id. None → ``config.strict``.
        """
        if batch_id is None:
            if self._current_id is None:
                raise NoCurrentBatchError()
            self._batches[self._current_id].add_event(event)
            return

        batch = self._batches.get(batch_id)
        if batch is not None:
            batch.add_event(event)
            return

        if strict is None:
            strict = self.config.strict
        if strict:
            raise UnknownBatchError(batch_id)

        # 先喂事件再登记：失败时 consumer 保持不变
        batch = Batch(self._factory, batch_id)
        batch.add_event(event)
        self._insert(batch)

    def add_events(
        self,
        events: Iterable[E],
        batch_id: str | None = None,
        strict: bool | None = None,
    ) -> None:
        for event in events:
            self.add_event(event, batch_id, strict)

    # --------------------------------------------------
    # Finalize
    # --------------------------------------------------
    def process(self) -> None:
        """
        Finalizes every batch sequentially, in insertion order.
        """
        logs.info(f"[EventConsumer] process batches={len(self._batches)}")
        with self.inst.timer("finalize", record=False):
            for batch in self._batches.values():
                self._process_batch(batch)
        logs.info(f"[EventConsumer] process done batches={len(self._batches)}")

    def process_concurrently(self, max_workers: int | None = None) -> None:
        """
        Finalizes every batch on its own worker thread and waits for all of
        them. Raises ConcurrentFinalizeError after the join if any failed; the
        result matrix is not trustworthy in that case.
        """
        if max_workers is None:
            max_workers = self.config.max_workers

        logs.info(f"[EventConsumer] process concurrently batches={len(self._batches)}")
        with self.inst.timer("finalize", record=False):
            ParallelExecutor.run(
                items=dict(self._batches),
                handler=self._process_batch,
                max_workers=max_workers,
                label="batch",
            )
        logs.info(f"[EventConsumer] process concurrently done batches={len(self._batches)}")

    def finalize(self) -> None:
        if self.config.concurrent:
            self.process_concurrently()
        else:
            self.process()

    def _process_batch(self, batch: Batch[E]) -> None:
        with self.inst.timer(f"process:{batch.id}"):
            batch.process()

    # --------------------------------------------------
    # Results
    # --------------------------------------------------
    def header(self) -> List[str]:
        return [self._batch_label] + self._factory.names()

    def get_results(self) -> List[List[str]]:
        """
        One row per batch (insertion order): ``[id, result_1, ..., result_N]``.
        """
        return [batch.get_result() for batch in self._batches.values()]

    def render_report(self) -> str:
        """
        Comma separated header line followed by one line per batch. Results
        are not escaped; a comma inside a result breaks the format.
        """
        lines = [",".join(self.header())]
        lines.extend(str(batch) for batch in self._batches.values())
        return "\n".join(lines)

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(self.get_results(), columns=self.header(), dtype=str)

    def to_arrow(self) -> pa.Table:
        header = self.header()
        rows = self.get_results()
        columns = [
            pa.array([row[i] for row in rows], type=pa.string())
            for i in range(len(header))
        ]
        return pa.Table.from_arrays(columns, names=header)

    def __str__(self) -> str:
        return self.render_report()

    def __repr__(self) -> str:
        return (
            f"EventConsumer(batches={len(self._batches)}, "
            f"collectors={self._factory.names()!r}, current={self._current_id!r})"
        )
