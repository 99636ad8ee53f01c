#!filepath: spritz/utils/errors.py
from __future__ import annotations

from typing import Mapping


class SpritzError(Exception):
    """Root of every error raised by the batch orchestration."""


class DuplicateBatchError(SpritzError, ValueError):
    """
    Raised when a batch is created with an id that is already in use.
    The consumer is left unchanged.
    """

    def __init__(self, batch_id: str):
        self.batch_id = batch_id
        super().__init__(f"A batch with the id `{batch_id}` already exists.")


class UnknownBatchError(SpritzError, LookupError):
    """Raised when strict routing (or a lookup) names a batch that does not exist."""

    def __init__(self, batch_id: str):
        self.batch_id = batch_id
        super().__init__(f"No batch with id `{batch_id}` exists.")

    def __str__(self) -> str:
        return self.args[0]


class NoCurrentBatchError(SpritzError, LookupError):
    """Raised when an event is routed without an id before any batch exists."""

    def __init__(self):
        super().__init__("There is no current batch; create one with new_batch() first.")

    def __str__(self) -> str:
        return self.args[0]


class BatchFinalizedError(SpritzError, RuntimeError):
    """
    Raised when a batch that left COLLECTING (finalized, or failed while
    finalizing) is fed events or finalized a second time.
    """

    def __init__(self, batch_id: str, action: str, state: str = "finalized"):
        self.batch_id = batch_id
        self.action = action
        self.state = state
        super().__init__(f"Batch `{batch_id}` is already {state}; cannot {action}.")


class ConcurrentFinalizeError(SpritzError, RuntimeError):
    """
    Aggregate failure of a concurrent finalize pass.

    Raised only after every worker has finished. ``failures`` maps each failed
    batch id to its exception, in batch insertion order.
    """

    def __init__(self, failures: Mapping[str, BaseException]):
        self.failures = dict(failures)
        ids = ", ".join(f"`{k}`" for k in self.failures)
        super().__init__(
            f"{len(self.failures)} batch(es) failed to finalize: {ids}"
        )


class FactorySealedError(SpritzError, RuntimeError):
    """Raised when a collector is registered after batches have been created from the factory."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"Cannot register collector `{name}`: the factory is sealed once batches exist."
        )
