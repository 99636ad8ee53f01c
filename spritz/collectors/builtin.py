#!filepath: spritz/collectors/builtin.py
from __future__ import annotations

from typing import Any, Callable, Hashable, Optional, Set

from spritz.collectors.base import Collector


def _format_number(value: float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class CountCollector(Collector[Any]):
    """Number of events added to the batch."""

    def __init__(self) -> None:
        self._count = 0
        self._result = "0"

    def add_event(self, event: Any) -> None:
        self._count += 1

    def process(self) -> None:
        self._result = str(self._count)

    def get_result(self) -> str:
        return self._result


class LastCollector(Collector[Any]):
    """String form of the most recently added event; "" when there is none."""

    def __init__(self, default: str = "") -> None:
        self._last: Optional[Any] = None
        self._seen = False
        self._default = default
        self._result = default

    def add_event(self, event: Any) -> None:
        self._last = event
        self._seen = True

    def process(self) -> None:
        self._result = str(self._last) if self._seen else self._default

    def get_result(self) -> str:
        return self._result


class SumCollector(Collector[Any]):
    """
    Sum of ``value(event)`` over the batch.

    ``value`` defaults to the event itself. Integral totals render without a
    fractional part (``3.0`` → ``"3"``).
    """

    def __init__(self, value: Optional[Callable[[Any], float]] = None) -> None:
        self._value = value if value is not None else (lambda e: e)
        self._total: float = 0
        self._result = "0"

    def add_event(self, event: Any) -> None:
        self._total += self._value(event)

    def process(self) -> None:
        self._result = _format_number(self._total)

    def get_result(self) -> str:
        return self._result


class DistinctCollector(Collector[Any]):
    """Number of distinct ``key(event)`` values."""

    def __init__(self, key: Optional[Callable[[Any], Hashable]] = None) -> None:
        self._key = key if key is not None else (lambda e: e)
        self._seen: Set[Hashable] = set()
        self._result = "0"

    def add_event(self, event: Any) -> None:
        self._seen.add(self._key(event))

    def process(self) -> None:
        self._result = str(len(self._seen))

    def get_result(self) -> str:
        return self._result
