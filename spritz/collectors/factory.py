#!filepath: spritz/collectors/factory.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Iterator, List, Optional, Tuple

from spritz.collectors.base import Collector, CollectorBuilder, E
from spritz.utils.errors import FactorySealedError


@dataclass(frozen=True)
class CollectorSpec(Generic[E]):
    name: str
    build: CollectorBuilder


class CollectorFactory(Generic[E]):
    """
    Ordered registry of (name, builder) pairs.

    Registration order is the column order of every report. Names are not
    required to be unique; a repeated name simply repeats the header column.
    Once sealed (the consumer seals it when the first batch is created) the
    set of specs is fixed, so every batch has the same columns.
    """

    def __init__(self) -> None:
        self._specs: List[CollectorSpec[E]] = []
        self._sealed = False

    def register(self, name: str, build: CollectorBuilder) -> "CollectorFactory[E]":
        if self._sealed:
            raise FactorySealedError(name)
        self._specs.append(CollectorSpec(name=name, build=build))
        return self

    def add(self, build: CollectorBuilder, name: str) -> "CollectorFactory[E]":
        """Same as register(), with the builder first."""
        return self.register(name, build)

    def seal(self) -> None:
        self._sealed = True

    @property
    def sealed(self) -> bool:
        return self._sealed

    def instantiate(self) -> List[Collector[E]]:
        """
        One fresh collector per registered spec, in registration order.
        """
        return [spec.build() for spec in self._specs]

    def names(self) -> List[str]:
        return [spec.name for spec in self._specs]

    def index_of(self, name: str) -> Optional[int]:
        for i, spec in enumerate(self._specs):
            if spec.name == name:
                return i
        return None

    def specs(self) -> Tuple[CollectorSpec[E], ...]:
        return tuple(self._specs)

    def size(self) -> int:
        return len(self._specs)

    def __len__(self) -> int:
        return len(self._specs)

    def __iter__(self) -> Iterator[CollectorSpec[E]]:
        return iter(tuple(self._specs))

    def __repr__(self) -> str:
        return f"CollectorFactory(names={self.names()!r}, sealed={self._sealed})"
