#!/usr/bin/env python3
from __future__ import annotations

import random
from dataclasses import dataclass

from spritz import (
    AppConfig,
    CollectorFactory,
    CountCollector,
    DistinctCollector,
    EventConsumer,
    LastCollector,
    SumCollector,
    init_logging,
)

# ================== 配置 ==================
SYMBOLS = ["600000", "000001", "002936"]
EVENTS_PER_SYMBOL = 1_000
RANDOM_SEED = 42
# ==========================================


@dataclass(frozen=True)
class Trade:
    symbol: str
    side: str
    volume: int

    def __str__(self) -> str:
        return f"{self.side}:{self.volume}"


def build_factory() -> CollectorFactory[Trade]:
    return (
        CollectorFactory[Trade]()
        .register("trades", CountCollector)
        .register("volume", lambda: SumCollector(value=lambda t: t.volume))
        .register("sides", lambda: DistinctCollector(key=lambda t: t.side))
        .register("last", LastCollector)
    )


def main() -> None:
    cfg = AppConfig.load()
    init_logging(cfg.log)

    rng = random.Random(RANDOM_SEED)
    consumer = EventConsumer(build_factory(), cfg.consumer)
    consumer.set_batch_label("symbol")

    for symbol in SYMBOLS:
        for _ in range(EVENTS_PER_SYMBOL):
            trade = Trade(symbol, rng.choice("BS"), rng.randint(1, 100) * 100)
            consumer.add_event(trade, trade.symbol)

    consumer.finalize()
    print(consumer.render_report())

    if consumer.inst.enabled:
        consumer.inst.generate_timeline_report("sample_report")


if __name__ == "__main__":
    main()
