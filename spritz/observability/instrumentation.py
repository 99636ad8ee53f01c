#!filepath: spritz/observability/instrumentation.py
from __future__ import annotations

import threading
from collections import OrderedDict
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict

from spritz.observability.timer import Timer
from spritz.observability.timeline_reporter import TimelineReporter


@dataclass
class Instrumentation:
    """
    Leaf-only accounting + parent scope.

    1. timeline 只记录叶子节点（record=True）
    2. record=False 的 timer 只定义 wall-time，不产生副作用
    3. timeline 写入加锁，worker 线程可并发计时
    """

    enabled: bool = True

    def __post_init__(self):
        self._timer = Timer(enabled=self.enabled)
        self._lock = threading.Lock()

        # timeline: OrderedDict[leaf_name, elapsed_seconds]
        self.timeline: Dict[str, float] = OrderedDict()

    def timer(self, name: str, *, record: bool = True):
        """
        Context-manager timer.

        Parameters
        ----------
        name : str
            计时名称
        record : bool
            - True  : 叶子节点，记录到 timeline
            - False : 父级 scope
        """
        inst = self

        @contextmanager
        def _ctx():
            if not inst.enabled:
                yield
                return

            inst._timer.start(name)
            try:
                yield
            finally:
                elapsed = inst._timer.end(name)
                if record:
                    with inst._lock:
                        inst.timeline[name] = elapsed

        return _ctx()

    def generate_timeline_report(self, title: str):
        with self._lock:
            snapshot = OrderedDict(self.timeline)
        TimelineReporter(snapshot, title).print()


class NoOpInstrumentation:
    """Instrumentation disabled 时使用。"""

    enabled = False

    def timer(self, name: str, *, record: bool = True):
        return _NoOpTimer()

    def generate_timeline_report(self, title: str):
        pass


class _NoOpTimer:
    def __enter__(self):
        pass

    def __exit__(self, exc_type, exc, tb):
        pass
