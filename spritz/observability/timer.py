#!filepath: spritz/observability/timer.py
import threading
import time
from typing import Dict


class Timer:
    """
    高精度计时器
    - start(name)
    - end(name) → 返回耗时秒数
    - 不同 name 可在多个线程中同时计时
    """

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._start: Dict[str, float] = {}
        self._lock = threading.Lock()

    def start(self, name: str):
        if not self.enabled:
            return
        with self._lock:
            self._start[name] = time.perf_counter()

    def end(self, name: str) -> float:
        if not self.enabled:
            return 0.0
        with self._lock:
            started = self._start.pop(name, None)
        if started is None:
            return 0.0
        return time.perf_counter() - started
