#!filepath: spritz/observability/timeline_reporter.py
from typing import Dict

from spritz.utils.logger import logs


class TimelineReporter:
    """
    Finalize timeline 报告：
    - timer name → 耗时秒数
    """

    def __init__(self, timeline: Dict[str, float], title: str):
        self.timeline = timeline
        self.title = title

    def print(self):
        logs.info(f"[Timeline] ===== Finalize timeline for {self.title} =====")

        total = 0.0
        for name, sec in self.timeline.items():
            logs.info(f"[Timeline] {str(name):<30} {sec:>8.3f}s")
            total += sec

        logs.info(f"[Timeline] Total{'':<27} {total:>8.3f}s")
        logs.info("[Timeline] ===========================================")
