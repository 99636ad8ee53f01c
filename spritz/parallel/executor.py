# spritz/parallel/executor.py
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, wait
from typing import Any, Callable, Dict, Mapping

from spritz.utils.errors import ConcurrentFinalizeError
from spritz.utils.logger import logs


class ParallelExecutor:
    """
    ParallelExecutor

    - fork 一个 unit of work / item，join-all 之后才返回
    - 不做 fail-fast：失败在所有 worker 结束后统一抛出
    - 串行 / 线程池两条路径的失败语义一致
    - 线程池：items 留在调用方内存中，worker 之间不共享可变状态
    """

    @staticmethod
    def run(
            *,
            items: Mapping[str, Any],
            handler: Callable[[Any], Any],
            max_workers: int | None = None,
            label: str = "item",
    ) -> Dict[str, Any]:
        items = dict(items)
        if not items:
            logs.info(f"[ParallelExecutor] no {label} to process")
            return {}

        workers = ParallelExecutor._resolve_workers(items, max_workers)

        logs.info(
            f"[ParallelExecutor] start "
            f"{label}s={len(items)} workers={workers}"
        )

        if workers == 1:
            results, failures = ParallelExecutor._run_sequential(items, handler)
        else:
            results, failures = ParallelExecutor._run_parallel(items, handler, workers)

        if failures:
            # 保持 items 的插入顺序
            ordered = {key: failures[key] for key in items if key in failures}
            # KeyboardInterrupt / SystemExit 等原样抛出（仍在 join-all 之后）
            for exc in ordered.values():
                if not isinstance(exc, Exception):
                    raise exc
            error = ConcurrentFinalizeError(ordered)
            raise error from next(iter(ordered.values()))

        return {key: results[key] for key in items}

    # ---------------- internal ----------------

    @staticmethod
    def _resolve_workers(items: Mapping[str, Any], max_workers: int | None) -> int:
        if max_workers is None:
            return max(1, len(items))
        return max(1, min(max_workers, len(items)))

    @staticmethod
    def _run_sequential(
            items: Dict[str, Any],
            handler: Callable[[Any], Any],
    ) -> tuple[Dict[str, Any], Dict[str, BaseException]]:
        results: Dict[str, Any] = {}
        failures: Dict[str, BaseException] = {}
        for key, item in items.items():
            try:
                results[key] = handler(item)
            except BaseException as exc:
                failures[key] = exc
        return results, failures

    @staticmethod
    def _run_parallel(
            items: Dict[str, Any],
            handler: Callable[[Any], Any],
            workers: int,
    ) -> tuple[Dict[str, Any], Dict[str, BaseException]]:
        results: Dict[str, Any] = {}
        failures: Dict[str, BaseException] = {}

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="spritz") as pool:
            futures = {
                pool.submit(handler, item): key
                for key, item in items.items()
            }
            # join-all barrier
            wait(futures)

        for fut, key in futures.items():
            exc = fut.exception()
            if exc is not None:
                failures[key] = exc
            else:
                results[key] = fut.result()

        return results, failures
