from spritz.parallel.executor import ParallelExecutor

__all__ = ["ParallelExecutor"]
