from spritz.observability.instrumentation import Instrumentation, NoOpInstrumentation
from spritz.observability.timer import Timer

__all__ = ["Instrumentation", "NoOpInstrumentation", "Timer"]
