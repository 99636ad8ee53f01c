#!filepath: tests/observability/test_instrumentation.py

import threading
import time

from loguru import logger

from spritz.observability.instrumentation import Instrumentation, NoOpInstrumentation


def test_instrumentation_timer():
    inst = Instrumentation(enabled=True)

    with inst.timer("step_A"):
        time.sleep(0.01)

    assert "step_A" in inst.timeline
    assert inst.timeline["step_A"] > 0


def test_parent_scope_not_recorded():
    inst = Instrumentation(enabled=True)

    with inst.timer("parent", record=False):
        with inst.timer("leaf"):
            pass

    assert list(inst.timeline) == ["leaf"]


def test_disabled_instrumentation_records_nothing():
    inst = Instrumentation(enabled=False)

    with inst.timer("x"):
        pass

    assert inst.timeline == {}


def test_timer_from_many_threads():
    inst = Instrumentation(enabled=True)

    def work(i):
        with inst.timer(f"t{i}"):
            time.sleep(0.001)

    threads = [threading.Thread(target=work, args=(i,)) for i in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert set(inst.timeline) == {f"t{i}" for i in range(8)}


def test_noop_instrumentation():
    inst = NoOpInstrumentation()

    with inst.timer("x"):
        pass
    inst.generate_timeline_report("nothing")


def test_generate_timeline_report():
    inst = Instrumentation(enabled=True)

    with inst.timer("process:b1"):
        time.sleep(0.005)

    captured = []
    sink_id = logger.add(lambda msg: captured.append(str(msg)))

    inst.generate_timeline_report("run-1")

    logger.remove(sink_id)

    output = "\n".join(captured)

    assert "process:b1" in output
    assert "run-1" in output
    assert "Finalize timeline" in output
