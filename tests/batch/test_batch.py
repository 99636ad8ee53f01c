# tests/batch/test_batch.py
import pytest

from spritz import Batch, BatchState, CollectorFactory, CountCollector
from spritz.utils.errors import BatchFinalizedError


def test_scenario_batch_with_events(count_last_factory):
    b = Batch(count_last_factory, "b1")
    b.add_events(["a", "b", "c"])
    b.process()

    assert b.get_result() == ["b1", "3", "c"]
    assert str(b) == "b1,3,c"


def test_scenario_empty_batch(count_last_factory):
    b = Batch(count_last_factory, "b2")
    b.process()

    assert b.get_result() == ["b2", "0", ""]


def test_result_length_is_one_plus_specs(count_last_factory):
    b = Batch(count_last_factory, "x")

    result = b.get_result()
    assert len(result) == 1 + count_last_factory.size()
    assert result[0] == "x"
    assert len(b) == count_last_factory.size()


def test_batch_with_no_collectors():
    b = Batch(CollectorFactory(), "solo")
    b.add_event("ignored")
    b.process()

    assert b.get_result() == ["solo"]
    assert str(b) == "solo"


def test_events_forwarded_to_every_collector_in_order(recording_collector_cls):
    calls = []

    class Tracking(recording_collector_cls):
        def add_event(self, event):
            calls.append((self.tag, event))
            super().add_event(event)

    f = (
        CollectorFactory()
        .register("first", lambda: Tracking("first"))
        .register("second", lambda: Tracking("second"))
    )
    b = Batch(f, "b")
    b.add_event(1)
    b.add_event(2)

    assert calls == [("first", 1), ("second", 1), ("first", 2), ("second", 2)]


def test_lifecycle_states(count_last_factory):
    b = Batch(count_last_factory, "b")
    assert b.state is BatchState.COLLECTING
    assert not b.finalized

    b.process()
    assert b.state is BatchState.FINALIZED
    assert b.finalized


def test_add_event_after_process_raises(recording_collector_cls):
    f = CollectorFactory().register("rec", recording_collector_cls)
    b = Batch(f, "b")
    b.add_event("a")
    b.process()

    with pytest.raises(BatchFinalizedError) as exc_info:
        b.add_event("late")

    assert exc_info.value.batch_id == "b"
    assert b.collectors[0].events == ["a"]


def test_process_twice_raises_and_collectors_run_once(recording_collector_cls):
    f = CollectorFactory().register("rec", recording_collector_cls)
    b = Batch(f, "b")
    b.run()

    with pytest.raises(BatchFinalizedError):
        b.process()

    assert b.collectors[0].process_calls == 1


def test_get_result_by_name(count_last_factory):
    b = Batch(count_last_factory, "b1")
    b.add_events(["a", "b"])
    b.process()

    assert b.get_result_by_name("count") == "2"
    assert b.get_result_by_name("last") == "b"


def test_get_result_by_name_does_not_match_result_values(count_last_factory):
    b = Batch(count_last_factory, "b1")
    b.add_events(["count"])
    b.process()

    # "1" 是 count 的结果值，不是 collector 名称
    assert b.get_result_by_name("1") is None
    assert b.get_result_by_name("missing") is None


def test_get_result_by_name_duplicate_returns_first():
    f = (
        CollectorFactory()
        .register("dup", CountCollector)
        .register("dup", lambda: _Const("second"))
    )
    b = Batch(f, "b")
    b.add_event("e")
    b.process()

    assert b.get_result_by_name("dup") == "1"
    assert b.get_result() == ["b", "1", "second"]


def test_collectors_not_shared_between_batches(count_last_factory):
    b1 = Batch(count_last_factory, "b1")
    b2 = Batch(count_last_factory, "b2")

    assert all(c1 is not c2 for c1, c2 in zip(b1.collectors, b2.collectors))


class _Const(CountCollector):
    def __init__(self, value):
        super().__init__()
        self.value = value

    def get_result(self):
        return self.value


class _FailingProcess(CountCollector):
    def process(self):
        raise RuntimeError("process failed")


def test_failed_process_closes_batch(recording_collector_cls):
    f = (
        CollectorFactory()
        .register("rec", recording_collector_cls)
        .register("bad", _FailingProcess)
    )
    b = Batch(f, "b1")
    b.add_event("a")

    with pytest.raises(RuntimeError, match="process failed"):
        b.process()

    assert b.state is BatchState.FAILED
    assert b.closed
    assert not b.finalized

    # 已 process 的 collector 不再接收事件，也不会被 process 第二次
    with pytest.raises(BatchFinalizedError) as exc_info:
        b.add_event("late")
    assert exc_info.value.state == "failed"

    with pytest.raises(BatchFinalizedError):
        b.process()

    rec = b.collectors[0]
    assert rec.events == ["a"]
    assert rec.process_calls == 1


def test_failed_batch_not_reprocessed_by_consumer(recording_collector_cls):
    from spritz import EventConsumer

    f = (
        CollectorFactory()
        .register("rec", recording_collector_cls)
        .register("bad", _FailingProcess)
    )
    c = EventConsumer(f)
    c.new_batch("b1")
    c.add_event("a")

    with pytest.raises(RuntimeError):
        c.process()

    with pytest.raises(BatchFinalizedError):
        c.add_event("late")
    with pytest.raises(BatchFinalizedError):
        c.process()

    assert c.get_batch("b1").collectors[0].process_calls == 1
