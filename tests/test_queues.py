import pytest

from labkit.queues import (
    ConcurrentQueue,
    QueueEmptyError,
    UnsafeQueue,
    drain_concurrently,
    fill_concurrently,
    main,
)


@pytest.mark.parametrize("cls", [UnsafeQueue, ConcurrentQueue])
def test_fifo_order(cls):
    queue = cls()
    for value in (7, 8, 9):
        queue.enqueue(value)
    assert len(queue) == 3
    assert [queue.dequeue() for _ in range(3)] == [7, 8, 9]
    assert len(queue) == 0


@pytest.mark.parametrize("cls", [UnsafeQueue, ConcurrentQueue])
def test_dequeue_empty_raises(cls):
    queue = cls()
    with pytest.raises(QueueEmptyError, match="Queue is empty, cannot dequeue"):
        queue.dequeue()


def test_queue_empty_error_is_index_error():
    with pytest.raises(IndexError):
        ConcurrentQueue().dequeue()


def test_fill_concurrently_adds_all_items():
    queue = fill_concurrently(ConcurrentQueue(), 1000, 4)
    assert len(queue) == 1000


def test_fill_values_are_31_bit():
    queue = fill_concurrently(ConcurrentQueue(), 200, 3)
    values = drain_concurrently(queue, 200, 3)
    assert len(values) == 200
    assert all(0 <= value < 2**31 for value in values)
    assert len(queue) == 0


def test_drain_preserves_items():
    queue = ConcurrentQueue(range(50))
    taken = drain_concurrently(queue, 50, 5)
    assert sorted(taken) == list(range(50))


def test_drain_more_than_present_raises():
    queue = ConcurrentQueue(range(3))
    with pytest.raises(QueueEmptyError):
        drain_concurrently(queue, 10, 2)


def test_invalid_workers():
    with pytest.raises(ValueError):
        fill_concurrently(ConcurrentQueue(), 10, 0)


def test_main_v1_panics_on_fourth_dequeue(capsys):
    assert main(["--version", "v1"]) == 1
    captured = capsys.readouterr()
    assert "Queue size after enqueuing 3 items: 3" in captured.out
    assert "Queue is empty, cannot dequeue" in captured.err


def test_main_v3_ends_empty(capsys):
    assert main(["--version", "v3", "--count", "100", "--workers", "4"]) == 0
    assert "Queue size after enqueuing 100 items: 0" in capsys.readouterr().out