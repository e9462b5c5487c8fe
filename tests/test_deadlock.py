import pytest

from labkit.deadlock import lock_pair, main, simulate


def test_lock_pair_wraps():
    assert lock_pair(2, 3) == (2, 0)


def test_lock_pair_indices_in_range():
    for index in range(20):
        first, second = lock_pair(index, 3)
        assert 0 <= first < 3
        assert 0 <= second < 3
        assert first != second


def test_lock_pair_rejects_zero_mutexes():
    with pytest.raises(ValueError):
        lock_pair(1, 0)


def test_single_thread_completes():
    assert simulate(1, 0, None) == [0]


def test_two_threads_without_cycle_complete():
    assert simulate(2, 0.01, 5) == [0, 1]


def test_many_threads_with_timeout_return_subset():
    completed = simulate(6, 0, 0.05)
    assert len(completed) == len(set(completed))
    assert set(completed) <= set(range(6))
    assert completed == sorted(completed)


def test_negative_threads_rejected():
    with pytest.raises(ValueError):
        simulate(-1, 0, None)


def test_main_reports_success(capsys):
    assert main(["--threads", "1", "--hold", "0"]) == 0
    assert "All threads have finished processing" in capsys.readouterr().out