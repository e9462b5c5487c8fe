import io
import random
import time

import pytest

from labkit.dbcalls import DbSimulator, generate_data, generate_delays, main


def test_generate_data_names_records_from_one():
    assert generate_data(3) == ["data1", "data2", "data3"]


def test_generate_data_empty():
    assert generate_data(0) == []


def test_generate_delays_within_bounds():
    delays = generate_delays(200, 50.0, random.Random(7))
    assert len(delays) == 200
    assert all(0 <= delay < 50.0 for delay in delays)


def test_generate_delays_reproducible_with_seed():
    first = generate_delays(10, 500.0, random.Random(42))
    second = generate_delays(10, 500.0, random.Random(42))
    assert first == second


def test_generate_delays_rejects_negative_maximum():
    with pytest.raises(ValueError):
        generate_delays(3, -1.0)


def test_simulator_rejects_mismatched_lengths():
    with pytest.raises(ValueError):
        DbSimulator(generate_data(3), [0.0, 0.0])


def test_call_returns_record_and_reports():
    out = io.StringIO()
    simulator = DbSimulator(generate_data(2), [0.5, 0.0], out=out)
    assert simulator.call(1) == "data2"
    assert "the response is: data2" in out.getvalue()


def test_call_waits_for_whole_milliseconds():
    simulator = DbSimulator(["data1"], [30.9])
    start = time.perf_counter()
    record = simulator.call(0)
    elapsed = time.perf_counter() - start
    assert record == "data1"
    assert elapsed >= 0.029


def test_call_out_of_range():
    simulator = DbSimulator(generate_data(2), [0.0, 0.0])
    with pytest.raises(IndexError):
        simulator.call(5)


def test_run_sequential_keeps_order():
    data = generate_data(8)
    simulator = DbSimulator(data, generate_delays(8, 3.0, random.Random(1)))
    assert simulator.run_sequential() == data


def test_run_threaded_keeps_order():
    data = generate_data(20)
    simulator = DbSimulator(data, generate_delays(20, 5.0, random.Random(2)))
    assert simulator.run_threaded() == data


def test_collect_results_gathers_every_record():
    data = generate_data(50)
    simulator = DbSimulator(data, generate_delays(50, 5.0, random.Random(3)))
    results = simulator.collect_results()
    assert len(results) == len(data)
    assert sorted(results) == sorted(data)


def test_collect_results_empty():
    assert DbSimulator([], []).collect_results() == []


def test_main_shared_mode(capsys):
    assert main(["--count", "5", "--max-delay", "1"]) == 0
    output = capsys.readouterr().out
    assert "Results of DB calls: 5" in output
    assert "All DB calls completed in" in output


def test_main_sequential_mode_reports_each_call(capsys):
    assert main(["--count", "3", "--max-delay", "1", "--mode", "sequential"]) == 0
    output = capsys.readouterr().out
    assert output.count("DB Call Completed after") == 3