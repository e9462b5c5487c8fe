from labkit.bench import (
    BenchmarkResult,
    benchmark_empty_list,
    benchmark_preallocated_list,
    format_results,
    insert_elements,
    main,
    measure_time,
)


def test_insert_elements_into_empty():
    assert insert_elements([], 5) == list(range(5))


def test_insert_elements_keeps_existing():
    items = [9]
    result = insert_elements(items, 2)
    assert result == [9, 0, 1]
    assert result is items


def test_measure_time_runs_function():
    calls = []
    result = measure_time(lambda: calls.append(1), "probe")
    assert calls == [1]
    assert result.name == "probe"
    assert result.duration >= 0


def test_benchmark_names():
    assert benchmark_empty_list(10).name == "Empty List"
    assert benchmark_preallocated_list(10).name == "Preallocated Capacity"


def test_format_results_table():
    text = format_results([BenchmarkResult("Empty List", 0.002)])
    lines = text.splitlines()
    assert lines[0] == "Benchmark Results:"
    assert lines[2].startswith("Strategy")
    assert lines[4].startswith("Empty List")
    assert lines[4].index("|") == 31


def test_main_prints_both_strategies(capsys):
    assert main(["--size", "100"]) == 0
    out = capsys.readouterr().out
    assert "Empty List" in out
    assert "Preallocated Capacity" in out