import json

import pytest

import run
from run import collect_inputs, format_solution, main, write_results_csv

PUZZLE = "1234341221434300"
SOLUTION = "1234341221434321"


def _write_cnf(path, text="p cnf 3 2\n1 2 0\n-2 3 0\n"):
    path.write_text(text)
    return path


def test_collect_inputs_from_directory(tmp_path):
    _write_cnf(tmp_path / "a.cnf")
    (tmp_path / "b.json").write_text(json.dumps([{"id": "s1", "puzzle": PUZZLE}]))
    (tmp_path / "notes.txt").write_text("ignored")

    items = collect_inputs(tmp_path)
    assert [(i["id"], i["kind"]) for i in items] == [("a", "cnf"), ("s1", "sudoku")]


def test_collect_inputs_rejects_missing_path(tmp_path):
    with pytest.raises(ValueError):
        collect_inputs(tmp_path / "missing")


def test_main_cnf_all_solutions(tmp_path, capsys):
    path = _write_cnf(tmp_path / "trivial.cnf")
    results = main([str(path), "--limit", "0", "--solver", "recursive"])

    assert results[0]["solutions"] == [[1, -2], [1, 2, 3], [-1, 2, 3]]
    assert results[0]["steps"] > 0
    out = capsys.readouterr().out
    assert "trivial: SATISFIABLE (3 shown)" in out
    assert "1 -2 0" in out


def test_main_sudoku_to_csv(tmp_path):
    puzzles = tmp_path / "puzzles.json"
    puzzles.write_text(json.dumps({"id": "tiny", "puzzle": PUZZLE}))
    output = tmp_path / "out.csv"

    main([str(puzzles), "--output", str(output)])

    content = output.read_text()
    assert "id,solutions,steps" in content
    assert "tiny" in content
    assert SOLUTION in content


def test_main_first_solution(tmp_path):
    path = _write_cnf(tmp_path / "pick.cnf")
    results = main([str(path), "--first"])
    assert len(results[0]["solutions"]) == 1
    assert results[0]["solutions"][0] in ([1, -2], [1, 2, 3], [-1, 2, 3])


def test_main_unsatisfiable_and_malformed(tmp_path, capsys):
    _write_cnf(tmp_path / "bad.cnf", "p cnf 1 1\n1 x 0\n")
    _write_cnf(tmp_path / "unsat.cnf", "p cnf 1 2\n1 0\n-1 0\n")

    results = main([str(tmp_path)])

    by_id = {r["id"]: r for r in results}
    assert by_id["bad"]["steps"] == -1
    assert by_id["unsat"]["solutions"] == []
    out = capsys.readouterr().out
    assert "ERROR: Failed to solve bad" in out
    assert "unsat: UNSATISFIABLE" in out


def test_trace_files_written(tmp_path):
    path = _write_cnf(tmp_path / "traced.cnf")
    trace_dir = tmp_path / "traces"
    main([str(path), "--trace", str(trace_dir), "--output", str(tmp_path / "out.csv")])
    header = (trace_dir / "traced.csv").read_text().splitlines()[0]
    assert header.startswith("timestamp,step_number,action_type,literal")


def test_strategy_and_limit_defaults_come_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("SAT_SOLVER_STRATEGY", "recursive")
    monkeypatch.setenv("SAT_SOLVER_LIMIT", "2")
    args = run.parse_args([str(tmp_path)])
    assert args.solver == "recursive"
    assert args.limit == 2


def test_format_solution_and_csv(tmp_path):
    assert format_solution({"kind": "cnf"}, [1, -2]) == "1 -2 0"
    assert format_solution({"kind": "sudoku"}, SOLUTION).splitlines()[-1] == "4 3 2 1"

    output = tmp_path / "results.csv"
    write_results_csv([{"id": "x", "solutions": [[1]], "steps": 3}], output)
    assert output.read_text().splitlines() == ["id,solutions,steps", 'x,[[1]],3']


def test_unreadable_puzzle_files_do_not_stop_the_run(tmp_path, capsys):
    _write_cnf(tmp_path / "a.cnf")
    (tmp_path / "b.json").write_text("{not json")
    (tmp_path / "c.csv").write_text("")

    results = main([str(tmp_path)])

    assert [r["id"] for r in results] == ["a"]
    assert results[0]["solutions"] == [[1, -2]]
    out = capsys.readouterr().out
    assert "ERROR: Failed to load" in out and "c.csv" in out
    assert "a: SATISFIABLE (1 shown)" in out


def test_format_solution_does_not_encode_the_puzzle(monkeypatch):
    def _fail(*args, **kwargs):
        raise AssertionError("format_solution should not build an encoding")

    monkeypatch.setattr("run.Sudoku.from_string", _fail)
    monkeypatch.setattr("run.Sudoku.__init__", _fail)
    assert format_solution({"kind": "sudoku"}, SOLUTION).splitlines() == ["1 2 3 4", "3 4 1 2", "2 1 4 3", "4 3 2 1"]
