"""CLI entrypoint: load CNF formulas or sudoku puzzles, run the solver, and report results."""

import argparse
import csv
import json
import os
from itertools import islice
from pathlib import Path
from typing import Any, Dict, List

from src.puzzles.loader import load_puzzles
from src.puzzles.sudoku import Sudoku, format_grid, grid_from_string, grid_to_string
from src.sat.dimacs import load_dimacs
from src.sat.solver_core import SOLVERS, get_solver, solve_any
from src.utils.trace import enable_tracing, get_tracer, reset_tracer

CNF_SUFFIXES = [".cnf", ".dimacs"]
PUZZLE_SUFFIXES = [".json", ".jsonl", ".csv", ".parquet"]


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Enumerate satisfying assignments of CNF formulas and sudoku puzzles")
    parser.add_argument("input", type=Path, help="Path to a .cnf file, a puzzle file, or a directory of them")
    parser.add_argument(
        "--solver",
        choices=sorted(SOLVERS),
        default=os.environ.get("SAT_SOLVER_STRATEGY", "iterative"),
        help="Search strategy (default: $SAT_SOLVER_STRATEGY or 'iterative').",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=int(os.environ.get("SAT_SOLVER_LIMIT", "1")),
        help="Maximum solutions per input, 0 for all (default: $SAT_SOLVER_LIMIT or 1).",
    )
    parser.add_argument(
        "--first",
        action="store_true",
        help="Search both top-level branches in parallel and report whichever solution is found first.",
    )
    parser.add_argument("--output", type=Path, default=None, help="Optional path to write results as CSV")
    parser.add_argument("--trace", type=Path, default=None, help="Optional directory for per-input trace CSVs")
    return parser.parse_args(argv)


def collect_inputs(path: Path) -> List[Dict[str, Any]]:
    """Turn a file or directory into a list of {"id", "kind", ...} work items."""
    if path.is_file():
        files = [path]
    elif path.is_dir():
        files = [p for p in sorted(path.iterdir()) if p.suffix in CNF_SUFFIXES + PUZZLE_SUFFIXES]
    else:
        raise ValueError(f"Input path {path} is neither file nor directory")

    items: List[Dict[str, Any]] = []
    for file_path in files:
        if file_path.suffix in CNF_SUFFIXES:
            items.append({"id": file_path.stem, "kind": "cnf", "path": file_path})
        elif file_path.suffix in PUZZLE_SUFFIXES:
            try:
                records = load_puzzles(str(file_path))
            except Exception as e:
                print(f"ERROR: Failed to load {file_path}: {e}")
                continue
            for record in records:
                items.append({"id": record["id"], "kind": "sudoku", "puzzle": record["puzzle"]})
        else:
            raise ValueError(f"Unsupported input file type: {file_path}")
    return items


def solve_item(item: Dict[str, Any], solver_name: str, limit: int, first: bool) -> List[Any]:
    if item["kind"] == "cnf":
        problem = load_dimacs(item["path"]).problem
        decode = lambda assignment: assignment.values()
    else:
        sudoku = Sudoku.from_string(item["puzzle"])
        problem = sudoku.problem
        decode = lambda assignment: grid_to_string(sudoku.grid_from(assignment))

    if first:
        assignment = solve_any(problem)
        return [] if assignment is None else [decode(assignment)]

    solver = get_solver(solver_name)
    return [decode(a) for a in islice(solver.solve(problem), limit or None)]


def format_solution(item: Dict[str, Any], solution: Any) -> str:
    if item["kind"] == "cnf":
        return " ".join(str(v) for v in solution + [0])
    return format_grid(grid_from_string(solution))


def write_results_csv(results, output_path: Path):
    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["id", "solutions", "steps"])

        for r in results:
            writer.writerow([
                r["id"],
                json.dumps(r["solutions"], ensure_ascii=False, separators=(",", ":")),
                r["steps"]
            ])


def main(argv=None):
    args = parse_args(argv)
    items = collect_inputs(args.input)
    results = []

    for item in items:
        reset_tracer()
        enable_tracing()
        tracer = get_tracer()
        item_id = item["id"]

        try:
            solutions = solve_item(item, args.solver, args.limit, args.first)
            summary = tracer.summary()
            results.append({
                "id": item_id,
                "solutions": solutions,
                # Decisions are the search effort; conflicts and solutions are bookkeeping.
                "steps": summary["num_decisions"],
            })
        except Exception as e:
            print(f"ERROR: Failed to solve {item_id}: {e}")
            results.append({"id": item_id, "solutions": [], "steps": -1})
            continue

        if args.trace:
            tracer.to_csv(args.trace / f"{item_id}.csv")

        if not args.output:
            print(f"{item_id}: {'SATISFIABLE' if solutions else 'UNSATISFIABLE'} ({len(solutions)} shown)")
            for solution in solutions:
                print(format_solution(item, solution))
                print()

    reset_tracer()
    if args.output:
        write_results_csv(results, args.output)
    return results


if __name__ == "__main__":
    main()
