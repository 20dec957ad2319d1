import json
import logging
import os
from typing import Any, Dict, List, Optional

import pandas as pd

from .sudoku import grid_to_string

logger = logging.getLogger(__name__)

PUZZLE_KEYS = ("puzzle", "quizzes", "quiz", "grid", "sudoku")


def load_puzzles(file_path: str) -> List[Dict[str, Any]]:
    """
    Reads sudoku puzzles from a file. Handles .json, .jsonl, .csv and .parquet.
    Returns a list of records normalized to {"id": ..., "puzzle": <grid string>}.
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    stem = os.path.splitext(os.path.basename(file_path))[0]

    def _grid_to_string(grid: Any) -> Optional[str]:
        if isinstance(grid, str):
            text = "".join(grid.split())
            return text or None
        if isinstance(grid, (list, tuple)) and grid and all(isinstance(r, (list, tuple)) for r in grid):
            return grid_to_string([[int(d) for d in row] for row in grid])
        return None

    def _normalize_record(record: Dict[str, Any], index: int) -> Optional[Dict[str, Any]]:
        puzzle = None
        for key in PUZZLE_KEYS:
            if key in record:
                puzzle = _grid_to_string(record[key])
                if puzzle:
                    break
        if not puzzle:
            logger.warning(f"{file_path}: record {index} has no puzzle grid, skipping")
            return None
        normalized = {"id": str(record.get("id", f"{stem}-{index}")), "puzzle": puzzle}
        for key in ("solution", "solutions"):
            if key in record and isinstance(record[key], str):
                normalized["solution"] = record[key]
        return normalized

    def _normalize_all(records: List[Any]) -> List[Dict[str, Any]]:
        result = []
        for index, record in enumerate(records):
            if not isinstance(record, dict):
                logger.warning(f"{file_path}: record {index} is not an object, skipping")
                continue
            normalized = _normalize_record(record, index)
            if normalized is not None:
                result.append(normalized)
        return result

    def _read_lines() -> List[Any]:
        records = []
        with open(file_path, "r", encoding="utf-8") as f:
            for line_number, line in enumerate(f, 1):
                if not line.strip():
                    continue
                try:
                    records.append(json.loads(line))
                except json.JSONDecodeError:
                    logger.warning(f"{file_path}: line {line_number} is not valid JSON, skipping")
        return records

    # Case 1: Tabular files (Parquet binary or CSV text)
    if file_path.endswith(".parquet") or file_path.endswith(".csv"):
        if file_path.endswith(".parquet"):
            df = pd.read_parquet(file_path)
        else:
            # Keep leading zeros of digit strings.
            df = pd.read_csv(file_path, dtype=str)
        return _normalize_all(df.to_dict(orient="records"))

    # Case 2: JSON File (array or object)
    if file_path.endswith(".json"):
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                payload = json.load(f)
        except json.JSONDecodeError:
            # Not one JSON document; read it as JSON Lines instead.
            logger.warning(f"{file_path}: not a single JSON document, reading it line by line")
            return _normalize_all(_read_lines())
        if isinstance(payload, list):
            return _normalize_all(payload)
        return _normalize_all([payload])

    # Case 3: JSONL File
    return _normalize_all(_read_lines())
