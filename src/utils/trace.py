"""Tracing module: logs SAT solver steps and writes to CSV."""

import csv
import threading
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass
class TraceStep:
    """A single step in the solving process."""

    timestamp: float
    step_number: int
    action_type: str  # 'decide', 'conflict', 'backtrack', 'solution_found'
    literal: Optional[int] = None
    depth: Optional[int] = None  # Number of decisions taken on this branch
    clauses_remaining: Optional[int] = None
    assignment_size: Optional[int] = None
    reason: Optional[str] = None


class Tracer:
    """Records solver steps for logging and analysis."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.steps: List[TraceStep] = []
        self.start_time = datetime.now().timestamp()
        self.step_counter = 0
        self._lock = threading.Lock()

    def _get_timestamp(self) -> float:
        """Get elapsed time in seconds since tracer creation."""
        return datetime.now().timestamp() - self.start_time

    def _record(self, action_type: str, **fields: Any) -> None:
        if not self.enabled:
            return
        with self._lock:
            self.step_counter += 1
            self.steps.append(TraceStep(
                timestamp=self._get_timestamp(),
                step_number=self.step_counter,
                action_type=action_type,
                **fields,
            ))

    def log_decide(self, literal: int, depth: int, clauses_remaining: int):
        """Log a branching decision on `literal`."""
        self._record('decide', literal=literal, depth=depth, clauses_remaining=clauses_remaining)

    def log_conflict(self, literal: int, depth: int):
        """Log a propagation that produced an empty clause."""
        self._record('conflict', literal=literal, depth=depth, reason="Empty clause after propagation")

    def log_backtrack(self, depth: int, reason: str = "Contradictory branch"):
        """Log a branch being abandoned."""
        self._record('backtrack', depth=depth, reason=reason)

    def log_solution_found(self, assignment_size: int):
        """Log when a solution is found."""
        self._record('solution_found', assignment_size=assignment_size)

    def to_csv(self, filepath: Path) -> None:
        """Write trace to CSV file."""
        if not self.steps:
            print("No trace steps to write")
            return

        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        fieldnames = [
            'timestamp', 'step_number', 'action_type', 'literal', 'depth',
            'clauses_remaining', 'assignment_size', 'reason'
        ]

        with open(filepath, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            for step in self.steps:
                writer.writerow(asdict(step))

        print(f"Trace written to {filepath} ({len(self.steps)} steps)")

    def summary(self) -> Dict[str, Any]:
        """Get a summary of the trace."""
        action_counts = {}
        for step in self.steps:
            action_counts[step.action_type] = action_counts.get(step.action_type, 0) + 1

        return {
            'total_steps': len(self.steps),
            'elapsed_time_seconds': self._get_timestamp(),
            'action_counts': action_counts,
            'num_decisions': action_counts.get('decide', 0),
            'num_conflicts': action_counts.get('conflict', 0),
            'num_backtracks': action_counts.get('backtrack', 0),
            'num_solutions': action_counts.get('solution_found', 0),
        }


# Global tracer instance
_global_tracer: Optional[Tracer] = None


def get_tracer() -> Tracer:
    """Get or create the global tracer. It records nothing until `enable_tracing()` is called."""
    global _global_tracer
    if _global_tracer is None:
        _global_tracer = Tracer(enabled=False)
    return _global_tracer


def reset_tracer() -> None:
    """Reset the global tracer."""
    global _global_tracer
    _global_tracer = None


def enable_tracing(enabled: bool = True) -> None:
    """Enable or disable tracing."""
    get_tracer().enabled = enabled
