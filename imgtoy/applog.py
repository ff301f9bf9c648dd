"""Structured, human-readable logs of a run and the effects applied in it."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional


@dataclass
class LogEntry:
    """A single message with a nesting depth used for indentation."""

    message: str = ""
    nesting_level: int = 1

    def tab_in(self) -> "LogEntry":
        self.nesting_level += 1
        return self

    def tabs(self, message: str) -> str:
        """Prefix ``message`` with one tab per nesting level."""
        return "\t" * self.nesting_level + message

    def __str__(self) -> str:
        return self.message


@dataclass
class RunLog:
    """The log entries for one iteration."""

    iteration: int
    entries: list[LogEntry] = field(default_factory=list)

    def apply_effect(self, name: str, parameters: Iterable[tuple[str, Any]]) -> "RunLog":
        """Record an effect and its parameters."""
        entry = LogEntry()
        lines = [f"Applying effect [{name}], with the following parameters...\n"]
        entry.tab_in()
        for param_name, value in parameters:
            lines.append(entry.tabs(f"[{f'{name}.{param_name}':>30}]: {value}\n"))
        entry.message = "".join(lines)
        self.entries.append(entry)
        return self

    def __str__(self) -> str:
        body = "\n".join(str(entry) for entry in self.entries)
        return f"[{self.iteration:05}]\n{body}"


@dataclass
class AppLog:
    """A summary of the application settings and all runs."""

    input_path: str
    output_path: str
    n: int
    media_type: str
    max_dim: Optional[int] = None
    runs: list[RunLog] = field(default_factory=list)

    def add_run(self, run: RunLog) -> "AppLog":
        self.runs.append(run)
        return self

    def __str__(self) -> str:
        max_dim = str(self.max_dim) if self.max_dim is not None else "(unspecified)"
        runs = "\n\n".join(str(run) for run in self.runs)
        return (
            "[ === APP INFO === ]\n"
            f"[{'source':^10}]: {self.media_type}: {self.input_path}\n"
            f"[{'output':^10}]: {self.output_path}\n"
            f"[{'iterations':^10}]: {self.n}\n"
            f"[{'max-dim':^10}]: {max_dim}\n"
            f"\n[ ===== RUNS ===== ]\n{runs}"
        )