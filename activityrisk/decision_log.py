"""
Decision log module for the Activity Risk engine.

This module defines the EvaluationLogEntry dataclass, a record of one batch
evaluation, and the DecisionLog class which appends those records to a
human-readable log file. Logging is opt-in: the engine only writes when a
DecisionLog is injected.
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional

from .activity_decision import ActivityDecision


@dataclass
class EvaluationLogEntry:
    """
    Represents a single log record for an evaluation cycle.

    Attributes:
        timestamp: When the evaluation was made
        aqi: The AQI the activities were evaluated against
        decisions: The decisions produced, in evaluation order
        details: Additional metadata (profile, pollutant count, forecast length)
    """

    timestamp: datetime
    aqi: float
    decisions: list[ActivityDecision]
    details: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, object]:
        """
        Converts the log entry to a serializable dictionary.

        Returns:
            A dictionary representation with the timestamp as ISO-8601 and
            each decision in its wire form
        """
        return {
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
            "aqi": self.aqi,
            "decisions": [decision.to_dict() for decision in self.decisions],
            "details": self.details,
        }


class DecisionLog:
    """
    Append-only, human-readable log of evaluations.

    One line is written per decision:
    [TIMESTAMP] AQI | ACTIVITY | SCORE | LEVEL | BEST WINDOW | PROFILE
    """

    DEFAULT_LOG_FILE = Path("logs") / "decision_log.log"

    def __init__(self, log_file: Optional[Path] = None):
        self.log_file = Path(log_file) if log_file is not None else self.DEFAULT_LOG_FILE
        self._ensure_log_file_exists()

    def _ensure_log_file_exists(self) -> None:
        """Create the log directory and a header if needed."""
        self.log_file.parent.mkdir(parents=True, exist_ok=True)

        if not self.log_file.exists():
            with open(self.log_file, "w", encoding="utf-8") as f:
                f.write("# Activity Risk Decision Log\n")
                f.write("# Format: [TIMESTAMP] AQI | ACTIVITY | SCORE | LEVEL | BEST WINDOW | PROFILE\n")
                f.write("# " + "=" * 80 + "\n\n")

    def format_lines(self, entry: EvaluationLogEntry) -> list[str]:
        """Renders one log line per decision of the entry."""
        timestamp_str = entry.timestamp.strftime("%Y-%m-%d %H:%M:%S")
        profile = entry.details.get("profile", "unknown")
        lines = []
        for decision in entry.decisions:
            window = decision.best_time_window
            window_str = f"{window.start} -> {window.end}" if window else "None"
            lines.append(
                f"[{timestamp_str}] AQI {entry.aqi:>5} | "
                f"{decision.activity.id:15s} | "
                f"{decision.risk_score.score:3d} | "
                f"{decision.risk_score.level:10s} | "
                f"Window: {window_str} | "
                f"{profile}\n"
            )
        return lines

    def record(self, entry: EvaluationLogEntry) -> bool:
        """
        Appends an entry to the log file.

        A failed write never breaks evaluation; it is reported and the
        method returns False.

        Returns:
            True if the entry was written, False otherwise
        """
        try:
            with open(self.log_file, "a", encoding="utf-8") as f:
                f.writelines(self.format_lines(entry))
        except OSError as e:
            print(f"DecisionLog: Failed to write to {self.log_file}: {e}")
            return False
        return True
