"""
Logging utilities for game sessions.
"""
from typing import Dict, Any, Optional, List
from pathlib import Path
import json
import time
from datetime import datetime
from collections import defaultdict, Counter
from enum import Enum
import numpy as np


def convert_to_serializable(obj):
    """Convert numpy and enum values to plain Python types for JSON serialization."""
    if isinstance(obj, np.integer):
        return int(obj)
    elif isinstance(obj, np.floating):
        return float(obj)
    elif isinstance(obj, np.ndarray):
        return obj.tolist()
    elif isinstance(obj, Enum):
        return obj.name
    elif isinstance(obj, dict):
        return {k: convert_to_serializable(v) for k, v in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [convert_to_serializable(i) for i in obj]
    return obj


class EventLogger:
    """
    Appends one JSON record per game event to a .jsonl file.

    Records look like:
        {"event": "rows_cleared", "seq": 3, "time": 12.5, "timestamp": "...", "rows": 2}
    """

    def __init__(self, log_dir: str, name: str = "session"):
        """
        Initialize logger.

        Args:
            log_dir: Directory to save logs
            name: Prefix for the log file name
        """
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.name = name
        self.start_time = time.time()

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.log_file = self.log_dir / f"{name}_{timestamp}.jsonl"

        self.counts: Counter = Counter()
        self.seq = 0

    def log_event(self, event: str, **fields: Any) -> Dict[str, Any]:
        """
        Write an event record.

        Args:
            event: Event name
            **fields: Extra values stored with the event

        Returns:
            The record as written
        """
        self.seq += 1
        self.counts[event] += 1

        record = {
            'event': event,
            'seq': self.seq,
            'time': time.time() - self.start_time,
            'timestamp': datetime.now().isoformat(),
            **fields,
        }
        record = convert_to_serializable(record)

        with open(self.log_file, 'a') as f:
            f.write(json.dumps(record) + '\n')
        return record

    def read_events(self, event: Optional[str] = None) -> List[Dict[str, Any]]:
        """Read records back from the log file, optionally filtered by name."""
        if not self.log_file.exists():
            return []
        with open(self.log_file, 'r') as f:
            records = [json.loads(line) for line in f if line.strip()]
        if event is not None:
            records = [r for r in records if r['event'] == event]
        return records

    def save_summary(self) -> Path:
        """Save event counts next to the log file."""
        summary = {
            'name': self.name,
            'total_events': self.seq,
            'total_time': time.time() - self.start_time,
            'events': dict(self.counts),
        }
        summary_file = self.log_dir / f"{self.name}_summary.json"
        with open(summary_file, 'w') as f:
            json.dump(summary, f, indent=2)
        return summary_file


class MetricsTracker:
    """
    Track running statistics for metrics.
    """

    def __init__(self, window_size: int = 100):
        """
        Initialize metrics tracker.

        Args:
            window_size: Size of rolling window for statistics
        """
        self.window_size = window_size
        self.metrics: Dict[str, List[float]] = defaultdict(list)

    def add(self, name: str, value: float) -> None:
        """Add a value to a metric."""
        self.metrics[name].append(value)
        if len(self.metrics[name]) > self.window_size:
            self.metrics[name].pop(0)

    def get_summary(self, name: str) -> Dict[str, float]:
        """Get summary statistics for a metric."""
        values = self.metrics.get(name, [])
        if not values:
            return {'mean': 0.0, 'std': 0.0, 'min': 0.0, 'max': 0.0, 'last': 0.0}
        return {
            'mean': float(np.mean(values)),
            'std': float(np.std(values)),
            'min': float(np.min(values)),
            'max': float(np.max(values)),
            'last': float(values[-1]),
        }

    def get_all_summaries(self) -> Dict[str, Dict[str, float]]:
        """Get summaries for all metrics."""
        return {name: self.get_summary(name) for name in self.metrics}

    def reset(self) -> None:
        """Reset all metrics."""
        self.metrics.clear()
