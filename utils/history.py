"""
Bounded analysis history.

Keeps the most recent composite reports produced by the engine so that
progress across sessions can be summarised. The buffer holds at most
``max_entries`` reports; appending beyond that evicts the oldest first.

Appends are serialised with a lock so eviction order stays FIFO even if a
caller shares one history between threads.
"""

import logging
import threading
import time
from collections import deque
from dataclasses import asdict, dataclass, field, is_dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from scoring.classification import calculate_trend, classify
from utils.config_loader import get_nested_config

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 50
DEFAULT_EXPORT_LIMIT = 20
PROGRESS_WINDOW = 5

# Strictly-greater bands for the overall progress label
OVERALL_PROGRESS_BANDS = (
    (0.1, 'significant_improvement'),
    (0.05, 'moderate_improvement'),
    (-0.05, 'stable'),
    (-0.1, 'slight_decline'),
)


@dataclass
class HistoryEntry:
    """
    One stored analysis.

    Attributes:
        key: Session identifier or generated timestamp key
        report: Composite report (BehavioralIndicators or plain dict)
        recorded_at: ISO-8601 UTC time the entry was appended
    """
    key: str
    report: Any
    recorded_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

    def to_dict(self) -> Dict[str, Any]:
        report = self.report
        if hasattr(report, 'to_dict'):
            report = report.to_dict()
        elif is_dataclass(report):
            report = asdict(report)
        return {'key': self.key, 'report': report, 'recorded_at': self.recorded_at}


class AnalysisHistory:
    """Insertion-ordered buffer of recent analyses with FIFO eviction."""

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES):
        if max_entries < 1:
            raise ValueError(f"max_entries must be positive, got {max_entries}")
        self.max_entries = max_entries
        self._entries = deque(maxlen=max_entries)
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: Optional[Dict] = None) -> 'AnalysisHistory':
        max_entries = get_nested_config(config or {}, 'history.max_entries', DEFAULT_MAX_ENTRIES)
        return cls(max_entries=int(max_entries if max_entries is not None else DEFAULT_MAX_ENTRIES))

    def append(self, report: Any, key: Optional[str] = None) -> HistoryEntry:
        """Append a report, evicting the oldest entry when full."""
        if key is None:
            key = f"analysis_{int(time.time() * 1000)}"
        entry = HistoryEntry(key=str(key), report=report)
        with self._lock:
            evicting = len(self._entries) == self.max_entries
            self._entries.append(entry)
        if evicting:
            logger.debug(f"History full ({self.max_entries}); evicted oldest entry")
        return entry

    def entries(self) -> List[HistoryEntry]:
        with self._lock:
            return list(self._entries)

    def reports(self) -> List[Any]:
        return [entry.report for entry in self.entries()]

    def latest(self) -> Optional[HistoryEntry]:
        with self._lock:
            return self._entries[-1] if self._entries else None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def export(self, limit: int = DEFAULT_EXPORT_LIMIT) -> Dict[str, Any]:
        """Most recent ``limit`` entries as plain dicts plus an export timestamp."""
        recent = self.entries()[-limit:] if limit > 0 else []
        return {
            'analysis_history': [entry.to_dict() for entry in recent],
            'timestamp': int(time.time() * 1000),
        }

    def progress_summary(self) -> Dict[str, Any]:
        """
        Summarise persistence and frustration movement over recent sessions.

        Uses the last five entries. Rising persistence and falling
        frustration both count as improvement.
        """
        entries = self.entries()
        if len(entries) < 2:
            return {
                'trend': 'insufficient_data',
                'message': 'Not enough sessions recorded to analyse progress',
            }

        recent = [entry.report for entry in entries[-PROGRESS_WINDOW:]]
        persistence = [_indicator_score(report, 'persistence') for report in recent]
        frustration = [_indicator_score(report, 'frustration') for report in recent]

        persistence_trend = calculate_trend(persistence)
        frustration_trend = calculate_trend(frustration)

        return {
            'persistence': {
                'trend': persistence_trend,
                'current': persistence[-1],
                'improvement': _direction(persistence_trend),
            },
            'frustration': {
                'trend': frustration_trend,
                'current': frustration[-1],
                'improvement': _direction(-frustration_trend),
            },
            'overall': overall_progress(persistence),
        }

    def __len__(self) -> int:
        return len(self._entries)


def overall_progress(values: List[float]) -> str:
    return classify(calculate_trend(values), OVERALL_PROGRESS_BANDS,
                    'significant_decline', inclusive=False)


def _direction(trend: float) -> str:
    if trend > 0:
        return 'improving'
    if trend < 0:
        return 'declining'
    return 'stable'


def _indicator_score(report: Any, name: str) -> float:
    indicator = report.get(name) if isinstance(report, dict) else getattr(report, name, None)
    if indicator is None:
        return 0.0
    score = indicator.get('score') if isinstance(indicator, dict) else getattr(indicator, 'score', 0.0)
    try:
        return float(score)
    except (ValueError, TypeError, OverflowError):
        return 0.0
