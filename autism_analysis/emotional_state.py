"""
Derived session metrics: emotional state, cognitive load, adaptability.

These are composite signals that sit next to the primary indicators in the
extracted report. Cognitive load and adaptability are plain scalars in
[0, 1]; the emotional state is a small record with a valence label, a
stability label and autism-oriented flags.
"""

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Mapping

import numpy as np

from scoring.classification import (
    clamp_score,
    classify,
    normalize_keys,
    numeric_sequence,
    read_count,
    read_number,
)

logger = logging.getLogger(__name__)


STABILITY_BANDS = ((0.8, 'very_stable'), (0.6, 'stable'), (0.4, 'variable'))
BALANCE_THRESHOLD = 0.2
# Response time treated as maximal load (10 s, in ms)
SLOW_RESPONSE_MS = 10_000


@dataclass
class EmotionalState:
    """
    Emotional state snapshot.

    Attributes:
        state: positive, neutral or negative
        balance: positive minus negative emotion level
        stability: very_stable, stable, variable or unstable
        stability_score: Reported emotional stability (0-1)
        autism_specific: Awareness and regulation-support flags
    """
    state: str
    balance: float
    stability: str
    stability_score: float
    autism_specific: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def assess_emotional_state(data: Mapping) -> EmotionalState:
    data = normalize_keys(data)
    positive = clamp_score(read_number(data, 'positive_emotions', 0.5))
    negative = clamp_score(read_number(data, 'negative_emotions', 0.5))
    stability_score = clamp_score(read_number(data, 'emotional_stability', 0.5))
    regulation_attempts = read_count(data, 'regulation_attempts', 0)

    balance = positive - negative
    if balance > BALANCE_THRESHOLD:
        state = 'positive'
    elif balance < -BALANCE_THRESHOLD:
        state = 'negative'
    else:
        state = 'neutral'

    return EmotionalState(
        state=state,
        balance=float(balance),
        stability=classify(stability_score, STABILITY_BANDS, 'unstable'),
        stability_score=stability_score,
        autism_specific={
            'shows_emotional_awareness': regulation_attempts > 0,
            'needs_regulation_support': stability_score < 0.5 or negative > 0.6,
            'meltdown_risk_elevated': negative > 0.7 and stability_score < 0.4,
        },
    )


def calculate_cognitive_load(data: Mapping) -> float:
    """
    Cognitive load in [0, 1].

    Formula:
        task_complexity * 0.3 + multi_tasking * 0.2 + time_constraints * 0.15
        + error_rate * 0.2 + min(1, average_response_time / 10 s) * 0.15
    """
    data = normalize_keys(data)
    complexity = read_number(data, 'task_complexity', 0.5)
    multi_tasking = read_number(data, 'multi_tasking', 0)
    time_constraints = read_number(data, 'time_constraints', 0)
    error_rate = read_number(data, 'errors', 0) / max(read_number(data, 'attempts', 0), 1)

    response_time = read_number(data, 'average_response_time', 0)
    if data.get('average_response_time') is None:
        progression = numeric_sequence(data.get('response_time_progression'))
        response_time = float(np.mean(progression)) if progression else 0.0

    return clamp_score(
        complexity * 0.3 +
        multi_tasking * 0.2 +
        time_constraints * 0.15 +
        error_rate * 0.2 +
        min(1.0, max(0.0, response_time) / SLOW_RESPONSE_MS) * 0.15
    )


def calculate_adaptability_index(data: Mapping) -> float:
    """Adaptability in [0, 1] from change exposure and adaptation success."""
    data = normalize_keys(data)
    rule_changes = read_count(data, 'rule_changes', 0)
    task_switching = read_count(data, 'task_switching', 0)
    new_situations = read_count(data, 'new_situations', 0)
    success = read_number(data, 'adaptation_success', 0.5)
    flexibility = read_number(data, 'flexibility_demonstrated', 0.5)

    return clamp_score(
        min(1.0, max(0.0, rule_changes) / 3) * 0.2 +
        min(1.0, max(0.0, task_switching) / 3) * 0.2 +
        min(1.0, max(0.0, new_situations) / 3) * 0.15 +
        success * 0.25 +
        flexibility * 0.2
    )
