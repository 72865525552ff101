"""
Autism-specific boolean pattern detectors.

Each detector inspects a handful of independent sub-signals and reports
True when enough of them agree (majority vote):
- Sensory overload: 2 or more of 5 signals
- Social withdrawal: 3 or more of 5 signals
- Routine disruption: 2 or more of 4 signals
- Communication barriers: 3 or more of 5 signals

Clinical rationale (Autism):
- Single signals are noisy (one loud moment, one missed reply)
- Co-occurring signals are a more reliable cue to adapt the session
- Sensory overload and routine disruption are common meltdown precursors

Engineering approach:
- A sub-signal only votes when its input is present
- Thresholds are fixed constants, checked with strict comparisons
"""

import logging
from typing import Mapping, Optional

import numpy as np

from scoring.classification import (
    calculate_trend,
    normalize_keys,
    numeric_sequence,
    read_list,
    read_number,
)

logger = logging.getLogger(__name__)


SENSORY_OVERLOAD_VOTES = 2
SOCIAL_WITHDRAWAL_VOTES = 3
ROUTINE_DISRUPTION_VOTES = 2
COMMUNICATION_BARRIER_VOTES = 3


def _present(data: Mapping, key: str) -> Optional[float]:
    """Numeric value for key, or None when it is absent or unusable."""
    if data.get(key) is None:
        return None
    value = read_number(data, key, default=float('nan'))
    return None if np.isnan(value) else value


def _first_present(data: Mapping, *keys: str) -> Optional[float]:
    for key in keys:
        value = _present(data, key)
        if value is not None:
            return value
    return None


def stimulus_levels(data: Mapping):
    """
    (visual, auditory) stimulus levels.

    Accepts nested ``sensory_stimuli: {visual, auditory}`` or flat
    ``visual_stimuli`` / ``auditory_stimuli`` keys; nested wins.
    """
    nested = data.get('sensory_stimuli')
    nested = nested if isinstance(nested, Mapping) else {}
    visual = _present(nested, 'visual')
    auditory = _present(nested, 'auditory')
    if visual is None:
        visual = _present(data, 'visual_stimuli')
    if auditory is None:
        auditory = _present(data, 'auditory_stimuli')
    return visual, auditory


def relative_response_slowdown(progression) -> Optional[float]:
    """Response time trend as a fraction of the first-half mean."""
    values = numeric_sequence(progression)
    if len(values) < 2:
        return None
    baseline = float(np.mean(values[:len(values) // 2]))
    if baseline <= 0:
        return None
    return calculate_trend(values) / baseline


def detect_sensory_overload(data: Mapping) -> bool:
    """True when at least two overload signals co-occur."""
    data = normalize_keys(data)
    visual, auditory = stimulus_levels(data)

    slowdown = _present(data, 'response_time_increase')
    if slowdown is None:
        slowdown = relative_response_slowdown(data.get('response_time_progression'))

    error_spike = bool(data.get('error_spike'))
    attempts = read_number(data, 'attempts', 0)
    if not error_spike and attempts > 0:
        error_spike = read_number(data, 'errors', 0) / attempts > 0.6

    withdrawal = _present(data, 'withdrawal_behaviors')

    votes = sum([
        visual is not None and visual > 0.7,
        auditory is not None and auditory > 0.6,
        slowdown is not None and slowdown > 0.5,
        error_spike,
        withdrawal is not None and withdrawal > 0,
    ])
    if votes >= SENSORY_OVERLOAD_VOTES:
        logger.info(f"Sensory overload detected ({votes} signals)")
    return votes >= SENSORY_OVERLOAD_VOTES


def detect_social_withdrawal(data: Mapping) -> bool:
    data = normalize_keys(data)
    interaction = _first_present(data, 'social_interaction', 'social_interaction_level')
    eye_contact = _present(data, 'eye_contact')
    attempts = _present(data, 'communication_attempts')
    group = _present(data, 'group_participation')
    response = _present(data, 'response_to_social')

    votes = sum([
        interaction is not None and interaction < 0.3,
        eye_contact is not None and eye_contact < 0.4,
        attempts is not None and attempts < 2,
        group is not None and group < 0.3,
        response is not None and response < 0.3,
    ])
    return votes >= SOCIAL_WITHDRAWAL_VOTES


def detect_routine_disruption(data: Mapping) -> bool:
    data = normalize_keys(data)
    expected = read_list(data, 'expected_sequence')
    actual = read_list(data, 'actual_sequence')
    changes = _present(data, 'unexpected_changes')
    difficulty = _present(data, 'adaptation_difficulty')
    behavioral = _present(data, 'behavioral_changes')

    votes = sum([
        bool(expected) and bool(actual) and expected != actual,
        changes is not None and changes > 1,
        difficulty is not None and difficulty > 0.5,
        behavioral is not None and behavioral > 0.5,
    ])
    return votes >= ROUTINE_DISRUPTION_VOTES


def detect_communication_barriers(data: Mapping) -> bool:
    data = normalize_keys(data)
    verbal = _present(data, 'verbal_communication')
    non_verbal = _present(data, 'non_verbal_communication')
    comprehension = _present(data, 'comprehension_indicators')
    expression = _present(data, 'expression_difficulty')
    frustration = _present(data, 'communication_frustration')

    votes = sum([
        verbal is not None and verbal < 0.4,
        non_verbal is not None and non_verbal < 0.4,
        comprehension is not None and comprehension < 0.5,
        expression is not None and expression > 0.6,
        frustration is not None and frustration > 0.5,
    ])
    return votes >= COMMUNICATION_BARRIER_VOTES
