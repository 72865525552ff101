"""
Behavioral indicator extraction.

Builds the composite BehavioralIndicators record for one session:
- Primary indicators: persistence, frustration, regulation, attention, motivation
- Autism-specific detectors: sensory overload, social withdrawal, routine
  disruption, communication barriers
- Derived metrics: emotional state, cognitive load, adaptability index
- Session context: duration, activity type, difficulty

Extraction never raises for mapping input: absent or malformed values fall
back to neutral defaults inside each assessor.
"""

import logging
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

from autism_analysis.detectors import (
    detect_communication_barriers,
    detect_routine_disruption,
    detect_sensory_overload,
    detect_social_withdrawal,
)
from autism_analysis.emotional_state import (
    EmotionalState,
    assess_emotional_state,
    calculate_adaptability_index,
    calculate_cognitive_load,
)
from scoring.classification import normalize_keys, read_number
from scoring.indicators import (
    Indicator,
    assess_attention,
    assess_frustration,
    assess_motivation,
    assess_persistence,
    assess_regulation,
)

logger = logging.getLogger(__name__)


@dataclass
class BehavioralIndicators:
    """
    Composite behavioral report for one session.

    Attributes:
        session_id: Caller-supplied session identifier (None when absent)
        persistence, frustration, regulation, attention, motivation: Indicators
        sensory_overload, social_withdrawal, routine_disruption,
        communication_barriers: Detector outcomes
        emotional_state: Emotional state snapshot
        cognitive_load: Cognitive load (0-1)
        adaptability_index: Adaptability (0-1)
        timestamp: ISO-8601 UTC extraction time
        session_context: duration, activity and difficulty
    """
    session_id: Optional[str]
    persistence: Indicator
    frustration: Indicator
    regulation: Indicator
    attention: Indicator
    motivation: Indicator
    sensory_overload: bool
    social_withdrawal: bool
    routine_disruption: bool
    communication_barriers: bool
    emotional_state: EmotionalState
    cognitive_load: float
    adaptability_index: float
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    session_context: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def session_context(data: Mapping) -> Dict[str, Any]:
    return {
        'duration': read_number(data, 'session_duration', 0),
        'activity': data.get('activity_type') or 'unknown',
        'difficulty': data.get('difficulty') or 'medium',
    }


def extract_indicators(metrics: Optional[Mapping]) -> BehavioralIndicators:
    """
    Compute every indicator for one session's metrics.

    Args:
        metrics: Session metrics mapping (snake_case or camelCase keys);
            None or a non-mapping value is treated as empty.

    Returns:
        BehavioralIndicators
    """
    data = normalize_keys(metrics or {})
    session_id = data.get('session_id')

    indicators = BehavioralIndicators(
        session_id=str(session_id) if session_id is not None else None,
        persistence=assess_persistence(data),
        frustration=assess_frustration(data),
        regulation=assess_regulation(data),
        attention=assess_attention(data),
        motivation=assess_motivation(data),
        sensory_overload=detect_sensory_overload(data),
        social_withdrawal=detect_social_withdrawal(data),
        routine_disruption=detect_routine_disruption(data),
        communication_barriers=detect_communication_barriers(data),
        emotional_state=assess_emotional_state(data),
        cognitive_load=calculate_cognitive_load(data),
        adaptability_index=calculate_adaptability_index(data),
        session_context=session_context(data),
    )

    logger.debug(
        f"Extracted indicators for session {indicators.session_id}: "
        f"persistence={indicators.persistence.level}, "
        f"frustration={indicators.frustration.level}, "
        f"overload={indicators.sensory_overload}"
    )
    return indicators
