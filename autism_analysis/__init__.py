"""
Autism-specific analysis modules.

This package provides the autism-oriented layers of the scoring engine:
- Pattern detectors (sensory overload, social withdrawal, routine
  disruption, communication barriers)
- Emotional state, cognitive load and adaptability metrics
- Emotional regulation and social awareness assessment
- ABC trigger analysis and ABA strategy planning
- Flag-gated extension assessors

Clinical rationale:
- Core ASD features: social communication, restricted/repetitive behavior
- Sensory and transition triggers are the main meltdown precursors
- Non-diagnostic (observation only, requires clinical interpretation)
"""

from .detectors import (
    detect_communication_barriers,
    detect_routine_disruption,
    detect_sensory_overload,
    detect_social_withdrawal,
)
from .emotional_state import (
    EmotionalState,
    assess_emotional_state,
    calculate_adaptability_index,
    calculate_cognitive_load,
)
from .extensions import ExtensionAssessor, fallback_result
from .regulation import (
    EmotionalRegulationAssessment,
    SocialAwarenessAssessment,
    assess_emotional_regulation,
    assess_social_awareness,
)
from .strategies import suggest_behavioral_strategies
from .triggers import (
    IdentifiedTrigger,
    TriggerAnalysis,
    categorize_trigger,
    identify_behavioral_triggers,
)

__all__ = [
    # Detectors
    'detect_sensory_overload',
    'detect_social_withdrawal',
    'detect_routine_disruption',
    'detect_communication_barriers',

    # Derived metrics
    'EmotionalState',
    'assess_emotional_state',
    'calculate_cognitive_load',
    'calculate_adaptability_index',

    # Regulation and social awareness
    'EmotionalRegulationAssessment',
    'SocialAwarenessAssessment',
    'assess_emotional_regulation',
    'assess_social_awareness',

    # Triggers and strategies
    'IdentifiedTrigger',
    'TriggerAnalysis',
    'categorize_trigger',
    'identify_behavioral_triggers',
    'suggest_behavioral_strategies',

    # Extensions
    'ExtensionAssessor',
    'fallback_result',
]
