"""
Behavioral scoring module.

This package turns session interaction metrics into classified indicators:
1. Persistence, frustration, regulation, attention, motivation (0-1)
2. Executive function components and composite profile (0-1)

All scores are:
- Bounded (clamped to 0-1)
- Classified (each level comes from a fixed band table)
- Explainable (factor values are returned alongside the score)
- Non-diagnostic (support planning, not medical diagnosis)
"""

from .classification import calculate_trend, clamp_score, classify, classify_and_lookup
from .executive_function import (
    ExecutiveFunctionProfile,
    assess_cognitive_flexibility,
    assess_inhibitory_control,
    assess_planning_organization,
    assess_time_management,
    assess_working_memory,
    calculate_executive_function_score,
)
from .indicators import (
    Indicator,
    assess_attention,
    assess_frustration,
    assess_motivation,
    assess_persistence,
    assess_regulation,
)
from .recommendations import get_strategies

__all__ = [
    'calculate_trend',
    'clamp_score',
    'classify',
    'classify_and_lookup',
    'get_strategies',

    # Primary indicators
    'Indicator',
    'assess_persistence',
    'assess_frustration',
    'assess_regulation',
    'assess_attention',
    'assess_motivation',

    # Executive function
    'ExecutiveFunctionProfile',
    'assess_working_memory',
    'assess_cognitive_flexibility',
    'assess_inhibitory_control',
    'assess_planning_organization',
    'assess_time_management',
    'calculate_executive_function_score',
]
