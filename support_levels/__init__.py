"""
Support level calculation.

Per-modality support levels (visual, auditory, cognitive, sensory) and the
composite DSM-5 style autism support level.
"""

from .autism_level import AutismSupportLevel, calculate_autism_support_level, domain_severity
from .modality import (
    SupportLevel,
    calculate_auditory_support_level,
    calculate_cognitive_support_level,
    calculate_sensory_support_level,
    calculate_visual_support_level,
    categorize_sensitivity,
)

__all__ = [
    'SupportLevel',
    'calculate_visual_support_level',
    'calculate_auditory_support_level',
    'calculate_cognitive_support_level',
    'calculate_sensory_support_level',
    'categorize_sensitivity',
    'AutismSupportLevel',
    'calculate_autism_support_level',
    'domain_severity',
]
