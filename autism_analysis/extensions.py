"""
Flag-gated extension assessors.

Each assessor checks its capability flag first. When the flag is off it
returns a fixed neutral record without running the formula:

    {'level': 'assessment_disabled', 'score': 0.5,
     'note': 'Assessment not enabled - using basic evaluation'}

The executive function composite uses ``overall_level`` and
``composite_score`` in place of ``level`` and ``score``.

Assessors:
- Cognitive level (attention, memory, executive, processing triples)
- Communication level
- Social skills level
- Adaptive skills
- Planning and organization, time management, executive composite
  (formulas shared with scoring.executive_function; the composite reads
  planning and time management through their own gates)
"""

import logging
from typing import Any, Dict, Mapping, Optional

import numpy as np

from scoring.classification import classify, clamp_score, normalize_keys, read_number
from scoring import executive_function
from scoring.recommendations import get_strategies
from utils.feature_flags import FeatureFlagRegistry

logger = logging.getLogger(__name__)


FALLBACK_NOTE = 'Assessment not enabled - using basic evaluation'

COGNITIVE_BANDS = ((0.85, 'superior'), (0.7, 'above_average'), (0.5, 'average'),
                   (0.3, 'below_average'))
COGNITIVE_RECOMMENDATION_BANDS = ((0.7, 'high'), (0.5, 'moderate'))
SUPPORT_BANDS = ((0.8, 'independent'), (0.6, 'moderate_support'),
                 (0.4, 'substantial_support'))
SOCIAL_BANDS = ((0.8, 'advanced'), (0.6, 'developing'), (0.4, 'emerging'))

COGNITIVE_TRIPLES = {
    'attention': ('sustained', 'selective', 'divided'),
    'memory': ('working', 'short_term', 'long_term'),
    'executive': ('planning', 'inhibition', 'monitoring'),
    'processing': ('speed', 'accuracy', 'flexibility'),
}
COGNITIVE_WEIGHTS = {'attention': 0.25, 'memory': 0.25, 'executive': 0.30, 'processing': 0.20}

COMMUNICATION_WEIGHTS = {
    'verbal_communication': 0.20,
    'non_verbal_communication': 0.15,
    'social_communication': 0.25,
    'pragmatic_language': 0.20,
    'receptive_language': 0.10,
    'expressive_language': 0.10,
}
SOCIAL_WEIGHTS = {
    'social_initiation': 0.20,
    'social_response': 0.20,
    'social_reciprocity': 0.20,
    'empathy': 0.15,
    'friendship_skills': 0.15,
    'group_skills': 0.10,
}
ADAPTIVE_WEIGHTS = {
    'daily_living_skills': 0.25,
    'self_care': 0.20,
    'independence': 0.20,
    'problem_solving': 0.15,
    'flexibility': 0.10,
    'safety_awareness': 0.10,
}


def fallback_result(composite: bool = False) -> Dict[str, Any]:
    """Neutral record returned when an assessor's flag is off."""
    if composite:
        return {'overall_level': 'assessment_disabled', 'composite_score': 0.5,
                'note': FALLBACK_NOTE}
    return {'level': 'assessment_disabled', 'score': 0.5, 'note': FALLBACK_NOTE}


def _weighted(data: Mapping, weights: Mapping[str, float]):
    components = {name: read_number(data, name, 0.5) for name in weights}
    score = clamp_score(sum(components[name] * weight for name, weight in weights.items()))
    return score, components


def _triple_average(section: Any, keys) -> float:
    """Mean of three sub-scores; neutral 0.5 unless all three are usable."""
    if not isinstance(section, Mapping):
        return 0.5
    values = [read_number(section, key, float('nan')) for key in keys]
    if any(np.isnan(value) for value in values):
        return 0.5
    return sum(values) / len(values)


class ExtensionAssessor:
    """
    Extension assessors behind a feature flag gate.

    Args:
        flags: Injected FeatureFlagRegistry
    """

    FLAG_COGNITIVE = 'cognitive_level_assessment'
    FLAG_COMMUNICATION = 'communication_level_assessment'
    FLAG_SOCIAL = 'social_skills_assessment'
    FLAG_ADAPTIVE = 'adaptive_skills_assessment'
    FLAG_PLANNING = 'planning_organization_assessment'
    FLAG_TIME = 'time_management_assessment'
    FLAG_EXECUTIVE = 'executive_function_score'

    def __init__(self, flags: Optional[FeatureFlagRegistry] = None):
        self.flags = flags if flags is not None else FeatureFlagRegistry()

    def _gate(self, flag: str, compute, data: Mapping, composite: bool = False) -> Dict[str, Any]:
        if not self.flags.is_enabled(flag):
            logger.debug(f"{flag} disabled; returning fallback record")
            return fallback_result(composite)
        return compute(normalize_keys(data))

    def assess_cognitive_level(self, profile: Mapping) -> Dict[str, Any]:
        return self._gate(self.FLAG_COGNITIVE, self._compute_cognitive_level, profile)

    def assess_communication_level(self, profile: Mapping) -> Dict[str, Any]:
        return self._gate(self.FLAG_COMMUNICATION, self._compute_communication_level, profile)

    def assess_social_skills_level(self, profile: Mapping) -> Dict[str, Any]:
        return self._gate(self.FLAG_SOCIAL, self._compute_social_skills_level, profile)

    def assess_adaptive_skills(self, profile: Mapping) -> Dict[str, Any]:
        return self._gate(self.FLAG_ADAPTIVE, self._compute_adaptive_skills, profile)

    def assess_planning_organization(self, data: Mapping) -> Dict[str, Any]:
        return self._gate(self.FLAG_PLANNING, self._compute_planning_organization, data)

    def assess_time_management(self, data: Mapping) -> Dict[str, Any]:
        return self._gate(self.FLAG_TIME, self._compute_time_management, data)

    def calculate_executive_function_score(self, data: Mapping) -> Dict[str, Any]:
        return self._gate(self.FLAG_EXECUTIVE, self._compute_executive_function_score, data,
                          composite=True)

    def _compute_cognitive_level(self, profile: Mapping) -> Dict[str, Any]:
        components = {
            name: _triple_average(profile.get(name), keys)
            for name, keys in COGNITIVE_TRIPLES.items()
        }
        score = clamp_score(sum(components[name] * w for name, w in COGNITIVE_WEIGHTS.items()))
        level = classify(score, COGNITIVE_BANDS, 'significant_support_needed')
        recommendation_band = classify(score, COGNITIVE_RECOMMENDATION_BANDS, 'low')

        return {
            'level': level,
            'score': score,
            'components': components,
            'strengths': get_strategies('cognitive_strengths', level),
            'support_needs': get_strategies('cognitive_support_needs', level),
            'recommendations': get_strategies('cognitive_recommendations', recommendation_band),
            'autism_specific': {
                'needs_structure': score < 0.6,
                'benefits_from_visuals': True,
                'requires_breaks': score < 0.5,
            },
        }

    def _compute_communication_level(self, profile: Mapping) -> Dict[str, Any]:
        score, components = _weighted(profile, COMMUNICATION_WEIGHTS)
        level = classify(score, SUPPORT_BANDS, 'extensive_support')

        return {
            'level': level,
            'score': score,
            'components': components,
            'support_type': get_strategies('communication_support_types', level),
            'communication_methods': get_strategies('communication_methods', level),
            'interventions': get_strategies('communication_interventions', level),
            'autism_specific': {
                'echolalia': components['verbal_communication'] < 0.5,
                'literal_thinking': components['pragmatic_language'] < 0.5,
                'sensory_issues': components['non_verbal_communication'] < 0.4,
                'social_challenges': components['social_communication'] < 0.6,
            },
        }

    def _compute_social_skills_level(self, profile: Mapping) -> Dict[str, Any]:
        score, components = _weighted(profile, SOCIAL_WEIGHTS)
        level = classify(score, SOCIAL_BANDS, 'foundational')

        return {
            'level': level,
            'score': score,
            'components': components,
            'focus_areas': get_strategies('social_focus_areas', level),
            'social_goals': get_strategies('social_goals', level),
            'interventions': get_strategies('social_interventions', level),
            'autism_specific': {
                'needs_structured_social': score < 0.6,
                'benefits_from_social_stories': True,
                'requires_peer_support': score < 0.5,
                'sensory_considerations': True,
            },
        }

    def _compute_adaptive_skills(self, profile: Mapping) -> Dict[str, Any]:
        score, components = _weighted(profile, ADAPTIVE_WEIGHTS)
        level = classify(score, SUPPORT_BANDS, 'extensive_support')

        return {
            'level': level,
            'score': score,
            'components': components,
            'support_areas': get_strategies('adaptive_support_areas', level),
            'independence_goals': get_strategies('adaptive_independence_goals', level),
            'interventions': get_strategies('adaptive_interventions', level),
            'autism_specific': {
                'needs_routine': score < 0.7,
                'benefits_from_visual_schedules': True,
                'requires_transition_support': components['flexibility'] < 0.5,
                'sensory_considerations': True,
            },
        }

    def _compute_planning_organization(self, data: Mapping) -> Dict[str, Any]:
        indicator = executive_function.assess_planning_organization(data)
        return {
            'level': indicator.level,
            'score': indicator.score,
            'components': dict(indicator.factors),
            'strategies': list(indicator.strategies),
            'supports': list(indicator.extras.get('supports', [])),
            'autism_specific': dict(indicator.autism_specific),
        }

    def _compute_time_management(self, data: Mapping) -> Dict[str, Any]:
        indicator = executive_function.assess_time_management(data)
        return {
            'level': indicator.level,
            'score': indicator.score,
            'components': dict(indicator.factors),
            'time_tools': list(indicator.strategies),
            'interventions': list(indicator.extras.get('interventions', [])),
            'autism_specific': dict(indicator.autism_specific),
        }

    def _compute_executive_function_score(self, data: Mapping) -> Dict[str, Any]:
        """
        Executive composite.

        Planning and time management go through their own gates, so a
        disabled component contributes its neutral fallback score.
        """
        return executive_function.summarize_executive_components({
            'working_memory': executive_function.assess_working_memory(data).score,
            'cognitive_flexibility': executive_function.assess_cognitive_flexibility(data).score,
            'inhibitory_control': executive_function.assess_inhibitory_control(data).score,
            'planning': self.assess_planning_organization(data)['score'],
            'time_management': self.assess_time_management(data)['score'],
        })
