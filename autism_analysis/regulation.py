"""
Emotional regulation and social awareness assessment.

Clinical rationale (Autism):
- Alexithymia (difficulty identifying emotions) lowers regulation capacity
  even when strategies are available
- Long recovery times after distress point to interoceptive and sensory needs
- Social anxiety depresses observed social skill, so awareness is adjusted
  rather than read at face value
- Neurodivergent social strengths (directness, deep interests) are recorded
  as assets to build on

Engineering approach:
- Weighted components in [0, 1], multiplicative penalties, final clamp
- Profiles from inclusive threshold bands
- Output records carry the supporting lists used by session planners
"""

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Mapping

from scoring.classification import (
    clamp_score,
    classify,
    normalize_keys,
    read_count,
    read_flag,
    read_list,
    read_number,
)
from scoring.recommendations import get_strategies

logger = logging.getLogger(__name__)


REGULATION_PROFILE_BANDS = ((0.8, 'independent_regulation'), (0.6, 'moderate_regulation'),
                            (0.4, 'emerging_regulation'), (0.2, 'guided_regulation'))
SOCIAL_PROFILE_BANDS = ((0.8, 'socially_aware'), (0.6, 'moderate_social_skills'),
                        (0.4, 'emerging_social_awareness'))

@dataclass
class EmotionalRegulationAssessment:
    """
    Emotional regulation capacity.

    Attributes:
        score: Regulation capacity (0-1)
        level: Regulation profile (independent_regulation .. external_regulation)
        effective_strategies: Strategies in use that are working
        recommended_strategies: New strategies to introduce
        autism_specific: Autism-oriented considerations
        intervention_priorities: Ordered priority records
        current_status: Snapshot of state, intensity and alexithymia level
        progress_metrics: Component scores for tracking
    """
    score: float
    level: str
    effective_strategies: List[str] = field(default_factory=list)
    recommended_strategies: List[str] = field(default_factory=list)
    autism_specific: Dict[str, bool] = field(default_factory=dict)
    intervention_priorities: List[Dict[str, str]] = field(default_factory=list)
    current_status: Dict[str, Any] = field(default_factory=dict)
    progress_metrics: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class SocialAwarenessAssessment:
    score: float
    level: str
    social_skills: Dict[str, Dict[str, str]] = field(default_factory=dict)
    support_needs: List[str] = field(default_factory=list)
    social_goals: List[str] = field(default_factory=list)
    neurodiversity_strengths: Dict[str, bool] = field(default_factory=dict)
    neurodiversity_supports: List[str] = field(default_factory=list)
    autism_specific: Dict[str, bool] = field(default_factory=dict)
    intervention_focus: str = 'maintain_current_skills'

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _recovery_score(recovery_seconds: float) -> float:
    """Score recovery time; 0 means no data and scores neutral."""
    if recovery_seconds <= 0:
        return 0.5
    if recovery_seconds < 300:
        return 1.0
    if recovery_seconds < 900:
        return 0.7
    if recovery_seconds < 1800:
        return 0.4
    return 0.1


def assess_emotional_regulation(data: Mapping) -> EmotionalRegulationAssessment:
    """
    Emotional regulation capacity.

    Formula:
        effectiveness * 0.3 + recovery * 0.25 + min(1, strategies / 4) * 0.2
        + min(1, coping / 3) * 0.15 + (no meltdown risk) * 0.1
        then * 0.8 with alexithymia indicators above 2
        and * 0.7 for high intensity with ineffective strategies
    """
    data = normalize_keys(data)
    emotional_state = str(data.get('current_emotional_state') or 'neutral')
    intensity = read_number(data, 'emotional_intensity', 0.5)
    strategies_used = [str(s) for s in read_list(data, 'regulation_strategies_used')]
    effectiveness = read_number(data, 'regulation_effectiveness', 0.5)
    recovery_time = read_number(data, 'emotional_recovery_time', 0)
    triggers = [str(t) for t in read_list(data, 'emotional_triggers')]
    alexithymia = read_number(data, 'alexithymia_indicators', 0)
    meltdown_risk = read_flag(data, 'emotional_meltdown_risk')
    coping = read_list(data, 'coping_mechanisms')

    recovery = _recovery_score(recovery_time)
    strategy_variety = min(1.0, len(strategies_used) / 4)
    coping_score = min(1.0, len(coping) / 3)

    capacity = (
        effectiveness * 0.3 +
        recovery * 0.25 +
        strategy_variety * 0.2 +
        coping_score * 0.15 +
        (0.0 if meltdown_risk else 1.0) * 0.1
    )
    if alexithymia > 2:
        capacity *= 0.8
    if intensity > 0.7 and effectiveness < 0.4:
        capacity *= 0.7
    capacity = clamp_score(capacity)
    level = classify(capacity, REGULATION_PROFILE_BANDS, 'external_regulation')

    effective = []
    if 'deep_breathing' in strategies_used and effectiveness > 0.5:
        effective.append('deep_breathing')
    if 'sensory_tools' in strategies_used and effectiveness > 0.5:
        effective.append('sensory_tools')
    if 'withdrawal' in strategies_used and effectiveness > 0.6:
        effective.append('controlled_withdrawal')

    recommended = []
    if alexithymia > 1:
        recommended.extend(['emotion_identification_tools', 'visual_emotion_charts'])
    if recovery_time > 1200:
        recommended.extend(['progressive_muscle_relaxation', 'sensory_breaks'])
    if len(strategies_used) < 3:
        recommended.extend(['expand_strategy_repertoire', 'strategy_practice_sessions'])
    if meltdown_risk:
        recommended.extend(['early_warning_system', 'meltdown_prevention_plan'])

    sensory_triggers = any('sensory' in trigger for trigger in triggers)

    priorities = []
    if meltdown_risk:
        priorities.append({'priority': 'critical', 'area': 'meltdown_prevention',
                           'intervention': 'Put an immediate meltdown prevention plan in place'})
    if alexithymia > 3:
        priorities.append({'priority': 'high', 'area': 'emotion_identification',
                           'intervention': 'Teach identifying and naming emotions'})
    if effectiveness < 0.3:
        priorities.append({'priority': 'high', 'area': 'strategy_development',
                           'intervention': 'Build a repertoire of regulation strategies'})
    if recovery_time > 1800:
        priorities.append({'priority': 'medium', 'area': 'recovery_optimization',
                           'intervention': 'Shorten emotional recovery after distress'})

    if alexithymia > 2:
        alexithymia_level = 'significant'
    elif alexithymia > 0:
        alexithymia_level = 'mild'
    else:
        alexithymia_level = 'minimal'

    return EmotionalRegulationAssessment(
        score=capacity,
        level=level,
        effective_strategies=effective,
        recommended_strategies=recommended,
        autism_specific={
            'can_use_independent_strategies': capacity >= 0.8,
            'requires_co_regulation': capacity < 0.4,
            'needs_sensory_regulation': sensory_triggers or capacity < 0.4,
            'alexithymia_support': alexithymia > 1,
            'visual_supports_recommended': True,
            'predictability_importance': 'unexpected_change' in triggers,
            'social_emotional_support': 'social' in emotional_state,
            'meltdown_prevention': meltdown_risk or intensity > 0.7,
            'executive_function_support': capacity < 0.5,
            'interoceptive_awareness': alexithymia > 2 or recovery_time > 1800,
        },
        intervention_priorities=priorities,
        current_status={
            'emotional_state': emotional_state,
            'intensity': intensity,
            'meltdown_risk': meltdown_risk,
            'alexithymia_level': alexithymia_level,
        },
        progress_metrics={
            'regulation_improvement': 'good' if capacity > 0.6 else 'needs_focus',
            'strategy_effectiveness': effectiveness,
            'recovery_efficiency': recovery,
            'strategic_diversity': strategy_variety,
        },
    )


def assess_social_awareness(data: Mapping) -> SocialAwarenessAssessment:
    """Social awareness from five equally weighted components."""
    data = normalize_keys(data)
    initiation = read_count(data, 'social_initiation', 0)
    response = read_number(data, 'social_response', 0.5)
    non_verbal = read_number(data, 'non_verbal_reading', 0.5)
    perspective = read_number(data, 'perspective_taking', 0.5)
    reciprocity = read_number(data, 'social_reciprocity', 0.5)
    strengths = [str(s) for s in read_list(data, 'social_strengths')]
    anxiety = read_number(data, 'social_anxiety', 0.5)
    interests = read_list(data, 'social_interests')

    initiation_score = min(1.0, max(0.0, initiation) / 3)
    awareness = (initiation_score + response + non_verbal + perspective + reciprocity) * 0.2
    if anxiety > 0.6:
        awareness *= 0.85
    if len(strengths) > 2:
        awareness += 0.1
    awareness = clamp_score(awareness)
    level = classify(awareness, SOCIAL_PROFILE_BANDS, 'minimal_awareness')

    def adequacy(ok: bool) -> str:
        return 'adequate' if ok else 'needs_support'

    social_skills = {
        'communication': {
            'verbal': adequacy(response > 0.6),
            'non_verbal': adequacy(non_verbal > 0.6),
            'reciprocal': adequacy(reciprocity > 0.6),
        },
        'initiation': {
            'level': adequacy(initiation_score > 0.6),
            'comfort': 'comfortable' if anxiety < 0.5 else 'anxious',
            'motivation': 'motivated' if len(interests) > 1 else 'limited_interest',
        },
        'understanding': {
            'perspective_taking': adequacy(perspective > 0.6),
            'social_cues': adequacy(non_verbal > 0.5),
            'social_contexts': adequacy(perspective > 0.5 and non_verbal > 0.5),
        },
    }

    support_needs = []
    if non_verbal < 0.5:
        support_needs.append('nonverbal_communication_training')
    if initiation < 2:
        support_needs.append('social_initiation_skills')
    if perspective < 0.5:
        support_needs.append('perspective_taking_development')
    if anxiety > 0.6:
        support_needs.append('social_anxiety_management')
    if reciprocity < 0.5:
        support_needs.append('conversational_turn_taking')

    neurodiversity = {
        'authenticity': 'honest_communication' in strengths,
        'direct_communication': 'clear_communication' in strengths,
        'deep_interests': len(interests) > 0,
        'loyal_friendship': 'loyal_friendship' in strengths,
        'detail_oriented': 'detail_awareness' in strengths,
        'pattern_recognition': 'pattern_recognition' in strengths,
        'genuine_interaction': 'social_masking' not in strengths,
    }
    neurodiversity_supports = []
    if neurodiversity['authenticity']:
        neurodiversity_supports.append('leverage_authentic_communication_style')
    if neurodiversity['deep_interests']:
        neurodiversity_supports.append('use_special_interests_as_social_bridge')
    if neurodiversity['detail_oriented']:
        neurodiversity_supports.append('apply_systematic_approach_to_social_learning')

    return SocialAwarenessAssessment(
        score=awareness,
        level=level,
        social_skills=social_skills,
        support_needs=support_needs,
        social_goals=get_strategies('social_awareness_goals', level),
        neurodiversity_strengths=neurodiversity,
        neurodiversity_supports=neurodiversity_supports,
        autism_specific={
            'ready_for_peer_interaction': awareness >= 0.8,
            'needs_explicit_instruction': awareness < 0.4,
            'benefits_from_social_stories': awareness < 0.6,
            'anxiety_support': anxiety > 0.6,
        },
        intervention_focus=support_needs[0] if support_needs else 'maintain_current_skills',
    )
