"""
Executive function assessment.

Five component assessors and a composite profile:
- Working memory (sequence span and accuracy, retention)
- Cognitive flexibility (task switching, adaptation, perseveration)
- Inhibitory control (impulse control, distractor resistance)
- Planning and organization
- Time management

Clinical rationale (Autism):
- Executive function differences are common in ASD and shape how much
  external structure a learner needs
- Rigidity and perseveration predict difficulty with transitions
- A composite profile guides the overall level of organisational support

Engineering approach:
- Every component is a weighted sum of 0-1 inputs (neutral default 0.5)
- Composite weights: working memory 0.25, flexibility 0.20, inhibition 0.20,
  planning 0.20, time management 0.15
- Composite bands are inclusive; component lists come from the shared tables
"""

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Mapping

from scoring.classification import (
    clamp_score,
    classify,
    normalize_keys,
    read_count,
    read_number,
)
from scoring.indicators import Indicator
from scoring.recommendations import get_strategies

logger = logging.getLogger(__name__)


WORKING_MEMORY_BANDS = ((0.8, 'superior'), (0.6, 'average'), (0.4, 'emerging'))
FLEXIBILITY_BANDS = ((0.7, 'flexible'), (0.5, 'moderately_flexible'), (0.3, 'rigid'))
INHIBITORY_BANDS = ((0.8, 'strong'), (0.6, 'adequate'), (0.4, 'developing'))
PLANNING_BANDS = ((0.8, 'independent'), (0.6, 'moderate'), (0.4, 'emerging'))
TIME_MANAGEMENT_BANDS = PLANNING_BANDS
COMPOSITE_BANDS = ((0.85, 'superior'), (0.7, 'above_average'), (0.5, 'average'),
                   (0.3, 'below_average'))

COMPOSITE_WEIGHTS = {
    'working_memory': 0.25,
    'cognitive_flexibility': 0.20,
    'inhibitory_control': 0.20,
    'planning': 0.20,
    'time_management': 0.15,
}

# Typical adult digit span
FULL_SEQUENCE_LENGTH = 7
STRENGTH_THRESHOLD = 0.7
CHALLENGE_THRESHOLD = 0.5


@dataclass
class ExecutiveFunctionProfile:
    """
    Composite executive function profile.

    Attributes:
        working_memory, cognitive_flexibility, inhibitory_control, planning,
        time_management: Component indicators
        overall_level: Composite level (superior .. significant_impairment)
        composite_score: Weighted composite in [0, 1]
        components: Component name -> score
        strengths: Executive strengths for the composite level
        support_needs: Support needs for the composite level
        interventions: Recommended interventions
        autism_specific: Composite-derived flags and executive profile label
    """
    working_memory: Indicator
    cognitive_flexibility: Indicator
    inhibitory_control: Indicator
    planning: Indicator
    time_management: Indicator
    overall_level: str
    composite_score: float
    components: Dict[str, float] = field(default_factory=dict)
    strengths: List[str] = field(default_factory=list)
    support_needs: List[str] = field(default_factory=list)
    interventions: List[str] = field(default_factory=list)
    autism_specific: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def assess_working_memory(data: Mapping) -> Indicator:
    """Working memory from sequence span, accuracy and retention."""
    data = normalize_keys(data)
    sequence_length = read_count(data, 'sequence_length', 0)
    accuracy = read_number(data, 'sequence_accuracy', 0.5)
    multistep = read_number(data, 'multistep_tasks', 0.5)
    distraction_resistance = read_number(data, 'distraction_resistance', 0.5)
    retention = read_number(data, 'information_retention', 0.5)

    sequence_score = min(1.0, max(0.0, sequence_length) / FULL_SEQUENCE_LENGTH)
    score = clamp_score(
        sequence_score * 0.25 +
        accuracy * 0.25 +
        multistep * 0.15 +
        distraction_resistance * 0.15 +
        retention * 0.20
    )
    level = classify(score, WORKING_MEMORY_BANDS, 'needs_support')

    strengths = []
    if accuracy >= STRENGTH_THRESHOLD:
        strengths.append('sequential_processing')
    if retention >= STRENGTH_THRESHOLD:
        strengths.append('information_retention')
    if distraction_resistance >= STRENGTH_THRESHOLD:
        strengths.append('focus_under_distraction')
    if multistep >= STRENGTH_THRESHOLD:
        strengths.append('multistep_execution')

    challenges = []
    if sequence_score < CHALLENGE_THRESHOLD:
        challenges.append('complex_instructions')
    if accuracy < CHALLENGE_THRESHOLD:
        challenges.append('sequence_recall')
    if distraction_resistance < CHALLENGE_THRESHOLD:
        challenges.append('distractibility')
    if retention < CHALLENGE_THRESHOLD:
        challenges.append('retention_over_time')

    return Indicator(
        score=score,
        level=level,
        strategies=get_strategies('working_memory_interventions', level),
        factors={
            'sequence_span': sequence_score,
            'sequence_accuracy': accuracy,
            'multistep_tasks': multistep,
            'distraction_resistance': distraction_resistance,
            'information_retention': retention,
        },
        autism_specific={
            'external_memory_aids': score < 0.6,
            'visual_sequence_supports': score < 0.7,
            'chunked_instructions': sequence_score < 0.6,
        },
        extras={'strengths': strengths, 'challenges': challenges},
    )


def assess_cognitive_flexibility(data: Mapping) -> Indicator:
    """Cognitive flexibility; perseveration counts against the score."""
    data = normalize_keys(data)
    task_switching = read_number(data, 'task_switching', 0.5)
    adaptation = read_number(data, 'adaptation_rate', 0.5)
    rule_changes = read_count(data, 'rule_changes', 0)
    creative = read_number(data, 'creative_solutions', 0.5)
    perseveration = read_number(data, 'perseveration_errors', 0.5)

    rule_change_score = min(1.0, max(0.0, rule_changes) / 3)
    score = clamp_score(
        task_switching * 0.25 +
        adaptation * 0.25 +
        rule_change_score * 0.15 +
        creative * 0.15 +
        (1 - perseveration) * 0.20
    )
    level = classify(score, FLEXIBILITY_BANDS, 'very_rigid')

    return Indicator(
        score=score,
        level=level,
        strategies=get_strategies('cognitive_flexibility', level),
        factors={
            'task_switching': task_switching,
            'adaptation_rate': adaptation,
            'rule_changes': rule_change_score,
            'creative_solutions': creative,
            'perseveration': perseveration,
        },
        autism_specific={
            'can_handle_changes': score >= 0.6,
            'needs_predictability': score < 0.5,
            'perseveration_risk': perseveration > 0.6,
        },
    )


def assess_inhibitory_control(data: Mapping) -> Indicator:
    data = normalize_keys(data)
    impulse = read_number(data, 'impulse_control', 0.5)
    distractor = read_number(data, 'distractor_resistance', 0.5)
    response_inhibition = read_number(data, 'response_inhibition', 0.5)
    emotional = read_number(data, 'emotional_regulation', 0.5)

    score = clamp_score(
        impulse * 0.30 +
        distractor * 0.25 +
        response_inhibition * 0.25 +
        emotional * 0.20
    )
    level = classify(score, INHIBITORY_BANDS, 'weak')

    return Indicator(
        score=score,
        level=level,
        strategies=get_strategies('inhibitory_control', level),
        factors={
            'impulse_control': impulse,
            'distractor_resistance': distractor,
            'response_inhibition': response_inhibition,
            'emotional_regulation': emotional,
        },
        autism_specific={
            'task_persistence': score >= 0.7,
            'sensory_regulation': emotional < 0.4 or score < 0.4,
            'needs_wait_supports': impulse < 0.5,
        },
    )


def assess_planning_organization(data: Mapping) -> Indicator:
    data = normalize_keys(data)
    components = {
        'task_planning': read_number(data, 'task_planning', 0.5),
        'sequencing': read_number(data, 'sequencing', 0.5),
        'goal_setting': read_number(data, 'goal_setting', 0.5),
        'prioritization': read_number(data, 'prioritization', 0.5),
        'organization': read_number(data, 'organization', 0.5),
        'follow_through': read_number(data, 'follow_through', 0.5),
    }
    score = clamp_score(
        components['task_planning'] * 0.20 +
        components['sequencing'] * 0.20 +
        components['goal_setting'] * 0.15 +
        components['prioritization'] * 0.15 +
        components['organization'] * 0.15 +
        components['follow_through'] * 0.15
    )
    level = classify(score, PLANNING_BANDS, 'needs_support')

    return Indicator(
        score=score,
        level=level,
        strategies=get_strategies('planning_strategies', level),
        factors=components,
        autism_specific={
            'needs_visual_planning': score < 0.7,
            'benefits_from_routines': True,
            'requires_breakdown': score < 0.5,
            'sensory_friendly_tools': True,
        },
        extras={'supports': get_strategies('planning_supports', level)},
    )


def assess_time_management(data: Mapping) -> Indicator:
    data = normalize_keys(data)
    components = {
        'time_awareness': read_number(data, 'time_awareness', 0.5),
        'punctuality': read_number(data, 'punctuality', 0.5),
        'task_timing': read_number(data, 'task_timing', 0.5),
        'scheduling': read_number(data, 'scheduling', 0.5),
        'time_estimation': read_number(data, 'time_estimation', 0.5),
        'transitions': read_number(data, 'transitions', 0.5),
    }
    score = clamp_score(
        components['time_awareness'] * 0.20 +
        components['punctuality'] * 0.15 +
        components['task_timing'] * 0.20 +
        components['scheduling'] * 0.15 +
        components['time_estimation'] * 0.15 +
        components['transitions'] * 0.15
    )
    level = classify(score, TIME_MANAGEMENT_BANDS, 'needs_support')

    return Indicator(
        score=score,
        level=level,
        strategies=get_strategies('time_tools', level),
        factors=components,
        autism_specific={
            'needs_visual_time': score < 0.7,
            'benefits_from_predictability': True,
            'requires_transition_warnings': components['transitions'] < 0.5,
            'sensory_timers': True,
        },
        extras={'interventions': get_strategies('time_interventions', level)},
    )


def summarize_executive_components(components: Mapping[str, float]) -> Dict[str, Any]:
    """
    Composite score, level and supports from the five component scores.

    Args:
        components: working_memory, cognitive_flexibility, inhibitory_control,
            planning and time_management scores (0-1)

    Returns:
        Dict with overall_level, composite_score, components, strengths,
        support_needs, interventions and autism_specific
    """
    components = {name: float(components[name]) for name in COMPOSITE_WEIGHTS}
    composite = clamp_score(sum(
        components[name] * weight for name, weight in COMPOSITE_WEIGHTS.items()
    ))
    level = classify(composite, COMPOSITE_BANDS, 'significant_impairment')

    logger.info(f"Executive function composite: {composite:.3f} ({level})")

    return {
        'overall_level': level,
        'composite_score': composite,
        'components': components,
        'strengths': get_strategies('executive_strengths', level),
        'support_needs': get_strategies('executive_support_needs', level),
        'interventions': get_strategies('executive_interventions', level),
        'autism_specific': {
            'needs_external_structure': composite < 0.6,
            'benefits_from_visual_supports': True,
            'requires_routines': composite < 0.5,
            'executive_function_profile': executive_profile_label(composite),
        },
    }


def calculate_executive_function_score(data: Mapping) -> ExecutiveFunctionProfile:
    """
    Combine the five executive components into a composite profile.

    All five component assessors run on the same input mapping.
    """
    data = normalize_keys(data)
    working_memory = assess_working_memory(data)
    flexibility = assess_cognitive_flexibility(data)
    inhibitory = assess_inhibitory_control(data)
    planning = assess_planning_organization(data)
    time_management = assess_time_management(data)

    summary = summarize_executive_components({
        'working_memory': working_memory.score,
        'cognitive_flexibility': flexibility.score,
        'inhibitory_control': inhibitory.score,
        'planning': planning.score,
        'time_management': time_management.score,
    })

    return ExecutiveFunctionProfile(
        working_memory=working_memory,
        cognitive_flexibility=flexibility,
        inhibitory_control=inhibitory,
        planning=planning,
        time_management=time_management,
        **summary,
    )


def executive_profile_label(score: float) -> str:
    if score < 0.3:
        return 'high_support_executive'
    if score < 0.5:
        return 'moderate_support_executive'
    if score < 0.7:
        return 'emerging_executive'
    return 'independent_executive'
