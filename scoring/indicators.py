"""
Primary behavioral indicators.

Five weighted-factor classifiers computed from session interaction metrics:
1. Persistence: keeps trying after errors, completes tasks
2. Frustration: error accumulation, slowing responses, abandonment
3. Regulation: self-correction, pauses, appropriate help seeking
4. Attention: sustained focus across the session
5. Motivation: engagement, voluntary effort, initiative

Clinical rationale (Autism):
- Persistence and frustration together anticipate disengagement and meltdowns
- Self-regulation is the main marker of readiness for independent work
- Attention and motivation inform session length and reward planning

Engineering approach:
- Each factor adds a fixed contribution; the total is clamped to [0, 1]
- Levels come from inclusive threshold bands (score >= threshold)
- Strategy lists are looked up from the shared strategy tables
- Missing inputs take neutral defaults; no input combination raises
"""

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Mapping

from scoring.classification import (
    calculate_trend,
    clamp_score,
    classify,
    normalize_keys,
    numeric_sequence,
    read_count,
    read_flag,
    read_number,
)
from scoring.recommendations import get_strategies

logger = logging.getLogger(__name__)


PERSISTENCE_BANDS = ((0.8, 'high'), (0.6, 'moderate'), (0.4, 'emerging'))
FRUSTRATION_BANDS = ((0.7, 'high'), (0.5, 'moderate'), (0.3, 'emerging'))
REGULATION_BANDS = ((0.8, 'independent'), (0.6, 'emerging_independence'),
                    (0.4, 'guided_regulation'))
ATTENTION_BANDS = ((0.8, 'sustained'), (0.6, 'moderate'), (0.4, 'variable'))
MOTIVATION_BANDS = ((0.8, 'intrinsic'), (0.6, 'engaged'), (0.4, 'extrinsic'))

# Time spent beyond which breaks are recommended (5 minutes, in ms)
BREAK_THRESHOLD_MS = 300_000
# Session length giving full credit for attention duration (10 minutes, in ms)
FULL_ATTENTION_DURATION_MS = 600_000


@dataclass
class Indicator:
    """
    One classified behavioral dimension.

    Attributes:
        score: Clamped score in [0, 1]
        level: Level name from the dimension's band table
        strategies: Strategies (or interventions/supports) for the level
        factors: Raw factor values that fed the score
        autism_specific: Autism-oriented boolean flags derived from the score
        extras: Secondary lists (triggers, goals, strengths, challenges)
    """
    score: float
    level: str
    strategies: List[str] = field(default_factory=list)
    factors: Dict[str, float] = field(default_factory=dict)
    autism_specific: Dict[str, Any] = field(default_factory=dict)
    extras: Dict[str, List[str]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def assess_persistence(data: Mapping) -> Indicator:
    """
    Persistence from attempts, errors, completion and time on task.

    Formula:
        +(1 - errors/attempts) * 0.3      when attempts > 0
        +0.4                              when completed
        +0.2                              when time was spent with no abandonment
        +min(0.1, retries * 0.02)         retries = max(0, attempts - errors)
    """
    data = normalize_keys(data)
    attempts = read_number(data, 'attempts', 0)
    errors = read_number(data, 'errors', 0)
    completed = read_flag(data, 'completed')
    time_spent = read_number(data, 'time_spent', 0)
    abandonments = read_number(data, 'abandonments', 0)

    score = 0.0
    if attempts > 0:
        score += (1 - errors / attempts) * 0.3
    if completed:
        score += 0.4
    if time_spent > 0 and abandonments == 0:
        score += 0.2

    retries = max(0.0, attempts - errors)
    if retries > 0:
        score += min(0.1, retries * 0.02)

    score = clamp_score(score)
    level = classify(score, PERSISTENCE_BANDS, 'needs_support')

    return Indicator(
        score=score,
        level=level,
        strategies=get_strategies('persistence', level),
        factors={
            'error_handling': 1 - errors / max(attempts, 1),
            'task_completion': 1.0 if completed else 0.0,
            'time_investment': 1.0 if time_spent > 0 else 0.0,
            'retry_behavior': retries / max(attempts, 1),
        },
        autism_specific={
            'needs_routine': score < 0.5,
            'benefits_from_visual_support': score < 0.7,
            'requires_breaks': time_spent > BREAK_THRESHOLD_MS,
        },
    )


def assess_frustration(data: Mapping) -> Indicator:
    """
    Frustration from error rate, response time drift, abandonment and
    help requests.

    The response time trend is measured on the raw progression values
    (milliseconds), so any slowdown of more than a fraction of a
    millisecond between halves reaches the top trend band.
    """
    data = normalize_keys(data)
    attempts = read_number(data, 'attempts', 0)
    error_rate = read_number(data, 'errors', 0) / max(attempts or 1, 1)
    progression = numeric_sequence(data.get('response_time_progression'))
    abandonments = read_count(data, 'abandonments', 0)
    help_requests = read_count(data, 'help_requests', 0)
    negative = read_count(data, 'negative_indicators', 0)

    score = 0.0
    if error_rate > 0.6:
        score += 0.25
    elif error_rate > 0.4:
        score += 0.15
    elif error_rate > 0.2:
        score += 0.05

    trend = calculate_trend(progression) if progression else 0.0
    if len(progression) > 2:
        if trend > 0.3:
            score += 0.2
        elif trend > 0.1:
            score += 0.1

    if abandonments > 0:
        score += min(0.25, abandonments * 0.1)

    if help_requests > 3:
        score += 0.15
    elif help_requests > 1:
        score += 0.08

    score += min(0.15, max(0.0, negative) * 0.03)

    score = clamp_score(score)
    level = classify(score, FRUSTRATION_BANDS, 'minimal')
    logger.debug(f"Frustration {score:.3f} ({level}), error rate {error_rate:.2f}, trend {trend:.1f}")

    return Indicator(
        score=score,
        level=level,
        strategies=get_strategies('frustration', level),
        factors={
            'error_accumulation': error_rate,
            'time_stress': trend,
            'task_abandonment': abandonments,
            'support_seeking': help_requests,
        },
        autism_specific={
            'meltdown_risk': score > 0.6,
            'needs_sensory_break': score > 0.4,
            'requires_immediate_intervention': score > 0.7,
            'benefits_from_predictability': score > 0.3,
        },
        extras={'triggers': get_strategies('frustration_triggers', level)},
    )


def assess_regulation(data: Mapping) -> Indicator:
    """Self-regulation from corrections, pauses, help seeking and recovery."""
    data = normalize_keys(data)
    self_corrections = read_count(data, 'self_corrections', 0)
    pauses = read_count(data, 'pauses_taken', 0)
    help_requests = read_count(data, 'help_requests', 0)
    strategy_changes = read_count(data, 'strategy_changes', 0)
    emotional_recovery = read_number(data, 'emotional_recovery', 0)
    time_management = read_number(data, 'time_management', 0)
    errors = read_number(data, 'errors', 0)

    score = 0.0
    if self_corrections > 2:
        score += 0.25
    elif self_corrections > 0:
        score += 0.15

    if pauses > 1:
        score += 0.2
    elif pauses > 0:
        score += 0.1

    # Asking for help once or twice is a regulation skill; more is not
    if 1 <= help_requests <= 2:
        score += 0.2

    if strategy_changes > 0:
        score += 0.15
    if emotional_recovery > 0:
        score += 0.1
    if time_management > 0.5:
        score += 0.1

    score = clamp_score(score)
    level = classify(score, REGULATION_BANDS, 'needs_support')

    return Indicator(
        score=score,
        level=level,
        strategies=get_strategies('regulation_supports', level),
        factors={
            'self_correction': self_corrections / max(errors or 1, 1),
            'pause_utilization': pauses,
            'appropriate_help_seeking': 1.0 if 1 <= help_requests <= 3 else 0.0,
            'strategic_flexibility': strategy_changes,
        },
        autism_specific={
            'needs_external_cues': score < 0.5,
            'benefits_from_visual_schedules': score < 0.7,
            'can_handle_transitions': score > 0.6,
            'ready_for_independence': score > 0.8,
        },
        extras={'goals': get_strategies('regulation_goals', level)},
    )


def assess_attention(data: Mapping) -> Indicator:
    """
    Sustained attention over the session.

    Formula:
        duration     min(1, session_duration / 10 min)        * 0.30
        focus        max(0, 1 - focus_loss / 5)               * 0.25
        distraction  max(0, 1 - distraction_events / 10)      * 0.20
        completion   completed                                 * 0.15
        switching    1 up to two switches, then tapering       * 0.10
    """
    data = normalize_keys(data)
    duration = read_number(data, 'session_duration', 0)
    focus_loss = read_count(data, 'focus_loss', 0)
    distractions = read_count(data, 'distraction_events', 0)
    completed = read_flag(data, 'completed')
    task_switching = read_count(data, 'task_switching', 0)

    duration_factor = min(1.0, max(0.0, duration) / FULL_ATTENTION_DURATION_MS)
    focus_factor = max(0.0, 1 - focus_loss / 5)
    distraction_factor = max(0.0, 1 - distractions / 10)
    completion_factor = 1.0 if completed else 0.0
    if task_switching <= 2:
        switching_factor = 1.0
    else:
        switching_factor = max(0.0, 1 - (task_switching - 2) / 5)

    score = clamp_score(
        duration_factor * 0.30 +
        focus_factor * 0.25 +
        distraction_factor * 0.20 +
        completion_factor * 0.15 +
        switching_factor * 0.10
    )
    level = classify(score, ATTENTION_BANDS, 'limited')

    return Indicator(
        score=score,
        level=level,
        strategies=get_strategies('attention', level),
        factors={
            'duration': duration_factor,
            'focus_maintenance': focus_factor,
            'distraction_resistance': distraction_factor,
            'task_completion': completion_factor,
            'task_switching': switching_factor,
        },
        autism_specific={
            'can_handle_variability': score > 0.7,
            'needs_environmental_control': score < 0.5,
            'benefits_from_visual_timers': score < 0.7,
        },
    )


def assess_motivation(data: Mapping) -> Indicator:
    """Motivation from engagement, voluntary effort and choice making."""
    data = normalize_keys(data)
    engagement = read_number(data, 'engagement_level', 0.5)
    voluntary = read_count(data, 'voluntary_attempts', 0)
    initiative = read_count(data, 'initiative_taking', 0)
    persistence_after_failure = read_count(data, 'persistence_after_failure', 0)
    choices = read_count(data, 'choice_exercising', 0)

    voluntary_factor = min(1.0, voluntary / 5)
    initiative_factor = min(1.0, initiative / 3)
    recovery_factor = min(1.0, persistence_after_failure / 2)
    choice_factor = min(1.0, choices / 2)

    score = clamp_score(
        engagement * 0.30 +
        voluntary_factor * 0.20 +
        initiative_factor * 0.20 +
        recovery_factor * 0.15 +
        choice_factor * 0.15
    )
    level = classify(score, MOTIVATION_BANDS, 'minimal')

    return Indicator(
        score=score,
        level=level,
        strategies=get_strategies('motivation', level),
        factors={
            'engagement': engagement,
            'voluntary_participation': voluntary_factor,
            'initiative': initiative_factor,
            'persistence_after_failure': recovery_factor,
            'choice_making': choice_factor,
        },
        autism_specific={
            'needs_external_motivation': score < 0.5,
            'benefits_from_special_interests': True,
            'responds_to_choice': score >= 0.4,
        },
    )
