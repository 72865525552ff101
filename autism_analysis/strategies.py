"""
ABA-based behavioral strategy planning.

Turns indicator levels into an ordered list of strategy records, each with
a target behavior, the ABA method, teaching steps, data-collection measures
and an implementation note. Known triggers add prevention records and
identified strengths add environmental supports. A reinforcement plan is
always appended.

Clinical rationale (Autism):
- Forward chaining builds persistence by guaranteeing early success
- Differential reinforcement replaces frustration behavior with a
  functionally equivalent request (break, help)
- Graduated attention training extends focus from a short, reachable base
- The Premack principle ties low-preference tasks to preferred activities
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

logger = logging.getLogger(__name__)


def _level_of(indicators: Any, name: str) -> Optional[str]:
    if isinstance(indicators, Mapping):
        indicator = indicators.get(name)
    else:
        indicator = getattr(indicators, name, None)
    if indicator is None:
        return None
    if isinstance(indicator, Mapping):
        return indicator.get('level')
    return getattr(indicator, 'level', None)


def suggest_behavioral_strategies(indicators: Any,
                                  identified_triggers: Optional[List[str]] = None,
                                  strengths: Optional[List[str]] = None,
                                  preferred_reinforcers: Optional[List[str]] = None) -> List[Dict[str, Any]]:
    """
    Build an ABA strategy plan.

    Args:
        indicators: BehavioralIndicators or mapping of name -> {level: ...}
        identified_triggers: Trigger names to plan prevention for
        strengths: Learner strengths (e.g. visual_processing, routine_following)
        preferred_reinforcers: Reinforcers known to work for the learner

    Returns:
        List of strategy records (dicts)
    """
    strategies: List[Dict[str, Any]] = []

    if _level_of(indicators, 'persistence') in ('needs_support', 'emerging'):
        strategies.append({
            'type': 'intervention',
            'target': 'persistence',
            'aba_method': 'forward_chaining',
            'description': 'Teach the task one step at a time, starting from the first step',
            'steps': [
                'Break the task into sequential steps',
                'Teach the first step until it is mastered',
                'Add the next step only after consistent success',
                'Fade prompts systematically',
            ],
            'data_collection': ['Steps completed independently', 'Prompt level per step'],
            'implementation': 'Reinforce every completed step; keep early steps short',
        })

    if _level_of(indicators, 'frustration') in ('high', 'moderate'):
        strategies.append({
            'type': 'intervention',
            'target': 'frustration_tolerance',
            'aba_method': 'differential_reinforcement',
            'description': 'Reinforce appropriate requests for a break or help',
            'steps': [
                'Identify the function of the frustration behavior',
                'Teach a functionally equivalent request (break card, help card)',
                'Reinforce the request immediately',
                'Redirect rather than reinforce the frustration behavior',
            ],
            'data_collection': ['Frequency of frustration episodes',
                                'Independent break or help requests'],
            'implementation': 'Offer the break card before the task becomes difficult',
        })

    if _level_of(indicators, 'attention') in ('limited', 'variable'):
        strategies.append({
            'type': 'teaching',
            'target': 'attention_span',
            'aba_method': 'graduated_attention_training',
            'description': 'Extend sustained attention gradually from a reachable base',
            'steps': [
                'Measure the current sustained attention baseline',
                'Set the first target just above the baseline',
                'Reinforce on reaching the target',
                'Increase the target after three successful sessions',
            ],
            'data_collection': ['Sustained attention duration', 'Number of redirections'],
            'implementation': 'Start with 30s focus blocks and add 15s after each success',
        })

    if _level_of(indicators, 'motivation') in ('minimal', 'extrinsic'):
        strategies.append({
            'type': 'intervention',
            'target': 'motivation',
            'aba_method': 'premack_principle',
            'description': 'Follow a less preferred task with a preferred activity',
            'steps': [
                'Identify preferred activities and special interests',
                'Present a first-then board',
                'Deliver the preferred activity right after completion',
            ],
            'data_collection': ['Task initiations without prompting', 'Time to start task'],
            'implementation': 'Use a visual first-then board for every task',
        })

    for trigger in identified_triggers or []:
        record = _prevention_for(str(trigger))
        if record:
            strategies.append(record)

    strategies.append({
        'type': 'reinforcement_plan',
        'target': 'reinforcement',
        'aba_method': 'reinforcement_schedule',
        'primary_reinforcement': list(preferred_reinforcers or ['praise', 'choice']),
        'schedule': 'continuous' if strategies else 'intermittent',
        'fading': {
            'timeline': '4-6 weeks',
            'method': 'Gradual reduction of frequency',
            'maintenance': 'Intermittent reinforcement for maintenance',
        },
        'data_collection': ['Frequency of target behaviors', 'Success on taught skills',
                            'Use of self-regulation strategies'],
        'autism_specific': {
            'visual_reinforcers': True,
            'sensory_breaks': True,
            'choice_provision': True,
            'predictable_delivery': True,
        },
    })

    strengths = strengths or []
    if 'visual_processing' in strengths:
        strategies.append({
            'type': 'environmental_support',
            'target': 'environment',
            'aba_method': 'antecedent_modification',
            'description': 'Build on strong visual processing',
            'implementations': ['Detailed visual schedules', 'Pictorial reminders',
                                'Visual maps of the room', 'Picture communication system'],
        })
    if 'routine_following' in strengths:
        strategies.append({
            'type': 'environmental_support',
            'target': 'environment',
            'aba_method': 'antecedent_modification',
            'description': 'Maximise predictability and structure',
            'implementations': ['Visible, clearly defined routines', 'Standardised transitions',
                                'Consistent warnings before changes',
                                'Start and end rituals for activities'],
        })

    logger.debug(f"Suggested {len(strategies)} behavioral strategy records")
    return strategies


def _prevention_for(trigger: str) -> Optional[Dict[str, Any]]:
    if 'sensory' in trigger:
        return {
            'type': 'prevention',
            'target': trigger,
            'aba_method': 'antecedent_modification',
            'description': 'Proactive sensory regulation to prevent overload',
            'methods': ['Personalised sensory diet', 'Warnings before sensory changes',
                        'Access to self-regulation tools', 'Scheduled sensory breaks'],
        }
    if 'transition' in trigger:
        return {
            'type': 'prevention',
            'target': trigger,
            'aba_method': 'antecedent_modification',
            'description': 'Structure that makes changes easier',
            'methods': ['Visual timers for warnings', 'Consistent transition routines',
                        'Choices during transitions', 'Social stories about changes'],
        }
    if 'social' in trigger:
        return {
            'type': 'prevention',
            'target': trigger,
            'aba_method': 'antecedent_modification',
            'description': 'Graded support for social interaction',
            'methods': ['Visual social scripts', 'Break cards for self-regulation',
                        'Structured interaction opportunities',
                        'Non-verbal signals to communicate needs'],
        }
    return None
