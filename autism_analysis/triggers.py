"""
Behavioral trigger analysis (ABC: Antecedent-Behavior-Consequence).

Identifies antecedents that repeatedly precede challenging behavior and
combines them with the currently reported sensory, social, transition and
environmental triggers into a single trigger load.

Clinical rationale (Autism):
- Recurring antecedents are the primary target for prevention planning
- Sensory and transition triggers weigh more heavily in ASD
- Elevated stress and disrupted routines amplify every other trigger

Engineering approach:
- Event-log antecedents need at least two occurrences to count
- Each current trigger adds a fixed load; the total is clamped to [0, 1]
- Severity uses strict thresholds (> 0.7 high, > 0.4 moderate)
- Triggers are sorted by frequency, descending, keeping insertion order
  among equal frequencies (current triggers count as frequency 1)
"""

import logging
from collections import Counter
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Mapping, Optional

import numpy as np

from scoring.classification import (
    classify,
    normalize_keys,
    numeric_sequence,
    read_flag,
    read_list,
    read_number,
)
from scoring.recommendations import environmental_modifications_for, prevention_strategies_for

logger = logging.getLogger(__name__)


SEVERITY_BANDS = ((0.7, 'high'), (0.4, 'moderate'))
IMMEDIATE_ACTION_LOAD = 0.6
HIGH_PRIORITY_FREQUENCY = 3
STRESS_THRESHOLD = 0.7
MONITORING_LIMIT = 5

ENVIRONMENTAL_CHANGE_LOAD = 0.1
HIGH_RISK_ENVIRONMENTAL_CHANGES = ('lighting_change', 'noise_increase', 'crowd_increase')
STRESS_LOAD = 0.2
ROUTINE_DISRUPTION_LOAD = 0.25

# category -> (load per trigger, confidence, intervention priority)
CURRENT_TRIGGER_RULES = {
    'sensory': (0.15, 0.8, 'high'),
    'social': (0.12, 0.7, 'medium'),
    'transition': (0.20, 0.9, 'high'),
}

# Checked in this order; the first category with a matching token wins
CATEGORY_KEYWORDS = (
    ('sensory', {'sensory', 'noise', 'noisy', 'sound', 'loud', 'light', 'lighting', 'bright',
                 'visual', 'auditory', 'touch', 'tactile', 'texture', 'smell', 'music'}),
    ('social', {'social', 'peer', 'peers', 'group', 'interaction', 'conversation', 'demand',
                'eye', 'crowd', 'stranger', 'praise'}),
    ('transition', {'transition', 'change', 'switch', 'schedule', 'routine', 'stop', 'ending',
                    'interruption', 'waiting', 'unexpected'}),
    ('cognitive', {'task', 'difficult', 'difficulty', 'complex', 'complexity', 'instruction',
                   'instructions', 'error', 'errors', 'problem', 'demands', 'failure'}),
)


@dataclass
class IdentifiedTrigger:
    """
    One identified trigger.

    Attributes:
        trigger: Antecedent name (prefixed by category for current triggers)
        frequency: Occurrences in the event log (1 for current triggers)
        confidence: Confidence in [0, 1]
        category: sensory, social, transition, cognitive or environmental
        intervention_priority: high or medium
        source: event_log or current
        autism_specific: True for triggers reported as current ASD triggers
    """
    trigger: str
    frequency: int
    confidence: float
    category: str
    intervention_priority: str
    source: str = 'event_log'
    autism_specific: bool = False


@dataclass
class TriggerAnalysis:
    identified_triggers: List[IdentifiedTrigger] = field(default_factory=list)
    risk_factors: List[str] = field(default_factory=list)
    patterns: Dict[str, Any] = field(default_factory=dict)
    trigger_load: float = 0.0
    severity: str = 'low'
    prevention_strategies: List[str] = field(default_factory=list)
    recommendations: Dict[str, List[str]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def categorize_trigger(trigger: str) -> str:
    """Keyword category of a trigger name; environmental when nothing matches."""
    tokens = set(str(trigger).lower().replace('-', '_').replace(' ', '_').split('_'))
    for category, keywords in CATEGORY_KEYWORDS:
        if tokens & keywords:
            return category
    return 'environmental'


def identify_behavioral_triggers(data: Mapping) -> TriggerAnalysis:
    """
    Analyze the event log and current triggers.

    Args:
        data: Mapping with optional behavioral_events (list of
            {antecedent, behavior, consequence, time}), environmental_changes,
            sensory_triggers, social_triggers, transition_triggers,
            stress_level (0-1, default 0.5) and routine_disrupted.

    Returns:
        TriggerAnalysis
    """
    data = normalize_keys(data)
    events = [event for event in read_list(data, 'behavioral_events') if isinstance(event, Mapping)]
    stress_level = read_number(data, 'stress_level', 0.5)
    routine_disrupted = read_flag(data, 'routine_disrupted') or read_flag(data, 'rutine_disrupted')

    triggers: List[IdentifiedTrigger] = []
    risk_factors: List[str] = []
    load = 0.0

    frequencies = Counter(
        str(event['antecedent']) for event in events if event.get('antecedent')
    )
    for antecedent, frequency in frequencies.items():
        if frequency > 1:
            triggers.append(IdentifiedTrigger(
                trigger=antecedent,
                frequency=frequency,
                confidence=min(1.0, frequency / len(events)),
                category=categorize_trigger(antecedent),
                intervention_priority='high' if frequency > HIGH_PRIORITY_FREQUENCY else 'medium',
            ))

    for change in read_list(data, 'environmental_changes'):
        load += ENVIRONMENTAL_CHANGE_LOAD
        if change in HIGH_RISK_ENVIRONMENTAL_CHANGES:
            risk_factors.append(f"environmental_{change}")
            load += ENVIRONMENTAL_CHANGE_LOAD

    for category in ('sensory', 'social', 'transition'):
        per_trigger, confidence, priority = CURRENT_TRIGGER_RULES[category]
        for name in read_list(data, f"{category}_triggers"):
            load += per_trigger
            triggers.append(IdentifiedTrigger(
                trigger=f"{category}_{name}",
                frequency=1,
                confidence=confidence,
                category=category,
                intervention_priority=priority,
                source='current',
                autism_specific=True,
            ))

    if stress_level > STRESS_THRESHOLD:
        load += STRESS_LOAD
        risk_factors.append('elevated_stress_level')

    if routine_disrupted:
        load += ROUTINE_DISRUPTION_LOAD
        risk_factors.append('routine_disruption')

    # sorted() is stable, so equal frequencies keep insertion order
    triggers = sorted(triggers, key=lambda t: t.frequency, reverse=True)
    trigger_load = min(1.0, load)
    severity = classify(trigger_load, SEVERITY_BANDS, 'low', inclusive=False)
    categories = _unique(t.category for t in triggers)

    logger.info(
        f"Trigger analysis: {len(triggers)} triggers, load {trigger_load:.2f} ({severity})"
    )

    return TriggerAnalysis(
        identified_triggers=triggers,
        risk_factors=risk_factors,
        patterns=analyze_trigger_patterns(events),
        trigger_load=trigger_load,
        severity=severity,
        prevention_strategies=prevention_strategies_for(categories, risk_factors),
        recommendations={
            'immediate_actions': (['reduce_stimuli', 'provide_support']
                                  if trigger_load > IMMEDIATE_ACTION_LOAD else []),
            'environmental_modifications': environmental_modifications_for(categories),
            'monitoring_focus': [t.trigger for t in triggers
                                 if t.intervention_priority == 'high'][:MONITORING_LIMIT],
        },
    )


def analyze_trigger_patterns(events: List[Mapping]) -> Dict[str, Any]:
    """
    Summarise an ABC event log.

    Returns behavior counts, antecedent -> behavior pair counts, the
    dominant antecedent and behavior, and timing statistics when events
    carry a numeric ``time``.
    """
    if not events:
        return {'total_events': 0}

    behaviors = Counter(str(e['behavior']) for e in events if e.get('behavior'))
    antecedents = Counter(str(e['antecedent']) for e in events if e.get('antecedent'))
    pairs = Counter(
        f"{e['antecedent']}->{e['behavior']}"
        for e in events if e.get('antecedent') and e.get('behavior')
    )
    consequences = Counter(str(e['consequence']) for e in events if e.get('consequence'))

    patterns: Dict[str, Any] = {
        'total_events': len(events),
        'behavior_counts': dict(behaviors),
        'antecedent_behavior_pairs': dict(pairs),
        'consequence_counts': dict(consequences),
        'dominant_antecedent': _most_common(antecedents),
        'dominant_behavior': _most_common(behaviors),
    }

    times = numeric_sequence([e.get('time') for e in events if e.get('time') is not None])
    if len(times) >= 2:
        intervals = np.diff(sorted(times))
        mean_interval = float(np.mean(intervals))
        patterns['mean_interval'] = mean_interval
        if mean_interval > 0:
            # Share of gaps shorter than half the mean gap
            patterns['temporal_clustering'] = float(np.mean(intervals < mean_interval / 2))
        else:
            patterns['temporal_clustering'] = 1.0

    return patterns


def _most_common(counter: Counter) -> Optional[str]:
    return counter.most_common(1)[0][0] if counter else None


def _unique(items) -> List[str]:
    seen: List[str] = []
    for item in items:
        if item not in seen:
            seen.append(item)
    return seen
