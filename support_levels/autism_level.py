"""
DSM-5 style autism support level.

Combines three impact domains into one support-need score:
- Social communication impact: 1 - social_communication
- Restricted/repetitive behavior impact: max(restricted_interests, sensory_issues)
- Daily functioning impact: 1 - min(daily_functioning, independence_level,
  adaptability_index)

Score = 0.4 * communication + 0.3 * behavioral + 0.3 * functional

Level 3 (>= 0.7): Requiring very substantial support
Level 2 (>= 0.4): Requiring substantial support
Level 1:          Requiring support

Non-diagnostic: the level guides support planning only.
"""

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Mapping

from scoring.classification import clamp_score, classify, normalize_keys, read_number
from scoring.recommendations import get_strategies

logger = logging.getLogger(__name__)


LEVEL_BANDS = ((0.7, 'Level 3'), (0.4, 'Level 2'))
LEVEL_DESCRIPTIONS = {
    'Level 3': 'Requiring very substantial support',
    'Level 2': 'Requiring substantial support',
    'Level 1': 'Requiring support',
}
DOMAIN_BANDS = ((0.7, 'severe'), (0.4, 'moderate'))
DOMAIN_WEIGHTS = {
    'social_communication': 0.4,
    'restricted_repetitive_behaviors': 0.3,
    'daily_functioning': 0.3,
}


@dataclass
class AutismSupportLevel:
    """
    Composite autism support level.

    Attributes:
        level: 'Level 1', 'Level 2' or 'Level 3'
        description: DSM-5 wording for the level
        score: Weighted support need in [0, 1]
        domains: Domain -> mild, moderate or severe
        interventions: Intervention tokens for the level
        recommendations: Readable recommendations for the level
        impacts: Raw domain impacts that fed the score
    """
    level: str
    description: str
    score: float
    domains: Dict[str, str] = field(default_factory=dict)
    interventions: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)
    impacts: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def domain_severity(impact: float) -> str:
    return classify(impact, DOMAIN_BANDS, 'mild')


def calculate_autism_support_level(data: Mapping) -> AutismSupportLevel:
    data = normalize_keys(data)
    social_communication = read_number(data, 'social_communication', 0.5)
    restricted_interests = read_number(data, 'restricted_interests', 0.5)
    sensory_issues = read_number(data, 'sensory_issues', 0.5)
    daily_functioning = read_number(data, 'daily_functioning', 0.5)
    independence = read_number(data, 'independence_level', 0.5)
    adaptability = read_number(data, 'adaptability_index', 0.5)

    impacts = {
        'social_communication': 1 - social_communication,
        'restricted_repetitive_behaviors': max(restricted_interests, sensory_issues),
        'daily_functioning': 1 - min(daily_functioning, independence, adaptability),
    }
    score = clamp_score(sum(impacts[name] * w for name, w in DOMAIN_WEIGHTS.items()))
    level = classify(score, LEVEL_BANDS, 'Level 1')

    logger.info(f"Autism support level: {level} (score {score:.3f})")

    return AutismSupportLevel(
        level=level,
        description=LEVEL_DESCRIPTIONS[level],
        score=score,
        domains={name: domain_severity(impact) for name, impact in impacts.items()},
        interventions=get_strategies('autism_interventions', level),
        recommendations=get_strategies('autism_recommendations', level),
        impacts=impacts,
    )
