"""
Behavioral scoring engine.

Entry point that owns the injected collaborators (configuration, feature
flag registry, analysis history) and exposes every scoring operation:

    engine = BehavioralScoringEngine(config)
    report = engine.extract(session_metrics)
    support = engine.calculate_autism_support_level(profile)

Only extract() has a side effect: the composite report is appended to the
history, keyed by session_id (or a millisecond timestamp key).
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from autism_analysis.extensions import ExtensionAssessor
from autism_analysis.regulation import (
    EmotionalRegulationAssessment,
    SocialAwarenessAssessment,
    assess_emotional_regulation,
    assess_social_awareness,
)
from autism_analysis.strategies import suggest_behavioral_strategies
from autism_analysis.triggers import TriggerAnalysis, identify_behavioral_triggers
from engine.extractor import BehavioralIndicators, extract_indicators
from scoring.executive_function import (
    ExecutiveFunctionProfile,
    assess_cognitive_flexibility,
    assess_inhibitory_control,
    assess_working_memory,
    calculate_executive_function_score,
)
from scoring.indicators import Indicator
from support_levels.autism_level import AutismSupportLevel, calculate_autism_support_level
from support_levels.modality import (
    SupportLevel,
    calculate_auditory_support_level,
    calculate_cognitive_support_level,
    calculate_sensory_support_level,
    calculate_visual_support_level,
)
from utils.config_loader import configure_logging, load_config
from utils.feature_flags import FeatureFlagRegistry
from utils.history import AnalysisHistory

logger = logging.getLogger(__name__)


class BehavioralScoringEngine:
    """
    Orchestrates indicator extraction and on-demand assessments.

    Args:
        config: Configuration dict (see configs/engine.yaml); {} is valid
        flags: Feature flag registry; built from config when omitted
        history: Analysis history; built from config when omitted
    """

    def __init__(self, config: Optional[Dict] = None,
                 flags: Optional[FeatureFlagRegistry] = None,
                 history: Optional[AnalysisHistory] = None):
        self.config = config or {}
        self.flags = flags if flags is not None else FeatureFlagRegistry.from_config(self.config)
        self.history = history if history is not None else AnalysisHistory.from_config(self.config)
        self.extensions = ExtensionAssessor(self.flags)

        logger.info(
            f"Scoring engine initialized: history capacity={self.history.max_entries}, "
            f"enabled flags={len(self.flags.enabled_features())}"
        )

    @classmethod
    def from_config_file(cls, config_path=None, setup_logging: bool = True) -> 'BehavioralScoringEngine':
        """
        Build an engine from a YAML file (configs/engine.yaml by default).

        When setup_logging is True the ``logging`` section configures the
        root logger first.
        """
        config = load_config(config_path)
        if setup_logging:
            configure_logging(config)
        return cls(config)

    # Session indicators

    def extract(self, metrics: Optional[Mapping]) -> BehavioralIndicators:
        """Extract all indicators for a session and record them in history."""
        indicators = extract_indicators(metrics)
        self.history.append(indicators, key=indicators.session_id)
        logger.info(
            f"Session {indicators.session_id or 'unnamed'}: "
            f"persistence={indicators.persistence.score:.2f} ({indicators.persistence.level}), "
            f"frustration={indicators.frustration.score:.2f} ({indicators.frustration.level})"
        )
        return indicators

    # Executive function (always available)

    def assess_working_memory(self, data: Mapping) -> Indicator:
        return assess_working_memory(data)

    def assess_cognitive_flexibility(self, data: Mapping) -> Indicator:
        return assess_cognitive_flexibility(data)

    def assess_inhibitory_control(self, data: Mapping) -> Indicator:
        return assess_inhibitory_control(data)

    def executive_function_profile(self, data: Mapping) -> ExecutiveFunctionProfile:
        return calculate_executive_function_score(data)

    # Flag-gated extension assessors

    def assess_cognitive_level(self, profile: Mapping) -> Dict[str, Any]:
        return self.extensions.assess_cognitive_level(profile)

    def assess_communication_level(self, profile: Mapping) -> Dict[str, Any]:
        return self.extensions.assess_communication_level(profile)

    def assess_social_skills_level(self, profile: Mapping) -> Dict[str, Any]:
        return self.extensions.assess_social_skills_level(profile)

    def assess_adaptive_skills(self, profile: Mapping) -> Dict[str, Any]:
        return self.extensions.assess_adaptive_skills(profile)

    def assess_planning_organization(self, data: Mapping) -> Dict[str, Any]:
        return self.extensions.assess_planning_organization(data)

    def assess_time_management(self, data: Mapping) -> Dict[str, Any]:
        return self.extensions.assess_time_management(data)

    def calculate_executive_function_score(self, data: Mapping) -> Dict[str, Any]:
        return self.extensions.calculate_executive_function_score(data)

    # Support levels

    def calculate_visual_support_level(self, preferences: Mapping) -> SupportLevel:
        return calculate_visual_support_level(preferences)

    def calculate_auditory_support_level(self, preferences: Mapping) -> SupportLevel:
        return calculate_auditory_support_level(preferences)

    def calculate_cognitive_support_level(self, preferences: Mapping) -> SupportLevel:
        return calculate_cognitive_support_level(preferences)

    def calculate_sensory_support_level(self, preferences: Mapping) -> SupportLevel:
        return calculate_sensory_support_level(preferences)

    def calculate_autism_support_level(self, data: Mapping) -> AutismSupportLevel:
        return calculate_autism_support_level(data)

    # Triggers, regulation and strategy planning

    def identify_behavioral_triggers(self, data: Mapping) -> TriggerAnalysis:
        return identify_behavioral_triggers(data)

    def assess_emotional_regulation(self, data: Mapping) -> EmotionalRegulationAssessment:
        return assess_emotional_regulation(data)

    def assess_social_awareness(self, data: Mapping) -> SocialAwarenessAssessment:
        return assess_social_awareness(data)

    def suggest_behavioral_strategies(self, indicators: Any,
                                      **kwargs) -> List[Dict[str, Any]]:
        return suggest_behavioral_strategies(indicators, **kwargs)

    # History

    def progress_summary(self) -> Dict[str, Any]:
        return self.history.progress_summary()

    def export(self, limit: int = 20) -> Dict[str, Any]:
        return self.history.export(limit=limit)
