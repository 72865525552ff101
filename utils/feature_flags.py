"""
Feature flag registry gating the extension assessors.

Each flag is a named boolean. Capability flags decide whether an assessor
runs its full formula or returns the neutral fallback record; the remaining
flags describe optional engine capabilities that callers may inspect.

Engineering approach:
- Startup defaults come from a literal table (overridable from config)
- A single registry instance is built per process and injected
- Unknown flag names read as disabled and are ignored on write
- Reset applies category rules instead of the startup table
"""

import logging
from typing import Dict, Iterable, List, Mapping, Optional

from utils.config_loader import get_nested_config

logger = logging.getLogger(__name__)


DEFAULT_FLAGS: Dict[str, bool] = {
    # Cognitive analysis
    'advanced_cognitive_analysis': True,
    'neuropedagogical_extensions': True,
    'autism_specific_algorithms': True,

    # Adaptive behaviour
    'adaptive_recommendations': True,
    'real_time_adaptation': True,
    'personalized_content': True,

    # Accessibility
    'accessibility_adaptations': True,
    'sensory_adaptations': True,
    'communication_supports': True,

    # Behavioral analysis
    'behavioral_analysis': True,
    'engagement_tracking': True,
    'frustration_detection': True,

    # Therapeutic features
    'therapeutic_recommendations': True,
    'progress_tracking': True,
    'goal_setting': True,

    # Machine learning
    'ml_predictions': False,
    'deep_learning': False,
    'neural_networks': False,

    # Experimental
    'experimental_features': False,
    'beta_features': False,
    'debug_mode': False,

    # Integrations
    'system_orchestration': True,
    'cognitive_integration': True,
    'behavioral_integration': True,

    # Advanced algorithms
    'advanced_metrics_engine': False,
    'neuroplasticity_analyzer': False,
    'error_pattern_analyzer': False,

    # Performance
    'caching': True,
    'performance_optimization': True,
    'real_time_metrics': True,

    # Extension assessors
    'cognitive_level_assessment': True,
    'communication_level_assessment': True,
    'social_skills_assessment': True,
    'adaptive_skills_assessment': True,
    'planning_organization_assessment': True,
    'time_management_assessment': True,
    'executive_function_score': True,
}

# Name tokens that reset to disabled
RESET_DISABLED_TOKENS = frozenset({'ml', 'neural', 'deep', 'experimental', 'beta', 'debug'})


def default_for_reset(name: str) -> bool:
    """Category rule used by reset: risky or unfinished features stay off."""
    return not any(token in RESET_DISABLED_TOKENS for token in name.lower().split('_'))


class FeatureFlagRegistry:
    """
    Mutable name -> bool registry.

    Args:
        overrides: Optional mapping applied on top of the startup defaults.
            Keys not present in the defaults are ignored.
        defaults: Replacement startup table (mostly for tests).
    """

    def __init__(self, overrides: Optional[Mapping[str, bool]] = None,
                 defaults: Optional[Mapping[str, bool]] = None):
        self._flags: Dict[str, bool] = dict(defaults if defaults is not None else DEFAULT_FLAGS)
        if overrides:
            self.set_flags(overrides)

        logger.info(
            f"FeatureFlagRegistry initialized with {len(self._flags)} flags "
            f"({len(self.enabled_features())} enabled)"
        )

    @classmethod
    def from_config(cls, config: Optional[Dict] = None) -> 'FeatureFlagRegistry':
        """Build a registry from the ``feature_flags`` config section."""
        overrides = get_nested_config(config or {}, 'feature_flags', {}) or {}
        return cls(overrides=overrides)

    def is_enabled(self, name: str) -> bool:
        return self._flags.get(name) is True

    def enable(self, name: str) -> None:
        self._set(name, True)

    def disable(self, name: str) -> None:
        self._set(name, False)

    def set_flags(self, flags: Mapping[str, bool]) -> None:
        """Apply several flag values at once; unknown names are skipped."""
        for name, value in flags.items():
            self._set(name, bool(value))

    def get_all(self) -> Dict[str, bool]:
        return dict(self._flags)

    def enabled_features(self) -> List[str]:
        return [name for name, value in self._flags.items() if value]

    def disabled_features(self) -> List[str]:
        return [name for name, value in self._flags.items() if not value]

    def reset(self) -> None:
        """Restore category defaults for every known flag."""
        for name in self._flags:
            self._flags[name] = default_for_reset(name)
        logger.info("Feature flags reset to category defaults")

    def names(self) -> Iterable[str]:
        return self._flags.keys()

    def _set(self, name: str, value: bool) -> None:
        if name not in self._flags:
            logger.warning(f"Unknown feature flag ignored: {name}")
            return
        self._flags[name] = value
        logger.debug(f"Feature flag {name} set to {value}")

    def __contains__(self, name: str) -> bool:
        return name in self._flags
