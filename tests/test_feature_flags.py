"""
Unit tests for the feature flag registry.
"""

import pytest # pyright: ignore[reportMissingImports]
from pathlib import Path

# Import modules to test
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from utils.feature_flags import DEFAULT_FLAGS, FeatureFlagRegistry, default_for_reset


class TestDefaults:
    """Test startup defaults."""

    def test_capability_flags_enabled(self):
        """Assessor capability flags start enabled."""
        flags = FeatureFlagRegistry()
        assert flags.is_enabled('cognitive_level_assessment')
        assert flags.is_enabled('executive_function_score')

    def test_experimental_flags_disabled(self):
        """Machine learning and debug flags start disabled."""
        flags = FeatureFlagRegistry()
        assert not flags.is_enabled('ml_predictions')
        assert not flags.is_enabled('debug_mode')
        assert not flags.is_enabled('advanced_metrics_engine')

    def test_unknown_flag_disabled(self):
        """Unknown names read as disabled."""
        assert not FeatureFlagRegistry().is_enabled('nonexistent_flag')

    def test_enabled_and_disabled_partition(self):
        """Every flag is listed exactly once across the two lists."""
        flags = FeatureFlagRegistry()
        enabled = flags.enabled_features()
        disabled = flags.disabled_features()
        assert sorted(enabled + disabled) == sorted(DEFAULT_FLAGS)
        assert 'ml_predictions' in disabled


class TestMutation:
    """Test enable, disable and set_flags."""

    def test_enable_disable(self):
        """Known flags can be toggled."""
        flags = FeatureFlagRegistry()
        flags.disable('caching')
        assert not flags.is_enabled('caching')
        flags.enable('caching')
        assert flags.is_enabled('caching')

    def test_unknown_name_ignored(self):
        """Writing an unknown name does not create it."""
        flags = FeatureFlagRegistry()
        flags.enable('nonexistent_flag')
        assert 'nonexistent_flag' not in flags
        assert not flags.is_enabled('nonexistent_flag')

    def test_set_flags(self):
        """Several flags can be applied at once."""
        flags = FeatureFlagRegistry()
        flags.set_flags({'debug_mode': True, 'caching': False})
        assert flags.is_enabled('debug_mode')
        assert not flags.is_enabled('caching')

    def test_get_all_is_copy(self):
        """The returned mapping does not alias the registry."""
        flags = FeatureFlagRegistry()
        snapshot = flags.get_all()
        snapshot['caching'] = False
        assert flags.is_enabled('caching')

    def test_registries_are_independent(self):
        """Two registries do not share state."""
        first = FeatureFlagRegistry()
        second = FeatureFlagRegistry()
        first.disable('caching')
        assert second.is_enabled('caching')


class TestReset:
    """Test category reset rules."""

    def test_reset_category_rules(self):
        """Reset disables risky categories and enables everything else."""
        flags = FeatureFlagRegistry()
        flags.disable('caching')
        flags.enable('debug_mode')
        flags.reset()
        assert flags.is_enabled('caching')
        assert not flags.is_enabled('debug_mode')
        assert not flags.is_enabled('ml_predictions')
        assert not flags.is_enabled('deep_learning')
        assert not flags.is_enabled('neural_networks')
        assert not flags.is_enabled('beta_features')
        assert flags.is_enabled('advanced_metrics_engine')

    def test_default_for_reset_tokens(self):
        """Whole name tokens decide the reset value."""
        assert default_for_reset('experimental_features') is False
        assert default_for_reset('real_time_metrics') is True


class TestFromConfig:
    """Test building a registry from configuration."""

    def test_overrides(self):
        """The feature_flags section overrides defaults."""
        flags = FeatureFlagRegistry.from_config({'feature_flags': {'debug_mode': True}})
        assert flags.is_enabled('debug_mode')

    def test_empty_config(self):
        """A missing or empty section keeps defaults."""
        assert FeatureFlagRegistry.from_config({}).get_all() == DEFAULT_FLAGS
        assert FeatureFlagRegistry.from_config({'feature_flags': None}).get_all() == DEFAULT_FLAGS
