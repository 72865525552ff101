"""Shared utilities: configuration, logging, feature flags and analysis history."""

from .config_loader import configure_logging, get_nested_config, load_config
from .feature_flags import FeatureFlagRegistry
from .history import AnalysisHistory, HistoryEntry

__all__ = [
    'configure_logging',
    'get_nested_config',
    'load_config',
    'FeatureFlagRegistry',
    'AnalysisHistory',
    'HistoryEntry',
]
