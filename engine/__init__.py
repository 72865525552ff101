"""Scoring engine entry points."""

from .extractor import BehavioralIndicators, extract_indicators
from .scoring_engine import BehavioralScoringEngine

__all__ = [
    'BehavioralIndicators',
    'extract_indicators',
    'BehavioralScoringEngine',
]
