"""
Integration tests for the behavioral scoring engine.

Tests cover:
- Indicator extraction on complete, empty and malformed input
- Score range invariant
- History recording and progress summary
- Flag injection for extension assessors
"""

import pytest # pyright: ignore[reportMissingImports]
from pathlib import Path

# Import modules to test
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from engine.extractor import extract_indicators, session_context
from engine.scoring_engine import BehavioralScoringEngine
from utils.feature_flags import FeatureFlagRegistry
from utils.history import AnalysisHistory


SESSION = {
    'sessionId': 'session-1',
    'attempts': 8,
    'errors': 3,
    'completed': True,
    'timeSpent': 240_000,
    'sessionDuration': 420_000,
    'responseTimeProgression': [1200, 1300, 1800, 2100],
    'helpRequests': 2,
    'selfCorrections': 1,
    'pausesTaken': 1,
    'engagementLevel': 0.7,
    'sensoryStimuli': {'visual': 0.8, 'auditory': 0.7},
    'activityType': 'matching',
}


def indicator_scores(indicators):
    """Every 0-1 score in an extracted report."""
    return [
        indicators.persistence.score,
        indicators.frustration.score,
        indicators.regulation.score,
        indicators.attention.score,
        indicators.motivation.score,
        indicators.cognitive_load,
        indicators.adaptability_index,
        indicators.emotional_state.stability_score,
    ]


class TestExtraction:
    """Test indicator extraction."""

    def test_full_session(self):
        """A realistic session produces a complete report."""
        indicators = extract_indicators(SESSION)
        assert indicators.session_id == 'session-1'
        assert indicators.sensory_overload is True
        assert indicators.session_context['activity'] == 'matching'
        assert all(0.0 <= score <= 1.0 for score in indicator_scores(indicators))

    def test_empty_and_none(self):
        """Empty and None input do not raise."""
        for metrics in ({}, None):
            indicators = extract_indicators(metrics)
            assert indicators.session_id is None
            assert all(0.0 <= score <= 1.0 for score in indicator_scores(indicators))

    def test_malformed_values(self):
        """Non-numeric values fall back to defaults."""
        indicators = extract_indicators({
            'attempts': 'ten',
            'responseTimeProgression': 'slow',
            'helpRequests': None,
            'sensoryStimuli': 'bright',
        })
        assert all(0.0 <= score <= 1.0 for score in indicator_scores(indicators))

    def test_overflowing_counts(self):
        """Integers too large for a float fall back to defaults."""
        indicators = extract_indicators({'attempts': 10 ** 400, 'errors': 1})
        assert all(0.0 <= score <= 1.0 for score in indicator_scores(indicators))

    def test_out_of_range_ratings_clamped(self):
        """Ratings above 1 do not leak out of the unit range."""
        indicators = extract_indicators({'emotional_stability': 5, 'negative_emotions': -3})
        assert indicators.emotional_state.stability_score == 1.0
        assert indicators.emotional_state.stability == 'very_stable'
        assert all(0.0 <= score <= 1.0 for score in indicator_scores(indicators))

    def test_deterministic(self):
        """Repeated extraction gives the same scores and levels."""
        first = extract_indicators(SESSION).to_dict()
        second = extract_indicators(SESSION).to_dict()
        first.pop('timestamp')
        second.pop('timestamp')
        assert first == second

    def test_session_context_defaults(self):
        """Missing context fields take defaults."""
        assert session_context({}) == {'duration': 0.0, 'activity': 'unknown',
                                       'difficulty': 'medium'}


class TestEngine:
    """Test the engine facade."""

    def test_extract_records_history(self):
        """Each extraction is appended under its session id."""
        engine = BehavioralScoringEngine()
        engine.extract(SESSION)
        engine.extract({})
        entries = engine.history.entries()
        assert len(entries) == 2
        assert entries[0].key == 'session-1'
        assert entries[1].key.startswith('analysis_')

    def test_progress_summary_after_sessions(self):
        """Two sessions are enough for a progress summary."""
        engine = BehavioralScoringEngine()
        engine.extract({})
        engine.extract(SESSION)
        summary = engine.progress_summary()
        assert summary['persistence']['improvement'] == 'improving'
        assert 'overall' in summary

    def test_history_capacity_from_config(self):
        """History capacity comes from configuration."""
        engine = BehavioralScoringEngine({'history': {'max_entries': 2}})
        for _ in range(3):
            engine.extract({})
        assert len(engine.history) == 2

    def test_injected_collaborators(self):
        """Injected flags and history are used as given."""
        flags = FeatureFlagRegistry(overrides={'cognitive_level_assessment': False})
        history = AnalysisHistory(max_entries=5)
        engine = BehavioralScoringEngine(flags=flags, history=history)
        assert engine.history is history
        assert engine.assess_cognitive_level({})['level'] == 'assessment_disabled'

    def test_assessment_passthrough(self):
        """Engine methods return the same results as the module functions."""
        engine = BehavioralScoringEngine()
        assert engine.calculate_autism_support_level({}).level == 'Level 2'
        assert engine.identify_behavioral_triggers({}).severity == 'low'
        assert engine.executive_function_profile({}).overall_level == 'below_average'
        plan = engine.suggest_behavioral_strategies(engine.extract({}))
        assert plan[-1]['type'] == 'reinforcement_plan'

    def test_export(self):
        """Export includes recorded sessions."""
        engine = BehavioralScoringEngine()
        engine.extract(SESSION)
        exported = engine.export()
        assert exported['analysis_history'][0]['report']['session_id'] == 'session-1'


class TestFromConfigFile:
    """Test building an engine from YAML."""

    def test_bundled_config(self):
        """The bundled configuration builds a working engine."""
        engine = BehavioralScoringEngine.from_config_file(setup_logging=False)
        assert engine.history.max_entries == 50
        assert not engine.flags.is_enabled('debug_mode')

    def test_custom_file(self, tmp_path):
        """Flag overrides and capacity are read from the file."""
        path = tmp_path / 'engine.yaml'
        path.write_text(
            'history:\n  max_entries: 4\n'
            'feature_flags:\n  social_skills_assessment: false\n'
        )
        engine = BehavioralScoringEngine.from_config_file(path, setup_logging=False)
        assert engine.history.max_entries == 4
        assert engine.assess_social_skills_level({})['level'] == 'assessment_disabled'
