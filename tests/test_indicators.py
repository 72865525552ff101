"""
Unit tests for the primary behavioral indicators.

Tests cover:
- Persistence, frustration, regulation, attention, motivation formulas
- Level classification and strategy lookup
- Missing and malformed inputs
"""

import pytest # pyright: ignore[reportMissingImports]
from pathlib import Path

# Import modules to test
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from scoring.indicators import (
    assess_attention,
    assess_frustration,
    assess_motivation,
    assess_persistence,
    assess_regulation,
)


class TestPersistence:
    """Test persistence scoring."""

    def test_completed_session(self):
        """Few errors, completion and time on task give high persistence."""
        result = assess_persistence({
            'attempts': 10, 'errors': 2, 'completed': True,
            'time_spent': 120_000, 'abandonments': 0,
        })
        # 0.8*0.3 + 0.4 + 0.2 + min(0.1, 8*0.02)
        assert result.score == pytest.approx(0.94)
        assert result.level == 'high'
        assert result.autism_specific['requires_breaks'] is False
        assert result.autism_specific['needs_routine'] is False

    def test_empty_input(self):
        """No data scores zero and needs support."""
        result = assess_persistence({})
        assert result.score == 0.0
        assert result.level == 'needs_support'
        assert result.autism_specific['needs_routine'] is True
        assert len(result.strategies) > 0

    def test_long_session_requires_breaks(self):
        """More than five minutes on task recommends breaks."""
        result = assess_persistence({'time_spent': 400_000})
        assert result.autism_specific['requires_breaks'] is True

    def test_camel_case_keys(self):
        """camelCase input scores the same as snake_case input."""
        snake = assess_persistence({'attempts': 5, 'errors': 1, 'time_spent': 1000})
        camel = assess_persistence({'attempts': 5, 'errors': 1, 'timeSpent': 1000})
        assert snake.score == camel.score

    def test_more_errors_than_attempts(self):
        """Inconsistent counts still produce an in-range score."""
        result = assess_persistence({'attempts': 2, 'errors': 5})
        assert 0.0 <= result.score <= 1.0


class TestFrustration:
    """Test frustration scoring."""

    def test_high_frustration(self):
        """Errors, slowing responses, abandonment and help requests add up."""
        result = assess_frustration({
            'attempts': 10,
            'errors': 7,
            'response_time_progression': [1000, 1200, 1500, 2000],
            'abandonments': 2,
            'help_requests': 4,
        })
        assert result.score == pytest.approx(0.8)
        assert result.level == 'high'
        assert result.autism_specific['meltdown_risk'] is True
        assert result.autism_specific['requires_immediate_intervention'] is True
        assert len(result.extras['triggers']) > 0

    def test_minimal_frustration(self):
        """No signals give minimal frustration."""
        result = assess_frustration({})
        assert result.score == 0.0
        assert result.level == 'minimal'

    def test_short_progression_ignored(self):
        """Two response times are not enough to count a trend."""
        result = assess_frustration({'response_time_progression': [1000, 5000]})
        assert result.score == 0.0

    def test_help_requests_as_list(self):
        """A list of help requests counts by length."""
        result = assess_frustration({'help_requests': ['q1', 'q2']})
        assert result.score == pytest.approx(0.08)

    def test_malformed_progression(self):
        """A non-numeric progression is ignored."""
        result = assess_frustration({'response_time_progression': 'slow'})
        assert result.score == 0.0


class TestRegulation:
    """Test self-regulation scoring."""

    def test_independent_regulation(self):
        """All regulation behaviors present give the top level."""
        result = assess_regulation({
            'self_corrections': 3,
            'pauses_taken': 2,
            'help_requests': 1,
            'strategy_changes': 1,
            'emotional_recovery': 1,
            'time_management': 0.8,
        })
        assert result.score == pytest.approx(1.0)
        assert result.level == 'independent'
        assert result.autism_specific['ready_for_independence'] is True

    def test_excessive_help_not_rewarded(self):
        """Asking for help many times does not add regulation credit."""
        once = assess_regulation({'help_requests': 1})
        many = assess_regulation({'help_requests': 5})
        assert once.score > many.score
        assert many.score == 0.0


class TestAttention:
    """Test sustained attention scoring."""

    def test_sustained_attention(self):
        """A full-length, focused, completed session is sustained."""
        result = assess_attention({
            'session_duration': 600_000,
            'focus_loss': 0,
            'distraction_events': 0,
            'completed': True,
            'task_switching': 1,
        })
        assert result.score == pytest.approx(1.0)
        assert result.level == 'sustained'

    def test_empty_input(self):
        """Without duration or completion only the neutral factors count."""
        result = assess_attention({})
        assert result.score == pytest.approx(0.55)
        assert result.level == 'variable'

    def test_limited_attention(self):
        """Frequent focus loss, distraction and switching limit attention."""
        result = assess_attention({
            'focus_loss': 5, 'distraction_events': 10, 'task_switching': 7,
        })
        assert result.score == 0.0
        assert result.level == 'limited'
        assert 'short_sessions' in result.strategies
        assert result.autism_specific['needs_environmental_control'] is True


class TestMotivation:
    """Test motivation scoring."""

    def test_intrinsic_motivation(self):
        """Full engagement and initiative give intrinsic motivation."""
        result = assess_motivation({
            'engagement_level': 1.0,
            'voluntary_attempts': 5,
            'initiative_taking': 3,
            'persistence_after_failure': 2,
            'choice_exercising': 2,
        })
        assert result.score == pytest.approx(1.0)
        assert result.level == 'intrinsic'
        assert 'maintain_autonomy' in result.strategies

    def test_neutral_engagement_only(self):
        """Default engagement alone is minimal motivation."""
        result = assess_motivation({})
        assert result.score == pytest.approx(0.15)
        assert result.level == 'minimal'
        assert 'immediate_rewards' in result.strategies
        assert result.autism_specific['needs_external_motivation'] is True
