"""
Unit tests for autism pattern detectors and derived session metrics.

Tests cover:
- Majority-vote detectors (sensory overload, social withdrawal,
  routine disruption, communication barriers)
- Emotional state, cognitive load, adaptability index
"""

import pytest # pyright: ignore[reportMissingImports]
from pathlib import Path

# Import modules to test
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from autism_analysis.detectors import (
    detect_communication_barriers,
    detect_routine_disruption,
    detect_sensory_overload,
    detect_social_withdrawal,
    relative_response_slowdown,
)
from autism_analysis.emotional_state import (
    assess_emotional_state,
    calculate_adaptability_index,
    calculate_cognitive_load,
)


class TestSensoryOverload:
    """Test sensory overload detection."""

    def test_two_stimulus_signals(self):
        """High visual and auditory stimulation together trigger overload."""
        assert detect_sensory_overload({'sensory_stimuli': {'visual': 0.8, 'auditory': 0.7}})

    def test_single_signal_not_enough(self):
        """One signal alone is not overload."""
        assert not detect_sensory_overload({'visual_stimuli': 0.9})

    def test_error_spike_from_counts(self):
        """An error rate above 0.6 votes as an error spike."""
        assert detect_sensory_overload({
            'attempts': 10, 'errors': 7, 'withdrawal_behaviors': 1,
        })

    def test_response_slowdown_from_progression(self):
        """Response times doubling between halves votes as slowdown."""
        assert relative_response_slowdown([1000, 1000, 2000, 2000]) == pytest.approx(1.0)
        assert detect_sensory_overload({
            'response_time_progression': [1000, 1000, 2000, 2000],
            'auditory_stimuli': 0.7,
        })

    def test_empty_input(self):
        """Absent signals never vote."""
        assert not detect_sensory_overload({})


class TestSocialWithdrawal:
    """Test social withdrawal detection."""

    def test_three_signals(self):
        """Low interaction, eye contact and communication attempts."""
        assert detect_social_withdrawal({
            'social_interaction': 0.2, 'eye_contact': 0.3, 'communication_attempts': 1,
        })

    def test_two_signals_not_enough(self):
        """Two signals fall short of the three needed."""
        assert not detect_social_withdrawal({'social_interaction': 0.2, 'eye_contact': 0.3})

    def test_missing_attempts_do_not_vote(self):
        """An absent communication attempt count is not treated as zero."""
        assert not detect_social_withdrawal({})


class TestRoutineDisruption:
    """Test routine disruption detection."""

    def test_sequence_mismatch_and_changes(self):
        """A reordered sequence plus unexpected changes is disruption."""
        assert detect_routine_disruption({
            'expected_sequence': ['greet', 'task', 'reward'],
            'actual_sequence': ['greet', 'reward', 'task'],
            'unexpected_changes': 2,
        })

    def test_single_signal(self):
        """A mismatch alone is not disruption."""
        assert not detect_routine_disruption({
            'expected_sequence': ['a', 'b'], 'actual_sequence': ['b', 'a'],
        })


class TestCommunicationBarriers:
    """Test communication barrier detection."""

    def test_three_signals(self):
        """Low verbal and non-verbal communication with expression difficulty."""
        assert detect_communication_barriers({
            'verbal_communication': 0.2,
            'non_verbal_communication': 0.3,
            'expression_difficulty': 0.8,
        })

    def test_camel_case_keys(self):
        """camelCase input is recognised."""
        assert detect_communication_barriers({
            'verbalCommunication': 0.2,
            'nonVerbalCommunication': 0.3,
            'communicationFrustration': 0.9,
        })


class TestEmotionalState:
    """Test emotional state snapshot."""

    def test_positive_stable(self):
        """Positive balance with high stability."""
        state = assess_emotional_state({
            'positive_emotions': 0.9, 'negative_emotions': 0.1, 'emotional_stability': 0.9,
        })
        assert state.state == 'positive'
        assert state.stability == 'very_stable'

    def test_negative_unstable(self):
        """Strong negative emotion with low stability raises meltdown risk."""
        state = assess_emotional_state({
            'positive_emotions': 0.2, 'negative_emotions': 0.8, 'emotional_stability': 0.3,
        })
        assert state.state == 'negative'
        assert state.stability == 'unstable'
        assert state.autism_specific['meltdown_risk_elevated'] is True
        assert state.autism_specific['needs_regulation_support'] is True

    def test_defaults(self):
        """Neutral defaults give a neutral, variable state."""
        state = assess_emotional_state({})
        assert state.state == 'neutral'
        assert state.balance == 0.0
        assert state.stability == 'variable'
        assert state.autism_specific['needs_regulation_support'] is False

    def test_ratings_clamped(self):
        """Ratings outside [0, 1] are clamped before use."""
        state = assess_emotional_state({
            'positive_emotions': 4, 'negative_emotions': -2, 'emotional_stability': 5,
        })
        assert state.stability_score == 1.0
        assert state.balance == 1.0
        assert state.state == 'positive'


class TestCognitiveLoad:
    """Test cognitive load."""

    def test_weighted_load(self):
        """All five components contribute."""
        load = calculate_cognitive_load({
            'task_complexity': 0.8, 'multi_tasking': 0.5, 'time_constraints': 0.5,
            'attempts': 10, 'errors': 5, 'average_response_time': 5000,
        })
        assert load == pytest.approx(0.59)

    def test_defaults(self):
        """Only the neutral task complexity counts by default."""
        assert calculate_cognitive_load({}) == pytest.approx(0.15)

    def test_progression_fallback(self):
        """Mean progression is used when no average response time is given."""
        load = calculate_cognitive_load({'response_time_progression': [10_000, 10_000]})
        assert load == pytest.approx(0.3)


class TestAdaptability:
    """Test adaptability index."""

    def test_defaults(self):
        """Neutral success and flexibility only."""
        assert calculate_adaptability_index({}) == pytest.approx(0.225)

    def test_maximum(self):
        """Full exposure and success saturate the index."""
        index = calculate_adaptability_index({
            'rule_changes': 3, 'task_switching': 3, 'new_situations': 3,
            'adaptation_success': 1, 'flexibility_demonstrated': 1,
        })
        assert index == pytest.approx(1.0)
