"""
Unit tests for executive function assessment.

Tests cover:
- Working memory strengths and challenges
- Cognitive flexibility and perseveration
- Inhibitory control
- Composite profile and profile labels
"""

import pytest # pyright: ignore[reportMissingImports]
from pathlib import Path

# Import modules to test
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from scoring.executive_function import (
    assess_cognitive_flexibility,
    assess_inhibitory_control,
    assess_planning_organization,
    assess_time_management,
    assess_working_memory,
    calculate_executive_function_score,
    executive_profile_label,
)


class TestWorkingMemory:
    """Test working memory assessment."""

    def test_strong_working_memory(self):
        """Long accurate sequences with good retention are superior."""
        result = assess_working_memory({
            'sequence_length': 7,
            'sequence_accuracy': 0.9,
            'multistep_tasks': 0.8,
            'distraction_resistance': 0.8,
            'information_retention': 0.9,
        })
        assert result.score == pytest.approx(0.895)
        assert result.level == 'superior'
        assert set(result.extras['strengths']) == {
            'sequential_processing', 'information_retention',
            'focus_under_distraction', 'multistep_execution',
        }
        assert result.extras['challenges'] == []

    def test_defaults_need_support(self):
        """Without a sequence span the neutral defaults fall below emerging."""
        result = assess_working_memory({})
        assert result.score == pytest.approx(0.375)
        assert result.level == 'needs_support'
        assert 'complex_instructions' in result.extras['challenges']
        assert result.autism_specific['external_memory_aids'] is True


class TestCognitiveFlexibility:
    """Test cognitive flexibility assessment."""

    def test_defaults(self):
        """Neutral inputs land in the rigid band."""
        result = assess_cognitive_flexibility({})
        assert result.score == pytest.approx(0.425)
        assert result.level == 'rigid'

    def test_very_rigid(self):
        """No switching and full perseveration is very rigid."""
        result = assess_cognitive_flexibility({
            'task_switching': 0, 'adaptation_rate': 0, 'creative_solutions': 0,
            'perseveration_errors': 1,
        })
        assert result.level == 'very_rigid'
        assert 'transition_warnings' in result.strategies
        assert result.autism_specific['perseveration_risk'] is True


class TestInhibitoryControl:
    """Test inhibitory control assessment."""

    def test_weak_control(self):
        """Zero inputs are weak and get visual cue supports."""
        result = assess_inhibitory_control({
            'impulse_control': 0, 'distractor_resistance': 0,
            'response_inhibition': 0, 'emotional_regulation': 0,
        })
        assert result.level == 'weak'
        assert 'visual_cues' in result.strategies
        assert result.autism_specific['needs_wait_supports'] is True

    def test_defaults(self):
        """Neutral inputs give a developing level."""
        result = assess_inhibitory_control({})
        assert result.score == pytest.approx(0.5)
        assert result.level == 'developing'


class TestPlanningAndTime:
    """Test planning and time management components."""

    def test_planning_components_reported(self):
        """Every planning component is reported in factors."""
        result = assess_planning_organization({'task_planning': 0.9, 'sequencing': 0.9})
        assert result.factors['task_planning'] == 0.9
        assert 'supports' in result.extras

    def test_time_transition_warnings(self):
        """Weak transitions request transition warnings."""
        result = assess_time_management({'transitions': 0.2})
        assert result.autism_specific['requires_transition_warnings'] is True
        assert 'interventions' in result.extras


class TestExecutiveComposite:
    """Test the composite executive function profile."""

    def test_defaults(self):
        """Neutral inputs give a below average composite."""
        profile = calculate_executive_function_score({})
        assert profile.composite_score == pytest.approx(0.45375)
        assert profile.overall_level == 'below_average'
        assert profile.autism_specific['executive_function_profile'] == 'moderate_support_executive'
        assert profile.autism_specific['requires_routines'] is True

    def test_maximal_inputs(self):
        """Perfect inputs give a superior composite."""
        data = {
            'sequence_length': 7, 'sequence_accuracy': 1, 'multistep_tasks': 1,
            'distraction_resistance': 1, 'information_retention': 1,
            'task_switching': 1, 'adaptation_rate': 1, 'rule_changes': 3,
            'creative_solutions': 1, 'perseveration_errors': 0,
            'impulse_control': 1, 'distractor_resistance': 1,
            'response_inhibition': 1, 'emotional_regulation': 1,
            'task_planning': 1, 'sequencing': 1, 'goal_setting': 1,
            'prioritization': 1, 'organization': 1, 'follow_through': 1,
            'time_awareness': 1, 'punctuality': 1, 'task_timing': 1,
            'scheduling': 1, 'time_estimation': 1, 'transitions': 1,
        }
        profile = calculate_executive_function_score(data)
        assert profile.composite_score == pytest.approx(1.0)
        assert profile.overall_level == 'superior'
        assert set(profile.components) == {
            'working_memory', 'cognitive_flexibility', 'inhibitory_control',
            'planning', 'time_management',
        }

    def test_profile_labels(self):
        """Labels follow the composite score bands."""
        assert executive_profile_label(0.2) == 'high_support_executive'
        assert executive_profile_label(0.4) == 'moderate_support_executive'
        assert executive_profile_label(0.6) == 'emerging_executive'
        assert executive_profile_label(0.9) == 'independent_executive'
