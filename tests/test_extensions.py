"""
Unit tests for flag-gated extension assessors.

Tests cover:
- Full assessments when flags are enabled
- Fallback records (and no computation) when flags are disabled
"""

import pytest # pyright: ignore[reportMissingImports]
from pathlib import Path
from unittest import mock

# Import modules to test
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from autism_analysis.extensions import FALLBACK_NOTE, ExtensionAssessor, fallback_result
from scoring import executive_function
from scoring.executive_function import assess_planning_organization, calculate_executive_function_score
from utils.feature_flags import FeatureFlagRegistry


def full_profile(value):
    """Cognitive profile with every sub-score set to value."""
    return {
        'attention': {'sustained': value, 'selective': value, 'divided': value},
        'memory': {'working': value, 'short_term': value, 'long_term': value},
        'executive': {'planning': value, 'inhibition': value, 'monitoring': value},
        'processing': {'speed': value, 'accuracy': value, 'flexibility': value},
    }


class TestEnabledAssessors:
    """Test assessors with default flags."""

    def test_cognitive_level_superior(self):
        """Perfect sub-scores give a superior cognitive level."""
        result = ExtensionAssessor().assess_cognitive_level(full_profile(1.0))
        assert result['score'] == pytest.approx(1.0)
        assert result['level'] == 'superior'
        assert result['autism_specific']['needs_structure'] is False

    def test_cognitive_incomplete_triple_is_neutral(self):
        """A domain with a missing sub-score counts as 0.5."""
        profile = full_profile(1.0)
        del profile['attention']['divided']
        result = ExtensionAssessor().assess_cognitive_level(profile)
        assert result['components']['attention'] == 0.5
        assert result['components']['memory'] == pytest.approx(1.0)

    def test_communication_level(self):
        """Strong communication ratings are independent."""
        ratings = {name: 0.9 for name in (
            'verbal_communication', 'non_verbal_communication', 'social_communication',
            'pragmatic_language', 'receptive_language', 'expressive_language',
        )}
        result = ExtensionAssessor().assess_communication_level(ratings)
        assert result['score'] == pytest.approx(0.9)
        assert result['level'] == 'independent'
        assert result['autism_specific']['echolalia'] is False

    def test_communication_defaults(self):
        """Missing ratings default to 0.5."""
        result = ExtensionAssessor().assess_communication_level({})
        assert result['score'] == pytest.approx(0.5)
        assert result['autism_specific']['social_challenges'] is True

    def test_social_skills_foundational(self):
        """Zero ratings give the foundational level."""
        result = ExtensionAssessor().assess_social_skills_level({
            'social_initiation': 0, 'social_response': 0, 'social_reciprocity': 0,
            'empathy': 0, 'friendship_skills': 0, 'group_skills': 0,
        })
        assert result['level'] == 'foundational'
        assert result['autism_specific']['requires_peer_support'] is True

    def test_adaptive_skills_flexibility(self):
        """Low flexibility needs transition support."""
        result = ExtensionAssessor().assess_adaptive_skills({'flexibility': 0.2})
        assert result['autism_specific']['requires_transition_support'] is True

    def test_planning_matches_component_assessor(self):
        """The gated planning assessor reuses the executive formula."""
        data = {'task_planning': 0.9, 'sequencing': 0.7, 'follow_through': 0.3}
        result = ExtensionAssessor().assess_planning_organization(data)
        assert result['score'] == assess_planning_organization(data).score
        assert 'supports' in result

    def test_executive_composite_keys(self):
        """The composite reports overall_level and composite_score."""
        result = ExtensionAssessor().calculate_executive_function_score({})
        assert result['overall_level'] == 'below_average'
        assert result['composite_score'] == pytest.approx(0.45375)


class TestDisabledAssessors:
    """Test the fallback path."""

    def test_fallback_without_computation(self):
        """A disabled flag returns the fallback and never computes."""
        flags = FeatureFlagRegistry(overrides={'cognitive_level_assessment': False})
        assessor = ExtensionAssessor(flags)
        with mock.patch.object(ExtensionAssessor, '_compute_cognitive_level') as compute:
            result = assessor.assess_cognitive_level(full_profile(1.0))
        compute.assert_not_called()
        assert result == {'level': 'assessment_disabled', 'score': 0.5, 'note': FALLBACK_NOTE}

    def test_composite_fallback_keys(self):
        """The executive composite fallback uses composite key names."""
        flags = FeatureFlagRegistry(overrides={'executive_function_score': False})
        result = ExtensionAssessor(flags).calculate_executive_function_score({})
        assert result == {
            'overall_level': 'assessment_disabled',
            'composite_score': 0.5,
            'note': FALLBACK_NOTE,
        }

    def test_other_assessors_unaffected(self):
        """Disabling one flag leaves the others running."""
        flags = FeatureFlagRegistry(overrides={'time_management_assessment': False})
        assessor = ExtensionAssessor(flags)
        assert assessor.assess_time_management({}) == fallback_result()
        assert assessor.assess_planning_organization({})['level'] != 'assessment_disabled'

    def test_fallback_is_fresh(self):
        """Each fallback is a new dict."""
        first = fallback_result()
        first['score'] = 0.0
        assert fallback_result()['score'] == 0.5


class TestExecutiveCompositeGating:
    """Test that the composite respects the component gates."""

    PLANNING_DATA = {
        'task_planning': 1, 'sequencing': 1, 'goal_setting': 1,
        'prioritization': 1, 'organization': 1, 'follow_through': 1,
    }

    def test_disabled_planning_not_computed(self):
        """A disabled planning flag skips its formula and counts as 0.5."""
        flags = FeatureFlagRegistry(overrides={'planning_organization_assessment': False})
        assessor = ExtensionAssessor(flags)
        with mock.patch.object(executive_function, 'assess_planning_organization') as planning:
            result = assessor.calculate_executive_function_score(self.PLANNING_DATA)
        planning.assert_not_called()
        assert result['components']['planning'] == 0.5

    def test_disabled_time_management_not_computed(self):
        """A disabled time management flag skips its formula."""
        flags = FeatureFlagRegistry(overrides={'time_management_assessment': False})
        assessor = ExtensionAssessor(flags)
        with mock.patch.object(executive_function, 'assess_time_management') as timing:
            result = assessor.calculate_executive_function_score({'time_awareness': 1})
        timing.assert_not_called()
        assert result['components']['time_management'] == 0.5

    def test_enabled_matches_direct_profile(self):
        """With every flag on the gated composite equals the direct profile."""
        result = ExtensionAssessor().calculate_executive_function_score(self.PLANNING_DATA)
        profile = calculate_executive_function_score(self.PLANNING_DATA)
        assert result['composite_score'] == pytest.approx(profile.composite_score)
        assert result['components']['planning'] == pytest.approx(1.0)
        assert result['overall_level'] == profile.overall_level
