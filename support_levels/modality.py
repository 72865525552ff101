"""
Modality-specific support levels.

Estimates how much accommodation a learner needs in four modalities
(visual, auditory, cognitive, sensory) from 0-1 preference and ability
ratings plus a few boolean preferences.

Clinical rationale (Autism):
- Processing speed, attention and memory differ by channel, so supports
  are planned per modality rather than globally
- Sensory sensitivity across several channels compounds; overload history
  sets a floor on the support level

Engineering approach:
- Visual, auditory and cognitive: each factor band adds magnitude * weight
  and appends its recommendation and adaptation tokens
- Sensory: counts high (> 0.7) and moderate (0.5-0.7] sensitivities
- Levels from inclusive bands; sensory uses its own higher bands
"""

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Mapping

from scoring.classification import clamp_score, classify, normalize_keys, read_flag, read_number

logger = logging.getLogger(__name__)


SUPPORT_BANDS = ((0.7, 'extensive'), (0.5, 'substantial'), (0.3, 'moderate'))
SENSORY_SUPPORT_BANDS = ((0.8, 'extensive'), (0.6, 'substantial'), (0.4, 'moderate'))
SENSORY_CHANNELS = ('visual', 'auditory', 'tactile', 'vestibular', 'proprioceptive')


@dataclass
class SupportLevel:
    """
    Support estimate for one modality.

    Attributes:
        level: minimal, moderate, substantial or extensive
        score: Support need in [0, 1]
        recommendations: Support recommendations
        adaptations: Interface and environment adaptations
        specific_needs: Which sub-areas need support
        autism_optimizations: Autism-oriented design choices
        interventions: Sensory interventions (sensory modality only)
        sensory_profile: Channel -> sensitivity category (sensory modality only)
    """
    level: str
    score: float
    recommendations: List[str] = field(default_factory=list)
    adaptations: List[str] = field(default_factory=list)
    specific_needs: Dict[str, bool] = field(default_factory=dict)
    autism_optimizations: Dict[str, bool] = field(default_factory=dict)
    interventions: List[str] = field(default_factory=list)
    sensory_profile: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def calculate_visual_support_level(preferences: Mapping) -> SupportLevel:
    prefs = normalize_keys(preferences)
    processing_speed = read_number(prefs, 'visual_processing_speed', 0.5)
    attention = read_number(prefs, 'visual_attention', 0.5)
    memory = read_number(prefs, 'visual_memory', 0.5)
    sensitivity = read_number(prefs, 'sensory_sensitivity', 0.5)
    comprehension = read_number(prefs, 'comprehension_level', 0.5)
    motion_sensitive = read_flag(prefs, 'motion_sensitive')

    score = 0.0
    recommendations: List[str] = []
    adaptations: List[str] = []

    # Processing speed (weight 0.25)
    if processing_speed < 0.3:
        score += 0.8 * 0.25
        recommendations.append('extended_visual_presentation_time')
        adaptations.append('slow_transitions')
    elif processing_speed < 0.6:
        score += 0.5 * 0.25
        recommendations.append('moderate_visual_pacing')
    else:
        score += 0.2 * 0.25

    # Visual attention (weight 0.20)
    if attention < 0.4:
        score += 0.8 * 0.2
        recommendations += ['visual_focus_aids', 'distraction_reduction']
        adaptations += ['simplified_backgrounds', 'highlighted_targets']
    elif attention < 0.7:
        score += 0.5 * 0.2
        recommendations.append('attention_guides')

    # Visual memory (weight 0.20)
    if memory < 0.4:
        score += 0.7 * 0.2
        recommendations += ['visual_memory_aids', 'reference_materials']
        adaptations += ['persistent_visual_cues', 'step_by_step_guides']

    # Sensory sensitivity (weight 0.20)
    if sensitivity > 0.7 or motion_sensitive:
        score += 0.8 * 0.2
        recommendations += ['reduced_visual_stimulation', 'calming_colors']
        adaptations += ['minimal_animations', 'soft_transitions']
    elif sensitivity > 0.5:
        score += 0.5 * 0.2
        recommendations.append('moderate_stimulation_control')

    # Comprehension (weight 0.15)
    if comprehension < 0.4:
        score += 0.7 * 0.15
        recommendations += ['pictorial_instructions', 'visual_scaffolding']
        adaptations += ['icon_based_navigation', 'visual_feedback']

    if read_flag(prefs, 'needs_high_contrast'):
        adaptations += ['high_contrast_mode', 'bold_outlines']
    if read_flag(prefs, 'prefers_simple_layouts'):
        adaptations += ['minimalist_design', 'clear_hierarchy']

    score = clamp_score(score)
    return SupportLevel(
        level=classify(score, SUPPORT_BANDS, 'minimal'),
        score=score,
        recommendations=recommendations,
        adaptations=adaptations,
        specific_needs={
            'processing_support': processing_speed < 0.5,
            'attention_support': attention < 0.6,
            'memory_support': memory < 0.5,
            'sensory_accommodation': sensitivity > 0.6,
            'comprehension_aids': comprehension < 0.5,
        },
        autism_optimizations={
            'reduce_visual_clutter': True,
            'provide_predictable_layouts': True,
            'use_consistent_visual_language': True,
            'offer_visual_choices': score > 0.4,
        },
    )


def calculate_auditory_support_level(preferences: Mapping) -> SupportLevel:
    prefs = normalize_keys(preferences)
    processing = read_number(prefs, 'auditory_processing', 0.5)
    sound_sensitivity = read_number(prefs, 'sound_sensitivity', 0.5)
    speech_comprehension = read_number(prefs, 'speech_comprehension', 0.5)
    memory = read_number(prefs, 'auditory_memory', 0.5)

    score = 0.0
    recommendations: List[str] = []
    adaptations: List[str] = []

    # Auditory processing (weight 0.30)
    if processing < 0.3:
        score += 0.9 * 0.3
        recommendations += ['visual_alternatives', 'text_based_instructions']
        adaptations += ['minimize_audio_reliance', 'visual_confirmation']
    elif processing < 0.6:
        score += 0.6 * 0.3
        recommendations += ['supplementary_visual_cues', 'slower_speech']

    # Sound sensitivity (weight 0.25)
    if sound_sensitivity > 0.7:
        score += 0.8 * 0.25
        recommendations += ['volume_control', 'sound_dampening']
        adaptations += ['optional_audio', 'quiet_environments']
    elif sound_sensitivity > 0.5:
        score += 0.5 * 0.25
        recommendations.append('volume_adjustment_options')

    # Speech comprehension (weight 0.25)
    if speech_comprehension < 0.4:
        score += 0.8 * 0.25
        recommendations += ['simplified_language', 'key_word_emphasis']
        adaptations += ['pictorial_communication', 'gesture_support']

    # Auditory memory (weight 0.20)
    if memory < 0.4:
        score += 0.7 * 0.2
        recommendations += ['written_summaries', 'audio_replay_options']
        adaptations.append('persistent_visual_reminders')

    if read_flag(prefs, 'needs_repeated_instructions'):
        adaptations += ['instruction_repetition', 'audio_loops']
    if read_flag(prefs, 'prefers_visual_cues'):
        adaptations += ['visual_audio_indicators', 'sound_visualization']

    score = clamp_score(score)
    return SupportLevel(
        level=classify(score, SUPPORT_BANDS, 'minimal'),
        score=score,
        recommendations=recommendations,
        adaptations=adaptations,
        specific_needs={
            'processing_support': processing < 0.5,
            'sensitivity_accommodation': sound_sensitivity > 0.6,
            'comprehension_aids': speech_comprehension < 0.5,
            'memory_support': memory < 0.5,
        },
        autism_optimizations={
            'provide_visual_alternatives': processing < 0.6,
            'control_auditory_environment': sound_sensitivity > 0.5,
            'use_simple_language': speech_comprehension < 0.6,
            'offer_audio_controls': True,
        },
    )


def calculate_cognitive_support_level(preferences: Mapping) -> SupportLevel:
    prefs = normalize_keys(preferences)
    executive = read_number(prefs, 'executive_function', 0.5)
    processing_speed = read_number(prefs, 'processing_speed', 0.5)
    working_memory = read_number(prefs, 'working_memory', 0.5)
    attention = read_number(prefs, 'attention', 0.5)
    flexibility = read_number(prefs, 'flexibility', 0.5)

    score = 0.0
    recommendations: List[str] = []
    adaptations: List[str] = []

    # Executive function (weight 0.25)
    if executive < 0.3:
        score += 0.9 * 0.25
        recommendations += ['external_structure', 'step_by_step_guidance']
        adaptations += ['task_breakdown', 'progress_visualization']
    elif executive < 0.6:
        score += 0.6 * 0.25
        recommendations += ['organizational_aids', 'planning_support']

    # Processing speed (weight 0.20)
    if processing_speed < 0.3:
        score += 0.8 * 0.2
        recommendations += ['extended_time', 'reduced_cognitive_load']
        adaptations += ['simplified_tasks', 'extra_processing_time']
    elif processing_speed < 0.6:
        score += 0.5 * 0.2
        recommendations.append('flexible_pacing')

    # Working memory (weight 0.20)
    if working_memory < 0.4:
        score += 0.8 * 0.2
        recommendations += ['external_memory_aids', 'information_chunking']
        adaptations += ['visual_organizers', 'step_reminders']

    # Attention (weight 0.20)
    if attention < 0.4:
        score += 0.7 * 0.2
        recommendations += ['attention_supports', 'distraction_reduction']
        adaptations += ['focus_cues', 'attention_breaks']

    # Cognitive flexibility (weight 0.15)
    if flexibility < 0.3:
        score += 0.8 * 0.15
        recommendations += ['transition_preparation', 'choice_provision']
        adaptations += ['predictable_routines', 'change_warnings']

    if read_flag(prefs, 'needs_structure'):
        adaptations += ['structured_environments', 'clear_expectations']
    if read_flag(prefs, 'benefits_from_breaks'):
        adaptations += ['regular_breaks', 'self_paced_activities']

    score = clamp_score(score)
    return SupportLevel(
        level=classify(score, SUPPORT_BANDS, 'minimal'),
        score=score,
        recommendations=recommendations,
        adaptations=adaptations,
        specific_needs={
            'executive_support': executive < 0.5,
            'processing_support': processing_speed < 0.5,
            'memory_support': working_memory < 0.5,
            'attention_support': attention < 0.5,
            'flexibility_support': flexibility < 0.4,
        },
        autism_optimizations={
            'provide_structure': executive < 0.6,
            'allow_extra_time': processing_speed < 0.6,
            'use_external_memory_aids': working_memory < 0.6,
            'minimize_distractions': attention < 0.6,
            'prepare_for_changes': flexibility < 0.5,
        },
    )


def calculate_sensory_support_level(preferences: Mapping) -> SupportLevel:
    """Sensory support from how many channels are highly or moderately sensitive."""
    prefs = normalize_keys(preferences)
    sensitivities = {
        channel: read_number(prefs, f"{channel}_sensitivity", 0.5)
        for channel in SENSORY_CHANNELS
    }
    seeking = read_flag(prefs, 'sensory_seeking_behaviors')
    avoidance = read_flag(prefs, 'sensory_avoidance_behaviors')
    overload_frequency = read_number(prefs, 'sensory_overload_frequency', 0)

    high = sum(1 for value in sensitivities.values() if value > 0.7)
    moderate = sum(1 for value in sensitivities.values() if 0.5 < value <= 0.7)

    recommendations: List[str] = []
    adaptations: List[str] = []
    interventions: List[str] = []

    if high >= 3:
        score = 0.9
        recommendations += ['comprehensive_sensory_plan', 'sensory_breaks']
        adaptations += ['controlled_sensory_environment', 'escape_options']
    elif high >= 2 or moderate >= 3:
        score = 0.7
        recommendations += ['targeted_sensory_supports', 'environmental_modifications']
        adaptations += ['sensory_choices', 'gradual_exposure']
    elif high >= 1 or moderate >= 2:
        score = 0.5
        recommendations.append('specific_accommodations')
        adaptations += ['sensory_awareness', 'alternative_options']
    else:
        score = 0.3

    if seeking:
        interventions += ['sensory_input_opportunities', 'structured_sensory_activities']
        adaptations += ['movement_breaks', 'fidget_tools']
    if avoidance:
        interventions += ['sensory_protection', 'gradual_desensitization']
        adaptations += ['escape_routes', 'warning_systems']

    if overload_frequency > 0.7:
        score = max(score, 0.8)
        interventions += ['immediate_sensory_regulation', 'crisis_prevention']

    score = clamp_score(score)
    logger.debug(f"Sensory support {score:.2f}: {high} high, {moderate} moderate channels")

    return SupportLevel(
        level=classify(score, SENSORY_SUPPORT_BANDS, 'minimal'),
        score=score,
        recommendations=recommendations,
        adaptations=adaptations,
        autism_optimizations={
            'needs_sensory_breaks': score > 0.5,
            'benefits_from_sensory_tools': seeking or score > 0.4,
            'requires_environmental_control': score > 0.6,
            'needs_crisis_planning': overload_frequency > 0.6,
        },
        interventions=interventions,
        sensory_profile={
            channel: categorize_sensitivity(value) for channel, value in sensitivities.items()
        },
    )


def categorize_sensitivity(sensitivity: float) -> str:
    if sensitivity > 0.8:
        return 'hypersensitive'
    if sensitivity > 0.6:
        return 'sensitive'
    if sensitivity < 0.3:
        return 'hyposensitive'
    if sensitivity < 0.5:
        return 'seeking'
    return 'typical'
