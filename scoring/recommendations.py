"""
Strategy and recommendation tables.

All level -> strategy lists used by the indicators, the executive function
assessor, the extension assessors, the autism support level and the trigger
analyzer live here as literal data. Lookups always return a fresh list so
callers can extend the result without touching the tables.
"""

import logging
from typing import Dict, Iterable, List, Tuple

logger = logging.getLogger(__name__)


STRATEGY_TABLES: Dict[str, Dict[str, Tuple[str, ...]]] = {
    # Primary indicators
    'persistence': {
        'high': ('challenge_increase', 'complex_tasks', 'leadership_roles'),
        'moderate': ('gradual_challenge', 'peer_support', 'choice_provision'),
        'emerging': ('break_tasks', 'visual_progress', 'frequent_breaks'),
        'needs_support': ('simplified_tasks', 'constant_support', 'immediate_rewards'),
    },
    'frustration': {
        'high': ('immediate_break', 'sensory_regulation', 'task_simplification'),
        'moderate': ('break_soon', 'difficulty_adjustment', 'positive_reinforcement'),
        'emerging': ('monitor_closely', 'provide_choices', 'preview_changes'),
        'minimal': ('maintain_current', 'positive_feedback'),
    },
    'frustration_triggers': {
        'high': ('task_complexity', 'sensory_overload', 'unexpected_changes'),
        'moderate': ('repeated_errors', 'time_pressure', 'social_demands'),
        'emerging': ('unexpected_results', 'ambiguous_instructions'),
        'minimal': (),
    },
    'regulation_supports': {
        'independent': ('minimal_monitoring', 'advanced_challenges'),
        'emerging_independence': ('periodic_check_ins', 'choice_provision'),
        'guided_regulation': ('visual_cues', 'structured_breaks', 'strategy_prompts'),
        'needs_support': ('constant_guidance', 'external_regulation', 'immediate_feedback'),
    },
    'regulation_goals': {
        'independent': ('peer_mentoring', 'complex_problem_solving'),
        'emerging_independence': ('strategy_development', 'emotional_awareness'),
        'guided_regulation': ('self_monitoring', 'pause_recognition'),
        'needs_support': ('basic_self_awareness', 'simple_strategies'),
    },
    'attention': {
        'sustained': ('extended_activities', 'complex_tasks', 'independent_work'),
        'moderate': ('structured_breaks', 'visual_timers', 'focus_reminders'),
        'variable': ('shorter_tasks', 'movement_breaks', 'reduce_distractions'),
        'limited': ('short_sessions', 'frequent_breaks', 'minimal_distractions',
                    'high_interest_content'),
    },
    'motivation': {
        'intrinsic': ('maintain_autonomy', 'self_directed_learning', 'challenge_options'),
        'engaged': ('choice_provision', 'progress_feedback', 'interest_integration'),
        'extrinsic': ('token_systems', 'special_interest_rewards', 'visual_progress'),
        'minimal': ('immediate_rewards', 'special_interests', 'short_success_cycles'),
    },

    # Executive function components
    'working_memory_interventions': {
        'superior': ('complex_sequences', 'memory_challenges'),
        'average': ('chunking_strategies', 'rehearsal_practice'),
        'emerging': ('visual_memory_aids', 'step_reminders', 'chunked_instructions'),
        'needs_support': ('external_memory_aids', 'single_step_instructions',
                          'visual_checklists'),
    },
    'cognitive_flexibility': {
        'flexible': ('novel_challenges', 'problem_solving_variety'),
        'moderately_flexible': ('planned_variations', 'choice_provision'),
        'rigid': ('gradual_change_exposure', 'visual_schedules', 'social_stories'),
        'very_rigid': ('transition_warnings', 'predictable_routines', 'first_then_boards',
                       'minimal_changes'),
    },
    'inhibitory_control': {
        'strong': ('self_monitoring', 'independent_regulation'),
        'adequate': ('periodic_reminders', 'self_check_cues'),
        'developing': ('wait_cards', 'structured_turn_taking', 'visual_cues'),
        'weak': ('visual_cues', 'immediate_feedback', 'stop_signals',
                 'environmental_structure'),
    },
    'planning_strategies': {
        'independent': ('complex_project_management', 'long_term_planning'),
        'moderate': ('visual_planning_tools', 'step_checklists'),
        'emerging': ('simple_planning_tools', 'immediate_goals'),
        'needs_support': ('immediate_tasks_only', 'constant_prompting'),
    },
    'planning_supports': {
        'independent': (),
        'moderate': ('periodic_check_ins', 'goal_review'),
        'emerging': ('constant_guidance', 'external_organization'),
        'needs_support': ('complete_external_structure', 'step_by_step_guidance'),
    },
    'time_tools': {
        'independent': ('digital_calendars', 'advanced_scheduling'),
        'moderate': ('visual_schedules', 'timers', 'reminders'),
        'emerging': ('simple_timers', 'visual_clocks'),
        'needs_support': ('constant_prompts', 'external_time_management'),
    },
    'time_interventions': {
        'independent': (),
        'moderate': ('time_awareness_training',),
        'emerging': ('basic_time_concepts', 'routine_establishment'),
        'needs_support': ('intensive_time_training', 'structured_day'),
    },
    'executive_strengths': {
        'superior': ('advanced_executive_skills', 'independent_functioning'),
        'above_average': ('good_self_regulation', 'effective_planning'),
        'average': (),
        'below_average': (),
        'significant_impairment': (),
    },
    'executive_support_needs': {
        'superior': (),
        'above_average': (),
        'average': ('executive_skill_enhancement',),
        'below_average': ('structured_executive_support', 'external_organization'),
        'significant_impairment': ('intensive_executive_intervention', 'constant_support'),
    },
    'executive_interventions': {
        'superior': ('Advanced executive skills', 'Independent functioning',
                     'Complex projects'),
        'above_average': ('Advanced executive skills', 'Independent functioning',
                          'Complex projects'),
        'average': ('Executive skill enhancement', 'Periodic supports',
                    'Self-regulation strategies'),
        'below_average': ('Structured executive support', 'External organization',
                          'Constant visual supports'),
        'significant_impairment': ('Intensive executive intervention',
                                   'Complete external structure', 'Constant guidance'),
    },

    # Extension assessors
    'cognitive_strengths': {
        'superior': ('advanced_cognitive_abilities', 'complex_problem_solving'),
        'above_average': ('good_cognitive_flexibility', 'effective_processing'),
    },
    'cognitive_support_needs': {
        'average': ('cognitive_enhancement_activities',),
        'below_average': ('structured_cognitive_support', 'step_by_step_guidance'),
        'significant_support_needed': ('intensive_cognitive_intervention',
                                       'individualized_support'),
    },
    'cognitive_recommendations': {
        'high': ('Appropriate cognitive challenges', 'Leadership opportunities',
                 'Independent projects'),
        'moderate': ('Periodic cognitive supports', 'Organization strategies',
                     'Regular breaks'),
        'low': ('Structured cognitive support', 'Constant visual supports',
                'Break tasks into smaller steps'),
    },
    'communication_support_types': {
        'independent': (),
        'moderate_support': ('social_skills_training', 'pragmatic_language_support'),
        'substantial_support': ('AAC_devices', 'visual_schedules', 'social_stories'),
        'extensive_support': ('intensive_AAC', 'behavior_communication_training'),
    },
    'communication_methods': {
        'independent': ('verbal', 'written', 'digital'),
        'moderate_support': ('verbal_with_support', 'visual_aids'),
        'substantial_support': ('AAC', 'gestures', 'pictures'),
        'extensive_support': ('basic_AAC', 'gestures', 'behavioral_communication'),
    },
    'communication_interventions': {
        'independent': ('Advanced skill refinement', 'Digital communication',
                        'Presentation skills'),
        'moderate_support': ('Social skills training', 'Pragmatic language support',
                             'Visual supports'),
        'substantial_support': ('AAC devices', 'Visual schedules', 'Social stories'),
        'extensive_support': ('Intensive AAC implementation',
                              'Behavioral communication training',
                              'Sensory supports for communication'),
    },
    'social_focus_areas': {
        'advanced': (),
        'developing': ('conversation_skills', 'conflict_resolution'),
        'emerging': ('basic_interaction', 'turn_taking', 'personal_space'),
        'foundational': ('eye_contact', 'joint_attention', 'social_awareness'),
    },
    'social_goals': {
        'advanced': ('peer_mentoring', 'leadership_roles'),
        'developing': ('maintain_friendships', 'group_participation'),
        'emerging': ('initiate_greetings', 'respond_to_others'),
        'foundational': ('tolerate_proximity', 'basic_awareness'),
    },
    'social_interventions': {
        'advanced': ('Peer mentoring', 'Leadership roles', 'Advanced social skills'),
        'developing': ('Friendship skills', 'Group participation', 'Conflict resolution'),
        'emerging': ('Conversation skills', 'Turn-taking training',
                     'Personal space and boundaries'),
        'foundational': ('Basic social interaction training',
                         'Social awareness development', 'Social proximity practice'),
    },
    'social_awareness_goals': {
        'socially_aware': ('mentor_others_with_social_challenges',
                           'navigate_complex_social_situations',
                           'advocate_for_neurodiversity_acceptance'),
        'moderate_social_skills': ('enhance_conversation_maintenance',
                                   'improve_group_interaction_skills',
                                   'develop_nuanced_social_understanding'),
        'emerging_social_awareness': ('increase_social_initiation_frequency',
                                      'improve_nonverbal_cue_recognition',
                                      'develop_simple_perspective_taking'),
        'minimal_awareness': ('develop_basic_social_recognition',
                              'establish_comfort_with_social_proximity',
                              'learn_fundamental_communication_exchanges'),
    },
    'adaptive_support_areas': {
        'independent': (),
        'moderate_support': ('time_management', 'organization_skills'),
        'substantial_support': ('routine_establishment', 'step_by_step_guidance'),
        'extensive_support': ('constant_supervision', 'intensive_training'),
    },
    'adaptive_independence_goals': {
        'independent': ('community_skills', 'vocational_preparation'),
        'moderate_support': ('partial_independence', 'supervised_activities'),
        'substantial_support': ('basic_self_care', 'structured_routines'),
        'extensive_support': ('basic_compliance', 'safety_awareness'),
    },
    'adaptive_interventions': {
        'independent': ('Community skills', 'Vocational preparation', 'Independent living'),
        'moderate_support': ('Time management skills', 'Organizational skills',
                             'Partial independence'),
        'substantial_support': ('Routine establishment', 'Step-by-step guidance',
                                'Self-care training'),
        'extensive_support': ('Intensive basic skills training', 'Constant supervision',
                              'Safety awareness'),
    },

    # Autism support level
    'autism_interventions': {
        'Level 3': ('intensive_daily_support', 'specialized_programming',
                    'constant_supervision', 'comprehensive_intervention_plan'),
        'Level 2': ('regular_support_services', 'structured_environments',
                    'specialized_instruction', 'behavioral_interventions'),
        'Level 1': ('targeted_supports', 'social_skills_training',
                    'organizational_assistance', 'environmental_accommodations'),
    },
    'autism_recommendations': {
        'Level 3': ('Full-time aide support', 'Highly structured environment',
                    'Intensive behavioral intervention',
                    'Augmentative communication systems'),
        'Level 2': ('Part-time aide support', 'Structured learning environment',
                    'Social skills intervention', 'Sensory accommodation plan'),
        'Level 1': ('Periodic check-ins', 'Environmental accommodations',
                    'Social coaching', 'Self-advocacy training'),
    },

    # Trigger analysis, keyed by trigger category or risk factor
    'trigger_prevention': {
        'sensory': ('sensory_diet', 'noise_reduction', 'visual_simplification'),
        'social': ('social_stories', 'structured_social_time', 'break_cards'),
        'transition': ('visual_schedules', 'transition_warnings', 'first_then_boards'),
        'cognitive': ('task_simplification', 'chunked_instructions'),
        'environmental': ('environmental_preview', 'consistent_setup'),
    },
    'risk_factor_prevention': {
        'elevated_stress_level': ('calming_activities', 'stress_monitoring'),
        'routine_disruption': ('routine_restoration', 'change_preparation'),
        'environmental_lighting_change': ('lighting_control',),
        'environmental_noise_increase': ('noise_cancelling_headphones',),
        'environmental_crowd_increase': ('quiet_space_access',),
    },
    'environmental_modifications': {
        'sensory': ('reduce_lighting_intensity', 'minimize_background_noise'),
        'social': ('designated_quiet_area',),
        'transition': ('visual_transition_cues',),
        'cognitive': ('uncluttered_workspace',),
        'environmental': ('stable_room_layout',),
    },
}


def get_strategies(domain: str, level: str) -> List[str]:
    """
    Return the strategy list for a domain and level.

    Unknown domains or levels give an empty list.
    """
    table = STRATEGY_TABLES.get(domain)
    if table is None:
        logger.debug(f"No strategy table for domain '{domain}'")
        return []
    return list(table.get(level, ()))


def merge_unique(lists: Iterable[Iterable[str]]) -> List[str]:
    """Concatenate lists keeping first-seen order and dropping repeats."""
    merged: List[str] = []
    for items in lists:
        for item in items:
            if item not in merged:
                merged.append(item)
    return merged


def prevention_strategies_for(categories: Iterable[str], risk_factors: Iterable[str]) -> List[str]:
    """Prevention strategies for trigger categories followed by risk factors."""
    return merge_unique(
        [get_strategies('trigger_prevention', category) for category in categories] +
        [get_strategies('risk_factor_prevention', factor) for factor in risk_factors]
    )


def environmental_modifications_for(categories: Iterable[str]) -> List[str]:
    return merge_unique(get_strategies('environmental_modifications', category)
                        for category in categories)
