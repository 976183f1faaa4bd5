"""Planning: scoring, phase generation, recommendations and export."""

from .planner import Planner, project_from_options
from .phases import ProjectSpec, generate_phases, calculate_timeline, PROJECT_TYPES
from .scoring import (
    ScoredTask,
    ScoringCriteria,
    calculate_task_score,
    priority_from_score,
    prioritize_tasks,
)
from .recommendations import Recommendation, generate_recommendations
from .export import export_plan, EXPORT_FORMATS

__all__ = [
    'Planner',
    'project_from_options',
    'ProjectSpec',
    'generate_phases',
    'calculate_timeline',
    'PROJECT_TYPES',
    'ScoredTask',
    'ScoringCriteria',
    'calculate_task_score',
    'priority_from_score',
    'prioritize_tasks',
    'Recommendation',
    'generate_recommendations',
    'export_plan',
    'EXPORT_FORMATS',
]
