"""Core modules for project management functionality."""

from .config import Config
from .plan import Plan, PlanStatus, Phase, Timeline, Risk, Resources
from .task import Task, TaskStatus, TaskPriority, TaskComplexity
from .validator import Validator, ValidationResult

__all__ = [
    'Config',
    'Plan',
    'PlanStatus',
    'Phase',
    'Timeline',
    'Risk',
    'Resources',
    'Task',
    'TaskStatus',
    'TaskPriority',
    'TaskComplexity',
    'Validator',
    'ValidationResult',
]
