"""
Universal Project Manager - task planning, plan generation and
deployment manifest generation from the command line.

Version: 1.0.0
"""

__version__ = '1.0.0'
__author__ = 'Universal Project Manager Team'

from .core.config import Config
from .core.plan import Plan, PlanStatus
from .core.task import Task, TaskStatus, TaskPriority, TaskComplexity
from .core.validator import Validator
from .planner.planner import Planner

__all__ = [
    'Config',
    'Plan',
    'PlanStatus',
    'Task',
    'TaskStatus',
    'TaskPriority',
    'TaskComplexity',
    'Validator',
    'Planner',
]
