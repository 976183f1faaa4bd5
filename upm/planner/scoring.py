"""Task priority scoring.

A task's score is a weighted sum of:
  - its declared priority weight (x10),
  - an urgency bonus from the due date,
  - a complexity weight,
  - the share of its dependencies already completed (x20),
  - its progress (x5, only when started),
  - bonuses for matching the requested category (+10) or assignee (+5).

The rounded score is bucketed back into a priority: critical >= 80,
high >= 60, medium >= 40, low >= 20, otherwise optional.
"""

import datetime as dt
import math
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Union

from ..core.task import Task, TaskPriority, TaskStatus
from ..utils.helpers import parse_datetime

PRIORITY_LEVELS: Dict[str, Dict[str, object]] = {
    'critical': {'weight': 10, 'color': 'red', 'description': 'Critical - Must be done immediately'},
    'high': {'weight': 8, 'color': 'orange', 'description': 'High - Should be done soon'},
    'medium': {'weight': 5, 'color': 'yellow', 'description': 'Medium - Important but not urgent'},
    'low': {'weight': 2, 'color': 'green', 'description': 'Low - Nice to have'},
    'optional': {'weight': 1, 'color': 'gray', 'description': 'Optional - Can be done later'},
}

DEFAULT_PRIORITY_WEIGHT = 5

COMPLEXITY_WEIGHTS: Dict[str, int] = {'low': 1, 'medium': 2, 'high': 3}

DEFAULT_COMPLEXITY_WEIGHT = 2

# (score floor, bucket), checked top-down
SCORE_THRESHOLDS = (
    (80, TaskPriority.CRITICAL),
    (60, TaskPriority.HIGH),
    (40, TaskPriority.MEDIUM),
    (20, TaskPriority.LOW),
)

TaskLookup = Callable[[str], Optional[Task]]


@dataclass(frozen=True)
class ScoringCriteria:
    """Optional preferences that boost matching tasks."""
    category: Optional[str] = None
    assignee: Optional[str] = None


@dataclass
class ScoredTask:
    """A task paired with its computed score and priority bucket."""
    task: Task
    score: int
    calculated_priority: TaskPriority

    def to_dict(self) -> Dict[str, object]:
        data = self.task.to_dict()
        data['priorityScore'] = self.score
        data['calculatedPriority'] = str(self.calculated_priority)
        return data


def priority_weight(priority: Union[TaskPriority, str, None]) -> int:
    """Weight of a priority level, 5 for anything unknown."""
    level = PRIORITY_LEVELS.get(str(priority)) if priority is not None else None
    return int(level['weight']) if level else DEFAULT_PRIORITY_WEIGHT


def days_until_due(due_date: Union[str, dt.date, dt.datetime], now: Optional[dt.datetime] = None) -> int:
    """Whole days until the due date, rounded up; negative when overdue."""
    due = parse_datetime(due_date)
    current = parse_datetime(now) if now is not None else dt.datetime.now()
    delta = (due - current).total_seconds() / 86400
    return math.ceil(delta)


def urgency_bonus(due_date: Optional[str], now: Optional[dt.datetime] = None) -> int:
    """Bonus for tasks that are overdue or due within the week."""
    if not due_date:
        return 0

    days = days_until_due(due_date, now)
    if days < 0:
        return 50
    if days < 3:
        return 30
    if days < 7:
        return 15
    return 0


def dependency_ratio(task: Task, lookup: Optional[TaskLookup]) -> float:
    """Fraction of the task's dependencies that exist and are completed."""
    if not task.dependencies:
        return 0.0
    if lookup is None:
        return 0.0

    completed = 0
    for dep_id in task.dependencies:
        dep = lookup(dep_id)
        if dep is not None and dep.status == TaskStatus.COMPLETED:
            completed += 1
    return completed / len(task.dependencies)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def calculate_task_score(
    task: Task,
    criteria: Optional[ScoringCriteria] = None,
    lookup: Optional[TaskLookup] = None,
    now: Optional[dt.datetime] = None,
) -> int:
    """
    Compute the priority score of a task.

    Args:
        task: Task to score
        criteria: Category/assignee preferences
        lookup: Resolves dependency ids to tasks; unresolved ids count as incomplete
        now: Reference time for due-date urgency (defaults to now)

    Returns:
        Integer score, rounded half-up
    """
    criteria = criteria or ScoringCriteria()
    score = 0.0

    score += priority_weight(task.priority) * 10
    score += urgency_bonus(task.due_date, now)
    score += COMPLEXITY_WEIGHTS.get(str(task.complexity), DEFAULT_COMPLEXITY_WEIGHT)

    if task.dependencies:
        score += dependency_ratio(task, lookup) * 20

    if task.progress > 0:
        score += task.progress * 5

    if criteria.category and task.category == criteria.category:
        score += 10

    if criteria.assignee and task.assignee == criteria.assignee:
        score += 5

    return _round_half_up(score)


def priority_from_score(score: float) -> TaskPriority:
    """Bucket a score into a priority level."""
    for floor, priority in SCORE_THRESHOLDS:
        if score >= floor:
            return priority
    return TaskPriority.OPTIONAL


def prioritize_tasks(
    tasks: Iterable[Task],
    criteria: Optional[ScoringCriteria] = None,
    lookup: Optional[TaskLookup] = None,
    now: Optional[dt.datetime] = None,
) -> List[ScoredTask]:
    """Score every task and return them highest score first.

    When no lookup is given, dependencies are resolved among `tasks` themselves.
    """
    task_list = list(tasks)
    if lookup is None:
        by_id = {t.id: t for t in task_list}
        lookup = by_id.get

    scored = []
    for task in task_list:
        score = calculate_task_score(task, criteria, lookup, now)
        scored.append(ScoredTask(task=task, score=score, calculated_priority=priority_from_score(score)))

    # sorted() is stable, so ties keep input order
    return sorted(scored, key=lambda s: s.score, reverse=True)
