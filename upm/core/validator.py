"""Validation system for plans and tasks."""

import datetime as dt
from typing import Dict, Iterator, List, Optional, Sequence, Set, Tuple
from dataclasses import dataclass, field

from .plan import Plan
from .task import Task, TaskStatus
from ..planner.scoring import prioritize_tasks
from ..utils.logger import get_logger

logger = get_logger(__name__)

MAX_DEPENDENCIES = 10


@dataclass
class ValidationError:
    """Validation error information."""
    severity: str  # 'error', 'warning', 'info'
    message: str
    context: Optional[Dict] = None


@dataclass
class ValidationResult:
    """Result of validation."""
    is_valid: bool
    errors: List[ValidationError] = field(default_factory=list)
    warnings: List[ValidationError] = field(default_factory=list)

    def has_errors(self) -> bool:
        """Check if there are any errors."""
        return len(self.errors) > 0

    def has_warnings(self) -> bool:
        """Check if there are any warnings."""
        return len(self.warnings) > 0

    def get_all_issues(self) -> List[ValidationError]:
        """Get all issues (errors and warnings)."""
        return self.errors + self.warnings

    def merge(self, other: 'ValidationResult') -> 'ValidationResult':
        """Combine two results into a new one."""
        errors = self.errors + other.errors
        return ValidationResult(is_valid=not errors, errors=errors, warnings=self.warnings + other.warnings)


class Validator:
    """Validator for plans and tasks."""

    @staticmethod
    def detect_circular_dependencies(tasks: Sequence[Task]) -> List[List[str]]:
        """
        Detect circular dependencies in tasks.

        Returns:
            List of cycles, where each cycle is a list of task IDs ending
            with its first element
        """
        graph: Dict[str, List[str]] = {task.id: task.dependencies for task in tasks}

        cycles = []
        visited: Set[str] = set()
        rec_stack: Set[str] = set()
        path: List[str] = []

        # explicit stack of (node, remaining neighbours) instead of recursion
        for root in graph:
            if root in visited:
                continue
            visited.add(root)
            rec_stack.add(root)
            path.append(root)
            stack: List[Tuple[str, Iterator[str]]] = [(root, iter(graph[root]))]

            while stack:
                node, neighbors = stack[-1]
                neighbor = next(neighbors, None)
                if neighbor is None:
                    stack.pop()
                    path.pop()
                    rec_stack.remove(node)
                    continue
                if neighbor not in graph:
                    continue
                if neighbor not in visited:
                    visited.add(neighbor)
                    rec_stack.add(neighbor)
                    path.append(neighbor)
                    stack.append((neighbor, iter(graph[neighbor])))
                elif neighbor in rec_stack:
                    cycle_start = path.index(neighbor)
                    cycles.append(path[cycle_start:] + [neighbor])

        return cycles

    @staticmethod
    def validate_tasks(tasks: Sequence[Task]) -> ValidationResult:
        """
        Validate a set of tasks.

        Checks:
        - Every dependency refers to an existing task
        - No task depends on itself
        - No circular dependencies
        - Progress is within 0-100
        - Dependency count stays reasonable
        """
        errors = []
        warnings = []

        task_ids = {t.id for t in tasks}

        for task in tasks:
            for dep_id in task.dependencies:
                if dep_id == task.id:
                    errors.append(ValidationError(
                        severity='error',
                        message=f"Task {task.id} depends on itself",
                        context={'task_id': task.id}
                    ))
                elif dep_id not in task_ids:
                    errors.append(ValidationError(
                        severity='error',
                        message=f"Task {task.id} requires non-existent task {dep_id}",
                        context={'task_id': task.id, 'missing_dependency': dep_id}
                    ))

            if not 0 <= task.progress <= 100:
                errors.append(ValidationError(
                    severity='error',
                    message=f"Task {task.id} progress {task.progress} is outside 0-100",
                    context={'task_id': task.id, 'progress': task.progress}
                ))

            if len(task.dependencies) > MAX_DEPENDENCIES:
                warnings.append(ValidationError(
                    severity='warning',
                    message=f"Task {task.id} has {len(task.dependencies)} dependencies (consider breaking it down)",
                    context={'task_id': task.id, 'dependency_count': len(task.dependencies)}
                ))

        for cycle in Validator.detect_circular_dependencies(tasks):
            if len(cycle) <= 2:
                # self-dependency, already reported
                continue
            errors.append(ValidationError(
                severity='error',
                message=f"Circular dependency detected: {' -> '.join(cycle)}",
                context={'cycle': cycle}
            ))

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings
        )

    @staticmethod
    def validate_plan(plan: Plan) -> ValidationResult:
        """
        Validate a generated plan.

        Checks:
        - Plan has a project name and at least one phase
        - Phase durations are positive
        - Timeline total matches the phase durations
        - Phases list their work items and assumptions are recorded
        """
        errors = []
        warnings = []

        if not plan.project_name or not plan.project_name.strip():
            errors.append(ValidationError(
                severity='error',
                message="Plan must have a project name",
                context={'plan_id': plan.id}
            ))

        if not plan.phases:
            errors.append(ValidationError(
                severity='error',
                message=f"Plan {plan.id} has no phases",
                context={'plan_id': plan.id}
            ))

        for phase in plan.phases:
            if phase.duration <= 0:
                errors.append(ValidationError(
                    severity='error',
                    message=f"Phase '{phase.name}' has non-positive duration {phase.duration}",
                    context={'plan_id': plan.id, 'phase': phase.name}
                ))
            if not phase.tasks:
                warnings.append(ValidationError(
                    severity='warning',
                    message=f"Phase '{phase.name}' lists no tasks",
                    context={'plan_id': plan.id, 'phase': phase.name}
                ))

        if plan.phases and plan.timeline.total_duration != plan.total_duration:
            warnings.append(ValidationError(
                severity='warning',
                message=(
                    f"Plan {plan.id}: timeline covers {plan.timeline.total_duration} days "
                    f"but phases add up to {plan.total_duration}"
                ),
                context={'plan_id': plan.id}
            ))

        if not plan.assumptions:
            warnings.append(ValidationError(
                severity='warning',
                message=f"Plan {plan.id} has no assumptions recorded",
                context={'plan_id': plan.id}
            ))

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings
        )

    @staticmethod
    def check_task_ready(task: Task, all_tasks: Sequence[Task]) -> Tuple[bool, Optional[str]]:
        """
        Check if a task is ready to start.

        Returns:
            (is_ready, reason) - reason is None if ready, otherwise explains why not
        """
        if task.status == TaskStatus.COMPLETED:
            return False, "Task already completed"

        if task.status == TaskStatus.CANCELLED:
            return False, "Task was cancelled"

        if task.status == TaskStatus.BLOCKED:
            return False, "Task is blocked"

        by_id = {t.id: t for t in all_tasks}

        for dep_id in task.dependencies:
            dep = by_id.get(dep_id)
            if dep is None:
                return False, f"Dependency {dep_id} not found"
            if dep.status != TaskStatus.COMPLETED:
                return False, f"Waiting for task {dep_id} ({dep.title})"

        return True, None

    @staticmethod
    def find_blocked_tasks(tasks: Sequence[Task]) -> List[Tuple[Task, str]]:
        """
        Find tasks that are blocked and the reason.

        Returns:
            List of (task, reason) tuples
        """
        blocked = []

        for task in tasks:
            if task.status == TaskStatus.BLOCKED:
                blocked.append((task, "Manually marked as blocked"))
                continue

            is_ready, reason = Validator.check_task_ready(task, tasks)
            if not is_ready and reason and reason.startswith(("Waiting for", "Dependency")):
                blocked.append((task, reason))

        return blocked

    @staticmethod
    def suggest_next_tasks(tasks: Sequence[Task], now: Optional[dt.datetime] = None) -> List[Task]:
        """
        Suggest which tasks should be worked on next.

        Returns tasks that are not closed or blocked, have all dependencies
        satisfied, ordered by priority score.
        """
        ready = [t for t in tasks if Validator.check_task_ready(t, tasks)[0]]
        by_id = {t.id: t for t in tasks}
        return [scored.task for scored in prioritize_tasks(ready, lookup=by_id.get, now=now)]
