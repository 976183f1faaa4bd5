"""Planner: task/plan storage plus plan generation, prioritization and export."""

import datetime as dt
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..core.config import Config
from ..core.plan import Plan, Resources
from ..core.task import Task, TaskStatus
from ..utils.exceptions import PlanNotFoundError, TaskNotFoundError
from ..utils.helpers import ensure_dir
from ..utils.logger import get_logger
from .export import export_plan
from .phases import (
    ProjectSpec,
    calculate_timeline,
    generate_assumptions,
    generate_phases,
    identify_risks,
)
from .recommendations import Recommendation, generate_recommendations
from .scoring import ScoredTask, ScoringCriteria, prioritize_tasks

logger = get_logger(__name__)


class Planner:
    """
    Entry point for task and plan operations.

    Tasks live in `<workspace>/tasks/<id>.json`, plans in
    `<workspace>/plans/<id>.json`.
    """

    def __init__(self, config: Config):
        self.config = config

    # =====================
    # Tasks
    # =====================
    def create_task(self, title: str, **fields: Any) -> Task:
        """Create and persist a task, defaulting priority/complexity/category from settings."""
        fields.setdefault('priority', self.config.get('settings.default_priority', 'medium'))
        fields.setdefault('complexity', self.config.get('settings.default_complexity', 'medium'))
        fields.setdefault('category', self.config.get('settings.default_category', 'general'))

        task = Task(title=title, **fields)
        self._save_task(task)
        logger.info(f"Task created: {task.id} ({task.title})")
        return task

    def get_task(self, task_id: str) -> Optional[Task]:
        task_file = self.config.get_task_file(task_id)
        if not task_file.exists():
            return None
        return Task.load(task_file)

    def require_task(self, task_id: str) -> Task:
        task = self.get_task(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def update_task(self, task_id: str, **changes: Any) -> Task:
        task = self.require_task(task_id)
        task.update(**changes)
        self._save_task(task)
        return task

    def save_task(self, task: Task) -> None:
        """Persist an already-modified task."""
        self._save_task(task)

    def delete_task(self, task_id: str) -> bool:
        task_file = self.config.get_task_file(task_id)
        if not task_file.exists():
            return False
        task_file.unlink()
        logger.info(f"Task {task_id} deleted")
        return True

    def list_tasks(
        self,
        status: Optional[str] = None,
        category: Optional[str] = None,
        assignee: Optional[str] = None,
    ) -> List[Task]:
        """All stored tasks, oldest first, optionally filtered."""
        tasks = [
            t for t in self._load_all(self.config.tasks_path, Task.load)
            if (status is None or str(t.status) == status)
            and (category is None or t.category == category)
            and (assignee is None or t.assignee == assignee)
        ]
        return sorted(tasks, key=lambda t: (t.created_at or '', t.id))

    def completed_task_ids(self) -> List[str]:
        return [t.id for t in self.list_tasks() if t.status == TaskStatus.COMPLETED]

    # =====================
    # Plans
    # =====================
    def generate_plan(
        self,
        project: ProjectSpec,
        include_documentation: bool = False,
        include_maintenance: bool = False,
        start: Optional[dt.datetime] = None,
    ) -> Plan:
        """Build a plan from the project-type templates and persist it."""
        plan = Plan(
            project_name=project.name,
            project_type=project.type,
            description=project.description,
            resources=Resources(team=list(project.team), budget=project.budget, tools=list(project.tools)),
        )

        plan.phases = generate_phases(project, include_documentation, include_maintenance)
        plan.timeline = calculate_timeline(plan.phases, start)
        plan.risks = identify_risks(project, plan)
        plan.assumptions = generate_assumptions(project)

        self._save_plan(plan)
        logger.info(
            f"Plan created: {plan.id} ({plan.project_name}, {len(plan.phases)} phases, "
            f"{plan.timeline.total_duration} days)"
        )
        return plan

    def get_plan(self, plan_id: str) -> Optional[Plan]:
        plan_file = self.config.get_plan_file(plan_id)
        if not plan_file.exists():
            return None
        return Plan.load(plan_file)

    def require_plan(self, plan_id: str) -> Plan:
        plan = self.get_plan(plan_id)
        if plan is None:
            raise PlanNotFoundError(plan_id)
        return plan

    def update_plan(self, plan_id: str, **changes: Any) -> Plan:
        plan = self.require_plan(plan_id)
        plan.update(**changes)
        self._save_plan(plan)
        return plan

    def delete_plan(self, plan_id: str) -> bool:
        plan_file = self.config.get_plan_file(plan_id)
        if not plan_file.exists():
            return False
        plan_file.unlink()
        logger.info(f"Plan {plan_id} deleted")
        return True

    def list_plans(self, status: Optional[str] = None) -> List[Plan]:
        plans = [
            p for p in self._load_all(self.config.plans_path, Plan.load)
            if status is None or str(p.status) == status
        ]
        return sorted(plans, key=lambda p: (p.created_at or '', p.id))

    def export_plan(self, plan_id: str, fmt: str = 'json') -> str:
        return export_plan(self.require_plan(plan_id), fmt)

    # =====================
    # Analysis
    # =====================
    def prioritize(
        self,
        criteria: Optional[ScoringCriteria] = None,
        now: Optional[dt.datetime] = None,
        include_closed: bool = False,
    ) -> List[ScoredTask]:
        """Score stored tasks; completed and cancelled tasks are skipped unless asked for."""
        all_tasks = self.list_tasks()
        by_id = {t.id: t for t in all_tasks}
        candidates = all_tasks if include_closed else [
            t for t in all_tasks if t.status not in (TaskStatus.COMPLETED, TaskStatus.CANCELLED)
        ]
        return prioritize_tasks(candidates, criteria, by_id.get, now)

    def recommend(self, project_type: str, now: Optional[dt.datetime] = None) -> List[Recommendation]:
        return generate_recommendations(project_type, self.list_tasks(), now)

    # =====================
    # Storage
    # =====================
    def _save_task(self, task: Task) -> None:
        ensure_dir(self.config.tasks_path)
        task.save(self.config.get_task_file(task.id))

    def _save_plan(self, plan: Plan) -> None:
        ensure_dir(self.config.plans_path)
        plan.save(self.config.get_plan_file(plan.id))

    @staticmethod
    def _load_all(directory: Path, loader) -> List[Any]:
        if not directory.exists():
            return []

        records = []
        for path in sorted(directory.glob('*.json')):
            try:
                records.append(loader(path))
            except (OSError, ValueError, TypeError, KeyError) as e:
                logger.error(f"Failed to load {path}: {e}")
        return records


def project_from_options(
    name: str,
    project_type: str = 'web',
    description: str = '',
    complexity: str = 'medium',
    team: Optional[List[str]] = None,
    budget: float = 0,
    tools: Optional[List[str]] = None,
    services: Optional[List[str]] = None,
    technologies: Optional[List[Dict[str, str]]] = None,
) -> ProjectSpec:
    """Build a ProjectSpec from CLI-style keyword options."""
    return ProjectSpec(
        name=name,
        type=project_type,
        description=description,
        complexity=complexity,
        team=list(team or []),
        budget=budget,
        tools=list(tools or []),
        services=list(services or []),
        technologies=list(technologies or []),
    )
