"""Recommendations derived from the project type and the current task list."""

import datetime as dt
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from ..core.task import Task, TaskComplexity, TaskPriority, TaskStatus
from ..utils.helpers import slugify
from .scoring import days_until_due, priority_weight

TASK_SUGGESTIONS: Dict[str, List[str]] = {
    'web': [
        'Set up development environment',
        'Create responsive design system',
        'Implement user authentication',
        'Set up API endpoints',
        'Configure database',
        'Implement testing framework',
        'Set up CI/CD pipeline',
        'Configure monitoring and logging',
    ],
    'mobile': [
        'Set up mobile development environment',
        'Design mobile UI/UX',
        'Implement navigation structure',
        'Add offline functionality',
        'Implement push notifications',
        'Set up app analytics',
        'Prepare for app store submission',
        'Implement security measures',
    ],
    'ai-ml': [
        'Collect and prepare data',
        'Set up ML development environment',
        'Choose and implement algorithms',
        'Train and validate models',
        'Implement model serving',
        'Set up monitoring for model performance',
        'Create data pipelines',
        'Implement A/B testing framework',
    ],
    'api': [
        'Design API architecture',
        'Implement authentication and authorization',
        'Add rate limiting and throttling',
        'Implement API documentation',
        'Set up API testing',
        'Configure API monitoring',
        'Implement API versioning',
        'Set up API security measures',
    ],
}

# Work-item slug -> slugs that usually have to be finished first
DEPENDENCY_TEMPLATES: Dict[str, List[str]] = {
    'setup-environment': ['install-dependencies', 'configure-tools'],
    'run-tests': ['setup-environment', 'write-tests'],
    'deploy': ['run-tests', 'build-application'],
    'documentation': ['implement-features', 'write-tests'],
    'code-review': ['implement-features', 'write-tests'],
    'performance-optimization': ['implement-features', 'run-tests'],
    'security-audit': ['implement-features', 'run-tests'],
    'user-testing': ['implement-features', 'deploy'],
    'monitoring-setup': ['deploy', 'performance-optimization'],
    'backup-strategy': ['deploy', 'monitoring-setup'],
}


@dataclass
class Recommendation:
    """A titled group of suggestions."""
    type: str
    priority: str
    title: str
    description: str
    items: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        return {
            'type': self.type,
            'priority': self.priority,
            'title': self.title,
            'description': self.description,
            'items': list(self.items),
        }


def suggest_tasks_for_project_type(project_type: str) -> List[str]:
    return list(TASK_SUGGESTIONS.get(project_type, []))


def suggest_dependencies(slug: str) -> List[str]:
    """Known prerequisites for a work-item slug."""
    return list(DEPENDENCY_TEMPLATES.get(slug, []))


def suggest_task_dependencies(tasks: Sequence[Task]) -> List[str]:
    """
    Prerequisites a task probably needs but does not list.

    Task titles are matched against DEPENDENCY_TEMPLATES by slug
    ("Run tests" -> run-tests). A prerequisite that exists as a task is
    named with its id; one that does not is named by its slug.
    """
    by_slug = {slugify(t.title): t for t in tasks}
    suggestions = []

    for task in tasks:
        if task.status in (TaskStatus.COMPLETED, TaskStatus.CANCELLED):
            continue
        missing = []
        for slug in suggest_dependencies(slugify(task.title)):
            prerequisite = by_slug.get(slug)
            if prerequisite is None:
                missing.append(slug)
            elif prerequisite.id not in task.dependencies:
                missing.append(f"{prerequisite.title} ({prerequisite.id})")
        if missing:
            suggestions.append(f"'{task.title}' usually depends on: {', '.join(missing)}")

    return suggestions


def analyze_current_tasks(tasks: Sequence[Task], now: Optional[dt.datetime] = None) -> List[str]:
    recommendations = []

    overdue = [t for t in tasks if t.due_date and days_until_due(t.due_date, now) < 0]
    if overdue:
        recommendations.append(
            f"You have {len(overdue)} overdue tasks. Consider reprioritizing or adjusting deadlines."
        )

    without_deps = [t for t in tasks if not t.dependencies]
    if without_deps:
        recommendations.append(
            f"Consider adding dependencies to {len(without_deps)} tasks to better organize your workflow."
        )

    complex_tasks = [t for t in tasks if t.complexity == TaskComplexity.HIGH]
    if complex_tasks:
        recommendations.append(
            f"You have {len(complex_tasks)} high complexity tasks. "
            f"Consider breaking them down into smaller tasks."
        )

    return recommendations


def find_parallel_opportunities(tasks: Sequence[Task], limit: int = 3) -> List[str]:
    """Titles of tasks without dependencies, which can run side by side."""
    return [t.title for t in tasks if not t.dependencies][:limit]


def find_critical_path(tasks: Sequence[Task], limit: int = 3) -> List[str]:
    """Titles of the heaviest critical/high priority tasks."""
    urgent = [t for t in tasks if t.priority in (TaskPriority.CRITICAL, TaskPriority.HIGH)]
    urgent.sort(key=lambda t: priority_weight(t.priority), reverse=True)
    return [t.title for t in urgent[:limit]]


def suggest_timeline_optimizations(tasks: Sequence[Task]) -> List[str]:
    recommendations = []

    parallel = find_parallel_opportunities(tasks)
    if parallel:
        recommendations.append(f"Consider running these tasks in parallel: {', '.join(parallel)}")

    critical = find_critical_path(tasks)
    if critical:
        recommendations.append(f"Focus on critical path tasks: {', '.join(critical)}")

    return recommendations


def generate_recommendations(
    project_type: str,
    tasks: Sequence[Task] = (),
    now: Optional[dt.datetime] = None,
) -> List[Recommendation]:
    """
    Build recommendation groups for a project.

    The task-suggestion group is always present; the improvement, dependency
    and timeline groups only appear when they have something to say.
    """
    recommendations = [Recommendation(
        type='tasks',
        priority='high',
        title='Suggested Tasks for Project Type',
        description=f"Based on {project_type} project, consider these tasks:",
        items=suggest_tasks_for_project_type(project_type),
    )]

    improvements = analyze_current_tasks(tasks, now)
    if improvements:
        recommendations.append(Recommendation(
            type='improvements',
            priority='medium',
            title='Task Improvements',
            description='Suggestions to improve your current tasks:',
            items=improvements,
        ))

    dependencies = suggest_task_dependencies(tasks)
    if dependencies:
        recommendations.append(Recommendation(
            type='dependencies',
            priority='medium',
            title='Missing Dependencies',
            description='Tasks that usually wait for other work:',
            items=dependencies,
        ))

    timeline = suggest_timeline_optimizations(tasks)
    if timeline:
        recommendations.append(Recommendation(
            type='timeline',
            priority='medium',
            title='Timeline Optimizations',
            description='Ways to optimize your project timeline:',
            items=timeline,
        ))

    return recommendations
