"""Task management for the project manager."""

from dataclasses import dataclass, field, fields
from enum import Enum
from pathlib import Path
from typing import Optional, List, Dict, Any, Iterable, Union

from ..utils.helpers import load_json, save_json, get_timestamp, generate_id
from ..utils.logger import get_logger

logger = get_logger(__name__)


class TaskStatus(str, Enum):
    """Task status enumeration."""
    PENDING = 'pending'
    IN_PROGRESS = 'in_progress'
    COMPLETED = 'completed'
    BLOCKED = 'blocked'
    CANCELLED = 'cancelled'

    def __str__(self):
        return self.value


class TaskPriority(str, Enum):
    """Task priority enumeration."""
    CRITICAL = 'critical'
    HIGH = 'high'
    MEDIUM = 'medium'
    LOW = 'low'
    OPTIONAL = 'optional'

    def __str__(self):
        return self.value


class TaskComplexity(str, Enum):
    """Task complexity enumeration."""
    LOW = 'low'
    MEDIUM = 'medium'
    HIGH = 'high'

    def __str__(self):
        return self.value


# Python attribute -> JSON key
_JSON_KEYS = {
    'id': 'id',
    'title': 'title',
    'description': 'description',
    'priority': 'priority',
    'category': 'category',
    'estimated_hours': 'estimatedHours',
    'complexity': 'complexity',
    'dependencies': 'dependencies',
    'tags': 'tags',
    'assignee': 'assignee',
    'status': 'status',
    'created_at': 'createdAt',
    'updated_at': 'updatedAt',
    'due_date': 'dueDate',
    'actual_hours': 'actualHours',
    'progress': 'progress',
    'notes': 'notes',
}

_IMMUTABLE_FIELDS = {'id', 'created_at'}


@dataclass
class Task:
    """
    A unit of work with priority and dependency metadata.

    Stored as one JSON file per task:
        {
          "id": string,
          "title": string,
          "description": string,
          "priority": critical|high|medium|low|optional,
          "category": string,
          "estimatedHours": number,
          "complexity": low|medium|high,
          "dependencies": [task_id],
          "tags": [string],
          "assignee": string|null,
          "status": pending|in_progress|completed|blocked|cancelled,
          "createdAt": ISO-8601,
          "updatedAt": ISO-8601,
          "dueDate": ISO-8601|null,
          "actualHours": number,
          "progress": 0-100,
          "notes": [string]
        }
    """

    title: str
    id: str = field(default_factory=generate_id)
    description: str = ""
    priority: TaskPriority = TaskPriority.MEDIUM
    category: str = "general"
    estimated_hours: float = 1.0
    complexity: TaskComplexity = TaskComplexity.MEDIUM
    dependencies: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    assignee: Optional[str] = None
    status: TaskStatus = TaskStatus.PENDING
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    due_date: Optional[str] = None
    actual_hours: float = 0.0
    progress: int = 0
    notes: List[str] = field(default_factory=list)

    def __post_init__(self):
        """Initialize timestamps and coerce enum fields."""
        if self.created_at is None:
            self.created_at = get_timestamp()
        if self.updated_at is None:
            self.updated_at = self.created_at

        self.priority = TaskPriority(self.priority)
        self.status = TaskStatus(self.status)
        self.complexity = TaskComplexity(self.complexity)

    def to_dict(self) -> Dict[str, Any]:
        """Convert task to its JSON representation."""
        data = {}
        for attr, key in _JSON_KEYS.items():
            value = getattr(self, attr)
            if isinstance(value, Enum):
                value = value.value
            elif isinstance(value, list):
                value = list(value)
            data[key] = value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Task':
        """Create task from its JSON representation."""
        kwargs = {}
        for attr, key in _JSON_KEYS.items():
            if key in data and data[key] is not None:
                kwargs[attr] = data[key]
            elif attr in ('assignee', 'due_date') and key in data:
                kwargs[attr] = None
        if 'title' not in kwargs:
            kwargs['title'] = ''
        return cls(**kwargs)

    def update(self, **changes: Any) -> None:
        """Apply field updates, keeping enums and timestamps consistent."""
        valid = {f.name for f in fields(self)} - _IMMUTABLE_FIELDS
        unknown = set(changes) - valid
        if unknown:
            raise ValueError(f"Unknown task field(s): {', '.join(sorted(unknown))}")

        status = changes.pop('status', None)
        progress = changes.pop('progress', None)

        for name, value in changes.items():
            if name == 'priority':
                value = TaskPriority(value)
            elif name == 'complexity':
                value = TaskComplexity(value)
            setattr(self, name, value)

        if progress is not None:
            self.update_progress(int(progress))
        if status is not None:
            self.update_status(TaskStatus(status))

        self.updated_at = get_timestamp()
        logger.info(f"Task {self.id} updated: {', '.join(sorted(changes)) or 'status/progress'}")

    def update_status(self, new_status: Union[TaskStatus, str]) -> None:
        """Update task status; completing a task sets progress to 100."""
        self.status = TaskStatus(new_status)
        self.updated_at = get_timestamp()

        if self.status == TaskStatus.COMPLETED:
            self.progress = 100

        logger.info(f"Task {self.id} status updated to {self.status}")

    def update_progress(self, progress: int) -> None:
        """Update task progress (0-100)."""
        self.progress = max(0, min(100, progress))
        self.updated_at = get_timestamp()

        if self.progress == 100 and self.status != TaskStatus.COMPLETED:
            self.update_status(TaskStatus.COMPLETED)
        elif 0 < self.progress < 100 and self.status == TaskStatus.PENDING:
            self.status = TaskStatus.IN_PROGRESS

        logger.info(f"Task {self.id} progress updated to {self.progress}%")

    def add_dependency(self, task_id: str) -> None:
        """Add a task dependency (this task requires another)."""
        if task_id not in self.dependencies:
            self.dependencies.append(task_id)
            self.updated_at = get_timestamp()
            logger.info(f"Task {self.id} now requires {task_id}")

    def remove_dependency(self, task_id: str) -> None:
        """Remove a task dependency."""
        if task_id in self.dependencies:
            self.dependencies.remove(task_id)
            self.updated_at = get_timestamp()
            logger.info(f"Removed dependency {task_id} from task {self.id}")

    def is_ready(self, completed_tasks: Iterable[str]) -> bool:
        """Check if task is ready to execute based on dependencies."""
        if not self.dependencies:
            return True
        completed = set(completed_tasks)
        return all(dep in completed for dep in self.dependencies)

    def assign(self, assignee: str) -> None:
        """Assign task to someone."""
        self.assignee = assignee
        self.updated_at = get_timestamp()
        logger.info(f"Task {self.id} assigned to {assignee}")

    def add_note(self, note: str) -> None:
        """Append a note to the task."""
        self.notes.append(note)
        self.updated_at = get_timestamp()

    def save(self, file_path: Union[str, Path]) -> None:
        """Save task to JSON file."""
        save_json(self.to_dict(), file_path)
        logger.debug(f"Task {self.id} saved to {file_path}")

    @classmethod
    def load(cls, file_path: Union[str, Path]) -> 'Task':
        """Load task from JSON file."""
        data = load_json(file_path)
        task = cls.from_dict(data)
        logger.debug(f"Task {task.id} loaded from {file_path}")
        return task

    def __str__(self) -> str:
        """String representation of task."""
        return f"Task({self.id}: {self.title} [{self.status}])"
