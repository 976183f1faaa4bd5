"""Plan management for the project manager."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, List, Dict, Any, Union

from .task import TaskPriority
from ..utils.helpers import load_json, save_json, get_timestamp, generate_id
from ..utils.logger import get_logger

logger = get_logger(__name__)


class PlanStatus(str, Enum):
    """Plan status enumeration."""
    DRAFT = 'draft'
    ACTIVE = 'active'
    COMPLETED = 'completed'
    ARCHIVED = 'archived'

    def __str__(self):
        return self.value


@dataclass
class Phase:
    """A stage of a plan: a named block of work items with a duration in days."""

    name: str
    description: str = ""
    tasks: List[str] = field(default_factory=list)
    duration: int = 0
    priority: TaskPriority = TaskPriority.MEDIUM

    def __post_init__(self):
        self.priority = TaskPriority(self.priority)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'description': self.description,
            'tasks': list(self.tasks),
            'duration': self.duration,
            'priority': str(self.priority),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Phase':
        return cls(
            name=data.get('name', ''),
            description=data.get('description', ''),
            tasks=list(data.get('tasks', [])),
            duration=data.get('duration', 0),
            priority=data.get('priority', 'medium'),
        )


@dataclass
class PhaseWindow:
    """Scheduled start/end of a single phase."""

    name: str
    start_date: str
    end_date: str
    duration: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'startDate': self.start_date,
            'endDate': self.end_date,
            'duration': self.duration,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PhaseWindow':
        return cls(
            name=data.get('name', ''),
            start_date=data.get('startDate', ''),
            end_date=data.get('endDate', ''),
            duration=data.get('duration', 0),
        )


@dataclass
class Timeline:
    """Plan schedule: overall start/end plus one window per phase."""

    start_date: Optional[str] = None
    end_date: Optional[str] = None
    total_duration: int = 0
    phases: List[PhaseWindow] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'startDate': self.start_date,
            'endDate': self.end_date,
            'totalDuration': self.total_duration,
            'phases': [window.to_dict() for window in self.phases],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Timeline':
        return cls(
            start_date=data.get('startDate'),
            end_date=data.get('endDate'),
            total_duration=data.get('totalDuration', 0),
            phases=[PhaseWindow.from_dict(p) for p in data.get('phases', [])],
        )


@dataclass
class Risk:
    """An identified project risk."""

    type: str
    severity: str
    description: str
    mitigation: str
    probability: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.type,
            'severity': self.severity,
            'description': self.description,
            'mitigation': self.mitigation,
            'probability': self.probability,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Risk':
        return cls(
            type=data.get('type', ''),
            severity=data.get('severity', ''),
            description=data.get('description', ''),
            mitigation=data.get('mitigation', ''),
            probability=data.get('probability', 0.0),
        )


@dataclass
class Resources:
    """Team, budget and tooling available to a plan."""

    team: List[str] = field(default_factory=list)
    budget: float = 0
    tools: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {'team': list(self.team), 'budget': self.budget, 'tools': list(self.tools)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Resources':
        return cls(
            team=list(data.get('team', [])),
            budget=data.get('budget', 0),
            tools=list(data.get('tools', [])),
        )


@dataclass
class Plan:
    """
    A generated project schedule composed of phases.

    Stored as one JSON file per plan:
        {
          "id": string,
          "projectName": string,
          "projectType": string,
          "description": string,
          "status": draft|active|completed|archived,
          "createdAt": ISO-8601,
          "updatedAt": ISO-8601,
          "phases": [{name, description, tasks, duration, priority}],
          "timeline": {startDate, endDate, totalDuration, phases},
          "resources": {team, budget, tools},
          "risks": [{type, severity, description, mitigation, probability}],
          "assumptions": [string]
        }
    """

    project_name: str
    project_type: str = 'web'
    id: str = field(default_factory=generate_id)
    description: str = ""
    status: PlanStatus = PlanStatus.DRAFT
    phases: List[Phase] = field(default_factory=list)
    timeline: Timeline = field(default_factory=Timeline)
    resources: Resources = field(default_factory=Resources)
    risks: List[Risk] = field(default_factory=list)
    assumptions: List[str] = field(default_factory=list)
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def __post_init__(self):
        """Initialize timestamps if not set."""
        if self.created_at is None:
            self.created_at = get_timestamp()
        if self.updated_at is None:
            self.updated_at = self.created_at

        self.status = PlanStatus(self.status)

    @property
    def total_duration(self) -> int:
        """Sum of phase durations in days."""
        return sum(phase.duration for phase in self.phases)

    def to_dict(self) -> Dict[str, Any]:
        """Convert plan to its JSON representation."""
        return {
            'id': self.id,
            'projectName': self.project_name,
            'projectType': self.project_type,
            'description': self.description,
            'status': str(self.status),
            'createdAt': self.created_at,
            'updatedAt': self.updated_at,
            'phases': [phase.to_dict() for phase in self.phases],
            'timeline': self.timeline.to_dict(),
            'resources': self.resources.to_dict(),
            'risks': [risk.to_dict() for risk in self.risks],
            'assumptions': list(self.assumptions),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Plan':
        """Create plan from its JSON representation."""
        kwargs: Dict[str, Any] = {}
        if data.get('id'):
            kwargs['id'] = data['id']

        return cls(
            project_name=data.get('projectName', ''),
            project_type=data.get('projectType', 'web'),
            description=data.get('description', ''),
            status=data.get('status', 'draft'),
            phases=[Phase.from_dict(p) for p in data.get('phases', [])],
            timeline=Timeline.from_dict(data.get('timeline') or {}),
            resources=Resources.from_dict(data.get('resources') or {}),
            risks=[Risk.from_dict(r) for r in data.get('risks', [])],
            assumptions=list(data.get('assumptions', [])),
            created_at=data.get('createdAt'),
            updated_at=data.get('updatedAt'),
            **kwargs
        )

    def update(self, **changes: Any) -> None:
        """Apply updates to the editable plan fields."""
        editable = {'project_name', 'description', 'status', 'assumptions', 'resources'}
        unknown = set(changes) - editable
        if unknown:
            raise ValueError(f"Unknown or read-only plan field(s): {', '.join(sorted(unknown))}")

        for name, value in changes.items():
            if name == 'status':
                value = PlanStatus(value)
            elif name == 'resources' and isinstance(value, dict):
                value = Resources.from_dict(value)
            setattr(self, name, value)

        self.updated_at = get_timestamp()
        logger.info(f"Plan {self.id} updated: {', '.join(sorted(changes))}")

    def update_status(self, new_status: Union[PlanStatus, str]) -> None:
        """Update plan status."""
        self.status = PlanStatus(new_status)
        self.updated_at = get_timestamp()
        logger.info(f"Plan {self.id} status updated to {self.status}")

    def save(self, file_path: Union[str, Path]) -> None:
        """Save plan to JSON file."""
        save_json(self.to_dict(), file_path)
        logger.debug(f"Plan {self.id} saved to {file_path}")

    @classmethod
    def load(cls, file_path: Union[str, Path]) -> 'Plan':
        """Load plan from JSON file."""
        data = load_json(file_path)
        plan = cls.from_dict(data)
        logger.debug(f"Plan {plan.id} loaded from {file_path}")
        return plan

    def __str__(self) -> str:
        """String representation of plan."""
        return f"Plan({self.id}: {self.project_name} [{self.status}])"
