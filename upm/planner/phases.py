"""Plan phase templates, timeline scheduling, risks and assumptions."""

import copy
import datetime as dt
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..core.plan import Phase, PhaseWindow, Plan, Risk, Timeline
from ..utils.helpers import parse_datetime


@dataclass
class ProjectSpec:
    """Input describing the project a plan is generated for."""

    name: str
    type: str = 'web'
    description: str = ''
    complexity: str = 'medium'
    team: List[str] = field(default_factory=list)
    budget: float = 0
    tools: List[str] = field(default_factory=list)
    technologies: List[Dict[str, str]] = field(default_factory=list)
    services: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ProjectSpec':
        return cls(
            name=data.get('name', ''),
            type=data.get('type') or 'web',
            description=data.get('description', ''),
            complexity=data.get('complexity', 'medium'),
            team=list(data.get('team', [])),
            budget=data.get('budget', 0),
            tools=list(data.get('tools', [])),
            technologies=list(data.get('technologies', [])),
            services=list(data.get('services', [])),
        )


COMMON_PHASES: List[Dict[str, Any]] = [
    {
        'name': 'Planning & Setup',
        'description': 'Project planning, environment setup, and initial configuration',
        'tasks': [
            'project-analysis',
            'requirements-gathering',
            'architecture-design',
            'environment-setup',
            'tool-configuration',
        ],
        'duration': 3,
        'priority': 'high',
    },
    {
        'name': 'Development',
        'description': 'Core development and implementation',
        'tasks': ['core-implementation', 'feature-development', 'integration', 'testing'],
        'duration': 14,
        'priority': 'high',
    },
    {
        'name': 'Testing & Quality',
        'description': 'Comprehensive testing and quality assurance',
        'tasks': [
            'unit-testing',
            'integration-testing',
            'user-testing',
            'performance-testing',
            'security-testing',
        ],
        'duration': 7,
        'priority': 'high',
    },
    {
        'name': 'Deployment & Launch',
        'description': 'Deployment, launch, and initial monitoring',
        'tasks': [
            'deployment-preparation',
            'production-deployment',
            'monitoring-setup',
            'launch-verification',
        ],
        'duration': 3,
        'priority': 'critical',
    },
]

TYPE_SPECIFIC_PHASES: Dict[str, List[Dict[str, Any]]] = {
    'web': [
        {
            'name': 'Frontend Development',
            'description': 'User interface and user experience development',
            'tasks': ['ui-design', 'frontend-implementation', 'responsive-design'],
            'duration': 10,
            'priority': 'high',
        },
        {
            'name': 'Backend Development',
            'description': 'Server-side logic and API development',
            'tasks': ['api-development', 'database-design', 'authentication'],
            'duration': 8,
            'priority': 'high',
        },
    ],
    'mobile': [
        {
            'name': 'Mobile Development',
            'description': 'Native or cross-platform mobile app development',
            'tasks': ['mobile-ui', 'platform-integration', 'device-testing'],
            'duration': 12,
            'priority': 'high',
        },
        {
            'name': 'App Store Preparation',
            'description': 'Prepare app for app store submission',
            'tasks': ['app-store-optimization', 'screenshots', 'metadata'],
            'duration': 2,
            'priority': 'medium',
        },
    ],
    'ai-ml': [
        {
            'name': 'Data Preparation',
            'description': 'Data collection, cleaning, and preprocessing',
            'tasks': ['data-collection', 'data-cleaning', 'feature-engineering'],
            'duration': 7,
            'priority': 'high',
        },
        {
            'name': 'Model Development',
            'description': 'Machine learning model development and training',
            'tasks': ['model-design', 'training', 'validation', 'optimization'],
            'duration': 10,
            'priority': 'high',
        },
        {
            'name': 'Model Deployment',
            'description': 'Deploy model to production environment',
            'tasks': ['model-serving', 'api-integration', 'monitoring'],
            'duration': 5,
            'priority': 'high',
        },
    ],
    'api': [
        {
            'name': 'API Development',
            'description': 'RESTful API development and documentation',
            'tasks': ['endpoint-development', 'authentication', 'rate-limiting'],
            'duration': 8,
            'priority': 'high',
        },
        {
            'name': 'API Testing',
            'description': 'Comprehensive API testing and validation',
            'tasks': ['unit-tests', 'integration-tests', 'load-tests'],
            'duration': 4,
            'priority': 'high',
        },
    ],
    'library': [
        {
            'name': 'Core Development',
            'description': 'Core library functionality development',
            'tasks': ['core-implementation', 'api-design', 'type-definitions'],
            'duration': 6,
            'priority': 'high',
        },
        {
            'name': 'Package Preparation',
            'description': 'Prepare package for distribution',
            'tasks': ['build-configuration', 'documentation', 'examples'],
            'duration': 3,
            'priority': 'medium',
        },
    ],
}

PROJECT_TYPES = tuple(TYPE_SPECIFIC_PHASES)

DOCUMENTATION_PHASE: Dict[str, Any] = {
    'name': 'Documentation',
    'description': 'Create comprehensive documentation',
    'tasks': ['api-documentation', 'user-guide', 'technical-docs'],
    'duration': 2,
    'priority': 'medium',
}

MAINTENANCE_PHASE: Dict[str, Any] = {
    'name': 'Maintenance & Support',
    'description': 'Ongoing maintenance and support',
    'tasks': ['bug-fixes', 'feature-updates', 'performance-optimization'],
    'duration': 30,
    'priority': 'low',
}

BASE_ASSUMPTIONS = [
    'Team members have the necessary skills and availability',
    'Required tools and technologies are available',
    'Stakeholder requirements are stable and well-defined',
    'External dependencies will be available as expected',
    'No major changes in project scope during development',
]

TYPE_ASSUMPTIONS: Dict[str, List[str]] = {
    'ai-ml': [
        'Data quality is sufficient for model training',
        'Computational resources are available for training',
    ],
    'mobile': [
        'Target devices and platforms are clearly defined',
        'App store approval process will be smooth',
    ],
}


def _build(templates: List[Dict[str, Any]]) -> List[Phase]:
    return [Phase.from_dict(copy.deepcopy(t)) for t in templates]


def get_type_specific_phases(project_type: str) -> List[Phase]:
    """Phases added for a project type; empty for unknown types."""
    return _build(TYPE_SPECIFIC_PHASES.get(project_type, []))


def generate_phases(
    project: ProjectSpec,
    include_documentation: bool = False,
    include_maintenance: bool = False,
) -> List[Phase]:
    """Common phases, then type-specific phases, then the requested optional ones."""
    phases = _build(COMMON_PHASES)
    phases.extend(get_type_specific_phases(project.type or 'web'))

    if include_documentation:
        phases.extend(_build([DOCUMENTATION_PHASE]))

    if include_maintenance:
        phases.extend(_build([MAINTENANCE_PHASE]))

    return phases


def calculate_timeline(phases: List[Phase], start: Optional[dt.datetime] = None) -> Timeline:
    """Lay phases end to end starting at `start`."""
    start_date = parse_datetime(start) if start is not None else dt.datetime.now()
    current = start_date
    windows = []
    total = 0

    for phase in phases:
        phase_end = current + dt.timedelta(days=phase.duration)
        windows.append(PhaseWindow(
            name=phase.name,
            start_date=current.isoformat(),
            end_date=phase_end.isoformat(),
            duration=phase.duration,
        ))
        current = phase_end
        total += phase.duration

    return Timeline(
        start_date=start_date.isoformat(),
        end_date=current.isoformat(),
        total_duration=total,
        phases=windows,
    )


def identify_external_dependencies(project: ProjectSpec) -> List[str]:
    """External technologies plus third-party services the project relies on."""
    dependencies = [
        tech.get('name', '')
        for tech in project.technologies
        if isinstance(tech, dict) and tech.get('type') == 'external'
    ]
    dependencies.extend(project.services)
    return dependencies


def identify_risks(project: ProjectSpec, plan: Plan) -> List[Risk]:
    risks = []

    if project.complexity == 'high':
        risks.append(Risk(
            type='technical',
            severity='high',
            description='High complexity may lead to technical challenges',
            mitigation='Break down complex tasks into smaller, manageable pieces',
            probability=0.7,
        ))

    if len(plan.resources.team) < 2:
        risks.append(Risk(
            type='resource',
            severity='medium',
            description='Limited team size may impact delivery timeline',
            mitigation='Consider additional resources or adjust timeline',
            probability=0.6,
        ))

    if plan.timeline.total_duration > 30:
        risks.append(Risk(
            type='timeline',
            severity='medium',
            description='Long project duration increases risk of scope creep',
            mitigation='Implement regular milestone reviews and scope control',
            probability=0.5,
        ))

    if identify_external_dependencies(project):
        risks.append(Risk(
            type='dependency',
            severity='medium',
            description='External dependencies may cause delays',
            mitigation='Identify backup solutions and maintain communication',
            probability=0.4,
        ))

    return risks


def generate_assumptions(project: ProjectSpec) -> List[str]:
    return list(BASE_ASSUMPTIONS) + list(TYPE_ASSUMPTIONS.get(project.type, []))
