"""Unit tests for upm.core.plan module."""
import pytest

from upm.core.plan import Phase, Plan, PlanStatus, Resources, Risk, Timeline
from upm.core.task import TaskPriority


def make_plan() -> Plan:
    return Plan(
        project_name='Shop',
        project_type='web',
        phases=[
            Phase(name='Build', description='Code', tasks=['api'], duration=5, priority='high'),
            Phase(name='Ship', tasks=['deploy'], duration=2),
        ],
        timeline=Timeline(start_date='2024-06-01T00:00:00', end_date='2024-06-08T00:00:00', total_duration=7),
        risks=[Risk(type='resource', severity='medium', description='Small team', mitigation='Hire', probability=0.6)],
        resources=Resources(team=['ana'], budget=1000),
        assumptions=['Stable scope'],
    )


class TestPlanModel:
    """Tests for the Plan dataclass."""

    def test_defaults(self):
        """New plans are drafts with an id."""
        plan = Plan(project_name='X')
        assert plan.status == PlanStatus.DRAFT
        assert plan.project_type == 'web'
        assert plan.phases == []
        assert len(plan.id) == 12

    def test_total_duration(self):
        """total_duration sums phase durations."""
        assert make_plan().total_duration == 7

    def test_phase_priority_coerced(self):
        """Phase priority strings become TaskPriority."""
        assert make_plan().phases[0].priority is TaskPriority.HIGH

    def test_to_dict_keys(self):
        """JSON keys are camelCase."""
        data = make_plan().to_dict()
        assert data['projectName'] == 'Shop'
        assert data['projectType'] == 'web'
        assert data['timeline']['totalDuration'] == 7
        assert data['phases'][0] == {
            'name': 'Build', 'description': 'Code', 'tasks': ['api'], 'duration': 5, 'priority': 'high',
        }
        assert data['risks'][0]['probability'] == 0.6

    def test_from_dict_round_trip(self):
        """from_dict(to_dict()) reproduces the plan."""
        plan = make_plan()
        assert Plan.from_dict(plan.to_dict()).to_dict() == plan.to_dict()

    def test_save_and_load(self, tmp_path):
        """Plans persist as JSON files."""
        plan = make_plan()
        path = tmp_path / f'{plan.id}.json'
        plan.save(path)
        loaded = Plan.load(path)
        assert loaded.id == plan.id
        assert loaded.resources.team == ['ana']


class TestPlanUpdates:
    """Tests for plan updates."""

    def test_update_editable_fields(self):
        """Name, description, status and resources are editable."""
        plan = make_plan()
        plan.update(project_name='Store', status='active', resources={'team': ['a', 'b']})
        assert plan.project_name == 'Store'
        assert plan.status == PlanStatus.ACTIVE
        assert plan.resources.team == ['a', 'b']

    def test_update_rejects_phases(self):
        """Generated fields cannot be edited."""
        with pytest.raises(ValueError):
            make_plan().update(phases=[])

    def test_update_status(self):
        """update_status accepts strings."""
        plan = make_plan()
        plan.update_status('archived')
        assert plan.status == PlanStatus.ARCHIVED
