"""Unit tests for upm.planner.phases module."""
import datetime as dt

from upm.core.plan import Plan, Resources
from upm.planner.phases import (
    COMMON_PHASES,
    PROJECT_TYPES,
    ProjectSpec,
    calculate_timeline,
    generate_assumptions,
    generate_phases,
    identify_external_dependencies,
    identify_risks,
)

START = dt.datetime(2024, 6, 1)


class TestGeneratePhases:
    """Tests for phase templates."""

    def test_project_types(self):
        """All template types are offered."""
        assert set(PROJECT_TYPES) == {'web', 'mobile', 'ai-ml', 'api', 'library'}

    def test_web_phases(self):
        """Web plans get the common phases plus frontend and backend."""
        names = [p.name for p in generate_phases(ProjectSpec(name='Shop', type='web'))]
        assert names == [
            'Planning & Setup',
            'Development',
            'Testing & Quality',
            'Deployment & Launch',
            'Frontend Development',
            'Backend Development',
        ]

    def test_unknown_type_only_common(self):
        """Unknown types fall back to the common phases."""
        phases = generate_phases(ProjectSpec(name='X', type='desktop'))
        assert len(phases) == len(COMMON_PHASES)

    def test_optional_phases(self):
        """Documentation and maintenance phases are appended on request."""
        phases = generate_phases(ProjectSpec(name='X', type='api'), True, True)
        assert [p.name for p in phases[-2:]] == ['Documentation', 'Maintenance & Support']
        assert phases[-1].duration == 30

    def test_templates_are_copied(self):
        """Mutating a generated phase leaves the templates intact."""
        phases = generate_phases(ProjectSpec(name='X'))
        phases[0].tasks.append('extra')
        assert 'extra' not in COMMON_PHASES[0]['tasks']


class TestTimeline:
    """Tests for calculate_timeline."""

    def test_phases_run_end_to_end(self):
        """Each phase starts where the previous ended."""
        phases = generate_phases(ProjectSpec(name='Shop', type='web'))
        timeline = calculate_timeline(phases, START)

        assert timeline.total_duration == 45
        assert timeline.start_date == '2024-06-01T00:00:00'
        assert timeline.end_date == '2024-07-16T00:00:00'
        assert timeline.phases[0].end_date == timeline.phases[1].start_date
        assert timeline.phases[0].end_date == '2024-06-04T00:00:00'

    def test_empty_phases(self):
        """No phases means a zero-length timeline."""
        timeline = calculate_timeline([], START)
        assert timeline.total_duration == 0
        assert timeline.start_date == timeline.end_date


class TestRisksAndAssumptions:
    """Tests for risk and assumption generation."""

    def _plan(self, team, duration_phases):
        plan = Plan(project_name='X', resources=Resources(team=team))
        plan.timeline = calculate_timeline(duration_phases, START)
        return plan

    def test_small_team_and_long_timeline(self):
        """A one-person, 45-day web project has resource and timeline risks."""
        project = ProjectSpec(name='Shop', type='web', team=['ana'])
        plan = self._plan(['ana'], generate_phases(project))
        risks = identify_risks(project, plan)
        assert [r.type for r in risks] == ['resource', 'timeline']
        assert [r.probability for r in risks] == [0.6, 0.5]

    def test_complexity_and_external_dependencies(self):
        """High complexity and external services add risks."""
        project = ProjectSpec(
            name='X', type='api', complexity='high',
            technologies=[{'name': 'Stripe', 'type': 'external'}, {'name': 'Flask', 'type': 'internal'}],
        )
        plan = self._plan(['a', 'b'], [])
        risks = identify_risks(project, plan)
        assert [r.type for r in risks] == ['technical', 'dependency']
        assert identify_external_dependencies(project) == ['Stripe']

    def test_assumptions_by_type(self):
        """Type-specific assumptions follow the base list."""
        base = generate_assumptions(ProjectSpec(name='X', type='web'))
        ml = generate_assumptions(ProjectSpec(name='X', type='ai-ml'))
        assert len(base) == 5
        assert ml[:5] == base
        assert 'Data quality is sufficient for model training' in ml
