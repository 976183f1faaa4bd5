"""Unit tests for upm.planner.export module."""
import csv
import io
import json

import pytest

from upm.core.plan import Phase, Plan, Risk, Timeline
from upm.planner.export import export_plan, plan_to_csv, plan_to_markdown


@pytest.fixture
def plan() -> Plan:
    return Plan(
        project_name='Shop',
        project_type='web',
        description='Online store',
        phases=[
            Phase(name='Build, test', description='Write "code"', tasks=['api', 'ui'], duration=5, priority='high'),
            Phase(name='Ship', description='Release', tasks=[], duration=2, priority='critical'),
        ],
        timeline=Timeline(start_date='2024-06-01T09:00:00', end_date='2024-06-08T09:00:00', total_duration=7),
        risks=[Risk(type='resource', severity='medium', description='Small team',
                    mitigation='Hire', probability=0.6)],
        assumptions=['Stable scope'],
    )


class TestExportPlan:
    """Tests for plan export formats."""

    def test_json(self, plan):
        """JSON export is the stored representation."""
        assert json.loads(export_plan(plan, 'json')) == plan.to_dict()

    def test_markdown(self, plan):
        """Markdown has header, timeline, numbered phases, risks and assumptions."""
        text = plan_to_markdown(plan)
        assert text.startswith('# Shop\n')
        assert '**Project Type:** web' in text
        assert '**Duration:** 7 days' in text
        assert '- **Start Date:** 2024-06-01' in text
        assert '### 1. Build, test' in text
        assert '### 2. Ship' in text
        assert '- api' in text
        assert '**Probability:** 60%' in text
        assert '- Stable scope' in text

    def test_csv(self, plan):
        """CSV has a header and one quoted row per phase."""
        text = plan_to_csv(plan)
        lines = text.splitlines()
        assert lines[0] == 'Phase,Description,Duration,Priority'
        assert lines[1] == '"Build, test","Write ""code""",5,"high"'
        rows = list(csv.reader(io.StringIO(text)))
        assert rows[2] == ['Ship', 'Release', '2', 'critical']

    def test_unsupported_format(self, plan):
        """Unknown formats raise ValueError."""
        with pytest.raises(ValueError, match='Unsupported format: pdf'):
            export_plan(plan, 'pdf')
