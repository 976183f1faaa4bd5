"""Unit tests for upm.planner.recommendations module."""
import datetime as dt

from upm.core.task import Task
from upm.planner.recommendations import (
    analyze_current_tasks,
    find_critical_path,
    find_parallel_opportunities,
    generate_recommendations,
    suggest_dependencies,
    suggest_task_dependencies,
    suggest_tasks_for_project_type,
)

NOW = dt.datetime(2024, 6, 1, 12, 0, 0)


class TestSuggestions:
    """Tests for template-based suggestions."""

    def test_tasks_for_type(self):
        """Known types have eight suggestions, unknown types none."""
        assert len(suggest_tasks_for_project_type('web')) == 8
        assert 'Design API architecture' in suggest_tasks_for_project_type('api')
        assert suggest_tasks_for_project_type('library') == []

    def test_dependencies(self):
        """Dependency templates are looked up by slug."""
        assert suggest_dependencies('deploy') == ['run-tests', 'build-application']
        assert suggest_dependencies('unknown') == []


class TestTaskAnalysis:
    """Tests for analysis of the current task list."""

    def test_overdue_independent_and_complex(self):
        """Each finding produces a message with its count."""
        tasks = [
            Task(title='Late', due_date='2024-05-01T00:00:00', dependencies=['x']),
            Task(title='Hard', complexity='high'),
        ]
        messages = analyze_current_tasks(tasks, NOW)
        assert messages[0].startswith('You have 1 overdue tasks')
        assert 'adding dependencies to 1 tasks' in messages[1]
        assert 'You have 1 high complexity tasks' in messages[2]

    def test_nothing_to_say(self):
        """A clean list yields no messages."""
        assert analyze_current_tasks([Task(title='ok', dependencies=['a'])], NOW) == []

    def test_parallel_and_critical_path(self):
        """Independent tasks run in parallel; critical before high."""
        tasks = [
            Task(title='A', priority='high'),
            Task(title='B', priority='critical', dependencies=['a']),
            Task(title='C'),
            Task(title='D'),
            Task(title='E'),
        ]
        assert find_parallel_opportunities(tasks) == ['A', 'C', 'D']
        assert find_critical_path(tasks) == ['B', 'A']


class TestGenerateRecommendations:
    """Tests for generate_recommendations."""

    def test_task_group_always_present(self):
        """With no tasks only the suggestion group is returned."""
        recs = generate_recommendations('mobile', [], NOW)
        assert [r.type for r in recs] == ['tasks']
        assert recs[0].description == 'Based on mobile project, consider these tasks:'

    def test_all_groups(self):
        """Improvements and timeline groups appear when relevant."""
        recs = generate_recommendations('web', [Task(title='A', priority='high')], NOW)
        assert [r.type for r in recs] == ['tasks', 'improvements', 'timeline']
        assert recs[2].items == [
            'Consider running these tasks in parallel: A',
            'Focus on critical path tasks: A',
        ]
        assert recs[1].to_dict()['priority'] == 'medium'

    def test_dependency_group(self):
        """Tasks matching a dependency template get a dependency group."""
        tests = Task(title='Run tests', id='t1')
        deploy = Task(title='Deploy', id='d1')
        recs = generate_recommendations('web', [tests, deploy], NOW)
        assert [r.type for r in recs] == ['tasks', 'improvements', 'dependencies', 'timeline']
        assert "'Deploy' usually depends on: Run tests (t1), build-application" in recs[2].items


class TestSuggestTaskDependencies:
    """Tests for suggest_task_dependencies."""

    def test_existing_dependency_not_repeated(self):
        """Prerequisites already listed are left out."""
        tests = Task(title='Run tests', id='t1')
        build = Task(title='Build application', id='b1')
        deploy = Task(title='Deploy', id='d1', dependencies=['t1'])
        assert suggest_task_dependencies([tests, build, deploy]) == [
            "'Run tests' usually depends on: setup-environment, write-tests",
            "'Deploy' usually depends on: Build application (b1)",
        ]

    def test_closed_and_unmatched_tasks_skipped(self):
        """Completed tasks and titles without a template give nothing."""
        done = Task(title='Deploy', id='d1', status='completed')
        other = Task(title='Write docs', id='w1')
        assert suggest_task_dependencies([done, other]) == []
