"""CLI commands implementation using click."""

import sys
from functools import wraps
from pathlib import Path

import click
import yaml

from .. import __version__
from ..core.config import Config
from ..core.task import TaskComplexity, TaskPriority, TaskStatus
from ..core.validator import Validator
from ..manifests import (
    LANGUAGES,
    PLATFORMS,
    RUNTIMES,
    PipelineOptions,
    generate_ci_pipeline,
    generate_cloudformation,
    generate_docker_compose,
    generate_dockerfile,
    generate_dockerignore,
    generate_kubernetes_manifests,
    load_deployment_config,
    write_manifests,
)
from ..planner.export import EXPORT_FORMATS
from ..planner.phases import PROJECT_TYPES
from ..planner.planner import Planner, project_from_options
from ..planner.scoring import ScoringCriteria
from ..utils.exceptions import UpmError
from ..utils.helpers import dump_yaml, dumps, parse_datetime
from ..utils.logger import level_for_flags, setup_logger
from .formatters import Formatter

PRIORITIES = [p.value for p in TaskPriority]
COMPLEXITIES = [c.value for c in TaskComplexity]
STATUSES = [s.value for s in TaskStatus]
PLAN_STATUSES = ['draft', 'active', 'completed', 'archived']

# Failures reported as a red line and exit status 1
REPORTED_ERRORS = (UpmError, ValueError, OSError)


def _parse_date(ctx, param, value):
    """click callback: validate an ISO date and normalise it."""
    if value is None:
        return None
    try:
        return parse_datetime(value).isoformat()
    except ValueError:
        raise click.BadParameter(f"'{value}' is not an ISO-8601 date")


def _require_workspace(ctx) -> None:
    config: Config = ctx.obj['config']
    formatter: Formatter = ctx.obj['formatter']
    if not config.workspace_exists():
        formatter.print_error("Workspace not initialized. Run 'upm init' first.")
        sys.exit(1)


def _reports_errors(action: str):
    """Print REPORTED_ERRORS through the formatter as 'Failed to <action>: ...' and exit 1."""
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            ctx = click.get_current_context()
            try:
                return func(*args, **kwargs)
            except REPORTED_ERRORS as e:
                ctx.obj['formatter'].print_error(f"Failed to {action}: {e}")
                sys.exit(1)
        return wrapper
    return decorator


# Global options
@click.group()
@click.version_option(version=__version__, prog_name='upm')
@click.option('-w', '--workspace', type=click.Path(file_okay=False), help='Workspace directory (default: .upm, env: UPM_WORKSPACE)')
@click.option('-v', '--verbose', is_flag=True, help='Verbose output')
@click.option('-q', '--quiet', is_flag=True, help='Quiet mode')
@click.option('--no-color', is_flag=True, help='Disable colored output')
@click.pass_context
def cli(ctx, workspace, verbose, quiet, no_color):
    """Universal Project Manager - tasks, plans and deployment manifests."""
    ctx.ensure_object(dict)

    cfg = Config.from_args(workspace_dir=workspace, verbose=verbose, quiet=quiet, no_color=no_color)
    ctx.obj['config'] = cfg
    ctx.obj['formatter'] = Formatter(no_color=no_color)
    ctx.obj['planner'] = Planner(cfg)

    ctx.obj['logger'] = setup_logger(
        log_dir=str(cfg.logs_path),
        level=level_for_flags(verbose, quiet),
        log_to_console=not quiet,
        log_to_file=cfg.workspace_exists(),
        no_color=no_color,
    )


# =====================
# init command
# =====================
@cli.command()
@click.pass_context
def init(ctx):
    """Initialize the workspace."""
    config: Config = ctx.obj['config']
    formatter: Formatter = ctx.obj['formatter']

    if config.workspace_exists():
        formatter.print_warning(f"Workspace already initialized at {config.workspace_path}")
        return

    try:
        config.init_workspace()
    except OSError as e:
        formatter.print_error(f"Failed to initialize workspace: {e}")
        sys.exit(1)

    formatter.print_success(f"Workspace initialized at {config.workspace_path}")
    formatter.print_info(f"Tasks directory: {config.tasks_path}")
    formatter.print_info(f"Plans directory: {config.plans_path}")
    formatter.print_info(f"Config file: {config.config_path}")


# =====================
# task commands
# =====================
@cli.group()
@click.pass_context
def task(ctx):
    """Manage tasks."""
    _require_workspace(ctx)


@task.command('create')
@click.argument('title')
@click.option('-d', '--description', default='', help='Task description')
@click.option('-p', '--priority', type=click.Choice(PRIORITIES), help='Task priority')
@click.option('-c', '--category', help='Task category')
@click.option('--hours', 'estimated_hours', type=float, default=1.0, show_default=True, help='Estimated hours')
@click.option('--complexity', type=click.Choice(COMPLEXITIES), help='Task complexity')
@click.option('--depends-on', 'dependencies', multiple=True, help='Id of a task this one requires (repeatable)')
@click.option('-t', '--tag', 'tags', multiple=True, help='Tag (repeatable)')
@click.option('-a', '--assignee', help='Assignee')
@click.option('--due', 'due_date', callback=_parse_date, help='Due date (ISO-8601)')
@click.pass_context
@_reports_errors('create task')
def task_create(ctx, title, description, priority, category, estimated_hours, complexity,
                dependencies, tags, assignee, due_date):
    """Create a new task."""
    planner: Planner = ctx.obj['planner']
    formatter: Formatter = ctx.obj['formatter']

    fields = {
        'description': description,
        'estimated_hours': estimated_hours,
        'dependencies': list(dependencies),
        'tags': list(tags),
        'assignee': assignee,
        'due_date': due_date,
    }
    if priority:
        fields['priority'] = priority
    if category:
        fields['category'] = category
    if complexity:
        fields['complexity'] = complexity

    for dep in dependencies:
        if planner.get_task(dep) is None:
            formatter.print_warning(f"Dependency {dep} does not exist yet")

    new_task = planner.create_task(title, **fields)
    formatter.print_success(f"Task '{new_task.title}' created ({new_task.id})")


@task.command('list')
@click.option('-s', '--status', type=click.Choice(STATUSES), help='Filter by status')
@click.option('-c', '--category', help='Filter by category')
@click.option('-a', '--assignee', help='Filter by assignee')
@click.pass_context
@_reports_errors('list tasks')
def task_list(ctx, status, category, assignee):
    """List tasks."""
    planner: Planner = ctx.obj['planner']
    formatter: Formatter = ctx.obj['formatter']

    formatter.print_task_list(planner.list_tasks(status=status, category=category, assignee=assignee))


@task.command('show')
@click.argument('task_id')
@click.pass_context
@_reports_errors('show task')
def task_show(ctx, task_id):
    """Show task details."""
    planner: Planner = ctx.obj['planner']
    formatter: Formatter = ctx.obj['formatter']

    t = planner.require_task(task_id)
    readiness = Validator.check_task_ready(t, planner.list_tasks())
    formatter.print_task_details(t, readiness)


@task.command('update')
@click.argument('task_id')
@click.option('--title', help='New title')
@click.option('-d', '--description', help='New description')
@click.option('-p', '--priority', type=click.Choice(PRIORITIES), help='New priority')
@click.option('-c', '--category', help='New category')
@click.option('--hours', 'estimated_hours', type=float, help='Estimated hours')
@click.option('--actual-hours', type=float, help='Hours spent so far')
@click.option('--complexity', type=click.Choice(COMPLEXITIES), help='New complexity')
@click.option('-s', '--status', type=click.Choice(STATUSES), help='New status')
@click.option('--progress', type=click.IntRange(0, 100), help='Progress percentage')
@click.option('-a', '--assignee', help='Assign to someone')
@click.option('--due', 'due_date', callback=_parse_date, help='Due date (ISO-8601)')
@click.option('--add-dependency', multiple=True, help='Add a required task id (repeatable)')
@click.option('--remove-dependency', multiple=True, help='Remove a required task id (repeatable)')
@click.option('--note', help='Append a note')
@click.pass_context
@_reports_errors('update task')
def task_update(ctx, task_id, add_dependency, remove_dependency, note, **options):
    """Update task fields."""
    planner: Planner = ctx.obj['planner']
    formatter: Formatter = ctx.obj['formatter']

    changes = {k: v for k, v in options.items() if v is not None}
    if not changes and not add_dependency and not remove_dependency and not note:
        formatter.print_info("No changes made")
        return

    t = planner.require_task(task_id)
    if changes:
        t.update(**changes)
    for dep in add_dependency:
        if dep == t.id:
            raise ValueError("a task cannot depend on itself")
        t.add_dependency(dep)
    for dep in remove_dependency:
        t.remove_dependency(dep)
    if note:
        t.add_note(note)

    planner.save_task(t)
    formatter.print_success(f"Task '{t.title}' updated")


@task.command('start')
@click.argument('task_id')
@click.option('--force', is_flag=True, help='Start even if dependencies are unfinished')
@click.pass_context
@_reports_errors('start task')
def task_start(ctx, task_id, force):
    """Start working on a task."""
    planner: Planner = ctx.obj['planner']
    formatter: Formatter = ctx.obj['formatter']

    t = planner.require_task(task_id)

    is_ready, reason = Validator.check_task_ready(t, planner.list_tasks())
    if not is_ready and not force:
        formatter.print_error(f"Task not ready: {reason}")
        sys.exit(1)

    t.update_status(TaskStatus.IN_PROGRESS)
    planner.save_task(t)
    formatter.print_success(f"Task '{t.title}' started")


@task.command('complete')
@click.argument('task_id')
@click.option('--actual-hours', type=float, help='Hours actually spent')
@click.pass_context
@_reports_errors('complete task')
def task_complete(ctx, task_id, actual_hours):
    """Mark task as completed."""
    planner: Planner = ctx.obj['planner']
    formatter: Formatter = ctx.obj['formatter']

    t = planner.require_task(task_id)
    if actual_hours is not None:
        t.actual_hours = actual_hours
    t.update_status(TaskStatus.COMPLETED)
    planner.save_task(t)
    formatter.print_success(f"Task '{t.title}' completed")

    unblocked = [
        other for other in planner.list_tasks()
        if t.id in other.dependencies and Validator.check_task_ready(other, planner.list_tasks())[0]
    ]
    for other in unblocked:
        formatter.print_info(f"Task '{other.title}' ({other.id}) is now ready")


@task.command('delete')
@click.argument('task_id')
@click.option('--yes', is_flag=True, help='Skip confirmation')
@click.pass_context
@_reports_errors('delete task')
def task_delete(ctx, task_id, yes):
    """Delete a task."""
    planner: Planner = ctx.obj['planner']
    formatter: Formatter = ctx.obj['formatter']

    t = planner.require_task(task_id)
    if not yes and not click.confirm(f"Delete task '{t.title}'?", default=False):
        formatter.print_info("Deletion cancelled")
        return

    planner.delete_task(task_id)
    formatter.print_success(f"Task '{t.title}' deleted")

    dependants = [other for other in planner.list_tasks() if task_id in other.dependencies]
    for other in dependants:
        formatter.print_warning(f"Task '{other.title}' ({other.id}) still depends on {task_id}")


# =====================
# plan commands
# =====================
@cli.group()
@click.pass_context
def plan(ctx):
    """Generate and manage project plans."""
    _require_workspace(ctx)


@plan.command('create')
@click.argument('project_name')
@click.option('-t', '--type', 'project_type', type=click.Choice(PROJECT_TYPES), default='web', show_default=True,
              help='Project type')
@click.option('-d', '--description', default='', help='Project description')
@click.option('--complexity', type=click.Choice(COMPLEXITIES), default='medium', show_default=True,
              help='Overall project complexity')
@click.option('--team', multiple=True, help='Team member (repeatable)')
@click.option('--budget', type=float, default=0, help='Budget')
@click.option('--tool', 'tools', multiple=True, help='Tool used by the team (repeatable)')
@click.option('--service', 'services', multiple=True, help='Third-party service the project relies on (repeatable)')
@click.option('--docs', 'include_documentation', is_flag=True, help='Add a documentation phase')
@click.option('--maintenance', 'include_maintenance', is_flag=True, help='Add a maintenance phase')
@click.option('--start', callback=_parse_date, help='Start date (ISO-8601, default: now)')
@click.pass_context
@_reports_errors('create plan')
def plan_create(ctx, project_name, project_type, description, complexity, team, budget, tools, services,
                include_documentation, include_maintenance, start):
    """Generate a plan from the project-type phase templates."""
    planner: Planner = ctx.obj['planner']
    formatter: Formatter = ctx.obj['formatter']

    project = project_from_options(
        name=project_name,
        project_type=project_type,
        description=description,
        complexity=complexity,
        team=list(team),
        budget=budget,
        tools=list(tools),
        services=list(services),
    )
    new_plan = planner.generate_plan(
        project,
        include_documentation=include_documentation,
        include_maintenance=include_maintenance,
        start=parse_datetime(start) if start else None,
    )

    formatter.print_success(f"Plan '{new_plan.project_name}' created ({new_plan.id})")
    formatter.print_plan_details(new_plan)


@plan.command('list')
@click.option('-s', '--status', type=click.Choice(PLAN_STATUSES), help='Filter by status')
@click.pass_context
@_reports_errors('list plans')
def plan_list(ctx, status):
    """List plans."""
    planner: Planner = ctx.obj['planner']
    formatter: Formatter = ctx.obj['formatter']

    formatter.print_plan_list(planner.list_plans(status=status))


@plan.command('show')
@click.argument('plan_id')
@click.pass_context
@_reports_errors('show plan')
def plan_show(ctx, plan_id):
    """Show plan details."""
    planner: Planner = ctx.obj['planner']
    formatter: Formatter = ctx.obj['formatter']

    formatter.print_plan_details(planner.require_plan(plan_id))


@plan.command('update')
@click.argument('plan_id')
@click.option('--name', 'project_name', help='New project name')
@click.option('-d', '--description', help='New description')
@click.option('-s', '--status', type=click.Choice(PLAN_STATUSES), help='New status')
@click.option('--assumption', 'assumptions', multiple=True, help='Replace assumptions (repeatable)')
@click.pass_context
@_reports_errors('update plan')
def plan_update(ctx, plan_id, project_name, description, status, assumptions):
    """Update plan fields."""
    planner: Planner = ctx.obj['planner']
    formatter: Formatter = ctx.obj['formatter']

    changes = {'project_name': project_name, 'description': description, 'status': status}
    changes = {k: v for k, v in changes.items() if v is not None}
    if assumptions:
        changes['assumptions'] = list(assumptions)

    if not changes:
        formatter.print_info("No changes made")
        return

    updated = planner.update_plan(plan_id, **changes)
    formatter.print_success(f"Plan '{updated.project_name}' updated")


@plan.command('export')
@click.argument('plan_id')
@click.option('-f', '--format', 'fmt', type=click.Choice(EXPORT_FORMATS), default='markdown', show_default=True,
              help='Export format')
@click.option('-o', '--output', type=click.Path(dir_okay=False), help='Write to file instead of stdout')
@click.pass_context
@_reports_errors('export plan')
def plan_export(ctx, plan_id, fmt, output):
    """Export a plan as JSON, Markdown or CSV."""
    planner: Planner = ctx.obj['planner']
    formatter: Formatter = ctx.obj['formatter']

    content = planner.export_plan(plan_id, fmt)
    if output:
        path = Path(output)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding='utf-8')
        formatter.print_success(f"Plan exported to {path}")
    else:
        click.echo(content)


@plan.command('delete')
@click.argument('plan_id')
@click.option('--yes', is_flag=True, help='Skip confirmation')
@click.pass_context
@_reports_errors('delete plan')
def plan_delete(ctx, plan_id, yes):
    """Delete a plan."""
    planner: Planner = ctx.obj['planner']
    formatter: Formatter = ctx.obj['formatter']

    p = planner.require_plan(plan_id)
    if not yes and not click.confirm(f"Delete plan '{p.project_name}'?", default=False):
        formatter.print_info("Deletion cancelled")
        return

    planner.delete_plan(plan_id)
    formatter.print_success(f"Plan '{p.project_name}' deleted")


# =====================
# analysis commands
# =====================
@cli.command()
@click.option('-c', '--category', help='Boost tasks in this category')
@click.option('-a', '--assignee', help='Boost tasks assigned to this person')
@click.option('-n', '--limit', type=click.IntRange(min=1), help='Show only the top N tasks')
@click.option('--all', 'include_closed', is_flag=True, help='Include completed and cancelled tasks')
@click.option('--json', 'as_json', is_flag=True, help='Print JSON instead of a table')
@click.pass_context
@_reports_errors('prioritize tasks')
def prioritize(ctx, category, assignee, limit, include_closed, as_json):
    """Rank tasks by priority score."""
    _require_workspace(ctx)
    planner: Planner = ctx.obj['planner']
    formatter: Formatter = ctx.obj['formatter']

    scored = planner.prioritize(ScoringCriteria(category=category, assignee=assignee), include_closed=include_closed)
    if limit:
        scored = scored[:limit]

    if as_json:
        click.echo(dumps([item.to_dict() for item in scored], indent=2))
    else:
        formatter.print_scored_tasks(scored)


@cli.command()
@click.option('-t', '--type', 'project_type', type=click.Choice(PROJECT_TYPES), default='web', show_default=True,
              help='Project type')
@click.pass_context
@_reports_errors('generate recommendations')
def recommend(ctx, project_type):
    """Suggest tasks and improvements for a project type."""
    _require_workspace(ctx)
    planner: Planner = ctx.obj['planner']
    formatter: Formatter = ctx.obj['formatter']

    formatter.print_recommendations(planner.recommend(project_type))


@cli.command()
@click.option('--plan', 'plan_id', help='Also validate this plan')
@click.pass_context
@_reports_errors('validate')
def validate(ctx, plan_id):
    """Validate tasks (and optionally a plan); exits 1 on errors."""
    _require_workspace(ctx)
    planner: Planner = ctx.obj['planner']
    formatter: Formatter = ctx.obj['formatter']

    tasks = planner.list_tasks()
    formatter.print_header(f"Validating {len(tasks)} task(s)")
    result = Validator.validate_tasks(tasks)

    if plan_id:
        p = planner.require_plan(plan_id)
        formatter.print_header(f"Validating plan: {p.project_name}")
        result = result.merge(Validator.validate_plan(p))

    formatter.print_validation_result(result)
    formatter.print_blocked_tasks(Validator.find_blocked_tasks(tasks))

    next_tasks = Validator.suggest_next_tasks(tasks)
    if next_tasks:
        formatter.print_header("Suggested next tasks")
        formatter.print_task_list(next_tasks[:5], title="Ready")

    if result.has_errors():
        sys.exit(1)


# =====================
# generate commands
# =====================
def _output_options(func):
    """Options shared by all generate subcommands."""
    func = click.option('--force', is_flag=True, help='Overwrite existing files')(func)
    func = click.option('-o', '--output', type=click.Path(file_okay=False),
                        help='Output directory (default: <workspace>/output)')(func)
    func = click.option('--services', 'services_file', type=click.Path(dir_okay=False),
                        help='YAML file describing the services')(func)
    return func


def _write(ctx, manifests, output, force):
    config: Config = ctx.obj['config']
    formatter: Formatter = ctx.obj['formatter']

    out_dir = Path(output) if output else config.output_path
    formatter.print_written_files(write_manifests(manifests, out_dir, overwrite=force))


def _pipeline_options(config: Config, language, language_version, branch, deploy, image) -> PipelineOptions:
    return PipelineOptions(
        project_name=config.get('deployment.project_name', 'upm'),
        language=language,
        version=language_version or '',
        branch=branch,
        docker_image=image,
        deploy=deploy,
        registry=config.get('deployment.registry', ''),
    )


@cli.group()
def generate():
    """Generate deployment manifests and CI pipelines."""


@generate.command('kubernetes')
@_output_options
@click.option('--single-file', is_flag=True, help='Write one multi-document all.yaml')
@click.pass_context
@_reports_errors('generate Kubernetes manifests')
def generate_kubernetes(ctx, services_file, output, force, single_file):
    """Kubernetes namespace, config, deployments, services and autoscalers."""
    deploy = load_deployment_config(services_file, ctx.obj['config'])
    _write(ctx, generate_kubernetes_manifests(deploy, single_file=single_file), output, force)


@generate.command('compose')
@_output_options
@click.pass_context
@_reports_errors('generate docker-compose.yml')
def generate_compose(ctx, services_file, output, force):
    """docker-compose.yml for local runs."""
    deploy = load_deployment_config(services_file, ctx.obj['config'])
    _write(ctx, [generate_docker_compose(deploy)], output, force)


@generate.command('dockerfile')
@_output_options
@click.option('-r', '--runtime', type=click.Choice(RUNTIMES), default='node', show_default=True, help='Runtime')
@click.option('--runtime-version', default='', help='Base image version')
@click.option('--service', 'service_name', help='Take port and health path from this service')
@click.option('-p', '--port', type=int, help='Exposed port (default 8080)')
@click.pass_context
@_reports_errors('generate Dockerfile')
def generate_dockerfile_cmd(ctx, services_file, output, force, runtime, runtime_version, service_name, port):
    """Dockerfile and .dockerignore for one service."""
    config: Config = ctx.obj['config']
    name = config.get('deployment.project_name', 'app')
    health_path = '/health'

    if service_name:
        deploy = load_deployment_config(services_file, config)
        service = deploy.get_service(service_name)
        if service is None:
            raise UpmError(f"Service '{service_name}' is not defined")
        name = service.name
        port = port or service.port
        health_path = service.health_path or health_path

    manifests = [
        generate_dockerfile(runtime, port=port or 8080, project_name=name,
                            version=runtime_version, health_path=health_path),
        generate_dockerignore(runtime),
    ]
    _write(ctx, manifests, output, force)


@generate.command('cloudformation')
@_output_options
@click.pass_context
@_reports_errors('generate CloudFormation template')
def generate_cloudformation_cmd(ctx, services_file, output, force):
    """CloudFormation template for ECS on Fargate."""
    deploy = load_deployment_config(services_file, ctx.obj['config'])
    _write(ctx, [generate_cloudformation(deploy)], output, force)


@generate.command('ci')
@_output_options
@click.option('--platform', type=click.Choice(PLATFORMS + ('all',)), default='github', show_default=True,
              help='CI platform')
@click.option('-l', '--language', type=click.Choice(LANGUAGES), default='node', show_default=True, help='Language')
@click.option('--language-version', default='', help='Toolchain version')
@click.option('-b', '--branch', default='main', show_default=True, help='Main branch')
@click.option('--deploy', is_flag=True, help='Add a docker build-and-push stage')
@click.option('--image', help='Image name for the docker stage')
@click.pass_context
@_reports_errors('generate CI pipeline')
def generate_ci(ctx, services_file, output, force, platform, language, language_version, branch, deploy, image):
    """CI pipeline for GitHub, Azure, GitLab, CircleCI, Travis or Jenkins."""
    options = _pipeline_options(ctx.obj['config'], language, language_version, branch, deploy, image)
    platforms = PLATFORMS if platform == 'all' else (platform,)
    _write(ctx, [generate_ci_pipeline(p, options) for p in platforms], output, force)


@generate.command('all')
@_output_options
@click.option('-r', '--runtime', type=click.Choice(RUNTIMES), default='node', show_default=True,
              help='Dockerfile runtime')
@click.option('--platform', type=click.Choice(PLATFORMS), default='github', show_default=True, help='CI platform')
@click.pass_context
@_reports_errors('generate manifests')
def generate_all(ctx, services_file, output, force, runtime, platform):
    """Every manifest: Kubernetes, Compose, CloudFormation, Dockerfile and CI."""
    config: Config = ctx.obj['config']
    deploy = load_deployment_config(services_file, config)

    manifests = generate_kubernetes_manifests(deploy)
    manifests.append(generate_docker_compose(deploy))
    manifests.append(generate_cloudformation(deploy))
    manifests.append(generate_dockerfile(runtime, project_name=deploy.project_name))
    manifests.append(generate_dockerignore(runtime))
    manifests.append(generate_ci_pipeline(
        platform, _pipeline_options(config, runtime, '', 'main', True, None)
    ))
    _write(ctx, manifests, output, force)


# =====================
# config commands
# =====================
@cli.group('config')
@click.pass_context
def config_group(ctx):
    """Read and change workspace settings."""
    _require_workspace(ctx)


@config_group.command('get')
@click.argument('key')
@click.pass_context
@_reports_errors('read setting')
def config_get(ctx, key):
    """Print a setting by dot path (e.g. deployment.namespace)."""
    config: Config = ctx.obj['config']
    formatter: Formatter = ctx.obj['formatter']

    missing = object()
    value = config.get(key, missing)
    if value is missing:
        formatter.print_error(f"Setting '{key}' not found")
        sys.exit(1)

    if isinstance(value, (dict, list)):
        click.echo(dump_yaml(value), nl=False)
    else:
        click.echo(value)


@config_group.command('set')
@click.argument('key')
@click.argument('value')
@click.pass_context
@_reports_errors('update setting')
def config_set(ctx, key, value):
    """Set a setting; VALUE is parsed as YAML (numbers, booleans, lists)."""
    config: Config = ctx.obj['config']
    formatter: Formatter = ctx.obj['formatter']

    try:
        parsed = yaml.safe_load(value)
    except yaml.YAMLError:
        parsed = value
    config.set(key, parsed)
    formatter.print_success(f"{key} = {parsed!r}")


if __name__ == '__main__':
    cli()
