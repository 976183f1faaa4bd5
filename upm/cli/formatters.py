"""Output formatters for CLI with rich formatting."""

from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..core.plan import Plan
from ..core.task import Task
from ..core.validator import ValidationResult
from ..planner.recommendations import Recommendation
from ..planner.scoring import ScoredTask
from ..utils.helpers import parse_datetime, truncate_text


def _date(value: Optional[str]) -> str:
    if not value:
        return "N/A"
    return parse_datetime(value).date().isoformat()


class Formatter:
    """Output formatter for CLI."""

    STATUS_COLORS = {
        'draft': 'white',
        'pending': 'yellow',
        'active': 'cyan',
        'in_progress': 'magenta',
        'completed': 'green',
        'blocked': 'red',
        'cancelled': 'dim',
        'archived': 'dim',
    }

    PRIORITY_COLORS = {
        'critical': 'bold red',
        'high': 'red',
        'medium': 'yellow',
        'low': 'green',
        'optional': 'dim',
    }

    def __init__(self, no_color: bool = False):
        self.no_color = no_color
        self.console = Console(no_color=no_color, highlight=False)

    def print(self, text: str, style: Optional[str] = None) -> None:
        self.console.print(text, style=style)

    def print_success(self, message: str) -> None:
        self.console.print(f"✓ {escape(message)}", style="bold green")

    def print_error(self, message: str) -> None:
        self.console.print(f"✗ {escape(message)}", style="bold red")

    def print_warning(self, message: str) -> None:
        self.console.print(f"⚠ {escape(message)}", style="bold yellow")

    def print_info(self, message: str) -> None:
        self.console.print(f"ℹ {escape(message)}", style="blue")

    def print_header(self, title: str) -> None:
        """Print section header."""
        self.console.print(f"\n[bold cyan]{escape(title)}[/bold cyan]")
        self.console.print("─" * len(title))

    def format_status(self, status: str) -> str:
        color = self.STATUS_COLORS.get(status, 'white')
        return f"[{color}]{status.upper()}[/{color}]"

    def format_priority(self, priority: str) -> str:
        color = self.PRIORITY_COLORS.get(priority, 'white')
        return f"[{color}]{priority.upper()}[/{color}]"

    # =====================
    # Tasks
    # =====================
    def print_task_list(self, tasks: Sequence[Task], title: str = "Tasks") -> None:
        """Print list of tasks in table format."""
        if not tasks:
            self.print_info("No tasks found")
            return

        table = Table(title=title, box=box.ROUNDED, show_lines=False)
        table.add_column("ID", style="cyan", no_wrap=True)
        table.add_column("Title", style="white")
        table.add_column("Status", justify="center")
        table.add_column("Priority", justify="center")
        table.add_column("Progress", justify="center")
        table.add_column("Category", style="dim")
        table.add_column("Assignee", style="dim")

        for task in tasks:
            table.add_row(
                task.id,
                escape(truncate_text(task.title, 40)),
                self.format_status(str(task.status)),
                self.format_priority(str(task.priority)),
                f"{task.progress}%",
                escape(task.category),
                escape(task.assignee or "-"),
            )

        self.console.print(table)

    def print_task_details(self, task: Task, readiness: Optional[Tuple[bool, Optional[str]]] = None) -> None:
        """Print detailed task information."""
        self.console.print(Panel(
            f"[bold cyan]{escape(task.title)}[/bold cyan]\n"
            f"[dim]ID: {task.id}[/dim]",
            title="Task Details",
            border_style="cyan"
        ))

        table = Table(box=box.SIMPLE, show_header=False)
        table.add_column("Field", style="bold")
        table.add_column("Value")

        table.add_row("Status", self.format_status(str(task.status)))
        table.add_row("Priority", self.format_priority(str(task.priority)))
        table.add_row("Complexity", str(task.complexity))
        table.add_row("Category", escape(task.category))
        table.add_row("Progress", f"{task.progress}%")
        table.add_row("Estimated Hours", str(task.estimated_hours))
        if task.actual_hours:
            table.add_row("Actual Hours", str(task.actual_hours))
        if task.assignee:
            table.add_row("Assignee", escape(task.assignee))
        if task.due_date:
            table.add_row("Due", _date(task.due_date))
        if task.tags:
            table.add_row("Tags", escape(", ".join(task.tags)))
        table.add_row("Created", task.created_at or "N/A")
        if readiness is not None:
            ready, reason = readiness
            table.add_row("Ready", "[green]yes[/green]" if ready else f"[yellow]no[/yellow] ({escape(reason or '')})")

        self.console.print(table)

        if task.description:
            self.print_header("Description")
            self.console.print(escape(task.description))

        if task.dependencies:
            self.print_header("Dependencies")
            for dep in task.dependencies:
                self.console.print(f"  • {escape(dep)}")

        if task.notes:
            self.print_header("Notes")
            for note in task.notes:
                self.console.print(f"  • {escape(note)}")

    def print_scored_tasks(self, scored: Sequence[ScoredTask]) -> None:
        """Print tasks ranked by priority score."""
        if not scored:
            self.print_info("No open tasks to prioritize")
            return

        table = Table(title="Prioritized Tasks", box=box.ROUNDED)
        table.add_column("#", justify="right", style="dim")
        table.add_column("ID", style="cyan", no_wrap=True)
        table.add_column("Title")
        table.add_column("Score", justify="right", style="bold")
        table.add_column("Calculated", justify="center")
        table.add_column("Declared", justify="center")
        table.add_column("Due", style="dim")

        for rank, item in enumerate(scored, 1):
            table.add_row(
                str(rank),
                item.task.id,
                escape(truncate_text(item.task.title, 40)),
                str(item.score),
                self.format_priority(str(item.calculated_priority)),
                self.format_priority(str(item.task.priority)),
                _date(item.task.due_date) if item.task.due_date else "-",
            )

        self.console.print(table)

    # =====================
    # Plans
    # =====================
    def print_plan_list(self, plans: Sequence[Plan]) -> None:
        """Print list of plans in table format."""
        if not plans:
            self.print_info("No plans found")
            return

        table = Table(title="Plans", box=box.ROUNDED, show_lines=False)
        table.add_column("ID", style="cyan", no_wrap=True)
        table.add_column("Project", style="white")
        table.add_column("Type", justify="center")
        table.add_column("Status", justify="center")
        table.add_column("Phases", justify="right")
        table.add_column("Days", justify="right")
        table.add_column("Start", style="dim")

        for plan in plans:
            table.add_row(
                plan.id,
                escape(truncate_text(plan.project_name, 40)),
                plan.project_type,
                self.format_status(str(plan.status)),
                str(len(plan.phases)),
                str(plan.timeline.total_duration),
                _date(plan.timeline.start_date),
            )

        self.console.print(table)

    def print_plan_details(self, plan: Plan) -> None:
        """Print detailed plan information."""
        body = f"[bold cyan]{escape(plan.project_name)}[/bold cyan]\n[dim]ID: {plan.id}[/dim]"
        if plan.description:
            body += f"\n{escape(plan.description)}"
        self.console.print(Panel(body, title="Plan Details", border_style="cyan"))

        table = Table(box=box.SIMPLE, show_header=False)
        table.add_column("Field", style="bold")
        table.add_column("Value")
        table.add_row("Type", plan.project_type)
        table.add_row("Status", self.format_status(str(plan.status)))
        table.add_row("Duration", f"{plan.timeline.total_duration} days")
        table.add_row("Start", _date(plan.timeline.start_date))
        table.add_row("End", _date(plan.timeline.end_date))
        if plan.resources.team:
            table.add_row("Team", escape(", ".join(plan.resources.team)))
        if plan.resources.budget:
            table.add_row("Budget", str(plan.resources.budget))
        self.console.print(table)

        if plan.phases:
            windows = {w.name: w for w in plan.timeline.phases}
            phases = Table(title="Phases", box=box.ROUNDED)
            phases.add_column("#", justify="right", style="dim")
            phases.add_column("Phase", style="cyan")
            phases.add_column("Priority", justify="center")
            phases.add_column("Days", justify="right")
            phases.add_column("Window", style="dim")
            phases.add_column("Tasks")
            for i, phase in enumerate(plan.phases, 1):
                window = windows.get(phase.name)
                span = f"{_date(window.start_date)} → {_date(window.end_date)}" if window else "-"
                phases.add_row(
                    str(i),
                    escape(phase.name),
                    self.format_priority(str(phase.priority)),
                    str(phase.duration),
                    span,
                    escape(", ".join(phase.tasks)),
                )
            self.console.print(phases)

        if plan.risks:
            self.print_header("Risks")
            for risk in plan.risks:
                self.console.print(
                    f"  • [bold]{escape(risk.type)}[/bold] ({risk.severity}, {round(risk.probability * 100)}%): "
                    f"{escape(risk.description)}"
                )
                self.console.print(f"    [dim]Mitigation: {escape(risk.mitigation)}[/dim]")

        if plan.assumptions:
            self.print_header("Assumptions")
            for assumption in plan.assumptions:
                self.console.print(f"  • {escape(assumption)}")

    # =====================
    # Analysis
    # =====================
    def print_recommendations(self, recommendations: Sequence[Recommendation]) -> None:
        for rec in recommendations:
            color = self.PRIORITY_COLORS.get(rec.priority, 'white')
            lines = [f"[dim]{escape(rec.description)}[/dim]"]
            lines += [f"  • {escape(item)}" for item in rec.items] or ["  (none)"]
            self.console.print(Panel(
                "\n".join(lines),
                title=f"[{color}]{escape(rec.title)}[/{color}]",
                border_style=color,
            ))

    def print_validation_result(self, result: ValidationResult) -> None:
        """Print validation result."""
        if result.is_valid:
            self.print_success("Validation passed!")
        else:
            self.print_error(f"Validation failed with {len(result.errors)} error(s)")

        for error in result.errors:
            self.print_error(error.message)

        for warning in result.warnings:
            self.print_warning(warning.message)

    def print_blocked_tasks(self, blocked: Sequence[Tuple[Task, str]]) -> None:
        if not blocked:
            return
        self.print_header("Blocked tasks")
        for task, reason in blocked:
            self.console.print(f"  • [cyan]{task.id}[/cyan] {escape(task.title)}: {escape(reason)}")

    def print_written_files(self, paths: List[Path]) -> None:
        for path in paths:
            self.console.print(f"  [green]+[/green] {escape(str(path))}")
        self.print_success(f"Wrote {len(paths)} file(s)")
