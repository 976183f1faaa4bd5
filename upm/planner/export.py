"""Plan export to JSON, Markdown and CSV."""

import csv
import io
from typing import Callable, Dict

from ..core.plan import Plan
from ..utils.helpers import dumps, parse_datetime

EXPORT_FORMATS = ('json', 'markdown', 'csv')


def _format_date(value) -> str:
    if not value:
        return 'N/A'
    return parse_datetime(value).date().isoformat()


def plan_to_json(plan: Plan) -> str:
    return dumps(plan.to_dict(), indent=2)


def plan_to_markdown(plan: Plan) -> str:
    lines = [
        f"# {plan.project_name}",
        "",
        f"**Project Type:** {plan.project_type}",
        f"**Status:** {plan.status}",
        f"**Duration:** {plan.timeline.total_duration} days",
        "",
    ]

    if plan.description:
        lines.extend([plan.description, ""])

    lines.extend([
        "## Timeline",
        "",
        f"- **Start Date:** {_format_date(plan.timeline.start_date)}",
        f"- **End Date:** {_format_date(plan.timeline.end_date)}",
        "",
        "## Phases",
        "",
    ])

    for index, phase in enumerate(plan.phases, 1):
        lines.append(f"### {index}. {phase.name}")
        lines.append(phase.description)
        lines.append("")
        lines.append(f"**Duration:** {phase.duration} days")
        lines.append(f"**Priority:** {phase.priority}")
        lines.append("")
        if phase.tasks:
            lines.append("**Tasks:**")
            lines.extend(f"- {task}" for task in phase.tasks)
            lines.append("")

    if plan.risks:
        lines.extend(["## Risks", ""])
        for risk in plan.risks:
            lines.append(f"### {risk.description}")
            lines.append(f"**Severity:** {risk.severity}")
            lines.append(f"**Probability:** {round(risk.probability * 100)}%")
            lines.append(f"**Mitigation:** {risk.mitigation}")
            lines.append("")

    if plan.assumptions:
        lines.extend(["## Assumptions", ""])
        lines.extend(f"- {assumption}" for assumption in plan.assumptions)
        lines.append("")

    return "\n".join(lines)


def plan_to_csv(plan: Plan) -> str:
    """One row per phase; text columns quoted, duration left bare."""
    buffer = io.StringIO()
    buffer.write('Phase,Description,Duration,Priority\n')
    writer = csv.writer(buffer, quoting=csv.QUOTE_NONNUMERIC, lineterminator='\n')
    for phase in plan.phases:
        writer.writerow([phase.name, phase.description, int(phase.duration), str(phase.priority)])
    return buffer.getvalue()


_EXPORTERS: Dict[str, Callable[[Plan], str]] = {
    'json': plan_to_json,
    'markdown': plan_to_markdown,
    'csv': plan_to_csv,
}


def export_plan(plan: Plan, fmt: str = 'json') -> str:
    """Render a plan in one of EXPORT_FORMATS."""
    exporter = _EXPORTERS.get(fmt)
    if exporter is None:
        raise ValueError(f"Unsupported format: {fmt}")
    return exporter(plan)
