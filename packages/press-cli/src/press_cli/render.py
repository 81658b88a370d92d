import json

import yaml
from rich.table import Table
from rich.tree import Tree

from press_core.models.report import Report
from press_core.validation.report import PASS_MARK


def render_report_tree(report: Report) -> Tree:
    """Nested section -> row tree of a report for console display."""
    tree = Tree(f"[bold cyan]{report.title}[/bold cyan]")
    for section, rows in report.sections.items():
        branch = tree.add(f"[bold]{section}[/bold]")
        if not rows:
            branch.add("[dim]nothing to compare[/dim]")
            continue
        for key, message in rows.items():
            color = "green" if message.startswith(PASS_MARK) else "red"
            branch.add(f"[{color}]{key}[/{color}]: {message}")
    return tree


def render_summary_table(reports: dict[str, Report]) -> Table:
    table = Table(title="Validation Summary")
    table.add_column("Validator", style="cyan")
    table.add_column("Pass", justify="right", style="green")
    table.add_column("Fail", justify="right", style="red")
    for name, report in reports.items():
        table.add_row(name, str(report.summary.get("pass", 0)), str(report.summary.get("fail", 0)))
    return table


def dump_reports(reports: dict[str, Report], fmt: str) -> str:
    """Serialize reports as YAML or JSON, keyed by validator name."""
    payload = {name: report.model_dump() for name, report in reports.items()}
    if fmt == "json":
        return json.dumps(payload, indent=2, ensure_ascii=False)
    return yaml.dump(payload, default_flow_style=False, sort_keys=False, allow_unicode=True)
