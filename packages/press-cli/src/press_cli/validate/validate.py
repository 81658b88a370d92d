import logging
import sys
from typing import Any, Optional

import click
from rich.console import Console

from press_core.codebase.log import configure_logger
from press_core.data.settings import load_settings
from press_core.errors import PressValidationError
from press_core.models.settings import ValidationSettings
from press_core.validation import registry
from press_core.validation.runner import ALL, run_validations
from press_cli.render import dump_reports, render_report_tree, render_summary_table

_SECRET_OPTIONS = {"remote_key"}


def parse_extra_options(args: list[str]) -> dict[str, Any]:
    """Turn leftover ``--key=value`` / ``--key value`` / ``--flag`` tokens into a mapping."""
    options: dict[str, Any] = {}
    i = 0
    while i < len(args):
        token = args[i]
        if not token.startswith("--"):
            raise click.UsageError(f"Unexpected argument: {token}")
        name = token[2:]
        if "=" in name:
            key, value = name.split("=", 1)
        elif i + 1 < len(args) and not args[i + 1].startswith("--"):
            key, value = name, args[i + 1]
            i += 1
        else:
            key, value = name, True
        options[key.replace("-", "_")] = value
        i += 1
    return options


def _resolve_settings(console: Console, config: Optional[str], extra: list[str], verbose: bool) -> ValidationSettings:
    options = parse_extra_options(extra)
    if verbose:
        options["verbose"] = True
    kept, dropped = ValidationSettings.filter_options(options)
    for key in dropped:
        console.print(f"[yellow]Ignoring unknown option: {key}[/yellow]")
    settings = load_settings(config, kept)
    if settings.verbose:
        for key, value in settings.model_dump().items():
            shown = "***" if key in _SECRET_OPTIONS and value else value
            console.print(f"Arg set: [{key}] => {shown}", markup=False)
    return settings


def _run(ctx: click.Context, name: str, config: Optional[str], fmt: str, export: Optional[str], strict: bool, verbose: bool) -> None:
    console = Console()
    try:
        settings = _resolve_settings(console, config, list(ctx.args), verbose)
        configure_logger(logging.DEBUG if settings.verbose else logging.WARNING)

        reports = run_validations([name], settings)

        if export:
            export_fmt = "json" if export.lower().endswith(".json") else "yaml"
            with open(export, "w", encoding="utf-8") as f:
                f.write(dump_reports(reports, export_fmt))
            console.print(f"[green]✓[/green] Report exported to {export}")

        if fmt == "tree":
            for report in reports.values():
                console.print(render_report_tree(report))
            console.print(render_summary_table(reports))
        else:
            click.echo(dump_reports(reports, fmt))

    except (PressValidationError, ValueError, OSError) as e:
        console.print(f"[red]Error during validation: {e}[/red]")
        sys.exit(1)

    failed = sum(report.summary.get("fail", 0) for report in reports.values())
    if failed and strict:
        console.print(f"\n[yellow]⚠[/yellow] Validation found {failed} mismatches (strict mode)")
        sys.exit(2)
    sys.exit(0)


def _make_command(name: str, help_text: str) -> click.Command:
    @click.command(
        name,
        help=help_text,
        context_settings={"ignore_unknown_options": True, "allow_extra_args": True},
    )
    @click.option(
        "--config",
        type=click.Path(path_type=str, dir_okay=False, exists=True),
        default=None,
        help="Settings file (YAML/JSON) with remote_domain, remote_key, local_folder, sample_count.",
    )
    @click.option(
        "--format",
        "fmt",
        type=click.Choice(["tree", "yaml", "json"], case_sensitive=False),
        default="tree",
        show_default=True,
        help="Output format.",
    )
    @click.option(
        "--export",
        type=click.Path(path_type=str, dir_okay=False),
        default=None,
        help="Also write the report to this path (.json for JSON, otherwise YAML).",
    )
    @click.option("--strict", is_flag=True, help="Exit with code 2 when any mismatch is reported.")
    @click.option("--verbose", is_flag=True, help="Echo resolved options and log remote calls.")
    @click.pass_context
    def command(ctx: click.Context, config: Optional[str], fmt: str, export: Optional[str], strict: bool, verbose: bool) -> None:
        _run(ctx, name, config, fmt.lower(), export, strict, verbose)

    return command


@click.group()
def validate() -> None:
    """Compare local content against the remote site.

    Any recognised setting can be passed as --<option>=<value>, for example
    --remote_domain=example.com --sample_count=50.
    """
    pass


for _name, _cls in registry.all().items():
    validate.add_command(_make_command(_name, f"Validate {_cls.title.lower()} against the remote site."))
validate.add_command(_make_command(ALL, "Run every validator."))
