"""CLI entry point — load VM specs, run memory hotplug rules, output clearly."""

from pathlib import Path

import click
import typer

from . import __version__
from .config import Settings, load_settings
from .engine import run_rules
from .exceptions import ConfigError, SpecLoadError
from .format import format_human, format_json, format_markdown, result_dict
from .loader import find_spec_files, load_specs
from .log import setup_logging
from .rules.base import CheckContext
from .rules.registry import RULE_INFO


def _err(msg: str) -> None:
    """Raise a styled error (red box) — used for all CLI errors."""
    raise click.BadParameter(msg)


app = typer.Typer(help="Check whether VM specs can have guest memory resized live.")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"memhotplug {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"),
) -> None:
    """Memory hotplug admission checks."""


def _settings(config: Path | None, block_alignment: str | None) -> Settings:
    try:
        return load_settings(config_path=config, block_alignment=block_alignment)
    except ConfigError as e:
        _err(str(e))


def _ci_exit(settings: Settings, rule_ids: list[str]) -> None:
    """Exit 1 if any fired rule is covered by the fail_on policy."""
    if settings.should_fail(rule_ids):
        raise typer.Exit(1)


@app.command("check")
def check_cmd(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, resolve_path=True, help="VM / VMI / spec YAML or JSON"),
    json_out: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
    markdown_out: bool = typer.Option(False, "--markdown", "-m", help="Output as Markdown"),
    ci: bool = typer.Option(False, "--ci", help="CI mode: exit 1 if violations are found"),
    block_alignment: str | None = typer.Option(None, "--block-alignment", "-b", help="Hotplug block size, e.g. 2Mi"),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, dir_okay=False, help="Settings YAML"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging and rule IDs"),
) -> None:
    """Check every spec in a file and report memory hotplug violations."""
    setup_logging(verbose)
    settings = _settings(config, block_alignment)
    try:
        specs = load_specs(path)
    except SpecLoadError as e:
        _err(str(e))

    ctx = CheckContext(block_alignment=settings.block_alignment)
    source = path.name
    results = []
    fired: list[str] = []
    for spec in specs:
        violations = run_rules(spec, ctx)
        fired.extend(v.rule_id for v in violations)
        results.append((spec, violations))

    if json_out:
        typer.echo(format_json([result_dict(source, s, v) for s, v in results]))
    elif markdown_out:
        typer.echo("\n\n".join(format_markdown(source, s, v) for s, v in results))
    else:
        for spec, violations in results:
            typer.echo(format_human(source, spec, violations, settings.block_alignment, verbose=verbose))

    if ci:
        _ci_exit(settings, fired)


@app.command("audit")
def audit_cmd(
    path: Path = typer.Argument(Path("."), file_okay=False, dir_okay=True, help="Dir of spec files"),
    json_out: bool = typer.Option(False, "--json", "-j", help="JSON output"),
    block_alignment: str | None = typer.Option(None, "--block-alignment", "-b", help="Hotplug block size, e.g. 2Mi"),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, dir_okay=False, help="Settings YAML"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Check all spec files in a directory — fleet-wide hotplug eligibility."""
    setup_logging(verbose)
    if not path.exists() or not path.is_dir():
        _err(f"Directory not found: {path}\nUse a path that exists, e.g. memhotplug audit .")
    settings = _settings(config, block_alignment)
    ctx = CheckContext(block_alignment=settings.block_alignment)

    rows = []
    for f in find_spec_files(path):
        source = str(f.relative_to(path))
        try:
            specs = load_specs(f)
        except SpecLoadError as e:
            rows.append({"source": source, "name": "", "compatible": False, "error": str(e), "violations": []})
            continue
        for spec in specs:
            rows.append(result_dict(source, spec, run_rules(spec, ctx)))

    if json_out:
        typer.echo(format_json(rows))
        return
    if not rows:
        typer.echo("No spec files found.")
        return
    eligible = sum(1 for r in rows if r["compatible"])
    errors = sum(1 for r in rows if "error" in r)
    blocked = len(rows) - eligible - errors
    typer.echo(f"Found {len(rows)} spec(s). {eligible} eligible. {blocked} blocked. {errors} unreadable.")
    typer.echo()
    for r in rows:
        label = f"{r['source']}:{r['name']}" if r["name"] else r["source"]
        if "error" in r:
            typer.echo(f"  [ERROR] {label}: {r['error']}")
        elif r["compatible"]:
            typer.echo(f"  [OK] {label}")
        else:
            ids = ", ".join(v["rule_id"] for v in r["violations"])
            typer.echo(f"  [BLOCKED] {label}: {len(r['violations'])} violation(s) — {ids}")


@app.command("explain")
def explain_cmd(
    rule_id: str = typer.Argument("list", help="Rule ID, or 'list'"),
) -> None:
    """Describe a rule."""
    if rule_id in ("list", "rules"):
        typer.echo("Available rules:")
        for rid in RULE_INFO:
            typer.echo(f"  {rid}")
        typer.echo("\nUse: memhotplug explain <rule_id>")
        return
    info = RULE_INFO.get(rule_id)
    if not info:
        _err(f"Unknown rule: {rule_id}\nAvailable: {', '.join(RULE_INFO.keys())}")
    typer.echo(f"Rule: {rule_id}")
    typer.echo(f"Field: spec.template.spec.{info['field']}")
    typer.echo(f"Description: {info['description']}")
    typer.echo(f"When: {info['when']}")
    typer.echo(f"Fix: {info['fix']}")


if __name__ == "__main__":
    app()
