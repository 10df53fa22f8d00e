"""Terminal output formatting — box layout, colors, width control."""

import json
import shutil
import textwrap
from typing import List

import click

from .alignment import alignment_quantity
from .models import MachineSpec
from .rules.base import Violation

MAX_WIDTH = 72
MIN_WIDTH = 40


def _box_width() -> int:
    """Terminal width clamped so the box stays readable in narrow panes."""
    columns = shutil.get_terminal_size((MAX_WIDTH, 24)).columns
    return max(MIN_WIDTH, min(MAX_WIDTH, columns))


def _wrap(text: str, indent: int, width: int) -> List[str]:
    # Continuation lines hang two columns under the bullet text.
    return textwrap.wrap(
        text,
        width=width,
        initial_indent=" " * indent,
        subsequent_indent=" " * (indent + 2),
        break_on_hyphens=False,
    ) or [" " * indent]


def _bullet_text(v: Violation, verbose: bool) -> str:
    base = v.message.rstrip(".")
    if verbose:
        base = f"{base} [{v.rule_id}]"
    return f"● {base}"


def format_human(
    source: str,
    spec: MachineSpec,
    violations: List[Violation],
    block_alignment: int,
    verbose: bool = False,
) -> str:
    """Build the human terminal output for one spec as a single string."""
    width = _box_width()
    lines = []

    lines.append("┌" + "─" * (width - 2) + "┐")
    lines.append(f" memhotplug · {spec.name or source}")
    lines.append(click.style(f" {source} · block alignment {alignment_quantity(block_alignment)}", dim=True))
    lines.append("─" * width)

    if violations:
        lines.append(click.style(f" NOT ELIGIBLE  {len(violations)} violation(s)", fg="red", bold=True))
        for v in violations:
            for ln in _wrap(_bullet_text(v, verbose), indent=2, width=width):
                lines.append(click.style(ln, fg="red"))
            lines.append(click.style(f"    {v.field}", dim=True))
    else:
        lines.append(click.style(" ELIGIBLE  Memory hotplug is compatible with this spec.", fg="green"))

    lines.append("─" * width)
    footer = " Run with --json for machine output  ·  --ci for exit codes"
    if len(footer) > width:
        footer = " --json  ·  --ci  ·  --help"
    lines.append(click.style(footer, dim=True))
    lines.append("└" + "─" * (width - 2) + "┘")

    return "\n".join(lines)


def result_dict(source: str, spec: MachineSpec, violations: List[Violation]) -> dict:
    return {
        "source": source,
        "name": spec.name,
        "compatible": not violations,
        "violations": [v.to_dict() for v in violations],
    }


def format_json(results: List[dict]) -> str:
    return json.dumps(results, indent=2)


def format_markdown(source: str, spec: MachineSpec, violations: List[Violation]) -> str:
    """Markdown output for docs/PRs."""
    lines = [f"# memhotplug: {spec.name or source}", ""]
    if not violations:
        lines.append("**Eligible for memory hotplug.**")
        return "\n".join(lines)
    lines.append(f"**Not eligible: {len(violations)} violation(s).**")
    lines.append("")
    lines.append("| Field | Reason |")
    lines.append("|-------|--------|")
    for v in violations:
        lines.append(f"| `{v.field}` | {v.message} |")
    return "\n".join(lines)
