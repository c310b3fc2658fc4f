"""Classify command.

Shows which deletion tier each path would go through, without deleting
anything.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from delresolve.cli.types import require_config
from delresolve.deletion.resolver import ResolutionPlan, ResolutionTier, build_resolver
from delresolve.models.target import FileTarget
from delresolve.utils.formatting import console

_TIER_STYLES: dict[ResolutionTier, str] = {
    ResolutionTier.SANDBOX: "tier_sandbox",
    ResolutionTier.INDEX: "tier_index",
    ResolutionTier.EXTERNAL: "tier_external",
}

_TIER_ACTIONS: dict[ResolutionTier, str] = {
    ResolutionTier.SANDBOX: "delete directly",
    ResolutionTier.INDEX: "delete through media index",
    ResolutionTier.EXTERNAL: "needs folder grant",
}


class OutputFormat(str, Enum):
    """Output format options for classify."""

    TABLE = "table"
    JSON = "json"


def classify(
    ctx: typer.Context,
    paths: Annotated[
        list[Path],
        typer.Argument(help="Paths to classify."),
    ],
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """Show how each path would be deleted, without deleting it."""
    config = require_config(ctx)
    resolver = build_resolver(config)

    plans = [(target, resolver.plan(target)) for target in map(FileTarget.from_path, paths)]

    if output_format == OutputFormat.JSON:
        _print_json(plans)
        return

    _print_table(plans)


# === Private helper functions ===


def _print_table(plans: list[tuple[FileTarget, ResolutionPlan]]) -> None:
    """Display plans as a Rich table."""
    table = Table(
        title="Deletion Tiers",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Path", no_wrap=True)
    table.add_column("Tier", width=10)
    table.add_column("Index Entry", style="muted")
    table.add_column("Action", style="muted")

    for target, plan in plans:
        style = _TIER_STYLES[plan.tier]
        table.add_row(
            target.path,
            f"[{style}]{plan.tier.value}[/{style}]",
            plan.entry.uri if plan.entry else "-",
            _TIER_ACTIONS[plan.tier],
        )

    console.print(table)


def _print_json(plans: list[tuple[FileTarget, ResolutionPlan]]) -> None:
    """Display plans as JSON."""
    data = [
        {
            "path": target.path,
            "tier": plan.tier.value,
            "entry": plan.entry.uri if plan.entry else None,
        }
        for target, plan in plans
    ]
    console.print_json(json.dumps(data))
