"""Delete command.

Deletes each given path through the tier that applies to it, asking for
confirmation or a folder grant when the tier requires one.
"""

from pathlib import Path
from typing import Annotated, assert_never

import typer
from rich.table import Table

from delresolve.cli.types import is_quiet, require_config
from delresolve.deletion.gateway import LocalTicketAuthority
from delresolve.deletion.history import record_deletion
from delresolve.deletion.media_index import MediaIndexError, SqliteMediaIndex
from delresolve.deletion.resolver import (
    ResolutionPlan,
    ResolutionTier,
    build_resolver,
    build_tree_deleter,
    complete_confirmation,
    complete_with_grant,
)
from delresolve.deletion.tree import TreeScopedDeleter, open_tree
from delresolve.models.history import HistoryActionType
from delresolve.models.index import IndexEntry
from delresolve.models.outcome import (
    Deleted,
    DeletionOutcome,
    Failed,
    NeedsDirectoryGrant,
    NeedsExternalConfirmation,
)
from delresolve.models.pending import PendingDeletion
from delresolve.models.target import FileTarget
from delresolve.utils.formatting import (
    console,
    print_error,
    print_info,
    print_success,
    print_warning,
)


def rm(
    ctx: typer.Context,
    paths: Annotated[
        list[Path],
        typer.Argument(help="Files or folders to delete."),
    ],
    grant: Annotated[
        Path | None,
        typer.Option(
            "--grant",
            "-g",
            help="Folder to search when a path needs a folder grant.",
        ),
    ] = None,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Approve confirmation requests without prompting."),
    ] = False,
    no_history: Annotated[
        bool,
        typer.Option("--no-history", help="Do not record deletions to history."),
    ] = False,
) -> None:
    """Delete files through private storage, the media index or a granted folder."""
    config = require_config(ctx)
    resolver = build_resolver(config)
    tree_deleter = build_tree_deleter(config)
    index = SqliteMediaIndex(config.effective_index_path)
    authority = LocalTicketAuthority(index)
    quiet = is_quiet(ctx)

    failed = 0
    for position, raw_path in enumerate(paths):
        target = FileTarget.from_path(raw_path)
        plan = resolver.plan(target)
        outcome = resolver.execute(target, plan)
        action_type = _action_type_for(plan)
        entries: tuple[IndexEntry, ...] = (plan.entry,) if plan.entry is not None else ()

        match outcome:
            case Deleted() | Failed():
                final = outcome
            case NeedsExternalConfirmation():
                pending = PendingDeletion(target=target, position=position, outcome=outcome)
                final = _confirm(pending, outcome, index, authority, yes)
                action_type = HistoryActionType.INDEX_CONFIRMED
                entries = outcome.affected_items
            case NeedsDirectoryGrant():
                pending = PendingDeletion(target=target, position=position, outcome=outcome)
                final = _grant(pending, grant, tree_deleter)
                action_type = HistoryActionType.TREE
            case _:
                assert_never(outcome)

        if not _report(target, final, quiet):
            failed += 1
            continue

        if not no_history:
            try:
                record_deletion(target.path, action_type, entries)
            except (OSError, RuntimeError) as e:
                print_warning(f"Could not record to history: {e}")

    if failed:
        raise typer.Exit(code=1)


# === Private helper functions ===


def _action_type_for(plan: ResolutionPlan) -> HistoryActionType:
    """Map a plan's tier to the history action recorded for it."""
    if plan.tier == ResolutionTier.SANDBOX:
        return HistoryActionType.DIRECT
    if plan.tier == ResolutionTier.INDEX:
        return HistoryActionType.INDEX
    return HistoryActionType.TREE


def _confirm(
    pending: PendingDeletion,
    outcome: NeedsExternalConfirmation,
    index: SqliteMediaIndex,
    authority: LocalTicketAuthority,
    yes: bool,
) -> DeletionOutcome:
    """Ask the user to approve a deletion ticket and carry it out."""
    _print_ticket(pending, outcome, index)

    if yes:
        approved = True
    else:
        approved = typer.confirm(
            f"Allow deleting {len(outcome.affected_items)} item(s) from the media index?",
            default=False,
        )

    if not approved:
        return complete_confirmation(outcome, approved=False)

    # The authority's own failure is reported as an undecided ticket.
    committed = authority.commit(outcome.ticket)
    return complete_confirmation(outcome, approved=True if committed else None)


def _grant(
    pending: PendingDeletion,
    grant: Path | None,
    tree_deleter: TreeScopedDeleter,
) -> DeletionOutcome:
    """Obtain a folder grant and delete the target inside it."""
    target = pending.target
    if grant is None:
        print_info(f"{target.path} is outside private storage and the media index.")
        default = str(Path(target.path).parent)
        grant = Path(typer.prompt("Grant access to folder", default=default))

    tree_root = open_tree(grant)
    if tree_root is None:
        print_warning(f"Cannot open granted folder: {grant}")

    return complete_with_grant(target, tree_root, tree_deleter)


def _report(target: FileTarget, outcome: DeletionOutcome, quiet: bool) -> bool:
    """Print the final outcome for a target.

    Returns:
        True if the target was deleted.
    """
    match outcome:
        case Deleted():
            if not quiet:
                print_success(f"Deleted {target.path}")
            return True
        case Failed(reason=reason):
            print_error(f"Could not delete {target.path}: {reason}")
            return False
        case NeedsExternalConfirmation() | NeedsDirectoryGrant():
            print_warning(f"Deletion of {target.path} is still pending")
            return False
        case _:
            assert_never(outcome)


def _print_ticket(
    pending: PendingDeletion,
    outcome: NeedsExternalConfirmation,
    index: SqliteMediaIndex,
) -> None:
    """Display the items a deletion ticket covers."""
    table = Table(
        title=f"Deletion request {outcome.ticket.id[:12]}",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Entry", style="tier_index", no_wrap=True)
    table.add_column("Path")

    for entry in outcome.affected_items:
        try:
            stored_path = index.path_of(entry)
        except MediaIndexError:
            stored_path = None
        table.add_row(entry.uri, stored_path or pending.target.path)

    console.print(table)
