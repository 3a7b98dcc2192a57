"""gsync CLI: push the files changed in a git repository to a remote host."""

import asyncio
from typing import List, Optional, Sequence

import click
import structlog

from gsync import __version__
from gsync.config.rules import load_rules
from gsync.config.settings import get_settings
from gsync.exceptions import GsyncError, InvalidSelection, TransferError
from gsync.logging_config import configure_logging
from gsync.schemas import Destination, MappedPath, SyncPlan
from gsync.services import (
    ChangeSetExtractor,
    GitBackend,
    RuleMatcher,
    SshTransfer,
    SyncPlanner,
    find_repo_root,
    parse_destination,
    parse_selection,
)

logger = structlog.get_logger(__name__)

CONFIRM_PROMPT = (
    "Update remote files? ('y' or 'n' or 'line number of files you want to update')"
)


def _echo_section(title: str, lines: Sequence[str]) -> None:
    if not lines:
        return
    click.echo(title)
    for line in lines:
        click.echo(line)


def _numbered(entries: Sequence[MappedPath]) -> List[str]:
    width = len(str(len(entries)))
    return [
        f"{idx:>{width}}. {entry.source} --> {entry.destination}"
        for idx, entry in enumerate(entries, start=1)
    ]


def print_plan(plan: SyncPlan) -> None:
    """Print the plan the way the operator confirms it."""
    _echo_section("Following files are ignored:", plan.ignored)
    _echo_section("Following files will be updated:", _numbered(plan.mapped))
    _echo_section("Following files have no configured remote dir:", plan.unmapped)

    if plan.failed:
        click.echo("Following files could not be mapped:", err=True)
        for failure in plan.failed:
            click.echo(f"{failure.path}: {failure.message}", err=True)

    if plan.errors:
        click.echo("Following commits could not be read:", err=True)
        for error in plan.errors:
            click.echo(f"{error.specifier}: {error.message}", err=True)


def _password_prompt(message: str) -> str:
    return click.prompt(message, hide_input=True, prompt_suffix="")


def _choose(plan: SyncPlan, assume_yes: bool) -> Optional[List[MappedPath]]:
    if assume_yes:
        return list(plan.mapped)
    answer = click.prompt(CONFIRM_PROMPT, default="", show_default=False)
    try:
        choices = parse_selection(answer, len(plan.mapped))
    except InvalidSelection as e:
        raise click.ClickException(f"Invalid line numbers! {e}")
    if choices is None:
        return None
    return [plan.mapped[i] for i in choices]


def _push(
    destination: Destination, repo_root, entries: Sequence[MappedPath], timeout: int
) -> None:
    transfer = SshTransfer(
        destination, password_prompt=_password_prompt, timeout=timeout
    )
    try:
        with transfer, click.progressbar(length=len(entries), label="Pushing") as bar:
            transfer.push(repo_root, entries, progress=lambda _: bar.update(1))
    except TransferError as e:
        logger.error("Transfer failed", destination=str(destination), error=str(e))
        raise click.ClickException(str(e))


@click.command()
@click.version_option(__version__, prog_name="gsync")
@click.option(
    "-c", "--config", "config_path", type=click.Path(dir_okay=False),
    help="Rules file (JSON with 'dir_map' and 'ignored'). [env: GSYNC_CONFIG_PATH]",
)
@click.option(
    "-s", "--source", type=click.Path(file_okay=False),
    help="Any folder inside the git repository. [env: GSYNC_SOURCE]",
)
@click.option(
    "-d", "--destination",
    help="Remote host as [user@]host. [env: GSYNC_DESTINATION]",
)
@click.option("-v", "--verbose", count=True, help="Repeat for more log output.")
@click.option("-y", "--yes", "assume_yes", is_flag=True, help="Push without asking.")
@click.option("--dry-run", is_flag=True, help="Print the plan and stop.")
@click.argument("commits", nargs=-1)
def main(config_path, source, destination, verbose, assume_yes, dry_run, commits):
    """Push the files changed in COMMITS to a remote host.

    \b
    Each COMMIT is a single commit (its own changes) or A..B (the changes
    between A and B, in either order). Without COMMITS the uncommitted changes
    of the working tree are pushed.
    """
    settings = get_settings()
    configure_logging(verbose, settings.GSYNC_LOG_FORMAT)
    logger.debug(
        "Command line",
        config=config_path,
        source=source,
        destination=destination,
        commits=list(commits),
    )

    destination = destination or settings.GSYNC_DESTINATION
    if not destination and not dry_run:
        raise click.UsageError("Missing option '-d' / '--destination'.")

    # Everything that can be wrong with the setup fails before any git query
    try:
        repo_root = find_repo_root(source or settings.GSYNC_SOURCE)
        rules = load_rules(config_path or settings.GSYNC_CONFIG_PATH)
        remote = (
            parse_destination(destination, port=settings.GSYNC_SSH_PORT)
            if destination
            else None
        )
        backend = GitBackend(repo_root)
    except GsyncError as e:
        logger.error("Startup failed", error=str(e))
        raise click.ClickException(str(e))

    planner = SyncPlanner(ChangeSetExtractor(backend), RuleMatcher.from_rules(rules))
    plan = asyncio.run(planner.build_plan_async(list(commits)))
    print_plan(plan)

    if plan.is_empty:
        click.echo("No file will be updated, exit.")
        return
    if dry_run:
        return

    entries = _choose(plan, assume_yes)
    if entries is None:
        click.echo("Update cancelled.")
        return

    _push(remote, repo_root, entries, settings.GSYNC_SSH_TIMEOUT)
    click.echo("Done!")


if __name__ == "__main__":
    main()
