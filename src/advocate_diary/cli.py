"""CLI for the advocate's diary (cases, hearings, backup and import)."""

import json
from enum import StrEnum
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from advocate_diary.config import LOG_FILE_ENV_VAR, resolve_data_directory
from advocate_diary.core.backup import ParseFailure, case_to_dict
from advocate_diary.core.cases import edit_case, format_date, new_case
from advocate_diary.core.import_flow import FileReadFailure, ImportSession
from advocate_diary.core.views import filter_cases, overdue_hearings, upcoming_hearings
from advocate_diary.diary import Diary, open_diary
from advocate_diary.logging_config import configure_logging
from advocate_diary.models.case import Case, CaseStatus

app = typer.Typer(help="Advocate's diary: track cases, hearings and backups locally.")

DataDirOption = Annotated[
    Path | None,
    typer.Option("--data-dir", "-d", help="Diary data directory"),
]


class FilterChoice(StrEnum):
    ALL = "all"
    ONGOING = "ongoing"
    WEEK = "week"


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    log_file: Annotated[
        Path | None,
        typer.Option("--log-file", envvar=LOG_FILE_ENV_VAR, help="Also log to this file"),
    ] = None,
) -> None:
    configure_logging(verbose=verbose, log_file=log_file)


def _open(data_dir: Path | None) -> Diary:
    return open_diary(data_dir or resolve_data_directory())


def _get_case(diary: Diary, case_id: str) -> Case:
    case = diary.data.find(case_id)
    if case is None:
        logger.error("Case not found: {}", case_id)
        raise typer.Exit(1)
    return case


def _maybe_nudge(diary: Diary) -> None:
    """Show the backup reminder at most once per interval.

    Showing it counts as a prompt, so it is snoozed for the next interval.
    """
    if diary.backup_nudge_due():
        typer.echo(
            "Reminder: your diary is only stored on this device. "
            "Run 'advocate-diary export' to take a backup.\n",
            err=True,
        )
        diary.mark_backup_prompted()


def _case_line(case: Case) -> str:
    ref = f" ({case.reference_number})" if case.reference_number else ""
    return (
        f"  {format_date(case.next_hearing_date):>12}  {case.title}{ref}"
        f"  [{case.status}] @ {case.court_name}  id={case.id}"
    )


@app.command(name="cases")
def cases_cmd(
    case_filter: FilterChoice = typer.Option(FilterChoice.ALL, "--filter", "-f", help="Subset"),
    search: str = typer.Option("", "--search", "-s", help="Match title, reference or court"),
    data_dir: DataDirOption = None,
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """List cases, soonest hearing first."""
    diary = _open(data_dir)
    results = filter_cases(diary.data.cases, case_filter=case_filter.value, query=search)

    if output_json:
        data = {"cases": [case_to_dict(c) for c in results], "count": len(results)}
        typer.echo(json.dumps(data, indent=2))
        return

    _maybe_nudge(diary)
    typer.echo(f"{len(results)} cases for {diary.data.advocate_name}:\n")
    for case in results:
        typer.echo(_case_line(case))


@app.command()
def show(
    case_id: str = typer.Argument(..., help="Case ID"),
    data_dir: DataDirOption = None,
) -> None:
    """Show one case with its hearing history, newest first."""
    diary = _open(data_dir)
    case = _get_case(diary, case_id)

    typer.echo(f"{case.title}")
    typer.echo(f"  Court:        {case.court_name}")
    typer.echo(f"  Reference:    {case.reference_number or '-'}")
    typer.echo(f"  Status:       {case.status}")
    typer.echo(f"  Next hearing: {format_date(case.next_hearing_date)}")
    if case.description:
        typer.echo(f"  Description:  {case.description}")
    if case.history:
        typer.echo("\n  History:")
        for hearing in reversed(case.history):
            typer.echo(f"    {format_date(hearing.date):>12}  {hearing.note}")


@app.command()
def add(
    title: str = typer.Option(..., "--title", "-t", help="Case title"),
    court: str = typer.Option(..., "--court", "-c", help="Court name"),
    reference: str = typer.Option("", "--reference", "-r", help="Reference number"),
    description: str = typer.Option("", "--description", help="Free-text description"),
    status: CaseStatus = typer.Option(CaseStatus.ONGOING, "--status", help="Case status"),
    next_hearing: str = typer.Option("", "--next-hearing", "-n", help="Next hearing (YYYY-MM-DD)"),
    data_dir: DataDirOption = None,
) -> None:
    """Add a new case."""
    diary = _open(data_dir)
    try:
        case = new_case(
            title=title,
            court_name=court,
            reference_number=reference,
            description=description,
            status=status,
            next_hearing_date=next_hearing,
        )
    except ValueError as e:
        logger.error("{}", e)
        raise typer.Exit(1) from e
    diary.save_case(case)
    typer.echo(f"Added case {case.id}")


@app.command()
def update(
    case_id: str = typer.Argument(..., help="Case ID"),
    title: Annotated[str | None, typer.Option("--title", "-t", help="Case title")] = None,
    court: Annotated[str | None, typer.Option("--court", "-c", help="Court name")] = None,
    reference: Annotated[
        str | None, typer.Option("--reference", "-r", help="Reference number")
    ] = None,
    description: Annotated[
        str | None, typer.Option("--description", help="Free-text description")
    ] = None,
    status: Annotated[CaseStatus | None, typer.Option("--status", help="Case status")] = None,
    next_hearing: Annotated[
        str | None,
        typer.Option("--next-hearing", "-n", help="Next hearing (YYYY-MM-DD, '' for TBD)"),
    ] = None,
    note: str = typer.Option("", "--note", help="Note recorded when the hearing moves"),
    data_dir: DataDirOption = None,
) -> None:
    """Edit a case. Moving the hearing date records the old date in its history."""
    diary = _open(data_dir)
    case = _get_case(diary, case_id)
    try:
        edited = edit_case(
            case,
            title=title,
            court_name=court,
            reference_number=reference,
            description=description,
            status=status,
            next_hearing_date=next_hearing,
            hearing_note=note,
        )
    except ValueError as e:
        logger.error("{}", e)
        raise typer.Exit(1) from e
    diary.save_case(edited)
    added = len(edited.history) - len(case.history)
    typer.echo(f"Updated case {case.id}" + (" (hearing rescheduled)" if added else ""))


@app.command()
def delete(
    case_id: str = typer.Argument(..., help="Case ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
    data_dir: DataDirOption = None,
) -> None:
    """Delete a case and all of its hearing history."""
    diary = _open(data_dir)
    case = _get_case(diary, case_id)
    if not yes and not typer.confirm(
        f"Remove {case.title!r}? This will erase all hearing history and is irreversible."
    ):
        typer.echo("Cancelled.")
        raise typer.Exit(0)
    diary.delete_case(case.id)
    typer.echo(f"Deleted case {case.id}")


@app.command()
def agenda(data_dir: DataDirOption = None) -> None:
    """Show upcoming and overdue hearings of ongoing cases."""
    diary = _open(data_dir)
    _maybe_nudge(diary)
    overdue = overdue_hearings(diary.data.cases)
    upcoming = upcoming_hearings(diary.data.cases)

    typer.echo(f"Overdue ({len(overdue)}):")
    for case in overdue:
        typer.echo(_case_line(case))
    typer.echo(f"\nUpcoming ({len(upcoming)}):")
    for case in upcoming:
        typer.echo(_case_line(case))


@app.command()
def export(
    output_dir: Annotated[
        Path,
        typer.Option("--output-dir", "-o", help="Directory for the backup file"),
    ] = Path("."),
    data_dir: DataDirOption = None,
) -> None:
    """Write a JSON backup of the whole diary."""
    diary = _open(data_dir)
    try:
        path = diary.export_to_directory(output_dir)
    except OSError as e:
        logger.error("Failed to write backup: {}", e)
        raise typer.Exit(1) from e
    typer.echo(f"Backed up {len(diary.data.cases)} cases to {path}")


@app.command(name="import")
def import_cmd(
    backup_file: Path = typer.Argument(..., help="Backup file to merge"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
    data_dir: DataDirOption = None,
) -> None:
    """Merge cases from a backup file. Cases already in the diary are kept as they are."""
    diary = _open(data_dir)
    session = ImportSession()
    result = session.stage_file(backup_file)

    if isinstance(result, FileReadFailure):
        logger.error("Failed to read file: {}", result.reason)
        raise typer.Exit(1)
    if isinstance(result, ParseFailure):
        logger.error("Invalid diary file ({}). Is it a JSON backup?", result.reason)
        raise typer.Exit(1)

    existing = {c.id for c in diary.data.cases}
    new_count = len({c.id for c in result.dataset.cases} - existing)
    typer.echo(
        f"Backup contains {len(result.dataset.cases)} cases, {new_count} not yet in the diary."
    )
    if not yes and not typer.confirm("Merge these records into your diary?"):
        session.discard()
        typer.echo("Import cancelled.")
        raise typer.Exit(0)

    stats = diary.confirm_import(session)
    typer.echo(f"Imported {stats.cases_added} cases, skipped {stats.cases_skipped}")


@app.command()
def purge(
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
    data_dir: DataDirOption = None,
) -> None:
    """Erase every case and reset the diary."""
    diary = _open(data_dir)
    if not yes and not typer.confirm(
        f"Erase all {len(diary.data.cases)} cases? Export a backup first if unsure."
    ):
        typer.echo("Cancelled.")
        raise typer.Exit(0)
    diary.purge()
    typer.echo("Diary erased.")


@app.command()
def name(
    advocate_name: str = typer.Argument(..., help="Name shown in the diary"),
    data_dir: DataDirOption = None,
) -> None:
    """Set the advocate name."""
    diary = _open(data_dir)
    diary.set_advocate_name(advocate_name)
    typer.echo(f"Advocate name set to {advocate_name!r}")


@app.command()
def remind(
    dismiss: bool = typer.Option(False, "--dismiss", help="Snooze the reminder for a day"),
    data_dir: DataDirOption = None,
) -> None:
    """Tell whether a backup reminder is due.

    The reminder printed by 'cases' and 'agenda' snoozes itself for 24 hours once
    shown, exactly like --dismiss. An export also resets it.
    """
    diary = _open(data_dir)
    if dismiss:
        diary.mark_backup_prompted()
        typer.echo("Backup reminder dismissed for 24 hours.")
        return

    last = diary.data.last_backup_date or "never"
    if diary.backup_nudge_due():
        typer.echo(f"Backup recommended (last backup: {last}).")
    else:
        typer.echo(f"No reminder due (last backup: {last}).")
