#!/usr/bin/env python3

import functools
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.logging import RichHandler
from rich.traceback import install

from . import __version__
from .aggregator import Aggregator
from .config import ConfigManager
from .csv_utils import write_results
from .editing import (
    add_time_range, apply_bulk, create_event, find_participant, new_participant,
    remove_participant, remove_time_range, rename_participant, set_day, switch_mode,
    upsert_participant,
)
from .event_file import load_event, sample_event, save_event
from .exceptions import GroupSchedulerError
from .intervals import invert as invert_ranges
from .models import Mode, TimeRange
from .template_manager import TemplateEngine
from .utils.clock import describe_range
from .utils.dates import normalize_date_str, parse_range, parse_time, parse_weekdays
from .utils.prompts import (
    console, print_success, print_error, print_warning, print_info,
    prompt_text, prompt_confirm, prompt_choice, display_results_table,
    display_event, display_step, print_divider
)

install(show_locals=True)

app = typer.Typer(
    name="group-scheduler",
    help="CLI tool for finding meeting times from whitelist/blacklist availability",
    add_completion=False,
)


def handle_errors(func):
    """Decorator to handle common exceptions."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except KeyboardInterrupt:
            print_warning("\nOperation cancelled by user")
            raise typer.Exit(1)
        except (GroupSchedulerError, ValueError) as e:
            print_error(str(e))
            raise typer.Exit(1)
    return wrapper


def _resolve_settings(slot_minutes: Optional[int], threshold: Optional[float]) -> Aggregator:
    """Build an aggregator from command line overrides and saved configuration."""
    config = ConfigManager()
    return Aggregator(
        slot_minutes=slot_minutes if slot_minutes is not None else config.get_slot_minutes(),
        threshold=threshold if threshold is not None else config.get_threshold(),
    )


@app.command()
@handle_errors
def init():
    """Initialize configuration for first-time setup."""
    print_info("Welcome to Group Scheduler CLI!")
    print_info("This wizard will set the defaults used when ranking meeting times.")
    print_divider()

    config = ConfigManager()

    if config.is_configured():
        if not prompt_confirm("Configuration already exists. Reconfigure?", default=False):
            print_success("Using existing configuration.")
            return

    display_step(1, 3, "Slot size")
    slot_minutes = prompt_text("Slot size in minutes", default=str(config.get_slot_minutes()))
    config.set_slot_minutes(int(slot_minutes))

    display_step(2, 3, "Admission threshold")
    threshold = prompt_text("Minimum share of participants (0-1)", default=str(config.get_threshold()))
    config.set_threshold(float(threshold))

    display_step(3, 3, "Default input mode")
    mode = prompt_choice(
        "Default mode for new participants",
        choices=[m.value for m in Mode],
        default=config.get_default_mode().value,
    )
    config.set_default_mode(mode)

    print_divider()
    print_success(f"Configuration saved to {config.config_path}")


@app.command()
@handle_errors
def new(
    event_file: Path = typer.Argument(..., help="Path of the event file to create"),
    title: str = typer.Option(..., "--title", help="Event title"),
    dates: List[str] = typer.Option(..., "--date", help="Candidate date (YYYY-MM-DD), repeatable"),
    description: str = typer.Option("", "--description", help="Event description"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
):
    """Create an event file over a set of candidate dates."""
    if event_file.exists() and not force:
        print_error(f"{event_file} already exists. Use --force to overwrite it.")
        raise typer.Exit(1)

    event = create_event(title, dates, description=description)
    save_event(event_file, event)
    print_success(f"Created event '{event.title}' ({event.id}) with {len(event.candidate_dates)} candidate dates")


@app.command()
@handle_errors
def demo(
    event_file: Path = typer.Argument(..., help="Path of the event file to create"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
):
    """Write a sample event with three participants."""
    if event_file.exists() and not force:
        print_error(f"{event_file} already exists. Use --force to overwrite it.")
        raise typer.Exit(1)

    event = sample_event()
    save_event(event_file, event)
    print_success(f"Sample event written to {event_file}")
    print_info(f"Run 'group-scheduler results {event_file}' to see the ranking.")


@app.command()
@handle_errors
def show(event_file: Path = typer.Argument(..., help="Event file")):
    """Show an event and every participant's entries."""
    display_event(load_event(event_file))


@app.command()
@handle_errors
def join(
    event_file: Path = typer.Argument(..., help="Event file"),
    name: str = typer.Argument(..., help="Participant name"),
    mode: Optional[Mode] = typer.Option(None, "--mode", help="whitelist (times you can attend) or blacklist (times you cannot)"),
):
    """Add a participant to an event."""
    event = load_event(event_file)
    participant = new_participant(name, mode or ConfigManager().get_default_mode())
    save_event(event_file, upsert_participant(event, participant))
    print_success(f"Added {participant.name} ({participant.id}) in {participant.mode.value} mode")


@app.command("add-range")
@handle_errors
def add_range(
    event_file: Path = typer.Argument(..., help="Event file"),
    participant_key: str = typer.Argument(..., metavar="PARTICIPANT", help="Participant id or name"),
    date_str: str = typer.Argument(..., metavar="DATE", help="Date (YYYY-MM-DD)"),
    start: str = typer.Option("", "--start", help="Start time (HH:MM); omit for start of day"),
    end: str = typer.Option("", "--end", help="End time (HH:MM); omit for end of day"),
    memo: Optional[str] = typer.Option(None, "--memo", help="Memo for the date"),
    memo_only: bool = typer.Option(False, "--memo-only", help="Only set the memo, add no range"),
):
    """Add a time range (and optionally a memo) for one date."""
    event = load_event(event_file)
    participant = find_participant(event, participant_key)
    date_str = normalize_date_str(date_str)

    if date_str not in event.target_dates():
        print_warning(f"{date_str} is not a candidate date of this event")

    if not memo_only:
        time_range = TimeRange(parse_time(start), parse_time(end))
        participant = add_time_range(participant, date_str, time_range)
        print_info(f"{date_str}: {describe_range(time_range)}")
    if memo is not None:
        participant = set_day(participant, date_str, memo=memo)

    save_event(event_file, upsert_participant(event, participant))
    print_success(f"Updated {participant.name}")


@app.command("remove-range")
@handle_errors
def remove_range(
    event_file: Path = typer.Argument(..., help="Event file"),
    participant_key: str = typer.Argument(..., metavar="PARTICIPANT", help="Participant id or name"),
    date_str: str = typer.Argument(..., metavar="DATE", help="Date (YYYY-MM-DD)"),
    index: int = typer.Argument(..., help="Position of the range on that date in the order 'show' lists them, counting from 1"),
):
    """Delete one time range of a date."""
    event = load_event(event_file)
    participant = find_participant(event, participant_key)
    date_str = normalize_date_str(date_str)

    updated = remove_time_range(participant, date_str, index - 1)
    save_event(event_file, upsert_participant(event, updated))
    print_success(f"Removed time range #{index} on {date_str} for {participant.name}")


@app.command()
@handle_errors
def rename(
    event_file: Path = typer.Argument(..., help="Event file"),
    participant_key: str = typer.Argument(..., metavar="PARTICIPANT", help="Participant id or name"),
    new_name: str = typer.Argument(..., metavar="NAME", help="New participant name"),
):
    """Change a participant's name."""
    event = load_event(event_file)
    participant = find_participant(event, participant_key)

    updated = rename_participant(participant, new_name)
    save_event(event_file, upsert_participant(event, updated))
    print_success(f"Renamed {participant.name} to {updated.name}")


@app.command()
@handle_errors
def bulk(
    event_file: Path = typer.Argument(..., help="Event file"),
    participant_key: str = typer.Argument(..., metavar="PARTICIPANT", help="Participant id or name"),
    days: str = typer.Option("mon,tue,wed,thu,fri", "--days", help="Weekdays to apply the range to"),
    start: str = typer.Option("", "--start", help="Start time (HH:MM); omit for start of day"),
    end: str = typer.Option("", "--end", help="End time (HH:MM); omit for end of day"),
):
    """Add the same time range to every candidate date on the given weekdays."""
    event = load_event(event_file)
    participant = find_participant(event, participant_key)
    time_range = TimeRange(parse_time(start), parse_time(end))

    updated = apply_bulk(participant, event.target_dates(), time_range, weekdays=parse_weekdays(days))
    save_event(event_file, upsert_participant(event, updated))
    print_success(f"Added {describe_range(time_range)} on {days} for {participant.name}")


@app.command("switch-mode")
@handle_errors
def switch_mode_command(
    event_file: Path = typer.Argument(..., help="Event file"),
    participant_key: str = typer.Argument(..., metavar="PARTICIPANT", help="Participant id or name"),
    mode: Mode = typer.Argument(..., help="New mode"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Convert entered ranges without asking"),
):
    """Switch a participant between whitelist and blacklist input."""
    event = load_event(event_file)
    participant = find_participant(event, participant_key)

    if participant.mode is mode:
        print_info(f"{participant.name} already uses {mode.value} mode")
        return

    if participant.has_input and not yes:
        print_info(f"Switching {participant.name} to {mode.value} mode.")
        print_info("Entered times will be replaced by their opposite on every candidate date.")
        if not prompt_confirm("Convert entered times?", default=True):
            print_info("Mode switch cancelled.")
            raise typer.Exit(0)

    updated = switch_mode(participant, mode, event.target_dates())
    save_event(event_file, upsert_participant(event, updated))
    print_success(f"{participant.name} now uses {mode.value} mode")


@app.command()
@handle_errors
def remove(
    event_file: Path = typer.Argument(..., help="Event file"),
    participant_key: str = typer.Argument(..., metavar="PARTICIPANT", help="Participant id or name"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Remove without asking"),
):
    """Remove a participant's answer."""
    event = load_event(event_file)
    participant = find_participant(event, participant_key)

    if not yes and not prompt_confirm(f"Remove the answer of {participant.name}?", default=False):
        print_info("Removal cancelled.")
        raise typer.Exit(0)

    save_event(event_file, remove_participant(event, participant.id))
    print_success(f"Removed {participant.name}")


@app.command()
@handle_errors
def invert(
    ranges: List[str] = typer.Argument(None, help="Ranges like 09:00-12:00, *-12:00, 15:00-*"),
):
    """Print the times of day not covered by the given ranges."""
    time_ranges = [TimeRange(*parse_range(r)) for r in ranges or []]
    inverted = invert_ranges(time_ranges)
    if not inverted:
        print_info("No free time: the ranges cover the whole day")
        return
    for time_range in inverted:
        console.print(describe_range(time_range))


@app.command()
@handle_errors
def results(
    event_file: Path = typer.Argument(..., help="Event file"),
    slot_minutes: Optional[int] = typer.Option(None, "--slot-minutes", help="Slot size in minutes"),
    threshold: Optional[float] = typer.Option(None, "--threshold", help="Minimum share of participants (0-1)"),
    csv_file: Optional[Path] = typer.Option(None, "--csv", help="Also export the ranking to CSV"),
):
    """Rank candidate meeting times."""
    event = load_event(event_file)

    if not event.participants:
        print_warning("No answers yet.")
        return

    slots = _resolve_settings(slot_minutes, threshold).aggregate(event)

    if not slots:
        print_warning("No time works for enough participants.")
        return

    display_results_table(slots, len(event.participants))

    if csv_file:
        write_results(csv_file, slots)
        print_success(f"Ranking exported to {csv_file}")


@app.command()
@handle_errors
def report(
    event_file: Path = typer.Argument(..., help="Event file"),
    template: str = typer.Option("report.txt", "--template", help="Template name"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the report to a file"),
    slot_minutes: Optional[int] = typer.Option(None, "--slot-minutes", help="Slot size in minutes"),
    threshold: Optional[float] = typer.Option(None, "--threshold", help="Minimum share of participants (0-1)"),
):
    """Render a shareable report of the ranking."""
    event = load_event(event_file)
    engine = TemplateEngine()

    if not engine.validate_template(template):
        print_error(f"Unknown template: {template}. Available: {', '.join(engine.list_templates())}")
        raise typer.Exit(1)

    slots = _resolve_settings(slot_minutes, threshold).aggregate(event)
    content = engine.render(template, event=event, slots=slots)

    if output:
        output.write_text(content, encoding="utf-8")
        print_success(f"Report written to {output}")
    else:
        console.print(content, markup=False, highlight=False)


def version_callback(value: bool):
    if value:
        console.print(f"Group Scheduler CLI v{__version__}")
        raise typer.Exit(0)


@app.callback()
def main(
    version: Optional[bool] = typer.Option(None, "--version", "-v", callback=version_callback, is_eager=True, help="Show version and exit"),
    verbose: bool = typer.Option(False, "--verbose", help="Show debug logging"),
):
    """Group Scheduler CLI - find meeting times everyone can make."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


if __name__ == "__main__":
    app()
