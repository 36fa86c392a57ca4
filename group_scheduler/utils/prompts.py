from typing import List, Optional
from rich.console import Console
from rich.table import Table
from rich.prompt import Prompt, Confirm
from rich.panel import Panel

from ..models import AggregatedSlot, Event, Mode
from .clock import describe_range


console = Console()

RATING_MARKS = {"best": "◎", "good": "○", "fair": "△"}
RATING_STYLES = {"best": "green", "good": "blue", "fair": "yellow"}


def print_success(message: str) -> None:
    """Print success message in green."""
    console.print(f"✅ {message}", style="green")


def print_error(message: str) -> None:
    """Print error message in red."""
    console.print(f"❌ {message}", style="red")


def print_warning(message: str) -> None:
    """Print warning message in yellow."""
    console.print(f"⚠️  {message}", style="yellow")


def print_info(message: str) -> None:
    """Print info message in blue."""
    console.print(f"ℹ️  {message}", style="blue")


def prompt_text(message: str, default: Optional[str] = None) -> str:
    """Prompt for text input."""
    return Prompt.ask(message, default=default)


def prompt_confirm(message: str, default: bool = True) -> bool:
    """Prompt for yes/no confirmation."""
    return Confirm.ask(message, default=default)


def prompt_choice(message: str, choices: List[str], default: Optional[str] = None) -> str:
    """Prompt for choice from list."""
    return Prompt.ask(message, choices=choices, default=default)


def display_results_table(slots: List[AggregatedSlot], participant_count: int) -> None:
    """Display ranked meeting times in a formatted table."""
    table = Table(title="Candidate Times (best first)")
    table.add_column("", justify="center")
    table.add_column("Date", style="green")
    table.add_column("Time", style="yellow")
    table.add_column("Available", justify="right")
    table.add_column("Attending", style="cyan")
    table.add_column("Absent", style="magenta")
    
    for slot in slots:
        table.add_row(
            f"[{RATING_STYLES[slot.rating]}]{RATING_MARKS[slot.rating]}[/]",
            slot.date_str,
            f"{slot.start_time} - {slot.end_time}",
            f"{slot.available_count}/{participant_count}",
            ", ".join(slot.attendees),
            ", ".join(slot.absentees) or "-",
        )
    
    console.print(table)


def display_event(event: Event) -> None:
    """Display event summary and every participant's entries."""
    dates = event.target_dates()
    summary = f"{event.description}\n\n" if event.description else ""
    summary += f"{len(dates)} candidate dates: {', '.join(dates)}"
    display_panel(event.title or event.id, summary)
    
    table = Table(title=f"Participants ({len(event.participants)})")
    table.add_column("Id", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Mode")
    table.add_column("Entries")
    
    for participant in event.participants:
        lines = []
        for entry in participant.availabilities:
            ranges = ", ".join(describe_range(r) for r in entry.time_ranges) or "-"
            memo = f"  ({entry.memo})" if entry.memo else ""
            lines.append(f"{entry.date_str}: {ranges}{memo}")
        mode_style = "green" if participant.mode is Mode.WHITELIST else "red"
        table.add_row(
            participant.id,
            participant.name,
            f"[{mode_style}]{participant.mode.value}[/]",
            "\n".join(lines) or "-",
        )
    
    console.print(table)


def display_panel(title: str, content: str, style: str = "blue") -> None:
    """Display content in a panel."""
    console.print(Panel(content, title=title, border_style=style))


def display_step(step_num: int, total_steps: int, description: str) -> None:
    """Display current step progress."""
    progress = f"[{step_num}/{total_steps}]"
    console.print(f"\n{progress} {description}", style="bold blue")


def print_divider() -> None:
    """Print a visual divider."""
    console.print("─" * 60, style="dim")
