"""Sorting and text rendering of the process table."""

from collections.abc import Iterable

from proctop.config import COMMAND_WIDTH
from proctop.models import DerivedRow

CLEAR_SCREEN = "\033[2J\033[1;1H"
SEPARATOR = "-" * 51
EXIT_HINT = " (Press Ctrl+C to exit)"


def sort_rows(rows: Iterable[DerivedRow]) -> list[DerivedRow]:
    """Sort rows by CPU percent, highest first. Ties keep their input order."""
    return sorted(rows, key=lambda row: row.cpu_percent, reverse=True)


def truncate_command(name: str, width: int = COMMAND_WIDTH) -> str:
    """Cut a command name down to the display width."""
    return name[:width]


def format_cells(row: DerivedRow, width: int = COMMAND_WIDTH) -> tuple[str, str, str, str]:
    """Format a row as PID, COMMAND, MEM (MB) and CPU % cells."""
    return (
        str(row.pid),
        truncate_command(row.command_name, width),
        f"{row.memory_mb:.2f}",
        f"{row.cpu_percent:.2f}%",
    )


def format_header() -> str:
    """Column header line."""
    return f"{'PID':<8}{'COMMAND':<20}{'MEM (MB)':<12}{'CPU %':<8}"


def format_line(row: DerivedRow, width: int = COMMAND_WIDTH) -> str:
    """Fixed-width text line for one row."""
    pid, command, memory, cpu = format_cells(row, width)
    return f"{pid:<8}{command:<20}{memory:>10}  {cpu:>7}"


def render_frame(rows: Iterable[DerivedRow], width: int = COMMAND_WIDTH) -> str:
    """
    Render a full-screen frame: clear, header, hint, then sorted rows.

    The header is repeated on every frame.
    """
    lines = [format_header(), SEPARATOR, EXIT_HINT]
    lines.extend(format_line(row, width) for row in sort_rows(rows))
    return CLEAR_SCREEN + "\n".join(lines) + "\n"
