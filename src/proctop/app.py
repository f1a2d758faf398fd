"""proctop - Main Textual application and command line."""

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from textual.app import App, ComposeResult
from textual.containers import Container
from textual.widgets import DataTable, Footer, Static

from proctop.config import DEFAULT_CONFIG
from proctop.controller import SamplingLoop
from proctop.log_config import setup_logger
from proctop.models import DerivedRow
from proctop.presenter import format_cells, render_frame, sort_rows
from proctop.terminator import ProcessTerminator, TerminationOutcome, terminate

logger = logging.getLogger(__name__)


class ProcessTable(Container):
    """Container for the process data table."""

    DEFAULT_CSS = """
    ProcessTable {
        height: 1fr;
        border: solid $primary;
    }
    """

    def __init__(self, *args, **kwargs) -> None:
        """Initialize ProcessTable."""
        super().__init__(*args, **kwargs)
        self._current_pids: list[int] = []

    @property
    def displayed_pids(self) -> list[int]:
        """PIDs in the order they are currently displayed."""
        return list(self._current_pids)

    def compose(self) -> ComposeResult:
        """Compose the process table."""
        yield DataTable(id="process-table")

    def on_mount(self) -> None:
        """Initialize the data table when mounted."""
        table = self.query_one("#process-table", DataTable)
        table.cursor_type = "row"

        table.add_column("PID", key="pid", width=8)
        table.add_column("COMMAND", key="command", width=DEFAULT_CONFIG.command_width + 2)
        table.add_column("MEM (MB)", key="mem", width=12)
        table.add_column("CPU %", key="cpu", width=8)

    def update_rows(self, rows: list[DerivedRow]) -> None:
        """Repaint the whole table from freshly derived rows."""
        table = self.query_one("#process-table", DataTable)
        table.clear()

        ordered = sort_rows(rows)
        for row in ordered:
            table.add_row(*format_cells(row), key=str(row.pid))

        self._current_pids = [row.pid for row in ordered]


class ProctopApp(App):
    """Main proctop application."""

    TITLE = "proctop"
    SUB_TITLE = "Live process monitor"

    CSS = """
    Screen {
        layout: vertical;
    }

    #status {
        height: 1;
        padding-left: 1;
    }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
    ]

    def __init__(self, loop: SamplingLoop | None = None) -> None:
        """Initialize the ProctopApp."""
        super().__init__()
        self._loop = loop if loop is not None else SamplingLoop()

    def compose(self) -> ComposeResult:
        """Compose the application layout."""
        yield Static("Sampling...", id="status")
        yield ProcessTable()
        yield Footer()

    def on_mount(self) -> None:
        """Prime the sampling loop and schedule refreshes."""
        self._loop.cycle()
        self.set_interval(self._loop.interval, self._refresh_table)

    def _refresh_table(self) -> None:
        """Run one sampling cycle and repaint the table."""
        try:
            rows = self._loop.cycle()
        except Exception:
            # A bad cycle must not take the monitor down
            logger.exception("Sampling cycle failed")
            return

        if rows is None:
            return

        self.query_one(ProcessTable).update_rows(rows)
        self.query_one("#status", Static).update(f"{len(rows)} processes")

    def action_quit(self) -> None:
        """Handle quit action."""
        logger.debug("Quitting after %d cycles", self._loop.cycles)
        self.exit()


def run_kill(pid_arg: str, terminator: ProcessTerminator | None = None) -> int:
    """Handle ``proctop kill <pid>`` and return the exit code."""
    result = terminate(pid_arg, terminator)
    stream = sys.stdout if result.outcome is TerminationOutcome.SUCCESS else sys.stderr
    print(result.message, file=stream)
    return result.exit_code


def run_plain(loop: SamplingLoop, iterations: int | None = None) -> int:
    """Repaint a plain-text table each cycle until interrupted or done."""

    def render(rows: list[DerivedRow]) -> None:
        sys.stdout.write(render_frame(rows))
        sys.stdout.flush()

    def should_stop() -> bool:
        return iterations is not None and loop.cycles >= iterations

    try:
        loop.run(render, should_stop=should_stop)
    except KeyboardInterrupt:
        pass
    return 0


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer: {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="proctop",
        description="Live per-process CPU and memory monitor",
    )
    parser.add_argument(
        "--plain",
        action="store_true",
        help="Repaint a plain text table instead of the interactive UI",
    )
    parser.add_argument(
        "-n",
        "--iterations",
        type=_positive_int,
        default=None,
        help="Stop after N refreshes (requires --plain)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Write debug log to this file",
    )

    subparsers = parser.add_subparsers(dest="command")
    kill_parser = subparsers.add_parser("kill", help="Kill a process immediately")
    kill_parser.add_argument("pid", help="Process identifier")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for proctop."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.iterations is not None and not args.plain:
        parser.error("-n/--iterations requires --plain")

    if args.command == "kill":
        setup_logger(args.log_file)
        return run_kill(args.pid)

    if args.plain:
        setup_logger(args.log_file)
        return run_plain(SamplingLoop(), args.iterations)

    setup_logger(args.log_file, tui=True)
    app = ProctopApp()
    app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
