"""Process termination for the ``kill`` command."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

import psutil

logger = logging.getLogger(__name__)


class TerminationError(Exception):
    """The operating system rejected a termination request."""


class ProcessTerminator(Protocol):
    """Capability to kill a process immediately."""

    def kill(self, pid: int) -> None:
        """Kill ``pid`` or raise TerminationError."""
        ...


class PsutilTerminator:
    """Sends SIGKILL (TerminateProcess on Windows) through psutil."""

    def kill(self, pid: int) -> None:
        """Kill ``pid`` or raise TerminationError."""
        try:
            psutil.Process(pid).kill()
        except psutil.NoSuchProcess as exc:
            raise TerminationError(f"No such process: {pid}") from exc
        except psutil.AccessDenied as exc:
            raise TerminationError(f"Operation not permitted: {pid}") from exc
        except (psutil.Error, OSError, ValueError) as exc:
            raise TerminationError(str(exc)) from exc


class TerminationOutcome(Enum):
    """Result category of a termination request."""

    SUCCESS = "success"
    FAILURE = "failure"
    INVALID_PID = "invalid_pid"


@dataclass(slots=True, frozen=True)
class TerminationResult:
    """Outcome of ``terminate`` plus a user-facing message."""

    outcome: TerminationOutcome
    message: str
    pid: int | None = None

    @property
    def exit_code(self) -> int:
        """Process exit code for this outcome."""
        return _EXIT_CODES[self.outcome]


_EXIT_CODES = {
    TerminationOutcome.SUCCESS: 0,
    TerminationOutcome.FAILURE: 1,
    TerminationOutcome.INVALID_PID: 2,
}


def parse_pid(value: str) -> int | None:
    """Parse a positive decimal pid, or return None if malformed."""
    text = value.strip()
    if not (text.isascii() and text.isdecimal()):
        return None
    pid = int(text)
    # 0 and negative ids address process groups in kill(2)
    return pid if pid > 0 else None


def terminate(value: str, terminator: ProcessTerminator | None = None) -> TerminationResult:
    """
    Validate ``value`` as a pid and ask the OS to kill that process.

    An invalid argument is reported before any termination attempt.
    """
    pid = parse_pid(value)
    if pid is None:
        logger.debug("Rejected pid argument %r", value)
        return TerminationResult(TerminationOutcome.INVALID_PID, "Error: Invalid PID.")

    if terminator is None:
        terminator = PsutilTerminator()

    try:
        terminator.kill(pid)
    except TerminationError as exc:
        logger.debug("Kill of pid %d failed: %s", pid, exc)
        return TerminationResult(TerminationOutcome.FAILURE, f"kill: {exc}", pid)

    return TerminationResult(
        TerminationOutcome.SUCCESS, f"Successfully sent SIGKILL to PID {pid}", pid
    )
