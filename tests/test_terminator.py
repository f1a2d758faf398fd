"""Tests for the kill command path."""

import subprocess
import sys

import psutil
import pytest

from proctop.terminator import (
    PsutilTerminator,
    TerminationError,
    TerminationOutcome,
    parse_pid,
    terminate,
)


class RecordingTerminator:
    """Fake terminator that records requests instead of killing."""

    def __init__(self, error=None):
        self.requests = []
        self._error = error

    def kill(self, pid):
        self.requests.append(pid)
        if self._error is not None:
            raise self._error


def unused_pid() -> int:
    """Return a pid that does not belong to any running process."""
    pid = max(psutil.pids()) + 100000
    while psutil.pid_exists(pid):
        pid += 1
    return pid


class TestParsePid:
    """Tests for parse_pid."""

    @pytest.mark.parametrize("value, expected", [("1", 1), ("4242", 4242), (" 17 ", 17)])
    def test_valid(self, value, expected):
        """Test well-formed positive integers are accepted."""
        assert parse_pid(value) == expected

    @pytest.mark.parametrize(
        "value",
        ["abc", "", "12abc", "1.5", "-1", "0", "+3", "0x10", "\u0663", "\uff11"],
    )
    def test_invalid(self, value):
        """Test malformed, non-ASCII and non-positive ids are rejected."""
        assert parse_pid(value) is None


class TestTerminate:
    """Tests for terminate with a fake terminator."""

    def test_invalid_argument_never_calls_terminator(self):
        """Test 'abc' is an input error reported before any kill attempt."""
        terminator = RecordingTerminator()

        result = terminate("abc", terminator)

        assert result.outcome is TerminationOutcome.INVALID_PID
        assert result.message == "Error: Invalid PID."
        assert result.exit_code == 2
        assert terminator.requests == []

    def test_success(self):
        """Test an accepted request is reported as success."""
        terminator = RecordingTerminator()

        result = terminate("1234", terminator)

        assert result.outcome is TerminationOutcome.SUCCESS
        assert result.pid == 1234
        assert result.message == "Successfully sent SIGKILL to PID 1234"
        assert result.exit_code == 0
        assert terminator.requests == [1234]

    def test_non_ascii_digits_never_call_terminator(self):
        """Test digits from other scripts are an input error, not pid 3."""
        terminator = RecordingTerminator()

        result = terminate("\u0663", terminator)

        assert result.outcome is TerminationOutcome.INVALID_PID
        assert terminator.requests == []

    def test_rejected_request_is_failure(self):
        """Test a rejected request is distinct from an input error."""
        terminator = RecordingTerminator(TerminationError("Operation not permitted: 1"))

        result = terminate("1", terminator)

        assert result.outcome is TerminationOutcome.FAILURE
        assert result.message == "kill: Operation not permitted: 1"
        assert result.exit_code == 1
        assert terminator.requests == [1]


class TestPsutilTerminator:
    """Tests against real processes."""

    def test_kills_existing_process(self):
        """Test a live child process is killed."""
        child = subprocess.Popen([sys.executable, "-c", "import time; time.sleep(60)"])
        try:
            result = terminate(str(child.pid), PsutilTerminator())

            assert result.outcome is TerminationOutcome.SUCCESS
            assert child.wait(timeout=5.0) != 0
        finally:
            if child.poll() is None:
                child.kill()
                child.wait(timeout=5.0)

    def test_missing_process_is_failure(self):
        """Test a pid with no process yields failure, not a crash."""
        result = terminate(str(unused_pid()), PsutilTerminator())

        assert result.outcome is TerminationOutcome.FAILURE
        assert result.message.startswith("kill: No such process")

    def test_raises_termination_error(self):
        """Test the terminator maps psutil errors to TerminationError."""
        with pytest.raises(TerminationError):
            PsutilTerminator().kill(unused_pid())
