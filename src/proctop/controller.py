"""Sample-render cycle for proctop."""

import logging
import time
from collections.abc import Callable
from enum import Enum

from proctop.config import DEFAULT_CONFIG, MonitorConfig
from proctop.engine import derive_rows
from proctop.models import DerivedRow, Snapshot
from proctop.monitor import take_snapshot

logger = logging.getLogger(__name__)


class LoopState(Enum):
    """States of the sampling loop."""

    PRIMING = "priming"
    SAMPLING = "sampling"


class SamplingLoop:
    """
    Drives snapshot capture and delta derivation at a fixed cadence.

    Holds exactly one previous snapshot at a time. The first cycle only
    primes it; each later cycle derives rows against it and then hands the
    new snapshot over as the next baseline. Rate correctness relies on the
    interval wait being accurate; elapsed time is not measured.
    """

    def __init__(
        self,
        snapshot_source: Callable[[], Snapshot] = take_snapshot,
        config: MonitorConfig = DEFAULT_CONFIG,
    ) -> None:
        """
        Initialize the SamplingLoop.

        Args:
            snapshot_source: Callable returning a fresh Snapshot.
            config: Interval and display settings.
        """
        self._take_snapshot = snapshot_source
        self._config = config
        self._state = LoopState.PRIMING
        self._previous: Snapshot | None = None
        self._cycles = 0

    @property
    def state(self) -> LoopState:
        """Current loop state."""
        return self._state

    @property
    def interval(self) -> float:
        """Seconds between snapshots."""
        return self._config.sample_interval

    @property
    def cycles(self) -> int:
        """Number of completed sampling cycles."""
        return self._cycles

    def cycle(self) -> list[DerivedRow] | None:
        """
        Run one step of the state machine.

        Returns None for the priming step, otherwise the derived rows.
        """
        current = self._take_snapshot()

        if self._state is LoopState.PRIMING or self._previous is None:
            self._previous = current
            self._state = LoopState.SAMPLING
            logger.debug("Primed with %d processes", len(current.processes))
            return None

        rows = derive_rows(
            self._previous,
            current,
            threshold=self._config.visibility_threshold,
        )
        self._previous = current
        self._cycles += 1
        return rows

    def run(
        self,
        render: Callable[[list[DerivedRow]], None],
        should_stop: Callable[[], bool] | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """
        Prime, then sample and render until ``should_stop`` returns True.

        Without a stop condition the loop runs until interrupted. A cycle
        that raises is logged and skipped; the next one retries.
        """
        if self._state is LoopState.PRIMING:
            self._safe_cycle()

        while should_stop is None or not should_stop():
            sleep(self.interval)
            rows = self._safe_cycle()
            if rows is not None:
                render(rows)

    def _safe_cycle(self) -> list[DerivedRow] | None:
        """Run one cycle, logging failures instead of raising."""
        try:
            return self.cycle()
        except Exception:
            logger.exception("Sampling cycle failed")
            return None
