"""Delta engine: turns two snapshots into table rows."""

import logging

from proctop.config import VISIBILITY_THRESHOLD
from proctop.models import DerivedRow, Snapshot

logger = logging.getLogger(__name__)


def derive_rows(
    prev: Snapshot,
    curr: Snapshot,
    threshold: float = VISIBILITY_THRESHOLD,
) -> list[DerivedRow]:
    """
    Derive CPU utilization and memory for every process seen in both snapshots.

    CPU percent is the share of system-wide ticks the process consumed between
    the two snapshots. Processes new in ``curr`` have no baseline yet and are
    left out of this cycle. A per-process counter that went backwards means
    the pid was reused; its delta is clamped to zero.

    Rows are returned in ``curr`` order; sorting is up to the presenter.

    Args:
        prev: Earlier snapshot.
        curr: Later snapshot from the same source.
        threshold: Rows with neither CPU percent nor memory (MB) above this
            value are suppressed.
    """
    system_delta = curr.system.ticks - prev.system.ticks
    if system_delta <= 0:
        logger.debug("Non-positive system delta (%d), reporting 0%% CPU", system_delta)

    rows: list[DerivedRow] = []
    for pid, current in curr.processes.items():
        previous = prev.processes.get(pid)
        if previous is None:
            continue

        proc_delta = current.cpu_ticks - previous.cpu_ticks
        if proc_delta < 0:
            logger.debug(
                "Counter regression for pid %d (%d -> %d), clamping to 0",
                pid,
                previous.cpu_ticks,
                current.cpu_ticks,
            )
            proc_delta = 0

        cpu_percent = 100.0 * proc_delta / system_delta if system_delta > 0 else 0.0
        memory_mb = current.resident_kb / 1024.0

        # No name means the process was half-gone when read
        if not current.command_name:
            continue

        if cpu_percent > threshold or memory_mb > threshold:
            rows.append(
                DerivedRow(
                    pid=pid,
                    command_name=current.command_name,
                    memory_mb=memory_mb,
                    cpu_percent=cpu_percent,
                )
            )

    return rows
