"""Counter readers and snapshot capture for proctop."""

import logging
import os

import psutil

from proctop.models import ProcessCounters, Snapshot, SystemCounters

logger = logging.getLogger(__name__)

# Categories summed into the system-wide total. Leaving one out skews
# every per-process percentage by the same factor.
CPU_CATEGORIES = (
    "user",
    "nice",
    "system",
    "idle",
    "iowait",
    "irq",
    "softirq",
    "steal",
)


def _clock_ticks() -> int:
    """Scheduler ticks per second for this platform."""
    try:
        return os.sysconf("SC_CLK_TCK")
    except (AttributeError, ValueError, OSError):
        return 100


CLOCK_TICKS = _clock_ticks()


def to_ticks(seconds: float) -> int:
    """Convert psutil CPU seconds back to whole scheduler ticks."""
    return round(seconds * CLOCK_TICKS)


def read_system_ticks() -> SystemCounters:
    """
    Read the aggregate CPU tick total.

    Returns a zero reading if the accounting source cannot be read; the
    delta engine treats a non-positive system delta as an idle cycle.
    """
    try:
        times = psutil.cpu_times()
    except (OSError, psutil.Error) as exc:
        logger.warning("System CPU counters unreadable: %s", exc)
        return SystemCounters(ticks=0)

    # Categories missing on this platform count as zero
    total = sum(getattr(times, name, 0.0) for name in CPU_CATEGORIES)
    return SystemCounters(ticks=to_ticks(total))


def list_pids() -> set[int]:
    """Return the identifiers of all processes visible right now."""
    return set(psutil.pids())


def read_process_counters(pid: int) -> ProcessCounters | None:
    """
    Read CPU ticks, command name and resident memory for one process.

    Returns None when the process exited (or became unreadable) between
    enumeration and the read. That race is expected and not an error.
    """
    try:
        proc = psutil.Process(pid)
        with proc.oneshot():
            cpu = proc.cpu_times()
            name = proc.name()
            rss = proc.memory_info().rss
    except (psutil.Error, OSError) as exc:
        logger.debug("Skipping pid %d: %s", pid, exc.__class__.__name__)
        return None

    return ProcessCounters(
        pid=pid,
        cpu_ticks=to_ticks(cpu.user + cpu.system),
        command_name=name or "",
        resident_kb=max(rss, 0) // 1024,
    )


def take_snapshot() -> Snapshot:
    """Capture the system total and every readable process at this instant."""
    system = read_system_ticks()
    counters = []
    for pid in sorted(list_pids()):
        counter = read_process_counters(pid)
        if counter is not None:
            counters.append(counter)
    return Snapshot.from_counters(system, counters)
