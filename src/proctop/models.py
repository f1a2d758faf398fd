"""Data models for proctop."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType


@dataclass(slots=True, frozen=True)
class ProcessCounters:
    """Raw accounting sample of a single process."""

    pid: int
    cpu_ticks: int  # user + system, scheduler ticks since process start
    command_name: str  # '' if the process was exiting when read
    resident_kb: int


@dataclass(slots=True, frozen=True)
class SystemCounters:
    """Aggregate CPU tick total across all CPUs and categories."""

    ticks: int


@dataclass(slots=True, frozen=True, eq=False)
class Snapshot:
    """
    Immutable capture of system and per-process counters at one instant.

    ``processes`` is exposed as a read-only mapping keyed by pid. Snapshots
    compare and hash by identity.
    """

    system: SystemCounters
    processes: Mapping[int, ProcessCounters]

    def __post_init__(self) -> None:
        """Freeze the process mapping."""
        object.__setattr__(self, "processes", MappingProxyType(dict(self.processes)))

    @classmethod
    def from_counters(
        cls,
        system: SystemCounters,
        counters: Iterable[ProcessCounters],
    ) -> "Snapshot":
        """
        Build a snapshot from a sequence of per-process counters.

        Raises:
            ValueError: If the same pid occurs more than once.
        """
        processes: dict[int, ProcessCounters] = {}
        for counter in counters:
            if counter.pid in processes:
                raise ValueError(f"duplicate pid {counter.pid} in snapshot")
            processes[counter.pid] = counter
        return cls(system=system, processes=processes)


@dataclass(slots=True, frozen=True)
class DerivedRow:
    """One row of the live table, derived from two snapshots."""

    pid: int
    command_name: str
    memory_mb: float
    cpu_percent: float
