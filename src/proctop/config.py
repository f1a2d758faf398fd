"""Runtime constants for proctop."""

from dataclasses import dataclass

SAMPLE_INTERVAL = 1.0  # seconds between snapshots
COMMAND_WIDTH = 18
VISIBILITY_THRESHOLD = 0.01


@dataclass(slots=True, frozen=True)
class MonitorConfig:
    """Fixed settings shared by the sampling loop and the presenters."""

    sample_interval: float = SAMPLE_INTERVAL
    command_width: int = COMMAND_WIDTH
    visibility_threshold: float = VISIBILITY_THRESHOLD


DEFAULT_CONFIG = MonitorConfig()
