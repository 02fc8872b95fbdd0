"""
Tuning parameters for the boot packing engine.

Every constant the algorithm depends on lives here so that tests can run on
a coarse grid for speed and callers can trade accuracy for time.

Classes:
    PackingConfig — efficiency factors, clearances, grid and compression steps,
                    and the optional search budget for one ``pack`` call.

Functions:
    load_config   — read a PackingConfig from a YAML file.
"""

from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Optional, Union

import yaml


@dataclass(frozen=True)
class PackingConfig:
    """
    All tuneable parameters of a packing run.

    Attributes:
        base_efficiency:        Usable fraction of a perfectly regular boot.
        minor_efficiency:       Cap applied when a minor irregularity is present.
        moderate_efficiency:    Cap applied for a moderate irregularity.
        significant_efficiency: Cap applied for a significant irregularity.
        opening_clearance:      Margin (mm) subtracted from each declared
                                opening dimension.
        grid_step:              Position grid resolution (mm).
        compression_step:       Increment (percent) of the compression search.
        flat_height_ratio:      A ``flat_only`` orientation must be no taller than
                                this fraction of max(length, width).
        narrow_opening_ratio:   Warn when the opening area is below this
                                fraction of the boot cross-section.
        tight_clearance:        Window (mm) for the near-miss opening warning.
        max_seconds:            Optional wall-clock budget for one call.
        max_position_checks:    Optional budget of grid positions examined.
    """
    base_efficiency: float = 0.85
    minor_efficiency: float = 0.80
    moderate_efficiency: float = 0.75
    significant_efficiency: float = 0.70
    opening_clearance: int = 20
    grid_step: int = 50
    compression_step: int = 5
    flat_height_ratio: float = 0.6
    narrow_opening_ratio: float = 0.6
    tight_clearance: int = 30
    max_seconds: Optional[float] = None
    max_position_checks: Optional[int] = None

    def __post_init__(self) -> None:
        # Steps drive range(); YAML may hand us 50.0 for 50.
        for name in ("grid_step", "compression_step"):
            value = getattr(self, name)
            if isinstance(value, float) and value.is_integer():
                object.__setattr__(self, name, int(value))
            elif isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be a whole number, got {value!r}")
        if self.grid_step <= 0:
            raise ValueError(f"grid_step must be positive, got {self.grid_step}")
        if self.compression_step <= 0:
            raise ValueError(
                f"compression_step must be positive, got {self.compression_step}"
            )
        if self.opening_clearance < 0:
            raise ValueError(
                f"opening_clearance must not be negative, got {self.opening_clearance}"
            )

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict) -> "PackingConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(d) - known)
        if unknown:
            raise ValueError(f"Unknown packing config keys: {unknown}")
        return cls(**d)


def load_config(path: Union[str, Path, None] = None) -> PackingConfig:
    """
    Load a PackingConfig from a YAML file.

    The mapping may sit at the top level or under a ``packing:`` key.
    With no path the defaults are returned.

    Raises:
        FileNotFoundError: *path* was given but does not exist.
        ValueError:        the file is not a mapping or has unknown keys.
    """
    if path is None:
        return PackingConfig()

    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return PackingConfig()
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping, got {type(data).__name__}")

    if "packing" in data:
        data = data["packing"] or {}
        if not isinstance(data, dict):
            raise ValueError(f"{path}: 'packing' must be a mapping")

    return PackingConfig.from_dict(data)
