"""Startup configuration for the CHIP-8 interpreter."""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Optional, Union
import json

from ..constants import DEFAULT_IPS
from ..errors import ConfigError


class CoordinatePolicy(str, Enum):
    """How sprite pixels past the display edge are handled."""

    WRAP = "wrap"  # coordinates modulo the display size
    CLAMP = "clamp"  # pixels at or past the edge are not drawn

    @classmethod
    def parse(cls, value: Union[str, "CoordinatePolicy"]) -> "CoordinatePolicy":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ConfigError(
                f"Invalid coordinate policy {value!r}: supply either `wrap` or `clamp`"
            ) from None


@dataclass
class MachineConfig:
    """Interpreter configuration, fixed for the lifetime of a run."""
    ips: int = DEFAULT_IPS
    coordinate_policy: CoordinatePolicy = CoordinatePolicy.CLAMP
    # FX55/FX65: advance I past the transferred block (original COSMAC VIP)
    # or leave it unchanged (later interpreters). Documentation disagrees.
    increment_index_on_transfer: bool = False
    # 8XY6/8XYE: shift VY into VX instead of shifting VX in place.
    shift_uses_vy: bool = False
    seed: Optional[int] = None

    def __post_init__(self):
        self.coordinate_policy = CoordinatePolicy.parse(self.coordinate_policy)

    def validate(self) -> "MachineConfig":
        self.coordinate_policy = CoordinatePolicy.parse(self.coordinate_policy)
        if isinstance(self.ips, bool) or not isinstance(self.ips, int) or self.ips <= 0:
            raise ConfigError(f"Instructions per second must be a positive integer, got {self.ips!r}")
        return self

    def to_dict(self) -> dict:
        data = asdict(self)
        data["coordinate_policy"] = self.coordinate_policy.value
        return data

    @classmethod
    def from_dict(cls, data: dict) -> 'MachineConfig':
        known = {"ips", "coordinate_policy", "increment_index_on_transfer", "shift_uses_vy", "seed"}
        unknown = set(data) - known
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {sorted(unknown)}")
        return cls(**data).validate()

    def save(self, path: str) -> None:
        """Save configuration to JSON file."""
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, path: str) -> 'MachineConfig':
        """Load configuration from JSON file."""
        try:
            with open(path, 'r') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise ConfigError(f"Cannot read configuration {path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ConfigError(f"Configuration {path} must be a JSON object")
        return cls.from_dict(data)
