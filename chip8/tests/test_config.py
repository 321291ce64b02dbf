from __future__ import annotations

import json

import pytest

from chip8.config import CoordinatePolicy, MachineConfig
from chip8.errors import ConfigError


def test_defaults() -> None:
    config = MachineConfig().validate()
    assert config.ips == 200
    assert config.coordinate_policy is CoordinatePolicy.CLAMP
    assert config.increment_index_on_transfer is False
    assert config.shift_uses_vy is False


@pytest.mark.parametrize("raw", ["wrap", "WRAP", " Wrap "])
def test_coordinate_policy_parsing(raw: str) -> None:
    assert MachineConfig(coordinate_policy=raw).coordinate_policy is CoordinatePolicy.WRAP


def test_invalid_coordinate_policy_is_rejected() -> None:
    with pytest.raises(ConfigError):
        MachineConfig(coordinate_policy="bounce")


@pytest.mark.parametrize("ips", [0, -1, 2.5, "fast", False])
def test_invalid_ips_is_rejected(ips) -> None:
    with pytest.raises(ConfigError):
        MachineConfig(ips=ips).validate()


def test_save_and_load_round_trip(tmp_path) -> None:
    path = tmp_path / "machine.json"
    config = MachineConfig(
        ips=700,
        coordinate_policy=CoordinatePolicy.WRAP,
        increment_index_on_transfer=True,
        seed=3,
    )
    config.save(str(path))

    data = json.loads(path.read_text())
    assert data["coordinate_policy"] == "wrap"
    assert MachineConfig.load(str(path)) == config


def test_load_rejects_unknown_keys(tmp_path) -> None:
    path = tmp_path / "machine.json"
    path.write_text(json.dumps({"ips": 100, "turbo": True}))
    with pytest.raises(ConfigError):
        MachineConfig.load(str(path))


def test_load_reports_unreadable_file(tmp_path) -> None:
    with pytest.raises(ConfigError):
        MachineConfig.load(str(tmp_path / "missing.json"))


def test_validate_rejects_policy_assigned_after_construction() -> None:
    config = MachineConfig()
    config.coordinate_policy = "diagonal"
    with pytest.raises(ConfigError):
        config.validate()


def test_validate_normalizes_policy_assigned_as_text() -> None:
    config = MachineConfig()
    config.coordinate_policy = "wrap"
    assert config.validate().coordinate_policy is CoordinatePolicy.WRAP
