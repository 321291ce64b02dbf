from __future__ import annotations

import pytest

from chip8.cli import build_parser, main, resolve_config
from chip8.config import CoordinatePolicy


def _write_rom(tmp_path, data: bytes) -> str:
    path = tmp_path / "program.ch8"
    path.write_bytes(data)
    return str(path)


def test_runs_program_and_prints_display(tmp_path, capsys) -> None:
    # LD I, 0x000 ; DRW V0, V0, 5
    rom = _write_rom(tmp_path, bytes.fromhex("a000d005"))
    assert main(["--rom", rom, "--ips", "10000", "--steps", "2", "--no-dump"]) == 0

    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith("OOOO....")
    assert len(lines) == 32


def test_fault_exits_with_error(tmp_path, capsys) -> None:
    rom = _write_rom(tmp_path, b"\xff\xff")
    assert main(["--rom", rom, "--ips", "10000", "--steps", "5"]) == 1

    captured = capsys.readouterr()
    assert "Fault: Unknown" in captured.out
    assert "pc=0x200 opcode=0xFFFF" in captured.err


def test_disassemble_lists_program(tmp_path, capsys) -> None:
    rom = _write_rom(tmp_path, b"\x00\xe0\x12\x00")
    assert main(["--rom", rom, "--disassemble"]) == 0
    assert capsys.readouterr().out.splitlines() == [
        "200: 00E0  CLS",
        "202: 1200  JP 0x200",
    ]


def test_save_display_writes_png(tmp_path) -> None:
    rom = _write_rom(tmp_path, bytes.fromhex("d005"))
    image = tmp_path / "out.png"
    assert (
        main(
            [
                "--rom", rom, "--ips", "10000", "--steps", "1",
                "--no-dump", "--save-display", str(image),
            ]
        )
        == 0
    )
    assert image.read_bytes().startswith(b"\x89PNG")


@pytest.mark.parametrize(
    "argv",
    [
        ["--displaymode", "bounce"],
        ["--ips", "0"],
        ["--hold-keys", "p"],
        ["--steps", "-1"],
    ],
)
def test_invalid_arguments_exit_with_usage_error(tmp_path, argv) -> None:
    rom = _write_rom(tmp_path, b"\x12\x00")
    with pytest.raises(SystemExit) as excinfo:
        main(["--rom", rom, *argv])
    assert excinfo.value.code == 2


def test_missing_rom_is_a_usage_error(tmp_path) -> None:
    with pytest.raises(SystemExit):
        main([])
    with pytest.raises(SystemExit):
        main(["--rom", str(tmp_path / "missing.ch8")])


def test_command_line_overrides_config_file(tmp_path) -> None:
    config_path = tmp_path / "machine.json"
    config_path.write_text('{"ips": 500, "coordinate_policy": "wrap", "seed": 1}')
    args = build_parser().parse_args(
        ["--config", str(config_path), "--ips", "900", "--increment-index"]
    )
    config = resolve_config(args)
    assert config.ips == 900
    assert config.coordinate_policy is CoordinatePolicy.WRAP
    assert config.increment_index_on_transfer is True
    assert config.seed == 1
