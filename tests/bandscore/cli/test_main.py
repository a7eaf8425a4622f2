"""Tests for top-level CLI parser and command dispatch logic."""

from pathlib import Path

import pytest

from bandscore.cli import main as mod


class _FakeCommand:
    """Simple command module replacement for dispatch tests."""

    def __init__(self, exit_code=None) -> None:  # noqa: ANN001
        self.ran = False
        self.exit_code = exit_code

    def add_subparser(self, subparsers) -> None:  # noqa: ANN001
        p = subparsers.add_parser("fake")
        p.add_argument("--config", type=Path, required=True)

    def run(self, args, cfg):  # noqa: ANN001, ANN201
        self.ran = True
        self.args = args
        self.cfg = cfg
        return self.exit_code


def test_build_arg_parser_contains_registered_subcommands() -> None:
    """Core parser should include all keys declared in command registry."""
    parser = mod.build_arg_parser()

    args = parser.parse_args([
        "replay",
        "--config",
        "config/config.yaml",
        "--in",
        "a.tsv",
        "b.csv",
        "--out-dir",
        "derived",
    ])

    assert args.command == "replay"
    assert args.inputs == [Path("a.tsv"), Path("b.csv")]
    assert args.debug is False


def test_main_dispatches_to_selected_command(monkeypatch, tmp_path: Path) -> None:
    """`main(...)` should load config once and call module.run(args, cfg)."""
    fake = _FakeCommand()
    monkeypatch.setattr(mod, "_COMMANDS", {"fake": fake})
    monkeypatch.setattr(mod, "load_project_config", lambda p: {"loaded_from": p})
    monkeypatch.setattr(mod, "configure_logging", lambda level: None)

    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text("x: 1\n", encoding="utf-8")

    exit_code = mod.main(["fake", "--config", str(cfg_path)])

    assert exit_code == 0
    assert fake.ran is True
    assert fake.cfg["loaded_from"] == cfg_path


def test_main_propagates_command_exit_code(monkeypatch, tmp_path: Path) -> None:
    """A non-zero code from the handler becomes the process exit code."""
    fake = _FakeCommand(exit_code=1)
    monkeypatch.setattr(mod, "_COMMANDS", {"fake": fake})
    monkeypatch.setattr(mod, "load_project_config", lambda p: {})
    monkeypatch.setattr(mod, "configure_logging", lambda level: None)

    assert mod.main(["fake", "--config", str(tmp_path / "config.yaml")]) == 1


def test_main_enables_debug_logging_when_verbose(monkeypatch, tmp_path: Path) -> None:
    """`-v` switches the logging bootstrap to DEBUG."""
    levels = []
    monkeypatch.setattr(mod, "_COMMANDS", {"fake": _FakeCommand()})
    monkeypatch.setattr(mod, "load_project_config", lambda p: {})
    monkeypatch.setattr(mod, "configure_logging", levels.append)

    mod.main(["-v", "fake", "--config", str(tmp_path / "config.yaml")])

    assert levels == [mod.logging.DEBUG]


def test_build_arg_parser_rejects_missing_add_subparser(monkeypatch) -> None:
    """Registry entries without add_subparser should fail early."""
    class _Broken:
        pass

    monkeypatch.setattr(mod, "_COMMANDS", {"oops": _Broken()})

    with pytest.raises(RuntimeError, match="missing add_subparser"):
        mod.build_arg_parser()
