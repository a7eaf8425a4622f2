"""Wiring tests for `bandscore.cli.commands.replay`."""

import argparse
from pathlib import Path

import pytest

from bandscore.cli.commands import replay as mod


def _args(tmp_path: Path, *names: str, debug: bool = False) -> argparse.Namespace:
    return argparse.Namespace(
        inputs=[tmp_path / name for name in names],
        out_dir=tmp_path / "out",
        debug=debug,
    )


def test_run_forwards_each_input(monkeypatch, tmp_path: Path) -> None:
    """Every recording is replayed into <stem>_scores.tsv under --out-dir."""
    calls = []
    monkeypatch.setattr(mod, "replay_file_to_file", lambda **k: calls.append(k))

    exit_code = mod.run(_args(tmp_path, "s01.tsv", "s02.csv"), cfg={"cfg": True})

    assert exit_code == 0
    assert [c["output_path"] for c in calls] == [
        tmp_path / "out" / "s01_scores.tsv",
        tmp_path / "out" / "s02_scores.tsv",
    ]
    assert all(c["config"] == {"cfg": True} for c in calls)


def test_run_continues_after_failure(monkeypatch, tmp_path: Path) -> None:
    """A failing recording is logged and the batch goes on."""
    seen = []

    def _replay(**kwargs):  # noqa: ANN003, ANN202
        seen.append(kwargs["input_path"].name)
        if kwargs["input_path"].name == "bad.tsv":
            raise ValueError("Recording must contain columns")

    monkeypatch.setattr(mod, "replay_file_to_file", _replay)

    exit_code = mod.run(_args(tmp_path, "bad.tsv", "good.tsv"), cfg={})

    assert exit_code == 1
    assert seen == ["bad.tsv", "good.tsv"]
    assert (tmp_path / "out" / mod.LOG_FILENAME).exists()


def test_run_reraises_in_debug_mode(monkeypatch, tmp_path: Path) -> None:
    """--debug stops at the first failure."""
    def _replay(**kwargs):  # noqa: ANN003, ANN202
        raise ValueError("broken recording")

    monkeypatch.setattr(mod, "replay_file_to_file", _replay)

    with pytest.raises(ValueError, match="broken recording"):
        mod.run(_args(tmp_path, "bad.tsv", debug=True), cfg={})


def test_add_subparser_registers_command() -> None:
    """Subparser registration should succeed with argparse registry."""
    parser = argparse.ArgumentParser(prog="bandscore")
    subparsers = parser.add_subparsers(dest="command", required=True)

    mod.add_subparser(subparsers)

    args = parser.parse_args(["replay", "--config", "c.yaml", "--in", "a.tsv", "--out-dir", "out", "--debug"])
    assert args.debug is True
