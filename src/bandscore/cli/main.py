# ==================================================================================================
#                                   CLI
# ==================================================================================================
#
# Entry point for the `bandscore` command-line interface.
#
# This module is a thin dispatcher:
# - parse global + subcommand arguments
# - configure logging and load project config once
# - call a single command handler per subcommand
#
# Normalization logic must live in `bandscore.*` library modules, not here.
#
# ==================================================================================================
# Imports
# ==================================================================================================

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, Sequence

from bandscore.config import load_project_config
from bandscore.cli.types import CliCommand
from bandscore.logging import configure_logging

from bandscore.cli.commands import replay as cmd_replay


# ==================================================================================================
# Command registry
# ==================================================================================================

_COMMANDS: Dict[str, CliCommand] = {
    "replay": cmd_replay,
}


# ==================================================================================================
# Argument parsing
# ==================================================================================================

def build_arg_parser() -> argparse.ArgumentParser:
    """
    Build the top-level CLI parser with subcommands.

    Returns
    -------
    argparse.ArgumentParser
        Configured parser.

    Usage example
    -------------
        bandscore replay --config config/config.yaml --in recordings/s01.tsv recordings/s02.tsv \
          --out-dir derived/scores
    """
    parser = argparse.ArgumentParser(
        prog="bandscore",
        description="Adaptive EEG band-power normalization for headband streams",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")

    subparsers = parser.add_subparsers(dest="command", required=True, metavar="<command>")

    for name, module in _COMMANDS.items():
        if not hasattr(module, "add_subparser"):
            raise RuntimeError(f"CLI command module for '{name}' is missing add_subparser().")
        module.add_subparser(subparsers)

    return parser


# ==================================================================================================
# Entry point
# ==================================================================================================

def main(argv: Sequence[str] | None = None) -> int:
    """
    CLI entry point.

    Parameters
    ----------
    argv
        Optional argv for testing. If None, reads from sys.argv.

    Returns
    -------
    int
        Process exit code.

    Usage example
    -------------
        main([
            "replay",
            "--config", "config/config.yaml",
            "--in", "recordings/s01.tsv",
            "--out-dir", "derived/scores",
        ])
    """
    parser = build_arg_parser()
    args = parser.parse_args(argv)  # noqa

    configure_logging(logging.DEBUG if getattr(args, "verbose", False) else logging.INFO)

    # Every subcommand requires --config (enforced by handlers)
    if not hasattr(args, "config"):
        raise RuntimeError("Internal error: subcommand args missing --config.")

    cfg = load_project_config(Path(args.config))

    command_name = str(args.command)
    module = _COMMANDS.get(command_name)
    if module is None:
        raise RuntimeError(f"Unknown command: {command_name}")

    if not hasattr(module, "run"):
        raise RuntimeError(f"CLI command module for '{command_name}' is missing run().")

    exit_code = module.run(args, cfg)
    return int(exit_code or 0)


if __name__ == "__main__":
    sys.exit(main())
