# ==================================================================================================
#                               CLI: replay
# ==================================================================================================
#
# Command handler for: `bandscore replay ...`
#
# Responsibilities
# ----------------
# - define subcommand arguments (add_subparser)
# - replay each recording through run_step so one bad file does not stop the batch
#
# No normalization logic belongs here.
#

# ==================================================================================================
# Imports
# ==================================================================================================

import argparse
import logging
from pathlib import Path
from typing import Any

from bandscore.errors import ErrorPolicy, run_step
from bandscore.replay import replay_file_to_file

logger = logging.getLogger(__name__)

# ==================================================================================================
# Constants
# ==================================================================================================

OUTPUT_SUFFIX: str = "_scores.tsv"
LOG_FILENAME: str = "replay.log"


# ==================================================================================================
# Subparser
# ==================================================================================================

def add_subparser(subparsers: Any) -> None:
    """
    Register the `replay` subcommand.

    Parameters
    ----------
    subparsers
        Subparser registry from the top-level CLI.

    Usage example
    -------------
        # called internally by bandscore.cli.main.build_arg_parser()
        add_subparser(subparsers)
    """
    parser = subparsers.add_parser(
        "replay",
        help="Replay recorded headband messages and write per-frame band scores",
    )

    parser.add_argument("--config", type=Path, required=True, help="Path to config YAML.")
    parser.add_argument(
        "--in",
        dest="inputs",
        type=Path,
        nargs="+",
        required=True,
        help="One or more recording files (CSV/TSV).",
    )
    parser.add_argument("--out-dir", type=Path, required=True, help="Directory for <stem>_scores.tsv outputs.")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Stop at the first failing recording instead of logging and continuing.",
    )


# ==================================================================================================
# Runner
# ==================================================================================================

def run(args: argparse.Namespace, cfg) -> int:
    """
    Execute the `replay` command.

    Parameters
    ----------
    args
        Parsed argparse namespace for this subcommand.
    cfg
        Project config (already loaded once in bandscore.cli.main).

    Returns
    -------
    int
        0 if every recording was replayed, 1 otherwise.

    Usage example
    -------------
        # called internally by bandscore.cli.main.main()
        run(args, cfg)
    """
    out_dir = Path(args.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    policy = ErrorPolicy(debug=bool(args.debug), log_path=out_dir / LOG_FILENAME)

    failures = 0
    for input_path in args.inputs:
        input_path = Path(input_path)
        output_path = out_dir / f"{input_path.stem}{OUTPUT_SUFFIX}"
        result = run_step(
            policy,
            "replay",
            {"input": str(input_path), "output": str(output_path)},
            replay_file_to_file,
            input_path=input_path,
            output_path=output_path,
            config=cfg,
        )
        if result.failure is not None:
            failures += 1
            logger.warning("Failed to replay %s: %s", input_path, result.failure.message)

    if failures:
        logger.error("%d of %d recordings failed; see %s", failures, len(args.inputs), policy.log_path)
        return 1
    return 0
