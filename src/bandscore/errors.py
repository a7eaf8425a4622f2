"""
Error types and batch error-handling primitives.

Two kinds of failure live here:
1) Lookup failures inside the engine (`UnknownBandError`). Numeric edge cases
   such as a degenerate percentile range or power-domain overflow are not
   errors; they resolve to defined fallback values where they occur.
2) Per-recording failures in batch replays. `run_step` either re-raises
   (debug mode) or captures a structured `StepFailure` so the batch can move
   on to the next recording (run mode).
"""

import json
import logging
import traceback
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Generic, Optional, TypeVar

# ==================================================================================================
#                                   TYPES
# ==================================================================================================

T = TypeVar("T")


class UnknownBandError(KeyError):
    """
    Raised when a band identifier is not one of the five known bands.

    Usage example
    -------------
        try:
            band = Band.parse("kappa")
        except UnknownBandError as exc:
            print(exc.identifier)
    """

    def __init__(self, identifier: Any) -> None:
        super().__init__(identifier)
        self.identifier = identifier

    def __str__(self) -> str:
        return f"Unknown band identifier: {self.identifier!r}"


@dataclass(frozen=True)
class ErrorPolicy:
    """
    Error handling policy for batch replays.

    Attributes
    ----------
    debug : bool
        If True, exceptions are re-raised (fail-fast).
        If False, exceptions are logged and the batch continues.
    log_path : Path
        Where to write failure logs (file logger).
    """

    debug: bool
    log_path: Path


@dataclass(frozen=True)
class StepFailure:
    """
    Structured failure record for non-debug runs.

    Attributes
    ----------
    step : str
        Name of the step that failed.
    context : dict[str, Any]
        Useful metadata (recording path, output path, ...).
    exc_type : str
        Exception class name.
    message : str
        Exception message.
    traceback : str
        Full traceback.
    timestamp_utc : str
        ISO timestamp.
    """

    step: str
    context: dict[str, Any]
    exc_type: str
    message: str
    traceback: str
    timestamp_utc: str


@dataclass(frozen=True)
class StepResult(Generic[T]):
    """
    Result wrapper: either value or failure.

    Usage example
    -------------
        result = run_step(policy, "replay", {"input": "s01.tsv"}, replay_file_to_file, **kwargs)
        if result.failure is not None:
            ...
    """

    value: Optional[T]
    failure: Optional[StepFailure]


# ==================================================================================================
#                                   HELPERS
# ==================================================================================================

def make_logger(*, log_path: Path) -> logging.Logger:
    """
    Return a file-backed logger used by batch steps.

    The function is idempotent for a given path: it avoids attaching duplicate
    handlers when called repeatedly in long-running processes or tests.
    """
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger("bandscore.batch")
    logger.setLevel(logging.INFO)

    # One file handler per path, otherwise every line is written N times.
    if not any(isinstance(h, logging.FileHandler) and h.baseFilename == str(log_path) for h in logger.handlers):
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(logging.INFO)
        formatter = logging.Formatter(
            fmt="%(asctime)s | %(levelname)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


# ==================================================================================================
#                                   CORE LOGIC
# ==================================================================================================

def run_step(
    policy: ErrorPolicy,
    step: str,
    context: dict[str, Any],
    func: Callable[..., T],
    *args: Any,
    **kwargs: Any,
) -> StepResult[T]:
    """
    Run a batch step with policy-controlled error handling.

    In debug mode, re-raises exceptions to halt immediately.
    In run mode, logs the failure and returns StepResult(value=None, failure=...).

    Usage example
    -------------
        policy = ErrorPolicy(debug=False, log_path=Path("replay.log"))
        res = run_step(policy, "replay", {"input": str(path)}, replay_file_to_file, input_path=path, ...)
        if res.failure:
            pass
    """
    logger = make_logger(log_path=policy.log_path)

    try:
        value = func(*args, **kwargs)
        return StepResult(value=value, failure=None)
    except Exception as exc:  # noqa: BLE001 (intentional: boundary catch)
        tb = traceback.format_exc()
        failure = StepFailure(
            step=step,
            context=context,
            exc_type=type(exc).__name__,
            message=str(exc),
            traceback=tb,
            timestamp_utc=datetime.now(timezone.utc).isoformat(),
        )

        logger.error("%s failed | %s: %s", step, failure.exc_type, failure.message)
        logger.error("context=%s", json.dumps(context, ensure_ascii=False, default=str))
        logger.error("traceback=%s", tb)

        if policy.debug:
            raise

        return StepResult(value=None, failure=failure)
