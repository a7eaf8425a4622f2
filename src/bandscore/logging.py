# ==================================================================================================
#                                   Logging
# ==================================================================================================
#
# Tiny logging bootstrap used by the CLI entrypoint. Library modules only ask
# for `logging.getLogger(__name__)`; handlers and format are decided here.

import logging

def configure_logging(level: int = logging.INFO) -> None:
    """
    Configure global logging once.

    Parameters
    ----------
    level
        Logging level.

    Usage example
    -------------
        configure_logging(logging.DEBUG)
        logging.getLogger("bandscore").debug("degenerate range")
    """
    # No `force=True`: an embedding host keeps its own handlers.
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
