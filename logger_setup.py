# Module for setting up logging
import logging
import sys
import os

import constants


def _build_handlers(log_file):
    """File handler for the service log plus a stdout handler for the server console."""
    log_dir = os.path.dirname(log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
    return [
        logging.FileHandler(log_file, mode='a', encoding='utf-8'),
        logging.StreamHandler(sys.stdout),
    ]


def setup_logging(log_file=constants.DEFAULT_LOG_FILE, level=constants.DEFAULT_LOG_LEVEL):
    """
    Routes every log record of the mirror service (uvicorn's included, since it
    runs with log_config=None) to the service log file and to stdout.
    Exits the process when the log file can't be opened.
    """
    try:
        handlers = _build_handlers(log_file)
    except OSError as e:
        # Logging isn't available yet, report straight to stderr
        print(f"Error: Could not open service log {log_file}: {e}", file=sys.stderr)
        sys.exit(1)

    formatter = logging.Formatter(constants.LOG_FORMAT)
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    # Rebuilding the app must not duplicate output
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    logging.info(f"Logging setup complete (level={logging.getLevelName(root_logger.level)}, file={log_file}).")
