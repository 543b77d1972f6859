import logging
import os
import time
from pathlib import Path
from typing import List, Optional

# local
from config.constants import LOG_DIR, LOG_FILE, LOG_BACKUP_COUNT

LOG_FORMAT = '%(asctime)s - %(levelname)s - [%(name)s:%(process)d] %(message)s'


def configure_file_handlers(log_dir: Path = LOG_DIR, backup_count: int = LOG_BACKUP_COUNT) -> List[logging.Handler]:
    """Set up the file handler for this run.

    A new log file is created for each run (by appending a timestamp) and
    older log files are deleted so that only the most recent `backup_count`
    remain. Nothing is ever logged to the terminal being drawn on.
    """
    log_dir = Path(log_dir)
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
    except OSError:
        return []

    timestamp = time.strftime("%Y%m%d-%H%M%S")
    new_log_file = log_dir / f"{LOG_FILE.stem}_{timestamp}{LOG_FILE.suffix}"

    # keep only the latest logs, counting the one about to be created
    all_logs = sorted(log_dir.glob(f"{LOG_FILE.stem}_*{LOG_FILE.suffix}"),
                      key=lambda p: p.stat().st_mtime,
                      reverse=True)
    for old_log in all_logs[max(backup_count - 1, 0):]:
        try:
            old_log.unlink()
        except OSError:
            continue

    formatter = logging.Formatter(LOG_FORMAT)
    try:
        file_handler = logging.FileHandler(str(new_log_file))
    except OSError:
        return []
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)

    return [file_handler]


def configure_logging(debug: bool = False, log_dir: Optional[Path] = None) -> logging.Logger:
    """Configure the root logger for a run and return it."""
    handlers = configure_file_handlers(log_dir or LOG_DIR)
    root = logging.getLogger()
    # Clear any existing handlers.
    root.handlers = []
    if not handlers:
        handlers = [logging.NullHandler()]
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(logging.DEBUG if debug else logging.INFO)
    return root


def set_debug(enabled: bool) -> None:
    logging.getLogger().setLevel(logging.DEBUG if enabled else logging.INFO)


def log_environment(logger: logging.Logger) -> None:
    """Dumps the process environment at DEBUG level."""
    for key, value in sorted(os.environ.items()):
        logger.debug(f"env {key}={value!r}")
