"""
Logging setup for the genre-fixer command line.

Library modules only call logging.getLogger(__name__); the CLI installs the
handlers once through configure_logging().
"""
import logging
import os
import sys
from typing import Optional

_configured = False
_HANDLER_TAG = "_genrefixer_handler"
LOG_FORMAT = '%(asctime)s | %(levelname)-5s | %(name)s | %(message)s'


def configure_logging(level: str = 'INFO', log_file: Optional[str] = None, force: bool = False) -> None:
    """
    Send log records to stdout and, optionally, to a file.

    The console shows `level` and above; the file always gets DEBUG, so a
    run's per-tag trace can be read back after a --quiet run. LOG_LEVEL and
    LOG_FILE in the environment override the arguments. Repeated calls are
    ignored unless force=True.
    """
    global _configured
    if _configured and not force:
        return

    level = os.getenv('LOG_LEVEL', level).upper()
    log_file = log_file or os.getenv('LOG_FILE')

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for handler in [h for h in root.handlers if getattr(h, _HANDLER_TAG, False)]:
        root.removeHandler(handler)
        handler.close()

    handlers = [(logging.StreamHandler(sys.stdout), getattr(logging, level, logging.INFO))]
    if log_file:
        handlers.append((logging.FileHandler(log_file, encoding='utf-8'), logging.DEBUG))

    for handler, handler_level in handlers:
        handler.setLevel(handler_level)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S'))
        setattr(handler, _HANDLER_TAG, True)
        root.addHandler(handler)

    # urllib3 logs every connection at DEBUG; one per Last.FM query
    for noisy in ('urllib3', 'requests'):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    _configured = True
    logging.getLogger(__name__).debug(f"Logging configured: level={level}, file={log_file or 'none'}")
