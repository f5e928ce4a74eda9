"""
Logging setup for the catalog service.

Everything logs through the standard ``logging`` module with one line
per record: timestamp, level, logger name and message.  Records go to
stderr and, when ``LOG_FILE`` is configured, to a UTF-8 file as well.
The Azure SDK is chatty (one INFO record per HTTP round trip to Cosmos
DB), so its loggers are capped at WARNING unless the service itself
runs at DEBUG.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that only matter when debugging.
_SDK_LOGGERS = ("azure", "azure.core.pipeline.policies.http_logging_policy")


def _file_handler(logfile: str, formatter: logging.Formatter) -> logging.Handler:
    path = Path(logfile).resolve()
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(formatter)
    return handler


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Install the service's handlers on the root logger.

    Only the first call has an effect; later calls (another
    ``create_app`` in the same process, or a test runner that already
    attached its own handlers) leave the configuration untouched.

    Parameters
    ----------
    level : str
        Level name such as ``"INFO"`` or ``"debug"``.  Unknown names
        fall back to INFO.
    logfile : Optional[str]
        File to append records to.  Its directory is created if needed.
        ``None`` or an empty string means console only.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root.setLevel(numeric_level)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    root.addHandler(console)
    if logfile:
        root.addHandler(_file_handler(logfile, formatter))

    if numeric_level > logging.DEBUG:
        for name in _SDK_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).debug("Logging configured at %s", logging.getLevelName(numeric_level))
