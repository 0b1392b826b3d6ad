import logging
import sys
from typing import Optional, TextIO

# Marks the handlers installed here so a second call replaces only those
_HANDLER_TAG = "_contract_validator_handler"


class _MaxLevelFilter(logging.Filter):
    def __init__(self, max_level: int) -> None:
        super().__init__()
        self._max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno <= self._max_level


def _tagged(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _HANDLER_TAG, True)
    return handler


def configure_split_stream_logging(
    *,
    level: int = logging.INFO,
    stderr_level: int = logging.WARNING,
    formatter: Optional[logging.Formatter] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> None:
    """Configure root logging for the validator commands.

    Records below ``stderr_level`` (the per-file "Loaded"/"Valid" lines) go to
    stdout, everything at or above it (the "✗" lines) to stderr, so a CI log
    can be reduced to the failures with ``2>&1 >/dev/null``.

    Calling it again replaces the handlers from the previous call and leaves
    any other root handlers in place.
    """

    root = logging.getLogger()
    for handler in [h for h in root.handlers if getattr(h, _HANDLER_TAG, False)]:
        root.removeHandler(handler)
    root.setLevel(level)

    if formatter is None:
        formatter = logging.Formatter("%(message)s")

    stderr_level = max(stderr_level, logging.DEBUG)

    stdout_handler = _tagged(logging.StreamHandler(stream=stdout or sys.stdout))
    stdout_handler.setLevel(logging.DEBUG)
    stdout_handler.addFilter(_MaxLevelFilter(stderr_level - 1))
    stdout_handler.setFormatter(formatter)

    stderr_handler = _tagged(logging.StreamHandler(stream=stderr or sys.stderr))
    stderr_handler.setLevel(stderr_level)
    stderr_handler.setFormatter(formatter)

    root.addHandler(stdout_handler)
    root.addHandler(stderr_handler)
