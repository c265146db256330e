"""Reading the input document from a file or stdin."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional, TextIO

from .config import STDIN_SENTINEL
from .logging import get_logger

logger = get_logger(__name__)


class SourceError(RuntimeError):
    """The input document could not be opened or read."""


def read_stdin(stdin: Optional[TextIO] = None) -> str:
    """Return the whole of stdin decoded strictly as UTF-8.

    The raw bytes are decoded here rather than by the text stream, whose
    error handler depends on the locale (``surrogateescape`` under C/POSIX).
    """
    stream = stdin or sys.stdin
    try:
        raw = getattr(stream, "buffer", None)
        if raw is not None:
            markup = raw.read().decode("utf-8")
        else:
            markup = stream.read()
            markup.encode("utf-8")
    except (OSError, UnicodeError) as exc:
        raise SourceError(f"Unable to read '{STDIN_SENTINEL}': {exc}") from exc

    logger.info("source_read", path=STDIN_SENTINEL, chars=len(markup))
    return markup


def read_source(path: str, stdin: Optional[TextIO] = None) -> str:
    """Return the whole document; ``-`` reads from stdin."""
    if path == STDIN_SENTINEL:
        return read_stdin(stdin)
    try:
        markup = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeError) as exc:
        raise SourceError(f"Unable to read '{path}': {exc}") from exc

    logger.info("source_read", path=path, chars=len(markup))
    return markup
