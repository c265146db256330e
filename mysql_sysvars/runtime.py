"""Runtime wiring for the CLI entrypoint."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Optional, TextIO

from .config import AppConfig, load_config
from .logging import configure_logging, get_logger
from .parser import ParseResult, parse_tokens
from .source import read_source, read_stdin
from .tokens import iter_tokens

logger = get_logger(__name__)


@dataclass(slots=True)
class Runtime:
    config: AppConfig

    def parse(self, stdin: Optional[TextIO] = None) -> ParseResult:
        if self.config.reads_stdin:
            markup = read_stdin(stdin)
        else:
            markup = read_source(self.config.input_path)
        return parse_tokens(iter_tokens(markup), self.config.table_name, verbose=self.config.verbose)

    def process(self, sink: Optional[TextIO] = None, stdin: Optional[TextIO] = None) -> ParseResult:
        """Parse the configured document and write the SQL dump to ``sink``."""
        sink = sink or sys.stdout
        result = self.parse(stdin=stdin)
        result.table.dump(sink)
        if self.config.include_details:
            result.table.dump_from_details(result.details, sink)
        logger.info(
            "dump_written",
            table=self.config.table_name,
            rows=len(result.table),
            conflicts=len(result.table.conflicts),
        )
        return result


def build_runtime(config: AppConfig | None = None) -> Runtime:
    cfg = config or load_config()
    configure_logging(cfg.log_level)
    return Runtime(config=cfg)
