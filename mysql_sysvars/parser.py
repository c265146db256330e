"""Phase-driven parser for the MySQL "Server System Variables" page.

The page holds a summary table (``summary="System Variable Summary"``) with
one row per variable, followed by one detail table per variable
(``summary="Options for <name>"``). The parser walks the token stream
through a fixed sequence of phases and collects both.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Iterable, Optional

from .history import TOKEN_HISTORY_SIZE, TokenHistory
from .logging import get_logger
from .matchers import MATCHERS, match_row
from .models import SysvarDetails, SysvarRow
from .table import SysvarTable
from .tokens import Token, TokenKind

logger = get_logger(__name__)

SUMMARY_TABLE_CAPTION = "System Variable Summary"
DETAIL_TABLE_PREFIX = "Options for "
SUMMARY_COLUMNS = 6

# Summary table column number -> row field.
COLUMN_FIELDS = {
    1: "system_variable_name",
    2: "cmd_line",
    3: "option_file",
    4: "system_var",
    5: "var_scope",
    6: "dynamic",
}


class TruncatedDocumentError(ValueError):
    """The token stream ended before the closing ``</html>`` was reached."""


class Phase(Enum):
    SEEKING_TABLE = "seeking_table"
    READING_SUMMARY_TABLE = "reading_summary_table"
    READING_DETAIL_SECTIONS = "reading_detail_sections"
    DONE = "done"


@dataclass(slots=True)
class ParseContext:
    phase: Phase = Phase.SEEKING_TABLE
    row_num: int = 0
    col_num: int = 0
    row: SysvarRow = field(default_factory=SysvarRow)
    sysvar_name: str = ""

    def reset_counters(self) -> None:
        self.row_num = 0
        self.col_num = 0


@dataclass(slots=True)
class ParseResult:
    table: SysvarTable
    details: SysvarDetails
    token_count: int


def summary_table_started(token: Token) -> bool:
    if not token.is_start("table"):
        return False
    attr = token.first_attr()
    return attr is not None and attr == ("summary", SUMMARY_TABLE_CAPTION)


def detail_section_name(token: Token) -> Optional[str]:
    """Return the variable name of an ``Options for <name>`` table start tag."""
    if not token.is_start("table"):
        return None
    attr = token.first_attr()
    if attr is None or attr[0] != "summary":
        return None
    caption = attr[1]
    if len(caption) > len(DETAIL_TABLE_PREFIX) and caption.startswith(DETAIL_TABLE_PREFIX):
        return caption[len(DETAIL_TABLE_PREFIX):]
    return None


class SysvarParser:
    """Consumes tokens one at a time, moving through the parse phases."""

    def __init__(
        self,
        table: SysvarTable,
        details: Optional[SysvarDetails] = None,
        verbose: bool = False,
        history_size: int = TOKEN_HISTORY_SIZE,
    ) -> None:
        self.table = table
        self.details = details if details is not None else SysvarDetails()
        self.verbose = verbose
        self.history = TokenHistory(history_size)
        self.context = ParseContext()
        self.token_count = 0
        self._handlers: Dict[Phase, Callable[[Token], Phase]] = {
            Phase.SEEKING_TABLE: self._seek_table,
            Phase.READING_SUMMARY_TABLE: self._read_summary_table,
            Phase.READING_DETAIL_SECTIONS: self._read_detail_sections,
        }

    @property
    def phase(self) -> Phase:
        return self.context.phase

    @property
    def done(self) -> bool:
        return self.context.phase is Phase.DONE

    def feed(self, token: Token) -> Phase:
        """Dispatch one token to the handler for the current phase."""
        if self.done:
            raise RuntimeError("parser already reached the end of the document")

        self.history.push(token)
        self.token_count += 1
        if self.verbose:
            logger.debug("token_history", count=self.token_count, history=self.history.describe())

        current = self.context.phase
        next_phase = self._handlers[current](token)
        if next_phase is not current:
            logger.info("phase_changed", previous=current.value, phase=next_phase.value, tokens=self.token_count)
            self.context.phase = next_phase
            self.context.reset_counters()
        return next_phase

    def run(self, tokens: Iterable[Token]) -> ParseResult:
        """Pull tokens until the document is finished."""
        for token in tokens:
            if self.feed(token) is Phase.DONE:
                break
        else:
            raise TruncatedDocumentError(
                f"token stream ended in phase {self.context.phase.value} "
                f"after {self.token_count} tokens"
            )

        logger.info(
            "parse_completed",
            tokens=self.token_count,
            rows=len(self.table),
            details=len(self.details),
            conflicts=len(self.table.conflicts),
        )
        return ParseResult(table=self.table, details=self.details, token_count=self.token_count)

    def _seek_table(self, token: Token) -> Phase:
        if summary_table_started(token):
            return Phase.READING_SUMMARY_TABLE
        return Phase.SEEKING_TABLE

    def _read_summary_table(self, token: Token) -> Phase:
        if token.is_start("tr"):
            self.new_row()
        elif token.is_start("td"):
            self.context.col_num += 1
        elif token.is_end("table"):
            return Phase.READING_DETAIL_SECTIONS
        elif token.is_end("tr"):
            self.save_row()
        elif token.kind is TokenKind.TEXT:
            self.set_text(token.name)
        return Phase.READING_SUMMARY_TABLE

    def _read_detail_sections(self, token: Token) -> Phase:
        name = detail_section_name(token)
        if name is not None:
            logger.debug("detail_section", sysvar=name)
            self.context.sysvar_name = name
        elif token.is_end("html"):
            return Phase.DONE
        elif token.is_end("tr"):
            self.match_detail_row()
        return Phase.READING_DETAIL_SECTIONS

    def new_row(self) -> None:
        self.context.row_num += 1
        self.context.col_num = 0
        self.context.row = SysvarRow()

    def set_text(self, payload: str) -> None:
        """Store cell text in the field of the current column; blank text is layout only."""
        field_name = COLUMN_FIELDS.get(self.context.col_num)
        if field_name is None or not payload.strip():
            return
        setattr(self.context.row, field_name, payload)

    def save_row(self) -> None:
        ctx = self.context
        if ctx.col_num == SUMMARY_COLUMNS:
            self.table.append_row(ctx.row)
        else:
            logger.debug("row_discarded", row=ctx.row_num, columns=ctx.col_num)
            ctx.row_num -= 1
        ctx.row = SysvarRow()
        ctx.col_num = 0

    def match_detail_row(self) -> None:
        hit = match_row(self.history, MATCHERS)
        if hit is None:
            return
        field_name, value = hit
        name = self.context.sysvar_name
        if not name:
            logger.debug("detail_without_section", field=field_name, value=value)
            return
        if self.verbose:
            logger.debug("detail_matched", sysvar=name, field=field_name, value=value)
        self.details.record(name, field_name, value)


def parse_tokens(
    tokens: Iterable[Token],
    table_name: str,
    verbose: bool = False,
) -> ParseResult:
    """Parse a token stream into a populated table and detail map."""
    parser = SysvarParser(SysvarTable(table_name), verbose=verbose)
    return parser.run(tokens)
