import logging

import pytest

from mysql_sysvars.parser import (
    Phase,
    SysvarParser,
    TruncatedDocumentError,
    detail_section_name,
    parse_tokens,
)
from mysql_sysvars.table import SysvarTable
from mysql_sysvars.tokens import end_tag, iter_tokens, start_tag, text

SUMMARY = start_tag("table", ("summary", "System Variable Summary"), ("border", "1"))


def _feed(parser, tokens):
    for token in tokens:
        parser.feed(token)


def _summary_row(*cells):
    tokens = [start_tag("tr")]
    for cell in cells:
        tokens.append(start_tag("td"))
        if cell:
            tokens.append(text(cell))
        tokens.append(end_tag("td"))
    tokens.append(end_tag("tr"))
    return tokens


@pytest.fixture
def parser():
    return SysvarParser(SysvarTable("sysvars"))


def test_waits_for_summary_table(parser):
    _feed(parser, [start_tag("table", ("border", "1"), ("summary", "System Variable Summary"))])
    assert parser.phase is Phase.SEEKING_TABLE

    parser.feed(start_tag("table", ("summary", "System Variable Summary ")))
    assert parser.phase is Phase.SEEKING_TABLE

    parser.feed(SUMMARY)
    assert parser.phase is Phase.READING_SUMMARY_TABLE


def test_summary_row_is_committed(parser):
    _feed(parser, [SUMMARY, *_summary_row("flush", "Yes", "Yes", "Yes", "Global", "Yes")])

    row = parser.table.get("flush")
    assert row is not None
    assert row.cmd_line == "Yes"
    assert row.var_scope == "Global"
    assert row.dynamic == "Yes"
    assert parser.context.row_num == 1


def test_summary_columns_map_to_fields(parser):
    _feed(parser, [SUMMARY, *_summary_row("flush", "--flush", "", "Global", "", "Yes")])

    row = parser.table.get("flush")
    assert row.cmd_line == "--flush"
    assert row.option_file == ""
    assert row.system_var == "Global"
    assert row.var_scope == ""
    assert row.dynamic == "Yes"


def test_short_row_is_discarded_and_counter_rolled_back(parser):
    _feed(parser, [SUMMARY, *_summary_row("flush", "Yes", "Yes", "Yes", "Global", "Yes")])
    before = parser.context.row_num

    _feed(parser, _summary_row("basedir", "Yes", "Yes"))

    assert parser.context.row_num == before
    assert parser.table.get("basedir") is None
    assert len(parser.table) == 1


def test_header_and_blank_text_are_ignored(parser):
    header = [start_tag("tr"), start_tag("th"), text("Name"), end_tag("th"), end_tag("tr")]
    _feed(parser, [SUMMARY, *header, *_summary_row("flush", "Yes", "Yes", "Yes", " ", "Yes")])

    assert len(parser.table) == 1
    assert parser.table.get("flush").var_scope == ""


def test_same_key_rows_are_merged(parser):
    _feed(
        parser,
        [
            SUMMARY,
            *_summary_row("flush_time", "Yes", "Yes", "Yes", "Global", ""),
            *_summary_row("flush_time", "Yes", "Yes", "Yes", "", "Yes"),
        ],
    )

    assert len(parser.table) == 1
    row = parser.table.get("flush_time")
    assert row.var_scope == "Global"
    assert row.dynamic == "Yes"


def test_summary_end_moves_to_detail_sections(parser):
    _feed(parser, [SUMMARY, *_summary_row("flush", "Yes", "Yes", "Yes", "Global", "Yes"), end_tag("table")])

    assert parser.phase is Phase.READING_DETAIL_SECTIONS
    assert parser.context.row_num == 0
    assert parser.context.col_num == 0


def test_detail_section_name():
    assert detail_section_name(start_tag("table", ("summary", "Options for flush"))) == "flush"
    assert detail_section_name(start_tag("table", ("summary", "Options for "))) is None
    assert detail_section_name(start_tag("table", ("summary", "options for flush"))) is None
    assert detail_section_name(start_tag("table", ("border", "1"), ("summary", "Options for flush"))) is None
    assert detail_section_name(start_tag("div", ("summary", "Options for flush"))) is None


def test_detail_default_updates_named_variable(parser):
    default_row = [
        start_tag("tr"),
        start_tag("td", ("scope", "row")),
        start_tag("span", ("class", "bold")),
        start_tag("strong"),
        text("Default"),
        end_tag("strong"),
        end_tag("span"),
        end_tag("td"),
        start_tag("td", ("colspan", "2")),
        start_tag("code", ("class", "literal")),
        text("OFF"),
        end_tag("code"),
        end_tag("td"),
        end_tag("tr"),
    ]
    _feed(parser, [SUMMARY, end_tag("table"), start_tag("table", ("summary", "Options for flush")), *default_row])

    detail = parser.details.get("flush")
    assert detail is not None
    assert detail.default_value == "OFF"
    assert detail.scope == ""


def test_html_end_finishes_and_rejects_more_tokens(parser):
    _feed(parser, [SUMMARY, end_tag("table"), end_tag("html")])

    assert parser.done
    with pytest.raises(RuntimeError):
        parser.feed(text("late"))


def test_run_raises_when_stream_ends_early():
    with pytest.raises(TruncatedDocumentError):
        parse_tokens([SUMMARY, *_summary_row("flush", "Yes", "Yes", "Yes", "Global", "Yes")], "sysvars")


def test_document_without_summary_table_is_truncated():
    with pytest.raises(TruncatedDocumentError):
        parse_tokens(iter_tokens("<html><body><p>nothing here</p></body></html>"), "sysvars")


def test_parse_sample_page(sample_page):
    result = parse_tokens(iter_tokens(sample_page), "sysvars")
    table = result.table

    assert [row.system_variable_name for row in table] == ["autocommit", "big_tables", "flush", "flush_time"]
    assert table.get("ignored") is None

    assert table.get("autocommit").var_scope == "Both"
    assert table.get("flush").var_scope == "Global"

    flush_time = table.get("flush_time")
    assert flush_time.var_scope == "Global"
    assert flush_time.dynamic == "Yes"

    assert table.get("big_tables").var_scope == "Both"
    assert len(table.conflicts) == 1
    assert table.conflicts[0].rejected.var_scope == "Session"


def test_parse_sample_page_details(sample_page):
    details = parse_tokens(iter_tokens(sample_page), "sysvars").details

    assert details.names() == ["big_tables", "flush"]

    flush = details.get("flush")
    assert flush.command_line == "--flush"
    assert flush.scope == "Global"
    assert flush.dynamic == "Yes"
    assert flush.data_type == "boolean"
    assert flush.default_value == "OFF"

    big_tables = details.get("big_tables")
    assert big_tables.command_line == "--big-tables"
    assert big_tables.default_value == "OFF"
    assert big_tables.scope == ""


def _default_row(value):
    return [
        start_tag("tr"),
        start_tag("td", ("scope", "row")),
        start_tag("span", ("class", "bold")),
        start_tag("strong"),
        text("Default"),
        end_tag("strong"),
        end_tag("span"),
        end_tag("td"),
        start_tag("td", ("colspan", "2")),
        start_tag("code", ("class", "literal")),
        text(value),
        end_tag("code"),
        end_tag("td"),
        end_tag("tr"),
    ]


def test_detail_row_before_any_section_is_ignored(parser):
    _feed(parser, [SUMMARY, end_tag("table"), *_default_row("OFF")])

    assert parser.phase is Phase.READING_DETAIL_SECTIONS
    assert len(parser.details) == 0


def test_verbose_logs_history_after_every_token(caplog):
    caplog.set_level(logging.DEBUG)
    parser = SysvarParser(SysvarTable("sysvars"), verbose=True)

    _feed(parser, [SUMMARY, end_tag("table")])

    history_events = [record for record in caplog.records if "token_history" in record.getMessage()]
    assert len(history_events) == 2


def test_quiet_parser_does_not_log_history(caplog, parser):
    caplog.set_level(logging.DEBUG)

    _feed(parser, [SUMMARY, end_tag("table")])

    assert not any("token_history" in record.getMessage() for record in caplog.records)
