"""SQL text rendering for the generated table dump."""

from __future__ import annotations

from typing import Sequence

__all__ = ["INSERT_COLUMNS", "quote", "create_table_statement", "insert_statement"]

INSERT_COLUMNS = (
    "system_variable_name",
    "cmd_line",
    "option_file",
    "system_var",
    "var_scope",
    "dynamic",
)

_CREATE_TABLE = """-- Create table entry
DROP TABLE IF EXISTS {name};
CREATE TABLE {name} (
    system_variable_name varchar(255) NOT NULL,
    cmd_line varchar(255) DEFAULT NULL,
    option_file varchar(50) DEFAULT NULL,
    system_var varchar(50) DEFAULT NULL,
    var_scope varchar(50) DEFAULT NULL,
    dynamic varchar(50) DEFAULT NULL,
    data_type varchar(50) DEFAULT NULL,
    PRIMARY KEY (system_variable_name)
) ENGINE=InnoDB DEFAULT CHARSET=utf8;
"""


def quote(value: str) -> str:
    """Render a value as a SQL literal.

    Empty values become NULL. Embedded quotes are not escaped, which is
    fine for the variable names and settings found on the page.
    """
    if value == "":
        return "NULL"
    return f"'{value}'"


def create_table_statement(table_name: str) -> str:
    return _CREATE_TABLE.format(name=table_name)


def insert_statement(table_name: str, columns: Sequence[str], values: Sequence[str]) -> str:
    if len(columns) != len(values):
        raise ValueError("columns and values must have the same length")
    rendered = ",".join(quote(value) for value in values)
    return f"INSERT INTO {table_name} ({','.join(columns)}) VALUES ({rendered});"
