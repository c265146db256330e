"""Configuration loader for the system variables parser."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

STDIN_SENTINEL = "-"
DEFAULT_INPUT_PATH = "server-system-variables.html"
DEFAULT_TABLE_NAME = "sysvars"


def _get_env(key: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(key)
    if value is not None:
        value = value.strip()
        if value == "":
            return default
        return value
    return default


def _get_bool(key: str, default: bool) -> bool:
    value = _get_env(key)
    if value is None:
        return default
    value_lower = value.lower()
    if value_lower in {"1", "true", "t", "yes", "y", "on"}:
        return True
    if value_lower in {"0", "false", "f", "no", "n", "off"}:
        return False
    raise ValueError(f"Environment variable {key} must be a boolean")


@dataclass(slots=True)
class AppConfig:
    input_path: str
    table_name: str
    verbose: bool
    include_details: bool
    log_level: str

    @property
    def reads_stdin(self) -> bool:
        return self.input_path == STDIN_SENTINEL


def load_config(
    input_path: Optional[str] = None,
    table_name: Optional[str] = None,
    verbose: Optional[bool] = None,
    include_details: Optional[bool] = None,
) -> AppConfig:
    """Build the configuration from the environment, letting explicit arguments win."""
    input_path = input_path or _get_env("SYSVARS_INPUT", DEFAULT_INPUT_PATH)
    table_name = (table_name or _get_env("SYSVARS_TABLE", DEFAULT_TABLE_NAME)).strip()
    if not table_name:
        raise ValueError("Table name must not be empty")

    if verbose is None:
        verbose = _get_bool("SYSVARS_VERBOSE", False)
    if include_details is None:
        include_details = _get_bool("SYSVARS_DETAILS", False)

    log_level = "DEBUG" if verbose else _get_env("LOG_LEVEL", "INFO").upper()

    return AppConfig(
        input_path=input_path,
        table_name=table_name,
        verbose=verbose,
        include_details=include_details,
        log_level=log_level,
    )
