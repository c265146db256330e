"""Domain models for system variable records and detail sections."""

from __future__ import annotations

from dataclasses import astuple, dataclass, field, fields
from typing import Dict, List, Optional

from .logging import get_logger

logger = get_logger(__name__)


def is_blank(value: str) -> bool:
    """Return True for empty values, including cells holding only spaces or &nbsp;."""
    return not value.strip()


def compatible(a: str, b: str) -> bool:
    """Two field values are compatible when equal or when either is blank."""
    return a == b or is_blank(a) or is_blank(b)


@dataclass(slots=True)
class SysvarRow:
    """Single system variable entry assembled from the summary table."""

    system_variable_name: str = ""
    cmd_line: str = ""
    option_file: str = ""
    system_var: str = ""
    var_scope: str = ""
    dynamic: str = ""
    command_line_format: str = ""
    default_value: str = ""
    data_type: str = ""

    @property
    def key(self) -> str:
        return self.system_variable_name

    def is_empty(self) -> bool:
        return all(value == "" for value in astuple(self))

    def mergeable(self, other: SysvarRow) -> bool:
        return all(
            compatible(getattr(self, f.name), getattr(other, f.name)) for f in fields(self)
        )

    def merged(self, other: SysvarRow) -> SysvarRow:
        """Return a new row taking each field's non-blank value, preferring this row's."""
        values = {}
        for f in fields(self):
            mine = getattr(self, f.name)
            theirs = getattr(other, f.name)
            if not is_blank(mine):
                values[f.name] = mine
            elif not is_blank(theirs):
                values[f.name] = theirs
            else:
                values[f.name] = ""
        return SysvarRow(**values)

    def differing_fields(self, other: SysvarRow) -> List[str]:
        return [
            f.name
            for f in fields(self)
            if not compatible(getattr(self, f.name), getattr(other, f.name))
        ]


@dataclass(slots=True)
class RowConflict:
    """Two same-keyed rows that disagree on at least one non-blank field."""

    kept: SysvarRow
    rejected: SysvarRow
    field_names: List[str] = field(default_factory=list)

    @property
    def key(self) -> str:
        return self.kept.system_variable_name


DETAIL_FIELDS = ("data_type", "command_line", "scope", "default_value", "dynamic")


@dataclass(slots=True)
class SysvarDetail:
    """Fields collected from one variable's "Options for" detail table."""

    name: str
    data_type: str = ""
    command_line: str = ""
    scope: str = ""
    default_value: str = ""
    dynamic: str = ""

    def is_empty(self) -> bool:
        return all(getattr(self, name) == "" for name in DETAIL_FIELDS)


class SysvarDetails:
    """Detail fields keyed by variable name, in first-seen order."""

    def __init__(self) -> None:
        self._entries: Dict[str, SysvarDetail] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def get(self, name: str) -> Optional[SysvarDetail]:
        return self._entries.get(name)

    def names(self) -> List[str]:
        return sorted(self._entries)

    def record(self, name: str, field_name: str, value: str) -> None:
        """Store a field value for a variable, warning when it replaces a different one."""
        if field_name not in DETAIL_FIELDS:
            raise ValueError(f"unknown detail field '{field_name}'")
        detail = self._entries.get(name)
        if detail is None:
            detail = SysvarDetail(name=name)
            self._entries[name] = detail

        current = getattr(detail, field_name)
        if current and current != value:
            logger.warning(
                "detail_value_changed",
                sysvar=name,
                field=field_name,
                current=current,
                new=value,
            )
        setattr(detail, field_name, value)
