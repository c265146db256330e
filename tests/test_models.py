import pytest

from mysql_sysvars.models import SysvarDetails, SysvarRow, compatible, is_blank


def test_is_blank_treats_nbsp_and_spaces_as_empty():
    assert is_blank("")
    assert is_blank(" ")
    assert is_blank("\u00a0")
    assert not is_blank("Yes")


def test_compatible_fields():
    assert compatible("Global", "Global")
    assert compatible("Global", "")
    assert compatible("", "Yes")
    assert not compatible("Global", "Session")


def test_merged_takes_unique_non_empty_values():
    scope_only = SysvarRow(system_variable_name="flush_time", var_scope="Global")
    dynamic_only = SysvarRow(system_variable_name="flush_time", dynamic="Yes")

    assert scope_only.mergeable(dynamic_only)
    merged = scope_only.merged(dynamic_only)

    assert merged == SysvarRow(system_variable_name="flush_time", var_scope="Global", dynamic="Yes")
    assert dynamic_only.merged(scope_only) == merged
    assert merged.merged(dynamic_only) == merged


def test_merged_blanks_become_empty():
    row = SysvarRow(system_variable_name="x", var_scope="\u00a0")
    assert row.merged(SysvarRow(system_variable_name="x")).var_scope == ""


def test_differing_fields_lists_conflicts():
    left = SysvarRow(system_variable_name="big_tables", var_scope="Both", dynamic="Yes")
    right = SysvarRow(system_variable_name="big_tables", var_scope="Session", dynamic="")

    assert not left.mergeable(right)
    assert left.differing_fields(right) == ["var_scope"]


def test_row_is_empty():
    assert SysvarRow().is_empty()
    assert not SysvarRow(data_type="integer").is_empty()


def test_details_keep_fields_independent():
    details = SysvarDetails()
    details.record("flush", "scope", "Global")
    details.record("flush", "default_value", "OFF")

    detail = details.get("flush")
    assert detail.scope == "Global"
    assert detail.default_value == "OFF"
    assert "flush" in details
    assert len(details) == 1


def test_details_latest_value_wins():
    details = SysvarDetails()
    details.record("flush", "default_value", "OFF")
    details.record("flush", "default_value", "ON")
    assert details.get("flush").default_value == "ON"


def test_details_reject_unknown_field():
    with pytest.raises(ValueError):
        SysvarDetails().record("flush", "colour", "red")
