"""Unit tests for StatementAssembler (parameterized builds)."""

from __future__ import annotations

import logging
from decimal import Decimal

import pytest

from brickstmt.compile.assembler import StatementAssembler, build, resolve_value
from brickstmt.errors import (
    MissingColumnsError,
    MissingSourceError,
    RawFragmentError,
    UnsupportedClauseError,
)
from brickstmt.schema.dialect import DatabaseInfo
from brickstmt.schema.spec import StatementSpec
from brickstmt.schema.statement import (
    Column,
    CommandType,
    Filter,
    Sort,
    SortDirection,
    ValueEntry,
)
from brickstmt.schema.values import Ref

SELECT = CommandType.SELECT
INSERT = CommandType.INSERT
UPDATE = CommandType.UPDATE
DELETE = CommandType.DELETE


def _spec(
    command: CommandType,
    source: str = "users",
    *,
    values: tuple[ValueEntry, ...] = (),
    filters: tuple[Filter, ...] = (),
    **kwargs,
) -> StatementSpec:
    spec = StatementSpec(source=source, command=command, **kwargs)
    for entry in values:
        spec.columns.append(Column(entry.column))
        spec.values.append(entry)
    spec.filters.extend(filters)
    return spec


# ---------------------------------------------------------------------------
# Statement shapes
# ---------------------------------------------------------------------------


def test_select_with_filter_order_and_limit():
    spec = _spec(
        SELECT,
        values=(ValueEntry("Id"), ValueEntry("UserName")),
        filters=(Filter("IsActive", True),),
        result_limit="10",
    )
    spec.sorts.append(Sort("UserName"))
    r = build(spec)
    assert r.sql == (
        "SELECT Id, UserName FROM users WHERE IsActive = ? ORDER BY UserName ASC LIMIT 10;"
    )
    assert r.args == [True]
    assert r.command is SELECT


def test_insert_parameterized_values():
    spec = _spec(INSERT, values=(ValueEntry("UserName", "john.doe"), ValueEntry("IsActive", True)))
    r = build(spec)
    assert r.sql == "INSERT INTO users (UserName, IsActive) VALUES (?, ?);"
    assert r.args == ["john.doe", True]


def test_insert_numbered_placeholders(dollar_dialect):
    spec = _spec(
        INSERT,
        values=(ValueEntry("UserName", "john.doe"), ValueEntry("IsActive", True)),
        dialect=dollar_dialect,
    )
    r = build(spec)
    assert r.sql == "INSERT INTO users (UserName, IsActive) VALUES ($1, $2);"
    assert r.parameter_offset == 2


def test_update_skips_absent_column():
    spec = _spec(
        UPDATE,
        values=(ValueEntry("UserName", "john.doe"), ValueEntry("MiddleName")),
        filters=(Filter("Id", 123),),
    )
    r = build(spec)
    assert r.sql == "UPDATE users SET UserName = ? WHERE Id = ?;"
    assert r.args == ["john.doe", 123]


def test_update_numbered_placeholders(dollar_dialect):
    spec = _spec(
        UPDATE,
        values=(ValueEntry("UserName", "john.doe"), ValueEntry("MiddleName")),
        filters=(Filter("Id", 123),),
        dialect=dollar_dialect,
    )
    assert build(spec).sql == "UPDATE users SET UserName = $1 WHERE Id = $2;"


def test_delete_ignores_registered_columns():
    spec = _spec(
        DELETE,
        values=(ValueEntry("UserName", "john.doe"), ValueEntry("Age", 40)),
        filters=(Filter("Id", 123),),
    )
    r = build(spec)
    assert r.sql == "DELETE FROM users WHERE Id = ?;"
    assert r.args == [123]


def test_delete_without_filters():
    assert build(_spec(DELETE)).sql == "DELETE FROM users;"


def test_insert_never_emits_where():
    spec = _spec(INSERT, values=(ValueEntry("A", 1),), filters=(Filter("Id", 5),))
    r = build(spec)
    assert "WHERE" not in r.sql
    assert r.args == [1]


def test_select_lists_absent_columns():
    spec = _spec(SELECT, values=(ValueEntry("Id"), ValueEntry("Name", None)))
    assert build(spec).sql == "SELECT Id, Name FROM users;"


def test_select_distinct():
    spec = _spec(SELECT, values=(ValueEntry("Status"),), distinct=True)
    assert build(spec).sql == "SELECT DISTINCT Status FROM users;"


def test_front_limit_renders_top(sqlserver_dialect):
    spec = _spec(
        SELECT,
        values=(ValueEntry("Id"),),
        dialect=sqlserver_dialect,
        distinct=True,
        result_limit="5",
    )
    spec.sorts.append(Sort("Id", SortDirection.DESC))
    assert build(spec).sql == "SELECT DISTINCT TOP 5 Id FROM users ORDER BY Id DESC;"


def test_group_by_precedes_order_by():
    spec = _spec(SELECT, values=(ValueEntry("Status"), ValueEntry("COUNT(*)")))
    spec.groups.append("Status")
    spec.sorts.append(Sort("Status"))
    assert build(spec).sql == (
        "SELECT Status, COUNT(*) FROM users GROUP BY Status ORDER BY Status ASC;"
    )


# ---------------------------------------------------------------------------
# Value resolution
# ---------------------------------------------------------------------------


def test_match_to_null_renders_null_and_binds_nothing():
    spec = _spec(
        UPDATE,
        values=(ValueEntry("Score", 0, match_to_null=0), ValueEntry("Name", "x")),
    )
    r = build(spec)
    assert r.sql == "UPDATE users SET Score = NULL, Name = ?;"
    assert r.args == ["x"]


def test_match_to_null_distinguishes_bool_from_int():
    spec = _spec(INSERT, values=(ValueEntry("Flag", False, match_to_null=0),))
    r = build(spec)
    assert r.sql == "INSERT INTO users (Flag) VALUES (?);"
    assert r.args == [False]


def test_match_to_null_overrides_raw_fragment():
    spec = _spec(
        INSERT,
        values=(ValueEntry("Stamp", "0", match_to_null="0", is_parameter=False),),
    )
    assert build(spec).sql == "INSERT INTO users (Stamp) VALUES (NULL);"


def test_default_substitutes_absent_value():
    spec = _spec(INSERT, values=(ValueEntry("Role", Ref(), default="guest"),))
    r = build(spec)
    assert r.sql == "INSERT INTO users (Role) VALUES (?);"
    assert r.args == ["guest"]


def test_default_rendered_as_raw_fragment():
    spec = _spec(
        INSERT,
        values=(ValueEntry("Created", None, default="CURRENT_TIMESTAMP", is_parameter=False),),
    )
    r = build(spec)
    assert r.sql == "INSERT INTO users (Created) VALUES (CURRENT_TIMESTAMP);"
    assert r.args == []


def test_default_equal_to_sentinel_yields_null():
    spec = _spec(UPDATE, values=(ValueEntry("Score", None, default=-1, match_to_null=-1),))
    assert build(spec).sql == "UPDATE users SET Score = NULL;"


def test_skip_nil_disabled_writes_null():
    spec = _spec(
        INSERT,
        values=(ValueEntry("UserName", "a"), ValueEntry("MiddleName")),
        skip_nil_write=False,
    )
    r = build(spec)
    assert r.sql == "INSERT INTO users (UserName, MiddleName) VALUES (?, NULL);"
    assert r.args == ["a"]


def test_unrecognized_value_is_treated_as_absent():
    spec = _spec(UPDATE, values=(ValueEntry("A", 1), ValueEntry("Meta", {"k": "v"})))
    assert build(spec).sql == "UPDATE users SET A = ?;"


def test_resolve_value_order():
    resolved = resolve_value(ValueEntry("X", None, default=3, match_to_null=3), True)
    assert resolved.is_null
    assert resolved.force_null
    assert not resolved.skip
    assert resolved.value is None
    assert resolved.is_parameter


@pytest.mark.parametrize(
    "value, text",
    [
        ("GETDATE()", "GETDATE()"),
        (True, "1"),
        (False, "0"),
        (42, "42"),
        (Decimal("1.50"), "1.50"),
        (2.5, "2.5"),
    ],
)
def test_raw_fragment_rendering(value, text):
    spec = _spec(UPDATE, values=(ValueEntry("C", value, is_parameter=False),))
    r = build(spec)
    assert r.sql == f"UPDATE users SET C = {text};"
    assert r.args == []


def test_raw_fragment_must_be_textual():
    spec = _spec(INSERT, values=(ValueEntry("Blob", b"\x00", is_parameter=False),))
    with pytest.raises(RawFragmentError) as exc_info:
        build(spec)
    assert exc_info.value.code == "RAW_FRAGMENT_NOT_TEXTUAL"
    assert exc_info.value.details["column"] == "Blob"


@pytest.mark.parametrize("value", [5, True, 2.5, Decimal("1.50")])
def test_insert_raw_fragment_rejects_non_text(value):
    spec = _spec(INSERT, values=(ValueEntry("Age", value, is_parameter=False),))
    with pytest.raises(RawFragmentError) as exc_info:
        build(spec)
    assert exc_info.value.details == {"column": "Age", "type": type(value).__name__}


@pytest.mark.parametrize("value", [float("inf"), float("nan"), Decimal("-Infinity")])
def test_raw_fragment_rejects_non_finite_numbers(value):
    spec = _spec(UPDATE, values=(ValueEntry("Score", value, is_parameter=False),))
    with pytest.raises(RawFragmentError):
        build(spec)


def test_build_leaves_spec_values_untouched():
    ref = Ref(None)
    entry = ValueEntry("Score", ref, default=5, match_to_null=5)
    spec = _spec(UPDATE, values=(ValueEntry("A", 1), entry))
    first = build(spec)
    second = build(spec)
    assert first.sql == second.sql == "UPDATE users SET A = ?, Score = NULL;"
    assert entry.value is ref
    assert entry.default == 5
    assert entry.is_parameter is True


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------


def test_absent_filter_renders_is_null():
    spec = _spec(SELECT, values=(ValueEntry("Id"),), filters=(Filter("DeletedAt", None),))
    r = build(spec)
    assert r.sql == "SELECT Id FROM users WHERE DeletedAt IS NULL;"
    assert r.args == []


def test_expression_only_filter():
    spec = _spec(
        SELECT,
        values=(ValueEntry("Id"),),
        filters=(Filter("Age > 18", expression_only=True), Filter("Status", "A")),
    )
    r = build(spec)
    assert r.sql == "SELECT Id FROM users WHERE Age > 18 AND Status = ?;"
    assert r.args == ["A"]


def test_filter_values_are_normalized():
    spec = _spec(DELETE, filters=(Filter("Id", Ref(Ref(7))), Filter("Code", Ref())))
    r = build(spec)
    assert r.sql == "DELETE FROM users WHERE Id = ? AND Code IS NULL;"
    assert r.args == [7]


# ---------------------------------------------------------------------------
# Filter contributor and parameter offset
# ---------------------------------------------------------------------------


def test_contributor_continues_numbering(dollar_dialect):
    calls = []

    def contributor(offset, placeholder, numbered):
        calls.append((offset, placeholder, numbered))
        return [f"Age > {placeholder}{offset + 1}"], [18]

    spec = _spec(
        UPDATE,
        values=(ValueEntry("Name", "x"),),
        filters=(Filter("Id", 5),),
        dialect=dollar_dialect,
        filter_func=contributor,
    )
    r = build(spec)
    assert calls == [(2, "$", True)]
    assert r.sql == "UPDATE users SET Name = $1 WHERE Id = $2 AND Age > $3;"
    assert r.args == ["x", 5, 18]
    assert r.parameter_offset == 3


def test_contributor_alone_creates_where():
    spec = _spec(
        SELECT,
        values=(ValueEntry("Id"),),
        filter_func=lambda offset, ph, numbered: (["Age > ?"], [21]),
    )
    r = build(spec)
    assert r.sql == "SELECT Id FROM users WHERE Age > ?;"
    assert r.args == [21]


def test_contributor_without_fragments_adds_nothing():
    spec = _spec(
        SELECT,
        values=(ValueEntry("Id"),),
        filter_func=lambda offset, ph, numbered: ([], [99]),
    )
    r = build(spec)
    assert r.sql == "SELECT Id FROM users;"
    assert r.args == []


def test_contributor_not_called_for_insert():
    def contributor(offset, placeholder, numbered):
        raise AssertionError("must not be called")

    spec = _spec(INSERT, values=(ValueEntry("A", 1),), filter_func=contributor)
    assert build(spec).sql == "INSERT INTO users (A) VALUES (?);"


def test_parameter_offset_seed(dollar_dialect):
    spec = _spec(
        DELETE,
        filters=(Filter("Id", 1), Filter("Code", "x")),
        dialect=dollar_dialect,
        parameter_offset=4,
    )
    r = build(spec)
    assert r.sql == "DELETE FROM users WHERE Id = $5 AND Code = $6;"
    assert r.parameter_offset == 6
    assert spec.parameter_offset == 4


def test_unnumbered_dialect_keeps_offset():
    spec = _spec(DELETE, filters=(Filter("Id", 1),), parameter_offset=3)
    assert build(spec).parameter_offset == 3


# ---------------------------------------------------------------------------
# Interpolation
# ---------------------------------------------------------------------------


def test_interpolates_schema():
    spec = _spec(
        SELECT,
        "{users} u JOIN {roles} r ON r.Id = u.RoleId",
        values=(ValueEntry("u.Id"),),
        database_info=DatabaseInfo(schema="sales"),
    )
    assert build(spec).sql == (
        "SELECT u.Id FROM sales.users u JOIN sales.roles r ON r.Id = u.RoleId;"
    )


def test_interpolates_reference_prefix():
    spec = _spec(
        SELECT,
        "{Country}",
        values=(ValueEntry("Code"),),
        database_info=DatabaseInfo(reference_mode=True, reference_prefix="lookup"),
    )
    assert build(spec).sql == "SELECT Code FROM lookup_.Country;"


def test_interpolation_strips_braces_without_qualifier():
    spec = _spec(SELECT, "{users}", values=(ValueEntry("Id"),))
    assert build(spec).sql == "SELECT Id FROM users;"


def test_interpolation_disabled_keeps_tokens():
    spec = _spec(
        SELECT,
        "{users}",
        values=(ValueEntry("Id"),),
        interpolate=False,
        database_info=DatabaseInfo(schema="sales"),
    )
    assert build(spec).sql == "SELECT Id FROM {users};"


def test_interpolation_leaves_bound_values_alone():
    spec = _spec(
        UPDATE,
        "{users}",
        values=(
            ValueEntry("Name", "{admin}"),
            ValueEntry("RoleId", "(SELECT Id FROM {roles} WHERE Code = 1)", is_parameter=False),
        ),
        filters=(Filter("{users}.Tag", "{x}"),),
        database_info=DatabaseInfo(schema="sales"),
    )
    r = build(spec)
    assert r.sql == (
        "UPDATE sales.users SET Name = ?, RoleId = (SELECT Id FROM sales.roles WHERE Code = 1) "
        "WHERE sales.users.Tag = ?;"
    )
    assert r.args == ["{admin}", "{x}"]


def test_interpolation_qualifies_contributed_conditions():
    spec = _spec(
        SELECT,
        "{users}",
        values=(ValueEntry("Id"),),
        database_info=DatabaseInfo(schema="sales"),
        filter_func=lambda offset, ph, numbered: (
            ["RoleId IN (SELECT Id FROM {roles} WHERE Code = ?)"],
            ["{root}"],
        ),
    )
    spec.groups.append("{users}.Id")
    spec.sorts.append(Sort("{users}.Id", SortDirection.DESC))
    r = build(spec)
    assert r.sql == (
        "SELECT Id FROM sales.users WHERE RoleId IN (SELECT Id FROM sales.roles WHERE Code = ?) "
        "GROUP BY sales.users.Id ORDER BY sales.users.Id DESC;"
    )
    assert r.args == ["{root}"]


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def test_missing_source():
    with pytest.raises(MissingSourceError) as exc_info:
        build(_spec(SELECT, "", values=(ValueEntry("Id"),)))
    assert exc_info.value.to_error_response()["error"] == "MISSING_SOURCE"


@pytest.mark.parametrize("command", [SELECT, INSERT, UPDATE])
def test_missing_columns(command):
    with pytest.raises(MissingColumnsError):
        build(_spec(command))


def test_all_columns_skipped_is_missing_columns():
    spec = _spec(INSERT, values=(ValueEntry("A"), ValueEntry("B", Ref())))
    with pytest.raises(MissingColumnsError) as exc_info:
        build(spec)
    assert exc_info.value.details == {"source": "users", "command": "INSERT"}


def test_order_by_rejected_for_update():
    spec = _spec(UPDATE, values=(ValueEntry("A", 1),))
    spec.sorts.append(Sort("A"))
    with pytest.raises(UnsupportedClauseError) as exc_info:
        build(spec)
    assert exc_info.value.details["clause"] == "ORDER BY"


def test_group_by_rejected_for_delete():
    spec = _spec(DELETE)
    spec.groups.append("A")
    with pytest.raises(UnsupportedClauseError):
        build(spec)


def test_limit_rejected_for_insert():
    spec = _spec(INSERT, values=(ValueEntry("A", 1),), result_limit="1")
    with pytest.raises(UnsupportedClauseError) as exc_info:
        build(spec)
    assert exc_info.value.code == "UNSUPPORTED_CLAUSE"


def test_build_logs_debug_record(caplog):
    spec = _spec(DELETE, filters=(Filter("Id", 1),))
    with caplog.at_level(logging.DEBUG, logger="brickstmt"):
        StatementAssembler().build(spec)
    assert any("Built DELETE on users" in rec.getMessage() for rec in caplog.records)
