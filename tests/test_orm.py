"""Unit tests for SqliteOrm: operations, clauses, configuration scopes and reset."""
from __future__ import annotations

import pytest

from sqliteorm.errors import (
    CompilationError,
    ConfigError,
    UnsupportedOperatorError,
    UnsupportedValueError,
)
from sqliteorm.orm import SqliteOrm
from sqliteorm.schema.types import OrderDirection


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------


def test_select_fields(orm):
    sql, params = orm.select("id,name").get_sql_raw()
    assert sql == 'SELECT id,name FROM "t"'
    assert params == []


def test_count_with_where_and_group(orm):
    sql, params = (
        orm.count("id").where("age", ">", 18).and_("gex", "=", "M").group_by("name").get_sql_raw()
    )
    assert sql == 'SELECT count(id) FROM "t" WHERE age>? AND gex=? GROUP BY ?'
    assert params == [18, "M", "name"]


def test_count_defaults_to_star(literal_orm):
    sql, _ = literal_orm.count().get_sql_raw()
    assert sql == 'SELECT count(*) FROM "t"'


def test_update_fill_mode(orm):
    sql, params = orm.update({"name": "A", "age": 3}).where("id", "=", 7).get_sql_raw()
    assert sql == 'UPDATE "t" SET name=?, age=? WHERE id=?'
    assert params == ["A", 3, 7]


def test_update_literal_mode_quotes_every_value(literal_orm):
    sql, params = (
        literal_orm.update({"name": "A", "age": 3, "flag": True}).where("id", "=", 7).get_sql_raw()
    )
    assert sql == 'UPDATE "t" SET name="A", age="3", flag="true" WHERE id=7'
    assert params == []


def test_update_with_nothing_to_set_raises(orm):
    with pytest.raises(CompilationError) as exc_info:
        orm.update({}).get_sql_raw()
    assert exc_info.value.clause == "SET"


def test_update_rejects_non_scalar(orm):
    with pytest.raises(UnsupportedValueError) as exc_info:
        orm.update({"name": None})
    assert exc_info.value.field == "name"


def test_delete(orm):
    sql, params = orm.delete().where("id", "=", 3).get_sql_raw()
    assert sql == 'DELETE FROM "t" WHERE id=?'
    assert params == [3]


def test_last_operation_wins(orm):
    sql, _ = orm.select().delete().where("id", "=", 1).get_sql_raw()
    assert sql == 'DELETE FROM "t" WHERE id=?'


def test_no_operation_renders_empty(orm):
    compiled = orm.where("id", "=", 1).get_sql_raw()
    assert compiled.is_empty
    assert compiled.params == []


# ---------------------------------------------------------------------------
# GROUP BY / ORDER BY / LIMIT
# ---------------------------------------------------------------------------


def test_tail_clauses_fill_mode(orm):
    sql, params = (
        orm.select()
        .where("a", "=", 1)
        .group_by("g")
        .order_by("DESC", "f")
        .limit(10, 5)
        .get_sql_raw()
    )
    assert sql == 'SELECT * FROM "t" WHERE a=? GROUP BY ? ORDER BY ? ? LIMIT ?,?'
    assert params == [1, "g", "f", "DESC", 10, 5]


def test_tail_clauses_literal_mode(literal_orm):
    sql, params = (
        literal_orm.select()
        .group_by("g")
        .order_by(OrderDirection.ASC, "f")
        .limit(10)
        .get_sql_raw()
    )
    assert sql == 'SELECT * FROM "t" GROUP BY g ORDER BY f ASC LIMIT 10'
    assert params == []


def test_order_direction_is_case_insensitive(literal_orm):
    sql, _ = literal_orm.select().order_by("desc", "f").get_sql_raw()
    assert sql == 'SELECT * FROM "t" ORDER BY f DESC'


def test_unknown_order_direction_raises(orm):
    with pytest.raises(UnsupportedOperatorError):
        orm.order_by("SIDEWAYS", "f")


@pytest.mark.parametrize("count,offset", [("10", None), (10, 1.5), (True, None)])
def test_limit_requires_integers(orm, count, offset):
    with pytest.raises(UnsupportedValueError):
        orm.limit(count, offset)


# ---------------------------------------------------------------------------
# Configuration scopes
# ---------------------------------------------------------------------------


class TestConfiguration:
    def test_empty_table_name_raises(self):
        with pytest.raises(ConfigError):
            SqliteOrm("")

    def test_non_positive_bound_limit_raises(self):
        with pytest.raises(ConfigError):
            SqliteOrm("t", max_bound_variables=0)

    def test_per_call_table_applies_once(self, orm):
        first, _ = orm.table("other").select().get_sql_raw()
        second, _ = orm.select().get_sql_raw()
        assert first == 'SELECT * FROM "other"'
        assert second == 'SELECT * FROM "t"'

    def test_persistent_table_name(self, orm):
        orm.set_table_name("users")
        assert orm.get_table_name() == "users"
        assert orm.select().get_sql_raw().sql == 'SELECT * FROM "users"'
        assert orm.select().get_sql_raw().sql == 'SELECT * FROM "users"'

    def test_per_call_fill_value_applies_once(self, orm):
        literal = orm.fill_value(False).select().where("a", "=", 1).get_sql_raw()
        filled = orm.select().where("a", "=", 1).get_sql_raw()
        assert (literal.sql, literal.params) == ('SELECT * FROM "t" WHERE a=1', [])
        assert (filled.sql, filled.params) == ('SELECT * FROM "t" WHERE a=?', [1])

    def test_fill_value_may_come_last_in_chain(self, orm):
        sql, params = orm.select().where("a", "=", "x").fill_value(False).get_sql_raw()
        assert sql == 'SELECT * FROM "t" WHERE a="x"'
        assert params == []

    def test_persistent_fill_value(self, orm):
        orm.set_fill_value(False)
        assert not orm.is_fill_value
        assert orm.select().where("a", "=", 1).get_sql_raw().params == []

    def test_override_is_visible_before_render(self, orm):
        orm.table("x").fill_value(False)
        assert orm.table_name == "x"
        assert not orm.is_fill_value
        assert orm.config.table_name == "t"
        assert orm.config.fill_value

    def test_empty_override_table_raises(self, orm):
        with pytest.raises(ConfigError):
            orm.table("")


# ---------------------------------------------------------------------------
# Reset after render
# ---------------------------------------------------------------------------


class TestReset:
    def test_render_resets_state(self, orm):
        orm.select().where("a", "=", 1).group_by("g").order_by("ASC", "f").limit(1)
        orm.get_sql_raw()
        assert orm.get_sql_raw().is_empty
        sql, params = orm.select().get_sql_raw()
        assert sql == 'SELECT * FROM "t"'
        assert params == []

    def test_empty_render_still_clears_override(self, orm):
        orm.table("x").fill_value(False)
        assert orm.get_sql_raw().is_empty
        assert orm.table_name == "t"
        assert orm.is_fill_value

    def test_identical_chains_render_identically(self, orm):
        def chain():
            return orm.select().where("a", "=", 1).or_array("b", "=", [2, 3]).limit(5).get_sql_raw()

        assert chain() == chain()

    def test_failed_update_render_still_resets(self, orm):
        with pytest.raises(CompilationError):
            orm.update({}).where("a", "=", 1).get_sql_raw()
        assert orm.get_sql_raw().is_empty

    def test_clear(self, orm):
        orm.table("x").select().where("a", "=", 1).clear()
        assert orm.get_sql_raw().is_empty
        assert orm.table_name == "t"


def test_placeholder_count_matches_params(orm):
    compiled = (
        orm.update({"a": 1, "b": "x"})
        .where("c", "IN", [1, 2, 3])
        .and_array("d", "=", [4, 5])
        .or_("e", "like", "%z%")
        .group_by("g")
        .order_by("ASC", "h")
        .limit(3, 4)
        .get_sql_raw()
    )
    assert compiled.sql.count("?") == len(compiled.params)
    assert compiled.params == [1, "x", 1, 2, 3, 4, 5, "%z%", "g", "h", "ASC", 3, 4]


class TestShortcuts:
    def test_find_by_id(self, orm):
        sql, params = orm.find_by_id(5)
        assert sql == 'SELECT * FROM "t" WHERE id=?'
        assert params == [5]

    def test_find_by_id_custom_field(self, literal_orm):
        assert literal_orm.find_by_id("x", field="uuid").sql == 'SELECT * FROM "t" WHERE uuid="x"'

    def test_find_by_id_discards_pending_clauses(self, orm):
        orm.select().where("a", "=", 1)
        assert orm.find_by_id(5).params == [5]

    def test_select_all_override_is_not_persisted(self, orm):
        assert orm.select_all("other").sql == 'SELECT * FROM "other"'
        assert orm.select_all().sql == 'SELECT * FROM "t"'

    def test_delete_by_id(self, orm):
        sql, params = orm.delete_by_id(9)
        assert sql == 'DELETE FROM "t" WHERE id=?'
        assert params == [9]

    def test_delete_all_literal(self, literal_orm):
        assert literal_orm.delete_all().sql == 'DELETE FROM "t" WHERE 1=1'

    def test_delete_all_other_table(self, orm):
        sql, params = orm.delete_all("other")
        assert sql == 'DELETE FROM "other" WHERE 1=?'
        assert params == [1]
        assert orm.table_name == "t"

    def test_table_info(self, orm):
        sql, params = orm.table_info()
        assert sql == 'SELECT * FROM "sqlite_master" WHERE type=? AND name=?'
        assert params == ["table", "t"]

    def test_table_info_literal_named_table(self, literal_orm):
        sql, params = literal_orm.table_info("users")
        assert sql == 'SELECT * FROM "sqlite_master" WHERE type="table" AND name="users"'
        assert params == []


def test_repr(orm):
    assert repr(orm) == "SqliteOrm(table_name='t', fill_value=True)"
