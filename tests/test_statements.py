"""Unit tests for TableStatements over the people fixture."""
from __future__ import annotations

import logging

import pytest

from sqliteorm.errors import ConfigError, ValidationError
from sqliteorm.orm import SqliteOrm
from sqliteorm.schema.table import TableField, TableSchema
from sqliteorm.schema.types import DataType
from sqliteorm.statements import TableStatements


@pytest.fixture()
def people(people_schema) -> TableStatements:
    return TableStatements(people_schema)


@pytest.fixture()
def literal_people(people_schema) -> TableStatements:
    return TableStatements(people_schema, SqliteOrm("unused", fill_value=False))


class TestSchemaStatements:
    def test_create_table(self, people):
        assert people.create_table().sql == (
            'CREATE TABLE IF NOT EXISTS "people" (id INTEGER PRIMARY KEY AUTOINCREMENT, '
            "name TEXT NOT NULL, age INTEGER NOT NULL, height FLOAT, weight FLOAT);"
        )

    def test_drop_table(self, people):
        assert people.drop_table().sql == 'DROP TABLE IF EXISTS "people"'

    def test_table_info(self, people):
        sql, params = people.table_info()
        assert sql == 'SELECT * FROM "sqlite_master" WHERE type=? AND name=?'
        assert params == ["table", "people"]

    def test_set_version(self, literal_people):
        assert literal_people.set_version(2).sql == "PRAGMA user_version = 2"

    def test_repair_columns(self, people):
        stored = 'CREATE TABLE "people" (id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT NOT NULL)'
        assert [s.sql for s in people.repair_columns(stored)] == [
            'ALTER TABLE "people" ADD age INTEGER;',
            'ALTER TABLE "people" ADD height FLOAT;',
            'ALTER TABLE "people" ADD weight FLOAT;',
        ]

    def test_repair_columns_up_to_date(self, people):
        assert people.repair_columns(people.create_table().sql) == []


class TestRead:
    def test_list_all(self, people):
        assert people.list_all().sql == 'SELECT * FROM "people"'
        assert people.list_all("name,age").sql == 'SELECT name,age FROM "people"'

    def test_targets_schema_table_whatever_the_builder_table(self, people_schema):
        statements = TableStatements(people_schema, SqliteOrm("elsewhere"))
        assert statements.list_all().sql == 'SELECT * FROM "people"'

    def test_count(self, people):
        sql, params = people.count({"age": 18, "gex": "M"})
        assert sql == 'SELECT count(id) FROM "people" WHERE age=?'
        assert params == [18]

    def test_count_or_kind_custom_key(self, people):
        sql, params = people.count({"name": "A", "age": 3}, kind="OR", key="*")
        assert sql == 'SELECT count(*) FROM "people" WHERE name=? OR age=?'
        assert params == ["A", 3]

    def test_count_without_conditions(self, people):
        assert people.count().sql == 'SELECT count(id) FROM "people"'

    def test_get_by_id(self, people):
        sql, params = people.get_by_id(4)
        assert sql == 'SELECT * FROM "people" WHERE id=?'
        assert params == [4]

    def test_get_by_id_without_key_raises(self):
        schema = TableSchema(name="x", fields=[TableField(field="a", type=DataType.TEXT)])
        with pytest.raises(ConfigError):
            TableStatements(schema).get_by_id(1)

    def test_get_by_custom_filters_unknown_fields(self, people):
        sql, params = people.get_by_custom({"name": "A", "unknown": 1})
        assert sql == 'SELECT * FROM "people" WHERE name=?'
        assert params == ["A"]

    def test_get_by_custom_group(self, literal_people):
        sql, _ = literal_people.get_by_custom({"age": 18}, fields="name", group="name")
        assert sql == 'SELECT name FROM "people" WHERE age=18 GROUP BY name'

    def test_get_by_array(self, people):
        sql, params = people.get_by_array([1, 2, 3], "id")
        assert sql == 'SELECT * FROM "people" WHERE ( id=? OR id=? OR id=? )'
        assert params == [1, 2, 3]


class TestWrite:
    def test_insert_drops_key_and_unknown(self, people):
        sql, params = people.insert({"id": 9, "name": "A", "age": 1, "gex": "M"})
        assert sql == 'INSERT or REPLACE INTO "people" (name, age) VALUES (?, ?)'
        assert params == ["A", 1]

    def test_inserts(self, people, people_rows):
        statements = people.inserts(people_rows, max_bound_variables=4)
        assert [len(s.params) for s in statements] == [4, 4, 2]
        assert statements[0].params == ["Zhang", 18, "Li", 16]

    def test_update_by_id(self, people):
        sql, params = people.update_by_id({"id": 3, "name": "B", "gex": "F"})
        assert sql == 'UPDATE "people" SET name=? WHERE id=?'
        assert params == ["B", 3]

    @pytest.mark.parametrize("row", [{"name": "B"}, {"id": None, "name": "B"}, {"id": "", "name": "B"}])
    def test_update_by_id_requires_key(self, people, row):
        with pytest.raises(ValidationError) as exc_info:
            people.update_by_id(row)
        assert exc_info.value.code == "MISSING_PRIMARY_KEY"

    def test_update_by_id_key_zero_is_accepted(self, people):
        assert people.update_by_id({"id": 0, "age": 1}).params == [1, 0]

    def test_update_by_custom_sets_data(self, people):
        sql, params = people.update_by_custom({"age": 19}, {"name": "A", "age": 18})
        assert sql == 'UPDATE "people" SET age=? WHERE name=? AND age=?'
        assert params == [19, "A", 18]

    def test_update_by_custom_without_conditions_warns(self, people, caplog):
        with caplog.at_level(logging.WARNING, logger="sqliteorm"):
            sql, _ = people.update_by_custom({"age": 1}, {})
        assert sql == 'UPDATE "people" SET age=?'
        assert "every row" in caplog.text

    def test_delete_by_id(self, people):
        sql, params = people.delete_by_id(5)
        assert sql == 'DELETE FROM "people" WHERE id=?'
        assert params == [5]

    def test_delete_by_custom_or(self, people):
        sql, params = people.delete_by_custom({"name": "A", "age": 2}, kind="OR")
        assert sql == 'DELETE FROM "people" WHERE name=? OR age=?'
        assert params == ["A", 2]

    def test_delete_by_array(self, people):
        sql, params = people.delete_by_array(["A", "B"], "name")
        assert sql == 'DELETE FROM "people" WHERE ( name=? OR name=? )'
        assert params == ["A", "B"]

    def test_delete_by_empty_array_renders_nothing(self, people, caplog):
        with caplog.at_level(logging.WARNING, logger="sqliteorm"):
            assert people.delete_by_array([], "name").is_empty
        assert "empty 'name' list" in caplog.text

    def test_clear_table(self, literal_people):
        assert literal_people.clear_table().sql == 'DELETE FROM "people" WHERE 1=1'
