"""sqliteorm compilation layer: builder state → SQL text + parameters."""
from sqliteorm.compile.assembler import StatementAssembler
from sqliteorm.compile.base import CompiledSQL, SQLiteDialect
from sqliteorm.compile.batch import UpdateWhenBuilder, build_insert, build_inserts, slice_rows
from sqliteorm.compile.context import RenderContext
from sqliteorm.compile.state import BuilderState

__all__ = [
    "StatementAssembler",
    "CompiledSQL",
    "SQLiteDialect",
    "UpdateWhenBuilder",
    "build_insert",
    "build_inserts",
    "slice_rows",
    "RenderContext",
    "BuilderState",
]
