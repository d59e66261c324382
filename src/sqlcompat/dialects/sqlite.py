"""
SQLite grammar table.
"""

from __future__ import annotations

from typing import Final

from .ansi import ANSI_GRAMMAR
from .base import Dialect, GrammarTable, Production as P, rule_map, type_map
from .features import FeatureTag as F

SQLITE_GRAMMAR: Final[GrammarTable] = ANSI_GRAMMAR.extend(
    Dialect.SQLITE,
    statements=rule_map(
        ("INSERT OR REPLACE INTO", P.INSERT, F.INSERT_OR_ACTION),
        ("INSERT OR IGNORE INTO", P.INSERT, F.INSERT_OR_ACTION),
        ("INSERT OR ABORT INTO", P.INSERT, F.INSERT_OR_ACTION),
        ("INSERT OR FAIL INTO", P.INSERT, F.INSERT_OR_ACTION),
        ("INSERT OR ROLLBACK INTO", P.INSERT, F.INSERT_OR_ACTION),
        ("REPLACE INTO", P.INSERT, F.REPLACE_INTO),
    ),
    column_constraints=rule_map(
        ("AUTOINCREMENT", P.COLUMN_FLAG, F.SQLITE_AUTOINCREMENT),
        ("AS", P.GENERATED),
    ),
    table_options=rule_map(
        ("STRICT", P.OPTION_FLAG, F.STRICT_TABLE),
        ("WITHOUT ROWID", P.OPTION_FLAG, F.WITHOUT_ROWID),
    ),
    index_options=rule_map(
        ("WHERE", P.INDEX_WHERE, F.PARTIAL_INDEX),
    ),
    clause_markers=rule_map(
        ("LIMIT", P.CLAUSE_MARKER, F.LIMIT_CLAUSE),
        ("RETURNING", P.CLAUSE_MARKER, F.RETURNING_CLAUSE),
        ("ON CONFLICT", P.CLAUSE_MARKER, F.ON_CONFLICT_CLAUSE),
    ),
    types=type_map(
        ("DATETIME", F.DATETIME_TYPE),
        ("TEXT",),
    ),
    remove={
        "types": ["INTERVAL"],
        "type_suffixes": ["WITH TIME ZONE", "WITHOUT TIME ZONE"],
        "column_constraints": ["GENERATED ALWAYS AS IDENTITY", "GENERATED BY DEFAULT AS IDENTITY"],
        "alter_actions": ["ALTER", "ALTER COLUMN", "DROP CONSTRAINT"],
        "table_options": ["ON COMMIT"],
    },
    identifier_quotes='"`[',
    optional_column_type=True,
    multi_action_alter=False,
)
