"""
ANSI SQL grammar, the shared base every dialect table extends.
"""

from __future__ import annotations

from typing import Final

from .base import Dialect, GrammarTable, Production as P, rule_map, type_map
from .features import FeatureTag as F

STATEMENTS = rule_map(
    ("CREATE TABLE", P.CREATE_TABLE),
    ("CREATE TEMPORARY TABLE", P.CREATE_TABLE),
    ("CREATE TEMP TABLE", P.CREATE_TABLE),
    ("CREATE GLOBAL TEMPORARY TABLE", P.CREATE_TABLE),
    ("CREATE LOCAL TEMPORARY TABLE", P.CREATE_TABLE),
    ("CREATE INDEX", P.CREATE_INDEX),
    ("CREATE UNIQUE INDEX", P.CREATE_INDEX),
    ("CREATE VIEW", P.CREATE_VIEW),
    ("CREATE OR REPLACE VIEW", P.CREATE_VIEW),
    ("CREATE TEMPORARY VIEW", P.CREATE_VIEW),
    ("CREATE TEMP VIEW", P.CREATE_VIEW),
    ("ALTER TABLE", P.ALTER_TABLE),
    ("DROP TABLE", P.DROP_TABLE),
    ("DROP INDEX", P.DROP_INDEX),
    ("DROP VIEW", P.DROP_VIEW),
    ("INSERT INTO", P.INSERT),
    ("SELECT", P.SELECT),
    ("WITH", P.SELECT),
    ("UPDATE", P.UPDATE),
    ("DELETE FROM", P.DELETE),
)

COLUMN_CONSTRAINTS = rule_map(
    ("CONSTRAINT", P.CONSTRAINT_NAME),
    ("PRIMARY KEY", P.PRIMARY_KEY),
    ("NOT NULL", P.NOT_NULL),
    ("NULL", P.NULL),
    ("UNIQUE", P.UNIQUE),
    ("CHECK", P.CHECK),
    ("DEFAULT", P.DEFAULT),
    ("REFERENCES", P.REFERENCES),
    ("COLLATE", P.COLUMN_VALUE),
    ("GENERATED ALWAYS AS", P.GENERATED),
    ("GENERATED ALWAYS AS IDENTITY", P.IDENTITY, F.IDENTITY_COLUMN),
    ("GENERATED BY DEFAULT AS IDENTITY", P.IDENTITY, F.IDENTITY_COLUMN),
)

TABLE_ELEMENTS = rule_map(
    ("CONSTRAINT", P.CONSTRAINT_NAME),
    ("PRIMARY KEY", P.TABLE_PRIMARY_KEY),
    ("UNIQUE", P.TABLE_UNIQUE),
    ("FOREIGN KEY", P.TABLE_FOREIGN_KEY),
    ("CHECK", P.TABLE_CHECK),
)

TABLE_OPTIONS = rule_map(
    ("ON COMMIT", P.OPTION_WORDS),
)

ALTER_ACTIONS = rule_map(
    ("ADD", P.ALTER_ADD),
    ("ADD COLUMN", P.ALTER_ADD_COLUMN),
    ("DROP", P.ALTER_DROP_COLUMN),
    ("DROP COLUMN", P.ALTER_DROP_COLUMN),
    ("DROP CONSTRAINT", P.ALTER_DROP_CONSTRAINT),
    ("RENAME COLUMN", P.ALTER_RENAME_COLUMN),
    ("RENAME TO", P.ALTER_RENAME_TABLE),
    ("ALTER", P.ALTER_COLUMN, F.ALTER_COLUMN),
    ("ALTER COLUMN", P.ALTER_COLUMN, F.ALTER_COLUMN),
)

TYPE_SUFFIXES = rule_map(
    ("WITH TIME ZONE", P.TYPE_FLAG, F.TIME_ZONE_TYPE),
    ("WITHOUT TIME ZONE", P.TYPE_FLAG),
)

TYPES = type_map(
    ("INTEGER",),
    ("INT",),
    ("SMALLINT",),
    ("BIGINT",),
    ("DECIMAL", None, 2),
    ("DEC", None, 2),
    ("NUMERIC", None, 2),
    ("REAL",),
    ("FLOAT", None, 1),
    ("DOUBLE PRECISION",),
    ("CHAR", None, 1),
    ("CHARACTER", None, 1),
    ("VARCHAR", None, 1),
    ("CHARACTER VARYING", None, 1),
    ("CHAR VARYING", None, 1),
    ("TEXT", None, 1, F.TEXT_LENGTH),
    ("BLOB", F.BLOB_TYPE, 1),
    ("BOOLEAN",),
    ("DATE",),
    ("TIME", None, 1),
    ("TIMESTAMP", None, 1),
    ("INTERVAL", F.INTERVAL_TYPE),
)

ANSI_GRAMMAR: Final[GrammarTable] = GrammarTable(
    dialect=Dialect.ANSI,
    statements=STATEMENTS,
    column_constraints=COLUMN_CONSTRAINTS,
    table_elements=TABLE_ELEMENTS,
    table_options=TABLE_OPTIONS,
    alter_actions=ALTER_ACTIONS,
    type_suffixes=TYPE_SUFFIXES,
    types=TYPES,
    identifier_quotes='"',
    multi_action_alter=False,
)
