"""
PostgreSQL grammar table.
"""

from __future__ import annotations

from typing import Final

from .ansi import ANSI_GRAMMAR
from .base import Dialect, GrammarTable, Production as P, rule_map, type_map
from .features import FeatureTag as F

POSTGRES_GRAMMAR: Final[GrammarTable] = ANSI_GRAMMAR.extend(
    Dialect.POSTGRES,
    statements=rule_map(
        ("CREATE UNLOGGED TABLE", P.CREATE_TABLE, F.UNLOGGED_TABLE),
        ("CREATE INDEX CONCURRENTLY", P.CREATE_INDEX),
        ("CREATE UNIQUE INDEX CONCURRENTLY", P.CREATE_INDEX),
        ("CREATE MATERIALIZED VIEW", P.CREATE_VIEW),
    ),
    table_elements=rule_map(
        ("EXCLUDE", P.TABLE_EXCLUDE, F.EXCLUDE_CONSTRAINT),
    ),
    table_options=rule_map(
        ("INHERITS", P.OPTION_LIST, F.INHERITS_CLAUSE),
    ),
    index_options=rule_map(
        ("USING", P.INDEX_METHOD, F.INDEX_METHOD),
        ("WHERE", P.INDEX_WHERE, F.PARTIAL_INDEX),
        ("INCLUDE", P.INDEX_INCLUDE),
    ),
    alter_actions=rule_map(
        ("ALTER COLUMN", P.ALTER_COLUMN, F.ALTER_COLUMN),
    ),
    type_suffixes=rule_map(
        ("[", P.TYPE_ARRAY, F.ARRAY_TYPE),
        ("ARRAY", P.TYPE_ARRAY, F.ARRAY_TYPE),
    ),
    clause_markers=rule_map(
        ("LIMIT", P.CLAUSE_MARKER, F.LIMIT_CLAUSE),
        ("RETURNING", P.CLAUSE_MARKER, F.RETURNING_CLAUSE),
        ("ON CONFLICT", P.CLAUSE_MARKER, F.ON_CONFLICT_CLAUSE),
    ),
    types=type_map(
        ("SERIAL", F.SERIAL_COLUMN),
        ("SERIAL4", F.SERIAL_COLUMN),
        ("BIGSERIAL", F.SERIAL_COLUMN),
        ("SERIAL8", F.SERIAL_COLUMN),
        ("SMALLSERIAL", F.SERIAL_COLUMN),
        ("SERIAL2", F.SERIAL_COLUMN),
        ("INT2",),
        ("INT4",),
        ("INT8",),
        ("FLOAT4",),
        ("FLOAT8",),
        ("BOOL",),
        ("JSON", F.JSON_TYPE),
        ("JSONB", F.JSONB_TYPE),
        ("UUID", F.UUID_TYPE),
        ("BYTEA", F.BYTEA_TYPE),
        ("INET", F.NETWORK_ADDRESS_TYPE),
        ("CIDR", F.NETWORK_ADDRESS_TYPE),
        ("MACADDR", F.NETWORK_ADDRESS_TYPE),
        ("MACADDR8", F.NETWORK_ADDRESS_TYPE),
        ("POINT", F.GEOMETRIC_TYPE),
        ("LINE", F.GEOMETRIC_TYPE),
        ("LSEG", F.GEOMETRIC_TYPE),
        ("BOX", F.GEOMETRIC_TYPE),
        ("PATH", F.GEOMETRIC_TYPE),
        ("POLYGON", F.GEOMETRIC_TYPE),
        ("CIRCLE", F.GEOMETRIC_TYPE),
        ("TSVECTOR", F.TEXT_SEARCH_TYPE),
        ("TSQUERY", F.TEXT_SEARCH_TYPE),
        ("XML", F.XML_TYPE),
        ("MONEY", F.MONEY_TYPE),
        ("INT4RANGE", F.RANGE_TYPE),
        ("INT8RANGE", F.RANGE_TYPE),
        ("NUMRANGE", F.RANGE_TYPE),
        ("TSRANGE", F.RANGE_TYPE),
        ("TSTZRANGE", F.RANGE_TYPE),
        ("DATERANGE", F.RANGE_TYPE),
        ("TIMESTAMPTZ", F.TIME_ZONE_TYPE, 1),
        ("TIMETZ", F.TIME_ZONE_TYPE, 1),
    ),
    expression_operators={
        "::": F.TYPE_CAST,
        "ILIKE": F.ILIKE_OPERATOR,
    },
    remove={"types": ["BLOB"]},
    nested_comments=True,
    dollar_quotes=True,
    user_type_tag=F.USER_DEFINED_TYPE,
    multi_action_alter=True,
)
