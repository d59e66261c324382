"""
MySQL grammar table.
"""

from __future__ import annotations

from typing import Final

from .ansi import ANSI_GRAMMAR
from .base import Dialect, GrammarTable, Production as P, rule_map, type_map
from .features import FeatureTag as F

MYSQL_GRAMMAR: Final[GrammarTable] = ANSI_GRAMMAR.extend(
    Dialect.MYSQL,
    statements=rule_map(
        ("CREATE FULLTEXT INDEX", P.CREATE_INDEX, F.FULLTEXT_INDEX),
        ("CREATE SPATIAL INDEX", P.CREATE_INDEX, F.SPATIAL_INDEX),
        ("INSERT IGNORE INTO", P.INSERT, F.INSERT_IGNORE),
        ("REPLACE INTO", P.INSERT, F.REPLACE_INTO),
    ),
    column_constraints=rule_map(
        ("AUTO_INCREMENT", P.COLUMN_FLAG, F.AUTO_INCREMENT),
        ("AS", P.GENERATED),
        ("UNIQUE KEY", P.UNIQUE),
        ("KEY", P.PRIMARY_KEY),
        ("COMMENT", P.COLUMN_VALUE, F.COLUMN_COMMENT),
        ("COLLATE", P.COLUMN_VALUE, F.COLUMN_COLLATION),
        ("CHARACTER SET", P.COLUMN_VALUE, F.COLUMN_CHARSET),
        ("CHARSET", P.COLUMN_VALUE, F.COLUMN_CHARSET),
        ("ON UPDATE", P.ON_UPDATE, F.ON_UPDATE_TIMESTAMP),
        # Column placement inside ALTER TABLE.
        ("AFTER", P.COLUMN_VALUE),
        ("FIRST", P.COLUMN_FLAG),
    ),
    table_elements=rule_map(
        ("INDEX", P.TABLE_INDEX, F.INLINE_INDEX),
        ("KEY", P.TABLE_INDEX, F.INLINE_INDEX),
        ("UNIQUE INDEX", P.TABLE_UNIQUE),
        ("UNIQUE KEY", P.TABLE_UNIQUE),
        ("FULLTEXT", P.TABLE_INDEX, F.FULLTEXT_INDEX),
        ("FULLTEXT INDEX", P.TABLE_INDEX, F.FULLTEXT_INDEX),
        ("FULLTEXT KEY", P.TABLE_INDEX, F.FULLTEXT_INDEX),
        ("SPATIAL", P.TABLE_INDEX, F.SPATIAL_INDEX),
        ("SPATIAL INDEX", P.TABLE_INDEX, F.SPATIAL_INDEX),
        ("SPATIAL KEY", P.TABLE_INDEX, F.SPATIAL_INDEX),
    ),
    table_options=rule_map(
        ("ENGINE", P.OPTION_VALUE, F.STORAGE_ENGINE),
        ("DEFAULT CHARSET", P.OPTION_VALUE, F.TABLE_CHARSET),
        ("CHARSET", P.OPTION_VALUE, F.TABLE_CHARSET),
        ("DEFAULT CHARACTER SET", P.OPTION_VALUE, F.TABLE_CHARSET),
        ("CHARACTER SET", P.OPTION_VALUE, F.TABLE_CHARSET),
        ("COLLATE", P.OPTION_VALUE, F.TABLE_COLLATION),
        ("DEFAULT COLLATE", P.OPTION_VALUE, F.TABLE_COLLATION),
        ("COMMENT", P.OPTION_VALUE, F.TABLE_COMMENT),
        ("AUTO_INCREMENT", P.OPTION_VALUE, F.AUTO_INCREMENT_SEED),
    ),
    index_options=rule_map(
        ("USING", P.INDEX_METHOD, F.INDEX_METHOD),
    ),
    alter_actions=rule_map(
        ("MODIFY", P.ALTER_MODIFY, F.MODIFY_COLUMN),
        ("MODIFY COLUMN", P.ALTER_MODIFY, F.MODIFY_COLUMN),
        ("CHANGE", P.ALTER_CHANGE, F.MODIFY_COLUMN),
        ("CHANGE COLUMN", P.ALTER_CHANGE, F.MODIFY_COLUMN),
    ),
    type_suffixes=rule_map(
        ("UNSIGNED", P.TYPE_FLAG, F.UNSIGNED_INTEGER),
        ("SIGNED", P.TYPE_FLAG),
        ("ZEROFILL", P.TYPE_FLAG, F.ZEROFILL_COLUMN),
    ),
    clause_markers=rule_map(
        ("LIMIT", P.CLAUSE_MARKER, F.LIMIT_CLAUSE),
        ("ON DUPLICATE KEY UPDATE", P.CLAUSE_MARKER, F.ON_DUPLICATE_KEY_UPDATE),
    ),
    types=type_map(
        # Display widths such as INT(11) are accepted on integer types.
        ("INTEGER", None, 1),
        ("INT", None, 1),
        ("SMALLINT", None, 1),
        ("BIGINT", None, 1),
        ("TINYINT", F.SMALL_INTEGER_VARIANT, 1),
        ("MEDIUMINT", F.SMALL_INTEGER_VARIANT, 1),
        ("BOOL",),
        ("FLOAT", None, 2),
        ("TINYTEXT", F.SIZED_TEXT_TYPE),
        ("MEDIUMTEXT", F.SIZED_TEXT_TYPE),
        ("LONGTEXT", F.SIZED_TEXT_TYPE),
        ("TINYBLOB", F.SIZED_BLOB_TYPE),
        ("MEDIUMBLOB", F.SIZED_BLOB_TYPE),
        ("LONGBLOB", F.SIZED_BLOB_TYPE),
        ("BINARY", F.BINARY_STRING_TYPE, 1),
        ("VARBINARY", F.BINARY_STRING_TYPE, 1),
        ("ENUM", F.ENUM_TYPE, -1, None, True),
        ("SET", F.SET_TYPE, -1, None, True),
        ("YEAR", F.YEAR_TYPE, 1),
        ("DATETIME", F.DATETIME_TYPE, 1),
        ("JSON", F.JSON_TYPE),
        ("GEOMETRY", F.SPATIAL_TYPE),
        ("POINT", F.SPATIAL_TYPE),
        ("LINESTRING", F.SPATIAL_TYPE),
        ("POLYGON", F.SPATIAL_TYPE),
        ("MULTIPOINT", F.SPATIAL_TYPE),
        ("MULTILINESTRING", F.SPATIAL_TYPE),
        ("MULTIPOLYGON", F.SPATIAL_TYPE),
        ("GEOMETRYCOLLECTION", F.SPATIAL_TYPE),
    ),
    remove={
        "types": ["INTERVAL"],
        "type_suffixes": ["WITH TIME ZONE", "WITHOUT TIME ZONE"],
        "column_constraints": ["GENERATED ALWAYS AS IDENTITY", "GENERATED BY DEFAULT AS IDENTITY"],
    },
    identifier_quotes="`",
    double_quote_strings=True,
    backslash_escapes=True,
    hash_comments=True,
    index_prefix_lengths=True,
    multi_action_alter=True,
)
