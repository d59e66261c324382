"""
Curated capability data: one verdict per feature tag and target dialect.

Rewrite texts are reviewed by hand; nothing here is inferred.
"""

from __future__ import annotations

from typing import Dict, Final, Mapping

from ..dialects import Dialect, FeatureTag as F
from .matrix import MatrixKey, Verdict

S = Verdict.supported
R = Verdict.rewrite_to
U = Verdict.unsupported


def _row(*, postgres: Verdict, mysql: Verdict, sqlite: Verdict, ansi: Verdict) -> Dict[Dialect, Verdict]:
    return {Dialect.POSTGRES: postgres, Dialect.MYSQL: mysql, Dialect.SQLITE: sqlite, Dialect.ANSI: ansi}


CAPABILITIES: Final[Mapping[F, Mapping[Dialect, Verdict]]] = {
    # Key generation
    F.SERIAL_COLUMN: _row(
        postgres=S(),
        mysql=R("Use an AUTO_INCREMENT integer column", "INT AUTO_INCREMENT"),
        sqlite=R("Use an INTEGER PRIMARY KEY column", "INTEGER PRIMARY KEY AUTOINCREMENT"),
        ansi=R("Use an identity column", "INTEGER GENERATED BY DEFAULT AS IDENTITY"),
    ),
    F.IDENTITY_COLUMN: _row(
        postgres=S(),
        mysql=R("Use an AUTO_INCREMENT integer column", "INT AUTO_INCREMENT"),
        sqlite=R("Use an INTEGER PRIMARY KEY column", "INTEGER PRIMARY KEY AUTOINCREMENT"),
        ansi=S(),
    ),
    F.AUTO_INCREMENT: _row(
        postgres=R("Use an identity column", "GENERATED BY DEFAULT AS IDENTITY"),
        mysql=S(),
        sqlite=R("Use an INTEGER PRIMARY KEY column", "INTEGER PRIMARY KEY AUTOINCREMENT"),
        ansi=R("Use an identity column", "GENERATED BY DEFAULT AS IDENTITY"),
    ),
    F.SQLITE_AUTOINCREMENT: _row(
        postgres=R("Use an identity column", "GENERATED BY DEFAULT AS IDENTITY"),
        mysql=R("Use the AUTO_INCREMENT attribute", "AUTO_INCREMENT"),
        sqlite=S(),
        ansi=R("Use an identity column", "GENERATED BY DEFAULT AS IDENTITY"),
    ),
    F.AUTO_INCREMENT_SEED: _row(
        postgres=R("Set the identity start value", "GENERATED BY DEFAULT AS IDENTITY (START WITH n)"),
        mysql=S(),
        sqlite=R("Seed the sqlite_sequence table after creation"),
        ansi=R("Set the identity start value", "GENERATED BY DEFAULT AS IDENTITY (START WITH n)"),
    ),
    # Data types
    F.ARRAY_TYPE: _row(
        postgres=S(),
        mysql=R("Store the array as JSON", "JSON"),
        sqlite=R("Store the array as JSON text", "TEXT"),
        ansi=R("Move elements to a child table"),
    ),
    F.JSON_TYPE: _row(
        postgres=S(),
        mysql=S(),
        sqlite=R("Store JSON as text and validate with json_valid()", "TEXT"),
        ansi=R("Store JSON as character data", "CLOB"),
    ),
    F.JSONB_TYPE: _row(
        postgres=S(),
        mysql=R("Use the JSON type", "JSON"),
        sqlite=R("Store JSON as text and validate with json_valid()", "TEXT"),
        ansi=R("Store JSON as character data", "CLOB"),
    ),
    F.UUID_TYPE: _row(
        postgres=S(),
        mysql=R("Store UUIDs as fixed-length strings", "CHAR(36)"),
        sqlite=R("Store UUIDs as text", "TEXT"),
        ansi=R("Store UUIDs as fixed-length strings", "CHAR(36)"),
    ),
    F.BYTEA_TYPE: _row(
        postgres=S(),
        mysql=R("Use a binary large object", "LONGBLOB"),
        sqlite=R("Use a binary large object", "BLOB"),
        ansi=R("Use a binary large object", "BLOB"),
    ),
    F.BLOB_TYPE: _row(
        postgres=R("Use a byte array", "BYTEA"),
        mysql=S(),
        sqlite=S(),
        ansi=S(),
    ),
    F.NETWORK_ADDRESS_TYPE: _row(
        postgres=S(),
        mysql=R("Store addresses as strings", "VARCHAR(43)"),
        sqlite=R("Store addresses as text", "TEXT"),
        ansi=R("Store addresses as strings", "VARCHAR(43)"),
    ),
    F.GEOMETRIC_TYPE: _row(
        postgres=S(),
        mysql=R("Use the matching spatial type", "POINT / POLYGON / GEOMETRY"),
        sqlite=U("no geometric types without an extension"),
        ansi=U("no geometric types in the standard"),
    ),
    F.SPATIAL_TYPE: _row(
        postgres=R("Use PostGIS geometry or a built-in geometric type", "geometry / POINT"),
        mysql=S(),
        sqlite=U("no spatial types without an extension"),
        ansi=U("no spatial types in the standard"),
    ),
    F.TEXT_SEARCH_TYPE: _row(
        postgres=S(),
        mysql=U("use a FULLTEXT index instead of a stored vector"),
        sqlite=U("use an FTS5 virtual table"),
        ansi=U("no text search types in the standard"),
    ),
    F.XML_TYPE: _row(
        postgres=S(),
        mysql=R("Store XML as text", "LONGTEXT"),
        sqlite=R("Store XML as text", "TEXT"),
        ansi=S(),
    ),
    F.MONEY_TYPE: _row(
        postgres=S(),
        mysql=R("Use a fixed-point decimal", "DECIMAL(19, 4)"),
        sqlite=R("Store minor units as an integer or use NUMERIC", "NUMERIC"),
        ansi=R("Use a fixed-point decimal", "DECIMAL(19, 4)"),
    ),
    F.RANGE_TYPE: _row(
        postgres=S(),
        mysql=U("split ranges into lower and upper bound columns"),
        sqlite=U("split ranges into lower and upper bound columns"),
        ansi=U("split ranges into lower and upper bound columns"),
    ),
    F.INTERVAL_TYPE: _row(
        postgres=S(),
        mysql=U("no INTERVAL column type"),
        sqlite=R("Store durations as seconds", "INTEGER"),
        ansi=S(),
    ),
    F.USER_DEFINED_TYPE: _row(
        postgres=S(),
        mysql=U("no user-defined types"),
        sqlite=U("no user-defined types"),
        ansi=R("Replace the type with its base type or a domain"),
    ),
    F.TIME_ZONE_TYPE: _row(
        postgres=S(),
        mysql=R("Store UTC values without a zone", "TIMESTAMP"),
        sqlite=R("Store ISO-8601 text with an offset", "TEXT"),
        ansi=S(),
    ),
    F.DATETIME_TYPE: _row(
        postgres=R("Use a timestamp", "TIMESTAMP"),
        mysql=S(),
        sqlite=S(),
        ansi=R("Use a timestamp", "TIMESTAMP"),
    ),
    F.YEAR_TYPE: _row(
        postgres=R("Use a small integer", "SMALLINT"),
        mysql=S(),
        sqlite=R("Use an integer", "INTEGER"),
        ansi=R("Use a small integer", "SMALLINT"),
    ),
    F.UNSIGNED_INTEGER: _row(
        postgres=R("Use a wider signed type with a CHECK (col >= 0)"),
        mysql=S(),
        sqlite=R("Drop UNSIGNED and add CHECK (col >= 0)"),
        ansi=R("Use a wider signed type with a CHECK (col >= 0)"),
    ),
    F.ZEROFILL_COLUMN: _row(
        postgres=U("zero padding is a display concern; format in queries"),
        mysql=S(),
        sqlite=U("zero padding is a display concern; format in queries"),
        ansi=U("zero padding is a display concern; format in queries"),
    ),
    F.SMALL_INTEGER_VARIANT: _row(
        postgres=R("Use SMALLINT or INTEGER", "SMALLINT"),
        mysql=S(),
        sqlite=S(),
        ansi=R("Use SMALLINT or INTEGER", "SMALLINT"),
    ),
    F.SIZED_TEXT_TYPE: _row(
        postgres=R("Use unbounded text", "TEXT"),
        mysql=S(),
        sqlite=R("Use text", "TEXT"),
        ansi=R("Use a character large object", "CLOB"),
    ),
    F.SIZED_BLOB_TYPE: _row(
        postgres=R("Use a byte array", "BYTEA"),
        mysql=S(),
        sqlite=R("Use a binary large object", "BLOB"),
        ansi=R("Use a binary large object", "BLOB"),
    ),
    F.BINARY_STRING_TYPE: _row(
        postgres=R("Use a byte array", "BYTEA"),
        mysql=S(),
        sqlite=R("Use a binary large object", "BLOB"),
        ansi=S(),
    ),
    F.ENUM_TYPE: _row(
        postgres=R("Create an enum type or use a CHECK constraint", "CREATE TYPE ... AS ENUM"),
        mysql=S(),
        sqlite=R("Use TEXT with a CHECK (col IN (...)) constraint", "TEXT CHECK (...)"),
        ansi=R("Use VARCHAR with a CHECK (col IN (...)) constraint", "VARCHAR(n) CHECK (...)"),
    ),
    F.SET_TYPE: _row(
        postgres=R("Use a text array or a join table", "TEXT[]"),
        mysql=S(),
        sqlite=U("no multi-valued column type; use a join table"),
        ansi=U("no multi-valued column type; use a join table"),
    ),
    F.TEXT_LENGTH: _row(
        postgres=R("Use a bounded character type", "VARCHAR(n)"),
        mysql=S(),
        sqlite=R("Drop the length and enforce it with CHECK (length(col) <= n)", "TEXT"),
        ansi=R("Use a bounded character type", "VARCHAR(n)"),
    ),
    # Column attributes
    F.GENERATED_COLUMN_STORED: _row(
        postgres=S(),
        mysql=S(),
        sqlite=S(),
        ansi=R("Compute the value in a view or trigger"),
    ),
    F.GENERATED_COLUMN_VIRTUAL: _row(
        postgres=R("Declare the generated column STORED", "GENERATED ALWAYS AS (...) STORED"),
        mysql=S(),
        sqlite=S(),
        ansi=S(),
    ),
    F.COLUMN_CHARSET: _row(
        postgres=R("Remove the clause; the database encoding applies"),
        mysql=S(),
        sqlite=R("Remove the clause; SQLite stores UTF-8 or UTF-16"),
        ansi=S(),
    ),
    F.COLUMN_COLLATION: _row(
        postgres=R("Map to an ICU or libc collation", 'COLLATE "und-x-icu"'),
        mysql=S(),
        sqlite=R("Map to BINARY, NOCASE or RTRIM", "COLLATE NOCASE"),
        ansi=R("Use a collation name defined by the target"),
    ),
    F.COLUMN_COMMENT: _row(
        postgres=R("Move the comment to a separate statement", "COMMENT ON COLUMN t.c IS '...'"),
        mysql=S(),
        sqlite=R("Move the comment into a SQL comment"),
        ansi=R("Move the comment into a SQL comment"),
    ),
    F.ON_UPDATE_TIMESTAMP: _row(
        postgres=R("Maintain the value with a BEFORE UPDATE trigger", "CREATE TRIGGER ... BEFORE UPDATE"),
        mysql=S(),
        sqlite=R("Maintain the value with an AFTER UPDATE trigger", "CREATE TRIGGER ... AFTER UPDATE"),
        ansi=R("Maintain the value with an update trigger", "CREATE TRIGGER"),
    ),
    # Table options
    F.STORAGE_ENGINE: _row(
        postgres=R("Remove ENGINE=...; storage is not selectable per table"),
        mysql=S(),
        sqlite=R("Remove ENGINE=...; SQLite has a single storage engine"),
        ansi=R("Remove ENGINE=...; storage engines are implementation-defined"),
    ),
    F.TABLE_CHARSET: _row(
        postgres=R("Remove the clause; set the encoding at database creation"),
        mysql=S(),
        sqlite=R("Remove the clause; use PRAGMA encoding"),
        ansi=R("Remove the clause; character sets are declared per column"),
    ),
    F.TABLE_COLLATION: _row(
        postgres=R("Remove the clause; declare collations per column"),
        mysql=S(),
        sqlite=R("Remove the clause; declare collations per column"),
        ansi=R("Remove the clause; declare collations per column"),
    ),
    F.TABLE_COMMENT: _row(
        postgres=R("Move the comment to a separate statement", "COMMENT ON TABLE t IS '...'"),
        mysql=S(),
        sqlite=R("Move the comment into a SQL comment"),
        ansi=R("Move the comment into a SQL comment"),
    ),
    F.STRICT_TABLE: _row(
        postgres=R("Remove STRICT; column types are always enforced"),
        mysql=R("Remove STRICT and enable strict SQL mode", "SET sql_mode = 'STRICT_ALL_TABLES'"),
        sqlite=S(),
        ansi=R("Remove STRICT; column types are always enforced"),
    ),
    F.WITHOUT_ROWID: _row(
        postgres=R("Remove WITHOUT ROWID; tables are heap organised"),
        mysql=R("Remove WITHOUT ROWID; InnoDB clusters on the primary key"),
        sqlite=S(),
        ansi=R("Remove WITHOUT ROWID"),
    ),
    F.INHERITS_CLAUSE: _row(
        postgres=S(),
        mysql=U("no table inheritance; copy the parent columns"),
        sqlite=U("no table inheritance; copy the parent columns"),
        ansi=U("no table inheritance; copy the parent columns"),
    ),
    F.UNLOGGED_TABLE: _row(
        postgres=S(),
        mysql=R("Remove UNLOGGED", "CREATE TABLE"),
        sqlite=R("Remove UNLOGGED", "CREATE TABLE"),
        ansi=R("Remove UNLOGGED", "CREATE TABLE"),
    ),
    F.EXCLUDE_CONSTRAINT: _row(
        postgres=S(),
        mysql=U("exclusion constraints need triggers or application checks"),
        sqlite=U("exclusion constraints need triggers or application checks"),
        ansi=U("exclusion constraints need triggers or application checks"),
    ),
    # Indexes
    F.PARTIAL_INDEX: _row(
        postgres=S(),
        mysql=U("no partial indexes"),
        sqlite=S(),
        ansi=U("no partial indexes"),
    ),
    F.EXPRESSION_INDEX: _row(
        postgres=S(),
        mysql=R("Wrap the expression in extra parentheses (8.0.13+) or index a generated column", "((expr))"),
        sqlite=S(),
        ansi=U("index a generated column instead"),
    ),
    F.INDEX_METHOD: _row(
        postgres=S(),
        mysql=S(),
        sqlite=R("Remove USING; SQLite only builds B-tree indexes"),
        ansi=R("Remove USING; index methods are implementation-defined"),
    ),
    F.INLINE_INDEX: _row(
        postgres=R("Move the index to a separate statement", "CREATE INDEX ... ON t (...)"),
        mysql=S(),
        sqlite=R("Move the index to a separate statement", "CREATE INDEX ... ON t (...)"),
        ansi=R("Move the index to a separate statement", "CREATE INDEX ... ON t (...)"),
    ),
    F.FULLTEXT_INDEX: _row(
        postgres=R("Use a GIN index over to_tsvector(...)", "CREATE INDEX ... USING GIN (to_tsvector(...))"),
        mysql=S(),
        sqlite=R("Use an FTS5 virtual table", "CREATE VIRTUAL TABLE ... USING fts5(...)"),
        ansi=U("no full text indexes in the standard"),
    ),
    F.SPATIAL_INDEX: _row(
        postgres=R("Use a GiST index", "CREATE INDEX ... USING GIST (...)"),
        mysql=S(),
        sqlite=U("spatial indexes need the R*Tree module"),
        ansi=U("no spatial indexes in the standard"),
    ),
    F.INDEX_PREFIX_LENGTH: _row(
        postgres=R("Index the full column or an expression such as left(col, n)"),
        mysql=S(),
        sqlite=R("Index the full column or an expression such as substr(col, 1, n)"),
        ansi=R("Index the full column"),
    ),
    # Names and expressions
    F.QUALIFIED_NAME: _row(
        postgres=S(),
        mysql=S(),
        sqlite=R("Attach the schema as a database or drop the qualifier", "ATTACH DATABASE ... AS schema"),
        ansi=S(),
    ),
    F.CATALOG_QUALIFIED_NAME: _row(
        postgres=S(),
        mysql=U("names have at most two parts"),
        sqlite=U("names have at most two parts"),
        ansi=S(),
    ),
    F.TYPE_CAST: _row(
        postgres=S(),
        mysql=R("Use CAST(expr AS type)", "CAST(expr AS type)"),
        sqlite=R("Use CAST(expr AS type)", "CAST(expr AS type)"),
        ansi=R("Use CAST(expr AS type)", "CAST(expr AS type)"),
    ),
    F.ILIKE_OPERATOR: _row(
        postgres=S(),
        mysql=R("Use LIKE with a case-insensitive collation", "LIKE"),
        sqlite=R("Use LIKE, which is case-insensitive for ASCII", "LIKE"),
        ansi=R("Compare lowered values", "LOWER(a) LIKE LOWER(b)"),
    ),
    # DML clauses
    F.LIMIT_CLAUSE: _row(
        postgres=S(),
        mysql=S(),
        sqlite=S(),
        ansi=R("Use the standard row limiting clause", "FETCH FIRST n ROWS ONLY"),
    ),
    F.RETURNING_CLAUSE: _row(
        postgres=S(),
        mysql=U("no RETURNING; query the rows after the write"),
        sqlite=S(),
        ansi=U("no RETURNING in the standard"),
    ),
    F.ON_CONFLICT_CLAUSE: _row(
        postgres=S(),
        mysql=R("Use ON DUPLICATE KEY UPDATE", "ON DUPLICATE KEY UPDATE"),
        sqlite=S(),
        ansi=R("Use MERGE", "MERGE INTO ... WHEN MATCHED THEN UPDATE"),
    ),
    F.ON_DUPLICATE_KEY_UPDATE: _row(
        postgres=R("Use ON CONFLICT ... DO UPDATE", "ON CONFLICT (...) DO UPDATE"),
        mysql=S(),
        sqlite=R("Use ON CONFLICT ... DO UPDATE", "ON CONFLICT (...) DO UPDATE"),
        ansi=R("Use MERGE", "MERGE INTO ... WHEN MATCHED THEN UPDATE"),
    ),
    F.INSERT_IGNORE: _row(
        postgres=R("Use ON CONFLICT DO NOTHING", "ON CONFLICT DO NOTHING"),
        mysql=S(),
        sqlite=R("Use INSERT OR IGNORE", "INSERT OR IGNORE"),
        ansi=R("Use MERGE with WHEN NOT MATCHED only", "MERGE INTO ... WHEN NOT MATCHED THEN INSERT"),
    ),
    F.INSERT_OR_ACTION: _row(
        postgres=R("Use ON CONFLICT", "ON CONFLICT DO NOTHING / DO UPDATE"),
        mysql=R("Use INSERT IGNORE or REPLACE", "INSERT IGNORE / REPLACE"),
        sqlite=S(),
        ansi=R("Use MERGE", "MERGE INTO"),
    ),
    F.REPLACE_INTO: _row(
        postgres=R("Use ON CONFLICT ... DO UPDATE", "INSERT ... ON CONFLICT DO UPDATE"),
        mysql=S(),
        sqlite=S(),
        ansi=R("Use MERGE", "MERGE INTO"),
    ),
    # ALTER TABLE
    F.ALTER_COLUMN: _row(
        postgres=S(),
        mysql=S(),
        sqlite=U("columns cannot be altered; rebuild the table"),
        ansi=S(),
    ),
    F.MODIFY_COLUMN: _row(
        postgres=R("Use ALTER COLUMN ... TYPE / SET / DROP", "ALTER COLUMN"),
        mysql=S(),
        sqlite=U("columns cannot be altered; rebuild the table"),
        ansi=R("Use ALTER COLUMN", "ALTER COLUMN"),
    ),
    F.MULTI_ACTION_ALTER: _row(
        postgres=S(),
        mysql=S(),
        sqlite=R("Issue one ALTER TABLE per action"),
        ansi=R("Issue one ALTER TABLE per action"),
    ),
}


def capability_entries() -> Dict[MatrixKey, Verdict]:
    return {(tag, dialect): verdict for tag, row in CAPABILITIES.items() for dialect, verdict in row.items()}
