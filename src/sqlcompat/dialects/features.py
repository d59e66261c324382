"""
Dialect-specific SQL constructs tracked for compatibility purposes.
"""

from __future__ import annotations

from enum import Enum


class FeatureTag(Enum):
    """
    Closed set of feature identifiers.

    Each member's value is its display name; ``description`` explains the
    construct. New members are appended and never change existing ones.
    """

    def __new__(cls, display: str, description: str) -> "FeatureTag":
        member = object.__new__(cls)
        member._value_ = display
        member.description = description
        return member

    # Key generation
    SERIAL_COLUMN = ("SerialColumn", "SERIAL/BIGSERIAL/SMALLSERIAL pseudo-types")
    IDENTITY_COLUMN = ("IdentityColumn", "GENERATED ... AS IDENTITY columns")
    AUTO_INCREMENT = ("AutoIncrement", "MySQL AUTO_INCREMENT column attribute")
    SQLITE_AUTOINCREMENT = ("Autoincrement", "SQLite AUTOINCREMENT on INTEGER PRIMARY KEY")
    AUTO_INCREMENT_SEED = ("AutoIncrementSeed", "AUTO_INCREMENT=n table option")

    # Data types
    ARRAY_TYPE = ("ArrayType", "array column types such as TEXT[]")
    JSON_TYPE = ("JsonType", "JSON column type")
    JSONB_TYPE = ("JsonbType", "binary JSONB column type")
    UUID_TYPE = ("UuidType", "native UUID column type")
    BYTEA_TYPE = ("ByteaType", "PostgreSQL BYTEA binary type")
    BLOB_TYPE = ("BlobType", "BLOB binary large object type")
    NETWORK_ADDRESS_TYPE = ("NetworkAddressType", "INET/CIDR/MACADDR types")
    GEOMETRIC_TYPE = ("GeometricType", "PostgreSQL geometric types (POINT, BOX, POLYGON...)")
    SPATIAL_TYPE = ("SpatialType", "MySQL spatial types (POINT, GEOMETRY, POLYGON...)")
    TEXT_SEARCH_TYPE = ("TextSearchType", "TSVECTOR/TSQUERY full text search types")
    XML_TYPE = ("XmlType", "XML column type")
    MONEY_TYPE = ("MoneyType", "MONEY currency type")
    RANGE_TYPE = ("RangeType", "range types such as DATERANGE and TSRANGE")
    INTERVAL_TYPE = ("IntervalType", "INTERVAL column type")
    USER_DEFINED_TYPE = ("UserDefinedType", "column typed with a user-defined type name")
    TIME_ZONE_TYPE = ("TimeZoneType", "time zone aware temporal types")
    DATETIME_TYPE = ("DatetimeType", "DATETIME column type")
    YEAR_TYPE = ("YearType", "MySQL YEAR type")
    UNSIGNED_INTEGER = ("UnsignedInteger", "UNSIGNED numeric modifier")
    ZEROFILL_COLUMN = ("ZerofillColumn", "ZEROFILL numeric display modifier")
    SMALL_INTEGER_VARIANT = ("TinyMediumInt", "TINYINT/MEDIUMINT integer types")
    SIZED_TEXT_TYPE = ("SizedTextType", "TINYTEXT/MEDIUMTEXT/LONGTEXT types")
    SIZED_BLOB_TYPE = ("SizedBlobType", "TINYBLOB/MEDIUMBLOB/LONGBLOB types")
    BINARY_STRING_TYPE = ("BinaryStringType", "BINARY/VARBINARY types")
    ENUM_TYPE = ("EnumType", "inline ENUM('a', 'b') column type")
    SET_TYPE = ("SetType", "inline SET('a', 'b') column type")
    TEXT_LENGTH = ("TextLength", "TEXT(n) length modifier")

    # Column attributes
    GENERATED_COLUMN_STORED = ("GeneratedColumnStored", "stored generated column")
    GENERATED_COLUMN_VIRTUAL = ("GeneratedColumnVirtual", "virtual generated column")
    COLUMN_CHARSET = ("ColumnCharset", "per-column CHARACTER SET")
    COLUMN_COLLATION = ("ColumnCollation", "per-column COLLATE with dialect collation names")
    COLUMN_COMMENT = ("ColumnComment", "inline column COMMENT")
    ON_UPDATE_TIMESTAMP = ("OnUpdateTimestamp", "ON UPDATE CURRENT_TIMESTAMP column attribute")

    # Table level
    STORAGE_ENGINE = ("StorageEngine", "ENGINE=... table option")
    TABLE_CHARSET = ("TableCharset", "DEFAULT CHARSET=... table option")
    TABLE_COLLATION = ("TableCollation", "COLLATE=... table option")
    TABLE_COMMENT = ("TableComment", "COMMENT=... table option")
    STRICT_TABLE = ("StrictTable", "SQLite STRICT tables")
    WITHOUT_ROWID = ("WithoutRowid", "SQLite WITHOUT ROWID tables")
    INHERITS_CLAUSE = ("InheritsClause", "PostgreSQL table inheritance")
    UNLOGGED_TABLE = ("UnloggedTable", "PostgreSQL UNLOGGED tables")
    EXCLUDE_CONSTRAINT = ("ExcludeConstraint", "EXCLUDE USING exclusion constraints")

    # Indexes
    PARTIAL_INDEX = ("PartialIndex", "index with a WHERE predicate")
    EXPRESSION_INDEX = ("ExpressionIndex", "index over an expression")
    INDEX_METHOD = ("IndexMethod", "USING method index clause (GIN, GIST, BTREE...)")
    INLINE_INDEX = ("InlineIndex", "INDEX/KEY declared inside CREATE TABLE")
    FULLTEXT_INDEX = ("FulltextIndex", "FULLTEXT indexes")
    SPATIAL_INDEX = ("SpatialIndex", "SPATIAL indexes")
    INDEX_PREFIX_LENGTH = ("IndexPrefixLength", "index on a column prefix col(n)")

    # Names and expressions
    QUALIFIED_NAME = ("QualifiedName", "schema- or database-qualified object name")
    CATALOG_QUALIFIED_NAME = ("CatalogQualifiedName", "three-part catalog.schema.object name")
    TYPE_CAST = ("TypeCast", "PostgreSQL :: cast operator")
    ILIKE_OPERATOR = ("IlikeOperator", "case-insensitive ILIKE operator")

    # Statements
    LIMIT_CLAUSE = ("LimitClause", "LIMIT row limiting clause")
    RETURNING_CLAUSE = ("ReturningClause", "RETURNING clause on DML")
    ON_CONFLICT_CLAUSE = ("OnConflictClause", "INSERT ... ON CONFLICT upsert")
    ON_DUPLICATE_KEY_UPDATE = ("OnDuplicateKeyUpdate", "INSERT ... ON DUPLICATE KEY UPDATE upsert")
    INSERT_IGNORE = ("InsertIgnore", "MySQL INSERT IGNORE")
    INSERT_OR_ACTION = ("InsertOrAction", "SQLite INSERT OR REPLACE/IGNORE/...")
    REPLACE_INTO = ("ReplaceInto", "REPLACE INTO statement")
    ALTER_COLUMN = ("AlterColumn", "ALTER TABLE ... ALTER COLUMN")
    MODIFY_COLUMN = ("ModifyColumn", "ALTER TABLE ... MODIFY/CHANGE COLUMN")
    MULTI_ACTION_ALTER = ("MultiActionAlter", "several actions in one ALTER TABLE")

    @classmethod
    def from_name(cls, value: str) -> "FeatureTag":
        """
        Resolve a tag by display name (``SerialColumn``) or member name.
        """

        try:
            return cls(value)
        except ValueError:
            pass
        try:
            return cls[value.upper()]
        except KeyError:
            raise ValueError(f"Unknown feature tag: {value!r}") from None
