"""
Dialect identifiers and the declarative grammar tables consumed by the parser.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Protocol, Sequence, Tuple

from ..errors import UnsupportedDialectError
from .features import FeatureTag

Keywords = Tuple[str, ...]


class Dialect(Enum):
    """
    SQL dialects with a registered grammar table and capability column.
    """

    POSTGRES = "postgresql"
    ANSI = "ansi"
    MYSQL = "mysql"
    SQLITE = "sqlite"

    @classmethod
    def from_name(cls, value: "str | Dialect") -> "Dialect":
        if isinstance(value, Dialect):
            return value
        normalized = value.strip().lower()
        dialect = _ALIASES.get(normalized)
        if dialect is None:
            raise UnsupportedDialectError(value)
        return dialect


_ALIASES = {
    "postgresql": Dialect.POSTGRES,
    "postgres": Dialect.POSTGRES,
    "pg": Dialect.POSTGRES,
    "ansi": Dialect.ANSI,
    "ansi_sql": Dialect.ANSI,
    "sql": Dialect.ANSI,
    "generic": Dialect.ANSI,
    "mysql": Dialect.MYSQL,
    "mariadb": Dialect.MYSQL,
    "sqlite": Dialect.SQLITE,
    "sqlite3": Dialect.SQLITE,
}


class Production(Enum):
    """
    Parse routines a grammar rule can dispatch to.
    """

    # Statements
    CREATE_TABLE = "create_table"
    CREATE_INDEX = "create_index"
    CREATE_VIEW = "create_view"
    ALTER_TABLE = "alter_table"
    DROP_TABLE = "drop_table"
    DROP_INDEX = "drop_index"
    DROP_VIEW = "drop_view"
    INSERT = "insert"
    SELECT = "select"
    UPDATE = "update"
    DELETE = "delete"

    # Column constraints and attributes
    CONSTRAINT_NAME = "constraint_name"
    PRIMARY_KEY = "primary_key"
    NOT_NULL = "not_null"
    NULL = "null"
    UNIQUE = "unique"
    CHECK = "check"
    DEFAULT = "default"
    REFERENCES = "references"
    GENERATED = "generated"
    IDENTITY = "identity"
    COLUMN_FLAG = "column_flag"
    COLUMN_VALUE = "column_value"
    ON_UPDATE = "on_update"

    # Table elements
    TABLE_PRIMARY_KEY = "table_primary_key"
    TABLE_UNIQUE = "table_unique"
    TABLE_FOREIGN_KEY = "table_foreign_key"
    TABLE_CHECK = "table_check"
    TABLE_INDEX = "table_index"
    TABLE_EXCLUDE = "table_exclude"

    # Table options
    OPTION_VALUE = "option_value"
    OPTION_FLAG = "option_flag"
    OPTION_LIST = "option_list"
    OPTION_WORDS = "option_words"

    # Index options
    INDEX_METHOD = "index_method"
    INDEX_WHERE = "index_where"
    INDEX_INCLUDE = "index_include"

    # ALTER TABLE actions
    ALTER_ADD = "alter_add"
    ALTER_ADD_COLUMN = "alter_add_column"
    ALTER_DROP_COLUMN = "alter_drop_column"
    ALTER_DROP_CONSTRAINT = "alter_drop_constraint"
    ALTER_RENAME_COLUMN = "alter_rename_column"
    ALTER_RENAME_TABLE = "alter_rename_table"
    ALTER_COLUMN = "alter_column"
    ALTER_MODIFY = "alter_modify"
    ALTER_CHANGE = "alter_change"

    # Types and markers
    TYPE_FLAG = "type_flag"
    TYPE_ARRAY = "type_array"
    CLAUSE_MARKER = "clause_marker"


@dataclass(frozen=True)
class GrammarRule:
    """
    Maps a leading keyword sequence to a production and an optional feature tag.
    """

    keywords: Keywords
    production: Production
    tag: FeatureTag | None = None

    @property
    def text(self) -> str:
        return " ".join(self.keywords)


@dataclass(frozen=True)
class TypeRule:
    """
    Describes a data type spelling accepted by a dialect.

    ``max_params`` is the number of parenthesised parameters allowed
    (``-1`` for an open list such as ``ENUM``). ``param_tag`` is attached
    only when parameters are present.
    """

    keywords: Keywords
    tag: FeatureTag | None = None
    max_params: int = 0
    param_tag: FeatureTag | None = None
    string_params: bool = False

    @property
    def text(self) -> str:
        return " ".join(self.keywords)


class Matchable(Protocol):
    @property
    def keyword(self) -> str | None: ...


RULE_SECTIONS = (
    "statements",
    "column_constraints",
    "table_elements",
    "table_options",
    "index_options",
    "alter_actions",
    "type_suffixes",
    "clause_markers",
)

# Words recognised as keywords in every dialect even when no rule starts with them.
RESERVED_WORDS = frozenset(
    """
    ALL AND ANY AS ASC BETWEEN BY CASCADE CASE COLUMN CONCURRENTLY CROSS
    CURRENT_DATE CURRENT_TIME CURRENT_TIMESTAMP DEFERRABLE DEFERRED DESC
    DISTINCT ELSE END EXISTS FALSE FIRST FOR FROM FULL GROUP HAVING IF IN
    INITIALLY INNER INTO IS JOIN KEY LAST LEFT LIKE MATCH NO NOT NULL NULLS
    OF ON ONLY OR ORDER OUTER RESTRICT RIGHT SET STORED THEN TO TRUE UNION
    USING VALUES VIRTUAL WHEN WHERE WITH
    """.split()
)


def keywords(text: str) -> Keywords:
    return tuple(text.upper().split())


def rule_map(*entries: tuple) -> dict[Keywords, GrammarRule]:
    """
    Build a rule section from ``(keywords, production[, tag])`` entries.
    """

    section: dict[Keywords, GrammarRule] = {}
    for entry in entries:
        text, production, *rest = entry
        key = keywords(text)
        section[key] = GrammarRule(key, production, rest[0] if rest else None)
    return section


def type_map(*entries: tuple) -> dict[Keywords, TypeRule]:
    """
    Build a type section from ``(keywords, tag, max_params[, param_tag[, string_params]])`` entries.
    """

    section: dict[Keywords, TypeRule] = {}
    for entry in entries:
        text, *rest = entry
        key = keywords(text)
        section[key] = TypeRule(key, *rest)
    return section


@dataclass(frozen=True, eq=False)
class GrammarTable:
    """
    Immutable per-dialect grammar registry.

    Dialect tables are derived from the shared ANSI table with
    :meth:`extend`, which merges mappings rather than subclassing.
    """

    dialect: Dialect
    statements: Mapping[Keywords, GrammarRule] = field(default_factory=dict)
    column_constraints: Mapping[Keywords, GrammarRule] = field(default_factory=dict)
    table_elements: Mapping[Keywords, GrammarRule] = field(default_factory=dict)
    table_options: Mapping[Keywords, GrammarRule] = field(default_factory=dict)
    index_options: Mapping[Keywords, GrammarRule] = field(default_factory=dict)
    alter_actions: Mapping[Keywords, GrammarRule] = field(default_factory=dict)
    type_suffixes: Mapping[Keywords, GrammarRule] = field(default_factory=dict)
    clause_markers: Mapping[Keywords, GrammarRule] = field(default_factory=dict)
    types: Mapping[Keywords, TypeRule] = field(default_factory=dict)
    expression_operators: Mapping[str, FeatureTag] = field(default_factory=dict)
    identifier_quotes: str = '"'
    double_quote_strings: bool = False
    backslash_escapes: bool = False
    hash_comments: bool = False
    nested_comments: bool = False
    dollar_quotes: bool = False
    user_type_tag: FeatureTag | None = None
    optional_column_type: bool = False
    multi_action_alter: bool = True
    index_prefix_lengths: bool = False
    keyword_set: frozenset[str] = field(init=False, default=frozenset())
    _widths: Mapping[str, int] = field(init=False, default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        words: set[str] = set(RESERVED_WORDS)
        widths: dict[str, int] = {}
        for name in RULE_SECTIONS + ("types",):
            section = MappingProxyType(dict(getattr(self, name)))
            object.__setattr__(self, name, section)
            widths[name] = max((len(key) for key in section), default=0)
            for key in section:
                words.update(word for word in key if word.isidentifier())
        operators = MappingProxyType({k.upper(): v for k, v in self.expression_operators.items()})
        object.__setattr__(self, "expression_operators", operators)
        words.update(word for word in operators if word.isidentifier())
        object.__setattr__(self, "keyword_set", frozenset(words))
        object.__setattr__(self, "_widths", MappingProxyType(widths))

    # Lookup -----------------------------------------------------------
    def match(self, section: str, tokens: Sequence[Matchable], index: int = 0) -> tuple[Any, int] | None:
        """
        Longest-prefix match of ``tokens[index:]`` against a rule section.

        Returns ``(rule, width)`` or ``None`` when no rule applies.
        """

        mapping: Mapping[Keywords, Any] = getattr(self, section)
        words: list[str] = []
        for token in tokens[index : index + self._widths[section]]:
            word = token.keyword
            if word is None:
                break
            words.append(word)
        for width in range(len(words), 0, -1):
            rule = mapping.get(tuple(words[:width]))
            if rule is not None:
                return rule, width
        return None

    def is_keyword(self, word: str) -> bool:
        return word.upper() in self.keyword_set

    def feature_tags(self) -> frozenset[FeatureTag]:
        """
        Every feature tag this grammar can attach to a parse tree.
        """

        tags: set[FeatureTag] = set()
        for name in RULE_SECTIONS:
            tags.update(rule.tag for rule in getattr(self, name).values() if rule.tag)
        for type_rule in self.types.values():
            tags.update(tag for tag in (type_rule.tag, type_rule.param_tag) if tag)
        tags.update(self.expression_operators.values())
        if self.user_type_tag:
            tags.add(self.user_type_tag)
        if any(rule.production is Production.GENERATED for rule in self.column_constraints.values()):
            # Storage keyword after the generation expression.
            tags.update({FeatureTag.GENERATED_COLUMN_STORED, FeatureTag.GENERATED_COLUMN_VIRTUAL})
        tags.update({FeatureTag.QUALIFIED_NAME, FeatureTag.CATALOG_QUALIFIED_NAME, FeatureTag.EXPRESSION_INDEX})
        if self.multi_action_alter:
            tags.add(FeatureTag.MULTI_ACTION_ALTER)
        if self.index_prefix_lengths:
            tags.add(FeatureTag.INDEX_PREFIX_LENGTH)
        return frozenset(tags)

    # Composition ------------------------------------------------------
    def extend(
        self,
        dialect: Dialect,
        *,
        remove: Mapping[str, Iterable[str]] | None = None,
        **changes: Any,
    ) -> "GrammarTable":
        """
        Return a new table for ``dialect``: mappings are merged with
        ``changes``, scalar settings replaced, and ``remove`` drops keys.
        """

        values: dict[str, Any] = {}
        for item in fields(self):
            if not item.init or item.name == "dialect":
                continue
            current = getattr(self, item.name)
            if isinstance(current, Mapping):
                merged = dict(current)
                merged.update(changes.pop(item.name, {}))
                values[item.name] = merged
            else:
                values[item.name] = changes.pop(item.name, current)
        if changes:
            raise TypeError(f"Unknown grammar settings: {', '.join(sorted(changes))}")
        for section, keys in (remove or {}).items():
            for key in keys:
                if section == "expression_operators":
                    values[section].pop(key.upper(), None)
                else:
                    values[section].pop(keywords(key), None)
        return GrammarTable(dialect=dialect, **values)
