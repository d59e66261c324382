"""
Dialect-agnostic statement tree produced by the parser.

Every node is a frozen dataclass; a statement never changes after the
parser builds it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Tuple, Union

from ..dialects import Dialect, FeatureTag
from ..errors import LexError, ParseError, SourceError


class StatementKind(Enum):
    CREATE_TABLE = "CREATE TABLE"
    CREATE_INDEX = "CREATE INDEX"
    CREATE_VIEW = "CREATE VIEW"
    ALTER_TABLE = "ALTER TABLE"
    DROP_TABLE = "DROP TABLE"
    DROP_INDEX = "DROP INDEX"
    DROP_VIEW = "DROP VIEW"
    INSERT = "INSERT"
    SELECT = "SELECT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


class StatementFlag(Enum):
    IF_NOT_EXISTS = "IF NOT EXISTS"
    IF_EXISTS = "IF EXISTS"
    TEMPORARY = "TEMPORARY"
    UNIQUE = "UNIQUE"
    OR_REPLACE = "OR REPLACE"
    AS_QUERY = "AS QUERY"


class ConstraintKind(Enum):
    PRIMARY_KEY = "PRIMARY KEY"
    UNIQUE = "UNIQUE"
    NOT_NULL = "NOT NULL"
    NULL = "NULL"
    CHECK = "CHECK"
    DEFAULT = "DEFAULT"
    FOREIGN_KEY = "FOREIGN KEY"
    INDEX = "INDEX"
    EXCLUDE = "EXCLUDE"
    GENERATED = "GENERATED"
    IDENTITY = "IDENTITY"


@dataclass(frozen=True)
class QualifiedName:
    """
    Object name with its ordered qualifiers (``db.schema.table``).
    """

    parts: Tuple[str, ...]

    @property
    def name(self) -> str:
        return self.parts[-1]

    @property
    def qualifiers(self) -> Tuple[str, ...]:
        return self.parts[:-1]

    def __str__(self) -> str:
        return ".".join(self.parts)


@dataclass(frozen=True)
class Node:
    position: int
    tags: Tuple[FeatureTag, ...] = ()

    def label(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class Column(Node):
    name: str = ""
    data_type: str | None = None

    def label(self) -> str:
        return f"column {self.name}"


@dataclass(frozen=True)
class Constraint(Node):
    kind: ConstraintKind = ConstraintKind.CHECK
    name: str | None = None
    column: str | None = None
    columns: Tuple[str, ...] = ()
    expression: str | None = None
    references: QualifiedName | None = None
    ref_columns: Tuple[str, ...] = ()

    @property
    def inline(self) -> bool:
        return self.column is not None

    def label(self) -> str:
        if self.name:
            return f"constraint {self.name}"
        owner = self.column or ", ".join(self.columns)
        return f"{self.kind.value} ({owner})" if owner else self.kind.value


@dataclass(frozen=True)
class IndexElement(Node):
    expression: str = ""
    column: str | None = None

    def label(self) -> str:
        return f"index element {self.expression}"


@dataclass(frozen=True)
class TableOption(Node):
    option: str = ""
    value: str | None = None

    def label(self) -> str:
        return f"option {self.option}" + (f"={self.value}" if self.value is not None else "")


@dataclass(frozen=True)
class AlterAction(Node):
    action: str = ""
    target: str | None = None

    def label(self) -> str:
        return f"{self.action} {self.target}" if self.target else self.action


@dataclass(frozen=True)
class AbstractStatement:
    """
    Parsed representation of one top-level SQL statement.

    ``children`` keeps declaration order across columns, constraints,
    index elements, options and alter actions; typed views filter it.
    """

    index: int
    kind: StatementKind
    dialect: Dialect
    text: str
    start: int
    end: int
    name: QualifiedName | None = None
    target: QualifiedName | None = None
    flags: frozenset[StatementFlag] = frozenset()
    children: Tuple[Node, ...] = ()
    tags: Tuple[FeatureTag, ...] = ()

    @property
    def columns(self) -> Tuple[Column, ...]:
        return tuple(node for node in self.children if isinstance(node, Column))

    @property
    def constraints(self) -> Tuple[Constraint, ...]:
        return tuple(node for node in self.children if isinstance(node, Constraint))

    @property
    def index_elements(self) -> Tuple[IndexElement, ...]:
        return tuple(node for node in self.children if isinstance(node, IndexElement))

    @property
    def options(self) -> Tuple[TableOption, ...]:
        return tuple(node for node in self.children if isinstance(node, TableOption))

    @property
    def actions(self) -> Tuple[AlterAction, ...]:
        return tuple(node for node in self.children if isinstance(node, AlterAction))

    def has_flag(self, flag: StatementFlag) -> bool:
        return flag in self.flags

    def features(self) -> Iterator[tuple[str, FeatureTag]]:
        """
        Yield ``(node label, tag)`` pairs in tree order.
        """

        for tag in self.tags:
            yield "statement", tag
        for node in self.children:
            for tag in node.tags:
                yield node.label(), tag

    def feature_tags(self) -> Tuple[FeatureTag, ...]:
        return tuple(dict.fromkeys(tag for _, tag in self.features()))

    def summary(self) -> str:
        parts = [self.kind.value]
        if self.name is not None:
            parts.append(str(self.name))
        if self.target is not None and self.target != self.name:
            prefix = _TARGET_PREFIX.get(self.kind)
            parts.append(f"{prefix} {self.target}" if prefix else str(self.target))
        return " ".join(parts)


_TARGET_PREFIX = {
    StatementKind.CREATE_INDEX: "ON",
    StatementKind.INSERT: "INTO",
    StatementKind.DELETE: "FROM",
}


@dataclass(frozen=True)
class ParseFailure:
    """
    A statement that could not be tokenized or parsed.
    """

    index: int
    text: str
    start: int
    end: int
    error: SourceError
    dialect: Dialect = Dialect.ANSI

    @property
    def lexical(self) -> bool:
        return isinstance(self.error, LexError)

    @property
    def parse_error(self) -> ParseError | None:
        return self.error if isinstance(self.error, ParseError) else None

    def summary(self, width: int = 40) -> str:
        flat = " ".join(self.text.split())
        return flat if len(flat) <= width else flat[: width - 3] + "..."


ParseOutcome = Union[AbstractStatement, ParseFailure]
