"""
Statement splitting and grammar-driven parsing.
"""

from .parser import StatementParser, parse, schema_catalog
from .splitter import StatementSource, split_statements
from .statements import (
    AbstractStatement,
    AlterAction,
    Column,
    Constraint,
    ConstraintKind,
    IndexElement,
    Node,
    ParseFailure,
    ParseOutcome,
    QualifiedName,
    StatementFlag,
    StatementKind,
    TableOption,
)

__all__ = [
    "AbstractStatement",
    "AlterAction",
    "Column",
    "Constraint",
    "ConstraintKind",
    "IndexElement",
    "Node",
    "ParseFailure",
    "ParseOutcome",
    "QualifiedName",
    "StatementFlag",
    "StatementKind",
    "StatementParser",
    "StatementSource",
    "TableOption",
    "parse",
    "schema_catalog",
    "split_statements",
]
