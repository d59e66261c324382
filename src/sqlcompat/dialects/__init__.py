"""
Dialect grammar registry.
"""

from __future__ import annotations

from typing import Dict

from .ansi import ANSI_GRAMMAR
from .base import Dialect, GrammarRule, GrammarTable, Production, TypeRule
from .features import FeatureTag
from .mysql import MYSQL_GRAMMAR
from .postgres import POSTGRES_GRAMMAR
from .sqlite import SQLITE_GRAMMAR

_GRAMMARS: Dict[Dialect, GrammarTable] = {
    table.dialect: table for table in (ANSI_GRAMMAR, POSTGRES_GRAMMAR, MYSQL_GRAMMAR, SQLITE_GRAMMAR)
}


def get_grammar(dialect: Dialect | str) -> GrammarTable:
    return _GRAMMARS[Dialect.from_name(dialect)]


def register_grammar(table: GrammarTable, *, replace: bool = False) -> None:
    """
    Register a grammar table for its dialect without touching existing ones.
    """

    if table.dialect in _GRAMMARS and not replace:
        raise ValueError(f"Grammar for {table.dialect.value!r} is already registered")
    _GRAMMARS[table.dialect] = table


def registered_dialects() -> tuple[Dialect, ...]:
    return tuple(_GRAMMARS)


__all__ = [
    "ANSI_GRAMMAR",
    "Dialect",
    "FeatureTag",
    "GrammarRule",
    "GrammarTable",
    "MYSQL_GRAMMAR",
    "POSTGRES_GRAMMAR",
    "Production",
    "SQLITE_GRAMMAR",
    "TypeRule",
    "get_grammar",
    "register_grammar",
    "registered_dialects",
]
