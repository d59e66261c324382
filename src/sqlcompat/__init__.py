"""
sqlcompat public package initialization.

Parses SQL in one dialect and reports which constructs port to another.
"""

from .analyzer import Analyzer, ProjectAnalysis, analyze, analyze_project  # noqa: F401
from .classify import (
    CapabilityMatrix,
    FeatureClassifier,
    Verdict,
    VerdictStatus,
    classify_statement,
    default_matrix,
)  # noqa: F401
from .config import AnalyzerConfig  # noqa: F401
from .dialects import Dialect, FeatureTag, get_grammar, register_grammar  # noqa: F401
from .errors import (
    ConfigurationError,
    LexError,
    MatrixIncompleteError,
    ParseError,
    ReportBuildError,
    SQLCompatError,
    UnknownFeatureTag,
    UnsupportedDialectError,
)  # noqa: F401
from .lexer import Tokenizer, tokenize  # noqa: F401
from .parser import AbstractStatement, ParseFailure, StatementParser, schema_catalog, split_statements  # noqa: F401
from .report import CompatibilityReport, EntryStatus, ExitStatus, ReportBuilder, render_matrix  # noqa: F401

__all__ = [
    "Analyzer",
    "ProjectAnalysis",
    "analyze",
    "analyze_project",
    "AnalyzerConfig",
    "Dialect",
    "FeatureTag",
    "get_grammar",
    "register_grammar",
    "Tokenizer",
    "tokenize",
    "split_statements",
    "StatementParser",
    "AbstractStatement",
    "ParseFailure",
    "schema_catalog",
    "CapabilityMatrix",
    "Verdict",
    "VerdictStatus",
    "FeatureClassifier",
    "classify_statement",
    "default_matrix",
    "CompatibilityReport",
    "ReportBuilder",
    "EntryStatus",
    "ExitStatus",
    "render_matrix",
    "SQLCompatError",
    "LexError",
    "ParseError",
    "UnknownFeatureTag",
    "MatrixIncompleteError",
    "ReportBuildError",
    "UnsupportedDialectError",
    "ConfigurationError",
]
