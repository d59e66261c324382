"""
Analyzer configuration loaded from ``sqlcompat.toml`` or the environment.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Tuple

from .classify import CapabilityMatrix, Verdict, default_matrix
from .dialects import Dialect, FeatureTag
from .errors import ConfigurationError, UnsupportedDialectError

DEFAULT_CONFIG_NAME = "sqlcompat.toml"

_ANALYZE_KEYS = {"dialect", "targets", "schema-file", "queries-dir", "workers"}


def _parse_dialect(value: Any, *, key: str) -> Dialect:
    if not isinstance(value, (str, Dialect)):
        raise ConfigurationError(f"Invalid dialect for '{key}': {value!r}")
    try:
        return Dialect.from_name(value)
    except UnsupportedDialectError as exc:
        raise ConfigurationError(f"Invalid dialect for '{key}': {value!r}") from exc


def _parse_targets(value: Any, *, key: str) -> Tuple[Dialect, ...]:
    if isinstance(value, str):
        value = [part for part in (item.strip() for item in value.split(",")) if part]
    if not isinstance(value, (list, tuple)) or not value:
        raise ConfigurationError(f"Invalid target list for '{key}': {value!r}")
    return tuple(dict.fromkeys(_parse_dialect(item, key=key) for item in value))


def _parse_workers(value: Any, *, key: str) -> int:
    try:
        workers = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid integer value for '{key}': {value!r}") from exc
    if workers < 1 or isinstance(value, bool):
        raise ConfigurationError(f"'{key}' must be a positive integer, got {value!r}")
    return workers


def _parse_verdict(value: Any, *, key: str) -> Verdict:
    if not isinstance(value, str) or not value.strip():
        raise ConfigurationError(f"Invalid capability for '{key}': {value!r}")
    normalized = value.strip().lower()
    if normalized == "supported":
        return Verdict.supported()
    if normalized == "unsupported":
        return Verdict.unsupported(note="configured")
    return Verdict.rewrite_to(value.strip())


def _parse_capabilities(table: Any) -> Dict[Tuple[FeatureTag, Dialect], Verdict]:
    if not isinstance(table, Mapping):
        raise ConfigurationError("[capabilities] must be a table of feature tags")
    overrides: Dict[Tuple[FeatureTag, Dialect], Verdict] = {}
    for tag_name, row in table.items():
        try:
            tag = FeatureTag.from_name(tag_name)
        except ValueError as exc:
            raise ConfigurationError(f"Unknown feature tag in [capabilities]: {tag_name!r}") from exc
        if not isinstance(row, Mapping):
            raise ConfigurationError(f"[capabilities.{tag_name}] must map dialects to verdicts")
        for target_name, value in row.items():
            key = f"capabilities.{tag_name}.{target_name}"
            overrides[(tag, _parse_dialect(target_name, key=key))] = _parse_verdict(value, key=key)
    return overrides


@dataclass
class AnalyzerConfig:
    """
    Normalized analyzer settings.

    Relative ``schema_file`` and ``queries_dir`` paths resolve against
    ``root``, the directory holding the config file.
    """

    source: Dialect = Dialect.ANSI
    targets: Tuple[Dialect, ...] = ()
    schema_file: Path = Path("schema.sql")
    queries_dir: Path = Path("queries")
    workers: int | None = None
    capability_overrides: Dict[Tuple[FeatureTag, Dialect], Verdict] = field(default_factory=dict)
    root: Path = field(default_factory=Path.cwd)

    def __post_init__(self) -> None:
        self.source = _parse_dialect(self.source, key="dialect")
        if not self.targets:
            self.targets = tuple(dialect for dialect in Dialect if dialect is not self.source)
        else:
            self.targets = _parse_targets(self.targets, key="targets")
        self.schema_file = Path(self.schema_file)
        self.queries_dir = Path(self.queries_dir)
        self.root = Path(self.root)

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str], **kwargs: Any) -> "AnalyzerConfig":
        """
        Read an ``[analyze]`` table and optional ``[capabilities]`` overrides.
        """

        config_path = Path(path)
        if config_path.is_dir():
            config_path = config_path / DEFAULT_CONFIG_NAME
        try:
            with config_path.open("rb") as handle:
                document = tomllib.load(handle)
        except FileNotFoundError as exc:
            raise ConfigurationError(f"Config file not found: {config_path}") from exc
        except tomllib.TOMLDecodeError as exc:
            raise ConfigurationError(f"Invalid TOML in {config_path}: {exc}") from exc

        analyze = document.get("analyze", {})
        if not isinstance(analyze, Mapping):
            raise ConfigurationError("[analyze] must be a table")
        unknown = set(analyze) - _ANALYZE_KEYS
        if unknown:
            raise ConfigurationError(f"Unknown [analyze] keys: {', '.join(sorted(unknown))}")

        values: Dict[str, Any] = {
            "source": _parse_dialect(analyze.get("dialect", "generic"), key="dialect"),
            "schema_file": Path(analyze.get("schema-file", "schema.sql")),
            "queries_dir": Path(analyze.get("queries-dir", "queries")),
            "root": config_path.parent,
        }
        if "targets" in analyze:
            values["targets"] = _parse_targets(analyze["targets"], key="targets")
        if "workers" in analyze:
            values["workers"] = _parse_workers(analyze["workers"], key="workers")
        if "capabilities" in document:
            values["capability_overrides"] = _parse_capabilities(document["capabilities"])
        values.update(kwargs)
        return cls(**values)

    @classmethod
    def from_env(cls, prefix: str = "SQLCOMPAT_", **kwargs: Any) -> "AnalyzerConfig":
        """
        Build a config from ``<prefix>DIALECT``, ``<prefix>TARGETS`` and ``<prefix>WORKERS``.
        """

        values: Dict[str, Any] = {}
        dialect = os.getenv(f"{prefix}DIALECT")
        if dialect:
            values["source"] = _parse_dialect(dialect, key=f"{prefix}DIALECT")
        targets = os.getenv(f"{prefix}TARGETS")
        if targets:
            values["targets"] = _parse_targets(targets, key=f"{prefix}TARGETS")
        workers = os.getenv(f"{prefix}WORKERS")
        if workers:
            values["workers"] = _parse_workers(workers, key=f"{prefix}WORKERS")
        values.update(kwargs)
        return cls(**values)

    @property
    def schema_path(self) -> Path:
        return self.root / self.schema_file

    @property
    def queries_path(self) -> Path:
        return self.root / self.queries_dir

    def build_matrix(self, base: CapabilityMatrix | None = None) -> CapabilityMatrix:
        matrix = base if base is not None else default_matrix()
        if not self.capability_overrides:
            return matrix
        return matrix.with_overrides(self.capability_overrides)
