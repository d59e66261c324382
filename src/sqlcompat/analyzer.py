"""
High-level entry points tying parsing, classification and reporting together.
"""

from __future__ import annotations

import contextvars
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Sequence, Tuple

from .classify import CapabilityMatrix, FeatureClassifier, default_matrix
from .config import AnalyzerConfig
from .dialects import Dialect
from .errors import ConfigurationError
from .parser import ParseOutcome, StatementParser, schema_catalog
from .report import CompatibilityReport, ExitStatus, build_report
from .utils import get_logger, time_call
from .utils.logging import set_run_id

logger = get_logger("analyzer")


@dataclass(frozen=True)
class ProjectAnalysis:
    """
    Reports for a schema file and every query file, per target.
    """

    schema_file: Path
    tables: Dict[str, Dict[str, str | None]]
    reports: Dict[Path, Dict[Dialect, CompatibilityReport]] = field(default_factory=dict)

    @property
    def exit_status(self) -> ExitStatus:
        statuses = [report.exit_status for per_target in self.reports.values() for report in per_target.values()]
        return max(statuses, default=ExitStatus.OK)

    def render_text(self) -> str:
        blocks: List[str] = []
        for path, per_target in self.reports.items():
            for report in per_target.values():
                blocks.append(f"== {path}\n{report.render_text()}")
        return "\n\n".join(blocks)


class Analyzer:
    """
    Analyzes SQL written in ``source`` against one or more target dialects.

    Parsing is sequential within a file; files are parsed concurrently and
    statements are classified by a shared ``FeatureClassifier``.
    """

    def __init__(
        self,
        source: Dialect | str,
        matrix: CapabilityMatrix | None = None,
        workers: int | None = None,
    ) -> None:
        self.source = Dialect.from_name(source)
        self.matrix = matrix if matrix is not None else default_matrix()
        self.workers = workers
        self.parser = StatementParser(self.source)
        self.classifier = FeatureClassifier(self.matrix, workers)

    @classmethod
    def from_config(cls, config: AnalyzerConfig) -> "Analyzer":
        return cls(config.source, config.build_matrix(), config.workers)

    def parse(self, sql: str) -> List[ParseOutcome]:
        return self.parser.parse(sql)

    def analyze(self, sql: str, target: Dialect | str) -> CompatibilityReport:
        target = Dialect.from_name(target)
        return self._report(sql, self.parse(sql), target)

    def analyze_targets(self, sql: str, targets: Iterable[Dialect | str] | None = None) -> Dict[Dialect, CompatibilityReport]:
        """
        Parse once and report against every target; defaults to all other dialects.
        """

        resolved = self._targets(targets)
        outcomes = self.parse(sql)
        return {target: self._report(sql, outcomes, target) for target in resolved}

    def analyze_files(
        self,
        paths: Iterable[str | os.PathLike[str]],
        target: Dialect | str,
    ) -> Dict[Path, CompatibilityReport]:
        target = Dialect.from_name(target)
        by_path = self._analyze_paths([Path(path) for path in paths], [target])
        return {path: reports[target] for path, reports in by_path.items()}

    def analyze_project(self, config: AnalyzerConfig) -> ProjectAnalysis:
        """
        Analyze the schema file and every ``*.sql`` file under the queries
        directory named by ``config``.
        """

        if config.source is not self.source:
            raise ConfigurationError(
                f"Config dialect {config.source.value!r} does not match analyzer dialect {self.source.value!r}"
            )
        run_id = set_run_id()
        schema_path = config.schema_path
        if not schema_path.is_file():
            raise ConfigurationError(f"Schema file not found: {schema_path}")
        queries = sorted(config.queries_path.rglob("*.sql")) if config.queries_path.is_dir() else []
        if not queries:
            logger.warning("No query files found under %s", config.queries_path)
        logger.info(
            "Project run %s: %s -> %s, %d query files",
            run_id,
            self.source.value,
            ", ".join(target.value for target in config.targets),
            len(queries),
        )
        schema_sql = schema_path.read_text(encoding="utf-8")
        schema_outcomes = self.parse(schema_sql)
        tables = schema_catalog(schema_outcomes)
        reports = self._analyze_paths(
            [schema_path, *queries],
            list(config.targets),
            parsed={schema_path: (schema_sql, schema_outcomes)},
        )
        return ProjectAnalysis(schema_file=schema_path, tables=tables, reports=reports)

    # Internals --------------------------------------------------------
    def _targets(self, targets: Iterable[Dialect | str] | None) -> List[Dialect]:
        if targets is None:
            return [dialect for dialect in Dialect if dialect is not self.source]
        return list(dict.fromkeys(Dialect.from_name(target) for target in targets))

    def _analyze_paths(
        self,
        paths: Sequence[Path],
        targets: Sequence[Dialect],
        *,
        parsed: Mapping[Path, Tuple[str, List[ParseOutcome]]] | None = None,
    ) -> Dict[Path, Dict[Dialect, CompatibilityReport]]:
        # Paths already parsed by the caller are not read again.
        known = parsed or {}

        def analyze_one(path: Path) -> Dict[Dialect, CompatibilityReport]:
            if path in known:
                sql, outcomes = known[path]
            else:
                sql = path.read_text(encoding="utf-8")
                outcomes = self.parse(sql)
            return {target: self._report(sql, outcomes, target, label=str(path)) for target in targets}

        with time_call("analyze_files", logger, statements=None):
            if self.workers == 1 or len(paths) < 2:
                return {path: analyze_one(path) for path in paths}
            with ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="sqlcompat-files") as pool:
                futures = {path: pool.submit(contextvars.copy_context().run, analyze_one, path) for path in paths}
                return {path: future.result() for path, future in futures.items()}

    def _report(
        self,
        sql: str,
        outcomes: Sequence[ParseOutcome],
        target: Dialect,
        *,
        label: str = "<input>",
    ) -> CompatibilityReport:
        results = self.classifier.classify_all(outcomes, target)
        report = build_report(results, self.source, target, sql=sql)
        counts = ", ".join(f"{status.value}={count}" for status, count in report.summary().items() if count)
        logger.info(
            "Analyzed %s: %d statements %s -> %s (%s)",
            label,
            len(report.entries),
            self.source.value,
            target.value,
            counts or "empty",
        )
        return report


def analyze(
    sql: str,
    source: Dialect | str,
    target: Dialect | str,
    *,
    matrix: CapabilityMatrix | None = None,
) -> CompatibilityReport:
    return Analyzer(source, matrix=matrix).analyze(sql, target)


def analyze_project(config: AnalyzerConfig) -> ProjectAnalysis:
    return Analyzer.from_config(config).analyze_project(config)
