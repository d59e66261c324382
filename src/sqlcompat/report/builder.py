"""
Compatibility report assembly and rendering.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Dict, Iterable, List, Mapping, Tuple

from ..classify import Classified, FeatureVerdict, RewriteRule, StatementVerdict, VerdictStatus
from ..dialects import Dialect, FeatureTag
from ..errors import ReportBuildError, SourceError, context_block, locate
from ..parser import ParseFailure
from ..utils import get_logger

logger = get_logger("report")


class EntryStatus(Enum):
    SUPPORTED = "Supported"
    REWRITE = "SupportedWithRewrite"
    UNSUPPORTED = "Unsupported"
    PARSE_FAILED = "ParseFailed"

    @classmethod
    def from_verdict(cls, status: VerdictStatus) -> "EntryStatus":
        return _FROM_VERDICT[status]


_FROM_VERDICT = {
    VerdictStatus.SUPPORTED: EntryStatus.SUPPORTED,
    VerdictStatus.REWRITE: EntryStatus.REWRITE,
    VerdictStatus.UNSUPPORTED: EntryStatus.UNSUPPORTED,
}


class ExitStatus(IntEnum):
    """Process exit codes; a parse failure outranks an unsupported feature."""

    OK = 0
    REWRITE = 1
    UNSUPPORTED = 2
    PARSE_FAILED = 3


@dataclass(frozen=True)
class ReportEntry:
    """
    One source statement in a report, successful or not.
    """

    index: int
    text: str
    summary: str
    status: EntryStatus
    tags: Tuple[FeatureTag, ...] = ()
    verdicts: Tuple[FeatureVerdict, ...] = ()
    rewrites: Tuple[RewriteRule, ...] = ()
    error: SourceError | None = None
    line: int | None = None
    column: int | None = None
    context: str | None = None

    def feature_summary(self) -> List[str]:
        seen: Dict[FeatureTag, str] = {}
        for verdict in self.verdicts:
            seen.setdefault(verdict.tag, f"{verdict.tag.value}: {verdict.status.label}")
        return list(seen.values())

    def render(self) -> str:
        if self.error is not None:
            where = f" at line {self.line}, column {self.column}" if self.line is not None else ""
            return f"{self.status.value} {self.summary} [{self.error.message}{where}]"
        features = self.feature_summary()
        suffix = f" [{' '.join(features)}]" if features else ""
        return f"{self.status.value} {self.summary}{suffix}"

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "index": self.index,
            "status": self.status.value,
            "summary": self.summary,
            "text": self.text,
            "tags": [tag.value for tag in self.tags],
            "features": [
                {"tag": verdict.tag.value, "node": verdict.node, "verdict": verdict.status.label}
                for verdict in self.verdicts
            ],
            "rewrites": [
                {"description": rule.description, "replacement": rule.replacement} for rule in self.rewrites
            ],
        }
        if self.error is not None:
            data["error"] = {"message": self.error.message, "line": self.line, "column": self.column}
        return data


@dataclass(frozen=True)
class CompatibilityReport:
    source: Dialect
    target: Dialect
    entries: Tuple[ReportEntry, ...]

    def summary(self) -> Dict[EntryStatus, int]:
        counts = Counter(entry.status for entry in self.entries)
        return {status: counts.get(status, 0) for status in EntryStatus}

    @property
    def errors(self) -> Tuple[ReportEntry, ...]:
        return tuple(
            entry for entry in self.entries if entry.status in (EntryStatus.UNSUPPORTED, EntryStatus.PARSE_FAILED)
        )

    @property
    def warnings(self) -> Tuple[ReportEntry, ...]:
        return tuple(entry for entry in self.entries if entry.status is EntryStatus.REWRITE)

    @property
    def suggestions(self) -> Tuple[RewriteRule, ...]:
        return tuple(dict.fromkeys(rule for entry in self.entries for rule in entry.rewrites))

    @property
    def exit_status(self) -> ExitStatus:
        statuses = {entry.status for entry in self.entries}
        if EntryStatus.PARSE_FAILED in statuses:
            return ExitStatus.PARSE_FAILED
        if EntryStatus.UNSUPPORTED in statuses:
            return ExitStatus.UNSUPPORTED
        if EntryStatus.REWRITE in statuses:
            return ExitStatus.REWRITE
        return ExitStatus.OK

    def render_text(self, *, context: bool = True) -> str:
        lines = [f"{self.source.value} -> {self.target.value}"]
        for entry in self.entries:
            lines.append(entry.render())
            if context and entry.context:
                lines.extend(f"    {row}" for row in entry.context.splitlines())
        counts = ", ".join(f"{status.value}: {count}" for status, count in self.summary().items())
        lines.append(counts)
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source.value,
            "target": self.target.value,
            "exit_status": int(self.exit_status),
            "summary": {status.value: count for status, count in self.summary().items()},
            "entries": [entry.to_dict() for entry in self.entries],
            "suggestions": [str(rule) for rule in self.suggestions],
        }


class ReportBuilder:
    """
    Collects classified statements in source order.

    ``sql`` is the full source text; when given, parse failures carry line
    numbers and a numbered context block relative to it.
    """

    def __init__(self, source: Dialect | str, target: Dialect | str, *, sql: str | None = None) -> None:
        self.source = Dialect.from_name(source)
        self.target = Dialect.from_name(target)
        self.sql = sql
        self._entries: List[ReportEntry] = []
        self._last_index = -1

    def add(self, index: int, result: Classified) -> ReportEntry:
        if index <= self._last_index:
            raise ReportBuildError(
                f"Statement index {index} added after {self._last_index}; entries must be strictly increasing"
            )
        if isinstance(result, StatementVerdict):
            if result.target is not self.target:
                raise ReportBuildError(
                    f"Verdict for {result.target.value} added to a report targeting {self.target.value}"
                )
            entry = self._verdict_entry(index, result)
        elif isinstance(result, ParseFailure):
            entry = self._failure_entry(index, result)
        else:
            raise ReportBuildError(f"Cannot report {type(result).__name__} results")
        self._entries.append(entry)
        self._last_index = index
        return entry

    def extend(self, results: Iterable[Classified]) -> None:
        for result in results:
            self.add(result.index, result)

    def build(self) -> CompatibilityReport:
        report = CompatibilityReport(source=self.source, target=self.target, entries=tuple(self._entries))
        logger.debug("Built %s -> %s report with %d entries", self.source.value, self.target.value, len(report.entries))
        return report

    def _verdict_entry(self, index: int, verdict: StatementVerdict) -> ReportEntry:
        statement = verdict.statement
        return ReportEntry(
            index=index,
            text=statement.text,
            summary=statement.summary(),
            status=EntryStatus.from_verdict(verdict.status),
            tags=verdict.tags,
            verdicts=verdict.features,
            rewrites=verdict.rewrites,
        )

    def _failure_entry(self, index: int, failure: ParseFailure) -> ReportEntry:
        error = failure.error
        if self.sql is not None:
            line, column = locate(self.sql, error.position)
            context = context_block(self.sql, line)
        else:
            line, column = locate(failure.text, error.position - failure.start)
            context = context_block(failure.text, line)
        return ReportEntry(
            index=index,
            text=failure.text,
            summary=failure.summary(),
            status=EntryStatus.PARSE_FAILED,
            error=error,
            line=line,
            column=column,
            context=context,
        )


def build_report(
    results: Iterable[Classified],
    source: Dialect | str,
    target: Dialect | str,
    *,
    sql: str | None = None,
) -> CompatibilityReport:
    builder = ReportBuilder(source, target, sql=sql)
    builder.extend(results)
    return builder.build()


def render_matrix(reports: Mapping[Dialect, CompatibilityReport]) -> str:
    """
    Render statements as rows and targets as columns.

    All reports must cover the same statements in the same order.
    """

    if not reports:
        return ""
    targets = list(reports)
    first = reports[targets[0]]
    for target in targets[1:]:
        other = reports[target]
        if [entry.index for entry in other.entries] != [entry.index for entry in first.entries]:
            raise ReportBuildError(f"Report for {target.value} covers different statements")
    header = ["#", "statement"] + [target.value for target in targets]
    rows = [
        [str(entry.index + 1), entry.summary] + [reports[target].entries[position].status.value for target in targets]
        for position, entry in enumerate(first.entries)
    ]
    widths = [max(len(row[column]) for row in [header] + rows) for column in range(len(header))]
    rendered = [" | ".join(cell.ljust(width) for cell, width in zip(row, widths)).rstrip() for row in [header] + rows]
    rendered.insert(1, "-+-".join("-" * width for width in widths))
    return "\n".join(rendered)
