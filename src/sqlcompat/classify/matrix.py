"""
Verdicts and the read-only capability matrix keyed by (feature, target).
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from enum import IntEnum
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Tuple

from ..dialects import Dialect, FeatureTag
from ..errors import MatrixIncompleteError, UnknownFeatureTag

MatrixKey = Tuple[FeatureTag, Dialect]


class VerdictStatus(IntEnum):
    """Compatibility outcome ordered by severity; the worst one wins."""

    SUPPORTED = 0
    REWRITE = 1
    UNSUPPORTED = 2

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]


_STATUS_LABELS = {
    VerdictStatus.SUPPORTED: "Supported",
    VerdictStatus.REWRITE: "SupportedWithRewrite",
    VerdictStatus.UNSUPPORTED: "Unsupported",
}


@dataclass(frozen=True)
class RewriteRule:
    description: str
    replacement: str | None = None

    def __str__(self) -> str:
        if self.replacement:
            return f"{self.description} ({self.replacement})"
        return self.description


@dataclass(frozen=True)
class Verdict:
    status: VerdictStatus
    rewrite: RewriteRule | None = None
    note: str | None = None

    @classmethod
    def supported(cls, note: str | None = None) -> "Verdict":
        return cls(VerdictStatus.SUPPORTED, note=note)

    @classmethod
    def rewrite_to(cls, description: str, replacement: str | None = None, note: str | None = None) -> "Verdict":
        return cls(VerdictStatus.REWRITE, RewriteRule(description, replacement), note)

    @classmethod
    def unsupported(cls, note: str | None = None) -> "Verdict":
        return cls(VerdictStatus.UNSUPPORTED, note=note)

    def describe(self) -> str:
        if self.rewrite is not None:
            return f"{self.status.label} -> {self.rewrite}"
        if self.note:
            return f"{self.status.label} ({self.note})"
        return self.status.label


class CapabilityMatrix(Mapping[MatrixKey, Verdict]):
    """
    Immutable ``(FeatureTag, Dialect) -> Verdict`` table.

    Completeness over every tag and target is checked when the matrix is
    built so that a gap surfaces at startup instead of during a run.
    """

    def __init__(
        self,
        entries: Mapping[MatrixKey, Verdict] | Iterable[tuple[MatrixKey, Verdict]],
        *,
        require_complete: bool = True,
        targets: Iterable[Dialect] | None = None,
    ) -> None:
        self._entries: Mapping[MatrixKey, Verdict] = MappingProxyType(dict(entries))
        self.targets: Tuple[Dialect, ...] = tuple(targets) if targets is not None else tuple(Dialect)
        if require_complete:
            missing = self.missing_entries()
            if missing:
                raise MatrixIncompleteError(missing)

    def __getitem__(self, key: MatrixKey) -> Verdict:
        return self._entries[key]

    def __iter__(self) -> Iterator[MatrixKey]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def lookup(self, tag: FeatureTag, target: Dialect) -> Verdict:
        try:
            return self._entries[(tag, target)]
        except KeyError:
            raise UnknownFeatureTag(tag, target) from None

    def missing_entries(self, tags: Iterable[FeatureTag] | None = None) -> Tuple[MatrixKey, ...]:
        return tuple(
            (tag, target)
            for tag in (tags if tags is not None else FeatureTag)
            for target in self.targets
            if (tag, target) not in self._entries
        )

    def column(self, target: Dialect) -> dict[FeatureTag, Verdict]:
        return {tag: verdict for (tag, dialect), verdict in self._entries.items() if dialect is target}

    def with_overrides(self, overrides: Mapping[MatrixKey, Verdict]) -> "CapabilityMatrix":
        merged = dict(self._entries)
        merged.update(overrides)
        return CapabilityMatrix(merged, targets=self.targets)


_default: CapabilityMatrix | None = None
_default_lock = threading.Lock()


def default_matrix() -> CapabilityMatrix:
    """
    Process-wide matrix built once from the curated capability data.
    """

    global _default
    if _default is None:
        with _default_lock:
            if _default is None:
                from .capabilities import capability_entries

                _default = CapabilityMatrix(capability_entries())
    return _default
