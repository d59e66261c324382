"""
Feature classification of parsed statements against a target dialect.
"""

from __future__ import annotations

import contextvars
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple, Union

from ..dialects import Dialect, FeatureTag
from ..parser import AbstractStatement, ParseFailure, ParseOutcome
from ..utils import get_logger, time_call
from .matrix import CapabilityMatrix, RewriteRule, Verdict, VerdictStatus, default_matrix

logger = get_logger("classify")

# Minimum statement count for classify_all to use a thread pool.
PARALLEL_THRESHOLD = 64


@dataclass(frozen=True)
class FeatureVerdict:
    tag: FeatureTag
    node: str
    verdict: Verdict

    @property
    def status(self) -> VerdictStatus:
        return self.verdict.status

    def describe(self) -> str:
        return f"{self.tag.value}: {self.verdict.describe()}"


@dataclass(frozen=True)
class StatementVerdict:
    """
    Classification of one statement for one target.

    ``status`` is the worst feature status; a statement without tags is
    supported.
    """

    statement: AbstractStatement
    target: Dialect
    features: Tuple[FeatureVerdict, ...]
    status: VerdictStatus
    rewrites: Tuple[RewriteRule, ...]

    @property
    def index(self) -> int:
        return self.statement.index

    @property
    def tags(self) -> Tuple[FeatureTag, ...]:
        return tuple(dict.fromkeys(feature.tag for feature in self.features))

    def features_with(self, status: VerdictStatus) -> Tuple[FeatureVerdict, ...]:
        return tuple(feature for feature in self.features if feature.status is status)


Classified = Union[StatementVerdict, ParseFailure]


def classify_statement(
    statement: AbstractStatement,
    target: Dialect | str,
    matrix: CapabilityMatrix | None = None,
) -> StatementVerdict:
    """
    Look up every feature of ``statement`` in the matrix for ``target``.

    Raises ``UnknownFeatureTag`` when the matrix has no entry, so a gap is
    never reported as supported.
    """

    target = Dialect.from_name(target)
    matrix = matrix if matrix is not None else default_matrix()
    features = tuple(
        FeatureVerdict(tag, node, matrix.lookup(tag, target)) for node, tag in statement.features()
    )
    status = max((feature.status for feature in features), default=VerdictStatus.SUPPORTED)
    rewrites = tuple(dict.fromkeys(feature.verdict.rewrite for feature in features if feature.verdict.rewrite))
    return StatementVerdict(statement=statement, target=target, features=features, status=status, rewrites=rewrites)


class FeatureClassifier:
    """
    Classifies statements with a shared read-only matrix.

    Large inputs are fanned out to a thread pool; results keep input order.
    """

    def __init__(self, matrix: CapabilityMatrix | None = None, workers: int | None = None) -> None:
        if workers is not None and workers < 1:
            raise ValueError("workers must be a positive integer")
        self.matrix = matrix if matrix is not None else default_matrix()
        self.workers = workers

    def classify(self, statement: AbstractStatement, target: Dialect | str) -> StatementVerdict:
        verdict = classify_statement(statement, target, self.matrix)
        logger.debug(
            "Statement %d (%s) is %s for %s",
            statement.index,
            statement.summary(),
            verdict.status.label,
            verdict.target.value,
        )
        return verdict

    def classify_all(self, results: Iterable[ParseOutcome], target: Dialect | str) -> List[Classified]:
        outcomes: Sequence[ParseOutcome] = list(results)
        target = Dialect.from_name(target)
        with time_call("classify_all", logger, statements=len(outcomes)):
            if self.workers == 1 or len(outcomes) < PARALLEL_THRESHOLD:
                return [self._classify_outcome(outcome, target) for outcome in outcomes]
            with ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="sqlcompat-classify") as pool:
                # Each task runs in a copy of the caller's context so records keep the run id.
                futures = [
                    pool.submit(contextvars.copy_context().run, self._classify_outcome, outcome, target)
                    for outcome in outcomes
                ]
                return [future.result() for future in futures]

    def _classify_outcome(self, outcome: ParseOutcome, target: Dialect) -> Classified:
        if isinstance(outcome, ParseFailure):
            return outcome
        return self.classify(outcome, target)
