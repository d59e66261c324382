import threading

import pytest

from sqlcompat.classify import (
    CapabilityMatrix,
    FeatureClassifier,
    StatementVerdict,
    Verdict,
    VerdictStatus,
    classify_statement,
    default_matrix,
)
from sqlcompat.dialects import Dialect, FeatureTag
from sqlcompat.errors import UnknownFeatureTag
from sqlcompat.parser import ParseFailure, parse


def first_statement(sql, dialect):
    return parse(sql, dialect)[0]


def test_statement_without_features_is_supported():
    statement = first_statement("CREATE TABLE t (id INTEGER PRIMARY KEY)", "ansi")
    verdict = classify_statement(statement, "postgresql")
    assert verdict.status is VerdictStatus.SUPPORTED
    assert verdict.features == ()
    assert verdict.rewrites == ()


def test_serial_column_rewrites_for_sqlite():
    statement = first_statement("CREATE TABLE users (id SERIAL PRIMARY KEY)", "postgresql")
    verdict = classify_statement(statement, Dialect.SQLITE)
    assert verdict.status is VerdictStatus.REWRITE
    assert verdict.tags == (FeatureTag.SERIAL_COLUMN,)
    assert verdict.features[0].node == "column id"
    assert [rule.replacement for rule in verdict.rewrites] == ["INTEGER PRIMARY KEY AUTOINCREMENT"]


def test_worst_status_wins():
    statement = first_statement("CREATE TABLE t (id SERIAL PRIMARY KEY, during INT4RANGE)", "postgresql")
    verdict = classify_statement(statement, "mysql")
    assert verdict.status is VerdictStatus.UNSUPPORTED
    assert [feature.tag for feature in verdict.features_with(VerdictStatus.UNSUPPORTED)] == [FeatureTag.RANGE_TYPE]
    assert [feature.tag for feature in verdict.features_with(VerdictStatus.REWRITE)] == [FeatureTag.SERIAL_COLUMN]
    assert len(verdict.rewrites) == 1


def test_repeated_rewrites_are_listed_once():
    statement = first_statement("CREATE TABLE t (a SERIAL, b SERIAL)", "postgresql")
    verdict = classify_statement(statement, "sqlite")
    assert len(verdict.features) == 2
    assert len(verdict.rewrites) == 1


def test_storage_engine_is_flagged_for_ansi():
    statement = first_statement("CREATE TABLE t (id INT) ENGINE=InnoDB", "mysql")
    verdict = classify_statement(statement, "ansi")
    assert verdict.status is not VerdictStatus.SUPPORTED
    assert verdict.features[0].node == "option ENGINE=InnoDB"


def test_classification_is_idempotent():
    statement = first_statement("CREATE TABLE t (tags TEXT[], doc JSONB)", "postgresql")
    first = classify_statement(statement, "sqlite")
    second = classify_statement(statement, "sqlite")
    assert first == second


def test_missing_matrix_entry_raises():
    statement = first_statement("CREATE TABLE t (id SERIAL)", "postgresql")
    sparse = CapabilityMatrix(
        {(FeatureTag.JSON_TYPE, Dialect.SQLITE): Verdict.supported()},
        require_complete=False,
    )
    with pytest.raises(UnknownFeatureTag):
        classify_statement(statement, "sqlite", sparse)


def test_empty_matrix_is_used_not_replaced():
    statement = first_statement("CREATE TABLE t (id SERIAL)", "postgresql")
    empty = CapabilityMatrix({}, require_complete=False)
    with pytest.raises(UnknownFeatureTag):
        classify_statement(statement, "sqlite", empty)
    classifier = FeatureClassifier(empty)
    assert classifier.matrix is empty
    with pytest.raises(UnknownFeatureTag):
        classifier.classify(statement, "sqlite")


def test_classifier_rejects_non_positive_workers():
    with pytest.raises(ValueError):
        FeatureClassifier(workers=0)


def test_classify_all_passes_failures_through():
    outcomes = parse("CREATE TABLE ( );\nCREATE TABLE t (id SERIAL);", "postgresql")
    results = FeatureClassifier().classify_all(outcomes, "mysql")
    assert isinstance(results[0], ParseFailure)
    assert isinstance(results[1], StatementVerdict)
    assert results[1].status is VerdictStatus.REWRITE


def test_classify_all_preserves_order_with_thread_pool():
    sql = ";\n".join(f"CREATE TABLE t{i} (id SERIAL, v{i} INT)" for i in range(150))
    outcomes = parse(sql, "postgresql")
    results = FeatureClassifier(workers=4).classify_all(outcomes, "sqlite")
    assert [result.index for result in results] == list(range(150))
    assert [str(result.statement.name) for result in results[:3]] == ["t0", "t1", "t2"]
    sequential = FeatureClassifier(workers=1).classify_all(outcomes, "sqlite")
    assert results == sequential


def test_shared_classifier_is_thread_safe():
    classifier = FeatureClassifier(default_matrix())
    statement = first_statement("CREATE TABLE t (id SERIAL, tags TEXT[])", "postgresql")
    barrier = threading.Barrier(6)
    verdicts = []
    errors = []
    lock = threading.Lock()

    def worker(target):
        barrier.wait()
        try:
            for _ in range(50):
                verdict = classifier.classify(statement, target)
                with lock:
                    verdicts.append(verdict)
        except Exception as exc:  # pragma: no cover - surfaced by the assertion below
            errors.append(exc)

    targets = [Dialect.SQLITE, Dialect.MYSQL, Dialect.ANSI] * 2
    threads = [threading.Thread(target=worker, args=(target,)) for target in targets]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    assert len(verdicts) == 300
    by_target = {}
    for verdict in verdicts:
        by_target.setdefault(verdict.target, set()).add(verdict)
    assert all(len(found) == 1 for found in by_target.values())
