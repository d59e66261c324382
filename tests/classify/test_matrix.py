import threading

import pytest

from sqlcompat.classify import CapabilityMatrix, RewriteRule, Verdict, VerdictStatus, default_matrix
from sqlcompat.classify import matrix as matrix_module
from sqlcompat.classify.capabilities import CAPABILITIES, capability_entries
from sqlcompat.dialects import Dialect, FeatureTag, get_grammar
from sqlcompat.errors import MatrixIncompleteError, UnknownFeatureTag

# Name and expression shapes every grammar can produce, whatever its own capabilities.
UNIVERSAL_TAGS = {FeatureTag.QUALIFIED_NAME, FeatureTag.CATALOG_QUALIFIED_NAME, FeatureTag.EXPRESSION_INDEX}
# Forms a grammar parses leniently but still flags for its own dialect.
FLAGGED_ON_OWN_DIALECT = {
    Dialect.ANSI: {FeatureTag.TEXT_LENGTH, FeatureTag.GENERATED_COLUMN_STORED},
    Dialect.POSTGRES: {FeatureTag.TEXT_LENGTH, FeatureTag.GENERATED_COLUMN_VIRTUAL},
}


def test_default_matrix_covers_every_tag_and_target():
    matrix = default_matrix()
    assert matrix.missing_entries() == ()
    assert len(matrix) == len(FeatureTag) * len(Dialect)
    assert set(CAPABILITIES) == set(FeatureTag)


def test_default_matrix_is_shared():
    assert default_matrix() is default_matrix()


def test_incomplete_matrix_is_rejected_at_build_time():
    entries = capability_entries()
    del entries[(FeatureTag.SERIAL_COLUMN, Dialect.SQLITE)]
    with pytest.raises(MatrixIncompleteError) as excinfo:
        CapabilityMatrix(entries)
    assert excinfo.value.missing == ((FeatureTag.SERIAL_COLUMN, Dialect.SQLITE),)
    assert "SerialColumn/sqlite" in str(excinfo.value)


def test_lookup_of_missing_entry_raises_unknown_feature_tag():
    matrix = CapabilityMatrix({}, require_complete=False)
    with pytest.raises(UnknownFeatureTag) as excinfo:
        matrix.lookup(FeatureTag.JSON_TYPE, Dialect.MYSQL)
    assert excinfo.value.tag is FeatureTag.JSON_TYPE
    assert excinfo.value.target is Dialect.MYSQL


def test_matrix_is_read_only():
    matrix = default_matrix()
    with pytest.raises(TypeError):
        matrix[(FeatureTag.SERIAL_COLUMN, Dialect.SQLITE)] = Verdict.supported()


def test_serial_to_sqlite_is_a_rewrite():
    verdict = default_matrix().lookup(FeatureTag.SERIAL_COLUMN, Dialect.SQLITE)
    assert verdict.status is VerdictStatus.REWRITE
    assert verdict.rewrite == RewriteRule("Use an INTEGER PRIMARY KEY column", "INTEGER PRIMARY KEY AUTOINCREMENT")
    assert verdict.describe() == (
        "SupportedWithRewrite -> Use an INTEGER PRIMARY KEY column (INTEGER PRIMARY KEY AUTOINCREMENT)"
    )


def test_storage_engine_is_not_supported_outside_mysql():
    matrix = default_matrix()
    assert matrix.lookup(FeatureTag.STORAGE_ENGINE, Dialect.MYSQL).status is VerdictStatus.SUPPORTED
    for target in (Dialect.ANSI, Dialect.POSTGRES, Dialect.SQLITE):
        assert matrix.lookup(FeatureTag.STORAGE_ENGINE, target).status is not VerdictStatus.SUPPORTED


@pytest.mark.parametrize("dialect", list(Dialect))
def test_dialect_features_are_supported_on_their_own_dialect(dialect):
    matrix = default_matrix()
    tags = get_grammar(dialect).feature_tags() - UNIVERSAL_TAGS - FLAGGED_ON_OWN_DIALECT.get(dialect, set())
    unsupported = sorted(tag.value for tag in tags if matrix.lookup(tag, dialect).status is not VerdictStatus.SUPPORTED)
    assert unsupported == []


def test_rewrite_verdicts_carry_a_description():
    for verdict in default_matrix().values():
        if verdict.status is VerdictStatus.REWRITE:
            assert verdict.rewrite is not None
            assert verdict.rewrite.description
        else:
            assert verdict.rewrite is None


def test_with_overrides_returns_new_matrix():
    matrix = default_matrix()
    key = (FeatureTag.ILIKE_OPERATOR, Dialect.SQLITE)
    overridden = matrix.with_overrides({key: Verdict.supported("case-insensitive by default")})
    assert overridden[key].status is VerdictStatus.SUPPORTED
    assert matrix[key] != overridden[key]
    assert overridden is not matrix


def test_column_returns_one_target():
    column = default_matrix().column(Dialect.POSTGRES)
    assert set(column) == set(FeatureTag)
    assert column[FeatureTag.SERIAL_COLUMN].status is VerdictStatus.SUPPORTED


def test_status_order_and_labels():
    assert VerdictStatus.SUPPORTED < VerdictStatus.REWRITE < VerdictStatus.UNSUPPORTED
    assert [status.label for status in VerdictStatus] == ["Supported", "SupportedWithRewrite", "Unsupported"]
    assert Verdict.unsupported("no arrays").describe() == "Unsupported (no arrays)"


def test_default_matrix_builds_once_under_concurrency(monkeypatch):
    monkeypatch.setattr(matrix_module, "_default", None)
    barrier = threading.Barrier(8)
    results = []
    lock = threading.Lock()

    def worker():
        barrier.wait()
        built = default_matrix()
        with lock:
            results.append(built)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(results) == 8
    assert all(result is results[0] for result in results)
