from pathlib import Path

import pytest

from sqlcompat.dialects import FeatureTag, get_grammar
from sqlcompat.parser import AbstractStatement, ParseFailure, StatementKind, StatementParser

FIXTURES = Path(__file__).resolve().parents[1] / "fixtures"


def _parse_fixture(name, dialect):
    return StatementParser(dialect).parse((FIXTURES / name).read_text(encoding="utf-8"))


@pytest.mark.parametrize(
    "name,dialect",
    [
        ("ansi.sql", "ansi"),
        ("postgresql.sql", "postgresql"),
        ("mysql.sql", "mysql"),
        ("sqlite.sql", "sqlite"),
        ("sqlite_project/schema.sql", "sqlite"),
        ("sqlite_project/queries/main.sql", "sqlite"),
    ],
)
def test_fixture_files_parse_without_failures(name, dialect):
    outcomes = _parse_fixture(name, dialect)
    failures = [outcome for outcome in outcomes if isinstance(outcome, ParseFailure)]
    assert outcomes
    assert failures == []
    assert [outcome.index for outcome in outcomes] == list(range(len(outcomes)))


def test_ansi_fixture_has_no_dialect_features():
    outcomes = _parse_fixture("ansi.sql", "ansi")
    assert all(outcome.feature_tags() == () for outcome in outcomes)
    kinds = {outcome.kind for outcome in outcomes}
    assert kinds == {StatementKind.CREATE_TABLE, StatementKind.CREATE_INDEX}


@pytest.mark.parametrize(
    "name,dialect,expected",
    [
        ("postgresql.sql", "postgresql", {FeatureTag.SERIAL_COLUMN, FeatureTag.JSONB_TYPE, FeatureTag.ARRAY_TYPE}),
        ("mysql.sql", "mysql", {FeatureTag.AUTO_INCREMENT, FeatureTag.STORAGE_ENGINE, FeatureTag.UNSIGNED_INTEGER}),
        ("sqlite.sql", "sqlite", {FeatureTag.SQLITE_AUTOINCREMENT}),
    ],
)
def test_dialect_fixtures_surface_their_features(name, dialect, expected):
    outcomes = _parse_fixture(name, dialect)
    seen = {tag for outcome in outcomes if isinstance(outcome, AbstractStatement) for tag in outcome.feature_tags()}
    assert expected <= seen
    assert seen <= get_grammar(dialect).feature_tags()
