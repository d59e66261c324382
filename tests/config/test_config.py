from pathlib import Path

import pytest

from sqlcompat.classify import CapabilityMatrix, VerdictStatus, default_matrix
from sqlcompat.config import AnalyzerConfig
from sqlcompat.dialects import Dialect, FeatureTag
from sqlcompat.errors import ConfigurationError

FIXTURE_PROJECT = Path(__file__).resolve().parents[1] / "fixtures" / "sqlite_project"


def write_config(tmp_path, body):
    path = tmp_path / "sqlcompat.toml"
    path.write_text(body, encoding="utf-8")
    return path


def test_defaults_target_every_other_dialect():
    config = AnalyzerConfig(source="postgresql")
    assert config.source is Dialect.POSTGRES
    assert set(config.targets) == set(Dialect) - {Dialect.POSTGRES}
    assert config.workers is None


def test_from_toml_reads_fixture_project():
    config = AnalyzerConfig.from_toml(FIXTURE_PROJECT)
    assert config.source is Dialect.SQLITE
    assert config.targets == (Dialect.POSTGRES, Dialect.MYSQL)
    assert config.root == FIXTURE_PROJECT
    assert config.schema_path == FIXTURE_PROJECT / "schema.sql"
    assert config.queries_path == FIXTURE_PROJECT / "queries"


def test_missing_dialect_defaults_to_generic(tmp_path):
    config = AnalyzerConfig.from_toml(write_config(tmp_path, "[analyze]\nworkers = 2\n"))
    assert config.source is Dialect.ANSI
    assert config.workers == 2
    assert config.schema_file == Path("schema.sql")


def test_targets_accept_comma_separated_string(tmp_path):
    config = AnalyzerConfig.from_toml(
        write_config(tmp_path, '[analyze]\ndialect = "mysql"\ntargets = "pg, sqlite, pg"\n')
    )
    assert config.targets == (Dialect.POSTGRES, Dialect.SQLITE)


@pytest.mark.parametrize(
    "body,message",
    [
        ('[analyze]\ndialect = "oracle"\n', "Invalid dialect"),
        ("[analyze]\ndialect = 3\n", "Invalid dialect"),
        ("[analyze]\ntargets = []\n", "Invalid target list"),
        ("[analyze]\nworkers = 0\n", "positive integer"),
        ('[analyze]\nworkers = "many"\n', "Invalid integer"),
        ('[analyze]\nschema = "x.sql"\n', "keys: schema"),
        ('analyze = "nope"\n', "must be a table"),
        ("[analyze\n", "Invalid TOML"),
        ('[capabilities]\nNoSuchFeature = { sqlite = "supported" }\n', "Unknown feature tag"),
        ('[capabilities]\nSerialColumn = "supported"\n', "must map dialects"),
        ('[capabilities.SerialColumn]\nsqlite = ""\n', "Invalid capability"),
    ],
)
def test_invalid_config_values_raise(tmp_path, body, message):
    with pytest.raises(ConfigurationError, match=message):
        AnalyzerConfig.from_toml(write_config(tmp_path, body))


def test_missing_config_file_raises(tmp_path):
    with pytest.raises(ConfigurationError, match="not found"):
        AnalyzerConfig.from_toml(tmp_path)


def test_capability_overrides_build_a_derived_matrix(tmp_path):
    config = AnalyzerConfig.from_toml(
        write_config(
            tmp_path,
            '[analyze]\ndialect = "postgresql"\n\n'
            "[capabilities.SerialColumn]\n"
            'sqlite = "supported"\n'
            'mysql = "unsupported"\n'
            'ansi = "Use a sequence"\n',
        )
    )
    matrix = config.build_matrix()
    assert matrix is not default_matrix()
    assert matrix.lookup(FeatureTag.SERIAL_COLUMN, Dialect.SQLITE).status is VerdictStatus.SUPPORTED
    assert matrix.lookup(FeatureTag.SERIAL_COLUMN, Dialect.MYSQL).status is VerdictStatus.UNSUPPORTED
    rewrite = matrix.lookup(FeatureTag.SERIAL_COLUMN, Dialect.ANSI)
    assert rewrite.status is VerdictStatus.REWRITE
    assert rewrite.rewrite.description == "Use a sequence"
    # The shared matrix is untouched.
    assert default_matrix().lookup(FeatureTag.SERIAL_COLUMN, Dialect.SQLITE).status is VerdictStatus.REWRITE


def test_build_matrix_without_overrides_reuses_default():
    assert AnalyzerConfig().build_matrix() is default_matrix()


def test_from_env(monkeypatch):
    monkeypatch.setenv("SQLCOMPAT_DIALECT", "mysql")
    monkeypatch.setenv("SQLCOMPAT_TARGETS", "postgresql,sqlite")
    monkeypatch.setenv("SQLCOMPAT_WORKERS", "3")
    config = AnalyzerConfig.from_env()
    assert config.source is Dialect.MYSQL
    assert config.targets == (Dialect.POSTGRES, Dialect.SQLITE)
    assert config.workers == 3


def test_from_env_rejects_bad_workers(monkeypatch):
    monkeypatch.setenv("SQLCOMPAT_WORKERS", "-1")
    with pytest.raises(ConfigurationError, match="SQLCOMPAT_WORKERS"):
        AnalyzerConfig.from_env()


def test_keyword_arguments_override_file_values(tmp_path):
    path = write_config(tmp_path, '[analyze]\ndialect = "sqlite"\n')
    config = AnalyzerConfig.from_toml(path, workers=1)
    assert config.workers == 1


def test_build_matrix_keeps_an_explicit_empty_base():
    empty = CapabilityMatrix({}, require_complete=False)
    assert AnalyzerConfig().build_matrix(empty) is empty
