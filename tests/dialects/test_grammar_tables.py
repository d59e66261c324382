import dataclasses

import pytest

from sqlcompat.dialects import (
    ANSI_GRAMMAR,
    Dialect,
    FeatureTag,
    GrammarTable,
    Production,
    get_grammar,
    register_grammar,
    registered_dialects,
)
from sqlcompat.dialects.base import rule_map
from sqlcompat.errors import UnsupportedDialectError
from sqlcompat.lexer import tokenize


@pytest.mark.parametrize(
    "name,expected",
    [
        ("postgresql", Dialect.POSTGRES),
        ("Postgres", Dialect.POSTGRES),
        ("pg", Dialect.POSTGRES),
        ("generic", Dialect.ANSI),
        (" ANSI ", Dialect.ANSI),
        ("mariadb", Dialect.MYSQL),
        ("sqlite3", Dialect.SQLITE),
    ],
)
def test_dialect_from_name_aliases(name, expected):
    assert Dialect.from_name(name) is expected


def test_unknown_dialect_is_rejected():
    with pytest.raises(UnsupportedDialectError, match="unsupported dialect: oracle"):
        Dialect.from_name("oracle")


def test_every_dialect_has_a_grammar():
    assert set(registered_dialects()) == set(Dialect)
    for dialect in Dialect:
        assert get_grammar(dialect).dialect is dialect


def test_match_prefers_longest_prefix():
    grammar = get_grammar("postgresql")
    tokens = list(tokenize("CREATE UNIQUE INDEX CONCURRENTLY idx ON t (a)", grammar))
    rule, width = grammar.match("statements", tokens)
    assert width == 4
    assert rule.production is Production.CREATE_INDEX

    tokens = list(tokenize("CREATE INDEX idx ON t (a)", grammar))
    rule, width = grammar.match("statements", tokens)
    assert width == 2
    assert rule.keywords == ("CREATE", "INDEX")


def test_match_returns_none_without_rule():
    grammar = get_grammar("ansi")
    tokens = list(tokenize("VACUUM", grammar))
    assert grammar.match("statements", tokens) is None


def test_match_is_case_insensitive_for_bare_words():
    grammar = get_grammar("mysql")
    tokens = list(tokenize("engine = InnoDB", grammar))
    rule, width = grammar.match("table_options", tokens)
    assert width == 1
    assert rule.tag is FeatureTag.STORAGE_ENGINE


def test_grammar_tables_are_immutable():
    grammar = get_grammar("ansi")
    with pytest.raises(TypeError):
        grammar.statements[("VACUUM",)] = None
    with pytest.raises(dataclasses.FrozenInstanceError):
        grammar.dialect = Dialect.MYSQL


def test_extend_does_not_mutate_base_table():
    before = dict(ANSI_GRAMMAR.table_options)
    extended = ANSI_GRAMMAR.extend(
        Dialect.ANSI,
        table_options=rule_map(("TABLESPACE", Production.OPTION_VALUE)),
    )
    assert ("TABLESPACE",) in extended.table_options
    assert dict(ANSI_GRAMMAR.table_options) == before
    assert extended.is_keyword("tablespace")


def test_extend_can_remove_rules():
    extended = get_grammar("postgresql").extend(Dialect.POSTGRES, remove={"types": ["SERIAL"]})
    assert ("SERIAL",) not in extended.types
    assert ("SERIAL",) in get_grammar("postgresql").types


def test_extend_rejects_unknown_settings():
    with pytest.raises(TypeError, match="Unknown grammar settings"):
        ANSI_GRAMMAR.extend(Dialect.ANSI, frobnicate=True)


def test_dialect_specific_keywords_stay_in_their_dialect():
    assert ("SERIAL",) in get_grammar("postgresql").types
    for dialect in ("mysql", "sqlite", "ansi"):
        assert ("SERIAL",) not in get_grammar(dialect).types

    assert ("AUTO_INCREMENT",) in get_grammar("mysql").column_constraints
    for dialect in ("postgresql", "sqlite", "ansi"):
        assert ("AUTO_INCREMENT",) not in get_grammar(dialect).column_constraints


def test_lexical_settings_per_dialect():
    assert get_grammar("mysql").identifier_quotes == "`"
    assert get_grammar("mysql").hash_comments
    assert get_grammar("postgresql").dollar_quotes
    assert "[" in get_grammar("sqlite").identifier_quotes
    assert not get_grammar("ansi").backslash_escapes


def test_feature_tags_cover_dialect_constructs():
    postgres_tags = get_grammar("postgresql").feature_tags()
    assert FeatureTag.SERIAL_COLUMN in postgres_tags
    assert FeatureTag.TYPE_CAST in postgres_tags
    assert FeatureTag.STORAGE_ENGINE not in postgres_tags
    assert FeatureTag.MULTI_ACTION_ALTER not in get_grammar("sqlite").feature_tags()
    assert FeatureTag.INDEX_PREFIX_LENGTH in get_grammar("mysql").feature_tags()


def test_register_grammar_refuses_duplicates():
    with pytest.raises(ValueError, match="already registered"):
        register_grammar(ANSI_GRAMMAR)


def test_register_grammar_replace_swaps_table():
    original = get_grammar("sqlite")
    replacement = original.extend(Dialect.SQLITE, table_options=rule_map(("TABLESPACE", Production.OPTION_VALUE)))
    try:
        register_grammar(replacement, replace=True)
        assert get_grammar("sqlite") is replacement
    finally:
        register_grammar(original, replace=True)
    assert get_grammar("sqlite") is original


def test_feature_tag_resolves_display_and_member_names():
    assert FeatureTag.from_name("SerialColumn") is FeatureTag.SERIAL_COLUMN
    assert FeatureTag.from_name("serial_column") is FeatureTag.SERIAL_COLUMN
    assert FeatureTag.SERIAL_COLUMN.description
    with pytest.raises(ValueError, match="Unknown feature tag"):
        FeatureTag.from_name("NoSuchFeature")


def test_grammar_table_is_constructible_directly():
    table = GrammarTable(Dialect.ANSI, statements=rule_map(("SELECT", Production.SELECT)))
    assert table.is_keyword("select")
    assert table.is_keyword("CURRENT_TIMESTAMP")
    assert not table.is_keyword("customers")


def test_feature_tags_include_generated_column_storage():
    for dialect in ("ansi", "postgresql", "mysql", "sqlite"):
        tags = get_grammar(dialect).feature_tags()
        assert FeatureTag.GENERATED_COLUMN_STORED in tags
        assert FeatureTag.GENERATED_COLUMN_VIRTUAL in tags
    bare = ANSI_GRAMMAR.extend(Dialect.ANSI, remove={"column_constraints": ["GENERATED ALWAYS AS"]})
    assert FeatureTag.GENERATED_COLUMN_STORED not in bare.feature_tags()


def test_text_length_is_rejected_only_by_sqlite():
    for dialect in ("ansi", "postgresql", "mysql"):
        rule = get_grammar(dialect).types[("TEXT",)]
        assert rule.max_params == 1
        assert rule.param_tag is FeatureTag.TEXT_LENGTH
    assert get_grammar("sqlite").types[("TEXT",)].max_params == 0
