import pytest

from sqlcompat.errors import LexError
from sqlcompat.lexer import TokenKind, Tokenizer, tokenize


def _kinds(tokens):
    return [(token.kind, token.text) for token in tokens]


def test_tokenizes_keywords_identifiers_and_literals():
    tokens = list(tokenize("SELECT id, 'x' FROM users"))
    assert _kinds(tokens) == [
        (TokenKind.KEYWORD, "SELECT"),
        (TokenKind.IDENTIFIER, "id"),
        (TokenKind.SYMBOL, ","),
        (TokenKind.LITERAL, "'x'"),
        (TokenKind.KEYWORD, "FROM"),
        (TokenKind.IDENTIFIER, "users"),
    ]
    assert [token.position for token in tokens] == [0, 7, 9, 11, 15, 20]


def test_tokenizer_is_restartable():
    tokenizer = Tokenizer("CREATE TABLE t (id INT);", "ansi")
    first = list(tokenizer)
    second = list(tokenizer)
    assert first == second
    assert len(first) == 8


def test_keyword_value_is_upper_cased_and_raw_text_is_kept():
    token = next(tokenize("create"))
    assert token.kind is TokenKind.KEYWORD
    assert token.text == "create"
    assert token.value == "CREATE"
    assert token.keyword == "CREATE"


def test_semicolon_inside_string_is_part_of_literal():
    tokens = list(tokenize("INSERT INTO t(v) VALUES (';');"))
    literal = [token for token in tokens if token.kind is TokenKind.LITERAL]
    assert [token.value for token in literal] == [";"]
    assert sum(1 for token in tokens if token.is_symbol(";")) == 1


def test_doubled_quotes_escape_inside_strings():
    token = next(tokenize("'it''s'"))
    assert token.value == "it's"
    assert token.text == "'it''s'"


def test_comments_are_emitted_as_comment_tokens():
    tokens = list(tokenize("-- note\nSELECT /* inline */ 1"))
    assert [token.kind for token in tokens] == [
        TokenKind.COMMENT,
        TokenKind.KEYWORD,
        TokenKind.COMMENT,
        TokenKind.LITERAL,
    ]


def test_unterminated_string_reports_opening_offset():
    with pytest.raises(LexError) as excinfo:
        list(tokenize("SELECT 'abc"))
    assert excinfo.value.position == 7
    assert "Unterminated string" in excinfo.value.message


def test_unterminated_block_comment_raises():
    with pytest.raises(LexError) as excinfo:
        list(tokenize("SELECT 1 /* never closed"))
    assert excinfo.value.position == 9


def test_unterminated_quoted_identifier_raises():
    with pytest.raises(LexError):
        list(tokenize('SELECT "broken FROM t'))


def test_unexpected_character_raises():
    with pytest.raises(LexError) as excinfo:
        list(tokenize("SELECT 1 \\ 2"))
    assert excinfo.value.position == 9


def test_mysql_backticks_hash_comments_and_double_quoted_strings():
    tokens = [token for token in tokenize('SELECT `order id`, "text" # trailing\n', "mysql")]
    identifier = tokens[1]
    assert identifier.kind is TokenKind.IDENTIFIER
    assert identifier.quoted
    assert identifier.value == "order id"
    assert tokens[3].kind is TokenKind.LITERAL
    assert tokens[3].value == "text"
    assert tokens[-1].kind is TokenKind.COMMENT


def test_mysql_backslash_escapes():
    token = next(tokenize(r"'a\'b'", "mysql"))
    assert token.value == "a'b"


def test_double_quotes_are_identifiers_outside_mysql():
    token = next(tokenize('"Users"', "postgresql"))
    assert token.kind is TokenKind.IDENTIFIER
    assert token.quoted
    assert token.keyword is None


def test_sqlite_bracket_identifiers():
    tokens = list(tokenize("SELECT [first name] FROM t", "sqlite"))
    assert tokens[1].value == "first name"
    assert tokens[1].quoted


def test_postgres_dollar_quotes_and_nested_comments():
    tokens = list(tokenize("SELECT $body$ it's; here $body$ /* a /* b */ c */", "postgresql"))
    assert tokens[1].kind is TokenKind.LITERAL
    assert tokens[1].value == " it's; here "
    assert tokens[2].kind is TokenKind.COMMENT
    assert tokens[2].text.endswith("c */")


def test_multi_character_operators():
    tokens = list(tokenize("a::int || b <> c ->> 'k' != d", "postgresql"))
    symbols = [token.text for token in tokens if token.kind is TokenKind.SYMBOL]
    assert symbols == ["::", "||", "<>", "->>", "!="]


def test_numbers_and_placeholders():
    tokens = list(tokenize("VALUES (1.5e3, 0x1F, ?, $1, :name)", "postgresql"))
    texts = [token.text for token in tokens if token.kind in (TokenKind.LITERAL, TokenKind.SYMBOL)]
    assert "1.5e3" in texts
    assert "0x1F" in texts
    assert "?" in texts
    assert "$1" in texts
    assert ":name" in texts


def test_start_offset_resumes_mid_source():
    source = "SELECT 1; SELECT 2"
    tokens = list(Tokenizer(source, start=10))
    assert tokens[0].text == "SELECT"
    assert tokens[0].position == 10


def test_unicode_offsets_are_character_offsets():
    tokens = list(tokenize("SELECT 'héllo', x"))
    assert tokens[-1].position == 16
