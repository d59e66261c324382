from sqlcompat.lexer import TokenKind
from sqlcompat.parser import split_statements


def test_splits_on_top_level_semicolons():
    statements = list(split_statements("SELECT 1; SELECT 2;"))
    assert [statement.text for statement in statements] == ["SELECT 1", "SELECT 2"]
    assert [statement.index for statement in statements] == [0, 1]
    assert statements[1].start == 10


def test_semicolon_inside_string_does_not_split():
    statements = list(split_statements("INSERT INTO t(v) VALUES (';');"))
    assert len(statements) == 1
    assert statements[0].text == "INSERT INTO t(v) VALUES (';')"


def test_semicolon_inside_comment_does_not_split():
    sql = "CREATE TABLE t (id INT) -- trailing; not a terminator\n; SELECT 1"
    statements = list(split_statements(sql))
    assert len(statements) == 2
    assert all(token.kind is not TokenKind.COMMENT for token in statements[0].tokens)


def test_empty_statements_are_skipped():
    statements = list(split_statements(";;  ; SELECT 1;;"))
    assert [statement.text for statement in statements] == ["SELECT 1"]
    assert statements[0].index == 0


def test_final_statement_without_semicolon():
    statements = list(split_statements("SELECT 1; SELECT 2"))
    assert statements[-1].text == "SELECT 2"


def test_lex_error_ends_statement_and_resumes_after_next_semicolon():
    sql = "SELECT 'abc; SELECT 2;"
    statements = list(split_statements(sql))
    assert len(statements) == 2
    broken, recovered = statements
    assert broken.lex_error is not None
    assert broken.lex_error.position == 7
    assert broken.text == "SELECT 'abc"
    assert recovered.lex_error is None
    assert recovered.text == "SELECT 2"
    assert recovered.index == 1


def test_lex_error_without_following_semicolon_consumes_rest():
    statements = list(split_statements("SELECT 1; SELECT 'open"))
    assert len(statements) == 2
    assert statements[1].lex_error is not None
    assert statements[1].end == len("SELECT 1; SELECT 'open")


def test_dialect_quoting_affects_splitting():
    sql = 'INSERT INTO t VALUES ("a;b"); SELECT 1;'
    assert len(list(split_statements(sql, "mysql"))) == 2
    # Double quotes delimit an identifier elsewhere, so the semicolon is still quoted.
    assert len(list(split_statements(sql, "postgresql"))) == 2


def test_postgres_dollar_quoted_body_is_one_statement():
    sql = "SELECT $$ a; b $$; SELECT 2"
    statements = list(split_statements(sql, "postgresql"))
    assert len(statements) == 2
    assert statements[0].text == "SELECT $$ a; b $$"
