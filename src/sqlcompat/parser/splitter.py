"""
Top-level statement splitting over a token stream.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Tuple

from ..dialects import Dialect, GrammarTable, get_grammar
from ..errors import LexError
from ..lexer import Token, TokenKind, Tokenizer


@dataclass(frozen=True)
class StatementSource:
    """
    Tokens and source span of one top-level statement.

    ``tokens`` excludes comments and the terminating semicolon. When
    ``lex_error`` is set the statement could not be tokenized and
    ``tokens`` holds whatever was read before the error.
    """

    index: int
    text: str
    start: int
    end: int
    tokens: Tuple[Token, ...]
    lex_error: LexError | None = None


def split_statements(source: str, dialect: Dialect | str | GrammarTable = Dialect.ANSI) -> Iterator[StatementSource]:
    """
    Yield statements delimited by semicolons outside strings, comments and
    parentheses.

    A ``LexError`` ends the current statement; scanning resumes after the
    next raw semicolon following the error offset.
    """

    grammar = dialect if isinstance(dialect, GrammarTable) else get_grammar(dialect)
    index = 0
    resume = 0
    while resume < len(source):
        tokens: List[Token] = []
        depth = 0
        try:
            for token in Tokenizer(source, grammar, start=resume):
                if token.kind is TokenKind.COMMENT:
                    continue
                if token.kind is TokenKind.SYMBOL:
                    if token.text == "(":
                        depth += 1
                    elif token.text == ")":
                        depth = max(0, depth - 1)
                    elif token.text == ";" and depth == 0:
                        if tokens:
                            yield _build(source, index, tokens)
                            index += 1
                        tokens = []
                        continue
                tokens.append(token)
        except LexError as exc:
            start = tokens[0].position if tokens else exc.position
            semicolon = source.find(";", exc.position + 1)
            end = len(source) if semicolon == -1 else semicolon
            yield StatementSource(
                index=index,
                text=source[start:end].strip(),
                start=start,
                end=end,
                tokens=tuple(tokens),
                lex_error=exc,
            )
            index += 1
            resume = end + 1
            continue
        if tokens:
            yield _build(source, index, tokens)
        return


def _build(source: str, index: int, tokens: List[Token]) -> StatementSource:
    start = tokens[0].position
    end = tokens[-1].end
    return StatementSource(index=index, text=source[start:end], start=start, end=end, tokens=tuple(tokens))
