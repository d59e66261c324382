"""
Lazy SQL tokenizer honouring per-dialect quoting and comment rules.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator

from ..dialects import Dialect, GrammarTable, get_grammar
from ..errors import LexError


class TokenKind(Enum):
    KEYWORD = "keyword"
    IDENTIFIER = "identifier"
    LITERAL = "literal"
    SYMBOL = "symbol"
    COMMENT = "comment"


@dataclass(frozen=True)
class Token:
    """
    One lexical token.

    ``text`` is the raw source slice starting at ``position``; ``value`` is
    the normalised form (upper-cased keyword, unquoted identifier, string
    contents).
    """

    kind: TokenKind
    text: str
    position: int
    value: str
    quoted: bool = False

    @property
    def end(self) -> int:
        return self.position + len(self.text)

    @property
    def is_word(self) -> bool:
        return self.kind in (TokenKind.KEYWORD, TokenKind.IDENTIFIER) and not self.quoted

    @property
    def is_name(self) -> bool:
        return self.kind in (TokenKind.KEYWORD, TokenKind.IDENTIFIER)

    @property
    def keyword(self) -> str | None:
        """Upper-cased text for bare words and symbols, ``None`` otherwise."""
        if self.is_word:
            return self.text.upper()
        if self.kind is TokenKind.SYMBOL:
            return self.text
        return None

    def matches(self, *texts: str) -> bool:
        return self.keyword is not None and self.keyword in texts

    def is_symbol(self, text: str) -> bool:
        return self.kind is TokenKind.SYMBOL and self.text == text


_WHITESPACE = re.compile(r"\s+")
_WORD = re.compile(r"[^\W\d][\w$]*")
_NUMBER = re.compile(r"0[xX][0-9A-Fa-f]+|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_DOLLAR_TAG = re.compile(r"\$(?:[^\W\d]\w*)?\$")
_POSITIONAL = re.compile(r"\$\d+")
_NAMED = re.compile(r":[^\W\d]\w*")
_OPERATORS = ("->>", "::", "||", "<=", ">=", "<>", "!=", "->", "<<", ">>", ":=")
_SINGLE = set("(),;.+-*/%=<>[]?:@~!&|^{}#")
_CLOSERS = {'"': '"', "`": "`", "[": "]"}
_STRING_PREFIXES = set("xXbBnNeE")
_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "0": "\0", "b": "\b", "Z": "\x1a"}


class Tokenizer:
    """
    Restartable token sequence over ``source``.

    Iterating creates a fresh lazy scan from ``start``; ``LexError`` is
    raised at the offending offset instead of truncating input.
    """

    def __init__(self, source: str, dialect: Dialect | str | GrammarTable = Dialect.ANSI, *, start: int = 0) -> None:
        self.source = source
        self.grammar = dialect if isinstance(dialect, GrammarTable) else get_grammar(dialect)
        self.start = start

    def __iter__(self) -> Iterator[Token]:
        return self._scan(self.start)

    # Scanning ---------------------------------------------------------
    def _scan(self, pos: int) -> Iterator[Token]:
        source = self.source
        length = len(source)
        while pos < length:
            ws = _WHITESPACE.match(source, pos)
            if ws:
                pos = ws.end()
                continue
            char = source[pos]
            pair = source[pos : pos + 2]
            if pair == "--" or (char == "#" and self.grammar.hash_comments):
                end = source.find("\n", pos)
                end = length if end == -1 else end
                yield Token(TokenKind.COMMENT, source[pos:end], pos, source[pos:end])
                pos = end
            elif pair == "/*":
                end = self._block_comment_end(pos)
                yield Token(TokenKind.COMMENT, source[pos:end], pos, source[pos:end])
                pos = end
            elif char == "'":
                token = self._string(pos, pos, "'", backslashes=self.grammar.backslash_escapes)
                yield token
                pos = token.end
            elif char == '"' and self.grammar.double_quote_strings:
                token = self._string(pos, pos, '"', backslashes=self.grammar.backslash_escapes)
                yield token
                pos = token.end
            elif char in _STRING_PREFIXES and source[pos + 1 : pos + 2] == "'":
                escapes = self.grammar.backslash_escapes or char in "eE"
                token = self._string(pos, pos + 1, "'", backslashes=escapes)
                yield token
                pos = token.end
            elif char in self.grammar.identifier_quotes:
                token = self._quoted_identifier(pos, char)
                yield token
                pos = token.end
            elif char == "$" and self.grammar.dollar_quotes and _DOLLAR_TAG.match(source, pos):
                token = self._dollar_string(pos)
                yield token
                pos = token.end
            elif char.isdigit() or (char == "." and source[pos + 1 : pos + 2].isdigit()):
                match = _NUMBER.match(source, pos)
                assert match is not None
                yield Token(TokenKind.LITERAL, match.group(), pos, match.group())
                pos = match.end()
            elif _WORD.match(source, pos):
                match = _WORD.match(source, pos)
                word = match.group()
                if self.grammar.is_keyword(word):
                    yield Token(TokenKind.KEYWORD, word, pos, word.upper())
                else:
                    yield Token(TokenKind.IDENTIFIER, word, pos, word)
                pos = match.end()
            else:
                token = self._symbol(pos)
                yield token
                pos = token.end

    def _block_comment_end(self, start: int) -> int:
        source = self.source
        depth = 0
        pos = start
        while pos < len(source):
            pair = source[pos : pos + 2]
            if pair == "/*" and (depth == 0 or self.grammar.nested_comments):
                depth += 1
                pos += 2
            elif pair == "*/":
                depth -= 1
                pos += 2
                if depth == 0:
                    return pos
            else:
                pos += 1
        raise LexError("Unterminated block comment", start)

    def _string(self, start: int, quote_pos: int, quote: str, *, backslashes: bool) -> Token:
        source = self.source
        pos = quote_pos + 1
        chars: list[str] = []
        while pos < len(source):
            char = source[pos]
            if backslashes and char == "\\" and pos + 1 < len(source):
                escaped = source[pos + 1]
                chars.append(_ESCAPES.get(escaped, escaped))
                pos += 2
            elif char == quote:
                if source[pos + 1 : pos + 2] == quote:
                    chars.append(quote)
                    pos += 2
                else:
                    return Token(TokenKind.LITERAL, source[start : pos + 1], start, "".join(chars))
            else:
                chars.append(char)
                pos += 1
        raise LexError("Unterminated string literal", start)

    def _quoted_identifier(self, start: int, opener: str) -> Token:
        source = self.source
        closer = _CLOSERS[opener]
        pos = start + 1
        chars: list[str] = []
        while pos < len(source):
            char = source[pos]
            if char == closer:
                if closer != "]" and source[pos + 1 : pos + 2] == closer:
                    chars.append(closer)
                    pos += 2
                    continue
                return Token(TokenKind.IDENTIFIER, source[start : pos + 1], start, "".join(chars), quoted=True)
            chars.append(char)
            pos += 1
        raise LexError("Unterminated quoted identifier", start)

    def _dollar_string(self, start: int) -> Token:
        match = _DOLLAR_TAG.match(self.source, start)
        assert match is not None
        tag = match.group()
        end = self.source.find(tag, match.end())
        if end == -1:
            raise LexError("Unterminated dollar-quoted string", start)
        text = self.source[start : end + len(tag)]
        return Token(TokenKind.LITERAL, text, start, self.source[match.end() : end])

    def _symbol(self, pos: int) -> Token:
        source = self.source
        for pattern in (_POSITIONAL, _NAMED):
            match = pattern.match(source, pos)
            if match and not (pattern is _NAMED and source[pos + 1 : pos + 2] == ":"):
                return Token(TokenKind.SYMBOL, match.group(), pos, match.group())
        for operator in _OPERATORS:
            if source.startswith(operator, pos):
                return Token(TokenKind.SYMBOL, operator, pos, operator)
        char = source[pos]
        if char in _SINGLE:
            return Token(TokenKind.SYMBOL, char, pos, char)
        raise LexError(f"Unexpected character {char!r}", pos)


def tokenize(source: str, dialect: Dialect | str | GrammarTable = Dialect.ANSI, *, start: int = 0) -> Iterator[Token]:
    """
    Convenience wrapper returning a lazy token iterator.
    """

    return iter(Tokenizer(source, dialect, start=start))
