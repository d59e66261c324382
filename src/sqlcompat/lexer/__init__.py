"""
SQL tokenization.
"""

from .tokenizer import Token, TokenKind, Tokenizer, tokenize

__all__ = ["Token", "TokenKind", "Tokenizer", "tokenize"]
