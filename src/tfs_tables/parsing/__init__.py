"""Tokenizing for the TFS text format."""

from tfs_tables.parsing.tfs_lexer import TfsLexer, quote_token

__all__ = [
    "TfsLexer",
    "quote_token",
]
