"""Lexer for single lines of TFS text."""

import re

import ply.lex as lex

from tfs_tables.errors import MalformedLineError

_ESCAPE = re.compile(r"\\(.)")

_NEEDS_QUOTES = re.compile(r'\s|"')


def quote_token(text: str) -> str:
    """Return ``text`` in a form that reads back as one token.

    Empty text and text holding whitespace or double quotes is written as a
    double-quoted string with backslash escapes; anything else is unchanged.
    """
    if text and not _NEEDS_QUOTES.search(text):
        return text
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class TfsLexer:
    """Lexer for tokenizing one TFS line at a time.

    In the default state a leading ``@``, ``*`` or ``$`` is a MARKER and a
    ``%``-prefixed run such as ``%le`` is a TAG. Data rows are tokenized in
    the ``row`` state, which knows neither, so a cell is never mistaken for
    a marker or tag. In both states a double-quoted STRING is one token with
    its quotes and escapes removed, and any other whitespace-separated run
    is a WORD.
    """

    tokens = [
        "MARKER",
        "TAG",
        "STRING",
        "WORD",
    ]

    states = (
        ("row", "exclusive"),
    )

    t_ANY_ignore = " \t\r\n"

    def __init__(self) -> None:
        self.lexer: lex.LexToken = None  # type: ignore

    def t_MARKER(self, t: lex.LexToken) -> lex.LexToken:
        r"^[@*$]"
        return t

    def t_TAG(self, t: lex.LexToken) -> lex.LexToken:
        r"%\d*[A-Za-z]+(?=\s|$)"
        return t

    def t_ANY_STRING(self, t: lex.LexToken) -> lex.LexToken:
        r'"([^"\\]|\\.)*"(?=\s|$)'
        t.value = _ESCAPE.sub(r"\1", t.value[1:-1])
        return t

    def t_ANY_WORD(self, t: lex.LexToken) -> lex.LexToken:
        r"[^\s]+"
        return t

    def t_ANY_SPACE(self, t: lex.LexToken) -> None:
        r"\s+"
        # Whitespace outside t_ignore (form feeds, non-breaking spaces)

    def t_ANY_error(self, t: lex.LexToken) -> None:
        raise MalformedLineError(f"Illegal character '{t.value[0]}' at position {t.lexpos}")

    def build(self, **kwargs) -> None:  # type: ignore
        """Build the lexer."""
        self.lexer = lex.lex(module=self, **kwargs)

    def input(self, data: str, row: bool = False) -> None:
        """Set the input string to tokenize, as a data row if ``row``."""
        self.lexer.begin("row" if row else "INITIAL")
        self.lexer.input(data)

    def token(self) -> lex.LexToken | None:
        """Return the next token."""
        return self.lexer.token()

    def tokenize(self, data: str, row: bool = False) -> list[lex.LexToken]:
        """Tokenize the input and return all tokens."""
        self.input(data, row)
        tokens = []
        while True:
            tok = self.token()
            if tok is None:
                break
            tokens.append(tok)
        return tokens

    def split(self, data: str, row: bool = False) -> list[str]:
        """Return the token values of ``data``."""
        return [tok.value for tok in self.tokenize(data, row)]
