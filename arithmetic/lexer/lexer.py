"""
Arithmetic lexer - turns expression text into tokens

Scanning is lazy: tokens are produced one at a time from a generator, and
the parser only ever looks one token ahead through TokenStream. The lexer
never fails. Characters it doesn't recognise come out as INVALID tokens and
it is up to the parser to reject them.

xwest
"""

from typing import Iterable, Iterator, List, Optional

from .tokens import (
    Token, TokenType, SourceLocation, SINGLE_CHAR_TOKENS, DIGITS, WHITESPACE,
    digits_to_int
)


class _Cursor:
    """Scan position (offset, line, column) owned by a single scan."""

    def __init__(self, source: str, filename: str):
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.column = 1

    def at_end(self) -> bool:
        return self.pos >= len(self.source)

    def current(self) -> str:
        return self.source[self.pos]

    def location(self) -> SourceLocation:
        return SourceLocation(self.filename, self.line, self.column, self.pos)

    def advance(self):
        """Advance position by one character, updating line/column."""
        if self.source[self.pos] == '\n':
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.pos += 1


class Lexer:
    """
    Lexical analyzer for integer arithmetic expressions.

    Iterating over a Lexer yields its tokens. Every iteration gets its own
    cursor and starts again from the beginning of the source, so several
    iterations over one Lexer never disturb each other.
    """

    def __init__(self, source: str, filename: str = "<string>"):
        """
        Initialize the lexer with source text.

        Args:
            source: Expression text
            filename: Name used in source locations for error reporting
        """
        self.source = source
        self.filename = filename

    def __iter__(self) -> Iterator[Token]:
        return self._scan()

    def tokenize(self) -> List[Token]:
        """
        Tokenize the entire source.

        Returns:
            List of tokens (there is no EOF token)
        """
        return list(self._scan())

    def _scan(self) -> Iterator[Token]:
        cursor = _Cursor(self.source, self.filename)

        while not cursor.at_end():
            if cursor.current() in WHITESPACE:
                cursor.advance()
                continue
            yield self._next_token(cursor)

    def _next_token(self, cursor: _Cursor) -> Token:
        """Scan exactly one token starting at the cursor."""
        location = cursor.location()
        current_char = cursor.current()

        if current_char in DIGITS:
            return self._tokenize_number(cursor, location)

        cursor.advance()
        token_type = SINGLE_CHAR_TOKENS.get(current_char, TokenType.INVALID)
        return Token(token_type, current_char, None, location)

    def _tokenize_number(self, cursor: _Cursor, location: SourceLocation) -> Token:
        """Consume a maximal run of digits as one NUMBER token."""
        start = cursor.pos
        while not cursor.at_end() and cursor.current() in DIGITS:
            cursor.advance()

        lexeme = self.source[start:cursor.pos]
        return Token(TokenType.NUMBER, lexeme, digits_to_int(lexeme), location)

    def end_location(self) -> SourceLocation:
        """Location just past the last character of the source."""
        cursor = _Cursor(self.source, self.filename)
        while not cursor.at_end():
            cursor.advance()
        return cursor.location()


class TokenStream:
    """
    A token iterator with one token of lookahead.

    peek() inspects the next token without consuming it; next() consumes
    it. At most one token is ever buffered.
    """

    _EMPTY = object()

    def __init__(self, tokens: Iterable[Token], end_location: Optional[SourceLocation] = None):
        self._tokens = iter(tokens)
        self._peeked = self._EMPTY
        self.end_location = end_location

    def __iter__(self) -> "TokenStream":
        return self

    def __next__(self) -> Token:
        token = self.next()
        if token is None:
            raise StopIteration
        return token

    def peek(self) -> Optional[Token]:
        """Return the next token without consuming it, or None at the end."""
        if self._peeked is self._EMPTY:
            self._peeked = next(self._tokens, None)
        return self._peeked

    def next(self) -> Optional[Token]:
        """Consume and return the next token, or None at the end."""
        token = self.peek()
        self._peeked = self._EMPTY
        return token

    def at_end(self) -> bool:
        return self.peek() is None


def tokenize_string(source: str, filename: str = "<string>") -> TokenStream:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Expression text
        filename: Filename for error reporting

    Returns:
        A lazy TokenStream over the source
    """
    lexer = Lexer(source, filename)
    return TokenStream(lexer, lexer.end_location())
