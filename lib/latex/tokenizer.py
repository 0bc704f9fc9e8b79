"""
Tokenizer for the LaTeX to HTML compiler

This module provides tokenization functionality to break LaTeX-like input
into a flat stream of tokens for parsing.
"""

from enum import Enum
from typing import Iterator, List, NamedTuple


class TokenType(Enum):
    """Types of tokens recognized by the tokenizer."""

    COMMAND = "command"
    TEXT = "text"
    LBRACE = "lbrace"
    RBRACE = "rbrace"
    LBRACKET = "lbracket"
    RBRACKET = "rbracket"
    NEWLINE = "newline"
    MATH_INLINE = "math_inline"
    MATH_DISPLAY = "math_display"
    EOF = "eof"


class Token(NamedTuple):
    """A token with type, content, source offset, line and column position."""

    type: TokenType
    content: str
    position: int
    line: int = 1
    column: int = 1


# Characters that always terminate a text run
TEXT_STOP_CHARS = frozenset("\\{}[]$\n")

STRUCTURAL_TOKENS = {
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
}

LINE_BREAK_COMMAND = "\\\\"


class Tokenizer:
    """
    Tokenizer that converts LaTeX source into a stream of tokens.

    Never fails: characters that have no special meaning end up in TEXT
    tokens, unterminated math swallows the rest of the input.
    """

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Token] = []

    def tokenize(self) -> List[Token]:
        """
        Tokenize the input text and return a list of tokens.

        Returns:
            List of Token objects, always terminated by a single EOF token.
        """
        self.tokens = []
        self.pos = 0
        self.line = 1
        self.column = 1

        while self.pos < len(self.text):
            char = self._current_char()

            if char == "\\":
                self._tokenize_command()
            elif char in STRUCTURAL_TOKENS:
                self._add_token(STRUCTURAL_TOKENS[char], char)
                self._advance()
            elif char == "$":
                self._tokenize_math()
            elif char == "\n":
                self._add_token(TokenType.NEWLINE, char)
                self._advance()
            elif char.isspace():
                self._advance()
            else:
                self._tokenize_text()

        self._add_token(TokenType.EOF, "")
        return self.tokens

    def _tokenize_command(self) -> None:
        """Tokenize a backslash command starting at the current position."""
        start, line, column = self.pos, self.line, self.column
        self._advance()  # skip backslash

        if self._current_char() == "\\":
            self._advance()
            self._add_token(TokenType.COMMAND, LINE_BREAK_COMMAND, start, line, column)
            return

        name = self._consume_while(str.isalpha)
        if not name and self.pos < len(self.text):
            # Escaped symbol like \& or \{
            name = self._current_char()
            self._advance()

        self._add_token(TokenType.COMMAND, name, start, line, column)

    def _tokenize_math(self) -> None:
        """Tokenize inline ($...$) or display ($$...$$) math."""
        start, line, column = self.pos, self.line, self.column
        self._advance()  # skip first $

        display_mode = False
        if self._current_char() == "$":
            display_mode = True
            self._advance()

        content = self._consume_while(lambda c: c != "$")
        if self._current_char() == "$":
            self._advance()
            if display_mode and self._current_char() == "$":
                self._advance()

        token_type = TokenType.MATH_DISPLAY if display_mode else TokenType.MATH_INLINE
        self._add_token(token_type, content, start, line, column)

    def _tokenize_text(self) -> None:
        """Tokenize a run of regular text content."""
        start, line, column = self.pos, self.line, self.column
        text = self._consume_while(lambda c: c not in TEXT_STOP_CHARS)
        if text:
            self._add_token(TokenType.TEXT, text, start, line, column)

    def _current_char(self) -> str:
        """Get the current character or empty string if at end."""
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def _advance(self, count: int = 1) -> None:
        """Advance position by count characters."""
        for _ in range(count):
            if self.pos < len(self.text):
                if self.text[self.pos] == "\n":
                    self.line += 1
                    self.column = 1
                else:
                    self.column += 1
                self.pos += 1

    def _consume_while(self, predicate) -> str:
        """Consume characters while predicate is true."""
        start = self.pos
        while self.pos < len(self.text) and predicate(self.text[self.pos]):
            self._advance()
        return self.text[start : self.pos]

    def _add_token(self, token_type: TokenType, content: str, position=None, line=None, column=None) -> None:
        """Add a token to the token list, defaulting to the current position."""
        token = Token(
            token_type,
            content,
            self.pos if position is None else position,
            self.line if line is None else line,
            self.column if column is None else column,
        )
        self.tokens.append(token)

    def __iter__(self) -> Iterator[Token]:
        """Make tokenizer iterable."""
        if not self.tokens:
            self.tokenize()
        return iter(self.tokens)


def tokenize(source: str) -> List[Token]:
    """Tokenize ``source`` into a list of tokens ending with EOF."""
    return Tokenizer(source).tokenize()
