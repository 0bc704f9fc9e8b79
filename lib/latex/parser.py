"""
Parser for the LaTeX to HTML compiler

This module turns the flat token stream produced by the tokenizer into an
AST using recursive descent with a single token of lookahead.
"""

from typing import List, NamedTuple, Optional

from .ast_nodes import TexCommand, TexGroup, TexMath, TexNode, TexText
from .tokenizer import Token, TokenType

# Maximum number of simultaneously open groups, deeper input is a parse error
MAX_NESTING_DEPTH = 100

GROUP_DELIMITERS = {
    TokenType.LBRACE: (TokenType.RBRACE, "}"),
    TokenType.LBRACKET: (TokenType.RBRACKET, "]"),
}


class LatexParseError(Exception):
    """Exception raised when a group is never closed or is nested too deeply."""

    def __init__(
        self,
        message: str,
        expected: str,
        position: int,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ):
        """
        Initialize parse error.

        Args:
            message: Error message
            expected: The closing delimiter that was expected
            position: Source offset of the unclosed opening delimiter
            line: Line number of the opening delimiter
            column: Column number of the opening delimiter
        """
        self.message = message
        self.expected = expected
        self.position = position
        self.line = line
        self.column = column

        location = ""
        if line is not None:
            location = f" at line {line}"
            if column is not None:
                location += f", column {column}"
        location += f" (offset {position})"

        super().__init__(f"{message}{location}")


class ParseResult(NamedTuple):
    """Outcome of a parse: either a document or the error that stopped it."""

    document: Optional[TexGroup]
    error: Optional[LatexParseError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> TexGroup:
        """Return the document or raise the parse error."""
        if self.error is not None:
            raise self.error
        if self.document is None:
            raise ValueError("ParseResult holds neither a document nor an error")
        return self.document


class LatexParser:
    """
    Recursive descent parser for LaTeX-like documents.

    Grammar:
        document := element* EOF
        element  := command | TEXT | MATH_INLINE | MATH_DISPLAY | NEWLINE | group
        command  := COMMAND ('[' element* ']')* ('{' element* '}')*
    """

    def __init__(self, tokens: List[Token], max_depth: int = MAX_NESTING_DEPTH):
        self.tokens = tokens
        self.max_depth = max_depth
        self.pos = 0
        self.depth = 0

    def parse(self) -> ParseResult:
        """
        Parse tokens into a document AST.

        Returns:
            ParseResult holding the root TexGroup, or the LatexParseError
            raised for an unclosed or too deeply nested group.
        """
        self.pos = 0
        self.depth = 0
        try:
            return ParseResult(self._parse_document())
        except LatexParseError as e:
            return ParseResult(None, e)

    def _parse_document(self) -> TexGroup:
        document = TexGroup()
        while not self._is_at_end():
            node = self._parse_element()
            if node is not None:
                document.add_child(node)
        return document

    def _parse_element(self) -> Optional[TexNode]:
        """Parse a single element, returning None for tokens that produce nothing."""
        token = self._current_token()

        if token.type == TokenType.COMMAND:
            return self._parse_command()

        if token.type in GROUP_DELIMITERS:
            return TexGroup(self._parse_group())

        self._advance()
        if token.type == TokenType.TEXT:
            return TexText(token.content)
        if token.type == TokenType.MATH_INLINE:
            return TexMath(token.content, display_mode=False)
        if token.type == TokenType.MATH_DISPLAY:
            return TexMath(token.content, display_mode=True)
        if token.type == TokenType.NEWLINE:
            return TexText(" ")

        # Stray closing delimiter
        return None

    def _parse_command(self) -> TexCommand:
        """Parse a command with its optional and required argument groups."""
        command = TexCommand(self._advance().content)

        while self._check(TokenType.LBRACKET):
            command.optional_args.extend(self._parse_group())

        while self._check(TokenType.LBRACE):
            elements = self._parse_group()
            if not elements:
                command.required_args.append(TexText(""))
            elif len(elements) == 1:
                command.required_args.append(elements[0])
            else:
                command.required_args.append(TexGroup(elements))

        return command

    def _parse_group(self) -> List[TexNode]:
        """
        Parse a bracket or brace group starting at the current token.

        Returns:
            The elements between the delimiters, in order.

        Raises:
            LatexParseError: If the input ends before the group is closed,
                or the group opens more than max_depth levels deep.
        """
        opening = self._advance()
        closing_type, closing_char = GROUP_DELIMITERS[opening.type]

        if self.depth >= self.max_depth:
            raise LatexParseError(
                f"Nesting deeper than {self.max_depth} levels",
                expected=closing_char,
                position=opening.position,
                line=opening.line,
                column=opening.column,
            )

        self.depth += 1
        elements: List[TexNode] = []
        while not self._check(closing_type) and not self._is_at_end():
            element = self._parse_element()
            if element is not None:
                elements.append(element)
        self.depth -= 1

        if not self._check(closing_type):
            raise LatexParseError(
                f"Expected '{closing_char}'",
                expected=closing_char,
                position=opening.position,
                line=opening.line,
                column=opening.column,
            )
        self._advance()
        return elements

    def _current_token(self) -> Token:
        if self.pos >= len(self.tokens):
            return self.tokens[-1]
        return self.tokens[self.pos]

    def _advance(self) -> Token:
        token = self._current_token()
        if not self._is_at_end():
            self.pos += 1
        return token

    def _is_at_end(self) -> bool:
        return self.pos >= len(self.tokens) or self.tokens[self.pos].type == TokenType.EOF

    def _check(self, token_type: TokenType) -> bool:
        if self._is_at_end():
            return False
        return self._current_token().type == token_type


def parse_tokens(tokens: List[Token], max_depth: int = MAX_NESTING_DEPTH) -> ParseResult:
    """Parse a token list into a ParseResult."""
    return LatexParser(tokens, max_depth).parse()
