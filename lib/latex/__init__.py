"""
LaTeX to HTML compiler

A small compiler for a LaTeX-like command language producing HTML.

This module provides:
- Tokenization of LaTeX source
- Recursive descent parsing into an AST
- HTML rendering through a fixed command translation table
- MathJax script injection for $...$ and $$...$$ math

Usage:
    from lib.latex import LatexCompiler, compile_latex

    compiler = LatexCompiler()
    html = compiler.compile("\\section{Hello}\\textbf{World}")

    # Convenience function
    html = compile_latex("$E = mc^2$")

Unknown commands never fail compilation, they are rendered as
``<!-- Unknown command: NAME -->``. The only error is an argument group
left open at the end of input, reported as LatexParseError.
"""

from .ast_nodes import NodeType, TexCommand, TexGroup, TexMath, TexNode, TexText
from .compiler import LatexCompiler, compile_latex, latex_to_html, parse_latex, validate_latex
from .parser import LatexParseError, LatexParser, ParseResult
from .renderer import HTMLRenderer, MATH_SCRIPT, escape_html
from .tokenizer import Token, Tokenizer, TokenType

__version__ = "1.0.0"
__all__ = [
    "LatexCompiler",
    "compile_latex",
    "latex_to_html",
    "parse_latex",
    "validate_latex",
    "Tokenizer",
    "Token",
    "TokenType",
    "LatexParser",
    "LatexParseError",
    "ParseResult",
    "HTMLRenderer",
    "MATH_SCRIPT",
    "escape_html",
    # AST Nodes
    "NodeType",
    "TexNode",
    "TexText",
    "TexCommand",
    "TexMath",
    "TexGroup",
]
