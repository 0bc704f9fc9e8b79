"""
Main compiler for the LaTeX to HTML compiler

This module provides the LatexCompiler class that orchestrates
tokenization, parsing and HTML generation.
"""

from typing import Any, Dict, List, Optional

from .ast_nodes import TexCommand, TexGroup, TexNode, iter_nodes
from .parser import LatexParser, ParseResult
from .renderer import HTMLRenderer, is_known_command
from .tokenizer import Tokenizer


class LatexCompiler:
    """
    Compiler that coordinates all stages.

    Processing model:
    1. Tokenization: Split source into tokens
    2. Parsing: Build the AST with recursive descent
    3. Rendering: Convert the AST to HTML and inject the math script
    """

    def __init__(self, options: Optional[Dict[str, Any]] = None):
        """
        Initialize the compiler.

        Args:
            options: Optional compiler configuration. Recognized keys are
                ``inject_math_script``, ``math_script`` and ``escape_html``
                (passed to the renderer) and ``html_options`` for extra
                renderer settings.
        """
        self.options = options or {}

        html_options = dict(self.options.get("html_options", {}))
        for key in ("inject_math_script", "math_script", "escape_html"):
            if key in self.options:
                html_options[key] = self.options[key]
        self.html_renderer = HTMLRenderer(html_options)

        self.parse_stats: Dict[str, Any] = {}
        self._reset_stats()

    def parse_result(self, source: str) -> ParseResult:
        """
        Tokenize and parse source without raising on structural errors.

        Args:
            source: The LaTeX source to parse

        Returns:
            ParseResult with either the document or the parse error
        """
        if not isinstance(source, str):
            raise ValueError("Input must be a string")

        self._reset_stats()

        tokens = Tokenizer(source).tokenize()
        self.parse_stats["tokens_processed"] = len(tokens)

        result = LatexParser(tokens).parse()
        if result.document is not None:
            self._collect_stats(result.document)
        else:
            self.parse_stats["errors"].append(str(result.error))
        return result

    def parse(self, source: str) -> TexGroup:
        """
        Parse LaTeX source into an AST.

        Raises:
            LatexParseError: If an argument group is never closed
        """
        return self.parse_result(source).unwrap()

    def compile(self, source: str) -> str:
        """
        Compile LaTeX source into a complete HTML document.

        Args:
            source: The LaTeX source to compile

        Returns:
            HTML string

        Raises:
            LatexParseError: If an argument group is never closed
        """
        document = self.parse(source)
        return self.html_renderer.render_document(document)

    def validate(self, source: str) -> Dict[str, Any]:
        """
        Validate LaTeX source and return validation results.

        Args:
            source: The LaTeX source to validate

        Returns:
            Dictionary containing validation results
        """
        result = self.parse_result(source)
        warnings = [f"Unknown command: {name}" for name in self.parse_stats["unknown_commands"]]
        return {
            "valid": result.ok,
            "errors": list(self.parse_stats["errors"]),
            "warnings": warnings,
            "stats": self.get_stats(),
        }

    def get_ast_json(self, source: str) -> Dict[str, Any]:
        """
        Parse LaTeX source and return the AST as a JSON-serializable dictionary.

        Raises:
            LatexParseError: If an argument group is never closed
        """
        return self.parse(source).to_dict()

    def _collect_stats(self, document: TexGroup) -> None:
        """Count nodes and collect unknown command names."""
        unknown: List[str] = []
        nodes = 0
        for node in iter_nodes(document):
            nodes += 1
            if isinstance(node, TexCommand) and not is_known_command(node.name):
                if node.name not in unknown:
                    unknown.append(node.name)

        self.parse_stats["nodes_created"] = nodes
        self.parse_stats["max_depth"] = self._calculate_max_depth(document)
        self.parse_stats["unknown_commands"] = unknown

    def _calculate_max_depth(self, node: TexNode, current_depth: int = 0) -> int:
        """Calculate the maximum nesting depth in the document."""
        if isinstance(node, TexGroup):
            children = node.children
        elif isinstance(node, TexCommand):
            children = node.optional_args + node.required_args
        else:
            return current_depth

        max_depth = current_depth
        for child in children:
            max_depth = max(max_depth, self._calculate_max_depth(child, current_depth + 1))
        return max_depth

    def _reset_stats(self) -> None:
        """Reset parsing statistics."""
        self.parse_stats = {
            "tokens_processed": 0,
            "nodes_created": 0,
            "max_depth": 0,
            "unknown_commands": [],
            "errors": [],
        }

    def get_stats(self) -> Dict[str, Any]:
        """
        Get statistics from the last parse operation.

        Returns:
            Dictionary containing parsing statistics
        """
        stats = self.parse_stats.copy()
        stats["unknown_commands"] = list(stats["unknown_commands"])
        stats["errors"] = list(stats["errors"])
        return stats


# Convenience functions for quick compilation


def parse_latex(text: str, **options) -> TexGroup:
    """
    Parse LaTeX source into an AST.

    Raises:
        LatexParseError: If an argument group is never closed
    """
    return LatexCompiler(options).parse(text)


def compile_latex(text: str, **options) -> str:
    """
    Compile LaTeX source into an HTML document.

    Args:
        text: LaTeX source to compile
        **options: Compiler and renderer options

    Returns:
        HTML string
    """
    return LatexCompiler(options).compile(text)


def latex_to_html(text: str, **options) -> str:
    """
    Convert LaTeX source to an HTML fragment, without the math script block.
    """
    options.setdefault("inject_math_script", False)
    return LatexCompiler(options).compile(text)


def validate_latex(text: str, **options) -> Dict[str, Any]:
    """Validate LaTeX source, never raising on parse errors."""
    return LatexCompiler(options).validate(text)
