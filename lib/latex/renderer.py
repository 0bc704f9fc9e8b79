"""
HTML Renderer for the LaTeX to HTML compiler

This module converts the parsed LaTeX AST into an HTML string. Commands are
translated through a fixed dispatch table; anything not in the table becomes
a visible HTML comment instead of an error.
"""

from typing import Any, Callable, Dict, Optional

from .ast_nodes import TexCommand, TexGroup, TexMath, TexNode, TexText, literal_text
from .tokenizer import LINE_BREAK_COMMAND

MATH_SCRIPT = (
    '\n<script src="https://polyfill.io/v3/polyfill.min.js?features=es6"></script>\n'
    '<script id="MathJax-script" async src="https://cdn.jsdelivr.net/npm/mathjax@3/es5/tex-mml-chtml.js"></script>\n'
    "<script>\n"
    "window.MathJax = {\n"
    "  tex: {\n"
    "    inlineMath: [['$', '$']],\n"
    "    displayMath: [['$$', '$$']]\n"
    "  }\n"
    "};\n"
    "</script>\n"
)

HEAD_CLOSE_TAG = "</head>"

# Order matters: '&' goes first so entities produced later are not re-escaped
HTML_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#39;"),
)

# command name -> (opening tag, closing tag) around the first required argument
WRAPPING_COMMANDS = {
    "title": ("<title>", "</title>\n"),
    "section": ("<h1>", "</h1>\n"),
    "subsection": ("<h2>", "</h2>\n"),
    "subsubsection": ("<h3>", "</h3>\n"),
    "textbf": ("<strong>", "</strong>"),
    "textit": ("<em>", "</em>"),
    "texttt": ("<code>", "</code>"),
}

# command name -> fixed output, arguments are ignored
FIXED_COMMANDS = {
    "documentclass": '<!DOCTYPE html>\n<html>\n<head>\n<meta charset="UTF-8">\n',
    "item": "<li>",
    "maketitle": '<div class="title-page">\n',
    "par": "<p>",
    LINE_BREAK_COMMAND: "<br>\n",
}

# command name -> HTMLRenderer method that renders it
HANDLED_COMMANDS = {
    "author": "_render_author",
    "begin": "_render_begin",
    "end": "_render_end",
}

BEGIN_ENVIRONMENTS = {
    "document": "</head>\n<body>\n",
    "itemize": "<ul>\n",
    "enumerate": "<ol>\n",
    "center": '<div style="text-align: center;">\n',
}

END_ENVIRONMENTS = {
    "document": "\n</body>\n</html>",
    "itemize": "</ul>\n",
    "enumerate": "</ol>\n",
}


def escape_html(text: str) -> str:
    """Escape the five HTML-special characters in ``text``."""
    for char, entity in HTML_ESCAPES:
        text = text.replace(char, entity)
    return text


class HTMLRenderer:
    """
    Renderer that converts a LaTeX AST to HTML.

    Rendering is total: every tree produced by the parser renders to a
    string, including trees with commands the renderer does not know.
    """

    def __init__(self, options: Optional[Dict[str, Any]] = None):
        """
        Initialize the HTML renderer.

        Args:
            options: Optional rendering configuration
        """
        self.options = options or {}

        # Default rendering options
        self.escape_text = self.options.get("escape_html", True)
        self.inject_math_script = self.options.get("inject_math_script", True)
        self.math_script = self.options.get("math_script", MATH_SCRIPT)

        self._command_handlers: Dict[str, Callable[[TexCommand], str]] = {
            name: getattr(self, method) for name, method in HANDLED_COMMANDS.items()
        }

    def render_document(self, document: TexGroup) -> str:
        """
        Render a whole document and inject the math-rendering script.

        Args:
            document: The root group node to render

        Returns:
            HTML string representation of the document
        """
        html = self.render(document)
        if not self.inject_math_script:
            return html
        return self._inject_math_script(html)

    def render(self, node: TexNode) -> str:
        """Render a single AST node to HTML."""
        if isinstance(node, TexText):
            return self._render_text(node)
        elif isinstance(node, TexGroup):
            return self._render_group(node)
        elif isinstance(node, TexMath):
            return self._render_math(node)
        elif isinstance(node, TexCommand):
            return self._render_command(node)
        else:
            return f"<!-- Unknown node type: {type(node).__name__} -->"

    def _render_text(self, node: TexText) -> str:
        if self.escape_text:
            return escape_html(node.content)
        return node.content

    def _render_group(self, node: TexGroup) -> str:
        return "".join(self.render(child) for child in node.children)

    def _render_math(self, node: TexMath) -> str:
        # Math content is left verbatim for the client-side renderer
        if node.display_mode:
            return f'<div class="math-display">$${node.content}$$</div>'
        return f'<span class="math-inline">${node.content}$</span>'

    def _render_command(self, node: TexCommand) -> str:
        """Render a command through the translation table."""
        if node.name in FIXED_COMMANDS:
            return FIXED_COMMANDS[node.name]

        if node.name in WRAPPING_COMMANDS:
            if not node.required_args:
                return ""
            opening, closing = WRAPPING_COMMANDS[node.name]
            return f"{opening}{self.render(node.required_args[0])}{closing}"

        handler = self._command_handlers.get(node.name)
        if handler is not None:
            return handler(node)

        return f"<!-- Unknown command: {node.name} -->"

    def _render_author(self, node: TexCommand) -> str:
        if not node.required_args:
            return ""
        return f'<meta name="author" content="{self.render(node.required_args[0])}">\n'

    def _render_begin(self, node: TexCommand) -> str:
        if not node.required_args:
            return ""
        env = literal_text(node.required_args[0])
        if env in BEGIN_ENVIRONMENTS:
            return BEGIN_ENVIRONMENTS[env]
        return f'<div class="{escape_html(env)}">\n'

    def _render_end(self, node: TexCommand) -> str:
        if not node.required_args:
            return ""
        env = literal_text(node.required_args[0])
        # center and every unknown environment close with a plain </div>
        return END_ENVIRONMENTS.get(env, "</div>\n")

    def _inject_math_script(self, html: str) -> str:
        """Insert the math script before the first </head>, or prepend it."""
        if HEAD_CLOSE_TAG in html:
            return html.replace(HEAD_CLOSE_TAG, self.math_script + HEAD_CLOSE_TAG, 1)
        return self.math_script + html


def is_known_command(name: str) -> bool:
    """Check whether ``name`` has an entry in the translation table."""
    return name in FIXED_COMMANDS or name in WRAPPING_COMMANDS or name in HANDLED_COMMANDS
