"""
AST Node Classes for the LaTeX to HTML compiler

This module defines the Abstract Syntax Tree node classes that represent
the structure of a parsed LaTeX document. The set of node types is closed:
text, command, math and group.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, List, Optional


class NodeType(Enum):
    """Enumeration of all AST node types."""

    TEXT = "text"
    COMMAND = "command"
    MATH = "math"
    GROUP = "group"


class TexNode(ABC):
    """Base class for all LaTeX AST nodes."""

    def __init__(self, node_type: NodeType):
        self.node_type = node_type

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Convert node to dictionary representation."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(type={self.node_type.value})"


class TexText(TexNode):
    """Plain text node."""

    def __init__(self, content: str):
        super().__init__(NodeType.TEXT)
        self.content = content

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.node_type.value, "content": self.content}

    def __repr__(self) -> str:
        return f"TexText({self.content!r})"


class TexMath(TexNode):
    """Math node holding raw math-mode text, never reparsed."""

    def __init__(self, content: str, display_mode: bool = False):
        super().__init__(NodeType.MATH)
        self.content = content
        self.display_mode = display_mode

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.node_type.value,
            "content": self.content,
            "display_mode": self.display_mode,
        }

    def __repr__(self) -> str:
        return f"TexMath({self.content!r}, display_mode={self.display_mode})"


class TexGroup(TexNode):
    """
    Ordered sequence of sibling nodes.

    Used both as the document root and as the implicit wrapper for a brace
    group that contains more than one element.
    """

    def __init__(self, children: Optional[List[TexNode]] = None):
        super().__init__(NodeType.GROUP)
        self.children: List[TexNode] = list(children) if children else []

    def add_child(self, child: TexNode) -> None:
        """Add a child node."""
        self.children.append(child)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.node_type.value,
            "children": [child.to_dict() for child in self.children],
        }

    def __repr__(self) -> str:
        return f"TexGroup(children={len(self.children)})"


class TexCommand(TexNode):
    """
    Command invocation with its argument groups.

    Each entry of ``required_args`` is the parsed content of one ``{...}``
    group. ``optional_args`` holds the elements of all ``[...]`` groups,
    flattened in source order.
    """

    def __init__(
        self,
        name: str,
        required_args: Optional[List[TexNode]] = None,
        optional_args: Optional[List[TexNode]] = None,
    ):
        super().__init__(NodeType.COMMAND)
        self.name = name
        self.required_args: List[TexNode] = list(required_args) if required_args else []
        self.optional_args: List[TexNode] = list(optional_args) if optional_args else []

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.node_type.value,
            "name": self.name,
            "required_args": [arg.to_dict() for arg in self.required_args],
            "optional_args": [arg.to_dict() for arg in self.optional_args],
        }

    def __repr__(self) -> str:
        return (
            f"TexCommand({self.name!r}, required={len(self.required_args)}, "
            f"optional={len(self.optional_args)})"
        )


def iter_nodes(node: TexNode):
    """Yield ``node`` and all of its descendants in document order."""
    yield node
    if isinstance(node, TexGroup):
        for child in node.children:
            yield from iter_nodes(child)
    elif isinstance(node, TexCommand):
        for arg in node.optional_args:
            yield from iter_nodes(arg)
        for arg in node.required_args:
            yield from iter_nodes(arg)


def literal_text(node: TexNode) -> str:
    """Concatenate the raw text content found in ``node``, ignoring markup."""
    if isinstance(node, TexText):
        return node.content
    if isinstance(node, TexGroup):
        return "".join(literal_text(child) for child in node.children)
    return ""
