#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from dataclasses import is_dataclass, fields
from enum import Enum
from typing import List, Any

from mc_ast import Node, ASTRoot
from mc_source import SourceRange
from mc_types import Type, format_type


def _format_range(source_range: SourceRange | None) -> str:
    if source_range is None:
        return ""
    return f" @{source_range}"


def _format_scalar(value: Any) -> str:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Type):
        return format_type(value)
    return repr(value)


def format_node(node: Any, indent: int = 0) -> List[str]:
    """
    Generic, reflection-based AST pretty-printer.

    - Shows the node class name.
    - Prints scalar fields inline (operators by name, types in ML syntax).
    - Recursively prints child Node / tuple-of-Node fields on new indented lines.
    - Appends a range annotation like `@1:1-1:10` when available.
    """
    ind = "  " * indent

    if isinstance(node, (list, tuple)):
        lines: List[str] = []
        for elem in node:
            lines.extend(format_node(elem, indent))
        return lines

    if isinstance(node, Node) and is_dataclass(node):
        data_fields = [f for f in fields(node) if not f.name.endswith("_range")]
        simple_parts = []
        child_fields = []

        for f in data_fields:
            value = getattr(node, f.name)
            if isinstance(value, (Node, list, tuple)):
                child_fields.append((f.name, value))
            elif value is not None:
                simple_parts.append((f.name, value))

        # Header: ClassName(field1=..., field2=...) @line:col-line:col
        header = node.__class__.__name__
        if simple_parts:
            inner = ", ".join(f"{name}={_format_scalar(value)}" for name, value in simple_parts)
            header = f"{header}({inner})"
        header += _format_range(node.source_range)

        lines = [ind + header]

        for name, value in child_fields:
            if isinstance(value, (list, tuple)):
                if not value:
                    continue
                lines.append(ind + "  " + f"{name}:")
                for elem in value:
                    lines.extend(format_node(elem, indent + 2))
            else:
                lines.append(ind + "  " + f"{name}:")
                lines.extend(format_node(value, indent + 2))

        return lines

    # Fallback for unexpected values
    return [ind + repr(node)]


def format_root(root: ASTRoot) -> str:
    """
    Convenience: pretty-print a whole ASTRoot as a string.
    """
    return "\n".join(format_node(root, indent=0))
