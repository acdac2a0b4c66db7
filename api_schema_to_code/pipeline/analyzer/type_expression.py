"""
Canonical text rendering of type expressions.

The rendering is deterministic so that explicit overrides can state the
exact expression they expect to replace:

    union         sorted members joined with "|", "Name<...>" when named
    generic       Name<a, b>
    function      function, or function(a, b) with an optional ":ret" suffix
    object        Object
"""

from __future__ import annotations

from ..schema_ast.nodes import (
    ArrayNode,
    FunctionNode,
    GenericNode,
    MapNode,
    ObjectLiteralNode,
    PrimitiveNode,
    TypeNode,
    UnionNode,
)


def type_expression(node: TypeNode) -> str:
    """Render a type node as canonical expression text."""
    if isinstance(node, UnionNode):
        values = sorted(type_expression(member) for member in node.members)
        joined = "|".join(values)
        return f"{node.name}<{joined}>" if node.name else joined

    if isinstance(node, FunctionNode):
        if node.args is None:
            return node.name
        args = ", ".join(type_expression(arg) for arg in node.args)
        return_type = f":{type_expression(node.return_type)}" if node.return_type is not None else ""
        return f"{node.name}({args}){return_type}"

    if isinstance(node, ArrayNode):
        return _templated(node.name, [node.element])

    if isinstance(node, MapNode):
        return _templated(node.name, [node.key, node.value])

    if isinstance(node, GenericNode):
        return _templated(node.name, node.args)

    if isinstance(node, (ObjectLiteralNode, PrimitiveNode)):
        return node.name

    raise TypeError(f"Unknown type node: {node!r}")


def _templated(name: str, args: list[TypeNode | None]) -> str:
    rendered = [type_expression(arg) for arg in args if arg is not None]
    if not rendered:
        return name
    return f"{name}<{', '.join(rendered)}>"
