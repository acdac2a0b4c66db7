"""
Schema AST module.

Contains the AST node definitions, the language preprocessor and the
parser for the API schema.
"""

from __future__ import annotations

from .nodes import (
    ApiSchema,
    ArrayNode,
    FunctionNode,
    GenericNode,
    InterfaceNode,
    MapNode,
    MemberKind,
    MemberNode,
    ObjectLiteralNode,
    ParamNode,
    PrimitiveNode,
    PropertyNode,
    SchemaNode,
    TypeNode,
    UnionNode,
)
from .parser import SchemaParser
from .preprocessor import SchemaPreprocessor

__all__ = [
    "SchemaNode",
    "TypeNode",
    "PrimitiveNode",
    "ArrayNode",
    "MapNode",
    "UnionNode",
    "GenericNode",
    "FunctionNode",
    "ObjectLiteralNode",
    "PropertyNode",
    "ParamNode",
    "MemberKind",
    "MemberNode",
    "InterfaceNode",
    "ApiSchema",
    "SchemaParser",
    "SchemaPreprocessor",
]
