"""
AST node definitions for the API schema.

These nodes represent the parsed structure of the API description before
any type resolution or language-specific processing. Type nodes form a
closed variant set; the resolver dispatches on their class.

Nodes compare by identity so they can be used as cache keys: two
structurally identical type nodes are still two distinct occurrences.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


@dataclass(eq=False)
class SchemaNode:
    """Base class for all AST nodes."""

    # Dot-joined chain of owning interface/member/param/field names
    source_path: str = ""

    # Raw schema object this node was parsed from
    raw: dict[str, Any] = field(default_factory=dict, repr=False)


@dataclass(eq=False)
class TypeNode(SchemaNode):
    """Base class for type expression nodes."""

    name: str = ""


@dataclass(eq=False)
class PrimitiveNode(TypeNode):
    """A named leaf type (int, string, Buffer, an interface name, null...)."""


@dataclass(eq=False)
class ArrayNode(TypeNode):
    """Array<T>."""

    element: TypeNode | None = None


@dataclass(eq=False)
class MapNode(TypeNode):
    """Map<K, V>, also spelled Object<K, V> in the schema.

    `name` keeps the schema spelling ("Map" or "Object").
    """

    key: TypeNode | None = None
    value: TypeNode | None = None


@dataclass(eq=False)
class UnionNode(TypeNode):
    """A union of types. An empty name means an anonymous union."""

    members: list[TypeNode] = field(default_factory=list)

    @property
    def is_anonymous(self) -> bool:
        return not self.name


@dataclass(eq=False)
class GenericNode(TypeNode):
    """Any other templated type, e.g. Promise<T>."""

    args: list[TypeNode] = field(default_factory=list)


@dataclass(eq=False)
class FunctionNode(TypeNode):
    """A function type.

    `args` is None for a bare function (declared without an argument list).
    """

    args: list[TypeNode] | None = None
    return_type: TypeNode | None = None

    @property
    def is_bare(self) -> bool:
        return self.args is None


@dataclass(eq=False)
class PropertyNode(SchemaNode):
    """A property of an object literal."""

    name: str = ""
    type_node: TypeNode | None = None
    is_required: bool = False
    comment: str = ""


@dataclass(eq=False)
class ObjectLiteralNode(TypeNode):
    """An anonymous record type: Object with inline properties."""

    properties: list[PropertyNode] = field(default_factory=list)


class MemberKind(str, Enum):
    """Kind of interface member."""

    METHOD = "method"
    PROPERTY = "property"
    EVENT = "event"


@dataclass(eq=False)
class ParamNode(SchemaNode):
    """A method parameter."""

    name: str = ""
    type_node: TypeNode | None = None
    is_required: bool = False
    comment: str = ""

    @property
    def is_optional(self) -> bool:
        return not self.is_required


@dataclass(eq=False)
class MemberNode(SchemaNode):
    """A method, property or event of an interface."""

    kind: MemberKind = MemberKind.METHOD
    name: str = ""
    type_node: TypeNode | None = None  # None means void
    params: list[ParamNode] = field(default_factory=list)
    comment: str = ""
    return_comment: str | None = None
    is_required: bool = True


@dataclass(eq=False)
class InterfaceNode(SchemaNode):
    """An interface of the API surface."""

    name: str = ""
    extends: str | None = None
    comment: str = ""
    members: list[MemberNode] = field(default_factory=list)


@dataclass(eq=False)
class ApiSchema:
    """Root of the parsed schema AST."""

    interfaces: list[InterfaceNode] = field(default_factory=list)
