"""
Nominal type registry.

Stores the classes and enums synthesized during type resolution, in two
scopes: global types are unique across the whole run, owner-local types
are unique within one interface. The registry is append-only.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable

from ...utils import enum_member_name
from ..errors import DuplicateNominalTypeError, SchemaShapeError, UnnamedUnionError
from ..schema_ast.nodes import (
    ArrayNode,
    GenericNode,
    MapNode,
    ObjectLiteralNode,
    PrimitiveNode,
    TypeNode,
    UnionNode,
)
from .ir_nodes import FieldDef, GeneratedClass, GeneratedEnum, NominalType, Scope

logger = logging.getLogger(__name__)

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

FieldFactory = Callable[[ObjectLiteralNode], list[FieldDef]]


def is_null(node: TypeNode) -> bool:
    return isinstance(node, PrimitiveNode) and node.name == "null"


def unwrap_object_literal(node: TypeNode) -> ObjectLiteralNode | None:
    """
    Find the object literal a class is built from.

    Takes the first non-null member of an anonymous union, then follows
    single-argument containers (Array<T>, Promise<T>...) down to the literal.

    Returns:
        The literal, or None when the chain ends in something else
    """
    current = node
    if isinstance(current, UnionNode):
        if current.name:
            raise SchemaShapeError(f"Unexpected named union: {current.name}", node.source_path)
        current = next((m for m in current.members if not is_null(m)), None)

    while current is not None and not isinstance(current, ObjectLiteralNode):
        if isinstance(current, ArrayNode):
            current = current.element
        elif isinstance(current, GenericNode):
            if len(current.args) != 1:
                raise SchemaShapeError(f"Unexpected number of parameters for {current.name}: {len(current.args)}", node.source_path)
            current = current.args[0]
        elif isinstance(current, MapNode):
            raise SchemaShapeError(f"Unexpected number of parameters for {current.name}: 2", node.source_path)
        else:
            return None
    return current


class NominalTypeRegistry:
    """Creates, deduplicates and validates generated classes and enums."""

    def __init__(self):
        # Name -> type, in registration order
        self.global_types: dict[str, NominalType] = {}
        # Owner interface -> name -> class
        self.local_types: dict[str, dict[str, GeneratedClass]] = {}

    def create_enum(self, node: UnionNode) -> GeneratedEnum:
        """
        Create or find the enum for a named union of string literals.

        Raises:
            UnnamedUnionError: If the union has no name
            SchemaShapeError: If a member is null or values are not identifiers
            DuplicateNominalTypeError: If an enum with that name has other values
        """
        if not node.name:
            raise UnnamedUnionError("Enum without name", node.source_path)

        values = []
        for member in node.members:
            if is_null(member):
                raise SchemaShapeError(f"Unexpected null in enum {node.name}", node.source_path)
            value = enum_member_name(member.name)
            if not _IDENTIFIER.match(value):
                raise SchemaShapeError(f"Enum {node.name} value {member.name!r} is not an identifier", node.source_path)
            if value in values:
                raise SchemaShapeError(f"Enum {node.name} has duplicate value {value}", node.source_path)
            values.append(value)

        new_enum = GeneratedEnum(name=node.name, values=values, source_path=node.source_path)
        existing = self.global_types.setdefault(node.name, new_enum)
        if existing is new_enum:
            logger.debug("Registered enum %s (%s)", node.name, node.source_path)
            return new_enum
        if not isinstance(existing, GeneratedEnum) or existing.values != values:
            raise DuplicateNominalTypeError(
                f"Two types named {node.name} have different values: {values} vs {self._describe(existing)}",
                node.source_path,
            )
        return existing

    def create_class(
        self,
        name: str,
        node: TypeNode,
        scope: Scope,
        field_factory: FieldFactory,
        owner: str | None = None,
        is_return_type: bool = False,
    ) -> GeneratedClass:
        """
        Create or find a class built from an object literal.

        Args:
            name: Class name
            node: Type node holding the literal (possibly wrapped)
            scope: Global or owner-local
            field_factory: Resolves the literal's properties into fields
            owner: Owning interface, for owner-local classes
            is_return_type: Whether the owner is a method return value

        Returns:
            The registered class (an existing one on repeated registration)
        """
        if scope == Scope.OWNER_LOCAL:
            local = self.local_types.setdefault(owner or "", {})
            # First writer wins, later definitions are not compared
            if name in local:
                return local[name]

        literal = unwrap_object_literal(node)
        fields = field_factory(literal) if literal is not None else []
        new_class = GeneratedClass(
            name=name,
            fields=fields,
            scope=scope,
            owner=owner if scope == Scope.OWNER_LOCAL else None,
            source_path=node.source_path,
            is_return_type=is_return_type,
        )
        return self.register_class(new_class)

    def register_class(self, new_class: GeneratedClass) -> GeneratedClass:
        """
        Add a fully built class to its scope.

        Raises:
            DuplicateNominalTypeError: If a different global type has the same name
        """
        if new_class.scope == Scope.OWNER_LOCAL:
            local = self.local_types.setdefault(new_class.owner or "", {})
            existing_local = local.setdefault(new_class.name, new_class)
            if existing_local is new_class:
                logger.debug("Registered class %s in %s (%s)", new_class.name, new_class.owner, new_class.source_path)
            return existing_local

        existing = self.global_types.setdefault(new_class.name, new_class)
        if existing is new_class:
            logger.debug("Registered class %s (%s)", new_class.name, new_class.source_path)
            return new_class
        if not isinstance(existing, GeneratedClass) or existing.signature() != new_class.signature():
            raise DuplicateNominalTypeError(
                f"Two classes named {new_class.name} have different fields: "
                f"{self._describe(new_class)} vs {self._describe(existing)} ({existing.source_path})",
                new_class.source_path,
            )
        return existing

    def get_global(self, name: str) -> NominalType | None:
        return self.global_types.get(name)

    def global_classes(self) -> list[GeneratedClass]:
        return [t for t in self.global_types.values() if isinstance(t, GeneratedClass)]

    def global_enums(self) -> list[GeneratedEnum]:
        return [t for t in self.global_types.values() if isinstance(t, GeneratedEnum)]

    def local_classes(self, owner: str) -> list[GeneratedClass]:
        return list(self.local_types.get(owner, {}).values())

    @staticmethod
    def _describe(nominal: NominalType) -> str:
        if isinstance(nominal, GeneratedEnum):
            return f"enum {nominal.values}"
        fields = ", ".join(f"{f.name}:{f.type_ref.name if f.type_ref else '?'}" for f in nominal.fields)
        return f"class {{{fields}}}"
