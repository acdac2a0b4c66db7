"""
Type resolver.

Converts type expression nodes into resolved type references, creating
the classes and enums the target language needs along the way. Resolution
is a function of (node, owner context, registry): the owner context is
passed explicitly instead of being looked up through parent links.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from ...utils import to_title
from ..config import GeneratorConfig
from ..errors import OverrideMismatchError, UnnamedUnionError, UnsupportedTypeShapeError
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
from .ir_nodes import FieldDef, Scope, TypeKind, TypeRef
from .registry import NominalTypeRegistry, is_null
from .target_types import TargetTypes
from .type_expression import type_expression

logger = logging.getLogger(__name__)

# Anonymous objects allowed to map onto a plain key/value mapping
_SUPPORTED_OBJECT_MAPS = ("Object<string, string>", "Object<string, any>")


class OwnerKind(Enum):
    """What a type node is the type of."""

    METHOD = "method"  # return type
    PARAM = "param"
    FIELD = "field"
    EVENT = "event"


@dataclass(frozen=True)
class OwnerContext:
    """The member, parameter or field a type node belongs to.

    Attributes:
        path: Path of the owner, also the key for explicit overrides
        kind: Kind of owner
        name: Owner name (method, parameter, field or event name)
        parent_name: Name of the owner's parent (method of a parameter...)
        interface: Enclosing interface, the owner-local scope
    """

    path: str
    kind: OwnerKind
    name: str
    parent_name: str = ""
    interface: str = ""

    def for_field(self, path: str, name: str, class_name: str) -> OwnerContext:
        return OwnerContext(path=path, kind=OwnerKind.FIELD, name=name, parent_name=class_name, interface=self.interface)


@dataclass
class _ResolutionState:
    """Per top-level node bookkeeping."""

    context: OwnerContext
    # One literal per top-level node becomes a class, e.g. for Object|Array<Object>
    custom_type: TypeRef | None = field(default=None)


def is_bare_function(node: TypeNode) -> bool:
    return isinstance(node, FunctionNode) and node.is_bare


def nullable_inner(node: TypeNode) -> TypeNode | None:
    """
    Return T when node is an anonymous union reducing to {T, null}.

    Bare function members are discarded before counting.
    """
    if not isinstance(node, UnionNode) or not node.is_anonymous:
        return None
    members = [m for m in node.members if not is_bare_function(m)]
    if len(members) != 2 or not any(is_null(m) for m in members):
        return None
    return next((m for m in members if not is_null(m)), None)


def supported_variants(node: UnionNode) -> list[TypeNode]:
    """Union members that get their own overload: no null, no bare function."""
    return [m for m in node.members if not is_null(m) and not is_bare_function(m)]


def unwrap_promise(node: TypeNode) -> TypeNode:
    while isinstance(node, GenericNode) and node.name == "Promise" and len(node.args) == 1:
        node = node.args[0]
    return node


class TypeResolver:
    """Resolves type nodes to TypeRefs and populates the registry."""

    def __init__(self, registry: NominalTypeRegistry, config: GeneratorConfig, target: TargetTypes):
        """
        Initialize the resolver.

        Args:
            registry: Registry receiving generated classes and enums
            config: Generator configuration (overrides, class names)
            target: Spelling table of the target language
        """
        self.registry = registry
        self.config = config
        self.target = target
        self._cache: dict[TypeNode, TypeRef] = {}

    def resolve(self, node: TypeNode | None, context: OwnerContext) -> TypeRef:
        """
        Resolve a type node.

        Resolving the same node object twice returns the cached result and
        never touches the registry again.

        Args:
            node: Type node, None for void
            context: The owner of the node

        Returns:
            Resolved type reference
        """
        if node is None:
            return TypeRef(name=self.target.void)

        cached = self._cache.get(node)
        if cached is not None:
            return cached

        override = self.config.type_overrides.get(context.path)
        if override is not None:
            found = type_expression(node)
            if found != override.source:
                raise OverrideMismatchError(context.path, override.source, found)
            kind = TypeKind.ENUM if override.kind == "enum" else TypeKind.CLASS
            result = TypeRef(kind=kind, name=override.target, scope=Scope.GLOBAL)
            logger.debug("Override %s -> %s", context.path, override.target)
        else:
            result = self._resolve_top(node, _ResolutionState(context))

        self._cache[node] = result
        return result

    def _resolve_top(self, node: TypeNode, state: _ResolutionState) -> TypeRef:
        node = unwrap_promise(node)
        inner = nullable_inner(node)
        if inner is not None:
            return self._convert(inner, state).as_nullable()
        if isinstance(node, UnionNode) and node.is_anonymous:
            return self._resolve_union(node, state)
        return self._convert(node, state)

    def _resolve_union(self, node: UnionNode, state: _ResolutionState) -> TypeRef:
        kind = state.context.kind
        if kind not in (OwnerKind.PARAM, OwnerKind.FIELD):
            raise UnnamedUnionError(f"Unexpected union without name: {type_expression(node)}", node.source_path)

        variants = supported_variants(node)
        # Erased generic lists would make array overloads indistinguishable
        num_arrays = sum(1 for v in variants if isinstance(v, ArrayNode))
        fixed_arrays = kind == OwnerKind.PARAM and num_arrays > 1

        resolved = [self._convert(v, state, fixed_arrays) for v in variants]
        # A field holding an object literal is typed as its class, e.g. Object|Array<Object>
        if kind == OwnerKind.FIELD and state.custom_type is not None:
            return state.custom_type
        name = self.target.object_type if kind == OwnerKind.FIELD else ""
        return TypeRef(kind=TypeKind.UNION, name=name, variants=resolved)

    def _convert(self, node: TypeNode | None, state: _ResolutionState, fixed_arrays: bool = False) -> TypeRef:
        if node is None:
            return TypeRef(name=self.target.void)

        if isinstance(node, PrimitiveNode):
            if node.name == "null":
                raise UnsupportedTypeShapeError("Unexpected null type outside of a union", node.source_path)
            return TypeRef(name=self.target.primitive(node.name))

        if isinstance(node, ArrayNode):
            element = self._convert(node.element, state, fixed_arrays)
            if fixed_arrays:
                return TypeRef(name=self.target.array_of(element.name))
            return TypeRef(name=self.target.list_of(element.name))

        if isinstance(node, MapNode):
            if node.name == "Object":
                expression = type_expression(node)
                if expression not in _SUPPORTED_OBJECT_MAPS:
                    raise UnsupportedTypeShapeError(f"Unexpected object type: {expression}", node.source_path)
            key = self._convert(node.key, state)
            value = self._convert(node.value, state)
            return TypeRef(name=self.target.map_of(key.name, value.name))

        if isinstance(node, GenericNode):
            if node.name == "Promise" and len(node.args) == 1:
                return self._convert(node.args[0], state, fixed_arrays)
            raise UnsupportedTypeShapeError(f"Missing mapping for {type_expression(node)}", node.source_path)

        if isinstance(node, FunctionNode):
            return self._convert_function(node, state)

        if isinstance(node, UnionNode):
            return self._convert_nested_union(node, state)

        if isinstance(node, ObjectLiteralNode):
            return self._materialize_class(node, state)

        raise UnsupportedTypeShapeError(f"Unknown type node {type(node).__name__}", node.source_path)

    def _convert_function(self, node: FunctionNode, state: _ResolutionState) -> TypeRef:
        if node.args is None or len(node.args) != 1:
            raise UnsupportedTypeShapeError(f"Missing mapping for {type_expression(node)}", node.source_path)
        arg = self._convert(node.args[0], state)
        if node.return_type is None:
            return TypeRef(name=self.target.consumer_of(arg.name))
        if isinstance(node.return_type, PrimitiveNode) and node.return_type.name == "boolean":
            return TypeRef(name=self.target.predicate_of(arg.name))
        raise UnsupportedTypeShapeError(f"Missing mapping for {type_expression(node)}", node.source_path)

    def _convert_nested_union(self, node: UnionNode, state: _ResolutionState) -> TypeRef:
        if not node.is_anonymous:
            enum = self.registry.create_enum(node)
            return TypeRef(kind=TypeKind.ENUM, name=enum.name, scope=Scope.GLOBAL)
        if state.context.kind == OwnerKind.FIELD:
            return TypeRef(name=self.target.object_type)
        raise UnnamedUnionError(f"Unexpected union without name: {type_expression(node)}", node.source_path)

    def _materialize_class(self, node: ObjectLiteralNode, state: _ResolutionState) -> TypeRef:
        if state.custom_type is not None:
            return state.custom_type

        context = state.context
        is_global = context.kind in (OwnerKind.METHOD, OwnerKind.FIELD) or (
            context.kind == OwnerKind.PARAM and context.name != "options"
        )
        if is_global:
            name = self.config.custom_type_names.get(context.name, to_title(context.name))
            self.registry.create_class(
                name,
                node,
                Scope.GLOBAL,
                lambda literal: self._resolve_fields(literal, context, name),
                is_return_type=context.kind == OwnerKind.METHOD,
            )
            ref = TypeRef(kind=TypeKind.CLASS, name=name, scope=Scope.GLOBAL)
        else:
            name = to_title(context.parent_name) + to_title(context.name)
            self.registry.create_class(
                name,
                node,
                Scope.OWNER_LOCAL,
                lambda literal: self._resolve_fields(literal, context, name),
                owner=context.interface,
            )
            ref = TypeRef(kind=TypeKind.CLASS, name=name, scope=Scope.OWNER_LOCAL, owner=context.interface)

        state.custom_type = ref
        return ref

    def _resolve_fields(self, literal: ObjectLiteralNode, context: OwnerContext, class_name: str) -> list[FieldDef]:
        fields = []
        for prop in literal.properties:
            field_context = context.for_field(prop.source_path, prop.name, class_name)
            fields.append(
                FieldDef(
                    name=prop.name,
                    type_ref=self.resolve(prop.type_node, field_context),
                    is_required=prop.is_required,
                    comment=prop.comment,
                )
            )
        return fields
