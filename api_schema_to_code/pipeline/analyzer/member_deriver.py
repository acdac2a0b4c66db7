"""
Member and overload derivation.

The target language has neither union types nor default arguments, so a
method's public surface is expanded here:

- a parameter typed as an anonymous union yields one overload per
  supported variant;
- every optional parameter yields a default-delegating overload that
  drops it (and the optional parameters after it) from the signature.

Both expansions compose: each union overload gets its own set of
default-delegating overloads. Generated classes get a constructor over
their required fields and fluent builder methods for the optional ones.
"""

from __future__ import annotations

from dataclasses import dataclass

from ...utils import to_title
from ..errors import UnsupportedTypeShapeError
from ..schema_ast.nodes import MemberNode, ParamNode
from .ir_nodes import (
    BuilderDef,
    ClassShape,
    FieldDef,
    FieldShape,
    GeneratedClass,
    ListenerDef,
    OverloadDef,
    ParamDef,
    Scope,
    TypeKind,
    TypeRef,
)
from .registry import NominalTypeRegistry
from .target_types import TargetTypes


@dataclass
class ResolvedParam:
    """A parameter together with its resolved type."""

    node: ParamNode
    type_ref: TypeRef

    @property
    def name(self) -> str:
        return self.node.name

    @property
    def is_optional(self) -> bool:
        return self.node.is_optional


class MemberDeriver:
    """Derives overloads, listeners and class shapes from resolved types."""

    def __init__(self, registry: NominalTypeRegistry, target: TargetTypes):
        self.registry = registry
        self.target = target

    # Methods

    def derive_method(self, member: MemberNode, return_type: TypeRef, params: list[ResolvedParam]) -> list[OverloadDef]:
        """
        Compute every public overload of a method.

        Args:
            member: The method node
            return_type: Resolved return type
            params: Parameters in declaration order, with resolved types

        Returns:
            Overloads in output order: for each union variant, the
            default-delegating overloads (last optional first) followed by
            the full signature
        """
        # Single-variant unions render as their only variant
        driver = next((i for i, p in enumerate(params) if p.type_ref.is_union and len(p.type_ref.variants) > 1), None)
        num_overloads = len(params[driver].type_ref.variants) if driver is not None else 1

        overloads = []
        for overload_index in range(num_overloads):
            types = [self._param_type(p, i == driver, overload_index) for i, p in enumerate(params)]
            for position in range(len(params) - 1, -1, -1):
                if params[position].is_optional:
                    overloads.append(self._default_overload(member, return_type, params, types, position))
            overloads.append(
                OverloadDef(
                    name=member.name,
                    return_type=return_type.name,
                    params=[ParamDef(p.name, t, p.node.comment) for p, t in zip(params, types)],
                    comment=member.comment,
                    return_comment=member.return_comment,
                )
            )
        return overloads

    def derive_custom(self, member: MemberNode, signatures: list[str], params: list[ResolvedParam]) -> list[OverloadDef]:
        """Wrap hand-authored signatures; documentation goes on the last one."""
        overloads = []
        for i, signature in enumerate(signatures):
            is_last = i == len(signatures) - 1
            overloads.append(
                OverloadDef(
                    name=member.name,
                    signature=signature,
                    params=[ParamDef(p.name, p.type_ref.name, p.node.comment) for p in params] if is_last else [],
                    comment=member.comment if is_last else "",
                    return_comment=member.return_comment if is_last else None,
                )
            )
        return overloads

    def _param_type(self, param: ResolvedParam, is_driver: bool, overload_index: int) -> str:
        type_ref = param.type_ref
        if not type_ref.is_union:
            return type_ref.name
        if is_driver:
            return type_ref.variants[overload_index].name
        if len(type_ref.variants) == 1:
            return type_ref.variants[0].name
        raise UnsupportedTypeShapeError(
            f"Only one union-typed parameter can produce overloads, '{param.name}' is a second one",
            param.node.source_path,
        )

    def _default_overload(
        self,
        member: MemberNode,
        return_type: TypeRef,
        params: list[ResolvedParam],
        types: list[str],
        omitted: int,
    ) -> OverloadDef:
        signature = []
        args = []
        for i, (param, type_name) in enumerate(zip(params, types)):
            if i == omitted:
                args.append(self.target.sentinel_for(type_name))
                continue
            # Later optionals are supplied by the next longer overload
            if param.is_optional and i > omitted:
                continue
            signature.append(ParamDef(param.name, type_name, param.node.comment))
            args.append(param.name)
        return OverloadDef(
            name=member.name,
            return_type=return_type.name,
            params=signature,
            delegate_args=args,
            comment=member.comment,
            return_comment=member.return_comment,
        )

    # Events

    def derive_listener(self, member: MemberNode, type_ref: TypeRef) -> ListenerDef:
        return ListenerDef(
            event_name=to_title(member.name),
            handler_type=self.target.consumer_of(type_ref.name),
            comment=member.comment,
        )

    # Generated classes

    def derive_class(self, generated: GeneratedClass) -> ClassShape:
        """Compute the declaration unit of a generated class."""
        shape = ClassShape(
            name=generated.name,
            fields=[FieldShape(f.name, self._field_type(f), f.comment) for f in generated.fields],
            is_return_type=generated.is_return_type,
            is_public=generated.scope == Scope.GLOBAL,
        )
        if generated.is_return_type:
            return shape

        shape.constructor_params = [ParamDef(f.name, self._field_type(f)) for f in generated.fields if f.is_required]
        for f in generated.fields:
            if not f.is_required:
                shape.builders.extend(self._builders(f))
        return shape

    def _field_type(self, f: FieldDef) -> str:
        type_ref = f.type_ref or TypeRef(name=self.target.object_type)
        type_name = type_ref.name
        if type_ref.is_nullable:
            type_name = self.target.optional_of(type_name)
        # Optional fields stay unset-able
        if not f.is_required:
            type_name = self.target.box(type_name)
        return type_name

    def _builders(self, f: FieldDef) -> list[BuilderDef]:
        method_name = "with" + to_title(f.name)
        type_ref = f.type_ref or TypeRef(name=self.target.object_type)

        if type_ref.is_union:
            return [
                BuilderDef(method_name, f.name, [ParamDef(f.name, variant.name)], wrap_optional=type_ref.is_nullable)
                for variant in type_ref.variants
            ]

        builders = []
        if type_ref.kind == TypeKind.CLASS:
            nested = self.registry.get_global(type_ref.name)
            if isinstance(nested, GeneratedClass):
                required = [nf for nf in nested.fields if nf.is_required]
                if required:
                    builders.append(
                        BuilderDef(
                            method_name,
                            f.name,
                            [ParamDef(nf.name, self._field_type(nf)) for nf in required],
                            nested_class=nested.name,
                        )
                    )
        builders.append(BuilderDef(method_name, f.name, [ParamDef(f.name, type_ref.name)], wrap_optional=type_ref.is_nullable))
        return builders
