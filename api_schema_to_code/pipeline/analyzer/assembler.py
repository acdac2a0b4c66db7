"""
Interface assembler.

Phase 2 of the pipeline: walks every interface, resolves the types of its
methods, parameters and events, derives their public overloads and
collects the nominal types accumulated by the registry into an ApiIR.
"""

from __future__ import annotations

import logging

from ..config import GeneratorConfig
from ..schema_ast.nodes import ApiSchema, InterfaceNode, MemberKind, MemberNode
from .ir_nodes import ApiIR, InterfaceDef, OverloadDef
from .member_deriver import MemberDeriver, ResolvedParam
from .registry import NominalTypeRegistry
from .target_types import TargetTypes
from .type_resolver import OwnerContext, OwnerKind, TypeResolver

logger = logging.getLogger(__name__)


class InterfaceAssembler:
    """Builds declaration units for interfaces and global nominal types."""

    def __init__(self, config: GeneratorConfig, target: TargetTypes):
        """
        Initialize the assembler.

        Args:
            config: Generator configuration
            target: Spelling table of the target language
        """
        self.config = config
        self.target = target
        self.registry = NominalTypeRegistry()
        self.resolver = TypeResolver(self.registry, config, target)
        self.deriver = MemberDeriver(self.registry, target)

    def assemble(self, schema: ApiSchema) -> ApiIR:
        """
        Analyze the whole schema.

        Interfaces are processed in schema order; global classes and enums
        appear in the IR in the order they were first registered.
        """
        ir = ApiIR()
        for interface in schema.interfaces:
            ir.interfaces.append(self.assemble_interface(interface))

        ir.classes = [self.deriver.derive_class(c) for c in self.registry.global_classes()]
        ir.enums = self.registry.global_enums()
        logger.info(
            "Assembled %d interface(s), %d global class(es), %d enum(s)",
            len(ir.interfaces),
            len(ir.classes),
            len(ir.enums),
        )
        return ir

    def assemble_interface(self, interface: InterfaceNode) -> InterfaceDef:
        interface_def = InterfaceDef(
            name=interface.name,
            comment=interface.comment,
            super_interfaces=self._super_interfaces(interface),
        )

        for member in interface.members:
            if member.kind == MemberKind.EVENT:
                context = OwnerContext(
                    path=member.source_path,
                    kind=OwnerKind.EVENT,
                    name=member.name,
                    parent_name=interface.name,
                    interface=interface.name,
                )
                type_ref = self.resolver.resolve(member.type_node, context)
                interface_def.listeners.append(self.deriver.derive_listener(member, type_ref))
            else:
                # Properties are exposed as methods
                interface_def.methods.extend(self._assemble_method(interface, member))

        interface_def.nested_classes = [self.deriver.derive_class(c) for c in self.registry.local_classes(interface.name)]
        logger.debug("Interface %s: %d method overload(s)", interface.name, len(interface_def.methods))
        return interface_def

    def _assemble_method(self, interface: InterfaceNode, member: MemberNode) -> list[OverloadDef]:
        signatures = self.config.custom_signatures.get(member.source_path)
        if signatures is not None and not signatures:
            logger.debug("Suppressed %s", member.source_path)
            return []

        return_type = self.resolver.resolve(
            member.type_node,
            OwnerContext(
                path=member.source_path,
                kind=OwnerKind.METHOD,
                name=member.name,
                parent_name=interface.name,
                interface=interface.name,
            ),
        )
        params = []
        for param in member.params:
            context = OwnerContext(
                path=param.source_path,
                kind=OwnerKind.PARAM,
                name=param.name,
                parent_name=member.name,
                interface=interface.name,
            )
            params.append(ResolvedParam(param, self.resolver.resolve(param.type_node, context)))

        if signatures:
            return self.deriver.derive_custom(member, signatures, params)
        return self.deriver.derive_method(member, return_type, params)

    def _super_interfaces(self, interface: InterfaceNode) -> list[str]:
        result = []
        if interface.extends and interface.extends in self.config.allowed_base_interfaces:
            result.append(interface.extends)
        if interface.name in self.config.auto_closeable_interfaces:
            result.append("AutoCloseable")
        return result
