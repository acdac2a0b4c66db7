"""
Analyzer - Resolves schema types and derives the public API surface.
"""

from __future__ import annotations

from .assembler import InterfaceAssembler
from .ir_nodes import (
    ApiIR,
    BuilderDef,
    ClassShape,
    FieldDef,
    FieldShape,
    GeneratedClass,
    GeneratedEnum,
    InterfaceDef,
    ListenerDef,
    OverloadDef,
    ParamDef,
    Scope,
    TypeKind,
    TypeRef,
)
from .member_deriver import MemberDeriver, ResolvedParam
from .registry import NominalTypeRegistry
from .target_types import JAVA_TYPES, TargetTypes, get_target_types
from .type_expression import type_expression
from .type_resolver import OwnerContext, OwnerKind, TypeResolver

__all__ = [
    "ApiIR",
    "BuilderDef",
    "ClassShape",
    "FieldDef",
    "FieldShape",
    "GeneratedClass",
    "GeneratedEnum",
    "InterfaceAssembler",
    "InterfaceDef",
    "JAVA_TYPES",
    "ListenerDef",
    "MemberDeriver",
    "NominalTypeRegistry",
    "OverloadDef",
    "OwnerContext",
    "OwnerKind",
    "ParamDef",
    "ResolvedParam",
    "Scope",
    "TargetTypes",
    "TypeKind",
    "TypeRef",
    "TypeResolver",
    "get_target_types",
    "type_expression",
]
