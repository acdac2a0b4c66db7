"""
IR (Intermediate Representation) node definitions.

These nodes represent the resolved API surface, ready for rendering:
resolved type references, generated nominal types (classes and enums) and
the declaration units derived from interfaces.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum


class TypeKind(Enum):
    """Kind of resolved type."""

    BUILTIN = "builtin"  # int, String, List<...>, Consumer<...>
    CLASS = "class"  # A generated or overridden class
    ENUM = "enum"  # A generated enum
    UNION = "union"  # Anonymous union expanded into overloads/builders


class Scope(Enum):
    """Namespace of a nominal type."""

    GLOBAL = "global"
    OWNER_LOCAL = "owner_local"


@dataclass
class TypeRef:
    """A resolved type reference."""

    kind: TypeKind = TypeKind.BUILTIN
    name: str = ""  # Target language spelling

    # For nominal types
    scope: Scope = Scope.GLOBAL
    owner: str | None = None  # Interface holding an owner-local type

    is_nullable: bool = False

    # Supported variants of an anonymous union, in declaration order
    variants: list[TypeRef] = field(default_factory=list)

    @property
    def is_union(self) -> bool:
        return self.kind == TypeKind.UNION

    def as_nullable(self) -> TypeRef:
        return replace(self, is_nullable=True)


@dataclass
class FieldDef:
    """A field of a generated class."""

    name: str = ""
    type_ref: TypeRef | None = None
    is_required: bool = False
    comment: str = ""

    def signature(self) -> tuple[str, bool, str, bool]:
        """Structural identity used to compare two definitions of a class."""
        type_ref = self.type_ref or TypeRef()
        return (self.name, self.is_required, type_ref.name, type_ref.is_nullable)


@dataclass
class GeneratedEnum:
    """An enum synthesized from a named union of string literals."""

    name: str = ""
    values: list[str] = field(default_factory=list)
    source_path: str = ""


@dataclass
class GeneratedClass:
    """A class synthesized from an object literal."""

    name: str = ""
    fields: list[FieldDef] = field(default_factory=list)
    scope: Scope = Scope.GLOBAL
    owner: str | None = None
    source_path: str = ""

    # Classes only ever returned by methods get no constructor or builders
    is_return_type: bool = False

    def signature(self) -> list[tuple[str, bool, str, bool]]:
        return [f.signature() for f in self.fields]


NominalType = GeneratedClass | GeneratedEnum


@dataclass
class ParamDef:
    """A rendered parameter: name and target spelling of its type."""

    name: str = ""
    type_name: str = ""
    comment: str = ""


@dataclass
class OverloadDef:
    """One public method signature."""

    name: str = ""
    return_type: str = "void"
    params: list[ParamDef] = field(default_factory=list)

    # Set for default-delegating overloads: arguments of the delegated call
    delegate_args: list[str] | None = None

    # Set for hand-authored signatures: the complete declaration text
    signature: str | None = None

    comment: str = ""
    return_comment: str | None = None

    @property
    def is_default(self) -> bool:
        return self.delegate_args is not None

    @property
    def returns_value(self) -> bool:
        return self.return_type != "void"


@dataclass
class ListenerDef:
    """Registration pair for an event: on<Event>/off<Event>."""

    event_name: str = ""
    handler_type: str = ""
    comment: str = ""


@dataclass
class BuilderDef:
    """A fluent with<Field> method on a generated class."""

    method_name: str = ""
    field_name: str = ""
    params: list[ParamDef] = field(default_factory=list)

    # Convenience builder: construct this nested class from params and delegate
    nested_class: str | None = None

    # Store the argument wrapped as an optional value
    wrap_optional: bool = False


@dataclass
class FieldShape:
    """A field as declared in the generated class."""

    name: str = ""
    type_name: str = ""
    comment: str = ""


@dataclass
class ClassShape:
    """Declaration unit of a generated class."""

    name: str = ""
    fields: list[FieldShape] = field(default_factory=list)
    constructor_params: list[ParamDef] = field(default_factory=list)
    builders: list[BuilderDef] = field(default_factory=list)
    is_return_type: bool = False
    is_public: bool = True


@dataclass
class InterfaceDef:
    """Declaration unit of an interface."""

    name: str = ""
    comment: str = ""
    super_interfaces: list[str] = field(default_factory=list)
    listeners: list[ListenerDef] = field(default_factory=list)
    methods: list[OverloadDef] = field(default_factory=list)
    nested_classes: list[ClassShape] = field(default_factory=list)


@dataclass
class ApiIR:
    """The complete Intermediate Representation of one run."""

    interfaces: list[InterfaceDef] = field(default_factory=list)

    # Global nominal types, in registration order
    classes: list[ClassShape] = field(default_factory=list)
    enums: list[GeneratedEnum] = field(default_factory=list)

    # Banner placed at the top of every generated file
    generation_comment: str = ""
