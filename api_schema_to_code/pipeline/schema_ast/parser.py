"""
API schema parser that builds an AST.

Phase 1 of the pipeline: turn the generic JSON tree (already filtered by
the preprocessor) into typed nodes without resolving any type.
"""

from __future__ import annotations

from typing import Any

from ..errors import SchemaShapeError
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
    TypeNode,
    UnionNode,
)


class SchemaParser:
    """Parses the API description into an AST."""

    def parse(self, api: list[dict[str, Any]]) -> ApiSchema:
        """
        Parse the list of interface objects.

        Args:
            api: The preprocessed schema tree (a list of interface objects)

        Returns:
            ApiSchema with one InterfaceNode per entry
        """
        if not isinstance(api, list):
            raise SchemaShapeError(f"Expected a list of interfaces, got {type(api).__name__}")
        schema = ApiSchema()
        for item in api:
            schema.interfaces.append(self._parse_interface(item))
        return schema

    def _parse_interface(self, data: Any) -> InterfaceNode:
        name = self._require_name(data, "")
        interface = InterfaceNode(
            name=name,
            extends=data.get("extends") or None,
            comment=data.get("comment", ""),
            source_path=name,
            raw=data,
        )
        for member in data.get("members", []):
            interface.members.append(self._parse_member(member, name))
        return interface

    def _parse_member(self, data: Any, parent_path: str) -> MemberNode:
        name = self._require_name(data, parent_path)
        path = f"{parent_path}.{name}"
        kind_value = data.get("kind")
        try:
            kind = MemberKind(kind_value)
        except ValueError:
            raise SchemaShapeError(f"Unexpected member kind: {kind_value!r}", path) from None

        member = MemberNode(
            kind=kind,
            name=name,
            type_node=self._parse_optional_type(data.get("type"), path),
            comment=data.get("comment", ""),
            return_comment=data.get("returnComment"),
            is_required=bool(data.get("required", True)),
            source_path=path,
            raw=data,
        )

        for arg in self._require_list(data, "args", path):
            param = self._parse_param(arg, path)
            # An options bag without properties contributes nothing to the signature
            if param.name == "options" and isinstance(param.type_node, ObjectLiteralNode) and not param.type_node.properties:
                continue
            member.params.append(param)
        return member

    def _parse_param(self, data: Any, parent_path: str) -> ParamNode:
        name = self._require_name(data, parent_path)
        path = f"{parent_path}.{name}"
        if data.get("type") is None:
            raise SchemaShapeError("Parameter without type", path)
        return ParamNode(
            name=name,
            type_node=self.parse_type(data["type"], path),
            is_required=bool(data.get("required", False)),
            comment=data.get("comment", ""),
            source_path=path,
            raw=data,
        )

    def _parse_property(self, data: Any, parent_path: str) -> PropertyNode:
        name = self._require_name(data, parent_path)
        path = f"{parent_path}.{name}"
        if data.get("type") is None:
            raise SchemaShapeError("Property without type", path)
        return PropertyNode(
            name=name,
            type_node=self.parse_type(data["type"], path),
            is_required=bool(data.get("required", False)),
            comment=data.get("comment", ""),
            source_path=path,
            raw=data,
        )

    def _parse_optional_type(self, data: Any, path: str) -> TypeNode | None:
        if data is None:
            return None
        return self.parse_type(data, path)

    def parse_type(self, data: Any, path: str) -> TypeNode:
        """
        Parse a type object.

        The type node reuses the path of the member, parameter or property
        it types.

        Args:
            data: The raw type object
            path: Path of the owning member/param/property

        Returns:
            Appropriate TypeNode subclass
        """
        name = self._require_name(data, path, allow_empty=True)

        if "union" in data:
            members = [self.parse_type(item, path) for item in self._require_list(data, "union", path)]
            return UnionNode(name=name, members=members, source_path=path, raw=data)

        if name == "function":
            args = None
            if "args" in data:
                args = [self.parse_type(item, path) for item in self._require_list(data, "args", path)]
            return FunctionNode(
                name=name,
                args=args,
                return_type=self._parse_optional_type(data.get("returnType"), path),
                source_path=path,
                raw=data,
            )

        templates = [self.parse_type(item, path) for item in self._require_list(data, "templates", path)]

        if name == "Array" and templates:
            if len(templates) != 1:
                raise SchemaShapeError(f"Array expects one template argument, got {len(templates)}", path)
            return ArrayNode(name=name, element=templates[0], source_path=path, raw=data)

        if name in ("Map", "Object") and templates:
            if len(templates) != 2:
                raise SchemaShapeError(f"{name} expects two template arguments, got {len(templates)}", path)
            return MapNode(name=name, key=templates[0], value=templates[1], source_path=path, raw=data)

        if name == "Object":
            properties = [self._parse_property(item, path) for item in self._require_list(data, "properties", path)]
            return ObjectLiteralNode(name=name, properties=properties, source_path=path, raw=data)

        if templates:
            return GenericNode(name=name, args=templates, source_path=path, raw=data)

        if not name:
            raise SchemaShapeError("Type without name", path)
        return PrimitiveNode(name=name, source_path=path, raw=data)

    def _require_name(self, data: Any, path: str, allow_empty: bool = False) -> str:
        if not isinstance(data, dict):
            raise SchemaShapeError(f"Expected an object, got {data!r}", path)
        name = data.get("name")
        if not isinstance(name, str) or (not name and not allow_empty):
            raise SchemaShapeError(f"Missing name in {data!r}", path)
        return name

    def _require_list(self, data: dict[str, Any], key: str, path: str) -> list[Any]:
        value = data.get(key)
        if value is None:
            return []
        if not isinstance(value, list):
            raise SchemaShapeError(f"Expected '{key}' to be a list, got {value!r}", path)
        return value
