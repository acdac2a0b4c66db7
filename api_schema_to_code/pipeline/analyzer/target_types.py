"""
Target language spelling tables.

The resolver only decides the *shape* of a type; how builtins and
containers are spelled in the target language is looked up here.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..errors import UnsupportedLanguageError


@dataclass(frozen=True)
class TargetTypes:
    """Spelling table for one target language."""

    language: str
    type_map: dict[str, str] = field(default_factory=dict)
    boxed: dict[str, str] = field(default_factory=dict)

    list_template: str = "{}"
    array_template: str = "{}"
    map_template: str = "{}, {}"
    consumer_template: str = "{}"
    predicate_template: str = "{}"
    optional_template: str = "{}"

    void: str = "void"
    int_type: str = "int"
    object_type: str = "object"
    zero_value: str = "0"
    null_value: str = "null"

    def primitive(self, name: str) -> str:
        # Names without a mapping are interfaces or enums declared in the schema
        return self.type_map.get(name, name)

    def box(self, type_name: str) -> str:
        return self.boxed.get(type_name, type_name)

    def list_of(self, element: str) -> str:
        return self.list_template.format(self.box(element))

    def array_of(self, element: str) -> str:
        return self.array_template.format(element)

    def map_of(self, key: str, value: str) -> str:
        return self.map_template.format(self.box(key), self.box(value))

    def consumer_of(self, arg: str) -> str:
        return self.consumer_template.format(self.box(arg))

    def predicate_of(self, arg: str) -> str:
        return self.predicate_template.format(self.box(arg))

    def optional_of(self, type_name: str) -> str:
        return self.optional_template.format(self.box(type_name))

    def sentinel_for(self, type_name: str) -> str:
        """Value passed for an omitted optional argument."""
        return self.zero_value if type_name == self.int_type else self.null_value


JAVA_TYPES = TargetTypes(
    language="java",
    type_map={
        "int": "int",
        "float": "double",
        "boolean": "boolean",
        "string": "String",
        "void": "void",
        "path": "Path",
        "Buffer": "byte[]",
        "URL": "String",
        "RegExp": "Pattern",
        "any": "Object",
        "Serializable": "Object",
        "EvaluationArgument": "Object",
        "Readable": "InputStream",
    },
    boxed={
        "int": "Integer",
        "double": "Double",
        "boolean": "Boolean",
        "void": "Void",
    },
    list_template="List<{}>",
    array_template="{}[]",
    map_template="Map<{}, {}>",
    consumer_template="Consumer<{}>",
    predicate_template="Predicate<{}>",
    optional_template="Optional<{}>",
    void="void",
    int_type="int",
    object_type="Object",
)

TARGET_TYPES: dict[str, TargetTypes] = {
    "java": JAVA_TYPES,
}


def get_target_types(language: str) -> TargetTypes:
    """Look up the spelling table for a language."""
    if language not in TARGET_TYPES:
        raise UnsupportedLanguageError(f"Language not supported: {language}")
    return TARGET_TYPES[language]
