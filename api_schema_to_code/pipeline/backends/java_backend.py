"""
Java code generation backend.

Renders one interface file per schema interface and one file per global
class or enum in the "options" subpackage.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from ..analyzer.ir_nodes import ApiIR, ClassShape, GeneratedEnum, InterfaceDef, OverloadDef
from .base import CodeBackend

logger = logging.getLogger(__name__)

OPTIONS_PACKAGE = "options"

# Type name -> fully qualified import
JAVA_IMPORTS = {
    "InputStream": "java.io.InputStream",
    "Path": "java.nio.file.Path",
    "Consumer": "java.util.function.Consumer",
    "Predicate": "java.util.function.Predicate",
    "Pattern": "java.util.regex.Pattern",
}

# Always imported: List, Map, Optional, Arrays...
JAVA_UTIL = "java.util.*"


def format_comment(text: str) -> str:
    """Adapt a markdown member description for javadoc."""
    # Code snippets and example headers make no sense in javadoc
    text = re.sub(r"\n```((?<!`)`(?!`)|[^`])+```\n", "", text)
    text = re.sub(r"\nAn example of[^\n]+\n", "", text)
    text = re.sub(r"\nThis example [^\n]+\n", "", text)
    text = text.replace("\nExamples:\n", "")
    text = re.sub(r"\nSee ChromiumBrowser[^\n]+", "\n", text)
    text = text.replace("\n> ", "\n")
    return text.replace("\n\n", "\n\n<p> ")


def javadoc(text: str, indent: str = "") -> str:
    """Render text as a javadoc block, or an empty string for empty text."""
    if not text:
        return ""
    lines = [indent + "/**"]
    for line in text.split("\n"):
        line = (indent + " *" + (" " if line else "") + line).replace("*/", "*\\/")
        line = line.replace("NOTE: ", "<strong>NOTE:</strong> ")
        lines.append(re.sub(r"`([^`]+)`", r"{@code \1}", line))
    lines.append(indent + " */")
    return "\n".join(lines)


class JavaBackend(CodeBackend):
    """Java code generation backend."""

    TEMPLATE_LANG = "java"
    FILE_EXTENSION = "java"

    def generate(self, ir: ApiIR) -> dict[str, str]:
        """Generate Java sources from IR."""
        self.interface_names = {i.name for i in ir.interfaces}
        self.nominal_names = {c.name for c in ir.classes} | {e.name for e in ir.enums}

        files = {}
        for interface in ir.interfaces:
            files[self.file_name(interface.name)] = self._render_interface(interface, ir.generation_comment)
        for shape in ir.classes:
            files[self.file_name(shape.name, OPTIONS_PACKAGE)] = self._render_class_file(shape, ir.generation_comment)
        for enum in ir.enums:
            files[self.file_name(enum.name, OPTIONS_PACKAGE)] = self._render_enum_file(enum, ir.generation_comment)

        logger.info("Rendered %d Java file(s)", len(files))
        return files

    # Files

    def _render_interface(self, interface: InterfaceDef, generation_comment: str) -> str:
        nested = [self._render_class(shape) for shape in interface.nested_classes]
        body = self.interface_template.render(
            interface=interface,
            doc=javadoc(format_comment(interface.comment)),
            listeners=[self._listener_context(listener) for listener in interface.listeners],
            methods=[self._method_context(method) for method in interface.methods],
            nested_classes=nested,
        )

        tokens = self.identifiers(self._interface_type_texts(interface))
        imports = []
        if tokens & self.nominal_names:
            imports.append(f"{self.config.java_package}.{OPTIONS_PACKAGE}.*")
        imports.extend(self._java_imports(tokens))
        return self._prefix(self.config.java_package, imports, generation_comment) + body

    def _render_class_file(self, shape: ClassShape, generation_comment: str) -> str:
        tokens = self.identifiers(self._class_type_texts(shape))
        imports = []
        if tokens & self.interface_names:
            imports.append(f"{self.config.java_package}.*")
        imports.extend(self._java_imports(tokens))
        package = f"{self.config.java_package}.{OPTIONS_PACKAGE}"
        return self._prefix(package, imports, generation_comment) + self._render_class(shape)

    def _render_enum_file(self, enum: GeneratedEnum, generation_comment: str) -> str:
        package = f"{self.config.java_package}.{OPTIONS_PACKAGE}"
        return self._prefix(package, [], generation_comment) + self.enum_template.render(enum=enum)

    def _prefix(self, package: str, imports: list[str], generation_comment: str) -> str:
        return self.prefix_template.render(
            license_header=self.config.license_header,
            generation_comment=generation_comment,
            package=package,
            required_imports=imports,
        )

    def _render_class(self, shape: ClassShape) -> str:
        return self.class_template.render(
            cls=shape,
            access="public " if shape.is_public else "",
            fields=[{"field": f, "doc": javadoc(f.comment, "  ")} for f in shape.fields],
        )

    # Template contexts

    def _listener_context(self, listener) -> dict[str, Any]:
        return {"listener": listener, "doc": javadoc(format_comment(listener.comment), "  ")}

    def _method_context(self, method: OverloadDef) -> dict[str, Any]:
        return {"method": method, "doc": javadoc(self._method_doc(method), "  ")}

    def _method_doc(self, method: OverloadDef) -> str:
        sections = [format_comment(method.comment)]
        has_blank_line = False
        for param in method.params:
            if not param.comment:
                continue
            if not has_blank_line:
                sections.append("")
                has_blank_line = True
            sections.append(f"@param {param.name} {param.comment}")
        if method.return_comment is not None:
            if not has_blank_line:
                sections.append("")
            sections.append(f"@return {method.return_comment}")
        return "\n".join(sections)

    # Imports

    def _java_imports(self, tokens: set[str]) -> list[str]:
        imports = {JAVA_UTIL}
        imports.update(JAVA_IMPORTS[name] for name in tokens if name in JAVA_IMPORTS)
        return sorted(imports)

    def _interface_type_texts(self, interface: InterfaceDef) -> list[str]:
        texts = [listener.handler_type for listener in interface.listeners]
        for method in interface.methods:
            if method.signature is not None:
                texts.append(method.signature)
                continue
            texts.append(method.return_type)
            texts.extend(p.type_name for p in method.params)
        for shape in interface.nested_classes:
            texts.extend(self._class_type_texts(shape))
        return texts

    @staticmethod
    def _class_type_texts(shape: ClassShape) -> list[str]:
        texts = [f.type_name for f in shape.fields]
        for builder in shape.builders:
            texts.extend(p.type_name for p in builder.params)
        return texts
