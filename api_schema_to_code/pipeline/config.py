"""
Configuration for the binding generator pipeline.

All tables here are static data consumed by the analyzer: custom class
names, explicit type overrides, hand-authored method signatures and the
interface allow-lists. A JSON config file can replace any of them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .errors import SchemaShapeError


class OutputMode(str, Enum):
    """Output mode for file generation.

    Controls behavior when an output file already exists.
    """

    ERROR_IF_EXISTS = "error"  # Default: raise error if file exists
    FORCE = "force"  # Overwrite


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        mode: How to handle existing output files
        atomic_write: Whether to use atomic file writes
    """

    mode: OutputMode = OutputMode.ERROR_IF_EXISTS
    atomic_write: bool = True


@dataclass
class TypeOverride:
    """Replaces the structurally derived type at one schema path.

    Attributes:
        source: Expected canonical type expression at that path
        target: Name of the pre-existing type to use instead
        kind: "class" or "enum"
    """

    source: str = ""
    target: str = ""
    kind: str = "class"

    @staticmethod
    def from_dict(path: str, d: dict) -> TypeOverride:
        if not isinstance(d, dict) or "from" not in d or "to" not in d:
            raise SchemaShapeError(f"Type override needs 'from' and 'to': {d!r}", path)
        return TypeOverride(source=d["from"], target=d["to"], kind=d.get("kind", "class"))

    def to_dict(self) -> dict:
        return {"from": self.source, "to": self.target, "kind": self.kind}


def _default_custom_type_names() -> dict[str, str]:
    # Avoids class names that only differ from the property in plurality
    return {
        "cookies": "Cookie",
        "files": "FilePayload",
        "values": "SelectOption",
    }


def _default_custom_signatures() -> dict[str, list[str]]:
    return {
        "Page.setViewportSize": ["void setViewportSize(int width, int height);"],
        "BrowserContext.cookies": [
            "default List<Cookie> cookies() { return cookies((List<String>) null); }",
            "default List<Cookie> cookies(String url) { return cookies(Arrays.asList(url)); }",
            "List<Cookie> cookies(List<String> urls);",
        ],
        "BrowserContext.addCookies": ["void addCookies(List<Cookie> cookies);"],
    }


@dataclass
class GeneratorConfig:
    """Configuration options for binding generation."""

    # Property name -> global class name, for object literals
    custom_type_names: dict[str, str] = field(default_factory=_default_custom_type_names)

    # Node path -> explicit type override
    type_overrides: dict[str, TypeOverride] = field(default_factory=dict)

    # Method path -> hand-authored signatures (empty list suppresses the method)
    custom_signatures: dict[str, list[str]] = field(default_factory=_default_custom_signatures)

    # Interfaces allowed to keep their declared supertype
    allowed_base_interfaces: list[str] = field(default_factory=lambda: ["Browser", "JSHandle", "BrowserContext"])

    # Interfaces that must also implement the resource-closing capability
    auto_closeable_interfaces: list[str] = field(default_factory=lambda: ["Playwright", "Browser", "BrowserContext", "Page"])

    # Package for interfaces; global nominal types go to "<package>.options"
    java_package: str = "com.microsoft.playwright"

    # Add generation comment at top of each file
    add_generation_comment: bool = True

    # Text placed verbatim at the top of each file
    license_header: str = ""

    output: OutputConfig = field(default_factory=OutputConfig)

    @staticmethod
    def from_dict(d: dict) -> GeneratorConfig:
        """Create a config from a dictionary."""
        config = GeneratorConfig()
        for k, v in d.items():
            if k == "type_overrides" and isinstance(v, dict):
                config.type_overrides = {path: TypeOverride.from_dict(path, o) for path, o in v.items()}
            elif k == "output" and isinstance(v, dict):
                mode = v.get("mode", OutputMode.ERROR_IF_EXISTS)
                if isinstance(mode, str):
                    mode = OutputMode(mode)
                config.output = OutputConfig(
                    mode=mode,
                    atomic_write=v.get("atomic_write", True),
                )
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "custom_type_names": self.custom_type_names,
            "type_overrides": {path: o.to_dict() for path, o in self.type_overrides.items()},
            "custom_signatures": self.custom_signatures,
            "allowed_base_interfaces": self.allowed_base_interfaces,
            "auto_closeable_interfaces": self.auto_closeable_interfaces,
            "java_package": self.java_package,
            "add_generation_comment": self.add_generation_comment,
            "license_header": self.license_header,
            "output": {
                "mode": self.output.mode.value,
                "atomic_write": self.output.atomic_write,
            },
        }
