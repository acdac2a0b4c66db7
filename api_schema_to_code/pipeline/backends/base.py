"""
Base class for code generation backends.

Defines the interface that all language-specific backends must implement.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from pathlib import Path

import jinja2

from ..analyzer.ir_nodes import ApiIR, ParamDef
from ..config import GeneratorConfig


class CodeBackend(ABC):
    """Abstract base class for code generation backends."""

    # Template directory name
    TEMPLATE_LANG: str = ""

    # File extension
    FILE_EXTENSION: str = ""

    # Line comment marker
    COMMENT_PREFIX: str = "//"

    def __init__(self, config: GeneratorConfig):
        """
        Initialize the backend.

        Args:
            config: Generator configuration
        """
        self.config = config
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        template_dir = Path(__file__).parent.parent.parent / "templates" / self.TEMPLATE_LANG
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            lstrip_blocks=True,
            trim_blocks=True,
            keep_trailing_newline=True,
        )
        # Add custom filters
        self.jinja_env.filters["join_params"] = self._join_params

        self.prefix_template = self.jinja_env.get_template(f"prefix.{self.FILE_EXTENSION}.jinja2")
        self.interface_template = self.jinja_env.get_template(f"interface.{self.FILE_EXTENSION}.jinja2")
        self.class_template = self.jinja_env.get_template(f"class.{self.FILE_EXTENSION}.jinja2")
        self.enum_template = self.jinja_env.get_template(f"enum.{self.FILE_EXTENSION}.jinja2")

    @abstractmethod
    def generate(self, ir: ApiIR) -> dict[str, str]:
        """
        Generate source files from IR.

        Args:
            ir: The intermediate representation

        Returns:
            Mapping of relative file path to file content
        """

    def file_name(self, type_name: str, subdirectory: str = "") -> str:
        name = f"{type_name}.{self.FILE_EXTENSION}"
        return f"{subdirectory}/{name}" if subdirectory else name

    @staticmethod
    def _join_params(params: list[ParamDef]) -> str:
        return ", ".join(f"{p.type_name} {p.name}" for p in params)

    @staticmethod
    def identifiers(texts: list[str]) -> set[str]:
        """All identifier tokens appearing in the given type spellings."""
        found: set[str] = set()
        for text in texts:
            found.update(re.findall(r"[A-Za-z_][A-Za-z0-9_]*", text))
        return found
