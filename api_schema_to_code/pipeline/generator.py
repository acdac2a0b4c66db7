"""
Binding generator - runs the pipeline phases end to end.
"""

from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Any

from ..cli_utils import reconstruct_command_line
from .analyzer import ApiIR, InterfaceAssembler, get_target_types
from .backends import BACKENDS
from .config import GeneratorConfig
from .errors import UnsupportedLanguageError
from .schema_ast import SchemaParser, SchemaPreprocessor
from .writer import AtomicWriter

logger = logging.getLogger(__name__)


class BindingGenerator:
    """Generates target-language bindings from an API schema tree.

    Phases:
    1. Preprocess: keep nodes for the target language, apply aliases and type overrides
    2. Parse: build typed schema nodes
    3. Analyze: resolve types, register nominal types, derive overloads
    4. Render: produce the text of every file in memory
    5. Write: put all files on disk, only once everything above succeeded
    """

    def __init__(self, schema: list[dict[str, Any]], config: GeneratorConfig | None = None, language: str = "java"):
        """
        Initialize the generator.

        Args:
            schema: Parsed API schema, a list of interface objects
            config: Generator configuration
            language: Target language

        Raises:
            UnsupportedLanguageError: If no backend exists for language
        """
        self.schema = schema
        self.config = config or GeneratorConfig()
        self.language = language
        self.target = get_target_types(language)
        if language not in BACKENDS:
            raise UnsupportedLanguageError(f"No backend for language: {language}")
        self.backend = BACKENDS[language](self.config)

    def analyze(self) -> ApiIR:
        """Run the phases up to the IR."""
        # The preprocessor edits the tree in place
        tree = copy.deepcopy(self.schema)
        SchemaPreprocessor(self.language).process(tree)
        api = SchemaParser().parse(tree)

        ir = InterfaceAssembler(self.config, self.target).assemble(api)
        ir.generation_comment = self._generation_comment()
        return ir

    def generate(self) -> dict[str, str]:
        """
        Generate every file.

        Returns:
            Mapping of relative file path to file content
        """
        files = self.backend.generate(self.analyze())
        logger.info("Generated %d file(s) for %s", len(files), self.language)
        return files

    def write(self, output_dir: Path) -> list[Path]:
        """
        Generate every file and write them under output_dir.

        Nothing is written if generation fails or, in error mode, if any
        output file already exists.
        """
        files = self.generate()
        writer = AtomicWriter()
        return writer.write_all(
            Path(output_dir),
            files,
            self.language,
            mode=self.config.output.mode,
            atomic=self.config.output.atomic_write,
        )

    def _generation_comment(self) -> str:
        """Generate a command line comment for the generated files."""
        if not self.config.add_generation_comment:
            return ""

        from .. import __version__

        try:
            from ..api_schema_to_code import api_schema_to_code as click_command  # noqa

            command_line = reconstruct_command_line(click_command)
        except (ImportError, AttributeError):
            command_line = "api_schema_to_code"

        return f"{self.backend.COMMENT_PREFIX} Generated by api_schema_to_code v{__version__} : {command_line}"
