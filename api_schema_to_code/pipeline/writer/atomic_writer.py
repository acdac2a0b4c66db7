"""
Atomic file writer for safe code generation.

Ensures that file writes are atomic to prevent data corruption
from interrupted operations.
"""

from __future__ import annotations

import logging
import re
import tempfile
from collections.abc import Callable
from pathlib import Path

from ..config import OutputMode
from ..errors import GeneratedCodeError

logger = logging.getLogger(__name__)


class AtomicWriter:
    """Handles atomic file writes with validation.

    Uses a two-phase commit approach:
    1. Write to a temporary file in the same directory
    2. Atomically replace the target file

    A batch of files is validated and checked for collisions as a whole
    before the first one is written, so a failed run leaves the output
    directory untouched.
    """

    def __init__(self, validate_java: Callable[[str], None] | None = None):
        """Initialize the atomic writer.

        Args:
            validate_java: Optional validation function for Java code
        """
        self._validate_java = validate_java or self._default_validate_java

    def write(self, path: Path, content: str, language: str, validate: bool = True) -> None:
        """Write content to file atomically.

        Args:
            path: Target file path
            content: Content to write
            language: Language for validation
            validate: Whether to validate before finalizing

        Raises:
            GeneratedCodeError: If validation fails
            OSError: If file operations fail
        """
        if validate:
            self._validate_content(content, language, path)

        path.parent.mkdir(parents=True, exist_ok=True)

        # Same directory ensures atomic rename on the same filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )
        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)
            temp_path.replace(path)
        except Exception:
            if temp_path.exists():
                try:
                    temp_path.unlink()
                except OSError:
                    logger.warning("Could not remove temporary file %s", temp_path)
            raise

    def write_if_not_exists(self, path: Path, content: str, language: str, validate: bool = True) -> None:
        """Write content only if the file doesn't exist.

        Raises:
            FileExistsError: If the file already exists
            GeneratedCodeError: If validation fails
        """
        if path.exists():
            raise FileExistsError(f"Output file already exists: {path}. Use force mode to overwrite.")
        self.write(path, content, language, validate)

    def write_all(
        self,
        output_dir: Path,
        files: dict[str, str],
        language: str,
        mode: OutputMode = OutputMode.ERROR_IF_EXISTS,
        atomic: bool = True,
    ) -> list[Path]:
        """Write a batch of generated files under output_dir.

        Args:
            output_dir: Root directory of the generated sources
            files: Mapping of relative path to content
            language: Language for validation
            mode: How to handle files that already exist
            atomic: Whether to go through a temporary file for each write

        Returns:
            The written paths, in input order

        Raises:
            FileExistsError: If mode is ERROR_IF_EXISTS and any target exists
            GeneratedCodeError: If any file fails validation
        """
        targets = [(output_dir / relative, content) for relative, content in files.items()]
        for path, content in targets:
            self._validate_content(content, language, path)

        if mode == OutputMode.ERROR_IF_EXISTS:
            existing = [str(path) for path, _ in targets if path.exists()]
            if existing:
                raise FileExistsError(f"Output files already exist: {', '.join(existing)}. Use force mode to overwrite.")

        for path, content in targets:
            if atomic:
                self.write(path, content, language, validate=False)
            else:
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(content, encoding="utf-8")
            logger.debug("Wrote %s", path)
        return [path for path, _ in targets]

    def _validate_content(self, content: str, language: str, path: Path) -> None:
        if language == "java":
            try:
                self._validate_java(content)
            except GeneratedCodeError as e:
                raise GeneratedCodeError(e.message, str(path)) from e

    def _default_validate_java(self, content: str) -> None:
        """Default Java validation.

        Args:
            content: Java code to validate

        Raises:
            GeneratedCodeError: If validation fails
        """
        # Basic structural checks, no full parsing
        if "package " not in content:
            raise GeneratedCodeError("Generated Java code is missing package declaration")

        if "interface " not in content and "class " not in content and "enum " not in content:
            raise GeneratedCodeError("Generated Java code has no type definitions")

        # Comments may quote unbalanced braces
        code = re.sub(r"/\*.*?\*/|//[^\n]*", "", content, flags=re.DOTALL)
        open_braces = code.count("{")
        close_braces = code.count("}")
        if open_braces != close_braces:
            raise GeneratedCodeError(f"Generated Java code has unbalanced braces: {open_braces} open, {close_braces} close")
