"""
Pipeline - API schema to language bindings generator.

This module provides a multi-phase architecture for generating
interface bindings from an API schema:

1. Phase 1 (Preprocessor): Filter the raw tree for the target language
2. Phase 2 (Parser): Parse the tree into a Schema AST
3. Phase 3 (Analyzer): Resolve types, register nominal types and derive overloads into IR
4. Phase 4 (Backend): Render IR into source files with Jinja2 templates
5. Phase 5 (Writer): Write all files atomically once the run succeeded
"""

from __future__ import annotations

from .config import GeneratorConfig, OutputConfig, OutputMode, TypeOverride
from .errors import (
    BindingGenerationError,
    DuplicateNominalTypeError,
    GeneratedCodeError,
    OverrideMismatchError,
    SchemaShapeError,
    UnnamedUnionError,
    UnsupportedLanguageError,
    UnsupportedTypeShapeError,
)
from .generator import BindingGenerator
from .writer import AtomicWriter

__all__ = [
    "BindingGenerator",
    "GeneratorConfig",
    "OutputConfig",
    "OutputMode",
    "TypeOverride",
    "AtomicWriter",
    "BindingGenerationError",
    "DuplicateNominalTypeError",
    "GeneratedCodeError",
    "OverrideMismatchError",
    "SchemaShapeError",
    "UnnamedUnionError",
    "UnsupportedLanguageError",
    "UnsupportedTypeShapeError",
]
