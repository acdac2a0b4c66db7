"""API Schema to Code Generator

A Python package for generating typed language bindings from an API
description schema. Interfaces become Java interfaces with overloads for
union-typed and optional parameters; object literals and string-literal
unions become option classes and enums.
"""

__version__ = "1.0.0"

from .pipeline import (
    AtomicWriter,
    BindingGenerationError,
    BindingGenerator,
    GeneratorConfig,
    OutputConfig,
    OutputMode,
    TypeOverride,
)

__all__ = [
    "BindingGenerator",
    "GeneratorConfig",
    "OutputConfig",
    "OutputMode",
    "TypeOverride",
    "BindingGenerationError",
    "AtomicWriter",
]
