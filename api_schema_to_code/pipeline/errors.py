"""
Errors raised by the binding generator pipeline.

Every error is fatal for the run: it carries the path of the offending
schema node and propagates unchanged to the caller. No partial output is
ever produced once one of these has been raised.
"""

from __future__ import annotations


class BindingGenerationError(Exception):
    """Base class for all generation failures.

    Attributes:
        path: Dot-joined path of the schema node that caused the failure
        message: Human readable description of the problem
    """

    def __init__(self, message: str, path: str = ""):
        self.path = path
        self.message = message
        super().__init__(f"{path}: {message}" if path else message)


class SchemaShapeError(BindingGenerationError):
    """A node lacks a field required for its kind or has a malformed one."""


class OverrideMismatchError(BindingGenerationError):
    """An explicit type override does not match the structural type expression."""

    def __init__(self, path: str, expected: str, found: str):
        self.expected = expected
        self.found = found
        super().__init__(f"Unexpected source type. Expected: {expected}; found: {found}", path)


class DuplicateNominalTypeError(BindingGenerationError):
    """Two global nominal types share a name but differ structurally."""


class UnsupportedTypeShapeError(BindingGenerationError):
    """A type expression has no mapping rule in the target language."""


class UnnamedUnionError(BindingGenerationError):
    """An anonymous union reached a code path that requires a name."""


class UnsupportedLanguageError(BindingGenerationError):
    """The requested target language has no type table or backend."""


class GeneratedCodeError(BindingGenerationError):
    """A rendered file failed the structural checks done before writing it."""
