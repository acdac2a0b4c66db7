"""
Code generation backends.

Contains language-specific code generators.
"""

from __future__ import annotations

from .base import CodeBackend
from .java_backend import JavaBackend

# Language name -> backend class
BACKENDS: dict[str, type[CodeBackend]] = {
    "java": JavaBackend,
}

__all__ = [
    "BACKENDS",
    "CodeBackend",
    "JavaBackend",
]
