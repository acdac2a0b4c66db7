"""
Utility functions for the API schema to code generator.
"""

_QUOTES = ("'", '"')


def to_title(name: str) -> str:
    """Upper-case the first character, leaving the rest untouched.

    Examples:
        "click" -> "Click"
        "setViewportSize" -> "SetViewportSize"
    """
    if not name:
        return ""
    return name[0].upper() + name[1:]


def strip_quotes(text: str) -> str:
    """Remove one pair of matching surrounding quotes."""
    if len(text) >= 2 and text[0] in _QUOTES and text[-1] == text[0]:
        return text[1:-1]
    return text


def enum_member_name(literal: str) -> str:
    """Convert a union string literal to an enum member name.

    Examples:
        "'no-preference'" -> "NO_PREFERENCE"
        '"dark"' -> "DARK"
    """
    return strip_quotes(literal).replace("-", "_").upper()
