"""
Schema preprocessor.

Runs on the raw JSON tree before parsing: drops nodes that are not
available in the target language and applies per-language overrides
declared under a node's `langs` key:

    {"langs": {"only": ["java"], "aliases": {"java": "newName"}, "types": {"java": {...}}}}

The tree is mutated in place. Aliases must be applied before any path is
computed, which is why this pass runs before the parser.
"""

from __future__ import annotations

import logging
from typing import Any

from ..errors import SchemaShapeError

logger = logging.getLogger(__name__)


class SchemaPreprocessor:
    """Filters and rewrites the raw schema tree for one target language."""

    def __init__(self, language: str):
        self.language = language
        self.removed = 0

    def process(self, tree: Any) -> Any:
        """
        Filter the tree in place.

        Args:
            tree: Raw schema tree (lists, dicts and scalars)

        Returns:
            The same tree object, filtered
        """
        self._filter(tree)
        logger.debug("Preprocessor removed %d node(s) not available in %s", self.removed, self.language)
        return tree

    def _filter(self, json: Any) -> None:
        if isinstance(json, list):
            kept = []
            for item in json:
                if self.is_supported(item):
                    self._filter(item)
                    kept.append(item)
                else:
                    self.removed += 1
            json[:] = kept
        elif isinstance(json, dict):
            alias = self._alias(json)
            if alias is not None:
                json["name"] = alias
            self._override_type(json)
            for key in list(json.keys()):
                value = json[key]
                if self.is_supported(value):
                    self._filter(value)
                else:
                    self.removed += 1
                    del json[key]

    def is_supported(self, json: Any) -> bool:
        """Check whether a node is available in the target language."""
        if not isinstance(json, dict):
            return True
        langs = json.get("langs")
        if not isinstance(langs, dict) or "only" not in langs:
            return True
        only = langs["only"]
        if not isinstance(only, list):
            raise SchemaShapeError(f"'langs.only' must be a list, got {only!r}", json.get("name", ""))
        # An empty allow-list does not restrict anything
        return not only or self.language in only

    def _alias(self, json: dict[str, Any]) -> str | None:
        langs = json.get("langs")
        if not isinstance(langs, dict) or "aliases" not in langs:
            return None
        aliases = langs["aliases"]
        if not isinstance(aliases, dict):
            raise SchemaShapeError(f"'langs.aliases' must be an object, got {aliases!r}", json.get("name", ""))
        alias = aliases.get(self.language)
        if alias is None:
            return None
        if not isinstance(alias, str) or not alias:
            raise SchemaShapeError(f"Alias for {self.language} must be a non-empty string, got {alias!r}", json.get("name", ""))
        return alias

    def _override_type(self, json: dict[str, Any]) -> None:
        langs = json.get("langs")
        if not isinstance(langs, dict) or "types" not in langs:
            return
        types = langs["types"]
        if not isinstance(types, dict):
            raise SchemaShapeError(f"'langs.types' must be an object, got {types!r}", json.get("name", ""))
        override = types.get(self.language)
        if override is None:
            return
        if isinstance(override, str):
            override = {"name": override}
        if not isinstance(override, dict) or not isinstance(override.get("name"), str):
            raise SchemaShapeError(f"Type override for {self.language} has no name: {override!r}", json.get("name", ""))
        json["type"] = override
