import pytest

from api_schema_to_code.pipeline.errors import SchemaShapeError
from api_schema_to_code.pipeline.schema_ast import SchemaPreprocessor


def page(*members):
    return [{"name": "Page", "members": list(members)}]


class TestLanguageFilter:
    """Nodes restricted to other languages are removed"""

    def test_drops_members_for_other_languages(self):
        tree = page(
            {"kind": "method", "name": "click", "langs": {"only": ["java", "python"]}},
            {"kind": "method", "name": "pdf", "langs": {"only": ["python"]}},
            {"kind": "method", "name": "close"},
        )
        preprocessor = SchemaPreprocessor("java")
        preprocessor.process(tree)

        assert [m["name"] for m in tree[0]["members"]] == ["click", "close"]
        assert preprocessor.removed == 1

    def test_empty_allow_list_keeps_node(self):
        tree = page({"kind": "method", "name": "click", "langs": {"only": []}})
        SchemaPreprocessor("java").process(tree)
        assert len(tree[0]["members"]) == 1

    def test_drops_unsupported_object_values(self):
        tree = page(
            {
                "kind": "method",
                "name": "click",
                "type": {"name": "ElementHandle", "langs": {"only": ["csharp"]}},
            }
        )
        SchemaPreprocessor("java").process(tree)
        assert "type" not in tree[0]["members"][0]

    def test_filters_nested_arguments(self):
        tree = page(
            {
                "kind": "method",
                "name": "goto",
                "args": [
                    {"name": "url", "type": {"name": "string"}},
                    {"name": "referer", "type": {"name": "string"}, "langs": {"only": ["js"]}},
                ],
            }
        )
        SchemaPreprocessor("java").process(tree)
        assert [a["name"] for a in tree[0]["members"][0]["args"]] == ["url"]

    def test_malformed_allow_list_raises(self):
        tree = page({"kind": "method", "name": "click", "langs": {"only": "java"}})
        with pytest.raises(SchemaShapeError):
            SchemaPreprocessor("java").process(tree)


class TestAliasesAndTypeOverrides:
    """Per-language renames and type replacements"""

    def test_alias_renames_node(self):
        tree = page({"kind": "method", "name": "continue", "langs": {"aliases": {"java": "resume"}}})
        SchemaPreprocessor("java").process(tree)
        assert tree[0]["members"][0]["name"] == "resume"

    def test_alias_for_other_language_is_ignored(self):
        tree = page({"kind": "method", "name": "continue", "langs": {"aliases": {"python": "continue_"}}})
        SchemaPreprocessor("java").process(tree)
        assert tree[0]["members"][0]["name"] == "continue"

    def test_empty_alias_raises(self):
        tree = page({"kind": "method", "name": "continue", "langs": {"aliases": {"java": ""}}})
        with pytest.raises(SchemaShapeError):
            SchemaPreprocessor("java").process(tree)

    def test_type_override_replaces_type(self):
        arg = {
            "name": "arg",
            "type": {"name": "Object", "properties": []},
            "langs": {"types": {"java": {"name": "Object", "templates": [{"name": "string"}, {"name": "any"}]}}},
        }
        SchemaPreprocessor("java").process([arg])
        assert arg["type"]["templates"][1] == {"name": "any"}

    def test_type_override_given_as_text(self):
        arg = {"name": "arg", "type": {"name": "Buffer"}, "langs": {"types": {"java": "string"}}}
        SchemaPreprocessor("java").process([arg])
        assert arg["type"] == {"name": "string"}

    def test_type_override_without_name_raises(self):
        arg = {"name": "arg", "type": {"name": "Buffer"}, "langs": {"types": {"java": {"union": []}}}}
        with pytest.raises(SchemaShapeError):
            SchemaPreprocessor("java").process([arg])
