import pytest

from api_schema_to_code.pipeline.analyzer import JAVA_TYPES, get_target_types, type_expression
from api_schema_to_code.pipeline.errors import UnsupportedLanguageError
from api_schema_to_code.pipeline.schema_ast import SchemaParser


def expr(data):
    return type_expression(SchemaParser().parse_type(data, "Page.click.arg"))


@pytest.mark.parametrize(
    "data,expected",
    [
        ({"name": "string"}, "string"),
        ({"name": "Object", "properties": []}, "Object"),
        ({"name": "Array", "templates": [{"name": "string"}]}, "Array<string>"),
        ({"name": "Object", "templates": [{"name": "string"}, {"name": "string"}]}, "Object<string, string>"),
        ({"name": "Promise", "templates": [{"name": "Array", "templates": [{"name": "int"}]}]}, "Promise<Array<int>>"),
        ({"name": "function"}, "function"),
        ({"name": "function", "args": [{"name": "Route"}]}, "function(Route)"),
        ({"name": "function", "args": [{"name": "URL"}], "returnType": {"name": "boolean"}}, "function(URL):boolean"),
    ],
)
def test_type_expression(data, expected):
    assert expr(data) == expected


def test_union_members_are_sorted():
    data = {"name": "", "union": [{"name": "string"}, {"name": "Array", "templates": [{"name": "string"}]}, {"name": "null"}]}
    assert expr(data) == "Array<string>|null|string"


def test_named_union_keeps_name():
    data = {"name": "LoadState", "union": [{"name": '"load"'}, {"name": '"domcontentloaded"'}]}
    assert expr(data) == 'LoadState<"domcontentloaded"|"load">'


class TestTargetTypes:
    """Java spelling table"""

    def test_primitives(self):
        assert JAVA_TYPES.primitive("string") == "String"
        assert JAVA_TYPES.primitive("float") == "double"
        assert JAVA_TYPES.primitive("Buffer") == "byte[]"
        assert JAVA_TYPES.primitive("RegExp") == "Pattern"
        assert JAVA_TYPES.primitive("EvaluationArgument") == "Object"
        # Interface names pass through
        assert JAVA_TYPES.primitive("ElementHandle") == "ElementHandle"

    def test_type_arguments_are_boxed(self):
        assert JAVA_TYPES.list_of("int") == "List<Integer>"
        assert JAVA_TYPES.map_of("String", "boolean") == "Map<String, Boolean>"
        assert JAVA_TYPES.consumer_of("double") == "Consumer<Double>"
        assert JAVA_TYPES.optional_of("int") == "Optional<Integer>"
        assert JAVA_TYPES.array_of("int") == "int[]"

    def test_sentinels(self):
        assert JAVA_TYPES.sentinel_for("int") == "0"
        assert JAVA_TYPES.sentinel_for("Integer") == "null"
        assert JAVA_TYPES.sentinel_for("String") == "null"

    def test_unknown_language(self):
        assert get_target_types("java") is JAVA_TYPES
        with pytest.raises(UnsupportedLanguageError):
            get_target_types("cobol")
