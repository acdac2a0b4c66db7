from unittest import TestCase

from api_schema_to_code.pipeline.analyzer import FieldDef, GeneratedClass, NominalTypeRegistry, Scope, TypeRef
from api_schema_to_code.pipeline.analyzer.registry import unwrap_object_literal
from api_schema_to_code.pipeline.errors import DuplicateNominalTypeError, SchemaShapeError, UnnamedUnionError
from api_schema_to_code.pipeline.schema_ast import SchemaParser


def parse(data):
    return SchemaParser().parse_type(data, "Page.click.arg")


def literal(*names, type_name="string"):
    return {"name": "Object", "properties": [{"name": n, "type": {"name": type_name}, "required": True} for n in names]}


def string_fields(node):
    return [FieldDef(p.name, TypeRef(name="String"), p.is_required) for p in node.properties]


class TestEnums(TestCase):
    def setUp(self):
        self.registry = NominalTypeRegistry()

    def test_values_are_mapped(self):
        node = parse({"name": "ColorScheme", "union": [{"name": '"dark"'}, {"name": "'no-preference'"}]})
        enum = self.registry.create_enum(node)
        self.assertEqual(enum.values, ["DARK", "NO_PREFERENCE"])
        self.assertIs(self.registry.get_global("ColorScheme"), enum)

    def test_unnamed_union_raises(self):
        with self.assertRaises(UnnamedUnionError):
            self.registry.create_enum(parse({"name": "", "union": [{"name": '"a"'}]}))

    def test_null_value_raises(self):
        with self.assertRaises(SchemaShapeError):
            self.registry.create_enum(parse({"name": "State", "union": [{"name": '"a"'}, {"name": "null"}]}))

    def test_non_identifier_value_raises(self):
        with self.assertRaises(SchemaShapeError):
            self.registry.create_enum(parse({"name": "Size", "union": [{"name": '"1px"'}]}))

    def test_colliding_values_raise(self):
        with self.assertRaises(SchemaShapeError):
            self.registry.create_enum(parse({"name": "State", "union": [{"name": '"a-b"'}, {"name": '"a_b"'}]}))

    def test_same_values_are_shared(self):
        data = {"name": "LoadState", "union": [{"name": '"load"'}]}
        first = self.registry.create_enum(parse(data))
        second = self.registry.create_enum(parse(data))
        self.assertIs(first, second)

    def test_enum_and_class_with_same_name_raise(self):
        self.registry.create_class("Media", parse(literal("type")), Scope.GLOBAL, string_fields)
        with self.assertRaises(DuplicateNominalTypeError):
            self.registry.create_enum(parse({"name": "Media", "union": [{"name": '"screen"'}]}))


class TestClasses(TestCase):
    def setUp(self):
        self.registry = NominalTypeRegistry()

    def test_global_class_is_registered_once(self):
        first = self.registry.create_class("Geolocation", parse(literal("latitude")), Scope.GLOBAL, string_fields)
        second = self.registry.create_class("Geolocation", parse(literal("latitude")), Scope.GLOBAL, string_fields)
        self.assertIs(first, second)
        self.assertEqual(self.registry.global_classes(), [first])

    def test_global_class_conflict_raises(self):
        self.registry.create_class("Geolocation", parse(literal("latitude")), Scope.GLOBAL, string_fields)
        with self.assertRaises(DuplicateNominalTypeError) as cm:
            self.registry.create_class("Geolocation", parse(literal("longitude")), Scope.GLOBAL, string_fields)
        self.assertIn("Geolocation", str(cm.exception))

    def test_comments_do_not_make_a_conflict(self):
        documented = GeneratedClass("Point", [FieldDef("x", TypeRef(name="double"), True, "x coordinate")])
        bare = GeneratedClass("Point", [FieldDef("x", TypeRef(name="double"), True, "")])
        self.registry.register_class(documented)
        self.assertIs(self.registry.register_class(bare), documented)

    def test_owner_local_first_writer_wins(self):
        # Later definitions under the same owner and name are not compared
        first = self.registry.create_class("ClickOptions", parse(literal("button")), Scope.OWNER_LOCAL, string_fields, owner="Page")
        second = self.registry.create_class("ClickOptions", parse(literal("delay")), Scope.OWNER_LOCAL, string_fields, owner="Page")
        self.assertIs(first, second)
        self.assertEqual([f.name for f in second.fields], ["button"])

    def test_owner_local_classes_are_per_owner(self):
        self.registry.create_class("ClickOptions", parse(literal("button")), Scope.OWNER_LOCAL, string_fields, owner="Page")
        self.registry.create_class("ClickOptions", parse(literal("delay")), Scope.OWNER_LOCAL, string_fields, owner="Frame")
        self.assertEqual([f.name for f in self.registry.local_classes("Frame")[0].fields], ["delay"])
        self.assertEqual(self.registry.global_classes(), [])

    def test_registration_order_is_kept(self):
        for name in ("Viewport", "Proxy", "Position"):
            self.registry.create_class(name, parse(literal("x")), Scope.GLOBAL, string_fields)
        self.assertEqual([c.name for c in self.registry.global_classes()], ["Viewport", "Proxy", "Position"])


class TestUnwrapObjectLiteral(TestCase):
    def test_follows_containers(self):
        node = parse({"name": "", "union": [{"name": "null"}, {"name": "Array", "templates": [literal("name")]}]})
        self.assertEqual(unwrap_object_literal(node).properties[0].name, "name")

    def test_non_literal_returns_none(self):
        self.assertIsNone(unwrap_object_literal(parse({"name": "string"})))

    def test_named_union_raises(self):
        with self.assertRaises(SchemaShapeError):
            unwrap_object_literal(parse({"name": "State", "union": [{"name": '"a"'}]}))

    def test_map_raises(self):
        with self.assertRaises(SchemaShapeError):
            unwrap_object_literal(parse({"name": "Map", "templates": [{"name": "string"}, literal("x")]}))
