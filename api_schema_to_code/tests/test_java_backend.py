from unittest import TestCase

from api_schema_to_code.pipeline.analyzer import (
    ApiIR,
    BuilderDef,
    ClassShape,
    FieldShape,
    GeneratedEnum,
    InterfaceDef,
    ListenerDef,
    OverloadDef,
    ParamDef,
)
from api_schema_to_code.pipeline.backends import JavaBackend
from api_schema_to_code.pipeline.backends.java_backend import format_comment, javadoc
from api_schema_to_code.pipeline.config import GeneratorConfig


class TestJavadoc(TestCase):
    def test_empty_text_renders_nothing(self):
        self.assertEqual(javadoc(""), "")

    def test_block(self):
        text = "Use `page.click`.\n\nNOTE: ends with */"
        self.assertEqual(
            javadoc(text, "  "),
            "  /**\n   * Use {@code page.click}.\n   *\n   * <strong>NOTE:</strong> ends with *\\/\n   */",
        )

    def test_format_comment(self):
        self.assertEqual(format_comment("Intro.\n\nDetails."), "Intro.\n\n<p> Details.")
        self.assertEqual(format_comment("Intro.\n```js\nawait page.click();\n```\n"), "Intro.")
        self.assertEqual(format_comment("Intro.\n> Quoted."), "Intro.\nQuoted.")


class TestJavaBackend(TestCase):
    """Test rendering of declaration units"""

    def setUp(self):
        config = GeneratorConfig(java_package="org.example.api")
        self.backend = JavaBackend(config)

    def test_enum_file(self):
        ir = ApiIR(enums=[GeneratedEnum("Media", ["SCREEN", "PRINT"])])
        files = self.backend.generate(ir)
        self.assertEqual(
            files["options/Media.java"],
            "package org.example.api.options;\n\npublic enum Media {\n  SCREEN,\n  PRINT\n}\n",
        )

    def test_class_file(self):
        shape = ClassShape(
            name="Geolocation",
            fields=[FieldShape("latitude", "double", "Latitude."), FieldShape("accuracy", "Double")],
            constructor_params=[ParamDef("latitude", "double")],
            builders=[BuilderDef("withAccuracy", "accuracy", [ParamDef("accuracy", "double")])],
        )
        files = self.backend.generate(ApiIR(classes=[shape]))
        self.assertEqual(
            files["options/Geolocation.java"],
            "package org.example.api.options;\n"
            "\n"
            "import java.util.*;\n"
            "\n"
            "public class Geolocation {\n"
            "  /**\n"
            "   * Latitude.\n"
            "   */\n"
            "  public double latitude;\n"
            "  public Double accuracy;\n"
            "\n"
            "  public Geolocation(double latitude) {\n"
            "    this.latitude = latitude;\n"
            "  }\n"
            "  public Geolocation withAccuracy(double accuracy) {\n"
            "    this.accuracy = accuracy;\n"
            "    return this;\n"
            "  }\n"
            "}\n",
        )

    def test_class_referencing_interface_imports_base_package(self):
        shape = ClassShape(name="Binding", fields=[FieldShape("frame", "Frame")], is_return_type=True)
        ir = ApiIR(interfaces=[InterfaceDef(name="Frame")], classes=[shape])
        text = self.backend.generate(ir)["options/Binding.java"]
        self.assertIn("import org.example.api.*;\n", text)

    def test_interface_file(self):
        interface = InterfaceDef(
            name="Dialog",
            comment="A dialog.",
            super_interfaces=["AutoCloseable"],
            listeners=[ListenerDef("Close", "Consumer<Dialog>")],
            methods=[
                OverloadDef("accept", params=[], delegate_args=["null"], comment="Accepts."),
                OverloadDef("accept", params=[ParamDef("promptText", "String", "Text.")], comment="Accepts."),
                OverloadDef("type", return_type="DialogType"),
                OverloadDef("dismiss", signature="void dismiss();"),
            ],
        )
        ir = ApiIR(interfaces=[interface], enums=[GeneratedEnum("DialogType", ["ALERT"])], generation_comment="// banner")
        self.assertEqual(
            self.backend.generate(ir)["Dialog.java"],
            "// banner\n"
            "package org.example.api;\n"
            "\n"
            "import org.example.api.options.*;\n"
            "import java.util.*;\n"
            "import java.util.function.Consumer;\n"
            "\n"
            "/**\n"
            " * A dialog.\n"
            " */\n"
            "public interface Dialog extends AutoCloseable {\n"
            "\n"
            "  void onClose(Consumer<Dialog> handler);\n"
            "  void offClose(Consumer<Dialog> handler);\n"
            "\n"
            "  /**\n"
            "   * Accepts.\n"
            "   */\n"
            "  default void accept() {\n"
            "    accept(null);\n"
            "  }\n"
            "  /**\n"
            "   * Accepts.\n"
            "   *\n"
            "   * @param promptText Text.\n"
            "   */\n"
            "  void accept(String promptText);\n"
            "  DialogType type();\n"
            "  void dismiss();\n"
            "}\n",
        )

    def test_nested_classes_are_indented(self):
        nested = ClassShape(
            name="AcceptOptions",
            fields=[FieldShape("timeout", "Double")],
            builders=[BuilderDef("withTimeout", "timeout", [ParamDef("timeout", "double")])],
            is_public=False,
        )
        text = self.backend.generate(ApiIR(interfaces=[InterfaceDef(name="Dialog", nested_classes=[nested])]))["Dialog.java"]
        self.assertIn(
            "public interface Dialog {\n"
            "  class AcceptOptions {\n"
            "    public Double timeout;\n"
            "\n"
            "    public AcceptOptions withTimeout(double timeout) {\n"
            "      this.timeout = timeout;\n"
            "      return this;\n"
            "    }\n"
            "  }\n"
            "}\n",
            text,
        )

    def test_license_header(self):
        backend = JavaBackend(GeneratorConfig(license_header="/* Licensed under MIT */\n"))
        text = backend.generate(ApiIR(enums=[GeneratedEnum("Media", ["SCREEN"])]))["options/Media.java"]
        self.assertTrue(text.startswith("/* Licensed under MIT */\n\npackage com.microsoft.playwright.options;\n"))

    def test_optional_builder_wraps_value(self):
        shape = ClassShape(
            name="Options",
            fields=[FieldShape("viewport", "Optional<Viewport>")],
            builders=[BuilderDef("withViewport", "viewport", [ParamDef("viewport", "Viewport")], wrap_optional=True)],
        )
        text = self.backend.generate(ApiIR(classes=[shape]))["options/Options.java"]
        self.assertIn("    this.viewport = Optional.ofNullable(viewport);\n", text)
