import unittest
from unittest import TestCase

from schema_compiler.config import CompilerConfig
from schema_compiler.utils import (
    class_member_name,
    class_property_name,
    interface_property_name,
    member_access,
    parse_literal,
    property_key,
    split_names,
    strip_interface_marker,
    to_typescript_literal,
    to_upper_snake_case,
)


class TestCompilerConfig(TestCase):
    def test_defaults(self):
        config = CompilerConfig()
        self.assertEqual(config.merged_interface_suffix, "Merged")
        self.assertEqual(config.anonymous_interface_prefix, "IAnonymousInterface")
        self.assertEqual(config.indent_size, 4)
        self.assertTrue(config.emit_merged_interfaces)
        self.assertTrue(config.legacy_naming_conventions)

    def test_from_dict_ignores_unknown_keys(self):
        config = CompilerConfig.from_dict({"indent_size": 2, "emit_type_aliases": False, "unknown": 1})
        self.assertEqual(config.indent_size, 2)
        self.assertFalse(config.emit_type_aliases)
        self.assertFalse(hasattr(config, "unknown"))

    def test_to_dict_round_trip(self):
        config = CompilerConfig(merged_interface_suffix="Flat", add_generation_comment=False)
        self.assertEqual(CompilerConfig.from_dict(config.to_dict()), config)

    def test_merged_name(self):
        self.assertEqual(CompilerConfig().merged_name("IServer"), "IServerMerged")
        self.assertEqual(CompilerConfig(merged_interface_suffix="Flat").merged_name("IServer"), "IServerFlat")


class TestNaming(TestCase):
    def test_strip_interface_marker(self):
        self.assertEqual(strip_interface_marker("IMyMessage"), "MyMessage")
        self.assertEqual(strip_interface_marker("MyMessage"), "MyMessage")
        self.assertEqual(strip_interface_marker("Item"), "Item")

    def test_upper_snake_case(self):
        self.assertEqual(to_upper_snake_case("myProperty"), "MY_PROPERTY")
        self.assertEqual(to_upper_snake_case("MyMessage"), "MY_MESSAGE")
        self.assertEqual(to_upper_snake_case("HOST"), "H_O_S_T")

    def test_property_names_from_dependencies(self):
        self.assertEqual(interface_property_name("IMyMessage"), "myMessage")
        self.assertEqual(interface_property_name("TPort"), "tPort")
        self.assertEqual(class_property_name("IMyMessage"), "MY_MESSAGE")

    def test_class_member_name(self):
        self.assertEqual(class_member_name("myProperty"), "MY_PROPERTY")
        self.assertEqual(class_member_name("MY_PROPERTY"), "MY_PROPERTY")
        self.assertEqual(class_member_name("HOST"), "HOST")

    def test_member_access(self):
        self.assertEqual(member_access("obj", "host"), "obj.host")
        self.assertEqual(member_access("obj", "content-type"), "obj['content-type']")

    def test_split_names(self):
        self.assertEqual(split_names("IA, IB,"), ["IA", "IB"])
        self.assertEqual(split_names(["IA"]), ["IA"])
        self.assertEqual(split_names(None), [])


class TestLiterals(TestCase):
    def test_parse_literal(self):
        self.assertEqual(parse_literal("'text'"), (True, "text"))
        self.assertEqual(parse_literal("42"), (True, 42))
        self.assertEqual(parse_literal("-1.5"), (True, -1.5))
        self.assertEqual(parse_literal("true"), (True, True))
        self.assertEqual(parse_literal("null"), (True, None))
        self.assertFalse(parse_literal("TPort")[0])

    def test_typescript_literal(self):
        self.assertEqual(to_typescript_literal("it's"), "'it\\'s'")
        self.assertEqual(to_typescript_literal(None), "null")
        self.assertEqual(to_typescript_literal(False), "false")
        self.assertEqual(to_typescript_literal(8080), "8080")
        self.assertEqual(to_typescript_literal(float("inf")), "Infinity")
        self.assertEqual(to_typescript_literal(float("-inf")), "-Infinity")
        self.assertEqual(to_typescript_literal(float("nan")), "NaN")
        self.assertEqual(to_typescript_literal([1, "a"]), "[1, 'a']")
        self.assertEqual(to_typescript_literal({"a": 1, "b-c": True}), "{ a: 1, 'b-c': true }")
        self.assertEqual(to_typescript_literal({}), "{}")

    def test_property_key(self):
        self.assertEqual(property_key("host"), "host")
        self.assertEqual(property_key("content-type"), "'content-type'")


if __name__ == "__main__":
    unittest.main()
