import unittest
from unittest import TestCase

from schema_compiler.config import CompilerConfig
from schema_compiler.emitters import OutputCodeLinesFactory
from schema_compiler.emitters.formatter import bracket_balance, format_lines
from schema_compiler.registry import CompilationRegistry


class TestBracketBalance(TestCase):
    def test_counts_all_bracket_kinds(self):
        self.assertEqual(bracket_balance("if (a) {"), 1)
        self.assertEqual(bracket_balance("});"), -2)
        self.assertEqual(bracket_balance("} else {"), 0)
        self.assertEqual(bracket_balance("const list = [1, 2"), 1)

    def test_ignores_strings(self):
        self.assertEqual(bracket_balance("throw new TypeError('missing {');"), 0)
        self.assertEqual(bracket_balance("const s = 'it\\'s {';"), 0)
        self.assertEqual(bracket_balance('const s = "(" + `{`;'), 0)

    def test_ignores_comments(self):
        self.assertEqual(bracket_balance(" * Returns { a }"), 0)
        self.assertEqual(bracket_balance("// if (a) {"), 0)
        self.assertEqual(bracket_balance("/**"), 0)


class TestFormatLines(TestCase):
    def test_indents_by_depth(self):
        lines = ["export class A {", "public static readonly X = {", "create(value: string): string {", "return value;", "},", "};", "}"]
        self.assertEqual(
            format_lines(lines),
            [
                "export class A {",
                "    public static readonly X = {",
                "        create(value: string): string {",
                "            return value;",
                "        },",
                "    };",
                "}",
            ],
        )

    def test_else_is_aligned_with_if(self):
        lines = ["if (a) {", "b();", "} else {", "c();", "}"]
        self.assertEqual(format_lines(lines, indent_size=2), ["if (a) {", "  b();", "} else {", "  c();", "}"])

    def test_blank_lines_are_dropped(self):
        self.assertEqual(format_lines(["", "a;", "   ", "b;"]), ["a;", "b;"])

    def test_doc_comments_keep_their_alignment(self):
        lines = ["export interface A {", "/**", " * Docs", " */", "x: number;", "}"]
        self.assertEqual(
            format_lines(lines),
            ["export interface A {", "    /**", "     * Docs", "     */", "    x: number;", "}"],
        )

    def test_depth_never_goes_negative(self):
        self.assertEqual(format_lines(["}", "}", "a;"]), ["}", "}", "a;"])


class TestOutputCodeLinesFactory(TestCase):
    def test_subscribe_must_be_implemented(self):
        with self.assertRaises(TypeError):
            OutputCodeLinesFactory(CompilationRegistry(), CompilerConfig())


if __name__ == "__main__":
    unittest.main()
