import unittest
from unittest import TestCase

from schema_compiler import (
    CompilerConfig,
    DuplicateNameError,
    IllegalConjunctionError,
    NotFoundError,
    RuleSyntaxError,
    SchemaCompiler,
    SchemaSyntaxError,
)
from schema_compiler.emitters.formatter import bracket_balance


def interface(**body):
    return {"types": ["interface"], **body}


def klass(**body):
    return {"types": ["class"], **body}


class TestSchemaCompiler(TestCase):
    def setUp(self):
        self.compiler = SchemaCompiler()

    def test_interface_block(self):
        output = self.compiler.compile_schema(
            {
                "MyInterface": interface(
                    docs=["D"],
                    properties={"myProperty": {"types": [["string"], ["number"]], "keywords": ["optional"], "docs": ["P"]}},
                )
            }
        )
        self.assertEqual(
            output[:9],
            [
                "/**",
                " * D",
                " */",
                "export interface MyInterface {",
                "    /**",
                "     * P",
                "     */",
                "    readonly myProperty?: string | number;",
                "}",
            ],
        )
        self.assertEqual(output[9:12], ["/**", " * D", " */"])
        self.assertEqual(output[12], "export interface MyInterfaceMerged {")

    def test_blocks_follow_registration_order(self):
        output = self.compiler.compile_schema(
            {
                "IServer": interface(properties={"address": {"properties": {"street": "string"}}}),
                "Settings": klass(properties={"server": "IServer"}),
            }
        )
        declarations = [line for line in output if line.startswith("export ")]
        self.assertEqual(
            declarations,
            [
                "export interface IAnonymousInterface0 {",
                "export interface IAnonymousInterface0Merged {",
                "export interface IServer {",
                "export interface IServerMerged {",
                "export class Settings {",
            ],
        )

    def test_class_block(self):
        output = self.compiler.compile_schema({"Settings": klass(properties={"host": {"type": "string", "default": "localhost"}})})
        self.assertEqual(
            output,
            [
                "export class Settings {",
                "    public static readonly HOST = {",
                "        create(value?: string): string {",
                "            const input: any = value;",
                "            if (input === undefined) {",
                "                return 'localhost';",
                "            }",
                "            if (typeof input === 'string') {",
                "                return input;",
                "            }",
                "            throw new TypeError('Settings.HOST does not match string');",
                "        },",
                "        validate(value: unknown): Array<unknown> {",
                "            const input: any = value;",
                "            const errors: Array<unknown> = [];",
                "            if (input !== undefined) {",
                "                if (!(typeof input === 'string')) {",
                "                    errors.push({ path: 'Settings.HOST', description: 'string' });",
                "                }",
                "            }",
                "            return errors;",
                "        },",
                "    };",
                "}",
            ],
        )

    def test_discriminated_alternatives(self):
        output = self.compiler.compile_schema(
            {
                "IX": interface(properties={"a": "string", "b": "string"}),
                "IY": interface(properties={"a": "string", "c": "string"}),
                "Holder": klass(properties={"value": "IX | IY"}),
            }
        )
        stripped = [line.strip() for line in output]
        self.assertIn("if (input.a !== undefined && input.b !== undefined && input.c === undefined) {", stripped)
        self.assertIn("if (input.a !== undefined && input.c !== undefined && input.b === undefined) {", stripped)
        self.assertIn("throw new TypeError('Holder.VALUE does not match IX | IY');", stripped)

    def test_messages_use_declared_interface_names(self):
        output = self.compiler.compile_schema(
            {
                "IX": interface(properties={"a": "string", "b": "string"}),
                "IY": interface(properties={"a": "string", "c": "string"}),
                "IOuter": interface(properties={"value": "IX | IY | null"}),
                "Holder": klass(properties={"outer": "IOuter"}),
            }
        )
        stripped = [line.strip() for line in output]
        self.assertIn("throw new TypeError('Holder.OUTER does not match IOuter');", stripped)
        self.assertIn("throw new TypeError('Holder.OUTER.value does not match (IX | IY) | null');", stripped)
        self.assertFalse([line for line in stripped if line.startswith("throw") and "Merged" in line])

    def test_output_is_balanced(self):
        output = self.compiler.compile_schema(
            {
                "IInner": interface(properties={"x": "number | 'auto'"}),
                "IOuter": interface(properties={"inner": "IInner", "name": {"type": "string", "keywords": ["optional"]}}),
                "Holder": klass(properties={"outer": "IOuter | null"}),
            }
        )
        self.assertEqual(output[-1], "}")
        self.assertEqual(sum(bracket_balance(line) for line in output), 0)
        for line in output:
            indent = len(line) - len(line.lstrip(" "))
            if line.lstrip().startswith("*"):
                indent -= 1
            self.assertEqual(indent % 4, 0, line)

    def test_duplicate_names(self):
        with self.assertRaises(DuplicateNameError):
            self.compiler.compile_schema(
                {"IServer": interface(), "Server": {"types": ["interface", "class"], "properties": {}}}
            )
        with self.assertRaises(DuplicateNameError):
            self.compiler.compile_schema({"IA": interface(), "IAMerged": interface()})

    def test_unknown_reference(self):
        with self.assertRaises(NotFoundError):
            self.compiler.compile_schema({"IA": interface(properties={"b": "IMissing"})})
        with self.assertRaises(NotFoundError):
            self.compiler.compile_schema({"IA": interface(inherits=["IMissing"])})

    def test_illegal_conjunction(self):
        with self.assertRaises(IllegalConjunctionError):
            self.compiler.compile_schema({"IA": interface(properties={"x": "'a' & 'b'"})})

    def test_rule_rejecting_a_literal(self):
        odd = {"types": ["type"], "description": "odd", "kind": "number", "rule": "value / 0 % 2 === 1"}
        with self.assertRaises(IllegalConjunctionError):
            self.compiler.compile_schema({"TOdd": odd, "IA": interface(properties={"x": "TOdd & 3"})})

    def test_constant_and_default_follow_the_declared_type(self):
        with self.assertRaises(IllegalConjunctionError):
            self.compiler.compile_schema({"IA": interface(properties={"x": {"type": "string", "constant": 5}})})
        with self.assertRaises(IllegalConjunctionError):
            self.compiler.compile_schema({"Settings": klass(properties={"x": {"type": "number", "default": "oops"}})})

    def test_invalid_rule(self):
        with self.assertRaises(RuleSyntaxError):
            self.compiler.compile_schema({"TBad": {"types": ["type"], "description": "bad", "kind": "number", "rule": "value >"}})

    def test_invalid_tags(self):
        for tags in [[], ["enum"], ["type", "interface"], "interface"]:
            with self.subTest(tags=tags):
                with self.assertRaises(SchemaSyntaxError):
                    self.compiler.compile_schema({"IA": {"types": tags}})

    def test_schema_must_be_a_dictionary(self):
        with self.assertRaises(SchemaSyntaxError):
            self.compiler.compile_schema(["IA"])

    def test_unknown_naming_convention_is_skipped(self):
        with self.assertLogs("schema_compiler.compiler", level="WARNING") as logs:
            output = self.compiler.compile_schema({"lowercase": {"properties": {}}, "IA": {"properties": {"x": "number"}}})
        self.assertIn("lowercase does not follow any naming convention and is skipped", logs.output[0])
        self.assertIn("export interface IA {", output)

    def test_legacy_naming_conventions_disabled(self):
        compiler = SchemaCompiler(CompilerConfig(legacy_naming_conventions=False))
        with self.assertRaises(SchemaSyntaxError):
            compiler.compile_schema({"IA": {"properties": {"x": "number"}}})

    def test_compilations_are_independent(self):
        schema = {"IA": interface(properties={"x": {"properties": {"y": "number"}}})}
        self.assertEqual(self.compiler.compile_schema(schema), self.compiler.compile_schema(schema))

    def test_custom_names(self):
        compiler = SchemaCompiler(CompilerConfig(merged_interface_suffix="Flat", anonymous_interface_prefix="IInline"))
        output = compiler.compile_schema({"IA": interface(properties={"x": {"properties": {"y": "number"}}})})
        self.assertIn("export interface IInline0Flat {", output)
        self.assertIn("export interface IAFlat {", output)


if __name__ == "__main__":
    unittest.main()
