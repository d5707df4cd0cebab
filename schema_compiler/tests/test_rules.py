import unittest
from unittest import TestCase

from schema_compiler.errors import RuleSyntaxError
from schema_compiler.expression import UNDEFINED, Rule, typeof


class TestRuleEvaluation(TestCase):
    def test_range(self):
        rule = Rule.parse("value > 20 && value < 30")
        self.assertTrue(rule.evaluate(25))
        self.assertFalse(rule.evaluate(31))

    def test_typeof_and_length(self):
        rule = Rule.parse("typeof value === 'string' && value.length > 2")
        self.assertTrue(rule.evaluate("abc"))
        self.assertFalse(rule.evaluate("ab"))
        self.assertFalse(rule.evaluate(5))

    def test_runtime_error_is_false(self):
        self.assertFalse(Rule.parse("value.length > 0").evaluate(None))

    def test_integer_check(self):
        rule = Rule.parse("value % 1 === 0")
        self.assertTrue(rule.evaluate(3))
        self.assertFalse(rule.evaluate(2.5))

    def test_loose_and_strict_equality(self):
        self.assertTrue(Rule.parse("value == null").evaluate(None))
        self.assertTrue(Rule.parse("value == null").evaluate(UNDEFINED))
        self.assertFalse(Rule.parse("value == null").evaluate(0))
        self.assertTrue(Rule.parse("value == '1'").evaluate(1))
        self.assertFalse(Rule.parse("value === '1'").evaluate(1))

    def test_booleans_are_not_numbers(self):
        self.assertFalse(Rule.parse("value === 1").evaluate(True))
        self.assertTrue(Rule.parse("typeof value === 'boolean'").evaluate(False))

    def test_unary_and_arithmetic(self):
        self.assertTrue(Rule.parse("!value").evaluate(""))
        self.assertTrue(Rule.parse("-value < 0").evaluate(5))
        self.assertTrue(Rule.parse("value * 2 + 1 === 7").evaluate(3))
        self.assertTrue(Rule.parse("value + 'x' === 'ax'").evaluate("a"))

    def test_division_by_zero(self):
        self.assertTrue(Rule.parse("value / 0 > 1000").evaluate(3))
        self.assertFalse(Rule.parse("value / 0 % 2 === 1").evaluate(3))
        self.assertFalse(Rule.parse("value % 0 === 0").evaluate(3))

    def test_or_short_circuits(self):
        rule = Rule.parse("value === null || value.length === 0")
        self.assertTrue(rule.evaluate(None))
        self.assertTrue(rule.evaluate(""))
        self.assertFalse(rule.evaluate("a"))

    def test_typeof(self):
        self.assertEqual(typeof("a"), "string")
        self.assertEqual(typeof(1.5), "number")
        self.assertEqual(typeof(True), "boolean")
        self.assertEqual(typeof(None), "object")
        self.assertEqual(typeof({}), "object")
        self.assertEqual(typeof(UNDEFINED), "undefined")


class TestRuleText(TestCase):
    def test_render_replaces_value_tokens_only(self):
        rule = Rule.parse("value > 0 && value !== 'value'")
        self.assertEqual(rule.render("obj.port"), "obj.port > 0 && obj.port !== 'value'")

    def test_conjunction(self):
        rule = Rule.conjunction(Rule.parse("value > 0"), Rule.parse("value < 10"))
        self.assertEqual(str(rule), "(value > 0) && (value < 10)")
        self.assertTrue(rule.evaluate(5))
        self.assertFalse(rule.evaluate(10))

    def test_syntax_errors(self):
        for text in ["", "   ", "value >", "foo > 1", "value.name", "value # 1", "(value > 1"]:
            with self.subTest(text=text):
                with self.assertRaises(RuleSyntaxError):
                    Rule.parse(text)


if __name__ == "__main__":
    unittest.main()
