import unittest
from unittest import TestCase

from schema_compiler.errors import IllegalConjunctionError
from schema_compiler.expression import BinaryExpressionTree, Operator
from schema_compiler.expression.tree import find_operator


def concatenate(left, right):
    return f"{left}{right}"


def refuse(left, right):
    raise IllegalConjunctionError(left, right)


class Leaf:
    """Cloneable leaf counting its clones."""

    clones = 0

    def __init__(self, name):
        self.name = name

    def clone(self):
        Leaf.clones += 1
        return Leaf(self.name)

    def __str__(self):
        return self.name


class TestParsing(TestCase):
    def test_or_binds_looser_than_and(self):
        tree = BinaryExpressionTree.from_expression("A | B & C")
        self.assertEqual(tree.root.operator, Operator.OR)
        self.assertEqual(tree.root.right.operator, Operator.AND)
        self.assertEqual(str(tree), "A | (B & C)")

    def test_nested_groups(self):
        tree = BinaryExpressionTree.from_expression("((A | B) & C & D) | F & E")
        self.assertEqual(str(tree), "(((A | B) & C) & D) | (F & E)")
        self.assertEqual(list(tree.leaves()), ["A", "B", "C", "D", "F", "E"])

    def test_rightmost_operator_at_equal_depth(self):
        tree = BinaryExpressionTree.from_expression("A | B | C")
        self.assertEqual(tree.root.right.value, "C")
        self.assertEqual(str(tree), "(A | B) | C")

    def test_redundant_parentheses_are_dropped(self):
        tree = BinaryExpressionTree.from_expression("( (A) )")
        self.assertTrue(tree.root.is_leaf)
        self.assertEqual(str(tree), "A")

    def test_find_operator(self):
        self.assertEqual(find_operator("A & B & C | D", Operator.AND), 6)
        self.assertEqual(find_operator("A & B & C | D", Operator.OR), 10)
        self.assertIsNone(find_operator("A & (B | C)", Operator.OR))
        self.assertIsNone(find_operator("A", Operator.AND))

    def test_operators_inside_strings_are_ignored(self):
        tree = BinaryExpressionTree.from_expression("'a|b' | C")
        self.assertEqual(list(tree.leaves()), ["'a|b'", "C"])

    def test_value_mapper_receives_stripped_tokens(self):
        tokens = []
        BinaryExpressionTree.from_expression("( A ) & B", lambda token: tokens.append(token) or token)
        self.assertEqual(tokens, ["A", "B"])

    def test_disjunctive_groups(self):
        tree = BinaryExpressionTree.from_disjunctive_groups([["A", "B"], ["C"]])
        self.assertEqual(str(tree), "(A & B) | C")

    def test_operator_nodes_have_both_children(self):
        tree = BinaryExpressionTree.from_expression("A & (B | C) | D")

        def check(node):
            if node.is_leaf:
                self.assertIsNone(node.left)
                self.assertIsNone(node.right)
            else:
                self.assertIsNotNone(node.left)
                self.assertIsNotNone(node.right)
                check(node.left)
                check(node.right)

        check(tree.root)


class TestTransforms(TestCase):
    def test_map_does_not_mutate(self):
        tree = BinaryExpressionTree.from_expression("A | B")
        mapped = tree.map(str.lower)
        self.assertEqual(str(mapped), "a | b")
        self.assertEqual(str(tree), "A | B")

    def test_clone_clones_every_leaf(self):
        tree = BinaryExpressionTree.from_expression("A & B | C", Leaf)
        Leaf.clones = 0
        clone = tree.clone()
        self.assertEqual(Leaf.clones, 3)
        self.assertEqual(str(clone), str(tree))
        for original, copied in zip(tree.leaves(), clone.leaves()):
            self.assertIsNot(original, copied)

    def test_from_value(self):
        tree = BinaryExpressionTree.from_value("A")
        self.assertEqual(tree.to_disjunctive_array(refuse), ["A"])


class TestDisjunctiveArray(TestCase):
    def test_without_and_returns_leaves_in_order(self):
        tree = BinaryExpressionTree.from_expression("A | (B | C) | D")
        self.assertEqual(tree.to_disjunctive_array(refuse), ["A", "B", "C", "D"])

    def test_cross_product_larger_side_outermost(self):
        tree = BinaryExpressionTree.from_expression("(A | B | C) & (D | E)")
        self.assertEqual(tree.to_disjunctive_array(concatenate), ["AD", "AE", "BD", "BE", "CD", "CE"])

    def test_cross_product_keeps_argument_order(self):
        tree = BinaryExpressionTree.from_expression("(A | B) & (C | D | E)")
        self.assertEqual(tree.to_disjunctive_array(concatenate), ["AC", "BC", "AD", "BD", "AE", "BE"])

    def test_illegal_conjunction_aborts(self):
        tree = BinaryExpressionTree.from_expression("(A | B | C) & (D | E)")
        with self.assertRaises(IllegalConjunctionError):
            tree.to_disjunctive_array(refuse)


if __name__ == "__main__":
    unittest.main()
