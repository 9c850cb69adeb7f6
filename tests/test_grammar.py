import unittest
from concurrent.futures import ThreadPoolExecutor

from chemparse import grammar
from chemparse.errors import ParsingError


class TestElementRule(unittest.TestCase):
    def test_valid_symbols(self):
        self.assertEqual(grammar.parse("H", "element"), grammar.Element("H"))
        self.assertEqual(grammar.parse("Li", "element").symbol, "Li")

    def test_invalid_symbols(self):
        for text in ("2", "h", "", "Na2"):
            with self.assertRaises(ParsingError):
                grammar.parse(text, "element")


class TestNumberRules(unittest.TestCase):
    def test_index(self):
        self.assertEqual(grammar.parse("2", "index").text, "2")
        self.assertEqual(grammar.parse("12", "index").text, "12")

    def test_zero_and_leading_zero_rejected(self):
        for rule in ("index", "coefficient"):
            for text in ("0", "02", "H"):
                with self.assertRaises(ParsingError):
                    grammar.parse(text, rule)

    def test_coefficient(self):
        self.assertEqual(grammar.parse("10", "coefficient"), grammar.Coefficient("10"))


class TestFormulaRule(unittest.TestCase):
    def test_children_in_order(self):
        tree = grammar.parse("CH2O", "formula")
        self.assertEqual(tree.text, "CH2O")
        self.assertEqual(
            [(node.kind, node.text) for node in tree.children],
            [("element", "C"), ("element", "H"), ("index", "2"), ("element", "O")],
        )

    def test_group_index_is_next_sibling(self):
        tree = grammar.parse("(CO2)4", "formula")
        group, index = tree.children
        self.assertIsInstance(group, grammar.Group)
        self.assertEqual(group.text, "(CO2)")
        self.assertEqual([node.text for node in group.children], ["C", "O", "2"])
        self.assertEqual(index, grammar.Index("4"))

    def test_nested_groups(self):
        tree = grammar.parse("Al2(Si2O5)(OH)4", "formula")
        self.assertEqual(
            [node.kind for node in tree.children],
            ["element", "index", "group", "group", "index"],
        )
        self.assertTrue(grammar.parse("Ca5(PO4)3(OH)", "formula"))
        inner = grammar.parse("(N(CH3)2)3", "formula").children[0]
        self.assertEqual([node.kind for node in inner.children], ["element", "group", "index"])

    def test_invalid_formulas(self):
        for text in ("2O2", "h2o", "H2 O", "H0", "(H2O", "((H2O)", "()", "H2O "):
            with self.assertRaises(ParsingError):
                grammar.parse(text, "formula")

    def test_group_rule(self):
        self.assertEqual(grammar.parse("(H2O)", "group").text, "(H2O)")
        tree = grammar.parse("(CO2)4", "group")
        self.assertEqual(tree.text, "(CO2)4")
        group, index = tree.children
        self.assertEqual(group.text, "(CO2)")
        self.assertEqual(index, grammar.Index("4"))
        with self.assertRaises(ParsingError):
            grammar.parse("(CO2)0", "group")
        with self.assertRaises(ParsingError):
            grammar.parse("CO2 4", "group")


class TestEquationRule(unittest.TestCase):
    def test_sides(self):
        tree = grammar.parse("2H2 + O2 -> 2H2O", "equation")
        self.assertEqual(tree.text, "2H2 + O2 -> 2H2O")
        reactants, products = grammar.children_of(tree.children, "reactants") + grammar.children_of(
            tree.children, "products"
        )
        self.assertEqual(reactants.text, "2H2 + O2")
        self.assertEqual(
            [node.kind for node in reactants.children if node.kind != "whitespace"],
            ["coefficient", "formula", "formula"],
        )
        self.assertEqual(products.text, "2H2O")

    def test_whitespace_around_separators(self):
        self.assertTrue(grammar.parse("2HCl+2Na->2NaCl+H2", "equation"))
        self.assertTrue(grammar.parse("2HCl  +\t2Na  ->  2NaCl +  H2", "equation"))

    def test_invalid_equations(self):
        for text in (
            "2 + O2 -> 2H2O",
            "2 HCl + 2Na -> 2NaCl + H2",
            "2HCl + 2Na = 2NaCl + H2",
            "H2 + O2",
            "-> H2O",
            "H2 -> ",
        ):
            with self.assertRaises(ParsingError):
                grammar.parse(text, "equation")

    def test_sides_as_start_rules(self):
        self.assertTrue(grammar.parse("2H2O", "reactants"))
        self.assertTrue(grammar.parse("2HCl+2Na", "products"))
        for text in ("2 + O2", "2cl + 2h2", "na2", "2 HCl"):
            with self.assertRaises(ParsingError):
                grammar.parse(text, "reactants")


class TestWhitespaceRule(unittest.TestCase):
    def test_single_character(self):
        self.assertEqual(grammar.parse(" ", "whitespace"), grammar.Whitespace(" "))
        with self.assertRaises(ParsingError):
            grammar.parse("_", "whitespace")


class TestThreadedParsing(unittest.TestCase):
    def test_parallel_callers_get_identical_trees(self):
        texts = ["Cu2(OH)2CO3", "(N(CH3)2)3", "Ca5(PO4)3(OH)", "H2O"] * 25
        expected = [grammar.parse(text, "formula") for text in texts]
        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(lambda text: grammar.parse(text, "formula"), texts))
        self.assertEqual(results, expected)


class TestGrammarSource(unittest.TestCase):
    def test_only_reachable_rules(self):
        source = grammar.grammar_source("element")
        self.assertIn("ELEMENT", source)
        self.assertNotIn("NUMBER", source)
        self.assertNotIn("formula", source)

    def test_unknown_rule(self):
        with self.assertRaises(ValueError):
            grammar.grammar_source("molecule")

    def test_error_carries_rule_and_text(self):
        with self.assertRaises(ParsingError) as caught:
            grammar.parse("h2o", "formula")
        self.assertEqual(caught.exception.kind, "formula")
        self.assertEqual(caught.exception.text, "h2o")
        self.assertEqual(str(caught.exception), "Failed to parse formula: h2o")


if __name__ == '__main__':
    unittest.main()
