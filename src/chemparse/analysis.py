"""Formula and equation analysis over parse trees.

The formula walk keeps at most one element symbol pending while it waits to
see whether an index follows. A group takes its multiplier from the index
node right after it and its contents are walked again with the product of
all enclosing multipliers, so ``Ca3(PO4)2`` yields ``P: 2`` and ``O: 8``.
"""

from __future__ import annotations

from typing import MutableMapping, Sequence

from chemparse import grammar
from chemparse.errors import (
    InvalidCoefficientFormat,
    InvalidFormula,
    InvalidIndexFormat,
    ParsingError,
)
from chemparse.models import Equation, Formula
from chemparse.periodic_table import PeriodicTable


def analyze_formula(tree: grammar.Branch, periodic_table: PeriodicTable) -> Formula:
    """Count the atoms of a formula tree and compute its molecular mass.

    Args:
        tree: A ``Formula`` node (or any node whose children are elements,
            groups and indices).
        periodic_table: Table used to validate symbols and look up masses.

    Returns:
        The analyzed ``Formula``.

    Raises:
        InvalidFormula: A symbol is not in the periodic table.
        InvalidIndexFormat: An index is not a positive integer.
    """
    counts: dict[str, int] = {}
    _accumulate(tree.text, tree.children, periodic_table, counts, 1)

    mass = sum(count * periodic_table[symbol].atomic_mass for symbol, count in counts.items())
    return Formula(formula=tree.text, elements=counts, mass=mass)


def _accumulate(
    formula: str,
    children: Sequence[grammar.Node],
    periodic_table: PeriodicTable,
    counts: MutableMapping[str, int],
    multiplier: int,
) -> None:
    pending: str | None = None

    for position, node in enumerate(children):
        if isinstance(node, grammar.Element):
            if node.symbol not in periodic_table:
                raise InvalidFormula(formula, node.symbol)
            if pending is not None:
                counts[pending] = counts.get(pending, 0) + multiplier
            pending = node.symbol

        elif isinstance(node, grammar.Group):
            if pending is not None:
                counts[pending] = counts.get(pending, 0) + multiplier
                pending = None
            group_multiplier = 1
            if position + 1 < len(children):
                following = children[position + 1]
                if isinstance(following, grammar.Index):
                    group_multiplier = _positive_int(following.text, InvalidIndexFormat)
            _accumulate(
                formula, node.children, periodic_table, counts, multiplier * group_multiplier
            )

        elif isinstance(node, grammar.Index):
            # An index after a group was already applied by the group branch.
            if pending is not None:
                index = _positive_int(node.text, InvalidIndexFormat)
                counts[pending] = counts.get(pending, 0) + index * multiplier
                pending = None

    if pending is not None:
        counts[pending] = counts.get(pending, 0) + multiplier


def analyze_equation(tree: grammar.Equation, periodic_table: PeriodicTable) -> Equation:
    """Resolve both sides of an equation tree.

    Raises:
        ParsingError: The tree does not hold exactly one reactants and one
            products subtree.
        InvalidCoefficientFormat: A coefficient is not a positive integer.
        InvalidFormula: A formula uses a symbol missing from the table.
        InvalidIndexFormat: A formula index is not a positive integer.
    """
    reactant_trees = grammar.children_of(tree.children, "reactants")
    product_trees = grammar.children_of(tree.children, "products")
    if len(reactant_trees) != 1 or len(product_trees) != 1:
        raise ParsingError("equation", tree.text)

    reactants, reactant_formulas = _analyze_side(reactant_trees[0], periodic_table)
    products, product_formulas = _analyze_side(product_trees[0], periodic_table)

    return Equation(
        equation=tree.text,
        reactants=reactants,
        products=products,
        reactant_formulas=reactant_formulas,
        product_formulas=product_formulas,
    )


def _analyze_side(
    side: grammar.Branch, periodic_table: PeriodicTable
) -> tuple[dict[str, int], dict[str, Formula]]:
    coefficients: dict[str, int] = {}
    formulas: dict[str, Formula] = {}
    coefficient = 1

    for node in side.children:
        if isinstance(node, grammar.Coefficient):
            coefficient = _positive_int(node.text, InvalidCoefficientFormat)
        elif isinstance(node, grammar.Formula):
            formula = analyze_formula(node, periodic_table)
            # A repeated formula keeps the coefficient of its last occurrence.
            coefficients[node.text] = coefficient
            formulas[node.text] = formula
            coefficient = 1

    return coefficients, formulas


def _positive_int(token: str, error: type[ValueError]) -> int:
    if not (token.isascii() and token.isdigit()) or token.startswith("0"):
        raise error(token)
    return int(token)
