"""High-level entry points for parsing chemical notation."""

from __future__ import annotations

from chemparse import grammar
from chemparse.analysis import analyze_equation, analyze_formula
from chemparse.errors import EquationNotSolvable, InvalidElement
from chemparse.models import ElementRecord, Equation, Formula
from chemparse.periodic_table import PeriodicTable


class ChemParser:
    """Parse elements, formulas and equations against a periodic table.

    Uses the bundled table when none is given.
    """

    def __init__(self, periodic_table: PeriodicTable | None = None):
        self.periodic_table = (
            periodic_table if periodic_table is not None else PeriodicTable.default()
        )

    def parse_element(self, symbol: str) -> ElementRecord:
        node = grammar.parse(symbol, "element")
        record = self.periodic_table.get_element(node.text)
        if record is None:
            raise InvalidElement(node.text)
        return record

    def parse_formula(self, text: str) -> Formula:
        return analyze_formula(grammar.parse(text, "formula"), self.periodic_table)

    def parse_equation(self, text: str) -> Equation:
        return analyze_equation(grammar.parse(text, "equation"), self.periodic_table)

    def check_equation(self, text: str) -> bool:
        return self.parse_equation(text).is_balanced()

    def solve_equation(self, text: str) -> Equation:
        """Return the equation if it already balances.

        Coefficients are never inferred: an unbalanced equation raises
        ``EquationNotSolvable``.
        """
        equation = self.parse_equation(text)
        if not equation.is_balanced():
            raise EquationNotSolvable(equation.equation)
        return equation
