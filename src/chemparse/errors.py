"""Error types raised while parsing chemical notation."""

from __future__ import annotations


class ChemParseError(ValueError):
    """Base class for recoverable validation failures."""


class InvalidElement(ChemParseError):
    def __init__(self, symbol: str) -> None:
        super().__init__(f"Invalid element symbol: {symbol}")
        self.symbol = symbol


class InvalidFormula(InvalidElement):
    """A formula that references a symbol missing from the periodic table."""

    def __init__(self, formula: str, symbol: str) -> None:
        ChemParseError.__init__(
            self,
            f'Invalid chemical formula "{formula}" with invalid element symbol {symbol}',
        )
        self.formula = formula
        self.symbol = symbol


class ParsingError(ChemParseError):
    def __init__(self, kind: str, text: str) -> None:
        super().__init__(f"Failed to parse {kind}: {text}")
        self.kind = kind
        self.text = text


class InvalidIndexFormat(ChemParseError):
    def __init__(self, text: str) -> None:
        super().__init__(f"Invalid index format: {text}")
        self.text = text


class InvalidCoefficientFormat(ChemParseError):
    def __init__(self, text: str) -> None:
        super().__init__(f"Invalid coefficient format: {text}")
        self.text = text


class EquationNotSolvable(ChemParseError):
    """Raised when an unbalanced equation would need new coefficients."""

    def __init__(self, equation: str) -> None:
        super().__init__(
            f"Cannot determine coefficients that balance equation: {equation}"
        )
        self.equation = equation


class PeriodicTableError(ValueError):
    """Raised when periodic table data cannot be loaded."""
