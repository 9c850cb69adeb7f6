"""chemparse core package."""

from chemparse.analysis import analyze_equation, analyze_formula
from chemparse.errors import (
    ChemParseError,
    EquationNotSolvable,
    InvalidCoefficientFormat,
    InvalidElement,
    InvalidFormula,
    InvalidIndexFormat,
    ParsingError,
    PeriodicTableError,
)
from chemparse.models import ElementRecord, Equation, Formula
from chemparse.parser import ChemParser
from chemparse.periodic_table import PeriodicTable

__all__ = [
    "analyze_equation",
    "analyze_formula",
    "ChemParseError",
    "EquationNotSolvable",
    "InvalidCoefficientFormat",
    "InvalidElement",
    "InvalidFormula",
    "InvalidIndexFormat",
    "ParsingError",
    "PeriodicTableError",
    "ElementRecord",
    "Equation",
    "Formula",
    "ChemParser",
    "PeriodicTable",
]
