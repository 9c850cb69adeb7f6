"""Data structures for elements, formulas and equations."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

import numpy as np

from chemparse.constants import BALANCE_TOLERANCE


@dataclass(frozen=True)
class ElementRecord:
    """A row of the periodic table.

    Attributes:
        name: Full element name.
        symbol: One or two letter case-sensitive symbol.
        atomic_number: Position in the periodic table.
        atomic_mass: Standard atomic weight (u).
        density: Density (g/cm³).
        group: Periodic table group, if assigned.
        melting_point: Melting point (K), if known.
        boiling_point: Boiling point (K), if known.
    """

    name: str
    symbol: str
    atomic_number: int
    atomic_mass: float
    density: float
    group: int | None = None
    melting_point: float | None = None
    boiling_point: float | None = None

    def __str__(self) -> str:
        return (
            f"{self.symbol} ({self.name})\n"
            f"Atomic number: {self.atomic_number}\n"
            f"Atomic mass: {self.atomic_mass}"
        )


@dataclass(frozen=True)
class Formula:
    formula: str
    elements: Mapping[str, int]
    mass: float

    def __post_init__(self) -> None:
        _freeze(self, "elements")

    def __str__(self) -> str:
        return f"{self.formula} \nMass: {self.mass}\nElements: {dict(self.elements)}"


@dataclass(frozen=True)
class Equation:
    """A parsed equation with the coefficient of every formula on each side.

    The formula maps hold the analyzed compositions used for the mass balance;
    they are not part of the equation's identity.
    """

    equation: str
    reactants: Mapping[str, int]
    products: Mapping[str, int]
    reactant_formulas: Mapping[str, Formula] = field(repr=False, compare=False)
    product_formulas: Mapping[str, Formula] = field(repr=False, compare=False)

    def __post_init__(self) -> None:
        for name in ("reactants", "products", "reactant_formulas", "product_formulas"):
            _freeze(self, name)
        for side, coefficients, formulas in (
            ("reactant", self.reactants, self.reactant_formulas),
            ("product", self.products, self.product_formulas),
        ):
            missing = set(coefficients) - set(formulas)
            if missing:
                raise ValueError(
                    f"No {side} formula details for: {', '.join(sorted(missing))}"
                )

    @property
    def reactant_mass(self) -> float:
        return _side_mass(self.reactants, self.reactant_formulas)

    @property
    def product_mass(self) -> float:
        return _side_mass(self.products, self.product_formulas)

    def is_balanced(self) -> bool:
        """Return True when reactant and product masses agree.

        Only total mass is compared. Two sides with different elemental
        composition but equal mass are reported as balanced.
        """
        return abs(self.reactant_mass - self.product_mass) < BALANCE_TOLERANCE

    def __str__(self) -> str:
        return (
            f"{self.equation} \nReactants: {dict(self.reactants)}"
            f"\nProducts: {dict(self.products)}"
        )


def _side_mass(coefficients: Mapping[str, int], formulas: Mapping[str, Formula]) -> float:
    if not coefficients:
        return 0.0
    weights = np.array([coefficients[name] for name in coefficients], dtype=float)
    masses = np.array([formulas[name].mass for name in coefficients], dtype=float)
    return float(np.dot(weights, masses))


def _freeze(instance: object, name: str) -> None:
    # Frozen dataclasses still hold mutable dicts; store a read-only copy.
    object.__setattr__(instance, name, MappingProxyType(dict(getattr(instance, name))))
