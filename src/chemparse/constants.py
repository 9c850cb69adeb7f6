"""Shared constants."""

from pathlib import Path

# Absolute tolerance for comparing reactant and product masses.
BALANCE_TOLERANCE = 1e-6

ARROW = "->"

DATA_DIR = Path(__file__).resolve().parent / "data"
DEFAULT_TABLE_PATH = DATA_DIR / "elements.csv"
