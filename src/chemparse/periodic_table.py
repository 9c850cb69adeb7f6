"""Periodic table lookups and the CSV loader."""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping

from chemparse.constants import DEFAULT_TABLE_PATH
from chemparse.errors import PeriodicTableError
from chemparse.models import ElementRecord

logger = logging.getLogger(__name__)

COLUMNS = (
    "name",
    "symbol",
    "atomic_number",
    "atomic_mass",
    "density",
    "group",
    "melting_point",
    "boiling_point",
)


class PeriodicTable(Mapping[str, ElementRecord]):
    """Read-only mapping from element symbol to its record."""

    def __init__(self, records: Iterable[ElementRecord]):
        elements: dict[str, ElementRecord] = {}
        for record in records:
            if record.symbol in elements:
                raise PeriodicTableError(f"Duplicate element symbol: {record.symbol}")
            elements[record.symbol] = record
        self._elements = MappingProxyType(elements)

    @classmethod
    def from_csv(cls, path: str | Path) -> PeriodicTable:
        """Load a table from a CSV file with a header row."""
        path = Path(path)
        try:
            with open(path, "r", newline="", encoding="utf-8") as f:
                reader = csv.DictReader(f)
                missing = [c for c in COLUMNS if c not in (reader.fieldnames or ())]
                if missing:
                    raise PeriodicTableError(
                        f"{path}: missing column(s) {', '.join(missing)}"
                    )
                records = [
                    _parse_row(row, line_number)
                    for line_number, row in enumerate(reader, start=2)
                ]
        except (OSError, UnicodeDecodeError, csv.Error) as exc:
            raise PeriodicTableError(f"Cannot read periodic table {path}: {exc}") from exc

        table = cls(records)
        logger.debug("Loaded %d elements from %s", len(table), path)
        return table

    @classmethod
    def default(cls) -> PeriodicTable:
        return cls.from_csv(DEFAULT_TABLE_PATH)

    def get_element(self, symbol: str) -> ElementRecord | None:
        return self._elements.get(symbol)

    def __getitem__(self, symbol: str) -> ElementRecord:
        return self._elements[symbol]

    def __iter__(self) -> Iterator[str]:
        return iter(self._elements)

    def __len__(self) -> int:
        return len(self._elements)


def _parse_row(row: Mapping[str, str | None], line_number: int) -> ElementRecord:
    try:
        record = ElementRecord(
            name=_text(row["name"]),
            symbol=_text(row["symbol"]),
            atomic_number=int(_text(row["atomic_number"])),
            atomic_mass=float(_text(row["atomic_mass"])),
            density=float(_text(row["density"])),
            group=_optional(row.get("group"), int),
            melting_point=_optional(row.get("melting_point"), float),
            boiling_point=_optional(row.get("boiling_point"), float),
        )
    except ValueError as exc:
        raise PeriodicTableError(f"Malformed row on line {line_number}: {exc}") from exc

    if not record.symbol or not record.name:
        raise PeriodicTableError(f"Missing name or symbol on line {line_number}")
    if record.atomic_number < 1 or record.atomic_mass <= 0:
        raise PeriodicTableError(
            f"Non-positive atomic number or mass for {record.symbol} on line {line_number}"
        )
    return record


def _text(value: str | None) -> str:
    return (value or "").strip()


def _optional(value: str | None, convert):
    value = _text(value)
    return convert(value) if value else None
