"""Line-by-line processing of equation files."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence

from chemparse.errors import ChemParseError
from chemparse.models import Equation
from chemparse.parser import ChemParser

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LineResult:
    """Outcome of one input line.

    Exactly one of ``equation`` and ``error`` is set.
    """

    line_number: int
    text: str
    equation: Equation | None = None
    balanced: bool | None = None
    error: ChemParseError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class BatchSummary:
    total: int
    succeeded: int
    failed: int
    balanced: int

    @classmethod
    def from_results(cls, results: Sequence[LineResult]) -> BatchSummary:
        succeeded = sum(1 for r in results if r.ok)
        return cls(
            total=len(results),
            succeeded=succeeded,
            failed=len(results) - succeeded,
            balanced=sum(1 for r in results if r.balanced),
        )


def process_lines(lines: Iterable[str], parser: ChemParser) -> list[LineResult]:
    """Parse every line as an equation, continuing past failures."""
    results: list[LineResult] = []
    for line_number, raw in enumerate(lines, start=1):
        text = raw.rstrip("\r\n")
        try:
            equation = parser.parse_equation(text)
        except ChemParseError as exc:
            logger.warning("Line %d: %s", line_number, exc)
            results.append(LineResult(line_number, text, error=exc))
            continue
        results.append(
            LineResult(line_number, text, equation=equation, balanced=equation.is_balanced())
        )
    return results


def process_file(path: str | Path, parser: ChemParser) -> list[LineResult]:
    """Process each line of ``path``.

    Raises ``OSError`` if the file cannot be read and ``UnicodeDecodeError``
    if it is not UTF-8 text; no line is processed in either case.
    """
    content = Path(path).read_text(encoding="utf-8")
    logger.debug("Processing %s", path)
    return process_lines(content.splitlines(), parser)
