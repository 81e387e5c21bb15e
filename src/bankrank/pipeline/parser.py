"""TableParser: heuristic parsing of the LBR fixed-width bank table.

The release has no machine-readable schema, so rows are recognised by
line-level rules. A rule is a pure function ``line -> ParsedRow | None``.
Rules are grouped into passes:

    Pass 1 (strict):  primary_row
    Pass 2 (relaxed): relaxed_row, only if pass 1 found nothing

Within a pass the first rule that matches a line wins. Magnitudes are
integers in the report's own unit (millions USD); no unit conversion
happens here.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from bs4 import BeautifulSoup

from bankrank.models import Entity

logger = logging.getLogger(__name__)

# Noise filters
MIN_ROW_LENGTH = 50
MIN_ASSETS = 10000
MIN_NAME_LENGTH = 3
RELAXED_MIN_ROW_LENGTH = 100
RELAXED_NAME_WIDTH = 40

HEADER_MARKERS = ("Bank Name", "---")

_TRAILING_AMOUNT = re.compile(r"(\d{1,3}(?:,\d{3})*)\s*$")
_LEADING_NAME = re.compile(r"^([A-Z\s/]+?)(?:\s+\d+\s+)")
_ANY_AMOUNT = re.compile(r"\d{1,3}(?:,\d{3})*")
_THOUSANDS_AMOUNT = re.compile(r"\d{2,3},\d{3}")


@dataclass(frozen=True)
class ParsedRow:
    """A candidate table row before ranking."""

    name: str
    value: int


LineRule = Callable[[str], Optional[ParsedRow]]


def parse_amount(token: str) -> int:
    """Parse '1,234,567' into 1234567."""
    return int(token.replace(",", ""))


def primary_row(line: str) -> ParsedRow | None:
    """Strict rule: uppercase name before the rank column, assets at line end."""
    if not line.strip() or any(marker in line for marker in HEADER_MARKERS):
        return None
    if len(line) <= MIN_ROW_LENGTH:
        return None

    amount = _TRAILING_AMOUNT.search(line)
    if not amount:
        return None
    name = _LEADING_NAME.match(line)
    if not name:
        return None

    bank_name = name.group(1).strip()
    assets = parse_amount(amount.group(1))
    if assets <= MIN_ASSETS or len(bank_name) <= MIN_NAME_LENGTH:
        return None
    return ParsedRow(name=bank_name, value=assets)


def relaxed_row(line: str) -> ParsedRow | None:
    """Relaxed rule: fixed-width name prefix, last thousands-grouped number."""
    if len(line) <= RELAXED_MIN_ROW_LENGTH or not _THOUSANDS_AMOUNT.search(line):
        return None

    bank_name = line[:RELAXED_NAME_WIDTH].strip()
    amounts = _ANY_AMOUNT.findall(line)
    if not bank_name or not amounts:
        return None

    assets = parse_amount(amounts[-1])
    if assets <= MIN_ASSETS:
        return None
    return ParsedRow(name=bank_name, value=assets)


DEFAULT_PASSES: tuple[tuple[LineRule, ...], ...] = (
    (primary_row,),
    (relaxed_row,),
)


def extract_report_text(body: str) -> str:
    """Return the text to parse from a raw report body.

    The release page wraps its table in ``<pre>`` blocks; when present, their
    text (with HTML entities decoded) is returned. Any other body is returned
    unchanged.
    """
    if "<pre" not in body.lower():
        return body
    soup = BeautifulSoup(body, "html.parser")
    blocks = soup.find_all("pre")
    if not blocks:
        return body
    return "\n".join(block.get_text() for block in blocks)


class TableParser:
    """Parses report text into ranked entities.

    Usage:
        parser = TableParser()
        banks = parser.parse(report_text)
        if not banks:
            banks = fallback_banks()

    Args:
        passes: Ordered passes, each an ordered sequence of line rules
    """

    def __init__(self, passes: Sequence[Sequence[LineRule]] = DEFAULT_PASSES) -> None:
        self.passes = passes

    def parse(self, raw_text: str) -> list[Entity]:
        """Parse ``raw_text``; returns an empty list if no pass finds rows."""
        lines = raw_text.splitlines()

        for pass_number, rules in enumerate(self.passes, start=1):
            rows = self._run_pass(lines, rules)
            if rows:
                logger.info("Parsed %d bank rows (pass %d)", len(rows), pass_number)
                return [
                    Entity(rank=rank, name=row.name, value=row.value)
                    for rank, row in enumerate(rows, start=1)
                ]
            logger.debug("Pass %d found no rows", pass_number)

        logger.warning("No bank rows found in %d lines", len(lines))
        return []

    @staticmethod
    def _run_pass(lines: list[str], rules: Sequence[LineRule]) -> list[ParsedRow]:
        rows: list[ParsedRow] = []
        for line_number, line in enumerate(lines, start=1):
            for rule in rules:
                try:
                    row = rule(line)
                except Exception as e:
                    logger.debug(
                        "Line %d skipped by %s: %s",
                        line_number, getattr(rule, "__name__", rule), e,
                    )
                    continue
                if row is not None:
                    rows.append(row)
                    break
        return rows
