"""Report Parser: Broker statement text → list of Trade.

Reads the closed-transactions section of a tab-separated broker export.

Column order (positional):
    0 ticket       1 open time    2 type         3 size
    4 symbol       5 open price   6 stop loss    7 take profit
    8 close time   9 close price  10 commission  11 taxes
    12 swap        13 profit

Parsing is best-effort:
- No closed-transactions section → empty list
- Short rows, ledger rows and cancelled orders are skipped
- Unparsable numbers default to 0
- Any row that still fails is logged and skipped
"""

import logging
import math
from datetime import datetime

from trade_analytics.domain.models import Trade, TradeSide
from trade_analytics.infrastructure.config import ReportFormat, DEFAULT_FORMAT

logger = logging.getLogger(__name__)

# Column positions
COL_TICKET = 0
COL_OPEN_TIME = 1
COL_TYPE = 2
COL_SIZE = 3
COL_SYMBOL = 4
COL_OPEN_PRICE = 5
COL_CLOSE_TIME = 8
COL_CLOSE_PRICE = 9
COL_COMMISSION = 10
COL_SWAP = 12
COL_PROFIT = 13


def parse_number(token: str) -> float:
    """Parse a report number, returning 0.0 when it is not a finite number.

    Space and comma thousands separators are removed first. Text such as
    "nan" or "inf" is treated as unparsable.

    Example:
        >>> parse_number("1 234.50")
        1234.5
        >>> parse_number("n/a")
        0.0
    """
    cleaned = token.replace(" ", "").replace("\u00a0", "").replace(",", "")
    try:
        value = float(cleaned)
    except ValueError:
        return 0.0
    return value if math.isfinite(value) else 0.0


def parse_side(token: str) -> TradeSide:
    """Normalize a report type column to "buy" or "sell"."""
    return "buy" if "buy" in token.lower() else "sell"


class ReportParser:
    """Parser for the closed-transactions section of a broker report.

    Example:
        >>> parser = ReportParser()
        >>> trades = parser.parse(open("statement.txt").read())
    """

    def __init__(self, report_format: ReportFormat = DEFAULT_FORMAT):
        self._format = report_format

    def parse(self, text: str) -> list[Trade]:
        """Parse report text into trades in encountered order."""
        lines = text.splitlines()

        start = self._find_anchor(lines)
        if start is None:
            logger.info("No closed transactions section found")
            return []

        trades = []
        skipped = 0
        # Skip the anchor line and the column header after it
        for number, line in enumerate(lines[start + 2:], start=start + 3):
            if self._is_terminator(line):
                break

            fields = [f.strip() for f in line.split("\t")]
            fields = [f for f in fields if f]
            if len(fields) < self._format.min_fields:
                continue
            if self._is_skipped_entry(line):
                continue

            try:
                trades.append(self.parse_fields(fields))
            except (ValueError, IndexError) as e:
                skipped += 1
                logger.warning("Skipping malformed line %d: %r (%s)", number, line, e)

        logger.debug("Parsed %d trades, skipped %d malformed lines", len(trades), skipped)
        return trades

    def parse_fields(self, fields: list[str]) -> Trade:
        """Map positional fields of one row to a Trade.

        Raises:
            ValueError: If a timestamp or the ticket cannot be parsed
        """
        def number(index: int) -> float:
            return parse_number(fields[index]) if index < len(fields) else 0.0

        return Trade(
            ticket=fields[COL_TICKET],
            open_time=self.parse_timestamp(fields[COL_OPEN_TIME]),
            close_time=self.parse_timestamp(fields[COL_CLOSE_TIME]),
            side=parse_side(fields[COL_TYPE]),
            size=number(COL_SIZE),
            symbol=fields[COL_SYMBOL].upper(),
            open_price=number(COL_OPEN_PRICE),
            close_price=number(COL_CLOSE_PRICE),
            commission=number(COL_COMMISSION),
            swap=number(COL_SWAP),
            profit=number(COL_PROFIT),
        )

    def parse_timestamp(self, token: str) -> datetime:
        """Parse a YYYY.MM.DD HH:MM timestamp as a naive datetime.

        Raises:
            ValueError: If no configured format matches
        """
        token = " ".join(token.split())
        for fmt in self._format.timestamp_formats:
            try:
                return datetime.strptime(token, fmt)
            except ValueError:
                continue
        raise ValueError(f"Unrecognized timestamp: {token!r}")

    def _find_anchor(self, lines: list[str]) -> int | None:
        anchor = self._format.anchor.lower()
        for index, line in enumerate(lines):
            if anchor in line.lower():
                return index
        return None

    def _is_terminator(self, line: str) -> bool:
        lowered = line.lower()
        return any(marker in lowered for marker in self._format.terminators)

    def _is_skipped_entry(self, line: str) -> bool:
        lowered = line.lower()
        return any(marker in lowered for marker in self._format.skip_markers)


def parse_report(text: str, report_format: ReportFormat = DEFAULT_FORMAT) -> list[Trade]:
    """Parse a full broker report into trades.

    Args:
        text: Complete report text
        report_format: Section markers and column rules

    Returns:
        Trades in the order they appear (empty if no section is found)
    """
    return ReportParser(report_format).parse(text)
