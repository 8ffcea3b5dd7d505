"""Unit tests for infrastructure/parsing.py.

Tests verify:
1. Positional columns map to Trade fields
2. Section anchor and terminators are honored
3. Bad rows are skipped without failing the report
"""

import logging
from datetime import datetime

import pytest

from trade_analytics.infrastructure.config import ReportFormat
from trade_analytics.infrastructure.parsing import (
    ReportParser,
    parse_report,
    parse_number,
    parse_side,
)


def _report(*rows: str) -> str:
    return "\n".join([
        "Closed Transactions:",
        "Ticket\tOpen Time\tType\tSize\tItem\tPrice\tS / L\tT / P\tClose Time\tPrice\tCommission\tTaxes\tSwap\tProfit",
        *rows,
        "Closed P/L:\t0.00",
    ])


ROW = "1001\t2024.01.01 09:00\tbuy\t0.10\teurusd\t1.10000\t0.00000\t0.00000\t2024.01.01 10:30\t1.10500\t-0.70\t0.00\t-0.30\t50.00"


# =============================================================================
# Helpers
# =============================================================================

class TestParseNumber:
    """Tests for parse_number."""

    def test_plain(self):
        assert parse_number("-0.70") == -0.70

    def test_thousands_separators(self):
        assert parse_number("1 234.50") == 1234.5
        assert parse_number("1,234.50") == 1234.5

    def test_invalid_defaults_to_zero(self):
        assert parse_number("n/a") == 0.0
        assert parse_number("-") == 0.0

    @pytest.mark.parametrize("token", ["nan", "NaN", "inf", "-inf", "Infinity"])
    def test_non_finite_defaults_to_zero(self, token):
        assert parse_number(token) == 0.0


class TestParseSide:
    """Tests for parse_side."""

    def test_buy_variants(self):
        assert parse_side("buy") == "buy"
        assert parse_side("Buy Limit") == "buy"

    def test_everything_else_is_sell(self):
        assert parse_side("sell") == "sell"
        assert parse_side("SELL STOP") == "sell"


# =============================================================================
# ReportParser
# =============================================================================

class TestReportParser:
    """Tests for ReportParser."""

    def test_single_line_report(self):
        """One closed-trade row yields exactly one Trade."""
        trades = parse_report(_report(ROW))
        assert len(trades) == 1

        trade = trades[0]
        assert trade.ticket == "1001"
        assert trade.side == "buy"
        assert trade.size == 0.10
        assert trade.symbol == "EURUSD"
        assert trade.open_time == datetime(2024, 1, 1, 9, 0)
        assert trade.close_time == datetime(2024, 1, 1, 10, 30)
        assert trade.open_price == 1.1
        assert trade.close_price == 1.105
        assert trade.commission == -0.70
        assert trade.swap == -0.30
        assert trade.profit == 50.0
        assert trade.net_profit == pytest.approx(49.0)
        assert trade.is_win is (trade.net_profit > 0)
        assert trade.duration == 90.0

    def test_sample_report(self, sample_report):
        """Ledger and cancelled rows are skipped; footer ends the section."""
        trades = parse_report(sample_report)
        assert [t.ticket for t in trades] == ["1001", "1002", "1004"]

        by_ticket = {t.ticket: t for t in trades}
        assert by_ticket["1002"].side == "sell"
        assert by_ticket["1002"].net_profit == pytest.approx(-61.7)
        assert by_ticket["1004"].profit == 1000.0
        assert by_ticket["1004"].net_profit == pytest.approx(990.5)

    def test_idempotent(self, sample_report):
        """Parsing the same text twice yields identical trades."""
        assert parse_report(sample_report) == parse_report(sample_report)

    def test_missing_anchor_returns_empty(self):
        """No closed-transactions section is not an error."""
        assert parse_report("Open Trades:\n" + ROW) == []
        assert parse_report("") == []

    def test_anchor_case_insensitive(self):
        text = _report(ROW).replace("Closed Transactions:", "CLOSED TRANSACTIONS")
        assert len(parse_report(text)) == 1

    def test_header_line_is_skipped(self):
        """The line right after the anchor is never parsed, even if valid."""
        text = "Closed Transactions:\n" + ROW + "\n" + ROW.replace("1001", "1002")
        trades = parse_report(text)
        assert [t.ticket for t in trades] == ["1002"]

    def test_stops_at_total_terminator(self):
        text = _report(ROW).replace("Closed P/L:", "Total:") + "\n" + ROW
        assert len(parse_report(text)) == 1

    def test_short_rows_skipped(self):
        trades = parse_report(_report("1002\t2024.01.01 09:00\tbuy\t0.10", ROW))
        assert [t.ticket for t in trades] == ["1001"]

    def test_blank_lines_skipped(self):
        trades = parse_report(_report("", "   ", ROW))
        assert len(trades) == 1

    def test_missing_trailing_fields_default_to_zero(self):
        """Rows with 10-13 fields are accepted; missing numbers are 0."""
        row = "1005\t2024.01.01 09:00\tsell\t0.10\tEURUSD\t1.1\t0\t0\t2024.01.01 09:30\t1.09"
        trades = parse_report(_report(row))
        assert len(trades) == 1
        assert trades[0].commission == 0.0
        assert trades[0].swap == 0.0
        assert trades[0].profit == 0.0

    def test_bad_number_defaults_to_zero(self):
        row = ROW.replace("\t50.00", "\tabc")
        trades = parse_report(_report(row))
        assert trades[0].profit == 0.0

    def test_non_finite_columns_default_to_zero(self):
        nan_swap = ROW.replace("\t-0.30\t", "\tNaN\t")
        inf_profit = ROW.replace("1001", "1002").replace("\t50.00", "\tinf")
        trades = parse_report(_report(nan_swap, inf_profit))

        assert [t.net_profit for t in trades] == pytest.approx([49.3, -1.0])
        assert trades[0].swap == 0.0
        assert trades[1].profit == 0.0

    def test_malformed_timestamp_skipped_with_warning(self, caplog):
        """A row that fails to parse is logged and skipped."""
        bad = ROW.replace("2024.01.01 09:00", "not-a-date").replace("1001", "1009")
        with caplog.at_level(logging.WARNING, logger="trade_analytics.infrastructure.parsing"):
            trades = parse_report(_report(bad, ROW))

        assert [t.ticket for t in trades] == ["1001"]
        assert "Skipping malformed line" in caplog.text

    def test_timestamp_with_seconds(self):
        row = ROW.replace("2024.01.01 10:30", "2024.01.01 10:30:15")
        trades = parse_report(_report(row))
        assert trades[0].close_time == datetime(2024, 1, 1, 10, 30, 15)

    def test_custom_format(self):
        """Markers come from ReportFormat."""
        fmt = ReportFormat(anchor="history", terminators=("end",))
        text = "History\nheader\n" + ROW + "\nEND\n" + ROW
        trades = ReportParser(fmt).parse(text)
        assert len(trades) == 1

    def test_encounter_order_preserved(self):
        later = ROW.replace("1001", "2000").replace("2024.01.01 10:30", "2024.02.01 10:30")
        trades = parse_report(_report(later, ROW))
        assert [t.ticket for t in trades] == ["2000", "1001"]
