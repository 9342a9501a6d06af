"""Utility functions for billtrack."""

from billtrack.utils.date_parser import parse_date
from billtrack.utils.amount_parser import parse_amount, format_currency
from billtrack.utils.clock import utcnow

__all__ = ["parse_date", "parse_amount", "format_currency", "utcnow"]
