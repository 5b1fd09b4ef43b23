"""Utility functions for shopdesk."""

from shopdesk.utils.date_parser import parse_date
from shopdesk.utils.amount_parser import parse_amount

__all__ = ["parse_date", "parse_amount"]
