"""
Display formatters: currency, dates and month names
"""
from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional, Union

from config.settings import CURRENCY_SYMBOL

MONTH_NAMES = [
    'January', 'February', 'March', 'April', 'May', 'June',
    'July', 'August', 'September', 'October', 'November', 'December'
]


def _group_indian(digits: str) -> str:
    """12345678 -> 1,23,45,678 (lakh / crore grouping)"""
    if len(digits) <= 3:
        return digits

    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_currency(value) -> str:
    """
    Format an amount in rupees with no fractional digits.

    Args:
        value: number or numeric string

    Returns:
        str: e.g. ₹5,000 or ₹1,00,000
    """
    if value is None:
        return f"{CURRENCY_SYMBOL}0"
    try:
        amount = Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError):
        return str(value)

    sign = "-" if amount < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL}{_group_indian(str(abs(int(amount))))}"


def get_month_name(month: int) -> str:
    """1 -> January; anything outside 1-12 -> ''"""
    if isinstance(month, int) and 1 <= month <= 12:
        return MONTH_NAMES[month - 1]
    return ''


def safe_parse_date(date_value) -> Optional[date]:
    """
    Parse a date value leniently.

    Args:
        date_value: str, date, datetime or None

    Returns:
        date or None
    """
    if date_value is None:
        return None

    if isinstance(date_value, datetime):
        return date_value.date()

    if isinstance(date_value, date):
        return date_value

    try:
        return datetime.strptime(str(date_value)[:10], "%Y-%m-%d").date()
    except (ValueError, TypeError):
        return None


def format_date(value: Union[str, date, None]) -> str:
    """2026-10-18 -> 18 Oct 2026"""
    parsed = safe_parse_date(value)
    if parsed is None:
        return ''
    return f"{parsed.day} {MONTH_NAMES[parsed.month - 1][:3]} {parsed.year}"


def get_days_overdue(due_date: Union[str, date], today: Optional[date] = None) -> int:
    """Days elapsed since due_date; zero or negative when not yet due"""
    due = safe_parse_date(due_date)
    if due is None:
        return 0
    return ((today or date.today()) - due).days
