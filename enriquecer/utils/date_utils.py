"""Date helpers working on ISO strings"""

import re
from datetime import date

# Calendar dates only; fromisoformat alone would also take week dates like 2024-W01-1
_RX_ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


def today_iso() -> str:
    """Today's date as YYYY-MM-DD"""
    return date.today().isoformat()


def current_year_month() -> str:
    """Current month as YYYY-MM"""
    return date.today().isoformat()[:7]


def current_year() -> str:
    return str(date.today().year)


def is_iso_date(value: str) -> bool:
    """True for a real calendar date written exactly as YYYY-MM-DD"""
    if not isinstance(value, str) or not _RX_ISO_DATE.fullmatch(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True
