"""Month string parsing and ordering utilities"""

import re
from typing import Tuple

from branchwatch.domain.exceptions import InvalidMonthError

_MONTH_PATTERN = re.compile(r"^(\d{4})-(\d{1,2})$")


def parse_month(value: str) -> Tuple[int, int]:
    """
    Parse a month string into a comparable (year, month) tuple.

    Accepts the canonical "YYYY-MM" form and the unpadded "YYYY-M" form.

    Raises:
        InvalidMonthError: If the string is not a valid year-month
    """
    match = _MONTH_PATTERN.match(value.strip()) if isinstance(value, str) else None
    if match is None:
        raise InvalidMonthError(f"Invalid month {value!r}, expected YYYY-MM")

    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise InvalidMonthError(f"Invalid month {value!r}, month must be 01-12")

    return year, month


def format_month(year: int, month: int) -> str:
    """Render a (year, month) pair in canonical YYYY-MM form"""
    return f"{year:04d}-{month:02d}"


def normalize_month(value: str) -> str:
    """Canonicalize a month string ("2025-1" -> "2025-01")"""
    return format_month(*parse_month(value))


def month_sort_key(value: str) -> Tuple[int, int, int]:
    """
    Total ordering key for month strings, never raises.

    Valid months order chronologically. Unparseable strings order before
    every valid month, so they are never picked as the latest record.
    """
    try:
        year, month = parse_month(value)
    except InvalidMonthError:
        return (0, 0, 0)
    return (1, year, month)
