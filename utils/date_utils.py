"""
Date utilities for cell value post-processing.

Handles best-effort parsing of extracted text as a date, day offsets and
rendering with M/D/Y format tokens.
"""
import logging
import re
from datetime import datetime, timedelta
from typing import Optional

import dateutil.parser as date_parser

from core.constants import (
    DATE_FORMAT_TOKEN_PATTERN,
    DATE_PARSE_DEFAULT,
    DEFAULT_DATE_FORMAT,
)

logger = logging.getLogger(__name__)

MONTH_NAMES = (
    'January', 'February', 'March', 'April', 'May', 'June',
    'July', 'August', 'September', 'October', 'November', 'December'
)

_TOKEN_RE = re.compile(DATE_FORMAT_TOKEN_PATTERN)


def parse_date(value: str, default: Optional[datetime] = None) -> Optional[datetime]:
    """
    Parse free text as a date.

    Args:
        value: Text such as '2014-08-02', '8/14' or 'August 2005'
        default: Supplies the date parts missing from `value`
                 (default: DATE_PARSE_DEFAULT)

    Returns:
        Parsed datetime, or None if the text is not recognized as a date
    """
    if not value or not value.strip():
        return None

    if default is None:
        default = datetime.fromisoformat(DATE_PARSE_DEFAULT)

    try:
        return date_parser.parse(value, default=default)
    except (ValueError, OverflowError) as e:
        logger.debug("Could not parse %r as a date: %s", value, e)
        return None


def _render_token(token: str, date: datetime) -> str:
    year = date.year
    if token == 'YYYYYY':
        sign = '+' if year >= 0 else '-'
        return sign + str(abs(year)).zfill(6)
    if token == 'YYYYY':
        return str(year).zfill(5)
    if token == 'YYYY':
        return str(year).zfill(4)
    if token == 'YY':
        return str(year % 100).zfill(2)
    if token == 'Y':
        return str(year).zfill(4) if year <= 9999 else '+' + str(year)
    if token == 'MMMM':
        return MONTH_NAMES[date.month - 1]
    if token == 'MMM':
        return MONTH_NAMES[date.month - 1][:3]
    if token == 'MM':
        return str(date.month).zfill(2)
    if token == 'M':
        return str(date.month)

    day_of_year = date.timetuple().tm_yday
    if token == 'DDDD':
        return str(day_of_year).zfill(3)
    if token == 'DDD':
        return str(day_of_year)
    if token == 'DD':
        return str(date.day).zfill(2)
    return str(date.day)


def format_date(date: datetime, date_format: str) -> str:
    """
    Render a date with format tokens.

    Runs of Y, M and D are split greedily into tokens (YYYYYY, YYYYY, YYYY,
    YY, Y; MMMM, MMM, MM, M; DDDD, DDD, DD, D). Every other character is
    passed through unchanged.

    Examples:
        'MM/DD/YYYY' -> '08/12/2014'
        'YYY' -> '162016' (YY followed by Y)
    """
    return _TOKEN_RE.sub(lambda m: _render_token(m.group(0), date), date_format)


def get_formatted_date(
    value: str,
    date_format: Optional[str] = None,
    days_added: Optional[int] = None,
    default: Optional[datetime] = None
) -> str:
    """
    Reinterpret a cell section value as a date, shift it and format it.

    Args:
        value: Extracted text
        date_format: Token format (default: DEFAULT_DATE_FORMAT)
        days_added: Days to add to the parsed date
        default: Supplies missing date parts

    Returns:
        Formatted date, or empty string when `value` is not a date
    """
    date = parse_date(value, default)
    if date is None:
        return ""

    try:
        date = date + timedelta(days=days_added or 0)
    except OverflowError:
        return ""

    return format_date(date, date_format or DEFAULT_DATE_FORMAT)
