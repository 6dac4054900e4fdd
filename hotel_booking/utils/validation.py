import re
from datetime import datetime
from decimal import Decimal, InvalidOperation

EMAIL_PATTERN = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')
DATE_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}$')
MAX_PRICE = Decimal('99999999.99')


def is_string(value):
    return isinstance(value, str) and value.strip() != ''


def is_optional_string(value):
    return value is None or isinstance(value, str)


def is_int(value):
    # bool is an int subclass but never a valid count or rating
    if isinstance(value, bool):
        return False
    if isinstance(value, float):
        return value.is_integer()
    return isinstance(value, int)


def is_email(value):
    return is_string(value) and EMAIL_PATTERN.match(value) is not None


def is_string_list(value):
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


def parse_date(value):
    """Parse a strict ``YYYY-MM-DD`` string, returning None when malformed."""
    if not isinstance(value, str) or not DATE_PATTERN.match(value):
        return None
    try:
        return datetime.strptime(value, '%Y-%m-%d').date()
    except ValueError:
        return None


def parse_price(value):
    """Return a positive Decimal price, or None."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        price = Decimal(str(value))
    except InvalidOperation:
        return None
    if not price.is_finite() or price <= 0 or price > MAX_PRICE:
        return None
    # Stored in whole cents
    if price.as_tuple().exponent < -2:
        return None
    return price


def parse_number_arg(value):
    """Parse an optional numeric query-string argument.

    Returns ``(number, ok)``; a missing argument is ``(None, True)``.
    """
    if value is None or value == '':
        return None, True
    try:
        number = float(value)
    except ValueError:
        return None, False
    if number != number:
        return None, False
    return number, True
