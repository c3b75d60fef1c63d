import re
from decimal import Decimal

from chalicelib.utils.data import parse_iso

EMAIL_PATTERN = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')


def is_str(value) -> bool:
    return isinstance(value, str) and value != ''


def is_str_len(min_len: int, max_len: int):
    return lambda value: isinstance(value, str) and min_len <= len(value) <= max_len


def is_positive_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def is_positive_amount(value) -> bool:
    return isinstance(value, (int, Decimal)) and not isinstance(value, bool) and value > 0


def is_iso_datetime(value) -> bool:
    return isinstance(value, str) and parse_iso(value) is not None


def is_email(value) -> bool:
    return isinstance(value, str) and EMAIL_PATTERN.match(value) is not None


def is_one_of(*choices):
    return lambda value: value in choices
