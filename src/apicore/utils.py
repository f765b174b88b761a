"""Utility functions for apicore."""

from __future__ import annotations

from datetime import datetime
from datetime import timezone
from decimal import Decimal
from decimal import InvalidOperation
from typing import List
from typing import Sequence

from apicore.errors import DataError

EMPTY_QUERY_PARAMS = ""
QUERY_PARAM_FIRST_SEP = "?"
QUERY_PARAM_ADDITIONAL_SEP = "&"


# Query string helpers

def append_http_query_param(query_params: str, key: str, value: str) -> str:
    """Append ``key=value`` to a query string.

    The separator is ``?`` while the query string has none yet, ``&``
    afterwards. Keys and values are not escaped; percent-encode them first
    if they may contain reserved characters.

    Args:
        query_params: Existing query string, possibly empty
        key: Parameter name
        value: Parameter value

    Returns:
        Query string with the parameter appended
    """
    sep = http_query_param_sep(QUERY_PARAM_FIRST_SEP in query_params)
    return f"{query_params}{sep}{key}={value}"


def http_query_param_sep(appended: bool) -> str:
    """Separator for the next query parameter.

    Args:
        appended: Whether the query string already has a parameter

    Returns:
        ``&`` if appended, otherwise ``?``
    """
    if appended:
        return QUERY_PARAM_ADDITIONAL_SEP
    return QUERY_PARAM_FIRST_SEP


# Value helpers

def str_to_num(value: str) -> Decimal:
    """Parse a decimal amount from its string form.

    Surrounding whitespace and digit-grouping underscores are rejected,
    although ``Decimal`` itself accepts them.

    Args:
        value: Numeric string, e.g. ``"12.50"``

    Returns:
        Parsed decimal

    Raises:
        DataError: Value is not a finite number
    """
    if not isinstance(value, str) or value != value.strip() or "_" in value:
        raise DataError(f"can't convert {value!r} to decimal", data=value)

    try:
        amount = Decimal(value)
    except InvalidOperation as e:
        raise DataError(f"can't convert {value!r} to decimal", data=value) from e

    if not amount.is_finite():
        raise DataError(f"can't convert {value!r} to decimal", data=value)
    return amount


def str_slice_diff(a: Sequence[str], b: Sequence[str]) -> List[str]:
    """Items of ``b`` that are not present in ``a``, in ``b``'s order.

    Matching is exact and case-sensitive.
    """
    present = set(a)
    return [item for item in b if item not in present]


# Timing utilities

def utc_now() -> datetime:
    """Get current UTC datetime.

    Returns:
        Current UTC datetime
    """
    return datetime.now(timezone.utc)
