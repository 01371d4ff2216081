"""Best-effort conversions used by validation and evaluation.

Every helper returns None when the value cannot be converted; none of
them raise.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Any, List, Optional
import numbers

import numpy as np
import pandas as pd

TRUE_STRINGS = ("true",)
FALSE_STRINGS = ("false",)


def is_blank(value: Any) -> bool:
    """None, the empty string and empty list count as "no value"; " ", 0 and False do not"""
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False


def to_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, (bool, np.bool_)):
        return None
    try:
        if isinstance(value, (numbers.Real, Decimal, np.number)):
            number = float(value)
        elif isinstance(value, str):
            text = value.strip()
            if not text:
                return None
            number = float(text)
        else:
            return None
    except (ValueError, OverflowError):
        return None
    return number if np.isfinite(number) else None


def to_timestamp(value: Any) -> Optional[pd.Timestamp]:
    """Parse dates, datetimes, ISO strings and epoch milliseconds into a naive UTC Timestamp"""
    if value is None or isinstance(value, (bool, np.bool_)):
        return None
    try:
        if isinstance(value, (int, float, np.number)):
            timestamp = pd.to_datetime(value, unit="ms")
        elif isinstance(value, (str, datetime, date, np.datetime64)):
            if isinstance(value, str) and not value.strip():
                return None
            timestamp = pd.to_datetime(value)
        else:
            return None
    except (ValueError, TypeError, OverflowError):
        return None

    if pd.isna(timestamp):
        return None
    if timestamp.tzinfo is not None:
        timestamp = timestamp.tz_convert("UTC").tz_localize(None)
    return timestamp


def parse_bool(value: Any) -> Optional[bool]:
    """Explicit parse of a boolean or its string form ("true"/"false", any case)"""
    if isinstance(value, (bool, np.bool_)):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in TRUE_STRINGS:
            return True
        if text in FALSE_STRINGS:
            return False
    return None


def to_list(value: Any) -> List[Any]:
    """Sequence view of a record value: absent means empty, a scalar is a singleton"""
    if isinstance(value, (list, tuple, set, frozenset)):
        return list(value)
    if isinstance(value, np.ndarray):
        return value.tolist()
    if is_blank(value):
        return []
    return [value]
