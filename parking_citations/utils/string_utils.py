import re

from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Optional

DATE_FORMATS = ('%Y-%m-%dT%H:%M:%S.%f', '%Y-%m-%dT%H:%M:%S', '%Y-%m-%d',
                '%m/%d/%Y', '%m/%d/%Y %I:%M %p')

OUTPUT_DATE_FORMAT = '%Y-%m-%d'


def normalize_jurisdiction(code: Optional[str]) -> str:
    return (code or '').strip().upper()


def normalize_plate(plate: Optional[str]) -> str:
    return re.sub(r'\s+', '', (plate or '')).upper()


def parse_amount(value) -> Decimal:
    """Parse a currency string such as '$1,065.00' into a Decimal.
    Unparseable and empty values count as zero.
    """
    if value is None:
        return Decimal('0')

    cleaned = re.sub(r'[$,\s]', '', str(value))

    if not cleaned:
        return Decimal('0')

    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        return Decimal('0')

    return amount if amount.is_finite() else Decimal('0')


def parse_date(value: Optional[str]) -> Optional[str]:
    """Normalize the handful of date layouts the sources use to
    YYYY-MM-DD, passing anything unrecognized through untouched.
    """
    if not value:
        return None

    for date_format in DATE_FORMATS:
        try:
            return datetime.strptime(value.strip(), date_format).strftime(
                OUTPUT_DATE_FORMAT)
        except ValueError:
            continue

    return value
