import re
from typing import Optional

from src.platform.exception.exceptions import DomainError


_NON_DIGIT = re.compile(r'\D')

# A 2 or 3 digit country code typed twice, e.g. "+994 994 50..." from autofill plus manual entry.
# Single digit repeats are left alone: "+99 45..." is the start of a valid +994 number.
_DOUBLED_COUNTRY_CODE = re.compile(r'^(\d{2,3})\1(\d+)$')


def normalize_phone(raw: Optional[str]) -> Optional[str]:
    """Return `+` followed by digits only.

    >>> normalize_phone('(994) 50 123-45-67')
    '+994501234567'
    >>> normalize_phone('+994 994 50 123 45 67')
    '+994501234567'
    """
    if raw is None:
        return None

    digits = _NON_DIGIT.sub('', raw.strip())
    if not digits:
        raise DomainError('Phone number must contain digits')

    while match := _DOUBLED_COUNTRY_CODE.match(digits):
        digits = match.group(1) + match.group(2)

    return f'+{digits}'
