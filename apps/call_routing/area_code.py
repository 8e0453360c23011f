import re
from typing import Optional

MIN_CALLER_DIGITS = 10
AREA_CODE_LENGTH = 3
NANP_COUNTRY_CODE = "1"

_NON_DIGITS = re.compile(r"[^0-9]")


def extract_area_code(number: Optional[str]) -> str:
    """Return the area code of a caller number, or "" if it is too short.

    Only digits count, so "+1 (415) 555-1234" and "4155551234" both give
    "415". An 11 digit number with the leading NANP country code is read
    without it, so "+14155551234" gives "415" and not the raw first three
    digits "141"; every other number uses its first three digits.
    """
    if not number or not isinstance(number, str):
        return ""
    digits = _NON_DIGITS.sub("", number)
    if len(digits) < MIN_CALLER_DIGITS:
        return ""
    if len(digits) == MIN_CALLER_DIGITS + 1 and digits.startswith(NANP_COUNTRY_CODE):
        digits = digits[1:]
    return digits[:AREA_CODE_LENGTH]
