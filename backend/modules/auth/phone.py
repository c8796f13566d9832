"""
Phone number normalization.

Numbers default to Cameroon (+237):
    690119047          -> +237690119047
    237690119047       -> +237690119047
    +237 690 11 90 47  -> +237690119047
    690-11-90-47       -> +237690119047
"""

import re
from typing import Optional

COUNTRY_CODE = "237"

_SEPARATORS = re.compile(r"[\s\-().]")
_CAMEROON_MOBILE = re.compile(r"^\+2376\d{8}$")
_E164 = re.compile(r"^\+\d{8,15}$")


def normalize_phone_number(phone_number: Optional[str]) -> Optional[str]:
    """Normalize a phone number to +<country><number> form."""
    if not phone_number:
        return None

    normalized = _SEPARATORS.sub("", str(phone_number))
    normalized = normalized.lstrip("0")

    if normalized.startswith(f"+{COUNTRY_CODE}"):
        return normalized
    if normalized.startswith(COUNTRY_CODE):
        return f"+{normalized}"
    if len(normalized) == 9 and normalized.startswith("6"):
        return f"+{COUNTRY_CODE}{normalized}"
    return normalized if normalized.startswith("+") else f"+{COUNTRY_CODE}{normalized}"


def is_valid_phone_number(phone_number: Optional[str]) -> bool:
    """
    Whether the number normalizes to something dialable.

    Cameroon numbers must be mobile (+2376 followed by 8 digits); other
    country codes only need to be E.164 shaped.
    """
    normalized = normalize_phone_number(phone_number)
    if not normalized:
        return False
    if normalized.startswith(f"+{COUNTRY_CODE}"):
        return bool(_CAMEROON_MOBILE.match(normalized))
    return bool(_E164.match(normalized))
