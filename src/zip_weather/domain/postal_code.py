"""
zip_weather.domain.postal_code

Postal code (CEP) format validation.
"""

from __future__ import annotations

import re

from zip_weather.errors import InvalidPostalCodeError

# ASCII only: `\d` would also accept other Unicode decimal digits.
_POSTAL_CODE_RE = re.compile(r"[0-9]{8}")


def is_valid_postal_code(code: str) -> bool:
    return _POSTAL_CODE_RE.fullmatch(code) is not None


def ensure_valid_postal_code(code: str) -> str:
    if not is_valid_postal_code(code):
        raise InvalidPostalCodeError()
    return code
