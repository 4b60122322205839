"""
Shared plumbing for identifier decoders.

Every decoder takes a raw string and returns a DecodedValue. Decoders never
raise: a bad input gives success=False, confidence 0 and the decoder's empty
payload.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from ..models import DecodedValue


def current_year() -> int:
    return datetime.now().year


def expand_two_digit_year(yy: int, now_year: Optional[int] = None) -> int:
    """
    Expand a two-digit year with a century pivot: 20yy unless that lands
    after next year, in which case 19yy.
    """
    now_year = now_year or current_year()
    year = 2000 + yy
    if year > now_year + 1:
        year = 1900 + yy
    return year


def normalize_input(raw: Any, max_length: int) -> Optional[str]:
    """
    Trim and upper-case a raw identifier.

    Returns None for non-strings, blanks and anything over max_length, which
    is checked before any regex runs.
    """
    if not isinstance(raw, str):
        return None
    value = raw.strip()
    if not value or len(value) > max_length:
        return None
    return value.upper()


def success_result(
    identifier_type: str,
    raw: str,
    confidence: float,
    decoded: Dict[str, Any],
) -> DecodedValue:
    return DecodedValue(
        identifier_type=identifier_type,
        success=True,
        confidence=confidence,
        raw_value=raw,
        decoded=decoded,
        decoder_used=identifier_type,
    )


def failure_result(
    identifier_type: str,
    raw: Any,
    error: str,
    decoded: Optional[Dict[str, Any]] = None,
    confidence: float = 0.0,
) -> DecodedValue:
    return DecodedValue(
        identifier_type=identifier_type,
        success=False,
        confidence=confidence,
        raw_value=raw if isinstance(raw, str) else "",
        decoded=decoded if decoded is not None else {},
        decoder_used=identifier_type,
        error=error,
    )
