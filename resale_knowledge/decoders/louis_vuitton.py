"""
Louis Vuitton date code decoder.

Format: two factory letters + 3 or 4 digits, e.g. SD1234.

The 4-digit form interleaves week and year digits W Y W Y:
    SD1234 -> week digits 1,3 -> week 13; year digits 2,4 -> 2024

The 3-digit form (early 1980s) has no agreed digit layout, so it is reported
as ambiguous and never turned into a year.
"""

import re
import logging
from typing import Any, Dict

from ..config import CONFIDENCE, MAX_DATE_CODE_LENGTH, MIN_WEEK, MAX_WEEK, MIN_PLAUSIBLE_YEAR
from ..knowledge.handbags import get_lv_factory_info
from ..models import DecodedValue
from .base import current_year, expand_two_digit_year, failure_result, normalize_input, success_result

logger = logging.getLogger(__name__)

IDENTIFIER_TYPE = 'lv_date_code'

DATE_CODE_PATTERN = re.compile(r'^([A-Z]{2})(\d{3,4})$')


def _empty_payload() -> Dict[str, Any]:
    return {
        'factory_code': None,
        'factory_location': None,
        'factory_country': None,
        'week': None,
        'year': None,
        'era': None,
        'is_valid_format': False,
        'ambiguous': False,
    }


def decode_louis_vuitton_date_code(raw: str) -> DecodedValue:
    """Decode an LV date code into factory, week and year."""
    value = normalize_input(raw, MAX_DATE_CODE_LENGTH)
    if value is None:
        return failure_result(IDENTIFIER_TYPE, raw, "Empty or oversized date code", _empty_payload())

    match = DATE_CODE_PATTERN.match(value)
    if not match:
        return failure_result(IDENTIFIER_TYPE, raw, f"Invalid date code format: {value}", _empty_payload())

    factory_code, digits = match.groups()
    payload = _empty_payload()
    payload['factory_code'] = factory_code
    payload['is_valid_format'] = True

    factory = get_lv_factory_info(factory_code)
    if factory is None:
        return failure_result(IDENTIFIER_TYPE, raw, f"Unknown factory code: {factory_code}", payload)

    payload['factory_location'] = factory['location']
    payload['factory_country'] = factory['country']

    if len(digits) == 3:
        payload['ambiguous'] = True
        return failure_result(
            IDENTIFIER_TYPE, raw,
            "3-digit date code is ambiguous; year cannot be determined",
            payload,
            confidence=CONFIDENCE.ambiguous_format,
        )

    week = int(digits[0] + digits[2])
    year = expand_two_digit_year(int(digits[1] + digits[3]))
    payload['week'] = week
    payload['year'] = year

    if not MIN_WEEK <= week <= MAX_WEEK:
        return failure_result(
            IDENTIFIER_TYPE, raw, f"Invalid week: {week}", payload,
            confidence=CONFIDENCE.invalid_week,
        )

    if year < MIN_PLAUSIBLE_YEAR or year > current_year() + 1:
        return failure_result(
            IDENTIFIER_TYPE, raw, f"Implausible year: {year}", payload,
            confidence=CONFIDENCE.implausible_year,
        )

    payload['era'] = f"{(year // 10) * 10}s"
    logger.debug(f"[DECODE] LV {value} -> {factory['location']}, week {week} of {year}")
    return success_result(IDENTIFIER_TYPE, raw, CONFIDENCE.high, payload)
