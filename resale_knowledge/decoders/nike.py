"""
Nike style code decoder.

Format: AA1234-123 (model code, hyphen, colorway code). The hyphen is
required; without it the string is too easily confused with other SKUs.
"""

import re
import logging

from ..config import CONFIDENCE, MAX_STYLE_CODE_LENGTH
from ..models import DecodedValue
from .base import failure_result, normalize_input, success_result

logger = logging.getLogger(__name__)

IDENTIFIER_TYPE = 'nike_style_code'

STYLE_CODE_PATTERN = re.compile(r'^([A-Z]{2}\d{4})-(\d{3})$')


def _empty_payload():
    return {'model_code': None, 'colorway_code': None, 'full_style_code': None}


def decode_nike_style_code(raw: str) -> DecodedValue:
    value = normalize_input(raw, MAX_STYLE_CODE_LENGTH)
    if value is None:
        return failure_result(IDENTIFIER_TYPE, raw, "Empty or oversized style code", _empty_payload())

    match = STYLE_CODE_PATTERN.match(value)
    if not match:
        return failure_result(IDENTIFIER_TYPE, raw, f"Invalid style code format: {value}", _empty_payload())

    model_code, colorway_code = match.groups()
    logger.debug(f"[DECODE] Nike {value} -> model {model_code}, colorway {colorway_code}")
    return success_result(IDENTIFIER_TYPE, raw, CONFIDENCE.good, {
        'model_code': model_code,
        'colorway_code': colorway_code,
        'full_style_code': value,
    })
