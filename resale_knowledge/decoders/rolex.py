"""
Rolex reference and serial decoders.

Reference numbers (116610LN, 126334) identify the model. Serial numbers
identify the individual case and, before 2010, its production year.
"""

import re
import logging
from typing import Any, Dict

from ..config import CONFIDENCE, MAX_REFERENCE_LENGTH, MAX_SERIAL_LENGTH
from ..knowledge.watches import get_rolex_reference_info, get_rolex_serial_year
from ..models import DecodedValue
from .base import failure_result, normalize_input, success_result

logger = logging.getLogger(__name__)

REFERENCE_TYPE = 'rolex_reference'
SERIAL_TYPE = 'rolex_serial'

REFERENCE_PATTERN = re.compile(r'^(\d{5,6})([A-Z]{0,4})$')
SERIAL_PATTERN = re.compile(r'^(?:[A-Z]\d{6}|\d{7})$')


# ============================================================
# REFERENCE NUMBERS
# ============================================================

def _empty_reference_payload() -> Dict[str, Any]:
    return {
        'reference_number': None,
        'base_reference': None,
        'suffix': None,
        'model_family': None,
        'model_name': None,
        'material': None,
        'diameter': None,
        'discontinued': None,
        'notes': None,
        'is_valid_reference': False,
    }


def decode_rolex_reference(raw: str) -> DecodedValue:
    """
    Decode a model reference.

    Known references come back with catalog facts at high confidence;
    well-formed but unknown ones still succeed at format-only confidence.
    """
    value = normalize_input(raw, MAX_REFERENCE_LENGTH)
    if value is None:
        return failure_result(REFERENCE_TYPE, raw, "Empty or oversized reference", _empty_reference_payload())

    match = REFERENCE_PATTERN.match(value)
    if not match:
        return failure_result(
            REFERENCE_TYPE, raw, f"Invalid reference format: {value}", _empty_reference_payload()
        )

    base, suffix = match.groups()
    payload = _empty_reference_payload()
    payload['reference_number'] = value
    payload['base_reference'] = base
    payload['suffix'] = suffix or None

    info = get_rolex_reference_info(value)
    if info is None:
        logger.debug(f"[DECODE] Rolex {value} well-formed but not in catalog")
        return success_result(REFERENCE_TYPE, raw, CONFIDENCE.format_only, payload)

    payload.update({
        'model_family': info['family'],
        'model_name': info['name'],
        'material': info['material'],
        'diameter': info['diameter'],
        'discontinued': info['discontinued'],
        'notes': info['notes'],
        'is_valid_reference': True,
    })
    logger.debug(f"[DECODE] Rolex {value} -> {info['name']}")
    return success_result(REFERENCE_TYPE, raw, CONFIDENCE.high, payload)


# ============================================================
# SERIAL NUMBERS
# ============================================================

def _empty_serial_payload() -> Dict[str, Any]:
    return {'serial': None, 'year': None, 'serial_format': None}


def decode_rolex_serial(raw: str) -> DecodedValue:
    """Date a case from its serial (letter prefix 1987-2010, sequential 1965-1987)."""
    value = normalize_input(raw, MAX_SERIAL_LENGTH)
    if value is None:
        return failure_result(SERIAL_TYPE, raw, "Empty or oversized serial", _empty_serial_payload())

    if not SERIAL_PATTERN.match(value):
        return failure_result(SERIAL_TYPE, raw, f"Invalid serial format: {value}", _empty_serial_payload())

    result = get_rolex_serial_year(value)
    if result is None:
        payload = _empty_serial_payload()
        payload['serial'] = value
        return failure_result(SERIAL_TYPE, raw, f"Serial {value} does not map to a production year", payload)

    confidence = CONFIDENCE.medium_high if result['format'] == 'letter_prefix' else CONFIDENCE.low
    logger.debug(f"[DECODE] Rolex serial {value} -> {result['year']} ({result['format']})")
    return success_result(SERIAL_TYPE, raw, confidence, {
        'serial': value,
        'year': result['year'],
        'serial_format': result['format'],
    })
