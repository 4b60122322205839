"""
Hermes blindstamp decoder.

A blindstamp is a single year letter. The letters repeat across cycles, so
the shape around the letter decides the cycle: a square means the current
cycle (2015+). Without that signal the 1997-2014 cycle is assumed before the
1971-1996 one.
"""

import re
import logging
from typing import Any, Dict, Optional

from ..config import CONFIDENCE
from ..knowledge.handbags import get_hermes_year_from_blindstamp
from ..models import DecodedValue
from .base import failure_result, normalize_input, success_result

logger = logging.getLogger(__name__)

IDENTIFIER_TYPE = 'hermes_blindstamp'

# "[E]" is how extractors transcribe a letter in a square
_SQUARE_MARK = re.compile(r'^\[\s*([A-Z])\s*\]$')
_BARE_LETTER = re.compile(r'^[A-Z]$')

_CYCLE_CONFIDENCE = {
    3: CONFIDENCE.high,
    2: CONFIDENCE.medium_high,
    1: CONFIDENCE.low,
}


def _empty_payload() -> Dict[str, Any]:
    return {'letter': None, 'year': None, 'cycle': None, 'has_square': None}


def decode_hermes_blindstamp(raw: str, has_square: Optional[bool] = None) -> DecodedValue:
    """Decode a blindstamp letter into a production year."""
    value = normalize_input(raw, 5)
    if value is None:
        return failure_result(IDENTIFIER_TYPE, raw, "Empty or oversized blindstamp", _empty_payload())

    square = _SQUARE_MARK.match(value)
    if square:
        value = square.group(1)
        has_square = True

    if not _BARE_LETTER.match(value):
        return failure_result(IDENTIFIER_TYPE, raw, f"Blindstamp must be a single letter: {value}", _empty_payload())

    result = get_hermes_year_from_blindstamp(value, has_square)
    if result is None:
        payload = _empty_payload()
        payload['letter'] = value
        payload['has_square'] = bool(has_square)
        return failure_result(IDENTIFIER_TYPE, raw, f"Letter {value} not used in any blindstamp cycle", payload)

    payload = {
        'letter': result['letter'],
        'year': result['year'],
        'cycle': result['cycle'],
        'has_square': bool(has_square),
    }
    logger.debug(f"[DECODE] Hermes {value} (cycle {result['cycle']}) -> {result['year']}")
    return success_result(IDENTIFIER_TYPE, raw, _CYCLE_CONFIDENCE[result['cycle']], payload)
