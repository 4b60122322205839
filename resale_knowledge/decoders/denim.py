"""
Vintage denim text analysis.

Not a strict grammar: scans free label/listing text for the markers resellers
use to date Levi's and other American denim.
"""

import logging
from typing import Any, Dict, List

from ..config import CONFIDENCE, MAX_DENIM_TEXT_LENGTH
from ..models import DecodedValue
from .base import failure_result, success_result

logger = logging.getLogger(__name__)

IDENTIFIER_TYPE = 'denim_analysis'

SELVEDGE_TERMS = ['SELVEDGE', 'SELVAGE', 'REDLINE', 'RED LINE', 'LVC', 'VINTAGE CLOTHING']
SELVEDGE_MODELS = ['501 CT', '501CT', '501 XX', '501XX', '501 STF', '501STF']
MADE_IN_USA_TERMS = ['MADE IN USA', 'MADE IN U.S.A', 'MADE IN THE USA', 'MADE IN THE U.S.A', 'USA MADE']

# Signal confidences
BIG_E_CONFIDENCE = 0.85
SELVEDGE_CONFIDENCE = 0.80
MADE_IN_USA_CONFIDENCE = 0.75
SINGLE_STITCH_CONFIDENCE = 0.80
ORANGE_TAB_CONFIDENCE = 0.70
RED_TAB_BIG_E_CONFIDENCE = 0.85


def _empty_payload() -> Dict[str, Any]:
    return {
        'is_big_e': False,
        'is_selvedge': False,
        'is_made_in_usa': False,
        'estimated_era': None,
        'value_indicators': [],
    }


def analyze_vintage_denim(text: str) -> DecodedValue:
    """
    Look for Big E, selvedge and Made in USA markers.

    Succeeds when at least one value indicator is found. Big E detection
    depends on casing ("LEVI'S" vs "Levi's"), so the text is not normalized
    before that check.
    """
    if not isinstance(text, str) or not text.strip():
        return failure_result(IDENTIFIER_TYPE, text, "Empty denim text", _empty_payload())
    if len(text) > MAX_DENIM_TEXT_LENGTH:
        return failure_result(IDENTIFIER_TYPE, text, "Denim text too long", _empty_payload())

    upper = text.upper()
    indicators: List[str] = []
    confidence = CONFIDENCE.base_text

    is_big_e = "LEVI'S" in text and "Levi's" not in text
    if is_big_e:
        indicators.append("Big E label (pre-1971)")
        confidence = max(confidence, BIG_E_CONFIDENCE)

    is_selvedge = any(term in upper for term in SELVEDGE_TERMS) or any(m in upper for m in SELVEDGE_MODELS)
    if is_selvedge:
        indicators.append("Selvedge denim")
        confidence = max(confidence, SELVEDGE_CONFIDENCE)

    is_made_in_usa = any(term in upper for term in MADE_IN_USA_TERMS)
    if is_made_in_usa:
        indicators.append("Made in USA")
        confidence = max(confidence, MADE_IN_USA_CONFIDENCE)

    if 'SINGLE STITCH' in upper:
        indicators.append("Single stitch construction")
        confidence = max(confidence, SINGLE_STITCH_CONFIDENCE)

    if 'ORANGE TAB' in upper:
        indicators.append("Orange tab")
        confidence = max(confidence, ORANGE_TAB_CONFIDENCE)

    if 'RED TAB' in upper and is_big_e:
        indicators.append("Red tab with Big E")
        confidence = max(confidence, RED_TAB_BIG_E_CONFIDENCE)

    if is_big_e:
        era = '1966-1971'
    elif is_made_in_usa and is_selvedge:
        era = '1971-1983'
    elif is_made_in_usa:
        era = '1971-2003'
    else:
        era = None

    payload = {
        'is_big_e': is_big_e,
        'is_selvedge': is_selvedge,
        'is_made_in_usa': is_made_in_usa,
        'estimated_era': era,
        'value_indicators': indicators,
    }

    if not indicators:
        return failure_result(IDENTIFIER_TYPE, text, "No vintage denim indicators found", payload)

    logger.debug(f"[DECODE] Denim indicators: {', '.join(indicators)}")
    return success_result(IDENTIFIER_TYPE, text, confidence, payload)
