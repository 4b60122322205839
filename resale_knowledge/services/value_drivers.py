"""
Value Driver Detection

Matches a listing's current field states against the declarative driver
table and combines the hits into one bounded price multiplier.

Usage:
    matches = detect_value_drivers(
        {'material': FieldState('Crocodile', 0.9)}, 'luxury_handbags'
    )
    multiplier = calculate_value_multiplier(matches)
"""

import math
import logging
from typing import Any, List, Mapping, Optional, Sequence

from ..config import DIMINISHING_RETURNS_FACTOR, MAX_PRICE_MULTIPLIER
from ..knowledge.rules import get_value_drivers_for_category_and_brand
from ..models import CategoryLike, FieldState, ValueDriver, ValueDriverMatch
from ..utils.conditions import evaluate_condition
from ..utils.confidence import clamp_confidence

logger = logging.getLogger(__name__)


def _field_value(entry: Any) -> Any:
    """Accept FieldState objects or plain {'value': ...} dicts."""
    if entry is None:
        return None
    if isinstance(entry, FieldState):
        return entry.value
    if isinstance(entry, Mapping):
        return entry.get('value')
    return getattr(entry, 'value', None)


def detect_value_drivers(
    field_states: Mapping[str, Any],
    category_id: CategoryLike,
    brand: Optional[str] = None,
    drivers: Optional[Sequence[ValueDriver]] = None,
) -> List[ValueDriverMatch]:
    """
    Find every driver whose condition the listing satisfies.

    Results are ordered by driver priority, then match confidence, both
    descending.
    """
    candidates = get_value_drivers_for_category_and_brand(category_id, brand, drivers)
    matches: List[ValueDriverMatch] = []

    for driver in candidates:
        value = _field_value(field_states.get(driver.attribute)) if field_states else None
        if value is None:
            continue
        text = str(value)
        hit = evaluate_condition(driver.condition, driver.attribute, text)
        if hit is None:
            continue
        confidence, reasoning = hit
        matches.append(ValueDriverMatch(
            driver=driver,
            matched_value=text,
            confidence=clamp_confidence(confidence),
            reasoning=reasoning,
        ))
        logger.debug(f"[DRIVERS] {driver.id} matched on {driver.attribute}={text!r} ({confidence:.2f})")

    matches.sort(key=lambda m: (m.driver.priority, m.confidence), reverse=True)
    return matches


def calculate_value_multiplier(matches: Sequence[ValueDriverMatch]) -> float:
    """
    Combine driver multipliers with diminishing returns.

    The strongest driver applies in full (scaled by confidence); each further
    driver contributes only its square root, damped again by
    DIMINISHING_RETURNS_FACTOR. The product is capped at MAX_PRICE_MULTIPLIER.
    """
    if not matches:
        return 1.0

    ordered = sorted(matches, key=lambda m: m.driver.price_multiplier, reverse=True)
    multiplier = 1.0
    for index, match in enumerate(ordered):
        confidence = clamp_confidence(match.confidence)
        factor = match.driver.price_multiplier
        if index == 0:
            multiplier *= 1 + (factor - 1) * confidence
        else:
            multiplier *= 1 + (math.sqrt(factor) - 1) * confidence * DIMINISHING_RETURNS_FACTOR

    return min(multiplier, MAX_PRICE_MULTIPLIER)
