"""
Decoding Dispatcher

Routes an extracted identifier to the right decoder:

    1. Reject blank / oversized input
    2. Category path: override definitions (highest priority first), then the
       built-in decoders mapped to the category; first success wins
    3. Fallback by the extractor's declared identifier type
    4. Fallback by value shape (length-gated LV, Nike, Rolex reference, Hermes)
    5. None if nothing succeeds

Usage:
    from resale_knowledge.decoders.dispatcher import decode_identifier
    result = decode_identifier(ExtractedIdentifier('date_code', 'SD1234'), 'luxury_handbags')
"""

import logging
from dataclasses import replace
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from ..config import MAX_IDENTIFIER_LENGTH, MIN_DENIM_TEXT_LENGTH
from ..models import (
    CategoryLike,
    DecodedValue,
    DecoderDefinition,
    ExtractedIdentifier,
    IdentifierKind,
    category_key,
    kind_key,
)
from ..utils.confidence import clamp_confidence, safe_stringify
from .definition import decode_with_definition
from .denim import analyze_vintage_denim
from .hermes import decode_hermes_blindstamp
from .louis_vuitton import decode_louis_vuitton_date_code
from .nike import decode_nike_style_code
from .rolex import decode_rolex_reference, decode_rolex_serial

logger = logging.getLogger(__name__)


def _hermes_single_letter(value: str) -> Optional[DecodedValue]:
    if len(value) != 1:
        return None
    return decode_hermes_blindstamp(value)


def _denim_if_long_enough(value: str) -> Optional[DecodedValue]:
    if len(value) <= MIN_DENIM_TEXT_LENGTH:
        return None
    return analyze_vintage_denim(value)


# Built-in decoders tried for each category, in order
CATEGORY_DECODERS: Dict[str, List[Callable[[str], Optional[DecodedValue]]]] = {
    'luxury_handbags': [decode_louis_vuitton_date_code, _hermes_single_letter],
    'sneakers': [decode_nike_style_code],
    'watches': [decode_rolex_reference, decode_rolex_serial],
    'vintage_denim': [analyze_vintage_denim],
}

# Fallback by declared identifier type, in order
TYPE_FALLBACK_DECODERS: Dict[str, List[Callable[[str], Optional[DecodedValue]]]] = {
    IdentifierKind.DATE_CODE.value: [decode_louis_vuitton_date_code, _hermes_single_letter],
    IdentifierKind.STYLE_NUMBER.value: [decode_nike_style_code],
    IdentifierKind.MODEL_NUMBER.value: [decode_rolex_reference],
    IdentifierKind.OTHER.value: [_denim_if_long_enough],
}

# Last resort when the category may be wrong: (min length, max length, decoder)
SHAPE_FALLBACK_DECODERS: List[Tuple[int, int, Callable[[str], Optional[DecodedValue]]]] = [
    (5, 6, decode_louis_vuitton_date_code),
    (9, 11, decode_nike_style_code),
    (5, 10, decode_rolex_reference),
    (1, 1, decode_hermes_blindstamp),
]


def _first_success(decoders: Iterable[Callable[[str], Optional[DecodedValue]]], value: str) -> Optional[DecodedValue]:
    for decoder in decoders:
        result = decoder(value)
        if result is not None and result.success:
            return result
    return None


def _active_definitions(definitions: Sequence[DecoderDefinition], category: str) -> List[DecoderDefinition]:
    active = [d for d in definitions if d.is_active and (not d.category_id or d.category_id == category)]
    return sorted(active, key=lambda d: d.priority, reverse=True)


def decode_identifier_value(
    raw: str,
    category_id: CategoryLike,
    identifier_type: Optional[str] = None,
    decoder_overrides: Sequence[DecoderDefinition] = (),
) -> Optional[DecodedValue]:
    """Decode a bare string. See module docstring for the routing order."""
    if not isinstance(raw, str):
        return None
    value = raw.strip()
    if not value or len(value) > MAX_IDENTIFIER_LENGTH:
        return None

    category = category_key(category_id)

    for definition in _active_definitions(decoder_overrides, category):
        result = decode_with_definition(definition, value)
        if result.success:
            logger.debug(f"[DECODE] {value} decoded by override {definition.id}")
            return result

    result = _first_success(CATEGORY_DECODERS.get(category, []), value)
    if result is not None:
        return result

    if identifier_type:
        result = _first_success(TYPE_FALLBACK_DECODERS.get(kind_key(identifier_type), []), value)
        if result is not None:
            return result

    shaped = [decoder for low, high, decoder in SHAPE_FALLBACK_DECODERS if low <= len(value) <= high]
    result = _first_success(shaped, value)
    if result is not None:
        logger.debug(f"[DECODE] {value} decoded by shape as {result.identifier_type} outside {category}")
        return result

    return None


def decode_identifier(
    identifier: ExtractedIdentifier,
    category_id: CategoryLike,
    decoder_overrides: Sequence[DecoderDefinition] = (),
) -> Optional[DecodedValue]:
    """Decode one extracted identifier, or None when nothing recognizes it."""
    if identifier is None:
        return None
    return decode_identifier_value(identifier.value, category_id, identifier.type, decoder_overrides)


def flatten_decoded(result: DecodedValue) -> Dict[str, str]:
    """Flatten a decode into the string-only mapping stored on an identifier."""
    flat = {
        '_type': result.identifier_type,
        '_confidence': safe_stringify(clamp_confidence(result.confidence)),
    }
    for key, value in result.decoded.items():
        if value is None:
            continue
        flat[key] = safe_stringify(value)
    return flat


def decode_identifiers(
    identifiers: Iterable[ExtractedIdentifier],
    category_id: CategoryLike,
    decoder_overrides: Sequence[DecoderDefinition] = (),
) -> List[ExtractedIdentifier]:
    """
    Decode every identifier, returning new instances.

    Successful decodes get a flat `decoded` mapping and their confidence
    raised to the better of the two; failures pass through unchanged.
    """
    augmented = []
    for identifier in identifiers:
        result = decode_identifier(identifier, category_id, decoder_overrides)
        if result is None:
            augmented.append(identifier)
            continue
        merged = dict(identifier.decoded or {})
        merged.update(flatten_decoded(result))
        augmented.append(replace(
            identifier,
            decoded=merged,
            confidence=clamp_confidence(max(
                clamp_confidence(identifier.confidence),
                clamp_confidence(result.confidence),
            )),
        ))
    return augmented


def decode_identifier_values(
    values: Iterable[str],
    category_id: CategoryLike,
    decoder_overrides: Sequence[DecoderDefinition] = (),
) -> List[DecodedValue]:
    """Decode bare strings, keeping successes only."""
    results = []
    for value in values:
        result = decode_identifier_value(value, category_id, decoder_overrides=decoder_overrides)
        if result is not None:
            results.append(result)
    return results
