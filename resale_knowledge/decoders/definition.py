"""
Interpreter for data-driven decoder definitions.

A DecoderDefinition describes a decoder as data (pattern, capture groups,
lookup table, validations), so override sources can publish new identifier
formats without shipping code. Like the built-in decoders, this never raises.
"""

import re
import logging
from typing import Any, Dict, List, Mapping, Optional, Set

from ..models import DecodedValue, DecoderDefinition, ExtractionRule
from ..utils.confidence import clamp_confidence
from .base import expand_two_digit_year, failure_result, success_result

logger = logging.getLogger(__name__)


def _empty_payload(definition: DecoderDefinition) -> Dict[str, Any]:
    payload = {rule.output_field: None for rule in definition.extraction_rules}
    for name in definition.output_fields:
        payload.setdefault(name, None)
    return payload


def _to_int(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _apply_transform(
    rule: ExtractionRule,
    captured: Optional[str],
    lookup_table: Mapping[str, Any],
    payload: Dict[str, Any],
    found_lookups: Set[str],
):
    if rule.transform == 'int':
        payload[rule.output_field] = _to_int(captured)
    elif rule.transform == 'year':
        number = _to_int(captured)
        if number is not None and captured is not None and len(captured) <= 2:
            number = expand_two_digit_year(number)
        payload[rule.output_field] = number
    elif rule.transform == 'lookup':
        key = (captured or '').upper()
        entry = lookup_table.get(key)
        if entry is None:
            payload[rule.output_field] = None
        elif isinstance(entry, Mapping):
            found_lookups.add(rule.output_field)
            payload[rule.output_field] = key
            for name, value in entry.items():
                payload.setdefault(name, value)
        else:
            found_lookups.add(rule.output_field)
            payload[rule.output_field] = entry
    else:
        payload[rule.output_field] = captured


def _cast(value: Any, cast: str) -> Any:
    if value is None:
        return None
    if cast == 'number':
        try:
            number = float(value)
        except (TypeError, ValueError):
            return None
        return int(number) if number.is_integer() else number
    if cast == 'boolean':
        if isinstance(value, str):
            return value.strip().lower() in ('true', 'yes', '1', 'y')
        return bool(value)
    return str(value)


def decode_with_definition(definition: DecoderDefinition, raw: str) -> DecodedValue:
    """Run one definition against a raw identifier."""
    identifier_type = definition.id
    if not isinstance(raw, str):
        return failure_result(identifier_type, raw, "Identifier must be a string", _empty_payload(definition))

    value = raw.strip()
    if not value or len(value) > definition.input_max_length:
        return failure_result(identifier_type, raw, "Empty or oversized identifier", _empty_payload(definition))

    match = definition.compiled.match(value)
    if not match:
        return failure_result(
            identifier_type, raw, f"Does not match {definition.name} format", _empty_payload(definition)
        )

    payload: Dict[str, Any] = {}
    found_lookups: Set[str] = set()
    for rule in definition.extraction_rules:
        _apply_transform(rule, match.group(rule.capture_group), definition.lookup_table, payload, found_lookups)

    confidence = clamp_confidence(definition.base_confidence)
    errors: List[str] = []
    for rule in definition.validation_rules:
        field_value = payload.get(rule.field)
        if rule.rule_type == 'range':
            passed = isinstance(field_value, (int, float)) and not isinstance(field_value, bool)
            if passed and rule.min_value is not None:
                passed = field_value >= rule.min_value
            if passed and rule.max_value is not None:
                passed = field_value <= rule.max_value
        elif rule.rule_type == 'regex':
            passed = field_value is not None and re.search(rule.pattern or '', str(field_value)) is not None
        else:
            passed = rule.field in found_lookups
        if not passed:
            errors.append(rule.error_message or f"{rule.field} failed {rule.rule_type} check")
            confidence = min(confidence, clamp_confidence(rule.failure_confidence))

    if definition.output_fields:
        payload = {
            name: _cast(payload.get(name), cast)
            for name, cast in definition.output_fields.items()
        }

    if errors and confidence <= 0:
        return failure_result(identifier_type, raw, "; ".join(errors), payload)

    result = success_result(identifier_type, raw, confidence, payload)
    if errors:
        result.error = "; ".join(errors)
    logger.debug(f"[DECODE] {definition.name} matched {value} (confidence {confidence:.2f})")
    return result
