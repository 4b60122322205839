"""
Value Driver Condition Grammar

Driver conditions are short English phrases kept as data. Each one is parsed
once, when the driver is loaded, into one of these kinds (first match wins):

    text contains "a", b, c     -> CONTAINS: any term is a substring of the value
    <attr> is a, b or c         -> ONE_OF:   exact (high) or partial (medium) match
    <attr> includes a, b        -> ONE_OF
    <anything else>             -> BESPOKE if a matcher is registered for the
                                   driver id, otherwise NEVER

Usage:
    parsed = parse_condition("hermes_phw", "hardware is palladium or PHW")
    hit = evaluate_condition(parsed, "hardware", "Palladium")
    # (0.95, 'Value "palladium" matches condition "palladium"')
"""

import re
import logging
from enum import Enum
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from ..config import CONFIDENCE
from ..knowledge.watches import get_rolex_reference_info

# (confidence, reasoning)
ConditionHit = Tuple[float, str]

logger = logging.getLogger(__name__)


class ConditionKind(str, Enum):
    CONTAINS = "contains"
    ONE_OF = "one_of"
    BESPOKE = "bespoke"
    NEVER = "never"


@dataclass(frozen=True)
class ParsedCondition:
    kind: ConditionKind
    terms: Tuple[str, ...] = ()
    matcher: Optional[str] = None


_TEXT_CONTAINS = "text contains"
_ONE_OF_KEYWORD = re.compile(r'\b(?:is|includes)\b', re.IGNORECASE)
_QUOTED = re.compile(r'"([^"]+)"')
_BARE_SPLIT = re.compile(r'[\s,]+')
_ALLOWED_SPLIT = re.compile(r'\s*,\s*(?:or\s+)?|\s+or\s+')
_CONNECTORS = {'or', 'and', 'etc', 'etc.'}


# ============================================================
# BESPOKE MATCHERS
# ============================================================

def match_big_e_label(value: str) -> Optional[ConditionHit]:
    """
    Levi's "Big E": pre-1971 red tabs spell LEVI'S in capitals. Needs the
    original casing, so it runs on the raw value.
    """
    lowered = value.lower()
    if "levi's" not in lowered and "levis" not in lowered and "big e" not in lowered:
        return None
    if "LEVI'S" in value and "Levi's" not in value:
        return CONFIDENCE.good, "Found Big E capitalization in label text"
    if "big e" in lowered:
        return CONFIDENCE.medium_high, "Big E explicitly mentioned"
    return None


_REFERENCE_TOKEN = re.compile(r'\b\d{5,6}[A-Z]{0,4}\b')


def match_discontinued_reference(value: str) -> Optional[ConditionHit]:
    """Flag a watch whose reference number the catalog marks as discontinued."""
    for token in _REFERENCE_TOKEN.findall(value.upper()):
        info = get_rolex_reference_info(token)
        if info and info.get('discontinued'):
            return CONFIDENCE.high, f"Reference {token} ({info['name']}) is discontinued"
    return None


BESPOKE_MATCHERS: Dict[str, Callable[[str], Optional[ConditionHit]]] = {
    'levis_big_e': match_big_e_label,
    'discontinued_reference': match_discontinued_reference,
}


# ============================================================
# PARSING
# ============================================================

def _clean(term: str) -> str:
    return term.strip().strip('"\'').strip().lower()


def _contains_terms(remainder: str) -> Tuple[str, ...]:
    terms = [_clean(t) for t in _QUOTED.findall(remainder)]
    bare = _QUOTED.sub(' ', remainder)
    terms.extend(_clean(t) for t in _BARE_SPLIT.split(bare))
    seen = []
    for term in terms:
        if len(term) > 1 and term not in _CONNECTORS and term not in seen:
            seen.append(term)
    return tuple(seen)


def _allowed_values(remainder: str) -> Tuple[str, ...]:
    values = []
    for part in _ALLOWED_SPLIT.split(remainder):
        value = _clean(part)
        if value.startswith('or '):
            value = value[3:].strip()
        if len(value) > 1 and value not in _CONNECTORS and value not in values:
            values.append(value)
    return tuple(values)


def parse_condition(driver_id: str, condition: str) -> ParsedCondition:
    """Resolve a condition phrase to its matcher kind. Never raises."""
    text = (condition or "").strip()
    lowered = text.lower()

    idx = lowered.find(_TEXT_CONTAINS)
    if idx >= 0:
        terms = _contains_terms(text[idx + len(_TEXT_CONTAINS):])
        if terms:
            return ParsedCondition(ConditionKind.CONTAINS, terms)

    keyword = _ONE_OF_KEYWORD.search(text)
    if keyword:
        values = _allowed_values(text[keyword.end():])
        if values:
            return ParsedCondition(ConditionKind.ONE_OF, values)

    if driver_id in BESPOKE_MATCHERS:
        return ParsedCondition(ConditionKind.BESPOKE, matcher=driver_id)

    logger.debug(f"[DRIVERS] Condition for {driver_id} not understood, it will never match: {text!r}")
    return ParsedCondition(ConditionKind.NEVER)


# ============================================================
# EVALUATION
# ============================================================

def evaluate_condition(parsed: ParsedCondition, attribute: str, value: str) -> Optional[ConditionHit]:
    """
    Test one field value against a parsed condition.

    Returns (confidence, reasoning) on a match, None otherwise.
    """
    if value is None:
        return None
    raw = str(value)
    lowered = raw.strip().lower()
    if not lowered:
        return None

    if parsed.kind == ConditionKind.CONTAINS:
        for term in parsed.terms:
            if term in lowered:
                return CONFIDENCE.low, f'Found "{term}" in {attribute}'
        return None

    if parsed.kind == ConditionKind.ONE_OF:
        for allowed in parsed.terms:
            if lowered == allowed:
                return CONFIDENCE.high, f'Value "{lowered}" matches condition "{allowed}"'
        for allowed in parsed.terms:
            if allowed in lowered or (len(lowered) > 1 and lowered in allowed):
                return CONFIDENCE.medium, f'Value "{lowered}" matches condition "{allowed}"'
        return None

    if parsed.kind == ConditionKind.BESPOKE:
        matcher = BESPOKE_MATCHERS.get(parsed.matcher)
        return matcher(raw) if matcher else None

    return None
