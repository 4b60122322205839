"""
Data model for resale_knowledge.

Rule records (ValueDriver, AuthenticityMarkerDef, DecoderDefinition) validate
themselves on construction and precompile whatever they need, so a bad record
is rejected with RuleDefinitionError when it is loaded rather than when it is
evaluated. Result records are plain containers.
"""

import re
from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Pattern, Tuple, Union

from .exceptions import RuleDefinitionError, InvalidPatternError
from .utils.conditions import ParsedCondition, parse_condition


# ============================================================
# ENUMS
# ============================================================

class CategoryId(str, Enum):
    """Product categories the knowledge tables cover"""
    SNEAKERS = "sneakers"
    LUXURY_HANDBAGS = "luxury_handbags"
    WATCHES = "watches"
    ELECTRONICS_PHONES = "electronics_phones"
    ELECTRONICS_GAMING = "electronics_gaming"
    TRADING_CARDS = "trading_cards"
    VINTAGE_DENIM = "vintage_denim"
    DESIGNER_CLOTHING = "designer_clothing"
    AUDIO_EQUIPMENT = "audio_equipment"
    GENERAL = "general"


class IdentifierKind(str, Enum):
    """What the extractor believed an identifier to be"""
    DATE_CODE = "date_code"
    STYLE_NUMBER = "style_number"
    MODEL_NUMBER = "model_number"
    OTHER = "other"


class Importance(str, Enum):
    CRITICAL = "critical"
    IMPORTANT = "important"
    HELPFUL = "helpful"


class Assessment(str, Enum):
    LIKELY_AUTHENTIC = "likely_authentic"
    UNCERTAIN = "uncertain"
    LIKELY_FAKE = "likely_fake"
    INSUFFICIENT_DATA = "insufficient_data"


CategoryLike = Union[CategoryId, str]


def category_key(category: Optional[CategoryLike]) -> str:
    """Normalize a CategoryId member or plain string to the bare string value."""
    if category is None:
        return ""
    if isinstance(category, Enum):
        return str(category.value)
    return str(category).strip().lower()


def kind_key(kind: Any) -> str:
    if isinstance(kind, Enum):
        return str(kind.value)
    return str(kind or "").strip().lower()


# ============================================================
# DECODING INPUT / OUTPUT
# ============================================================

@dataclass(frozen=True)
class ExtractedIdentifier:
    """An identifier pulled out of a listing by an upstream extractor"""
    type: Union[IdentifierKind, str]
    value: str
    confidence: float = 0.0
    source: str = ""
    decoded: Optional[Dict[str, str]] = None


@dataclass
class DecodedValue:
    """Result of running one decoder over one raw string"""
    identifier_type: str
    success: bool
    confidence: float
    raw_value: str
    decoded: Dict[str, Any] = field(default_factory=dict)
    decoder_used: Optional[str] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class FieldState:
    """Current value of one listing attribute and how sure we are of it"""
    value: Any
    confidence: float = 0.0


# ============================================================
# VALUE DRIVERS
# ============================================================

@dataclass(frozen=True)
class ValueDriver:
    """
    A declarative rule: when `attribute` satisfies `check_condition`, the item
    is worth `price_multiplier` times a plain comparable.

    The condition grammar is resolved once here; see utils.conditions.
    """
    id: str
    name: str
    attribute: str
    category_id: str
    check_condition: str
    price_multiplier: float
    priority: int = 0
    applicable_brands: Tuple[str, ...] = ()
    description: str = ""
    condition: ParsedCondition = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, 'category_id', category_key(self.category_id))
        if not self.id:
            raise RuleDefinitionError(
                None, "value driver is missing an id", field="id", category_id=self.category_id
            )
        if not self.attribute:
            raise RuleDefinitionError(
                self.id, "value driver is missing an attribute", field="attribute",
                category_id=self.category_id,
            )
        if not self.check_condition:
            raise RuleDefinitionError(
                self.id, "value driver is missing a condition", field="check_condition",
                category_id=self.category_id,
            )
        if not isinstance(self.price_multiplier, (int, float)) or isinstance(self.price_multiplier, bool) \
                or not self.price_multiplier > 0:
            raise RuleDefinitionError(
                self.id, "price multiplier must be a positive number", field="price_multiplier",
                category_id=self.category_id,
            )
        object.__setattr__(self, 'applicable_brands', tuple(self.applicable_brands or ()))
        object.__setattr__(self, 'condition', parse_condition(self.id, self.check_condition))

    @property
    def brand_agnostic(self) -> bool:
        return not self.applicable_brands

    def applies_to_brand(self, brand: Optional[str]) -> bool:
        if self.brand_agnostic:
            return True
        if not brand:
            return False
        wanted = brand.strip().lower()
        return any(b.lower() == wanted for b in self.applicable_brands)


@dataclass
class ValueDriverMatch:
    driver: ValueDriver
    matched_value: str
    confidence: float
    reasoning: str


# ============================================================
# AUTHENTICITY
# ============================================================

@dataclass(frozen=True)
class AuthenticityMarkerDef:
    """
    A single authenticity check. Markers without a pattern cannot be verified
    from text and are reported as manual checks.
    """
    id: str
    name: str
    category_id: str
    importance: Union[Importance, str]
    check_description: str = ""
    brands: Tuple[str, ...] = ()
    pattern: Optional[str] = None
    indicates_authentic: bool = True
    compiled: Optional[Pattern] = field(init=False, repr=False, compare=False, default=None)

    def __post_init__(self):
        object.__setattr__(self, 'category_id', category_key(self.category_id))
        if not self.id:
            raise RuleDefinitionError(
                None, "authenticity marker is missing an id", field="id", category_id=self.category_id
            )
        try:
            importance = Importance(kind_key(self.importance))
        except ValueError as e:
            raise RuleDefinitionError(
                self.id, f"unknown importance {self.importance!r}", field="importance", cause=e,
                category_id=self.category_id,
            )
        object.__setattr__(self, 'importance', importance)
        object.__setattr__(self, 'brands', tuple(self.brands or ()))
        if self.pattern:
            try:
                compiled = re.compile(self.pattern, re.IGNORECASE)
            except re.error as e:
                raise InvalidPatternError(self.id, self.pattern, cause=e, category_id=self.category_id)
            object.__setattr__(self, 'compiled', compiled)

    def applies_to_brand(self, brand: Optional[str]) -> bool:
        if not brand:
            return False
        wanted = brand.strip().lower()
        return any(b.lower() == wanted for b in self.brands)


@dataclass
class AuthenticityMarkerCheckResult:
    marker: AuthenticityMarkerDef
    passed: bool
    confidence: float
    details: str
    checked_value: Optional[str] = None


@dataclass
class AuthenticityCheckResult:
    assessment: Assessment
    confidence: float
    markers_checked: List[AuthenticityMarkerCheckResult] = field(default_factory=list)
    summary: str = ""
    warnings: List[str] = field(default_factory=list)


# ============================================================
# DATA-DRIVEN DECODER DEFINITIONS
# ============================================================

EXTRACTION_TRANSFORMS = ('none', 'int', 'year', 'lookup')
VALIDATION_TYPES = ('range', 'regex', 'lookup_exists')
OUTPUT_CASTS = ('number', 'string', 'boolean')


@dataclass(frozen=True)
class ExtractionRule:
    """Copy one regex capture group into a payload field, optionally transformed"""
    capture_group: int
    output_field: str
    transform: str = 'none'


@dataclass(frozen=True)
class ValidationRule:
    """Post-extraction check; failing it caps the decode confidence"""
    field: str
    rule_type: str
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    pattern: Optional[str] = None
    failure_confidence: float = 0.0
    error_message: str = ""


@dataclass(frozen=True)
class DecoderDefinition:
    """
    A decoder described entirely by data: an anchored input pattern, capture
    group extraction, optional lookup table and validation rules.

    Lets new identifier formats ship as override documents with no code change.
    """
    id: str
    name: str
    category_id: str
    input_pattern: str
    extraction_rules: Tuple[ExtractionRule, ...] = ()
    identifier_type: str = IdentifierKind.OTHER.value
    brands: Tuple[str, ...] = ()
    lookup_table: Mapping[str, Any] = field(default_factory=dict)
    validation_rules: Tuple[ValidationRule, ...] = ()
    output_fields: Mapping[str, str] = field(default_factory=dict)
    base_confidence: float = 0.9
    input_max_length: int = 50
    priority: int = 0
    is_active: bool = True
    compiled: Pattern = field(init=False, repr=False, compare=False, default=None)

    def __post_init__(self):
        object.__setattr__(self, 'category_id', category_key(self.category_id))
        if not self.id:
            raise RuleDefinitionError(
                None, "decoder definition is missing an id", field="id", category_id=self.category_id
            )
        if not self.input_pattern:
            raise RuleDefinitionError(
                self.id, "decoder definition is missing an input pattern", field="input_pattern",
                category_id=self.category_id,
            )
        pattern = self.input_pattern
        # Definitions are always matched whole-string
        if not pattern.startswith('^'):
            pattern = '^' + pattern
        if not pattern.endswith('$'):
            pattern = pattern + '$'
        try:
            compiled = re.compile(pattern, re.IGNORECASE)
        except re.error as e:
            raise InvalidPatternError(self.id, self.input_pattern, cause=e, category_id=self.category_id)

        for rule in self.extraction_rules:
            if rule.transform not in EXTRACTION_TRANSFORMS:
                raise RuleDefinitionError(
                    self.id, f"unknown transform {rule.transform!r}", field="extraction_rules",
                    category_id=self.category_id,
                )
            if rule.capture_group < 0 or rule.capture_group > compiled.groups:
                raise RuleDefinitionError(
                    self.id, f"capture group {rule.capture_group} not in pattern", field="extraction_rules",
                    category_id=self.category_id,
                )
        for rule in self.validation_rules:
            if rule.rule_type not in VALIDATION_TYPES:
                raise RuleDefinitionError(
                    self.id, f"unknown validation {rule.rule_type!r}", field="validation_rules",
                    category_id=self.category_id,
                )
            if rule.rule_type == 'regex':
                try:
                    re.compile(rule.pattern or '')
                except re.error as e:
                    raise InvalidPatternError(
                        self.id, rule.pattern or '', cause=e, category_id=self.category_id
                    )
        for name, cast in self.output_fields.items():
            if cast not in OUTPUT_CASTS:
                raise RuleDefinitionError(
                    self.id, f"unknown cast {cast!r} for {name}", field="output_fields",
                    category_id=self.category_id,
                )
        if self.input_max_length <= 0:
            raise RuleDefinitionError(
                self.id, "input max length must be positive", field="input_max_length",
                category_id=self.category_id,
            )

        object.__setattr__(self, 'identifier_type', kind_key(self.identifier_type))
        object.__setattr__(self, 'brands', tuple(self.brands or ()))
        object.__setattr__(self, 'extraction_rules', tuple(self.extraction_rules))
        object.__setattr__(self, 'validation_rules', tuple(self.validation_rules))
        object.__setattr__(self, 'compiled', compiled)

    def applies_to_brand(self, brand: Optional[str]) -> bool:
        if not self.brands:
            return True
        if not brand:
            return False
        wanted = brand.strip().lower()
        return any(b.lower() == wanted for b in self.brands)
