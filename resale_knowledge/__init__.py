"""
resale_knowledge

Identifier decoding, value-driver detection and authenticity checking for
resale listings.
"""

from .models import (
    Assessment,
    AuthenticityCheckResult,
    AuthenticityMarkerCheckResult,
    AuthenticityMarkerDef,
    CategoryId,
    DecodedValue,
    DecoderDefinition,
    ExtractedIdentifier,
    FieldState,
    IdentifierKind,
    Importance,
    ValueDriver,
    ValueDriverMatch,
)
from .exceptions import KnowledgeError, RuleDefinitionError, InvalidPatternError, OverrideLoadError
from .knowledge.rules import AUTHENTICITY_MARKERS, VALUE_DRIVERS
from .decoders import decode_identifier, decode_identifier_value, decode_identifiers
from .utils.decoded import get_year_from_decoded, get_origin_from_decoded, is_discontinued_or_vintage
from .services import (
    DomainKnowledgeService,
    FileRuleSource,
    RuleSource,
    StaticRuleSource,
    calculate_value_multiplier,
    check_authenticity,
    detect_value_drivers,
)

__version__ = "0.1.0"
