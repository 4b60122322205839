"""
Domain Knowledge Service

Single entry point for the research pipeline: decode identifiers, detect
value drivers and check authenticity, with optional rule overrides layered
over the static tables.

Usage:
    service = DomainKnowledgeService()                      # static tables only
    service = DomainKnowledgeService(FileRuleSource(path))  # with overrides

    decoded = service.decode_identifiers(identifiers, 'luxury_handbags')
    matches = service.detect_value_drivers(fields, 'luxury_handbags', brand='Hermes')
    multiplier = service.calculate_value_multiplier(matches)
    auth = service.check_authenticity(identifiers, texts, 'luxury_handbags', 'Louis Vuitton')
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from ..config import OVERRIDES_ENABLED, RULE_OVERRIDES_PATH
from ..decoders import dispatcher
from ..knowledge.rules import AUTHENTICITY_MARKERS, VALUE_DRIVERS
from ..models import (
    AuthenticityCheckResult,
    CategoryLike,
    DecodedValue,
    DecoderDefinition,
    ExtractedIdentifier,
    ValueDriverMatch,
)
from ..utils import decoded as decoded_readers
from . import authenticity, value_drivers
from .rule_sources import FileRuleSource, RuleOverrides, RuleSource, merge_by_id

logger = logging.getLogger(__name__)


class DomainKnowledgeService:
    """Facade over the decoders and rule engines with an injected override source."""

    def __init__(self, rule_source: Optional[RuleSource] = None):
        self.rule_source = rule_source

    @classmethod
    def from_settings(cls) -> "DomainKnowledgeService":
        """Build a service using RULE_OVERRIDES_PATH when overrides are enabled."""
        if OVERRIDES_ENABLED and RULE_OVERRIDES_PATH.exists():
            return cls(FileRuleSource(RULE_OVERRIDES_PATH))
        return cls()

    # ============================================================
    # OVERRIDES
    # ============================================================

    def _decoder_overrides(self, category_id: CategoryLike, brand: Optional[str]) -> List[DecoderDefinition]:
        if self.rule_source is None:
            return []
        try:
            return list(self.rule_source.fetch_decoder_overrides_for(category_id, brand) or [])
        except Exception as e:
            logger.warning(f"[OVERRIDES] Decoder overrides unavailable, using built-ins: {e}")
            return []

    def _rule_overrides(self, category_id: CategoryLike, brand: Optional[str]) -> RuleOverrides:
        if self.rule_source is None:
            return RuleOverrides()
        try:
            return self.rule_source.fetch_rule_overrides_for(category_id, brand) or RuleOverrides()
        except Exception as e:
            logger.warning(f"[OVERRIDES] Rule overrides unavailable, using static tables: {e}")
            return RuleOverrides()

    # ============================================================
    # DECODING
    # ============================================================

    def decode_identifier(
        self,
        identifier: ExtractedIdentifier,
        category_id: CategoryLike,
        brand: Optional[str] = None,
    ) -> Optional[DecodedValue]:
        return dispatcher.decode_identifier(
            identifier, category_id, self._decoder_overrides(category_id, brand)
        )

    def decode_identifier_value(
        self,
        raw: str,
        category_id: CategoryLike,
        brand: Optional[str] = None,
    ) -> Optional[DecodedValue]:
        return dispatcher.decode_identifier_value(
            raw, category_id, decoder_overrides=self._decoder_overrides(category_id, brand)
        )

    def decode_identifiers(
        self,
        identifiers: Iterable[ExtractedIdentifier],
        category_id: CategoryLike,
        brand: Optional[str] = None,
    ) -> List[ExtractedIdentifier]:
        return dispatcher.decode_identifiers(
            identifiers, category_id, self._decoder_overrides(category_id, brand)
        )

    # ============================================================
    # VALUE DRIVERS
    # ============================================================

    def detect_value_drivers(
        self,
        field_states: Mapping[str, Any],
        category_id: CategoryLike,
        brand: Optional[str] = None,
    ) -> List[ValueDriverMatch]:
        overrides = self._rule_overrides(category_id, brand)
        drivers = merge_by_id(VALUE_DRIVERS, overrides.value_drivers)
        return value_drivers.detect_value_drivers(field_states, category_id, brand, drivers)

    @staticmethod
    def calculate_value_multiplier(matches: Sequence[ValueDriverMatch]) -> float:
        return value_drivers.calculate_value_multiplier(matches)

    # ============================================================
    # AUTHENTICITY
    # ============================================================

    def check_authenticity(
        self,
        identifiers: Sequence[ExtractedIdentifier],
        extracted_text: Sequence[str],
        category_id: CategoryLike,
        brand: Optional[str] = None,
    ) -> AuthenticityCheckResult:
        overrides = self._rule_overrides(category_id, brand)
        markers = merge_by_id(AUTHENTICITY_MARKERS, overrides.authenticity_markers)
        return authenticity.check_authenticity(identifiers, extracted_text, category_id, brand, markers)

    # ============================================================
    # READERS
    # ============================================================

    @staticmethod
    def get_year_from_decoded(decoded: Optional[DecodedValue]) -> Optional[int]:
        return decoded_readers.get_year_from_decoded(decoded)

    @staticmethod
    def get_origin_from_decoded(decoded: Optional[DecodedValue]) -> Optional[Dict[str, str]]:
        return decoded_readers.get_origin_from_decoded(decoded)

    @staticmethod
    def is_discontinued_or_vintage(decoded: Optional[DecodedValue]) -> bool:
        return decoded_readers.is_discontinued_or_vintage(decoded)
