# Tests - decoding dispatcher

import math

import pytest

from resale_knowledge.decoders.dispatcher import (
    decode_identifier,
    decode_identifier_value,
    decode_identifier_values,
    decode_identifiers,
)
from resale_knowledge.models import CategoryId, DecoderDefinition, ExtractionRule, ExtractedIdentifier
from resale_knowledge.utils.decoded import (
    get_origin_from_decoded,
    get_year_from_decoded,
    is_discontinued_or_vintage,
)


class TestEndToEnd:
    """Tests the worked examples across dispatcher and readers."""

    def test_lv_date_code(self, identifier):
        """Test SD1234 against handbags decodes to San Dimas, 2024, not vintage."""
        result = decode_identifier(identifier('date_code', 'SD1234'), CategoryId.LUXURY_HANDBAGS)
        assert result.success is True
        assert result.identifier_type == 'lv_date_code'
        origin = get_origin_from_decoded(result)
        assert origin['country'] == 'USA'
        assert 'California' in origin['location']
        assert get_year_from_decoded(result) == 2024
        assert is_discontinued_or_vintage(result) is False

    def test_lv_year_2000_is_vintage(self, identifier):
        """Test 00 year digits make the bag vintage."""
        result = decode_identifier(identifier('date_code', 'SD1030'), 'luxury_handbags')
        assert get_year_from_decoded(result) == 2000
        assert is_discontinued_or_vintage(result) is True

    def test_denim_text(self, identifier):
        """Test free text against vintage denim."""
        result = decode_identifier(identifier('other', "LEVI'S 501 MADE IN USA SELVEDGE"), 'vintage_denim')
        assert result.success is True
        assert result.identifier_type == 'denim_analysis'
        assert is_discontinued_or_vintage(result) is True

    def test_short_denim_text(self, identifier):
        """Test short text with no indicators decodes to nothing."""
        assert decode_identifier(identifier('other', 'SHORT'), 'vintage_denim') is None


class TestRouting:
    """Tests category routing and type fallback."""

    @pytest.mark.parametrize("raw", ["", "   ", "X" * 51])
    def test_rejects_blank_and_oversized(self, raw):
        """Test blank and over-50-character input returns None."""
        assert decode_identifier_value(raw, 'luxury_handbags', 'date_code') is None

    def test_none_identifier(self):
        """Test a missing identifier returns None."""
        assert decode_identifier(None, 'watches') is None

    def test_handbag_single_letter(self, identifier):
        """Test a single letter in handbags goes to the Hermes decoder."""
        result = decode_identifier(identifier('date_code', 'E'), 'luxury_handbags')
        assert result.identifier_type == 'hermes_blindstamp'
        assert result.decoded['year'] == 2001

    def test_watch_serial_in_category(self, identifier):
        """Test watches try the serial decoder after the reference decoder."""
        result = decode_identifier(identifier('other', 'R123456'), 'watches')
        assert result.identifier_type == 'rolex_serial'

    def test_style_number_fallback(self, identifier):
        """Test declared style numbers fall back to Nike outside sneakers."""
        result = decode_identifier(identifier('style_number', 'CW2288-111'), 'general')
        assert result.identifier_type == 'nike_style_code'

    def test_model_number_fallback(self, identifier):
        """Test declared model numbers fall back to Rolex."""
        result = decode_identifier(identifier('model_number', '126610LN'), 'general')
        assert result.identifier_type == 'rolex_reference'

    def test_date_code_fallback_hermes_only_single_char(self, identifier):
        """Test the Hermes fallback only runs on one-character values."""
        assert decode_identifier(identifier('date_code', 'D'), 'general').decoded['year'] == 2000
        assert decode_identifier(identifier('date_code', 'DD'), 'general') is None

    def test_other_fallback_needs_length(self, identifier):
        """Test the denim fallback needs more than 10 characters."""
        assert decode_identifier(identifier('other', 'MADE IN USA'), 'general').identifier_type == 'denim_analysis'
        assert decode_identifier(identifier('other', 'USA MADE'), 'general') is None

    def test_category_without_decoders(self, identifier):
        """Test unmapped categories fall through to type and shape fallbacks."""
        assert decode_identifier(identifier('date_code', 'SD1234'), 'trading_cards').success is True
        assert decode_identifier(identifier('style_number', 'PSA-10 GEM'), 'trading_cards') is None

    def test_idempotent(self, identifier):
        """Test decoding twice yields equal results."""
        ident = identifier('date_code', 'SD1234')
        assert decode_identifier(ident, 'luxury_handbags') == decode_identifier(ident, 'luxury_handbags')

    def test_decode_values_keeps_successes(self):
        """Test bare-string decoding drops failures."""
        results = decode_identifier_values(['116610LN', 'nonsense', '5600000'], 'watches')
        assert [r.identifier_type for r in results] == ['rolex_reference', 'rolex_serial']


class TestShapeFallback:
    """Tests decoding by value shape when category and type both miss."""

    def test_lv_code_in_general(self, identifier):
        """Test a date code with no declared type is still decoded."""
        result = decode_identifier(identifier('other', 'SD1234'), 'general')
        assert result.identifier_type == 'lv_date_code'
        assert result.decoded['year'] == 2024

    def test_rolex_reference_in_handbags(self, identifier):
        """Test a watch reference listed under handbags is still decoded."""
        result = decode_identifier(identifier('other', '116610LN'), 'luxury_handbags')
        assert result.identifier_type == 'rolex_reference'
        assert result.decoded['model_family'] == 'Submariner'

    def test_nike_code_in_watches(self, identifier):
        """Test a style code outside sneakers is still decoded."""
        result = decode_identifier(identifier('other', 'CW2288-111'), 'watches')
        assert result.identifier_type == 'nike_style_code'

    def test_single_letter_in_sneakers(self):
        """Test a lone letter falls back to the Hermes decoder."""
        result = decode_identifier_value('E', 'sneakers')
        assert result.identifier_type == 'hermes_blindstamp'

    @pytest.mark.parametrize("raw", ['SD12', 'CW2288-111-XX', 'hello world'])
    def test_outside_length_gates(self, raw):
        """Test values outside every shape gate stay undecoded."""
        assert decode_identifier_value(raw, 'general') is None


class TestOverrideDefinitions:
    """Tests override decoder definitions in the dispatcher."""

    @pytest.fixture
    def gucci_definition(self):
        """Definition claiming LV-shaped codes for handbags."""
        return DecoderDefinition(
            id='gucci_serial',
            name='Gucci Serial',
            category_id='luxury_handbags',
            input_pattern=r'([A-Z]{2})(\d{4})',
            extraction_rules=(ExtractionRule(1, 'prefix'), ExtractionRule(2, 'number', 'int')),
            priority=10,
        )

    def test_override_tried_first(self, identifier, gucci_definition):
        """Test active override definitions run before built-ins."""
        result = decode_identifier(identifier('date_code', 'SD1234'), 'luxury_handbags', [gucci_definition])
        assert result.identifier_type == 'gucci_serial'
        assert result.decoded == {'prefix': 'SD', 'number': 1234}

    def test_inactive_override_skipped(self, identifier, gucci_definition):
        """Test inactive definitions are ignored."""
        inactive = DecoderDefinition(
            id='gucci_serial',
            name='Gucci Serial',
            category_id='luxury_handbags',
            input_pattern=r'([A-Z]{2})(\d{4})',
            is_active=False,
        )
        result = decode_identifier(identifier('date_code', 'SD1234'), 'luxury_handbags', [inactive])
        assert result.identifier_type == 'lv_date_code'

    def test_override_for_other_category_skipped(self, identifier, gucci_definition):
        """Test definitions for another category do not run."""
        result = decode_identifier(identifier('style_number', 'CW2288-111'), 'sneakers', [gucci_definition])
        assert result.identifier_type == 'nike_style_code'


class TestDecodeIdentifiers:
    """Tests bulk decoding and augmentation."""

    def test_augments_successes(self, identifier):
        """Test decoded payload is flattened to strings and confidence raised."""
        original = identifier('date_code', 'SD1234', confidence=0.5)
        [augmented] = decode_identifiers([original], 'luxury_handbags')
        assert augmented is not original
        assert original.decoded is None
        assert augmented.confidence == pytest.approx(0.95)
        assert augmented.decoded['_type'] == 'lv_date_code'
        assert augmented.decoded['_confidence'] == '0.95'
        assert augmented.decoded['week'] == '13'
        assert augmented.decoded['year'] == '2024'
        assert augmented.decoded['factory_location'] == 'San Dimas, California'
        assert all(isinstance(v, str) for v in augmented.decoded.values())

    def test_keeps_higher_original_confidence(self, identifier):
        """Test the better of the two confidences is kept."""
        [augmented] = decode_identifiers([identifier('model_number', '123456', confidence=0.8)], 'watches')
        assert augmented.confidence == pytest.approx(0.8)

    def test_failures_pass_through(self, identifier):
        """Test undecodable identifiers are returned unchanged."""
        original = identifier('other', 'SHORT')
        assert decode_identifiers([original], 'vintage_denim')[0] is original

    def test_list_values_joined(self, identifier):
        """Test list payload values are comma-joined."""
        [augmented] = decode_identifiers(
            [identifier('other', "LEVI'S 501 MADE IN USA SELVEDGE")], 'vintage_denim'
        )
        assert augmented.decoded['value_indicators'] == "Big E label (pre-1971), Selvedge denim, Made in USA"
        assert augmented.decoded['is_big_e'] == 'true'

    @pytest.mark.parametrize("bad", [math.nan, math.inf, 1.5])
    def test_confidence_bounds(self, bad):
        """Test non-finite or oversized input confidence still yields [0, 1]."""
        ident = ExtractedIdentifier(type='date_code', value='SD1234', confidence=bad)
        [augmented] = decode_identifiers([ident], 'luxury_handbags')
        assert 0.0 <= augmented.confidence <= 1.0
