# Tests - value driver detection and multiplier

import math

import pytest

from resale_knowledge.exceptions import RuleDefinitionError
from resale_knowledge.models import FieldState, ValueDriver, ValueDriverMatch
from resale_knowledge.services.value_drivers import calculate_value_multiplier, detect_value_drivers


class TestDetectValueDrivers:
    """Tests driver detection against field states."""

    def test_exotic_leather(self):
        """Test exotic leather is found without a brand."""
        matches = detect_value_drivers(
            {'material': FieldState('EXOTIC CROCODILE LEATHER', 0.9)}, 'luxury_handbags'
        )
        assert [m.driver.id for m in matches] == ['exotic_leather']
        assert matches[0].confidence > 0
        assert matches[0].reasoning
        assert matches[0].matched_value == 'EXOTIC CROCODILE LEATHER'

    def test_brand_specific_needs_brand(self):
        """Test Hermes drivers are skipped when no brand is given."""
        fields = {'hardware': FieldState('PHW', 0.8)}
        assert detect_value_drivers(fields, 'luxury_handbags') == []
        matches = detect_value_drivers(fields, 'luxury_handbags', brand='hermes')
        assert [m.driver.id for m in matches] == ['hermes_phw']
        assert matches[0].confidence == pytest.approx(0.95)

    def test_plain_dict_field_states(self):
        """Test plain {'value': ...} dicts are accepted."""
        matches = detect_value_drivers({'condition': {'value': 'Deadstock', 'confidence': 0.7}}, 'sneakers')
        assert [m.driver.id for m in matches] == ['deadstock']

    def test_missing_and_null_fields_skipped(self):
        """Test absent attributes and null values never match."""
        fields = {'grade': FieldState(None), 'edition': None}
        assert detect_value_drivers(fields, 'trading_cards') == []
        assert detect_value_drivers({}, 'trading_cards') == []

    def test_sorted_by_priority_then_confidence(self):
        """Test result ordering."""
        fields = {
            'variant': FieldState('Shadowless'),
            'grade': FieldState('PSA 10'),
            'edition': FieldState('1st Edition Base Set'),
        }
        matches = detect_value_drivers(fields, 'trading_cards')
        assert [m.driver.id for m in matches] == ['psa_10', 'first_edition', 'shadowless']

    def test_big_e_label(self):
        """Test the Big E bespoke matcher through detection."""
        matches = detect_value_drivers(
            {'label_type': FieldState("LEVI'S red tab")}, 'vintage_denim', brand="Levi's"
        )
        assert matches[0].driver.id == 'levis_big_e'
        assert matches[0].confidence == pytest.approx(0.90)

    def test_discontinued_watch(self):
        """Test the discontinued reference matcher through detection."""
        matches = detect_value_drivers({'model': FieldState('116520 Daytona')}, 'watches')
        assert [m.driver.id for m in matches] == ['discontinued_reference']

    def test_custom_driver_pool(self):
        """Test detection against a caller-supplied driver list."""
        driver = ValueDriver(
            id='gold_case',
            name='Gold Case',
            attribute='material',
            category_id='watches',
            check_condition='material is yellow gold, rose gold',
            price_multiplier=2.0,
        )
        matches = detect_value_drivers({'material': FieldState('Rose Gold')}, 'watches', drivers=[driver])
        assert [m.driver.id for m in matches] == ['gold_case']

    def test_partial_allow_list_match(self):
        """Test an allow-listed word inside a longer value scores below an exact match."""
        matches = detect_value_drivers({'dial': FieldState('tropical brown dial')}, 'watches')
        assert [m.driver.id for m in matches] == ['rare_dial']
        assert matches[0].confidence == pytest.approx(0.80)
        exact = detect_value_drivers({'dial': FieldState('Tropical')}, 'watches')
        assert exact[0].confidence == pytest.approx(0.95)


class TestValueMultiplier:
    """Tests combining drivers into one multiplier."""

    def test_empty(self):
        """Test no drivers means no premium."""
        assert calculate_value_multiplier([]) == 1.0

    def test_single_driver_scaled_by_confidence(self, make_match):
        """Test the first driver applies 1 + (m - 1) * c."""
        assert calculate_value_multiplier([make_match(3.0, 1.0)]) == pytest.approx(3.0)
        assert calculate_value_multiplier([make_match(3.0, 0.5)]) == pytest.approx(2.0)

    def test_diminishing_returns(self, make_match):
        """Test later drivers contribute their damped square root."""
        result = calculate_value_multiplier([make_match(3.0, 1.0), make_match(4.0, 1.0)])
        expected = 4.0 * (1 + (math.sqrt(3.0) - 1) * 0.7)
        assert result == pytest.approx(expected)
        assert result < 4.0 * 3.0

    def test_same_driver_twice_diminishing(self, make_match):
        """Test a repeated driver adds less than it did the first time."""
        first = make_match(3.0, 0.9)
        repeat = ValueDriverMatch(
            driver=first.driver, matched_value='mint', confidence=0.9, reasoning='test'
        )
        single = calculate_value_multiplier([first])
        double = calculate_value_multiplier([first, repeat])
        assert single == pytest.approx(2.8)
        assert double == pytest.approx(2.8 * (1 + (math.sqrt(3.0) - 1) * 0.9 * 0.7))
        assert single < double < 2 * single

    def test_order_independent(self, make_match):
        """Test input order does not change the result."""
        a, b, c = make_match(2.5, 0.8), make_match(5.0, 0.9), make_match(1.5, 0.6)
        assert calculate_value_multiplier([a, b, c]) == pytest.approx(calculate_value_multiplier([c, a, b]))

    def test_capped(self, make_match):
        """Test the product never exceeds the cap."""
        matches = [make_match(5.0, 1.0) for _ in range(6)]
        assert calculate_value_multiplier(matches) == pytest.approx(15.0)

    @pytest.mark.parametrize("confidence", [0.0, 0.3, 1.0, math.nan, 2.0])
    def test_bounds(self, make_match, confidence):
        """Test the multiplier stays within [1, 15] for multipliers >= 1."""
        result = calculate_value_multiplier([make_match(4.0, confidence), make_match(1.2, confidence)])
        assert 1.0 <= result <= 15.0


class TestValueDriverDefinition:
    """Tests driver validation at load time."""

    def test_rejects_non_positive_multiplier(self):
        """Test zero multiplier is rejected."""
        with pytest.raises(RuleDefinitionError):
            ValueDriver(
                id='bad', name='Bad', attribute='x', category_id='general',
                check_condition='x is y', price_multiplier=0,
            )

    def test_rejects_missing_attribute(self):
        """Test empty attribute is rejected."""
        with pytest.raises(RuleDefinitionError) as exc_info:
            ValueDriver(
                id='bad', name='Bad', attribute='', category_id='general',
                check_condition='x is y', price_multiplier=1.5,
            )
        assert exc_info.value.to_dict()['error'] == 'RULE_DEFINITION_ERROR'
