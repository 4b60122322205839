# Tests - value driver condition grammar

import pytest

from resale_knowledge.utils.conditions import (
    ConditionKind,
    evaluate_condition,
    match_big_e_label,
    match_discontinued_reference,
    parse_condition,
)


class TestParseCondition:
    """Tests condition kind resolution."""

    def test_text_contains_keeps_quoted_phrases(self):
        """Test quoted phrases stay whole and connectors are dropped."""
        parsed = parse_condition('x', 'text contains selvedge or "red line", a')
        assert parsed.kind == ConditionKind.CONTAINS
        assert set(parsed.terms) == {'red line', 'selvedge'}

    def test_is_allow_list(self):
        """Test 'is' splits on commas and or."""
        parsed = parse_condition('x', 'hardware is palladium or PHW')
        assert parsed.kind == ConditionKind.ONE_OF
        assert parsed.terms == ('palladium', 'phw')

    def test_includes_allow_list(self):
        """Test 'includes' with an Oxford-comma or."""
        parsed = parse_condition('x', 'edition includes off-white, sacai, or union')
        assert parsed.terms == ('off-white', 'sacai', 'union')

    def test_text_contains_wins_over_is(self):
        """Test text contains takes precedence over is."""
        parsed = parse_condition('x', 'text contains vintage which is rare')
        assert parsed.kind == ConditionKind.CONTAINS

    def test_is_must_be_a_word(self):
        """Test 'is' inside another word does not trigger the allow-list grammar."""
        parsed = parse_condition('x', 'visible selvedge line on outseam')
        assert parsed.kind == ConditionKind.NEVER

    def test_bespoke_by_driver_id(self):
        """Test registered driver ids resolve to their bespoke matcher."""
        parsed = parse_condition('levis_big_e', 'label shows "LEVI\'S" with capital E')
        assert parsed.kind == ConditionKind.BESPOKE
        assert parsed.matcher == 'levis_big_e'

    def test_unknown_condition(self):
        """Test unparseable conditions never match."""
        parsed = parse_condition('x', 'looks expensive')
        assert parsed.kind == ConditionKind.NEVER
        assert evaluate_condition(parsed, 'anything', 'expensive') is None


class TestEvaluateCondition:
    """Tests matching field values against parsed conditions."""

    @pytest.fixture
    def hardware(self):
        return parse_condition('hermes_phw', 'hardware is palladium or PHW')

    def test_exact_match_high(self, hardware):
        """Test exact allow-list match."""
        confidence, reasoning = evaluate_condition(hardware, 'hardware', 'PHW')
        assert confidence == pytest.approx(0.95)
        assert reasoning == 'Value "phw" matches condition "phw"'

    def test_partial_match_medium(self, hardware):
        """Test containment in either direction."""
        confidence, _ = evaluate_condition(hardware, 'hardware', 'Palladium plated')
        assert confidence == pytest.approx(0.80)
        confidence, _ = evaluate_condition(hardware, 'hardware', 'pall')
        assert confidence == pytest.approx(0.80)

    def test_no_match(self, hardware):
        """Test unrelated values."""
        assert evaluate_condition(hardware, 'hardware', 'gold') is None

    def test_blank_value(self, hardware):
        """Test blank values never match."""
        assert evaluate_condition(hardware, 'hardware', '  ') is None
        assert evaluate_condition(hardware, 'hardware', None) is None

    def test_contains_match(self):
        """Test substring terms."""
        parsed = parse_condition('x', 'text contains shadowless')
        confidence, reasoning = evaluate_condition(parsed, 'variant', 'Base Set Shadowless')
        assert confidence == pytest.approx(0.70)
        assert reasoning == 'Found "shadowless" in variant'


class TestBespokeMatchers:
    """Tests bespoke matchers."""

    def test_big_e_capitalization(self):
        """Test capital LEVI'S counts as Big E."""
        confidence, reasoning = match_big_e_label("LEVI'S red tab")
        assert confidence == pytest.approx(0.90)
        assert "capitalization" in reasoning

    def test_big_e_mentioned(self):
        """Test an explicit Big E mention."""
        confidence, _ = match_big_e_label("Levi's big e tab")
        assert confidence == pytest.approx(0.85)

    def test_small_e(self):
        """Test lowercase Levi's alone is not Big E."""
        assert match_big_e_label("Levi's red tab") is None

    def test_discontinued_reference(self):
        """Test a discontinued reference inside longer text."""
        confidence, reasoning = match_discontinued_reference("Rolex 116610LN Submariner")
        assert confidence == pytest.approx(0.95)
        assert '116610LN' in reasoning

    def test_current_reference(self):
        """Test current production references do not match."""
        assert match_discontinued_reference("126610LN") is None
