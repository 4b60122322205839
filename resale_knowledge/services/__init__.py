"""
Services Package

Rule engines and the DomainKnowledgeService facade.
"""

from .value_drivers import detect_value_drivers, calculate_value_multiplier
from .authenticity import check_authenticity, check_marker, select_markers
from .rule_sources import (
    RuleSource,
    RuleOverrides,
    StaticRuleSource,
    FileRuleSource,
    merge_by_id,
    parse_value_driver,
    parse_authenticity_marker,
    parse_decoder_definition,
)
from .domain_knowledge import DomainKnowledgeService

__all__ = [
    # Engines
    'detect_value_drivers',
    'calculate_value_multiplier',
    'check_authenticity',
    'check_marker',
    'select_markers',
    # Overrides
    'RuleSource',
    'RuleOverrides',
    'StaticRuleSource',
    'FileRuleSource',
    'merge_by_id',
    'parse_value_driver',
    'parse_authenticity_marker',
    'parse_decoder_definition',
    # Facade
    'DomainKnowledgeService',
]
