import pytest

from resale_knowledge.models import ExtractedIdentifier, ValueDriver, ValueDriverMatch
from resale_knowledge.services.domain_knowledge import DomainKnowledgeService


@pytest.fixture
def service():
    """Service backed by the static tables only."""
    return DomainKnowledgeService()


@pytest.fixture
def identifier():
    """Factory for ExtractedIdentifier with sensible defaults."""
    def _make(kind, value, confidence=0.5, source="title"):
        return ExtractedIdentifier(type=kind, value=value, confidence=confidence, source=source)
    return _make


@pytest.fixture
def make_match():
    """Factory for ValueDriverMatch with a throwaway driver."""
    counter = {'n': 0}

    def _make(multiplier, confidence, priority=50):
        counter['n'] += 1
        driver = ValueDriver(
            id=f"driver_{counter['n']}",
            name=f"Driver {counter['n']}",
            attribute='condition',
            category_id='general',
            check_condition='condition is mint',
            price_multiplier=multiplier,
            priority=priority,
        )
        return ValueDriverMatch(driver=driver, matched_value='mint', confidence=confidence, reasoning='test')
    return _make
