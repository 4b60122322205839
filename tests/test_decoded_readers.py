# Tests - readers over decoded payloads

from resale_knowledge.decoders import decode_rolex_reference, decode_rolex_serial
from resale_knowledge.models import DecodedValue
from resale_knowledge.utils.decoded import (
    get_origin_from_decoded,
    get_year_from_decoded,
    is_discontinued_or_vintage,
    is_vintage_item,
)


class TestReaders:
    """Tests year, origin and vintage readers."""

    def test_failed_decode_reads_nothing(self):
        """Test failed decodes give no year, origin or vintage flag."""
        failed = DecodedValue('lv_date_code', False, 0.0, 'ZZ1234', {'year': 1999, 'factory_location': 'X'})
        assert get_year_from_decoded(failed) is None
        assert get_origin_from_decoded(failed) is None
        assert is_discontinued_or_vintage(failed) is False
        assert is_discontinued_or_vintage(None) is False

    def test_no_factory(self):
        """Test decodes without a factory have no origin."""
        assert get_origin_from_decoded(decode_rolex_reference("126610LN")) is None

    def test_discontinued_reference(self):
        """Test discontinued catalog references count as collectible."""
        assert is_discontinued_or_vintage(decode_rolex_reference("114060")) is True
        assert is_discontinued_or_vintage(decode_rolex_reference("126610LN")) is False

    def test_old_serial(self):
        """Test an old serial year is vintage."""
        decoded = decode_rolex_serial("5600000")
        assert get_year_from_decoded(decoded) == 1979
        assert is_vintage_item(decoded) is True

    def test_bool_year_ignored(self):
        """Test non-integer years are not reported."""
        odd = DecodedValue('custom', True, 0.5, 'x', {'year': True})
        assert get_year_from_decoded(odd) is None
