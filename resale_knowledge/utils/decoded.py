"""
Small readers over a DecodedValue so callers don't need to know each
decoder's payload keys.
"""

from typing import Dict, Optional

from ..config import VINTAGE_AGE_THRESHOLD_YEARS
from ..decoders.base import current_year
from ..models import DecodedValue


def get_year_from_decoded(decoded: Optional[DecodedValue]) -> Optional[int]:
    """Production year from any decoder that yields one."""
    if decoded is None or not decoded.success:
        return None
    year = decoded.decoded.get('year')
    if isinstance(year, bool) or not isinstance(year, int):
        return None
    return year


def get_origin_from_decoded(decoded: Optional[DecodedValue]) -> Optional[Dict[str, str]]:
    """{'location', 'country'} when the decode identified a factory."""
    if decoded is None or not decoded.success:
        return None
    location = decoded.decoded.get('factory_location')
    if not location:
        return None
    return {
        'location': location,
        'country': decoded.decoded.get('factory_country') or '',
    }


def is_discontinued_or_vintage(decoded: Optional[DecodedValue]) -> bool:
    """
    True when the decode marks the item as collectible by age.

    Checked in order: a denim era estimate, a Big E label, a discontinued
    catalog reference, then a production year older than the vintage threshold.
    """
    if decoded is None or not decoded.success:
        return False
    payload = decoded.decoded
    if payload.get('estimated_era'):
        return True
    if payload.get('is_big_e') is True:
        return True
    if payload.get('discontinued') is True:
        return True
    year = get_year_from_decoded(decoded)
    if year is not None and year < current_year() - VINTAGE_AGE_THRESHOLD_YEARS:
        return True
    return False


is_vintage_item = is_discontinued_or_vintage
