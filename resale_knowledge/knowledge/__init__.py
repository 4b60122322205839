"""
Static reference data: factory codes, year cycles, model catalogs.

Rule tables (value drivers, authenticity markers) live in .rules and are
imported from there directly; they depend on the model layer, which in turn
depends on these lookups.
"""

from .handbags import (
    LV_FACTORY_CODES,
    HERMES_CYCLE_1,
    HERMES_CYCLE_2,
    HERMES_CYCLE_3,
    get_lv_factory_info,
    get_hermes_year_from_blindstamp,
)
from .watches import (
    ROLEX_REFERENCES,
    ROLEX_SERIAL_PREFIXES,
    get_rolex_reference_info,
    get_rolex_serial_year,
)

__all__ = [
    'LV_FACTORY_CODES',
    'HERMES_CYCLE_1',
    'HERMES_CYCLE_2',
    'HERMES_CYCLE_3',
    'get_lv_factory_info',
    'get_hermes_year_from_blindstamp',
    'ROLEX_REFERENCES',
    'ROLEX_SERIAL_PREFIXES',
    'get_rolex_reference_info',
    'get_rolex_serial_year',
]
