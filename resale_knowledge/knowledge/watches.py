"""
Watch Reference Data

Rolex model catalog keyed by reference number, plus the serial number
tables used to date a case.
"""

from typing import Dict, List, Optional, Tuple

# ============================================================
# ROLEX REFERENCE CATALOG
# ============================================================

ROLEX_REFERENCES: Dict[str, Dict] = {
    # Submariner
    '116610LN': {'family': 'Submariner', 'name': 'Submariner Date', 'material': 'Stainless Steel',
                 'diameter': '40mm', 'discontinued': True, 'notes': 'Replaced by 126610LN'},
    '116610LV': {'family': 'Submariner', 'name': 'Submariner Date (Hulk)', 'material': 'Stainless Steel',
                 'diameter': '40mm', 'discontinued': True, 'notes': 'Green dial and bezel'},
    '126610LN': {'family': 'Submariner', 'name': 'Submariner Date', 'material': 'Stainless Steel',
                 'diameter': '41mm', 'discontinued': False, 'notes': None},
    '126610LV': {'family': 'Submariner', 'name': 'Submariner Date (Starbucks)', 'material': 'Stainless Steel',
                 'diameter': '41mm', 'discontinued': False, 'notes': 'Green bezel, black dial'},
    '114060': {'family': 'Submariner', 'name': 'Submariner No Date', 'material': 'Stainless Steel',
               'diameter': '40mm', 'discontinued': True, 'notes': 'Replaced by 124060'},
    '124060': {'family': 'Submariner', 'name': 'Submariner No Date', 'material': 'Stainless Steel',
               'diameter': '41mm', 'discontinued': False, 'notes': None},

    # GMT-Master II
    '126710BLRO': {'family': 'GMT-Master II', 'name': 'GMT-Master II (Pepsi)', 'material': 'Stainless Steel',
                   'diameter': '40mm', 'discontinued': False, 'notes': 'Blue/red Cerachrom bezel'},
    '126710BLNR': {'family': 'GMT-Master II', 'name': 'GMT-Master II (Batman)', 'material': 'Stainless Steel',
                   'diameter': '40mm', 'discontinued': False, 'notes': 'Blue/black Cerachrom bezel'},
    '116710LN': {'family': 'GMT-Master II', 'name': 'GMT-Master II', 'material': 'Stainless Steel',
                 'diameter': '40mm', 'discontinued': True, 'notes': 'Black bezel'},

    # Daytona
    '116500LN': {'family': 'Cosmograph Daytona', 'name': 'Cosmograph Daytona', 'material': 'Stainless Steel',
                 'diameter': '40mm', 'discontinued': False, 'notes': 'Ceramic bezel'},
    '116520': {'family': 'Cosmograph Daytona', 'name': 'Cosmograph Daytona', 'material': 'Stainless Steel',
               'diameter': '40mm', 'discontinued': True, 'notes': 'Steel bezel, first in-house movement'},

    # Datejust / Day-Date
    '126334': {'family': 'Datejust', 'name': 'Datejust 41', 'material': 'Stainless Steel/White Gold',
               'diameter': '41mm', 'discontinued': False, 'notes': 'Fluted bezel'},
    '126234': {'family': 'Datejust', 'name': 'Datejust 36', 'material': 'Stainless Steel/White Gold',
               'diameter': '36mm', 'discontinued': False, 'notes': 'Fluted bezel'},
    '228239': {'family': 'Day-Date', 'name': 'Day-Date 40', 'material': 'White Gold',
               'diameter': '40mm', 'discontinued': False, 'notes': None},
    '228238': {'family': 'Day-Date', 'name': 'Day-Date 40', 'material': 'Yellow Gold',
               'diameter': '40mm', 'discontinued': False, 'notes': None},

    # Explorer / Yacht-Master
    '124270': {'family': 'Explorer', 'name': 'Explorer', 'material': 'Stainless Steel',
               'diameter': '36mm', 'discontinued': False, 'notes': None},
    '226570': {'family': 'Explorer II', 'name': 'Explorer II', 'material': 'Stainless Steel',
               'diameter': '42mm', 'discontinued': False, 'notes': None},
    '126622': {'family': 'Yacht-Master', 'name': 'Yacht-Master 40', 'material': 'Stainless Steel/Platinum',
               'diameter': '40mm', 'discontinued': False, 'notes': 'Rolesium'},
}


def get_rolex_reference_info(reference: str) -> Optional[Dict]:
    """Return the catalog entry (plus 'reference') for a model reference, or None."""
    if not isinstance(reference, str):
        return None
    key = reference.strip().upper()
    entry = ROLEX_REFERENCES.get(key)
    if entry is None:
        return None
    return {'reference': key, **entry}


# ============================================================
# ROLEX SERIAL NUMBERS
# ============================================================
# Letter prefixes ran 1987-2010; random serials after that carry no date.

ROLEX_SERIAL_PREFIXES: Dict[str, int] = {
    'R': 1987, 'L': 1988, 'E': 1989, 'X': 1990, 'N': 1991, 'C': 1992,
    'S': 1993, 'W': 1994, 'T': 1995, 'U': 1996, 'A': 1998, 'P': 1999,
    'K': 2001, 'Y': 2002, 'F': 2003, 'D': 2005, 'Z': 2006, 'M': 2007,
    'V': 2008, 'G': 2010,
}

# (first serial of year, year) for the sequential era, ascending
ROLEX_SEQUENTIAL_SERIALS: List[Tuple[int, int]] = [
    (1000000, 1965), (1300000, 1966), (1600000, 1967), (1900000, 1968),
    (2200000, 1969), (2500000, 1970), (2800000, 1971), (3100000, 1972),
    (3400000, 1973), (3700000, 1974), (4000000, 1975), (4300000, 1976),
    (4600000, 1977), (5000000, 1978), (5500000, 1979), (6000000, 1980),
    (6500000, 1981), (7000000, 1982), (7500000, 1983), (8000000, 1984),
    (8500000, 1985), (9000000, 1986), (9500000, 1987),
]


def get_rolex_serial_year(serial: str) -> Optional[Dict]:
    """
    Date a Rolex case serial.

    Returns {'serial', 'year', 'format'} where format is 'letter_prefix'
    or 'sequential', or None when the serial carries no usable date.
    """
    if not isinstance(serial, str):
        return None
    key = serial.strip().upper()

    if len(key) == 7 and key[0].isalpha() and key[1:].isdigit():
        year = ROLEX_SERIAL_PREFIXES.get(key[0])
        if year is None:
            return None
        return {'serial': key, 'year': year, 'format': 'letter_prefix'}

    if len(key) == 7 and key.isdigit():
        number = int(key)
        year = None
        for start, start_year in ROLEX_SEQUENTIAL_SERIALS:
            if number < start:
                break
            year = start_year
        if year is None:
            return None
        return {'serial': key, 'year': year, 'format': 'sequential'}

    return None
