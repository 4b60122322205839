"""
Value Driver and Authenticity Marker Tables

Both tables are declarative: adding a brand rule means adding a record here
(or publishing one through an override source), never a code change.
Conditions use the grammar in utils.conditions.
"""

from typing import List, Optional

from ..models import (
    AuthenticityMarkerDef,
    CategoryId,
    CategoryLike,
    Importance,
    ValueDriver,
    category_key,
)

# ============================================================
# VALUE DRIVERS
# ============================================================

VALUE_DRIVERS = (
    # --- Vintage denim ---
    ValueDriver(
        id='levis_big_e',
        name="Levi's Big E",
        attribute='label_type',
        category_id=CategoryId.VINTAGE_DENIM,
        applicable_brands=("Levi's", 'Levis'),
        check_condition='label shows "LEVI\'S" with capital E (not lowercase e)',
        price_multiplier=5.0,
        priority=100,
        description="Capital-E red tab, made before 1971",
    ),
    ValueDriver(
        id='selvedge_denim',
        name='Selvedge Denim',
        attribute='fabric_type',
        category_id=CategoryId.VINTAGE_DENIM,
        check_condition='text contains selvedge, selvage, redline, "red line"',
        price_multiplier=2.5,
        priority=90,
        description='Shuttle-loomed denim with a finished outseam edge',
    ),
    ValueDriver(
        id='made_in_usa_denim',
        name='Made in USA',
        attribute='country_of_origin',
        category_id=CategoryId.VINTAGE_DENIM,
        check_condition='text contains usa, "u.s.a", "united states"',
        price_multiplier=1.8,
        priority=80,
        description='Domestic production ended in 2003',
    ),

    # --- Luxury handbags ---
    ValueDriver(
        id='exotic_leather',
        name='Exotic Leather',
        attribute='material',
        category_id=CategoryId.LUXURY_HANDBAGS,
        check_condition='material is python, croc, crocodile, ostrich, alligator, lizard',
        price_multiplier=3.0,
        priority=100,
        description='Exotic skins sell at a multiple of the calfskin equivalent',
    ),
    ValueDriver(
        id='hermes_rare_color',
        name='Hermes Rare Color',
        attribute='color',
        category_id=CategoryId.LUXURY_HANDBAGS,
        applicable_brands=('Hermes', 'Hermès'),
        check_condition='color is rose sakura, blue electrique, bambou, rose confetti, vert criquet',
        price_multiplier=1.5,
        priority=85,
        description='Limited colorways command a premium',
    ),
    ValueDriver(
        id='hermes_phw',
        name='Hermes Palladium Hardware',
        attribute='hardware',
        category_id=CategoryId.LUXURY_HANDBAGS,
        applicable_brands=('Hermes', 'Hermès'),
        check_condition='hardware is palladium, phw',
        price_multiplier=1.15,
        priority=70,
        description='PHW is preferred over gold hardware on most models',
    ),

    # --- Sneakers ---
    ValueDriver(
        id='og_release',
        name='OG Release',
        attribute='edition',
        category_id=CategoryId.SNEAKERS,
        check_condition='release is "OG" or original release',
        price_multiplier=2.0,
        priority=100,
        description='Original release rather than a retro',
    ),
    ValueDriver(
        id='limited_collab',
        name='Limited Collaboration',
        attribute='edition',
        category_id=CategoryId.SNEAKERS,
        check_condition='edition includes off-white, travis scott, union, sacai, fragment',
        price_multiplier=2.5,
        priority=95,
        description='Designer or artist collaboration',
    ),
    ValueDriver(
        id='deadstock',
        name='Deadstock',
        attribute='condition',
        category_id=CategoryId.SNEAKERS,
        check_condition='condition is deadstock, DS, BNIB, new with tags',
        price_multiplier=1.5,
        priority=80,
        description='Unworn with original box',
    ),

    # --- Watches ---
    ValueDriver(
        id='discontinued_reference',
        name='Discontinued Reference',
        attribute='model',
        category_id=CategoryId.WATCHES,
        check_condition='reference number flagged as discontinued in catalog',
        price_multiplier=1.4,
        priority=90,
        description='Discontinued references trade above current production',
    ),
    ValueDriver(
        id='full_set',
        name='Full Set',
        attribute='completeness',
        category_id=CategoryId.WATCHES,
        check_condition='completeness includes box and papers, full set, warranty card',
        price_multiplier=1.25,
        priority=85,
        description='Box plus papers or warranty card',
    ),
    ValueDriver(
        id='rare_dial',
        name='Rare Dial',
        attribute='dial',
        category_id=CategoryId.WATCHES,
        check_condition='dial is tropical, mother of pearl, meteorite, mop',
        price_multiplier=1.5,
        priority=80,
        description='Uncommon dial variants',
    ),

    # --- Trading cards ---
    ValueDriver(
        id='psa_10',
        name='Gem Mint Grade',
        attribute='grade',
        category_id=CategoryId.TRADING_CARDS,
        check_condition='grade is PSA 10, BGS 10, "BGS 10 Black Label"',
        price_multiplier=3.0,
        priority=100,
        description='Top grade from PSA or Beckett',
    ),
    ValueDriver(
        id='first_edition',
        name='1st Edition',
        attribute='edition',
        category_id=CategoryId.TRADING_CARDS,
        check_condition='text contains "1st edition", "first edition"',
        price_multiplier=4.0,
        priority=95,
        description='First print run stamp',
    ),
    ValueDriver(
        id='shadowless',
        name='Shadowless',
        attribute='variant',
        category_id=CategoryId.TRADING_CARDS,
        check_condition='text contains shadowless',
        price_multiplier=3.0,
        priority=90,
        description='No drop shadow on the artwork frame',
    ),

    # --- Electronics ---
    ValueDriver(
        id='sealed_electronics',
        name='Factory Sealed',
        attribute='condition',
        category_id=CategoryId.ELECTRONICS_PHONES,
        check_condition='condition is factory sealed, sealed, new sealed',
        price_multiplier=1.3,
        priority=85,
        description='Original factory seal intact',
    ),
)


def get_value_drivers_for_category(category_id: CategoryLike, drivers=None) -> List[ValueDriver]:
    """All drivers for a category, highest priority first."""
    key = category_key(category_id)
    pool = VALUE_DRIVERS if drivers is None else drivers
    matches = [d for d in pool if d.category_id == key]
    return sorted(matches, key=lambda d: d.priority, reverse=True)


def get_value_drivers_for_category_and_brand(
    category_id: CategoryLike,
    brand: Optional[str] = None,
    drivers=None,
) -> List[ValueDriver]:
    """
    Drivers that may apply to a listing.

    Brand-agnostic drivers always qualify. Brand-specific ones qualify only
    when the brand is known and listed (case-insensitive).
    """
    return [
        d for d in get_value_drivers_for_category(category_id, drivers)
        if d.applies_to_brand(brand)
    ]


# ============================================================
# AUTHENTICITY MARKERS
# ============================================================

AUTHENTICITY_MARKERS = (
    # --- Louis Vuitton ---
    AuthenticityMarkerDef(
        id='lv_date_code_format',
        name='Date Code Format',
        category_id=CategoryId.LUXURY_HANDBAGS,
        brands=('Louis Vuitton',),
        importance=Importance.CRITICAL,
        check_description='Two factory letters followed by 3-4 digits',
        pattern=r'^[A-Z]{2}\d{3,4}$',
    ),
    AuthenticityMarkerDef(
        id='lv_valid_factory',
        name='Valid Factory Code',
        category_id=CategoryId.LUXURY_HANDBAGS,
        brands=('Louis Vuitton',),
        importance=Importance.CRITICAL,
        check_description='Factory prefix belongs to a known LV workshop',
    ),
    AuthenticityMarkerDef(
        id='lv_heat_stamp',
        name='Heat Stamp',
        category_id=CategoryId.LUXURY_HANDBAGS,
        brands=('Louis Vuitton',),
        importance=Importance.IMPORTANT,
        check_description='Crisp, evenly spaced heat stamp with round O',
    ),

    # --- Hermes ---
    AuthenticityMarkerDef(
        id='hermes_blindstamp_format',
        name='Blindstamp Format',
        category_id=CategoryId.LUXURY_HANDBAGS,
        brands=('Hermes', 'Hermès'),
        importance=Importance.CRITICAL,
        check_description='Single year letter, optionally in a shape',
        pattern=r'^[A-Z]$',
    ),
    AuthenticityMarkerDef(
        id='hermes_craftsman_stamp',
        name='Craftsman Stamp',
        category_id=CategoryId.LUXURY_HANDBAGS,
        brands=('Hermes', 'Hermès'),
        importance=Importance.IMPORTANT,
        check_description='Artisan identification stamp next to the blindstamp',
    ),

    # --- Rolex ---
    AuthenticityMarkerDef(
        id='rolex_serial_format',
        name='Serial Number',
        category_id=CategoryId.WATCHES,
        brands=('Rolex',),
        importance=Importance.CRITICAL,
        check_description='Serial engraved between the lugs or on the rehaut',
    ),
    AuthenticityMarkerDef(
        id='rolex_reference_format',
        name='Reference Number Format',
        category_id=CategoryId.WATCHES,
        brands=('Rolex',),
        importance=Importance.CRITICAL,
        check_description='5-6 digit reference with optional letter suffix',
        pattern=r'^\d{5,6}[A-Z]{0,4}$',
    ),
    AuthenticityMarkerDef(
        id='rolex_rehaut_engraving',
        name='Rehaut Engraving',
        category_id=CategoryId.WATCHES,
        brands=('Rolex',),
        importance=Importance.IMPORTANT,
        check_description='ROLEX repeated around the inner bezel ring',
    ),

    # --- Nike ---
    AuthenticityMarkerDef(
        id='nike_style_code_format',
        name='Style Code Format',
        category_id=CategoryId.SNEAKERS,
        brands=('Nike', 'Jordan'),
        importance=Importance.IMPORTANT,
        check_description='Style code like CW2288-111 on the size tag',
        pattern=r'^[A-Z]{2}\d{4}-\d{3}$',
    ),
    AuthenticityMarkerDef(
        id='nike_size_tag_qr',
        name='Size Tag QR Code',
        category_id=CategoryId.SNEAKERS,
        brands=('Nike', 'Jordan'),
        importance=Importance.HELPFUL,
        check_description='QR code present on size tags from 2018 onward',
    ),
)


def get_authenticity_markers_for_category(category_id: CategoryLike, markers=None) -> List[AuthenticityMarkerDef]:
    key = category_key(category_id)
    pool = AUTHENTICITY_MARKERS if markers is None else markers
    return [m for m in pool if m.category_id == key]


def get_authenticity_markers_for_brand(brand: Optional[str], markers=None) -> List[AuthenticityMarkerDef]:
    if not brand:
        return []
    pool = AUTHENTICITY_MARKERS if markers is None else markers
    return [m for m in pool if m.applies_to_brand(brand)]
