"""
Identifier Decoders
Each decoder handles one brand's identifier grammar and returns a DecodedValue.
"""

from .louis_vuitton import decode_louis_vuitton_date_code
from .hermes import decode_hermes_blindstamp
from .nike import decode_nike_style_code
from .rolex import decode_rolex_reference, decode_rolex_serial
from .denim import analyze_vintage_denim
from .definition import decode_with_definition
from .dispatcher import (
    CATEGORY_DECODERS,
    decode_identifier,
    decode_identifier_value,
    decode_identifier_values,
    decode_identifiers,
    flatten_decoded,
)

# Decoder registry, keyed by the identifier_type each one reports
DECODERS = {
    "lv_date_code": decode_louis_vuitton_date_code,
    "hermes_blindstamp": decode_hermes_blindstamp,
    "nike_style_code": decode_nike_style_code,
    "rolex_reference": decode_rolex_reference,
    "rolex_serial": decode_rolex_serial,
    "denim_analysis": analyze_vintage_denim,
}


def get_decoder(identifier_type: str):
    """Get the decoder function for an identifier type, or None"""
    return DECODERS.get(identifier_type)
