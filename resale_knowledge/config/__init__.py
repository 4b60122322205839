"""
Configuration for resale_knowledge.

Re-exports everything from settings so callers can do
`from resale_knowledge.config import CONFIDENCE`.
"""

from .settings import (
    BASE_DIR,
    RULE_OVERRIDES_PATH,
    OVERRIDES_ENABLED,
    ConfidenceLevels,
    CONFIDENCE,
    AuthenticityThresholds,
    AUTH_THRESHOLDS,
    IMPORTANCE_WEIGHTS,
    MAX_IDENTIFIER_LENGTH,
    MAX_DATE_CODE_LENGTH,
    MAX_STYLE_CODE_LENGTH,
    MAX_REFERENCE_LENGTH,
    MAX_SERIAL_LENGTH,
    MAX_DENIM_TEXT_LENGTH,
    MIN_DENIM_TEXT_LENGTH,
    DEFAULT_DEFINITION_MAX_LENGTH,
    MIN_WEEK,
    MAX_WEEK,
    MIN_PLAUSIBLE_YEAR,
    VINTAGE_AGE_THRESHOLD_YEARS,
    MAX_PRICE_MULTIPLIER,
    DIMINISHING_RETURNS_FACTOR,
)
