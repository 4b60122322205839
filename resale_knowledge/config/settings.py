"""
Centralized Configuration Settings for Resale Knowledge

All tunable paths, confidence tiers and policy thresholds live here so the
decoders, value-driver engine and authenticity engine agree on the same numbers.
"""

import os
import logging
from pathlib import Path
from dataclasses import dataclass, field
from typing import Dict, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# ============================================================
# ENVIRONMENT LOADING
# ============================================================
# Package dir first, then project root
_env_path = Path(__file__).parent.parent / ".env"
if not _env_path.exists():
    _env_path = Path(__file__).parent.parent.parent / ".env"
if _env_path.exists():
    load_dotenv(_env_path)
    logger.info(f"[CONFIG] Loaded .env from {_env_path}")

# ============================================================
# PATHS
# ============================================================
BASE_DIR = Path(__file__).parent.parent.parent


def _optional_path(value: Optional[str]) -> Optional[Path]:
    if not value:
        return None
    return Path(value).expanduser()


RULE_OVERRIDES_PATH = _optional_path(os.getenv("RULE_OVERRIDES_PATH")) or BASE_DIR / "rule_overrides.json"
OVERRIDES_ENABLED = os.getenv("RULE_OVERRIDES_ENABLED", "true").lower() == "true"

# ============================================================
# CONFIDENCE TIERS
# ============================================================
@dataclass(frozen=True)
class ConfidenceLevels:
    """Confidence values handed out by decoders and matchers"""
    high: float = 0.95           # catalog hit / exact match
    good: float = 0.90           # strict grammar match, no catalog
    medium_high: float = 0.85    # modern-cycle guess / letter-prefix serial
    medium: float = 0.80         # partial allow-list match
    low: float = 0.70            # older-cycle fallback / substring term
    format_only: float = 0.60    # structurally valid, unknown to catalog
    base_text: float = 0.50      # free-text analysis baseline
    implausible_year: float = 0.40
    ambiguous_format: float = 0.40
    invalid_week: float = 0.30

    # Authenticity marker outcomes
    manual_check: float = 0.50
    text_match: float = 0.70
    not_found: float = 0.30

CONFIDENCE = ConfidenceLevels()

# ============================================================
# DECODER LIMITS
# ============================================================
MAX_IDENTIFIER_LENGTH = 50         # dispatcher rejects anything longer
MAX_DATE_CODE_LENGTH = 10
MAX_STYLE_CODE_LENGTH = 15
MAX_REFERENCE_LENGTH = 15
MAX_SERIAL_LENGTH = 12
MAX_DENIM_TEXT_LENGTH = 5000
MIN_DENIM_TEXT_LENGTH = 10         # type fallback needs more than this
DEFAULT_DEFINITION_MAX_LENGTH = 50

MIN_WEEK = 1
MAX_WEEK = 52
MIN_PLAUSIBLE_YEAR = 1980          # earliest LV date code
VINTAGE_AGE_THRESHOLD_YEARS = 20

# ============================================================
# VALUE DRIVER POLICY
# ============================================================
MAX_PRICE_MULTIPLIER = 15.0
DIMINISHING_RETURNS_FACTOR = 0.7

# ============================================================
# AUTHENTICITY POLICY
# ============================================================
IMPORTANCE_WEIGHTS: Dict[str, int] = {
    'critical': 3,
    'important': 2,
    'helpful': 1,
}


@dataclass(frozen=True)
class AuthenticityThresholds:
    """Score cut-offs for the overall assessment (policy, not learned)"""
    authentic_score: float = 0.8
    authentic_pass_rate: float = 0.8
    uncertain_score: float = 0.5
    weights: Dict[str, int] = field(default_factory=lambda: dict(IMPORTANCE_WEIGHTS))

AUTH_THRESHOLDS = AuthenticityThresholds()
