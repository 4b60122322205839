"""
Authenticity Checking

Evaluates the brand/category authenticity markers against the identifiers
and free text pulled from a listing, and rolls the per-marker outcomes into
a weighted assessment.

Policy (fixed, not learned):
    weights     critical=3, important=2, helpful=1
    authentic   normalized score >= 0.8 and pass rate >= 0.8
    uncertain   normalized score >= 0.5
    fake        any failed critical marker, or anything below uncertain
"""

import logging
from typing import Dict, List, Optional, Sequence

from ..config import AUTH_THRESHOLDS, CONFIDENCE
from ..knowledge.rules import get_authenticity_markers_for_brand, get_authenticity_markers_for_category
from ..models import (
    Assessment,
    AuthenticityCheckResult,
    AuthenticityMarkerCheckResult,
    AuthenticityMarkerDef,
    CategoryLike,
    ExtractedIdentifier,
    Importance,
)
from ..utils.confidence import clamp_confidence

logger = logging.getLogger(__name__)


def select_markers(
    category_id: CategoryLike,
    brand: Optional[str] = None,
    markers: Optional[Sequence[AuthenticityMarkerDef]] = None,
) -> List[AuthenticityMarkerDef]:
    """Category markers plus brand markers, de-duplicated by id."""
    selected: Dict[str, AuthenticityMarkerDef] = {}
    for marker in get_authenticity_markers_for_category(category_id, markers):
        selected.setdefault(marker.id, marker)
    for marker in get_authenticity_markers_for_brand(brand, markers):
        selected.setdefault(marker.id, marker)
    return list(selected.values())


def check_marker(
    marker: AuthenticityMarkerDef,
    identifiers: Sequence[ExtractedIdentifier],
    extracted_text: Sequence[str],
) -> AuthenticityMarkerCheckResult:
    """Check one marker: identifiers first, then free text."""
    if marker.compiled is None:
        return AuthenticityMarkerCheckResult(
            marker=marker,
            passed=True,
            confidence=CONFIDENCE.manual_check,
            details=f"Manual check required: {marker.check_description}",
        )

    for identifier in identifiers or ():
        value = (identifier.value or '').strip()
        if value and marker.compiled.search(value):
            passed = marker.indicates_authentic
            return AuthenticityMarkerCheckResult(
                marker=marker,
                passed=passed,
                confidence=clamp_confidence(identifier.confidence),
                details=f"Format matches: {value}" if passed else f"Format indicates concern: {value}",
                checked_value=value,
            )

    for text in extracted_text or ():
        if not isinstance(text, str):
            continue
        found = marker.compiled.search(text)
        if found:
            passed = marker.indicates_authentic
            matched = found.group(0)
            return AuthenticityMarkerCheckResult(
                marker=marker,
                passed=passed,
                confidence=CONFIDENCE.text_match,
                details=f"Found matching pattern: {matched}" if passed else f"Pattern concern: {matched}",
                checked_value=matched,
            )

    return AuthenticityMarkerCheckResult(
        marker=marker,
        passed=False,
        confidence=CONFIDENCE.not_found,
        details="Pattern not found in extracted data",
    )


def _summarize(assessment: Assessment, passed: int, failed: int, total: int) -> str:
    if assessment == Assessment.LIKELY_AUTHENTIC:
        return f"{passed} of {total} authenticity markers passed with high confidence."
    if assessment == Assessment.UNCERTAIN:
        return f"Mixed results: {passed} passed, {failed} failed. Manual review recommended."
    if assessment == Assessment.INSUFFICIENT_DATA:
        return "Unable to verify any authenticity markers with available data."
    return f"Multiple authenticity concerns: {failed} of {total} checks failed."


def check_authenticity(
    identifiers: Sequence[ExtractedIdentifier],
    extracted_text: Sequence[str],
    category_id: CategoryLike,
    brand: Optional[str] = None,
    markers: Optional[Sequence[AuthenticityMarkerDef]] = None,
) -> AuthenticityCheckResult:
    """
    Assess authenticity from whatever the listing exposes.

    Args:
        identifiers: Extracted identifiers; their confidence carries over to
            markers they satisfy
        extracted_text: Free text snippets (titles, OCR'd labels)
        category_id: Listing category
        brand: Brand, when known; adds brand markers to the category's
        markers: Marker pool to draw from (defaults to the static table)

    Returns:
        AuthenticityCheckResult with a per-marker breakdown
    """
    selected = select_markers(category_id, brand, markers)
    if not selected:
        return AuthenticityCheckResult(
            assessment=Assessment.INSUFFICIENT_DATA,
            confidence=0.0,
            summary="No authenticity markers available for this category/brand",
        )

    results: List[AuthenticityMarkerCheckResult] = []
    warnings: List[str] = []
    has_critical_failure = False
    weights = AUTH_THRESHOLDS.weights
    total_weight = 0
    weighted_score = 0.0

    for marker in selected:
        result = check_marker(marker, identifiers, extracted_text)
        results.append(result)
        weight = weights.get(marker.importance.value, 1)
        total_weight += weight
        if result.passed:
            weighted_score += weight * result.confidence
        elif marker.importance == Importance.CRITICAL:
            has_critical_failure = True
            warnings.append(f"Critical marker failed: {marker.name}")

    passed_count = sum(1 for r in results if r.passed)
    failed_count = len(results) - passed_count
    total = len(results)
    normalized = weighted_score / total_weight if total_weight else 0.0
    pass_rate = passed_count / total if total else 0.0

    if has_critical_failure:
        assessment = Assessment.LIKELY_FAKE
        summary = f"Critical authenticity marker failed. {failed_count} of {total} checks did not pass."
    else:
        if normalized >= AUTH_THRESHOLDS.authentic_score and pass_rate >= AUTH_THRESHOLDS.authentic_pass_rate:
            assessment = Assessment.LIKELY_AUTHENTIC
        elif normalized >= AUTH_THRESHOLDS.uncertain_score:
            assessment = Assessment.UNCERTAIN
        elif passed_count == 0 and failed_count == 0:
            assessment = Assessment.INSUFFICIENT_DATA
        else:
            assessment = Assessment.LIKELY_FAKE
        summary = _summarize(assessment, passed_count, failed_count, total)

    logger.debug(f"[AUTH] {assessment.value}: {passed_count}/{total} passed, score {normalized:.2f}")
    return AuthenticityCheckResult(
        assessment=assessment,
        confidence=clamp_confidence(normalized),
        markers_checked=results,
        summary=summary,
        warnings=warnings,
    )
