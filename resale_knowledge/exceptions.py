"""
Custom Exception Hierarchy for resale_knowledge

Decoding and rule evaluation never raise; they return sentinels (None,
success=False, empty lists). These exceptions only cross the rule-loading
boundary, where bad rule data must be rejected before it is evaluated.

Every error carries the rule id and category it concerns (when known), so a
skipped override can be traced back to the entry that caused it.

Usage:
    from resale_knowledge.exceptions import (
        KnowledgeError,
        RuleDefinitionError,
        OverrideLoadError,
    )

    try:
        driver = parse_value_driver(raw)
    except RuleDefinitionError as e:
        logger.warning(f"[OVERRIDES] Skipping driver: {e}")
        report.append(e.to_dict())  # {'error', 'message', 'rule_id', 'category_id', 'details'}
"""

from typing import Optional, Dict, Any


class KnowledgeError(Exception):
    """
    Base exception for all resale_knowledge errors.

    All custom exceptions inherit from this class so callers can catch
    the whole family at once.
    """

    def __init__(
        self,
        message: str,
        code: str = "KNOWLEDGE_ERROR",
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        rule_id: Optional[str] = None,
        category_id: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.cause = cause
        self.rule_id = rule_id
        self.category_id = category_id

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict for override load reports and logs."""
        result: Dict[str, Any] = {
            "error": self.code,
            "message": self.message,
        }
        if self.rule_id:
            result["rule_id"] = self.rule_id
        if self.category_id:
            result["category_id"] = self.category_id
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        text = self.message
        if self.category_id:
            text = f"[{self.category_id}] {text}"
        if self.cause:
            text = f"{text} (caused by: {self.cause})"
        return text


# ============================================================
# Rule Definition Errors
# ============================================================

class RuleDefinitionError(KnowledgeError):
    """A value driver, authenticity marker or decoder definition is malformed."""

    def __init__(
        self,
        rule_id: Optional[str],
        reason: str,
        field: Optional[str] = None,
        cause: Optional[Exception] = None,
        category_id: Optional[str] = None,
    ):
        details: Dict[str, Any] = {"reason": reason}
        if field:
            details["field"] = field
        label = rule_id or "<unnamed>"
        super().__init__(
            message=f"Invalid rule '{label}': {reason}",
            code="RULE_DEFINITION_ERROR",
            details=details,
            cause=cause,
            rule_id=rule_id,
            category_id=category_id,
        )
        self.field = field


class InvalidPatternError(RuleDefinitionError):
    """A rule carries a regular expression that does not compile."""

    def __init__(
        self,
        rule_id: Optional[str],
        pattern: str,
        cause: Optional[Exception] = None,
        category_id: Optional[str] = None,
    ):
        super().__init__(
            rule_id=rule_id,
            reason=f"pattern {pattern!r} does not compile",
            field="pattern",
            cause=cause,
            category_id=category_id,
        )
        self.code = "INVALID_PATTERN"
        self.details["pattern"] = pattern


# ============================================================
# Override Loading Errors
# ============================================================

class OverrideLoadError(KnowledgeError):
    """An override document could not be read or parsed."""

    def __init__(self, source: str, reason: str, cause: Optional[Exception] = None):
        super().__init__(
            message=f"Could not load overrides from {source}: {reason}",
            code="OVERRIDE_LOAD_ERROR",
            details={"source": source, "reason": reason},
            cause=cause,
        )
        self.source = source
