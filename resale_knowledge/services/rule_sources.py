"""
Rule Override Sources

The engines work from the static tables in knowledge.rules. A RuleSource
can publish extra (or replacement) value drivers, authenticity markers and
decoder definitions per category/brand. Sources hand back plain validated
records; the engines never know where they came from.

Override document format (JSON):
    {
        "_comment": "keys starting with _ are ignored",
        "value_drivers": [{"id": ..., "attribute": ..., "check_condition": ...}],
        "authenticity_markers": [{"id": ..., "importance": "critical", ...}],
        "decoders": [{"id": ..., "input_pattern": "^...$", ...}]
    }
"""

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, TypeVar, Union

from ..exceptions import KnowledgeError, OverrideLoadError, RuleDefinitionError
from ..models import (
    AuthenticityMarkerDef,
    CategoryLike,
    DecoderDefinition,
    ExtractionRule,
    ValidationRule,
    ValueDriver,
    category_key,
)

logger = logging.getLogger(__name__)


@dataclass
class RuleOverrides:
    value_drivers: List[ValueDriver] = field(default_factory=list)
    authenticity_markers: List[AuthenticityMarkerDef] = field(default_factory=list)


# ============================================================
# PARSING PLAIN DATA INTO RULE RECORDS
# ============================================================

def _require(data: Mapping[str, Any], key: str, rule_id: Optional[str]) -> Any:
    if key not in data or data[key] in (None, ""):
        raise RuleDefinitionError(
            rule_id, f"missing required field '{key}'", field=key,
            category_id=category_key(data.get('category_id')) or None,
        )
    return data[key]


def _as_mapping(data: Any, kind: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise RuleDefinitionError(None, f"{kind} entry must be an object, got {type(data).__name__}")
    return data


def parse_value_driver(data: Mapping[str, Any]) -> ValueDriver:
    data = _as_mapping(data, "value driver")
    rule_id = data.get('id')
    try:
        return ValueDriver(
            id=_require(data, 'id', rule_id),
            name=data.get('name') or rule_id,
            attribute=_require(data, 'attribute', rule_id),
            category_id=_require(data, 'category_id', rule_id),
            check_condition=_require(data, 'check_condition', rule_id),
            price_multiplier=_require(data, 'price_multiplier', rule_id),
            priority=int(data.get('priority', 0)),
            applicable_brands=tuple(data.get('applicable_brands') or ()),
            description=data.get('description', ''),
        )
    except (TypeError, ValueError) as e:
        raise RuleDefinitionError(
            rule_id, "malformed value driver", cause=e,
            category_id=category_key(data.get('category_id')) or None,
        )


def parse_authenticity_marker(data: Mapping[str, Any]) -> AuthenticityMarkerDef:
    data = _as_mapping(data, "authenticity marker")
    rule_id = data.get('id')
    try:
        return AuthenticityMarkerDef(
            id=_require(data, 'id', rule_id),
            name=data.get('name') or rule_id,
            category_id=_require(data, 'category_id', rule_id),
            importance=_require(data, 'importance', rule_id),
            check_description=data.get('check_description', ''),
            brands=tuple(data.get('brands') or ()),
            pattern=data.get('pattern'),
            indicates_authentic=bool(data.get('indicates_authentic', True)),
        )
    except (TypeError, ValueError) as e:
        raise RuleDefinitionError(
            rule_id, "malformed authenticity marker", cause=e,
            category_id=category_key(data.get('category_id')) or None,
        )


def parse_decoder_definition(data: Mapping[str, Any]) -> DecoderDefinition:
    data = _as_mapping(data, "decoder definition")
    rule_id = data.get('id')
    try:
        extraction = tuple(
            ExtractionRule(
                capture_group=int(_require(rule, 'capture_group', rule_id)),
                output_field=_require(rule, 'output_field', rule_id),
                transform=rule.get('transform', 'none'),
            )
            for rule in data.get('extraction_rules') or ()
        )
        validation = tuple(
            ValidationRule(
                field=_require(rule, 'field', rule_id),
                rule_type=_require(rule, 'rule_type', rule_id),
                min_value=rule.get('min_value'),
                max_value=rule.get('max_value'),
                pattern=rule.get('pattern'),
                failure_confidence=float(rule.get('failure_confidence', 0.0)),
                error_message=rule.get('error_message', ''),
            )
            for rule in data.get('validation_rules') or ()
        )
        return DecoderDefinition(
            id=_require(data, 'id', rule_id),
            name=data.get('name') or rule_id,
            category_id=data.get('category_id', ''),
            input_pattern=_require(data, 'input_pattern', rule_id),
            extraction_rules=extraction,
            identifier_type=data.get('identifier_type', 'other'),
            brands=tuple(data.get('brands') or ()),
            lookup_table={str(k).upper(): v for k, v in (data.get('lookup_table') or {}).items()},
            validation_rules=validation,
            output_fields=dict(data.get('output_fields') or {}),
            base_confidence=float(data.get('base_confidence', 0.9)),
            input_max_length=int(data.get('input_max_length', 50)),
            priority=int(data.get('priority', 0)),
            is_active=bool(data.get('is_active', True)),
        )
    except (TypeError, ValueError, AttributeError) as e:
        raise RuleDefinitionError(
            rule_id, "malformed decoder definition", cause=e,
            category_id=category_key(data.get('category_id')) or None,
        )


# ============================================================
# MERGING
# ============================================================

T = TypeVar('T', ValueDriver, AuthenticityMarkerDef)


def merge_by_id(static: Iterable[T], overrides: Iterable[T]) -> List[T]:
    """Static records with overrides layered on top; an override wins on id clash."""
    merged: Dict[str, T] = {record.id: record for record in static}
    for record in overrides:
        merged[record.id] = record
    return list(merged.values())


# ============================================================
# SOURCES
# ============================================================

class RuleSource(ABC):
    """Supplies override rules for a category/brand."""

    @abstractmethod
    def fetch_decoder_overrides_for(
        self, category_id: CategoryLike, brand: Optional[str] = None
    ) -> List[DecoderDefinition]:
        """Decoder definitions to try before the built-in decoders."""
        pass

    @abstractmethod
    def fetch_rule_overrides_for(
        self, category_id: CategoryLike, brand: Optional[str] = None
    ) -> RuleOverrides:
        """Value drivers and authenticity markers to merge with the static tables."""
        pass


class StaticRuleSource(RuleSource):
    """In-memory override records, filtered per category and brand."""

    def __init__(
        self,
        decoders: Sequence[DecoderDefinition] = (),
        value_drivers: Sequence[ValueDriver] = (),
        authenticity_markers: Sequence[AuthenticityMarkerDef] = (),
    ):
        self.decoders = list(decoders)
        self.value_drivers = list(value_drivers)
        self.authenticity_markers = list(authenticity_markers)

    def fetch_decoder_overrides_for(self, category_id, brand=None):
        key = category_key(category_id)
        return [
            d for d in self.decoders
            if d.is_active and (not d.category_id or d.category_id == key) and d.applies_to_brand(brand)
        ]

    def fetch_rule_overrides_for(self, category_id, brand=None):
        key = category_key(category_id)
        # Brand filtering for drivers/markers happens in the engines
        return RuleOverrides(
            value_drivers=[d for d in self.value_drivers if d.category_id == key],
            authenticity_markers=[
                m for m in self.authenticity_markers
                if m.category_id == key or m.applies_to_brand(brand)
            ],
        )


def _parse_entries(entries: Any, parser, kind: str, source: str) -> list:
    if entries is None:
        return []
    if not isinstance(entries, list):
        logger.warning(f"[OVERRIDES] '{kind}' in {source} is not a list, ignoring")
        return []
    parsed = []
    for entry in entries:
        try:
            parsed.append(parser(entry))
        except RuleDefinitionError as e:
            logger.warning(f"[OVERRIDES] Skipping {kind} entry in {source}: {e}")
    return parsed


class FileRuleSource(StaticRuleSource):
    """
    Overrides read from a JSON document on disk.

    A missing file means no overrides. Malformed entries are skipped with a
    warning; an unreadable document keeps whatever was loaded before.
    """

    def __init__(self, path: Union[str, Path]):
        super().__init__()
        self.path = Path(path)
        self.reload()

    def read_document(self) -> Dict[str, Any]:
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                document = json.load(f)
        except (OSError, ValueError) as e:
            raise OverrideLoadError(str(self.path), "unreadable JSON", cause=e)
        if not isinstance(document, dict):
            raise OverrideLoadError(str(self.path), "top level must be an object")
        return document

    def reload(self) -> bool:
        """Re-read the document. Returns True if it was loaded."""
        if not self.path.exists():
            logger.info(f"[OVERRIDES] No override file at {self.path}")
            self.decoders, self.value_drivers, self.authenticity_markers = [], [], []
            return False
        try:
            document = self.read_document()
        except KnowledgeError as e:
            logger.error(f"[OVERRIDES] Failed to load: {e}")
            return False

        source = str(self.path)
        self.decoders = _parse_entries(document.get('decoders'), parse_decoder_definition, 'decoder', source)
        self.value_drivers = _parse_entries(
            document.get('value_drivers'), parse_value_driver, 'value driver', source
        )
        self.authenticity_markers = _parse_entries(
            document.get('authenticity_markers'), parse_authenticity_marker, 'authenticity marker', source
        )
        logger.info(
            f"[OVERRIDES] Loaded {len(self.value_drivers)} drivers, "
            f"{len(self.authenticity_markers)} markers, {len(self.decoders)} decoders from {source}"
        )
        return True
