"""Validators for schema models, fields, model attributes and relationships."""

import math
import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple, Union
from .model import Field, Model, ModelAttribute
from .relationship import Relationship
from .vocabulary import FIELD_ATTRIBUTES, SCALAR_TYPES, get_model_attribute_spec
from prisma_modeler.config.logging import get_logger

logger = get_logger(__name__)

MODEL_NAME_RE = re.compile(r"^[A-Z][a-zA-Z]*$")
FIELD_NAME_RE = re.compile(r"^[a-z][a-zA-Z]*$")
INTEGER_RE = re.compile(r"^-?\d+$")
DECIMAL_RE = re.compile(r"^-?\d*\.?\d+$")

PathSegment = Union[str, int]


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Location:
    """Structured path into the entity that was validated."""

    entity: str  # "model", "field", "attribute" or "relationship"
    path: Tuple[PathSegment, ...] = ()

    def prefixed(self, entity: str, *segments: PathSegment) -> "Location":
        """Rebase this location under a parent entity's path."""
        return Location(entity=entity, path=tuple(segments) + self.path)

    def __str__(self) -> str:
        out = ""
        for seg in self.path:
            if isinstance(seg, int):
                out += f"[{seg}]"
            else:
                out += f".{seg}" if out else seg
        return out


@dataclass
class Diagnostic:
    """Validation finding."""

    severity: Severity
    message: str
    location: Optional[Location] = None

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR


@dataclass
class _Collector:
    entity: str
    items: List[Diagnostic] = field(default_factory=list)

    def error(self, message: str, *path: PathSegment) -> None:
        self.items.append(Diagnostic(Severity.ERROR, message, self._loc(path)))

    def warning(self, message: str, *path: PathSegment) -> None:
        self.items.append(Diagnostic(Severity.WARNING, message, self._loc(path)))

    def extend_prefixed(self, diagnostics: Iterable[Diagnostic], *segments: PathSegment) -> None:
        for d in diagnostics:
            loc = d.location or Location(entity=self.entity)
            self.items.append(
                Diagnostic(d.severity, d.message, loc.prefixed(self.entity, *segments))
            )

    def _loc(self, path: Sequence[PathSegment]) -> Optional[Location]:
        if not path:
            return None
        return Location(entity=self.entity, path=tuple(path))


def has_errors(diagnostics: Iterable[Diagnostic]) -> bool:
    """True when any diagnostic blocks a commit."""
    return any(d.is_error for d in diagnostics)


def errors(diagnostics: Iterable[Diagnostic]) -> List[Diagnostic]:
    return [d for d in diagnostics if d.severity == Severity.ERROR]


def warnings(diagnostics: Iterable[Diagnostic]) -> List[Diagnostic]:
    return [d for d in diagnostics if d.severity == Severity.WARNING]


def validate_model(model: Model) -> List[Diagnostic]:
    """
    Validate a model and everything it owns.

    Diagnostics are ordered: name, structural checks, per-field, per-attribute.

    Args:
        model: Candidate model

    Returns:
        List of Diagnostic objects (empty if validation passes)
    """
    out = _Collector("model")

    if not model.name:
        out.error("Model name is required", "name")
    elif not MODEL_NAME_RE.match(model.name):
        out.error(
            "Model name must start with a capital letter and contain only letters",
            "name",
        )

    if not model.fields:
        out.warning("Model should have at least one field")

    seen_fields = set()
    for i, f in enumerate(model.fields):
        if f.name in seen_fields:
            out.error(f"Duplicate field name: {f.name}", "fields", i, "name")
        seen_fields.add(f.name)

    seen_attrs = set()
    seen_single = set()
    for i, attr in enumerate(model.attributes):
        key = (attr.name, attr.value or "")
        spec = get_model_attribute_spec(attr.name)
        if key in seen_attrs:
            out.error(f"Duplicate model attribute: {attr.name}", "attributes", i)
        elif spec is not None and spec.single and attr.name in seen_single:
            out.error(f"{attr.name} may only appear once per model", "attributes", i)
        seen_attrs.add(key)
        seen_single.add(attr.name)

    for i, f in enumerate(model.fields):
        out.extend_prefixed(validate_field(f), "fields", i)

    for i, attr in enumerate(model.attributes):
        out.extend_prefixed(validate_model_attribute(attr), "attributes", i)

    logger.debug(f"Model '{model.name}': {len(out.items)} diagnostic(s)")
    return out.items


def validate_field(field: Field) -> List[Diagnostic]:
    """
    Validate a single field.

    Args:
        field: Candidate field

    Returns:
        List of Diagnostic objects (empty if validation passes)
    """
    out = _Collector("field")

    if not field.name:
        out.error("Field name is required", "name")
    elif not FIELD_NAME_RE.match(field.name):
        out.error(
            "Field name must start with a lowercase letter and contain only letters",
            "name",
        )

    if not field.type:
        out.error("Field type is required", "type")
    elif field.type not in SCALAR_TYPES:
        out.error(f"Unknown field type: {field.type}", "type")

    if field.has_default:
        message = _check_default_value(field)
        if message:
            out.error(message, "defaultValue")

    seen = set()
    for j, token in enumerate(field.attributes):
        if token not in FIELD_ATTRIBUTES:
            out.error(f"Unknown field attribute: @{token}", "attributes", j)
        elif token in seen:
            out.error(f"Duplicate field attribute: @{token}", "attributes", j)
        seen.add(token)

    if "id" in seen and "unique" in seen:
        out.warning("@id already implies @unique", "attributes")
    if "id" in seen and field.is_list:
        out.error("A list field cannot be an @id", "attributes")

    return out.items


def _check_default_value(field: Field) -> Optional[str]:
    """Return an error message when the default does not fit the field type."""
    value = field.default_value

    if field.type in ("Int", "BigInt"):
        # numbers are checked by type; only strings go through the regex
        if isinstance(value, bool) or isinstance(value, float):
            return f"Default value must be a valid {field.type}"
        if isinstance(value, str) and not INTEGER_RE.match(value):
            return f"Default value must be a valid {field.type}"
    elif field.type in ("Float", "Decimal"):
        if isinstance(value, bool):
            return f"Default value must be a valid {field.type}"
        if isinstance(value, (int, float)) and not math.isfinite(value):
            return f"Default value must be a valid {field.type}"
        if isinstance(value, str) and not DECIMAL_RE.match(value):
            return f"Default value must be a valid {field.type}"
    elif field.type == "Boolean":
        if not isinstance(value, bool):
            return "Default value must be a boolean"
    elif field.type == "DateTime":
        if not isinstance(value, str) or not _parses_as_datetime(value):
            return "Default value must be a valid date"
    return None


def _parses_as_datetime(value: str) -> bool:
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        datetime.fromisoformat(text)
    except ValueError:
        return False
    return True


def validate_model_attribute(attribute: ModelAttribute) -> List[Diagnostic]:
    """Validate a model-level attribute against the static attribute table."""
    out = _Collector("attribute")
    spec = get_model_attribute_spec(attribute.name)
    if spec is None:
        out.error(f"Unknown model attribute: {attribute.name}", "name")
    elif spec.requires_value and not attribute.value:
        out.error(f"{attribute.name} requires a value", "value")
    return out.items


def validate_relationship(
    relationship: Relationship, models: Sequence[Model]
) -> List[Diagnostic]:
    """
    Validate a relationship against the full set of models.

    A side that cannot be resolved skips the per-mapping checks for that side.

    Args:
        relationship: Candidate relationship
        models: All models of the schema

    Returns:
        List of Diagnostic objects (empty if validation passes)
    """
    out = _Collector("relationship")
    by_id = {m.id: m for m in models}
    from_model = by_id.get(relationship.from_model)
    to_model = by_id.get(relationship.to_model)

    if from_model is None:
        out.error("fromModel not found", "fromModel")
    if to_model is None:
        out.error("toModel not found", "toModel")

    if from_model is not None and relationship.is_self_reference:
        out.warning("Self-referential relationship detected")

    mappings = relationship.config.fields
    if not mappings:
        out.error("At least one field mapping is required", "fields")

    from_fields = set(from_model.field_names()) if from_model else None
    to_fields = set(to_model.field_names()) if to_model else None
    for i, mapping in enumerate(mappings):
        if from_fields is not None and mapping.field_name not in from_fields:
            out.error(
                f'Field "{mapping.field_name}" not found in source model',
                "fields", i, "fieldName",
            )
        if to_fields is not None and mapping.referenced_field not in to_fields:
            out.error(
                f'Field "{mapping.referenced_field}" not found in target model',
                "fields", i, "referencedField",
            )

    seen = set()
    for i, mapping in enumerate(mappings):
        if mapping.pair in seen:
            out.error("Duplicate field mapping", "fields", i)
        seen.add(mapping.pair)

    logger.debug(f"Relationship '{relationship.id}': {len(out.items)} diagnostic(s)")
    return out.items
